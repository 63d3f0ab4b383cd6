"""Tests for short code generation."""

import pytest
from shortlinks.shortcode import ShortCodeGenerator


class TestShortCodeGenerator:
    """Test short code generation."""
    
    def test_generate_random(self):
        """Generated codes are 8 base62 characters by default."""
        generator = ShortCodeGenerator()
        
        for _ in range(200):
            code = generator.generate()
            assert len(code) == 8
            assert set(code) <= set(ShortCodeGenerator.BASE62_CHARS)
    
    def test_generate_random_custom_length(self):
        """Test random code with custom length."""
        generator = ShortCodeGenerator(default_length=8)
        
        code = generator.generate_random(length=12)
        assert len(code) == 12
        assert set(code) <= set(ShortCodeGenerator.BASE62_CHARS)
    
    def test_generate_from_uuid(self):
        """UUID strategy yields the same shape as the random one."""
        generator = ShortCodeGenerator(default_length=8, strategy="uuid")
        
        codes = {generator.generate() for _ in range(100)}
        assert len(codes) == 100
        for code in codes:
            assert len(code) == 8
            assert set(code) <= set(ShortCodeGenerator.BASE62_CHARS)
    
    def test_generate_from_uuid_long_length(self):
        """Lengths beyond the UUID's base62 width are padded."""
        generator = ShortCodeGenerator()
        
        assert len(generator.generate_from_uuid(length=30)) == 30
    
    def test_codes_vary(self):
        """Consecutive random codes differ."""
        generator = ShortCodeGenerator()
        
        assert len({generator.generate() for _ in range(50)}) == 50
    
    def test_base62_conversion(self):
        """Known base62 values."""
        generator = ShortCodeGenerator()
        
        assert generator._int_to_base62(0) == "a"
        assert generator._int_to_base62(61) == "9"
        assert generator._int_to_base62(62) == "ba"
    
    def test_invalid_settings(self):
        """Unknown strategy or non-positive length is rejected."""
        with pytest.raises(ValueError):
            ShortCodeGenerator(strategy="sequential")
        with pytest.raises(ValueError):
            ShortCodeGenerator(default_length=0)
