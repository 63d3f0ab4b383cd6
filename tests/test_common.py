"""Tests for common utilities."""

import json
import logging

from shortlinks.common.validators import is_valid_url, is_valid_short_code
from shortlinks.common.proxy import ProxyContext, public_base_url, read_proxy_context, short_url
from shortlinks.common.logging_config import get_logger, setup_logging


class TestValidators:
    """Test validation utilities."""
    
    def test_valid_urls(self):
        """Test valid URL validation."""
        valid, _ = is_valid_url("https://example.com")
        assert valid
        
        valid, _ = is_valid_url("http://example.com/path")
        assert valid
        
        valid, _ = is_valid_url("https://sub.example.com:8080/path?query=value")
        assert valid
    
    def test_invalid_urls(self):
        """Test invalid URL validation."""
        valid, error = is_valid_url("")
        assert not valid
        assert "required" in error.lower()
        
        valid, error = is_valid_url(None)
        assert not valid
        assert "required" in error.lower()
        
        valid, error = is_valid_url("not-a-url")
        assert not valid
        
        valid, error = is_valid_url("ftp://example.com")
        assert not valid
        assert "http" in error.lower()
        
        valid, error = is_valid_url("https://example.com/" + "a" * 2048)
        assert not valid
        assert "too long" in error.lower()
    
    def test_valid_short_codes(self):
        """Aliases of 4 to 15 allowed characters pass."""
        for code in ("abcd", "my-link", "test_code", "A1b2C3d4E5f6G7h"):
            valid, error = is_valid_short_code(code)
            assert valid, error
    
    def test_invalid_short_codes(self):
        """Test invalid short code validation."""
        valid, error = is_valid_short_code("abc")
        assert not valid
        assert "at least" in error.lower()
        
        valid, error = is_valid_short_code("a" * 16)
        assert not valid
        assert "at most" in error.lower()
        
        valid, error = is_valid_short_code("abc@123")
        assert not valid
        
        valid, error = is_valid_short_code("my link")
        assert not valid
        
        valid, error = is_valid_short_code("abcd\n")
        assert not valid
        
        valid, error = is_valid_short_code("health")
        assert not valid
        assert "reserved" in error.lower()
    
    def test_route_like_words_are_allowed(self):
        """Only words that shadow a single-segment route are reserved."""
        for code in ("admin", "create", "delete", "list", "stats", "docs", "static", "Health"):
            valid, error = is_valid_short_code(code)
            assert valid, error
    
    def test_custom_length_bounds(self):
        """Bounds are configurable."""
        valid, _ = is_valid_short_code("ab", min_length=2, max_length=3)
        assert valid


class TestProxyContext:
    """Forwarded header parsing."""
    
    def test_read_forwarded_headers(self):
        context = read_proxy_context({
            "X-Forwarded-Proto": "https",
            "X-Forwarded-Host": "example.com",
            "X-Forwarded-For": "1.2.3.4, 10.0.0.1",
            "X-Forwarded-User": "alice",
        })
        
        assert context == ProxyContext(proto="https", host="example.com", client="1.2.3.4", owner="alice")
    
    def test_owner_header(self):
        """Owner header is case-insensitive; blank means anonymous."""
        assert read_proxy_context({"x-forwarded-user": " bob "}).owner == "bob"
        assert read_proxy_context({"X-Forwarded-User": "  "}).owner is None
        assert read_proxy_context({}).owner is None
        assert read_proxy_context({"X-Auth-Id": "carol"}, owner_header="X-Auth-Id").owner == "carol"
    
    def test_base_url_from_proxy(self):
        context = read_proxy_context({"X-Forwarded-Proto": "https", "X-Forwarded-Host": "sho.rt"})
        
        assert public_base_url(context, "http://localhost:5000", "http", "internal:5000") == "https://sho.rt"
    
    def test_base_url_from_request(self):
        """Request scheme and host win over the fallback."""
        context = read_proxy_context({})
        
        assert public_base_url(context, "http://localhost:5000", "http", "short.test") == "http://short.test"
    
    def test_base_url_fallback(self):
        assert public_base_url(read_proxy_context({}), "http://localhost:5000/") == "http://localhost:5000"
    
    def test_short_url(self):
        assert short_url("https://example.com", "abc123") == "https://example.com/abc123"
        assert short_url("https://example.com/", "abc123", "/s/") == "https://example.com/s/abc123"


class TestLogging:
    """Test logging setup."""
    
    def test_setup_logging_level(self):
        logger = setup_logging(level="warning")
        assert logger.name == "shortlinks"
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
    
    def test_get_logger_is_namespaced(self):
        assert get_logger("web").name == "shortlinks.web"
        assert get_logger("shortlinks.service").name == "shortlinks.service"
    
    def test_json_format(self, capsys):
        logger = setup_logging(level="INFO", json_format=True)
        logger.info('said "hi"')
        
        line = capsys.readouterr().out.strip().splitlines()[-1]
        assert json.loads(line)["message"] == 'said "hi"'
