"""Short code generation utilities."""

import secrets
import string
import uuid
from typing import Optional


class ShortCodeGenerator:
    """Generate candidate short codes.

    Candidates carry no uniqueness guarantee; the service checks them
    against the link store.
    """

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    STRATEGIES = ("random", "uuid")

    def __init__(self, default_length: int = 8, strategy: str = "random"):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
            strategy: 'random' (secure random base62) or 'uuid' (UUID4 in base62)
        """
        if default_length < 1:
            raise ValueError("default_length must be positive")
        if strategy not in self.STRATEGIES:
            raise ValueError(f"Unknown short code strategy: {strategy}")
        self.default_length = default_length
        self.strategy = strategy

    def generate(self, length: Optional[int] = None) -> str:
        """Generate a candidate using the configured strategy."""
        if self.strategy == "uuid":
            return self.generate_from_uuid(length)
        return self.generate_random(length)

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return ''.join(secrets.choice(self.BASE62_CHARS) for _ in range(length))

    def generate_from_uuid(self, length: Optional[int] = None) -> str:
        """Generate short code from UUID.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Short code based on UUID
        """
        length = length or self.default_length

        code = self._int_to_base62(uuid.uuid4().int)

        # A uuid4 is 128 bits, about 21 base62 digits; pad short values
        # and take the low-order digits, which are the random ones.
        return code.rjust(length, self.BASE62_CHARS[0])[-length:]

    def _int_to_base62(self, num: int) -> str:
        """Convert integer to base62 string.

        Args:
            num: Integer to convert

        Returns:
            Base62 string
        """
        if num == 0:
            return self.BASE62_CHARS[0]

        result = []
        base = len(self.BASE62_CHARS)

        while num > 0:
            remainder = num % base
            result.append(self.BASE62_CHARS[remainder])
            num = num // base

        return ''.join(reversed(result))
