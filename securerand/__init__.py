"""
securerand - Cryptographically secure random bytes, hex strings and
charset-constrained strings for tokens, IDs and salts.
"""

__version__ = "1.0.0"

from securerand.core.errors import (
    RandError,
    InvalidLengthError,
    EmptyCharsetError,
    SourceUnavailableError,
)

from securerand.core.source import SecureRandomSource

from securerand.core.generator import (
    Charset,
    make_alphabet,
    generate_bytes,
    generate_hex,
    generate_string,
    must_bytes,
    must_hex,
    must_string,
    calculate_hex_entropy,
    calculate_string_entropy,
)

from securerand.core.stats import RandomnessTests

from securerand.core.log import setup_logging

__all__ = [
    # Version
    "__version__",
    # Errors
    "RandError",
    "InvalidLengthError",
    "EmptyCharsetError",
    "SourceUnavailableError",
    # Source
    "SecureRandomSource",
    # Generator
    "Charset",
    "make_alphabet",
    "generate_bytes",
    "generate_hex",
    "generate_string",
    "must_bytes",
    "must_hex",
    "must_string",
    "calculate_hex_entropy",
    "calculate_string_entropy",
    # Stats
    "RandomnessTests",
    # Logging
    "setup_logging",
]
