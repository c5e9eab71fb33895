"""
securerand Core - Secure random source, generators and statistical checks.
"""

from securerand.core.errors import (
    RandError,
    InvalidLengthError,
    EmptyCharsetError,
    SourceUnavailableError,
)

from securerand.core.source import SecureRandomSource, DEFAULT_SOURCE

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

__all__ = [
    "RandError",
    "InvalidLengthError",
    "EmptyCharsetError",
    "SourceUnavailableError",
    "SecureRandomSource",
    "DEFAULT_SOURCE",
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
    "RandomnessTests",
]
