# -*- coding: utf-8 -*-
"""
securerand Generator - Random bytes, hex strings and charset strings.
"""

import enum
import operator
import string
from typing import Callable, Optional, Union, Literal

import numpy as np

from securerand.core.errors import (
    RandError,
    InvalidLengthError,
    EmptyCharsetError,
    SourceUnavailableError,
)
from securerand.core.log import get_logger
from securerand.core.source import DEFAULT_SOURCE, SecureRandomSource

logger = get_logger('generator')


class Charset(enum.IntFlag):
    """Character ranges an alphabet is built from."""

    UPPERCASE = 1
    LOWERCASE = 2
    DIGIT = 4
    ALL = UPPERCASE | LOWERCASE | DIGIT


# Concatenation order is fixed: uppercase, lowercase, digits
CHARSET_RANGES = (
    (Charset.UPPERCASE, string.ascii_uppercase),
    (Charset.LOWERCASE, string.ascii_lowercase),
    (Charset.DIGIT, string.digits),
)

SamplingMode = Literal["modulo", "rejection"]
SAMPLING_MODES = ("modulo", "rejection")


def _check_sampling(sampling: str) -> SamplingMode:
    if sampling not in SAMPLING_MODES:
        raise ValueError(
            f"Unsupported sampling mode: {sampling!r} (expected one of {', '.join(SAMPLING_MODES)})"
        )
    return sampling


def _check_length(n) -> int:
    n = operator.index(n)
    if n < 1:
        raise InvalidLengthError(f"invalid random length: {n}")
    return n


def _wipe(buf: np.ndarray) -> None:
    """Zero an intermediate buffer once its output has been built (best-effort)."""
    if buf.flags.writeable:
        buf[:] = 0


def make_alphabet(charset: Union[Charset, int]) -> str:
    """
    Build the alphabet selected by a charset mask.

    Bits outside UPPERCASE, LOWERCASE and DIGIT are ignored.

    Args:
        charset: Charset flags or the equivalent integer mask

    Returns:
        Alphabet string, empty if no known bit is set
    """
    mask = int(charset)
    return ''.join(chars for flag, chars in CHARSET_RANGES if mask & flag)


def generate_bytes(n: int, source: Optional[SecureRandomSource] = None) -> bytes:
    """
    Generate n cryptographically secure random bytes.

    Args:
        n: Number of bytes (>= 1)
        source: Object with a read(n) method, defaults to the OS CSPRNG

    Returns:
        Exactly n random bytes

    Raises:
        InvalidLengthError: If n < 1, before any entropy is consumed
        SourceUnavailableError: If the source cannot supply entropy
    """
    n = _check_length(n)
    source = source or DEFAULT_SOURCE
    data = source.read(n)
    if len(data) != n:
        logger.error("Source returned %d/%d bytes", len(data), n)
        raise SourceUnavailableError(
            f"random bytes failed: short read ({len(data)}/{n} bytes)"
        )
    logger.debug("Generated %d random bytes", n)
    return data


def generate_hex(n: int, source: Optional[SecureRandomSource] = None) -> str:
    """
    Generate a random lowercase hexadecimal string of exactly n characters.

    Requests ceil(n/2) bytes and truncates their encoding to n characters.
    For odd n only the high nibble of the last byte is used.

    Raises:
        InvalidLengthError: If n < 1
        SourceUnavailableError: If the source cannot supply entropy
    """
    n = _check_length(n)
    try:
        data = generate_bytes((n + 1) // 2, source)
    except RandError as e:
        raise type(e)(f"random hex failed: {e}") from e
    return data.hex()[:n]


def generate_string(
    n: int,
    charset: Union[Charset, int] = Charset.ALL,
    source: Optional[SecureRandomSource] = None,
    sampling: SamplingMode = "modulo",
) -> str:
    """
    Generate a random string of n characters drawn from a charset's alphabet.

    With "modulo" sampling each random byte b selects alphabet[b % len].
    Alphabet lengths here never divide 256, so the lowest indices are
    slightly favoured: for the 62 character ALL alphabet, indices 0-7 come
    up 5 times in 256 and the rest 4 times. "rejection" sampling discards
    bytes at or above the largest multiple of the alphabet length and draws
    replacements, giving a uniform choice.

    Args:
        n: String length (>= 1)
        charset: Charset flags or the equivalent integer mask
        source: Object with a read(n) method, defaults to the OS CSPRNG
        sampling: "modulo" or "rejection"

    Returns:
        Random string of exactly n characters

    Raises:
        InvalidLengthError: If n < 1
        EmptyCharsetError: If charset selects no range
        SourceUnavailableError: If the source cannot supply entropy
    """
    alphabet = make_alphabet(charset)
    if not alphabet:
        raise EmptyCharsetError(f"charset is empty: {int(charset)}")
    n = _check_length(n)
    sampling = _check_sampling(sampling)

    chars = np.frombuffer(alphabet.encode('ascii'), dtype=np.uint8)
    base = len(chars)

    try:
        if sampling == "modulo":
            data = np.frombuffer(generate_bytes(n, source), dtype=np.uint8).copy()
        else:
            data = _rejection_bytes(n, base, source)
    except RandError as e:
        raise type(e)(f"random string failed: {e}") from e

    indices = data % base
    result = chars[indices].tobytes().decode('ascii')

    _wipe(data)
    _wipe(indices)
    logger.debug("Generated %d character string (alphabet %d, %s sampling)", n, base, sampling)

    return result


def _rejection_bytes(n: int, base: int, source: Optional[SecureRandomSource]) -> np.ndarray:
    """Collect n bytes below the largest multiple of base that fits in a byte."""
    threshold = (256 // base) * base
    accepted = np.empty(0, dtype=np.uint8)
    requests = 0

    while len(accepted) < n:
        batch = np.frombuffer(generate_bytes(n - len(accepted), source), dtype=np.uint8)
        accepted = np.concatenate([accepted, batch[batch < threshold]])
        requests += 1

    if requests > 1:
        logger.debug("Rejection sampling needed %d source reads", requests)

    return accepted


def _must(fn: Callable, *args, **kwargs):
    """Call fn, turning any exception (bad arguments included) into SystemExit."""
    try:
        return fn(*args, **kwargs)
    except Exception as e:
        logger.critical("%s failed, aborting: %s", fn.__name__, e)
        raise SystemExit(f"securerand: {e}") from e


def must_bytes(n: int, source: Optional[SecureRandomSource] = None) -> bytes:
    """Like generate_bytes, but any failure terminates via SystemExit."""
    return _must(generate_bytes, n, source)


def must_hex(n: int, source: Optional[SecureRandomSource] = None) -> str:
    """Like generate_hex, but any failure terminates via SystemExit."""
    return _must(generate_hex, n, source)


def must_string(
    n: int,
    charset: Union[Charset, int] = Charset.ALL,
    source: Optional[SecureRandomSource] = None,
    sampling: SamplingMode = "modulo",
) -> str:
    """Like generate_string, but any failure terminates via SystemExit."""
    return _must(generate_string, n, charset, source, sampling)


def calculate_hex_entropy(n: int) -> float:
    """
    Calculate the entropy of a hex string.

    Args:
        n: Number of hex characters

    Returns:
        Entropy in bits (4 bits per character)
    """
    return 4.0 * _check_length(n)


def calculate_string_entropy(n: int, charset: Union[Charset, int] = Charset.ALL) -> float:
    """
    Calculate the nominal entropy of a charset string.

    The modulo bias is ignored, so this slightly overestimates strings
    generated with "modulo" sampling.

    Args:
        n: String length
        charset: Charset used

    Returns:
        Entropy in bits
    """
    alphabet = make_alphabet(charset)
    if not alphabet:
        raise EmptyCharsetError(f"charset is empty: {int(charset)}")
    return float(_check_length(n) * np.log2(len(alphabet)))
