"""
securerand Stats - Statistical sanity checks for generated output.

These are coarse checks meant to catch a broken source or a broken mapping,
not a certification of randomness.
"""

from typing import Union, Dict, Any

import numpy as np
from scipy import stats, special

from securerand.core.errors import EmptyCharsetError
from securerand.core.generator import Charset, SamplingMode, make_alphabet
from securerand.core.log import get_logger

logger = get_logger('stats')

P_THRESHOLD = 0.01

ByteData = Union[bytes, bytearray, np.ndarray]


def _as_uint8(data: ByteData) -> np.ndarray:
    if isinstance(data, np.ndarray):
        if data.dtype == np.uint8:
            return data
        if not np.issubdtype(data.dtype, np.integer):
            raise ValueError(f"Expected an integer array, got {data.dtype}")
        if data.size and (data.min() < 0 or data.max() > 255):
            raise ValueError("Array values must be byte values (0-255)")
        return data.astype(np.uint8)
    return np.frombuffer(bytes(data), dtype=np.uint8)


class RandomnessTests:
    """Frequency tests for random bytes and charset strings."""

    @staticmethod
    def byte_frequency_test(data: ByteData) -> Dict[str, Any]:
        """Chi-square test of the 256 byte-value counts against uniform."""
        arr = _as_uint8(data)
        counts = np.bincount(arr, minlength=256)
        statistic, p_value = stats.chisquare(counts)

        return {
            'name': 'Byte Frequency',
            'p_value': float(p_value),
            'passed': p_value >= P_THRESHOLD,
            'statistic': float(statistic),
            'counts': counts,
        }

    @staticmethod
    def frequency_monobit_test(data: ByteData) -> Dict[str, Any]:
        """NIST SP 800-22 Frequency (Monobit) Test on the bit stream."""
        bits = np.unpackbits(_as_uint8(data))
        n = len(bits)
        ones_count = np.sum(bits, dtype=np.int64)
        s = 2 * ones_count - n
        s_obs = abs(s) / np.sqrt(n)
        p_value = special.erfc(s_obs / np.sqrt(2))

        return {
            'name': 'Frequency (Monobit)',
            'p_value': float(p_value),
            'passed': p_value >= P_THRESHOLD,
            'statistic': float(s_obs),
        }

    @staticmethod
    def expected_index_probabilities(alphabet_len: int, sampling: SamplingMode = "modulo") -> np.ndarray:
        """
        Probability of each alphabet index for one generated character.

        Modulo sampling maps the 256 byte values onto the alphabet, so
        index i gets count(b in 0..255 with b % L == i) / 256.

        Args:
            alphabet_len: Alphabet length (1..256)
            sampling: "modulo" or "rejection"

        Returns:
            Array of alphabet_len probabilities summing to 1
        """
        if not 1 <= alphabet_len <= 256:
            raise ValueError(f"alphabet length out of range: {alphabet_len}")
        if sampling == "modulo":
            return np.bincount(np.arange(256) % alphabet_len, minlength=alphabet_len) / 256
        if sampling == "rejection":
            return np.full(alphabet_len, 1.0 / alphabet_len)
        raise ValueError(f"Unsupported sampling mode: {sampling!r}")

    @classmethod
    def charset_frequency_test(
        cls,
        text: str,
        charset: Union[Charset, int] = Charset.ALL,
        sampling: SamplingMode = "modulo",
    ) -> Dict[str, Any]:
        """
        Chi-square test of character counts against the expected distribution.

        A character outside the charset's alphabet fails the test outright.
        """
        alphabet = make_alphabet(charset)
        if not alphabet:
            raise EmptyCharsetError(f"charset is empty: {int(charset)}")

        index = {c: i for i, c in enumerate(alphabet)}
        foreign = sorted({c for c in text if c not in index})
        if foreign or not text:
            return {
                'name': 'Charset Frequency',
                'p_value': 0.0,
                'passed': False,
                'statistic': None,
                'note': f"Characters outside alphabet: {''.join(foreign)!r}" if foreign else 'Empty input',
            }

        counts = np.bincount([index[c] for c in text], minlength=len(alphabet))
        expected = cls.expected_index_probabilities(len(alphabet), sampling) * len(text)
        statistic, p_value = stats.chisquare(counts, expected)

        return {
            'name': 'Charset Frequency',
            'p_value': float(p_value),
            'passed': p_value >= P_THRESHOLD,
            'statistic': float(statistic),
            'counts': counts,
            'expected': expected,
        }

    @classmethod
    def run_all_tests(cls, data: ByteData, verbose: bool = True) -> Dict[str, Any]:
        """
        Run the byte-level tests.

        Args:
            data: Random bytes
            verbose: Log a summary

        Returns:
            Dictionary with test results
        """
        tests = [
            cls.byte_frequency_test(data),
            cls.frequency_monobit_test(data),
        ]
        passed = sum(1 for t in tests if t['passed'])

        if verbose:
            logger.info("Randomness checks on %s bytes", f"{len(data):,}")
            for test in tests:
                status = "PASS" if test['passed'] else "FAIL"
                logger.info("%s  %-22s p-value: %.6f", status, test['name'], test['p_value'])
            if passed < len(tests):
                logger.warning("Random output failed %d/%d checks", len(tests) - passed, len(tests))

        return {
            'tests': tests,
            'passed': passed,
            'total': len(tests),
            'pass_rate': passed / len(tests),
        }
