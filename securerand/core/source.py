"""
securerand Source - Operating system CSPRNG access.
"""

import secrets

from securerand.core.errors import SourceUnavailableError
from securerand.core.log import get_logger

logger = get_logger('source')


class SecureRandomSource:
    """
    Reads random bytes from the operating system CSPRNG.

    ``secrets.token_bytes`` goes through ``os.urandom`` (getrandom(2) on
    Linux), which blocks until the kernel pool is seeded and never falls
    back to a non-secure generator.

    Instances hold no state, so one instance may be shared by any number
    of threads.
    """

    name = "CSPRNG"

    def read(self, n: int) -> bytes:
        """
        Read exactly n bytes.

        Args:
            n: Number of bytes, already validated by the caller

        Returns:
            n random bytes

        Raises:
            SourceUnavailableError: If the platform cannot supply entropy
        """
        try:
            data = secrets.token_bytes(n)
        except (OSError, NotImplementedError) as e:
            logger.error("%s read of %d bytes failed: %s", self.name, n, e)
            raise SourceUnavailableError(f"random bytes failed: {e}") from e

        if len(data) != n:
            logger.error("%s short read: %d/%d bytes", self.name, len(data), n)
            raise SourceUnavailableError(
                f"random bytes failed: short read ({len(data)}/{n} bytes)"
            )

        return data


DEFAULT_SOURCE = SecureRandomSource()
