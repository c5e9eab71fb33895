"""
securerand errors.
"""


class RandError(Exception):
    """Base class for every securerand error."""
    pass


class InvalidLengthError(RandError, ValueError):
    """Requested length is smaller than 1."""
    pass


class EmptyCharsetError(RandError, ValueError):
    """Charset selects no character range."""
    pass


class SourceUnavailableError(RandError):
    """The secure random source could not supply entropy.

    The platform error is available as ``__cause__``.
    """
    pass
