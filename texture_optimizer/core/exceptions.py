"""
Exceptions raised by the texture pack optimizer.

Only request-level failures are modelled as exceptions. Per-entry problems
are reported through result values so that one bad texture never aborts a pack.
"""


class TextureOptimizerError(Exception):
    """Base class for optimizer errors."""


class InvalidArchiveError(TextureOptimizerError):
    """The uploaded data is not a readable zip archive."""


class UploadTooLargeError(TextureOptimizerError):
    """The uploaded archive exceeds the configured size ceiling."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            f"Upload of {size} bytes exceeds the limit of {limit} bytes"
        )
