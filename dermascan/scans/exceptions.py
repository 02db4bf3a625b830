class ScanError(Exception):
    """Base exception for scan upload and cache errors."""


class AuthenticationRequired(ScanError):
    """Raised when a scan operation needs a signed-in user and there is none."""


class UploadFailed(ScanError):
    """Raised when any stage of the upload pipeline fails."""


class FetchFailed(ScanError):
    """Raised when a page or count fetch from the document store fails."""
