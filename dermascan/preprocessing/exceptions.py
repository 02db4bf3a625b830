class PreprocessError(Exception):
    """Raised when a local image cannot be turned into an upload-ready file."""
