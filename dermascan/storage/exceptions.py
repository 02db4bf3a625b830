class StorageError(Exception):
    """Raised when the object storage rejects or fails an upload."""
