class DocumentStoreError(Exception):
    """Raised when the document store fails a read or write."""
