class StorageError(Exception):
    """Raised when an uploaded object cannot be read from object storage."""
