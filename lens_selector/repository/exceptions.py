class RepositoryError(Exception):
    """Raised when the lens repository cannot be cloned or updated."""
