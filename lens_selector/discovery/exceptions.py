class DiscoveryError(Exception):
    """Raised when a lens tree cannot be walked (missing or unreadable directory)."""
