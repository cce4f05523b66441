class LensServiceError(Exception):
    """Base exception for lens lookup errors."""


class MissingRepositoryError(LensServiceError):
    """Raised when no lens repository URL is configured."""


class LensNotFoundError(LensServiceError):
    """Raised when no discovered lens matches a requested name or id."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Lens '{name}' not found")
        self.name = name
