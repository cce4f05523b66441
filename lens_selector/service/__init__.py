from lens_selector.service.cache import TTLCache
from lens_selector.service.exceptions import (
    LensNotFoundError,
    LensServiceError,
    MissingRepositoryError,
)
from lens_selector.service.lens_service import LensService, build_lens_service

__all__ = [
    "LensNotFoundError",
    "LensService",
    "LensServiceError",
    "MissingRepositoryError",
    "TTLCache",
    "build_lens_service",
]
