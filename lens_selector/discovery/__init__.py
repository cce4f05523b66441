from lens_selector.discovery.exceptions import DiscoveryError
from lens_selector.discovery.models import (
    DiscoveredLens,
    EnhancementRecord,
    Provenance,
    ValidationResult,
)
from lens_selector.discovery.pipeline import LensDiscovery, discover_lenses
from lens_selector.discovery.validator import validate_lens

__all__ = [
    "DiscoveredLens",
    "DiscoveryError",
    "EnhancementRecord",
    "LensDiscovery",
    "Provenance",
    "ValidationResult",
    "discover_lenses",
    "validate_lens",
]
