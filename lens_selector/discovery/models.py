from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class Provenance(str, Enum):
    """How a lens obtained its embedded payload."""

    EXACT_MATCH = "exact-match"
    FALLBACK = "fallback"
    DEFAULT = "default"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of checking a document against the lens profile."""

    valid: bool
    violations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class EnhancementRecord:
    """Attached to a lens whose payload was synthesized during discovery."""

    provenance: Provenance
    script_path: Path | None = None


@dataclass(frozen=True)
class EnhancerIndex:
    """Enhancer scripts found under a lens tree.

    ``exact`` maps a prospective lens path (``dir/name.json``) to the script
    ``dir/name.js``; ``fallback`` maps a directory to every enhancer script
    found directly in it, in traversal order.
    """

    exact: dict[Path, Path] = field(default_factory=dict)
    fallback: dict[Path, list[Path]] = field(default_factory=dict)


@dataclass(frozen=True)
class DiscoveredLens:
    """A lens that passed profile validation, with its source metadata."""

    id: str
    name: str
    url: str
    status: str
    source_path: Path
    content: dict[str, Any]
    version: str = "unknown"
    enhancement: EnhancementRecord | None = None

    @property
    def enhanced(self) -> bool:
        return self.enhancement is not None
