"""Discovery pipeline: scan -> parse -> validate -> enhance -> revalidate."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from lens_selector.discovery.exceptions import DiscoveryError
from lens_selector.discovery.models import (
    DiscoveredLens,
    EnhancementRecord,
    EnhancerIndex,
    Provenance,
    ValidationResult,
)
from lens_selector.discovery.payload import default_payload, encode_script
from lens_selector.discovery.scanner import find_documents, find_enhancers
from lens_selector.discovery.validator import is_payload_only_failure, validate_lens
from lens_selector.logging.logger import Log


@dataclass(slots=True)
class LensCandidate:
    """Per-file state while a candidate document moves through the pipeline."""

    path: Path
    document: Any = None
    validation: ValidationResult | None = None
    enhancement: EnhancementRecord | None = None


class LensDiscovery:
    """Finds every valid lens under a directory tree.

    Documents that fail the profile only because they lack an embedded
    payload are enhanced from a companion script (or the default stub) and
    revalidated. Problems with individual files never abort a run.
    """

    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    def discover(self) -> list[DiscoveredLens]:
        """Return the valid lenses in the order their files were found.

        Raises:
            DiscoveryError: if the directory tree cannot be walked.
        """
        Log.info(f"Discovering lenses under {self._root}")
        if not self._root.is_dir():
            raise DiscoveryError(f"Lens directory not found: {self._root}")
        try:
            paths = find_documents(self._root)
            enhancers = find_enhancers(self._root)
        except DiscoveryError as exc:
            Log.error(f"Error discovering lenses: {exc}")
            raise

        lenses: list[DiscoveredLens] = []
        for path in paths:
            try:
                lens = self._process(LensCandidate(path=path), enhancers)
            except Exception as exc:
                Log.warning(f"Error processing file {path}: {exc}")
                continue
            if lens is not None:
                lenses.append(lens)

        Log.info(
            f"Discovered {len(lenses)} valid lenses from {len(paths)} candidate files "
            f"under {self._root}"
        )
        return lenses

    def _process(
        self, candidate: LensCandidate, enhancers: EnhancerIndex
    ) -> DiscoveredLens | None:
        candidate.document = json.loads(candidate.path.read_text(encoding="utf-8"))
        candidate.validation = validate_lens(candidate.document)

        if candidate.validation.valid:
            Log.info(f"Valid lens found: {candidate.document['id']} in file {candidate.path}")
            return _to_discovered_lens(candidate)

        if not is_payload_only_failure(candidate.document, candidate.validation):
            Log.debug(
                f"Invalid lens in file {candidate.path}: "
                f"{'; '.join(candidate.validation.violations)}"
            )
            return None

        Log.debug(
            f"Lens {candidate.document.get('id')} is missing base64 content, "
            f"looking for an enhancer in {candidate.path.parent}"
        )
        payload = self._synthesize_payload(candidate, enhancers)
        _splice_payload(candidate.document, payload)

        candidate.validation = validate_lens(candidate.document)
        if not candidate.validation.valid:
            Log.debug(
                f"Enhanced lens in file {candidate.path} is still invalid: "
                f"{'; '.join(candidate.validation.violations)}"
            )
            return None

        Log.info(
            f"Enhanced lens {candidate.document['id']} "
            f"({candidate.enhancement.provenance.value}) from "
            f"{candidate.enhancement.script_path or 'default enhancer'}"
        )
        return _to_discovered_lens(candidate)

    def _synthesize_payload(self, candidate: LensCandidate, enhancers: EnhancerIndex) -> str:
        """Encode the resolved enhancer script, or the default stub when none is usable."""
        script, provenance = resolve_enhancer(candidate.path, enhancers)
        if script is not None:
            try:
                payload = encode_script(script)
            except OSError as exc:
                Log.warning(f"Cannot read enhancer {script}, using default enhancer: {exc}")
            else:
                candidate.enhancement = EnhancementRecord(
                    provenance=provenance, script_path=script
                )
                return payload
        candidate.enhancement = EnhancementRecord(provenance=Provenance.DEFAULT)
        return default_payload()


def resolve_enhancer(
    lens_path: Path, enhancers: EnhancerIndex
) -> tuple[Path | None, Provenance]:
    """Pick the enhancer script for a lens: same base name first, then any in its directory."""
    exact = enhancers.exact.get(lens_path)
    if exact is not None:
        return exact, Provenance.EXACT_MATCH
    siblings = enhancers.fallback.get(lens_path.parent)
    if siblings:
        return siblings[0], Provenance.FALLBACK
    return None, Provenance.DEFAULT


def discover_lenses(root: Path) -> list[DiscoveredLens]:
    """Discover every valid lens under ``root``."""
    return LensDiscovery(root).discover()


def _splice_payload(document: dict[str, Any], payload: str) -> None:
    content = document.get("content")
    if not isinstance(content, list):
        content = []
        document["content"] = content
    if not content:
        content.append({})
    if not isinstance(content[0], dict):
        content[0] = {}
    content[0]["data"] = payload


def _to_discovered_lens(candidate: LensCandidate) -> DiscoveredLens:
    document = candidate.document
    return DiscoveredLens(
        id=document["id"],
        name=document["name"],
        url=document["url"],
        status=document["status"],
        version=_version_of(document),
        source_path=candidate.path,
        content=document,
        enhancement=candidate.enhancement,
    )


def _version_of(document: dict[str, Any]) -> str:
    version = document.get("version")
    return version if isinstance(version, str) and version else "unknown"
