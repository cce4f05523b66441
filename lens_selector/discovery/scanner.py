"""Filesystem walk for lens documents and enhancer scripts."""

import os
import re
from collections.abc import Iterator
from pathlib import Path

from lens_selector.discovery.exceptions import DiscoveryError
from lens_selector.discovery.models import EnhancerIndex
from lens_selector.logging.logger import Log

LENS_SUFFIX = ".json"
SCRIPT_SUFFIX = ".js"

# Best-effort textual classifier, not a parser. A comment or string literal
# mentioning e.g. "function enhance" is a false positive; an enhancer bound
# some other way (``module.exports = { enhance }`` is caught, also across lines;
# ``this.enhance =`` is not) is a false negative.
_ENHANCE_DECLARATION = re.compile(
    r"function\s*\*?\s+enhance\b"
    r"|\b(?:const|let|var)\s+enhance\s*="
    r"|\bexports?\b[^;]*?\benhance\b",
    re.DOTALL,
)


def looks_like_enhancer(source: str) -> bool:
    """True when script text appears to declare an ``enhance`` function."""
    return _ENHANCE_DECLARATION.search(source) is not None


def find_documents(root: Path) -> list[Path]:
    """Return every ``.json`` file under ``root``, depth first.

    Raises:
        DiscoveryError: if ``root`` or any directory below it cannot be listed.
    """
    return [
        directory / name
        for directory, files in walk(root)
        for name in files
        if name.endswith(LENS_SUFFIX)
    ]


def find_enhancers(root: Path) -> EnhancerIndex:
    """Index the enhancer scripts under ``root``.

    Scripts that cannot be read are skipped.

    Raises:
        DiscoveryError: if ``root`` or any directory below it cannot be listed.
    """
    index = EnhancerIndex()
    for directory, files in walk(root):
        for name in files:
            if not name.endswith(SCRIPT_SUFFIX):
                continue
            script = directory / name
            if not _is_enhancer_file(script):
                continue
            index.exact[script.with_suffix(LENS_SUFFIX)] = script
            index.fallback.setdefault(directory, []).append(script)
    Log.debug(
        f"Found {len(index.exact)} enhancer scripts in {len(index.fallback)} "
        f"directories under {root}"
    )
    return index


def walk(root: Path) -> Iterator[tuple[Path, list[str]]]:
    """Yield ``(directory, file names)`` for ``root`` and every subdirectory.

    Uses an explicit stack so tree depth is not bounded by the interpreter's
    recursion limit. Entries are visited in name order and symlinked
    directories are not followed.
    """
    stack = [Path(root)]
    while stack:
        directory = stack.pop()
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as exc:
            raise DiscoveryError(f"Cannot list directory {directory}: {exc}") from exc

        files: list[str] = []
        subdirs: list[Path] = []
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                subdirs.append(Path(entry.path))
            else:
                files.append(entry.name)
        yield directory, files
        stack.extend(reversed(subdirs))


def _is_enhancer_file(script: Path) -> bool:
    try:
        source = script.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        Log.debug(f"Skipping unreadable script {script}: {exc}")
        return False
    return looks_like_enhancer(source)
