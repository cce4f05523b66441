import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture()
def make_lens() -> Callable[..., dict[str, Any]]:
    """Build a lens document that passes validation, with field overrides.

    Pass a field as ``None`` to drop it from the document.
    """

    def _make(**overrides: Any) -> dict[str, Any]:
        lens: dict[str, Any] = {
            "resourceType": "Library",
            "id": "pregnancy-lens",
            "url": "http://example.com/Library/pregnancy-lens",
            "name": "pregnancy-lens",
            "status": "draft",
            "version": "1.0.0",
            "content": [{"contentType": "application/javascript", "data": "SGVsbG8gV29ybGQh"}],
        }
        lens.update(overrides)
        return {key: value for key, value in lens.items() if value is not None}

    return _make


@pytest.fixture()
def write_json() -> Callable[[Path, Any], Path]:
    """Write a JSON document, creating parent directories."""

    def _write(path: Path, document: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def write_text() -> Callable[[Path, str], Path]:
    """Write a text file, creating parent directories."""

    def _write(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
