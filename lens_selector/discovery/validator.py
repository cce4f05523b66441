"""Structural checks for lens documents (FHIR ``Library`` profile subset)."""

from collections.abc import Mapping
from typing import Any

from lens_selector.discovery.models import ValidationResult

LENS_RESOURCE_TYPE = "Library"

NOT_AN_OBJECT = "document must be a structured object"
CONTENT_NOT_ARRAY = "content must be an array"
CONTENT_MISSING_DATA = "content must include at least one item with base64 encoded data"

_REQUIRED_STRING_FIELDS = ("id", "url", "name", "status")


def validate_lens(document: Any) -> ValidationResult:
    """Check a decoded JSON value against the lens profile.

    All field checks run (no short-circuit) and violations are reported in a
    fixed order: resourceType, id, url, name, status, content. The only early
    exit is for input that is not a JSON object at all.
    """
    if not isinstance(document, Mapping):
        return ValidationResult(valid=False, violations=[NOT_AN_OBJECT])

    violations: list[str] = []
    if document.get("resourceType") != LENS_RESOURCE_TYPE:
        violations.append(f'resourceType must be "{LENS_RESOURCE_TYPE}"')
    for field in _REQUIRED_STRING_FIELDS:
        if not _is_non_empty_string(document.get(field)):
            violations.append(f"{field} is required and must be a string")
    violations.extend(_content_violations(document.get("content")))
    return ValidationResult(valid=not violations, violations=violations)


def is_missing_payload(document: Mapping[str, Any]) -> bool:
    """True when the document carries no usable base64 payload in ``content``.

    Holds when ``content`` is absent, not a list, or empty; when its single
    item has no non-empty string ``data``; or when none of several items do.
    """
    content = document.get("content")
    if not isinstance(content, list) or not content:
        return True
    return not any(_item_has_data(item) for item in content)


def is_payload_only_failure(document: Any, result: ValidationResult) -> bool:
    """True when the sole reason ``document`` failed is its missing payload."""
    if result.valid or len(result.violations) != 1:
        return False
    if not isinstance(document, Mapping):
        return False
    return "content" in result.violations[0] and is_missing_payload(document)


def _content_violations(content: Any) -> list[str]:
    if not isinstance(content, list):
        return [CONTENT_NOT_ARRAY]
    if not any(_item_has_data(item) for item in content):
        return [CONTENT_MISSING_DATA]
    return []


def _item_has_data(item: Any) -> bool:
    return isinstance(item, Mapping) and _is_non_empty_string(item.get("data"))


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value)
