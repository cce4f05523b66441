"""Base64 payload synthesis from enhancer scripts."""

import base64
from pathlib import Path

# Embedded when a lens has no usable enhancer script.
DEFAULT_ENHANCER_SOURCE = """\
function enhance(lens) {
    console.log("No enhancer script available for this lens, returning input unchanged");
    return lens;
}
"""

_DEFAULT_PAYLOAD = base64.b64encode(DEFAULT_ENHANCER_SOURCE.encode("utf-8")).decode("ascii")


def encode_script(path: Path) -> str:
    """Return the base64 encoding of a script file's exact bytes.

    Raises:
        OSError: if the file cannot be read.
    """
    return base64.b64encode(Path(path).read_bytes()).decode("ascii")


def default_payload() -> str:
    """Return the base64 encoding of the no-op default enhancer."""
    return _DEFAULT_PAYLOAD
