import json
import os
import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

PREGNANCY_ENHANCER = """\
let pvData = pv;
let htmlData = html;

let enhance = async () => {
    return htmlData;
};

return { enhance: enhance };
"""

SHARED_ENHANCER = """\
function enhance(lens, epi, ips) {
    return epi;
}
"""


def _library(lens_id: str, content: list[dict[str, Any]] | None = None, **extra: Any) -> dict[str, Any]:
    document: dict[str, Any] = {
        "resourceType": "Library",
        "id": lens_id,
        "url": f"http://hl7.eu/fhir/ig/gravitate-health/Library/{lens_id}",
        "name": lens_id,
        "status": "draft",
        "content": content if content is not None else [],
    }
    document.update(extra)
    return document


@pytest.fixture()
def lens_tree(tmp_path: Path) -> Path:
    """Build a lens repository layout with valid, enhanceable and broken lenses.

    Expected results:
        pregnancy-lens   enhanced from its own pregnancy-lens.js (exact-match)
        allergy-lens     enhanced from shared.js in its directory (fallback)
        interaction-lens enhanced with the default enhancer (default)
        conditions-lens  valid as stored
    Everything else is rejected.
    """
    root = tmp_path / "lenses-repo"
    _write(root / "lenses" / "pregnancy" / "pregnancy-lens.json", _library("pregnancy-lens", version="0.1.0"))
    _write(root / "lenses" / "pregnancy" / "pregnancy-lens.js", PREGNANCY_ENHANCER)
    _write(root / "lenses" / "allergy" / "allergy-lens.json", _library("allergy-lens", [{}]))
    _write(root / "lenses" / "allergy" / "shared.js", SHARED_ENHANCER)
    _write(root / "lenses" / "interaction" / "interaction-lens.json", _library("interaction-lens"))
    _write(
        root / "lenses" / "conditions" / "deep" / "conditions-lens.json",
        _library("conditions-lens", [{"contentType": "application/javascript", "data": "ZnVuY3Rpb24gZW5oYW5jZSgpIHt9"}]),
    )
    _write(root / "lenses" / "broken" / "no-status.json", {k: v for k, v in _library("no-status").items() if k != "status"})
    _write(root / "lenses" / "broken" / "no-status.js", SHARED_ENHANCER)
    _write(root / "lenses" / "broken" / "patient.json", {"resourceType": "Patient", "id": "p1"})
    _write(root / "lenses" / "broken" / "garbage.json", "{ this is not json")
    _write(root / "package.json", {"name": "lenses", "version": "1.0.0"})
    _write(root / "README.md", "# Lenses\n")
    return root


@pytest.fixture()
def git_binary() -> str:
    git = shutil.which("git")
    if git is None:
        pytest.skip("git is not installed")
    return git


@pytest.fixture()
def origin_repo(lens_tree: Path, git_binary: str) -> Path:
    """Turn the lens tree into a git repository with a single commit on main."""
    run = _git_runner(git_binary, lens_tree)
    run("init")
    run("symbolic-ref", "HEAD", "refs/heads/main")
    run("add", ".")
    run("commit", "-m", "Add lenses")
    return lens_tree


def _git_runner(git: str, cwd: Path) -> Callable[..., None]:
    env = {
        **os.environ,
        "GIT_AUTHOR_NAME": "Lens Author",
        "GIT_AUTHOR_EMAIL": "lenses@example.com",
        "GIT_COMMITTER_NAME": "Lens Author",
        "GIT_COMMITTER_EMAIL": "lenses@example.com",
        "HOME": str(cwd),
    }

    def _run(*args: str) -> None:
        subprocess.run([git, *args], cwd=cwd, env=env, check=True, capture_output=True)

    return _run


@pytest.fixture()
def commit_to_origin(origin_repo: Path, git_binary: str) -> Callable[[str, Any], None]:
    """Write a file into the origin repository and commit it."""
    run = _git_runner(git_binary, origin_repo)

    def _commit(relative_path: str, document: Any) -> None:
        _write(origin_repo / relative_path, document)
        run("add", ".")
        run("commit", "-m", f"Update {relative_path}")

    return _commit


def _write(path: Path, document: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    text = document if isinstance(document, str) else json.dumps(document, indent=2)
    path.write_text(text, encoding="utf-8")
