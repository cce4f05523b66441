import subprocess
from pathlib import Path

from lens_selector.logging.logger import Log
from lens_selector.repository.exceptions import RepositoryError

_DEFAULT_BRANCHES = ("main", "master")


def repo_local_path(repo_url: str, base_dir: Path) -> Path:
    """Build the working-copy path for a repository: {base_dir}/{repo name}"""
    name = repo_url.rstrip("/").split("/")[-1].removesuffix(".git")
    if not name:
        raise RepositoryError(f"Cannot derive a repository name from '{repo_url}'")
    return Path(base_dir) / name


class GitRepository:
    """Clones or updates a local working copy of the lens repository with the git CLI."""

    def __init__(self, timeout_seconds: int = 120, git_binary: str = "git") -> None:
        self._timeout_seconds = timeout_seconds
        self._git = git_binary

    def ensure(self, repo_url: str, branch: str | None, local_path: Path) -> None:
        """Make ``local_path`` an up-to-date checkout of ``repo_url``.

        An existing working copy is fetched, checked out and pulled; otherwise
        the repository is cloned. Without a branch, ``main`` is tried before
        ``master``.

        Raises:
            RepositoryError: if any git command fails.
        """
        local_path = Path(local_path)
        if local_path.exists():
            Log.info(f"Updating repository {repo_url} in {local_path}")
            self._update(branch, local_path)
        else:
            Log.info(f"Cloning repository {repo_url} into {local_path}")
            self._clone(repo_url, branch, local_path)

    def _update(self, branch: str | None, local_path: Path) -> None:
        self._run(["fetch", "origin"], cwd=local_path)
        if branch:
            self._run(["checkout", branch], cwd=local_path)
        else:
            self._checkout_default_branch(local_path)
        self._run(["pull", "origin"], cwd=local_path)

    def _checkout_default_branch(self, local_path: Path) -> None:
        main, master = _DEFAULT_BRANCHES
        try:
            self._run(["checkout", main], cwd=local_path)
        except RepositoryError:
            Log.debug(f"No '{main}' branch in {local_path}, trying '{master}'")
            self._run(["checkout", master], cwd=local_path)

    def _clone(self, repo_url: str, branch: str | None, local_path: Path) -> None:
        local_path.parent.mkdir(parents=True, exist_ok=True)
        args = ["clone"]
        if branch:
            args += ["--branch", branch, "--single-branch"]
        self._run([*args, repo_url, str(local_path)])

    def _run(self, args: list[str], cwd: Path | None = None) -> str:
        command = [self._git, *args]
        try:
            process = subprocess.run(
                command,
                cwd=cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self._timeout_seconds,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise RepositoryError(f"Failed to run '{' '.join(command)}': {exc}") from exc

        if process.returncode != 0:
            stderr = process.stderr.decode("utf-8", errors="ignore").strip()
            raise RepositoryError(
                f"'{' '.join(command)}' exited with {process.returncode}: {stderr}"
            )
        return process.stdout.decode("utf-8", errors="ignore")
