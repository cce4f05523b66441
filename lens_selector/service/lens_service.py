import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from lens_selector.config.settings import Settings
from lens_selector.discovery import DiscoveredLens, discover_lenses
from lens_selector.logging.logger import Log
from lens_selector.repository import GitRepository, repo_local_path
from lens_selector.service.cache import TTLCache
from lens_selector.service.exceptions import LensNotFoundError, MissingRepositoryError


class LensService:
    """Serves discovered lenses for the configured repository, caching each discovery run."""

    def __init__(
        self,
        settings: Settings,
        cache: TTLCache[list[DiscoveredLens]],
        repository: GitRepository,
        discover: Callable[[Path], list[DiscoveredLens]] = discover_lenses,
    ) -> None:
        self._settings = settings
        self._cache = cache
        self._repository = repository
        self._discover = discover
        self._refresh_lock = threading.Lock()

    def cache_key(self) -> str:
        s = self._settings
        return f"{s.git_repo_url}:{s.git_branch}:{s.lens_file_path}"

    def get_lenses(self) -> list[DiscoveredLens]:
        """Return all valid lenses, syncing and rediscovering on a cache miss.

        Raises:
            MissingRepositoryError: if GIT_REPO_URL is not configured.
            RepositoryError: if the working copy cannot be synced.
            DiscoveryError: if the lens tree cannot be walked.
        """
        if not self._settings.git_repo_url:
            raise MissingRepositoryError("GIT_REPO_URL environment variable is required")

        key = self.cache_key()
        cached = self._cache.get(key)
        if cached is not None:
            Log.debug("Returning cached lenses")
            return cached

        with self._refresh_lock:
            # Another request may have refreshed while we waited.
            cached = self._cache.get(key)
            if cached is not None:
                return cached
            lenses = self._load()
            self._cache.put(key, lenses)
            return lenses

    def get_lens_names(self) -> list[str]:
        return [lens.id for lens in self.get_lenses()]

    def get_lens(self, name: str) -> dict[str, Any]:
        """Return the validated document of the first lens whose name or id matches.

        Raises:
            LensNotFoundError: if no lens matches.
        """
        for lens in self.get_lenses():
            if lens.name == name or lens.id == name:
                return lens.content
        raise LensNotFoundError(name)

    def refresh(self) -> list[DiscoveredLens]:
        """Drop cached results and rediscover from an updated working copy."""
        self.clear_cache()
        lenses = self.get_lenses()
        Log.info(f"Lens cache refreshed: {len(lenses)} lenses")
        return lenses

    def clear_cache(self) -> None:
        self._cache.invalidate_all()

    def _load(self) -> list[DiscoveredLens]:
        s = self._settings
        local_path = repo_local_path(s.git_repo_url, Path(s.lens_repos_temp_dir))
        Log.info(f"Discovering lenses from {s.git_repo_url}")
        try:
            self._repository.ensure(s.git_repo_url, s.git_branch or None, local_path)
            root = local_path / s.lens_file_path if s.lens_file_path else local_path
            return self._discover(root)
        except Exception as exc:
            Log.error(f"Error discovering lenses: {exc}")
            raise


def build_lens_service(settings: Settings) -> LensService:
    """Build a LensService with a TTL cache and a git-backed repository."""
    return LensService(
        settings=settings,
        cache=TTLCache(settings.cache_ttl_seconds),
        repository=GitRepository(timeout_seconds=settings.git_timeout_seconds),
    )
