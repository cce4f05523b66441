import threading

from lens_selector.config.settings import Settings
from lens_selector.logging.logger import Log
from lens_selector.service.lens_service import LensService


class RefreshWorker:
    """Poll loop: wait -> refresh lens cache from the repository."""

    def __init__(self, service: LensService, settings: Settings) -> None:
        self._service = service
        self._settings = settings
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def enabled(self) -> bool:
        return self._settings.refresh_interval_seconds > 0

    def run(self, max_cycles: int | None = None) -> None:
        """Main refresh loop. Runs until stopped or interrupted.

        If max_cycles is set, stop after that many refreshes (for testing).
        """
        Log.info(
            f"Refresh worker started, refreshing every "
            f"{self._settings.refresh_interval_seconds}s"
        )
        cycles = 0
        try:
            while max_cycles is None or cycles < max_cycles:
                if self._stop.wait(self._settings.refresh_interval_seconds):
                    break
                self._try_refresh()
                cycles += 1
        except KeyboardInterrupt:
            Log.info("Refresh worker shutting down gracefully")

    def start_in_background(self) -> None:
        """Run the loop in a daemon thread; does nothing when refreshing is disabled."""
        if not self.enabled or self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self.run, name="lens-refresh", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _try_refresh(self) -> None:
        """Refresh once. Failures are logged; the previous cache was already dropped."""
        try:
            self._service.refresh()
        except Exception as exc:
            Log.warning(f"Lens refresh failed, will retry: {exc}")
