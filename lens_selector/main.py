import uvicorn

from lens_selector.api.app import create_app
from lens_selector.config.settings import Settings
from lens_selector.logging.logger import Log


def main() -> None:
    """Entry point: load settings -> configure logging -> build app -> serve."""
    settings = Settings()
    Log.configure(settings.log_level)
    _log_configuration(settings)

    app = create_app(settings)
    Log.info(f"Lens Selector Service running on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


def _log_configuration(settings: Settings) -> None:
    Log.info("Environment configuration:")
    Log.info(f"  GIT_REPO_URL: {settings.git_repo_url or 'not set'}")
    Log.info(f"  GIT_BRANCH: {settings.git_branch or 'not set (will use main/master)'}")
    Log.info(f"  LENS_FILE_PATH: {settings.lens_file_path or 'not set (will auto-discover)'}")
    Log.info(f"  CACHE_TTL_MINUTES: {settings.cache_ttl_minutes}")


if __name__ == "__main__":
    main()
