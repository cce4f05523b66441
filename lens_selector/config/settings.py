from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 3000

    git_repo_url: str = ""
    git_branch: str = ""
    git_timeout_seconds: int = 120
    lens_file_path: str = ""
    lens_repos_temp_dir: str = "/tmp/lens-repos"

    cache_ttl_minutes: int = 5
    refresh_interval_seconds: int = 0

    @property
    def cache_ttl_seconds(self) -> int:
        return self.cache_ttl_minutes * 60
