from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    `TEAM_USERS` and `CORPORATE_USERS` are JSON lists; the corporate login at
    a given index belongs to the personal login at the same index.
    """

    github_api_base_url: str = "https://api.github.com"
    github_graphql_url: str = "https://api.github.com/graphql"
    corporate_graphql_url: str = "https://api.github.com/graphql"
    personal_github_token: str | None = None
    corporate_github_token: str | None = None

    team_users: list[str] = []
    corporate_users: list[str] = []
    notes_dir: str = "public"
    timezone: str = ""

    log_level: str = "INFO"
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1
    rate_limit_per_minute: int = 30
    rate_limit_window_seconds: int = 60
    ranking_max_workers: int = 8

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def roster(self) -> list[tuple[str, str | None]]:
        """Pair each personal login with its corporate login, if any."""

        return [
            (
                username,
                self.corporate_users[index]
                if index < len(self.corporate_users)
                else None,
            )
            for index, username in enumerate(self.team_users)
        ]
