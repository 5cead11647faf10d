"""
Application settings and configuration
"""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from GitHub Actions inputs and environment variables"""

    # Action inputs (GitHub exposes them as INPUT_<NAME>, hyphens kept)
    DEBUG_MODE: bool = Field(
        default=False,
        validation_alias=AliasChoices("INPUT_DEBUG-MODE", "DEBUG_MODE"),
        description="Respond even when it is not a first contribution",
    )
    ISSUE_MESSAGE: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_ISSUE-MESSAGE", "ISSUE_MESSAGE"),
        description="Comment posted on a user's first issue",
    )
    ISSUE_LABELS: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_ISSUE-LABELS", "ISSUE_LABELS"),
        description="Comma-separated labels added to a user's first issue",
    )
    PR_MESSAGE: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_PR-MESSAGE", "PR_MESSAGE"),
        description="Review comment posted on a user's first pull request",
    )
    PR_LABELS: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_PR-LABELS", "PR_LABELS"),
        description="Comma-separated labels added to a user's first pull request",
    )
    MAX_HISTORY_PAGES: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("INPUT_MAX-HISTORY-PAGES", "MAX_HISTORY_PAGES"),
        description="Stop scanning history after this many pages (0 = no limit)",
    )

    # GitHub Configuration
    GITHUB_TOKEN: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_REPO-TOKEN", "GITHUB_TOKEN"),
        description="Token used to call the GitHub API",
    )
    GITHUB_API_URL: str = Field(
        default="https://api.github.com", description="GitHub API URL"
    )
    GITHUB_EVENT_PATH: str = Field(
        default="", description="Path to the JSON payload of the triggering event"
    )
    GITHUB_REPOSITORY: str = Field(default="", description="owner/repo of the workflow")

    # Runtime
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    RUN_MODE: str = Field(default="action", description="'action' or 'server'")

    # Webhook server
    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=8080, description="Server port")
    GITHUB_WEBHOOK_SECRET: str = Field(default="", description="GitHub webhook secret")

    @field_validator("DEBUG_MODE", mode="before")
    @classmethod
    def _empty_input_is_false(cls, value):
        # Unset action inputs arrive as empty strings
        if isinstance(value, str) and not value.strip():
            return False
        return value

    @property
    def max_history_pages(self):
        """Page ceiling for history scans, None when unbounded"""
        return self.MAX_HISTORY_PAGES or None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
