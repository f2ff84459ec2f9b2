"""the beautiful world start from here."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """App Settings"""

    api_token: str = os.getenv("API_TOKEN", "")
    slack_api_url: str = os.getenv(
        "SLACK_API_URL", "https://slack.com/api/chat.postMessage"
    )
    slack_username: str = os.getenv("SLACK_USERNAME", "github2slack")
    slack_timeout_seconds: float = float(os.getenv("SLACK_TIMEOUT_SECONDS", "10"))
    users_file: str = os.getenv("USERS_FILE", "users.json")
    repositories_file: str = os.getenv("REPOSITORIES_FILE", "repositories.json")
    webhook_secret: str = os.getenv("GITHUB_WEBHOOK_SECRET", "")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_format: str = os.getenv("LOG_FORMAT", "console")


settings = Settings()
