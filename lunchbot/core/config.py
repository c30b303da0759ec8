# lunchbot/core/config.py

import os
from functools import lru_cache

from dotenv import load_dotenv

# Load environment variables from the .env file in the root directory
load_dotenv()


class Settings:
    """Process-wide configuration, read once from the environment.

    Every value can be passed explicitly instead, which is how the tests
    build a deterministic instance.
    """

    def __init__(self, slack_token: str = None, project_name: str = None, log_level: str = None):
        # Slack
        self.slack_token: str = slack_token if slack_token is not None else os.getenv("SLACK_TOKEN", "")

        # Google Cloud Datastore
        self.project_name: str = project_name if project_name is not None else os.getenv("PROJECT_NAME")

        # Logging
        self.log_level: str = log_level or os.getenv("LOG_LEVEL", "INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
