from __future__ import annotations

import os
from typing import Tuple

from dotenv import load_dotenv

from redmine_client.core.client import AsyncRedmineClient, RedmineClient
from redmine_client.core.errors import RedmineConfigError

REDMINE_URL_ENV = "REDMINE_URL"
REDMINE_API_KEY_ENV = "REDMINE_API_KEY"


def load_env_config(*, use_dotenv: bool = True) -> Tuple[str, str]:
    """Load Redmine base URL and API key from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    base_url = os.getenv(REDMINE_URL_ENV, "").strip()
    api_key = os.getenv(REDMINE_API_KEY_ENV, "").strip()
    return base_url, api_key


def require_env_config(*, use_dotenv: bool = True) -> Tuple[str, str]:
    base_url, api_key = load_env_config(use_dotenv=use_dotenv)
    if not base_url or not api_key:
        raise RedmineConfigError(
            f"Missing {REDMINE_URL_ENV} or {REDMINE_API_KEY_ENV} in environment."
        )
    return base_url, api_key


def create_client_from_env(**kwargs) -> RedmineClient:
    """Create a blocking RedmineClient from environment variables."""
    return RedmineClient.from_env(**kwargs)


def create_async_client_from_env(**kwargs) -> AsyncRedmineClient:
    """Create an AsyncRedmineClient from environment variables."""
    return AsyncRedmineClient.from_env(**kwargs)


__all__ = [
    "load_env_config",
    "require_env_config",
    "create_client_from_env",
    "create_async_client_from_env",
    "REDMINE_URL_ENV",
    "REDMINE_API_KEY_ENV",
]
