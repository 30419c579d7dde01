"""
Configuration management for the Event Manager Service.
Settings come from Zero, with environment variables as fallback.
"""

import os
import asyncio
import concurrent.futures
from urllib.parse import quote_plus
from typing import Dict, Any, Optional
import logging
from zero_python_sdk import zero

logger = logging.getLogger(__name__)


class ZeroSecretsManager:
    """
    Read-through cache over one Zero app's secrets.
    Values missing from Zero fall back to process environment variables.
    """

    def __init__(self, zero_token: str, caller_name: str = "event-manager", app_name: str = "event-manager"):
        self.zero_token = zero_token
        self.caller_name = caller_name
        self.app_name = app_name
        self._cache: Dict[str, Any] = {}
        self._secrets = None

    async def _fetch_secrets(self):
        """Load the secret bundle once per process."""
        if self._secrets is None:
            try:
                loop = asyncio.get_running_loop()
                with concurrent.futures.ThreadPoolExecutor() as executor:
                    self._secrets = await loop.run_in_executor(
                        executor,
                        lambda: zero(
                            token=self.zero_token,
                            pick=[self.app_name],
                            caller_name=self.caller_name
                        ).fetch()
                    )
                logger.info(f"Loaded secrets for {self.app_name} from Zero")
            except Exception as e:
                logger.error(f"Zero unavailable, using environment only: {e}")
                self._secrets = {}

    def _normalize_key(self, key: str) -> str:
        """DB_HOST -> db-host."""
        return key.lower().replace("_", "-")

    async def get_secret(self, key: str) -> Optional[str]:
        """
        Look up a setting, Zero first, then the environment.

        Args:
            key: The secret key to retrieve, e.g. ``DB_HOST``

        Returns:
            The value, or None when neither source has it
        """
        normalized = self._normalize_key(key)
        if normalized in self._cache:
            return self._cache[normalized]

        await self._fetch_secrets()
        app_secrets = (self._secrets or {}).get(self.app_name, {})
        secret_value = app_secrets.get(normalized) or os.getenv(key)

        if secret_value:
            self._cache[normalized] = secret_value

        return secret_value

    async def close(self):
        """Drop cached values."""
        self._cache.clear()


class AppConfig:
    """
    Event Manager configuration.
    Built once at startup and handed to the service container.
    """

    def __init__(self, secrets_manager: Optional[ZeroSecretsManager] = None):
        if secrets_manager is None:
            zero_token = os.getenv("ZERO_TOKEN")
            if not zero_token:
                raise ValueError("ZERO_TOKEN environment variable is required")
            secrets_manager = ZeroSecretsManager(zero_token)

        self.secrets_manager = secrets_manager

    async def get_database_url(self) -> str:
        """DATABASE_URL, or a PostgreSQL URL built from the DB_* settings."""
        url = await self.secrets_manager.get_secret("DATABASE_URL")
        if url:
            return url

        host = await self.secrets_manager.get_secret("DB_HOST") or "localhost"
        port = await self.secrets_manager.get_secret("DB_PORT") or "5432"
        name = await self.secrets_manager.get_secret("DB_NAME") or "event_manager"
        user = await self.secrets_manager.get_secret("DB_USER") or "postgres"
        password = await self.secrets_manager.get_secret("DB_PASSWORD") or "postgres"

        return f"postgresql://{user}:{quote_plus(password)}@{host}:{port}/{name}"

    async def get_cors_origins(self) -> list:
        """Comma-separated CORS_ORIGINS as a list."""
        origins = await self.secrets_manager.get_secret("CORS_ORIGINS")
        if origins:
            return [origin.strip() for origin in origins.split(",") if origin.strip()]
        return ["http://localhost:3000", "http://localhost:8080"]

    async def get_log_level(self) -> str:
        """Get logging level."""
        return await self.secrets_manager.get_secret("LOG_LEVEL") or "INFO"

    async def get_seed_demo_user(self) -> bool:
        """Whether to create the demo ``test`` user on startup."""
        value = await self.secrets_manager.get_secret("SEED_DEMO_USER")
        return str(value).lower() in ("1", "true", "yes") if value else False

    async def close(self):
        """Close the secrets manager."""
        await self.secrets_manager.close()
