"""Secret Manager Client - Imperative Shell.

Resolves provider API keys and the Slack bot token from Google Cloud
Secret Manager, falling back to environment variables for local runs.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from google.cloud import secretmanager


logger = logging.getLogger(__name__)


SECRET_PREFIX = "secret:"

# Secret name -> environment variable used when the secret is unavailable
CREDENTIAL_SECRETS: dict[str, str] = {
    "ticketmaster-api-key": "TICKETMASTER_API_KEY",
    "eventbrite-api-key": "EVENTBRITE_API_KEY",
    "slack-bot-token": "SLACK_BOT_TOKEN",
}


@dataclass
class SecretManagerConfig:
    """Configuration for Secret Manager client.

    Attributes:
        project_id: GCP project holding the credentials
        version: Secret version to read
    """
    project_id: Optional[str] = None
    version: str = "latest"


class SecretManagerClient:
    """Reads credentials from Secret Manager.

    Values are cached per secret name for the life of the client, so
    resolving the same placeholder twice costs one request.
    """

    def __init__(self, config: Optional[SecretManagerConfig] = None) -> None:
        self.config = config or SecretManagerConfig()
        self._client: Optional[secretmanager.SecretManagerServiceClient] = None
        self._cache: dict[str, str] = {}

    @property
    def client(self) -> secretmanager.SecretManagerServiceClient:
        """Lazy initialization of Secret Manager client."""
        if self._client is None:
            self._client = secretmanager.SecretManagerServiceClient()
        return self._client

    def _resource_name(self, secret_name: str) -> str:
        return (
            f"projects/{self.config.project_id}/secrets/{secret_name}"
            f"/versions/{self.config.version}"
        )

    def get_secret(self, secret_name: str) -> Optional[str]:
        """Fetch a credential.

        This method performs I/O on a cache miss.

        Args:
            secret_name: Short secret name, e.g. 'slack-bot-token'

        Returns:
            Secret value, or None if unavailable
        """
        if secret_name in self._cache:
            return self._cache[secret_name]

        if not self.config.project_id:
            logger.error("No project ID configured for Secret Manager")
            return None

        try:
            response = self.client.access_secret_version(
                request={"name": self._resource_name(secret_name)}
            )
        except Exception as e:
            logger.error("Failed to fetch secret %s: %s", secret_name, str(e))
            return None

        value = response.payload.data.decode("UTF-8")
        self._cache[secret_name] = value
        logger.info("Fetched secret %s", secret_name)
        return value

    def get_secret_or_env(
        self,
        secret_name: str,
        env_var_name: Optional[str] = None,
        fallback_value: Optional[str] = None,
    ) -> Optional[str]:
        """Get a credential from Secret Manager, then the environment.

        Args:
            secret_name: Secret to read
            env_var_name: Environment variable to try next (defaults to the
                CREDENTIAL_SECRETS entry for the secret)
            fallback_value: Returned when neither source has a value

        Returns:
            The first value found, or fallback_value
        """
        value = self.get_secret(secret_name)
        if value:
            return value

        env_var_name = env_var_name or CREDENTIAL_SECRETS.get(secret_name)
        env_value = os.environ.get(env_var_name) if env_var_name else None
        if env_value:
            logger.info("Using environment variable %s for %s", env_var_name, secret_name)
            return env_value

        return fallback_value

    def resolve(self, value: str) -> str:
        """Expand a ${secret:name} or ${ENV_VAR} config placeholder.

        Anything else, and placeholders that cannot be resolved, come back
        unchanged.
        """
        if not (value.startswith("${") and value.endswith("}")):
            return value

        spec = value[2:-1]
        if spec.startswith(SECRET_PREFIX):
            secret = self.get_secret_or_env(spec[len(SECRET_PREFIX):])
            return secret if secret is not None else value

        env_value = os.environ.get(spec)
        if env_value:
            return env_value

        logger.warning("Environment variable %s not set", spec)
        return value
