"""
Infrastructure adapter: AWS Secrets Manager → ISecretStore.

load_into_env() is called once at startup, before Settings.from_env(), so a
deployment can keep CHART_BUCKET and friends in a single JSON secret.
"""

import json
import logging
import os

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from src.domain.errors import ConfigError
from src.domain.ports.secret_store_port import ISecretStore

logger = logging.getLogger(__name__)


class SecretsManagerAdapter(ISecretStore):
    """Fetches and deserializes secrets from AWS Secrets Manager."""

    def __init__(self, region: str | None = None, client=None) -> None:
        self._client = client or boto3.client(
            "secretsmanager",
            region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )

    def get_secret(self, secret_id: str) -> dict:
        """Fetch and deserialize a JSON secret by ARN or name."""
        try:
            response = self._client.get_secret_value(SecretId=secret_id)
        except (ClientError, BotoCoreError) as exc:
            raise ConfigError(f"cannot read secret {secret_id!r}: {exc}") from exc
        try:
            secret = json.loads(response["SecretString"])
        except (KeyError, ValueError) as exc:
            raise ConfigError(f"secret {secret_id!r} is not a JSON string") from exc
        if not isinstance(secret, dict):
            raise ConfigError(f"secret {secret_id!r} must be a JSON object")
        return secret

    def load_into_env(self, secret_id: str, overwrite: bool = False) -> list[str]:
        """Inject the secret's key-value pairs into os.environ.

        Variables already set in the environment win unless *overwrite* is true.
        """
        loaded = []
        for key, value in self.get_secret(secret_id).items():
            if overwrite or key not in os.environ:
                os.environ[key] = str(value)
                loaded.append(key)
        logger.info("Loaded %d setting(s) from secret %s", len(loaded), secret_id)
        return loaded
