"""Runtime infrastructure helpers for secrets, tracing and storage tables."""

import logging
import os
from functools import lru_cache
from typing import Any

import boto3
from langsmith.run_trees import get_cached_client

from ai_chat.constants import (
    AWS_REGION,
    CHARACTERS_TABLE_ENV,
    DEFAULT_CHARACTERS_TABLE,
    DEFAULT_ENCRYPTION_SECRET,
    DEFAULT_PROVIDERS_TABLE,
    ENCRYPTION_KEY_ENV,
    ENCRYPTION_KEY_PARAMETER_NAME,
    LANGSMITH_API_KEY_PARAMETER_NAME,
    LANGSMITH_PROJECT,
    PROVIDERS_TABLE_ENV,
)

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_ssm_client() -> Any:
    return boto3.client("ssm", region_name=AWS_REGION)


def _get_secure_parameter(ssm_client: Any, parameter_name: str) -> str:
    result = ssm_client.get_parameter(Name=parameter_name, WithDecryption=True)
    value = result["Parameter"].get("Value")
    if not value:
        raise RuntimeError(f"SSM parameter {parameter_name} has no value")
    return value


def _get_optional_secure_parameter(ssm_client: Any, parameter_name: str) -> str | None:
    try:
        return _get_secure_parameter(ssm_client, parameter_name)
    except Exception:
        logger.warning(
            "Optional SSM parameter is unavailable; disabling dependent feature",
            extra={"parameter_name": parameter_name},
            exc_info=True,
        )
        return None


@lru_cache(maxsize=1)
def get_encryption_secret() -> str:
    """Resolve the credential encryption secret: environment, then SSM, then the dev default."""
    secret = os.environ.get(ENCRYPTION_KEY_ENV)
    if secret:
        return secret

    secret = _get_optional_secure_parameter(get_ssm_client(), ENCRYPTION_KEY_PARAMETER_NAME)
    if secret:
        return secret

    logger.warning(
        "Encryption key is not configured; using the insecure development default",
        extra={"env_var": ENCRYPTION_KEY_ENV, "parameter_name": ENCRYPTION_KEY_PARAMETER_NAME},
    )
    return DEFAULT_ENCRYPTION_SECRET


@lru_cache(maxsize=1)
def get_langsmith_api_key() -> str | None:
    return _get_optional_secure_parameter(get_ssm_client(), LANGSMITH_API_KEY_PARAMETER_NAME)


def _configure_langsmith(langsmith_api_key: str | None) -> None:
    if not langsmith_api_key:
        os.environ.pop("LANGSMITH_TRACING", None)
        os.environ.pop("LANGSMITH_API_KEY", None)
        logger.info("LangSmith tracing disabled because API key is unavailable")
        return

    os.environ["LANGSMITH_TRACING"] = "true"
    os.environ["LANGSMITH_API_KEY"] = langsmith_api_key
    os.environ.setdefault("LANGSMITH_PROJECT", LANGSMITH_PROJECT)


@lru_cache(maxsize=1)
def ensure_langsmith_configured() -> None:
    """Configure LangSmith environment variables (called once via lru_cache)."""
    _configure_langsmith(get_langsmith_api_key())


def flush_langsmith_traces() -> None:
    if os.environ.get("LANGSMITH_TRACING", "").lower() != "true":
        return
    if not os.environ.get("LANGSMITH_API_KEY"):
        return
    try:
        get_cached_client().flush()
    except Exception:
        logger.warning("Failed to flush LangSmith traces", exc_info=True)


@lru_cache(maxsize=1)
def get_dynamodb_resource() -> Any:
    return boto3.resource("dynamodb", region_name=AWS_REGION)


def get_providers_table() -> Any:
    name = os.environ.get(PROVIDERS_TABLE_ENV, DEFAULT_PROVIDERS_TABLE)
    return get_dynamodb_resource().Table(name)


def get_characters_table() -> Any:
    name = os.environ.get(CHARACTERS_TABLE_ENV, DEFAULT_CHARACTERS_TABLE)
    return get_dynamodb_resource().Table(name)
