"""Persisted provider configuration and character catalog stores."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Protocol

from boto3.dynamodb.conditions import Attr

from ai_chat.constants import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE
from ai_chat.schemas import Character

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderConfigRow:
    name: str
    display_name: str
    endpoint: str
    model_name: str
    encrypted_api_key: str
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    is_active: bool = True


class ProviderConfigStore(Protocol):
    def list_active_providers(self) -> list[ProviderConfigRow]:
        """Return active provider rows in their stored order."""
        ...


class CharacterStore(Protocol):
    def list_active_characters(self) -> list[Character]:
        """Return active characters in their stored order."""
        ...


def _scan_active(table: Any) -> Iterator[dict[str, Any]]:
    params: dict[str, Any] = {"FilterExpression": Attr("is_active").eq(True)}
    while True:
        page = table.scan(**params)
        yield from page.get("Items", [])
        last_key = page.get("LastEvaluatedKey")
        if not last_key:
            return
        params["ExclusiveStartKey"] = last_key


def _plain(value: Any) -> Any:
    # DynamoDB returns every number as Decimal.
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def _sort_key(item: dict[str, Any]) -> Any:
    return _plain(item.get("id", 0))


class DynamoProviderConfigStore:
    def __init__(self, table: Any) -> None:
        self._table = table

    def list_active_providers(self) -> list[ProviderConfigRow]:
        rows = []
        for item in sorted(_scan_active(self._table), key=_sort_key):
            rows.append(
                ProviderConfigRow(
                    name=item["name"],
                    display_name=item.get("display_name", item["name"]),
                    endpoint=item.get("api_endpoint", ""),
                    model_name=item.get("model_name", ""),
                    encrypted_api_key=item.get("api_key_encrypted", ""),
                    max_tokens=_plain(item.get("max_tokens", DEFAULT_MAX_TOKENS)),
                    temperature=float(item.get("temperature", DEFAULT_TEMPERATURE)),
                    is_active=bool(item.get("is_active", True)),
                )
            )
        logger.info("Loaded provider configuration rows", extra={"row_count": len(rows)})
        return rows


class DynamoCharacterStore:
    def __init__(self, table: Any) -> None:
        self._table = table

    def list_active_characters(self) -> list[Character]:
        items = sorted(_scan_active(self._table), key=_sort_key)
        return [
            Character.model_validate({key: _plain(value) for key, value in item.items()})
            for item in items
        ]
