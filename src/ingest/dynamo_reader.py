"""DynamoDB scan reader for session items.

This module pages through a windowed scan of the session table and
yields each page as a batch of typed session items.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping

import boto3
from boto3.dynamodb.types import TypeDeserializer
from botocore.exceptions import BotoCoreError

from core.config import StatsConfig
from core.constants import (
    CREATED_AT_ATTRIBUTE,
    DOMAIN_EVENT_PREFIX,
    ID_ATTRIBUTE,
    MARKET_ATTRIBUTE,
    METADATA_ATTRIBUTE,
    PROJECTED_ATTRIBUTES,
    SESSION_METADATA,
)
from core.errors import StatsSourceError
from core.logging_config import get_logger
from core.types import ScanWindow, SessionItem

_LOGGER = get_logger(__name__)

_FILTER_EXPRESSION = (
    "#createdAt >= :createdAtFrom AND #createdAt < :createdAtTo "
    "AND (#metadata = :sessMeta OR begins_with(#metadata, :domainEventMeta))"
)


def build_scan_request(table_name: str, window: ScanWindow) -> dict[str, Any]:
    """Build low-level ``scan`` kwargs for the windowed session slice.

    Args:
        table_name: Table holding snapshots and domain events.
        window: Half-open window on item ``createdAt``.

    Returns:
        Keyword arguments for the DynamoDB ``scan`` operation.
    """
    attribute_names = {f"#{name}": name for name in PROJECTED_ATTRIBUTES}
    return {
        "TableName": table_name,
        "FilterExpression": _FILTER_EXPRESSION,
        "ExpressionAttributeNames": attribute_names,
        "ExpressionAttributeValues": {
            ":createdAtFrom": {"S": window.start},
            ":createdAtTo": {"S": window.end},
            ":sessMeta": {"S": SESSION_METADATA},
            ":domainEventMeta": {"S": DOMAIN_EVENT_PREFIX},
        },
        "ProjectionExpression": ",".join(attribute_names),
    }


def iter_item_batches(
    dynamodb_client: Any,
    table_name: str,
    window: ScanWindow,
    page_size: int | None = None,
) -> Iterator[list[SessionItem]]:
    """Yield scan pages as batches of session items.

    Pages are requested lazily, one per iteration step.

    Args:
        dynamodb_client: Boto3 DynamoDB client.
        table_name: Table to scan.
        window: Half-open window on item ``createdAt``.
        page_size: Optional items evaluated per scan request.

    Yields:
        Items of one scan page, in page order.

    Raises:
        StatsSourceError: If any scan request fails.
    """
    deserializer = TypeDeserializer()
    request = build_scan_request(table_name, window)
    if page_size is not None:
        request["PaginationConfig"] = {"PageSize": page_size}
    pages = dynamodb_client.get_paginator("scan").paginate(**request)
    page_iterator = iter(pages)
    page_index = 0
    while True:
        try:
            page = next(page_iterator)
        except StopIteration:
            return
        except Exception as error:
            raise StatsSourceError(
                f"Failed to scan table '{table_name}' at page {page_index}: {error}. "
                "Check AWS credentials, region, and table name, then rerun."
            ) from error
        batch = [_item_from_attributes(raw, deserializer) for raw in page.get("Items", [])]
        _LOGGER.debug(
            "scan_page_loaded",
            table=table_name,
            page=page_index,
            items=len(batch),
            scanned=page.get("ScannedCount"),
        )
        page_index += 1
        yield batch


def create_dynamodb_client(config: StatsConfig) -> Any:
    """Create a boto3 DynamoDB client.

    Args:
        config: Runtime config containing region and optional profile.

    Returns:
        Boto3 DynamoDB client.

    Raises:
        StatsSourceError: If the AWS profile or region cannot be resolved.
    """
    try:
        session = boto3.session.Session(**config.boto3_session_kwargs())
        return session.client("dynamodb")
    except BotoCoreError as error:
        raise StatsSourceError(
            f"Failed to create DynamoDB client (region={config.region}, "
            f"profile={config.profile}): {error}. Check the AWS profile and region."
        ) from error


def _item_from_attributes(raw_item: Mapping[str, Any], deserializer: Any) -> SessionItem:
    """Convert one wire-format item into a session item.

    Raises:
        StatsSourceError: If a required attribute is missing.
    """
    values = {name: deserializer.deserialize(value) for name, value in raw_item.items()}
    try:
        return SessionItem(
            session_id=str(values[ID_ATTRIBUTE]),
            metadata=str(values[METADATA_ATTRIBUTE]),
            created_at=str(values[CREATED_AT_ATTRIBUTE]),
            market=str(values.get(MARKET_ATTRIBUTE) or ""),
        )
    except KeyError as error:
        raise StatsSourceError(
            f"Scanned item is missing attribute {error}: {sorted(values)}. "
            "Expected id, metadata, and createdAt on every item."
        ) from error
