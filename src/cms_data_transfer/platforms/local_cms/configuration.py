"""Configuration producer for the local CMS provider.

Configuration is made of the core store (key/value settings whose values
are stored JSON-encoded) followed by the registered webhooks.
"""

import json
import logging
from collections.abc import AsyncIterator
from typing import Any

from ...core.types import ConfigurationRecord
from .instance import CmsInstance

logger = logging.getLogger(__name__)

CORE_STORE_UID = "strapi::core-store"
WEBHOOK_UID = "webhook"


def _decode_value(row: dict[str, Any]) -> dict[str, Any]:
    value = row.get("value")
    if not isinstance(value, str):
        return row

    try:
        return {**row, "value": json.loads(value)}
    except json.JSONDecodeError:
        logger.warning("Core store entry %r has a non-JSON value, keeping it raw", row.get("key"))
        return row


async def create_configuration_stream(
    instance: CmsInstance,
) -> AsyncIterator[ConfigurationRecord]:
    """Stream core store entries, then webhooks.

    Yields:
        ``{'type': 'core-store' | 'webhook', 'value': row}`` dictionaries
    """
    async for row in instance.query(CORE_STORE_UID):
        yield ConfigurationRecord(type="core-store", value=_decode_value(row))

    async for row in instance.query(WEBHOOK_UID):
        yield ConfigurationRecord(type="webhook", value=row)
