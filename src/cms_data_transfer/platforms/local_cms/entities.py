"""Entity producer and transform for the local CMS provider."""

from collections.abc import AsyncIterator
from typing import Any

from ...core.types import EntityRecord
from ...streams import Stage
from .instance import CmsInstance


async def create_entities_stream(instance: CmsInstance) -> AsyncIterator[dict[str, Any]]:
    """Stream every row of every content type, paired with its schema.

    Content types are read one after the other in registry order.

    Yields:
        ``{'entity': row, 'content_type': schema}`` dictionaries
    """
    for content_type in list(instance.content_types.values()):
        async for entity in instance.query(content_type["uid"]):
            yield {"entity": entity, "content_type": content_type}


def create_entities_transform_stream() -> Stage:
    """Build the stage that reshapes raw entities into entity records.

    ``{'entity': {'id': 1, 'title': 'x'}, 'content_type': {'uid': 'api::a.a'}}``
    becomes ``{'type': 'api::a.a', 'id': 1, 'data': {'title': 'x'}}``.
    """

    async def transform(upstream: AsyncIterator[dict[str, Any]]) -> AsyncIterator[EntityRecord]:
        async for item in upstream:
            entity = item["entity"]
            attributes = {key: value for key, value in entity.items() if key != "id"}
            yield EntityRecord(
                type=item["content_type"]["uid"],
                id=entity.get("id"),
                data=attributes,
            )

    return transform
