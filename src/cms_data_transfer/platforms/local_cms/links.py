"""Link producer for the local CMS provider.

Links are the relations stored on entity rows. A relation can sit
directly on a content type, inside a component, or inside a dynamic zone,
so rows are walked recursively using the schema of whatever holds them.

Only content type rows are queried. Component values live inside those
rows, so component relations are found by that recursion alone and any
standalone component tables the instance holds are not read.
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

from ...core.types import LinkEnd, LinkRecord
from .instance import CmsInstance, get_model

logger = logging.getLogger(__name__)


def _is_morph(attribute: dict[str, Any]) -> bool:
    return attribute.get("relation", "").startswith("morph")


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else [value]


def _ref(value: Any) -> Any:
    return value.get("id") if isinstance(value, dict) else value


def _is_empty(value: Any) -> bool:
    # A bare primary key of 0 is a reference, not an empty value
    return value is None or (isinstance(value, (list, dict)) and not value)


def get_link(
    uid: str,
    field_name: str,
    attribute: dict[str, Any],
    entity: dict[str, Any],
    related: Any,
) -> LinkRecord | None:
    """Build the link between ``entity`` and one related item.

    Returns:
        The link record, or None when the related item has no reference
    """
    ref = _ref(related)
    if ref is None:
        return None

    if _is_morph(attribute):
        if not isinstance(related, dict) or "__type" not in related:
            return None
        kind = "relation.morph"
        right_type = related["__type"]
    else:
        kind = "relation.basic"
        right_type = attribute.get("target")
        if right_type is None:
            logger.warning("Skipping relation %s.%s: no target in schema", uid, field_name)
            return None

    right = LinkEnd(type=right_type, ref=ref)
    inverse_field = attribute.get("inversedBy") or attribute.get("mappedBy")
    if inverse_field:
        right["field"] = inverse_field

    return LinkRecord(
        kind=kind,
        relation=attribute["relation"],
        left=LinkEnd(type=uid, ref=entity.get("id"), field=field_name),
        right=right,
    )


def parse_entity_links(
    instance: CmsInstance, uid: str, entity: Any
) -> list[LinkRecord]:
    """Extract every link held by ``entity`` (a row or component value)."""
    if _is_empty(entity):
        return []

    if isinstance(entity, list):
        return [link for item in entity for link in parse_entity_links(instance, uid, item)]

    attributes = get_model(instance, uid).get("attributes", {})
    links: list[LinkRecord] = []

    for field_name, attribute in attributes.items():
        value = entity.get(field_name)
        if _is_empty(value):
            continue

        attribute_type = attribute.get("type")

        if attribute_type == "component":
            links.extend(parse_entity_links(instance, attribute["component"], value))
        elif attribute_type == "dynamiczone":
            for item in value:
                component_uid = item.get("__component")
                if component_uid is None:
                    continue
                data = {key: val for key, val in item.items() if key != "__component"}
                links.extend(parse_entity_links(instance, component_uid, data))
        elif attribute_type == "relation":
            for related in _as_list(value):
                link = get_link(uid, field_name, attribute, entity, related)
                if link is not None:
                    links.append(link)

    return links


async def create_links_stream(instance: CmsInstance) -> AsyncIterator[LinkRecord]:
    """Stream the links of every content type row, components included.

    Yields:
        Link records in row order
    """
    for uid in instance.content_types:
        async for entity in instance.query(uid):
            for link in parse_entity_links(instance, uid, entity):
                yield link
