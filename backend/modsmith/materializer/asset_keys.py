"""
Asset Keys - canonical '{category}/{content_id}' keys per visual descriptor

The category is part of every key, so an item and a block that share an id
get independent texture and model keys.
"""
import re
from typing import List

from modsmith.schemas import (
    AssetKey,
    AssetKind,
    EntityAssets,
    EntityCategory,
    ExpandedSpec,
    VisualShape,
)


class MaterializationError(Exception):
    """Raised when materialization input is malformed (bad asset key, unknown recipe type, self-loop)"""
    pass


ASSET_KEY_PATTERN = re.compile(r"^(item|block)/([a-z0-9_]+)$")


def parse_asset_key(key: str, kind: AssetKind = AssetKind.TEXTURE) -> AssetKey:
    """
    Parse an 'item/<id>' or 'block/<id>' string

    Raises:
        MaterializationError: If the string lacks a known category prefix
    """
    match = ASSET_KEY_PATTERN.match(key or "")
    if not match:
        raise MaterializationError(f"Invalid asset key: {key!r} (expected 'item/<id>' or 'block/<id>')")
    return AssetKey(category=EntityCategory(match.group(1)), kind=kind, content_id=match.group(2))


def compose_asset_keys(expanded: ExpandedSpec) -> List[EntityAssets]:
    """
    Texture and model keys for every visual descriptor

    Block items sample their block's texture, so their texture key lives in the
    block category while their model key stays in the item category.

    Returns:
        EntityAssets sorted by (category, content_id)
    """
    assets = []
    for descriptor in expanded.descriptors:
        texture_category = (
            EntityCategory.BLOCK if descriptor.shape == VisualShape.BLOCK_ITEM else descriptor.category
        )
        assets.append(EntityAssets(
            content_id=descriptor.content_id,
            category=descriptor.category,
            texture=AssetKey(category=texture_category, kind=AssetKind.TEXTURE, content_id=descriptor.texture_id),
            model=AssetKey(category=descriptor.category, kind=AssetKind.MODEL, content_id=descriptor.content_id),
        ))
    return sorted(assets, key=lambda a: (a.category.value, a.content_id))


def find_key_collisions(assets: List[EntityAssets]) -> List[str]:
    """Model keys that appear more than once (always empty for a well-formed expansion)."""
    seen = set()
    collisions = []
    for entity in assets:
        key = (entity.model.category, entity.model.content_id)
        if key in seen:
            collisions.append(entity.model.key)
        seen.add(key)
    return collisions


__all__ = [
    "MaterializationError",
    "parse_asset_key",
    "compose_asset_keys",
    "find_key_collisions",
]
