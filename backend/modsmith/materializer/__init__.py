"""
Materializer

Stage 8 of the pipeline:
1. Asset Keys - '{category}/{content_id}' texture and model keys
2. Visual Defaults - VisualKind -> vanilla reference
3. Block States - vanilla-equivalent blockstates and models
4. Recipes / Tags - data-pack documents
5. Behavior - custom Item classes bounded by primitive safety limits
6. Scaffold - Fabric metadata, Gradle properties, Java registration
7. Writer - write-once emission with additive tag merging
"""
from .asset_keys import MaterializationError, compose_asset_keys, parse_asset_key
from .visual_defaults import (
    VisualKind,
    VANILLA_ITEM_DEFAULTS,
    VANILLA_BLOCK_DEFAULTS,
    classify_visual_kind,
    resolve_visual_default,
)
from .block_states import build_blockstate, build_block_models, block_item_model
from .recipes import recipe_to_json
from .tags import merge_tag_documents
from .behavior import behavior_source, needs_custom_behavior
from .textures import plan_textures, texture_seed, encode_png
from .materializer import Materializer
from .writer import write_materialized_files

__all__ = [
    # Keys
    "MaterializationError",
    "compose_asset_keys",
    "parse_asset_key",
    # Visual defaults
    "VisualKind",
    "VANILLA_ITEM_DEFAULTS",
    "VANILLA_BLOCK_DEFAULTS",
    "classify_visual_kind",
    "resolve_visual_default",
    # Block states
    "build_blockstate",
    "build_block_models",
    "block_item_model",
    # Data
    "recipe_to_json",
    "merge_tag_documents",
    # Behavior
    "behavior_source",
    "needs_custom_behavior",
    # Textures
    "plan_textures",
    "texture_seed",
    "encode_png",
    # Emission
    "Materializer",
    "write_materialized_files",
]
