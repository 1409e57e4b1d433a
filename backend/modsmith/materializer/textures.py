"""
Texture Files - per-entity texture plans, PNG encoding and sidecars

A rasterized texture is emitted as PNG bytes. When no raster is available the
materializer emits a '.texture.json' sidecar holding the full plan, its seed
and size, and the writer rasterizes it into the PNG at write time.
"""
from io import BytesIO
from typing import Any, Dict, List

from PIL import Image

from modsmith.schemas import (
    EntityCategory,
    ExpandedSpec,
    FinalTexturePlan,
    RasterizedTexture,
    VisualDescriptor,
)
from modsmith.interpretation.aesthetics import interpret_aesthetics
from modsmith.texture.rasterizer import rasterize_texture
from modsmith.texture.synthesizer import TextureSynthesizer
from modsmith.materializer.visual_defaults import resolve_visual_default

SIDECAR_SUFFIX = ".texture.json"


def texture_seed(seed: str, category: str, content_id: str) -> str:
    """Per-entity seed; identical inputs always give identical pixels."""
    return f"{seed}:{category}/{content_id}"


def encode_png(texture: RasterizedTexture) -> bytes:
    """Encode an RGBA buffer as PNG bytes."""
    image = Image.frombytes("RGBA", (texture.size, texture.size), texture.pixels)
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def texture_sidecar(plan: FinalTexturePlan, seed: str, size: int) -> Dict[str, Any]:
    return {
        "seed": seed,
        "size": size,
        "plan": plan.model_dump(mode="json"),
    }


def render_sidecar(data: Dict[str, Any]) -> bytes:
    """
    Rasterize a sidecar document into PNG bytes

    Args:
        data: Parsed '.texture.json' document

    Returns:
        PNG bytes
    """
    plan = FinalTexturePlan.model_validate(data["plan"])
    texture = rasterize_texture(plan, int(data["size"]), data["seed"])
    return encode_png(texture)


def png_path_for_sidecar(path: str) -> str:
    return path[: -len(SIDECAR_SUFFIX)] + ".png"


def plan_entity_texture(
    expanded: ExpandedSpec,
    descriptor: VisualDescriptor,
    seed: str,
    synthesizer: TextureSynthesizer,
) -> FinalTexturePlan:
    """
    Synthesize the texture plan for one texture-owning descriptor

    The entity's name and description drive the aesthetics; the default
    visual for its kind is recorded as the plan's reference.
    """
    is_block = descriptor.category == EntityCategory.BLOCK
    entity = expanded.find_block(descriptor.content_id) if is_block else expanded.find_item(descriptor.content_id)
    name = entity.name if entity else descriptor.content_id.replace("_", " ")
    text = f"{name} {(entity.description if entity else None) or ''}".strip()
    default = resolve_visual_default(descriptor.content_id, name, is_block=is_block)

    return synthesizer.synthesize(
        interpret_aesthetics(text),
        texture_seed(seed, descriptor.category.value, descriptor.content_id),
        content_id=descriptor.content_id,
        category=descriptor.category.value,
        color_hint=entity.color_hint if entity else None,
        default_reference=default.texture,
    )


def plan_textures(expanded: ExpandedSpec, seed: str, synthesizer: TextureSynthesizer) -> List[FinalTexturePlan]:
    """Texture plans for every descriptor that owns a texture, in descriptor order."""
    return [
        plan_entity_texture(expanded, descriptor, seed, synthesizer)
        for descriptor in expanded.descriptors
        if descriptor.owns_texture
    ]


__all__ = [
    "SIDECAR_SUFFIX",
    "texture_seed",
    "encode_png",
    "texture_sidecar",
    "render_sidecar",
    "png_path_for_sidecar",
    "plan_entity_texture",
    "plan_textures",
]
