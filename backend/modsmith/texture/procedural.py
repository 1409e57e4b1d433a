"""
Procedural Texture - pure-data noise/detail specification

Responsibilities:
- Derive a texture recipe (base material, overlays, palette shift, animation)
  from an aesthetic profile
- Map the recipe to a base-noise kind and a non-empty list of detail layers
- Derive scale/contrast/intensities from the seeded hash only

No pixels here; rasterization reads the resulting spec.
"""
from modsmith.schemas import (
    AestheticProfile,
    AnimationHint,
    AnimationSpec,
    BaseNoise,
    DetailLayer,
    DetailLayerType,
    PostProcess,
    ProceduralTextureSpec,
    TextureRecipe,
    TextureSource,
)
from modsmith.texture.hashing import seed_hash

DEFAULT_PALETTE_SHIFT = ["#9370DB", "#8A2BE2", "#DA70D6", "#4B0082"]
EMISSIVE_GLOW = "emissive_glow"


def derive_texture_recipe(aesthetic: AestheticProfile) -> TextureRecipe:
    """Build the texture recipe for an aesthetic profile."""
    overlays = []
    if aesthetic.glow:
        overlays.append(TextureSource(type="overlay", key=EMISSIVE_GLOW))
    for hint in aesthetic.overlay_hints:
        overlays.append(TextureSource(type="overlay", key=hint))
    if aesthetic.animation_hint:
        overlays.append(TextureSource(type="procedural", key=aesthetic.animation_hint.value))

    animation = None
    if aesthetic.animation_hint:
        animation = AnimationSpec(type=aesthetic.animation_hint, speed=1.0)

    return TextureRecipe(
        base=TextureSource(type="material", key=aesthetic.material_hint or "crystal"),
        overlays=overlays,
        palette_shift=list(aesthetic.color_palette[:4]) or list(DEFAULT_PALETTE_SHIFT),
        animation=animation,
    )


def base_noise_for_material(material_key: str) -> BaseNoise:
    """Pick the base noise kind for a material key; unknown materials read as crystal."""
    key = material_key.lower()
    if key in ("ice", "crystal", "gem"):
        return BaseNoise.CRYSTAL
    if key in ("organic", "wood", "slime", "flesh"):
        return BaseNoise.ORGANIC
    if key in ("metal", "metallic"):
        return BaseNoise.METALLIC
    if key == "stone":
        return BaseNoise.CELLULAR
    if key == "energy":
        return BaseNoise.SIMPLEX
    return BaseNoise.CRYSTAL


def _overlay_layer(key: str):
    """Detail layer for one overlay key, or None when the key adds nothing."""
    if "crack" in key or key == "crackle":
        return DetailLayer(type=DetailLayerType.CRACKLE, intensity=0.4)
    if "vein" in key or "radioactive" in key:
        return DetailLayer(type=DetailLayerType.VEINS, intensity=0.5)
    if "frost" in key or "ice" in key:
        return DetailLayer(type=DetailLayerType.FROST, intensity=0.5)
    if "corrosion" in key:
        return DetailLayer(type=DetailLayerType.CORROSION, intensity=0.4)
    if "sparkle" in key:
        return DetailLayer(type=DetailLayerType.SPARKLES, intensity=0.4)
    return None


def generate_procedural_texture(recipe: TextureRecipe, seed: str) -> ProceduralTextureSpec:
    """
    Generate the procedural spec for a recipe

    Args:
        recipe: Texture recipe derived from the aesthetic profile
        seed: Seed string

    Returns:
        ProceduralTextureSpec whose detail_layers is never empty
    """
    h = seed_hash(seed)
    scale = 0.3 + ((h % 100) / 100) * 0.4
    contrast = 0.5 + ((h % 73) / 73) * 0.5

    layers = []
    if recipe.animation is not None:
        if recipe.animation.type == AnimationHint.DRIP:
            layers.append(DetailLayer(type=DetailLayerType.DRIP, intensity=0.6))
        elif recipe.animation.type == AnimationHint.SPARKLE:
            layers.append(DetailLayer(type=DetailLayerType.SPARKLES, intensity=0.5))
        # pulse and wave add no layer; glow is carried by the mask

    for overlay in recipe.overlays:
        key = overlay.key.lower()
        if key == EMISSIVE_GLOW:
            continue
        layer = _overlay_layer(key)
        if layer is not None:
            layers.append(layer)

    has_glow = any("emissive" in overlay.key.lower() for overlay in recipe.overlays)
    if has_glow and not any(layer.type == DetailLayerType.SPARKLES for layer in layers):
        layers.append(DetailLayer(type=DetailLayerType.SPARKLES, intensity=0.25))

    if not layers:
        layers.append(DetailLayer(type=DetailLayerType.NOISE, intensity=0.2 + ((h % 50) / 50) * 0.2))

    return ProceduralTextureSpec(
        base_noise=base_noise_for_material(recipe.base.key),
        scale=scale,
        contrast=contrast,
        detail_layers=layers,
        post_process=PostProcess(blur=0.0, sharpen=0.1, glow_mask=has_glow),
    )


__all__ = [
    "derive_texture_recipe",
    "base_noise_for_material",
    "generate_procedural_texture",
]
