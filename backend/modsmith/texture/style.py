"""
Style Transfer - fixed post-processing parameters per style

A style never changes procedural structure; it only sets saturation, contrast
curve, edge softness, glow diffusion and the vanilla color clamp.
"""
from typing import List

from modsmith.schemas import ProceduralTextureSpec, StyledTextureSpec, TextureStyle

# style -> (saturation, contrast_curve, edge_softness, glow_diffusion, vanilla_color_clamp)
STYLE_PARAMS = {
    TextureStyle.VANILLA: (0.9, 0.85, 0.6, 0.2, True),
    TextureStyle.FANTASY: (1.1, 0.9, 0.5, 0.4, False),
    TextureStyle.DARK_FANTASY: (0.85, 1.1, 0.4, 0.35, False),
    TextureStyle.CUTE: (1.15, 0.75, 0.8, 0.3, False),
    TextureStyle.INDUSTRIAL: (0.8, 1.0, 0.3, 0.15, False),
    TextureStyle.SCI_FI: (0.95, 1.05, 0.35, 0.5, False),
    TextureStyle.ANCIENT: (0.9, 0.95, 0.55, 0.25, False),
    TextureStyle.MAGICAL: (1.1, 0.9, 0.5, 0.6, False),
}

_missing = set(TextureStyle) - set(STYLE_PARAMS)
if _missing:
    raise RuntimeError(f"STYLE_PARAMS is missing styles: {sorted(s.value for s in _missing)}")


def infer_texture_style(semantic_tags: List[str], glow: bool) -> TextureStyle:
    """Ordered rule table: first match wins."""
    tags = [t.lower() for t in semantic_tags]
    if "magical" in tags or glow:
        return TextureStyle.MAGICAL
    if "cute" in tags:
        return TextureStyle.CUTE
    if "dangerous" in tags or "radioactive" in tags:
        return TextureStyle.DARK_FANTASY
    if "technological" in tags or "futuristic" in tags:
        return TextureStyle.SCI_FI
    if "ancient" in tags:
        return TextureStyle.ANCIENT
    if "organic" in tags:
        return TextureStyle.VANILLA
    return TextureStyle.FANTASY


def apply_style(procedural: ProceduralTextureSpec, style: TextureStyle) -> StyledTextureSpec:
    """Attach the style's parameters to a procedural spec."""
    saturation, contrast_curve, edge_softness, glow_diffusion, clamp = STYLE_PARAMS[style]
    return StyledTextureSpec(
        source=procedural,
        style=style,
        saturation=saturation,
        contrast_curve=contrast_curve,
        edge_softness=edge_softness,
        glow_diffusion=glow_diffusion,
        vanilla_color_clamp=clamp,
    )


__all__ = ["STYLE_PARAMS", "infer_texture_style", "apply_style"]
