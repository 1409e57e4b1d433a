"""
Texture Synthesizer - palette & motif -> procedural -> style -> final plan

Responsibilities:
- Run the texture stages in their fixed order for one entity
- Record the evocative fallback on the plan instead of hiding it
- Optionally rasterize the plan into pixels

FinalTexturePlan is the single authoritative texture description; every
visually-bearing entity resolves to a complete one.
"""
import logging
from typing import Optional

from modsmith.schemas import FinalTexturePlan, InterpretedAesthetics, RasterizedTexture
from modsmith.texture.palette import generate_palette
from modsmith.texture.procedural import derive_texture_recipe, generate_procedural_texture
from modsmith.texture.rasterizer import rasterize_texture
from modsmith.texture.style import apply_style, infer_texture_style

logger = logging.getLogger(__name__)


class TextureSynthesizer:
    """Builds FinalTexturePlans; keeps no per-request state"""

    def __init__(self, texture_size: int = 16):
        """
        Initialize synthesizer

        Args:
            texture_size: Edge length used by rasterize() (16 or 32)
        """
        self.texture_size = texture_size

    def synthesize(
        self,
        interpreted: InterpretedAesthetics,
        seed: str,
        content_id: Optional[str] = None,
        category: Optional[str] = None,
        color_hint: Optional[str] = None,
        default_reference: Optional[str] = None,
    ) -> FinalTexturePlan:
        """
        Synthesize the texture plan for one entity

        Args:
            interpreted: Semantic tags and aesthetic profile
            seed: Seed string
            content_id: Entity id, recorded on the plan
            category: 'item' or 'block', recorded on the plan
            color_hint: Requested color word, recorded on the plan
            default_reference: Vanilla texture the entity resembles

        Returns:
            FinalTexturePlan
        """
        aesthetic = interpreted.aesthetic
        palette = generate_palette(interpreted.text, interpreted.semantic_tags, aesthetic, seed)
        recipe = derive_texture_recipe(aesthetic)
        procedural = generate_procedural_texture(recipe, seed)
        style = infer_texture_style(interpreted.semantic_tags, aesthetic.glow)
        styled = apply_style(procedural, style)

        fallback_reason = None
        if interpreted.fallback:
            fallback_reason = "no aesthetic keyword matched; used the evocative magical default"
            logger.info(f"[Texture] ⚠ {content_id or 'entity'}: {fallback_reason}")

        return FinalTexturePlan(
            content_id=content_id,
            category=category,
            semantic_tags=list(interpreted.semantic_tags),
            palette=palette,
            procedural_spec=procedural,
            styled_spec=styled,
            animation_spec=recipe.animation,
            color_hint=color_hint,
            default_reference=default_reference,
            fallback_reason=fallback_reason,
        )

    def rasterize(self, plan: FinalTexturePlan, seed: str) -> RasterizedTexture:
        """Render a plan at the configured size."""
        return rasterize_texture(plan, self.texture_size, seed)


__all__ = ["TextureSynthesizer"]
