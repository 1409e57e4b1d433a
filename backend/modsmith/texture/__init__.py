"""
Texture Synthesis Pipeline

Fixed order:
1. Palette & motif - curated families, seeded picks, never grayscale-only
2. Procedural - base noise + non-empty detail layers
3. Style - post-processing parameters only
4. Final plan, optionally rasterized to RGBA pixels
"""
from .hashing import seed_hash, pick
from .palette import generate_palette, is_gray_hex
from .procedural import derive_texture_recipe, generate_procedural_texture
from .style import infer_texture_style, apply_style
from .rasterizer import rasterize_texture
from .synthesizer import TextureSynthesizer

__all__ = [
    "seed_hash",
    "pick",
    "generate_palette",
    "is_gray_hex",
    "derive_texture_recipe",
    "generate_procedural_texture",
    "infer_texture_style",
    "apply_style",
    "rasterize_texture",
    "TextureSynthesizer",
]
