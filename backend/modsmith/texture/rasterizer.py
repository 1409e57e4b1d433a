"""
Rasterizer - deterministic RGBA pixels from a FinalTexturePlan

Responsibilities:
- Sample seeded value noise on an integer lattice with smoothstep bilinear interpolation
- Apply per-layer effects (drip, veins, sparkles, generic noise)
- Index the palette by noise value and add per-pixel variation
- Apply the vanilla clamp and glow alpha
- Hash the result so identical plans are recognizable by content

The pixel loop uses plain float math so results are identical on every
platform; numpy only holds the buffer.
"""
import math
from typing import List

import numpy as np

from modsmith.schemas import DetailLayerType, FinalTexturePlan, RasterizedTexture
from modsmith.texture.hashing import seed_hash
from modsmith.texture.palette import hex_to_rgb

FALLBACK_COLORS = ["#9370DB", "#8A2BE2", "#4A3728"]
SUPPORTED_SIZES = (16, 32)


def _value_noise(seed: str, x: float, y: float, scale: float) -> float:
    """Lattice value in [0, 1) for the cell containing (x, y)."""
    sx = math.floor(x * scale)
    sy = math.floor(y * scale)
    return (seed_hash(f"{seed}:{sx}:{sy}") % 65536) / 65536


def _noise(seed: str, x: float, y: float, scale: float) -> float:
    """Smoothstep bilinear interpolation of the four surrounding lattice values."""
    fx = x * scale - math.floor(x * scale)
    fy = y * scale - math.floor(y * scale)
    x0 = math.floor(x * scale) / scale
    x1 = math.floor(x * scale + 1) / scale
    y0 = math.floor(y * scale) / scale
    y1 = math.floor(y * scale + 1) / scale
    n00 = _value_noise(seed, x0, y0, scale)
    n10 = _value_noise(seed, x1, y0, scale)
    n01 = _value_noise(seed, x0, y1, scale)
    n11 = _value_noise(seed, x1, y1, scale)
    nx = fx * fx * (3 - 2 * fx)
    ny = fy * fy * (3 - 2 * fy)
    return n00 * (1 - nx) * (1 - ny) + n10 * nx * (1 - ny) + n01 * (1 - nx) * ny + n11 * nx * ny


def _clamp_byte(value: float) -> int:
    """Clamp to 0..255 and round half to even."""
    return int(round(min(255.0, max(0.0, value))))


def _clamp_vanilla(r: int, g: int, b: int):
    """Keep channels in a Minecraft-safe range; near-gray pixels collapse to their mean."""
    if max(r, g, b) - min(r, g, b) < 16:
        mid = max(40.0, min(255.0, (r + g + b) / 3))
        return mid, mid, mid
    return max(40, min(255, r)), max(40, min(255, g)), max(40, min(255, b))


def _content_hash(pixels: np.ndarray) -> str:
    h = 0
    for r, g, b in pixels.reshape(-1, 4)[:, :3].tolist():
        h = (h * 31 + r + g * 257 + b * 65537) & 0xFFFFFFFF
    return "r" + format(h, "x")


def rasterize_texture(plan: FinalTexturePlan, size: int = 16, seed: str = "") -> RasterizedTexture:
    """
    Render a texture plan to RGBA pixels

    Args:
        plan: Final texture plan
        size: Edge length in pixels (16 or 32)
        seed: Seed string; the palette's primary motif is appended to it

    Returns:
        RasterizedTexture

    Raises:
        ValueError: If size is not supported
    """
    if size not in SUPPORTED_SIZES:
        raise ValueError(f"Unsupported texture size: {size}")

    palette = plan.palette
    procedural = plan.procedural_spec
    colors: List[str] = palette.colors if len(palette.colors) >= 3 else FALLBACK_COLORS
    rgb_palette = [hex_to_rgb(c) or (128, 128, 128) for c in colors]
    scale = procedural.scale * (size / 16)
    contrast = procedural.contrast
    glow_mask = procedural.post_process.glow_mask
    vanilla_clamp = plan.styled_spec.vanilla_color_clamp
    noise_seed = seed + palette.primary_motif

    pixels = np.zeros((size, size, 4), dtype=np.uint8)
    for y in range(size):
        for x in range(size):
            nx = x / size
            ny = y / size
            v = _noise(noise_seed, nx, ny, 4 * scale)
            v = v * contrast + (1 - contrast) * 0.5
            v = max(0.0, min(1.0, v))

            for layer in procedural.detail_layers:
                layer_seed = noise_seed + layer.type.value
                lv = _noise(layer_seed, nx * 2, ny * 2, 3) * layer.intensity
                if layer.type == DetailLayerType.DRIP:
                    v = v * (1 - 0.3 * lv) + (ny * lv) * 0.3
                elif layer.type == DetailLayerType.VEINS:
                    v = v + (_noise(layer_seed, nx * 5, ny * 5, 2) - 0.5) * layer.intensity
                elif layer.type == DetailLayerType.SPARKLES:
                    v = v + (layer.intensity * 0.3 if v > 0.6 else 0)
                else:
                    v = v + (_noise(layer_seed, nx, ny, 6) - 0.5) * layer.intensity * 0.5

            v = max(0.0, min(1.0, v))
            index = math.floor(v * (len(rgb_palette) - 0.01)) % len(rgb_palette)
            r, g, b = rgb_palette[index]
            variation = _noise(noise_seed + "v", x, y, 8) * 0.15 + 0.92
            r = math.floor(r * variation)
            g = math.floor(g * variation)
            b = math.floor(b * variation)
            if vanilla_clamp:
                r, g, b = _clamp_vanilla(r, g, b)

            alpha = 255
            if glow_mask:
                alpha = min(255, 200 + math.floor(55 * _noise(noise_seed + "g", nx, ny, 2)))

            pixels[y, x] = (_clamp_byte(r), _clamp_byte(g), _clamp_byte(b), alpha)

    return RasterizedTexture(
        size=size,
        pixels=pixels.tobytes(),
        hash=_content_hash(pixels),
        metadata={
            "paletteUsed": list(colors[:6]),
            "motifsUsed": [palette.primary_motif] + list(palette.secondary_motifs),
            "style": plan.styled_spec.style.value,
        },
    )


__all__ = ["rasterize_texture", "SUPPORTED_SIZES"]
