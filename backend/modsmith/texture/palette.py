"""
Palette & Motif - curated palette families picked by keyword and tag

Responsibilities:
- Choose a palette family from the request text and semantic tags
- Pick a palette and motif inside the family with the seeded hash
- Guarantee 3-6 colors and never a grayscale-only palette

Never raises. Unrecognized input gets an evocative fantasy palette.
"""
import re
from typing import List, Optional

from modsmith.schemas import AestheticProfile, ContrastLevel, GeneratedPalette
from modsmith.texture.hashing import pick

GRAY_TOLERANCE = 25

FANTASY_PALETTES = (
    ("#9370DB", "#8A2BE2", "#DA70D6", "#4B0082", "#9932CC"),
    ("#4169E1", "#1E90FF", "#00BFFF", "#87CEEB", "#4682B4"),
    ("#2E8B57", "#3CB371", "#20B2AA", "#48D1CC", "#00FA9A"),
    ("#DEB887", "#D2691E", "#CD853F", "#F4A460", "#BC8F8F"),
)

PASTEL_PALETTES = (
    ("#FFF5EE", "#FFE4E1", "#DEB887", "#F5DEB3", "#FFEFD5"),
    ("#E0FFFF", "#B0E0E6", "#AFEEEE", "#87CEEB", "#ADD8E6"),
    ("#FFB6C1", "#FFC0CB", "#FFE4E1", "#FFF0F5", "#FFDAB9"),
)

SICKLY_PALETTES = (
    ("#9ACD32", "#ADFF2F", "#7CFC00", "#556B2F", "#6B8E23"),
    ("#808000", "#BDB76B", "#9ACD32", "#ADFF2F", "#7FFF00"),
)

DARK_PALETTE = ("#2F4F4F", "#1C1C1C", "#4A3728", "#556B2F", "#6B8E23")

MOTIFS = {
    "fantasy": ("arcane crystals", "ethereal glow", "magical veins", "enchanted swirls"),
    "pastel": ("creamy swirl", "soft gradient", "smooth blend", "gentle waves"),
    "sickly": ("glowing veins", "radioactive speckles", "toxic cracks", "hazard stripes"),
    "cute": ("soft dots", "rounded shapes", "gentle curves", "fluffy texture"),
    "default": ("organic variation", "natural noise", "subtle detail", "layered depth"),
}

_ICE_CREAM_RE = re.compile(r"\b(ice\s*cream|ice cream)\b")
_TOXIC_RE = re.compile(r"\b(radioactive|poison|toxic)\b")
_MAGIC_RE = re.compile(r"\b(magic|dream|arcane)\b")
_CUTE_RE = re.compile(r"\b(cute|soft|fluffy)\b")
_HEX_RE = re.compile(r"^([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")


def hex_to_rgb(hex_color: str) -> Optional[tuple]:
    """Parse '#RRGGBB' into an (r, g, b) tuple, or None when malformed."""
    match = _HEX_RE.match(hex_color.lstrip("#"))
    if not match:
        return None
    return tuple(int(part, 16) for part in match.groups())


def is_gray_hex(hex_color: str, tolerance: int = GRAY_TOLERANCE) -> bool:
    """True when r, g and b are within tolerance of each other. Unparseable counts as gray."""
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return True
    return max(rgb) - min(rgb) <= tolerance


def ensure_not_grayscale_only(colors: List[str], seed: str) -> List[str]:
    """Replace an empty or all-gray palette with a fantasy palette."""
    if not colors:
        return list(FANTASY_PALETTES[0][:5])
    if not all(is_gray_hex(c) for c in colors):
        return colors
    palette = FANTASY_PALETTES[pick(seed + "nogray", len(FANTASY_PALETTES))]
    return list(palette[:max(3, len(colors))])


def _family_colors(aesthetic: AestheticProfile, family_palette, seed: str) -> List[str]:
    """Prefer the aesthetic palette; top up from the family palette to at least 3 colors."""
    colors = list(aesthetic.color_palette or family_palette)[:6]
    if len(colors) < 3:
        colors = (colors + list(family_palette))[:6]
    return ensure_not_grayscale_only(colors, seed)


def generate_palette(
    prompt: str,
    semantic_tags: List[str],
    aesthetic: AestheticProfile,
    seed: str,
) -> GeneratedPalette:
    """
    Generate a palette and motifs for one entity

    Args:
        prompt: Text describing the entity
        semantic_tags: Tags from aesthetic interpretation
        aesthetic: Aesthetic profile (its palette is preferred when present)
        seed: Seed string for deterministic picks

    Returns:
        GeneratedPalette with 3-6 colors
    """
    text = (prompt or "").lower().strip()
    tags = [t.lower() for t in semantic_tags]

    if _ICE_CREAM_RE.search(text) or ("food" in tags and "cold" in tags):
        family = PASTEL_PALETTES[pick(seed + "ice", len(PASTEL_PALETTES))]
        return GeneratedPalette(
            colors=_family_colors(aesthetic, family, seed),
            primary_motif="creamy swirled",
            secondary_motifs=["soft gradient", "gentle waves"],
            contrast_level=ContrastLevel.LOW,
            family="pastel",
        )

    if _TOXIC_RE.search(text) or "radioactive" in tags or ("dangerous" in tags and "food" in tags):
        family = SICKLY_PALETTES[pick(seed + "rad", len(SICKLY_PALETTES))]
        return GeneratedPalette(
            colors=_family_colors(aesthetic, family, seed),
            primary_motif=MOTIFS["sickly"][pick(seed + "m1", len(MOTIFS["sickly"]))],
            secondary_motifs=["radioactive speckles", "glowing veins"],
            contrast_level=ContrastLevel.HIGH,
            family="sickly",
        )

    if "magical" in tags or "strange" in tags or _MAGIC_RE.search(text):
        family = FANTASY_PALETTES[pick(seed + "mag", len(FANTASY_PALETTES))]
        return GeneratedPalette(
            colors=_family_colors(aesthetic, family, seed),
            primary_motif=MOTIFS["fantasy"][pick(seed + "m2", len(MOTIFS["fantasy"]))],
            secondary_motifs=["ethereal glow", "enchanted swirls"],
            contrast_level=ContrastLevel.MEDIUM,
            family="fantasy",
        )

    if "cute" in tags or _CUTE_RE.search(text):
        family = PASTEL_PALETTES[pick(seed + "cute", len(PASTEL_PALETTES))]
        return GeneratedPalette(
            colors=_family_colors(aesthetic, family, seed),
            primary_motif=MOTIFS["cute"][pick(seed + "m3", len(MOTIFS["cute"]))],
            secondary_motifs=["gentle curves", "soft dots"],
            contrast_level=ContrastLevel.LOW,
            family="cute",
        )

    if "dangerous" in tags:
        return GeneratedPalette(
            colors=_family_colors(aesthetic, DARK_PALETTE, seed),
            primary_motif="dark veins",
            secondary_motifs=["crackle", "shadow"],
            contrast_level=ContrastLevel.HIGH,
            family="dark",
        )

    if len(aesthetic.color_palette) >= 3:
        colors = ensure_not_grayscale_only(list(aesthetic.color_palette[:6]), seed)
        return GeneratedPalette(
            colors=colors,
            primary_motif=MOTIFS["default"][pick(seed, len(MOTIFS["default"]))],
            secondary_motifs=["natural noise", "subtle detail"],
            contrast_level=ContrastLevel.MEDIUM,
            family="aesthetic",
        )

    family = FANTASY_PALETTES[pick(seed + "fallback", len(FANTASY_PALETTES))]
    return GeneratedPalette(
        colors=list(family[:5]),
        primary_motif="arcane crystal fantasy",
        secondary_motifs=["ethereal glow", "magical veins"],
        contrast_level=ContrastLevel.MEDIUM,
        family="fallback",
    )


__all__ = [
    "FANTASY_PALETTES",
    "PASTEL_PALETTES",
    "SICKLY_PALETTES",
    "DARK_PALETTE",
    "MOTIFS",
    "hex_to_rgb",
    "is_gray_hex",
    "ensure_not_grayscale_only",
    "generate_palette",
]
