"""
Aesthetic Decomposition - keyword rules from text to semantic tags + aesthetic profile

Responsibilities:
- Map an entity's text to semantic tags (food, cold, magical, metallic, ...)
- Build the AestheticProfile (material hint, palette, glow, animation, overlays)
- Substitute the evocative magical default when nothing meaningful matched

Any text produces a populated result; nothing here raises for user input.
"""
import re
from typing import List, Optional

from modsmith.schemas import AestheticProfile, AnimationHint, InterpretedAesthetics

BLOCK_WORDS = re.compile(r"\b(brick|block|dirt|stone|ore|wall|slab|stairs|pillar|plank|log|sand|gravel|concrete)\b")
BLOCK_NATURE_WORDS = re.compile(r"\b(grass|leaves|mushroom|flower)\s*(block)?\b")
FOOD_WORDS = re.compile(r"\b(ice\s*cream|cream|cheese|food|eat|edible|consumable|fruit|vegetable|meat|sweet|candy|chocolate)\b")
FOOD_NOUNS = re.compile(r"\b(apple|bread|pie|cake|cookie|mushroom)\b")
ICE_CREAM = re.compile(r"\b(ice\s*cream)\b")
COLD_WORDS = re.compile(r"\b(ice|cold|frost|snow|freeze|frozen)\b")
HOT_WORDS = re.compile(r"\b(fire|flame|hot|lava|burn|blaze)\b")
RADIOACTIVE_WORDS = re.compile(r"\b(radioactive|poison|toxic)\b")
DANGER_WORDS = re.compile(r"\b(curse|cursed|dangerous|deadly)\b")
MAGIC_WORDS = re.compile(r"\b(magic|magical|glow|glowing|dream|enchanted|arcane|mystic|feels?\s+magical)\b")
BLUE_WORDS = re.compile(r"\b(blue|azure|cyan)\b")
CUTE_WORDS = re.compile(r"\b(cute|soft|fluffy|plush|sweet|thing that feels)\b")
GOLD_WORDS = re.compile(r"\b(gold|golden|gilded)\b")
METAL_WORDS = re.compile(r"\b(metal|metallic|sword|weapon|tool|armor|ingot|nugget|spoon|fork|knife)\b")
WEAPON_WORDS = re.compile(r"\b(sword|weapon|blade)\b")
TOOL_WORDS = re.compile(r"\b(tool|pick|axe|shovel|spoon|fork|knife)\b")
ORGANIC_WORDS = re.compile(r"\b(wood|wooden|organic|plant|leaf|vine)\b")
MINERAL_WORDS = re.compile(r"\b(stone|rock|gem|ruby|sapphire|diamond)\b")
STONE_WORDS = re.compile(r"\b(stone|rock|brick)\b")
GEM_WORDS = re.compile(r"\b(gem|ruby|sapphire|diamond|emerald)\b")
WET_WORDS = re.compile(r"\b(water|wet|ocean|slime)\b")
DRY_WORDS = re.compile(r"\b(dry|sand|desert)\b")
SLIME_WORD = re.compile(r"\bslime\b")

ICE_CREAM_PALETTE = ["#FFF5EE", "#FFE4E1", "#DEB887", "#F5DEB3"]
COLD_PALETTE = ["#B0E0E6", "#87CEEB", "#ADD8E6", "#E0FFFF"]
HOT_PALETTE = ["#FF4500", "#FF6347", "#FFA500", "#FFFF00"]
RADIOACTIVE_PALETTE = ["#9ACD32", "#ADFF2F", "#7CFC00", "#556B2F"]
CURSED_PALETTE = ["#32CD32", "#ADFF2F", "#7CFC00", "#00FF00"]
MAGIC_PALETTE = ["#9370DB", "#8A2BE2", "#DA70D6", "#EE82EE"]
BLUE_PALETTE = ["#4169E1", "#1E90FF", "#00BFFF", "#87CEEB"]
CUTE_PALETTE = ["#FFB6C1", "#FFC0CB", "#FFE4E1"]
GOLD_PALETTE = ["#FFD700", "#DAA520", "#B8860B", "#D4AF37"]
METAL_PALETTE = ["#C0C0C0", "#A8A8A8", "#808080"]
WOOD_PALETTE = ["#8B7355", "#6B5344", "#4A3728"]
GEM_PALETTE = ["#DC143C", "#4169E1", "#2E8B57", "#50C878"]
EVOCATIVE_PALETTE = ["#9370DB", "#8A2BE2", "#DA70D6", "#4B0082"]
EARTH_PALETTE = ["#8B7355", "#6B5344", "#4A3728", "#3D2E24"]

EVOCATIVE_TAGS = ["magical", "organic", "strange"]
DEFAULT_TAGS = ["organic", "placeable"]
# Tags that do not count as a meaningful match on their own
STRUCTURAL_TAGS = frozenset({"organic", "placeable", "block"})


class _Decomposition:
    """Mutable working state for one decomposition pass."""

    def __init__(self):
        self.tags: List[str] = []
        self.material_hint = "organic"
        self.palette: List[str] = []
        self.overlays: List[str] = []
        self.glow = False
        self.animation: Optional[AnimationHint] = None
        self.kind = "item"

    def tag(self, *tags: str):
        for tag in tags:
            if tag not in self.tags:
                self.tags.append(tag)

    def palette_if_empty(self, colors: List[str]):
        if not self.palette:
            self.palette.extend(colors)


def interpret_aesthetics(text: str) -> InterpretedAesthetics:
    """
    Decompose text into semantic tags and an aesthetic profile

    Rules run in a fixed order; later rules may refine material or replace the
    palette (gold always wins the palette). When no meaningful tag matched an
    item, the evocative magical default is used and flagged.

    Args:
        text: Entity name plus description, or the whole prompt

    Returns:
        InterpretedAesthetics
    """
    source = (text or "").strip() or "mystery item"
    lower = source.lower()
    d = _Decomposition()

    if BLOCK_WORDS.search(lower) or BLOCK_NATURE_WORDS.search(lower):
        d.kind = "block"
        d.tag("block", "placeable")

    if FOOD_WORDS.search(lower) or FOOD_NOUNS.search(lower):
        d.tag("food", "edible", "consumable")

    if ICE_CREAM.search(lower):
        d.tag("cold")
        d.material_hint = "ice"
        d.animation = AnimationHint.DRIP
        d.palette_if_empty(ICE_CREAM_PALETTE)

    if COLD_WORDS.search(lower) and d.animation is None:
        d.tag("cold")
        if d.material_hint == "organic":
            d.material_hint = "ice"
        d.palette_if_empty(COLD_PALETTE)

    if HOT_WORDS.search(lower):
        d.tag("hot")
        d.material_hint = "energy"
        d.palette.extend(HOT_PALETTE)
        d.glow = True

    if RADIOACTIVE_WORDS.search(lower):
        d.tag("dangerous", "radioactive")
        d.glow = True
        d.overlays.append("radioactive_speckles")
        d.palette_if_empty(RADIOACTIVE_PALETTE)
        if d.material_hint == "organic":
            d.material_hint = "energy"

    if DANGER_WORDS.search(lower):
        d.tag("dangerous")
        d.glow = True
        d.palette_if_empty(CURSED_PALETTE)
        if d.material_hint == "organic":
            d.material_hint = "energy"

    if MAGIC_WORDS.search(lower):
        d.tag("magical")
        d.glow = True
        if d.animation is None:
            d.animation = AnimationHint.PULSE
        d.palette_if_empty(MAGIC_PALETTE)
        d.material_hint = "crystal"

    if BLUE_WORDS.search(lower):
        d.palette_if_empty(BLUE_PALETTE)
        if d.material_hint == "organic":
            d.material_hint = "crystal"

    if CUTE_WORDS.search(lower):
        d.tag("cute")
        d.palette_if_empty(CUTE_PALETTE)

    if GOLD_WORDS.search(lower):
        d.palette = list(GOLD_PALETTE)
        if d.material_hint == "organic":
            d.material_hint = "metal"

    if METAL_WORDS.search(lower):
        d.tag("metallic")
        if WEAPON_WORDS.search(lower):
            d.tag("weapon")
        if TOOL_WORDS.search(lower):
            d.tag("tool")
        if d.material_hint == "organic":
            d.material_hint = "metal"
        d.palette_if_empty(METAL_PALETTE)

    if ORGANIC_WORDS.search(lower):
        d.tag("organic")
        if d.material_hint in ("organic", "ice"):
            d.material_hint = "wood"
        d.palette_if_empty(WOOD_PALETTE)

    if MINERAL_WORDS.search(lower):
        if STONE_WORDS.search(lower):
            d.tag("stone")
        if "metallic" not in d.tags:
            d.tag("organic")
        if GEM_WORDS.search(lower):
            d.material_hint = "gem"
            d.glow = True
            d.palette.extend(GEM_PALETTE)
        elif d.material_hint == "organic":
            d.material_hint = "stone"

    if WET_WORDS.search(lower):
        d.tag("wet")
        if SLIME_WORD.search(lower):
            d.material_hint = "slime"
    if DRY_WORDS.search(lower):
        d.tag("dry")

    fallback = False
    meaningful = any(t not in STRUCTURAL_TAGS for t in d.tags)
    if d.kind == "item" and not meaningful:
        fallback = True
        d.tags = list(EVOCATIVE_TAGS)
        d.material_hint = "crystal"
        d.palette = list(EVOCATIVE_PALETTE)
        d.glow = True
        d.animation = AnimationHint.PULSE

    if not d.palette:
        d.palette = list(EARTH_PALETTE)
    if d.material_hint == "organic" and d.kind == "block":
        d.material_hint = "stone"

    return InterpretedAesthetics(
        text=source,
        kind=d.kind,
        semantic_tags=d.tags or list(DEFAULT_TAGS),
        aesthetic=AestheticProfile(
            material_hint=d.material_hint,
            color_palette=d.palette,
            glow=d.glow,
            animation_hint=d.animation,
            overlay_hints=d.overlays,
        ),
        fallback=fallback,
    )


__all__ = ["interpret_aesthetics"]
