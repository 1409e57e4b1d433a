"""
Vanilla Visual Defaults - VisualKind classification and default references

Responsibilities:
- Classify an entity into a VisualKind from its id and name patterns only
- Map every VisualKind to a curated vanilla reference (or None when the kind
  does not apply to that category)
- Resolve the default model parent and texture reference for an entity

The two default maps are exhaustive over VisualKind; that is checked when this
module is imported, so a new kind cannot be added without updating both.
"""
import re
from enum import Enum
from typing import Dict, NamedTuple, Optional


class VisualKind(str, Enum):
    """Visual classification used to pick a default reference asset"""
    # Items
    INGOT = "ingot"
    NUGGET = "nugget"
    RAW_ORE = "raw_ore"
    GEM = "gem"
    DUST = "dust"
    ROD = "rod"
    PLATE = "plate"
    FOOD = "food"
    SIMPLE_ITEM = "simple_item"
    TOOL_SWORD = "tool_sword"
    TOOL_PICKAXE = "tool_pickaxe"
    TOOL_AXE = "tool_axe"
    TOOL_SHOVEL = "tool_shovel"
    TOOL_HOE = "tool_hoe"
    ARMOR_HELMET = "armor_helmet"
    ARMOR_CHESTPLATE = "armor_chestplate"
    ARMOR_LEGGINGS = "armor_leggings"
    ARMOR_BOOTS = "armor_boots"
    # Blocks
    GENERIC_BLOCK = "generic_block"
    ORE_BLOCK = "ore_block"
    METAL_BLOCK = "metal_block"
    LOG = "log"
    WOOD = "wood"
    PLANKS = "planks"
    LEAVES = "leaves"
    SAPLING = "sapling"
    STAIRS = "stairs"
    SLAB = "slab"
    FENCE = "fence"
    FENCE_GATE = "fence_gate"
    DOOR = "door"
    TRAPDOOR = "trapdoor"
    BUTTON = "button"
    PRESSURE_PLATE = "pressure_plate"
    SIGN = "sign"
    HANGING_SIGN = "hanging_sign"
    BOAT = "boat"
    CHEST_BOAT = "chest_boat"


class VisualDefault(NamedTuple):
    """Model parent plus the vanilla texture an entity resembles"""
    parent: str
    texture: str


GENERATED = "minecraft:item/generated"
HANDHELD = "minecraft:item/handheld"
CUBE_ALL = "minecraft:block/cube_all"


def _item(texture: str, parent: str = GENERATED) -> VisualDefault:
    return VisualDefault(parent, f"minecraft:item/{texture}")


def _block(texture: str, parent: str = CUBE_ALL) -> VisualDefault:
    return VisualDefault(parent, f"minecraft:block/{texture}")


VANILLA_ITEM_DEFAULTS: Dict[VisualKind, Optional[VisualDefault]] = {
    VisualKind.INGOT: _item("iron_ingot"),
    VisualKind.NUGGET: _item("iron_nugget"),
    VisualKind.RAW_ORE: _item("raw_iron"),
    VisualKind.GEM: _item("diamond"),
    VisualKind.DUST: _item("redstone"),
    VisualKind.ROD: _item("blaze_rod", HANDHELD),
    VisualKind.PLATE: _item("iron_ingot"),
    VisualKind.FOOD: _item("apple"),
    VisualKind.SIMPLE_ITEM: _item("iron_ingot"),
    VisualKind.TOOL_SWORD: _item("iron_sword", HANDHELD),
    VisualKind.TOOL_PICKAXE: _item("iron_pickaxe", HANDHELD),
    VisualKind.TOOL_AXE: _item("iron_axe", HANDHELD),
    VisualKind.TOOL_SHOVEL: _item("iron_shovel", HANDHELD),
    VisualKind.TOOL_HOE: _item("iron_hoe", HANDHELD),
    VisualKind.ARMOR_HELMET: _item("iron_helmet"),
    VisualKind.ARMOR_CHESTPLATE: _item("iron_chestplate"),
    VisualKind.ARMOR_LEGGINGS: _item("iron_leggings"),
    VisualKind.ARMOR_BOOTS: _item("iron_boots"),
    VisualKind.DOOR: _item("oak_door"),
    VisualKind.SIGN: _item("oak_sign"),
    VisualKind.HANGING_SIGN: _item("oak_hanging_sign"),
    VisualKind.BOAT: _item("oak_boat"),
    VisualKind.CHEST_BOAT: _item("oak_chest_boat"),
    VisualKind.GENERIC_BLOCK: None,
    VisualKind.ORE_BLOCK: None,
    VisualKind.METAL_BLOCK: None,
    VisualKind.LOG: None,
    VisualKind.WOOD: None,
    VisualKind.PLANKS: None,
    VisualKind.LEAVES: None,
    VisualKind.SAPLING: None,
    VisualKind.STAIRS: None,
    VisualKind.SLAB: None,
    VisualKind.FENCE: None,
    VisualKind.FENCE_GATE: None,
    VisualKind.TRAPDOOR: None,
    VisualKind.BUTTON: None,
    VisualKind.PRESSURE_PLATE: None,
}

VANILLA_BLOCK_DEFAULTS: Dict[VisualKind, Optional[VisualDefault]] = {
    VisualKind.GENERIC_BLOCK: _block("stone"),
    VisualKind.ORE_BLOCK: _block("iron_ore"),
    VisualKind.METAL_BLOCK: _block("iron_block"),
    VisualKind.LOG: _block("oak_log"),
    VisualKind.WOOD: _block("oak_wood"),
    VisualKind.PLANKS: _block("oak_planks"),
    VisualKind.LEAVES: _block("oak_leaves"),
    VisualKind.SAPLING: _block("oak_sapling"),
    VisualKind.STAIRS: _block("oak_stairs"),
    VisualKind.SLAB: _block("oak_slab"),
    VisualKind.FENCE: _block("oak_fence", "minecraft:block/fence_post"),
    VisualKind.FENCE_GATE: _block("oak_fence_gate", "minecraft:block/template_fence_gate"),
    VisualKind.DOOR: _block("oak_door_bottom", "minecraft:block/door_bottom_left"),
    VisualKind.TRAPDOOR: _block("oak_trapdoor_bottom", "minecraft:block/template_orientable_trapdoor_bottom"),
    VisualKind.BUTTON: _block("oak_planks", "minecraft:block/button_inventory"),
    VisualKind.PRESSURE_PLATE: _block("oak_planks", "minecraft:block/pressure_plate_up"),
    VisualKind.SIGN: _block("oak_sign"),
    VisualKind.HANGING_SIGN: _block("oak_hanging_sign"),
    VisualKind.INGOT: None,
    VisualKind.NUGGET: None,
    VisualKind.RAW_ORE: None,
    VisualKind.GEM: None,
    VisualKind.DUST: None,
    VisualKind.ROD: None,
    VisualKind.PLATE: None,
    VisualKind.FOOD: None,
    VisualKind.SIMPLE_ITEM: None,
    VisualKind.TOOL_SWORD: None,
    VisualKind.TOOL_PICKAXE: None,
    VisualKind.TOOL_AXE: None,
    VisualKind.TOOL_SHOVEL: None,
    VisualKind.TOOL_HOE: None,
    VisualKind.ARMOR_HELMET: None,
    VisualKind.ARMOR_CHESTPLATE: None,
    VisualKind.ARMOR_LEGGINGS: None,
    VisualKind.ARMOR_BOOTS: None,
    VisualKind.BOAT: None,
    VisualKind.CHEST_BOAT: None,
}


def _check_exhaustive(table: Dict[VisualKind, Optional[VisualDefault]], name: str) -> None:
    missing = [kind.value for kind in VisualKind if kind not in table]
    if missing:
        raise RuntimeError(f"{name} is missing visual kinds: {missing}")


_check_exhaustive(VANILLA_ITEM_DEFAULTS, "VANILLA_ITEM_DEFAULTS")
_check_exhaustive(VANILLA_BLOCK_DEFAULTS, "VANILLA_BLOCK_DEFAULTS")


def _rule(id_pattern: str, name_pattern: Optional[str] = None):
    id_re = re.compile(id_pattern)
    name_re = re.compile(name_pattern) if name_pattern else None

    def matches(content_id: str, name: str) -> bool:
        return bool(id_re.search(content_id) or (name_re and name_re.search(name)))

    return matches


def _but_not(rule, excluded: str):
    excluded_re = re.compile(excluded)

    def matches(content_id: str, name: str) -> bool:
        return rule(content_id, name) and not excluded_re.search(content_id)

    return matches


def _metal_block(content_id: str, name: str) -> bool:
    if not re.search(r"(^block|_block)$", content_id):
        return False
    return bool(re.search(r"metal|ingot", content_id) or content_id.endswith("_block") or "block" in name)


# Ordered; first match wins
BLOCK_RULES = (
    (_rule(r"(^log|_log)$", r"\blog\b"), VisualKind.LOG),
    (_but_not(_rule(r"_wood$"), r"stripped"), VisualKind.WOOD),
    (_rule(r"_planks$"), VisualKind.PLANKS),
    (_rule(r"_leaves$"), VisualKind.LEAVES),
    (_rule(r"_sapling$"), VisualKind.SAPLING),
    (_rule(r"_stairs$"), VisualKind.STAIRS),
    (_rule(r"_slab$"), VisualKind.SLAB),
    (_but_not(_rule(r"_fence$"), r"gate"), VisualKind.FENCE),
    (_rule(r"_fence_gate$"), VisualKind.FENCE_GATE),
    (_but_not(_rule(r"_door$"), r"trapdoor"), VisualKind.DOOR),
    (_rule(r"_trapdoor$"), VisualKind.TRAPDOOR),
    (_rule(r"_button$"), VisualKind.BUTTON),
    (_rule(r"_pressure_plate$"), VisualKind.PRESSURE_PLATE),
    (_but_not(_rule(r"_sign$"), r"hanging"), VisualKind.SIGN),
    (_rule(r"_hanging_sign$"), VisualKind.HANGING_SIGN),
    (_rule(r"(^|_)ore($|_)"), VisualKind.ORE_BLOCK),
    (_metal_block, VisualKind.METAL_BLOCK),
)

ITEM_RULES = (
    (_rule(r"ingot"), VisualKind.INGOT),
    (_rule(r"nugget"), VisualKind.NUGGET),
    (_rule(r"^raw_"), VisualKind.RAW_ORE),
    (_rule(r"gem|shard"), VisualKind.GEM),
    (_rule(r"dust|powder"), VisualKind.DUST),
    (_rule(r"(^|_)rod($|_)"), VisualKind.ROD),
    (_but_not(_rule(r"plate$"), r"pressure|chestplate"), VisualKind.PLATE),
    (_rule(r"sword"), VisualKind.TOOL_SWORD),
    (_rule(r"pickaxe"), VisualKind.TOOL_PICKAXE),
    (_rule(r"(^|_)axe$"), VisualKind.TOOL_AXE),
    (_rule(r"shovel"), VisualKind.TOOL_SHOVEL),
    (_rule(r"(^|_)hoe$"), VisualKind.TOOL_HOE),
    (_rule(r"helmet"), VisualKind.ARMOR_HELMET),
    (_rule(r"chestplate"), VisualKind.ARMOR_CHESTPLATE),
    (_rule(r"leggings"), VisualKind.ARMOR_LEGGINGS),
    (_rule(r"boots"), VisualKind.ARMOR_BOOTS),
    (_but_not(_rule(r"_boat$"), r"chest_boat"), VisualKind.BOAT),
    (_rule(r"_chest_boat$"), VisualKind.CHEST_BOAT),
    (_but_not(_rule(r"_sign$"), r"hanging"), VisualKind.SIGN),
    (_rule(r"_hanging_sign$"), VisualKind.HANGING_SIGN),
    (_but_not(_rule(r"_door$"), r"trapdoor"), VisualKind.DOOR),
    (_rule(r"food", r"\b(edible|eat)\b"), VisualKind.FOOD),
)


def classify_visual_kind(content_id: str, name: str = "", is_block: bool = False) -> VisualKind:
    """
    Classify an entity by id and name suffix patterns

    Args:
        content_id: Entity id
        name: Display name
        is_block: Classify against the block rules

    Returns:
        VisualKind (SIMPLE_ITEM / GENERIC_BLOCK when nothing matches)
    """
    content_id = content_id.lower()
    name = (name or "").lower()
    rules = BLOCK_RULES if is_block else ITEM_RULES
    for matches, kind in rules:
        if matches(content_id, name):
            return kind
    return VisualKind.GENERIC_BLOCK if is_block else VisualKind.SIMPLE_ITEM


def resolve_visual_default(content_id: str, name: str = "", is_block: bool = False) -> VisualDefault:
    """
    Default parent and texture reference for an entity

    A kind that has no default in the requested category falls back to the
    category's generic default, so every entity resolves.
    """
    kind = classify_visual_kind(content_id, name, is_block)
    table = VANILLA_BLOCK_DEFAULTS if is_block else VANILLA_ITEM_DEFAULTS
    fallback = VisualKind.GENERIC_BLOCK if is_block else VisualKind.SIMPLE_ITEM
    return table[kind] or table[fallback]


__all__ = [
    "VisualKind",
    "VisualDefault",
    "VANILLA_ITEM_DEFAULTS",
    "VANILLA_BLOCK_DEFAULTS",
    "classify_visual_kind",
    "resolve_visual_default",
]
