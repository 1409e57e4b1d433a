"""
Spec Expander - Content Specification -> Expanded Specification

Responsibilities:
- Expand each wood type into its fixed 17-member family
- Derive the family's vanilla-equivalent recipes
- Derive drop-self loot tables for every block (slabs drop by state)
- Derive additive tag contributions for shared minecraft tags
- Derive one visual descriptor per expanded entity
- List every item form in a creative tab so nothing is unobtainable

Expansion is a pure function of the Content Specification: the same spec
always yields the same items, blocks, recipes and descriptors in the same order.
"""
import logging
from typing import Dict, List, NamedTuple, Optional

from modsmith.schemas import (
    ContentSpec,
    CreativeTab,
    CreativeTabEntry,
    EntityCategory,
    ExpandedSpec,
    LootTable,
    ModBlock,
    ModItem,
    ModRecipe,
    RecipeIngredient,
    RecipeResult,
    RecipeType,
    TagContribution,
    TagRegistry,
    VisualDescriptor,
    VisualShape,
    WoodType,
)

logger = logging.getLogger(__name__)


class ExpansionError(Exception):
    """Raised when a derived entity violates an expansion invariant"""
    pass


class WoodMember(NamedTuple):
    suffix: str
    display_suffix: str
    is_block: bool
    shape: VisualShape
    uses_planks_texture: bool = False


WOOD_FAMILY: List[WoodMember] = [
    WoodMember("_log", " Log", True, VisualShape.PILLAR),
    WoodMember("_stripped_log", " Stripped Log", True, VisualShape.PILLAR),
    WoodMember("_wood", " Wood", True, VisualShape.PILLAR),
    WoodMember("_stripped_wood", " Stripped Wood", True, VisualShape.PILLAR),
    WoodMember("_planks", " Planks", True, VisualShape.PLANKS),
    WoodMember("_stairs", " Stairs", True, VisualShape.STAIRS, True),
    WoodMember("_slab", " Slab", True, VisualShape.SLAB, True),
    WoodMember("_fence", " Fence", True, VisualShape.FENCE, True),
    WoodMember("_fence_gate", " Fence Gate", True, VisualShape.FENCE_GATE, True),
    WoodMember("_door", " Door", True, VisualShape.DOOR),
    WoodMember("_trapdoor", " Trapdoor", True, VisualShape.TRAPDOOR),
    WoodMember("_pressure_plate", " Pressure Plate", True, VisualShape.PRESSURE_PLATE, True),
    WoodMember("_button", " Button", True, VisualShape.BUTTON, True),
    WoodMember("_sign", " Sign", True, VisualShape.SIGN, True),
    WoodMember("_hanging_sign", " Hanging Sign", True, VisualShape.HANGING_SIGN, True),
    WoodMember("_boat", " Boat", False, VisualShape.FLAT_ITEM),
    WoodMember("_chest_boat", " Chest Boat", False, VisualShape.FLAT_ITEM),
]

WOOD_BLOCK_SUFFIXES = tuple(m.suffix for m in WOOD_FAMILY if m.is_block)
LOG_SUFFIXES = ("_log", "_stripped_log", "_wood", "_stripped_wood")
SIGN_SUFFIXES = ("_sign", "_hanging_sign")
BOAT_SUFFIXES = ("_boat", "_chest_boat")

STICK = "minecraft:stick"
WOODEN_TOOL_RESULTS = (
    "minecraft:wooden_sword",
    "minecraft:wooden_pickaxe",
    "minecraft:wooden_axe",
    "minecraft:wooden_shovel",
    "minecraft:wooden_hoe",
)


def wood_member_ids(wood_id: str, blocks_only: bool = False) -> List[str]:
    return [f"{wood_id}{m.suffix}" for m in WOOD_FAMILY if m.is_block or not blocks_only]


def wood_member_for(content_id: str, wood_ids: List[str]) -> Optional[tuple]:
    """(wood_id, member) for a wood family id, or None."""
    for wood_id in wood_ids:
        for member in WOOD_FAMILY:
            if content_id == f"{wood_id}{member.suffix}":
                return wood_id, member
    return None


def expand_wood_type(wood: WoodType):
    """
    Expand one wood type into its family

    Returns:
        (items, blocks) in family order; the 15 block members appear in both
    """
    items: List[ModItem] = []
    blocks: List[ModBlock] = []
    for member in WOOD_FAMILY:
        content_id = f"{wood.id}{member.suffix}"
        name = f"{wood.display_name}{member.display_suffix}"
        if member.is_block:
            blocks.append(ModBlock(id=content_id, name=name))
        items.append(ModItem(id=content_id, name=name))
    return items, blocks


def _shaped(recipe_id: str, pattern: List[str], key: Dict[str, str], result: str, count: int = 1) -> ModRecipe:
    return ModRecipe(
        id=recipe_id,
        type=RecipeType.CRAFTING_SHAPED,
        pattern=pattern,
        key=key,
        result=RecipeResult(id=result, count=count),
    )


def _shapeless(recipe_id: str, ingredients: List[RecipeIngredient], result: str, count: int = 1) -> ModRecipe:
    return ModRecipe(
        id=recipe_id,
        type=RecipeType.CRAFTING_SHAPELESS,
        ingredients=ingredients,
        result=RecipeResult(id=result, count=count),
    )


def wood_recipes(wood: WoodType, forbid_tools_weapons: bool = False) -> List[ModRecipe]:
    """
    Vanilla-equivalent recipes for one wood type, in fixed order

    Recipes use this family's planks directly rather than the shared planks tag.
    """
    w = wood.id
    planks = f"{w}_planks"
    p = {"#": planks}
    ps = {"#": planks, "-": STICK}

    recipes = [
        _shapeless(f"{w}_planks_from_log", [RecipeIngredient(id=f"{w}_log")], planks, 4),
        _shapeless(f"sticks_from_{w}_planks", [RecipeIngredient(id=planks, count=2)], STICK, 4),
        _shaped(f"crafting_table_from_{w}_planks", ["##", "##"], p, "minecraft:crafting_table"),
        _shaped(f"chest_from_{w}_planks", ["###", "# #", "###"], p, "minecraft:chest"),
        _shaped(f"{w}_stairs", ["#  ", "## ", "###"], p, f"{w}_stairs", 4),
        _shaped(f"{w}_slab", ["###"], p, f"{w}_slab", 6),
        _shaped(f"{w}_fence", ["#/#", "#/#"], {"#": planks, "/": STICK}, f"{w}_fence", 3),
        _shaped(f"{w}_fence_gate", ["/#/", "#/#"], {"#": planks, "/": STICK}, f"{w}_fence_gate"),
        _shaped(f"{w}_door", ["##", "##", "##"], p, f"{w}_door", 3),
        _shaped(f"{w}_trapdoor", ["###", "###"], p, f"{w}_trapdoor", 2),
        _shapeless(f"{w}_button", [RecipeIngredient(id=planks)], f"{w}_button"),
        _shaped(f"{w}_pressure_plate", ["##"], p, f"{w}_pressure_plate"),
        _shaped(f"{w}_sign", ["###", "###", " - "], ps, f"{w}_sign", 3),
        _shaped(f"{w}_hanging_sign", ["A A", "BBB", "BBB"],
                {"A": "minecraft:chain", "B": f"{w}_stripped_log"}, f"{w}_hanging_sign", 6),
        _shaped(f"{w}_boat", ["# #", "###"], p, f"{w}_boat"),
        _shapeless(f"{w}_chest_boat", [RecipeIngredient(id=f"{w}_boat"), RecipeIngredient(id="minecraft:chest")],
                   f"{w}_chest_boat"),
    ]

    if not forbid_tools_weapons:
        recipes.extend([
            _shaped(f"wooden_sword_from_{w}_planks", [" # ", " # ", " - "], ps, WOODEN_TOOL_RESULTS[0]),
            _shaped(f"wooden_pickaxe_from_{w}_planks", ["###", " - ", " - "], ps, WOODEN_TOOL_RESULTS[1]),
            _shaped(f"wooden_axe_from_{w}_planks", ["##", "#-", " -"], ps, WOODEN_TOOL_RESULTS[2]),
            _shaped(f"wooden_shovel_from_{w}_planks", [" # ", " - ", " - "], ps, WOODEN_TOOL_RESULTS[3]),
            _shaped(f"wooden_hoe_from_{w}_planks", ["##", " -", " -"], ps, WOODEN_TOOL_RESULTS[4]),
        ])

    recipes.extend([
        _shaped(f"barrel_from_{w}_planks", ["#-#", "# #", "#-#"], ps, "minecraft:barrel"),
        _shaped(f"bowl_from_{w}_planks", ["# #", " # "], p, "minecraft:bowl", 4),
        _shaped(f"shield_from_{w}_planks", ["#-#", "###", " - "],
                {"#": planks, "-": "minecraft:iron_ingot"}, "minecraft:shield"),
    ])
    return recipes


def _survives_explosion() -> dict:
    return {"condition": "minecraft:survives_explosion"}


def drop_self_loot_table(mod_id: str, block_id: str) -> dict:
    return {
        "type": "minecraft:block",
        "pools": [
            {
                "rolls": 1,
                "entries": [
                    {
                        "type": "minecraft:item",
                        "name": f"{mod_id}:{block_id}",
                        "conditions": [_survives_explosion()],
                    }
                ],
            }
        ],
    }


def slab_loot_table(mod_id: str, block_id: str) -> dict:
    """Slab drops 1 for a single slab (bottom or top) and 2 for a double slab."""
    ref = f"{mod_id}:{block_id}"

    def entry(slab_type: str) -> dict:
        return {
            "type": "minecraft:item",
            "name": ref,
            "conditions": [
                {
                    "condition": "minecraft:block_state_property",
                    "block": ref,
                    "properties": {"type": slab_type},
                },
                _survives_explosion(),
            ],
        }

    double = entry("double")
    double["functions"] = [{"function": "minecraft:set_count", "count": 2}]
    return {
        "type": "minecraft:block",
        "pools": [{"rolls": 1, "entries": [entry("bottom"), entry("top"), double]}],
    }


def _tag(registry: TagRegistry, tag: str, values) -> TagContribution:
    return TagContribution(registry=registry, tag=tag, values=sorted(set(values)))


class SpecExpander:
    """
    Spec Expander - derives families, recipes, loot, tags and descriptors

    Keeps no state between calls.
    """

    def expand(self, spec: ContentSpec) -> ExpandedSpec:
        """
        Expand a Content Specification

        Args:
            spec: Validated Content Specification

        Returns:
            ExpandedSpec with derived entities appended after declared ones

        Raises:
            ExpansionError: If a derived recipe references an unknown mod id
        """
        constraints = spec.constraints
        wood_ids = [w.id for w in spec.wood_types]

        items: List[ModItem] = list(spec.items)
        blocks: List[ModBlock] = list(spec.blocks)
        seen_items = {item.id for item in items}
        seen_blocks = {block.id for block in blocks}

        for wood in spec.wood_types:
            wood_items, wood_blocks = expand_wood_type(wood)
            for item in wood_items:
                if item.id not in seen_items:
                    seen_items.add(item.id)
                    items.append(item)
            for block in wood_blocks:
                if block.id not in seen_blocks:
                    seen_blocks.add(block.id)
                    blocks.append(block)

        recipes: List[ModRecipe] = []
        if not constraints.no_recipes:
            recipes.extend(spec.recipes)
            for wood in spec.wood_types:
                recipes.extend(wood_recipes(wood, constraints.forbid_tools_weapons))
        self._check_recipe_references(recipes, seen_items | seen_blocks)

        loot_tables = [self._loot_table(spec.mod_id, block.id, wood_ids) for block in blocks]
        tags = self._tags(spec, blocks, items, wood_ids)
        descriptors = self._descriptors(items, blocks, wood_ids)
        creative_tab_entries = self._creative_tab_entries(items, blocks, wood_ids)

        logger.info(
            f"[Expander] ✓ {len(items)} items, {len(blocks)} blocks, {len(recipes)} recipes "
            f"from {len(spec.wood_types)} wood type(s)"
        )

        return ExpandedSpec(
            spec=spec,
            items=items,
            blocks=blocks,
            recipes=recipes,
            loot_tables=loot_tables,
            tags=tags,
            descriptors=descriptors,
            creative_tab_entries=creative_tab_entries,
        )

    @staticmethod
    def _check_recipe_references(recipes: List[ModRecipe], known_ids: set) -> None:
        for recipe in recipes:
            for ref in recipe.ingredient_ids() + [recipe.result.id]:
                if ":" not in ref and ref not in known_ids:
                    raise ExpansionError(f"Recipe '{recipe.id}' references unknown id '{ref}'")

    @staticmethod
    def _loot_table(mod_id: str, block_id: str, wood_ids: List[str]) -> LootTable:
        found = wood_member_for(block_id, wood_ids)
        if found and found[1].suffix == "_slab":
            return LootTable(block_id=block_id, table=slab_loot_table(mod_id, block_id))
        return LootTable(block_id=block_id, table=drop_self_loot_table(mod_id, block_id))

    @staticmethod
    def _tags(spec: ContentSpec, blocks: List[ModBlock], items: List[ModItem],
              wood_ids: List[str]) -> List[TagContribution]:
        if not wood_ids and not spec.constraints.require_pickaxe_mining:
            return []

        mod_id = spec.mod_id
        planks_items, planks_blocks, log_items, log_blocks, axe = [], [], [], [], []

        for block in blocks:
            found = wood_member_for(block.id, wood_ids)
            if not found:
                continue
            ref = f"{mod_id}:{block.id}"
            suffix = found[1].suffix
            if suffix == "_planks":
                planks_blocks.append(ref)
            if suffix in LOG_SUFFIXES:
                log_blocks.append(ref)
            axe.append(ref)

        for item in items:
            found = wood_member_for(item.id, wood_ids)
            if not found:
                continue
            suffix = found[1].suffix
            if suffix == "_planks":
                planks_items.append(f"{mod_id}:{item.id}")
            if suffix in LOG_SUFFIXES:
                log_items.append(f"{mod_id}:{item.id}")

        tags = []
        for registry, tag, values in (
            (TagRegistry.ITEMS, "planks", planks_items),
            (TagRegistry.BLOCKS, "planks", planks_blocks),
            (TagRegistry.ITEMS, "logs", log_items),
            (TagRegistry.BLOCKS, "logs", log_blocks),
            (TagRegistry.BLOCKS, "logs_that_burn", log_blocks),
            (TagRegistry.BLOCKS, "mineable/axe", axe),
        ):
            if values:
                tags.append(_tag(registry, tag, values))

        if spec.constraints.require_pickaxe_mining and spec.blocks:
            tags.append(_tag(TagRegistry.BLOCKS, "mineable/pickaxe",
                             [f"{mod_id}:{block.id}" for block in spec.blocks]))
        return tags

    @staticmethod
    def _descriptors(items: List[ModItem], blocks: List[ModBlock], wood_ids: List[str]) -> List[VisualDescriptor]:
        descriptors: List[VisualDescriptor] = []

        for item in items:
            found = wood_member_for(item.id, wood_ids)
            if found and found[1].is_block:
                wood_id, member = found
                texture = f"{wood_id}_planks" if member.uses_planks_texture else item.id
                descriptors.append(VisualDescriptor(
                    content_id=item.id, category=EntityCategory.ITEM, shape=VisualShape.BLOCK_ITEM,
                    texture_id=texture, wood_type=wood_id,
                ))
            else:
                descriptors.append(VisualDescriptor(
                    content_id=item.id, category=EntityCategory.ITEM, shape=VisualShape.FLAT_ITEM,
                    texture_id=item.id, wood_type=found[0] if found else None,
                ))

        for block in blocks:
            found = wood_member_for(block.id, wood_ids)
            if found:
                wood_id, member = found
                texture = f"{wood_id}_planks" if member.uses_planks_texture else block.id
                descriptors.append(VisualDescriptor(
                    content_id=block.id, category=EntityCategory.BLOCK, shape=member.shape,
                    texture_id=texture, wood_type=wood_id,
                ))
            else:
                descriptors.append(VisualDescriptor(
                    content_id=block.id, category=EntityCategory.BLOCK, shape=VisualShape.CUBE,
                    texture_id=block.id,
                ))

        return descriptors

    @staticmethod
    def _creative_tab_entries(items: List[ModItem], blocks: List[ModBlock],
                              wood_ids: List[str]) -> List[CreativeTabEntry]:
        entries: List[CreativeTabEntry] = []
        block_ids = {block.id for block in blocks}

        for item in items:
            if item.id in block_ids:
                continue
            found = wood_member_for(item.id, wood_ids)
            tab = CreativeTab.TOOLS if found and found[1].suffix in BOAT_SUFFIXES else CreativeTab.INGREDIENTS
            entries.append(CreativeTabEntry(content_id=item.id, category=EntityCategory.ITEM, tab=tab))

        for block in blocks:
            found = wood_member_for(block.id, wood_ids)
            tab = CreativeTab.FUNCTIONAL if found and found[1].suffix in SIGN_SUFFIXES else CreativeTab.BUILDING_BLOCKS
            entries.append(CreativeTabEntry(content_id=block.id, category=EntityCategory.BLOCK, tab=tab))

        return entries


__all__ = [
    "SpecExpander",
    "ExpansionError",
    "WoodMember",
    "WOOD_FAMILY",
    "WOOD_BLOCK_SUFFIXES",
    "LOG_SUFFIXES",
    "wood_member_ids",
    "wood_member_for",
    "expand_wood_type",
    "wood_recipes",
    "drop_self_loot_table",
    "slab_loot_table",
]
