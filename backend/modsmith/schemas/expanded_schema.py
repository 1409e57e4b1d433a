"""
Expanded Schema - Content Specification plus derived entities

The Spec Expander turns shorthand declarations (wood types) into the full set
of dependent items, blocks, recipes, loot tables, tags and visual descriptors.
Ordering is stable: items then blocks, insertion order within each.
"""
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field, ConfigDict
from enum import Enum

from .spec_schema import ContentSpec, ModItem, ModBlock, ModRecipe


class EntityCategory(str, Enum):
    """Registry namespace of an entity"""
    ITEM = "item"
    BLOCK = "block"


class VisualShape(str, Enum):
    """Model/blockstate shape used by the materializer"""
    CUBE = "cube"
    PILLAR = "pillar"
    PLANKS = "planks"
    STAIRS = "stairs"
    SLAB = "slab"
    FENCE = "fence"
    FENCE_GATE = "fence_gate"
    DOOR = "door"
    TRAPDOOR = "trapdoor"
    PRESSURE_PLATE = "pressure_plate"
    BUTTON = "button"
    SIGN = "sign"
    HANGING_SIGN = "hanging_sign"
    FLAT_ITEM = "flat_item"
    BLOCK_ITEM = "block_item"


class TagRegistry(str, Enum):
    """Tag folders under data/<namespace>/tags/"""
    ITEMS = "items"
    BLOCKS = "blocks"


class CreativeTab(str, Enum):
    """Vanilla creative inventory tab an item is listed under"""
    BUILDING_BLOCKS = "building_blocks"
    FUNCTIONAL = "functional"
    TOOLS = "tools"
    INGREDIENTS = "ingredients"

    @property
    def java_constant(self) -> str:
        return f"ItemGroups.{self.value.upper()}"


class VisualDescriptor(BaseModel):
    """How one entity in one category is drawn"""
    content_id: str
    category: EntityCategory
    shape: VisualShape
    texture_id: str = Field(..., description="Id of the texture this entity samples (may be the planks texture)")
    wood_type: Optional[str] = Field(None, description="Wood type id when derived from a wood family")

    model_config = ConfigDict(frozen=True)

    @property
    def owns_texture(self) -> bool:
        """True when this descriptor needs its own texture file."""
        return self.texture_id == self.content_id and self.shape != VisualShape.BLOCK_ITEM


class LootTable(BaseModel):
    """Block loot table, keyed by block id"""
    block_id: str
    table: Dict[str, Any] = Field(..., description="Exact loot table JSON")


class TagContribution(BaseModel):
    """Values this request adds to a shared tag file"""
    registry: TagRegistry
    namespace: str = Field("minecraft", description="Tag namespace, e.g. 'minecraft'")
    tag: str = Field(..., description="Tag path, e.g. 'planks' or 'mineable/axe'")
    values: List[str] = Field(default_factory=list, description="Namespaced ids, sorted and deduplicated")

    @property
    def path(self) -> str:
        return f"data/{self.namespace}/tags/{self.registry.value}/{self.tag}.json"


class CreativeTabEntry(BaseModel):
    """Creative tab listing for one obtainable item form"""
    content_id: str
    category: EntityCategory
    tab: CreativeTab

    model_config = ConfigDict(frozen=True)


class ExpandedSpec(BaseModel):
    """ContentSpec plus everything derived from it"""
    spec: ContentSpec
    items: List[ModItem] = Field(default_factory=list)
    blocks: List[ModBlock] = Field(default_factory=list)
    recipes: List[ModRecipe] = Field(default_factory=list)
    loot_tables: List[LootTable] = Field(default_factory=list)
    tags: List[TagContribution] = Field(default_factory=list)
    descriptors: List[VisualDescriptor] = Field(default_factory=list)
    creative_tab_entries: List[CreativeTabEntry] = Field(default_factory=list)

    @property
    def mod_id(self) -> str:
        return self.spec.mod_id

    def item_ids(self) -> List[str]:
        return [item.id for item in self.items]

    def block_ids(self) -> List[str]:
        return [block.id for block in self.blocks]

    def find_item(self, item_id: str) -> Optional[ModItem]:
        return next((item for item in self.items if item.id == item_id), None)

    def find_block(self, block_id: str) -> Optional[ModBlock]:
        return next((block for block in self.blocks if block.id == block_id), None)

    def descriptor_for(self, content_id: str, category: EntityCategory) -> Optional[VisualDescriptor]:
        return next(
            (d for d in self.descriptors if d.content_id == content_id and d.category == category),
            None,
        )

    def creative_tab_for(self, content_id: str) -> Optional[CreativeTabEntry]:
        return next((e for e in self.creative_tab_entries if e.content_id == content_id), None)

    def acquisition_paths(self, content_id: str) -> List[str]:
        """
        Ways a player can obtain an entity in survival or creative play

        Returns any of "recipe", "loot_table" and "creative_tab", in that order.
        """
        paths = []
        if any(recipe.result.id == content_id for recipe in self.recipes):
            paths.append("recipe")
        if any(table.block_id == content_id for table in self.loot_tables):
            paths.append("loot_table")
        if self.creative_tab_for(content_id):
            paths.append("creative_tab")
        return paths


__all__ = [
    "EntityCategory",
    "VisualShape",
    "TagRegistry",
    "CreativeTab",
    "VisualDescriptor",
    "LootTable",
    "TagContribution",
    "CreativeTabEntry",
    "ExpandedSpec",
]
