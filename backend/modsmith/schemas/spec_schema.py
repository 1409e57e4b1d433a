"""
Spec Schema - Canonical Content Specification

This is the versioned, JSON-compatible description of a requested content
package. The Intent Interpreter produces it, the validator checks it, and the
Spec Expander reads it.

Wire names are camelCase (schemaVersion, minecraftVersion, woodTypes, ...);
Python attribute names are snake_case. Both are accepted on input.
"""
from typing import List, Optional, Dict, Literal
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel
from enum import Enum

from config import SCHEMA_VERSION, MINECRAFT_VERSION, LOADER, DEFAULT_MOD_ID


class FeatureKey(str, Enum):
    """Feature keys a content package can include"""
    HELLO_WORLD = "hello-world"
    ORE = "ore"
    INGOT = "ingot"
    TOOLS = "tools"
    MOB_DROP = "mob-drop"
    STRUCTURE_SPAWN = "structure-spawn"
    ADVANCEMENT = "advancement"


class RecipeType(str, Enum):
    """Recipe serializer types supported by the recipe writer"""
    CRAFTING_SHAPED = "crafting_shaped"
    CRAFTING_SHAPELESS = "crafting_shapeless"
    SMELTING = "smelting"
    BLASTING = "blasting"
    SMOKING = "smoking"
    CAMPFIRE_COOKING = "campfire_cooking"

    @property
    def is_cooking(self) -> bool:
        return self in COOKING_RECIPE_TYPES


COOKING_RECIPE_TYPES = frozenset({
    RecipeType.SMELTING,
    RecipeType.BLASTING,
    RecipeType.SMOKING,
    RecipeType.CAMPFIRE_COOKING,
})


class _WireModel(BaseModel):
    """Base for every model serialized in the canonical spec document"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ModItem(_WireModel):
    """An item in the content package"""
    id: str = Field(..., description="Lowercase slug, unique among items")
    name: str = Field(..., description="Display name (e.g., 'Tin Ingot')")
    description: Optional[str] = Field(None, description="Free text used for behavior and texture planning")
    color_hint: Optional[str] = Field(None, description="Simple color word (e.g., 'yellow')")
    texture_path: Optional[str] = Field(None, description="Explicit texture path, if the requester supplied one")


class ModBlock(_WireModel):
    """A placeable block in the content package"""
    id: str = Field(..., description="Lowercase slug, unique among blocks")
    name: str = Field(..., description="Display name (e.g., 'Cheese Block')")
    description: Optional[str] = Field(None)
    color_hint: Optional[str] = Field(None)
    texture_path: Optional[str] = Field(None)


class RecipeIngredient(_WireModel):
    """Ingredient reference; ids without a namespace belong to the mod"""
    id: str
    count: int = Field(1, ge=1)


class RecipeResult(_WireModel):
    """Recipe output"""
    id: str
    count: int = Field(1, ge=1)


class ModRecipe(_WireModel):
    """
    A recipe in the content package

    Shapeless and cooking recipes use ingredients; shaped recipes use pattern + key.
    Cooking recipes carry exactly one ingredient plus experience and cooking time.
    """
    id: str
    type: RecipeType
    ingredients: List[RecipeIngredient] = Field(default_factory=list)
    pattern: Optional[List[str]] = Field(None, description="Shaped pattern rows, e.g. ['##', '##']")
    key: Optional[Dict[str, str]] = Field(None, description="Pattern symbol -> ingredient id")
    result: RecipeResult
    experience: Optional[float] = Field(None)
    cooking_time: Optional[int] = Field(None, alias="cookingtime", description="Ticks (200 = 10 seconds)")

    def ingredient_ids(self) -> List[str]:
        """Every id this recipe consumes, ingredients first then pattern keys."""
        ids = [ingredient.id for ingredient in self.ingredients]
        if self.key:
            ids.extend(self.key[symbol] for symbol in sorted(self.key))
        return ids


class WoodType(_WireModel):
    """Shorthand declaration that expands into a full wood family"""
    id: str = Field(..., description="Wood slug, e.g. 'maple'")
    display_name: str = Field(..., description="Title-cased name, e.g. 'Maple'")


class SpecConstraints(_WireModel):
    """Behavioral constraints parsed from the request"""
    forbid_tools_weapons: bool = False
    require_pickaxe_mining: bool = False
    no_blocks: bool = False
    no_recipes: bool = False


class ContentSpec(_WireModel):
    """
    Canonical Content Specification - one requested content package

    Every identifier is a lowercase slug unique within its namespace, and no id
    or name ever carries clarification dialogue.
    """
    schema_version: Literal[1] = SCHEMA_VERSION
    minecraft_version: str = MINECRAFT_VERSION
    loader: str = LOADER
    mod_id: str = DEFAULT_MOD_ID
    mod_name: str = "Generated Mod"
    features: List[FeatureKey] = Field(default_factory=lambda: [FeatureKey.HELLO_WORLD])
    items: List[ModItem] = Field(default_factory=list)
    blocks: List[ModBlock] = Field(default_factory=list)
    recipes: List[ModRecipe] = Field(default_factory=list)
    wood_types: List[WoodType] = Field(default_factory=list)
    constraints: SpecConstraints = Field(default_factory=SpecConstraints)

    def find_item(self, item_id: str) -> Optional[ModItem]:
        return next((item for item in self.items if item.id == item_id), None)

    def find_block(self, block_id: str) -> Optional[ModBlock]:
        return next((block for block in self.blocks if block.id == block_id), None)

    def to_document(self) -> dict:
        """Serialize to the camelCase wire document."""
        return self.model_dump(mode="json", by_alias=True)


__all__ = [
    "FeatureKey",
    "RecipeType",
    "COOKING_RECIPE_TYPES",
    "ModItem",
    "ModBlock",
    "RecipeIngredient",
    "RecipeResult",
    "ModRecipe",
    "WoodType",
    "SpecConstraints",
    "ContentSpec",
]
