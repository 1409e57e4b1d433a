"""
Output Schema - Asset keys, materialized files and validation reports
"""
from typing import List, Optional, Union
from pydantic import BaseModel, Field, ConfigDict
from enum import Enum

from .expanded_schema import EntityCategory


class AssetKind(str, Enum):
    """What an asset key addresses"""
    TEXTURE = "texture"
    MODEL = "model"


class AssetKey(BaseModel):
    """
    Canonical asset key: '{category}/{content_id}'

    The category is part of every comparison, so item/x and block/x never collide.
    """
    category: EntityCategory
    kind: AssetKind
    content_id: str

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> str:
        return f"{self.category.value}/{self.content_id}"

    def __str__(self) -> str:
        return self.key


class EntityAssets(BaseModel):
    """Texture and model keys for one entity in one category"""
    content_id: str
    category: EntityCategory
    texture: AssetKey = Field(..., description="Texture the entity samples; may be shared (e.g. planks)")
    model: AssetKey

    model_config = ConfigDict(frozen=True)


class MaterializedFile(BaseModel):
    """An output path plus its full contents"""
    path: str = Field(..., description="Path relative to the output root")
    contents: Union[str, bytes]

    model_config = ConfigDict(frozen=True)

    @property
    def is_binary(self) -> bool:
        return isinstance(self.contents, bytes)


class ValidationReport(BaseModel):
    """Result of the validation collaborator: first failing gate wins"""
    valid: bool
    reason: Optional[str] = None
    gate: Optional[str] = None
    gates_run: List[str] = Field(default_factory=list)


__all__ = [
    "AssetKind",
    "AssetKey",
    "EntityAssets",
    "MaterializedFile",
    "ValidationReport",
]
