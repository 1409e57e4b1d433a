"""
Scope Schema - Scope units, credit budget result and the read-facing summary
"""
from typing import List
from pydantic import BaseModel, Field
from enum import Enum


class ScopeUnit(str, Enum):
    """Economically priced categories of requested content surface"""
    ITEM = "item"
    BLOCK = "block"
    ITEM_BEHAVIOR = "item_behavior"
    BLOCK_BEHAVIOR = "block_behavior"
    ENTITY = "entity"
    ENTITY_AI = "entity_ai"
    BIOME = "biome"
    STRUCTURE = "structure"
    DIMENSION = "dimension"
    NPC = "npc"
    QUEST = "quest"
    WORLD_RULE = "world_rule"


class VisualLevel(str, Enum):
    """Visual fidelity level derived from credits"""
    BASIC = "basic"
    ENHANCED = "enhanced"
    ADVANCED = "advanced"
    LEGENDARY = "legendary"


class ScopeBudgetResult(BaseModel):
    """Credit total compared against a budget; informational only"""
    scope: List[ScopeUnit] = Field(default_factory=list, description="Every scope unit occurrence, in order")
    total_credits: int = 0
    budget: int
    budget_tier: int = Field(..., description="Smallest tier the total fits in, or the largest tier")
    fits_budget: bool
    over_by: int = 0
    scope_summary: List[str] = Field(default_factory=list, description="Unique labels, first occurrence order")
    explanation: str = ""


class RequestSummary(BaseModel):
    """Credit and visual summary exposed to the status API"""
    total_credits: int
    budget: int
    budget_tier: int
    fits_budget: bool
    scope_summary: List[str] = Field(default_factory=list)
    visual_level: VisualLevel
    texture_resolution: int
    visual_features: List[str] = Field(default_factory=list)
    blueprint_summary: str = ""


__all__ = [
    "ScopeUnit",
    "VisualLevel",
    "ScopeBudgetResult",
    "RequestSummary",
]
