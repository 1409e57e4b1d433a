"""
Plan Schema - Execution plans built from Systems and Primitives

Defines the closed vocabularies (Primitive, SystemUnit) and the per-entity and
per-request plans the Execution Planner produces. The registries that give
these vocabularies their costs and bounds live in modsmith.core.registries.
"""
from typing import List, Optional, Tuple
from pydantic import BaseModel, Field, ConfigDict
from enum import Enum


class Primitive(str, Enum):
    """Smallest units of runtime behavior"""
    REGISTER_ITEM = "register_item"
    REGISTER_BLOCK = "register_block"
    ON_USE = "on_use"
    COOLDOWN = "cooldown"
    SPAWN_ENTITY = "spawn_entity"
    RAYCAST_TARGET = "raycast_target"
    APPLY_DAMAGE = "apply_damage"
    APPLY_STATUS_EFFECT = "apply_status_effect"
    AREA_OF_EFFECT = "area_of_effect"
    PARTICLE_EFFECT = "particle_effect"
    SOUND_EFFECT = "sound_effect"
    PERSISTENT_STATE = "persistent_state"
    TICK_BEHAVIOR = "tick_behavior"


class SystemUnit(str, Enum):
    """Named gameplay capabilities"""
    TARGETING = "targeting"
    PROJECTILE = "projectile"
    CHAINING = "chaining"
    AREA_EFFECT = "area_effect"
    STATUS_EFFECT = "status_effect"
    COOLDOWN = "cooldown"
    MOVEMENT = "movement"
    PROGRESSION = "progression"
    INTERACTION = "interaction"
    WORLD_GENERATION = "world_generation"
    NPC_LOGIC = "npc_logic"
    QUEST_LOGIC = "quest_logic"


class IntentCategory(str, Enum):
    """Category of the thing an intent describes"""
    ITEM = "item"
    BLOCK = "block"
    ENTITY = "entity"


class UserIntent(BaseModel):
    """One entity as seen by the planner and the accountant"""
    name: str = ""
    description: Optional[str] = None
    category: IntentCategory = IntentCategory.ITEM

    model_config = ConfigDict(frozen=True)

    @property
    def combined_text(self) -> str:
        """Lowercased 'name description' text the rule tables match against."""
        return f"{self.name.lower().strip()} {(self.description or '').lower().strip()}"


class SafetyBounds(BaseModel):
    """Fixed runtime limits of a primitive; never derived from free text"""
    max_range: Optional[int] = None
    max_frequency: Optional[int] = None
    max_entities: Optional[int] = None
    cooldown_ticks: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    def is_bounded(self) -> bool:
        return any(v is not None for v in (self.max_range, self.max_frequency, self.max_entities, self.cooldown_ticks))


class PrimitiveDefinition(BaseModel):
    """Registry entry for a primitive"""
    id: Primitive
    credit_cost: int = Field(..., ge=0)
    safety: SafetyBounds = Field(default_factory=SafetyBounds)

    model_config = ConfigDict(frozen=True)


class SystemDefinition(BaseModel):
    """Registry entry for a system"""
    id: SystemUnit
    primitives: Tuple[Primitive, ...]
    explanation: str

    model_config = ConfigDict(frozen=True)


class ExecutionPlan(BaseModel):
    """Plan for one entity"""
    content_id: Optional[str] = Field(None, description="Entity the plan was built for")
    category: IntentCategory = IntentCategory.ITEM
    systems: List[SystemUnit] = Field(default_factory=list)
    primitives: List[Primitive] = Field(default_factory=list)
    explanation: str = ""
    credit_cost: int = 0
    upgrade_path: List[str] = Field(default_factory=list)
    future_expansion: List[str] = Field(default_factory=list)
    degraded: bool = Field(False, description="True when no capability rule matched")


class AggregatedExecutionPlan(BaseModel):
    """Union of every entity's plan for one request"""
    systems: List[SystemUnit] = Field(default_factory=list)
    primitives: List[Primitive] = Field(default_factory=list)
    explanation: List[str] = Field(default_factory=list)
    upgrade_path: List[str] = Field(default_factory=list)
    future_expansion: List[str] = Field(default_factory=list)
    credit_cost: int = 0
    safety_disclosure: List[str] = Field(default_factory=list)


__all__ = [
    "Primitive",
    "SystemUnit",
    "IntentCategory",
    "UserIntent",
    "SafetyBounds",
    "PrimitiveDefinition",
    "SystemDefinition",
    "ExecutionPlan",
    "AggregatedExecutionPlan",
]
