"""
Closed Registries - Primitives, Systems, Scope Units and Visual Levels

Every vocabulary is an enum and every registry is keyed by it. Each registry
is checked for exhaustiveness when this module is imported, so a missing entry
fails fast instead of surfacing as a KeyError mid-request.
Registries are read-only mappings.
"""
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict

from config import CREDIT_TIERS

from modsmith.schemas import (
    Primitive,
    PrimitiveDefinition,
    SafetyBounds,
    ScopeUnit,
    SystemDefinition,
    SystemUnit,
    VisualLevel,
)


def _primitive(primitive: Primitive, cost: int, **bounds) -> PrimitiveDefinition:
    return PrimitiveDefinition(id=primitive, credit_cost=cost, safety=SafetyBounds(**bounds))


PRIMITIVE_REGISTRY: Mapping[Primitive, PrimitiveDefinition] = MappingProxyType({
    p.id: p for p in (
        _primitive(Primitive.REGISTER_ITEM, 1),
        _primitive(Primitive.REGISTER_BLOCK, 1),
        _primitive(Primitive.ON_USE, 2, max_frequency=20, cooldown_ticks=1),
        _primitive(Primitive.COOLDOWN, 1, cooldown_ticks=20),
        _primitive(Primitive.SPAWN_ENTITY, 5, max_entities=1, max_range=64, cooldown_ticks=40),
        _primitive(Primitive.RAYCAST_TARGET, 3, max_range=64),
        _primitive(Primitive.APPLY_DAMAGE, 2, max_range=64),
        _primitive(Primitive.APPLY_STATUS_EFFECT, 3, max_range=32),
        _primitive(Primitive.AREA_OF_EFFECT, 4, max_range=8, max_entities=16),
        _primitive(Primitive.PARTICLE_EFFECT, 1, max_range=16),
        _primitive(Primitive.SOUND_EFFECT, 1, max_range=32),
        _primitive(Primitive.PERSISTENT_STATE, 3),
        _primitive(Primitive.TICK_BEHAVIOR, 4, max_frequency=20),
    )
})


def _system(system: SystemUnit, primitives, explanation: str) -> SystemDefinition:
    return SystemDefinition(id=system, primitives=tuple(primitives), explanation=explanation)


P = Primitive
SYSTEM_REGISTRY: Mapping[SystemUnit, SystemDefinition] = MappingProxyType({
    s.id: s for s in (
        _system(SystemUnit.TARGETING, [P.RAYCAST_TARGET], "Target selection via raycast"),
        _system(SystemUnit.PROJECTILE, [P.SPAWN_ENTITY, P.PARTICLE_EFFECT, P.SOUND_EFFECT],
                "Spawns projectile or entity effect"),
        _system(SystemUnit.CHAINING,
                [P.RAYCAST_TARGET, P.SPAWN_ENTITY, P.APPLY_DAMAGE, P.PARTICLE_EFFECT, P.SOUND_EFFECT],
                "Raycast, spawn, damage, particles, and sound (e.g. lightning)"),
        _system(SystemUnit.AREA_EFFECT, [P.AREA_OF_EFFECT, P.APPLY_DAMAGE, P.PARTICLE_EFFECT],
                "Area-of-effect damage and particles"),
        _system(SystemUnit.STATUS_EFFECT, [P.APPLY_STATUS_EFFECT, P.SOUND_EFFECT], "Applies status effect and sound"),
        _system(SystemUnit.COOLDOWN, [P.COOLDOWN], "Cooldown between uses"),
        _system(SystemUnit.MOVEMENT, [P.RAYCAST_TARGET, P.PERSISTENT_STATE], "Movement or teleport (raycast + state)"),
        _system(SystemUnit.PROGRESSION, [P.PERSISTENT_STATE, P.TICK_BEHAVIOR],
                "Progression or persistent state over time"),
        _system(SystemUnit.INTERACTION, [P.ON_USE], "Right-click or use interaction"),
        _system(SystemUnit.WORLD_GENERATION, [P.PERSISTENT_STATE, P.TICK_BEHAVIOR],
                "World or structure generation (state + tick)"),
        _system(SystemUnit.NPC_LOGIC, [P.PERSISTENT_STATE, P.TICK_BEHAVIOR, P.SOUND_EFFECT],
                "NPC behavior (state, tick, sound)"),
        _system(SystemUnit.QUEST_LOGIC, [P.PERSISTENT_STATE, P.ON_USE, P.SOUND_EFFECT],
                "Quest or objective logic (state, use, sound)"),
    )
})
del P

SCOPE_COSTS: Mapping[ScopeUnit, int] = MappingProxyType({
    ScopeUnit.ITEM: 5,
    ScopeUnit.BLOCK: 5,
    ScopeUnit.ITEM_BEHAVIOR: 10,
    ScopeUnit.BLOCK_BEHAVIOR: 10,
    ScopeUnit.ENTITY: 20,
    ScopeUnit.ENTITY_AI: 20,
    ScopeUnit.BIOME: 30,
    ScopeUnit.STRUCTURE: 30,
    ScopeUnit.DIMENSION: 100,
    ScopeUnit.NPC: 30,
    ScopeUnit.QUEST: 40,
    ScopeUnit.WORLD_RULE: 15,
})

SCOPE_UNIT_LABELS: Mapping[ScopeUnit, str] = MappingProxyType({
    ScopeUnit.ITEM: "Items",
    ScopeUnit.BLOCK: "Blocks",
    ScopeUnit.ITEM_BEHAVIOR: "Item behavior",
    ScopeUnit.BLOCK_BEHAVIOR: "Block behavior",
    ScopeUnit.ENTITY: "Entities",
    ScopeUnit.ENTITY_AI: "Entity AI",
    ScopeUnit.BIOME: "Biomes",
    ScopeUnit.STRUCTURE: "Structures",
    ScopeUnit.DIMENSION: "Dimension",
    ScopeUnit.NPC: "NPCs",
    ScopeUnit.QUEST: "Quests",
    ScopeUnit.WORLD_RULE: "World rules",
})


class VisualLevelDefinition(BaseModel):
    """What a visual level allows"""
    level: VisualLevel
    texture_resolution: int
    glow_allowed: bool
    emissive_allowed: bool
    animation_allowed: bool
    layered_allowed: bool

    model_config = ConfigDict(frozen=True)


VISUAL_LEVEL_DEFINITIONS: Mapping[VisualLevel, VisualLevelDefinition] = MappingProxyType({
    d.level: d for d in (
        VisualLevelDefinition(level=VisualLevel.BASIC, texture_resolution=16, glow_allowed=False,
                              emissive_allowed=False, animation_allowed=False, layered_allowed=False),
        VisualLevelDefinition(level=VisualLevel.ENHANCED, texture_resolution=32, glow_allowed=False,
                              emissive_allowed=True, animation_allowed=False, layered_allowed=False),
        VisualLevelDefinition(level=VisualLevel.ADVANCED, texture_resolution=64, glow_allowed=True,
                              emissive_allowed=True, animation_allowed=False, layered_allowed=True),
        VisualLevelDefinition(level=VisualLevel.LEGENDARY, texture_resolution=128, glow_allowed=True,
                              emissive_allowed=True, animation_allowed=True, layered_allowed=True),
    )
})


def _check_exhaustive(name: str, registry: Mapping, vocabulary) -> None:
    missing = [member.value for member in vocabulary if member not in registry]
    if missing:
        raise RuntimeError(f"{name} is missing entries: {missing}")


_check_exhaustive("PRIMITIVE_REGISTRY", PRIMITIVE_REGISTRY, Primitive)
_check_exhaustive("SYSTEM_REGISTRY", SYSTEM_REGISTRY, SystemUnit)
_check_exhaustive("SCOPE_COSTS", SCOPE_COSTS, ScopeUnit)
_check_exhaustive("SCOPE_UNIT_LABELS", SCOPE_UNIT_LABELS, ScopeUnit)
_check_exhaustive("VISUAL_LEVEL_DEFINITIONS", VISUAL_LEVEL_DEFINITIONS, VisualLevel)


def primitive_cost(primitive: Primitive) -> int:
    return PRIMITIVE_REGISTRY[primitive].credit_cost


def primitives_for_system(system: SystemUnit):
    return list(SYSTEM_REGISTRY[system].primitives)


__all__ = [
    "PRIMITIVE_REGISTRY",
    "SYSTEM_REGISTRY",
    "SCOPE_COSTS",
    "SCOPE_UNIT_LABELS",
    "CREDIT_TIERS",
    "VisualLevelDefinition",
    "VISUAL_LEVEL_DEFINITIONS",
    "primitive_cost",
    "primitives_for_system",
]
