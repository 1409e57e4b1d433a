"""
Execution Planner - UserIntent -> Systems -> Primitives -> ExecutionPlan

Responsibilities:
- Map one entity's name/description/category to gameplay Systems
- Unfold Systems into Primitives through the closed registry
- Price the plan and attach upgrade / future-expansion hints
- Aggregate per-entity plans into one request-level plan
- Produce the safety disclosure for the aggregated primitive set

Intent is never rejected. Text that matches no capability rule degrades to a
minimal plan (interaction only) and the plan is
marked degraded.
"""
import logging
import re
from typing import Callable, Iterable, List, NamedTuple, Optional, Tuple

from modsmith.schemas import (
    AggregatedExecutionPlan,
    ExecutionPlan,
    IntentCategory,
    Primitive,
    SystemUnit,
    UserIntent,
)
from modsmith.core.registries import PRIMITIVE_REGISTRY, primitive_cost, primitives_for_system

logger = logging.getLogger(__name__)


def _has(pattern: str) -> Callable[[str], bool]:
    compiled = re.compile(pattern)
    return lambda text: compiled.search(text) is not None


# Phrase predicates over the lowercased "name description" text
SHOOT_LIGHTNING = _has(r"\b(shoots?|shoot|casts?|cast)\s*lightning\b")
LIGHTNING_ATTACK = _has(r"\blightning\s*(bolt|strike|attack)\b")
LIGHTNING = _has(r"\blightning\b")
WIELDED = _has(r"\b(wand|staff|rod|item)\b")
MAGIC_WAND = _has(r"\b(magic|magical)\s*wand\b")
WAND = _has(r"\bwand\b")
WAND_VERB = _has(r"\bshoot|cast|use\b")
FIRE = _has(r"\b(fire|flame|burn|burning)\b")
HEAL = _has(r"\b(heal|healing|potion|restore)\b")
TELEPORT = _has(r"\bteleport\b")
USE = _has(r"\b(use|right-?click|activates?)\b")
SPELL = _has(r"\bspell(s?)\b")
CAST = _has(r"\bcast(s?)\b")
MAGIC = _has(r"\bmagic\b")
CHAIN = _has(r"\bchain(s?|ing)?\b")
EXPLOSION = _has(r"\bexplosion\b")
EXPLODE = _has(r"\bexplode(s?)\b")
GLOWING_BLOCK = _has(r"\b(glowing|glow|emissive)\s*block\b")
BLOCK_THAT_GLOWS = _has(r"\bblock\s*that\s*glows?\b")


class IntentContext(NamedTuple):
    """Lowercased text plus the facts the phrase rules need"""
    text: str
    has_description: bool
    category: IntentCategory

    @classmethod
    def from_intent(cls, intent: UserIntent) -> "IntentContext":
        return cls(
            text=intent.combined_text,
            has_description=bool((intent.description or "").strip()),
            category=intent.category,
        )

    @property
    def is_item(self) -> bool:
        return self.category == IntentCategory.ITEM

    @property
    def is_block(self) -> bool:
        return self.category == IntentCategory.BLOCK


def lightning_intent(ctx: IntentContext) -> bool:
    text = ctx.text
    return SHOOT_LIGHTNING(text) or LIGHTNING_ATTACK(text) or (LIGHTNING(text) and WIELDED(text))


def wand_intent(ctx: IntentContext) -> bool:
    text = ctx.text
    return MAGIC_WAND(text) or (WAND(text) and (WAND_VERB(text) or ctx.has_description))


def explosion_intent(ctx: IntentContext) -> bool:
    return EXPLOSION(ctx.text) or EXPLODE(ctx.text)


def glowing_block(ctx: IntentContext) -> bool:
    return GLOWING_BLOCK(ctx.text) or BLOCK_THAT_GLOWS(ctx.text)


def has_use(ctx: IntentContext) -> bool:
    """True when the text implies the entity is used / right-clicked."""
    text = ctx.text
    return (
        lightning_intent(ctx)
        or wand_intent(ctx)
        or FIRE(text)
        or HEAL(text)
        or TELEPORT(text)
        or USE(text)
        or SPELL(text)
        or CAST(text)
        or (MAGIC(text) and ctx.is_item)
        or CHAIN(text)
        or explosion_intent(ctx)
    )


S = SystemUnit

# Ordered capability rules: (name, predicate, systems). First match wins.
SYSTEM_RULES: Tuple[Tuple[str, Callable[[IntentContext], bool], Tuple[SystemUnit, ...]], ...] = (
    ("lightning", lightning_intent, (S.TARGETING, S.CHAINING, S.COOLDOWN)),
    ("magic_wand", wand_intent, (S.TARGETING, S.PROJECTILE, S.COOLDOWN)),
    ("fire_item", lambda c: FIRE(c.text) and c.is_item, (S.TARGETING, S.CHAINING, S.COOLDOWN)),
    ("explosion", explosion_intent, (S.TARGETING, S.AREA_EFFECT, S.COOLDOWN)),
    ("spell", lambda c: SPELL(c.text) or (CAST(c.text) and not LIGHTNING(c.text)), (S.STATUS_EFFECT, S.COOLDOWN)),
    ("chain_item", lambda c: CHAIN(c.text) and c.is_item, (S.TARGETING, S.CHAINING, S.COOLDOWN)),
    ("heal", lambda c: HEAL(c.text), (S.STATUS_EFFECT, S.COOLDOWN)),
    ("magic_item", lambda c: MAGIC(c.text) and c.is_item, (S.TARGETING, S.PROJECTILE, S.COOLDOWN)),
    ("glowing_block", glowing_block, (S.INTERACTION,)),
    ("teleport", lambda c: TELEPORT(c.text), (S.MOVEMENT, S.COOLDOWN)),
    ("use_item", lambda c: USE(c.text) and c.is_item, (S.COOLDOWN,)),
)
del S

EXPLANATION_PHRASES: Tuple[Tuple[Primitive, str], ...] = (
    (Primitive.REGISTER_ITEM, "Register item"),
    (Primitive.REGISTER_BLOCK, "Register block"),
    (Primitive.ON_USE, "Right-click use"),
    (Primitive.RAYCAST_TARGET, "Target raycast"),
    (Primitive.SPAWN_ENTITY, "Spawn entity (e.g. lightning)"),
    (Primitive.APPLY_DAMAGE, "Apply damage"),
    (Primitive.APPLY_STATUS_EFFECT, "Apply status effect"),
    (Primitive.PARTICLE_EFFECT, "Particles"),
    (Primitive.SOUND_EFFECT, "Sound"),
    (Primitive.COOLDOWN, "Cooldown"),
)

# system -> (upgrade path hint, future expansion hint)
PROGRESSION_HOOKS: Tuple[Tuple[SystemUnit, Optional[str], Optional[str]], ...] = (
    (SystemUnit.CHAINING, "Can later add multi-target or chain bounce", "Multi-target upgrades"),
    (SystemUnit.PROJECTILE, None, "Different projectile types or trajectories"),
    (SystemUnit.STATUS_EFFECT, None, "Additional effects or duration tiers"),
    (SystemUnit.QUEST_LOGIC, "Can later add branching paths and rewards", "Branching quest paths"),
    (SystemUnit.NPC_LOGIC, None, "Dialogue and behavior trees"),
    (SystemUnit.WORLD_GENERATION, None, "More structures or biomes"),
)

# primitive -> fixed disclosure statement
SAFETY_STATEMENTS = {
    Primitive.ON_USE: "Use actions are rate-limited for performance",
    Primitive.COOLDOWN: "Cooldowns prevent accidental spam",
    Primitive.SPAWN_ENTITY: "Lightning and entity effects are range-limited for performance",
    Primitive.RAYCAST_TARGET: "Targeting is range-limited for performance",
    Primitive.APPLY_DAMAGE: "Damage effects are range-limited",
    Primitive.APPLY_STATUS_EFFECT: "Status effects are range-limited",
    Primitive.AREA_OF_EFFECT: "Area effects have limited range and entity count",
    Primitive.PARTICLE_EFFECT: "Particle effects have limited range",
    Primitive.SOUND_EFFECT: "Sound effects have limited range",
}

TRANSPARENCY_STATEMENT = (
    "No placeholder systems, fake behaviors, or demo logic are used. "
    "This mod is fully generated and functional."
)


def _dedupe(values: Iterable) -> list:
    seen = set()
    out = []
    for value in values:
        if value not in seen:
            seen.add(value)
            out.append(value)
    return out


def intent_to_systems(intent: UserIntent) -> Tuple[List[SystemUnit], bool]:
    """
    Map an intent to its Systems

    Args:
        intent: Entity name, description and category

    Returns:
        (systems, matched) where matched is False when no capability rule fired
    """
    ctx = IntentContext.from_intent(intent)
    systems: List[SystemUnit] = []

    if has_use(ctx) or ctx.is_item:
        systems.append(SystemUnit.INTERACTION)

    matched = False
    for name, predicate, rule_systems in SYSTEM_RULES:
        if predicate(ctx):
            matched = True
            # The glowing-block rule only contributes for blocks
            if name != "glowing_block" or ctx.is_block:
                systems.extend(rule_systems)
            break

    if not systems and ctx.is_block:
        systems.append(SystemUnit.INTERACTION)

    return _dedupe(systems), matched


def build_explanation(primitives: List[Primitive], category: IntentCategory) -> str:
    present = set(primitives)
    parts = [phrase for primitive, phrase in EXPLANATION_PHRASES if primitive in present]
    return "; ".join(parts) if parts else f"Minimal {category.value}"


def progression_hooks(systems: List[SystemUnit]) -> Tuple[List[str], List[str]]:
    present = set(systems)
    upgrade_path: List[str] = []
    future_expansion: List[str] = []
    for system, upgrade, future in PROGRESSION_HOOKS:
        if system in present:
            if upgrade:
                upgrade_path.append(upgrade)
            if future:
                future_expansion.append(future)
    return upgrade_path, future_expansion


def calculate_credits(primitives: Iterable[Primitive]) -> int:
    """Sum of registry costs; stable for an identical primitive list."""
    return sum(primitive_cost(p) for p in primitives)


def build_safety_disclosure(primitives: Iterable[Primitive]) -> List[str]:
    """
    Deterministic safety statements for a primitive set

    Statements follow the alphabetical order of the primitives and end with a
    fixed transparency statement. Primitives without a dedicated statement
    describe their registry bounds instead; unbounded ones say nothing.
    """
    statements: List[str] = []
    for primitive in sorted(set(primitives), key=lambda p: p.value):
        statement = SAFETY_STATEMENTS.get(primitive)
        if statement is None:
            bounds = PRIMITIVE_REGISTRY[primitive].safety
            parts = []
            if bounds.max_range is not None:
                parts.append("range-limited for performance")
            if bounds.cooldown_ticks is not None:
                parts.append("cooldowns prevent accidental spam")
            if bounds.max_entities is not None:
                parts.append("entity count is limited")
            if not parts:
                continue
            statement = "Effects are " + "; ".join(parts)
        if statement not in statements:
            statements.append(statement)
    statements.append(TRANSPARENCY_STATEMENT)
    return statements


class ExecutionPlanner:
    """
    Execution Planner - deterministic per-entity planning

    Holds no state between calls; the same intent always yields the same plan.
    """

    def plan(self, intent: UserIntent, content_id: Optional[str] = None) -> ExecutionPlan:
        """
        Build the execution plan for one entity

        Args:
            intent: Entity name, description and category
            content_id: Entity id recorded on the plan

        Returns:
            ExecutionPlan with systems, primitives, cost and hints
        """
        systems, matched = intent_to_systems(intent)

        base = Primitive.REGISTER_BLOCK if intent.category == IntentCategory.BLOCK else Primitive.REGISTER_ITEM
        primitives = [base]
        for system in systems:
            primitives.extend(primitives_for_system(system))
        primitives = _dedupe(primitives)

        ctx = IntentContext.from_intent(intent)
        if ctx.is_block and glowing_block(ctx) and Primitive.PARTICLE_EFFECT not in primitives:
            primitives.append(Primitive.PARTICLE_EFFECT)

        upgrade_path, future_expansion = progression_hooks(systems)

        if not matched:
            logger.info(f"[Planner] ⚠ No capability rule matched '{content_id or intent.name}', using minimal plan")

        return ExecutionPlan(
            content_id=content_id,
            category=intent.category,
            systems=systems,
            primitives=primitives,
            explanation=build_explanation(primitives, intent.category),
            credit_cost=calculate_credits(primitives),
            upgrade_path=upgrade_path,
            future_expansion=future_expansion,
            degraded=not matched,
        )

    def plan_all(self, intents: Iterable[Tuple[str, UserIntent]]) -> List[ExecutionPlan]:
        """Plan every (content_id, intent) pair in order."""
        return [self.plan(intent, content_id=content_id) for content_id, intent in intents]


def aggregate_execution_plans(plans: Iterable[ExecutionPlan]) -> AggregatedExecutionPlan:
    """
    Combine per-entity plans into one request-level plan

    Systems and primitives are unions sorted alphabetically; explanations and
    hints keep their first occurrence; cost is the sum of entity costs.
    """
    plans = list(plans)
    systems = sorted({s for plan in plans for s in plan.systems}, key=lambda s: s.value)
    primitives = sorted({p for plan in plans for p in plan.primitives}, key=lambda p: p.value)

    def collect(values: Iterable[str]) -> List[str]:
        return _dedupe(v.strip() for v in values if v and v.strip())

    return AggregatedExecutionPlan(
        systems=systems,
        primitives=primitives,
        explanation=collect(plan.explanation for plan in plans),
        upgrade_path=collect(h for plan in plans for h in plan.upgrade_path),
        future_expansion=collect(h for plan in plans for h in plan.future_expansion),
        credit_cost=sum(plan.credit_cost for plan in plans),
        safety_disclosure=build_safety_disclosure(primitives),
    )


__all__ = [
    "ExecutionPlanner",
    "IntentContext",
    "has_use",
    "glowing_block",
    "lightning_intent",
    "intent_to_systems",
    "build_explanation",
    "progression_hooks",
    "calculate_credits",
    "aggregate_execution_plans",
    "build_safety_disclosure",
    "SYSTEM_RULES",
    "TRANSPARENCY_STATEMENT",
]
