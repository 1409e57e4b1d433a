"""
Scope & Credit Accountant - Intent -> Scope Units -> credits

Responsibilities:
- Expand each intent (and the whole-request prompt) to the full implied scope
- Sum credits over every scope unit occurrence
- Compare the total against a budget tier (informational, never blocking)
- Derive the visual level and the read-facing request summary

Scope expansion is deliberately more generous than execution planning: a
request that mentions a new dimension is priced for the dimension, its biome,
structures, entities and world rules even though no primitive builds them yet.
"""
import logging
import re
from typing import Iterable, List, Optional

from config import DEFAULT_CREDIT_BUDGET

from modsmith.schemas import (
    IntentCategory,
    RequestSummary,
    ScopeBudgetResult,
    ScopeUnit,
    UserIntent,
    VisualLevel,
)
from modsmith.core.registries import (
    CREDIT_TIERS,
    SCOPE_COSTS,
    SCOPE_UNIT_LABELS,
    VISUAL_LEVEL_DEFINITIONS,
)
from modsmith.core.execution_planner import IntentContext, glowing_block, has_use

logger = logging.getLogger(__name__)

SHOOT_LIGHTNING = re.compile(r"\b(shoots?|shoot|casts?|cast)\s*lightning\b")
LIGHTNING_ATTACK = re.compile(r"\blightning\s*(bolt|strike|attack)\b")
LIGHTNING = re.compile(r"\blightning\b")
STAFF = re.compile(r"\b(wand|staff|rod)\b")
SPAWN_ENTITY = re.compile(r"\bspawn\s*entity\b")
SPELL = re.compile(r"\bspell(s?)\b")
CAST = re.compile(r"\bcast(s?)\b")

DIMENSION_PATTERNS = (
    re.compile(r"\b(new\s+)?dimension\b"),
    re.compile(r"\bcustom\s+world\b"),
    re.compile(r"\bseparate\s+world\b"),
)
RPG_PATTERNS = (
    re.compile(r"\brpg\b"),
    re.compile(r"\bquests?\b"),
    re.compile(r"\bquest\s+line\b"),
    re.compile(r"\bnpcs?\b"),
    re.compile(r"\bvillagers?\b"),
    re.compile(r"\bcharacters?\b"),
)
BIOME = re.compile(r"\b(biome|biomes)\b")
STRUCTURE = re.compile(r"\b(structure|structures)\b")
ENTITY = re.compile(r"\b(entity|entities|mob|mobs)\b")
ENTITY_AI = (
    re.compile(r"\b(ai|behavior)\s*(for|of)\s*(mob|entity)"),
    re.compile(r"\bcustom\s+ai\b"),
)

DIMENSION_SCOPE = (
    ScopeUnit.DIMENSION,
    ScopeUnit.BIOME,
    ScopeUnit.STRUCTURE,
    ScopeUnit.ENTITY,
    ScopeUnit.WORLD_RULE,
)
RPG_SCOPE = (
    ScopeUnit.DIMENSION,
    ScopeUnit.BIOME,
    ScopeUnit.NPC,
    ScopeUnit.QUEST,
    ScopeUnit.STRUCTURE,
    ScopeUnit.ENTITY,
    ScopeUnit.WORLD_RULE,
)

CATEGORY_UNITS = {
    IntentCategory.ITEM: ScopeUnit.ITEM,
    IntentCategory.BLOCK: ScopeUnit.BLOCK,
    IntentCategory.ENTITY: ScopeUnit.ENTITY,
}


def _any(patterns, text: str) -> bool:
    return any(p.search(text) for p in patterns)


def _implies_entity(ctx: IntentContext) -> bool:
    text = ctx.text
    return bool(
        SHOOT_LIGHTNING.search(text)
        or LIGHTNING_ATTACK.search(text)
        or (LIGHTNING.search(text) and STAFF.search(text))
        or SPAWN_ENTITY.search(text)
        or SPELL.search(text)
        or (CAST.search(text) and ctx.is_item)
    )


def expand_intent_to_scope(intent: UserIntent) -> List[ScopeUnit]:
    """
    Expand one intent to every scope unit it implies

    Args:
        intent: Entity name, description and category

    Returns:
        Ordered scope unit occurrences (duplicates are meaningful)
    """
    ctx = IntentContext.from_intent(intent)
    text = ctx.text
    units: List[ScopeUnit] = [CATEGORY_UNITS.get(intent.category, ScopeUnit.ITEM)]

    has_behavior = has_use(ctx) or glowing_block(ctx)
    if has_behavior and ctx.is_item:
        units.append(ScopeUnit.ITEM_BEHAVIOR)
    if has_behavior and ctx.is_block:
        units.append(ScopeUnit.BLOCK_BEHAVIOR)

    if _implies_entity(ctx):
        units.append(ScopeUnit.ENTITY)

    if _any(DIMENSION_PATTERNS, text):
        units.extend(DIMENSION_SCOPE)

    if _any(RPG_PATTERNS, text):
        units.extend(RPG_SCOPE)

    # Standalone mentions only count once
    if BIOME.search(text) and ScopeUnit.BIOME not in units:
        units.append(ScopeUnit.BIOME)
    if STRUCTURE.search(text) and ScopeUnit.STRUCTURE not in units:
        units.append(ScopeUnit.STRUCTURE)
    if ENTITY.search(text) and ScopeUnit.ENTITY not in units:
        units.append(ScopeUnit.ENTITY)
    if _any(ENTITY_AI, text):
        units.append(ScopeUnit.ENTITY_AI)

    return units


def expand_prompt_to_scope(prompt: str) -> List[ScopeUnit]:
    """Expand a whole-request prompt as an item-category description."""
    return expand_intent_to_scope(UserIntent(name="", description=prompt, category=IntentCategory.ITEM))


def calculate_scope_credits(scope: Iterable[ScopeUnit]) -> int:
    return sum(SCOPE_COSTS[unit] for unit in scope)


def select_budget_tier(total_credits: int) -> int:
    """Smallest credit tier the total fits in, or the largest tier."""
    for tier in CREDIT_TIERS:
        if total_credits <= tier:
            return tier
    return CREDIT_TIERS[-1]


def build_scope_summary(scope: Iterable[ScopeUnit]) -> List[str]:
    labels: List[str] = []
    for unit in scope:
        label = SCOPE_UNIT_LABELS[unit]
        if label not in labels:
            labels.append(label)
    return labels


def _over_budget_explanation(summary: List[str]) -> str:
    return (
        f"This mod includes: {', '.join(summary)}. "
        "That scope exceeds the current credit budget. Upgrade to generate this mod."
    )


class ScopeAccountant:
    """
    Scope & Credit Accountant

    Prices a request; never removes features and never blocks generation.
    """

    def __init__(self, budget: Optional[int] = None):
        """
        Initialize accountant

        Args:
            budget: Default comparison budget; one of the credit tiers
        """
        self.budget = self._check_budget(budget if budget is not None else DEFAULT_CREDIT_BUDGET)

    @staticmethod
    def _check_budget(budget: int) -> int:
        if budget not in CREDIT_TIERS:
            raise ValueError(f"Budget must be one of {list(CREDIT_TIERS)}, got {budget}")
        return budget

    def account(
        self,
        intents: Iterable[UserIntent],
        prompt: Optional[str] = None,
        budget: Optional[int] = None,
    ) -> ScopeBudgetResult:
        """
        Price a request

        Args:
            intents: Per-entity intents, in spec order
            prompt: Whole-request prompt, expanded as an item description
            budget: Comparison budget; defaults to the accountant's budget

        Returns:
            ScopeBudgetResult (informational only)

        Raises:
            ValueError: If budget is not one of the credit tiers
        """
        budget = self._check_budget(budget) if budget is not None else self.budget

        scope: List[ScopeUnit] = []
        for intent in intents:
            scope.extend(expand_intent_to_scope(intent))
        if prompt:
            scope.extend(expand_prompt_to_scope(prompt))

        total = calculate_scope_credits(scope)
        fits = total <= budget
        summary = build_scope_summary(scope)

        if not fits:
            logger.info(f"[Accountant] ⚠ {total} credits exceeds budget {budget}; generation continues")

        return ScopeBudgetResult(
            scope=scope,
            total_credits=total,
            budget=budget,
            budget_tier=select_budget_tier(total),
            fits_budget=fits,
            over_by=max(0, total - budget),
            scope_summary=summary,
            explanation="" if fits else _over_budget_explanation(summary),
        )


def credits_to_visual_level(credits: int) -> VisualLevel:
    capped = max(0, min(credits, CREDIT_TIERS[-1]))
    for tier, level in zip(CREDIT_TIERS, (VisualLevel.BASIC, VisualLevel.ENHANCED,
                                          VisualLevel.ADVANCED, VisualLevel.LEGENDARY)):
        if capped <= tier:
            return level
    return VisualLevel.LEGENDARY


def visual_features(level: VisualLevel) -> List[str]:
    definition = VISUAL_LEVEL_DEFINITIONS[level]
    features = []
    if definition.emissive_allowed:
        features.append("emissive")
    if definition.glow_allowed:
        features.append("glow")
    if definition.layered_allowed:
        features.append("layered")
    return features


def build_request_summary(
    result: ScopeBudgetResult,
    blueprint_summaries: Optional[List[str]] = None,
) -> RequestSummary:
    """
    Build the read-facing credit and visual summary

    Args:
        result: Accountant output for the request
        blueprint_summaries: Optional per-entity visual summaries

    Returns:
        RequestSummary for the status API
    """
    level = credits_to_visual_level(result.total_credits)
    resolution = VISUAL_LEVEL_DEFINITIONS[level].texture_resolution
    summaries = blueprint_summaries or []
    if not summaries:
        blueprint = f"{level.value} ({resolution}px)"
    elif len(summaries) == 1:
        blueprint = summaries[0]
    else:
        blueprint = f"{summaries[0]} + {len(summaries) - 1} more"

    return RequestSummary(
        total_credits=result.total_credits,
        budget=result.budget,
        budget_tier=result.budget_tier,
        fits_budget=result.fits_budget,
        scope_summary=list(result.scope_summary),
        visual_level=level,
        texture_resolution=resolution,
        visual_features=visual_features(level),
        blueprint_summary=blueprint,
    )


__all__ = [
    "ScopeAccountant",
    "expand_intent_to_scope",
    "expand_prompt_to_scope",
    "calculate_scope_credits",
    "select_budget_tier",
    "build_scope_summary",
    "credits_to_visual_level",
    "visual_features",
    "build_request_summary",
]
