"""
Core Pipeline Components

Stages 4-6 of the pipeline plus the collaborators around them:
1. Spec Expander - Content Specification -> Expanded Specification
2. Registries - closed Primitive / System / Scope Unit / Visual Level tables
3. Execution Planner - intent -> Systems -> Primitives -> plan
4. Scope Accountant - intent -> Scope Units -> credits (never blocking)
5. Validator - ordered spec gates and materialized output checks
6. Spec Manager - versioned persistence of the canonical spec
"""
from .expansion import SpecExpander, ExpansionError, WOOD_FAMILY, wood_member_for
from .registries import (
    PRIMITIVE_REGISTRY,
    SYSTEM_REGISTRY,
    SCOPE_COSTS,
    SCOPE_UNIT_LABELS,
    CREDIT_TIERS,
    VISUAL_LEVEL_DEFINITIONS,
)
from .execution_planner import ExecutionPlanner, aggregate_execution_plans, build_safety_disclosure
from .scope_accountant import (
    ScopeAccountant,
    expand_intent_to_scope,
    expand_prompt_to_scope,
    select_budget_tier,
    credits_to_visual_level,
    build_request_summary,
)
from .validator import (
    SpecValidator,
    SpecValidationError,
    OutputValidator,
    OutputValidationError,
    validate_materialized_files,
)
from .spec_manager import SpecManager, SpecVersion

__all__ = [
    # Expansion
    "SpecExpander",
    "ExpansionError",
    "WOOD_FAMILY",
    "wood_member_for",
    # Registries
    "PRIMITIVE_REGISTRY",
    "SYSTEM_REGISTRY",
    "SCOPE_COSTS",
    "SCOPE_UNIT_LABELS",
    "CREDIT_TIERS",
    "VISUAL_LEVEL_DEFINITIONS",
    # Planning
    "ExecutionPlanner",
    "aggregate_execution_plans",
    "build_safety_disclosure",
    # Accounting
    "ScopeAccountant",
    "expand_intent_to_scope",
    "expand_prompt_to_scope",
    "select_budget_tier",
    "credits_to_visual_level",
    "build_request_summary",
    # Validation
    "SpecValidator",
    "SpecValidationError",
    "OutputValidator",
    "OutputValidationError",
    "validate_materialized_files",
    # Persistence
    "SpecManager",
    "SpecVersion",
]
