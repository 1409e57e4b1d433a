"""
Schemas for the modsmith content pipeline

These schemas define the contracts between pipeline stages:
- Analysis: what the request says and whether to ask about it
- Spec: canonical Content Specification (versioned, JSON-compatible)
- Expanded: Content Specification plus derived families
- Plan: Systems, Primitives and execution plans
- Scope: credits, budgets and the read-facing summary
- Texture: aesthetic profile through final texture plan
- Output: asset keys, materialized files, validation reports
"""
from .analysis_schema import (
    Confidence,
    IssueKind,
    DetectedKind,
    PromptIssue,
    PromptAnalysis,
    ClarificationAction,
    ClarificationDecision,
)
from .spec_schema import (
    FeatureKey,
    RecipeType,
    COOKING_RECIPE_TYPES,
    ModItem,
    ModBlock,
    RecipeIngredient,
    RecipeResult,
    ModRecipe,
    WoodType,
    SpecConstraints,
    ContentSpec,
)
from .expanded_schema import (
    EntityCategory,
    VisualShape,
    TagRegistry,
    CreativeTab,
    CreativeTabEntry,
    VisualDescriptor,
    LootTable,
    TagContribution,
    ExpandedSpec,
)
from .plan_schema import (
    Primitive,
    SystemUnit,
    IntentCategory,
    UserIntent,
    SafetyBounds,
    PrimitiveDefinition,
    SystemDefinition,
    ExecutionPlan,
    AggregatedExecutionPlan,
)
from .scope_schema import ScopeUnit, VisualLevel, ScopeBudgetResult, RequestSummary
from .texture_schema import (
    AnimationHint,
    ContrastLevel,
    BaseNoise,
    DetailLayerType,
    TextureStyle,
    AestheticProfile,
    InterpretedAesthetics,
    TextureSource,
    AnimationSpec,
    TextureRecipe,
    GeneratedPalette,
    DetailLayer,
    PostProcess,
    ProceduralTextureSpec,
    StyledTextureSpec,
    FinalTexturePlan,
    RasterizedTexture,
)
from .output_schema import AssetKind, AssetKey, EntityAssets, MaterializedFile, ValidationReport

__all__ = [
    # Analysis
    "Confidence",
    "IssueKind",
    "DetectedKind",
    "PromptIssue",
    "PromptAnalysis",
    "ClarificationAction",
    "ClarificationDecision",
    # Spec (canonical)
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
    # Expanded
    "EntityCategory",
    "VisualShape",
    "TagRegistry",
    "CreativeTab",
    "CreativeTabEntry",
    "VisualDescriptor",
    "LootTable",
    "TagContribution",
    "ExpandedSpec",
    # Plan
    "Primitive",
    "SystemUnit",
    "IntentCategory",
    "UserIntent",
    "SafetyBounds",
    "PrimitiveDefinition",
    "SystemDefinition",
    "ExecutionPlan",
    "AggregatedExecutionPlan",
    # Scope
    "ScopeUnit",
    "VisualLevel",
    "ScopeBudgetResult",
    "RequestSummary",
    # Texture
    "AnimationHint",
    "ContrastLevel",
    "BaseNoise",
    "DetailLayerType",
    "TextureStyle",
    "AestheticProfile",
    "InterpretedAesthetics",
    "TextureSource",
    "AnimationSpec",
    "TextureRecipe",
    "GeneratedPalette",
    "DetailLayer",
    "PostProcess",
    "ProceduralTextureSpec",
    "StyledTextureSpec",
    "FinalTexturePlan",
    "RasterizedTexture",
    # Output
    "AssetKind",
    "AssetKey",
    "EntityAssets",
    "MaterializedFile",
    "ValidationReport",
]
