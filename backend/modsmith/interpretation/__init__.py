"""
Interpretation Layer

Stages 1-3 of the pipeline:
1. Prompt Understanding - normalization, concepts, nonsense/contradiction detection
2. Clarification Gate - ask or proceed
3. Intent Interpreter - directives + base entity -> Content Specification

Aesthetic decomposition (text -> semantic tags + aesthetic profile) also lives
here; the texture stage consumes its output.
"""
from .understanding import PromptUnderstanding, normalize_prompt, normalize_word, extract_concepts
from .clarification import ClarificationGate, COSMETIC_WORDS
from .directives import (
    extract_entity_list,
    extract_constraints,
    extract_wood_types,
    parse_cooking_phrases,
    extract_cooking_directives,
    cooking_recipe_id,
    slug_from_display_name,
)
from .aesthetics import interpret_aesthetics
from .interpreter import (
    IntentInterpreter,
    InterpretationResult,
    InterpretationError,
    strip_clarification_suffix,
    POISON_PHRASES,
)

__all__ = [
    # Understanding
    "PromptUnderstanding",
    "normalize_prompt",
    "normalize_word",
    "extract_concepts",
    # Clarification
    "ClarificationGate",
    "COSMETIC_WORDS",
    # Directives
    "extract_entity_list",
    "extract_constraints",
    "extract_wood_types",
    "parse_cooking_phrases",
    "extract_cooking_directives",
    "cooking_recipe_id",
    "slug_from_display_name",
    # Aesthetics
    "interpret_aesthetics",
    # Interpreter
    "IntentInterpreter",
    "InterpretationResult",
    "InterpretationError",
    "strip_clarification_suffix",
    "POISON_PHRASES",
]
