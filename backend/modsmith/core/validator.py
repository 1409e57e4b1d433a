"""
Validator - Content Specification gates and materialized output checks

Responsibilities:
- Run the fixed, ordered gate list over a Content Specification
- Stop at the first failing gate and surface its reason and gate name unchanged
- Check the materialized file set before it is written (recipe folder and
  schema, wood loot coverage, additive tags)

Spec gates run before expansion so a rejected request never produces files.
"""
import json
import logging
import re
from typing import Callable, Dict, Iterable, List, Optional, Any

from config import MINECRAFT_VERSION, LOADER

from modsmith.schemas import (
    COOKING_RECIPE_TYPES,
    ContentSpec,
    ExpandedSpec,
    FeatureKey,
    MaterializedFile,
    RecipeType,
    ValidationReport,
)
from modsmith.interpretation.interpreter import COLOR_WORDS, contains_poison
from modsmith.core.expansion import wood_member_for

logger = logging.getLogger(__name__)

MOD_ID_PATTERN = re.compile(r"^[a-z][a-z0-9_]{0,63}$")
SLUG_PATTERN = re.compile(r"^[a-z0-9_]+$")
MAX_MOD_NAME_LEN = 128
MAX_LANG_VALUE_LEN = 80
KNOWN_COLORS = frozenset(color for color, _ in COLOR_WORDS) | {"grey"}

FORBIDDEN_KEYWORDS = (
    "flight",
    "fly",
    "double jump",
    "dash",
    "gravity",
    "vehicle",
    "moving block",
    "physics engine",
    "time manipulation",
    "slow motion",
    "speed hack",
    "no-clip",
    "teleport block",
    "portable",
)
# Keywords match at a word start, so "flying" hits "fly" but "butterfly" does not
FORBIDDEN_PATTERNS = tuple((kw, re.compile(r"\b" + re.escape(kw))) for kw in FORBIDDEN_KEYWORDS)

GATE_SCHEMA = "schema-consistency"
GATE_HYGIENE = "spec-hygiene"
GATE_VERSION = "version"
GATE_FORBIDDEN = "forbidden-mechanics"
GATE_SURVIVAL = "survival-integration"
GATE_TEXTURE = "texture-completeness"
GATE_RECIPE = "recipe-schema"


class SpecValidationError(Exception):
    """Raised when a Content Specification fails a validation gate"""

    def __init__(self, reason: str, gate: str):
        super().__init__(f"[{gate}] {reason}")
        self.reason = reason
        self.gate = gate


class OutputValidationError(Exception):
    """Raised when the materialized file set is malformed"""
    pass


class ValidationIssue:
    """A single output validation issue"""
    def __init__(self, severity: str, category: str, message: str, file_path: Optional[str] = None):
        self.severity = severity  # ERROR, WARNING
        self.category = category  # recipe, loot_table, tag
        self.message = message
        self.file_path = file_path

    def __repr__(self):
        return f"[{self.severity}] {self.category}: {self.message}" + (f" ({self.file_path})" if self.file_path else "")


class SpecValidator:
    """
    Spec Validator - ordered gates, first failure wins
    """

    def __init__(self):
        self.gates: List[tuple] = [
            (GATE_SCHEMA, lambda spec, prompt: self._schema_consistency(spec)),
            (GATE_HYGIENE, lambda spec, prompt: self._spec_hygiene(spec)),
            (GATE_VERSION, lambda spec, prompt: self._version(spec)),
            (GATE_FORBIDDEN, self._forbidden_mechanics),
            (GATE_SURVIVAL, lambda spec, prompt: self._survival_integration(spec)),
            (GATE_TEXTURE, lambda spec, prompt: self._texture_completeness(spec)),
            (GATE_RECIPE, lambda spec, prompt: self._recipe_schema(spec)),
        ]

    def validate(self, spec: ContentSpec, prompt: Optional[str] = None) -> ValidationReport:
        """
        Run every gate in order

        Args:
            spec: Content Specification to check
            prompt: Originating request text (read by the forbidden-mechanics gate)

        Returns:
            ValidationReport; reason and gate are set on failure
        """
        gates_run: List[str] = []
        for gate, check in self.gates:
            gates_run.append(gate)
            reason = check(spec, prompt)
            if reason:
                logger.info(f"[Validator] ✗ Gate '{gate}' failed: {reason}")
                return ValidationReport(valid=False, reason=reason, gate=gate, gates_run=gates_run)

        logger.info(f"[Validator] ✓ Validation passed ({len(gates_run)} gates)")
        return ValidationReport(valid=True, gates_run=gates_run)

    def validate_or_raise(self, spec: ContentSpec, prompt: Optional[str] = None) -> ValidationReport:
        """
        Validate and raise on the first failing gate

        Raises:
            SpecValidationError: With the failing gate's reason and name
        """
        report = self.validate(spec, prompt)
        if not report.valid:
            raise SpecValidationError(report.reason, report.gate)
        return report

    # ---- gates ----

    @staticmethod
    def _schema_consistency(spec: ContentSpec) -> Optional[str]:
        if not MOD_ID_PATTERN.match(spec.mod_id):
            return ("modId must be lowercase, start with a letter, and contain only letters, "
                    "numbers, underscores (max 64 chars).")
        if not spec.mod_name or len(spec.mod_name) > MAX_MOD_NAME_LEN:
            return "modName must be 1-128 characters."
        if not spec.features:
            return "At least one feature is required."
        supported = {f.value for f in FeatureKey}
        for feature in spec.features:
            value = feature.value if isinstance(feature, FeatureKey) else str(feature)
            if value not in supported:
                return f'Unsupported feature: "{value}".'

        for namespace, entities in (("item", spec.items), ("block", spec.blocks)):
            seen = set()
            for entity in entities:
                if not SLUG_PATTERN.match(entity.id):
                    return f'{namespace} id "{entity.id}" must be a lowercase slug.'
                if entity.id in seen:
                    return f'Duplicate {namespace} id "{entity.id}".'
                seen.add(entity.id)

        known = {item.id for item in spec.items} | {block.id for block in spec.blocks}
        for recipe in spec.recipes:
            reason = _recipe_shape_error(recipe)
            if reason:
                return reason
            for ref in recipe.ingredient_ids() + [recipe.result.id]:
                if ":" not in ref and ref not in known:
                    return f'Recipe {recipe.id}: "{ref}" is not an item or block in the spec.'
        return None

    @staticmethod
    def _spec_hygiene(spec: ContentSpec) -> Optional[str]:
        if contains_poison(spec.mod_name):
            return f'modName contains disallowed phrase: "{spec.mod_name}"'
        if len(spec.mod_name) > MAX_LANG_VALUE_LEN:
            return f"modName exceeds {MAX_LANG_VALUE_LEN} chars"
        for namespace, entities in (("item", spec.items), ("block", spec.blocks)):
            for entity in entities:
                if contains_poison(entity.id):
                    return f'{namespace} id "{entity.id}" contains disallowed phrase'
                if contains_poison(entity.name):
                    return f'{namespace} "{entity.id}" name contains disallowed phrase: "{entity.name}"'
                if len(entity.name) > MAX_LANG_VALUE_LEN:
                    return f'{namespace} "{entity.id}" name exceeds {MAX_LANG_VALUE_LEN} chars'
        return None

    @staticmethod
    def _version(spec: ContentSpec) -> Optional[str]:
        if spec.minecraft_version != MINECRAFT_VERSION:
            return f"Only Minecraft {MINECRAFT_VERSION} is supported (got {spec.minecraft_version})."
        if spec.loader != LOADER:
            return f"Only the {LOADER} loader is supported (got {spec.loader})."
        return None

    @staticmethod
    def _forbidden_mechanics(spec: ContentSpec, prompt: Optional[str]) -> Optional[str]:
        features = json.dumps([f.value if isinstance(f, FeatureKey) else f for f in spec.features])
        text = " ".join([prompt or "", spec.mod_name, features]).lower()
        for keyword, pattern in FORBIDDEN_PATTERNS:
            if pattern.search(text):
                return (f'Forbidden mechanics detected: "{keyword}". We do not support flight, dash, '
                        "double jump, gravity edits, vehicles, time manipulation, or moving blocks.")
        return None

    @staticmethod
    def _survival_integration(spec: ContentSpec) -> Optional[str]:
        # Every block gets a drop-self loot table; only a wood family colliding with a
        # declared block would leave that block's drop ambiguous.
        declared_blocks = {block.id for block in spec.blocks}
        for wood in spec.wood_types:
            if wood.id in declared_blocks:
                return f'Wood type "{wood.id}" collides with declared block "{wood.id}" (Survival integration).'
            for block_id in declared_blocks:
                if wood_member_for(block_id, [wood.id]):
                    return (f'Block "{block_id}" collides with the "{wood.id}" wood family '
                            "(Survival integration).")
        return None

    @staticmethod
    def _texture_completeness(spec: ContentSpec) -> Optional[str]:
        for namespace, entities in (("item", spec.items), ("block", spec.blocks)):
            for entity in entities:
                if not entity.name.strip():
                    return f'{namespace} "{entity.id}" has no name to derive a texture from.'
                if entity.texture_path and not entity.texture_path.endswith(".png"):
                    return f'Asset "{entity.texture_path}" must be a .png texture.'
                if entity.color_hint and entity.color_hint.lower() not in KNOWN_COLORS:
                    return f'{namespace} "{entity.id}" has unknown color hint "{entity.color_hint}".'
        return None

    @staticmethod
    def _recipe_schema(spec: ContentSpec) -> Optional[str]:
        seen = set()
        for recipe in spec.recipes:
            if recipe.id in seen:
                return f'Duplicate recipe id "{recipe.id}".'
            seen.add(recipe.id)
            if recipe.type in COOKING_RECIPE_TYPES:
                if recipe.cooking_time is None or recipe.cooking_time <= 0:
                    return f"Recipe {recipe.id}: {recipe.type.value} must have a positive cooking time."
                if recipe.experience is None or recipe.experience < 0:
                    return f"Recipe {recipe.id}: {recipe.type.value} experience must be non-negative."
        return None


def _recipe_shape_error(recipe) -> Optional[str]:
    if recipe.type == RecipeType.CRAFTING_SHAPELESS:
        if not recipe.ingredients:
            return f"Recipe {recipe.id}: crafting_shapeless must have at least one ingredient."
    elif recipe.type == RecipeType.CRAFTING_SHAPED:
        if not recipe.pattern:
            return f"Recipe {recipe.id}: crafting_shaped must have pattern."
        if not recipe.key:
            return f"Recipe {recipe.id}: crafting_shaped must have key."
    elif recipe.type in COOKING_RECIPE_TYPES:
        if len(recipe.ingredients) != 1:
            return f"Recipe {recipe.id}: {recipe.type.value} must have exactly one ingredient."
        if recipe.ingredients[0].id == recipe.result.id:
            return f"Recipe {recipe.id}: {recipe.type.value} self-loop."
    return None


class OutputValidator:
    """
    Output Validator - checks a materialized file set before it is written
    """

    def __init__(self):
        self.issues: List[ValidationIssue] = []

    def validate(self, files: Iterable[MaterializedFile], expanded: Optional[ExpandedSpec] = None) -> Dict[str, Any]:
        """
        Validate a materialized file set

        Args:
            files: Materialized files
            expanded: Expanded spec, used to check wood loot coverage

        Returns:
            Validation report

        Raises:
            OutputValidationError: If any error is found
        """
        self.issues = []
        files = list(files)

        self._validate_recipe_files(files)
        self._validate_tag_files(files)
        if expanded is not None:
            self._validate_wood_loot(files, expanded)

        errors = [i for i in self.issues if i.severity == "ERROR"]
        warnings = [i for i in self.issues if i.severity == "WARNING"]

        report = {
            "status": "failed" if errors else "passed",
            "total_issues": len(self.issues),
            "errors": len(errors),
            "warnings": len(warnings),
            "issues": [str(i) for i in self.issues],
        }

        if errors:
            logger.error(f"[Validator] ✗ Output validation failed: {len(errors)} errors")
            for error in errors[:5]:
                logger.error(f"  - {error}")
            raise OutputValidationError(f"Output validation failed with {len(errors)} errors")

        logger.info(f"[Validator] ✓ Output validation passed ({len(files)} files)")
        return report

    def _validate_recipe_files(self, files: List[MaterializedFile]):
        for f in files:
            if "/recipes/" in f.path:
                self.issues.append(ValidationIssue(
                    "ERROR", "recipe", "Recipe folder must be singular 'recipe/'", f.path
                ))
            if "/recipe/" not in f.path or not f.path.endswith(".json"):
                continue
            data = _load_json(f)
            if not isinstance(data, dict):
                self.issues.append(ValidationIssue("ERROR", "recipe", "Recipe is not a JSON object", f.path))
                continue
            if not data.get("type"):
                self.issues.append(ValidationIssue("ERROR", "recipe", "Recipe is missing 'type'", f.path))
            result = data.get("result")
            if not isinstance(result, dict) or not result.get("id"):
                self.issues.append(ValidationIssue("ERROR", "recipe", "Recipe result must be {id, count}", f.path))

    def _validate_tag_files(self, files: List[MaterializedFile]):
        for f in files:
            if "/tags/" not in f.path or not f.path.endswith(".json"):
                continue
            data = _load_json(f)
            if not isinstance(data, dict) or data.get("replace") is not False:
                self.issues.append(ValidationIssue("ERROR", "tag", "Tag file must set \"replace\": false", f.path))

    def _validate_wood_loot(self, files: List[MaterializedFile], expanded: ExpandedSpec):
        wood_ids = [w.id for w in expanded.spec.wood_types]
        paths = {f.path for f in files}
        for block in expanded.blocks:
            if not wood_member_for(block.id, wood_ids):
                continue
            expected = f"src/main/resources/data/{expanded.mod_id}/loot_table/blocks/{block.id}.json"
            if expected not in paths:
                self.issues.append(ValidationIssue(
                    "ERROR", "loot_table", f"Missing loot table for wood block: {block.id}", expected
                ))


def _load_json(f: MaterializedFile):
    if f.is_binary:
        return None
    try:
        return json.loads(f.contents)
    except json.JSONDecodeError:
        return None


def validate_materialized_files(
    files: Iterable[MaterializedFile],
    expanded: Optional[ExpandedSpec] = None,
) -> Dict[str, Any]:
    """Convenience wrapper around OutputValidator.validate."""
    return OutputValidator().validate(files, expanded)


__all__ = [
    "SpecValidator",
    "SpecValidationError",
    "OutputValidator",
    "OutputValidationError",
    "ValidationIssue",
    "validate_materialized_files",
    "FORBIDDEN_KEYWORDS",
    "KNOWN_COLORS",
]
