"""
Intent Interpreter - request text -> canonical Content Specification

Responsibilities:
- Run prompt understanding and the clarification gate
- Strip any appended "Clarification Answer:" before deriving names or ids
- Apply explicit directives (entity lists, wood types, cooking, constraints)
- Otherwise derive a single base entity from the request
- Keep clarification dialogue ("poison" phrases) out of every id and name

Stateless: one IntentInterpreter can serve any number of requests.
"""
import logging
import re
from typing import List, Optional

from pydantic import BaseModel

from config import DEFAULT_MOD_ID
from modsmith.interpretation.clarification import ClarificationGate
from modsmith.interpretation.directives import (
    COOKING_EXPERIENCE,
    COOKING_TIMES,
    MAX_DISPLAY_NAME_LEN,
    MAX_ID_LEN,
    extract_constraints,
    extract_cooking_directives,
    extract_entity_list,
    extract_wood_types,
    parse_cooking_phrases,
    slug_from_display_name,
)
from modsmith.interpretation.understanding import PromptUnderstanding, normalize_prompt
from modsmith.schemas import (
    ClarificationAction,
    ClarificationDecision,
    ContentSpec,
    DetectedKind,
    EntityCategory,
    FeatureKey,
    ModBlock,
    ModItem,
    ModRecipe,
    PromptAnalysis,
    RecipeIngredient,
    RecipeResult,
    RecipeType,
)

logger = logging.getLogger(__name__)

META_CONCEPTS = frozenset({"block", "blocks", "item", "items", "magic", "magical", "strange", "mysterious"})

POISON_PHRASES = (
    "should i",
    "which direction",
    "conflicting ideas",
    "hot and frozen",
    "hot or cold",
    "something else",
    "rephrase",
    "have in mind",
    "not quite sure",
)

CLARIFICATION_MARKER = "clarification answer:"

CALLED_NAME = re.compile(r"\bcalled\s+([a-z][a-z0-9\s]*?)(?=\s*[.,]|\s+and\s|$)", re.IGNORECASE)
BLOCK_NAME = re.compile(r"\b(a\s+)?([a-z][a-z0-9\s]{0,24})\s+block\b", re.IGNORECASE)
WANTS_SMELT = re.compile(r"\bsmelt(s|ing|able)?\b|\bfurnace\b|\bmelt(ed)?\b")
CRAFT_FROM = re.compile(r"\bcraft(able)?\s+from\s+(\d+)\s+(?:(\w+)\s+)?(?:items?|ingredients?)?\b")
TRAILING_BLOCK = re.compile(r"\s+Block$", re.IGNORECASE)
VALID_ID = re.compile(r"^[a-z][a-z0-9_]*$")

# Checked in order; the first color word present wins
COLOR_WORDS = (
    ("yellow", re.compile(r"\byellow\b")),
    ("red", re.compile(r"\bred\b")),
    ("blue", re.compile(r"\bblue\b")),
    ("green", re.compile(r"\bgreen\b")),
    ("orange", re.compile(r"\borange\b")),
    ("purple", re.compile(r"\bpurple\b")),
    ("white", re.compile(r"\bwhite\b")),
    ("black", re.compile(r"\bblack\b")),
    ("gray", re.compile(r"\bgray\b|\bgrey\b")),
)


class InterpretationError(Exception):
    """Raised when the interpreter is called with something that is not request text"""
    pass


class InterpretationResult(BaseModel):
    """Either a clarification to send back, or a Content Specification"""
    action: ClarificationAction
    spec: Optional[ContentSpec] = None
    clarification: Optional[ClarificationDecision] = None
    analysis: PromptAnalysis

    @property
    def needs_clarification(self) -> bool:
        return self.action == ClarificationAction.ASK


def strip_clarification_suffix(prompt: str) -> str:
    """Drop 'Clarification Answer:' and everything after it (case-insensitive)."""
    index = prompt.lower().find(CLARIFICATION_MARKER)
    if index >= 0:
        return prompt[:index].strip()
    return prompt


def clarification_answer(prompt: str) -> str:
    index = prompt.lower().find(CLARIFICATION_MARKER)
    if index < 0:
        return ""
    return prompt[index + len(CLARIFICATION_MARKER):].strip()


def contains_poison(text: str) -> bool:
    lower = text.lower()
    return any(phrase in lower for phrase in POISON_PHRASES)


def color_from_text(text: str) -> Optional[str]:
    lower = text.lower()
    for color, pattern in COLOR_WORDS:
        if pattern.search(lower):
            return color
    return None


def _title(name: str) -> str:
    return " ".join(w[0].upper() + w[1:].lower() for w in name.split())


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def _first_content_concept(concepts: List[str]) -> str:
    return next((c for c in concepts if c.lower() not in META_CONCEPTS), "custom")


def _id_from_concepts(concepts: List[str], is_block: bool) -> str:
    """Fallback id from the first non-meta concept."""
    base = re.sub(r"[^a-z0-9]", "_", _first_content_concept(concepts).lower())
    base = re.sub(r"_+", "_", base).strip("_") or "custom"
    if is_block and not base.endswith("_block"):
        base = base + "_block"
    out = base[:MAX_ID_LEN]
    return out if re.match(r"^[a-z]", out) else "m_" + out


def display_name_from_request(request: str, first_concept: str, is_block: bool) -> str:
    """
    Human display name from the original request only

    Preference: "called X", then "X block", then the first content concept.
    Candidates containing clarification dialogue are skipped.
    """
    lower = request.lower()

    called = CALLED_NAME.search(lower)
    if called:
        name = re.sub(r"\s+", " ", called.group(1).strip())[:MAX_DISPLAY_NAME_LEN]
        if name and not contains_poison(name):
            title = _title(name)
            if title:
                if is_block and not re.search(r"block$", title, re.IGNORECASE):
                    return f"{title} Block"
                return title

    block = BLOCK_NAME.search(lower)
    if block:
        name = re.sub(r"\s+", " ", block.group(2).strip())[:MAX_DISPLAY_NAME_LEN]
        if name and not contains_poison(name):
            title = _title(name)
            if title:
                return f"{title} Block"

    fallback = _capitalize(first_concept) if first_concept else "Custom"
    return f"{fallback} Block" if is_block else fallback


class IntentInterpreter:
    """Maps request text to a ContentSpec, or to a clarification question"""

    def __init__(
        self,
        understanding: Optional[PromptUnderstanding] = None,
        gate: Optional[ClarificationGate] = None,
    ):
        """
        Initialize interpreter

        Args:
            understanding: Prompt understanding stage (default instance if None)
            gate: Clarification gate (default instance if None)
        """
        self.understanding = understanding or PromptUnderstanding()
        self.gate = gate or ClarificationGate()

    def interpret(self, prompt: Optional[str], block_only: bool = False) -> InterpretationResult:
        """
        Interpret a request

        Args:
            prompt: Request text; None is treated as empty
            block_only: Request is for a functional block (cosmetic contradictions proceed)

        Returns:
            InterpretationResult with either a spec or a clarification

        Raises:
            InterpretationError: If prompt is neither a string nor None
        """
        if prompt is None:
            prompt = ""
        if not isinstance(prompt, str):
            raise InterpretationError(f"prompt must be a string, got {type(prompt).__name__}")

        analysis = self.understanding.analyze(prompt)
        decision = self.gate.decide(analysis, block_only=block_only)
        if decision.should_ask:
            logger.info(f"[Interpreter] Asking for clarification ({analysis.confidence.value} confidence)")
            return InterpretationResult(
                action=ClarificationAction.ASK,
                clarification=decision,
                analysis=analysis,
            )

        spec = self.build_spec(prompt)
        logger.info(
            f"[Interpreter] ✓ Spec with {len(spec.items)} items, {len(spec.blocks)} blocks, "
            f"{len(spec.recipes)} recipes, {len(spec.wood_types)} wood types"
        )
        return InterpretationResult(
            action=ClarificationAction.PROCEED,
            spec=spec,
            clarification=decision,
            analysis=analysis,
        )

    def build_spec(self, prompt: str) -> ContentSpec:
        """
        Build the Content Specification for a request that passed the gate

        Names, ids and directives come from the original request with any
        clarification answer removed; the answer is only read for a color hint.

        Args:
            prompt: Original request text

        Returns:
            ContentSpec
        """
        request = strip_clarification_suffix(prompt)
        prompt_for_spec = normalize_prompt(request)

        constraints = extract_constraints(request)
        entity_list = extract_entity_list(request)
        wood_types = extract_wood_types(request)

        items: List[ModItem] = []
        blocks: List[ModBlock] = []
        recipes: List[ModRecipe] = []

        for entity in entity_list.entities:
            if entity.category == EntityCategory.BLOCK:
                if constraints.no_blocks:
                    continue
                block_id = slug_from_display_name(entity.display_name, is_block=True)
                if not any(b.id == block_id for b in blocks):
                    blocks.append(ModBlock(id=block_id, name=entity.display_name))
            else:
                item_id = slug_from_display_name(entity.display_name, is_block=False)
                if not any(i.id == item_id for i in items):
                    items.append(ModItem(id=item_id, name=entity.display_name))

        cooking_phrases = parse_cooking_phrases(request)
        cooking = extract_cooking_directives(request, items, blocks, no_recipes=constraints.no_recipes)
        for item in cooking.items_to_add:
            if not any(i.id == item.id for i in items):
                items.append(item)
        recipes.extend(cooking.recipes)

        mod_display_name: Optional[str] = wood_types[0].display_name if wood_types else None

        directive_entities = bool(items or blocks or wood_types)
        if directive_entities:
            logger.info("[Interpreter] Explicit directives found; skipping the base entity")
        else:
            mod_display_name = self._add_base_entity(
                request=request,
                answer=clarification_answer(prompt),
                prompt_for_spec=prompt_for_spec,
                block_allowed=not constraints.no_blocks,
                smelt_allowed=not cooking_phrases,
                items=items,
                blocks=blocks,
                recipes=recipes,
            )

        if constraints.no_recipes:
            recipes = []

        mod_name = "Generated Mod"
        if mod_display_name and not contains_poison(mod_display_name):
            mod_name = f"{TRAILING_BLOCK.sub('', mod_display_name).strip()} Mod"

        return ContentSpec(
            mod_id=DEFAULT_MOD_ID,
            mod_name=mod_name,
            features=[FeatureKey.HELLO_WORLD],
            items=items,
            blocks=blocks,
            recipes=recipes,
            wood_types=wood_types,
            constraints=constraints,
        )

    def _add_base_entity(
        self,
        request: str,
        answer: str,
        prompt_for_spec: str,
        block_allowed: bool,
        smelt_allowed: bool,
        items: List[ModItem],
        blocks: List[ModBlock],
        recipes: List[ModRecipe],
    ) -> str:
        """Append the heuristic base entity (plus craft/smelt extras); returns its display name."""
        analysis = self.understanding.analyze(prompt_for_spec)
        concepts = analysis.concepts
        is_block = analysis.detected_kind == DetectedKind.BLOCK and block_allowed
        first_concept = _first_content_concept(concepts)

        display_name = display_name_from_request(request, first_concept, is_block)
        if contains_poison(display_name):
            display_name = f"{_capitalize(first_concept)} Block" if is_block else _capitalize(first_concept)
        base_name = TRAILING_BLOCK.sub("", display_name).strip() or display_name

        block_id = slug_from_display_name(display_name, is_block=True)
        if not (VALID_ID.match(block_id) and len(block_id) <= MAX_ID_LEN):
            block_id = _id_from_concepts(concepts, is_block=True)
        item_id = slug_from_display_name(base_name, is_block=False)
        if not (VALID_ID.match(item_id) and len(item_id) <= MAX_ID_LEN):
            item_id = _id_from_concepts(concepts, is_block=False)

        color_hint = color_from_text(prompt_for_spec) or color_from_text(answer)
        description = prompt_for_spec or None

        lower_full = prompt_for_spec.lower()
        wants_smelt = smelt_allowed and bool(WANTS_SMELT.search(lower_full))
        craft_match = CRAFT_FROM.search(lower_full)
        craft_count = min(9, max(1, int(craft_match.group(2)))) if craft_match else 0

        if is_block:
            blocks.append(ModBlock(id=block_id, name=display_name or "Block",
                                   description=description, color_hint=color_hint))
            if craft_count > 0:
                items.append(ModItem(id=item_id, name=base_name or "Item", color_hint=color_hint))
                recipes.append(ModRecipe(
                    id=f"{block_id}_from_{item_id}",
                    type=RecipeType.CRAFTING_SHAPELESS,
                    ingredients=[RecipeIngredient(id=item_id, count=craft_count)],
                    result=RecipeResult(id=block_id, count=1),
                ))
            if wants_smelt:
                melted_id = slug_from_display_name(f"Melted {base_name}", is_block=False)
                if not VALID_ID.match(melted_id):
                    melted_id = ("melted_" + ("block" if item_id == "custom" else item_id))[:MAX_ID_LEN]
                if not any(i.id == melted_id for i in items):
                    items.append(ModItem(id=melted_id, name=f"Melted {base_name}", color_hint=color_hint))
                recipes.append(ModRecipe(
                    id=f"{melted_id}_from_block",
                    type=RecipeType.SMELTING,
                    ingredients=[RecipeIngredient(id=block_id, count=1)],
                    result=RecipeResult(id=melted_id, count=1),
                    experience=COOKING_EXPERIENCE,
                    cooking_time=COOKING_TIMES[RecipeType.SMELTING],
                ))
        else:
            items.append(ModItem(id=item_id, name=display_name or "Item",
                                 description=description, color_hint=color_hint))
            if wants_smelt:
                melted_id = ("melted_" + item_id)[:MAX_ID_LEN]
                items.append(ModItem(id=melted_id, name=f"Melted {display_name or 'Item'}", color_hint=color_hint))
                recipes.append(ModRecipe(
                    id=f"{melted_id}_from_item",
                    type=RecipeType.SMELTING,
                    ingredients=[RecipeIngredient(id=item_id, count=1)],
                    result=RecipeResult(id=melted_id, count=1),
                    experience=COOKING_EXPERIENCE,
                    cooking_time=COOKING_TIMES[RecipeType.SMELTING],
                ))

        logger.info(f"[Interpreter] Base {'block' if is_block else 'item'}: {display_name}")
        return display_name


__all__ = [
    "META_CONCEPTS",
    "POISON_PHRASES",
    "InterpretationError",
    "InterpretationResult",
    "strip_clarification_suffix",
    "contains_poison",
    "color_from_text",
    "display_name_from_request",
    "IntentInterpreter",
]
