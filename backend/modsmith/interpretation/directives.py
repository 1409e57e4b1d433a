"""
Directive Extraction - explicit structured phrases inside a request

Responsibilities:
- Entity lists: "Add 3 items: Ruby, Sapphire, Raw Tin", "blocks: Marble Block", "items (A, B)"
- Wood types: "new wood type called Maple", "wood types: Maple, Cherry"
- Cooking: "Smelt X into Y", "Blast X into Y", "Cook X in a campfire"
- Constraints: "no blocks", "no recipes", "no tools or weapons", "mineable with a pickaxe"

Display names keep the requester's capitalization; ids are slugs derived from them.
"""
import re
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from modsmith.schemas import (
    EntityCategory,
    ModBlock,
    ModItem,
    ModRecipe,
    RecipeIngredient,
    RecipeResult,
    RecipeType,
    SpecConstraints,
    WoodType,
)

MAX_ID_LEN = 32
MAX_DISPLAY_NAME_LEN = 48

COOKING_EXPERIENCE = 0.35
COOKING_TIMES = {
    RecipeType.SMELTING: 200,
    RecipeType.BLASTING: 100,
    RecipeType.SMOKING: 100,
    RecipeType.CAMPFIRE_COOKING: 600,
}


# ---------------------------------------------------------------------------
# Slugs and names
# ---------------------------------------------------------------------------

def _slug_base(name: str, default: str) -> str:
    slug = re.sub(r"[^a-z0-9\s]", "", name.lower()).strip()
    slug = re.sub(r"\s+", "_", slug)
    slug = re.sub(r"_+", "_", slug).strip("_")
    return slug[:MAX_ID_LEN] or default


def slug_from_display_name(display_name: str, is_block: bool = False) -> str:
    """
    Registry id from a display name

    At most 32 characters and always starting with a letter ('m_' prefix
    otherwise). Block ids end in '_block'.
    """
    base = _slug_base(display_name, "custom")
    if is_block and not base.endswith("_block"):
        base = base + "_block"
    out = base[:MAX_ID_LEN]
    return out if re.match(r"^[a-z]", out) else "m_" + out


def wood_slug(name: str) -> str:
    """Wood ids use a 'wood_' prefix when the slug does not start with a letter."""
    slug = _slug_base(name, "wood")
    return slug if re.match(r"^[a-z]", slug) else "wood_" + slug


def title_case(text: str, max_len: int = MAX_DISPLAY_NAME_LEN) -> str:
    words = text.strip().split()
    return " ".join(w[0].upper() + w[1:].lower() for w in words)[:max_len]


def split_list(list_text: str) -> List[str]:
    """Split on commas and ' and '; strip trailing periods."""
    joined = re.sub(r"\s+and\s+", ",", list_text, flags=re.IGNORECASE)
    names = [part.strip() for part in joined.split(",")]
    return [re.sub(r"\.+$", "", name) for name in names if re.sub(r"\.+$", "", name)]


# ---------------------------------------------------------------------------
# Entity lists and constraints
# ---------------------------------------------------------------------------

class ExtractedEntity(BaseModel):
    """A named entity from an explicit list"""
    display_name: str
    category: EntityCategory


class EntityListExtraction(BaseModel):
    """Entities from explicit lists plus the list-level constraints"""
    entities: List[ExtractedEntity] = Field(default_factory=list)
    no_blocks: bool = False
    no_recipes: bool = False


_COUNT = r"(?:one|two|three|four|five|\d+)"
ITEMS_ADD_LIST = re.compile(rf"\badd\s+{_COUNT}\s+items?\s*:\s*([^.]+\.?)", re.IGNORECASE)
ITEMS_COLON_LIST = re.compile(r"\bitems?\s*:\s*([^.]+\.?)", re.IGNORECASE)
BLOCKS_ADD_LIST = re.compile(rf"\badd\s+{_COUNT}\s+blocks?\s*:\s*([^.]+\.?)", re.IGNORECASE)
BLOCKS_COLON_LIST = re.compile(r"\bblocks?\s*:\s*([^.]+\.?)", re.IGNORECASE)
ITEMS_PAREN_LIST = re.compile(r"\bitems?\s*\(\s*([^)]+)\)", re.IGNORECASE)
BLOCKS_PAREN_LIST = re.compile(r"\bblocks?\s*\(\s*([^)]+)\)", re.IGNORECASE)

NO_BLOCKS = re.compile(r"\bno\s+blocks?\b")
NO_RECIPES = re.compile(r"\bno\s+recipes?\b")
FORBID_TOOLS_WEAPONS = re.compile(
    r"\bno\s+(tools?|weapons?)\b|\bno\s+tools?\s+or\s+weapons?\b"
    r"|\b(without|don't?\s*add)\s+(any\s+)?(tools?|weapons?)\b"
)
REQUIRE_PICKAXE = re.compile(r"\bmineable\s+with\s+(a\s+)?pickaxe\b|\bpickaxe\s+min(eable|ing)\b")


def _entities_from(match: Optional[re.Match], category: EntityCategory) -> List[ExtractedEntity]:
    if not match:
        return []
    return [ExtractedEntity(display_name=name, category=category) for name in split_list(match.group(1))]


def extract_entity_list(prompt: str) -> EntityListExtraction:
    """
    Extract explicit item/block lists

    "Add N items:" and "Add N blocks:" combine; the bare "items:"/"blocks:" and
    parenthesized forms are only tried while nothing has been found yet.
    """
    lower = prompt.lower().strip()
    entities = _entities_from(ITEMS_ADD_LIST.search(prompt), EntityCategory.ITEM)
    if not entities:
        entities = _entities_from(ITEMS_COLON_LIST.search(prompt), EntityCategory.ITEM)

    entities.extend(_entities_from(BLOCKS_ADD_LIST.search(prompt), EntityCategory.BLOCK))
    if not entities:
        entities = _entities_from(BLOCKS_COLON_LIST.search(prompt), EntityCategory.BLOCK)

    if not entities:
        entities = _entities_from(ITEMS_PAREN_LIST.search(prompt), EntityCategory.ITEM)
        entities.extend(_entities_from(BLOCKS_PAREN_LIST.search(prompt), EntityCategory.BLOCK))

    return EntityListExtraction(
        entities=entities,
        no_blocks=bool(NO_BLOCKS.search(lower)),
        no_recipes=bool(NO_RECIPES.search(lower)),
    )


def extract_constraints(prompt: str) -> SpecConstraints:
    """All four behavioral constraints from the request text."""
    lower = prompt.lower()
    return SpecConstraints(
        forbid_tools_weapons=bool(FORBID_TOOLS_WEAPONS.search(lower)),
        require_pickaxe_mining=bool(REQUIRE_PICKAXE.search(lower)),
        no_blocks=bool(NO_BLOCKS.search(lower)),
        no_recipes=bool(NO_RECIPES.search(lower)),
    )


# ---------------------------------------------------------------------------
# Wood types
# ---------------------------------------------------------------------------

_NAME_END = r"(?=\s*[.,]|\s+and\s|$)"
WOOD_TYPES_COLON = re.compile(r"\bwood\s+types?\s*:\s*([^.]+\.?)", re.IGNORECASE)
WOOD_TYPE_CALLED = re.compile(
    rf"\b(?:new\s+)?wood\s+types?\s+called\s+([a-zA-Z][a-zA-Z0-9\s]*?){_NAME_END}", re.IGNORECASE
)
WOOD_TYPE_NAMED = re.compile(
    rf"\b(?:add\s+(?:a\s+)?(?:new\s+)?)?wood\s+types?\s+(?:named\s+)?([a-zA-Z][a-zA-Z0-9\s]*?){_NAME_END}",
    re.IGNORECASE,
)
WOOD_CALLED = re.compile(
    rf"\b(?:add\s+(?:a\s+)?(?:new\s+)?)?wood\s+called\s+([a-zA-Z][a-zA-Z0-9\s]*?){_NAME_END}", re.IGNORECASE
)


def _wood_type(name: str) -> WoodType:
    return WoodType(id=wood_slug(name), display_name=title_case(name) or "Wood")


def extract_wood_types(prompt: str) -> List[WoodType]:
    """
    Extract wood-type declarations

    Forms are tried in order; the first that yields a name wins. A non-empty
    result means the interpreter must not add a standalone base entity.
    """
    trimmed = prompt.strip()

    colon = WOOD_TYPES_COLON.search(trimmed.lower())
    if colon:
        woods = [_wood_type(name) for name in split_list(colon.group(1))]
        if woods:
            return woods

    for pattern in (WOOD_TYPE_CALLED, WOOD_TYPE_NAMED, WOOD_CALLED):
        match = pattern.search(trimmed)
        if match:
            name = re.sub(r"\s+", " ", match.group(1).strip())[:MAX_DISPLAY_NAME_LEN]
            if name:
                return [_wood_type(name)]
    return []


# ---------------------------------------------------------------------------
# Cooking
# ---------------------------------------------------------------------------

class CookingDirective(BaseModel):
    """One parsed cooking phrase, names not yet resolved to ids"""
    kind: RecipeType
    ingredient_name: str
    result_name: str


SEGMENT_SPLIT = re.compile(r"\s+and\s+(?=smelt\s|blast\s|smoke\s|cook\s)", re.IGNORECASE)
TRAILING_CLAUSE = re.compile(r"\s+and\s+(?:smelt|blast|smoke|cook)\s+.*$", re.IGNORECASE)

SMELTING_PATTERNS = (
    re.compile(r"\bsmelt\s+(.+?)\s+into\s+(.+?)(?=[.]|$)", re.IGNORECASE),
    re.compile(r"\bsmelt\s+(.+?)\s+to\s+make\s+(.+?)(?=[.]|$)", re.IGNORECASE),
)
BLAST_INTO = re.compile(r"\bblast\s+(.+?)\s+into\s+(.+?)(?=[.]|$)", re.IGNORECASE)
SMOKE_INTO = re.compile(r"\bsmoke\s+(.+?)\s+into\s+(.+?)(?=[.]|$)", re.IGNORECASE)
COOK_INTO_CAMPFIRE = re.compile(r"\bcook\s+(.+?)\s+into\s+(.+?)\s+in\s+(?:a\s+)?campfire", re.IGNORECASE)
COOK_CAMPFIRE = re.compile(r"\bcook\s+(.+?)\s+in\s+(?:a\s+)?campfire", re.IGNORECASE)


def split_cooking_segments(prompt: str) -> List[str]:
    """Each segment holds at most one cooking verb."""
    return [segment.strip() for segment in SEGMENT_SPLIT.split(prompt) if segment.strip()]


def parse_cooking_phrases(prompt: str) -> List[CookingDirective]:
    """
    Parse cooking phrases in a stable order

    All smelting phrases come first, then blasting, smoking and campfire
    cooking, each in text order. "Cook X in a campfire" cooks X into itself,
    which is later dropped as a self-loop unless X resolves differently.
    """
    directives: List[CookingDirective] = []
    seen = set()

    def add(kind: RecipeType, ingredient: str, result: str):
        key = (kind, ingredient, result)
        if key in seen:
            return
        seen.add(key)
        ingredient = ingredient.strip()
        result = TRAILING_CLAUSE.sub("", result.strip()).strip()
        if ingredient and result:
            directives.append(CookingDirective(kind=kind, ingredient_name=ingredient, result_name=result))

    segments = split_cooking_segments(prompt)
    for segment in segments:
        for pattern in SMELTING_PATTERNS:
            for match in pattern.finditer(segment):
                add(RecipeType.SMELTING, match.group(1), match.group(2))

    for segment in segments:
        for match in BLAST_INTO.finditer(segment):
            add(RecipeType.BLASTING, match.group(1), match.group(2))
        for match in SMOKE_INTO.finditer(segment):
            add(RecipeType.SMOKING, match.group(1), match.group(2))
        for match in COOK_INTO_CAMPFIRE.finditer(segment):
            add(RecipeType.CAMPFIRE_COOKING, match.group(1), match.group(2))
        for match in COOK_CAMPFIRE.finditer(segment):
            name = match.group(1).strip()
            add(RecipeType.CAMPFIRE_COOKING, name, name)

    return directives


def cooking_recipe_id(result_id: str, ingredient_id: str, kind: RecipeType) -> str:
    """Stable id: '{result}_from_{ingredient}_{kind}' with ':' replaced by '_'."""
    return f"{result_id.replace(':', '_')}_from_{ingredient_id.replace(':', '_')}_{kind.value}"


def resolve_display_name(name: str, items: List[ModItem], blocks: List[ModBlock]) -> Optional[str]:
    """Existing item or block id for a display name, by slug or case-insensitive name."""
    normalized = name.strip()
    slug = slug_from_display_name(normalized, is_block=False)
    slug_block = slug_from_display_name(normalized, is_block=True)
    for item in items:
        if item.id == slug or item.name.lower() == normalized.lower():
            return item.id
    for block in blocks:
        if block.id in (slug, slug_block) or block.name.lower() == normalized.lower():
            return block.id
    return None


class CookingExtraction(BaseModel):
    """Cooking recipes plus the items they needed to create"""
    recipes: List[ModRecipe] = Field(default_factory=list)
    items_to_add: List[ModItem] = Field(default_factory=list)


def extract_cooking_directives(
    prompt: str,
    items: List[ModItem],
    blocks: List[ModBlock],
    no_recipes: bool = False,
) -> CookingExtraction:
    """
    Turn cooking phrases into recipes against the entities declared so far

    Args:
        prompt: Request text
        items: Items already in the spec
        blocks: Blocks already in the spec
        no_recipes: When set, nothing is extracted

    Returns:
        CookingExtraction; names that resolve to nothing become new items
    """
    if no_recipes:
        return CookingExtraction()

    created: Dict[str, ModItem] = {}

    def ensure_id(name: str) -> str:
        existing = resolve_display_name(name, items, blocks)
        if existing:
            return existing
        new_id = slug_from_display_name(name.strip(), is_block=False)
        if new_id not in created:
            created[new_id] = ModItem(id=new_id, name=name.strip() or "Item")
        return new_id

    recipes: List[ModRecipe] = []
    for directive in parse_cooking_phrases(prompt):
        ingredient_id = ensure_id(directive.ingredient_name)
        result_id = ensure_id(directive.result_name)
        if ingredient_id == result_id:
            continue
        recipes.append(ModRecipe(
            id=cooking_recipe_id(result_id, ingredient_id, directive.kind),
            type=directive.kind,
            ingredients=[RecipeIngredient(id=ingredient_id, count=1)],
            result=RecipeResult(id=result_id, count=1),
            experience=COOKING_EXPERIENCE,
            cooking_time=COOKING_TIMES[directive.kind],
        ))

    return CookingExtraction(recipes=recipes, items_to_add=list(created.values()))


__all__ = [
    "MAX_ID_LEN",
    "MAX_DISPLAY_NAME_LEN",
    "slug_from_display_name",
    "wood_slug",
    "title_case",
    "split_list",
    "ExtractedEntity",
    "EntityListExtraction",
    "extract_entity_list",
    "extract_constraints",
    "extract_wood_types",
    "CookingDirective",
    "split_cooking_segments",
    "parse_cooking_phrases",
    "cooking_recipe_id",
    "resolve_display_name",
    "CookingExtraction",
    "extract_cooking_directives",
]
