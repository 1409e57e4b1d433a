"""
Tests for IntentInterpreter and directive extraction

The interpreter turns request text into a Content Specification, applying
explicit directives (entity lists, wood types, cooking, constraints) first.
"""
import pytest

from modsmith.interpretation import IntentInterpreter
from modsmith.interpretation.directives import (
    extract_constraints,
    extract_cooking_directives,
    extract_entity_list,
    extract_wood_types,
    parse_cooking_phrases,
    slug_from_display_name,
    split_list,
    wood_slug,
)
from modsmith.interpretation.interpreter import (
    InterpretationError,
    contains_poison,
    strip_clarification_suffix,
)
from modsmith.schemas import ClarificationAction, EntityCategory, RecipeType


class TestDirectives:
    """Test suite for directive extraction"""

    def test_slug_from_display_name(self):
        """Test registry id derivation"""
        assert slug_from_display_name("Tin Ingot") == "tin_ingot"
        assert slug_from_display_name("Marble", is_block=True) == "marble_block"
        assert slug_from_display_name("Marble Block", is_block=True) == "marble_block"
        assert slug_from_display_name("3D Thing") == "m_3d_thing"
        assert len(slug_from_display_name("a" * 60)) == 32

    def test_wood_slug_prefix(self):
        """Test that wood ids always start with a letter"""
        assert wood_slug("Maple") == "maple"
        assert wood_slug("9 Oak") == "wood_9_oak"

    def test_split_list(self):
        """Test splitting on commas and 'and'"""
        assert split_list("Ruby, Sapphire and Raw Tin.") == ["Ruby", "Sapphire", "Raw Tin"]

    def test_extract_item_and_block_lists(self):
        """Test that 'Add N items:' and 'Add N blocks:' combine"""
        extraction = extract_entity_list("Add 2 items: Ruby, Sapphire. Add 1 block: Marble Block.")

        names = [(e.display_name, e.category) for e in extraction.entities]
        assert names == [
            ("Ruby", EntityCategory.ITEM),
            ("Sapphire", EntityCategory.ITEM),
            ("Marble Block", EntityCategory.BLOCK),
        ]

    def test_extract_constraints(self):
        """Test constraint phrases"""
        constraints = extract_constraints("No tools or weapons. Blocks are mineable with a pickaxe. No recipes.")

        assert constraints.forbid_tools_weapons
        assert constraints.require_pickaxe_mining
        assert constraints.no_recipes
        assert not constraints.no_blocks

    def test_extract_wood_types_called(self):
        """Test the 'wood type called X' form"""
        woods = extract_wood_types("Add a new wood type called Maple.")

        assert len(woods) == 1
        assert woods[0].id == "maple"
        assert woods[0].display_name == "Maple"

    def test_extract_wood_types_colon_list(self):
        """Test the 'wood types: A, B' form"""
        woods = extract_wood_types("wood types: maple, cherry blossom")
        assert [w.id for w in woods] == ["maple", "cherry_blossom"]
        assert [w.display_name for w in woods] == ["Maple", "Cherry Blossom"]

    def test_parse_cooking_phrases_order(self):
        """Test that smelting phrases come before blasting phrases"""
        directives = parse_cooking_phrases("Blast Tin Ingot into Tin Plate and smelt Raw Tin into Tin Ingot.")

        assert [(d.kind, d.ingredient_name, d.result_name) for d in directives] == [
            (RecipeType.SMELTING, "Raw Tin", "Tin Ingot"),
            (RecipeType.BLASTING, "Tin Ingot", "Tin Plate"),
        ]

    def test_cooking_creates_missing_items(self):
        """Test that unresolved names become new items with stable recipe ids"""
        extraction = extract_cooking_directives("Smelt Raw Tin into Tin Ingot.", items=[], blocks=[])

        assert [i.id for i in extraction.items_to_add] == ["raw_tin", "tin_ingot"]
        recipe = extraction.recipes[0]
        assert recipe.id == "tin_ingot_from_raw_tin_smelting"
        assert recipe.cooking_time == 200
        assert recipe.experience == 0.35

    def test_campfire_self_loop_dropped(self):
        """Test that 'cook X in a campfire' never produces a self-loop"""
        extraction = extract_cooking_directives("Cook Beef in a campfire.", items=[], blocks=[])
        assert extraction.recipes == []

    def test_cooking_respects_no_recipes(self):
        """Test that no_recipes suppresses cooking extraction"""
        extraction = extract_cooking_directives("Smelt Raw Tin into Tin Ingot.", [], [], no_recipes=True)
        assert extraction.recipes == []
        assert extraction.items_to_add == []


class TestIntentInterpreter:
    """Test suite for IntentInterpreter"""

    @pytest.fixture
    def interpreter(self):
        """Create IntentInterpreter instance"""
        return IntentInterpreter()

    def test_smelting_request(self, interpreter):
        """Test that a smelting directive produces both items and the recipe"""
        result = interpreter.interpret("Smelt Raw Tin into Tin Ingot.")

        assert result.action == ClarificationAction.PROCEED
        spec = result.spec
        assert [i.id for i in spec.items] == ["raw_tin", "tin_ingot"]
        assert [i.name for i in spec.items] == ["Raw Tin", "Tin Ingot"]
        assert spec.blocks == []
        assert len(spec.recipes) == 1
        recipe = spec.recipes[0]
        assert recipe.id == "tin_ingot_from_raw_tin_smelting"
        assert recipe.type == RecipeType.SMELTING
        assert recipe.ingredients[0].id == "raw_tin"
        assert recipe.result.id == "tin_ingot"

    def test_wood_type_request(self, interpreter):
        """Test that a wood type declaration adds no standalone entity"""
        result = interpreter.interpret("Add a new wood type called Maple.")

        spec = result.spec
        assert [w.id for w in spec.wood_types] == ["maple"]
        assert spec.items == []
        assert spec.blocks == []
        assert spec.mod_name == "Maple Mod"

    def test_clarification_answer_never_leaks(self, interpreter):
        """Test that a clarification answer only contributes a color hint"""
        result = interpreter.interpret("a cheese block. Clarification Answer: yellow")

        spec = result.spec
        assert [b.id for b in spec.blocks] == ["cheese_block"]
        assert spec.blocks[0].name == "Cheese Block"
        assert spec.blocks[0].color_hint == "yellow"
        for entity in spec.items + spec.blocks:
            assert "clarification" not in entity.id
            assert "clarification" not in entity.name.lower()

    def test_strip_clarification_suffix(self):
        """Test that the suffix is removed case-insensitively"""
        assert strip_clarification_suffix("ice cream CLARIFICATION ANSWER: blue") == "ice cream"
        assert strip_clarification_suffix("ice cream") == "ice cream"

    def test_contains_poison(self):
        """Test that clarification dialogue is detected"""
        assert contains_poison("Which direction should I go")
        assert not contains_poison("Tin Ingot")

    def test_nonsense_asks(self, interpreter):
        """Test that nonsense returns a clarification instead of a spec"""
        result = interpreter.interpret("qwzx vbnmpl kjhgf")

        assert result.needs_clarification
        assert result.spec is None
        assert result.clarification.message

    def test_none_prompt_treated_as_empty(self, interpreter):
        """Test that None behaves like an empty request"""
        result = interpreter.interpret(None)

        assert not result.needs_clarification
        assert result.spec is not None
        assert len(result.spec.items) == 1

    def test_non_string_prompt_raises(self, interpreter):
        """Test that non-text input is rejected"""
        with pytest.raises(InterpretationError):
            interpreter.interpret(["not", "text"])

    def test_interpretation_is_deterministic(self, interpreter):
        """Test that identical requests give identical specs"""
        first = interpreter.interpret("Smelt Raw Tin into Tin Ingot.").spec
        second = interpreter.interpret("Smelt Raw Tin into Tin Ingot.").spec
        assert first.to_document() == second.to_document()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
