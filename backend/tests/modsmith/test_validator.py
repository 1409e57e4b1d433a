"""
Tests for SpecValidator and OutputValidator

Spec gates run in a fixed order and the first failure wins; the output
validator checks a materialized file set before it is written.
"""
import json

import pytest

from modsmith.core import SpecExpander, SpecValidator, SpecValidationError, validate_materialized_files
from modsmith.core.validator import (
    GATE_FORBIDDEN,
    GATE_HYGIENE,
    GATE_RECIPE,
    GATE_SCHEMA,
    GATE_SURVIVAL,
    GATE_TEXTURE,
    GATE_VERSION,
    OutputValidationError,
)
from modsmith.schemas import (
    ContentSpec,
    MaterializedFile,
    ModBlock,
    ModItem,
    ModRecipe,
    RecipeIngredient,
    RecipeResult,
    RecipeType,
    WoodType,
)


def smelting(recipe_id: str, ingredient: str, result: str, **overrides) -> ModRecipe:
    fields = dict(
        id=recipe_id,
        type=RecipeType.SMELTING,
        ingredients=[RecipeIngredient(id=ingredient)],
        result=RecipeResult(id=result),
        experience=0.35,
        cooking_time=200,
    )
    fields.update(overrides)
    return ModRecipe(**fields)


class TestSpecValidator:
    """Test suite for SpecValidator"""

    @pytest.fixture
    def validator(self):
        """Create SpecValidator instance"""
        return SpecValidator()

    @pytest.fixture
    def tin_spec(self):
        """Create a valid smelting spec"""
        return ContentSpec(
            items=[ModItem(id="raw_tin", name="Raw Tin"), ModItem(id="tin_ingot", name="Tin Ingot")],
            recipes=[smelting("tin_ingot_from_raw_tin_smelting", "raw_tin", "tin_ingot")],
        )

    def test_valid_spec_runs_every_gate(self, validator, tin_spec):
        """Test that a valid spec passes all seven gates in order"""
        report = validator.validate(tin_spec, "Smelt Raw Tin into Tin Ingot.")

        assert report.valid
        assert report.reason is None
        assert report.gates_run == [
            GATE_SCHEMA, GATE_HYGIENE, GATE_VERSION, GATE_FORBIDDEN,
            GATE_SURVIVAL, GATE_TEXTURE, GATE_RECIPE,
        ]

    def test_bad_mod_id(self, validator):
        """Test that a malformed mod id fails schema consistency"""
        report = validator.validate(ContentSpec(mod_id="Bad Mod"))

        assert not report.valid
        assert report.gate == GATE_SCHEMA
        assert report.gates_run == [GATE_SCHEMA]

    def test_duplicate_item_id(self, validator):
        """Test that duplicate ids fail schema consistency"""
        spec = ContentSpec(items=[ModItem(id="ruby", name="Ruby"), ModItem(id="ruby", name="Ruby Two")])
        report = validator.validate(spec)

        assert report.gate == GATE_SCHEMA
        assert "Duplicate" in report.reason

    def test_unknown_recipe_reference(self, validator):
        """Test that recipes must reference declared ids"""
        spec = ContentSpec(
            items=[ModItem(id="tin_ingot", name="Tin Ingot")],
            recipes=[smelting("r", "raw_tin", "tin_ingot")],
        )
        report = validator.validate(spec)

        assert report.gate == GATE_SCHEMA
        assert "raw_tin" in report.reason

    def test_shaped_recipe_needs_pattern(self, validator):
        """Test that shaped recipes without a pattern are rejected"""
        spec = ContentSpec(
            items=[ModItem(id="ruby", name="Ruby"), ModItem(id="ruby_block", name="Ruby Block")],
            recipes=[ModRecipe(
                id="ruby_block",
                type=RecipeType.CRAFTING_SHAPED,
                key={"#": "ruby"},
                result=RecipeResult(id="ruby_block"),
            )],
        )
        report = validator.validate(spec)

        assert report.gate == GATE_SCHEMA
        assert "pattern" in report.reason

    def test_clarification_dialogue_in_name(self, validator):
        """Test that clarification phrases never reach a spec"""
        spec = ContentSpec(items=[ModItem(id="thing", name="Which direction should I go")])
        report = validator.validate(spec)
        assert report.gate == GATE_HYGIENE

    def test_unsupported_version(self, validator):
        """Test that only the pinned Minecraft version is accepted"""
        report = validator.validate(ContentSpec(minecraft_version="1.20.1"))
        assert report.gate == GATE_VERSION

    def test_forbidden_mechanics_in_prompt(self, validator, tin_spec):
        """Test that forbidden mechanics in the request are rejected"""
        report = validator.validate(tin_spec, "a wand that lets you fly")

        assert report.gate == GATE_FORBIDDEN
        assert '"fly"' in report.reason

    def test_forbidden_keyword_matches_word_start(self, validator, tin_spec):
        """Test that keywords only match at the start of a word"""
        assert validator.validate(tin_spec, "flying boots").gate == GATE_FORBIDDEN
        assert validator.validate(tin_spec, "a butterfly charm").valid

    def test_wood_collision(self, validator):
        """Test that a declared block colliding with a wood family is rejected"""
        spec = ContentSpec(
            blocks=[ModBlock(id="maple_planks", name="Maple Planks")],
            wood_types=[WoodType(id="maple", display_name="Maple")],
        )
        assert validator.validate(spec).gate == GATE_SURVIVAL

    def test_unknown_color_hint(self, validator):
        """Test that color hints must be known color words"""
        spec = ContentSpec(items=[ModItem(id="ruby", name="Ruby", color_hint="chartreuse")])
        assert validator.validate(spec).gate == GATE_TEXTURE

    def test_texture_path_must_be_png(self, validator):
        """Test that explicit texture paths must be PNG files"""
        spec = ContentSpec(items=[ModItem(id="ruby", name="Ruby", texture_path="ruby.jpg")])
        assert validator.validate(spec).gate == GATE_TEXTURE

    def test_duplicate_recipe_id(self, validator, tin_spec):
        """Test that recipe ids must be unique"""
        tin_spec.recipes.append(smelting("tin_ingot_from_raw_tin_smelting", "raw_tin", "tin_ingot"))
        assert validator.validate(tin_spec).gate == GATE_RECIPE

    def test_cooking_time_must_be_positive(self, validator):
        """Test that cooking recipes need a positive cooking time"""
        spec = ContentSpec(
            items=[ModItem(id="raw_tin", name="Raw Tin"), ModItem(id="tin_ingot", name="Tin Ingot")],
            recipes=[smelting("r", "raw_tin", "tin_ingot", cooking_time=0)],
        )
        assert validator.validate(spec).gate == GATE_RECIPE

    def test_validate_or_raise(self, validator):
        """Test that validate_or_raise surfaces the gate and reason"""
        with pytest.raises(SpecValidationError) as exc_info:
            validator.validate_or_raise(ContentSpec(minecraft_version="1.20.1"))

        assert exc_info.value.gate == GATE_VERSION
        assert "1.20.1" in exc_info.value.reason


class TestOutputValidator:
    """Test suite for materialized output validation"""

    @staticmethod
    def json_file(path: str, document) -> MaterializedFile:
        return MaterializedFile(path=path, contents=json.dumps(document))

    def test_valid_files_pass(self):
        """Test that well-formed recipe and tag files pass"""
        files = [
            self.json_file("src/main/resources/data/generated/recipe/a.json",
                           {"type": "minecraft:smelting", "result": {"id": "generated:a", "count": 1}}),
            self.json_file("src/main/resources/data/minecraft/tags/blocks/logs.json",
                           {"replace": False, "values": []}),
        ]
        report = validate_materialized_files(files)

        assert report["status"] == "passed"
        assert report["errors"] == 0

    def test_plural_recipe_folder_fails(self):
        """Test that the plural recipes folder is rejected"""
        files = [self.json_file("src/main/resources/data/generated/recipes/a.json",
                                {"type": "minecraft:smelting", "result": {"id": "generated:a"}})]
        with pytest.raises(OutputValidationError):
            validate_materialized_files(files)

    def test_recipe_result_shape(self):
        """Test that recipe results must be {id, count} objects"""
        files = [self.json_file("src/main/resources/data/generated/recipe/a.json",
                                {"type": "minecraft:smelting", "result": "generated:a"})]
        with pytest.raises(OutputValidationError):
            validate_materialized_files(files)

    def test_replacing_tag_fails(self):
        """Test that tag files must be additive"""
        files = [self.json_file("src/main/resources/data/minecraft/tags/items/planks.json",
                                {"replace": True, "values": []})]
        with pytest.raises(OutputValidationError):
            validate_materialized_files(files)

    def test_missing_wood_loot_fails(self):
        """Test that every wood block needs a loot table"""
        spec = ContentSpec(wood_types=[WoodType(id="maple", display_name="Maple")])
        expanded = SpecExpander().expand(spec)

        with pytest.raises(OutputValidationError):
            validate_materialized_files([], expanded)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
