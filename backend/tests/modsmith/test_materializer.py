"""
Tests for the Materializer

Covers visual defaults, blockstate tables, recipe and tag documents, asset
keys, behavior classes, the ordered file set and the write-once writer.
"""
import json

import pytest

from modsmith.core import ExecutionPlanner, SpecExpander, aggregate_execution_plans, validate_materialized_files
from modsmith.materializer import (
    MaterializationError,
    Materializer,
    VisualKind,
    block_item_model,
    build_block_models,
    build_blockstate,
    classify_visual_kind,
    compose_asset_keys,
    encode_png,
    merge_tag_documents,
    parse_asset_key,
    recipe_to_json,
    resolve_visual_default,
    write_materialized_files,
)
from modsmith.materializer.asset_keys import find_key_collisions
from modsmith.materializer.behavior import behavior_class_name, behavior_source, needs_custom_behavior
from modsmith.materializer.tags import merge_tag_text
from modsmith.pipeline import spec_intents
from modsmith.schemas import (
    ContentSpec,
    EntityCategory,
    IntentCategory,
    MaterializedFile,
    ModItem,
    ModRecipe,
    RecipeIngredient,
    RecipeResult,
    RecipeType,
    UserIntent,
    VisualShape,
    WoodType,
)
from modsmith.interpretation.aesthetics import interpret_aesthetics
from modsmith.texture import TextureSynthesizer
from modsmith.texture.rasterizer import rasterize_texture

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
ASSETS = "src/main/resources/assets/generated"
DATA = "src/main/resources/data/generated"


def materialize(spec: ContentSpec):
    """Expand, plan and materialize a spec the way the pipeline does"""
    expanded = SpecExpander().expand(spec)
    plans = ExecutionPlanner().plan_all(spec_intents(expanded.spec))
    files = Materializer().materialize(expanded, aggregate_execution_plans(plans), [], plans=plans)
    return expanded, files


class TestVisualDefaults:
    """Test suite for visual kind classification"""

    def test_item_kinds(self):
        """Test item suffix rules"""
        assert classify_visual_kind("raw_tin", "Raw Tin") == VisualKind.RAW_ORE
        assert classify_visual_kind("tin_ingot", "Tin Ingot") == VisualKind.INGOT
        assert classify_visual_kind("maple_chest_boat") == VisualKind.CHEST_BOAT
        assert classify_visual_kind("maple_boat") == VisualKind.BOAT
        assert classify_visual_kind("mystery") == VisualKind.SIMPLE_ITEM

    def test_block_kinds(self):
        """Test block suffix rules, including the trapdoor/door split"""
        assert classify_visual_kind("maple_log", is_block=True) == VisualKind.LOG
        assert classify_visual_kind("maple_door", is_block=True) == VisualKind.DOOR
        assert classify_visual_kind("maple_trapdoor", is_block=True) == VisualKind.TRAPDOOR
        assert classify_visual_kind("maple_fence_gate", is_block=True) == VisualKind.FENCE_GATE
        assert classify_visual_kind("maple_hanging_sign", is_block=True) == VisualKind.HANGING_SIGN

    def test_resolve_visual_default(self):
        """Test that every entity resolves to a vanilla reference"""
        assert resolve_visual_default("tin_ingot").texture == "minecraft:item/iron_ingot"
        assert resolve_visual_default("zap_rod").parent == "minecraft:item/handheld"
        assert resolve_visual_default("mystery", is_block=True).texture == "minecraft:block/stone"


class TestBlockStates:
    """Test suite for blockstate and block model tables"""

    def test_door_variants(self):
        """Test that doors cover every facing, half, hinge and open state"""
        state = build_blockstate("generated", "maple_door", VisualShape.DOOR, "maple_door")
        variants = state["variants"]

        assert len(variants) == 4 * 2 * 2 * 2
        assert variants["facing=east,half=lower,hinge=left,open=false"] == {
            "model": "generated:block/maple_door_bottom_left"
        }
        assert variants["facing=east,half=lower,hinge=left,open=true"]["y"] == 90

    def test_fence_multipart(self):
        """Test that fences use a post plus four conditional sides"""
        state = build_blockstate("generated", "maple_fence", VisualShape.FENCE, "maple_planks")
        multipart = state["multipart"]

        assert len(multipart) == 5
        assert multipart[0] == {"apply": {"model": "generated:block/maple_fence_post"}}
        assert multipart[2]["when"] == {"east": "true"}
        assert multipart[2]["apply"]["uvlock"] is True

    def test_slab_double_uses_full_block(self):
        """Test that a double slab renders the planks model"""
        state = build_blockstate("generated", "maple_slab", VisualShape.SLAB, "maple_planks")
        assert state["variants"]["type=double"] == {"model": "generated:block/maple_planks"}
        assert state["variants"]["type=top"] == {"model": "generated:block/maple_slab_top"}

    def test_pillar_axes(self):
        """Test log axis rotations"""
        variants = build_blockstate("generated", "maple_log", VisualShape.PILLAR, "maple_log")["variants"]

        assert variants["axis=y"] == {"model": "generated:block/maple_log"}
        assert variants["axis=x"] == {"model": "generated:block/maple_log_horizontal", "x": 90, "y": 90}
        assert variants["axis=z"] == {"model": "generated:block/maple_log_horizontal", "x": 90}

    def test_door_models(self):
        """Test that every referenced door model is built"""
        models = build_block_models("generated", "maple_door", VisualShape.DOOR, "maple_door")
        assert len(models) == 8
        assert models[0][0] == "maple_door_bottom_left"

    def test_block_item_models(self):
        """Test in-hand models for block items"""
        door = block_item_model("generated", "maple_door", VisualShape.DOOR, "maple_door")
        assert door == {"parent": "minecraft:item/generated", "textures": {"layer0": "generated:block/maple_door"}}

        trapdoor = block_item_model("generated", "maple_trapdoor", VisualShape.TRAPDOOR, "maple_trapdoor")
        assert trapdoor == {"parent": "generated:block/maple_trapdoor_bottom"}

        fence = block_item_model("generated", "maple_fence", VisualShape.FENCE, "maple_planks")
        assert fence == {"parent": "generated:block/maple_fence_inventory"}


class TestRecipeJson:
    """Test suite for recipe_to_json"""

    def test_shapeless_expands_counts(self):
        """Test that ingredient counts become repeated entries"""
        recipe = ModRecipe(
            id="ruby_dust",
            type=RecipeType.CRAFTING_SHAPELESS,
            ingredients=[RecipeIngredient(id="ruby", count=2)],
            result=RecipeResult(id="ruby_dust", count=3),
        )
        document = recipe_to_json("generated", recipe)

        assert document["type"] == "minecraft:crafting_shapeless"
        assert document["ingredients"] == [{"item": "generated:ruby"}, {"item": "generated:ruby"}]
        assert document["result"] == {"id": "generated:ruby_dust", "count": 3}

    def test_shaped_key_sorted(self):
        """Test shaped recipes with namespaced keys"""
        recipe = ModRecipe(
            id="maple_hanging_sign",
            type=RecipeType.CRAFTING_SHAPED,
            pattern=["A A", "BBB", "BBB"],
            key={"B": "maple_stripped_log", "A": "minecraft:chain"},
            result=RecipeResult(id="maple_hanging_sign", count=6),
        )
        document = recipe_to_json("generated", recipe)

        assert list(document["key"]) == ["A", "B"]
        assert document["key"]["A"] == {"item": "minecraft:chain"}
        assert document["key"]["B"] == {"item": "generated:maple_stripped_log"}

    def test_cooking_fields(self):
        """Test cooking recipe fields and defaults"""
        recipe = ModRecipe(
            id="tin_ingot_from_raw_tin_blasting",
            type=RecipeType.BLASTING,
            ingredients=[RecipeIngredient(id="raw_tin")],
            result=RecipeResult(id="tin_ingot"),
        )
        document = recipe_to_json("generated", recipe)

        assert document["type"] == "minecraft:blasting"
        assert document["ingredient"] == {"item": "generated:raw_tin"}
        assert document["cookingtime"] == 100
        assert document["experience"] == 0.35

    def test_self_loop_raises(self):
        """Test that a recipe consuming its own result is rejected"""
        recipe = ModRecipe(
            id="loop",
            type=RecipeType.SMELTING,
            ingredients=[RecipeIngredient(id="beef")],
            result=RecipeResult(id="beef"),
        )
        with pytest.raises(MaterializationError):
            recipe_to_json("generated", recipe)

    def test_shaped_without_pattern_raises(self):
        """Test that malformed shaped recipes are rejected"""
        recipe = ModRecipe(id="bad", type=RecipeType.CRAFTING_SHAPED, key={"#": "ruby"}, result=RecipeResult(id="x"))
        with pytest.raises(MaterializationError):
            recipe_to_json("generated", recipe)


class TestTagsAndKeys:
    """Test suite for tag merging and asset keys"""

    def test_merge_tag_documents(self):
        """Test that merging unions, sorts and never replaces"""
        merged = merge_tag_documents(
            {"replace": False, "values": ["minecraft:oak_log", "generated:maple_log"]},
            {"replace": False, "values": ["generated:maple_log", "generated:maple_wood"]},
        )
        assert merged == {
            "replace": False,
            "values": ["generated:maple_log", "generated:maple_wood", "minecraft:oak_log"],
        }

    def test_merge_tag_text_with_invalid_existing(self):
        """Test that unparseable existing content is replaced by the incoming values"""
        incoming = json.dumps({"replace": False, "values": ["generated:maple_log"]})
        merged = json.loads(merge_tag_text("{not json", incoming))
        assert merged == {"replace": False, "values": ["generated:maple_log"]}

    def test_parse_asset_key(self):
        """Test valid and invalid asset keys"""
        key = parse_asset_key("item/tin_ingot")
        assert key.category == EntityCategory.ITEM
        assert key.content_id == "tin_ingot"
        assert str(key) == "item/tin_ingot"

        for bad in ("tin_ingot", "texture/tin_ingot", "item/Tin", ""):
            with pytest.raises(MaterializationError):
                parse_asset_key(bad)

    def test_compose_asset_keys_for_wood(self):
        """Test that item and block keys never collide and block items share the block texture"""
        expanded = SpecExpander().expand(ContentSpec(wood_types=[WoodType(id="maple", display_name="Maple")]))
        assets = compose_asset_keys(expanded)

        assert find_key_collisions(assets) == []
        assert [(a.category.value, a.content_id) for a in assets] == sorted(
            (a.category.value, a.content_id) for a in assets
        )
        log_item = next(a for a in assets if a.category == EntityCategory.ITEM and a.content_id == "maple_log")
        assert log_item.texture.key == "block/maple_log"
        assert log_item.model.key == "item/maple_log"


class TestBehavior:
    """Test suite for custom behavior classes"""

    @pytest.fixture
    def zap_rod_plan(self):
        """Create an execution plan for a lightning item"""
        intent = UserIntent(name="Zap Rod", description="shoots lightning", category=IntentCategory.ITEM)
        return ExecutionPlanner().plan(intent, content_id="zap_rod")

    def test_needs_custom_behavior(self, zap_rod_plan):
        """Test that targeted spawning items get a behavior class"""
        assert needs_custom_behavior(zap_rod_plan)

        plain = ExecutionPlanner().plan(UserIntent(name="Tin Ingot"), content_id="tin_ingot")
        assert not needs_custom_behavior(plain)

    def test_behavior_source(self, zap_rod_plan):
        """Test that the class carries only registry safety bounds"""
        source = behavior_source("net.modsmith.generated", zap_rod_plan)

        assert behavior_class_name("zap_rod") == "ZapRodItem"
        assert source.startswith("package net.modsmith.generated.item;")
        assert "public class ZapRodItem extends Item" in source
        assert "COOLDOWN_TICKS = 20;" in source
        assert "MAX_RANGE = 64.0;" in source
        assert "shoots lightning" not in source


class TestMaterializer:
    """Test suite for Materializer"""

    @pytest.fixture
    def wood_output(self):
        """Materialize a spec with one item and one wood type"""
        spec = ContentSpec(
            mod_name="Maple Mod",
            items=[ModItem(id="ruby", name="Ruby")],
            wood_types=[WoodType(id="maple", display_name="Maple")],
        )
        return materialize(spec)

    def test_files_sorted_and_unique(self, wood_output):
        """Test that output is ordered by path with no duplicates"""
        _, files = wood_output
        paths = [f.path for f in files]

        assert paths == sorted(paths)
        assert len(paths) == len(set(paths))

    def test_scaffold_files(self, wood_output):
        """Test Fabric metadata, Gradle properties and Java registration"""
        _, files = wood_output
        paths = {f.path for f in files}

        assert "fabric.mod.json" in paths
        assert "gradle.properties" in paths
        assert "src/main/resources/fabric.mod.json" in paths
        assert "src/main/resources/pack.mcmeta" in paths
        assert "src/main/java/net/modsmith/generated/item/ModItems.java" in paths
        assert "src/main/java/net/modsmith/generated/block/ModBlocks.java" in paths

    def test_creative_tab_registrations(self, wood_output):
        """Test that ModItems and ModBlocks list every entity in a creative tab"""
        expanded, files = wood_output
        by_path = {f.path: f.contents for f in files}
        mod_items = by_path["src/main/java/net/modsmith/generated/item/ModItems.java"]
        mod_blocks = by_path["src/main/java/net/modsmith/generated/block/ModBlocks.java"]

        assert "import net.fabricmc.fabric.api.itemgroup.v1.ItemGroupEvents;" in mod_items
        assert "ItemGroupEvents.modifyEntriesEvent(ItemGroups.INGREDIENTS)" in mod_items
        assert "entries.add(RUBY);" in mod_items
        assert "ItemGroupEvents.modifyEntriesEvent(ItemGroups.TOOLS)" in mod_items
        assert "entries.add(MAPLE_CHEST_BOAT);" in mod_items
        assert "ItemGroupEvents.modifyEntriesEvent(ItemGroups.BUILDING_BLOCKS)" in mod_blocks
        assert "ItemGroupEvents.modifyEntriesEvent(ItemGroups.FUNCTIONAL)" in mod_blocks
        for block_id in expanded.block_ids():
            assert f"entries.add({block_id.upper()});" in mod_blocks

    def test_behavior_item_listed_in_tools(self):
        """Test that a behavior item is listed in the tools tab"""
        spec = ContentSpec(items=[ModItem(id="zap_rod", name="Zap Rod", description="shoots lightning")])
        _, files = materialize(spec)
        mod_items = next(f.contents for f in files if f.path.endswith("/item/ModItems.java"))

        assert "ItemGroupEvents.modifyEntriesEvent(ItemGroups.TOOLS)" in mod_items
        assert "ItemGroups.INGREDIENTS" not in mod_items
        assert "entries.add(ZAP_ROD);" in mod_items

    def test_data_files(self, wood_output):
        """Test recipes, loot tables and additive tags"""
        expanded, files = wood_output
        by_path = {f.path: f for f in files}

        assert f"{DATA}/recipe/maple_planks_from_log.json" in by_path
        assert not any("/recipes/" in path for path in by_path)
        for block_id in expanded.block_ids():
            assert f"{DATA}/loot_table/blocks/{block_id}.json" in by_path

        logs = json.loads(by_path["src/main/resources/data/minecraft/tags/blocks/logs.json"].contents)
        assert logs["replace"] is False
        assert "generated:maple_log" in logs["values"]

        assert validate_materialized_files(files, expanded)["status"] == "passed"

    def test_assets_and_lang(self, wood_output):
        """Test textures, models, blockstates and the language file"""
        _, files = wood_output
        by_path = {f.path: f for f in files}

        assert f"{ASSETS}/textures/item/ruby.texture.json" in by_path
        assert f"{ASSETS}/textures/block/maple_planks.texture.json" in by_path
        assert f"{ASSETS}/blockstates/maple_door.json" in by_path
        assert f"{ASSETS}/models/item/maple_log.json" in by_path

        ruby_model = json.loads(by_path[f"{ASSETS}/models/item/ruby.json"].contents)
        assert ruby_model["textures"]["layer0"] == "generated:item/ruby"

        lang = json.loads(by_path[f"{ASSETS}/lang/en_us.json"].contents)
        assert lang["item.generated.ruby"] == "Ruby"
        assert lang["block.generated.maple_planks"] == "Maple Planks"
        assert list(lang) == sorted(lang)

    def test_sidecars(self, wood_output):
        """Test the execution plan and texture plan sidecars"""
        _, files = wood_output
        by_path = {f.path: f for f in files}

        plan = json.loads(by_path["modsmith/execution_plan.json"].contents)
        assert "safety_disclosure" in plan

        texture_plans = json.loads(by_path["modsmith/texture_plans.json"].contents)
        assert "item/ruby" in texture_plans
        assert len(texture_plans) == 10
        assert list(texture_plans) == sorted(texture_plans)

    def test_behavior_class_emitted(self):
        """Test that a lightning item gets its own class file"""
        spec = ContentSpec(items=[ModItem(id="zap_rod", name="Zap Rod", description="shoots lightning")])
        _, files = materialize(spec)
        paths = {f.path for f in files}

        assert "src/main/java/net/modsmith/generated/item/ZapRodItem.java" in paths

    def test_materialize_is_deterministic(self):
        """Test that identical inputs give byte-identical file sets"""
        spec = ContentSpec(items=[ModItem(id="ruby", name="Ruby")])
        _, first = materialize(spec)
        _, second = materialize(spec)
        assert first == second


class TestWriter:
    """Test suite for write_materialized_files"""

    def test_tag_files_merge(self, tmp_path):
        """Test that an existing shared tag file is merged, not overwritten"""
        path = "src/main/resources/data/minecraft/tags/blocks/logs.json"
        existing = tmp_path / path
        existing.parent.mkdir(parents=True)
        existing.write_text(json.dumps({"replace": False, "values": ["othermod:birch_log"]}))

        incoming = MaterializedFile(
            path=path,
            contents=json.dumps({"replace": False, "values": ["generated:maple_log"]}),
        )
        report = write_materialized_files([incoming], tmp_path)

        assert report["merged_tags"] == [path]
        merged = json.loads(existing.read_text())
        assert merged["values"] == ["generated:maple_log", "othermod:birch_log"]
        assert merged["replace"] is False

    def test_sidecar_renders_png(self, tmp_path):
        """Test that a texture sidecar is rasterized into a PNG on write"""
        _, files = materialize(ContentSpec(items=[ModItem(id="ruby", name="Ruby")]))
        report = write_materialized_files(files, tmp_path)

        png = tmp_path / ASSETS / "textures" / "item" / "ruby.png"
        assert png.exists()
        assert png.read_bytes().startswith(PNG_SIGNATURE)
        assert f"{ASSETS}/textures/item/ruby.png" in report["written"]

    def test_binary_files_written(self, tmp_path):
        """Test that rasterized textures are written as bytes"""
        plan = TextureSynthesizer().synthesize(interpret_aesthetics("ruby"), "demo")
        data = encode_png(rasterize_texture(plan, 16, "demo"))
        report = write_materialized_files([MaterializedFile(path="t/ruby.png", contents=data)], tmp_path)

        assert report["written"] == ["t/ruby.png"]
        assert (tmp_path / "t" / "ruby.png").read_bytes().startswith(PNG_SIGNATURE)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
