"""
Materializer - Expanded spec + plans -> ordered MaterializedFile set

Responsibilities:
- Emit the mod scaffold (Fabric metadata, Gradle properties, Java registration)
- Emit one behavior class per custom-behavior item
- Emit textures, models, blockstates and the language file
- Emit recipes, loot tables and shared tag contributions
- Emit plan sidecars for the status API

Output is sorted by path and every JSON file is 2-space indented with a
trailing newline, so identical inputs give byte-identical file sets.
"""
import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from config import DEFAULT_TEXTURE_SEED, JAVA_PACKAGE_ROOT, TEXTURE_SIZE

from modsmith.schemas import (
    AggregatedExecutionPlan,
    EntityCategory,
    ExecutionPlan,
    ExpandedSpec,
    FinalTexturePlan,
    MaterializedFile,
    RasterizedTexture,
    RequestSummary,
    VisualShape,
)
from modsmith.texture.synthesizer import TextureSynthesizer
from modsmith.materializer.asset_keys import MaterializationError, compose_asset_keys, find_key_collisions
from modsmith.materializer.behavior import behavior_class_name, behavior_source, needs_custom_behavior
from modsmith.materializer.block_states import block_item_model, build_block_models, build_blockstate
from modsmith.materializer.recipes import recipe_to_json
from modsmith.materializer.scaffold import (
    fabric_mod_json,
    gradle_properties,
    main_class_name_for,
    main_class_source,
    mod_blocks_source,
    mod_items_source,
    pack_mcmeta,
    package_name_for,
)
from modsmith.materializer.tags import RESOURCES_PREFIX, tag_document, tag_path
from modsmith.materializer.textures import (
    SIDECAR_SUFFIX,
    encode_png,
    plan_entity_texture,
    texture_seed,
    texture_sidecar,
)
from modsmith.materializer.visual_defaults import resolve_visual_default

logger = logging.getLogger(__name__)

SIDECAR_DIR = "modsmith"


def to_json(document: Any) -> str:
    return json.dumps(document, indent=2) + "\n"


class Materializer:
    """
    Materializer - turns one request's compiled artifacts into files

    Keeps no per-request state; every call builds a fresh file map.
    """

    def __init__(
        self,
        java_package_root: str = JAVA_PACKAGE_ROOT,
        texture_size: int = TEXTURE_SIZE,
        seed: str = DEFAULT_TEXTURE_SEED,
        synthesizer: Optional[TextureSynthesizer] = None,
    ):
        """
        Initialize materializer

        Args:
            java_package_root: Root Java package; the mod id is appended
            texture_size: Size recorded in texture sidecars
            seed: Seed for texture plans the caller did not supply
            synthesizer: Texture synthesizer for missing plans
        """
        self.java_package_root = java_package_root
        self.texture_size = texture_size
        self.seed = seed
        self.synthesizer = synthesizer or TextureSynthesizer(texture_size)

    def materialize(
        self,
        expanded: ExpandedSpec,
        aggregated_plan: AggregatedExecutionPlan,
        texture_plans: Iterable[FinalTexturePlan],
        plans: Optional[Iterable[ExecutionPlan]] = None,
        summary: Optional[RequestSummary] = None,
        rasters: Optional[Dict[str, RasterizedTexture]] = None,
    ) -> List[MaterializedFile]:
        """
        Materialize one request

        Args:
            expanded: Expanded spec
            aggregated_plan: Request-level execution plan
            texture_plans: Final texture plans, one per texture-owning entity
            plans: Per-entity execution plans (custom behavior is read from these)
            summary: Credit/visual summary written as a sidecar
            rasters: Rasterized textures keyed by '{category}/{content_id}'

        Returns:
            Files sorted by path

        Raises:
            MaterializationError: On asset key collisions, duplicate paths or bad recipes
        """
        files: Dict[str, MaterializedFile] = {}
        plans = list(plans or [])
        rasters = rasters or {}
        plans_by_key = {f"{p.category}/{p.content_id}": p for p in texture_plans}

        mod_id = expanded.mod_id
        package_name = package_name_for(mod_id, self.java_package_root)
        behavior_plans = [p for p in plans if needs_custom_behavior(p) and expanded.find_item(p.content_id)]
        behavior_items = {p.content_id for p in behavior_plans}

        self._emit_scaffold(files, expanded, package_name, behavior_items)
        for plan in behavior_plans:
            self._add(files, _java_path(package_name, "item", behavior_class_name(plan.content_id)),
                      behavior_source(package_name, plan))

        plans_by_key = self._emit_assets(files, expanded, plans_by_key, rasters)
        self._emit_data(files, expanded)
        self._emit_sidecars(files, aggregated_plan, plans_by_key, summary)

        ordered = [files[path] for path in sorted(files)]
        logger.info(
            f"[Materializer] ✓ {len(ordered)} files for '{mod_id}' "
            f"({len(behavior_plans)} behavior classes)"
        )
        return ordered

    @staticmethod
    def _add(files: Dict[str, MaterializedFile], path: str, contents) -> None:
        if path in files:
            raise MaterializationError(f"Duplicate output path: {path}")
        files[path] = MaterializedFile(path=path, contents=contents)

    def _emit_scaffold(self, files, expanded: ExpandedSpec, package_name: str, behavior_items) -> None:
        mod_id = expanded.mod_id
        metadata = to_json(fabric_mod_json(expanded, package_name))
        self._add(files, "fabric.mod.json", metadata)
        self._add(files, RESOURCES_PREFIX + "fabric.mod.json", metadata)
        self._add(files, "gradle.properties", gradle_properties(mod_id, package_name))
        self._add(files, RESOURCES_PREFIX + "pack.mcmeta", to_json(pack_mcmeta(mod_id)))
        self._add(files, _java_path(package_name, None, main_class_name_for(mod_id)),
                  main_class_source(mod_id, package_name))
        self._add(files, _java_path(package_name, "item", "ModItems"),
                  mod_items_source(expanded, package_name, behavior_items))
        self._add(files, _java_path(package_name, "block", "ModBlocks"),
                  mod_blocks_source(expanded, package_name))

    def _emit_assets(
        self,
        files,
        expanded: ExpandedSpec,
        plans_by_key: Dict[str, FinalTexturePlan],
        rasters: Dict[str, RasterizedTexture],
    ) -> Dict[str, FinalTexturePlan]:
        mod_id = expanded.mod_id
        assets_root = f"{RESOURCES_PREFIX}assets/{mod_id}"
        assets = compose_asset_keys(expanded)
        collisions = find_key_collisions(assets)
        if collisions:
            raise MaterializationError(f"Asset key collisions: {collisions}")

        plans_by_key = dict(plans_by_key)
        item_ids = set(expanded.item_ids())

        for descriptor in expanded.descriptors:
            key = f"{descriptor.category.value}/{descriptor.content_id}"
            if not descriptor.owns_texture:
                continue
            plan = plans_by_key.get(key)
            if plan is None:
                plan = plan_entity_texture(expanded, descriptor, self.seed, self.synthesizer)
                plans_by_key[key] = plan
            texture_path = f"{assets_root}/textures/{key}"
            if key in rasters:
                self._add(files, texture_path + ".png", encode_png(rasters[key]))
            else:
                seed = texture_seed(self.seed, descriptor.category.value, descriptor.content_id)
                self._add(files, texture_path + SIDECAR_SUFFIX,
                          to_json(texture_sidecar(plan, seed, self.texture_size)))

        for descriptor in expanded.descriptors:
            if descriptor.category == EntityCategory.ITEM:
                self._add(files, f"{assets_root}/models/item/{descriptor.content_id}.json",
                          to_json(self._item_model(expanded, descriptor)))
                continue

            block_id = descriptor.content_id
            for model_id, model in build_block_models(mod_id, block_id, descriptor.shape, descriptor.texture_id):
                self._add(files, f"{assets_root}/models/block/{model_id}.json", to_json(model))
            self._add(files, f"{assets_root}/blockstates/{block_id}.json",
                      to_json(build_blockstate(mod_id, block_id, descriptor.shape, descriptor.texture_id)))
            if block_id not in item_ids:
                self._add(files, f"{assets_root}/models/item/{block_id}.json",
                          to_json(block_item_model(mod_id, block_id, descriptor.shape, descriptor.texture_id)))

        self._add(files, f"{assets_root}/lang/en_us.json", to_json(self._lang(expanded)))
        return plans_by_key

    @staticmethod
    def _item_model(expanded: ExpandedSpec, descriptor) -> Dict[str, Any]:
        mod_id = expanded.mod_id
        if descriptor.shape == VisualShape.BLOCK_ITEM:
            block = expanded.descriptor_for(descriptor.content_id, EntityCategory.BLOCK)
            shape = block.shape if block else VisualShape.CUBE
            return block_item_model(mod_id, descriptor.content_id, shape, descriptor.texture_id)

        item = expanded.find_item(descriptor.content_id)
        default = resolve_visual_default(descriptor.content_id, item.name if item else "", is_block=False)
        return {
            "parent": default.parent,
            "textures": {"layer0": f"{mod_id}:item/{descriptor.texture_id}"},
        }

    @staticmethod
    def _lang(expanded: ExpandedSpec) -> Dict[str, str]:
        mod_id = expanded.mod_id
        entries = {f"mod.{mod_id}.name": expanded.spec.mod_name}
        for item in expanded.items:
            entries[f"item.{mod_id}.{item.id}"] = item.name
        for block in expanded.blocks:
            entries[f"block.{mod_id}.{block.id}"] = block.name
        return {key: entries[key] for key in sorted(entries)}

    def _emit_data(self, files, expanded: ExpandedSpec) -> None:
        mod_id = expanded.mod_id
        data_root = f"{RESOURCES_PREFIX}data/{mod_id}"

        for recipe in expanded.recipes:
            self._add(files, f"{data_root}/recipe/{recipe.id}.json", to_json(recipe_to_json(mod_id, recipe)))
        for loot in expanded.loot_tables:
            self._add(files, f"{data_root}/loot_table/blocks/{loot.block_id}.json", to_json(loot.table))

        # Several contributions may target one shared file
        tag_values: Dict[str, List[str]] = {}
        for contribution in expanded.tags:
            tag_values.setdefault(tag_path(contribution), []).extend(contribution.values)
        for path, values in tag_values.items():
            self._add(files, path, to_json(tag_document(values)))

    def _emit_sidecars(
        self,
        files,
        aggregated_plan: AggregatedExecutionPlan,
        plans_by_key: Dict[str, FinalTexturePlan],
        summary: Optional[RequestSummary],
    ) -> None:
        self._add(files, f"{SIDECAR_DIR}/execution_plan.json", to_json(aggregated_plan.model_dump(mode="json")))
        texture_doc = {key: plans_by_key[key].model_dump(mode="json") for key in sorted(plans_by_key)}
        self._add(files, f"{SIDECAR_DIR}/texture_plans.json", to_json(texture_doc))
        if summary is not None:
            self._add(files, f"{SIDECAR_DIR}/summary.json", to_json(summary.model_dump(mode="json")))


def _java_path(package_name: str, subpackage: Optional[str], class_name: str) -> str:
    parts = ["src/main/java", package_name.replace(".", "/")]
    if subpackage:
        parts.append(subpackage)
    return "/".join(parts) + f"/{class_name}.java"


__all__ = ["Materializer", "MaterializationError", "to_json"]
