"""
Mod Scaffold - fabric.mod.json, gradle.properties, pack.mcmeta and Java registration

Responsibilities:
- Build the Fabric metadata document against the fixed platform versions
- Build gradle.properties for the external build toolchain
- Generate the ModInitializer plus the ModItems / ModBlocks registration classes
"""
from textwrap import dedent
from typing import Any, Dict, List, Optional, Set

from config import (
    MINECRAFT_VERSION,
    FABRIC_LOADER_VERSION,
    FABRIC_API_VERSION,
    YARN_MAPPINGS,
    JAVA_VERSION,
    JAVA_PACKAGE_ROOT,
    RESOURCE_PACK_FORMAT,
)

from modsmith.schemas import CreativeTab, ExpandedSpec, VisualShape, EntityCategory
from modsmith.materializer.behavior import behavior_class_name, to_class_name

MOD_VERSION = "1.0.0"


def package_name_for(mod_id: str, root: str = JAVA_PACKAGE_ROOT) -> str:
    return f"{root}.{mod_id.replace('-', '_')}"


def main_class_name_for(mod_id: str) -> str:
    return to_class_name(mod_id)


def fabric_mod_json(expanded: ExpandedSpec, package_name: str) -> Dict[str, Any]:
    """
    Fabric Loader metadata

    Args:
        expanded: Expanded spec (mod id and name)
        package_name: Java package holding the main class

    Returns:
        fabric.mod.json document
    """
    mod_id = expanded.mod_id
    return {
        "schemaVersion": 1,
        "id": mod_id,
        "version": MOD_VERSION,
        "name": expanded.spec.mod_name,
        "description": f"{expanded.spec.mod_name}, generated by modsmith",
        "authors": ["modsmith"],
        "contact": {},
        "license": "MIT",
        "icon": f"assets/{mod_id}/icon.png",
        "environment": "*",
        "entrypoints": {
            "main": [f"{package_name}.{main_class_name_for(mod_id)}"],
        },
        "depends": {
            "fabricloader": f">={FABRIC_LOADER_VERSION}",
            "minecraft": f"~{MINECRAFT_VERSION}",
            "java": f">={JAVA_VERSION}",
            "fabric-api": "*",
        },
    }


def gradle_properties(mod_id: str, package_name: str) -> str:
    return dedent(f"""\
        # Fabric Properties
        minecraft_version={MINECRAFT_VERSION}
        yarn_mappings={YARN_MAPPINGS}
        loader_version={FABRIC_LOADER_VERSION}

        # Mod Properties
        mod_version={MOD_VERSION}
        maven_group={package_name}
        archives_base_name={mod_id}

        # Dependencies
        fabric_version={FABRIC_API_VERSION}

        # Build Configuration
        org.gradle.jvmargs=-Xmx2G
        org.gradle.parallel=true
        """)


def pack_mcmeta(mod_id: str) -> Dict[str, Any]:
    return {
        "pack": {
            "description": "Resources for " + mod_id,
            "pack_format": RESOURCE_PACK_FORMAT,
        }
    }


def main_class_source(mod_id: str, package_name: str) -> str:
    main_class_name = main_class_name_for(mod_id)
    return dedent(f"""\
        package {package_name};

        import net.fabricmc.api.ModInitializer;
        import org.slf4j.Logger;
        import org.slf4j.LoggerFactory;
        import {package_name}.item.ModItems;
        import {package_name}.block.ModBlocks;

        public class {main_class_name} implements ModInitializer {{
        \tpublic static final String MOD_ID = "{mod_id}";
        \tpublic static final Logger LOGGER = LoggerFactory.getLogger(MOD_ID);

        \t@Override
        \tpublic void onInitialize() {{
        \t\tModItems.registerModItems();
        \t\tModBlocks.registerModBlocks();
        \t\tLOGGER.info("Loaded {{}} mod!", MOD_ID);
        \t}}
        }}
        """)


def _fill(template: str, **parts: List[str]) -> str:
    """Replace '{name}' placeholder lines with the joined source lines."""
    for name, lines in parts.items():
        template = template.replace("{" + name + "}", "\n".join(lines))
    return template


def _tab_registrations(entries_by_tab: Dict[CreativeTab, List[str]]) -> List[str]:
    """ItemGroupEvents listeners, one per tab, in first-seen order."""
    lines: List[str] = []
    for tab, registration_ids in entries_by_tab.items():
        lines.append(f"\t\tItemGroupEvents.modifyEntriesEvent({tab.java_constant}).register(entries -> {{")
        lines.extend(f"\t\t\tentries.add({registration_id});" for registration_id in registration_ids)
        lines.append("\t\t});")
    return lines


def mod_items_source(
    expanded: ExpandedSpec,
    package_name: str,
    behavior_items: Optional[Set[str]] = None,
) -> str:
    """
    ModItems.java for every item that is not also a block

    Block items are registered next to their blocks in ModBlocks. Behavior
    items are listed in the tools tab, everything else in its expanded tab.
    """
    main_class_name = main_class_name_for(expanded.mod_id)
    behavior_items = behavior_items or set()
    block_ids = set(expanded.block_ids())

    declarations: List[str] = []
    registrations: List[str] = []
    entries_by_tab: Dict[CreativeTab, List[str]] = {}
    for item in expanded.items:
        if item.id in block_ids:
            continue
        registration_id = item.id.upper()
        item_class = behavior_class_name(item.id) if item.id in behavior_items else "Item"
        settings = "new Item.Settings().maxCount(1)" if item.id in behavior_items else "new Item.Settings()"
        declarations.append(f"\tpublic static Item {registration_id};")
        registrations.append(
            f"\t\t{registration_id} = Registry.register(Registries.ITEM, "
            f'Identifier.of({main_class_name}.MOD_ID, "{item.id}"), '
            f"new {item_class}({settings}));"
        )
        entry = expanded.creative_tab_for(item.id)
        tab = CreativeTab.TOOLS if item.id in behavior_items else (entry.tab if entry else CreativeTab.INGREDIENTS)
        entries_by_tab.setdefault(tab, []).append(registration_id)

    return _fill(dedent(f"""\
        package {package_name}.item;

        import net.fabricmc.fabric.api.itemgroup.v1.ItemGroupEvents;
        import net.minecraft.item.Item;
        import net.minecraft.item.ItemGroups;
        import net.minecraft.registry.Registries;
        import net.minecraft.registry.Registry;
        import net.minecraft.util.Identifier;
        import {package_name}.{main_class_name};

        public class ModItems {{
        {{declarations}}

        \tpublic static void registerModItems() {{
        {{registrations}}

        {{tab_registrations}}
        \t}}
        }}
        """), declarations=declarations, registrations=registrations,
        tab_registrations=_tab_registrations(entries_by_tab))


# Block class and settings source per shape (vanilla oak behavior)
BLOCK_CONSTRUCTORS = {
    VisualShape.PILLAR: "new PillarBlock(AbstractBlock.Settings.copy(Blocks.OAK_LOG))",
    VisualShape.PLANKS: "new Block(AbstractBlock.Settings.copy(Blocks.OAK_PLANKS))",
    VisualShape.STAIRS: "new StairsBlock(Blocks.OAK_PLANKS.getDefaultState(), AbstractBlock.Settings.copy(Blocks.OAK_STAIRS))",
    VisualShape.SLAB: "new SlabBlock(AbstractBlock.Settings.copy(Blocks.OAK_SLAB))",
    VisualShape.FENCE: "new FenceBlock(AbstractBlock.Settings.copy(Blocks.OAK_FENCE))",
    VisualShape.FENCE_GATE: "new FenceGateBlock(WoodType.OAK, AbstractBlock.Settings.copy(Blocks.OAK_FENCE_GATE))",
    VisualShape.DOOR: "new DoorBlock(BlockSetType.OAK, AbstractBlock.Settings.copy(Blocks.OAK_DOOR))",
    VisualShape.TRAPDOOR: "new TrapdoorBlock(BlockSetType.OAK, AbstractBlock.Settings.copy(Blocks.OAK_TRAPDOOR))",
    VisualShape.BUTTON: "new ButtonBlock(BlockSetType.OAK, 30, AbstractBlock.Settings.copy(Blocks.OAK_BUTTON))",
    VisualShape.PRESSURE_PLATE: "new PressurePlateBlock(BlockSetType.OAK, AbstractBlock.Settings.copy(Blocks.OAK_PRESSURE_PLATE))",
    VisualShape.SIGN: "new Block(AbstractBlock.Settings.copy(Blocks.OAK_PLANKS).noCollision())",
    VisualShape.HANGING_SIGN: "new Block(AbstractBlock.Settings.copy(Blocks.OAK_PLANKS).noCollision())",
}


def _cube_constructor(requires_tool: bool) -> str:
    settings = "AbstractBlock.Settings.create().strength(3.0f, 3.0f)"
    if requires_tool:
        settings += ".requiresTool()"
    return f"new Block({settings})"


def mod_blocks_source(expanded: ExpandedSpec, package_name: str) -> str:
    """ModBlocks.java registering every block plus its block item"""
    main_class_name = main_class_name_for(expanded.mod_id)
    requires_tool = expanded.spec.constraints.require_pickaxe_mining

    declarations: List[str] = []
    registrations: List[str] = []
    item_registrations: List[str] = []
    entries_by_tab: Dict[CreativeTab, List[str]] = {}
    for block in expanded.blocks:
        registration_id = block.id.upper()
        descriptor = expanded.descriptor_for(block.id, EntityCategory.BLOCK)
        shape = descriptor.shape if descriptor else VisualShape.CUBE
        constructor = BLOCK_CONSTRUCTORS.get(shape) or _cube_constructor(requires_tool)

        declarations.append(f"\tpublic static Block {registration_id};")
        registrations.append(
            f"\t\t{registration_id} = Registry.register(Registries.BLOCK, "
            f'Identifier.of({main_class_name}.MOD_ID, "{block.id}"), {constructor});'
        )
        item_registrations.append(
            f'\t\tRegistry.register(Registries.ITEM, Identifier.of({main_class_name}.MOD_ID, "{block.id}"), '
            f"new BlockItem({registration_id}, new Item.Settings()));"
        )
        entry = expanded.creative_tab_for(block.id)
        entries_by_tab.setdefault(entry.tab if entry else CreativeTab.BUILDING_BLOCKS, []).append(registration_id)

    return _fill(dedent(f"""\
        package {package_name}.block;

        import net.fabricmc.fabric.api.itemgroup.v1.ItemGroupEvents;
        import net.minecraft.block.AbstractBlock;
        import net.minecraft.block.Block;
        import net.minecraft.block.BlockSetType;
        import net.minecraft.block.Blocks;
        import net.minecraft.block.ButtonBlock;
        import net.minecraft.block.DoorBlock;
        import net.minecraft.block.FenceBlock;
        import net.minecraft.block.FenceGateBlock;
        import net.minecraft.block.PillarBlock;
        import net.minecraft.block.PressurePlateBlock;
        import net.minecraft.block.SlabBlock;
        import net.minecraft.block.StairsBlock;
        import net.minecraft.block.TrapdoorBlock;
        import net.minecraft.block.WoodType;
        import net.minecraft.item.BlockItem;
        import net.minecraft.item.Item;
        import net.minecraft.item.ItemGroups;
        import net.minecraft.registry.Registries;
        import net.minecraft.registry.Registry;
        import net.minecraft.util.Identifier;
        import {package_name}.{main_class_name};

        public class ModBlocks {{
        {{declarations}}

        \tpublic static void registerModBlocks() {{
        {{registrations}}

        \t\t// Register block items
        {{item_registrations}}

        {{tab_registrations}}
        \t}}
        }}
        """), declarations=declarations, registrations=registrations, item_registrations=item_registrations,
        tab_registrations=_tab_registrations(entries_by_tab))


__all__ = [
    "MOD_VERSION",
    "package_name_for",
    "main_class_name_for",
    "fabric_mod_json",
    "gradle_properties",
    "pack_mcmeta",
    "main_class_source",
    "mod_items_source",
    "mod_blocks_source",
]
