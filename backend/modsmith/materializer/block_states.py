"""
Block States - Vanilla-equivalent blockstate and block model tables

Responsibilities:
- Build the blockstate JSON for every VisualShape
- Build the block models each blockstate references
- Pick the item model parent for a block's own item

Rotation tables mirror the vanilla oak variants so generated wood blocks place,
open and connect exactly like their vanilla counterparts.
"""
from itertools import product
from typing import Any, Dict, List, Optional, Tuple

from modsmith.schemas import VisualShape

FACINGS = ("east", "north", "south", "west")

# Vanilla y rotation per facing
DOOR_Y = {"east": 0, "south": 90, "west": 180, "north": 270}
TRAPDOOR_Y = {"north": 0, "east": 90, "south": 180, "west": 270}
STAIRS_Y = {"east": 0, "south": 90, "west": 180, "north": 270}
FENCE_GATE_Y = {"south": 0, "west": 90, "north": 180, "east": 270}
BUTTON_Y = {"north": 0, "east": 90, "south": 180, "west": 270}

STAIR_SHAPES = ("inner_left", "inner_right", "outer_left", "outer_right", "straight")


def _ref(mod_id: str, model_id: str) -> str:
    return f"{mod_id}:block/{model_id}"


def _variant(model: str, x: int = 0, y: int = 0, uvlock: bool = False) -> Dict[str, Any]:
    """Vanilla variant object; zero rotations and false uvlock are omitted."""
    variant: Dict[str, Any] = {"model": model}
    if x % 360:
        variant["x"] = x % 360
    if y % 360:
        variant["y"] = y % 360
    if uvlock:
        variant["uvlock"] = True
    return variant


def _state_key(**properties: str) -> str:
    return ",".join(f"{name}={value}" for name, value in sorted(properties.items()))


def _single(mod_id: str, block_id: str) -> Dict[str, Any]:
    return {"variants": {"": _variant(_ref(mod_id, block_id))}}


def door_blockstate(mod_id: str, block_id: str) -> Dict[str, Any]:
    variants = {}
    for facing, half, hinge, is_open in product(FACINGS, ("lower", "upper"), ("left", "right"), (False, True)):
        part = "bottom" if half == "lower" else "top"
        model = f"{block_id}_{part}_{hinge}" + ("_open" if is_open else "")
        y = DOOR_Y[facing]
        if is_open:
            y += 90 if hinge == "left" else 270
        key = _state_key(facing=facing, half=half, hinge=hinge, open=str(is_open).lower())
        variants[key] = _variant(_ref(mod_id, model), y=y)
    return {"variants": variants}


def trapdoor_blockstate(mod_id: str, block_id: str) -> Dict[str, Any]:
    variants = {}
    for facing, half, is_open in product(FACINGS, ("bottom", "top"), (False, True)):
        y = TRAPDOOR_Y[facing]
        x = 0
        if is_open:
            model = f"{block_id}_open"
            if half == "top":
                x = 180
                y += 180
        else:
            model = f"{block_id}_{half}"
        key = _state_key(facing=facing, half=half, open=str(is_open).lower())
        variants[key] = _variant(_ref(mod_id, model), x=x, y=y)
    return {"variants": variants}


def stairs_blockstate(mod_id: str, block_id: str) -> Dict[str, Any]:
    variants = {}
    for facing, half, shape in product(FACINGS, ("bottom", "top"), STAIR_SHAPES):
        if shape.startswith("inner"):
            model = f"{block_id}_inner"
        elif shape.startswith("outer"):
            model = f"{block_id}_outer"
        else:
            model = block_id
        x = 0
        y = STAIRS_Y[facing]
        if half == "bottom" and shape.endswith("_left"):
            y -= 90
        if half == "top":
            x = 180
            if shape.endswith("_right"):
                y += 90
        rotated = bool(x % 360 or y % 360)
        key = _state_key(facing=facing, half=half, shape=shape)
        variants[key] = _variant(_ref(mod_id, model), x=x, y=y, uvlock=rotated)
    return {"variants": variants}


def slab_blockstate(mod_id: str, block_id: str, double_model: str) -> Dict[str, Any]:
    return {
        "variants": {
            "type=bottom": _variant(_ref(mod_id, block_id)),
            "type=double": _variant(_ref(mod_id, double_model)),
            "type=top": _variant(_ref(mod_id, f"{block_id}_top")),
        }
    }


def fence_blockstate(mod_id: str, block_id: str) -> Dict[str, Any]:
    side = _ref(mod_id, f"{block_id}_side")
    multipart: List[Dict[str, Any]] = [{"apply": {"model": _ref(mod_id, f"{block_id}_post")}}]
    for direction, y in (("north", 0), ("east", 90), ("south", 180), ("west", 270)):
        multipart.append({"apply": _variant(side, y=y, uvlock=True), "when": {direction: "true"}})
    return {"multipart": multipart}


def fence_gate_blockstate(mod_id: str, block_id: str) -> Dict[str, Any]:
    variants = {}
    for facing, in_wall, is_open in product(FACINGS, (False, True), (False, True)):
        model = block_id + ("_wall" if in_wall else "") + ("_open" if is_open else "")
        key = _state_key(facing=facing, in_wall=str(in_wall).lower(), open=str(is_open).lower())
        variants[key] = _variant(_ref(mod_id, model), y=FENCE_GATE_Y[facing], uvlock=True)
    return {"variants": variants}


def button_blockstate(mod_id: str, block_id: str) -> Dict[str, Any]:
    variants = {}
    for face, facing, powered in product(("ceiling", "floor", "wall"), FACINGS, (False, True)):
        model = block_id + ("_pressed" if powered else "")
        y = BUTTON_Y[facing]
        if face == "floor":
            variant = _variant(_ref(mod_id, model), y=y)
        elif face == "wall":
            variant = _variant(_ref(mod_id, model), x=90, y=y, uvlock=True)
        else:
            variant = _variant(_ref(mod_id, model), x=180, y=y + 180)
        key = _state_key(face=face, facing=facing, powered=str(powered).lower())
        variants[key] = variant
    return {"variants": variants}


def pressure_plate_blockstate(mod_id: str, block_id: str) -> Dict[str, Any]:
    return {
        "variants": {
            "powered=false": _variant(_ref(mod_id, block_id)),
            "powered=true": _variant(_ref(mod_id, f"{block_id}_down")),
        }
    }


def pillar_blockstate(mod_id: str, block_id: str) -> Dict[str, Any]:
    horizontal = _ref(mod_id, f"{block_id}_horizontal")
    return {
        "variants": {
            "axis=x": _variant(horizontal, x=90, y=90),
            "axis=y": _variant(_ref(mod_id, block_id)),
            "axis=z": _variant(horizontal, x=90),
        }
    }


def build_blockstate(mod_id: str, block_id: str, shape: VisualShape, texture_id: str) -> Dict[str, Any]:
    """
    Blockstate JSON for one block

    Args:
        mod_id: Mod namespace
        block_id: Block id
        shape: Visual shape of the block
        texture_id: Texture the block samples (the planks id for planks-textured shapes)

    Returns:
        Blockstate document
    """
    if shape == VisualShape.DOOR:
        return door_blockstate(mod_id, block_id)
    if shape == VisualShape.TRAPDOOR:
        return trapdoor_blockstate(mod_id, block_id)
    if shape == VisualShape.STAIRS:
        return stairs_blockstate(mod_id, block_id)
    if shape == VisualShape.SLAB:
        return slab_blockstate(mod_id, block_id, texture_id)
    if shape == VisualShape.FENCE:
        return fence_blockstate(mod_id, block_id)
    if shape == VisualShape.FENCE_GATE:
        return fence_gate_blockstate(mod_id, block_id)
    if shape == VisualShape.BUTTON:
        return button_blockstate(mod_id, block_id)
    if shape == VisualShape.PRESSURE_PLATE:
        return pressure_plate_blockstate(mod_id, block_id)
    if shape == VisualShape.PILLAR:
        return pillar_blockstate(mod_id, block_id)
    return _single(mod_id, block_id)


def _textured(parent: str, **textures: str) -> Dict[str, Any]:
    return {"parent": parent, "textures": dict(textures)}


def build_block_models(
    mod_id: str,
    block_id: str,
    shape: VisualShape,
    texture_id: str,
) -> List[Tuple[str, Dict[str, Any]]]:
    """
    Every block model a blockstate references

    Returns:
        (model id, model JSON) pairs in a stable order
    """
    tex = _ref(mod_id, texture_id)

    if shape == VisualShape.DOOR:
        models = []
        for part, hinge, suffix in product(("bottom", "top"), ("left", "right"), ("", "_open")):
            name = f"{part}_{hinge}{suffix}"
            models.append((
                f"{block_id}_{name}",
                _textured(f"minecraft:block/door_{name}", bottom=tex, top=tex),
            ))
        return models
    if shape == VisualShape.TRAPDOOR:
        return [
            (f"{block_id}_{part}", _textured(f"minecraft:block/template_orientable_trapdoor_{part}", texture=tex))
            for part in ("bottom", "open", "top")
        ]
    if shape == VisualShape.STAIRS:
        return [
            (block_id, _textured("minecraft:block/stairs", bottom=tex, side=tex, top=tex)),
            (f"{block_id}_inner", _textured("minecraft:block/inner_stairs", bottom=tex, side=tex, top=tex)),
            (f"{block_id}_outer", _textured("minecraft:block/outer_stairs", bottom=tex, side=tex, top=tex)),
        ]
    if shape == VisualShape.SLAB:
        return [
            (block_id, _textured("minecraft:block/slab", bottom=tex, side=tex, top=tex)),
            (f"{block_id}_top", _textured("minecraft:block/slab_top", bottom=tex, side=tex, top=tex)),
        ]
    if shape == VisualShape.FENCE:
        return [
            (f"{block_id}_inventory", _textured("minecraft:block/fence_inventory", texture=tex)),
            (f"{block_id}_post", _textured("minecraft:block/fence_post", texture=tex)),
            (f"{block_id}_side", _textured("minecraft:block/fence_side", texture=tex)),
        ]
    if shape == VisualShape.FENCE_GATE:
        return [
            (block_id + suffix, _textured(f"minecraft:block/template_fence_gate{suffix}", texture=tex))
            for suffix in ("", "_open", "_wall", "_wall_open")
        ]
    if shape == VisualShape.BUTTON:
        return [
            (block_id, _textured("minecraft:block/button", texture=tex)),
            (f"{block_id}_inventory", _textured("minecraft:block/button_inventory", texture=tex)),
            (f"{block_id}_pressed", _textured("minecraft:block/button_pressed", texture=tex)),
        ]
    if shape == VisualShape.PRESSURE_PLATE:
        return [
            (block_id, _textured("minecraft:block/pressure_plate_up", texture=tex)),
            (f"{block_id}_down", _textured("minecraft:block/pressure_plate_down", texture=tex)),
        ]
    if shape == VisualShape.PILLAR:
        return [
            (block_id, _textured("minecraft:block/cube_column", end=tex, side=tex)),
            (f"{block_id}_horizontal", _textured("minecraft:block/cube_column_horizontal", end=tex, side=tex)),
        ]
    if shape in (VisualShape.SIGN, VisualShape.HANGING_SIGN):
        # Sign geometry is drawn by the block entity renderer
        return [(block_id, {"textures": {"particle": tex}})]
    return [(block_id, _textured("minecraft:block/cube_all", all=tex))]


def block_item_model(mod_id: str, block_id: str, shape: VisualShape, texture_id: str) -> Dict[str, Any]:
    """
    Item model for a block's own item

    Flat-rendered blocks (doors, signs) use the generated parent with the block
    texture; everything else points at the block model vanilla uses in hand.
    """
    if shape in (VisualShape.DOOR, VisualShape.SIGN, VisualShape.HANGING_SIGN):
        return {"parent": "minecraft:item/generated", "textures": {"layer0": _ref(mod_id, texture_id)}}
    suffix: Optional[str] = {
        VisualShape.TRAPDOOR: "_bottom",
        VisualShape.FENCE: "_inventory",
        VisualShape.BUTTON: "_inventory",
    }.get(shape)
    return {"parent": _ref(mod_id, block_id + (suffix or ""))}


__all__ = [
    "build_blockstate",
    "build_block_models",
    "block_item_model",
    "door_blockstate",
    "trapdoor_blockstate",
    "stairs_blockstate",
    "slab_blockstate",
    "fence_blockstate",
    "fence_gate_blockstate",
    "button_blockstate",
    "pressure_plate_blockstate",
    "pillar_blockstate",
]
