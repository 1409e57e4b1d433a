"""
Recipe Writer - ModRecipe -> Minecraft 1.21 recipe JSON

Crafting results are {"id", "count"} objects, shapeless ingredients are
expanded by count, and cooking recipes reference exactly one ingredient.
"""
from typing import Any, Dict

from modsmith.schemas import ModRecipe, RecipeType
from modsmith.interpretation.directives import COOKING_EXPERIENCE, COOKING_TIMES
from modsmith.materializer.asset_keys import MaterializationError


def namespaced(mod_id: str, content_id: str) -> str:
    """Prefix a bare id with the mod namespace; already-namespaced ids pass through."""
    return content_id if ":" in content_id else f"{mod_id}:{content_id}"


def _result(mod_id: str, recipe: ModRecipe) -> Dict[str, Any]:
    return {"id": namespaced(mod_id, recipe.result.id), "count": recipe.result.count}


def _check_self_loop(mod_id: str, recipe: ModRecipe) -> None:
    result_id = namespaced(mod_id, recipe.result.id)
    if any(namespaced(mod_id, i) == result_id for i in recipe.ingredient_ids()):
        raise MaterializationError(f"Recipe {recipe.id} consumes its own result {result_id}")


def recipe_to_json(mod_id: str, recipe: ModRecipe) -> Dict[str, Any]:
    """
    Serialize one recipe

    Args:
        mod_id: Namespace for bare ids
        recipe: Recipe from the expanded spec

    Returns:
        Recipe document

    Raises:
        MaterializationError: On a self-loop, a malformed recipe or an unknown type
    """
    _check_self_loop(mod_id, recipe)

    if recipe.type == RecipeType.CRAFTING_SHAPELESS:
        ingredients = []
        for ingredient in recipe.ingredients:
            ingredients.extend({"item": namespaced(mod_id, ingredient.id)} for _ in range(ingredient.count))
        return {
            "type": "minecraft:crafting_shapeless",
            "ingredients": ingredients,
            "result": _result(mod_id, recipe),
        }

    if recipe.type == RecipeType.CRAFTING_SHAPED:
        if not recipe.pattern or not recipe.key:
            raise MaterializationError(f"Shaped recipe {recipe.id} needs a pattern and a key")
        return {
            "type": "minecraft:crafting_shaped",
            "pattern": list(recipe.pattern),
            "key": {symbol: {"item": namespaced(mod_id, item)} for symbol, item in sorted(recipe.key.items())},
            "result": _result(mod_id, recipe),
        }

    if recipe.type.is_cooking:
        if len(recipe.ingredients) != 1:
            raise MaterializationError(f"Cooking recipe {recipe.id} needs exactly one ingredient")
        return {
            "type": f"minecraft:{recipe.type.value}",
            "ingredient": {"item": namespaced(mod_id, recipe.ingredients[0].id)},
            "result": _result(mod_id, recipe),
            "experience": recipe.experience if recipe.experience is not None else COOKING_EXPERIENCE,
            "cookingtime": recipe.cooking_time if recipe.cooking_time is not None else COOKING_TIMES[recipe.type],
        }

    raise MaterializationError(f"Unknown recipe type: {recipe.type}")


__all__ = ["namespaced", "recipe_to_json"]
