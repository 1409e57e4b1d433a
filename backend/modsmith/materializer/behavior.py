"""
Behavior Source - custom Item classes for targeted-effect items

An item whose plan combines on_use, raycast_target and spawn_entity gets its
own Item subclass. The class is parameterized only by registry safety bounds
(cooldown ticks, max range); no request text reaches the generated source.
"""
from textwrap import dedent
from typing import NamedTuple, Optional

from modsmith.schemas import ExecutionPlan, IntentCategory, Primitive
from modsmith.core.registries import PRIMITIVE_REGISTRY

BEHAVIOR_PRIMITIVES = frozenset({Primitive.ON_USE, Primitive.RAYCAST_TARGET, Primitive.SPAWN_ENTITY})


class BehaviorBounds(NamedTuple):
    cooldown_ticks: int
    max_range: int


def to_class_name(content_id: str) -> str:
    """Convert snake/kebab id to PascalCase"""
    return "".join(word.capitalize() for word in content_id.replace("-", "_").split("_") if word)


def behavior_class_name(content_id: str) -> str:
    return f"{to_class_name(content_id)}Item"


def needs_custom_behavior(plan: ExecutionPlan) -> bool:
    return (
        plan.content_id is not None
        and plan.category == IntentCategory.ITEM
        and BEHAVIOR_PRIMITIVES.issubset(plan.primitives)
    )


def behavior_bounds(plan: ExecutionPlan) -> BehaviorBounds:
    """Cooldown and range from the registry; cooldown is 0 unless the plan has the cooldown primitive."""
    cooldown: Optional[int] = None
    if Primitive.COOLDOWN in plan.primitives:
        cooldown = PRIMITIVE_REGISTRY[Primitive.COOLDOWN].safety.cooldown_ticks
    max_range = PRIMITIVE_REGISTRY[Primitive.RAYCAST_TARGET].safety.max_range
    return BehaviorBounds(cooldown_ticks=cooldown or 0, max_range=max_range or 0)


def behavior_source(package_name: str, plan: ExecutionPlan) -> str:
    """
    Java source for one custom-behavior item

    Args:
        package_name: Root Java package of the mod
        plan: Execution plan of the item (must satisfy needs_custom_behavior)

    Returns:
        Java source text
    """
    class_name = behavior_class_name(plan.content_id)
    bounds = behavior_bounds(plan)

    return dedent(f"""\
        package {package_name}.item;

        import net.minecraft.entity.EntityType;
        import net.minecraft.entity.LightningEntity;
        import net.minecraft.entity.player.PlayerEntity;
        import net.minecraft.item.Item;
        import net.minecraft.item.ItemStack;
        import net.minecraft.sound.SoundCategory;
        import net.minecraft.sound.SoundEvents;
        import net.minecraft.util.Hand;
        import net.minecraft.util.TypedActionResult;
        import net.minecraft.util.hit.BlockHitResult;
        import net.minecraft.util.hit.HitResult;
        import net.minecraft.util.math.BlockPos;
        import net.minecraft.util.math.Vec3d;
        import net.minecraft.world.World;

        public class {class_name} extends Item {{
        \tprivate static final int COOLDOWN_TICKS = {bounds.cooldown_ticks};
        \tprivate static final double MAX_RANGE = {bounds.max_range}.0;

        \tpublic {class_name}(Settings settings) {{
        \t\tsuper(settings);
        \t}}

        \t@Override
        \tpublic TypedActionResult<ItemStack> use(World world, PlayerEntity user, Hand hand) {{
        \t\tItemStack stack = user.getStackInHand(hand);
        \t\tif (world.isClient()) {{
        \t\t\treturn TypedActionResult.success(stack, true);
        \t\t}}

        \t\tHitResult hit = user.raycast(MAX_RANGE, 1.0f, false);
        \t\tif (hit.getType() != HitResult.Type.BLOCK) {{
        \t\t\treturn TypedActionResult.pass(stack);
        \t\t}}

        \t\tBlockPos pos = ((BlockHitResult) hit).getBlockPos();
        \t\tLightningEntity lightning = EntityType.LIGHTNING_BOLT.create(world);
        \t\tif (lightning != null) {{
        \t\t\tlightning.refreshPositionAfterTeleport(Vec3d.ofCenter(pos));
        \t\t\tworld.spawnEntity(lightning);
        \t\t}}
        \t\tworld.playSound(null, pos, SoundEvents.ENTITY_LIGHTNING_BOLT_THUNDER, SoundCategory.WEATHER, 1.0f, 1.0f);

        \t\tif (COOLDOWN_TICKS > 0) {{
        \t\t\tuser.getItemCooldownManager().set(this, COOLDOWN_TICKS);
        \t\t}}
        \t\treturn TypedActionResult.success(stack);
        \t}}
        }}
        """)


__all__ = [
    "BehaviorBounds",
    "to_class_name",
    "behavior_class_name",
    "needs_custom_behavior",
    "behavior_bounds",
    "behavior_source",
]
