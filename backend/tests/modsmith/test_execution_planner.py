"""
Tests for ExecutionPlanner and ScopeAccountant

The planner maps intents to Systems and Primitives; the accountant prices the
implied scope against a credit budget without ever blocking generation.
"""
import pytest

from modsmith.core import ExecutionPlanner, ScopeAccountant, aggregate_execution_plans, build_request_summary
from modsmith.core.execution_planner import TRANSPARENCY_STATEMENT, build_safety_disclosure
from modsmith.core.registries import PRIMITIVE_REGISTRY, SCOPE_COSTS, SYSTEM_REGISTRY, primitives_for_system
from modsmith.core.scope_accountant import credits_to_visual_level, select_budget_tier
from modsmith.schemas import IntentCategory, Primitive, ScopeUnit, SystemUnit, UserIntent, VisualLevel

LIGHTNING_WAND = UserIntent(name="Storm Wand", description="shoots lightning", category=IntentCategory.ITEM)
TIN_INGOT = UserIntent(name="Tin Ingot", category=IntentCategory.ITEM)
MARBLE = UserIntent(name="Marble Block", category=IntentCategory.BLOCK)


class TestExecutionPlanner:
    """Test suite for ExecutionPlanner"""

    @pytest.fixture
    def planner(self):
        """Create ExecutionPlanner instance"""
        return ExecutionPlanner()

    def test_lightning_systems(self, planner):
        """Test that 'shoots lightning' maps to targeting, chaining and cooldown"""
        plan = planner.plan(LIGHTNING_WAND, content_id="storm_wand")

        assert plan.content_id == "storm_wand"
        assert plan.systems == [
            SystemUnit.INTERACTION,
            SystemUnit.TARGETING,
            SystemUnit.CHAINING,
            SystemUnit.COOLDOWN,
        ]
        assert plan.primitives[0] == Primitive.REGISTER_ITEM
        for primitive in (Primitive.ON_USE, Primitive.RAYCAST_TARGET, Primitive.SPAWN_ENTITY, Primitive.COOLDOWN):
            assert primitive in plan.primitives
        assert not plan.degraded

    def test_lightning_cost_is_registry_sum(self, planner):
        """Test that credit cost is the sum of primitive costs"""
        plan = planner.plan(LIGHTNING_WAND)

        assert plan.credit_cost == sum(PRIMITIVE_REGISTRY[p].credit_cost for p in plan.primitives)
        assert plan.credit_cost == 16
        assert plan.upgrade_path == ["Can later add multi-target or chain bounce"]

    def test_unmatched_item_degrades(self, planner):
        """Test that plain text degrades to a minimal plan"""
        plan = planner.plan(TIN_INGOT)

        assert plan.degraded
        assert plan.systems == [SystemUnit.INTERACTION]
        assert plan.primitives == [Primitive.REGISTER_ITEM, Primitive.ON_USE]
        assert plan.explanation == "Register item; Right-click use"

    def test_plain_block_gets_interaction(self, planner):
        """Test that a plain block still has an interaction system"""
        plan = planner.plan(MARBLE)

        assert plan.systems == [SystemUnit.INTERACTION]
        assert plan.primitives[0] == Primitive.REGISTER_BLOCK

    def test_glowing_block_adds_particles(self, planner):
        """Test that a glowing block carries a particle effect"""
        plan = planner.plan(UserIntent(name="Glowing Block", category=IntentCategory.BLOCK))

        assert Primitive.PARTICLE_EFFECT in plan.primitives
        assert not plan.degraded

    def test_plan_all_keeps_order(self, planner):
        """Test that plan_all plans every pair in order"""
        plans = planner.plan_all([("storm_wand", LIGHTNING_WAND), ("tin_ingot", TIN_INGOT)])
        assert [p.content_id for p in plans] == ["storm_wand", "tin_ingot"]

    def test_aggregate(self, planner):
        """Test that aggregation unions and sorts systems and primitives"""
        plans = planner.plan_all([("storm_wand", LIGHTNING_WAND), ("tin_ingot", TIN_INGOT)])
        aggregated = aggregate_execution_plans(plans)

        assert [s.value for s in aggregated.systems] == ["chaining", "cooldown", "interaction", "targeting"]
        assert [p.value for p in aggregated.primitives] == sorted(p.value for p in aggregated.primitives)
        assert aggregated.credit_cost == plans[0].credit_cost + plans[1].credit_cost
        assert aggregated.safety_disclosure[-1] == TRANSPARENCY_STATEMENT

    def test_safety_disclosure_is_order_independent(self):
        """Test that disclosure depends only on the primitive set"""
        forward = build_safety_disclosure([Primitive.SPAWN_ENTITY, Primitive.COOLDOWN])
        backward = build_safety_disclosure([Primitive.COOLDOWN, Primitive.SPAWN_ENTITY])

        assert forward == backward
        assert forward[0] == "Cooldowns prevent accidental spam"

    def test_planning_is_deterministic(self, planner):
        """Test that identical intents give identical plans"""
        assert planner.plan(LIGHTNING_WAND) == planner.plan(LIGHTNING_WAND)


class TestScopeAccountant:
    """Test suite for ScopeAccountant"""

    @pytest.fixture
    def accountant(self):
        """Create ScopeAccountant with the smallest budget"""
        return ScopeAccountant(30)

    def test_lightning_item_over_budget(self, accountant):
        """Test that an entity-spawning item is priced but never blocked"""
        result = accountant.account([LIGHTNING_WAND])

        assert result.scope == [ScopeUnit.ITEM, ScopeUnit.ITEM_BEHAVIOR, ScopeUnit.ENTITY]
        assert result.total_credits == 35
        assert not result.fits_budget
        assert result.over_by == 5
        assert result.budget_tier == 60
        assert "Upgrade" in result.explanation

    def test_plain_items_fit(self, accountant):
        """Test that plain items fit the smallest budget"""
        result = accountant.account([TIN_INGOT, MARBLE])

        assert result.total_credits == SCOPE_COSTS[ScopeUnit.ITEM] + SCOPE_COSTS[ScopeUnit.BLOCK]
        assert result.fits_budget
        assert result.explanation == ""
        assert result.scope_summary == ["Items", "Blocks"]

    def test_dimension_prompt_expands_scope(self, accountant):
        """Test that a dimension request is priced for everything it implies"""
        result = accountant.account([], prompt="a new dimension")

        assert ScopeUnit.DIMENSION in result.scope
        assert ScopeUnit.WORLD_RULE in result.scope
        assert result.total_credits == 200
        assert result.budget_tier == 300

    def test_adding_intents_never_lowers_credits(self, accountant):
        """Test that credits are monotonic in the intent list"""
        intents = [TIN_INGOT, MARBLE, LIGHTNING_WAND]
        totals = [accountant.account(intents[:n]).total_credits for n in range(len(intents) + 1)]
        assert totals == sorted(totals)

    def test_budget_override(self, accountant):
        """Test that a per-call budget replaces the default"""
        result = accountant.account([LIGHTNING_WAND], budget=60)
        assert result.budget == 60
        assert result.fits_budget

    def test_invalid_budget_raises(self, accountant):
        """Test that a budget outside the tiers is rejected"""
        with pytest.raises(ValueError):
            ScopeAccountant(45)
        with pytest.raises(ValueError):
            accountant.account([TIN_INGOT], budget=100)

    def test_select_budget_tier(self):
        """Test the smallest fitting tier"""
        assert select_budget_tier(0) == 30
        assert select_budget_tier(31) == 60
        assert select_budget_tier(5000) == 300

    def test_visual_levels(self):
        """Test credit to visual level mapping"""
        assert credits_to_visual_level(10) == VisualLevel.BASIC
        assert credits_to_visual_level(45) == VisualLevel.ENHANCED
        assert credits_to_visual_level(100) == VisualLevel.ADVANCED
        assert credits_to_visual_level(10_000) == VisualLevel.LEGENDARY

    def test_request_summary(self, accountant):
        """Test the read-facing summary"""
        result = accountant.account([LIGHTNING_WAND])
        summary = build_request_summary(result, ["storm_wand: fantasy crystal", "tin_ingot: fallback crystal"])

        assert summary.total_credits == 35
        assert summary.visual_level == VisualLevel.ENHANCED
        assert summary.texture_resolution == 32
        assert summary.visual_features == ["emissive"]
        assert summary.blueprint_summary == "storm_wand: fantasy crystal + 1 more"


class TestRegistries:
    """Test suite for the closed registries"""

    def test_registries_are_read_only(self):
        """Test that registry entries cannot be replaced at runtime"""
        with pytest.raises(TypeError):
            PRIMITIVE_REGISTRY[Primitive.COOLDOWN] = PRIMITIVE_REGISTRY[Primitive.ON_USE]
        with pytest.raises(TypeError):
            SYSTEM_REGISTRY[SystemUnit.TARGETING] = SYSTEM_REGISTRY[SystemUnit.COOLDOWN]
        with pytest.raises(TypeError):
            SCOPE_COSTS[ScopeUnit.ITEM] = 0

        assert SCOPE_COSTS[ScopeUnit.ITEM] == 5
        assert PRIMITIVE_REGISTRY[Primitive.COOLDOWN].safety.cooldown_ticks == 20

    def test_system_primitives_are_immutable(self):
        """Test that a system's primitive list is a tuple and lookups return copies"""
        assert isinstance(SYSTEM_REGISTRY[SystemUnit.COOLDOWN].primitives, tuple)
        primitives = primitives_for_system(SystemUnit.COOLDOWN)
        primitives.append(Primitive.TICK_BEHAVIOR)
        assert primitives_for_system(SystemUnit.COOLDOWN) == [Primitive.COOLDOWN]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
