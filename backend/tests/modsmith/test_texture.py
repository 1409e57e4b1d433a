"""
Tests for texture synthesis

Aesthetic decomposition, palette selection, procedural layers, style and
rasterization are all pure functions of text and seed.
"""
import pytest

from modsmith.interpretation.aesthetics import METAL_PALETTE, interpret_aesthetics
from modsmith.schemas import AestheticProfile, AnimationHint, BaseNoise, ContrastLevel, DetailLayerType, TextureStyle
from modsmith.texture import TextureSynthesizer
from modsmith.texture.hashing import pick, seed_hash
from modsmith.texture.palette import ensure_not_grayscale_only, generate_palette, is_gray_hex
from modsmith.texture.rasterizer import rasterize_texture


class TestSeedHash:
    """Test suite for the seeded hash"""

    def test_seed_hash_values(self):
        """Test the polynomial hash on known inputs"""
        assert seed_hash("") == 0
        assert seed_hash("a") == 97
        assert seed_hash("ab") == 97 * 31 + 98

    def test_seed_hash_is_32_bit(self):
        """Test that long inputs stay within 32 bits"""
        assert 0 <= seed_hash("x" * 500) < 2 ** 32

    def test_pick_in_range(self):
        """Test that pick stays inside the range"""
        for seed in ("a", "b", "ice", "demo:item/tin_ingot"):
            assert 0 <= pick(seed, 4) < 4


class TestAesthetics:
    """Test suite for aesthetic decomposition"""

    def test_ice_cream(self):
        """Test that ice cream is cold food with a drip animation"""
        interpreted = interpret_aesthetics("ice cream")

        assert "food" in interpreted.semantic_tags
        assert "cold" in interpreted.semantic_tags
        assert interpreted.aesthetic.material_hint == "ice"
        assert interpreted.aesthetic.animation_hint == AnimationHint.DRIP
        assert not interpreted.fallback

    def test_unknown_item_uses_evocative_default(self):
        """Test that an unrecognized item falls back to the magical default"""
        interpreted = interpret_aesthetics("zorp")

        assert interpreted.fallback
        assert interpreted.semantic_tags == ["magical", "organic", "strange"]
        assert interpreted.aesthetic.glow

    def test_empty_text_still_populated(self):
        """Test that empty text produces a complete result"""
        interpreted = interpret_aesthetics("")

        assert interpreted.text == "mystery item"
        assert interpreted.aesthetic.color_palette

    def test_block_words(self):
        """Test that block words mark the text as a block"""
        interpreted = interpret_aesthetics("dream brick")

        assert interpreted.kind == "block"
        assert "magical" in interpreted.semantic_tags


class TestTextureSynthesizer:
    """Test suite for TextureSynthesizer"""

    @pytest.fixture
    def synthesizer(self):
        """Create TextureSynthesizer instance"""
        return TextureSynthesizer(texture_size=16)

    def test_ice_cream_plan(self, synthesizer):
        """Test that ice cream gets a pastel, low-contrast, dripping texture"""
        plan = synthesizer.synthesize(interpret_aesthetics("ice cream"), "demo", content_id="ice_cream")

        assert plan.palette.family == "pastel"
        assert plan.palette.contrast_level == ContrastLevel.LOW
        assert plan.palette.primary_motif == "creamy swirled"
        assert plan.procedural_spec.detail_layers[0].type == DetailLayerType.DRIP
        assert plan.procedural_spec.base_noise == BaseNoise.CRYSTAL
        assert plan.animation_spec.type == AnimationHint.DRIP
        assert plan.fallback_reason is None

    def test_radioactive_cheese_plan(self, synthesizer):
        """Test that radioactive text gets the sickly family and glow"""
        plan = synthesizer.synthesize(interpret_aesthetics("radioactive cheese"), "demo")

        assert plan.palette.family == "sickly"
        assert plan.palette.contrast_level == ContrastLevel.HIGH
        layer_types = [layer.type for layer in plan.procedural_spec.detail_layers]
        assert DetailLayerType.VEINS in layer_types
        assert DetailLayerType.SPARKLES in layer_types
        assert plan.procedural_spec.post_process.glow_mask
        assert plan.styled_spec.style == TextureStyle.MAGICAL

    def test_fallback_reason_recorded(self, synthesizer):
        """Test that the evocative fallback is surfaced on the plan"""
        plan = synthesizer.synthesize(interpret_aesthetics("zorp"), "demo")
        assert plan.fallback_reason

    def test_palette_never_grayscale_only(self, synthesizer):
        """Test that gray-only palettes are replaced"""
        plan = synthesizer.synthesize(interpret_aesthetics("metal"), "demo")

        assert 3 <= len(plan.palette.colors) <= 6
        assert not all(is_gray_hex(c) for c in plan.palette.colors)

    def test_family_palette_never_grayscale_only(self):
        """Test that a gray aesthetic palette is replaced inside a keyword family"""
        aesthetic = AestheticProfile(material_hint="metal", color_palette=list(METAL_PALETTE))
        palette = generate_palette("a magic metal rod", ["magical"], aesthetic, "demo")

        assert palette.family == "fantasy"
        assert 3 <= len(palette.colors) <= 6
        assert not all(is_gray_hex(c) for c in palette.colors)

    def test_ensure_not_grayscale_only(self):
        """Test the grayscale guard directly"""
        colors = ensure_not_grayscale_only(["#808080", "#A0A0A0", "#C0C0C0"], "seed")
        assert not all(is_gray_hex(c) for c in colors)
        assert ensure_not_grayscale_only(["#FF0000", "#808080", "#808080"], "seed") == [
            "#FF0000", "#808080", "#808080",
        ]

    def test_detail_layers_never_empty(self, synthesizer):
        """Test that every plan has at least one detail layer"""
        for text in ("ice cream", "zorp", "plain stone", "golden spoon", ""):
            plan = synthesizer.synthesize(interpret_aesthetics(text), "demo")
            assert plan.procedural_spec.detail_layers

    def test_synthesis_is_deterministic(self, synthesizer):
        """Test that identical text and seed give identical plans"""
        first = synthesizer.synthesize(interpret_aesthetics("cursed golden spoon"), "demo")
        second = synthesizer.synthesize(interpret_aesthetics("cursed golden spoon"), "demo")
        assert first == second


class TestRasterizer:
    """Test suite for rasterize_texture"""

    @pytest.fixture
    def plan(self):
        """Create an ice cream texture plan"""
        return TextureSynthesizer().synthesize(interpret_aesthetics("ice cream"), "demo")

    def test_pixel_buffer_size(self, plan):
        """Test that the RGBA buffer matches the size"""
        texture = rasterize_texture(plan, 16, "demo")

        assert texture.size == 16
        assert len(texture.pixels) == 16 * 16 * 4
        assert texture.hash.startswith("r")
        assert texture.metadata["paletteUsed"] == plan.palette.colors[:6]

    def test_rasterize_32(self, plan):
        """Test the larger supported size"""
        texture = rasterize_texture(plan, 32, "demo")
        assert len(texture.pixels) == 32 * 32 * 4

    def test_rasterize_is_deterministic(self, plan):
        """Test that the same plan and seed give the same pixels"""
        assert rasterize_texture(plan, 16, "demo") == rasterize_texture(plan, 16, "demo")

    def test_unsupported_size_raises(self, plan):
        """Test that unsupported sizes are rejected"""
        with pytest.raises(ValueError):
            rasterize_texture(plan, 20, "demo")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
