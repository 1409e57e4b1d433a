"""
Tests for PromptUnderstanding and ClarificationGate

Prompt understanding classifies raw text; the gate decides whether to ask a
clarifying question or proceed.
"""
import pytest

from modsmith.interpretation import ClarificationGate, PromptUnderstanding
from modsmith.interpretation.clarification import CONTRADICTION_MESSAGE, NONSENSE_EXAMPLES
from modsmith.interpretation.understanding import (
    decide_confidence,
    find_contradictions,
    levenshtein,
    normalize_word,
)
from modsmith.schemas import ClarificationAction, Confidence, DetectedKind, IssueKind


class TestPromptUnderstanding:
    """Test suite for PromptUnderstanding"""

    @pytest.fixture
    def understanding(self):
        """Create PromptUnderstanding instance"""
        return PromptUnderstanding()

    def test_levenshtein(self):
        """Test classic edit distance"""
        assert levenshtein("cheese", "cheese") == 0
        assert levenshtein("", "ice") == 3
        assert levenshtein("creem", "cream") == 1
        assert levenshtein("kitten", "sitting") == 3

    def test_normalize_word_spelling_table(self):
        """Test that known typos are corrected"""
        assert normalize_word("cheeze") == "cheese"
        assert normalize_word("Radiactive") == "radioactive"

    def test_normalize_word_fuzzy_concept(self):
        """Test that near-misses snap to a concept word"""
        assert normalize_word("glowng") == "glowing"

    def test_ice_cream_is_high_confidence(self, understanding):
        """Test that a clear request gets high confidence and its concepts"""
        analysis = understanding.analyze("ice cream")

        assert analysis.confidence == Confidence.HIGH
        assert analysis.concepts[:2] == ["ice", "cream"]
        assert analysis.issues == []
        assert analysis.detected_kind == DetectedKind.ITEM

    def test_contradiction_is_medium_confidence(self, understanding):
        """Test that hot and frozen together are flagged as a contradiction"""
        analysis = understanding.analyze("a hot frozen sword")

        assert analysis.confidence == Confidence.MEDIUM
        assert analysis.has_issue(IssueKind.CONTRADICTION)
        contradiction = next(i for i in analysis.issues if i.kind == IssueKind.CONTRADICTION)
        assert "hot and frozen" in contradiction.details

    def test_nonsense_is_low_confidence(self, understanding):
        """Test that unrecognizable text is nonsense"""
        analysis = understanding.analyze("qwzx vbnmpl kjhgf")

        assert analysis.confidence == Confidence.LOW
        assert analysis.has_issue(IssueKind.NONSENSE)
        assert analysis.concepts == []

    def test_block_concept_detects_block(self, understanding):
        """Test that block words switch the detected kind"""
        analysis = understanding.analyze("a dream brick")
        assert analysis.detected_kind == DetectedKind.BLOCK

    def test_empty_prompt(self, understanding):
        """Test that an empty prompt is not nonsense"""
        analysis = understanding.analyze("   ")

        assert not analysis.has_issue(IssueKind.NONSENSE)
        assert analysis.concepts == []
        assert analysis.confidence == Confidence.MEDIUM

    def test_non_string_raises(self, understanding):
        """Test that non-string input is rejected"""
        with pytest.raises(TypeError):
            understanding.analyze(42)

    def test_find_contradictions_uses_first_member(self):
        """Test that details name the first member of each side"""
        assert find_contradictions(["lava", "fire", "snow", "ice"]) == ["fire and ice"]
        assert find_contradictions(["cheese"]) == []

    def test_decide_confidence_table(self):
        """Test the confidence decision table order"""
        assert decide_confidence(True, True, 0) == Confidence.LOW
        assert decide_confidence(False, True, 3) == Confidence.MEDIUM
        assert decide_confidence(False, False, 0) == Confidence.MEDIUM
        assert decide_confidence(False, False, 2) == Confidence.HIGH


class TestClarificationGate:
    """Test suite for ClarificationGate"""

    @pytest.fixture
    def understanding(self):
        """Create PromptUnderstanding instance"""
        return PromptUnderstanding()

    @pytest.fixture
    def gate(self):
        """Create ClarificationGate instance"""
        return ClarificationGate()

    def test_clear_request_proceeds(self, understanding, gate):
        """Test that a clear request proceeds with the normalized prompt"""
        decision = gate.decide(understanding.analyze("radiactive cheese"))

        assert decision.action == ClarificationAction.PROCEED
        assert decision.prompt == "radioactive cheese"

    def test_nonsense_asks_with_examples(self, understanding, gate):
        """Test that nonsense asks and offers examples"""
        decision = gate.decide(understanding.analyze("qwzx vbnmpl kjhgf"))

        assert decision.action == ClarificationAction.ASK
        assert decision.examples == NONSENSE_EXAMPLES

    def test_contradiction_asks(self, understanding, gate):
        """Test that a contradiction asks with the contradiction wording"""
        decision = gate.decide(understanding.analyze("a hot frozen sword"))

        assert decision.action == ClarificationAction.ASK
        assert decision.message == CONTRADICTION_MESSAGE

    def test_messages_avoid_error_words(self, understanding, gate):
        """Test that clarification messages stay conversational"""
        for prompt in ("qwzx vbnmpl kjhgf", "a hot frozen sword"):
            message = gate.decide(understanding.analyze(prompt)).message.lower()
            for word in ("error", "invalid", "unsupported"):
                assert word not in message

    def test_underspecified_proceeds(self, understanding, gate):
        """Test that an empty request proceeds instead of asking"""
        decision = gate.decide(understanding.analyze(""))
        assert decision.action == ClarificationAction.PROCEED

    def test_block_only_cosmetic_contradiction_proceeds(self, understanding, gate):
        """Test that a hot/cold contradiction does not block a functional block"""
        analysis = understanding.analyze("hot cold")

        assert gate.decide(analysis).action == ClarificationAction.ASK
        assert gate.decide(analysis, block_only=True).action == ClarificationAction.PROCEED

    def test_block_only_real_contradiction_still_asks(self, understanding, gate):
        """Test that a non-cosmetic contradiction asks even for block-only requests"""
        analysis = understanding.analyze("tiny world")
        assert gate.decide(analysis, block_only=True).action == ClarificationAction.ASK


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
