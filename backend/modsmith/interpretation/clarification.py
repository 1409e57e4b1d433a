"""
Clarification Gate - ask or proceed, decided from a PromptAnalysis

Ask only when the request is genuinely unclear (nonsense) or self-contradictory.
Underspecified requests always proceed. Messages are framed as a creative
dialogue and never use the words "error", "invalid" or "unsupported".
"""
from typing import List

from modsmith.schemas import (
    ClarificationAction,
    ClarificationDecision,
    Confidence,
    IssueKind,
    PromptAnalysis,
)

NONSENSE_MESSAGE = (
    "I'm not quite sure what you meant there. Could you rephrase or describe the item "
    "or block you have in mind?\n"
    "For example: 'a glowing crystal', 'a strange magical food', or 'a mysterious block'."
)
NONSENSE_EXAMPLES = ["a glowing crystal", "a strange magical food", "a mysterious block"]

CONTRADICTION_MESSAGE = (
    "I noticed a few conflicting ideas (for example, hot and frozen at the same time). "
    "Which direction should I go: hot, cold, or something else?"
)

# Contradictions over these words only change the look, never what a block does
COSMETIC_WORDS = frozenset({"hot", "cold", "vibe", "look"})


def _is_cosmetic_detail(detail: str) -> bool:
    """'<a> and <b>' is cosmetic when either side is a cosmetic word."""
    sides = [side.strip() for side in detail.split(" and ")]
    return any(side in COSMETIC_WORDS for side in sides)


class ClarificationGate:
    """Pure decision table over a PromptAnalysis"""

    def decide(self, analysis: PromptAnalysis, block_only: bool = False) -> ClarificationDecision:
        """
        Decide whether to ask a clarifying question

        Args:
            analysis: Result of prompt understanding
            block_only: Request targets a purely functional block; cosmetic
                contradictions then proceed instead of asking

        Returns:
            ClarificationDecision (ask with message/examples, or proceed with the normalized prompt)
        """
        has_nonsense = analysis.has_issue(IssueKind.NONSENSE)
        has_contradiction = analysis.has_issue(IssueKind.CONTRADICTION)

        if block_only and self._only_cosmetic_contradictions(analysis):
            return self._proceed(analysis)

        if analysis.confidence == Confidence.LOW or has_nonsense or has_contradiction:
            return self._ask(has_contradiction)
        return self._proceed(analysis)

    def _only_cosmetic_contradictions(self, analysis: PromptAnalysis) -> bool:
        """True when every issue is a contradiction and each one is cosmetic."""
        if not analysis.issues:
            return False
        details: List[str] = []
        for issue in analysis.issues:
            if issue.kind != IssueKind.CONTRADICTION:
                return False
            details.extend(issue.details)
        return bool(details) and all(_is_cosmetic_detail(d) for d in details)

    def _ask(self, has_contradiction: bool) -> ClarificationDecision:
        """Contradiction wording wins whenever a contradiction is present."""
        if has_contradiction:
            return ClarificationDecision(action=ClarificationAction.ASK, message=CONTRADICTION_MESSAGE)
        return ClarificationDecision(
            action=ClarificationAction.ASK,
            message=NONSENSE_MESSAGE,
            examples=list(NONSENSE_EXAMPLES),
        )

    def _proceed(self, analysis: PromptAnalysis) -> ClarificationDecision:
        return ClarificationDecision(action=ClarificationAction.PROCEED, prompt=analysis.normalized_prompt)


__all__ = [
    "NONSENSE_MESSAGE",
    "NONSENSE_EXAMPLES",
    "CONTRADICTION_MESSAGE",
    "COSMETIC_WORDS",
    "ClarificationGate",
]
