"""
Prompt Understanding - closed-form classification of a raw request

Responsibilities:
- Normalize text (typo table + bounded edit distance against a closed vocabulary)
- Extract concept words and known multi-word phrases
- Detect nonsense, contradictions and underspecified requests
- Assign a confidence level from an ordered decision table

No model is trained or invoked; every rule is a fixed table below.
"""
import re
from typing import Callable, List, Optional, Tuple

from modsmith.schemas import (
    Confidence,
    DetectedKind,
    IssueKind,
    PromptAnalysis,
    PromptIssue,
)

SPELLING_CORRECTIONS = {
    "creem": "cream",
    "cheeze": "cheese",
    "chese": "cheese",
    "radiactive": "radioactive",
    "radioactiv": "radioactive",
    "magickal": "magical",
    "magikal": "magical",
    "crystle": "crystal",
    "crystel": "crystal",
    "glowwing": "glowing",
    "glowin": "glowing",
    "frezen": "frozen",
    "froozen": "frozen",
    "brik": "brick",
    "blok": "block",
    "blck": "block",
    "spon": "spoon",
    "spooon": "spoon",
    "sweerd": "sword",
    "swrod": "sword",
    "dreem": "dream",
    "drem": "dream",
    "curced": "cursed",
    "cursd": "cursed",
    "golen": "golden",
    "glden": "golden",
    "icecream": "ice cream",
    "icecreem": "ice cream",
}

CONCEPT_WORDS = (
    "ice", "cream", "cheese", "food", "block", "brick", "stone", "magic", "magical",
    "glow", "glowing", "radioactive", "dangerous", "cold", "hot", "frozen", "fire",
    "dream", "crystal", "golden", "gold", "spoon", "sword", "tool", "weapon", "cute",
    "soft", "blue", "red", "green", "strange", "mysterious", "organic", "metal", "wood",
    "slime", "energy", "wet", "dry", "ancient", "cursed", "sweet", "edible", "feeling",
    "thing", "something", "arcane", "fantasy", "mystic", "enchanted", "liquid", "solid",
    "intangible", "tiny", "world", "armor", "wearable", "machine", "warm", "frost",
    "veins", "sparkle", "pulse", "drip", "wave", "fluffy", "plush", "pastel", "sickly",
    "lava", "snow", "flame",
)
_CONCEPT_SET = frozenset(CONCEPT_WORDS)

ABSTRACT_PATTERNS = (
    re.compile(r"\b(feeling|something|thing that feels|a bit like|kind of|sort of)\b", re.IGNORECASE),
    re.compile(r"\b(strange|mysterious|magical|weird|odd|curious)\b", re.IGNORECASE),
    re.compile(r"\b(abstract|metaphor|concept)\b", re.IGNORECASE),
    re.compile(r"\b(turned into|become|like a)\b", re.IGNORECASE),
)

CONTRADICTION_PAIRS = (
    (("hot", "fire", "flame", "lava", "burn"), ("frozen", "cold", "ice", "snow", "frost")),
    (("liquid", "water", "flow"), ("solid", "stone", "brick", "block")),
    (("edible", "food", "eat"), ("intangible", "machine", "ghost")),
    (("tiny", "small"), ("world", "world-sized", "planet")),
    (("block", "brick", "placeable"), ("wearable", "armor", "equip")),
)

KNOWN_PHRASES = ("ice cream", "radioactive cheese", "dream brick", "cursed golden spoon", "golden spoon")

BLOCK_CONCEPTS = frozenset({"block", "brick", "stone", "wall", "slab", "stairs"})

MAX_EDIT_DISTANCE = 2
MIN_FUZZY_WORD_LEN = 3

UNDERSPECIFIED_SUGGESTIONS = ("a glowing crystal", "a strange magical food", "a mysterious block")

NONSENSE_REASON = (
    "No recognizable item or block ideas could be found, and the text doesn't look "
    "like a metaphor or abstract description."
)
CONTRADICTION_REASON = "The request combines ideas that pull in opposite directions."
UNDERSPECIFIED_REASON = "The request doesn't name a clear item or block idea yet."

_NON_LETTERS = re.compile(r"[^a-z]")


def levenshtein(a: str, b: str) -> int:
    """Classic edit distance (insert, delete, substitute)."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def normalize_word(word: str) -> str:
    """
    Normalize one token

    Lowercase and strip non-letters, apply the typo table, then snap to the
    closest concept word within edit distance 2 (ties keep the earlier concept).
    """
    lower = _NON_LETTERS.sub("", word.lower())
    if not lower:
        return word
    corrected = SPELLING_CORRECTIONS.get(lower, lower)
    if corrected in _CONCEPT_SET:
        return corrected

    best: Optional[str] = None
    best_distance = MAX_EDIT_DISTANCE + 1
    for concept in CONCEPT_WORDS:
        if len(concept) < MIN_FUZZY_WORD_LEN:
            continue
        distance = levenshtein(corrected, concept)
        if distance < best_distance and distance <= MAX_EDIT_DISTANCE:
            best_distance = distance
            best = concept
    return best if best is not None else corrected


def normalize_prompt(text: str) -> str:
    """Normalize every whitespace-separated token and rejoin with single spaces."""
    return " ".join(normalize_word(token) for token in text.strip().split())


def extract_concepts(text: str) -> List[str]:
    """Concept words in first-occurrence order, including words of known phrases."""
    lower = text.lower()
    concepts: List[str] = []

    def add(concept: str):
        if concept not in concepts:
            concepts.append(concept)

    for token in lower.split():
        cleaned = _NON_LETTERS.sub("", token)
        if len(cleaned) < 2:
            continue
        normalized = normalize_word(cleaned)
        if normalized in _CONCEPT_SET:
            add(normalized)

    for phrase in KNOWN_PHRASES:
        if phrase in lower:
            for word in phrase.split():
                if word in _CONCEPT_SET:
                    add(word)
    return concepts


def is_abstract(text: str) -> bool:
    return any(pattern.search(text) for pattern in ABSTRACT_PATTERNS)


def is_nonsense(normalized: str, concepts: List[str]) -> bool:
    """Nonsense only when nothing is recognizable and the text is not abstract."""
    if concepts or is_abstract(normalized):
        return False
    tokens = [t for t in normalized.lower().split() if len(t) >= 2]
    if any(normalize_word(t) in _CONCEPT_SET for t in tokens):
        return False
    return len(tokens) >= 3 or len(normalized) >= 10


def find_contradictions(concepts: List[str]) -> List[str]:
    """One '<a> and <b>' entry per opposite group pair present, using the first member of each."""
    present = set(concepts)
    details: List[str] = []
    for side_a, side_b in CONTRADICTION_PAIRS:
        first_a = next((c for c in side_a if c in present), None)
        first_b = next((c for c in side_b if c in present), None)
        if first_a and first_b:
            details.append(f"{first_a} and {first_b}")
    return details


def infer_kind(concepts: List[str]) -> DetectedKind:
    if any(c in BLOCK_CONCEPTS for c in concepts):
        return DetectedKind.BLOCK
    return DetectedKind.ITEM


# Ordered decision table: (predicate over (nonsense, contradiction, concept_count), confidence).
# Evaluated top to bottom; the first predicate that holds decides.
ConfidenceRule = Tuple[Callable[[bool, bool, int], bool], Confidence]
CONFIDENCE_RULES: Tuple[ConfidenceRule, ...] = (
    (lambda nonsense, contradiction, count: nonsense, Confidence.LOW),
    (lambda nonsense, contradiction, count: contradiction, Confidence.MEDIUM),
    (lambda nonsense, contradiction, count: count == 0, Confidence.MEDIUM),
    (lambda nonsense, contradiction, count: True, Confidence.HIGH),
)


def decide_confidence(nonsense: bool, contradiction: bool, concept_count: int) -> Confidence:
    for predicate, outcome in CONFIDENCE_RULES:
        if predicate(nonsense, contradiction, concept_count):
            return outcome
    return Confidence.HIGH


class PromptUnderstanding:
    """Classifies raw request text into a PromptAnalysis"""

    def analyze(self, prompt: str) -> PromptAnalysis:
        """
        Analyze a raw request

        Args:
            prompt: Raw text; may be empty or whitespace

        Returns:
            PromptAnalysis with confidence and ordered issues

        Raises:
            TypeError: If prompt is not a string
        """
        if not isinstance(prompt, str):
            raise TypeError(f"prompt must be a string, got {type(prompt).__name__}")

        raw = prompt.strip()
        normalized = normalize_prompt(raw)
        concepts = extract_concepts(normalized)
        nonsense = is_nonsense(normalized, concepts)
        contradictions = find_contradictions(concepts)

        issues: List[PromptIssue] = []
        if nonsense:
            issues.append(PromptIssue(kind=IssueKind.NONSENSE, reason=NONSENSE_REASON))
        if contradictions:
            issues.append(PromptIssue(
                kind=IssueKind.CONTRADICTION,
                reason=CONTRADICTION_REASON,
                details=contradictions,
            ))
        if not concepts and not nonsense and not contradictions and normalized:
            issues.append(PromptIssue(
                kind=IssueKind.UNDERSPECIFIED,
                reason=UNDERSPECIFIED_REASON,
                suggestions=list(UNDERSPECIFIED_SUGGESTIONS),
            ))

        detected_intent = None
        if concepts:
            detected_intent = ", ".join(concepts)
        elif normalized:
            detected_intent = normalized

        return PromptAnalysis(
            raw_prompt=prompt,
            normalized_prompt=normalized or raw,
            confidence=decide_confidence(nonsense, bool(contradictions), len(concepts)),
            issues=issues,
            concepts=concepts,
            detected_kind=infer_kind(concepts),
            detected_intent=detected_intent,
        )


__all__ = [
    "SPELLING_CORRECTIONS",
    "CONCEPT_WORDS",
    "ABSTRACT_PATTERNS",
    "CONTRADICTION_PAIRS",
    "KNOWN_PHRASES",
    "levenshtein",
    "normalize_word",
    "normalize_prompt",
    "extract_concepts",
    "is_abstract",
    "is_nonsense",
    "find_contradictions",
    "infer_kind",
    "decide_confidence",
    "PromptUnderstanding",
]
