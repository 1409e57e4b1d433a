"""
Analysis Schema - Prompt Understanding and Clarification

Defines what the understanding stage reports about a raw request and what the
clarification gate decides from it. Both are produced once per request and are
never mutated afterwards.
"""
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict
from enum import Enum


class Confidence(str, Enum):
    """How sure the understanding stage is about the request"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class IssueKind(str, Enum):
    """Kinds of problems the understanding stage can report"""
    NONSENSE = "nonsense"
    CONTRADICTION = "contradiction"
    UNDERSPECIFIED = "underspecified"


class DetectedKind(str, Enum):
    """Whether the request reads like an item or a block"""
    ITEM = "item"
    BLOCK = "block"


class PromptIssue(BaseModel):
    """A single issue found in the request, with its evidence"""
    kind: IssueKind
    reason: str = Field(..., description="Human-readable explanation")
    details: List[str] = Field(default_factory=list, description="Evidence, e.g. ['hot and frozen'] for a contradiction")
    suggestions: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class PromptAnalysis(BaseModel):
    """Result of prompt understanding"""
    raw_prompt: str
    normalized_prompt: str
    confidence: Confidence
    issues: List[PromptIssue] = Field(default_factory=list)
    concepts: List[str] = Field(default_factory=list, description="Concept words found, first occurrence order")
    detected_kind: DetectedKind = DetectedKind.ITEM
    detected_intent: Optional[str] = Field(None, description="Comma-joined concepts or the normalized text")

    model_config = ConfigDict(frozen=True)

    def has_issue(self, kind: IssueKind) -> bool:
        return any(issue.kind == kind for issue in self.issues)


class ClarificationAction(str, Enum):
    """What the clarification gate decided"""
    ASK = "ask"
    PROCEED = "proceed"


class ClarificationDecision(BaseModel):
    """Decision of the clarification gate"""
    action: ClarificationAction
    message: Optional[str] = Field(None, description="Friendly question when asking")
    examples: List[str] = Field(default_factory=list, description="Up to three example requests")
    prompt: Optional[str] = Field(None, description="Normalized prompt to continue with when proceeding")

    model_config = ConfigDict(frozen=True)

    @property
    def should_ask(self) -> bool:
        return self.action == ClarificationAction.ASK


__all__ = [
    "Confidence",
    "IssueKind",
    "DetectedKind",
    "PromptIssue",
    "PromptAnalysis",
    "ClarificationAction",
    "ClarificationDecision",
]
