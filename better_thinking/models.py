"""Typed records for thought steps and tool results"""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

KnowledgeStatus = Literal["known", "unknown", "uncertain"]
KNOWLEDGE_STATUSES = ("known", "unknown", "uncertain")


class StepKind(str, Enum):
    THOUGHT = "thought"
    REVISION = "revision"
    BRANCH = "branch"


class KnowledgeAssessment(BaseModel):
    """What the caller claims to know about a single entity."""

    model_config = ConfigDict(frozen=True)

    entity: str = Field(min_length=1)
    status: KnowledgeStatus


class Step(BaseModel):
    """A single validated reasoning step.

    Attribute names are snake_case; the camelCase names used on the wire are
    kept as aliases so ``model_dump(by_alias=True)`` mirrors the tool schema.
    Instances are immutable: the store replaces rather than edits a step when
    it needs to raise ``total_thoughts``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    thought: str = Field(min_length=1)
    thought_number: int = Field(alias="thoughtNumber", ge=1)
    total_thoughts: int = Field(alias="totalThoughts", ge=1)
    next_thought_needed: bool = Field(alias="nextThoughtNeeded")
    confidence_score: Optional[float] = Field(default=None, alias="confidenceScore", ge=0.0, le=1.0)
    knowledge_assessment: Optional[List[KnowledgeAssessment]] = Field(default=None, alias="knowledgeAssessment")
    is_revision: Optional[bool] = Field(default=None, alias="isRevision")
    revises_thought: Optional[int] = Field(default=None, alias="revisesThought", ge=1)
    branch_from_thought: Optional[int] = Field(default=None, alias="branchFromThought", ge=1)
    branch_id: Optional[str] = Field(default=None, alias="branchId", min_length=1)

    @property
    def kind(self) -> StepKind:
        # A step that both revises and branches is shown as a revision
        if self.is_revision and self.revises_thought is not None:
            return StepKind.REVISION
        if self.is_branched:
            return StepKind.BRANCH
        return StepKind.THOUGHT

    @property
    def is_branched(self) -> bool:
        return self.branch_from_thought is not None and self.branch_id is not None


class StepSuccess(BaseModel):
    status: Literal["success"] = "success"
    thought_number_processed: int
    current_total_thoughts: int
    next_thought_needed: bool
    active_branches: List[str]
    total_history_length: int


class StepFailure(BaseModel):
    status: Literal["failed"] = "failed"
    error: str
