"""Input validation for better_thinking tool calls.

Turns the untyped ``arguments`` mapping of a tool call into a :class:`Step`.
Required fields are checked first, in a fixed order, and the first violation
is reported. Malformed optional scalars are dropped rather than rejected;
malformed confidence scores and knowledge assessments fail the call.
"""

import logging
import math
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import StepValidationError
from .models import KNOWLEDGE_STATUSES, KnowledgeAssessment, Step

logger = logging.getLogger(__name__)

# Accepted for backward compatibility, warned about, never stored
DEPRECATED_FIELDS: Dict[str, str] = {
    "needsMoreThoughts": "`needsMoreThoughts` is deprecated. Use `nextThoughtNeeded` for flow control.",
}

# Spellings advertised by earlier releases of the tool schema
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "confidenceScore": ("confidence_score",),
    "knowledgeAssessment": ("knowledge_assessment",),
}

_MISSING = object()


def _lookup(data: Mapping[str, Any], name: str) -> Tuple[str, Any]:
    """Return the key actually used by the caller and its value.

    ``None`` counts as absent, as JSON clients commonly send ``null`` for
    optional fields they do not set.
    """
    for key in (name,) + FIELD_ALIASES.get(name, ()):
        value = data.get(key)
        if value is not None:
            return key, value
    return name, _MISSING


def _as_int(value: Any) -> Optional[int]:
    # bool is a subclass of int and must not pass as a step number
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def _as_positive_int(value: Any) -> Optional[int]:
    number = _as_int(value)
    if number is None or number < 1:
        return None
    return number


def _is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _require_positive_int(data: Mapping[str, Any], name: str) -> int:
    number = _as_positive_int(data.get(name))
    if number is None:
        raise StepValidationError(name, f"Invalid input: `{name}` is required and must be a positive integer.")
    return number


def _validate_confidence(key: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise StepValidationError(key, f"Invalid input: `{key}` must be a number between 0.0 and 1.0.")
    if math.isnan(value) or value < 0 or value > 1:
        raise StepValidationError(key, f"Invalid input: `{key}` must be a number between 0.0 and 1.0.")
    return float(value)


def _validate_knowledge(key: str, value: Any) -> List[KnowledgeAssessment]:
    if not isinstance(value, list):
        raise StepValidationError(key, f"Invalid input: `{key}` must be an array.")

    assessments = []
    for index, item in enumerate(value):
        if not isinstance(item, Mapping):
            raise StepValidationError(key, f"Invalid item in {key} at index {index}: must be an object.")
        if not _is_non_empty_str(item.get("entity")):
            raise StepValidationError(key, f"Invalid item in {key} at index {index}: missing or invalid 'entity' string.")
        if item.get("status") not in KNOWLEDGE_STATUSES:
            raise StepValidationError(
                key,
                f"Invalid item in {key} at index {index}: 'status' must be 'known', 'unknown', or 'uncertain'.",
            )
        assessments.append(KnowledgeAssessment(entity=item["entity"], status=item["status"]))
    return assessments


def validate_step(raw: Any) -> Step:
    """Validate raw tool arguments and build a Step.

    Args:
        raw: The ``arguments`` object of a tool call, of any shape

    Returns:
        A fully populated Step

    Raises:
        StepValidationError: on the first required-field violation, or on a
            malformed confidence score or knowledge assessment
    """
    if not isinstance(raw, Mapping):
        raise StepValidationError("arguments", "Invalid input: tool arguments must be an object.")

    # Required fields, reported in this order
    thought = raw.get("thought")
    if not _is_non_empty_str(thought):
        raise StepValidationError("thought", "Invalid input: `thought` is required and must be a non-empty string.")
    thought_number = _require_positive_int(raw, "thoughtNumber")
    total_thoughts = _require_positive_int(raw, "totalThoughts")
    next_thought_needed = raw.get("nextThoughtNeeded")
    if not isinstance(next_thought_needed, bool):
        raise StepValidationError(
            "nextThoughtNeeded", "Invalid input: `nextThoughtNeeded` is required and must be a boolean."
        )

    confidence_score = None
    key, value = _lookup(raw, "confidenceScore")
    if value is not _MISSING:
        confidence_score = _validate_confidence(key, value)

    knowledge_assessment = None
    key, value = _lookup(raw, "knowledgeAssessment")
    if value is not _MISSING:
        knowledge_assessment = _validate_knowledge(key, value)

    # Malformed optional scalars are dropped, not rejected
    is_revision = raw.get("isRevision")
    if not isinstance(is_revision, bool):
        is_revision = None
    revises_thought = _as_positive_int(raw.get("revisesThought"))
    branch_from_thought = _as_positive_int(raw.get("branchFromThought"))
    branch_id = raw.get("branchId")
    if not _is_non_empty_str(branch_id):
        branch_id = None

    if is_revision and revises_thought is None:
        logger.warning("`isRevision` is true but `revisesThought` is missing. Revision context might be unclear.")
    if branch_from_thought is not None and branch_id is None:
        logger.warning("`branchFromThought` is set but `branchId` is missing. Branch cannot be tracked properly.")
    for name, message in DEPRECATED_FIELDS.items():
        if name in raw:
            logger.warning(message)

    return Step(
        thought=thought,
        thought_number=thought_number,
        total_thoughts=total_thoughts,
        next_thought_needed=next_thought_needed,
        confidence_score=confidence_score,
        knowledge_assessment=knowledge_assessment,
        is_revision=is_revision,
        revises_thought=revises_thought,
        branch_from_thought=branch_from_thought,
        branch_id=branch_id,
    )
