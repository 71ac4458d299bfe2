"""In-memory thought history and branch index"""

import logging
from typing import Dict, List

from .models import Step

logger = logging.getLogger(__name__)


class ThoughtStore:
    """Ordered history of validated steps plus the branches derived from it.

    Nothing is persisted: the store lives as long as the object does.
    """

    def __init__(self):
        self._history: List[Step] = []
        self._branches: Dict[str, List[Step]] = {}

    def append(self, step: Step) -> Step:
        """Record a validated step and return it as stored.

        ``total_thoughts`` is raised to ``thought_number`` when the caller
        underestimated it; that is the only change made to a step.
        """
        if step.thought_number > step.total_thoughts:
            logger.warning(
                f"thoughtNumber ({step.thought_number}) exceeds totalThoughts ({step.total_thoughts}). "
                "Adjusting totalThoughts."
            )
            step = step.model_copy(update={"total_thoughts": step.thought_number})

        self._history.append(step)

        if step.is_branched:
            if step.branch_id not in self._branches:
                self._branches[step.branch_id] = []
                logger.info(f"🌱 Starting new branch: {step.branch_id} from thought {step.branch_from_thought}")
            self._branches[step.branch_id].append(step)

        return step

    def discard(self, step: Step):
        """Undo the most recent append of ``step``.

        A branch created by that append is removed again.
        """
        if not self._history or self._history[-1] is not step:
            raise ValueError("Only the most recently appended step can be discarded")
        self._history.pop()

        if step.is_branched:
            members = self._branches[step.branch_id]
            members.pop()
            if not members:
                del self._branches[step.branch_id]

    @property
    def history(self) -> List[Step]:
        return list(self._history)

    @property
    def history_length(self) -> int:
        return len(self._history)

    @property
    def branch_ids(self) -> List[str]:
        return list(self._branches)

    def branch(self, branch_id: str) -> List[Step]:
        if branch_id not in self._branches:
            raise KeyError(f"Branch {branch_id} not found")
        return list(self._branches[branch_id])

    def reset(self):
        self._history.clear()
        self._branches.clear()
