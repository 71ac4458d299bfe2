"""Thought processing: validate, record, render, summarize"""

import logging
import threading
from typing import Any, Dict, Optional

from .config import color_enabled
from .errors import StepValidationError
from .models import StepFailure, StepSuccess
from .render import render_step
from .store import ThoughtStore
from .validation import validate_step

logger = logging.getLogger(__name__)


class ThinkingProcessor:
    """Single entry point for better_thinking tool calls.

    Owns the thought store. A call either fully succeeds (step stored,
    rendered and summarized) or fully fails with nothing stored; no exception
    escapes :meth:`process_step`.
    """

    def __init__(self, store: Optional[ThoughtStore] = None, color: Optional[bool] = None):
        self.store = store if store is not None else ThoughtStore()
        self.color = color_enabled() if color is None else color
        self._lock = threading.Lock()

    def process_step(self, raw: Any) -> Dict[str, Any]:
        """
        Process a single thought step

        Args:
            raw: Raw tool call arguments

        Returns:
            A success record summarizing history and branches, or a failure
            record carrying the error message
        """
        try:
            with self._lock:
                step = validate_step(raw)
                step = self.store.append(step)
                try:
                    frame = render_step(step, color=self.color)
                    result = StepSuccess(
                        thought_number_processed=step.thought_number,
                        current_total_thoughts=step.total_thoughts,
                        next_thought_needed=step.next_thought_needed,
                        active_branches=self.store.branch_ids,
                        total_history_length=self.store.history_length,
                    )
                except Exception:
                    self.store.discard(step)
                    raise

            logger.info(frame)
            return result.model_dump()

        except StepValidationError as e:
            error_message = e.message
        except Exception as e:
            logger.debug("Unexpected failure while processing thought", exc_info=True)
            error_message = str(e)

        logger.error(f"❌ Error processing thought: {error_message}")
        return StepFailure(error=error_message).model_dump()
