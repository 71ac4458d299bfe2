"""Boxed terminal rendering of thought steps.

Widths are measured in terminal cells after stripping ANSI control
sequences, so coloured and plain text of the same visible length line up
the same way. Colour codes themselves are produced by rich styles.
"""

import re
from typing import List

from rich.cells import cell_len
from rich.color import ColorSystem
from rich.style import Style

from .models import Step, StepKind

ANSI_PATTERN = re.compile(r"[\u001b\u009b][\[()#;?]*(?:[0-9]{1,4}(?:;[0-9]{0,4})*)?[0-9A-ORZcf-nqry=><]")

LABELS = {
    StepKind.THOUGHT: ("💭 Thought", "blue"),
    StepKind.REVISION: ("🔄 Revision", "yellow"),
    StepKind.BRANCH: ("🌿 Branch", "green"),
}


def strip_ansi(text: str) -> str:
    return ANSI_PATTERN.sub("", text)


def display_width(text: str) -> int:
    """Number of terminal cells ``text`` occupies, ignoring control sequences"""
    return cell_len(strip_ansi(text))


def paint(text: str, style: str, color: bool = True) -> str:
    if not color:
        return text
    return Style.parse(style).render(text, color_system=ColorSystem.STANDARD)


def _pad(line: str, width: int) -> str:
    return line + " " * (width - display_width(line))


def format_header(step: Step, color: bool = True) -> str:
    kind = step.kind
    label, style = LABELS[kind]
    context = ""
    if kind is StepKind.REVISION:
        context = f" (revising thought {step.revises_thought})"
    elif kind is StepKind.BRANCH:
        context = f" (from thought {step.branch_from_thought}, ID: {step.branch_id})"
    return f"{paint(label, style, color)} {step.thought_number}/{step.total_thoughts}{context}"


def content_blocks(step: Step, color: bool = True) -> List[str]:
    """Thought text, confidence and knowledge assessment, empty ones left out"""
    confidence = ""
    if step.confidence_score is not None:
        confidence = f"Confidence: {paint(f'{step.confidence_score:.2f}', 'cyan', color)}"

    knowledge = ""
    if step.knowledge_assessment:
        entries = [
            f"  - {paint(item.entity, 'yellow', color)}: {paint(item.status, 'magenta', color)}"
            for item in step.knowledge_assessment
        ]
        knowledge = "Knowledge Assessment:\n" + "\n".join(entries)

    return [block for block in (step.thought, confidence, knowledge) if block]


def render_step(step: Step, color: bool = True) -> str:
    """Render a step as a framed block for the diagnostic log.

    Args:
        step: A validated step
        color: Emit ANSI colour codes for labels and values

    Returns:
        The frame, starting with a newline so it sits below the log prefix
    """
    header = format_header(step, color)
    blocks = content_blocks(step, color)

    lines = [header] + [line for block in blocks for line in block.split("\n")]
    width = max(display_width(line) for line in lines)
    border = "─" * (width + 2)
    separator = f"├{'·' * (width + 2)}┤"

    rows = [f"┌{border}┐", f"│ {_pad(header, width)} │"]
    if blocks:
        rows.append(f"├{border}┤")
        for index, block in enumerate(blocks):
            if index > 0:
                rows.append(separator)
            rows.extend(f"│ {_pad(line, width)} │" for line in block.split("\n"))
    rows.append(f"└{border}┘")

    return "\n" + "\n".join(rows)
