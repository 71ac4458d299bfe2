#!/usr/bin/env python3
"""Better Thinking MCP Server - Structured, multi-step reasoning with confidence and knowledge checks"""

import json
import logging
import sys
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Tool, TextContent

from . import __version__
from .config import SERVER_NAME, TOOL_NAME
from .logging_config import configure_logging
from .processor import ThinkingProcessor

logger = logging.getLogger(__name__)

TOOL_DESCRIPTION = """A tool for structured, multi-step reasoning. Use it to record not just conclusions but the intermediate concepts, considered alternatives, confidence levels, knowledge checks and goal alignment behind each step.

Using the fields:

* `thought` (string, required): the core step. Name the reasoning method (calculation, heuristic, retrieval), the sub-goal it serves and how it moves towards the final outcome. Note alternatives considered but not pursued.
* `confidenceScore` (number 0.0-1.0, optional): certainty in this step's conclusion.
* `knowledgeAssessment` (array of {entity, status}, optional): check knowledge before asserting facts. Flag entities as 'known', 'unknown' or 'uncertain', e.g. [{"entity": "Andrej Karpathy", "status": "uncertain"}].
* `isRevision` / `revisesThought` (optional): mark a belief update or course correction and the step it amends.
* `branchFromThought` / `branchId` (optional): explore an alternative path pursued over several steps, starting from the given step.
* `thoughtNumber`, `totalThoughts`, `nextThoughtNeeded` (required): manage the sequence. `totalThoughts` is an estimate and may change. Set `nextThoughtNeeded` to false once the final outcome is reached and supported by the chain.

Aim for a granular, reflective, goal-oriented process and use the optional fields to expose uncertainty and knowledge limits."""

TOOL_INPUT_SCHEMA = {
    "type": "object",
    "properties": {
        "thought": {"type": "string", "description": "Core reasoning step, with intermediate concepts, plans or reflections."},
        "nextThoughtNeeded": {"type": "boolean", "description": "True if more steps are needed, false when the final answer is reached."},
        "thoughtNumber": {"type": "integer", "minimum": 1, "description": "Current step number (>= 1)."},
        "totalThoughts": {"type": "integer", "minimum": 1, "description": "Current estimate of total steps (>= 1). Adjust as needed."},
        "confidenceScore": {"type": "number", "minimum": 0, "maximum": 1, "description": "Confidence (0.0-1.0) in this step's conclusion (Optional)."},
        "knowledgeAssessment": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "entity": {"type": "string", "description": "The entity being assessed."},
                    "status": {"type": "string", "enum": ["known", "unknown", "uncertain"], "description": "Knowledge status."}
                },
                "required": ["entity", "status"]
            },
            "description": "Assessment of knowledge about key entities (Optional)."
        },
        "isRevision": {"type": "boolean", "description": "True if this step updates an earlier belief (Optional)."},
        "revisesThought": {"type": "integer", "minimum": 1, "description": "If revising, the step being updated (Optional)."},
        "branchFromThought": {"type": "integer", "minimum": 1, "description": "If exploring an alternative, the step it diverges from (Optional)."},
        "branchId": {"type": "string", "description": "Identifier of the alternative branch (Optional)."},
        "needsMoreThoughts": {"type": "boolean", "description": "Deprecated. Use nextThoughtNeeded (Optional)."}
    },
    "required": ["thought", "nextThoughtNeeded", "thoughtNumber", "totalThoughts"]
}

server = Server(SERVER_NAME, version=__version__)
processor = ThinkingProcessor()

@server.list_tools()
async def list_tools() -> list[Tool]:
    return [
        Tool(
            name=TOOL_NAME,
            description=TOOL_DESCRIPTION,
            inputSchema=TOOL_INPUT_SCHEMA
        )
    ]

# The processor is the only validator, so its failure record reaches the caller
@server.call_tool(validate_input=False)
async def call_tool(name: str, arguments: Any) -> list[TextContent] | CallToolResult:
    if name == TOOL_NAME:
        result = processor.process_step(arguments)
        content = [TextContent(type="text", text=json.dumps(result, indent=2))]
        if result["status"] == "failed":
            return CallToolResult(content=content, isError=True)
        return content

    logger.error(f"Received call for unknown tool: {name}")
    raise ValueError(f"Unknown tool: {name}")

async def serve():
    async with stdio_server() as (read_stream, write_stream):
        logger.info(f" Better Thinking MCP Server Running (v{__version__}) ")
        await server.run(read_stream, write_stream, server.create_initialization_options())

def main():
    import asyncio

    configure_logging()
    try:
        asyncio.run(serve())
    except Exception:
        logger.exception("❌ Fatal error running server")
        sys.exit(1)

if __name__ == "__main__":
    main()
