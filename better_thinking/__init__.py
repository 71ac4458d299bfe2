"""Better Thinking - structured, multi-step reasoning tool for MCP clients"""

__version__ = "0.6.2"
