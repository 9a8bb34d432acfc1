"""MCP server exposing the heap analysis tools.

Usage:
    heapgraph serve        # stdio transport for tool-calling agents
"""

from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP

from . import __version__
from .tools import TOOLS

logger = logging.getLogger(__name__)

SERVER_NAME = "heapgraph"


def build_server() -> FastMCP:
    """Create a FastMCP server with every analysis tool registered."""
    mcp = FastMCP(SERVER_NAME, instructions=f"HeapGraph v{__version__}: heap snapshot retention analysis.")
    for fn in TOOLS:
        mcp.add_tool(fn, name=fn.__name__, description=fn.__doc__)
    logger.debug("Registered %d tools on %s", len(TOOLS), SERVER_NAME)
    return mcp


def run(transport: str = "stdio") -> None:
    build_server().run(transport=transport)
