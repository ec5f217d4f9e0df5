"""
Shared FastMCP instance
=======================
Tools, resources and prompts register themselves on `mcp` at import time.
"""

from fastmcp import FastMCP

from config import get_config

_config = get_config()

mcp = FastMCP(
    name=_config.get('mcp.name', 'mcp-python-template'),
    instructions=_config.get('mcp.instructions'),
    version=str(_config.get('server.version', '1.0.0')),
)
