"""
Hello Tool - Example Tool
=========================
Placeholder tool: echoes back the name it is given.
The input schema is generated from the annotated signature.
"""

import logging
from typing import Annotated

from pydantic import Field

from mcp_app import mcp

logger = logging.getLogger(__name__)


@mcp.tool(name="Hello Tool", description="Says hello!")
def hello_tool(
    name: Annotated[str, Field(description="The name of the user")],
) -> str:
    """Says hello to the user, using their name."""
    logger.debug(f"Hello Tool called for {name!r}")
    return name
