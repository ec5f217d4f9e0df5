"""In-process test harness for MCP servers."""

from testing.stdio_wrapper import (
    HarnessError,
    MalformedResponseError,
    MCPServerTestWrapper,
    ResponseTimeoutError,
    ServerClosedError,
    ServerNotStartedError,
)

__all__ = [
    "HarnessError",
    "MalformedResponseError",
    "MCPServerTestWrapper",
    "ResponseTimeoutError",
    "ServerClosedError",
    "ServerNotStartedError",
]
