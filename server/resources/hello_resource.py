"""Hello resource - a fixed, very formal greeting."""

from mcp_app import mcp

HELLO_URI = "test:hello"

GREETING = (
    "Oh, my most esteemed and distinguished guest, I do hereby extend my most humble and "
    "elaborate greetings to your magnificent presence on this truly remarkable occasion!"
)


@mcp.resource(
    HELLO_URI,
    name="hello-resource",
    description="A nice way to say hello",
    mime_type="text/plain",
)
def hello_resource() -> str:
    return GREETING
