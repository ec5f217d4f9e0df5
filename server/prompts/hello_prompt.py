"""Hello prompt - asks the LLM to greet the user by name."""

from fastmcp.server.middleware import Middleware, MiddlewareContext
from mcp.types import PromptMessage, TextContent
from pydantic import Field

from mcp_app import mcp

PROMPT_NAME = "Hello prompt"
RESULT_DESCRIPTION = "Say hello to the user"


def build_greeting_instruction(user: str) -> str:
    return f"Craft an elaborate greeting for a user named {user}, and try to incorporate a pun using their name"


@mcp.prompt(
    name=PROMPT_NAME,
    description="Instructs the LLM to say hello to the user",
)
def hello_prompt(
    user: str = Field(description="the users name"),
) -> list[PromptMessage]:
    # `user` has no default value: the SDK rejects calls without it
    return [
        PromptMessage(
            role="assistant",
            content=TextContent(type="text", text=build_greeting_instruction(user)),
        )
    ]


class HelloPromptDescription(Middleware):
    """The rendered prompt carries its own description, distinct from the listing's."""

    async def on_get_prompt(self, context: MiddlewareContext, call_next):
        result = await call_next(context)
        if context.message.name == PROMPT_NAME:
            return result.model_copy(update={"description": RESULT_DESCRIPTION})
        return result


mcp.add_middleware(HelloPromptDescription())
