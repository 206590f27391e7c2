"""
prism_neo.api.routers.commands

Entry point for the chat adapter.

Responsibilities:
- Accept one parsed chat command per request and return its reply text.
- Require a gateway token (role=chat_gateway).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from prism_neo.api.deps import command_router_dep
from prism_neo.auth.deps import require_roles
from prism_neo.auth.jwt import GATEWAY_ROLE
from prism_neo.auth.models import Caller
from prism_neo.commands.router import CommandRouter

router = APIRouter(
    prefix="/v1/commands",
    tags=["commands"],
    dependencies=[Depends(require_roles(GATEWAY_ROLE))],
)


class CallerModel(BaseModel):
    user_id: str = Field(min_length=1, max_length=128)
    authority: int = Field(default=1, ge=0)
    permissions: list[str] = Field(default_factory=list)

    def to_caller(self) -> Caller:
        return Caller(
            user_id=self.user_id,
            authority=self.authority,
            permissions=frozenset(self.permissions),
        )


class CommandRequest(BaseModel):
    command: str = Field(min_length=1, max_length=64)
    args: list[str] = Field(default_factory=list, max_length=8)
    caller: CallerModel
    message_id: str | None = Field(default=None, max_length=128)


class CommandResponse(BaseModel):
    reply: str


@router.post("", response_model=CommandResponse)
async def run_command(
    body: CommandRequest,
    commands: CommandRouter = Depends(command_router_dep),
) -> CommandResponse:
    # Command failures are part of the reply; this endpoint only fails on gateway auth/validation.
    reply = await commands.dispatch(
        body.command,
        body.args,
        caller=body.caller.to_caller(),
        message_id=body.message_id,
    )
    return CommandResponse(reply=reply)
