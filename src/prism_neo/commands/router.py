"""
prism_neo.commands.router

Command registry and the outer error boundary.

Responsibilities:
- Map chat command names to `CommandService` handlers with their argument arity.
- Guarantee exactly one reply string per invocation, whatever happens inside.
- Prefix replies with a quote marker when the triggering message can be quoted.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

import httpx
import structlog

from prism_neo import messages
from prism_neo.auth.models import Caller
from prism_neo.commands.errors import CommandError
from prism_neo.commands.service import CommandService
from prism_neo.observability.logging import get_logger
from prism_neo.space_api.errors import SpaceApiError

log = get_logger(__name__)

Handler = Callable[..., Awaitable[str]]


@dataclass(frozen=True, slots=True)
class CommandSpec:
    name: str
    usage: str
    handler: Handler
    # Positional arguments the handler accepts after the caller; absent ones are None.
    arity: int = 0


def reply_for_error(exc: BaseException) -> str:
    if isinstance(exc, CommandError):
        return exc.reply
    if isinstance(exc, SpaceApiError):
        if exc.message is None:
            return messages.GENERIC_FAILURE
        return exc.message
    return messages.GENERIC_FAILURE


def quote(reply: str, message_id: str | None) -> str:
    if not message_id:
        return reply
    return messages.QUOTE_MARKER.format(message_id=message_id) + reply


class CommandRouter:
    def __init__(self, service: CommandService) -> None:
        self._commands: dict[str, CommandSpec] = {}
        for spec in (
            CommandSpec("register", "register [user]", service.register, 1),
            CommandSpec("login", "login [user]", service.login, 1),
            CommandSpec("logout", "logout [user]", service.logout, 1),
            CommandSpec("list", "list", service.list_active),
            CommandSpec("wallet", "wallet [user]", service.wallet, 1),
            CommandSpec("billing", "billing [user]", service.billing, 1),
            CommandSpec("lock", "lock", service.lock),
            CommandSpec("items", "items [user]", service.items, 1),
            CommandSpec("show", "show [alias]", service.show, 1),
            CommandSpec("on", "on <alias>", service.power_on, 1),
            CommandSpec("off", "off <alias>", service.power_off, 1),
            CommandSpec("redeem", "redeem <code>", service.redeem, 1),
            CommandSpec("add", "add <user> <amount>", service.wallet_add, 2),
            CommandSpec("del", "del <user> <amount>", service.wallet_deduct, 2),
            CommandSpec("overwrite", "overwrite <user> <amount>", service.overwrite, 2),
        ):
            self._commands[spec.name] = spec

    @property
    def commands(self) -> dict[str, CommandSpec]:
        return dict(self._commands)

    async def dispatch(
        self,
        command: str,
        args: Sequence[str],
        *,
        caller: Caller,
        message_id: str | None = None,
    ) -> str:
        name = command.strip().lstrip("/").lower()
        structlog.contextvars.bind_contextvars(command=name, caller=caller.user_id)
        try:
            spec = self._commands.get(name)
            if spec is None:
                return quote(messages.UNKNOWN_COMMAND.format(command=name), message_id)
            reply = await self._invoke(spec, args, caller)
        finally:
            structlog.contextvars.unbind_contextvars("command", "caller")
        return quote(reply, message_id)

    async def _invoke(self, spec: CommandSpec, args: Sequence[str], caller: Caller) -> str:
        padded = [a if a else None for a in list(args)[: spec.arity]]
        padded += [None] * (spec.arity - len(padded))
        try:
            return await spec.handler(caller, *padded)
        except CommandError as e:
            log.info("command_rejected", reason=type(e).__name__)
            return reply_for_error(e)
        except SpaceApiError as e:
            log.warning("command_remote_failure", status=e.status_code, api_message=e.message)
            return reply_for_error(e)
        except httpx.HTTPError as e:
            log.warning("command_transport_failure", error=str(e), error_type=type(e).__name__)
            return reply_for_error(e)
        except Exception as e:
            log.exception("command_failed")
            return reply_for_error(e)


# --- Module Notes -----------------------------------------------------------
# Arguments beyond a command's arity are ignored, matching how the chat framework
# tolerates trailing words after a complete command.
