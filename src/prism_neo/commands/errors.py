"""
prism_neo.commands.errors

Exceptions raised by command handlers that carry their own reply text.
"""

from __future__ import annotations

from prism_neo import messages


class CommandError(Exception):
    """A failure the chat member should see verbatim."""

    def __init__(self, reply: str) -> None:
        super().__init__(reply)
        self.reply = reply


class InsufficientPrivilege(CommandError):
    def __init__(self) -> None:
        super().__init__(messages.INSUFFICIENT_PRIVILEGE)


class MissingArgument(CommandError):
    pass


class InvalidArgument(CommandError):
    pass
