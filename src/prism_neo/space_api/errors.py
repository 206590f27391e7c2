"""
prism_neo.space_api.errors

Structured failure type for remote API calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx


@dataclass(frozen=True, slots=True)
class SpaceApiError(Exception):
    """
    A call that reached the API and came back with a non-2xx status.

    `message` is the human-readable text from the error body when the API sent one,
    otherwise None; callers decide what to show for the None case.
    """

    status_code: int
    message: str | None = None

    def __str__(self) -> str:
        return f"space api responded {self.status_code}: {self.message or '<no message>'}"

    @classmethod
    def from_response(cls, response: httpx.Response) -> SpaceApiError:
        return cls(status_code=response.status_code, message=_extract_message(response))


def _extract_message(response: httpx.Response) -> str | None:
    try:
        body: Any = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    message = body.get("message")
    # Some endpoints (validation failures) send a list of messages.
    if isinstance(message, list):
        message = "\n".join(str(m) for m in message if m)
    if isinstance(message, str) and message.strip():
        return message.strip()
    return None
