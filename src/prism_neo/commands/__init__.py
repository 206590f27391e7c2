"""
prism_neo.commands

Chat command layer.

Responsibilities:
- Resolve acting/target identity and run one handler per chat command.
- Map every failure to a single reply string.
"""

from prism_neo.commands.router import CommandRouter
from prism_neo.commands.service import CommandService

__all__ = ["CommandRouter", "CommandService"]
