# sim/commands.py
"""
Scripted driving commands.

A playbook is an ordered list of commands.  Scenario data arrives as tagged
mappings, e.g. ``{"type": "setSteer", "deg": -30}`` or
``{"type": "move", "distance": -2.6}``; :func:`parse_command` turns those into
the :class:`SetSteer` / :class:`Move` values the simulator dispatches on.
"""
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Union


class CommandError(ValueError):
    """Malformed or unknown command in scenario data."""


@dataclass(frozen=True)
class SetSteer:
    deg: float


@dataclass(frozen=True)
class Move:
    distance: float   # signed, negative = reverse


Command = Union[SetSteer, Move]

_FIELDS = {
    "setSteer": (SetSteer, "deg"),
    "move": (Move, "distance"),
}


def parse_command(cmd: Mapping) -> Command:
    kind = cmd.get("type")
    if kind not in _FIELDS:
        raise CommandError(f"Unknown command type: {kind!r}")
    cls, name = _FIELDS[kind]
    if name not in cmd:
        raise CommandError(f"{kind} command is missing {name!r}")
    try:
        return cls(float(cmd[name]))
    except (TypeError, ValueError) as exc:
        raise CommandError(f"{kind} command has non-numeric {name!r}: {cmd[name]!r}") from exc


def as_command(cmd) -> Command:
    if isinstance(cmd, (SetSteer, Move)):
        return cmd
    if isinstance(cmd, Mapping):
        return parse_command(cmd)
    raise CommandError(f"Not a command: {cmd!r}")


def build_playbook(items: Iterable) -> List[Command]:
    """Normalize mappings/commands into a fresh, independent playbook list."""
    return [as_command(c) for c in items]
