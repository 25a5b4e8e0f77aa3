"""Parsing scenario commands into SetSteer / Move values."""
import pytest

from sim.commands import CommandError, Move, SetSteer, build_playbook, parse_command


def test_parse_tagged_mappings():
    assert parse_command({"type": "setSteer", "deg": -30}) == SetSteer(-30.0)
    assert parse_command({"type": "move", "distance": "2.5"}) == Move(2.5)


@pytest.mark.parametrize("cmd", [
    {"type": "reverse", "distance": 1.0},
    {"distance": 1.0},
    {"type": "move"},
    {"type": "setSteer", "deg": "left"},
    {"type": "move", "distance": None},
])
def test_malformed_commands_raise(cmd):
    with pytest.raises(CommandError):
        parse_command(cmd)


def test_command_error_is_value_error():
    assert issubclass(CommandError, ValueError)


def test_build_playbook_is_independent_of_input():
    raw = [{"type": "move", "distance": 1.0}, SetSteer(10.0)]
    playbook = build_playbook(raw)
    raw[0]["distance"] = 99.0
    assert playbook == [Move(1.0), SetSteer(10.0)]
