# Cheap-8, a Chip-8 interpreter.

# To the extent possible under law, the person who associated CC0 with
# Cheap-8 has waived all copyright and related or neighboring rights
# to Cheap-8.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

import logging

import pytest

from cheap8.cli import aparser, build_machine, main
from cheap8.config import Quirks, PROFILES
from cheap8.machine import TOTAL_RAM, LOAD_POS


def test_defaults():
    args = aparser.parse_args(["game.ch8"])
    m = build_machine(args)
    assert m.quirks == Quirks()
    assert not m.couple_timers
    assert args.breakpoint == []
    assert args.scale == 10


def test_breakpoints_parse_hex():
    args = aparser.parse_args(["game.ch8", "--breakpoint", "0x200", "0x2a4"])
    assert args.breakpoint == [0x200, 0x2A4]


def test_cosmac_profile():
    m = build_machine(aparser.parse_args(["game.ch8", "--quirks", "cosmac"]))
    assert m.quirks == PROFILES['cosmac']


def test_quirk_flags_add_to_profile():
    args = aparser.parse_args(["game.ch8", "--quirks", "cosmac", "--wrap", "--jump-vx", "--coupled-timers"])
    m = build_machine(args)
    assert m.quirks.wrap_sprites
    assert m.quirks.jump_uses_vx
    assert m.quirks.shift_uses_vy
    assert m.couple_timers


def test_seed():
    a = build_machine(aparser.parse_args(["game.ch8", "--seed", "3"]))
    b = build_machine(aparser.parse_args(["game.ch8", "--seed", "3"]))
    assert a.rng.random() == b.rng.random()


def test_missing_program(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        assert main([str(tmp_path / "nope.ch8")]) == 1
    assert "Could not load" in caplog.text


def test_program_too_large(tmp_path, caplog):
    rom = tmp_path / "big.ch8"
    rom.write_bytes(bytes(TOTAL_RAM - LOAD_POS + 1))
    with caplog.at_level(logging.ERROR):
        assert main([str(rom)]) == 1
    assert "too large" in caplog.text


@pytest.mark.parametrize("flag, value", [("--scale", "0"), ("--scale", "-3"), ("--speed", "0")])
def test_rejects_non_positive_sizes(flag, value, capsys):
    with pytest.raises(SystemExit):
        aparser.parse_args(["game.ch8", flag, value])
    assert "must be at least 1" in capsys.readouterr().err


def test_scale_and_speed():
    args = aparser.parse_args(["game.ch8", "--scale", "4", "--speed", "700"])
    assert args.scale == 4
    assert args.speed == 700
