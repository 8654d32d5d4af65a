# Cheap-8, a Chip-8 interpreter.

# To the extent possible under law, the person who associated CC0 with
# Cheap-8 has waived all copyright and related or neighboring rights
# to Cheap-8.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

from cheap8.config import Quirks
from cheap8.display import Display, VIDEO_X, VIDEO_Y
from cheap8.machine import Machine, FONT_LOAD

from conftest import run


def lit(display):
    return {(x, y) for y, line in enumerate(display.pixels) for x, px in enumerate(line) if px}


def test_starts_blank():
    d = Display()
    assert len(d.pixels) == VIDEO_Y
    assert all(len(line) == VIDEO_X for line in d.pixels)
    assert not lit(d)


def test_draw_sprite_bits_msb_first():
    d = Display()
    assert d.draw_sprite(10, 5, [0b10000001, 0b01000000]) is False
    assert lit(d) == {(10, 5), (17, 5), (11, 6)}


def test_xor_collision():
    d = Display()
    d.draw_sprite(0, 0, [0xFF])
    assert d.draw_sprite(4, 0, [0xFF]) is True
    assert lit(d) == {(0, 0), (1, 0), (2, 0), (3, 0), (8, 0), (9, 0), (10, 0), (11, 0)}


def test_collision_covers_whole_sprite():
    # Only the last row collides, the earlier rows must still be drawn
    d = Display()
    d.draw_sprite(0, 2, [0x80])
    assert d.draw_sprite(0, 0, [0x80, 0x80, 0x80]) is True
    assert lit(d) == {(0, 0), (0, 1)}


def test_origin_wraps():
    d = Display()
    d.draw_sprite(VIDEO_X + 3, VIDEO_Y + 1, [0x80])
    assert lit(d) == {(3, 1)}


def test_clips_at_edges():
    d = Display()
    d.draw_sprite(60, 30, [0xFF] * 4)
    assert lit(d) == {(x, y) for x in range(60, 64) for y in range(30, 32)}


def test_wraps_at_edges_when_asked():
    d = Display()
    d.draw_sprite(62, 31, [0xC0 | 0x20, 0x80], wrap=True)
    assert lit(d) == {(62, 31), (63, 31), (0, 31), (62, 0)}


def test_clear():
    d = Display()
    d.draw_sprite(0, 0, [0xFF])
    d.dirty = False
    d.clear()
    assert not lit(d)
    assert d.dirty


def test_str():
    d = Display(width=4, height=2)
    d.draw_sprite(1, 1, [0x80])
    assert str(d) == "....\n.#.."


## Driven through DXYN ##

def test_draw_font_zero(machine):
    machine.V[0] = machine.V[1] = 0
    run(machine, 0xA000 | FONT_LOAD, 0xD015)
    assert machine.V[0xF] == 0
    assert str(machine.display).splitlines()[:5] == [
        "####" + "." * 60,
        "#..#" + "." * 60,
        "#..#" + "." * 60,
        "#..#" + "." * 60,
        "####" + "." * 60,
    ]


def test_clear_then_draw_matches_fresh_draw():
    fresh = Machine()
    run(fresh, 0xA000 | FONT_LOAD, 0xD015)

    m = Machine()
    m.V[0] = m.V[1] = 7
    run(m, 0xA000 | FONT_LOAD + 40, 0xD015, 0x6000, 0x6100, 0xA000 | FONT_LOAD, 0x00E0, 0xD015)
    assert m.display == fresh.display


def test_draw_twice_erases_and_collides(machine):
    run(machine, 0xA000 | FONT_LOAD + 5 * 8, 0xD015)
    assert machine.V[0xF] == 0
    assert lit(machine.display)
    machine.pc = 0x202
    machine.cycle()
    assert machine.V[0xF] == 1
    assert not lit(machine.display)


def test_draw_clips_tall_sprite(machine):
    machine.memory[0x300:0x30F] = bytes([0xFF] * 15)
    machine.V[0], machine.V[1] = 60, 0
    run(machine, 0xA300, 0xD01F)
    assert lit(machine.display) == {(x, y) for x in range(60, 64) for y in range(15)}
    assert machine.V[0xF] == 0


def test_draw_sprite_read_wraps_memory(machine):
    machine.memory[0xFFF] = 0x80
    machine.memory[0x000] = 0x80
    run(machine, 0xAFFF, 0xD012)
    assert lit(machine.display) == {(0, 0), (0, 1)}


def test_draw_wrap_quirk():
    m = Machine(quirks=Quirks(wrap_sprites=True))
    m.memory[0x300] = 0xFF
    m.V[0] = 60
    run(m, 0xA300, 0xD011)
    assert lit(m.display) == {(x, 0) for x in (60, 61, 62, 63, 0, 1, 2, 3)}


def test_draw_zero_rows(machine):
    machine.V[0xF] = 1
    run(machine, 0xD010)
    assert not lit(machine.display)
    assert machine.V[0xF] == 0


def test_get():
    d = Display()
    d.draw_sprite(5, 9, [0x40])
    assert d.get(6, 9) == 1
    assert d.get(5, 9) == 0
