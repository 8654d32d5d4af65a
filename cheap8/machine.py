# Cheap-8, a Chip-8 interpreter.

# To the extent possible under law, the person who associated CC0 with
# Cheap-8 has waived all copyright and related or neighboring rights
# to Cheap-8.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

import os
import logging
import random

from cheap8 import executor
from cheap8.config import Quirks
from cheap8.decoder import decode, disassemble
from cheap8.display import Display
from cheap8.errors import LoadError

## CONSTANTS ##

TOTAL_RAM = 4096
LOAD_POS = 0x200
STACK_DEPTH = 16
NUM_KEYS = 16
# Used when the OS can't give us any entropy
FALLBACK_SEED = 0xC8

# Chip-8 ROM Font map, 5 bytes per hex digit
FONT_LOAD = 0x000
FONT_HEIGHT = 5
FONT_MAP = [
    0xF0, 0x90, 0x90, 0x90, 0xF0, # 0
    0x20, 0x60, 0x20, 0x20, 0x70, # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0, # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0, # 3
    0x90, 0x90, 0xF0, 0x10, 0x10, # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0, # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0, # 6
    0xF0, 0x10, 0x20, 0x40, 0x40, # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0, # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0, # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90, # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0, # B
    0xF0, 0x80, 0x80, 0x80, 0xF0, # C
    0xE0, 0x90, 0x90, 0x90, 0xE0, # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0, # E
    0xF0, 0x80, 0xF0, 0x80, 0x80  # F
]


def make_rng(seed=None):
    """Build the generator used by RND.

    Without an explicit seed we ask the OS for one, and fall back to a
    fixed seed when it has nothing to give.
    """
    if seed is None:
        try:
            seed = int.from_bytes(os.urandom(8), 'big')
        except NotImplementedError:
            logging.warning(f"No entropy source, seeding RND with 0x{FALLBACK_SEED:02x}")
            seed = FALLBACK_SEED
    return random.Random(seed)


class Machine:
    """All of the state of one Chip-8, plus the fetch/decode/execute loop.

    The host owns the pacing: it calls cycle() as often as it likes, writes
    keys between cycles and reads display whenever it wants to draw.
    When couple_timers is False the host is also expected to call
    tick_timers() at TIMER_HZ.
    """

    def __init__(self, quirks=None, couple_timers=True, seed=None):
        self.quirks = quirks or Quirks()
        self.couple_timers = couple_timers
        self.rng = make_rng(seed)

        self.memory = bytearray(TOTAL_RAM)
        self.memory[FONT_LOAD:FONT_LOAD + len(FONT_MAP)] = bytes(FONT_MAP)
        logging.debug(f"Main memory {TOTAL_RAM:d} bytes initialised")
        logging.debug(f"Fonts loaded to {FONT_LOAD:04x}")

        self.V = bytearray(16)
        self.I = 0
        self.pc = LOAD_POS
        self.stack = [0] * STACK_DEPTH
        self.sp = 0

        # programmable timers used by Chip-8
        self.delay_timer = 0
        self.sound_timer = 0

        self.display = Display()
        self.keys = [False] * NUM_KEYS
        # Register index waiting on FX0A, or None while running normally
        self.awaiting_key = None
        self.cycles = 0

    def load(self, program, offset=LOAD_POS):
        """Copy a program image into memory at offset"""
        program = bytes(program)
        logging.info(f"Program length {len(program)} bytes.")
        if offset < LOAD_POS:
            raise LoadError(f"Cannot load at 0x{offset:03x}, below 0x{LOAD_POS:03x} is reserved for the interpreter")
        if len(program) > TOTAL_RAM - offset:
            raise LoadError(
                f"Program is too large: {len(program)} bytes at 0x{offset:03x}, "
                f"{max(TOTAL_RAM - offset, 0)} bytes available")
        self.memory[offset:offset + len(program)] = program
        self.pc = offset

    def read_word(self, address):
        """Read a big-endian instruction word, wrapping around the end of memory"""
        return self.memory[address % TOTAL_RAM] << 8 | self.memory[(address + 1) % TOTAL_RAM]

    def cycle(self):
        """Run one instruction"""
        if self.awaiting_key is not None:
            self.poll_key()
        else:
            instruction = decode(self.read_word(self.pc))
            if logging.getLogger().isEnabledFor(logging.DEBUG):
                logging.debug(f"{self.pc:04x} | OP 0x{instruction.word:04x} - {disassemble(instruction)}")
            self.pc = (self.pc + 2) & 0xFFFF
            executor.execute(self, instruction)

        if self.couple_timers:
            self.tick_timers()
        self.cycles += 1

    def poll_key(self):
        """Finish an FX0A wait if any key is held. Returns True once resolved"""
        for key, pressed in enumerate(self.keys):
            if pressed:
                logging.debug(f"Key {key:1X} -> V{self.awaiting_key:1X}")
                self.V[self.awaiting_key] = key
                self.awaiting_key = None
                return True
        return False

    def font_address(self, digit):
        """Address of the glyph for a hex digit, only the low nibble counts"""
        return FONT_LOAD + FONT_HEIGHT * (digit & 0xF)

    def tick_timers(self):
        """Count both timers down by one, stopping at zero"""
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1

    @property
    def sound_on(self):
        return self.sound_timer > 0

    def press_key(self, key):
        self.keys[key] = True

    def release_key(self, key):
        self.keys[key] = False
