# Cheap-8, a Chip-8 interpreter.

# To the extent possible under law, the person who associated CC0 with
# Cheap-8 has waived all copyright and related or neighboring rights
# to Cheap-8.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

import pytest

from cheap8.config import Quirks
from cheap8.machine import Machine, LOAD_POS


def assemble(*words):
    """Pack instruction words into a big-endian program image"""
    return b"".join(w.to_bytes(2, 'big') for w in words)


def run(machine, *words, cycles=None):
    """Load words at 0x200 and run one cycle per word, or `cycles` cycles"""
    machine.load(assemble(*words))
    for _ in range(len(words) if cycles is None else cycles):
        machine.cycle()
    return machine


@pytest.fixture
def machine():
    return Machine(seed=1234)


@pytest.fixture
def cosmac():
    return Machine(quirks=Quirks(shift_uses_vy=True, vf_reset=True, memory_increments_index=True), seed=1234)
