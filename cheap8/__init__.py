# Cheap-8, a Chip-8 interpreter.

# To the extent possible under law, the person who associated CC0 with
# Cheap-8 has waived all copyright and related or neighboring rights
# to Cheap-8.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

"""Cheap-8, a Chip-8 interpreter core with a pygame front end."""
from cheap8.config import Quirks, PROFILES
from cheap8.decoder import Op, Instruction, decode, disassemble
from cheap8.display import Display
from cheap8.errors import (Chip8Error, LoadError, StackError,
                           StackOverflowError, StackUnderflowError)
from cheap8.machine import Machine

__version__ = "0.2.0"
