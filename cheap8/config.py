# Cheap-8, a Chip-8 interpreter.

# To the extent possible under law, the person who associated CC0 with
# Cheap-8 has waived all copyright and related or neighboring rights
# to Cheap-8.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

from dataclasses import dataclass, replace

## CONSTANTS ##

# Clock speeds used by Chip-8. CYCLE_HZ is only a default, real programs
# vary wildly in how fast they expect to be run.
TIMER_HZ = 60
CYCLE_HZ = 500


@dataclass(frozen=True)
class Quirks:
    """Points where Chip-8 interpreters disagree.

    The defaults are what most programs written after the HP-48 era expect.
    """
    # 8XY6/8XYE: shift VY into VX rather than shifting VX in place
    shift_uses_vy: bool = False
    # 8XY1/8XY2/8XY3: clear VF after the logic op
    vf_reset: bool = False
    # FX55/FX65: leave I pointing past the last register transferred
    memory_increments_index: bool = False
    # BNNN: jump to NNN + VX instead of NNN + V0
    jump_uses_vx: bool = False
    # DXYN: wrap sprites around the screen edges instead of clipping them
    wrap_sprites: bool = False

    def with_overrides(self, **flags):
        """Return a copy with every flag that is set to True turned on"""
        return replace(self, **{k: True for k, v in flags.items() if v})


PROFILES = {
    'modern': Quirks(),
    # The original COSMAC VIP interpreter
    'cosmac': Quirks(shift_uses_vy=True, vf_reset=True, memory_increments_index=True),
}
