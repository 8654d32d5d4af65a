# Cheap-8, a Chip-8 interpreter.

# To the extent possible under law, the person who associated CC0 with
# Cheap-8 has waived all copyright and related or neighboring rights
# to Cheap-8.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

import sys
import logging
import argparse

from cheap8 import frontend
from cheap8.config import CYCLE_HZ, PROFILES
from cheap8.errors import LoadError, StackError
from cheap8.machine import Machine, LOAD_POS


def positive_int(text):
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


aparser = argparse.ArgumentParser(prog="cheap8", description="A cheap Chip-8 interpreter")
aparser.add_argument('program',
    help="A compiled Chip-8 program to load")
aparser.add_argument('--breakpoint',
    help="A hexadecimal program address at which to pause execution",
    metavar="X",
    nargs="+",
    default=[],
    type=lambda x: int(x, 0))
aparser.add_argument('--debug',
    help="Enable verbose debug logging",
    action="store_true")
aparser.add_argument('--scale',
    help="Screen pixels per Chip-8 pixel",
    type=positive_int,
    default=10)
aparser.add_argument('--speed',
    help=f"Instructions per second (default {CYCLE_HZ})",
    metavar="HZ",
    type=positive_int,
    default=CYCLE_HZ)
aparser.add_argument('--registers',
    help="Show the register panel under the screen",
    action="store_true")
aparser.add_argument('--coupled-timers',
    help="Count the timers down once per instruction instead of at 60hz",
    action="store_true")
aparser.add_argument('--seed',
    help="Seed for the random number generator",
    type=int)

quirks = aparser.add_argument_group("quirks")
quirks.add_argument('--quirks',
    help="Start from a named set of interpreter quirks",
    choices=sorted(PROFILES),
    default='modern')
quirks.add_argument('--shift-vy',
    help="8XY6/8XYE shift VY into VX",
    action="store_true")
quirks.add_argument('--vf-reset',
    help="8XY1/8XY2/8XY3 clear VF",
    action="store_true")
quirks.add_argument('--memory-increment',
    help="FX55/FX65 advance I",
    action="store_true")
quirks.add_argument('--jump-vx',
    help="BNNN jumps to NNN + VX",
    action="store_true")
quirks.add_argument('--wrap',
    help="Wrap sprites around the screen edges instead of clipping",
    action="store_true")


def build_machine(args):
    """Construct a Machine configured from parsed arguments"""
    profile = PROFILES[args.quirks].with_overrides(
        shift_uses_vy=args.shift_vy,
        vf_reset=args.vf_reset,
        memory_increments_index=args.memory_increment,
        jump_uses_vx=args.jump_vx,
        wrap_sprites=args.wrap,
    )
    logging.debug(f"Quirks: {profile}")
    return Machine(quirks=profile, couple_timers=args.coupled_timers, seed=args.seed)


def main(argv=None):
    logging.basicConfig(level=logging.INFO)
    logging.info("Cheap8 - A cheap Chip-8 interpreter")
    args = aparser.parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    machine = build_machine(args)

    logging.info(f"Loading program {args.program} at 0x{LOAD_POS:04x}")
    try:
        with open(args.program, 'rb') as p:
            machine.load(p.read())
    except (OSError, LoadError) as e:
        logging.error(f"Could not load {args.program}: {e}")
        return 1

    try:
        frontend.run(machine,
            scale=args.scale,
            speed=args.speed,
            breakpoints=args.breakpoint,
            show_registers=args.registers)
    except StackError as e:
        logging.error(f"Emulation halted: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
