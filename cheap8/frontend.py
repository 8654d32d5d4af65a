# Cheap-8, a Chip-8 interpreter.

# To the extent possible under law, the person who associated CC0 with
# Cheap-8 has waived all copyright and related or neighboring rights
# to Cheap-8.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

"""pygame window, keyboard and beeper wrapped around a Machine."""
import logging
from array import array

import pygame

from cheap8.config import TIMER_HZ, CYCLE_HZ
from cheap8.display import VIDEO_X, VIDEO_Y

# Size of one Chip-8 pixel on screen
VIDEO_RES = 10
# Pixel colors for display
PIXEL_ON = (255,255,255)
PIXEL_OFF = (64,64,64)

# Resolution of fonts used for register display
REG_FONT_RES = 18
REG_FONT_PAD = 10
REG_LINES = 5

BEEP_HZ = 440

# The key map is a little jumbled since the
# Chip-8 has a slightly skewed layout, where
# internal key values are identical to their
# face value in hex.
# I've mapped their equivalents to a grid beginning at key 1 and
# proceeding 4 keys across each row and all the way down

# +-----+-----+-----+-----+
# | 1/1 | 2/2 | 3/3 | C/4 |
# +-----+-----+-----+-----+
# | 4/Q | 5/W | 6/E | D/R |
# +-----+-----+-----+-----+
# | 7/A | 8/S | 9/D | E/F |
# +-----+-----+-----+-----+
# | A/Z | 0/X | B/C | F/V |
# +-----+-----+-----+-----+

KEY_MAP = [
    pygame.K_x, pygame.K_1, pygame.K_2, pygame.K_3,
    pygame.K_q, pygame.K_w, pygame.K_e, pygame.K_a,
    pygame.K_s, pygame.K_d, pygame.K_z, pygame.K_c,
    pygame.K_4, pygame.K_r, pygame.K_f, pygame.K_v
]


class Controls:
    """Run/step/breakpoint state driven by the keyboard.

    SPACE runs a single instruction, P resumes free running and ESC quits.
    """

    def __init__(self, breakpoints=()):
        self.running = True
        self.step = False
        self.do_cycle = True
        self.breakpoints = set(breakpoints)
        self.halted_at = None

    def ready(self, machine):
        """Decide whether the next cycle may run"""
        if self.halted_at is not None and machine.pc != self.halted_at:
            self.halted_at = None
        if machine.pc in self.breakpoints and self.halted_at is None:
            logging.info(f"Breakpoint at 0x{machine.pc:04x}")
            self.halted_at = machine.pc
            self.step = True
            self.do_cycle = False
        if not self.do_cycle:
            return False
        if self.step:
            self.do_cycle = False
        return True

    @property
    def paused(self):
        return self.step and not self.do_cycle


def handle_event(machine, controls, event):
    """Feed one pygame event into the keypad or the debugger controls"""
    if event.type == pygame.QUIT:
        controls.running = False
    elif event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            controls.running = False
        elif event.key == pygame.K_SPACE:
            controls.do_cycle = True
        elif event.key == pygame.K_p:
            controls.do_cycle = True
            controls.step = False
        elif event.key in KEY_MAP:
            machine.press_key(KEY_MAP.index(event.key))
    elif event.type == pygame.KEYUP:
        if event.key in KEY_MAP:
            machine.release_key(KEY_MAP.index(event.key))


def render(surface, display, scale=VIDEO_RES):
    """Paint the frame buffer onto surface, one scale x scale block per pixel"""
    for y in range(display.height):
        for x in range(display.width):
            color = PIXEL_ON if display.get(x, y) else PIXEL_OFF
            pygame.draw.rect(surface, color, (x*scale, y*scale, scale, scale))


def display_regs(surface, font, machine, top):
    line_off = font.size("V")[1]
    width = surface.get_width()
    # This just blanks the register display.
    surface.fill((255,255,255), (0, top, width, REG_LINES * line_off + REG_FONT_PAD))
    for x in range(0, 16, 4):
        disp = ""
        for r in range(4):
            disp += f"V{x+r:1X}: 0x{machine.V[x+r]:02x} "
        ts = font.render(disp, False, (0,0,0))
        surface.blit(ts, (0, top + line_off * (x // 4)))

    disp = f"PC: 0x{machine.pc:04x} I: 0x{machine.I:04x} DT: 0x{machine.delay_timer:02x} ST: 0x{machine.sound_timer:02x}"
    ts = font.render(disp, False, (0,0,0))
    surface.blit(ts, (0, top + line_off * 4))


def build_beep_samples(rate, bits):
    """One period of a square wave at BEEP_HZ"""
    period = int(round(rate / BEEP_HZ))
    amplitude = 2 ** (abs(bits) - 1) - 1
    samples = array("h", [0] * period)
    for t in range(period):
        samples[t] = amplitude if t < period / 2 else -amplitude
    return samples


class Beeper:
    """Plays a tone for as long as the sound timer is nonzero"""

    def __init__(self):
        self.sound = None
        self.playing = False
        try:
            pygame.mixer.init(44100, -16, 1, 1024)
        except pygame.error as e:
            logging.warning(f"Audio unavailable, running silent: {e}")
            return
        rate, bits, _ = pygame.mixer.get_init()
        self.sound = pygame.mixer.Sound(buffer=build_beep_samples(rate, bits))
        self.sound.set_volume(0.1)

    def update(self, sound_on):
        if self.sound is None or sound_on == self.playing:
            return
        if sound_on:
            self.sound.play(-1)
        else:
            self.sound.stop()
        self.playing = sound_on


def run(machine, scale=VIDEO_RES, speed=CYCLE_HZ, breakpoints=(), show_registers=False, title="CHEAP-8"):
    """Open a window and drive machine until the user quits.

    The loop runs at TIMER_HZ frames per second and executes speed / TIMER_HZ
    instructions per frame. Timers are ticked once per frame unless the
    machine counts them down itself.
    """
    logging.info("Initialise display engine")
    pygame.init()
    beeper = Beeper()

    screen_x = VIDEO_X * scale
    screen_y = VIDEO_Y * scale
    font = None
    if show_registers:
        pygame.font.init()
        font = pygame.font.SysFont('Consolas', REG_FONT_RES)
        screen_y += REG_LINES * font.size("V")[1] + REG_FONT_PAD
    pygame.display.set_caption(title)
    logging.info(f"Display mode {screen_x} x {screen_y}")
    screen = pygame.display.set_mode([screen_x, screen_y])

    controls = Controls(breakpoints)
    cycles_per_frame = max(1, round(speed / TIMER_HZ))
    logging.debug(f"{cycles_per_frame} cycles per frame")
    clock = pygame.time.Clock()

    logging.info("Emulation starting")
    try:
        while controls.running:
            for event in pygame.event.get():
                handle_event(machine, controls, event)

            for _ in range(cycles_per_frame):
                if not controls.ready(machine):
                    break
                machine.cycle()

            if not machine.couple_timers and not controls.paused:
                machine.tick_timers()
            beeper.update(machine.sound_on and not controls.paused)

            if machine.display.dirty:
                render(screen, machine.display, scale)
                machine.display.dirty = False
            if font is not None:
                display_regs(screen, font, machine, VIDEO_Y * scale)
            pygame.display.flip()
            clock.tick(TIMER_HZ)
    finally:
        beeper.update(False)
        pygame.quit()
    logging.info(f"Emulation halted after {machine.cycles} cycles")
