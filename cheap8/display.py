# Cheap-8, a Chip-8 interpreter.

# To the extent possible under law, the person who associated CC0 with
# Cheap-8 has waived all copyright and related or neighboring rights
# to Cheap-8.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

# Chip-8 Video display constants
VIDEO_X = 64
VIDEO_Y = 32
# Sprites are always one byte wide
SPRITE_WIDTH = 8


class Display:
    """The 64x32 monochrome frame buffer.

    pixels is a list of rows, each a list of 0/1 cells, so a pixel is
    addressed as pixels[y][x]. The render collaborator reads it and
    clears `dirty` once it has caught up; only the interpreter writes it.
    """

    def __init__(self, width=VIDEO_X, height=VIDEO_Y):
        self.width = width
        self.height = height
        self.clear()

    def clear(self):
        self.pixels = [[0 for x in range(self.width)] for y in range(self.height)]
        self.dirty = True

    def get(self, x, y):
        return self.pixels[y][x]

    def draw_sprite(self, x, y, rows, wrap=False):
        """XOR a sprite onto the buffer with its top left corner at (x, y).

        rows is a sequence of bytes, one per sprite row, most significant bit
        leftmost. The origin always wraps onto the screen. Pixels that would
        run off the right or bottom edge are clipped, unless wrap is set.
        Returns True if any pixel that was on got turned off.
        """
        x %= self.width
        y %= self.height
        collision = False

        for row, byte in enumerate(rows):
            py = y + row
            if py >= self.height:
                if not wrap:
                    break
                py %= self.height
            line = self.pixels[py]
            for col in range(SPRITE_WIDTH):
                if not byte >> (7 - col) & 0x1:
                    continue
                px = x + col
                if px >= self.width:
                    if not wrap:
                        break
                    px %= self.width
                # Check the old pixel before flipping it
                if line[px]:
                    collision = True
                line[px] ^= 1

        self.dirty = True
        return collision

    def __eq__(self, other):
        if not isinstance(other, Display):
            return NotImplemented
        return self.pixels == other.pixels

    def __str__(self):
        return "\n".join("".join("#" if px else "." for px in line) for line in self.pixels)
