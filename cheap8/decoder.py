# Cheap-8, a Chip-8 interpreter.

# To the extent possible under law, the person who associated CC0 with
# Cheap-8 has waived all copyright and related or neighboring rights
# to Cheap-8.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

"""Instruction decoding.

Every Chip-8 instruction is one big-endian 16-bit word. The top nibble picks
a group, and the rest of the word is carved into operand fields:

    X   = 0x0F00  register index
    Y   = 0x00F0  register index
    N   = 0x000F  4-bit constant (sub-opcode or sprite height)
    NN  = 0x00FF  8-bit constant
    NNN = 0x0FFF  12-bit address

Groups 0, 8, E and F hold several instructions each and are told apart by
the low nibble or low byte. Group 0 goes by N alone: 0 is CLS, E is RET and
anything else is a SYS call. Anything that doesn't match a documented
instruction decodes to Op.NOP so that odd programs keep running.
"""
import enum
from collections import namedtuple


class Op(enum.Enum):
    NOP = enum.auto()
    SYS = enum.auto()       # 0NNN
    CLS = enum.auto()       # 00E0
    RET = enum.auto()       # 00EE
    JP = enum.auto()        # 1NNN
    CALL = enum.auto()      # 2NNN
    SE_IMM = enum.auto()    # 3XNN
    SNE_IMM = enum.auto()   # 4XNN
    SE_REG = enum.auto()    # 5XY0
    LD_IMM = enum.auto()    # 6XNN
    ADD_IMM = enum.auto()   # 7XNN
    LD_REG = enum.auto()    # 8XY0
    OR = enum.auto()        # 8XY1
    AND = enum.auto()       # 8XY2
    XOR = enum.auto()       # 8XY3
    ADD_REG = enum.auto()   # 8XY4
    SUB = enum.auto()       # 8XY5
    SHR = enum.auto()       # 8XY6
    SUBN = enum.auto()      # 8XY7
    SHL = enum.auto()       # 8XYE
    SNE_REG = enum.auto()   # 9XY0
    LD_I = enum.auto()      # ANNN
    JP_V0 = enum.auto()     # BNNN
    RND = enum.auto()       # CXNN
    DRW = enum.auto()       # DXYN
    SKP = enum.auto()       # EX9E
    SKNP = enum.auto()      # EXA1
    LD_VX_DT = enum.auto()  # FX07
    LD_VX_K = enum.auto()   # FX0A
    LD_DT_VX = enum.auto()  # FX15
    LD_ST_VX = enum.auto()  # FX18
    ADD_I = enum.auto()     # FX1E
    LD_F = enum.auto()      # FX29
    LD_B = enum.auto()      # FX33
    LD_MEM_VX = enum.auto() # FX55
    LD_VX_MEM = enum.auto() # FX65


Instruction = namedtuple('Instruction', ['op', 'word', 'x', 'y', 'n', 'nn', 'nnn'])

# Groups where the top nibble alone identifies the instruction
GROUP_OPS = {
    0x1: Op.JP,
    0x2: Op.CALL,
    0x3: Op.SE_IMM,
    0x4: Op.SNE_IMM,
    0x6: Op.LD_IMM,
    0x7: Op.ADD_IMM,
    0xA: Op.LD_I,
    0xB: Op.JP_V0,
    0xC: Op.RND,
    0xD: Op.DRW,
}

# 0x8XYN, keyed on N
ALU_OPS = {
    0x0: Op.LD_REG,
    0x1: Op.OR,
    0x2: Op.AND,
    0x3: Op.XOR,
    0x4: Op.ADD_REG,
    0x5: Op.SUB,
    0x6: Op.SHR,
    0x7: Op.SUBN,
    0xE: Op.SHL,
}

# 0xEXNN, keyed on NN
KEY_OPS = {
    0x9E: Op.SKP,
    0xA1: Op.SKNP,
}

# 0xFXNN, keyed on NN
MISC_OPS = {
    0x07: Op.LD_VX_DT,
    0x0A: Op.LD_VX_K,
    0x15: Op.LD_DT_VX,
    0x18: Op.LD_ST_VX,
    0x1E: Op.ADD_I,
    0x29: Op.LD_F,
    0x33: Op.LD_B,
    0x55: Op.LD_MEM_VX,
    0x65: Op.LD_VX_MEM,
}


def decode(word):
    """Split a 16-bit instruction word into an Instruction"""
    word &= 0xFFFF
    group = word >> 12
    n = word & 0x000F
    nn = word & 0x00FF

    if group == 0x0:
        # Only the low nibble is checked, so 0x0000 clears the screen too
        if n == 0x0:
            op = Op.CLS
        elif n == 0xE:
            op = Op.RET
        else:
            op = Op.SYS
    elif group in GROUP_OPS:
        op = GROUP_OPS[group]
    elif group == 0x5:
        op = Op.SE_REG if n == 0 else Op.NOP
    elif group == 0x9:
        op = Op.SNE_REG if n == 0 else Op.NOP
    elif group == 0x8:
        op = ALU_OPS.get(n, Op.NOP)
    elif group == 0xE:
        op = KEY_OPS.get(nn, Op.NOP)
    else:
        op = MISC_OPS.get(nn, Op.NOP)

    return Instruction(
        op=op,
        word=word,
        x=word >> 8 & 0x0F,
        y=word >> 4 & 0x0F,
        n=n,
        nn=nn,
        nnn=word & 0x0FFF,
    )


# Mnemonic templates, formatted with the Instruction's fields
MNEMONICS = {
    Op.NOP: "??? {word:04x}",
    Op.SYS: "SYS {nnn:03x}",
    Op.CLS: "CLS",
    Op.RET: "RET",
    Op.JP: "JP {nnn:03x}",
    Op.CALL: "CALL {nnn:03x}",
    Op.SE_IMM: "SE V{x:1X}, {nn:02x}",
    Op.SNE_IMM: "SNE V{x:1X}, {nn:02x}",
    Op.SE_REG: "SE V{x:1X}, V{y:1X}",
    Op.LD_IMM: "LD V{x:1X}, {nn:02x}",
    Op.ADD_IMM: "ADD V{x:1X}, {nn:02x}",
    Op.LD_REG: "LD V{x:1X}, V{y:1X}",
    Op.OR: "OR V{x:1X}, V{y:1X}",
    Op.AND: "AND V{x:1X}, V{y:1X}",
    Op.XOR: "XOR V{x:1X}, V{y:1X}",
    Op.ADD_REG: "ADD V{x:1X}, V{y:1X}",
    Op.SUB: "SUB V{x:1X}, V{y:1X}",
    Op.SHR: "SHR V{x:1X}, V{y:1X}",
    Op.SUBN: "SUBN V{x:1X}, V{y:1X}",
    Op.SHL: "SHL V{x:1X}, V{y:1X}",
    Op.SNE_REG: "SNE V{x:1X}, V{y:1X}",
    Op.LD_I: "LD I, {nnn:03x}",
    Op.JP_V0: "JP V0, {nnn:03x}",
    Op.RND: "RND V{x:1X}, {nn:02x}",
    Op.DRW: "DRW V{x:1X}, V{y:1X}, {n:1x}",
    Op.SKP: "SKP V{x:1X}",
    Op.SKNP: "SKNP V{x:1X}",
    Op.LD_VX_DT: "LD V{x:1X}, DT",
    Op.LD_VX_K: "LD V{x:1X}, K",
    Op.LD_DT_VX: "LD DT, V{x:1X}",
    Op.LD_ST_VX: "LD ST, V{x:1X}",
    Op.ADD_I: "ADD I, V{x:1X}",
    Op.LD_F: "LD F, V{x:1X}",
    Op.LD_B: "LD B, V{x:1X}",
    Op.LD_MEM_VX: "LD [I], V{x:1X}",
    Op.LD_VX_MEM: "LD V{x:1X}, [I]",
}


def disassemble(instruction):
    """Render an Instruction (or a raw word) as assembler text"""
    if isinstance(instruction, int):
        instruction = decode(instruction)
    return MNEMONICS[instruction.op].format(**instruction._asdict())
