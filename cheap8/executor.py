# Cheap-8, a Chip-8 interpreter.

# To the extent possible under law, the person who associated CC0 with
# Cheap-8 has waived all copyright and related or neighboring rights
# to Cheap-8.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

"""Instruction handlers.

Each handler takes the Machine and a decoded Instruction and mutates the
machine in place. By the time a handler runs the program counter already
points at the next instruction, so CALL pushes the return address as-is
and a skip is just another +2.

Handlers that produce a flag always write VF last, after every operand
(including VF itself) has been read.
"""
import logging

from cheap8.decoder import Op
from cheap8.errors import StackOverflowError, StackUnderflowError

FLAG = 0xF


def here(m):
    """Address of the instruction being executed"""
    return (m.pc - 2) & 0xFFFF


def skip(m):
    m.pc = (m.pc + 2) & 0xFFFF


def mem_index(m, offset=0):
    return (m.I + offset) % len(m.memory)


## Flow control ##

def ins_nop(m, ins):
    logging.warning(f"Unknown opcode 0x{ins.word:04x} at 0x{here(m):04x}, ignored")


def ins_sys(m, ins):
    # Machine code calls on the original hardware. Nothing to call into here.
    logging.debug(f"SYS 0x{ins.nnn:03x} - Unimplemented")


def ins_cls(m, ins):
    m.display.clear()


def ins_ret(m, ins):
    if m.sp == 0:
        logging.error(f"Stack underflow at 0x{here(m):04x}")
        raise StackUnderflowError(f"RET at 0x{here(m):04x} with an empty stack")
    m.sp -= 1
    m.pc = m.stack[m.sp]


def ins_jmp(m, ins):
    m.pc = ins.nnn


def ins_call(m, ins):
    if m.sp >= len(m.stack):
        logging.error(f"Stack overflow at 0x{here(m):04x}")
        raise StackOverflowError(f"CALL at 0x{here(m):04x} with {m.sp} return addresses stacked")
    m.stack[m.sp] = m.pc
    m.sp += 1
    m.pc = ins.nnn


def ins_jmp_offset(m, ins):
    reg = ins.x if m.quirks.jump_uses_vx else 0
    m.pc = (ins.nnn + m.V[reg]) & 0xFFFF


## Conditional skips ##

def ins_skip_eq_imm(m, ins):
    if m.V[ins.x] == ins.nn:
        skip(m)


def ins_skip_ne_imm(m, ins):
    if m.V[ins.x] != ins.nn:
        skip(m)


def ins_skip_eq_reg(m, ins):
    if m.V[ins.x] == m.V[ins.y]:
        skip(m)


def ins_skip_ne_reg(m, ins):
    if m.V[ins.x] != m.V[ins.y]:
        skip(m)


def ins_skip_key(m, ins):
    if m.keys[m.V[ins.x] & 0xF]:
        skip(m)


def ins_skip_not_key(m, ins):
    if not m.keys[m.V[ins.x] & 0xF]:
        skip(m)


## Registers and the ALU ##

def ins_load(m, ins):
    m.V[ins.x] = ins.nn


def ins_add(m, ins):
    # No carry for the immediate form
    m.V[ins.x] = (m.V[ins.x] + ins.nn) & 0xFF


def ins_copy(m, ins):
    m.V[ins.x] = m.V[ins.y]


def _logic(m, ins, result):
    m.V[ins.x] = result
    if m.quirks.vf_reset:
        m.V[FLAG] = 0


def ins_or(m, ins):
    _logic(m, ins, m.V[ins.x] | m.V[ins.y])


def ins_and(m, ins):
    _logic(m, ins, m.V[ins.x] & m.V[ins.y])


def ins_xor(m, ins):
    _logic(m, ins, m.V[ins.x] ^ m.V[ins.y])


def ins_add_reg(m, ins):
    result = m.V[ins.x] + m.V[ins.y]
    m.V[ins.x] = result & 0xFF
    m.V[FLAG] = 1 if result > 0xFF else 0


def ins_sub(m, ins):
    # VF is NOT borrow, the opposite sense to the carry from ADD
    vx, vy = m.V[ins.x], m.V[ins.y]
    m.V[ins.x] = (vx - vy) & 0xFF
    m.V[FLAG] = 1 if vx >= vy else 0


def ins_subn(m, ins):
    vx, vy = m.V[ins.x], m.V[ins.y]
    m.V[ins.x] = (vy - vx) & 0xFF
    m.V[FLAG] = 1 if vy >= vx else 0


def _shift_source(m, ins):
    return m.V[ins.y] if m.quirks.shift_uses_vy else m.V[ins.x]


def ins_shr(m, ins):
    value = _shift_source(m, ins)
    out = value & 0x1
    m.V[ins.x] = value >> 1
    m.V[FLAG] = out


def ins_shl(m, ins):
    value = _shift_source(m, ins)
    out = value >> 7 & 0x1
    m.V[ins.x] = (value << 1) & 0xFF
    m.V[FLAG] = out


def ins_rnd(m, ins):
    m.V[ins.x] = m.rng.randint(0, 255) & ins.nn


## Display ##

def ins_draw(m, ins):
    """Draw an n-row sprite from [I] at (Vx, Vy), VF set on collision"""
    rows = [m.memory[mem_index(m, row)] for row in range(ins.n)]
    collision = m.display.draw_sprite(m.V[ins.x], m.V[ins.y], rows, wrap=m.quirks.wrap_sprites)
    m.V[FLAG] = 1 if collision else 0


## Index register, timers and memory ##

def ins_load_index(m, ins):
    m.I = ins.nnn


def ins_add_index(m, ins):
    # VF is not affected
    m.I = (m.I + m.V[ins.x]) & 0xFFFF


def ins_load_font(m, ins):
    m.I = m.font_address(m.V[ins.x])


def ins_read_delay(m, ins):
    m.V[ins.x] = m.delay_timer


def ins_set_delay(m, ins):
    m.delay_timer = m.V[ins.x]


def ins_set_sound(m, ins):
    m.sound_timer = m.V[ins.x]


def ins_wait_key(m, ins):
    # The machine stops fetching until poll_key() sees a key go down.
    # A key that is already held finishes the wait straight away.
    m.awaiting_key = ins.x
    m.poll_key()


def ins_bcd(m, ins):
    value = m.V[ins.x]
    m.memory[mem_index(m, 0)] = value // 100
    m.memory[mem_index(m, 1)] = value // 10 % 10
    m.memory[mem_index(m, 2)] = value % 10


def ins_store(m, ins):
    for n in range(ins.x + 1):
        m.memory[mem_index(m, n)] = m.V[n]
    if m.quirks.memory_increments_index:
        m.I = (m.I + ins.x + 1) & 0xFFFF


def ins_restore(m, ins):
    for n in range(ins.x + 1):
        m.V[n] = m.memory[mem_index(m, n)]
    if m.quirks.memory_increments_index:
        m.I = (m.I + ins.x + 1) & 0xFFFF


HANDLERS = {
    Op.NOP: ins_nop,
    Op.SYS: ins_sys,
    Op.CLS: ins_cls,
    Op.RET: ins_ret,
    Op.JP: ins_jmp,
    Op.CALL: ins_call,
    Op.SE_IMM: ins_skip_eq_imm,
    Op.SNE_IMM: ins_skip_ne_imm,
    Op.SE_REG: ins_skip_eq_reg,
    Op.LD_IMM: ins_load,
    Op.ADD_IMM: ins_add,
    Op.LD_REG: ins_copy,
    Op.OR: ins_or,
    Op.AND: ins_and,
    Op.XOR: ins_xor,
    Op.ADD_REG: ins_add_reg,
    Op.SUB: ins_sub,
    Op.SHR: ins_shr,
    Op.SUBN: ins_subn,
    Op.SHL: ins_shl,
    Op.SNE_REG: ins_skip_ne_reg,
    Op.LD_I: ins_load_index,
    Op.JP_V0: ins_jmp_offset,
    Op.RND: ins_rnd,
    Op.DRW: ins_draw,
    Op.SKP: ins_skip_key,
    Op.SKNP: ins_skip_not_key,
    Op.LD_VX_DT: ins_read_delay,
    Op.LD_VX_K: ins_wait_key,
    Op.LD_DT_VX: ins_set_delay,
    Op.LD_ST_VX: ins_set_sound,
    Op.ADD_I: ins_add_index,
    Op.LD_F: ins_load_font,
    Op.LD_B: ins_bcd,
    Op.LD_MEM_VX: ins_store,
    Op.LD_VX_MEM: ins_restore,
}


def execute(m, ins):
    HANDLERS[ins.op](m, ins)
