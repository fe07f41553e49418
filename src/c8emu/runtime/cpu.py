import logging as lg
import random
from typing import Callable

from c8emu.common.ops import Op, Instruction, decode
from c8emu.common.hwconf import ADDR_MASK, FLAG_REG, GLYPH_SIZE, FONT_BASE
from c8emu.common.errors import UnsupportedOpcode
from c8emu.runtime.memory import Memory
from c8emu.runtime.registers import Registers
from c8emu.runtime.timers import Timers
from c8emu.runtime.display import Framebuffer
from c8emu.runtime.keyboard import Keyboard


class CPU():
    def __init__(
        self,
        memory: Memory,
        regs: Registers,
        timers: Timers,
        fb: Framebuffer,
        keyboard: Keyboard,
        rng: random.Random | None = None,
        strict: bool = False
    ):
        self.memory = memory        # Ref. to memory
        self.regs = regs
        self.timers = timers
        self.fb = fb
        self.keyboard = keyboard
        self.rng = rng if rng is not None else random.Random()
        self.strict = strict        # Unsupported opcodes are fatal
        self.cycles = 0

    # - Helpers - #

    def fetch(self) -> Instruction:
        pc = self.regs.pc
        ins = decode(self.memory.read_word(pc))
        self.regs.pc = (pc + 2) & ADDR_MASK
        return ins

    def skip_if(self, cond: bool):
        if cond:
            self.regs.pc = (self.regs.pc + 2) & ADDR_MASK

    def jump(self, addr: int):
        self.regs.pc = addr & ADDR_MASK

    def set_with_flag(self, x: int, value: int, flag: bool):
        # Flag written last so that VF as target holds the flag
        self.regs.v[x] = value & 0xFF
        self.regs.v[FLAG_REG] = 1 if flag else 0

    def arithm_pair(self, ins: Instruction, op: Callable[[int, int], int]):
        v = self.regs.v
        v[ins.x] = op(v[ins.x], v[ins.y]) & 0xFF

    # - Flow - #

    def cls(self, ins: Instruction):
        self.fb.clear()

    def ret(self, ins: Instruction):
        self.jump(self.regs.pop() + 2)

    def jp(self, ins: Instruction):
        self.jump(ins.nnn)

    def call(self, ins: Instruction):
        self.regs.push(self.regs.pc - 2)
        self.jump(ins.nnn)

    def jp_v0(self, ins: Instruction):
        self.jump(self.regs.v[0] + ins.nnn)

    def se_vx_nn(self, ins: Instruction):
        self.skip_if(self.regs.v[ins.x] == ins.nn)

    def sne_vx_nn(self, ins: Instruction):
        self.skip_if(self.regs.v[ins.x] != ins.nn)

    def se_vx_vy(self, ins: Instruction):
        self.skip_if(self.regs.v[ins.x] == self.regs.v[ins.y])

    def sne_vx_vy(self, ins: Instruction):
        self.skip_if(self.regs.v[ins.x] != self.regs.v[ins.y])

    # - Loads - #

    def ld_vx_nn(self, ins: Instruction):
        self.regs.v[ins.x] = ins.nn

    def add_vx_nn(self, ins: Instruction):
        self.regs.v[ins.x] = (self.regs.v[ins.x] + ins.nn) & 0xFF

    def ld_vx_vy(self, ins: Instruction):
        self.regs.v[ins.x] = self.regs.v[ins.y]

    def ld_i(self, ins: Instruction):
        self.regs.i = ins.nnn

    def rnd(self, ins: Instruction):
        self.regs.v[ins.x] = self.rng.randrange(0x100) & ins.nn

    # - Arithmetic - #

    def bor(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: a | b)

    def band(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: a & b)

    def xor(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: a ^ b)

    def add(self, ins: Instruction):
        a = self.regs.v[ins.x]
        b = self.regs.v[ins.y]
        self.set_with_flag(ins.x, a + b, a + b > 0xFF)

    def sub(self, ins: Instruction):
        a = self.regs.v[ins.x]
        b = self.regs.v[ins.y]
        self.set_with_flag(ins.x, a - b, a >= b)

    def subn(self, ins: Instruction):
        a = self.regs.v[ins.x]
        b = self.regs.v[ins.y]
        self.set_with_flag(ins.x, b - a, b >= a)

    def shr(self, ins: Instruction):
        a = self.regs.v[ins.x]
        self.set_with_flag(ins.x, a >> 1, a & 0x01 != 0)

    def shl(self, ins: Instruction):
        a = self.regs.v[ins.x]
        self.set_with_flag(ins.x, a << 1, a & 0x80 != 0)

    # - Display - #

    def drw(self, ins: Instruction):
        x = self.regs.v[ins.x]
        y = self.regs.v[ins.y]
        self.regs.v[FLAG_REG] = 0
        sprite = self.memory.read_block(self.regs.i, ins.n)

        if self.fb.draw_sprite(x, y, sprite):
            self.regs.v[FLAG_REG] = 1

    def ld_f_vx(self, ins: Instruction):
        self.regs.i = FONT_BASE + self.regs.v[ins.x] * GLYPH_SIZE

    # - Keys - #

    def skp(self, ins: Instruction):
        self.skip_if(self.keyboard.is_down(self.regs.v[ins.x]))

    def sknp(self, ins: Instruction):
        self.skip_if(not self.keyboard.is_down(self.regs.v[ins.x]))

    def ld_vx_k(self, ins: Instruction):
        key = self.keyboard.first_down()

        if key is None:
            # Poll again on the next cycle
            self.jump(self.regs.pc - 2)
            return

        self.regs.v[ins.x] = key

    # - Timers - #

    def ld_vx_dt(self, ins: Instruction):
        self.regs.v[ins.x] = self.timers.delay

    def ld_dt_vx(self, ins: Instruction):
        self.timers.delay = self.regs.v[ins.x]

    def ld_st_vx(self, ins: Instruction):
        self.timers.sound = self.regs.v[ins.x]

    # - Memory - #

    def add_i_vx(self, ins: Instruction):
        total = self.regs.i + self.regs.v[ins.x]
        self.regs.i = total & ADDR_MASK
        self.regs.v[FLAG_REG] = 1 if total > ADDR_MASK else 0

    def ld_b_vx(self, ins: Instruction):
        value = self.regs.v[ins.x]
        i = self.regs.i
        self.memory.write_byte(i, value // 100)
        self.memory.write_byte(i + 1, value // 10 % 10)
        self.memory.write_byte(i + 2, value % 10)

    def ld_mem_vx(self, ins: Instruction):
        for r in range(ins.x + 1):
            self.memory.write_byte(self.regs.i + r, self.regs.v[r])

    def ld_vx_mem(self, ins: Instruction):
        for r in range(ins.x + 1):
            self.regs.v[r] = self.memory.read_byte(self.regs.i + r)

    def unknown(self, ins: Instruction):
        addr = (self.regs.pc - 2) & ADDR_MASK

        if self.strict:
            raise UnsupportedOpcode(ins.opcode, addr)

        lg.warning(f'Skipping unsupported opcode 0x{ins.opcode:04X} at 0x{addr:03X}')

    HANDLERS = {
        Op.CLS: cls,
        Op.RET: ret,
        Op.JP: jp,
        Op.CALL: call,
        Op.SE_VX_NN: se_vx_nn,
        Op.SNE_VX_NN: sne_vx_nn,
        Op.SE_VX_VY: se_vx_vy,
        Op.LD_VX_NN: ld_vx_nn,
        Op.ADD_VX_NN: add_vx_nn,
        Op.LD_VX_VY: ld_vx_vy,
        Op.OR: bor,
        Op.AND: band,
        Op.XOR: xor,
        Op.ADD_VX_VY: add,
        Op.SUB: sub,
        Op.SHR: shr,
        Op.SUBN: subn,
        Op.SHL: shl,
        Op.SNE_VX_VY: sne_vx_vy,
        Op.LD_I: ld_i,
        Op.JP_V0: jp_v0,
        Op.RND: rnd,
        Op.DRW: drw,
        Op.SKP: skp,
        Op.SKNP: sknp,
        Op.LD_VX_DT: ld_vx_dt,
        Op.LD_VX_K: ld_vx_k,
        Op.LD_DT_VX: ld_dt_vx,
        Op.LD_ST_VX: ld_st_vx,
        Op.ADD_I_VX: add_i_vx,
        Op.LD_F_VX: ld_f_vx,
        Op.LD_B_VX: ld_b_vx,
        Op.LD_MEM_VX: ld_mem_vx,
        Op.LD_VX_MEM: ld_vx_mem,
        Op.UNKNOWN: unknown
    }

    # -- Implementation -- #

    def execute(self, ins: Instruction):
        handler = self.HANDLERS[ins.op]
        handler(self, ins)

    def exec_next(self):
        addr = self.regs.pc
        ins = self.fetch()

        if lg.getLogger().isEnabledFor(lg.DEBUG):
            lg.debug(f'{addr:03X}: {ins.opcode:04X} {ins}')

        self.execute(ins)
        self.cycles += 1
