import logging as lg

from c8emu.common.hwconf import REGISTERS, STACK_DEPTH, ROM_BASE, ADDR_MASK
from c8emu.common.errors import StackOverflow, StackUnderflow


class Registers():
    v: list[int]        # V0..VF
    i: int              # Index register
    pc: int             # Program counter
    sp: int             # Stack pointer, next free slot
    stack: list[int]    # Return addresses

    def __init__(self):
        self.v = [0] * REGISTERS
        self.i = 0
        self.pc = ROM_BASE      # Execution starts at the beginning of ROM
        self.sp = 0
        self.stack = [0] * STACK_DEPTH

    def push(self, addr: int):
        if self.sp == STACK_DEPTH:
            raise StackOverflow(f'Call stack overflow at 0x{self.pc:03X} (depth {STACK_DEPTH})')

        self.stack[self.sp] = addr & ADDR_MASK
        self.sp += 1

    def pop(self) -> int:
        if self.sp == 0:
            raise StackUnderflow(f'Return with empty call stack at 0x{self.pc:03X}')

        self.sp -= 1
        return self.stack[self.sp]

    def debug_dump(self):
        state = [f'{k}:{v:X}' for k, v in {
            'PC': self.pc,
            'I': self.i,
            'SP': self.sp
        }.items()]

        state.extend([f'V{i:X}:{self.v[i]:02X}' for i in range(len(self.v))])

        lg.debug(' '.join(state))
