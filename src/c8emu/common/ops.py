''' Instruction set: opcode patterns, decoding and encoding '''

from dataclasses import dataclass
from enum import Enum, auto
from typing import Sequence


class Op(Enum):
    CLS = auto()        # 00E0  clear display
    RET = auto()        # 00EE  PC <- pop + 2
    JP = auto()         # 1nnn  PC <- nnn
    CALL = auto()       # 2nnn  push PC; PC <- nnn
    SE_VX_NN = auto()   # 3xnn  skip if Vx == nn
    SNE_VX_NN = auto()  # 4xnn  skip if Vx != nn
    SE_VX_VY = auto()   # 5xy0  skip if Vx == Vy
    LD_VX_NN = auto()   # 6xnn  Vx <- nn
    ADD_VX_NN = auto()  # 7xnn  Vx <- Vx + nn, no flag
    LD_VX_VY = auto()   # 8xy0  Vx <- Vy
    OR = auto()         # 8xy1  Vx <- Vx | Vy
    AND = auto()        # 8xy2  Vx <- Vx & Vy
    XOR = auto()        # 8xy3  Vx <- Vx ^ Vy
    ADD_VX_VY = auto()  # 8xy4  Vx <- Vx + Vy, VF carry
    SUB = auto()        # 8xy5  Vx <- Vx - Vy, VF not borrow
    SHR = auto()        # 8xy6  Vx <- Vx >> 1, VF lsb
    SUBN = auto()       # 8xy7  Vx <- Vy - Vx, VF not borrow
    SHL = auto()        # 8xyE  Vx <- Vx << 1, VF msb
    SNE_VX_VY = auto()  # 9xy0  skip if Vx != Vy
    LD_I = auto()       # Annn  I <- nnn
    JP_V0 = auto()      # Bnnn  PC <- V0 + nnn
    RND = auto()        # Cxnn  Vx <- random & nn
    DRW = auto()        # Dxyn  draw n-row sprite at (Vx, Vy), VF collision
    SKP = auto()        # Ex9E  skip if key Vx down
    SKNP = auto()       # ExA1  skip if key Vx up
    LD_VX_DT = auto()   # Fx07  Vx <- delay
    LD_VX_K = auto()    # Fx0A  wait for key, Vx <- key
    LD_DT_VX = auto()   # Fx15  delay <- Vx
    LD_ST_VX = auto()   # Fx18  sound <- Vx
    ADD_I_VX = auto()   # Fx1E  I <- I + Vx, VF carry past 0xFFF
    LD_F_VX = auto()    # Fx29  I <- glyph address of Vx
    LD_B_VX = auto()    # Fx33  M[I..I+2] <- BCD(Vx)
    LD_MEM_VX = auto()  # Fx55  M[I..I+x] <- V0..Vx
    LD_VX_MEM = auto()  # Fx65  V0..Vx <- M[I..I+x]
    UNKNOWN = auto()    # anything else


@dataclass(frozen=True)
class Pattern:
    mask: int
    value: int
    operands: tuple[str, ...]
    mnemonic: str


X = ('x',)
XY = ('x', 'y')
XNN = ('x', 'nn')
NNN = ('nnn',)

PATTERNS: dict[Op, Pattern] = {
    Op.CLS: Pattern(0xFFFF, 0x00E0, (), 'CLS'),
    Op.RET: Pattern(0xFFFF, 0x00EE, (), 'RET'),
    Op.JP: Pattern(0xF000, 0x1000, NNN, 'JP 0x{nnn:03X}'),
    Op.CALL: Pattern(0xF000, 0x2000, NNN, 'CALL 0x{nnn:03X}'),
    Op.SE_VX_NN: Pattern(0xF000, 0x3000, XNN, 'SE V{x:X}, 0x{nn:02X}'),
    Op.SNE_VX_NN: Pattern(0xF000, 0x4000, XNN, 'SNE V{x:X}, 0x{nn:02X}'),
    Op.SE_VX_VY: Pattern(0xF00F, 0x5000, XY, 'SE V{x:X}, V{y:X}'),
    Op.LD_VX_NN: Pattern(0xF000, 0x6000, XNN, 'LD V{x:X}, 0x{nn:02X}'),
    Op.ADD_VX_NN: Pattern(0xF000, 0x7000, XNN, 'ADD V{x:X}, 0x{nn:02X}'),
    Op.LD_VX_VY: Pattern(0xF00F, 0x8000, XY, 'LD V{x:X}, V{y:X}'),
    Op.OR: Pattern(0xF00F, 0x8001, XY, 'OR V{x:X}, V{y:X}'),
    Op.AND: Pattern(0xF00F, 0x8002, XY, 'AND V{x:X}, V{y:X}'),
    Op.XOR: Pattern(0xF00F, 0x8003, XY, 'XOR V{x:X}, V{y:X}'),
    Op.ADD_VX_VY: Pattern(0xF00F, 0x8004, XY, 'ADD V{x:X}, V{y:X}'),
    Op.SUB: Pattern(0xF00F, 0x8005, XY, 'SUB V{x:X}, V{y:X}'),
    Op.SHR: Pattern(0xF00F, 0x8006, XY, 'SHR V{x:X}, V{y:X}'),
    Op.SUBN: Pattern(0xF00F, 0x8007, XY, 'SUBN V{x:X}, V{y:X}'),
    Op.SHL: Pattern(0xF00F, 0x800E, XY, 'SHL V{x:X}, V{y:X}'),
    Op.SNE_VX_VY: Pattern(0xF00F, 0x9000, XY, 'SNE V{x:X}, V{y:X}'),
    Op.LD_I: Pattern(0xF000, 0xA000, NNN, 'LD I, 0x{nnn:03X}'),
    Op.JP_V0: Pattern(0xF000, 0xB000, NNN, 'JP V0, 0x{nnn:03X}'),
    Op.RND: Pattern(0xF000, 0xC000, XNN, 'RND V{x:X}, 0x{nn:02X}'),
    Op.DRW: Pattern(0xF000, 0xD000, ('x', 'y', 'n'), 'DRW V{x:X}, V{y:X}, {n}'),
    Op.SKP: Pattern(0xF0FF, 0xE09E, X, 'SKP V{x:X}'),
    Op.SKNP: Pattern(0xF0FF, 0xE0A1, X, 'SKNP V{x:X}'),
    Op.LD_VX_DT: Pattern(0xF0FF, 0xF007, X, 'LD V{x:X}, DT'),
    Op.LD_VX_K: Pattern(0xF0FF, 0xF00A, X, 'LD V{x:X}, K'),
    Op.LD_DT_VX: Pattern(0xF0FF, 0xF015, X, 'LD DT, V{x:X}'),
    Op.LD_ST_VX: Pattern(0xF0FF, 0xF018, X, 'LD ST, V{x:X}'),
    Op.ADD_I_VX: Pattern(0xF0FF, 0xF01E, X, 'ADD I, V{x:X}'),
    Op.LD_F_VX: Pattern(0xF0FF, 0xF029, X, 'LD F, V{x:X}'),
    Op.LD_B_VX: Pattern(0xF0FF, 0xF033, X, 'LD B, V{x:X}'),
    Op.LD_MEM_VX: Pattern(0xF0FF, 0xF055, X, 'LD [I], V{x:X}'),
    Op.LD_VX_MEM: Pattern(0xF0FF, 0xF065, X, 'LD V{x:X}, [I]'),
}

UNKNOWN_MNEMONIC = 'DW 0x{opcode:04X}'

FIELD_LIMITS = {
    'x': 0xF,
    'y': 0xF,
    'n': 0xF,
    'nn': 0xFF,
    'nnn': 0xFFF,
}

# Top nibble -> candidate patterns of that family
FAMILIES: dict[int, list[tuple[Pattern, Op]]] = {}

for _op, _pattern in PATTERNS.items():
    FAMILIES.setdefault(_pattern.value >> 12, []).append((_pattern, _op))


@dataclass(frozen=True)
class Instruction:
    opcode: int
    op: Op

    @property
    def x(self) -> int:
        return (self.opcode >> 8) & 0xF

    @property
    def y(self) -> int:
        return (self.opcode >> 4) & 0xF

    @property
    def n(self) -> int:
        return self.opcode & 0xF

    @property
    def nn(self) -> int:
        return self.opcode & 0xFF

    @property
    def nnn(self) -> int:
        return self.opcode & 0xFFF

    def fields(self) -> dict[str, int]:
        return {
            'opcode': self.opcode,
            'x': self.x,
            'y': self.y,
            'n': self.n,
            'nn': self.nn,
            'nnn': self.nnn
        }

    def __str__(self) -> str:
        if self.op == Op.UNKNOWN:
            return UNKNOWN_MNEMONIC.format(**self.fields())

        return PATTERNS[self.op].mnemonic.format(**self.fields())


def decode(opcode: int) -> Instruction:
    opcode &= 0xFFFF

    for pattern, op in FAMILIES.get(opcode >> 12, []):
        if opcode & pattern.mask == pattern.value:
            return Instruction(opcode, op)

    return Instruction(opcode, Op.UNKNOWN)


def encode(op: Op, operands: Sequence[int]) -> int:
    if op == Op.UNKNOWN:
        raise ValueError('UNKNOWN has no encoding')

    pattern = PATTERNS[op]

    if len(operands) != len(pattern.operands):
        raise ValueError(f'{op.name} takes {len(pattern.operands)} operands, got {len(operands)}')

    opcode = pattern.value

    for name, value in zip(pattern.operands, operands):
        limit = FIELD_LIMITS[name]

        if value < 0 or value > limit:
            raise ValueError(f'{op.name} operand {name}={value} out of range 0..{limit}')

        if name == 'x':
            opcode |= value << 8
        elif name == 'y':
            opcode |= value << 4
        else:
            opcode |= value

    return opcode
