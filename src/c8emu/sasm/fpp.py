import struct
import logging as lg
from typing import List, Tuple, Dict, Any, TypeAlias

import c8emu.common.ops as ops
from c8emu.common.hwconf import ROM_BASE

Tokens = List[Any]


class AsmError(Exception):
    pass


class Ref:
    ''' Label reference, resolved in the second pass '''

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f'Ref({self.name})'


Operand: TypeAlias = int | Ref


class FPP:
    ''' First pass processor '''
    cmd_list: List[Tuple[str, Any]]
    label_dict: Dict[str, int]

    def __init__(self):
        self.cmd_list = list()
        self.offset = 0
        self.label_dict = dict()

    def address(self) -> int:
        return ROM_BASE + self.offset

    # Handlers
    def on_label(self, name: str):
        if name in self.label_dict:
            raise AsmError(f'Duplicate label {name}')

        self.label_dict[name] = self.address()
        lg.debug(f'Label {name} @ 0x{self.address():03X}')

    def issue_bytes(self, values: Tokens):
        for value in values:
            if value < 0 or value > 0xFF:
                raise AsmError(f'Byte {value} out of range')

        self.cmd_list.append(('bytes', bytes(values)))
        self.offset += len(values)

    def issue_word(self, value: Operand):
        self.cmd_list.append(('word', value))
        self.offset += 2

    def issue_instruction(self, args: Tuple[ops.Op, Tokens]):
        (op, operands) = args
        lg.debug(f'Issuing {op.name} {operands}')
        self.cmd_list.append(('ins', (op, operands)))
        self.offset += 2

    def on_fail(self, rest: str):
        raise AsmError(f'Unknown statement {rest!r}')

    # Second pass
    def resolve(self, value: Operand) -> int:
        if isinstance(value, Ref):
            if value.name not in self.label_dict:
                raise AsmError(f'Undefined label {value.name}')

            return self.label_dict[value.name]

        return value

    def assemble(self) -> bytes:
        bytestr = bytearray()

        for (t, d) in self.cmd_list:
            if t == 'bytes':
                bytestr += d

            if t == 'word':
                word = self.resolve(d)

                if word < 0 or word > 0xFFFF:
                    raise AsmError(f'Word {word} out of range')

                bytestr += struct.pack('>H', word)

            if t == 'ins':
                (op, operands) = d

                try:
                    opcode = ops.encode(op, [self.resolve(o) for o in operands])
                except ValueError as e:
                    raise AsmError(str(e)) from e

                bytestr += struct.pack('>H', opcode)

        return bytes(bytestr)
