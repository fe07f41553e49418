import struct
import logging as lg

from c8emu.common.hwconf import MEMORY_SIZE, ADDR_MASK, FONT, FONT_BASE, ROM_BASE, MAX_ROM_SIZE
from c8emu.common.errors import RomTooLarge


class Memory():
    ''' 4K address space, every address is taken modulo its size '''
    data: bytearray

    def __init__(self):
        self.data = bytearray(MEMORY_SIZE)
        self.data[FONT_BASE:FONT_BASE + len(FONT)] = FONT

    def read_byte(self, addr: int) -> int:
        return self.data[addr & ADDR_MASK]

    def write_byte(self, addr: int, value: int):
        self.data[addr & ADDR_MASK] = value & 0xFF

    def read_word(self, addr: int) -> int:
        addr &= ADDR_MASK

        if addr == ADDR_MASK:
            # Second byte wraps to address 0
            return (self.data[addr] << 8) | self.data[0]

        (word,) = struct.unpack_from('>H', self.data, addr)
        return word

    def read_block(self, addr: int, length: int) -> bytes:
        return bytes(self.read_byte(addr + i) for i in range(length))

    def load_rom(self, rom: bytes):
        size = len(rom)

        if size > MAX_ROM_SIZE:
            raise RomTooLarge(size, MAX_ROM_SIZE)

        self.data[ROM_BASE:ROM_BASE + size] = rom
        lg.debug(f'Loaded {size} bytes at 0x{ROM_BASE:03X}')
