import struct
from pathlib import Path
from typing import Iterator

import click

from c8emu.common.hwconf import ROM_BASE
from c8emu.common.ops import Instruction, decode


def disassemble(rom: bytes, base: int = ROM_BASE) -> Iterator[tuple[int, Instruction]]:
    ''' Decodes every aligned word; a trailing odd byte is left out '''
    for offset in range(0, len(rom) - 1, 2):
        (word,) = struct.unpack_from('>H', rom, offset)
        yield base + offset, decode(word)


def listing(rom: bytes, base: int = ROM_BASE, source: bool = False) -> list[str]:
    lines = []

    for addr, ins in disassemble(rom, base):
        if source:
            lines.append(str(ins))
        else:
            lines.append(f'{addr:03X}: {ins.opcode:04X}  {ins}')

    if len(rom) % 2:
        tail = rom[-1]

        if source:
            lines.append(f'DB 0x{tail:02X}')
        else:
            lines.append(f'{base + len(rom) - 1:03X}: {tail:02X}    DB 0x{tail:02X}')

    return lines


@click.command()
@click.option('--base', default=hex(ROM_BASE), help='Load address of the first byte')
@click.option('--source', is_flag=True, help='Emit assembler source without addresses')
@click.argument('rom', type=Path)
def disasm(base: str, source: bool, rom: Path):
    try:
        data = rom.read_bytes()
    except OSError as e:
        raise click.FileError(str(rom), e.strerror) from e

    try:
        base_addr = int(base, 0)
    except ValueError as e:
        raise click.BadParameter(f'{base!r} is not a number', param_hint='--base') from e

    for line in listing(data, base_addr, source):
        click.echo(line)


if __name__ == '__main__':
    disasm()
