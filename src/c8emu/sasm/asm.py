from pathlib import Path
import logging as lg
from typing import Tuple, List

import click
import pyparsing as pp

from c8emu.common.hwconf import MAX_ROM_SIZE
import c8emu.sasm.grammar as grammar
from c8emu.sasm.fpp import FPP, AsmError


class CompilationItem:
    modulename: str
    contents: str

    def __init__(self, modulename: str = '<string>', contents: str = ''):
        self.modulename = modulename
        self.contents = contents


def collect_file(filepath: str | Path) -> CompilationItem:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Collecting file {filepath}')
    return CompilationItem(filepath.stem, filepath.read_text())


def collect_files(filepaths: list[Path]) -> list[CompilationItem]:
    return [collect_file(path) for path in filepaths]


def compile_items(compile_items: list[CompilationItem]) -> bytes:
    # First pass
    first_pass = FPP()

    for compile_item in compile_items:
        lg.info(f'Processing {compile_item.modulename}')

        try:
            actions = grammar.program.parse_string(compile_item.contents, parse_all=True)
        except pp.ParseException as e:
            raise AsmError(f'{compile_item.modulename}: {e}') from e

        for (func, arg) in actions:
            func(first_pass, arg)

    # Second pass
    binary = first_pass.assemble()

    if len(binary) > MAX_ROM_SIZE:
        raise AsmError(f'Program is {len(binary)} bytes, at most {MAX_ROM_SIZE} fit')

    return binary


def compile_source(source: str, modulename: str = '<string>') -> bytes:
    return compile_items([CompilationItem(modulename, source)])


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('sources', nargs=-1, type=Path)
@click.argument('binary', type=Path)
def compile(verbose: bool, sources: Tuple[Path], binary: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('C8 ASM')

    items: List[CompilationItem] = collect_files(list(sources))

    try:
        bytestr = compile_items(items)
    except AsmError as e:
        raise click.ClickException(str(e)) from e

    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_bytes(bytestr)
    lg.info(f'Wrote {len(bytestr)} bytes to {binary}')


if __name__ == '__main__':
    compile()
