import pytest

import c8emu.sasm.asm as asm
from c8emu.sasm.fpp import AsmError
from c8emu.tools.disasm import listing

import unit_utils


def words(binary: bytes) -> list[int]:
    return [(binary[i] << 8) | binary[i + 1] for i in range(0, len(binary), 2)]


def test_instructions():
    binary = asm.compile_source('''
        CLS
        LD VA, 0x05
        ld v1, v2       ; lower case
        DRW V0, V1, 5
        LD [I], V3
        LD V3, [I]
        LD V4, K
        LD DT, V4
        LD V4, DT
        ADD I, V4
        ADD V4, V5
        ADD V4, 1
        SHR V6
        SHL V6, V7
        JP V0, 0x300
        RET
    ''')

    assert words(binary) == [
        0x00E0, 0x6A05, 0x8120, 0xD015, 0xF355, 0xF365, 0xF40A, 0xF415,
        0xF407, 0xF41E, 0x8454, 0x7401, 0x8606, 0x867E, 0xB300, 0x00EE,
    ]


def test_labels():
    binary = asm.compile_source('''
    start:
        CALL sub
        JP start
    sub:
        LD I, data
        RET
    data:
        DB 1, 0x02, 0b11
    ''')

    assert words(binary[:8]) == [0x2204, 0x1200, 0xA208, 0x00EE]
    assert binary[8:] == bytes([1, 2, 3])


def test_raw_words():
    binary = asm.compile_source('''
        DW 0x1234
    here:
        DW here
    ''')
    assert words(binary) == [0x1234, 0x0202]


def test_comments_and_blank_lines():
    binary = asm.compile_source('''
    ; header comment

        CLS ; trailing comment
    ''')
    assert binary == bytes([0x00, 0xE0])


@pytest.mark.parametrize('source, message', [
    ('FOO V1', 'Unknown statement'),
    ('LD V0', 'Unknown statement'),
    ('JP nowhere', 'Undefined label nowhere'),
    ('a: CLS\na: CLS', 'Duplicate label a'),
    ('LD V0, 256', 'out of range'),
    ('DRW V0, V1, 16', 'out of range'),
    ('DB 300', 'out of range'),
    ('DW 0x10000', 'out of range'),
])
def test_errors(source, message):
    with pytest.raises(AsmError) as e:
        asm.compile_source(source)

    assert message in str(e.value)


def test_program_too_large():
    with pytest.raises(AsmError):
        asm.compile_source('CLS\n' * 1793)


def test_files():
    binary = unit_utils.assemble_file('testdata/digits.c8s')
    assert len(binary) == 22


def test_disassembly_reassembles():
    binary = unit_utils.assemble_file('testdata/countdown.c8s')
    source = '\n'.join(listing(binary, source=True))
    assert asm.compile_source(source) == binary


def test_compile_command(tmp_path):
    from click.testing import CliRunner

    out = tmp_path / 'out' / 'digits.ch8'
    result = CliRunner().invoke(asm.compile, [str(unit_utils.find_file('testdata/digits.c8s')), str(out)])
    assert result.exit_code == 0
    assert out.read_bytes() == unit_utils.assemble_file('testdata/digits.c8s')


def test_compile_command_error(tmp_path):
    from click.testing import CliRunner

    source = tmp_path / 'bad.c8s'
    source.write_text('JP nowhere\n')
    result = CliRunner().invoke(asm.compile, [str(source), str(tmp_path / 'bad.ch8')])
    assert result.exit_code == 1
    assert 'Undefined label nowhere' in result.output
