import pytest

from c8emu.common.ops import Op, PATTERNS, decode, encode


def test_fields():
    ins = decode(0xD12A)
    assert ins.op == Op.DRW
    assert (ins.x, ins.y, ins.n) == (0x1, 0x2, 0xA)
    assert ins.nn == 0x2A
    assert ins.nnn == 0x12A


@pytest.mark.parametrize('opcode, op', [
    (0x00E0, Op.CLS),
    (0x00EE, Op.RET),
    (0x1ABC, Op.JP),
    (0x2ABC, Op.CALL),
    (0x3A05, Op.SE_VX_NN),
    (0x4A05, Op.SNE_VX_NN),
    (0x5AB0, Op.SE_VX_VY),
    (0x6A05, Op.LD_VX_NN),
    (0x7A05, Op.ADD_VX_NN),
    (0x8AB0, Op.LD_VX_VY),
    (0x8AB1, Op.OR),
    (0x8AB2, Op.AND),
    (0x8AB3, Op.XOR),
    (0x8AB4, Op.ADD_VX_VY),
    (0x8AB5, Op.SUB),
    (0x8AB6, Op.SHR),
    (0x8AB7, Op.SUBN),
    (0x8ABE, Op.SHL),
    (0x9AB0, Op.SNE_VX_VY),
    (0xA123, Op.LD_I),
    (0xB123, Op.JP_V0),
    (0xCA0F, Op.RND),
    (0xDAB5, Op.DRW),
    (0xEA9E, Op.SKP),
    (0xEAA1, Op.SKNP),
    (0xFA07, Op.LD_VX_DT),
    (0xFA0A, Op.LD_VX_K),
    (0xFA15, Op.LD_DT_VX),
    (0xFA18, Op.LD_ST_VX),
    (0xFA1E, Op.ADD_I_VX),
    (0xFA29, Op.LD_F_VX),
    (0xFA33, Op.LD_B_VX),
    (0xFA55, Op.LD_MEM_VX),
    (0xFA65, Op.LD_VX_MEM),
])
def test_decode(opcode, op):
    assert decode(opcode).op == op


@pytest.mark.parametrize('opcode', [0x0000, 0x0123, 0x00E1, 0x5AB1, 0x8AB8, 0x8ABF, 0x9AB3, 0xEA00, 0xFA00, 0xFAFF])
def test_decode_unknown(opcode):
    ins = decode(opcode)
    assert ins.op == Op.UNKNOWN
    assert ins.opcode == opcode


def test_every_op_has_pattern():
    assert set(PATTERNS) == set(Op) - {Op.UNKNOWN}


def test_mnemonics():
    assert str(decode(0x6A05)) == 'LD VA, 0x05'
    assert str(decode(0xD015)) == 'DRW V0, V1, 5'
    assert str(decode(0x1234)) == 'JP 0x234'
    assert str(decode(0xB300)) == 'JP V0, 0x300'
    assert str(decode(0xF355)) == 'LD [I], V3'
    assert str(decode(0xF365)) == 'LD V3, [I]'
    assert str(decode(0xFB0A)) == 'LD VB, K'
    assert str(decode(0x0123)) == 'DW 0x0123'


def test_encode():
    assert encode(Op.LD_VX_NN, [0xA, 0x05]) == 0x6A05
    assert encode(Op.DRW, [0, 1, 5]) == 0xD015
    assert encode(Op.CLS, []) == 0x00E0
    assert encode(Op.LD_B_VX, [7]) == 0xF733
    assert encode(Op.SUBN, [1, 2]) == 0x8127


def test_encode_matches_decode():
    for op, pattern in PATTERNS.items():
        operands = [1] * len(pattern.operands)
        assert decode(encode(op, operands)).op == op


def test_encode_range():
    with pytest.raises(ValueError):
        encode(Op.LD_VX_NN, [0x10, 0])

    with pytest.raises(ValueError):
        encode(Op.JP, [0x1000])

    with pytest.raises(ValueError):
        encode(Op.DRW, [0, 0])

    with pytest.raises(ValueError):
        encode(Op.UNKNOWN, [])
