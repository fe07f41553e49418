# type: ignore
''' Assembler grammar, conventional mnemonics '''

import pyparsing as pp

from c8emu.common.ops import Op
from c8emu.sasm.fpp import FPP, Ref


def parse_number(text: str) -> int:
    if text[:2].lower() == '0x':
        return int(text[2:], 16)

    if text[:2].lower() == '0b':
        return int(text[2:], 2)

    return int(text, 10)


def kw(literal):
    return pp.Suppress(pp.CaselessKeyword(literal))


id = pp.Word(pp.alphas + '_', pp.alphanums + '_')
comment = pp.Regex(r';[^\n]*')
comma = pp.Suppress(',')

label = (id + pp.Suppress(':')).set_parse_action(lambda r: (FPP.on_label, r[0]))

number = pp.Regex(r'0[xX][0-9a-fA-F]+|0[bB][01]+|[0-9]+').set_parse_action(lambda r: parse_number(r[0]))
reg = pp.Regex(r'[vV][0-9a-fA-F]\b').set_parse_action(lambda r: int(r[0][1], 16))
ref = id.copy().set_parse_action(lambda r: Ref(r[0]))

addr = number | ref
byte = number
nibble = number

# Operand markers, produce no tokens
v0 = pp.Suppress(pp.Regex(r'[vV]0\b'))
i_reg = kw('I')
mem_i = pp.Suppress(pp.Literal('[') + pp.CaselessKeyword('I') + pp.Literal(']'))
dt = kw('DT')
st = kw('ST')
key = kw('K')
font = kw('F')
bcd = kw('B')


def g_ins(op, mnemonic, *operands):
    expr = pp.And([kw(mnemonic)])

    for i, operand in enumerate(operands):
        if i > 0:
            expr = expr + comma

        expr = expr + operand

    return expr.set_parse_action(lambda r: (FPP.issue_instruction, (op, r.as_list())))


def g_shift(op, mnemonic):
    expr = kw(mnemonic) + reg + pp.Optional(comma + reg, default=0)
    return expr.set_parse_action(lambda r: (FPP.issue_instruction, (op, r.as_list())))


# Flow
cls_cmd = g_ins(Op.CLS, 'CLS')
ret_cmd = g_ins(Op.RET, 'RET')
jp_v0_cmd = g_ins(Op.JP_V0, 'JP', v0, addr)
jp_cmd = g_ins(Op.JP, 'JP', addr)
call_cmd = g_ins(Op.CALL, 'CALL', addr)
se_vy_cmd = g_ins(Op.SE_VX_VY, 'SE', reg, reg)
se_nn_cmd = g_ins(Op.SE_VX_NN, 'SE', reg, byte)
sne_vy_cmd = g_ins(Op.SNE_VX_VY, 'SNE', reg, reg)
sne_nn_cmd = g_ins(Op.SNE_VX_NN, 'SNE', reg, byte)
skp_cmd = g_ins(Op.SKP, 'SKP', reg)
sknp_cmd = g_ins(Op.SKNP, 'SKNP', reg)

# Loads, most specific first
ld_vx_dt_cmd = g_ins(Op.LD_VX_DT, 'LD', reg, dt)
ld_vx_k_cmd = g_ins(Op.LD_VX_K, 'LD', reg, key)
ld_vx_mem_cmd = g_ins(Op.LD_VX_MEM, 'LD', reg, mem_i)
ld_vx_vy_cmd = g_ins(Op.LD_VX_VY, 'LD', reg, reg)
ld_vx_nn_cmd = g_ins(Op.LD_VX_NN, 'LD', reg, byte)
ld_i_cmd = g_ins(Op.LD_I, 'LD', i_reg, addr)
ld_dt_cmd = g_ins(Op.LD_DT_VX, 'LD', dt, reg)
ld_st_cmd = g_ins(Op.LD_ST_VX, 'LD', st, reg)
ld_f_cmd = g_ins(Op.LD_F_VX, 'LD', font, reg)
ld_b_cmd = g_ins(Op.LD_B_VX, 'LD', bcd, reg)
ld_mem_vx_cmd = g_ins(Op.LD_MEM_VX, 'LD', mem_i, reg)

# Arithmetic
add_i_cmd = g_ins(Op.ADD_I_VX, 'ADD', i_reg, reg)
add_vy_cmd = g_ins(Op.ADD_VX_VY, 'ADD', reg, reg)
add_nn_cmd = g_ins(Op.ADD_VX_NN, 'ADD', reg, byte)
or_cmd = g_ins(Op.OR, 'OR', reg, reg)
and_cmd = g_ins(Op.AND, 'AND', reg, reg)
xor_cmd = g_ins(Op.XOR, 'XOR', reg, reg)
sub_cmd = g_ins(Op.SUB, 'SUB', reg, reg)
subn_cmd = g_ins(Op.SUBN, 'SUBN', reg, reg)
shr_cmd = g_shift(Op.SHR, 'SHR')
shl_cmd = g_shift(Op.SHL, 'SHL')
rnd_cmd = g_ins(Op.RND, 'RND', reg, byte)

# Display
drw_cmd = g_ins(Op.DRW, 'DRW', reg, reg, nibble)

# Data
db_cmd = (kw('DB') + number + pp.ZeroOrMore(comma + number)).set_parse_action(
    lambda r: (FPP.issue_bytes, r.as_list()))
dw_cmd = (kw('DW') + addr).set_parse_action(lambda r: (FPP.issue_word, r[0]))

# Fail on unknown statement
unknown = pp.Regex(r'[^\n]+').set_parse_action(lambda r: (FPP.on_fail, r[0]))

asm_cmd = cls_cmd \
    | ret_cmd \
    | jp_v0_cmd \
    | jp_cmd \
    | call_cmd \
    | se_vy_cmd \
    | se_nn_cmd \
    | sne_vy_cmd \
    | sne_nn_cmd \
    | skp_cmd \
    | sknp_cmd \
    | ld_vx_dt_cmd \
    | ld_vx_k_cmd \
    | ld_vx_mem_cmd \
    | ld_vx_vy_cmd \
    | ld_vx_nn_cmd \
    | ld_i_cmd \
    | ld_dt_cmd \
    | ld_st_cmd \
    | ld_f_cmd \
    | ld_b_cmd \
    | ld_mem_vx_cmd \
    | add_i_cmd \
    | add_vy_cmd \
    | add_nn_cmd \
    | or_cmd \
    | and_cmd \
    | xor_cmd \
    | sub_cmd \
    | subn_cmd \
    | shr_cmd \
    | shl_cmd \
    | rnd_cmd \
    | drw_cmd \
    | db_cmd \
    | dw_cmd

statement = label | asm_cmd | unknown
program = pp.ZeroOrMore(statement)
program.ignore(comment)
