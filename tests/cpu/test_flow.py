# type: ignore
import pytest

from c8emu.common.errors import StackOverflow, StackUnderflow, UnsupportedOpcode
from c8emu.runtime.machine import Machine

from unit_utils import load_words, load_program, run_cycles
from fixtures import machine, display, audio  # noqa: F401


def test_jump(machine):  # noqa: F811
    load_words(machine, 0x1ABC)
    machine.cycle()
    assert machine.regs.pc == 0xABC


def test_jump_v0(machine):  # noqa: F811
    load_words(machine, 0xB300)
    machine.regs.v[0] = 0x12
    machine.cycle()
    assert machine.regs.pc == 0x312


def test_jump_v0_wraps(machine):  # noqa: F811
    load_words(machine, 0xBFFF)
    machine.regs.v[0] = 0x02
    machine.cycle()
    assert machine.regs.pc == 0x001


def test_call_and_return(machine):  # noqa: F811
    load_words(
        machine,
        0x2206,     # 200: CALL 0x206
        0x6105,     # 202: LD V1, 5
        0x1204,     # 204: JP 0x204
        0x6007,     # 206: LD V0, 7
        0x00EE,     # 208: RET
    )

    machine.cycle()
    assert machine.regs.pc == 0x206
    assert machine.regs.sp == 1
    assert machine.regs.stack[0] == 0x200

    run_cycles(machine, 2)
    assert machine.regs.v[0] == 7
    assert machine.regs.pc == 0x202
    assert machine.regs.sp == 0

    machine.cycle()
    assert machine.regs.v[1] == 5


@pytest.mark.parametrize('words, taken', [
    ((0x3005,), True),
    ((0x3006,), False),
    ((0x4005,), False),
    ((0x4006,), True),
    ((0x5010,), True),
    ((0x5020,), False),
    ((0x9010,), False),
    ((0x9020,), True),
])
def test_skips(machine, words, taken):  # noqa: F811
    load_words(machine, *words)
    machine.regs.v[0] = 5
    machine.regs.v[1] = 5
    machine.regs.v[2] = 6
    machine.cycle()
    assert machine.regs.pc == (0x204 if taken else 0x202)


def test_stack_overflow(machine):  # noqa: F811
    load_program(machine, 'start: CALL start')
    run_cycles(machine, 16)
    assert machine.regs.sp == 16

    with pytest.raises(StackOverflow):
        machine.cycle()


def test_stack_underflow(machine):  # noqa: F811
    load_words(machine, 0x00EE)

    with pytest.raises(StackUnderflow):
        machine.cycle()


def test_unsupported_opcode_skipped(machine, caplog):  # noqa: F811
    load_words(machine, 0x0123, 0x6A05)
    machine.cycle()
    assert machine.regs.pc == 0x202
    assert 'Skipping unsupported opcode 0x0123' in caplog.text

    machine.cycle()
    assert machine.regs.v[0xA] == 5


def test_unsupported_opcode_strict():
    machine = Machine(strict=True)  # noqa: F811
    load_words(machine, 0xFFFF)

    with pytest.raises(UnsupportedOpcode) as e:
        machine.cycle()

    assert e.value.opcode == 0xFFFF
    assert e.value.addr == 0x200


def test_pc_wraps_at_end_of_memory(machine):  # noqa: F811
    machine.memory.write_byte(0xFFE, 0x60)
    machine.memory.write_byte(0xFFF, 0x09)
    machine.regs.pc = 0xFFE
    machine.cycle()
    assert machine.regs.v[0] == 9
    assert machine.regs.pc == 0x000


def test_cycles_do_not_tick_timers(machine):  # noqa: F811
    load_words(machine, 0x1200)
    machine.timers.delay = 5
    machine.timers.sound = 5
    run_cycles(machine, 100)
    assert machine.timers.delay == 5
    assert machine.timers.sound == 5
    assert machine.cpu.cycles == 100
