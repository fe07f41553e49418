import logging as lg
import random

from c8emu.runtime.memory import Memory
from c8emu.runtime.registers import Registers
from c8emu.runtime.timers import Timers
from c8emu.runtime.display import Framebuffer
from c8emu.runtime.keyboard import Keyboard
from c8emu.runtime.cpu import CPU
from c8emu.runtime.peripheral import DisplaySink, AudioSink, NullDisplay, LogAudio


class Machine():
    ''' One VM instance: all state plus the sinks it reports to '''

    def __init__(
        self,
        display: DisplaySink | None = None,
        audio: AudioSink | None = None,
        rng: random.Random | None = None,
        strict: bool = False
    ):
        self.display = display if display is not None else NullDisplay()
        self.audio = audio if audio is not None else LogAudio()

        self.memory = Memory()
        self.regs = Registers()
        self.timers = Timers(self.audio)
        self.fb = Framebuffer()
        self.keyboard = Keyboard()

        self.cpu = CPU(
            self.memory,
            self.regs,
            self.timers,
            self.fb,
            self.keyboard,
            rng=rng,
            strict=strict
        )

    def load_rom(self, rom: bytes):
        self.memory.load_rom(rom)

    def cycle(self):
        self.cpu.exec_next()

    def tick_timers(self):
        self.timers.tick()

    def refresh(self) -> bool:
        if not self.fb.dirty:
            return False

        self.display.present(self.fb.snapshot())
        return True

    def set_key(self, index: int, down: bool):
        self.keyboard.set_key(index, down)

    def run_frame(self, cycles: int):
        for _ in range(cycles):
            self.cycle()

        self.tick_timers()
        self.refresh()

    def debug_dump(self):
        self.regs.debug_dump()
        lg.debug(f'DT:{self.timers.delay:X} ST:{self.timers.sound:X} CYCLES:{self.cpu.cycles}')
