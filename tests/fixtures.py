# type: ignore
import random

import pytest

from c8emu.runtime.display import Frame
from c8emu.runtime.machine import Machine


class RecordingDisplay:
    def __init__(self):
        self.frames: list[Frame] = []

    def present(self, frame: Frame) -> None:
        self.frames.append(frame)


class RecordingAudio:
    def __init__(self):
        self.beeps = 0

    def beep(self) -> None:
        self.beeps += 1


@pytest.fixture
def display():
    yield RecordingDisplay()


@pytest.fixture
def audio():
    yield RecordingAudio()


@pytest.fixture
def machine(display, audio):
    yield Machine(display=display, audio=audio, rng=random.Random(1234))
