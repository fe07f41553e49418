''' pygame window, keypad and speaker '''

import logging as lg
from array import array

import pygame

from c8emu.common.hwconf import DISPLAY_WIDTH, DISPLAY_HEIGHT
from c8emu.runtime.display import Frame
from c8emu.runtime.peripheral import InputSource


PIXEL_OFF = (0, 0, 0)
PIXEL_ON = (255, 255, 255)
TONE_HZ = 440
BEEP_MS = 120


def build_tone() -> array:
    # One period of a square wave at TONE_HZ
    (frequency, size, _) = pygame.mixer.get_init()
    period = int(round(frequency / TONE_HZ))
    amplitude = 2 ** (abs(size) - 1) - 1
    return array('h', [amplitude if t < period / 2 else -amplitude for t in range(period)])


class PygameHost:
    def __init__(self, scale: int, keymap: dict[str, int], title: str = 'c8emu'):
        pygame.mixer.pre_init(44100, -16, 1, 1024)
        pygame.init()

        self.scale = scale
        self.keymap = keymap
        self.window = pygame.display.set_mode((DISPLAY_WIDTH * scale, DISPLAY_HEIGHT * scale))
        pygame.display.set_caption(title)
        self.window.fill(PIXEL_OFF)
        pygame.display.flip()

        if pygame.mixer.get_init() is not None:
            self.tone = pygame.mixer.Sound(buffer=build_tone())
            self.tone.set_volume(0.1)
        else:
            lg.warning('No audio device, beeps go to the log')
            self.tone = None

    def present(self, frame: Frame) -> None:
        s = self.scale
        self.window.fill(PIXEL_OFF)

        for y, row in enumerate(frame.rows()):
            for x, on in enumerate(row):
                if on:
                    self.window.fill(PIXEL_ON, pygame.Rect(x * s, y * s, s, s))

        pygame.display.flip()

    def beep(self) -> None:
        if self.tone is None:
            lg.info('BEEP')
            return

        self.tone.play(loops=-1, maxtime=BEEP_MS)

    def pump(self, keys: InputSource) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False

            if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
                continue

            name = pygame.key.name(event.key)

            if name == 'escape':
                return False

            index = self.keymap.get(name)

            if index is not None:
                keys.set_key(index, event.type == pygame.KEYDOWN)

        return True

    def close(self) -> None:
        pygame.quit()
