from dataclasses import dataclass
from typing import Iterator

from c8emu.common.hwconf import DISPLAY_WIDTH, DISPLAY_HEIGHT, SPRITE_WIDTH


@dataclass(frozen=True)
class Frame:
    ''' Read-only copy of the framebuffer handed to display sinks '''
    pixels: bytes
    width: int = DISPLAY_WIDTH
    height: int = DISPLAY_HEIGHT

    def pixel(self, x: int, y: int) -> bool:
        return self.pixels[y * self.width + x] != 0

    def rows(self) -> Iterator[tuple[bool, ...]]:
        for y in range(self.height):
            row = self.pixels[y * self.width:(y + 1) * self.width]
            yield tuple(p != 0 for p in row)

    def lit(self) -> int:
        return sum(self.pixels)

    def text(self, on: str = '#', off: str = '.') -> str:
        return '\n'.join(''.join(on if p else off for p in row) for row in self.rows())


class Framebuffer():
    width: int
    height: int
    dirty: bool

    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT):
        self.width = width
        self.height = height
        self.pixels = bytearray(width * height)
        self.dirty = False

    def pixel(self, x: int, y: int) -> bool:
        return self.pixels[y * self.width + x] != 0

    def clear(self):
        self.pixels[:] = bytes(len(self.pixels))
        self.dirty = True

    def draw_sprite(self, x: int, y: int, sprite: bytes) -> bool:
        ''' XOR sprite rows at the wrapped origin, clipping at the edges; True on collision '''
        x %= self.width
        y %= self.height
        collision = False

        for row, bits in enumerate(sprite):
            py = y + row

            if py >= self.height:
                break

            for bit in range(SPRITE_WIDTH):
                px = x + bit

                if px >= self.width:
                    break

                if (bits >> (7 - bit)) & 1:
                    idx = py * self.width + px

                    if self.pixels[idx]:
                        collision = True

                    self.pixels[idx] ^= 1

        if sprite:
            self.dirty = True

        return collision

    def snapshot(self) -> Frame:
        self.dirty = False
        return Frame(bytes(self.pixels), self.width, self.height)
