from c8emu.common.hwconf import KEYS


class Keyboard():
    ''' Level-triggered keypad state, last write wins '''

    def __init__(self):
        self.keys = [False] * KEYS

    def set_key(self, index: int, down: bool):
        if index < 0 or index >= KEYS:
            raise ValueError(f'No key {index}')

        self.keys[index] = bool(down)

    def is_down(self, index: int) -> bool:
        # Register values above 0xF select by low nibble
        return self.keys[index & 0xF]

    def first_down(self) -> int | None:
        for index, down in enumerate(self.keys):
            if down:
                return index

        return None
