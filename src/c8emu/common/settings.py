from pathlib import Path
from typing import Any
import logging as lg
import tomllib

import c8emu.common.hwconf as hw
from c8emu.common.errors import ConfigError


class RunSettings:
    cpu_hz: int
    scale: int
    headless: bool
    frames: int | None
    seed: int | None
    strict: bool
    dump_frame: bool
    keymap: dict[str, int]

    # name: (type, lowest accepted value)
    RUN_TYPES: dict[str, tuple[type, int | None]] = {
        'cpu_hz': (int, 1),
        'scale': (int, 1),
        'headless': (bool, None),
        'frames': (int, 0),
        'seed': (int, None),
        'strict': (bool, None),
        'dump_frame': (bool, None),
    }

    RUN_KEYS = tuple(RUN_TYPES)

    def __init__(self):
        self.cpu_hz = hw.DEFAULT_CPU_HZ
        self.scale = hw.DEFAULT_SCALE
        self.headless = False
        self.frames = None
        self.seed = None
        self.strict = False
        self.dump_frame = False
        self.keymap = dict(hw.DEFAULT_KEYMAP)

    def update(self, **overrides: Any):
        for name, value in overrides.items():
            if name not in self.RUN_KEYS:
                raise ConfigError(f'Unknown setting {name}')

            if value is not None:
                setattr(self, name, check_value(name, value, *self.RUN_TYPES[name]))

        return self

    def cycles_per_frame(self) -> int:
        return max(1, round(self.cpu_hz / hw.TIMER_HZ))

    def load(self, path: Path):
        lg.debug(f'Loading settings from {path}')

        try:
            config = tomllib.loads(path.read_text())
        except OSError as e:
            raise ConfigError(f'Cannot read {path}: {e}') from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f'Malformed {path}: {e}') from e

        for section, table in config.items():
            if section not in ('run', 'keymap'):
                raise ConfigError(f'Unknown section [{section}] in {path}')

            if not isinstance(table, dict):
                raise ConfigError(f'{section} in {path} must be a table')

        self.update(**config.get('run', {}))

        if 'keymap' in config:
            self.keymap = {
                key.lower(): parse_key_index(value)
                for key, value in config['keymap'].items()
            }

        return self


def check_value(name: str, value: Any, kind: type, lowest: int | None) -> Any:
    # bool is an int subclass, so true/false must not pass as numbers
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ConfigError(f'Setting {name} expects {kind.__name__}, got {value!r}')

    if lowest is not None and value < lowest:
        raise ConfigError(f'Setting {name} must be at least {lowest}, got {value}')

    return value


def parse_key_index(value: int | str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ConfigError(f'Bad key index {value!r}')

    try:
        index = value if isinstance(value, int) else int(value, 16)
    except ValueError as e:
        raise ConfigError(f'Bad key index {value!r}') from e

    if index < 0 or index >= hw.KEYS:
        raise ConfigError(f'Key index {value!r} out of range')

    return index
