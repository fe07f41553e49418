import sys
import time
import random
from pathlib import Path
import logging as lg
import traceback

import click

from c8emu.common.hwconf import TIMER_HZ, MAX_ROM_SIZE
from c8emu.common.errors import RomLoadError, RomTooLarge, ConfigError, Fault, UnsupportedOpcode
from c8emu.common.settings import RunSettings
from c8emu.runtime.machine import Machine
from c8emu.runtime.peripheral import Host


EXIT_OK = 0
EXIT_ROM_ERROR = 1
EXIT_KEYBOARD = 3
EXIT_CONFIG_ERROR = 4
EXIT_FAULT = 5
EXIT_EXEC_ERROR = 100


def read_rom(rom_filename: Path) -> bytes:
    try:
        rom = rom_filename.read_bytes()
    except OSError as e:
        raise RomLoadError(f'{rom_filename}: {e.strerror}') from e

    if len(rom) > MAX_ROM_SIZE:
        raise RomTooLarge(len(rom), MAX_ROM_SIZE)

    return rom


def create_host(settings: RunSettings) -> Host | None:
    if settings.headless:
        return None

    # pygame is only touched when a window is wanted
    from c8emu.runtime.pgfront import PygameHost
    return PygameHost(settings.scale, settings.keymap)


def execute(machine: Machine, settings: RunSettings, host: Host | None = None) -> int:
    ''' Runs 60 frames a second until the frame limit or a quit; returns frames run '''
    cycles = settings.cycles_per_frame()
    frame_time = 1.0 / TIMER_HZ
    deadline = time.perf_counter()
    frames = 0

    lg.debug(f'{cycles} instructions per frame')

    while settings.frames is None or frames < settings.frames:
        if host is not None and not host.pump(machine):
            lg.info('Quit requested')
            break

        machine.run_frame(cycles)
        frames += 1

        deadline += frame_time
        delay = deadline - time.perf_counter()

        if delay > 0:
            time.sleep(delay)
        else:
            # Running late, do not try to catch up
            deadline = time.perf_counter()

    return frames


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-c', '--config', type=Path, help='TOML settings file')
@click.option('--cpu-hz', type=click.IntRange(1), help='Instructions per second')
@click.option('--scale', type=click.IntRange(1), help='Window pixels per display pixel')
@click.option('--headless/--windowed', default=None, help='Run without a window')
@click.option('--frames', type=click.IntRange(0), help='Stop after this many 1/60s frames')
@click.option('--seed', type=int, help='Seed for the random number generator')
@click.option('--strict/--lenient', default=None, help='Halt on unsupported opcodes')
@click.option('--dump-frame/--no-dump-frame', default=None, help='Print the final display as text')
@click.argument('rom_filename', type=Path)
def run(
    verbose: bool,
    config: Path | None,
    cpu_hz: int | None,
    scale: int | None,
    headless: bool | None,
    frames: int | None,
    seed: int | None,
    strict: bool | None,
    dump_frame: bool | None,
    rom_filename: Path
):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('C8EMU')

    host = None
    machine = None

    try:
        settings = RunSettings()

        if config is not None:
            settings.load(config)

        # Unset flags keep the configured value
        settings.update(
            cpu_hz=cpu_hz,
            scale=scale,
            headless=headless,
            frames=frames,
            seed=seed,
            strict=strict,
            dump_frame=dump_frame
        )

        rom = read_rom(rom_filename)
        host = create_host(settings)

        machine = Machine(
            display=host,
            audio=host,
            rng=random.Random(settings.seed),
            strict=settings.strict
        )

        machine.load_rom(rom)
        execute(machine, settings, host)

        if settings.dump_frame:
            click.echo(machine.fb.snapshot().text())

        sys.exit(EXIT_OK)

    except RomLoadError as e:
        lg.error(f'Cannot load ROM: {e}')
        sys.exit(EXIT_ROM_ERROR)

    except ConfigError as e:
        lg.error(f'Bad configuration: {e}')
        sys.exit(EXIT_CONFIG_ERROR)

    except (Fault, UnsupportedOpcode) as e:
        lg.error(f'Execution halted on fault: {e}')

        if machine is not None:
            machine.debug_dump()

        sys.exit(EXIT_FAULT)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.error(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)

    finally:
        if host is not None:
            host.close()


if __name__ == '__main__':
    run()
