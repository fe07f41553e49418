import pytest

import c8emu.common.hwconf as hw
from c8emu.common.settings import RunSettings
from c8emu.common.errors import ConfigError


def test_defaults():
    settings = RunSettings()
    assert settings.cpu_hz == hw.DEFAULT_CPU_HZ
    assert settings.frames is None
    assert settings.keymap == hw.DEFAULT_KEYMAP
    assert settings.cycles_per_frame() == round(hw.DEFAULT_CPU_HZ / 60)


def test_update_keeps_unset():
    settings = RunSettings().update(cpu_hz=600, seed=None, headless=None)
    assert settings.cpu_hz == 600
    assert settings.seed is None
    assert settings.headless is False
    assert settings.cycles_per_frame() == 10


def test_update_unknown():
    with pytest.raises(ConfigError):
        RunSettings().update(turbo=True)


def test_slow_cpu_runs_at_least_one_cycle():
    assert RunSettings().update(cpu_hz=1).cycles_per_frame() == 1


def test_load(tmp_path):
    path = tmp_path / 'c8emu.toml'
    path.write_text('\n'.join([
        '[run]',
        'cpu_hz = 1200',
        'headless = true',
        'frames = 3',
        '',
        '[keymap]',
        'up = "5"',
        'Space = 0xA',
    ]))

    settings = RunSettings().load(path)
    assert settings.cpu_hz == 1200
    assert settings.headless is True
    assert settings.frames == 3
    assert settings.keymap == {'up': 0x5, 'space': 0xA}


@pytest.mark.parametrize('contents', [
    '[run]\nturbo = true\n',
    '[video]\nscale = 2\n',
    '[keymap]\nq = "G"\n',
    '[keymap]\nq = 16\n',
    'not toml at all [',
    '[run]\ncpu_hz = "fast"\n',
    '[run]\nscale = true\n',
    '[run]\nheadless = 1\n',
    '[run]\nframes = -1\n',
    '[run]\ncpu_hz = 0\n',
    'run = 5\n',
    'keymap = 3\n',
    '[[run]]\ncpu_hz = 600\n',
    '[keymap]\nq = true\n',
    '[keymap]\nq = 1.5\n',
])
def test_load_errors(tmp_path, contents):
    path = tmp_path / 'bad.toml'
    path.write_text(contents)

    with pytest.raises(ConfigError):
        RunSettings().load(path)


def test_load_missing(tmp_path):
    with pytest.raises(ConfigError):
        RunSettings().load(tmp_path / 'absent.toml')


def test_update_checks_types():
    with pytest.raises(ConfigError):
        RunSettings().update(frames='3')

    with pytest.raises(ConfigError):
        RunSettings().update(seed=False)

    assert RunSettings().update(headless=False).headless is False
