''' Narrow interfaces between the VM core and its host '''

from typing import Protocol, TYPE_CHECKING
import logging as lg

if TYPE_CHECKING:
    from c8emu.runtime.display import Frame


class DisplaySink(Protocol):
    def present(self, frame: 'Frame') -> None:
        ...


class AudioSink(Protocol):
    def beep(self) -> None:
        ...


class InputSource(Protocol):
    def set_key(self, index: int, down: bool) -> None:
        ...


class Host(DisplaySink, AudioSink, Protocol):
    def pump(self, keys: InputSource) -> bool:
        ''' Feed pending input events into keys; False when the user quits '''
        ...

    def close(self) -> None:
        ...


class NullDisplay:
    def present(self, frame: 'Frame') -> None:
        pass


class LogAudio:
    def __init__(self):
        self.beeps = 0

    def beep(self) -> None:
        self.beeps += 1
        lg.info('BEEP')

