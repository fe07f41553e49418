from c8emu.runtime.peripheral import AudioSink


class Timers():
    ''' Delay and sound countdowns, advanced only by tick() '''
    delay: int
    sound: int

    def __init__(self, audio: AudioSink):
        self.audio = audio
        self.delay = 0
        self.sound = 0

    @property
    def sound_active(self) -> bool:
        return self.sound > 0

    def tick(self):
        if self.delay > 0:
            self.delay -= 1

        if self.sound > 0:
            self.sound -= 1

            if self.sound == 0:
                self.audio.beep()
