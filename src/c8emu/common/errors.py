class EmulatorError(Exception):
    pass


class RomLoadError(EmulatorError):
    pass


class RomTooLarge(RomLoadError):
    def __init__(self, size: int, limit: int):
        super().__init__(f'ROM is {size} bytes, at most {limit} fit')
        self.size = size
        self.limit = limit


class UnsupportedOpcode(EmulatorError):
    def __init__(self, opcode: int, addr: int):
        super().__init__(f'Unsupported opcode 0x{opcode:04X} at 0x{addr:03X}')
        self.opcode = opcode
        self.addr = addr


class Fault(EmulatorError):
    ''' Fatal VM condition, execution cannot continue '''
    pass


class StackOverflow(Fault):
    pass


class StackUnderflow(Fault):
    pass


class ConfigError(EmulatorError):
    pass
