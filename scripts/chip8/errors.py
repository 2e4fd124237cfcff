# ******************** ERRORS SECTION
class Chip8Error(Exception):
    """base class for every fatal condition raised by the interpreter"""


class LoadError(Chip8Error):
    pass


class RomTooLarge(LoadError):
    def __init__(self, size, available):
        self.size, self.available = size, available
        super().__init__(f"ROM is {size} bytes but only {available} bytes are available past 0x200")


class OutOfBounds(Chip8Error):
    def __init__(self, address):
        self.address = address
        super().__init__(f"memory access out of bounds at 0x{address:04x}")


class StackOverflow(Chip8Error):
    pass


class StackUnderflow(Chip8Error):
    pass


class UnknownOpcode(Chip8Error):
    def __init__(self, opcode, address):
        self.opcode, self.address = opcode, address
        super().__init__(f"unknown opcode 0x{opcode:04x} at 0x{address:04x}")
