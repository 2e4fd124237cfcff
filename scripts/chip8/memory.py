from .errors import OutOfBounds, RomTooLarge, StackOverflow, StackUnderflow

MEMORY_SIZE = 4096
ROM_START_ADDRESS = 0x200
STACK_DEPTH = 16


# ********** WRAPS A LIST TO REPRESENT A STACK WITH A LIMITED SIZE OF 16 ADDRESSES
class Stack:
    def __init__(self, depth=STACK_DEPTH):
        self.addr_list = []
        self.depth = depth

    def __len__(self):
        return len(self.addr_list)

    def __repr__(self):
        return f"Stack({[hex(a) for a in self.addr_list]})"

    def append(self, address):
        if len(self.addr_list) >= self.depth:
            raise StackOverflow(f"The CHIP-8 stack can contain at most {self.depth} addresses. Limit exceeded")
        self.addr_list.append(address)

    def pop(self):
        if not self.addr_list:
            raise StackUnderflow("Tried to return from a subroutine with an empty stack")
        return self.addr_list.pop()


# ********** WRAPS A BYTEARRAY TO REPRESENT THE MAIN MEMORY WITH A LIMITED SIZE OF 4KB
class Memory:
    def __init__(self, size=MEMORY_SIZE):
        self.inner = bytearray(size)

    def __len__(self):
        return len(self.inner)

    def _check(self, address):
        if not 0 <= address < len(self.inner):
            raise OutOfBounds(address)

    def read8(self, address: int) -> int:
        self._check(address)
        return self.inner[address]

    def read16(self, address: int) -> int:
        """read a big-endian word, both bytes must be addressable"""
        self._check(address)
        self._check(address + 1)
        return self.inner[address] << 8 | self.inner[address + 1]

    def write8(self, address: int, value: int):
        self._check(address)
        self.inner[address] = value & 0xFF

    def load(self, rom: bytes):
        """copy the ROM verbatim starting at 0x200, the rest of memory is left untouched"""
        available = len(self.inner) - ROM_START_ADDRESS
        if len(rom) > available:
            raise RomTooLarge(len(rom), available)
        self.inner[ROM_START_ADDRESS:ROM_START_ADDRESS+len(rom)] = rom

    def load_rom(self, path):
        """load ROM file from user specified path, OSError is left to the caller"""
        with open(path, mode='rb') as f:
            rom = f.read()
        self.load(rom)


def load(rom: bytes) -> Memory:
    """build a zeroed memory image holding the given ROM"""
    mem = Memory()
    mem.load(rom)
    return mem
