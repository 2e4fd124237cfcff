import unittest

from chip8.errors import OutOfBounds, RomTooLarge, StackOverflow, StackUnderflow
from chip8.memory import ROM_START_ADDRESS, Memory, Stack, load


class TestMemory(unittest.TestCase):
    def test_load_places_rom_at_0x200(self):
        mem = load(b"\x60\x05\x12\x00")
        self.assertEqual(mem.inner[ROM_START_ADDRESS:ROM_START_ADDRESS+4],
                         bytearray(b"\x60\x05\x12\x00"))
        self.assertEqual(sum(mem.inner[:ROM_START_ADDRESS]), 0)
        self.assertEqual(sum(mem.inner[ROM_START_ADDRESS+4:]), 0)

    def test_load_largest_rom(self):
        mem = load(b"\xAA" * (4096 - 512))
        self.assertEqual(mem.read8(4095), 0xAA)

    def test_load_too_large(self):
        with self.assertRaises(RomTooLarge) as ctx:
            load(b"\x00" * (4096 - 512 + 1))
        self.assertEqual(ctx.exception.size, 3585)
        self.assertEqual(ctx.exception.available, 3584)

    def test_read16_is_big_endian(self):
        mem = load(b"\xD1\x2A")
        self.assertEqual(mem.read16(ROM_START_ADDRESS),
                         0xD12A)

    def test_write8_then_read8(self):
        mem = Memory()
        mem.write8(0x300, 0x7F)
        self.assertEqual(mem.read8(0x300), 0x7F)

    def test_out_of_bounds(self):
        mem = Memory()
        with self.assertRaises(OutOfBounds):
            mem.read8(4096)
        with self.assertRaises(OutOfBounds):
            mem.write8(4096, 1)
        with self.assertRaises(OutOfBounds):
            mem.read8(-1)
        with self.assertRaises(OutOfBounds) as ctx:
            mem.read16(4095)
        self.assertEqual(ctx.exception.address, 4096)

    def test_load_rom_missing_file(self):
        with self.assertRaises(OSError):
            Memory().load_rom("/nonexistent/definitely/missing.ch8")


class TestStack(unittest.TestCase):
    def test_lifo(self):
        s = Stack()
        s.append(0x202)
        s.append(0x304)
        self.assertEqual(s.pop(), 0x304)
        self.assertEqual(s.pop(), 0x202)

    def test_overflow(self):
        s = Stack()
        for addr in range(16):
            s.append(addr)
        with self.assertRaises(StackOverflow):
            s.append(0x200)
        self.assertEqual(len(s), 16)

    def test_underflow(self):
        with self.assertRaises(StackUnderflow):
            Stack().pop()


if __name__ == "__main__":
    unittest.main()
