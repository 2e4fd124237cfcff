import unittest

from chip8.keypad import Keypad


class TestKeypad(unittest.TestCase):
    def test_refresh_replaces_every_key(self):
        k = Keypad()
        k.refresh([i == 0xA for i in range(16)])
        self.assertTrue(k.is_down(0xA))
        self.assertEqual(k.first_down(), 0xA)
        k.refresh([False] * 16)
        self.assertFalse(k.is_down(0xA))
        self.assertIsNone(k.first_down())

    def test_first_down_is_lowest(self):
        k = Keypad()
        k.refresh([i in (3, 9) for i in range(16)])
        self.assertEqual(k.first_down(), 3)

    def test_wrong_size(self):
        with self.assertRaises(ValueError):
            Keypad().refresh([True] * 15)


if __name__ == "__main__":
    unittest.main()
