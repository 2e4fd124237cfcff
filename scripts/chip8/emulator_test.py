import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

import pygame

from chip8.cpu import Chip8
from chip8.emulator import get_args, main, run
from chip8.frontends import ANSI_CLEAR, NullInput, PygameInput, TerminalScreen
from chip8.memory import load


class RecordingScreen:
    def __init__(self):
        self.frames = []

    def render(self, rows):
        self.frames.append(rows)


class ScriptedInput:
    """hands out the given key snapshots, then reports quit"""

    def __init__(self, snapshots):
        self.snapshots = list(snapshots)

    def poll(self):
        return self.snapshots.pop(0) if self.snapshots else None


class CountingPacer:
    def __init__(self):
        self.waits = 0

    def wait(self):
        self.waits += 1


def rom_chip(*words):
    return Chip8(mem=load(b"".join(w.to_bytes(2, "big") for w in words)))


class TestRun(unittest.TestCase):
    def test_jump_to_self_forever(self):
        chip = rom_chip(0x6005, 0x1200)
        cycles = run(chip, RecordingScreen(), NullInput(), max_cycles=1000)
        self.assertEqual(cycles, 1000)
        self.assertEqual((chip.v_regs[0], chip.pc), (5, 0x200))

    def test_stops_when_input_quits(self):
        chip = rom_chip(0x1200)
        pacer = CountingPacer()
        cycles = run(chip, RecordingScreen(), ScriptedInput([[False] * 16] * 3), pacer=pacer)
        self.assertEqual((cycles, pacer.waits), (3, 3))

    def test_keys_reach_the_cpu(self):
        # wait for a key, then spin
        chip = rom_chip(0xF30A, 0x1202)
        pressed = [k == 0x9 for k in range(16)]
        run(chip, RecordingScreen(), ScriptedInput([[False] * 16] * 4 + [pressed]))
        self.assertEqual(chip.v_regs[3], 0x9)

    def test_timers_follow_emulated_time(self):
        # LD V1, 60 / LD DT, V1 / JP 0x204
        chip = rom_chip(0x613C, 0xF115, 0x1204)
        run(chip, RecordingScreen(), NullInput(), hz=600, max_cycles=2 + 300)
        # 300 cycles at 600Hz are half a second, 30 ticks at 60Hz, give or take the boundary
        self.assertIn(chip.dt, (29, 30, 31))

    def test_renders_only_when_dirty(self):
        # LD I, 0x300 / DRW V0, V0, 1 / JP 0x204
        chip = rom_chip(0xA300, 0xD001, 0x1204)
        chip.mem.write8(0x300, 0x80)
        screen = RecordingScreen()
        run(chip, screen, NullInput(), hz=60, max_cycles=10)
        self.assertEqual(len(screen.frames), 2)     # the initial frame plus the one after the draw
        self.assertTrue(screen.frames[-1][0][0])


class TestFrontends(unittest.TestCase):
    def test_terminal_frame(self):
        out = io.StringIO()
        TerminalScreen(out).render([[True, False, True], [False, True, False]])
        self.assertEqual(out.getvalue(),
                         ANSI_CLEAR + "█ █\n █ \n")

    def test_pygame_input_layout(self):
        inputs = PygameInput()
        inputs.handle(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_4))
        inputs.handle(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_x))
        inputs.handle(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_v))
        self.assertEqual([k for k, down in enumerate(inputs.states) if down],
                         [0x0, 0xC, 0xF])
        inputs.handle(pygame.event.Event(pygame.KEYUP, key=pygame.K_x))
        self.assertFalse(inputs.states[0x0])
        self.assertFalse(inputs.quit)

    def test_pygame_input_quit(self):
        inputs = PygameInput()
        inputs.handle(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
        self.assertTrue(inputs.quit)


class TestMain(unittest.TestCase):
    def write_rom(self, data):
        fd, path = tempfile.mkstemp(suffix=".ch8")
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        self.addCleanup(os.remove, path)
        return path

    def test_args(self):
        args = get_args(["pong.ch8", "--renderer", "terminal", "--hz", "700", "--strict"])
        self.assertEqual((args.rom, args.renderer, args.hz, args.strict, args.debug),
                         ("pong.ch8", "terminal", 700, True, False))

    def test_missing_rom(self):
        with self.assertRaises(SystemExit) as ctx:
            main(["/nonexistent/definitely/missing.ch8", "-r", "terminal"])
        self.assertIn("cannot read ROM", str(ctx.exception.code))

    def test_rom_too_large(self):
        path = self.write_rom(b"\x00" * 4000)
        with self.assertRaises(SystemExit) as ctx:
            main([path, "-r", "terminal"])
        self.assertIn("cannot load ROM", str(ctx.exception.code))

    def test_crash_dumps_state(self):
        path = self.write_rom(b"\x00\xEE")
        with redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main([path, "-r", "terminal"])
        self.assertIn("THE EMULATOR CRASHED", str(ctx.exception.code))
        self.assertIn("PC_REGISTER:0x0202", str(ctx.exception.code))


if __name__ == "__main__":
    unittest.main()
