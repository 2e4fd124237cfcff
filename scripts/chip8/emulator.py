import argparse
import sys

import pygame

from . import frontends
from .cpu import Chip8
from .errors import Chip8Error, LoadError
from .timers import Pacer, TimerClock

CPU_HZ = 500


def get_args(argv=None):
    parser = argparse.ArgumentParser(prog="chip8", description="CHIP-8 interpreter")
    parser.add_argument("rom", help="input rom file")
    parser.add_argument("-r", "--renderer", choices=("pygame", "terminal"), default="pygame",
                        help="draw to a window or to the terminal")
    parser.add_argument("-s", "--scale", type=int, default=None, help="window pixels per CHIP-8 pixel")
    parser.add_argument("--hz", type=int, default=CPU_HZ, help="instructions executed per second")
    parser.add_argument("--strict", action="store_true", help="crash on unknown opcodes instead of skipping them")
    parser.add_argument("-d", "--debug", action="store_true", help="print every executed instruction")
    args = parser.parse_args(argv)
    if args.hz <= 0:
        parser.error("--hz must be positive")
    if args.scale is not None and args.scale <= 0:
        parser.error("--scale must be positive")
    return args


def run(chip, screen, inputs, hz=CPU_HZ, pacer=None, max_cycles=None):
    """
    host loop: sample keys, run one cycle, advance the 60Hz timers by the
    emulated time of that cycle, redraw when a frame is due and the screen changed.
    Stops when the input source reports quit or after max_cycles, returns the executed cycles.
    """
    clock = TimerClock(chip.timers)
    period = 1.0 / hz
    cycles = 0
    screen.render(chip.screen.snapshot())
    while max_cycles is None or cycles < max_cycles:
        keys = inputs.poll()
        if keys is None:
            break
        chip.keypad.refresh(keys)
        chip.cycle()
        cycles += 1
        if clock.advance(period) and chip.screen.dirty:
            chip.screen.dirty = False
            screen.render(chip.screen.snapshot())
        if pacer is not None:
            pacer.wait()
    return cycles


def build_frontend(args):
    if args.renderer == "terminal":
        return frontends.TerminalScreen(), frontends.NullInput()
    pygame.init()
    scale = args.scale if args.scale is not None else frontends.SCALE
    title = args.rom.replace("\\", "/").split("/")[-1]
    return frontends.PygameScreen(s=scale, title=title), frontends.PygameInput()


# ******************** ENTRY POINT SECTION
def main(argv=None):
    args = get_args(argv)
    chip = Chip8(strict=args.strict, debug=args.debug)
    try:
        chip.mem.load_rom(args.rom)
    except OSError as e:
        sys.exit(f"cannot read ROM {args.rom}: {e.strerror or e}")
    except LoadError as e:
        sys.exit(f"cannot load ROM {args.rom}: {e}")
    if args.debug:
        print(f"The ROM at path {args.rom} has been loaded successfully")
    screen, inputs = build_frontend(args)
    try:
        run(chip, screen, inputs, hz=args.hz, pacer=Pacer(args.hz))
    except KeyboardInterrupt:
        pass
    except Chip8Error as e:
        sys.exit(f"********** THE EMULATOR CRASHED ({e}) WITH THE FOLLOWING STATE\n{chip}")
    finally:
        if args.renderer == "pygame":
            pygame.quit()
