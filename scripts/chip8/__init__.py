from .cpu import AWAITING_KEY, RUNNING, Chip8
from .display import Framebuffer
from .errors import (
    Chip8Error, LoadError, OutOfBounds, RomTooLarge,
    StackOverflow, StackUnderflow, UnknownOpcode,
)
from .keypad import Keypad
from .memory import Memory, Stack, load
from .opcodes import Instruction, decode
from .timers import TimerClock, Timers
