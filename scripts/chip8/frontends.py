import os
import sys

os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "no welcome message"   # this env var disable pygame's welcome message when imported
import pygame
from pygame.locals import (
    K_1, K_2, K_3, K_4,
    K_q, K_w, K_e, K_r,
    K_a, K_s, K_d, K_f,
    K_z, K_x, K_c, K_v,
)

from .display import SCREEN_HEIGHT, SCREEN_WIDTH
from .keypad import KEY_COUNT

# physical layout        CHIP-8 keypad
#   1 2 3 4                1 2 3 C
#   q w e r                4 5 6 D
#   a s d f                7 8 9 E
#   z x c v                A 0 B F
KEY_MAPPINGS = {
    K_1: 0x1, K_2: 0x2, K_3: 0x3, K_4: 0xC,
    K_q: 0x4, K_w: 0x5, K_e: 0x6, K_r: 0xD,
    K_a: 0x7, K_s: 0x8, K_d: 0x9, K_f: 0xE,
    K_z: 0xA, K_x: 0x0, K_c: 0xB, K_v: 0xF,
}

SCALE = 15
BLUE = pygame.Color(80,69,155,255)
LIGHT_BLUE = pygame.Color(136,126,203,255)
PIXEL_ON = "█"
PIXEL_OFF = " "
ANSI_CLEAR = "\x1b[2J\x1b[H"


# ******************** OUTPUT SECTION
class PygameScreen:
    def __init__(self, w=SCREEN_WIDTH, h=SCREEN_HEIGHT, s=SCALE, bg_color=BLUE, fg_color=LIGHT_BLUE, title="CHIP-8"):
        self.w, self.h, self.scale = w, h, s
        self.background = bg_color
        self.foreground = fg_color
        self.surface = pygame.display.set_mode((w * self.scale, h * self.scale))
        pygame.display.set_caption(title)
        self.surface.fill(self.background)

    def render(self, rows):
        """paint a framebuffer snapshot and flip it to the window"""
        self.surface.fill(self.background)
        for y, row in enumerate(rows):
            for x, on in enumerate(row):
                if on:
                    pygame.draw.rect(
                        self.surface,
                        self.foreground,
                        (x * self.scale, y * self.scale, self.scale, self.scale)
                    )
        pygame.display.flip()


class TerminalScreen:
    def __init__(self, stream=None):
        self.stream = stream if stream is not None else sys.stdout

    @staticmethod
    def frame(rows):
        return "\n".join("".join(PIXEL_ON if on else PIXEL_OFF for on in row) for row in rows)

    def render(self, rows):
        self.stream.write(ANSI_CLEAR + self.frame(rows) + "\n")
        self.stream.flush()


# ******************** INPUT SECTION
class PygameInput:
    """turns the pygame event queue into a 16 key snapshot, held keys stay down until released"""

    def __init__(self):
        self.states = [False] * KEY_COUNT
        self.quit = False

    def handle(self, event):
        if event.type == pygame.QUIT:
            self.quit = True
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.quit = True
            elif event.key in KEY_MAPPINGS:
                self.states[KEY_MAPPINGS[event.key]] = True
        elif event.type == pygame.KEYUP and event.key in KEY_MAPPINGS:
            self.states[KEY_MAPPINGS[event.key]] = False

    def poll(self):
        """return the current key states, None once the user asked to quit"""
        for event in pygame.event.get():
            self.handle(event)
        return None if self.quit else list(self.states)


class NullInput:
    """input source for the terminal renderer: every key is always up"""

    def poll(self):
        return [False] * KEY_COUNT
