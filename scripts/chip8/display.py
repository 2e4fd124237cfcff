SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32


class Framebuffer:
    """64x32 monochrome pixel grid, stored row-major (y * width + x)"""

    def __init__(self, w=SCREEN_WIDTH, h=SCREEN_HEIGHT):
        self.w, self.h = w, h
        self.buffer = [False] * h * w
        self.dirty = False      # set on every change, cleared by whoever renders the frame

    def __repr__(self):
        return f"Framebuffer({self.w}x{self.h}, lit={sum(self.buffer)})"

    def _index(self, x, y):
        if not (0 <= x < self.w and 0 <= y < self.h):
            raise IndexError(f"pixel ({x}, {y}) is outside a {self.w}x{self.h} screen")
        return y * self.w + x

    def get(self, x, y):
        """return True if pixel is ON, False if pixel is OFF"""
        return self.buffer[self._index(x, y)]

    def set(self, x, y, on):
        self.buffer[self._index(x, y)] = bool(on)
        self.dirty = True

    def clear(self):
        self.buffer = [False] * self.h * self.w
        self.dirty = True

    def snapshot(self):
        """copy of the grid as a list of rows, safe to hand to a renderer"""
        return [self.buffer[row * self.w:(row + 1) * self.w] for row in range(self.h)]
