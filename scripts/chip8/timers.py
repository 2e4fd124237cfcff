import time

TIMER_HZ = 60


class Timers:
    """delay and sound countdown registers"""

    def __init__(self):
        self.dt = 0     # delay timer, active when non-zero
        self.st = 0     # sound timer, active when non-zero

    def __repr__(self):
        return f"Timers(dt={self.dt}, st={self.st})"

    def tick(self):
        if self.dt > 0:
            self.dt -= 1
        if self.st > 0:
            self.st -= 1

    @property
    def sound_active(self):
        return self.st > 0


class TimerClock:
    """
    accumulates elapsed emulated time and turns it into 60Hz timer ticks,
    regardless of how many CPU cycles ran in between
    """

    def __init__(self, timers, hz=TIMER_HZ):
        self.timers = timers
        self.period = 1.0 / hz
        self.elapsed = 0.0

    def advance(self, seconds):
        """feed elapsed time, tick the timers once per full period crossed and return how many ticks fired"""
        self.elapsed += seconds
        ticks = 0
        while self.elapsed >= self.period:
            self.elapsed -= self.period
            self.timers.tick()
            ticks += 1
        return ticks


class Pacer:
    """fixed-timestep throttle, each deadline is scheduled from the previous one rather than from now"""

    def __init__(self, hz, clock=time.perf_counter, sleep=time.sleep):
        self.period = 1.0 / hz
        self.clock, self.sleep = clock, sleep
        self.deadline = None

    def wait(self):
        now = self.clock()
        if self.deadline is None:
            self.deadline = now
        self.deadline += self.period
        if self.deadline > now:
            self.sleep(self.deadline - now)
        elif now - self.deadline > self.period:
            # fell too far behind (debugger, slow terminal...), resync instead of bursting
            self.deadline = now
