KEY_COUNT = 16


class Keypad:
    """read-only (for the CPU) snapshot of the 16 hex keys, replaced wholesale by the host"""

    def __init__(self):
        self.states = [False] * KEY_COUNT

    def __repr__(self):
        return f"Keypad(down={[hex(k) for k in range(KEY_COUNT) if self.states[k]]})"

    def refresh(self, states):
        states = [bool(s) for s in states]
        if len(states) != KEY_COUNT:
            raise ValueError(f"expected {KEY_COUNT} key states, got {len(states)}")
        self.states = states

    def is_down(self, key):
        return self.states[key & 0xF]

    def first_down(self):
        """lowest numbered key currently down, None when the keypad is untouched"""
        for key, down in enumerate(self.states):
            if down:
                return key
        return None
