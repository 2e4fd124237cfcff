import random
import sys
from functools import wraps

from . import opcodes as op
from .display import Framebuffer
from .errors import UnknownOpcode
from .keypad import Keypad
from .memory import ROM_START_ADDRESS, Memory, Stack
from .timers import Timers

RUNNING = "RUNNING"
AWAITING_KEY = "AWAITING_KEY"


# ******************** UTILITIES SECTION
def asm(msg):
    """decorator to print out the ASM of the instruction being executed when tracing is on"""
    def decorator(fn):
        @wraps(fn)
        def wrapper_fn(self, ins):
            fn(self, ins)
            if self.debug:
                print(f"mem_addr: 0x{self.last_addr:04x}    instruction: " + msg.format(**ins._asdict()))
        return wrapper_fn
    return decorator


def report_unknown(seen=None):
    """build the default diagnostic hook: report each distinct unknown opcode once on stderr"""
    seen = set() if seen is None else seen

    def hook(ins, address):
        if ins.opcode not in seen:
            seen.add(ins.opcode)
            print(f"warning: ignoring unknown opcode 0x{ins.opcode:04x} at 0x{address:04x}", file=sys.stderr)
    return hook


# ******************** CPU SECTION
class Chip8:
    def __init__(self, mem=None, screen=None, keypad=None, rng=random, strict=False, debug=False, on_unknown=None):
        self.mem = mem if mem is not None else Memory()
        self.screen = screen if screen is not None else Framebuffer()
        self.keypad = keypad if keypad is not None else Keypad()
        self.timers = Timers()
        self.stack = Stack()
        self.v_regs = [0] * 16
        self.pc = ROM_START_ADDRESS
        self.idx = 0    # specify where the sprites reside in memory
        self.state = RUNNING
        self.wait_register = None
        self.last_addr = ROM_START_ADDRESS
        self.rng = rng
        self.strict = strict
        self.debug = debug
        self.on_unknown = on_unknown if on_unknown is not None else report_unknown()
        self.instructions = {
            op.CLS: self._clear_screen,
            op.RET: self._return,
            op.JP: self._jump,
            op.CALL: self._call_addr,
            op.SE_BYTE: self._skip_if_eq,
            op.SNE_BYTE: self._skip_if_not_eq,
            op.SE_REG: self._skip_if_eq_regs,
            op.SNE_REG: self._skip_if_not_eq_regs,
            op.LD_BYTE: self._set_vk,
            op.ADD_BYTE: self._add_to_vk,
            op.LD_REG: self._set_vx_to_vy,
            op.OR: self._set_vx_or_vy,
            op.AND: self._set_vx_and_vy,
            op.XOR: self._set_vx_xor_vy,
            op.ADD_REG: self._add_vx_vy,
            op.SUB: self._sub_vx_vy,
            op.SHR: self._shr,
            op.SUBN: self._subn_vx_vy,
            op.SHL: self._shl,
            op.LD_I: self._set_idx,
            op.JP_V0: self._jump_plus,
            op.RND: self._random_byte_and,
            op.DRW: self._to_screen,
            op.SKP: self._skip_if_pressed,
            op.SKNP: self._skip_if_not_pressed,
            op.LD_VX_DT: self._set_vx_dt,
            op.LD_VX_K: self._wait_keypress,
            op.LD_DT: self._set_dt_vx,
            op.LD_ST: self._set_st,
            op.ADD_I: self._add_to_idx,
            op.LD_B: self._bcd_repr,
            op.LD_MEM_VX: self._store_vregs,
            op.LD_VX_MEM: self._load_vregs,
            # Fx29 (font glyph address) has no handler and goes through _unknown
        }

    def __str__(self):
        registers = f"PC_REGISTER:0x{self.pc:04x} | IDX_REGISTER:0x{self.idx:04x} | VARIABLE_REGISTERS:{self.v_regs}"
        stack = f"STACK:{self.stack}"
        flags = f"STATE:{self.state} | {self.timers} | {self.keypad}"
        return f"{registers}\n{stack}\n{flags}"

    @property
    def dt(self):
        return self.timers.dt

    @property
    def st(self):
        return self.timers.st

    # ********** FLOW CONTROL
    @asm("CLS")
    def _clear_screen(self, ins):
        self.screen.clear()

    @asm("RET")
    def _return(self, ins):
        """return from a subroutine"""
        self.pc = self.stack.pop()

    @asm("JP 0x{nnn:03x}")
    def _jump(self, ins):
        self.pc = ins.nnn

    @asm("CALL 0x{nnn:03x}")
    def _call_addr(self, ins):
        self.stack.append(self.pc)
        self.pc = ins.nnn

    @asm("JP V0, 0x{nnn:03x}")
    def _jump_plus(self, ins):
        self.pc = ins.nnn + self.v_regs[0x0]

    @asm("SE V{x:X}, {nn}")
    def _skip_if_eq(self, ins):
        if self.v_regs[ins.x] == ins.nn:
            self._goto_next_instruction()

    @asm("SNE V{x:X}, {nn}")
    def _skip_if_not_eq(self, ins):
        if self.v_regs[ins.x] != ins.nn:
            self._goto_next_instruction()

    @asm("SE V{x:X}, V{y:X}")
    def _skip_if_eq_regs(self, ins):
        if self.v_regs[ins.x] == self.v_regs[ins.y]:
            self._goto_next_instruction()

    @asm("SNE V{x:X}, V{y:X}")
    def _skip_if_not_eq_regs(self, ins):
        if self.v_regs[ins.x] != self.v_regs[ins.y]:
            self._goto_next_instruction()

    # ********** REGISTERS AND ALU
    @asm("LD V{x:X}, {nn}")
    def _set_vk(self, ins):
        """set the value of one of the 16 variable registers, Vx"""
        self.v_regs[ins.x] = ins.nn

    @asm("ADD V{x:X}, {nn}")
    def _add_to_vk(self, ins):
        """add to the value already present in Vx, VF is left alone"""
        self.v_regs[ins.x] = (self.v_regs[ins.x] + ins.nn) & 0xFF

    @asm("LD V{x:X}, V{y:X}")
    def _set_vx_to_vy(self, ins):
        self.v_regs[ins.x] = self.v_regs[ins.y]

    @asm("OR V{x:X}, V{y:X}")
    def _set_vx_or_vy(self, ins):
        self.v_regs[ins.x] |= self.v_regs[ins.y]

    @asm("AND V{x:X}, V{y:X}")
    def _set_vx_and_vy(self, ins):
        self.v_regs[ins.x] &= self.v_regs[ins.y]

    @asm("XOR V{x:X}, V{y:X}")
    def _set_vx_xor_vy(self, ins):
        self.v_regs[ins.x] ^= self.v_regs[ins.y]

    # the ALU ops below write VF last, so when x is F the flag is what survives
    @asm("ADD V{x:X}, V{y:X}")
    def _add_vx_vy(self, ins):
        """set Vx = Vx + Vy, VF = carry"""
        total = self.v_regs[ins.x] + self.v_regs[ins.y]
        self.v_regs[ins.x] = total & 0xFF
        self.v_regs[0xF] = 1 if total > 0xFF else 0

    @asm("SUB V{x:X}, V{y:X}")
    def _sub_vx_vy(self, ins):
        """set Vx = Vx - Vy, VF = NOT borrow"""
        vx, vy = self.v_regs[ins.x], self.v_regs[ins.y]
        self.v_regs[ins.x] = (vx - vy) & 0xFF
        self.v_regs[0xF] = 1 if vx >= vy else 0

    @asm("SUBN V{x:X}, V{y:X}")
    def _subn_vx_vy(self, ins):
        """set Vx = Vy - Vx, VF = NOT borrow"""
        vx, vy = self.v_regs[ins.x], self.v_regs[ins.y]
        self.v_regs[ins.x] = (vy - vx) & 0xFF
        self.v_regs[0xF] = 1 if vy >= vx else 0

    @asm("SHR V{x:X}")
    def _shr(self, ins):
        vx = self.v_regs[ins.x]
        self.v_regs[ins.x] = vx >> 1
        self.v_regs[0xF] = vx & 0x1

    @asm("SHL V{x:X}")
    def _shl(self, ins):
        vx = self.v_regs[ins.x]
        self.v_regs[ins.x] = (vx << 1) & 0xFF
        self.v_regs[0xF] = (vx >> 7) & 0x1

    @asm("RND V{x:X}, 0x{nn:02x}")
    def _random_byte_and(self, ins):
        self.v_regs[ins.x] = self.rng.randint(0, 255) & ins.nn

    # ********** INDEX REGISTER AND MEMORY
    @asm("LD I, 0x{nnn:03x}")
    def _set_idx(self, ins):
        self.idx = ins.nnn

    @asm("ADD I, V{x:X}")
    def _add_to_idx(self, ins):
        """set I = I + Vx, VF = 1 when I leaves the 12 bit address space"""
        total = self.idx + self.v_regs[ins.x]
        self.idx = total & 0xFFFF
        self.v_regs[0xF] = 1 if total > 0xFFF else 0

    @asm("LD B, V{x:X}")
    def _bcd_repr(self, ins):
        """hundreds digit of Vx in memory at I, the tens digit at I+1, the ones digit at I+2"""
        value = self.v_regs[ins.x]
        for offset, digit in enumerate((value // 100, (value // 10) % 10, value % 10)):
            self.mem.write8(self.idx + offset, digit)

    @asm("LD [I], V{x:X}")
    def _store_vregs(self, ins):
        """store registers V0 through Vx (included) in memory starting at location I"""
        for i in range(ins.x + 1):
            self.mem.write8(self.idx + i, self.v_regs[i])

    @asm("LD V{x:X}, [I]")
    def _load_vregs(self, ins):
        """read registers V0 through Vx (included) from memory starting at location I"""
        for i in range(ins.x + 1):
            self.v_regs[i] = self.mem.read8(self.idx + i)

    # ********** TIMERS AND KEYPAD
    @asm("LD V{x:X}, DT")
    def _set_vx_dt(self, ins):
        self.v_regs[ins.x] = self.timers.dt

    @asm("LD DT, V{x:X}")
    def _set_dt_vx(self, ins):
        self.timers.dt = self.v_regs[ins.x]

    @asm("LD ST, V{x:X}")
    def _set_st(self, ins):
        self.timers.st = self.v_regs[ins.x]

    @asm("SKP V{x:X}")
    def _skip_if_pressed(self, ins):
        """skip the following instruction if the key whose hex value is stored in Vx is pressed"""
        if self.keypad.is_down(self.v_regs[ins.x]):
            self._goto_next_instruction()

    @asm("SKNP V{x:X}")
    def _skip_if_not_pressed(self, ins):
        if not self.keypad.is_down(self.v_regs[ins.x]):
            self._goto_next_instruction()

    @asm("LD V{x:X}, K")
    def _wait_keypress(self, ins):
        """store the pressed key in Vx, or park the CPU until one is pressed"""
        self.wait_register = ins.x
        self.state = AWAITING_KEY
        self._poll_keypress()

    def _poll_keypress(self):
        key = self.keypad.first_down()
        if key is not None:
            self.v_regs[self.wait_register] = key
            self.wait_register = None
            self.state = RUNNING

    # ********** DISPLAY
    @asm("DRW V{x:X}, V{y:X}, {n}")
    def _to_screen(self, ins):
        """display n-byte sprite starting at memory location I at (Vx, Vy), set VF = collision"""
        x, y = self.v_regs[ins.x], self.v_regs[ins.y]
        collision = 0
        for i in range(ins.n):
            sprite_byte = self.mem.read8(self.idx + i)
            # sprites wrap around both screen edges
            y_coordinate = (y + i) % self.screen.h
            for j in range(8):
                if not (sprite_byte >> (7 - j)) & 0x1:
                    continue
                x_coordinate = (x + j) % self.screen.w
                # the only case when a pixel gets erased is when it was ON and is drawn again
                if self.screen.get(x_coordinate, y_coordinate):
                    collision = 1
                    self.screen.set(x_coordinate, y_coordinate, False)
                else:
                    self.screen.set(x_coordinate, y_coordinate, True)
        self.v_regs[0xF] = collision

    def _unknown(self, ins):
        if self.strict:
            raise UnknownOpcode(ins.opcode, self.last_addr)
        self.on_unknown(ins, self.last_addr)

    def _goto_next_instruction(self):
        self.pc += 0x2

    def fetch(self):
        """fetch the big-endian opcode at pc"""
        return self.mem.read16(self.pc)

    def execute(self, ins):
        self.instructions.get(ins.kind, self._unknown)(ins)

    def cycle(self):
        """emulate one machine cycle (fetch opcode, decode opcode, execute opcode)"""
        if self.state == AWAITING_KEY:
            self._poll_keypress()
            return
        self.last_addr = self.pc
        # each instruction is two bytes long and pc moves past it before execution
        opcode = self.fetch()
        self._goto_next_instruction()
        self.execute(op.decode(opcode))
