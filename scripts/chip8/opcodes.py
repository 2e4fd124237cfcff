from collections import namedtuple

# ********** INSTRUCTION KINDS
CLS, RET = "CLS", "RET"
JP, CALL, JP_V0 = "JP", "CALL", "JP_V0"
SE_BYTE, SNE_BYTE, SE_REG, SNE_REG = "SE_BYTE", "SNE_BYTE", "SE_REG", "SNE_REG"
LD_BYTE, ADD_BYTE = "LD_BYTE", "ADD_BYTE"
LD_REG, OR, AND, XOR = "LD_REG", "OR", "AND", "XOR"
ADD_REG, SUB, SHR, SUBN, SHL = "ADD_REG", "SUB", "SHR", "SUBN", "SHL"
LD_I, RND, DRW = "LD_I", "RND", "DRW"
SKP, SKNP = "SKP", "SKNP"
LD_VX_DT, LD_VX_K, LD_DT, LD_ST = "LD_VX_DT", "LD_VX_K", "LD_DT", "LD_ST"
ADD_I, LD_F, LD_B, LD_MEM_VX, LD_VX_MEM = "ADD_I", "LD_F", "LD_B", "LD_MEM_VX", "LD_VX_MEM"
UNKNOWN = "UNKNOWN"

# WATCH OUT: masks order is important!!!
# the first mask whose masked opcode matches one of its patterns wins
MASKS = (
    (0xF0FF, {
        0xE09E: SKP, 0xE0A1: SKNP,
        0xF007: LD_VX_DT, 0xF00A: LD_VX_K, 0xF015: LD_DT, 0xF018: LD_ST,
        0xF01E: ADD_I, 0xF029: LD_F, 0xF033: LD_B, 0xF055: LD_MEM_VX, 0xF065: LD_VX_MEM,
    }),
    (0xF00F, {
        0x5000: SE_REG, 0x9000: SNE_REG,
        0x8000: LD_REG, 0x8001: OR, 0x8002: AND, 0x8003: XOR,
        0x8004: ADD_REG, 0x8005: SUB, 0x8006: SHR, 0x8007: SUBN, 0x800E: SHL,
    }),
    (0xF000, {
        0x1000: JP, 0x2000: CALL, 0x3000: SE_BYTE, 0x4000: SNE_BYTE,
        0x6000: LD_BYTE, 0x7000: ADD_BYTE, 0xA000: LD_I, 0xB000: JP_V0,
        0xC000: RND, 0xD000: DRW,
    }),
    (0xFFFF, {0x00E0: CLS, 0x00EE: RET}),
)


class Instruction(namedtuple("Instruction", "kind opcode x y n nn nnn")):
    """a decoded opcode: its kind plus every operand field, whether the kind uses it or not"""
    __slots__ = ()

    def __repr__(self):
        return f"Instruction({self.kind}, 0x{self.opcode:04x})"


def fields(opcode):
    """split an opcode into its (x, y, n, nn, nnn) operand fields"""
    return (
        (opcode & 0x0F00) >> 8,
        (opcode & 0x00F0) >> 4,
        opcode & 0x000F,
        opcode & 0x00FF,
        opcode & 0x0FFF,
    )


def decode(opcode):
    """decode opcodes using masks and return the tagged instruction"""
    kind = UNKNOWN
    for mask, patterns in MASKS:
        if (opcode & mask) in patterns:
            kind = patterns[opcode & mask]
            break
    return Instruction(kind, opcode, *fields(opcode))
