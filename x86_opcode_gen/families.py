"""
Instruction families covered by the generator and the order they are
emitted in.
"""

from .opcode_utils import OpcodeBuffer
from .registers import r8, r16, r32
from .walker import (
    EncodingSpaceWalker,
    MODE_INDIRECT,
    MODE_DISP8,
    MODE_DISP32,
    MODE_REGISTER,
    MODE_DISPLACEMENT,
    modrm_line_count,
    modrm_range,
    memory_operand_line_count,
)

UNDEFINED = "???"
IMMEDIATE_TOKEN = ", x"


class InstructionFamily:
    def __init__(self, opcode, mnemonic, undefined_opcodes):
        self.opcode = opcode
        self.mnemonic = mnemonic
        # Opcodes after the accumulator forms that don't belong to the family.
        self.undefined_opcodes = undefined_opcodes

    def __repr__(self):
        return f"InstructionFamily({self.opcode:02x}, {self.mnemonic})"


TWO_OPERAND_FAMILIES = (
    # 00 - 07
    InstructionFamily(0x00, "ADD", undefined_opcodes=2),
    # 08 - 0e, 0f is the two byte escape.
    InstructionFamily(0x08, "OR", undefined_opcodes=1),
)

# (register width, register operand is the destination) for op+0 .. op+3
MODRM_FORMS = (
    (8, False),
    (32, False),
    (8, True),
    (32, True),
)

# 0f 00 /reg
GROUP_0F00_OPCODE = (0x0F, 0x00)
GROUP_0F00_INSTRUCTIONS = ("SLDT", "STR", "LLDT", "LTR", "VERR", "VERW")
GROUP_0F00_MEM_TYPE = " word"
# SLDT and STR store into a 32-bit register, the rest read a selector.
GROUP_0F00_R32_COUNT = 2


def generate_two_operand_family(buffer, family):
    buffer.reset(family.opcode)
    walker = EncodingSpaceWalker(buffer)
    opcode_pos = buffer.pos - 1

    for width, reg_first in MODRM_FORMS:
        yield from walker.walk_modrm(family.mnemonic, width, reg_first)
        buffer.data[opcode_pos] += 1

    # op+4: al, imm8
    yield buffer.prefix(1, opcode_pos) + family.mnemonic + r8(0) + IMMEDIATE_TOKEN
    buffer.data[opcode_pos] += 1
    # op+5: eax, imm32
    yield buffer.prefix(4, opcode_pos) + family.mnemonic + r32(0) + IMMEDIATE_TOKEN
    buffer.data[opcode_pos] += 1

    for _ in range(family.undefined_opcodes):
        yield buffer.prefix(0, opcode_pos) + UNDEFINED
        buffer.data[opcode_pos] += 1


def generate_group_0f00(buffer):
    buffer.reset(*GROUP_0F00_OPCODE)
    walker = EncodingSpaceWalker(buffer)
    defined = len(GROUP_0F00_INSTRUCTIONS)

    for mode in (MODE_INDIRECT, MODE_DISP8, MODE_DISP32):
        for reg, mnemonic in enumerate(GROUP_0F00_INSTRUCTIONS):
            yield from walker.walk_memory_operand(
                mnemonic, reg, mode, GROUP_0F00_MEM_TYPE
            )
        for modrm in modrm_range(mode)[defined * 8 :]:
            buffer.current = modrm
            yield buffer.prefix() + UNDEFINED

    registers_r32 = GROUP_0F00_R32_COUNT * 8
    for i, modrm in enumerate(modrm_range(MODE_REGISTER)):
        buffer.current = modrm
        if i < registers_r32:
            yield buffer.prefix() + GROUP_0F00_INSTRUCTIONS[i // 8] + r32(i & 7)
        elif i < defined * 8:
            yield buffer.prefix() + GROUP_0F00_INSTRUCTIONS[i // 8] + r16(i & 7)
        else:
            yield buffer.prefix() + UNDEFINED


def generate_opcodes():
    """
    Every line of every family in byte order. Each call starts from a fresh
    buffer, so the sequence can be regenerated at will.
    """
    buffer = OpcodeBuffer()
    for family in TWO_OPERAND_FAMILIES:
        yield from generate_two_operand_family(buffer, family)
    yield from generate_group_0f00(buffer)


def expected_line_count(family):
    return len(MODRM_FORMS) * modrm_line_count() + 2 + family.undefined_opcodes


def expected_group_0f00_line_count():
    defined = len(GROUP_0F00_INSTRUCTIONS)
    per_mode = defined * memory_operand_line_count() + (8 - defined) * 8
    return len(MODE_DISPLACEMENT) * per_mode + 64


def expected_total_line_count():
    return (
        sum(expected_line_count(family) for family in TWO_OPERAND_FAMILIES)
        + expected_group_0f00_line_count()
    )
