REGISTERS_R8 = ("al", "cl", "dl", "bl", "ah", "ch", "dh", "bh")
REGISTERS_R16 = ("ax", "cx", "dx", "bx", "sp", "bp", "si", "di")
REGISTERS_R32 = ("eax", "ecx", "edx", "ebx", "esp", "ebp", "esi", "edi")

# 64-bit addressing registers, the instruction pointer is only reachable
# through the mode-00 r/m=5 encoding.
REGISTERS_R64 = (
    "rax",
    "rcx",
    "rdx",
    "rbx",
    "rsp",
    "rbp",
    "rsi",
    "rdi",
    "r8",
    "r9",
    "r10",
    "r11",
    "r12",
    "r13",
    "r14",
    "r15",
    "rip",
)
RIP_INDEX = 16

REGISTER_TABLES = {
    8: REGISTERS_R8,
    16: REGISTERS_R16,
    32: REGISTERS_R32,
    64: REGISTERS_R64,
}


def register_name(width, index):
    return REGISTER_TABLES[width][index]


def register_operand(width, index):
    """
    Register operand with its leading space, e.g. " al".
    """
    return " " + register_name(width, index)


def r8(index):
    return register_operand(8, index)


def r16(index):
    return register_operand(16, index)


def r32(index):
    return register_operand(32, index)
