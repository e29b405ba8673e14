import os

PLACEHOLDER_BYTE = "xx"
PREFIX_SEPARATOR = " - "

# Longest possible x86 instruction.
MAX_INSTRUCTION_LENGTH = 15


def format_prefix(byte_array, last_byte, const_bytes=0):
    """
    Hex bytes up to and including `last_byte`, then one placeholder per
    unresolved constant byte, e.g. "00 04 25 xx xx xx xx - ".
    """
    tokens = [f"{b:02x}" for b in byte_array[: last_byte + 1]]
    tokens += [PLACEHOLDER_BYTE] * const_bytes
    return " ".join(tokens) + PREFIX_SEPARATOR


class OpcodeBuffer:
    """
    Instruction bytes under construction. `pos` points at the byte that is
    currently being enumerated, everything before it is fixed.
    """

    def __init__(self, length=MAX_INSTRUCTION_LENGTH):
        self.data = bytearray(length)
        self.pos = 0

    def reset(self, *opcode):
        for i in range(len(self.data)):
            self.data[i] = 0
        self.data[: len(opcode)] = bytes(opcode)
        self.pos = len(opcode)

    @property
    def current(self):
        return self.data[self.pos]

    @current.setter
    def current(self, value):
        self.data[self.pos] = value

    def push(self):
        self.pos += 1
        self.data[self.pos] = 0

    def pop(self):
        self.data[self.pos] = 0
        self.pos -= 1

    def prefix(self, const_bytes=0, last_byte=None):
        if last_byte is None:
            last_byte = self.pos
        return format_prefix(self.data, last_byte, const_bytes)

    def __bytes__(self):
        return bytes(self.data[: self.pos + 1])


def is_known_opcode_line(line):
    stripped = line.strip()
    return stripped != "" and not stripped.startswith("#")


def read_known_opcodes(filenames):
    """
    Read hand written reference lines, skipping blanks and `#` comments.
    """
    for filename in filenames:
        with open(filename) as file:
            for line in file:
                if is_known_opcode_line(line):
                    yield line.strip()


def find_corpus_files(directory):
    return sorted(
        os.path.join(directory, name)
        for name in os.listdir(directory)
        if name.endswith(".txt")
    )


def dump_lines(filename, lines):
    with open(filename, "w") as file:
        for line in lines:
            file.write(line + "\n")
