"""
Parser for generated / hand written opcode lines such as

    00 44 25 xx - ADD [rbp + x], al
"""

import re

from .opcode_utils import PLACEHOLDER_BYTE, PREFIX_SEPARATOR

p_LinePattern = re.compile(
    r"^(?P<Bytes>[0-9a-f]{2}(?: [0-9a-f]{2})*)(?P<Consts>(?: xx)*) - (?P<Text>.*)$"
)

p_TextPattern = re.compile(r"^(?P<Op>[A-Z?]+)(?P<Operands>.*)$")

# Hand written lines, the prefix is taken as is up to the first " - ".
p_SplitPattern = re.compile(r"^(?P<Prefix>.*? - )(?P<Op>\S+\s+)(?P<Operands>.*)$")


class OpcodeLine:
    def __init__(self, opcode, const_bytes, mnemonic, operands):
        self.opcode = opcode
        self.const_bytes = const_bytes
        self.mnemonic = mnemonic
        self.operands = operands

    def is_undefined(self):
        return self.mnemonic == "???"

    def format_prefix(self):
        tokens = [f"{b:02x}" for b in self.opcode] + [PLACEHOLDER_BYTE] * self.const_bytes
        return " ".join(tokens) + PREFIX_SEPARATOR

    def __str__(self):
        text = self.mnemonic
        if self.operands:
            text += " " + ", ".join(self.operands)
        return self.format_prefix() + text

    def __repr__(self):
        return f"OpcodeLine({str(self)!r})"


class LineParser:
    @classmethod
    def parseLine(cls, line):
        line = line.strip()
        match = p_LinePattern.match(line)
        if not match:
            raise ValueError(f"Not an opcode line: {line!r}")

        opcode = bytes.fromhex(match.group("Bytes").replace(" ", ""))
        const_bytes = match.group("Consts").count(PLACEHOLDER_BYTE)

        text = match.group("Text")
        text_match = p_TextPattern.match(text)
        if not text_match:
            raise ValueError(f"Unknown mnemonic in {line!r}")
        operands = text_match.group("Operands").strip()
        operands = [op.strip() for op in operands.split(",")] if operands else []
        return OpcodeLine(opcode, const_bytes, text_match.group("Op"), operands)

    @classmethod
    def splitLine(cls, line):
        """
        Loose split into (prefix, mnemonic, operands). Prefix and mnemonic keep
        their original spelling and trailing separator.
        """
        match = p_SplitPattern.match(line)
        if not match:
            raise ValueError(f"Not an opcode line: {line!r}")
        operands = [op.strip() for op in match.group("Operands").split(",")]
        return match.group("Prefix"), match.group("Op"), operands

    @classmethod
    def parseOpcode(cls, line):
        """
        Only the fixed bytes of the line, for ordering checks.
        """
        return cls.parseLine(line).opcode
