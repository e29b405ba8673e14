from x86_opcode_gen.line_parser import LineParser
from x86_opcode_gen.opcode_utils import OpcodeBuffer, format_prefix
from x86_opcode_gen.walker import (
    EncodingSpaceWalker,
    MODE_DISP8,
    MODE_DISP32,
    MODE_INDIRECT,
    modrm_line_count,
    memory_operand_line_count,
    sib_fields,
)


def _walk(opcode, width, reg_first=False):
    buffer = OpcodeBuffer()
    buffer.reset(opcode)
    return list(EncodingSpaceWalker(buffer).walk_modrm("ADD", width, reg_first))


def _by_opcode(lines):
    return {LineParser.parseOpcode(line): line for line in lines}


def test_format_prefix() -> None:
    data = bytearray([0x00, 0x04, 0x25, 0x00])
    assert format_prefix(data, 2) == "00 04 25 - "
    assert format_prefix(data, 2, 4) == "00 04 25 xx xx xx xx - "
    assert format_prefix(data, 0, 1) == "00 xx - "


def test_buffer_cursor() -> None:
    buffer = OpcodeBuffer()
    buffer.reset(0x0F, 0x00)
    assert buffer.pos == 2
    buffer.current = 0x04
    buffer.push()
    buffer.current = 0x25
    assert bytes(buffer) == b"\x0f\x00\x04\x25"
    buffer.pop()
    assert buffer.pos == 2
    assert buffer.data[3] == 0


def test_sib_fields() -> None:
    assert sib_fields(0x25) == (5, 4, 0)
    assert sib_fields(0x8D) == (5, 1, 2)


def test_first_line() -> None:
    lines = _walk(0x00, 8)
    assert lines[0] == "00 00 - ADD [rax], al"
    assert lines[0].endswith(" [rax]," + " al")


def test_line_count() -> None:
    assert modrm_line_count() == 6376
    assert len(_walk(0x00, 8)) == 6376
    assert memory_operand_line_count() == 263


def test_mode00_special_cases() -> None:
    lines = _by_opcode(_walk(0x00, 8))
    assert lines[bytes.fromhex("00 04 00")] == "00 04 00 - ADD [rax + rax], al"
    assert lines[bytes.fromhex("00 04 25")] == "00 04 25 xx xx xx xx - ADD [x], al"
    assert lines[bytes.fromhex("00 04 8d")] == "00 04 8d xx xx xx xx - ADD [rcx * 4 + x], al"
    assert lines[bytes.fromhex("00 04 4c")] == "00 04 4c - ADD [rsp + rcx * 2], al"
    assert lines[bytes.fromhex("00 05")] == "00 05 xx xx xx xx - ADD [rip + x], al"
    assert lines[bytes.fromhex("00 0c e0")] == "00 0c e0 - ADD [rax], cl"


def test_disp_modes() -> None:
    lines = _by_opcode(_walk(0x01, 32))
    assert lines[bytes.fromhex("01 45")] == "01 45 xx - ADD [rbp + x], eax"
    assert lines[bytes.fromhex("01 44 65")] == "01 44 65 xx - ADD [rbp + x], eax"
    assert lines[bytes.fromhex("01 44 24")] == "01 44 24 xx - ADD [rsp + x], eax"
    assert lines[bytes.fromhex("01 84 25")] == "01 84 25 xx xx xx xx - ADD [rbp + x], eax"
    assert lines[bytes.fromhex("01 bf")] == "01 bf xx xx xx xx - ADD [rdi + x], edi"


def test_register_direct() -> None:
    lines = _by_opcode(_walk(0x00, 8))
    assert lines[bytes.fromhex("00 c1")] == "00 c1 - ADD cl, al"
    assert lines[bytes.fromhex("00 ff")] == "00 ff - ADD bh, bh"

    lines = _by_opcode(_walk(0x03, 32, reg_first=True))
    assert lines[bytes.fromhex("03 c1")] == "03 c1 - ADD eax, ecx"
    assert lines[bytes.fromhex("03 00")] == "03 00 - ADD eax, [rax]"


def test_walk_order_follows_bytes() -> None:
    opcodes = [LineParser.parseOpcode(line) for line in _walk(0x00, 8)]
    assert all(a < b for a, b in zip(opcodes, opcodes[1:]))


def test_memory_operand_walk() -> None:
    buffer = OpcodeBuffer()
    buffer.reset(0x0F, 0x00)
    walker = EncodingSpaceWalker(buffer)

    lines = list(walker.walk_memory_operand("STR", 1, MODE_INDIRECT, " word"))
    assert len(lines) == 263
    assert lines[0] == "0f 00 08 - STR word [rax]"
    assert lines[-1] == "0f 00 0f - STR word [rdi]"
    assert "0f 00 0c 25 xx xx xx xx - STR word [x]" in lines
    assert "0f 00 0d xx xx xx xx - STR word [rip + x]" in lines

    lines = list(walker.walk_memory_operand("STR", 1, MODE_DISP8, " word"))
    assert lines[0] == "0f 00 48 xx - STR word [rax + x]"
    assert "0f 00 4d xx - STR word [rbp + x]" in lines

    lines = list(walker.walk_memory_operand("STR", 1, MODE_DISP32, " word"))
    assert "0f 00 8c 25 xx xx xx xx - STR word [rbp + x]" in lines
    assert all("???" not in line for line in lines)
