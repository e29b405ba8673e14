"""
Enumerates the ModRM / SIB encoding space of a single opcode.

The walker mutates a shared `OpcodeBuffer` in place. The cursor sits on the
ModRM byte when a walk starts and is moved one byte further while a SIB byte
is enumerated, so the prefix of every emitted line is exactly the bytes that
select the encoding.
"""

from .addressing import AddrExt, format_address, format_register_address, NO_INDEX
from .registers import RIP_INDEX, register_operand

MODE_INDIRECT = 0
MODE_DISP8 = 1
MODE_DISP32 = 2
MODE_REGISTER = 3

# Displacement bytes that follow the ModRM / SIB bytes for each memory mode.
MODE_DISPLACEMENT = {MODE_INDIRECT: 0, MODE_DISP8: 1, MODE_DISP32: 4}

SIB_RM = 4
RIP_RELATIVE_RM = 5


def modrm_fields(modrm):
    return modrm >> 6, (modrm >> 3) & 7, modrm & 7


def sib_fields(sib):
    """
    Returns (base, index, scale_shift).
    """
    return sib & 7, (sib >> 3) & 7, sib >> 6


def modrm_range(mode):
    return range(mode << 6, (mode + 1) << 6)


class EncodingSpaceWalker:
    def __init__(self, buffer):
        self.buffer = buffer

    def walk_address(self, mode, rm):
        """
        Yields (prefix, operand) for every memory encoding of the ModRM byte
        currently under the cursor. Enters the SIB byte for r/m=4.
        """
        buffer = self.buffer
        const_bytes = MODE_DISPLACEMENT[mode]

        if rm == SIB_RM:
            if mode == MODE_INDIRECT:
                ext = AddrExt(rbp_base_becomes_disp32=True, rsp_index_is_absent=True)
            else:
                ext = AddrExt.for_displacement(const_bytes, rsp_index_is_absent=True)

            buffer.push()
            for sib in range(256):
                buffer.current = sib
                base, index, scale_shift = sib_fields(sib)
                yield (
                    buffer.prefix(ext.displacement_bytes(base)),
                    format_address(base, index, scale_shift, ext),
                )
            buffer.pop()
            return

        if mode == MODE_INDIRECT:
            if rm == RIP_RELATIVE_RM:
                ext = AddrExt(rbp_base_becomes_disp32=True)
                yield buffer.prefix(4), format_address(rm, RIP_INDEX, 0, ext)
            else:
                yield buffer.prefix(), format_register_address(rm)
            return

        ext = AddrExt.for_displacement(const_bytes, rsp_index_is_absent=True)
        yield buffer.prefix(const_bytes), format_address(rm, NO_INDEX, 0, ext)

    def walk_modrm(self, mnemonic, width, reg_first=False):
        """
        All 256 ModRM values of a two operand instruction with `width` bit
        register operands. With `reg_first` the register is the
        destination (e.g. 02 /r: ADD r8, r/m8).
        """
        buffer = self.buffer

        def line(prefix, rm_text, reg_text):
            if reg_first:
                return prefix + mnemonic + reg_text + "," + rm_text
            return prefix + mnemonic + rm_text + "," + reg_text

        for mode in (MODE_INDIRECT, MODE_DISP8, MODE_DISP32):
            for modrm in modrm_range(mode):
                buffer.current = modrm
                _, reg, rm = modrm_fields(modrm)
                reg_text = register_operand(width, reg)
                for prefix, address in self.walk_address(mode, rm):
                    yield line(prefix, address, reg_text)

        for modrm in modrm_range(MODE_REGISTER):
            buffer.current = modrm
            _, reg, rm = modrm_fields(modrm)
            yield line(
                buffer.prefix(),
                register_operand(width, rm),
                register_operand(width, reg),
            )

    def walk_memory_operand(self, mnemonic, reg, mode, mem_type=""):
        """
        The 8 r/m values of a single operand memory instruction selected by
        the ModRM reg field. Register direct encodings are left to the caller.
        """
        buffer = self.buffer
        assert mode != MODE_REGISTER
        for rm in range(8):
            buffer.current = (mode << 6) | (reg << 3) | rm
            for prefix, address in self.walk_address(mode, rm):
                yield prefix + mnemonic + mem_type + address


def modrm_line_count():
    count = 0
    for mode in (MODE_INDIRECT, MODE_DISP8, MODE_DISP32):
        for modrm in modrm_range(mode):
            count += 256 if modrm & 7 == SIB_RM else 1
    return count + len(modrm_range(MODE_REGISTER))


def memory_operand_line_count():
    return 7 + 256
