"""
Memory operand text for ModRM/SIB addressing.
"""

from .registers import REGISTERS_R64

# Stands in for displacement values, only the structure of the operand matters.
DISPLACEMENT_TOKEN = "x"

# SIB slots with a special meaning.
NO_INDEX = 4
NO_BASE = 5


class AddrExt:
    """
    Modifiers for `format_address`.

    has_disp8 / has_disp32: append a 1 or 4 byte displacement.
    rbp_base_becomes_disp32: base slot 5 means "no base, disp32" (mode-00 SIB).
    rsp_index_is_absent: index slot 4 means "no index".
    """

    __slots__ = (
        "has_disp8",
        "has_disp32",
        "rbp_base_becomes_disp32",
        "rsp_index_is_absent",
    )

    def __init__(
        self,
        has_disp8=False,
        has_disp32=False,
        rbp_base_becomes_disp32=False,
        rsp_index_is_absent=False,
    ):
        if has_disp8 and has_disp32:
            raise ValueError("AddrExt can't have both a disp8 and a disp32")
        self.has_disp8 = has_disp8
        self.has_disp32 = has_disp32
        self.rbp_base_becomes_disp32 = rbp_base_becomes_disp32
        self.rsp_index_is_absent = rsp_index_is_absent

    @classmethod
    def for_displacement(cls, const_bytes, **kwargs):
        if const_bytes == 1:
            return cls(has_disp8=True, **kwargs)
        if const_bytes == 4:
            return cls(has_disp32=True, **kwargs)
        if const_bytes != 0:
            raise ValueError(f"Invalid displacement size {const_bytes}")
        return cls(**kwargs)

    def skips_base(self, base) -> bool:
        return self.rbp_base_becomes_disp32 and base == NO_BASE

    def skips_index(self, index) -> bool:
        return self.rsp_index_is_absent and index == NO_INDEX

    def displacement_bytes(self, base) -> int:
        if self.skips_base(base):
            return 4
        if self.has_disp32:
            return 4
        if self.has_disp8:
            return 1
        return 0

    def __eq__(self, other):
        if not isinstance(other, AddrExt):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__slots__)

    def __repr__(self):
        flags = [name for name in self.__slots__ if getattr(self, name)]
        return f"AddrExt({', '.join(flags)})"


def format_register_address(base) -> str:
    """
    Register indirect operand without SIB byte, e.g. " [rsi]".
    """
    return " [" + REGISTERS_R64[base] + "]"


def join_address_parts(*parts) -> str:
    """
    Joins the present parts with " + ", an empty address reads " [0]".
    """
    result = ""
    for part in parts:
        if result != "" and part != "":
            result += " + "
        result += part
    if result == "":
        result = "0"
    return " [" + result + "]"


def format_address(base, index, scale_shift, ext=None) -> str:
    """
    Base + index * scale + displacement operand, e.g. " [rsi + rcx * 4 + x]".
    """
    if ext is None:
        ext = AddrExt()
    assert 0 <= base < 8, base
    assert 0 <= index < len(REGISTERS_R64), index
    assert 0 <= scale_shift < 4, scale_shift

    base_text = "" if ext.skips_base(base) else REGISTERS_R64[base]

    index_text = "" if ext.skips_index(index) else REGISTERS_R64[index]
    if scale_shift != 0 and index_text != "":
        index_text += " * " + str(1 << scale_shift)

    disp_text = DISPLACEMENT_TOKEN if ext.displacement_bytes(base) > 0 else ""

    return join_address_parts(base_text, index_text, disp_text)
