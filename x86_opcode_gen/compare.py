from enum import Enum
from typing import List, Optional, Sequence

# Maximum number of surplus lines shown when one side is longer.
SAMPLE_PREVIEW = 10


class Side(str, Enum):
    GENERATED = "gen"
    KNOWN = "known"


class Divergence:
    def __init__(self, index: int, known: str, generated: str):
        self.index = index
        self.known = known
        self.generated = generated

    def __repr__(self):
        return f"Divergence({self.index}, known={self.known!r}, gen={self.generated!r})"


class LengthMismatch:
    def __init__(self, longer: Side, count: int, sample: List[str]):
        self.longer = longer
        self.count = count
        self.sample = sample

    @property
    def truncated(self) -> bool:
        return self.count > len(self.sample)

    def __repr__(self):
        return f"LengthMismatch({self.longer.value} +{self.count})"


class ComparisonReport:
    def __init__(
        self,
        divergence: Optional[Divergence] = None,
        length_mismatch: Optional[LengthMismatch] = None,
    ):
        self.divergence = divergence
        self.length_mismatch = length_mismatch

    @property
    def ok(self) -> bool:
        return self.divergence is None and self.length_mismatch is None


def find_divergence(generated: Sequence[str], known: Sequence[str]) -> Optional[Divergence]:
    for i in range(min(len(known), len(generated))):
        if generated[i] != known[i]:
            return Divergence(i, known[i], generated[i])
    return None


def find_length_mismatch(
    generated: Sequence[str], known: Sequence[str], sample_preview=SAMPLE_PREVIEW
) -> Optional[LengthMismatch]:
    count = min(len(known), len(generated))
    if len(generated) > len(known):
        longer, lines = Side.GENERATED, generated
    elif len(known) > len(generated):
        longer, lines = Side.KNOWN, known
    else:
        return None
    sample = list(lines[count : count + sample_preview])
    return LengthMismatch(longer, len(lines) - count, sample)


def compare_lines(
    generated: Sequence[str], known: Sequence[str], sample_preview=SAMPLE_PREVIEW
) -> ComparisonReport:
    """
    Compare generated lines against the known ones. Stops at the first
    difference, the length difference is reported either way.
    """
    return ComparisonReport(
        find_divergence(generated, known),
        find_length_mismatch(generated, known, sample_preview),
    )
