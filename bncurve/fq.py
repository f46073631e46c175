"""The base field of the BN254 curve."""

from __future__ import annotations

from enum import IntEnum
from typing import ClassVar

from .arithmetic import PrimeFieldElement


class LegendreSymbol(IntEnum):
    """Quadratic character of a field element."""

    ZERO = 0
    QUADRATIC_RESIDUE = 1
    QUADRATIC_NON_RESIDUE = -1


class Fq(PrimeFieldElement):
    """An element of F_q, q = 0x30644e72...d87cfd47."""

    __slots__ = ()

    MODULUS: ClassVar[int] = (
        0x30644E72E131A029B85045B68181585D97816A916871CA8D3C208C16D87CFD47
    )
    MODULUS_STR: ClassVar[str] = (
        "0x30644e72e131a029b85045b68181585d97816a916871ca8d3c208c16d87cfd47"
    )
    SIZE: ClassVar[int] = 32
    NUM_BITS: ClassVar[int] = 254
    CAPACITY: ClassVar[int] = 253
    S: ClassVar[int] = 0

    MULTIPLICATIVE_GENERATOR: ClassVar["Fq"]
    TWO_INV: ClassVar["Fq"]
    ROOT_OF_UNITY: ClassVar["Fq"]
    ROOT_OF_UNITY_INV: ClassVar["Fq"]
    DELTA: ClassVar["Fq"]
    ZETA: ClassVar["Fq"]
    NEGATIVE_ONE: ClassVar["Fq"]

    def legendre(self) -> LegendreSymbol:
        """Return the Legendre symbol, via self^((q - 1) / 2)."""
        s = self.pow((self.MODULUS - 1) // 2)
        if s.is_zero():
            return LegendreSymbol.ZERO
        if s == Fq.one():
            return LegendreSymbol.QUADRATIC_RESIDUE
        return LegendreSymbol.QUADRATIC_NON_RESIDUE

    def sqrt(self) -> "Fq":
        """Return a square root; raise ValueError for a non-residue."""
        root = self.pow((self.MODULUS + 1) // 4)
        if root.square() != self:
            raise ValueError("element is not a quadratic residue")
        return root


Fq.MULTIPLICATIVE_GENERATOR = Fq(3)
Fq.TWO_INV = Fq.from_raw(
    [0x9E10460B6C3E7EA4, 0xCBC0B548B438E546, 0xDC2822DB40C0AC2E, 0x183227397098D014]
)
Fq.ROOT_OF_UNITY = Fq(-1)
Fq.ROOT_OF_UNITY_INV = Fq(-1)
Fq.DELTA = Fq(9)
Fq.ZETA = Fq.from_raw([0x5763473177FFFFFE, 0xD4F263F1ACDB5C4F, 0x59E26BCEA0D48BAC, 0])
Fq.NEGATIVE_ONE = Fq(-1)