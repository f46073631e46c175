"""The scalar field of the BN254 curve."""

from __future__ import annotations

from typing import ClassVar

from .arithmetic import PrimeFieldElement


class Fr(PrimeFieldElement):
    """An element of F_r, r = 0x30644e72...f0000001, the BN254 group order."""

    __slots__ = ()

    MODULUS: ClassVar[int] = (
        0x30644E72E131A029B85045B68181585D2833E84879B9709143E1F593F0000001
    )
    MODULUS_STR: ClassVar[str] = (
        "0x30644e72e131a029b85045b68181585d2833e84879b9709143e1f593f0000001"
    )
    SIZE: ClassVar[int] = 32
    NUM_BITS: ClassVar[int] = 254
    CAPACITY: ClassVar[int] = 253
    S: ClassVar[int] = 28

    MULTIPLICATIVE_GENERATOR: ClassVar["Fr"]
    ROOT_OF_UNITY: ClassVar["Fr"]
    ROOT_OF_UNITY_INV: ClassVar["Fr"]
    TWO_INV: ClassVar["Fr"]
    DELTA: ClassVar["Fr"]
    ZETA: ClassVar["Fr"]

    def sqrt(self) -> "Fr":
        """Return a square root (Tonelli-Shanks); raise ValueError for a non-residue."""
        if self.is_zero():
            return Fr.zero()
        one = Fr.one()
        t = (self.MODULUS - 1) >> self.S
        m = self.S
        c = Fr.ROOT_OF_UNITY
        x = self.pow((t + 1) // 2)
        b = self.pow(t)
        while b != one:
            order = 0
            probe = b
            while probe != one and order < m:
                probe = probe.square()
                order += 1
            if order >= m:
                raise ValueError("element is not a quadratic residue")
            step = c.pow(1 << (m - order - 1))
            x = x * step
            c = step.square()
            b = b * c
            m = order
        if x.square() != self:
            raise ValueError("element is not a quadratic residue")
        return x


Fr.MULTIPLICATIVE_GENERATOR = Fr(7)
Fr.ROOT_OF_UNITY = Fr.from_raw(
    [0xD34F1ED960C37C9C, 0x3215CF6DD39329C8, 0x98865EA93DD31F74, 0x03DDB9F5166D18B7]
)
Fr.ROOT_OF_UNITY_INV = Fr.from_raw(
    [0x0ED3E50A414E6DBA, 0xB22625F59115ABA7, 0x1BBE587180F34361, 0x048127174DAABC26]
)
Fr.TWO_INV = Fr.from_raw(
    [0xA1F0FAC9F8000001, 0x9419F4243CDCB848, 0xDC2822DB40C0AC2E, 0x183227397098D014]
)
Fr.DELTA = Fr.from_raw(
    [0x870E56BBE533E9A2, 0x5B5F898E5E963F25, 0x64EC26AAD4C86E71, 0x09226B6E22C6F0CA]
)
Fr.ZETA = Fr.from_raw([0x8B17EA66B99C90DD, 0x5BFC41088D8DAAA7, 0xB3C4D79D41A91758, 0])