"""The quadratic extension F_q12 = F_q6[w] / (w^2 - v) of the BN254 base field."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from .arithmetic import limbs_to_int
from .fq import Fq
from .fq2 import Fq2
from .fq6 import Fq6

_Coefficient = Union[Fq6, Fq2, Fq, int]


def _to_fq6(value: _Coefficient) -> Fq6:
    if isinstance(value, Fq6):
        return value
    if isinstance(value, (Fq2, Fq, int)):
        return Fq6(value)
    raise TypeError(f"expected Fq6, Fq2, Fq or int, got {type(value).__name__}")


def _fp4_square(a0: Fq2, a1: Fq2) -> tuple[Fq2, Fq2]:
    """Square a0 + a1 * y in F_q4 = F_q2[y] / (y^2 - (9 + u))."""
    t0 = a0.square()
    t1 = a1.square()
    c0 = t1.mul_by_nonresidue() + t0
    c1 = (a0 + a1).square() - t0 - t1
    return c0, c1


@dataclass(frozen=True)
class Fq12:
    """An element c0 + c1 * w of F_q12, where w^2 = v."""

    c0: Fq6
    c1: Fq6

    def __init__(self, c0: _Coefficient, c1: _Coefficient = 0) -> None:
        object.__setattr__(self, "c0", _to_fq6(c0))
        object.__setattr__(self, "c1", _to_fq6(c1))

    # construction -------------------------------------------------------

    @classmethod
    def zero(cls) -> "Fq12":
        return cls(Fq6.zero(), Fq6.zero())

    @classmethod
    def one(cls) -> "Fq12":
        return cls(Fq6.one(), Fq6.zero())

    @classmethod
    def random(cls, rng=None) -> "Fq12":
        """Draw both coefficients uniformly from ``rng`` (or the OS)."""
        c0 = Fq6.random(rng)
        c1 = Fq6.random(rng)
        return cls(c0, c1)

    # queries ------------------------------------------------------------

    def is_zero(self) -> bool:
        return self.c0.is_zero() and self.c1.is_zero()

    # arithmetic ---------------------------------------------------------

    def double(self) -> "Fq12":
        return Fq12(self.c0.double(), self.c1.double())

    def square(self) -> "Fq12":
        ab = self.c0 * self.c1
        c0c1 = self.c0 + self.c1
        c0 = (self.c1.mul_by_nonresidue() + self.c0) * c0c1 - ab
        c0 = c0 - ab.mul_by_nonresidue()
        return Fq12(c0, ab.double())

    def conjugate(self) -> "Fq12":
        """Return c0 - c1 * w, the inverse of a unitary element."""
        return Fq12(self.c0, -self.c1)

    def frobenius_map(self, power: int) -> "Fq12":
        """Apply the q-power Frobenius endomorphism ``power`` times."""
        coeff = FROBENIUS_COEFF_FQ12_C1[power % 12]
        return Fq12(
            self.c0.frobenius_map(power),
            self.c1.frobenius_map(power) * coeff,
        )

    def mul_by_014(self, c0: Fq2, c1: Fq2, c4: Fq2) -> "Fq12":
        """Multiply by the sparse element (c0 + c1 v) + (c4 v) w."""
        aa = self.c0.mul_by_01(c0, c1)
        bb = self.c1.mul_by_1(c4)
        o = c1 + c4
        new_c1 = (self.c1 + self.c0).mul_by_01(c0, o) - aa - bb
        new_c0 = bb.mul_by_nonresidue() + aa
        return Fq12(new_c0, new_c1)

    def mul_by_034(self, c0: Fq2, c3: Fq2, c4: Fq2) -> "Fq12":
        """Multiply by the sparse element c0 + (c3 + c4 v) w."""
        t0 = self.c0 * c0
        t1 = self.c1.mul_by_01(c3, c4)
        o = c0 + c3
        t2 = (self.c0 + self.c1).mul_by_01(o, c4) - t0
        return Fq12(t0 + t1.mul_by_nonresidue(), t2 - t1)

    def cyclotomic_square(self) -> "Fq12":
        """Square an element of the cyclotomic subgroup (Granger-Scott)."""
        a, b = self.c0, self.c1

        t3, t4 = _fp4_square(a.c0, b.c1)
        a_c0 = (t3 - a.c0).double() + t3
        b_c1 = (t4 + b.c1).double() + t4

        t3, t4 = _fp4_square(b.c0, a.c2)
        t5, t6 = _fp4_square(a.c1, b.c2)

        a_c1 = (t3 - a.c1).double() + t3
        b_c2 = (t4 + b.c2).double() + t4
        t3 = t6.mul_by_nonresidue()
        b_c0 = (t3 + b.c0).double() + t3
        a_c2 = (t5 - a.c2).double() + t5

        return Fq12(Fq6(a_c0, a_c1, a_c2), Fq6(b_c0, b_c1, b_c2))

    def pow(self, exponent: Union[int, Sequence[int]]) -> "Fq12":
        """Raise to a non-negative power given as an int or little-endian limbs."""
        power = exponent if isinstance(exponent, int) else limbs_to_int(exponent)
        if power < 0:
            raise ValueError("exponent must be non-negative")
        result = Fq12.one()
        for bit in bin(power)[2:] if power else "":
            result = result.square()
            if bit == "1":
                result = result * self
        return result

    def invert(self) -> "Fq12":
        """Return the multiplicative inverse; zero has none."""
        denom = self.c0.square() - self.c1.square().mul_by_nonresidue()
        t = denom.invert()
        return Fq12(self.c0 * t, -(self.c1 * t))

    # operators ----------------------------------------------------------

    @staticmethod
    def _coerce(other) -> "Fq12 | None":
        if isinstance(other, Fq12):
            return other
        if isinstance(other, (Fq6, Fq2, Fq, int)):
            return Fq12(other)
        return None

    def __add__(self, other) -> "Fq12":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return Fq12(self.c0 + rhs.c0, self.c1 + rhs.c1)

    __radd__ = __add__

    def __sub__(self, other) -> "Fq12":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return Fq12(self.c0 - rhs.c0, self.c1 - rhs.c1)

    def __rsub__(self, other) -> "Fq12":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs - self

    def __mul__(self, other) -> "Fq12":
        if isinstance(other, (Fq6, Fq2, Fq, int)):
            return Fq12(self.c0 * other, self.c1 * other)
        if not isinstance(other, Fq12):
            return NotImplemented
        t0 = self.c0 * other.c0
        t1 = self.c1 * other.c1
        c1 = (self.c0 + self.c1) * (other.c0 + other.c1) - t0 - t1
        return Fq12(t0 + t1.mul_by_nonresidue(), c1)

    __rmul__ = __mul__

    def __truediv__(self, other) -> "Fq12":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self * rhs.invert()

    def __pow__(self, exponent: int) -> "Fq12":
        return self.pow(exponent)

    def __neg__(self) -> "Fq12":
        return Fq12(-self.c0, -self.c1)

    def __repr__(self) -> str:
        return f"Fq12(c0={self.c0!r}, c1={self.c1!r})"


def _from_montgomery(limbs: Sequence[int]) -> Fq:
    """Build an Fq from the little-endian limbs of its Montgomery form."""
    return Fq.from_raw_bytes(limbs_to_int(limbs).to_bytes(32, "little"))


def _coeff(c0: Sequence[int], c1: Sequence[int]) -> Fq2:
    return Fq2(_from_montgomery(c0), _from_montgomery(c1))


_ZERO_LIMBS = (0, 0, 0, 0)

# (9 + u)^((q^i - 1) / 6) for i = 0..11
FROBENIUS_COEFF_FQ12_C1: tuple[Fq2, ...] = (
    _coeff(
        (0xD35D438DC58F0D9D, 0x0A78EB28F5C70B3D, 0x666EA36F7879462C, 0x0E0A77C19A07DF2F),
        _ZERO_LIMBS,
    ),
    _coeff(
        (0xAF9BA69633144907, 0xCA6B1D7387AFB78A, 0x11BDED5EF08A2087, 0x02F34D751A1F3A7C),
        (0xA222AE234C492D72, 0xD00F02A4565DE15B, 0xDC2FF3A253DFC926, 0x10A75716B3899551),
    ),
    _coeff(
        (0xCA8D800500FA1BF2, 0xF0C5D61468B39769, 0x0E201271AD0D4418, 0x04290F65BAD856E6),
        _ZERO_LIMBS,
    ),
    _coeff(
        (0x365316184E46D97D, 0x0AF7129ED4C96D9F, 0x659DA72FCA1009B5, 0x08116D8983A20D23),
        (0xB1DF4AF7C39C1939, 0x3D9F02878A73BF7F, 0x9B2220928CAF0AE0, 0x26684515EFF054A6),
    ),
    _coeff(
        (0x3350C88E13E80B9C, 0x7DCE557CDB5E56B9, 0x6001B4B8B615564A, 0x2682E617020217E0),
        _ZERO_LIMBS,
    ),
    _coeff(
        (0x86B76F821B329076, 0x408BF52B4D19B614, 0x53DFB9D0D985E92D, 0x051E20146982D2A7),
        (0x0FBC9CD47752EBC7, 0x6D8FFFE33415DE24, 0xBEF22CF038CF41B9, 0x15C0EDFF3C66BF54),
    ),
    _coeff(
        (0x68C3488912EDEFAA, 0x8D087F6872AABF4F, 0x51E1A24709081231, 0x2259D6B14729C0FA),
        _ZERO_LIMBS,
    ),
    _coeff(
        (0x8C84E580A568B440, 0xCD164D1DE0C21302, 0xA692585790F737D5, 0x2D7100FDC71265AD),
        (0x99FDDDF38C33CFD5, 0xC77267ED1213E931, 0xDC2052142DA18F36, 0x1FBCF75C2DA80AD7),
    ),
    _coeff(
        (0x71930C11D782E155, 0xA6BB947CFFBE3323, 0xAA303344D4741444, 0x2C3B3F0D26594943),
        _ZERO_LIMBS,
    ),
    _coeff(
        (0x05CD75FE8A3623CA, 0x8C8A57F293A85CEE, 0x52B29E86B7714EA8, 0x2852E0E95D8F9306),
        (0x8A41411F14E0E40E, 0x59E26809DDFE0B0D, 0x1D2E2523F4D24D7D, 0x09FC095CF1414B83),
    ),
    _coeff(
        (0x08CFC388C494F1AB, 0x19B315148D1373D4, 0x584E90FDCB6C0213, 0x09E1685BDF2F8849),
        _ZERO_LIMBS,
    ),
    _coeff(
        (0xB5691C94BD4A6CD1, 0x56F575661B581478, 0x64708BE5A7FB6F30, 0x2B462E5E77AECD82),
        (0x2C63EF42612A1180, 0x29F16AAE345BEC69, 0xF95E18C648B216A4, 0x1AA36073A4CAE0D4),
    ),
)