"""The cubic extension F_q6 = F_q2[v] / (v^3 - (9 + u)) of the BN254 base field."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from .arithmetic import limbs_to_int
from .fq import Fq
from .fq2 import Fq2

_Coefficient = Union[Fq2, Fq, int]


def _to_fq2(value: _Coefficient) -> Fq2:
    if isinstance(value, Fq2):
        return value
    if isinstance(value, (Fq, int)):
        return Fq2(value, Fq.zero())
    raise TypeError(f"expected Fq2, Fq or int, got {type(value).__name__}")


def _from_montgomery(limbs: Sequence[int]) -> Fq:
    """Build an Fq from the little-endian limbs of its Montgomery form."""
    return Fq.from_raw_bytes(limbs_to_int(limbs).to_bytes(32, "little"))


@dataclass(frozen=True)
class Fq6:
    """An element c0 + c1 * v + c2 * v^2 of F_q6, where v^3 = 9 + u."""

    c0: Fq2
    c1: Fq2
    c2: Fq2

    def __init__(
        self, c0: _Coefficient, c1: _Coefficient = 0, c2: _Coefficient = 0
    ) -> None:
        object.__setattr__(self, "c0", _to_fq2(c0))
        object.__setattr__(self, "c1", _to_fq2(c1))
        object.__setattr__(self, "c2", _to_fq2(c2))

    # construction -------------------------------------------------------

    @classmethod
    def zero(cls) -> "Fq6":
        return cls(Fq2.zero(), Fq2.zero(), Fq2.zero())

    @classmethod
    def one(cls) -> "Fq6":
        return cls(Fq2.one(), Fq2.zero(), Fq2.zero())

    @classmethod
    def random(cls, rng=None) -> "Fq6":
        """Draw all three coefficients uniformly from ``rng`` (or the OS)."""
        c0 = Fq2.random(rng)
        c1 = Fq2.random(rng)
        c2 = Fq2.random(rng)
        return cls(c0, c1, c2)

    # queries ------------------------------------------------------------

    def is_zero(self) -> bool:
        return self.c0.is_zero() and self.c1.is_zero() and self.c2.is_zero()

    # arithmetic ---------------------------------------------------------

    def double(self) -> "Fq6":
        return Fq6(self.c0.double(), self.c1.double(), self.c2.double())

    def square(self) -> "Fq6":
        s0 = self.c0.square()
        s1 = (self.c0 * self.c1).double()
        s2 = (self.c0 - self.c1 + self.c2).square()
        s3 = (self.c1 * self.c2).double()
        s4 = self.c2.square()
        return Fq6(
            s3.mul_by_nonresidue() + s0,
            s4.mul_by_nonresidue() + s1,
            s1 + s2 + s3 - s0 - s4,
        )

    def frobenius_map(self, power: int) -> "Fq6":
        """Apply the q-power Frobenius endomorphism ``power`` times."""
        index = power % 6
        return Fq6(
            self.c0.frobenius_map(power),
            self.c1.frobenius_map(power) * FROBENIUS_COEFF_FQ6_C1[index],
            self.c2.frobenius_map(power) * FROBENIUS_COEFF_FQ6_C2[index],
        )

    def mul_by_nonresidue(self) -> "Fq6":
        """Multiply by the cubic non-residue v."""
        return Fq6(self.c2.mul_by_nonresidue(), self.c0, self.c1)

    mul_by_v = mul_by_nonresidue

    def mul_by_1(self, c1: Fq2) -> "Fq6":
        """Multiply by the sparse element c1 * v."""
        b_b = self.c1 * c1
        t1 = (c1 * (self.c1 + self.c2) - b_b).mul_by_nonresidue()
        t2 = c1 * (self.c0 + self.c1) - b_b
        return Fq6(t1, t2, b_b)

    def mul_by_01(self, c0: Fq2, c1: Fq2) -> "Fq6":
        """Multiply by the sparse element c0 + c1 * v."""
        a_a = self.c0 * c0
        b_b = self.c1 * c1
        t1 = (c1 * (self.c1 + self.c2) - b_b).mul_by_nonresidue() + a_a
        t3 = c0 * (self.c0 + self.c2) - a_a + b_b
        t2 = (c0 + c1) * (self.c0 + self.c1) - a_a - b_b
        return Fq6(t1, t2, t3)

    def pow(self, exponent: Union[int, Sequence[int]]) -> "Fq6":
        """Raise to a non-negative power given as an int or little-endian limbs."""
        power = exponent if isinstance(exponent, int) else limbs_to_int(exponent)
        if power < 0:
            raise ValueError("exponent must be non-negative")
        result = Fq6.one()
        base = self
        while power:
            if power & 1:
                result = result * base
            base = base.square()
            power >>= 1
        return result

    def invert(self) -> "Fq6":
        """Return the multiplicative inverse; zero has none."""
        c0 = self.c0.square() - (self.c2.mul_by_nonresidue() * self.c1)
        c1 = self.c2.square().mul_by_nonresidue() - self.c0 * self.c1
        c2 = self.c1.square() - self.c0 * self.c2
        tmp = (self.c2 * c1 + self.c1 * c2).mul_by_nonresidue() + self.c0 * c0
        t = tmp.invert()
        return Fq6(t * c0, t * c1, t * c2)

    # operators ----------------------------------------------------------

    @staticmethod
    def _coerce(other) -> "Fq6 | None":
        if isinstance(other, Fq6):
            return other
        if isinstance(other, (Fq2, Fq, int)):
            return Fq6(other)
        return None

    def __add__(self, other) -> "Fq6":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return Fq6(self.c0 + rhs.c0, self.c1 + rhs.c1, self.c2 + rhs.c2)

    __radd__ = __add__

    def __sub__(self, other) -> "Fq6":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return Fq6(self.c0 - rhs.c0, self.c1 - rhs.c1, self.c2 - rhs.c2)

    def __rsub__(self, other) -> "Fq6":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs - self

    def __mul__(self, other) -> "Fq6":
        if isinstance(other, (Fq2, Fq, int)):
            scalar = _to_fq2(other)
            return Fq6(self.c0 * scalar, self.c1 * scalar, self.c2 * scalar)
        if not isinstance(other, Fq6):
            return NotImplemented
        a_a = self.c0 * other.c0
        b_b = self.c1 * other.c1
        c_c = self.c2 * other.c2
        t1 = ((other.c1 + other.c2) * (self.c1 + self.c2) - b_b - c_c)
        t1 = t1.mul_by_nonresidue() + a_a
        t3 = (other.c0 + other.c2) * (self.c0 + self.c2) - a_a + b_b - c_c
        t2 = (other.c0 + other.c1) * (self.c0 + self.c1) - a_a - b_b
        t2 = t2 + c_c.mul_by_nonresidue()
        return Fq6(t1, t2, t3)

    __rmul__ = __mul__

    def __truediv__(self, other) -> "Fq6":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self * rhs.invert()

    def __pow__(self, exponent: int) -> "Fq6":
        return self.pow(exponent)

    def __neg__(self) -> "Fq6":
        return Fq6(-self.c0, -self.c1, -self.c2)

    def __repr__(self) -> str:
        return f"Fq6(c0={self.c0!r}, c1={self.c1!r}, c2={self.c2!r})"


def _coeff(c0: Sequence[int], c1: Sequence[int]) -> Fq2:
    return Fq2(_from_montgomery(c0), _from_montgomery(c1))


_ZERO_LIMBS = (0, 0, 0, 0)

# (9 + u)^((q^i - 1) / 3) for i = 0..5
FROBENIUS_COEFF_FQ6_C1: tuple[Fq2, ...] = (
    _coeff(
        (0xD35D438DC58F0D9D, 0x0A78EB28F5C70B3D, 0x666EA36F7879462C, 0x0E0A77C19A07DF2F),
        _ZERO_LIMBS,
    ),
    _coeff(
        (0xB5773B104563AB30, 0x347F91C8A9AA6454, 0x7A007127242E0991, 0x1956BCD8118214EC),
        (0x6E849F1EA0AA4757, 0xAA1C7B6D89F89141, 0xB6E713CDFAE0CA3A, 0x26694FBB4E82EBC3),
    ),
    _coeff(
        (0x3350C88E13E80B9C, 0x7DCE557CDB5E56B9, 0x6001B4B8B615564A, 0x2682E617020217E0),
        _ZERO_LIMBS,
    ),
    _coeff(
        (0xC9AF22F716AD6BAD, 0xB311782A4AA662B2, 0x19EEAF64E248C7F4, 0x20273E77E3439F82),
        (0xACC02860F7CE93AC, 0x3933D5817BA76B4C, 0x69E6188B446C8467, 0x0A46036D4417CC55),
    ),
    _coeff(
        (0x71930C11D782E155, 0xA6BB947CFFBE3323, 0xAA303344D4741444, 0x2C3B3F0D26594943),
        _ZERO_LIMBS,
    ),
    _coeff(
        (0xF91ABA2654E8E3B1, 0x4771CB2FDC92CE12, 0xDCB16AE0FC8BDF35, 0x274AA195CD9D8BE4),
        (0x5CFC50AE18811F8B, 0x4BB28433CB43988C, 0x4FD35F13C3B56219, 0x301949BD2FC8883A),
    ),
)

# (9 + u)^((2q^i - 2) / 3) for i = 0..5
FROBENIUS_COEFF_FQ6_C2: tuple[Fq2, ...] = (
    _coeff(
        (0xD35D438DC58F0D9D, 0x0A78EB28F5C70B3D, 0x666EA36F7879462C, 0x0E0A77C19A07DF2F),
        _ZERO_LIMBS,
    ),
    _coeff(
        (0x7361D77F843ABE92, 0xA5BB2BD3273411FB, 0x9C941F314B3E2399, 0x15DF9CDDBB9FD3EC),
        (0x5DDDFD154BD8C949, 0x62CB29A5A4445B60, 0x37BC870A0C7DD2B9, 0x24830A9D3171F0FD),
    ),
    _coeff(
        (0x71930C11D782E155, 0xA6BB947CFFBE3323, 0xAA303344D4741444, 0x2C3B3F0D26594943),
        _ZERO_LIMBS,
    ),
    _coeff(
        (0x448A93A57B6762DF, 0xBFD62DF528FDEADF, 0xD858F5D00E9BD47A, 0x06B03D4D3476EC58),
        (0x2B19DAF4BCC936D1, 0xA1A54E7A56F4299F, 0xB533EEE05ADEAEF1, 0x170C812B84DDA0B2),
    ),
    _coeff(
        (0x3350C88E13E80B9C, 0x7DCE557CDB5E56B9, 0x6001B4B8B615564A, 0x2682E617020217E0),
        _ZERO_LIMBS,
    ),
    _coeff(
        (0x843420F1D8DADBD6, 0x31F010C9183FCDB2, 0x436330B527A76049, 0x13D47447F11ADFE4),
        (0xEF494023A857FA74, 0x2A925D02D5AB101A, 0x83B015829BA62F10, 0x2539111D0C13AEA3),
    ),
)