"""The quadratic extension F_q2 = F_q[u] / (u^2 + 1) of the BN254 base field."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import ClassVar, Sequence, Union

from .arithmetic import limbs_to_int
from .fq import Fq, LegendreSymbol

_Scalar = Union[Fq, int]


def _to_fq(value: _Scalar) -> Fq:
    if isinstance(value, Fq):
        return value
    if isinstance(value, bool):
        return Fq(int(value))
    if isinstance(value, int):
        return Fq(value)
    raise TypeError(f"expected Fq or int, got {type(value).__name__}")


@total_ordering
@dataclass(frozen=True)
class Fq2:
    """An element c0 + c1 * u of F_q2, where u^2 = -1.

    Elements are ordered lexicographically, comparing c1 first and then c0.
    """

    c0: Fq
    c1: Fq

    MODULUS_STR: ClassVar[str] = Fq.MODULUS_STR
    SIZE: ClassVar[int] = 64
    NUM_BITS: ClassVar[int] = 254
    CAPACITY: ClassVar[int] = 253
    S: ClassVar[int] = 0

    def __init__(self, c0: _Scalar, c1: _Scalar = 0) -> None:
        object.__setattr__(self, "c0", _to_fq(c0))
        object.__setattr__(self, "c1", _to_fq(c1))

    # construction -------------------------------------------------------

    @classmethod
    def zero(cls) -> "Fq2":
        return cls(Fq.zero(), Fq.zero())

    @classmethod
    def one(cls) -> "Fq2":
        return cls(Fq.one(), Fq.zero())

    @classmethod
    def random(cls, rng=None) -> "Fq2":
        """Draw both coefficients uniformly from ``rng`` (or the OS)."""
        c0 = Fq.random(rng)
        c1 = Fq.random(rng)
        return cls(c0, c1)

    @classmethod
    def from_uniform_bytes(cls, data: bytes) -> "Fq2":
        """Reduce 64 little-endian bytes into the c0 coefficient."""
        return cls(Fq.from_uniform_bytes(data), Fq.zero())

    @classmethod
    def from_bytes(cls, data: bytes) -> "Fq2":
        """Decode two canonical little-endian coefficients; reject overflow."""
        if len(data) != cls.SIZE:
            raise ValueError(f"expected {cls.SIZE} bytes, got {len(data)}")
        return cls(Fq.from_repr(bytes(data[:32])), Fq.from_repr(bytes(data[32:])))

    def to_bytes(self) -> bytes:
        """Encode c0 then c1, each canonical and little-endian."""
        return self.c0.to_repr() + self.c1.to_repr()

    from_repr = from_bytes
    to_repr = to_bytes

    @classmethod
    def from_raw_bytes(cls, data: bytes) -> "Fq2":
        """Decode the Montgomery-form encoding produced by ``to_raw_bytes``."""
        if len(data) != cls.SIZE:
            raise ValueError(f"expected {cls.SIZE} bytes, got {len(data)}")
        return cls(
            Fq.from_raw_bytes(bytes(data[:32])), Fq.from_raw_bytes(bytes(data[32:]))
        )

    def to_raw_bytes(self) -> bytes:
        """Encode both coefficients in little-endian Montgomery form."""
        return self.c0.to_raw_bytes() + self.c1.to_raw_bytes()

    # queries ------------------------------------------------------------

    def is_zero(self) -> bool:
        return self.c0.is_zero() and self.c1.is_zero()

    def is_odd(self) -> bool:
        return bool(self.to_repr()[0] & 1)

    # arithmetic ---------------------------------------------------------

    def double(self) -> "Fq2":
        return Fq2(self.c0.double(), self.c1.double())

    def square(self) -> "Fq2":
        ab = self.c0 * self.c1
        c0 = (self.c0 - self.c1) * (self.c0 + self.c1)
        return Fq2(c0, ab.double())

    def conjugate(self) -> "Fq2":
        """Return c0 - c1 * u."""
        return Fq2(self.c0, -self.c1)

    def frobenius_map(self, power: int) -> "Fq2":
        """Apply the q-power Frobenius endomorphism ``power`` times."""
        return Fq2(self.c0, self.c1 * FROBENIUS_COEFF_FQ2_C1[power % 2])

    def mul_by_nonresidue(self) -> "Fq2":
        """Multiply by the quadratic non-residue 9 + u."""
        nine = Fq(9)
        return Fq2(nine * self.c0 - self.c1, nine * self.c1 + self.c0)

    mul_by_xi = mul_by_nonresidue

    def norm(self) -> Fq:
        """Return the norm c0^2 + c1^2 down to F_q."""
        return self.c0.square() + self.c1.square()

    def legendre(self) -> LegendreSymbol:
        return self.norm().legendre()

    def pow(self, exponent: Union[int, Sequence[int]]) -> "Fq2":
        """Raise to a non-negative power given as an int or little-endian limbs."""
        power = exponent if isinstance(exponent, int) else limbs_to_int(exponent)
        if power < 0:
            raise ValueError("exponent must be non-negative")
        result = Fq2.one()
        base = self
        while power:
            if power & 1:
                result = result * base
            base = base.square()
            power >>= 1
        return result

    def invert(self) -> "Fq2":
        """Return the multiplicative inverse; zero has none."""
        t = self.norm().invert()
        return Fq2(self.c0 * t, -(self.c1 * t))

    def sqrt(self) -> "Fq2":
        """Return a square root; raise ValueError for a non-residue."""
        if self.is_zero():
            return Fq2.zero()
        q = Fq.MODULUS
        a1 = self.pow((q - 3) // 4)
        alpha = a1.square() * self
        a0 = alpha.frobenius_map(1) * alpha
        neg1 = Fq2(Fq.NEGATIVE_ONE, Fq.zero())
        if a0 == neg1:
            raise ValueError("element is not a quadratic residue")
        a1 = a1 * self
        if alpha == neg1:
            return a1 * Fq2(Fq.zero(), Fq.one())
        alpha = (alpha + Fq2.one()).pow((q - 1) // 2)
        return a1 * alpha

    # operators ----------------------------------------------------------

    @staticmethod
    def _coerce(other) -> "Fq2 | None":
        if isinstance(other, Fq2):
            return other
        if isinstance(other, (Fq, int)):
            return Fq2(other, Fq.zero())
        return None

    def __add__(self, other) -> "Fq2":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return Fq2(self.c0 + rhs.c0, self.c1 + rhs.c1)

    __radd__ = __add__

    def __sub__(self, other) -> "Fq2":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return Fq2(self.c0 - rhs.c0, self.c1 - rhs.c1)

    def __rsub__(self, other) -> "Fq2":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs - self

    def __mul__(self, other) -> "Fq2":
        if isinstance(other, (Fq, int)) and not isinstance(other, Fq2):
            scalar = _to_fq(other)
            return Fq2(self.c0 * scalar, self.c1 * scalar)
        if not isinstance(other, Fq2):
            return NotImplemented
        return Fq2(
            self.c0 * other.c0 - self.c1 * other.c1,
            self.c0 * other.c1 + self.c1 * other.c0,
        )

    __rmul__ = __mul__

    def __truediv__(self, other) -> "Fq2":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self * rhs.invert()

    def __pow__(self, exponent: int) -> "Fq2":
        return self.pow(exponent)

    def __neg__(self) -> "Fq2":
        return Fq2(-self.c0, -self.c1)

    def __lt__(self, other) -> bool:
        if not isinstance(other, Fq2):
            return NotImplemented
        return (self.c1, self.c0) < (other.c1, other.c0)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __repr__(self) -> str:
        return f"Fq2(c0={self.c0}, c1={self.c1})"


# (-1)^((q^i - 1) / 2) for i = 0, 1
FROBENIUS_COEFF_FQ2_C1: tuple[Fq, Fq] = (Fq.one(), Fq.NEGATIVE_ONE)

Fq2.MULTIPLICATIVE_GENERATOR = Fq2(Fq(3), Fq.zero())
Fq2.ROOT_OF_UNITY = Fq2.zero()
Fq2.ROOT_OF_UNITY_INV = Fq2.zero()
Fq2.DELTA = Fq2.zero()
Fq2.TWO_INV = Fq2(Fq.TWO_INV, Fq.zero())
Fq2.ZETA = Fq2(
    Fq.from_raw(
        [0xE4BD44E5607CFD48, 0xC28F069FBB966E3D, 0x5E6DD9E7E0ACCCB0, 0x30644E72E131A029]
    ),
    Fq.zero(),
)