"""The BN254 groups G1 (over F_q) and G2 (over F_q2) in Jacobian coordinates."""

from __future__ import annotations

import secrets
from typing import Any, ClassVar, Iterable, Union

from .arithmetic import limbs_to_int
from .fq import Fq
from .fq2 import Fq2
from .fr import Fr

Scalar = Union[Fr, int]

_MASK128 = (1 << 128) - 1
_MASK256 = (1 << 256) - 1

# Lattice parameters for the GLV decomposition of G1 scalars.
_GAMMA1 = limbs_to_int([0x7A7BD9D4391EB18D, 0x4CCEF014A773D2CF, 0x2, 0])
_GAMMA2 = limbs_to_int([0xD91D232EC7E0B3D7, 0x2, 0, 0])
_B1 = limbs_to_int([0x8211BBEB7D4F1128, 0x6F4D8248EEB859FC, 0, 0])
_B2 = limbs_to_int([0x89D3256894D213E3, 0, 0, 0])

_G2_COFACTOR = 0x30644E72E131A029B85045B68181585E06CEECDA572A2489345F2299C0F9FA8D


def _scalar_value(scalar: Any) -> int | None:
    if isinstance(scalar, Fr):
        return int(scalar)
    if isinstance(scalar, int) and not isinstance(scalar, bool):
        return scalar
    return None


class _ProjectivePoint:
    """A point (X : Y : Z) in Jacobian coordinates on y^2 = x^3 + b."""

    __slots__ = ("x", "y", "z")

    BASE: ClassVar[type]
    B: ClassVar[Any]
    GENERATOR: ClassVar[tuple]
    AFFINE: ClassVar[type]
    CURVE_ID: ClassVar[str]

    def __init__(self, x, y, z) -> None:
        base = self.BASE
        self.x = x if isinstance(x, base) else base(x)
        self.y = y if isinstance(y, base) else base(y)
        self.z = z if isinstance(z, base) else base(z)

    @classmethod
    def identity(cls):
        return cls(cls.BASE.zero(), cls.BASE.one(), cls.BASE.zero())

    @classmethod
    def generator(cls):
        gx, gy = cls.GENERATOR
        return cls(gx, gy, cls.BASE.one())

    @classmethod
    def random(cls, rng=None):
        """Draw a random point of the prime-order subgroup."""
        source = rng if rng is not None else secrets.SystemRandom()
        one = cls.BASE.one()
        while True:
            x = cls.BASE.random(source)
            try:
                y = (x.square() * x + cls.B).sqrt()
            except ValueError:
                continue
            if source.getrandbits(1):
                y = -y
            return cls(x, y, one).clear_cofactor()

    def clear_cofactor(self):
        return self

    def is_torsion_free(self) -> bool:
        return True

    def is_identity(self) -> bool:
        return self.z.is_zero()

    def is_on_curve(self) -> bool:
        if self.is_identity():
            return True
        z2 = self.z.square()
        z6 = z2.square() * z2
        return self.y.square() == self.x.square() * self.x + self.B * z6

    def double(self):
        if self.is_identity():
            return self
        a = self.x.square()
        b = self.y.square()
        c = b.square()
        d = ((self.x + b).square() - a - c).double()
        e = a.double() + a
        f = e.square()
        x3 = f - d.double()
        y3 = e * (d - x3) - c.double().double().double()
        z3 = (self.y * self.z).double()
        return type(self)(x3, y3, z3)

    def _add(self, other):
        if self.is_identity():
            return other
        if other.is_identity():
            return self
        z1z1 = self.z.square()
        z2z2 = other.z.square()
        u1 = self.x * z2z2
        u2 = other.x * z1z1
        s1 = self.y * other.z * z2z2
        s2 = other.y * self.z * z1z1
        h = u2 - u1
        diff = s2 - s1
        if h.is_zero():
            if diff.is_zero():
                return self.double()
            return type(self).identity()
        i = h.double().square()
        j = h * i
        r = diff.double()
        v = u1 * i
        x3 = r.square() - j - v.double()
        y3 = r * (v - x3) - (s1 * j).double()
        z3 = ((self.z + other.z).square() - z1z1 - z2z2) * h
        return type(self)(x3, y3, z3)

    def _mul_int(self, k: int):
        if k < 0:
            return (-self)._mul_int(-k)
        acc = type(self).identity()
        for bit in bin(k)[2:]:
            acc = acc.double()
            if bit == "1":
                acc = acc._add(self)
        return acc

    def to_affine(self):
        if self.is_identity():
            return self.AFFINE.identity()
        return self._affine_with(self.z.invert())

    def _affine_with(self, zinv):
        zinv2 = zinv.square()
        return self.AFFINE(self.x * zinv2, self.y * zinv2 * zinv)

    def endo(self):
        """Apply the endomorphism (x, y) -> (zeta * x, y)."""
        return type(self)(self.x * self.BASE.ZETA, self.y, self.z)

    def _coerce(self, other):
        if isinstance(other, type(self)):
            return other
        if isinstance(other, self.AFFINE):
            return other.to_curve()
        return None

    def __add__(self, other):
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._add(rhs)

    __radd__ = __add__

    def __sub__(self, other):
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._add(-rhs)

    def __rsub__(self, other):
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs._add(-self)

    def __neg__(self):
        return type(self)(self.x, -self.y, self.z)

    def __mul__(self, scalar):
        k = _scalar_value(scalar)
        if k is None:
            return NotImplemented
        return self._mul_int(k)

    __rmul__ = __mul__

    def __eq__(self, other) -> bool:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        if self.is_identity() or rhs.is_identity():
            return self.is_identity() and rhs.is_identity()
        z1z1 = self.z.square()
        z2z2 = rhs.z.square()
        return (
            self.x * z2z2 == rhs.x * z1z1
            and self.y * z2z2 * rhs.z == rhs.y * z1z1 * self.z
        )

    def __hash__(self) -> int:
        return hash(self.to_affine())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(x={self.x!r}, y={self.y!r}, z={self.z!r})"


class _AffinePoint:
    """A point (x, y) in affine coordinates; (0, 0) stands for the identity."""

    __slots__ = ("x", "y")

    CURVE: ClassVar[type]

    def __init__(self, x, y) -> None:
        base = self.CURVE.BASE
        self.x = x if isinstance(x, base) else base(x)
        self.y = y if isinstance(y, base) else base(y)

    @classmethod
    def identity(cls):
        return cls(cls.CURVE.BASE.zero(), cls.CURVE.BASE.zero())

    @classmethod
    def generator(cls):
        gx, gy = cls.CURVE.GENERATOR
        return cls(gx, gy)

    @classmethod
    def from_xy(cls, x, y):
        """Build a point from coordinates; raise ValueError if it is off the curve."""
        point = cls(x, y)
        if not point.is_on_curve():
            raise ValueError("point is not on the curve")
        return point

    def is_identity(self) -> bool:
        return self.x.is_zero() and self.y.is_zero()

    def is_on_curve(self) -> bool:
        if self.is_identity():
            return True
        return self.y.square() == self.x.square() * self.x + self.CURVE.B

    def to_curve(self):
        if self.is_identity():
            return self.CURVE.identity()
        return self.CURVE(self.x, self.y, self.CURVE.BASE.one())

    def __neg__(self):
        return type(self)(self.x, -self.y)

    def __add__(self, other):
        if isinstance(other, (type(self), self.CURVE)):
            return self.to_curve() + other
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, (type(self), self.CURVE)):
            return self.to_curve() - other
        return NotImplemented

    def __mul__(self, scalar):
        if _scalar_value(scalar) is None:
            return NotImplemented
        return self.to_curve() * scalar

    __rmul__ = __mul__

    def __eq__(self, other) -> bool:
        if isinstance(other, type(self)):
            return self.x == other.x and self.y == other.y
        if isinstance(other, self.CURVE):
            return self.to_curve() == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.CURVE.__name__, self.x, self.y))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(x={self.x!r}, y={self.y!r})"


class G1(_ProjectivePoint):
    """A point of the BN254 G1 group, y^2 = x^3 + 3 over F_q."""

    __slots__ = ()

    BASE: ClassVar[type] = Fq
    B: ClassVar[Fq] = Fq(3)
    A: ClassVar[Fq] = Fq(0)
    GENERATOR: ClassVar[tuple] = (Fq(1), Fq(2))
    CURVE_ID: ClassVar[str] = "bn256_g1"
    SVDW_Z: ClassVar[Fq] = Fq.one()

    def __init__(self, x, y, z) -> None:
        super().__init__(x, y, z)

    @classmethod
    def identity(cls) -> "G1":
        """The point at infinity."""
        return super().identity()

    @classmethod
    def generator(cls) -> "G1":
        """The fixed generator (1, 2)."""
        return super().generator()

    @classmethod
    def random(cls, rng=None) -> "G1":
        """Draw a random point of G1."""
        return super().random(rng)

    def is_identity(self) -> bool:
        return super().is_identity()

    def is_on_curve(self) -> bool:
        return super().is_on_curve()

    def double(self) -> "G1":
        return super().double()

    def to_affine(self) -> "G1Affine":
        return super().to_affine()

    def endo(self) -> "G1":
        """Apply the endomorphism (x, y) -> (zeta * x, y)."""
        return super().endo()

    @staticmethod
    def decompose_scalar(scalar: Fr) -> tuple[int, bool, int, bool]:
        """Split k into (k1, k1_neg, k2, k2_neg) with k = ±k1 - zeta * (±k2)."""
        k = int(scalar)
        c1 = (_GAMMA2 * k) >> 256
        c2 = (_GAMMA1 * k) >> 256
        q1 = (c1 * _B1) & _MASK256
        q2 = (c2 * _B2) & _MASK256
        k2 = Fr(q2) - Fr(q1)
        k1 = scalar + k2 * Fr.ZETA
        k1_neg = int(k1) >> 128 != 0
        k2_neg = int(k2) >> 128 != 0
        if k1_neg:
            k1 = -k1
        if k2_neg:
            k2 = -k2
        return int(k1) & _MASK128, k1_neg, int(k2) & _MASK128, k2_neg


class G1Affine(_AffinePoint):
    """An affine point of the BN254 G1 group."""

    __slots__ = ()

    CURVE: ClassVar[type] = G1

    def __init__(self, x, y) -> None:
        super().__init__(x, y)

    @classmethod
    def identity(cls) -> "G1Affine":
        return super().identity()

    @classmethod
    def generator(cls) -> "G1Affine":
        return super().generator()

    @classmethod
    def from_xy(cls, x, y) -> "G1Affine":
        """Build a point from coordinates; raise ValueError if it is off the curve."""
        return super().from_xy(x, y)

    def is_identity(self) -> bool:
        return super().is_identity()

    def is_on_curve(self) -> bool:
        return super().is_on_curve()

    def to_curve(self) -> G1:
        return super().to_curve()


G1.AFFINE = G1Affine


def _fq2(c0_limbs, c1_limbs) -> Fq2:
    return Fq2(Fq.from_raw(c0_limbs), Fq.from_raw(c1_limbs))


class G2(_ProjectivePoint):
    """A point of the BN254 G2 group on the sextic twist over F_q2."""

    __slots__ = ()

    BASE: ClassVar[type] = Fq2
    B: ClassVar[Fq2] = _fq2(
        [0x3267E6DC24A138E5, 0xB5B4C5E559DBEFA3, 0x81BE18991BE06AC3, 0x2B149D40CEB8AAAE],
        [0xE4A2BD0685C315D2, 0xA74FA084E52D1852, 0xCD2CAFADEED8FDF4, 0x009713B03AF0FED4],
    )
    A: ClassVar[Fq2] = Fq2.zero()
    GENERATOR: ClassVar[tuple] = (
        _fq2(
            [0x46DEBD5CD992F6ED, 0x674322D4F75EDADD, 0x426A00665E5C4479, 0x1800DEEF121F1E76],
            [0x97E485B7AEF312C2, 0xF1AA493335A9E712, 0x7260BFB731FB5D25, 0x198E9393920D483A],
        ),
        _fq2(
            [0x4CE6CC0166FA7DAA, 0xE3D1E7690C43D37B, 0x4AAB71808DCB408F, 0x12C85EA5DB8C6DEB],
            [0x55ACDADCD122975B, 0xBC4B313370B38EF3, 0xEC9E99AD690C3395, 0x090689D0585FF075],
        ),
    )
    CURVE_ID: ClassVar[str] = "bn256_g2"

    def __init__(self, x, y, z) -> None:
        super().__init__(x, y, z)

    @classmethod
    def identity(cls) -> "G2":
        """The point at infinity."""
        return super().identity()

    @classmethod
    def generator(cls) -> "G2":
        """The fixed generator of G2."""
        return super().generator()

    @classmethod
    def random(cls, rng=None) -> "G2":
        """Draw a random point of the prime-order subgroup of the twist."""
        return super().random(rng)

    def is_identity(self) -> bool:
        return super().is_identity()

    def is_on_curve(self) -> bool:
        return super().is_on_curve()

    def double(self) -> "G2":
        return super().double()

    def to_affine(self) -> "G2Affine":
        return super().to_affine()

    def endo(self) -> "G2":
        """Apply the endomorphism (x, y) -> (zeta * x, y)."""
        return super().endo()

    def clear_cofactor(self) -> "G2":
        """Map a point of the twist into the prime-order subgroup."""
        return self._mul_int(_G2_COFACTOR)

    def is_torsion_free(self) -> bool:
        """Return whether the point lies in the subgroup of order r."""
        return self._mul_int(Fr.MODULUS).is_identity()


class G2Affine(_AffinePoint):
    """An affine point of the BN254 G2 group."""

    __slots__ = ()

    CURVE: ClassVar[type] = G2

    def __init__(self, x, y) -> None:
        super().__init__(x, y)

    @classmethod
    def identity(cls) -> "G2Affine":
        return super().identity()

    @classmethod
    def generator(cls) -> "G2Affine":
        return super().generator()

    @classmethod
    def from_xy(cls, x, y) -> "G2Affine":
        """Build a point from coordinates; raise ValueError if it is off the curve."""
        return super().from_xy(x, y)

    def is_identity(self) -> bool:
        return super().is_identity()

    def is_on_curve(self) -> bool:
        return super().is_on_curve()

    def to_curve(self) -> G2:
        return super().to_curve()


G2.AFFINE = G2Affine


def batch_normalize(points: Iterable[_ProjectivePoint]) -> list:
    """Convert projective points to affine with a single field inversion."""
    pts = list(points)
    finite = [p for p in pts if not p.is_identity()]
    inverses: list = []
    if finite:
        acc = type(finite[0]).BASE.one()
        prefix = []
        for p in finite:
            prefix.append(acc)
            acc = acc * p.z
        inv = acc.invert()
        for p, before in zip(reversed(finite), reversed(prefix)):
            inverses.append(inv * before)
            inv = inv * p.z
        inverses.reverse()
    remaining = iter(inverses)
    return [
        p.AFFINE.identity() if p.is_identity() else p._affine_with(next(remaining))
        for p in pts
    ]