"""The optimal ate pairing on BN254 and its target group Gt."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Union

from .arithmetic import limbs_to_int
from .curve import G1, G1Affine, G2, G2Affine
from .fq import Fq
from .fq12 import Fq12
from .fq2 import Fq2
from .fq6 import FROBENIUS_COEFF_FQ6_C1
from .fr import Fr

BN_X = 4965661367192848881

# 6u + 2 in non-adjacent form, least significant digit first.
SIX_U_PLUS_2_NAF: tuple[int, ...] = (
    0, 0, 0, 1, 0, 1, 0, -1, 0, 0, 1, -1, 0, 0, 1, 0, 0, 1, 1, 0, -1, 0, 0, 1, 0, -1, 0, 0, 0, 0,
    1, 1, 1, 0, 0, -1, 0, 0, 1, 0, 0, 0, 0, 0, -1, 0, 0, 1, 1, 0, 0, -1, 0, 0, 0, 1, 1, 0, -1, 0,
    0, 1, 0, 1, 1,
)


def _from_montgomery(limbs: Sequence[int]) -> Fq:
    return Fq.from_raw_bytes(limbs_to_int(limbs).to_bytes(32, "little"))


XI_TO_Q_MINUS_1_OVER_2 = Fq2(
    _from_montgomery(
        (0xE4BBDD0C2936B629, 0xBB30F162E133BACB, 0x31A9D1B6F9645366, 0x253570BEA500F8DD)
    ),
    _from_montgomery(
        (0xA1D77CE45FFE77C7, 0x07AFFD117826D1DB, 0x6D16BD27BB7EDC6B, 0x2C87200285DEFECC)
    ),
)

Coefficients = tuple[Fq2, Fq2, Fq2]


@dataclass(frozen=True)
class Gt:
    """An element of the order-r target group, written additively over F_q12."""

    value: Fq12

    @classmethod
    def identity(cls) -> "Gt":
        return cls(Fq12.one())

    def is_identity(self) -> bool:
        return self.value == Fq12.one()

    def double(self) -> "Gt":
        return Gt(self.value.square())

    def final_exponentiation(self) -> "Gt":
        """Raise a Miller loop result to (q^12 - 1) / r."""

        def exp_by_x(f: Fq12) -> Fq12:
            res = Fq12.one()
            for i in range(63, -1, -1):
                res = res.cyclotomic_square()
                if (BN_X >> i) & 1:
                    res = res * f
            return res

        f1 = self.value.conjugate()
        f2 = self.value.invert()
        r = f1 * f2
        f2 = r
        r = r.frobenius_map(2) * f2

        fp = r.frobenius_map(1)
        fp2 = r.frobenius_map(2)
        fp3 = fp2.frobenius_map(1)

        fu = exp_by_x(r)
        fu2 = exp_by_x(fu)
        fu3 = exp_by_x(fu2)

        y3 = fu.frobenius_map(1)
        fu2p = fu2.frobenius_map(1)
        fu3p = fu3.frobenius_map(1)
        y2 = fu2.frobenius_map(2)

        y0 = fp * fp2 * fp3
        y1 = r.conjugate()
        y5 = fu2.conjugate()
        y3 = y3.conjugate()
        y4 = (fu * fu2p).conjugate()
        y6 = (fu3 * fu3p).conjugate()

        y6 = y6.cyclotomic_square() * y4 * y5
        t1 = y3 * y5 * y6
        y6 = y6 * y2
        t1 = t1.cyclotomic_square() * y6
        t1 = t1.cyclotomic_square()
        t0 = t1 * y1
        t1 = t1 * y0
        t0 = t0.cyclotomic_square() * t1
        return Gt(t0)

    def __add__(self, other) -> "Gt":
        if not isinstance(other, Gt):
            return NotImplemented
        return Gt(self.value * other.value)

    def __neg__(self) -> "Gt":
        # Elements are unitary, so the inverse is the conjugate.
        return Gt(self.value.conjugate())

    def __sub__(self, other) -> "Gt":
        if not isinstance(other, Gt):
            return NotImplemented
        return self + (-other)

    def __mul__(self, scalar) -> "Gt":
        if isinstance(scalar, Fr):
            k = int(scalar)
        elif isinstance(scalar, int) and not isinstance(scalar, bool):
            k = int(Fr(scalar))
        else:
            return NotImplemented
        acc = Gt.identity()
        for bit in bin(k)[2:]:
            acc = acc.double()
            if bit == "1":
                acc = acc + self
        return acc

    __rmul__ = __mul__

    def __str__(self) -> str:
        return repr(self)


def _doubling_step(r: G2) -> tuple[G2, Coefficients]:
    tmp0 = r.x.square()
    tmp1 = r.y.square()
    tmp2 = tmp1.square()
    tmp3 = ((tmp1 + r.x).square() - tmp0 - tmp2).double()
    tmp4 = tmp0.double() + tmp0
    tmp6 = r.x + tmp4
    tmp5 = tmp4.square()
    zsquared = r.z.square()

    nx = tmp5 - tmp3 - tmp3
    nz = (r.z + r.y).square() - tmp1 - zsquared
    ny = (tmp3 - nx) * tmp4 - tmp2.double().double().double()

    c1 = -((tmp4 * zsquared).double())
    c2 = tmp6.square() - tmp0 - tmp5 - tmp1.double().double()
    c0 = (nz * zsquared).double()
    return G2(nx, ny, nz), (c0, c1, c2)


def _addition_step(r: G2, q: G2Affine) -> tuple[G2, Coefficients]:
    zsquared = r.z.square()
    ysquared = q.y.square()
    t0 = zsquared * q.x
    t1 = ((q.y + r.z).square() - ysquared - zsquared) * zsquared
    t2 = t0 - r.x
    t3 = t2.square()
    t4 = t3.double().double()
    t5 = t4 * t2
    t6 = t1 - r.y - r.y
    t9 = t6 * q.x
    t7 = t4 * r.x

    nx = t6.square() - t5 - t7 - t7
    nz = (r.z + t2).square() - zsquared - t3
    t10 = q.y + nz
    t8 = (t7 - nx) * t6
    t0 = (r.y * t5).double()
    ny = t8 - t0

    t10 = t10.square() - ysquared - nz.square()
    t9 = t9.double() - t10
    t10 = nz.double()
    t1 = (-t6).double()
    return G2(nx, ny, nz), (t10, t1, t9)


@dataclass(frozen=True)
class G2Prepared:
    """Line coefficients of a G2 point, precomputed for the Miller loop."""

    coeffs: tuple[Coefficients, ...]
    infinity: bool

    def is_zero(self) -> bool:
        return self.infinity

    @classmethod
    def from_affine(cls, q: Union[G2Affine, G2]) -> "G2Prepared":
        if isinstance(q, G2):
            q = q.to_affine()
        if q.is_identity():
            return cls((), True)

        coeffs: list[Coefficients] = []
        r = q.to_curve()
        negq = -q

        for i in range(len(SIX_U_PLUS_2_NAF) - 1, 0, -1):
            r, c = _doubling_step(r)
            coeffs.append(c)
            digit = SIX_U_PLUS_2_NAF[i - 1]
            if digit == 1:
                r, c = _addition_step(r, q)
                coeffs.append(c)
            elif digit == -1:
                r, c = _addition_step(r, negq)
                coeffs.append(c)

        q1 = G2Affine(
            q.x.conjugate() * FROBENIUS_COEFF_FQ6_C1[1],
            q.y.conjugate() * XI_TO_Q_MINUS_1_OVER_2,
        )
        r, c = _addition_step(r, q1)
        coeffs.append(c)

        minusq2 = G2Affine(q.x * FROBENIUS_COEFF_FQ6_C1[2], q.y)
        r, c = _addition_step(r, minusq2)
        coeffs.append(c)

        return cls(tuple(coeffs), False)


def _ell(f: Fq12, coeffs: Coefficients, p: G1Affine) -> Fq12:
    c0 = coeffs[0] * p.y
    c1 = coeffs[1] * p.x
    return f.mul_by_034(c0, c1, coeffs[2])


def multi_miller_loop(
    terms: Iterable[tuple[Union[G1Affine, G1], G2Prepared]],
) -> Gt:
    """Run one shared Miller loop over (G1 point, prepared G2 point) pairs."""
    pairs = []
    for p, q in terms:
        if isinstance(p, G1):
            p = p.to_affine()
        if not p.is_identity() and not q.is_zero():
            pairs.append((p, iter(q.coeffs)))

    def step(f: Fq12) -> Fq12:
        for p, coeffs in pairs:
            f = _ell(f, next(coeffs), p)
        return f

    f = Fq12.one()
    last = len(SIX_U_PLUS_2_NAF) - 1
    for i in range(last, 0, -1):
        if i != last:
            f = f.square()
        f = step(f)
        if SIX_U_PLUS_2_NAF[i - 1] in (1, -1):
            f = step(f)

    f = step(f)
    f = step(f)

    for _, coeffs in pairs:
        if next(coeffs, None) is not None:
            raise RuntimeError("prepared coefficients were not fully consumed")
    return Gt(f)


def pairing(g1: Union[G1Affine, G1], g2: Union[G2Affine, G2]) -> Gt:
    """Compute the optimal ate pairing e(g1, g2)."""
    prepared = G2Prepared.from_affine(g2)
    return multi_miller_loop([(g1, prepared)]).final_exponentiation()