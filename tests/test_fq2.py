import random

import pytest

from bncurve.arithmetic import int_to_limbs
from bncurve.fq import Fq, LegendreSymbol
from bncurve.fq2 import Fq2

MODULUS_LIMBS = [
    0x3C208C16D87CFD47,
    0x97816A916871CA8D,
    0xB85045B68181585D,
    0x30644E72E131A029,
]


@pytest.fixture
def rng():
    return random.Random(0x5962BE5D763D318D17DB37325406BCE5)


def test_ser(rng):
    a0 = Fq2.random(rng)
    a1 = Fq2.from_bytes(a0.to_bytes())
    assert a0 == a1


def test_from_bytes_rejects_overflow():
    data = Fq.MODULUS.to_bytes(32, "little") + bytes(32)
    with pytest.raises(ValueError):
        Fq2.from_bytes(data)


def test_from_bytes_rejects_wrong_length():
    with pytest.raises(ValueError):
        Fq2.from_bytes(bytes(63))


def test_fq2_ordering():
    a = Fq2(Fq.zero(), Fq.zero())
    b = a
    assert a == b
    b = Fq2(b.c0 + Fq.one(), b.c1)
    assert a < b
    a = Fq2(a.c0 + Fq.one(), a.c1)
    assert a == b
    b = Fq2(b.c0, b.c1 + Fq.one())
    assert a < b
    a = Fq2(a.c0 + Fq.one(), a.c1)
    assert a < b
    a = Fq2(a.c0, a.c1 + Fq.one())
    assert a > b
    b = Fq2(b.c0 + Fq.one(), b.c1)
    assert a == b


def test_fq2_basics():
    assert Fq2(Fq.zero(), Fq.zero()) == Fq2.zero()
    assert Fq2(Fq.one(), Fq.zero()) == Fq2.one()
    assert Fq2.zero().is_zero() is True
    assert Fq2.one().is_zero() is False
    assert Fq2(Fq.zero(), Fq.one()).is_zero() is False


def test_fq2_squaring():
    a = Fq2(Fq.one(), Fq.one()).square()
    assert a == Fq2(Fq.zero(), Fq.one() + Fq.one())
    a = Fq2(Fq.zero(), Fq.one()).square()
    assert a == Fq2(-Fq.one(), Fq.zero())


def test_fq2_mul_nonresidue(rng):
    nine = Fq.one().double().double().double() + Fq.one()
    nqr = Fq2(nine, Fq.one())
    for _ in range(200):
        a = Fq2.random(rng)
        assert a.mul_by_nonresidue() == a * nqr


def test_fq2_legendre():
    assert Fq2.zero().legendre() == LegendreSymbol.ZERO
    m1 = -Fq2.one()
    assert m1.legendre() == LegendreSymbol.QUADRATIC_RESIDUE
    m1 = m1.mul_by_nonresidue()
    assert m1.legendre() == LegendreSymbol.QUADRATIC_NON_RESIDUE


def test_sqrt_non_residue_raises(rng):
    seen = 0
    for _ in range(100):
        a = Fq2.random(rng)
        if a.legendre() == LegendreSymbol.QUADRATIC_NON_RESIDUE:
            seen += 1
            with pytest.raises(ValueError):
                a.sqrt()
    assert seen > 0


def test_sqrt_of_squares(rng):
    for _ in range(100):
        a = Fq2.random(rng)
        b = a.square()
        assert b.legendre() == LegendreSymbol.QUADRATIC_RESIDUE
        root = b.sqrt()
        assert a == root or a == -root


def test_sqrt_of_small_squares():
    c = Fq2.one()
    for _ in range(200):
        b = c.square()
        assert b.legendre() == LegendreSymbol.QUADRATIC_RESIDUE
        b = b.sqrt()
        if b != c:
            b = -b
        assert b == c
        c = c + Fq2.one()


def test_sqrt_of_zero():
    assert Fq2.zero().sqrt() == Fq2.zero()


def test_frobenius(rng):
    for _ in range(2):
        for i in range(14):
            a = Fq2.random(rng)
            b = a
            for _ in range(i):
                a = a.pow(MODULUS_LIMBS)
            assert a == b.frobenius_map(i)


def test_conjugate_and_norm():
    a = Fq2(3, 4)
    assert a.conjugate() == Fq2(3, -4)
    assert a.norm() == Fq(25)
    assert a * a.conjugate() == Fq2(25, 0)


def test_zeta_is_cube_root_of_unity():
    assert Fq2.ZETA != Fq2.one()
    assert Fq2.ZETA.pow(3) == Fq2.one()


def test_two_inv():
    assert Fq2.TWO_INV.double() == Fq2.one()


def test_field_multiplication(rng):
    for _ in range(200):
        a, b, c = (Fq2.random(rng) for _ in range(3))
        t0 = (a * b) * c
        t1 = (a * c) * b
        t2 = (b * c) * a
        assert t0 == t1
        assert t1 == t2


def test_field_addition(rng):
    for _ in range(200):
        a, b, c = (Fq2.random(rng) for _ in range(3))
        assert (a + b) + c == (a + c) + b
        assert (a + c) + b == (b + c) + a


def test_field_subtraction(rng):
    for _ in range(200):
        a, b = Fq2.random(rng), Fq2.random(rng)
        assert ((a - b) + (b - a)).is_zero()


def test_field_negation(rng):
    for _ in range(200):
        a = Fq2.random(rng)
        assert (-a + a).is_zero()


def test_field_doubling(rng):
    for _ in range(200):
        a = Fq2.random(rng)
        assert a + a == a.double()


def test_field_squaring(rng):
    for _ in range(200):
        a = Fq2.random(rng)
        assert a * a == a.square()


def test_field_inversion(rng):
    with pytest.raises(ZeroDivisionError):
        Fq2.zero().invert()
    for _ in range(200):
        a = Fq2.random(rng)
        assert a * a.invert() == Fq2.one()


def test_field_expansion(rng):
    for _ in range(200):
        a, b, c, d = (Fq2.random(rng) for _ in range(4))
        assert (a + b) * (c + d) == a * c + b * c + a * d + b * d


def test_field_zero_properties(rng):
    assert (-Fq2.zero()).is_zero()
    a = Fq2.random(rng)
    assert (a * Fq2.zero()).is_zero()
    assert a + Fq2.zero() == a


def test_serialization(rng):
    for _ in range(200):
        a = Fq2.random(rng)
        assert Fq2.from_raw_bytes(a.to_raw_bytes()) == a


def test_raw_bytes_of_one_is_montgomery_r():
    r = [0xD35D438DC58F0D9D, 0x0A78EB28F5C70B3D, 0x666EA36F7879462C, 0x0E0A77C19A07DF2F]
    expected = b"".join(limb.to_bytes(8, "little") for limb in r) + bytes(32)
    assert Fq2.one().to_raw_bytes() == expected


def test_from_raw_bytes_rejects_wrong_length():
    with pytest.raises(ValueError):
        Fq2.from_raw_bytes(bytes(32))


def test_from_uniform_bytes_fills_c0_only():
    value = Fq.MODULUS + 5
    data = value.to_bytes(64, "little")
    assert Fq2.from_uniform_bytes(data) == Fq2(5, 0)


def test_pow_accepts_limbs_and_int(rng):
    a = Fq2.random(rng)
    assert a.pow(int_to_limbs(12345, 4)) == a.pow(12345)
    assert a.pow(0) == Fq2.one()


def test_is_odd():
    assert Fq2(3, 0).is_odd() is True
    assert Fq2(2, 1).is_odd() is False