import random

import pytest

from bncurve.arithmetic import int_to_limbs, is_less_than
from bncurve.fq import Fq, LegendreSymbol

SEED = 0x5962BE5D763D318D17DB37325406BCE5
MODULUS_LIMBS = [0x3C208C16D87CFD47, 0x97816A916871CA8D, 0xB85045B68181585D, 0x30644E72E131A029]
R_LIMBS = [0xD35D438DC58F0D9D, 0x0A78EB28F5C70B3D, 0x666EA36F7879462C, 0x0E0A77C19A07DF2F]
NEG_ONE_LIMBS = [0x68C3488912EDEFAA, 0x8D087F6872AABF4F, 0x51E1A24709081231, 0x2259D6B14729C0FA]


def _limb_bytes(limbs):
    return b"".join(limb.to_bytes(8, "little") for limb in limbs)


@pytest.fixture
def rng():
    return random.Random(SEED)


def test_from_u512():
    expected = Fq.from_raw(
        [0x1F8905A172AFFA8A, 0xDE45AD177DCF3306, 0xAAA7987907D73AE2, 0x24D349431D468E30]
    )
    assert Fq.from_u512([0xAAAAAAAAAAAAAAAA] * 8) == expected


def test_constants():
    assert Fq.TWO_INV * 2 == Fq.one()
    assert Fq.ZETA.pow(3) == Fq.one()
    assert Fq.ZETA.square() != Fq.one()
    assert Fq.ROOT_OF_UNITY.square() == Fq.one()
    assert Fq.MULTIPLICATIVE_GENERATOR.legendre() == LegendreSymbol.QUADRATIC_NON_RESIDUE
    assert int(Fq.from_raw(MODULUS_LIMBS)) == 0


def test_sqrt_of_two_inv_squared():
    v = Fq.TWO_INV.square().sqrt()
    assert v == Fq.TWO_INV or -v == Fq.TWO_INV


def test_sqrt_random(rng):
    for _ in range(300):
        a = Fq.random(rng)
        b = a.square()
        assert b.legendre() == LegendreSymbol.QUADRATIC_RESIDUE
        root = b.sqrt()
        assert a == root or a == -root


def test_sqrt_consecutive():
    c = Fq.one()
    for _ in range(200):
        b = c.square()
        assert b.legendre() == LegendreSymbol.QUADRATIC_RESIDUE
        b = b.sqrt()
        if b != c:
            b = -b
        assert b == c
        c += Fq.one()


def test_sqrt_non_residue_raises():
    with pytest.raises(ValueError):
        Fq(3).sqrt()


def test_legendre_zero():
    assert Fq.zero().legendre() == LegendreSymbol.ZERO


def test_raw_bytes_montgomery_form():
    assert Fq.one().to_raw_bytes() == _limb_bytes(R_LIMBS)
    assert Fq(-1).to_raw_bytes() == _limb_bytes(NEG_ONE_LIMBS)


def test_serialization_round_trip(rng):
    for _ in range(300):
        a = Fq.random(rng)
        assert Fq.from_raw_bytes(a.to_raw_bytes()) == a
        assert Fq.from_repr(a.to_repr()) == a


def test_serialization_check(rng):
    for _ in range(500):
        word = [rng.getrandbits(64) for _ in range(4)]
        if rng.random() < 0.5:
            word[3] &= 0x3FFFFFFFFFFFFFFF
        raw = _limb_bytes(word)
        if is_less_than(word, MODULUS_LIMBS):
            assert Fq.from_raw_bytes(raw).to_raw_bytes() == raw
        else:
            with pytest.raises(ValueError):
                Fq.from_raw_bytes(raw)


def test_from_repr_rejects_modulus():
    with pytest.raises(ValueError):
        Fq.from_repr(_limb_bytes(MODULUS_LIMBS))
    assert Fq.from_repr(_limb_bytes(int_to_limbs(Fq.MODULUS - 1, 4))) == -Fq.one()


def test_multiplication_associative(rng):
    for _ in range(200):
        a, b, c = Fq.random(rng), Fq.random(rng), Fq.random(rng)
        assert (a * b) * c == (a * c) * b == (b * c) * a


def test_addition_associative(rng):
    for _ in range(200):
        a, b, c = Fq.random(rng), Fq.random(rng), Fq.random(rng)
        assert (a + b) + c == (a + c) + b == (b + c) + a


def test_subtraction_and_negation(rng):
    for _ in range(200):
        a, b = Fq.random(rng), Fq.random(rng)
        assert ((a - b) + (b - a)).is_zero()
        assert (-a + a).is_zero()


def test_doubling_and_squaring(rng):
    for _ in range(200):
        a = Fq.random(rng)
        assert a + a == a.double()
        assert a * a == a.square()


def test_inversion(rng):
    for _ in range(200):
        a = Fq.random(rng)
        assert a * a.invert() == Fq.one()
    with pytest.raises(ZeroDivisionError):
        Fq.zero().invert()


def test_expansion(rng):
    for _ in range(200):
        a, b, c, d = (Fq.random(rng) for _ in range(4))
        assert (a + b) * (c + d) == a * c + b * c + a * d + b * d


def test_zero_properties(rng):
    assert Fq.zero().is_zero()
    assert (-Fq.zero()).is_zero()
    assert (Fq.random(rng) * Fq.zero()).is_zero()
    a = Fq.random(rng)
    assert a + Fq.zero() == a


def test_is_odd_uses_canonical_value():
    assert Fq.one().is_odd()
    assert not Fq(2).is_odd()
    assert Fq(-1).is_odd() is False