import random

import pytest

from bncurve.arithmetic import (
    PrimeFieldElement,
    adc,
    int_to_limbs,
    is_less_than,
    limbs_to_int,
    mac,
    macx,
    mul_512,
    sbb,
)

M = (1 << 64) - 1


class F101(PrimeFieldElement):
    __slots__ = ()
    MODULUS = 101
    SIZE = 1


class F103(PrimeFieldElement):
    __slots__ = ()
    MODULUS = 103
    SIZE = 1


def _check_underflow(x, y):
    borrow = 0
    for a, b in zip(x, y):
        _, borrow = sbb(a, b, borrow)
    return borrow >> 63 == 1


def test_adc_carries():
    assert adc(M, 1, 0) == (0, 1)
    assert adc(M, M, 1) == (M, 1)
    assert adc(2, 3, 0) == (5, 0)


def test_sbb_borrows():
    assert sbb(5, 3, 0) == (2, 0)
    assert sbb(0, 1, 0) == (M, M)
    assert sbb(5, 3, M) == (1, 0)


def test_mac_and_macx():
    assert mac(1, M, M, M) == (1, M)
    assert macx(0, M, 2) == (M - 1, 1)
    assert macx(7, 0, 123) == (7, 0)


def test_mul_512_values():
    assert mul_512([3, 0, 0, 0], [5, 0, 0, 0]) == [15, 0, 0, 0, 0, 0, 0, 0]
    assert mul_512([0, 1, 0, 0], [0, 0, 0, 1]) == [0, 0, 0, 0, 1, 0, 0, 0]
    assert mul_512([M] * 4, [M] * 4) == [1, 0, 0, 0, M - 1, M, M, M]


def test_mul_512_matches_product():
    rng = random.Random(7)
    for _ in range(50):
        a = [rng.getrandbits(64) for _ in range(4)]
        b = [rng.getrandbits(64) for _ in range(4)]
        assert limbs_to_int(mul_512(a, b)) == limbs_to_int(a) * limbs_to_int(b)


def test_mul_512_rejects_wrong_length():
    with pytest.raises(ValueError):
        mul_512([1, 2, 3], [1, 2, 3, 4])


def test_limb_round_trip_and_errors():
    assert limbs_to_int([1, 2]) == 1 + (2 << 64)
    assert int_to_limbs(1 + (2 << 64), 3) == [1, 2, 0]
    with pytest.raises(ValueError):
        int_to_limbs(-1, 4)
    with pytest.raises(ValueError):
        int_to_limbs(1 << 128, 2)
    with pytest.raises(ValueError):
        limbs_to_int([1 << 64])


def test_is_less_than_examples():
    assert is_less_than([M, 0, 0, 0], [0, 0, 0, 1])
    assert not is_less_than([0, 0, 0, 1], [M, 0, 0, 0])
    assert not is_less_than([4, 4, 4, 4], [4, 4, 4, 4])


def test_is_less_than_agrees_with_underflow():
    rng = random.Random(11)
    for _ in range(500):
        x = [rng.getrandbits(64) for _ in range(4)]
        y = [rng.getrandbits(64) for _ in range(4)]
        if rng.random() < 0.3:
            y[3] = x[3]
        assert is_less_than(x, y) == _check_underflow(x, y)


def test_field_arithmetic_small():
    assert F101(5) * F101(30) == F101(49)
    assert F101(100) + F101(2) == F101(1)
    assert F101(1) - F101(2) == F101(100)
    assert -F101(1) == F101(100)
    assert PrimeFieldElement.invert(F101(2)) == F101(51)
    assert PrimeFieldElement.pow(F101(3), 100) == F101.one()
    assert PrimeFieldElement.pow(F101(3), [100, 0]) == F101.one()
    assert F101(7) / F101(7) == F101.one()
    assert 3 * F101(40) == F101(19)


def test_field_zero_invert_raises():
    with pytest.raises(ZeroDivisionError):
        PrimeFieldElement.invert(F101.zero())


def test_field_mixed_types_raise():
    with pytest.raises(TypeError):
        F101(1) + F103(1)
    assert (F101(1) == F103(1)) is False
    assert PrimeFieldElement.to_repr(F101(1)) == PrimeFieldElement.to_repr(F103(1))


def test_field_repr_encoding():
    assert PrimeFieldElement.to_repr(F101(7)) == bytes([7])
    assert F101.from_repr(bytes([100])) == F101(100)
    with pytest.raises(ValueError):
        F101.from_repr(bytes([101]))
    with pytest.raises(ValueError):
        F101.from_repr(bytes([1, 2]))


def test_field_raw_bytes_are_montgomery():
    assert PrimeFieldElement.to_raw_bytes(F101.one()) == bytes([256 % 101])
    for v in range(101):
        assert F101.from_raw_bytes(F101(v).to_raw_bytes()) == F101(v)
    with pytest.raises(ValueError):
        F101.from_raw_bytes(bytes([200]))


def test_field_uniform_bytes_and_random():
    element = F101.from_uniform_bytes((1000).to_bytes(2, "little"))
    assert element == F101(1000 % 101)
    assert PrimeFieldElement.to_repr(element) == bytes([91])
    rng = random.Random(3)
    values = {int(F101.random(rng)) for _ in range(300)}
    assert all(0 <= v < 101 for v in values)
    assert len(values) > 50


def test_field_predicates_and_ordering():
    assert PrimeFieldElement.is_zero(F101.zero())
    assert not PrimeFieldElement.is_zero(F101.one())
    assert PrimeFieldElement.is_odd(F101(3))
    assert not PrimeFieldElement.is_odd(F101(4))
    assert PrimeFieldElement.double(F101(4)) == F101(8)
    assert PrimeFieldElement.square(F101(11)) == F101(20)
    assert F101(2) < F101(3)
    assert sorted([F101(9), F101(1), F101(5)]) == [F101(1), F101(5), F101(9)]