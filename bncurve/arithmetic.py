"""Limb arithmetic helpers and a generic prime-field element type."""

from __future__ import annotations

import secrets
from functools import total_ordering
from typing import ClassVar, Sequence, TypeVar, Union

U64_MASK = (1 << 64) - 1
_U128_MASK = (1 << 128) - 1

FieldT = TypeVar("FieldT", bound="PrimeFieldElement")


def adc(a: int, b: int, carry: int) -> tuple[int, int]:
    """Compute a + b + carry, returning the low word and the carry out."""
    total = a + b + carry
    return total & U64_MASK, (total >> 64) & U64_MASK


def sbb(a: int, b: int, borrow: int) -> tuple[int, int]:
    """Compute a - (b + borrow), returning the low word and the new borrow.

    The borrow is all ones when the subtraction underflowed, zero otherwise;
    only its top bit is consumed on input.
    """
    ret = (a - (b + (borrow >> 63))) & _U128_MASK
    return ret & U64_MASK, ret >> 64


def mac(a: int, b: int, c: int, carry: int) -> tuple[int, int]:
    """Compute a + b * c + carry, returning the low word and the carry out."""
    total = a + b * c + carry
    return total & U64_MASK, (total >> 64) & U64_MASK


def macx(a: int, b: int, c: int) -> tuple[int, int]:
    """Compute a + b * c, returning the low word and the carry out."""
    total = a + b * c
    return total & U64_MASK, (total >> 64) & U64_MASK


def limbs_to_int(limbs: Sequence[int]) -> int:
    """Join little-endian 64-bit limbs into one integer."""
    value = 0
    for shift, limb in enumerate(limbs):
        if not 0 <= limb <= U64_MASK:
            raise ValueError(f"limb {limb:#x} does not fit in 64 bits")
        value |= limb << (64 * shift)
    return value


def int_to_limbs(value: int, count: int) -> list[int]:
    """Split a non-negative integer into ``count`` little-endian 64-bit limbs."""
    if value < 0:
        raise ValueError("value must be non-negative")
    if value >> (64 * count):
        raise ValueError(f"value does not fit in {count} limbs")
    return [(value >> (64 * i)) & U64_MASK for i in range(count)]


def mul_512(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """Multiply two 256-bit limb arrays into a 512-bit limb array."""
    if len(a) != 4 or len(b) != 4:
        raise ValueError("mul_512 expects two arrays of four limbs")
    return int_to_limbs(limbs_to_int(a) * limbs_to_int(b), 8)


def is_less_than(x: Sequence[int], y: Sequence[int]) -> bool:
    """Return whether the limb array ``x`` is numerically below ``y``."""
    return limbs_to_int(x) < limbs_to_int(y)


Exponent = Union[int, Sequence[int]]


@total_ordering
class PrimeFieldElement:
    """An element of a prime field, held as its canonical integer value.

    Subclasses set ``MODULUS`` and ``SIZE`` (the byte length of an encoding).
    Raw byte encodings carry the Montgomery form ``value * 2^(8*SIZE) mod p``.
    """

    __slots__ = ("_value",)

    MODULUS: ClassVar[int] = 0
    SIZE: ClassVar[int] = 32
    NUM_BITS: ClassVar[int] = 0
    CAPACITY: ClassVar[int] = 0
    S: ClassVar[int] = 0

    def __init__(self, value: Union[int, "PrimeFieldElement"]) -> None:
        if isinstance(value, PrimeFieldElement):
            if type(value) is not type(self):
                raise TypeError(
                    f"cannot build {type(self).__name__} from {type(value).__name__}"
                )
            value = value._value
        if not isinstance(value, int):
            raise TypeError(f"expected an integer, got {type(value).__name__}")
        self._value = value % self.MODULUS

    # construction -------------------------------------------------------

    @classmethod
    def from_raw(cls: type[FieldT], limbs: Sequence[int]) -> FieldT:
        """Build an element from little-endian 64-bit limbs of its value."""
        return cls(limbs_to_int(limbs))

    @classmethod
    def from_u512(cls: type[FieldT], limbs: Sequence[int]) -> FieldT:
        """Reduce a 512-bit integer given as eight little-endian limbs."""
        if len(limbs) != 8:
            raise ValueError("from_u512 expects eight limbs")
        return cls(limbs_to_int(limbs))

    @classmethod
    def from_uniform_bytes(cls: type[FieldT], data: bytes) -> FieldT:
        """Reduce a little-endian integer of twice the encoding size."""
        if len(data) != 2 * cls.SIZE:
            raise ValueError(f"expected {2 * cls.SIZE} bytes, got {len(data)}")
        return cls(int.from_bytes(data, "little"))

    @classmethod
    def from_repr(cls: type[FieldT], data: bytes) -> FieldT:
        """Decode a canonical little-endian encoding; reject non-canonical input."""
        if len(data) != cls.SIZE:
            raise ValueError(f"expected {cls.SIZE} bytes, got {len(data)}")
        value = int.from_bytes(data, "little")
        if value >= cls.MODULUS:
            raise ValueError("encoding is not below the modulus")
        return cls(value)

    def to_repr(self) -> bytes:
        """Return the canonical little-endian encoding."""
        return self._value.to_bytes(self.SIZE, "little")

    @classmethod
    def from_raw_bytes(cls: type[FieldT], data: bytes) -> FieldT:
        """Decode the Montgomery-form encoding produced by ``to_raw_bytes``."""
        if len(data) != cls.SIZE:
            raise ValueError(f"expected {cls.SIZE} bytes, got {len(data)}")
        montgomery = int.from_bytes(data, "little")
        if montgomery >= cls.MODULUS:
            raise ValueError("raw encoding is not below the modulus")
        return cls(montgomery * pow(2, -8 * cls.SIZE, cls.MODULUS))

    def to_raw_bytes(self) -> bytes:
        """Return the little-endian Montgomery form of this element."""
        montgomery = (self._value << (8 * self.SIZE)) % self.MODULUS
        return montgomery.to_bytes(self.SIZE, "little")

    @classmethod
    def random(cls: type[FieldT], rng=None) -> FieldT:
        """Draw a uniformly distributed element from ``rng`` (or the OS)."""
        source = rng if rng is not None else secrets.SystemRandom()
        data = source.getrandbits(16 * cls.SIZE).to_bytes(2 * cls.SIZE, "little")
        return cls.from_uniform_bytes(data)

    @classmethod
    def zero(cls: type[FieldT]) -> FieldT:
        return cls(0)

    @classmethod
    def one(cls: type[FieldT]) -> FieldT:
        return cls(1)

    # queries ------------------------------------------------------------

    def is_zero(self) -> bool:
        return self._value == 0

    def is_odd(self) -> bool:
        return bool(self._value & 1)

    # arithmetic ---------------------------------------------------------

    def double(self: FieldT) -> FieldT:
        return type(self)(self._value << 1)

    def square(self: FieldT) -> FieldT:
        return type(self)(self._value * self._value)

    def pow(self: FieldT, exponent: Exponent) -> FieldT:
        """Raise to a non-negative power given as an int or little-endian limbs."""
        power = exponent if isinstance(exponent, int) else limbs_to_int(exponent)
        if power < 0:
            raise ValueError("exponent must be non-negative")
        return type(self)(pow(self._value, power, self.MODULUS))

    def invert(self: FieldT) -> FieldT:
        """Return the multiplicative inverse; zero has none."""
        if self._value == 0:
            raise ZeroDivisionError("zero has no multiplicative inverse")
        return type(self)(pow(self._value, self.MODULUS - 2, self.MODULUS))

    def _operand(self, other) -> int | None:
        if type(other) is type(self):
            return other._value
        if isinstance(other, int) and not isinstance(other, PrimeFieldElement):
            return other
        return None

    def __add__(self: FieldT, other) -> FieldT:
        value = self._operand(other)
        if value is None:
            return NotImplemented
        return type(self)(self._value + value)

    __radd__ = __add__

    def __sub__(self: FieldT, other) -> FieldT:
        value = self._operand(other)
        if value is None:
            return NotImplemented
        return type(self)(self._value - value)

    def __rsub__(self: FieldT, other) -> FieldT:
        value = self._operand(other)
        if value is None:
            return NotImplemented
        return type(self)(value - self._value)

    def __mul__(self: FieldT, other) -> FieldT:
        value = self._operand(other)
        if value is None:
            return NotImplemented
        return type(self)(self._value * value)

    __rmul__ = __mul__

    def __truediv__(self: FieldT, other) -> FieldT:
        value = self._operand(other)
        if value is None:
            return NotImplemented
        return self * type(self)(value).invert()

    def __pow__(self: FieldT, exponent: int) -> FieldT:
        return self.pow(exponent)

    def __neg__(self: FieldT) -> FieldT:
        return type(self)(-self._value)

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value < other._value

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._value))

    def __int__(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}(0x{self._value:0{2 * self.SIZE}x})"

    def __str__(self) -> str:
        return f"0x{self._value:0{2 * self.SIZE}x}"