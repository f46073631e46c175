# bncurve

Pure Python arithmetic over the BN254 pairing-friendly elliptic curve. The
curve is also known as BN256 or alt_bn128. The package has no run-time
dependencies.

## What is in it

- `bncurve.arithmetic` holds 64-bit limb helpers: `adc`, `sbb`, `mac`,
  `macx`, `mul_512`, `limbs_to_int`, `int_to_limbs` and `is_less_than`. It
  also holds `PrimeFieldElement`, the base class of the two prime fields.
- `bncurve.fq` defines `Fq`, the base field with modulus
  `0x30644e72e131a029b85045b68181585d97816a916871ca8d3c208c16d87cfd47`. It
  provides `legendre()`, which returns a `LegendreSymbol`, and `sqrt()`.
- `bncurve.fr` defines `Fr`, the scalar field with modulus
  `0x30644e72e131a029b85045b68181585d2833e84879b9709143e1f593f0000001`. It
  provides a Tonelli-Shanks `sqrt()`.
- `bncurve.fq2`, `bncurve.fq6` and `bncurve.fq12` define `Fq2`, `Fq6` and
  `Fq12`. These form the tower of extension fields. Each class has:
  - `frobenius_map`, `pow` and `invert`;
  - multiplication by the non-residue;
  - the sparse products used by the Miller loop (`Fq6.mul_by_1`,
    `Fq6.mul_by_01`, `Fq12.mul_by_014`, `Fq12.mul_by_034`);
  - `Fq12.cyclotomic_square`.

  `Fq2` also has `sqrt`, `norm`, `legendre` and a lexicographic ordering,
  which compares `c1` first and then `c0`.
- `bncurve.curve` defines the curve points:
  - `G1` and `G2` in Jacobian coordinates;
  - `G1Affine` and `G2Affine` in affine form, where `(0, 0)` is the
    identity;
  - `batch_normalize`, which converts many points to affine with one
    inversion.

  Every point type has the endomorphism `endo()`. `G1` has
  `decompose_scalar`. `G2` has `clear_cofactor` and `is_torsion_free`.
- `bncurve.engine` holds the optimal ate pairing:
  - `pairing` and `multi_miller_loop`;
  - `G2Prepared`, which holds precomputed line coefficients;
  - `Gt`, the target group, written additively, with `final_exponentiation`.

All values are immutable.

Field elements support these operators: `+`, `-`, `*`, `/`, `**`, unary
`-` and `==`. Plain integers are accepted as operands.

Points support these operators:
- `+` and `-` with each other, mixing projective and affine points;
- unary `-`;
- `==`;
- `*` by an `Fr` or an integer.

Byte encodings are little-endian:

| Types | Methods | Content |
| --- | --- | --- |
| `Fq`, `Fr` | `to_repr` / `from_repr` | canonical value |
| `Fq`, `Fr` | `to_raw_bytes` / `from_raw_bytes` | Montgomery form |
| `Fq2` | `to_bytes` / `from_bytes` | canonical value |
| `Fq2` | `to_raw_bytes` / `from_raw_bytes` | Montgomery form |

## Example

```python
import random

from bncurve.curve import G1, G2
from bncurve.engine import pairing
from bncurve.fr import Fr

rng = random.Random(1)
a = Fr.random(rng)
b = Fr.random(rng)

p = G1.generator()
q = G2.generator()

lhs = pairing((p * a).to_affine(), (q * b).to_affine())
rhs = pairing((p * (a * b)).to_affine(), q.to_affine())
assert lhs == rhs
```

`random` methods take any object with a `getrandbits` method. If none is
given, they use the operating system's source.

## Errors

Failures raise exceptions; no method returns a status flag.

- Inverting or dividing by zero raises `ZeroDivisionError`.
- `sqrt` of a non-residue raises `ValueError`.
- Decoding bytes of the wrong length, or bytes not below the modulus, raises
  `ValueError`.
- `from_xy` with a point that is not on the curve raises `ValueError`.

## What it does not do

- There is no hash-to-curve.
- Curve points have no byte encoding; only field elements can be encoded.
- `Fq6` and `Fq12` have no byte encoding and no square root.
- The code is written for clarity, not speed.
- The code does not run in constant time. Do not use it where timing side
  channels matter.

## Running the tests

```
pip install .[test]
pytest
```