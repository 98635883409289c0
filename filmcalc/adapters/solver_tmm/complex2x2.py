"""Complex scalar helpers and 2×2 complex matrices for the characteristic-matrix method.

Addition, subtraction and multiplication are Python's ``complex`` operators.
The helpers below cover what those operators do not: IEEE-style division,
squared magnitude, complex trig via hyperbolic identities and the principal
square root. Matrices are ``numpy`` arrays of shape (2, 2), dtype complex.

Principal branch of ``csqrt``: the cut lies on the negative real axis. On the
cut the sign of the imaginary zero picks the side, as with ``atan2``
(``-4+0j`` → ``2j``, ``complex(-4, -0.0)`` → ``-2j``).
"""
from __future__ import annotations

from functools import reduce
from math import atan2, cos, cosh, sin, sinh, sqrt
from typing import Iterable

import numpy as np

Mat2 = np.ndarray  # shape (2, 2), dtype complex


def cdiv(a: complex, b: complex) -> complex:
    """a / b. A zero-magnitude ``b`` yields inf/NaN instead of raising."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return complex(np.complex128(a) / np.complex128(b))


def abs2(z: complex) -> float:
    return z.real * z.real + z.imag * z.imag


def cscale(s: float, z: complex) -> complex:
    return complex(s * z.real, s * z.imag)


def ccos(z: complex) -> complex:
    # cos(a+bi) = cos a·cosh b − i·sin a·sinh b
    a, b = z.real, z.imag
    return complex(cos(a) * cosh(b), -sin(a) * sinh(b))


def csin(z: complex) -> complex:
    # sin(a+bi) = sin a·cosh b + i·cos a·sinh b
    a, b = z.real, z.imag
    return complex(sin(a) * cosh(b), cos(a) * sinh(b))


def csqrt(z: complex) -> complex:
    """Principal square root via polar form: √|z| at half the argument."""
    r = sqrt(sqrt(z.real * z.real + z.imag * z.imag))
    theta = atan2(z.imag, z.real) / 2.0
    return complex(r * cos(theta), r * sin(theta))


def mat_identity() -> Mat2:
    return np.eye(2, dtype=complex)


def mat_mul(a: Mat2, b: Mat2) -> Mat2:
    # row × column; a @ b ≠ b @ a in general
    return a @ b


def mat_product(mats: Iterable[Mat2]) -> Mat2:
    """Left-to-right product M1·M2·…·Mn; identity for an empty sequence."""
    return reduce(mat_mul, mats, mat_identity())
