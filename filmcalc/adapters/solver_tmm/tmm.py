from __future__ import annotations

from math import pi
from typing import Tuple

from filmcalc.adapters.solver_tmm.complex2x2 import (
    Mat2,
    abs2,
    ccos,
    cdiv,
    cscale,
    csin,
    mat_identity,
    mat_product,
)
from filmcalc.domain.models import RefractiveIndex, RTResult, StackDef
from filmcalc.domain.ports import MaterialDB

# Normal incidence only. Complex index η = n − i·k (exp(+iωt) time dependence);
# every place a complex index appears goes through `eta`.


def eta(nk: RefractiveIndex) -> complex:
    return complex(nk.n, -nk.k)


def _index_at(materials: MaterialDB, material_id: str, wavelength_nm: float) -> complex:
    # UnknownMaterial propagates from the registry unchanged
    return eta(materials.get_material(material_id).nk(wavelength_nm))


def _characteristic_matrix(n: complex, thickness_nm: float, wavelength_nm: float) -> Mat2:
    # δ = 2π·d·η/λ is complex whenever k > 0, hence complex cos/sin
    delta = cscale(2.0 * pi * thickness_nm / wavelength_nm, n)
    c, s = ccos(delta), csin(delta)
    M = mat_identity()
    M[0, 0] = c
    M[0, 1] = cdiv(1j * s, n)
    M[1, 0] = 1j * n * s
    M[1, 1] = c
    return M


def layer_matrix(
    material_id: str, thickness_nm: float, wavelength_nm: float, materials: MaterialDB
) -> Mat2:
    """Characteristic matrix [[cos δ, i·sin δ/η], [i·η·sin δ, cos δ]] of one layer."""
    n = _index_at(materials, material_id, wavelength_nm)
    return _characteristic_matrix(n, float(thickness_nm), float(wavelength_nm))


def system_matrix(stack: StackDef, wavelength_nm: float, materials: MaterialDB) -> Mat2:
    # Physical order: incident side first, M = M1·M2·…·Mn
    return mat_product(
        layer_matrix(L.material_id, L.thickness_nm, wavelength_nm, materials) for L in stack.layers
    )


def _rt_from_global(M: Mat2, n0: complex, ns: complex) -> Tuple[complex, complex]:
    # r, t from the global 2×2 matrix and the terminal indices
    m11, m12, m21, m22 = complex(M[0, 0]), complex(M[0, 1]), complex(M[1, 0]), complex(M[1, 1])
    denom = n0 * m11 + n0 * ns * m12 + m21 + ns * m22
    r = cdiv(n0 * m11 + n0 * ns * m12 - m21 - ns * m22, denom)
    t = cdiv(2.0 * n0, denom)
    return r, t


def compute_rt(stack: StackDef, wavelength_nm: float, materials: MaterialDB) -> RTResult:
    """R, T, A of the stack at one wavelength (nm).

    A zero denominator is not special-cased: R/T come back inf/NaN and the
    R + T + A ≈ 1 check fails for the caller.
    """
    lam = float(wavelength_nm)
    n0 = _index_at(materials, stack.incident, lam)
    ns = _index_at(materials, stack.substrate, lam)

    M = system_matrix(stack, lam, materials)
    r, t = _rt_from_global(M, n0, ns)

    R = abs2(r)
    T = (ns.real / n0.real) * abs2(t)
    A = max(0.0, 1.0 - R - T)
    return RTResult(R=R, T=T, A=A)
