from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Tuple

import numpy as np

from filmcalc.domain.models import RefractiveIndex

# All wavelengths entering a dispersion callable are in nanometres.


@dataclass(frozen=True)
class ConstantDispersion:
    n: float = 1.0
    k: float = 0.0

    def __call__(self, wavelength_nm: float) -> RefractiveIndex:
        return RefractiveIndex(n=self.n, k=self.k)


@dataclass(frozen=True)
class SellmeierDispersion:
    r"""Transparent dielectric: n² = 1 + Σ Bᵢ·λ²/(λ² − Cᵢ), λ in μm, k = 0.

    ``coefficients`` is a sequence of (B, C) pairs with C in μm².
    Close to a pole the sum can drop below 1 (or stop being finite); n² is
    clamped to 1 there so the solver never sees n < 1 or NaN.
    """

    coefficients: Tuple[Tuple[float, float], ...]
    _B: np.ndarray = field(init=False, repr=False, compare=False)
    _C: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        coeffs = np.asarray(self.coefficients, dtype=float).reshape(-1, 2)
        object.__setattr__(self, "_B", coeffs[:, 0])
        object.__setattr__(self, "_C", coeffs[:, 1])

    def __call__(self, wavelength_nm: float) -> RefractiveIndex:
        l2 = (float(wavelength_nm) / 1000.0) ** 2  # μm²
        with np.errstate(divide="ignore", invalid="ignore"):
            n2 = 1.0 + float(np.sum(self._B * l2 / (l2 - self._C)))
        if not np.isfinite(n2) or n2 < 1.0:
            n2 = 1.0
        return RefractiveIndex(n=float(np.sqrt(n2)), k=0.0)


@dataclass(frozen=True)
class TabulatedDispersion:
    """Piecewise-linear n, k between (λ_nm, n, k) samples sorted by wavelength.

    Outside the table the boundary sample is returned unchanged.
    """

    table: Tuple[Tuple[float, float, float], ...]
    _lam: np.ndarray = field(init=False, repr=False, compare=False)
    _n: np.ndarray = field(init=False, repr=False, compare=False)
    _k: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        data = np.asarray(self.table, dtype=float)
        if data.ndim != 2 or data.shape[0] == 0 or data.shape[1] != 3:
            raise ValueError("table must be a non-empty sequence of (lambda_nm, n, k) rows")
        if np.any(np.diff(data[:, 0]) <= 0.0):
            raise ValueError("table wavelengths must be strictly ascending")
        object.__setattr__(self, "_lam", data[:, 0])
        object.__setattr__(self, "_n", data[:, 1])
        object.__setattr__(self, "_k", data[:, 2])

    def __call__(self, wavelength_nm: float) -> RefractiveIndex:
        lam = float(wavelength_nm)
        # np.interp holds the end values outside [lam[0], lam[-1]]
        n = float(np.interp(lam, self._lam, self._n))
        k = float(np.interp(lam, self._lam, self._k))
        return RefractiveIndex(n=n, k=k)


def sellmeier(pairs: Sequence[Tuple[float, float]]) -> SellmeierDispersion:
    return SellmeierDispersion(tuple((float(b), float(c)) for b, c in pairs))


def tabulated(rows: Sequence[Tuple[float, float, float]]) -> TabulatedDispersion:
    return TabulatedDispersion(tuple((float(lam), float(n), float(k)) for lam, n, k in rows))
