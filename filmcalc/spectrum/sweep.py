from __future__ import annotations

from concurrent.futures import Executor
from functools import partial

import numpy as np
from numpy.typing import NDArray

from filmcalc.adapters.solver_tmm.tmm import compute_rt
from filmcalc.domain.errors import InvalidRange
from filmcalc.domain.models import SpectrumPoint, SpectrumRange, StackDef
from filmcalc.domain.ports import MaterialDB

# Slack when counting steps so that e.g. 300→1100 by 0.1 keeps its last sample
_STEP_EPS = 1e-9


def check_range(rng: SpectrumRange) -> None:
    if not rng.step_nm > 0.0:
        raise InvalidRange(f"step_nm must be > 0 (got {rng.step_nm})")
    if rng.end_nm < rng.start_nm:
        raise InvalidRange(f"end_nm ({rng.end_nm}) is before start_nm ({rng.start_nm})")


def wavelength_grid(rng: SpectrumRange) -> NDArray[np.floating]:
    """start, start+step, … up to the last value ≤ end (end inclusive when it lands on the grid)."""
    check_range(rng)
    count = int(np.floor((rng.end_nm - rng.start_nm) / rng.step_nm + _STEP_EPS)) + 1
    # start + i·step rather than repeated addition: no drift over long sweeps
    return rng.start_nm + rng.step_nm * np.arange(count, dtype=float)


def solve_point(stack: StackDef, materials: MaterialDB, wavelength_nm: float) -> SpectrumPoint:
    res = compute_rt(stack, wavelength_nm, materials)
    return SpectrumPoint(wavelength_nm=float(wavelength_nm), R=res.R, T=res.T, A=res.A)


def compute_spectrum(
    stack: StackDef,
    materials: MaterialDB,
    rng: SpectrumRange | None = None,
    *,
    executor: Executor | None = None,
) -> list[SpectrumPoint]:
    """Solve the stack at every grid wavelength, ascending.

    The range is checked before any sample is solved. Samples are independent;
    with an ``executor`` they are fanned out and reassembled in grid order.
    """
    grid = wavelength_grid(rng if rng is not None else SpectrumRange())
    fn = partial(solve_point, stack, materials)
    if executor is None:
        return [fn(float(lam)) for lam in grid]
    return list(executor.map(fn, (float(lam) for lam in grid)))
