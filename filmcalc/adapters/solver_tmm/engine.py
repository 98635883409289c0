from __future__ import annotations

import logging
from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Any, Mapping, Sequence, cast

import numpy as np
import xarray as xr

from filmcalc.adapters.materials.builtin import builtin_materials
from filmcalc.domain.models import SolverScalars, SpectrumPoint, SpectrumSummary, SweepRequest
from filmcalc.domain.ports import MaterialDB, SolverEngine
from filmcalc.spectrum.summary import summarize_spectrum
from filmcalc.spectrum.sweep import compute_spectrum

logger = logging.getLogger(__name__)


@dataclass
class SpectrumResult:
    scalars: SolverScalars
    data: xr.Dataset
    points: list[SpectrumPoint]
    summary: SpectrumSummary


def points_to_dataset(points: Sequence[SpectrumPoint], **attrs: Any) -> xr.Dataset:
    """Pack an ordered point sequence as a Dataset on `wavelength_nm` with R, T, A."""
    lam = np.array([p.wavelength_nm for p in points], dtype=float)
    R = np.array([p.R for p in points], dtype=float)
    T = np.array([p.T for p in points], dtype=float)
    A = np.array([p.A for p in points], dtype=float)
    return xr.Dataset(
        data_vars=dict(
            R=(("wavelength_nm",), R),
            T=(("wavelength_nm",), T),
            A=(("wavelength_nm",), A),
        ),
        coords=dict(wavelength_nm=lam),
        attrs=attrs,
    )


class TmmSolverEngine(SolverEngine):
    """Normal-incidence transfer-matrix engine over a wavelength sweep."""

    def __init__(self, materials: MaterialDB | None = None, executor: Executor | None = None) -> None:
        self.mat = materials if materials is not None else builtin_materials()
        self.executor = executor

    def run(self, request: Mapping[str, Any] | SweepRequest) -> SpectrumResult:
        # Accept either a Pydantic request or a dict-like; prefer typed
        if isinstance(request, SweepRequest):
            req = request
        else:
            req = SweepRequest.model_validate(dict(cast(Mapping[str, Any], request)))

        rng = req.range
        points = compute_spectrum(req.stack, self.mat, rng, executor=self.executor)
        ds = points_to_dataset(
            points,
            incident=req.stack.incident,
            substrate=req.stack.substrate,
            n_layers=len(req.stack.layers),
            note="TMM (normal incidence)",
        )

        energy = ds["R"] + ds["T"] + ds["A"]
        residual = float(np.nanmax(np.abs(energy.values - 1.0))) if points else 0.0
        logger.debug(
            "Solved %d samples over [%g, %g] nm; energy residual %.2e",
            len(points),
            rng.start_nm,
            rng.end_nm,
            residual,
        )
        scalars = SolverScalars(energy_residual=residual, notes="tmm-normal-incidence")
        return SpectrumResult(
            scalars=scalars, data=ds, points=points, summary=summarize_spectrum(points)
        )
