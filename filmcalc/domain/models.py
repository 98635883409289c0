#"""
#Domain models (v1.0.0)
#
#Pydantic v2 models define validated stack/range configuration.
#Per-sample results are frozen dataclasses; sweeps are carried as xarray Datasets.
#"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field

# --- Materials ---


@dataclass(frozen=True)
class RefractiveIndex:
    n: float  # real part
    k: float  # extinction coefficient, k >= 0


Dispersion = Callable[[float], RefractiveIndex]  # wavelength (nm) -> (n, k)


@dataclass(frozen=True)
class MaterialDef:
    name: str  # display name
    color: str  # CSS colour used by the stack diagram
    dispersion: Dispersion

    def nk(self, wavelength_nm: float) -> RefractiveIndex:
        return self.dispersion(float(wavelength_nm))


# --- Stack description ---


class Layer(BaseModel):
    model_config = ConfigDict(frozen=True)

    material_id: str
    thickness_nm: float = Field(..., gt=0.0, description="Physical thickness (nm)")


class StackDef(BaseModel):
    """Incident medium | layers (incident side first) | substrate."""

    model_config = ConfigDict(frozen=True)

    incident: str = "Air"
    layers: tuple[Layer, ...] = ()
    substrate: str


class SpectrumRange(BaseModel):
    # Checked by the sweep (InvalidRange), not here, so the UI can hold a bad range.
    start_nm: float = 300.0
    end_nm: float = 1100.0
    step_nm: float = 5.0


class ProjectDocument(BaseModel):
    stack: StackDef
    range: SpectrumRange = SpectrumRange()
    version: str = "1.0.0"


class SweepRequest(BaseModel):
    stack: StackDef
    range: SpectrumRange = SpectrumRange()


# --- Results ---


@dataclass(frozen=True)
class RTResult:
    R: float
    T: float
    A: float


@dataclass(frozen=True)
class SpectrumPoint:
    wavelength_nm: float
    R: float
    T: float
    A: float


@dataclass(frozen=True)
class PeakValue:
    wavelength_nm: float
    value: float


@dataclass(frozen=True)
class SpectrumSummary:
    peak_R: PeakValue
    peak_T: PeakValue
    avg_R_visible: float
    avg_T_visible: float


class SolverScalars(BaseModel):
    energy_residual: float
    notes: str = ""
