from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone

from typing_extensions import TypedDict

from filmcalc.adapters.solver_tmm.tmm import compute_rt
from filmcalc.designs.quarter_wave import (
    analytical_hr_reflectance,
    analytical_qw_reflectance,
    high_reflector_stack,
    quarter_wave_ar,
)
from filmcalc.domain.ports import MaterialDB


class Tolerance(TypedDict):
    abs_tol: float


@dataclass(frozen=True)
class DesignCheckRecord:
    design: str
    wavelength_nm: float
    R_solver: float
    R_analytical: float
    abs_error: float
    passed: bool
    tolerance: Tolerance
    timestamp: str  # ISO 8601


def make_record(
    design: str, wavelength_nm: float, R_solver: float, R_analytical: float, *, abs_tol: float
) -> DesignCheckRecord:
    err = abs(R_solver - R_analytical)
    return DesignCheckRecord(
        design=design,
        wavelength_nm=wavelength_nm,
        R_solver=R_solver,
        R_analytical=R_analytical,
        abs_error=err,
        passed=err <= abs_tol,
        tolerance={"abs_tol": abs_tol},
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


def check_quarter_wave_ar(
    materials: MaterialDB,
    layer_material: str = "MgF2",
    substrate: str = "BK7",
    design_wavelength_nm: float = 550.0,
    *,
    incident: str = "Air",
    abs_tol: float = 1e-3,
) -> DesignCheckRecord:
    """Solver vs closed-form R_min for a single quarter-wave layer at its design wavelength."""
    n0 = materials.get_material(incident).nk(design_wavelength_nm).n
    n_layer = materials.get_material(layer_material).nk(design_wavelength_nm).n
    n_sub = materials.get_material(substrate).nk(design_wavelength_nm).n
    stack = quarter_wave_ar(layer_material, substrate, design_wavelength_nm, n_layer, incident)
    R_tmm = compute_rt(stack, design_wavelength_nm, materials).R
    R_ana = analytical_qw_reflectance(n0, n_layer, n_sub)
    return make_record(
        f"QW-AR {layer_material}/{substrate}", design_wavelength_nm, R_tmm, R_ana, abs_tol=abs_tol
    )


def check_high_reflector(
    materials: MaterialDB,
    high_material: str = "TiO2",
    low_material: str = "SiO2",
    substrate: str = "BK7",
    design_wavelength_nm: float = 550.0,
    pairs: int = 5,
    *,
    incident: str = "Air",
    abs_tol: float = 1e-2,
) -> DesignCheckRecord:
    """Solver vs closed form for an (H L)^N H mirror at its design wavelength."""
    lam = design_wavelength_nm
    n0 = materials.get_material(incident).nk(lam).n
    nH = materials.get_material(high_material).nk(lam).n
    nL = materials.get_material(low_material).nk(lam).n
    n_sub = materials.get_material(substrate).nk(lam).n
    stack = high_reflector_stack(
        high_material, low_material, substrate, lam, nH, nL, pairs, incident
    )
    R_tmm = compute_rt(stack, lam, materials).R
    R_ana = analytical_hr_reflectance(n0, nH, nL, n_sub, pairs)
    return make_record(
        f"HR ({high_material} {low_material})^{pairs} {high_material}/{substrate}",
        lam,
        R_tmm,
        R_ana,
        abs_tol=abs_tol,
    )


def to_json_bytes(rec: DesignCheckRecord) -> bytes:
    return json.dumps(asdict(rec), indent=2).encode("utf-8")
