from __future__ import annotations

import importlib
from types import ModuleType

import pytest

from filmcalc.adapters.materials.builtin import MaterialRegistry
from filmcalc.adapters.solver_tmm.tmm import compute_rt
from filmcalc.designs.quarter_wave import (
    analytical_hr_reflectance,
    analytical_qw_reflectance,
    high_reflector_stack,
    quarter_wave_ar,
)
from filmcalc.domain.models import StackDef

LAM = 550.0


def _n(materials: MaterialRegistry, material_id: str) -> float:
    return materials.get_material(material_id).nk(LAM).n


def test_formulas_do_not_depend_on_solver() -> None:
    mod = importlib.import_module("filmcalc.designs.quarter_wave")
    for value in vars(mod).values():
        if isinstance(value, ModuleType):
            assert not value.__name__.startswith("filmcalc.adapters")
        mod_name = getattr(value, "__module__", "") or ""
        assert not mod_name.startswith("filmcalc.adapters.solver_tmm")


def test_quarter_wave_ar_geometry() -> None:
    stack = quarter_wave_ar("MgF2", "BK7", LAM, 1.38)
    assert stack.incident == "Air" and stack.substrate == "BK7"
    assert len(stack.layers) == 1
    assert stack.layers[0].thickness_nm == pytest.approx(LAM / (4 * 1.38))


def test_analytical_qw_value() -> None:
    assert analytical_qw_reflectance(1.0, 1.38, 1.52) == pytest.approx(0.0126, abs=1e-4)
    # index-matched layer n² = n0·ns gives zero reflectance
    assert analytical_qw_reflectance(1.0, 1.52**0.5, 1.52) == pytest.approx(0.0, abs=1e-15)


def test_qw_ar_solver_matches_closed_form(materials: MaterialRegistry, bare_glass: StackDef) -> None:
    n_layer, n_sub = _n(materials, "MgF2"), _n(materials, "BK7")
    stack = quarter_wave_ar("MgF2", "BK7", LAM, n_layer)
    R_tmm = compute_rt(stack, LAM, materials).R
    assert R_tmm == pytest.approx(analytical_qw_reflectance(1.0, n_layer, n_sub), abs=1e-3)
    assert R_tmm < compute_rt(bare_glass, LAM, materials).R


def test_high_reflector_geometry() -> None:
    stack = high_reflector_stack("TiO2", "SiO2", "BK7", LAM, 2.4, 1.46, 3)
    ids = [L.material_id for L in stack.layers]
    assert ids == ["TiO2", "SiO2"] * 3 + ["TiO2"]
    assert stack.layers[0].thickness_nm == pytest.approx(LAM / (4 * 2.4))
    assert stack.layers[1].thickness_nm == pytest.approx(LAM / (4 * 1.46))
    assert stack.layers[-1].thickness_nm == stack.layers[0].thickness_nm


def test_zero_pairs_reduces_to_single_high_layer() -> None:
    assert analytical_hr_reflectance(1.0, 2.4, 1.46, 1.52, 0) == pytest.approx(
        analytical_qw_reflectance(1.0, 2.4, 1.52)
    )
    with pytest.raises(ValueError):
        high_reflector_stack("TiO2", "SiO2", "BK7", LAM, 2.4, 1.46, -1)


def _hr_R(materials: MaterialRegistry, pairs: int) -> float:
    nH, nL = _n(materials, "TiO2"), _n(materials, "SiO2")
    stack = high_reflector_stack("TiO2", "SiO2", "BK7", LAM, nH, nL, pairs)
    return compute_rt(stack, LAM, materials).R


def test_five_pair_mirror_exceeds_99_percent(materials: MaterialRegistry) -> None:
    assert _hr_R(materials, 5) > 0.99


def test_more_pairs_reflect_more(materials: MaterialRegistry) -> None:
    assert _hr_R(materials, 5) > _hr_R(materials, 3)


@pytest.mark.parametrize("pairs", [3, 5])
def test_hr_solver_matches_closed_form(materials: MaterialRegistry, pairs: int) -> None:
    nH, nL, ns = _n(materials, "TiO2"), _n(materials, "SiO2"), _n(materials, "BK7")
    assert _hr_R(materials, pairs) == pytest.approx(
        analytical_hr_reflectance(1.0, nH, nL, ns, pairs), abs=1e-2
    )
