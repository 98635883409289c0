from __future__ import annotations

from typing import Any

import pytest

from filmcalc.adapters.materials.builtin import MaterialRegistry, builtin_materials
from filmcalc.adapters.solver_tmm.engine import SpectrumResult, TmmSolverEngine
from filmcalc.domain.models import Layer, SpectrumRange, StackDef, SweepRequest
from filmcalc.plotting_plotly.presenter import PlotPresenterPlotly


@pytest.fixture(scope="session")
def materials() -> MaterialRegistry:
    """Built-in registry, constructed once for the whole run."""
    return builtin_materials()


@pytest.fixture(scope="session")
def bare_glass() -> StackDef:
    """Air | BK7 with no coating."""
    return StackDef(layers=(), substrate="BK7")


@pytest.fixture(scope="session")
def two_layer_stack() -> StackDef:
    """Air | MgF2 100 nm | TiO2 50 nm | BK7."""
    return StackDef(
        layers=(
            Layer(material_id="MgF2", thickness_nm=100.0),
            Layer(material_id="TiO2", thickness_nm=50.0),
        ),
        substrate="BK7",
    )


@pytest.fixture(scope="session")
def presenter() -> PlotPresenterPlotly:
    """Plotly presenter under test."""
    return PlotPresenterPlotly()


@pytest.fixture(scope="session")
def small_result(materials: MaterialRegistry, two_layer_stack: StackDef) -> SpectrumResult:
    """Run the engine on a tiny sweep (500, 550, 600 nm)."""
    req = SweepRequest(
        stack=two_layer_stack, range=SpectrumRange(start_nm=500.0, end_nm=600.0, step_nm=50.0)
    )
    return TmmSolverEngine(materials).run(req)


@pytest.fixture(scope="session")
def spectrum_fig(small_result: SpectrumResult, presenter: PlotPresenterPlotly) -> Any:
    return presenter.spectrum_plot(small_result)


@pytest.fixture(scope="session")
def stack_fig(
    two_layer_stack: StackDef, materials: MaterialRegistry, presenter: PlotPresenterPlotly
) -> Any:
    return presenter.stack_diagram(two_layer_stack, materials)
