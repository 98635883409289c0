from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from filmcalc.adapters.materials.builtin import MaterialRegistry, builtin_materials
from filmcalc.adapters.samples.builtin import get_sample
from filmcalc.domain.models import (
    Layer,
    ProjectDocument,
    SpectrumRange,
    StackDef,
    SweepRequest,
)
from filmcalc.domain.ports import SolverEngine

__all__ = [
    "AppSession",
    "default_project",
    "init_session",
    "update_range",
    "add_layer",
    "remove_layer",
    "move_layer",
    "update_layer",
    "set_substrate",
    "load_sample",
    "build_sweep_request",
    "run_session",
]


@dataclass
class AppSession:
    """
    Thin runtime container passed between UI, orchestration, and engine.

    `project` is the domain Pydantic model (ProjectDocument) and is replaced,
    never mutated, on every update. `materials` is built once per session.
    """

    materials: MaterialRegistry
    project: ProjectDocument
    last_result: Any | None = None  # SpectrumResult from the engine


# -------------------------
# Session lifecycle helpers
# -------------------------


def default_project() -> ProjectDocument:
    """One 100 nm MgF2 layer on BK7 under Air, swept 300–1100 nm in 5 nm steps."""
    stack = StackDef(
        incident="Air",
        layers=(Layer(material_id="MgF2", thickness_nm=100.0),),
        substrate="BK7",
    )
    return ProjectDocument(stack=stack, range=SpectrumRange())


def init_session(materials: MaterialRegistry | None = None) -> AppSession:
    """Create a fresh session with sensible defaults."""
    return AppSession(
        materials=materials if materials is not None else builtin_materials(),
        project=default_project(),
        last_result=None,
    )


def _with_stack(session: AppSession, **updates: Any) -> AppSession:
    new_stack = session.project.stack.model_copy(update=updates)
    session.project = session.project.model_copy(update={"stack": new_stack})
    return session


def _with_layers(session: AppSession, layers: list[Layer]) -> AppSession:
    return _with_stack(session, layers=tuple(layers))


def update_range(
    session: AppSession,
    *,
    start_nm: float | None = None,
    end_nm: float | None = None,
    step_nm: float | None = None,
) -> AppSession:
    """Update sweep settings. The range is checked when the sweep runs, not here."""
    updates: dict[str, float] = {}
    if start_nm is not None:
        updates["start_nm"] = float(start_nm)
    if end_nm is not None:
        updates["end_nm"] = float(end_nm)
    if step_nm is not None:
        updates["step_nm"] = float(step_nm)
    if updates:
        new_range = session.project.range.model_copy(update=updates)
        session.project = session.project.model_copy(update={"range": new_range})
    return session


def add_layer(
    session: AppSession, material_id: str = "SiO2", thickness_nm: float = 100.0
) -> AppSession:
    """Append a layer on the substrate side."""
    layers = list(session.project.stack.layers)
    layers.append(Layer(material_id=material_id, thickness_nm=thickness_nm))
    return _with_layers(session, layers)


def remove_layer(session: AppSession, index: int) -> AppSession:
    layers = [L for i, L in enumerate(session.project.stack.layers) if i != index]
    return _with_layers(session, layers)


def move_layer(session: AppSession, index: int, direction: Literal[-1, 1]) -> AppSession:
    """Swap a layer with its neighbour; moves past either end are ignored."""
    layers = list(session.project.stack.layers)
    target = index + direction
    if not (0 <= index < len(layers)) or not (0 <= target < len(layers)):
        return session
    layers[index], layers[target] = layers[target], layers[index]
    return _with_layers(session, layers)


def update_layer(
    session: AppSession,
    index: int,
    *,
    material_id: str | None = None,
    thickness_nm: float | None = None,
) -> AppSession:
    layers = list(session.project.stack.layers)
    data = layers[index].model_dump()
    if material_id is not None:
        data["material_id"] = material_id
    if thickness_nm is not None:
        data["thickness_nm"] = float(thickness_nm)
    # Re-validate so thickness_nm > 0 still holds
    layers[index] = Layer.model_validate(data)
    return _with_layers(session, layers)


def set_substrate(session: AppSession, material_id: str) -> AppSession:
    return _with_stack(session, substrate=material_id)


def load_sample(session: AppSession, sample_id: str) -> AppSession:
    """Take the sample's layers, substrate and start/end; the step is kept."""
    sample = get_sample(sample_id).project
    new_range = session.project.range.model_copy(
        update={"start_nm": sample.range.start_nm, "end_nm": sample.range.end_nm}
    )
    new_stack = session.project.stack.model_copy(
        update={"layers": sample.stack.layers, "substrate": sample.stack.substrate}
    )
    session.project = session.project.model_copy(update={"stack": new_stack, "range": new_range})
    return session


def build_sweep_request(session: AppSession) -> SweepRequest:
    return SweepRequest(stack=session.project.stack, range=session.project.range)


def run_session(session: AppSession, engine: SolverEngine) -> Any:
    """Run the engine on the current project and keep the result on the session."""
    session.last_result = engine.run(build_sweep_request(session))
    return session.last_result
