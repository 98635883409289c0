from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from filmcalc.domain.models import Layer, ProjectDocument, StackDef
from filmcalc.orchestration.session import default_project


def test_default_project_is_valid() -> None:
    """
    default_project() must return a fully-populated Pydantic v2 root (ProjectDocument)
    with the expected top-level sections present.
    """
    project: ProjectDocument = default_project()
    assert isinstance(project, ProjectDocument)

    dumped: dict[str, Any] = project.model_dump()
    for key in ("stack", "range", "version"):
        assert key in dumped, f"missing required section: {key}"


def test_model_roundtrip_update() -> None:
    """
    Stack models are frozen and support .model_copy(update=...) on nested models.
    """
    project = default_project()
    new_stack = project.stack.model_copy(
        update={"layers": (project.stack.layers[0].model_copy(update={"thickness_nm": 120.0}),)}
    )
    assert new_stack.layers[0].thickness_nm == 120.0
    # Original remains unchanged
    assert project.stack.layers[0].thickness_nm == 100.0

    with pytest.raises(ValidationError):
        project.stack.substrate = "Si"  # type: ignore[misc]


@pytest.mark.parametrize("thickness", [0.0, -5.0])
def test_layer_requires_positive_thickness(thickness: float) -> None:
    with pytest.raises(ValidationError):
        Layer(material_id="SiO2", thickness_nm=thickness)


def test_stack_defaults_to_air_incidence() -> None:
    stack = StackDef(substrate="Si")
    assert stack.incident == "Air" and stack.layers == ()
