# filmcalc/adapters/samples/builtin.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from filmcalc.domain.models import Layer, ProjectDocument, SpectrumRange, StackDef

__all__ = ["SampleConfig", "get_sample", "list_sample_ids", "list_samples"]


@dataclass(frozen=True)
class SampleConfig:
    id: str
    name: str
    description: str
    project: ProjectDocument


def _project(
    substrate: str, layers: Sequence[Tuple[str, float]], start_nm: float, end_nm: float
) -> ProjectDocument:
    # layers are listed from the incident (outer) side
    stack = StackDef(
        incident="Air",
        layers=tuple(Layer(material_id=m, thickness_nm=d) for m, d in layers),
        substrate=substrate,
    )
    return ProjectDocument(stack=stack, range=SpectrumRange(start_nm=start_nm, end_nm=end_nm))


_SAMPLES: Tuple[SampleConfig, ...] = (
    SampleConfig(
        id="single-ar",
        name="Single-Layer AR (MgF₂)",
        description="MgF₂ quarter-wave on BK7 at 550 nm — simplest AR coating",
        project=_project("BK7", [("MgF2", 99.6)], 300, 1100),  # 550/(4×1.38)
    ),
    SampleConfig(
        id="vcoat-ar",
        name="V-Coat AR (TiO₂/SiO₂)",
        description="Two-layer V-coat on BK7 optimized for near-zero R at 550 nm",
        project=_project("BK7", [("SiO2", 94.2), ("TiO2", 51.9)], 400, 800),
    ),
    SampleConfig(
        id="broadband-ar",
        name="Broadband AR (4-Layer)",
        description="Al₂O₃/TiO₂/SiO₂/MgF₂ on BK7 — low R across 400–700 nm visible range",
        project=_project(
            "BK7", [("MgF2", 92.0), ("SiO2", 16.0), ("TiO2", 105.0), ("Al2O3", 75.0)], 350, 800
        ),
    ),
    SampleConfig(
        id="high-reflector",
        name="High Reflector (6-Layer)",
        description="Alternating TiO₂/SiO₂ quarter-wave stack on BK7 — >99% R at 633 nm",
        # 3 (L H) pairs at 633 nm: 633/(4×1.46), 633/(4×2.65)
        project=_project("BK7", [("SiO2", 108.4), ("TiO2", 59.7)] * 3, 400, 900),
    ),
    SampleConfig(
        id="dichroic",
        name="Dichroic Filter (Blue-Reflect)",
        description="10-layer TiO₂/SiO₂ stack — reflects blue (<500 nm), transmits red",
        # 5 (L H) pairs at 480 nm
        project=_project("BK7", [("SiO2", 82.2), ("TiO2", 45.3)] * 5, 350, 800),
    ),
)

# Registry: sample id → sample
_REGISTRY: Dict[str, SampleConfig] = {s.id: s for s in _SAMPLES}


def list_samples() -> List[SampleConfig]:
    return list(_REGISTRY.values())


def list_sample_ids() -> List[str]:
    return list(_REGISTRY.keys())


def get_sample(sample_id: str) -> SampleConfig:
    sample = _REGISTRY.get(sample_id)
    if sample is None:
        raise KeyError(f"Unknown sample '{sample_id}'. Available: {', '.join(_REGISTRY)}")
    return sample
