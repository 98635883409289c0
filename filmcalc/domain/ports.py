# """
# Ports (interfaces) for adapters. The UI and orchestration depend ONLY on these.
# """
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .models import MaterialDef, StackDef, SweepRequest


class MaterialDB(ABC):
    @abstractmethod
    def get_material(self, material_id: str) -> MaterialDef:
        """Return the material definition; raise UnknownMaterial if absent."""

    @abstractmethod
    def list_materials(self) -> list[MaterialDef]:
        """Return material definitions in registration order."""

    @abstractmethod
    def list_material_ids(self) -> list[str]:
        """Return material identifiers in registration order."""


class SolverEngine(ABC):
    @abstractmethod
    def run(self, req: SweepRequest) -> Any:
        """Sweep the stack over the requested range; result carries an xarray.Dataset."""


class PlotPresenter(ABC):
    @abstractmethod
    def spectrum_plot(self, result: Any) -> Any:
        """Figure: R/T/A (%) versus wavelength."""

    @abstractmethod
    def stack_diagram(self, stack: StackDef, materials: MaterialDB) -> Any:
        """Figure: one coloured bar per layer between incident medium and substrate."""
