# """
# Error taxonomy shared by the registry, the solver and the sweep.
# """
from __future__ import annotations

from typing import Iterable


class FilmCalcError(Exception):
    """Base class for all filmcalc errors."""


class UnknownMaterial(FilmCalcError, KeyError):
    """Lookup of a material id that is not in the registry."""

    def __init__(self, material_id: str, available: Iterable[str] = ()) -> None:
        self.material_id = material_id
        self.available = tuple(available)
        super().__init__(material_id)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the key
        msg = f"Unknown material '{self.material_id}'."
        if self.available:
            msg += f" Available: {', '.join(self.available)}"
        return msg


class InvalidRange(FilmCalcError, ValueError):
    """Sweep range with a non-positive step or an end before its start."""
