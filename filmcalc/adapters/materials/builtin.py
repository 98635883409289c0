from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Iterable, Iterator, Tuple

from filmcalc.adapters.materials.dispersion import ConstantDispersion, sellmeier, tabulated
from filmcalc.domain.errors import UnknownMaterial
from filmcalc.domain.models import MaterialDef
from filmcalc.domain.ports import MaterialDB

logger = logging.getLogger(__name__)

# Wavelengths in nanometres throughout. Sellmeier C coefficients are in μm².


class MaterialRegistry(MaterialDB, Mapping[str, MaterialDef]):
    """Read-only id → MaterialDef mapping, fixed at construction.

    Iteration and the ``list_*`` methods follow registration order. There is
    no writer after ``__init__``, so concurrent readers need no locking.
    """

    def __init__(self, entries: Iterable[Tuple[str, MaterialDef]]) -> None:
        table: dict[str, MaterialDef] = {}
        for material_id, mat in entries:
            if material_id in table:
                raise ValueError(f"Duplicate material id '{material_id}'")
            table[material_id] = mat
        self._table = MappingProxyType(table)

    # --- Mapping -------------------------------------------------------------
    def __getitem__(self, material_id: str) -> MaterialDef:
        return self.get_material(material_id)

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def get(self, material_id: str, default: MaterialDef | None = None) -> MaterialDef | None:  # type: ignore[override]
        """Result-style lookup: the definition, or ``default`` when unknown."""
        return self._table.get(material_id, default)

    # --- MaterialDB ----------------------------------------------------------
    def get_material(self, material_id: str) -> MaterialDef:
        mat = self._table.get(material_id)
        if mat is None:
            raise UnknownMaterial(material_id, available=self._table)
        return mat

    def list_materials(self) -> list[MaterialDef]:
        return list(self._table.values())

    def list_material_ids(self) -> list[str]:
        return list(self._table)


# ---------- dielectrics (Sellmeier) ----------

# SiO2: fused silica (Malitson 1965)
SIO2 = sellmeier([(0.6961663, 0.0684043**2), (0.4079426, 0.1162414**2), (0.8974794, 9.896161**2)])
# TiO2: amorphous thin film, fit for 300–1100 nm (Siefke 2016)
TIO2 = sellmeier([(4.1560, 0.2120**2), (0.1300, 5.2000**2)])
# MgF2: ordinary ray (Dodge 1984)
MGF2 = sellmeier(
    [(0.48755108, 0.04338408**2), (0.39875031, 0.09461442**2), (2.3120353, 23.793604**2)]
)
# Si3N4 (Luke 2015)
SI3N4 = sellmeier([(3.0249, 0.1353406**2), (40314.0, 1239.842**2)])
# Al2O3: sapphire (Malitson 1962)
AL2O3 = sellmeier(
    [(1.4313493, 0.0726631**2), (0.65054713, 0.1193242**2), (5.3414021, 18.028251**2)]
)
# Ta2O5: approximate (Bright et al.)
TA2O5 = sellmeier([(3.42, 0.178**2), (0.10, 10.0**2)])
# Schott N-BK7
BK7 = sellmeier([(1.03961212, 0.00600069867), (0.231792344, 0.0200179144), (1.01046945, 103.560653)])

# ---------- metals and silicon (tabulated λ_nm, n, k) ----------

# Palik handbook, sampled at key wavelengths
AL = tabulated(
    [
        (300, 0.28, 3.61), (350, 0.37, 4.24), (400, 0.49, 4.86),
        (450, 0.62, 5.47), (500, 0.77, 6.08), (550, 0.93, 6.69),
        (600, 1.12, 7.26), (650, 1.35, 7.79), (700, 1.55, 8.31),
        (750, 1.83, 8.60), (800, 2.08, 8.45), (850, 2.15, 8.58),
        (900, 2.20, 8.80), (1000, 2.40, 9.60), (1100, 2.60, 10.40),
    ]
)  # fmt: skip
AG = tabulated(
    [
        (300, 1.34, 0.93), (350, 1.60, 1.15), (400, 0.07, 1.93),
        (450, 0.04, 2.42), (500, 0.05, 2.87), (550, 0.06, 3.33),
        (600, 0.07, 3.75), (650, 0.08, 4.18), (700, 0.10, 4.58),
        (750, 0.11, 5.00), (800, 0.14, 5.38), (900, 0.17, 6.10),
        (1000, 0.21, 6.82), (1100, 0.26, 7.50),
    ]
)  # fmt: skip
AU = tabulated(
    [
        (300, 1.55, 1.85), (350, 1.70, 1.87), (400, 1.68, 1.95),
        (450, 1.52, 1.83), (500, 0.83, 1.84), (550, 0.33, 2.32),
        (600, 0.17, 3.07), (650, 0.14, 3.70), (700, 0.13, 4.26),
        (750, 0.14, 4.79), (800, 0.16, 5.26), (900, 0.17, 6.15),
        (1000, 0.26, 6.93), (1100, 0.30, 7.70),
    ]
)  # fmt: skip
CU = tabulated(
    [
        (300, 1.38, 1.57), (350, 1.37, 1.76), (400, 1.39, 1.89),
        (450, 1.26, 2.10), (500, 1.04, 2.59), (550, 0.87, 2.60),
        (600, 0.22, 3.41), (650, 0.21, 3.67), (700, 0.21, 4.05),
        (800, 0.24, 4.74), (900, 0.27, 5.39), (1000, 0.32, 6.03),
        (1100, 0.37, 6.67),
    ]
)  # fmt: skip
# Crystalline silicon (Green & Keevers)
SI = tabulated(
    [
        (300, 4.97, 4.12), (350, 5.44, 3.56), (400, 5.57, 0.39),
        (450, 4.68, 0.14), (500, 4.30, 0.07), (550, 4.08, 0.04),
        (600, 3.94, 0.03), (650, 3.84, 0.02), (700, 3.77, 0.01),
        (750, 3.72, 0.008), (800, 3.68, 0.005), (900, 3.62, 0.002),
        (1000, 3.58, 0.001), (1100, 3.54, 0.0005),
    ]
)  # fmt: skip

VACUUM = ConstantDispersion(n=1.0, k=0.0)

_BUILTIN: Tuple[Tuple[str, MaterialDef], ...] = (
    # Dielectrics
    ("SiO2", MaterialDef("SiO2 (Fused Silica)", "#8ecae6", SIO2)),
    ("TiO2", MaterialDef("TiO2 (Titanium Dioxide)", "#fb8500", TIO2)),
    ("MgF2", MaterialDef("MgF2 (Magnesium Fluoride)", "#b5e48c", MGF2)),
    ("Si3N4", MaterialDef("Si3N4 (Silicon Nitride)", "#cdb4db", SI3N4)),
    ("Al2O3", MaterialDef("Al2O3 (Sapphire)", "#ffd6ff", AL2O3)),
    ("Ta2O5", MaterialDef("Ta2O5 (Tantalum Pentoxide)", "#e5989b", TA2O5)),
    # Metals
    ("Al", MaterialDef("Aluminium", "#adb5bd", AL)),
    ("Ag", MaterialDef("Silver", "#dee2e6", AG)),
    ("Au", MaterialDef("Gold", "#ffd700", AU)),
    ("Cu", MaterialDef("Copper", "#d4840e", CU)),
    # Substrates
    ("BK7", MaterialDef("BK7 Glass", "#a8dadc", BK7)),
    ("Si", MaterialDef("Silicon", "#495057", SI)),
    ("Air", MaterialDef("Air", "#ffffff", VACUUM)),
)


def builtin_materials() -> MaterialRegistry:
    """Build the registry of built-in materials.

    Call once at start-up and pass the result to the solver/session.
    """
    registry = MaterialRegistry(_BUILTIN)
    logger.debug("Material registry built with %d entries", len(registry))
    return registry
