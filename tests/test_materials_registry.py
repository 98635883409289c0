from __future__ import annotations

import pytest

from filmcalc.adapters.materials.builtin import MaterialRegistry
from filmcalc.adapters.materials.dispersion import ConstantDispersion
from filmcalc.domain.errors import UnknownMaterial
from filmcalc.domain.models import MaterialDef
from filmcalc.domain.ports import MaterialDB


def test_lists_known_materials_in_registration_order(materials: MaterialRegistry) -> None:
    ids = materials.list_material_ids()
    for mid in ("SiO2", "TiO2", "MgF2", "Al", "Ag", "Au", "Si", "BK7", "Air"):
        assert mid in ids
    assert len(ids) >= 12
    assert ids[0] == "SiO2" and ids[-1] == "Air"
    assert [m.name for m in materials.list_materials()] == [materials[i].name for i in ids]
    assert list(materials) == ids


def test_registry_implements_port(materials: MaterialRegistry) -> None:
    assert isinstance(materials, MaterialDB)


@pytest.mark.parametrize(
    "material_id, expected",
    [("SiO2", 1.46), ("MgF2", 1.38), ("BK7", 1.52)],
)
def test_dielectric_indices_at_550(materials: MaterialRegistry, material_id: str, expected: float) -> None:
    nk = materials.get_material(material_id).nk(550.0)
    assert nk.n == pytest.approx(expected, abs=0.02)
    assert nk.k == 0.0


def test_tio2_is_high_index(materials: MaterialRegistry) -> None:
    n = materials.get_material("TiO2").nk(550.0).n
    assert 2.2 < n < 2.8


def test_air_is_vacuum(materials: MaterialRegistry) -> None:
    for lam in (300.0, 550.0, 1100.0):
        nk = materials.get_material("Air").nk(lam)
        assert nk.n == 1.0 and nk.k == 0.0


@pytest.mark.parametrize("material_id, lam", [("Al", 550.0), ("Ag", 600.0), ("Au", 700.0)])
def test_metals_absorb(materials: MaterialRegistry, material_id: str, lam: float) -> None:
    assert materials.get_material(material_id).nk(lam).k > 3.0


def test_silicon_index_at_600(materials: MaterialRegistry) -> None:
    assert materials.get_material("Si").nk(600.0).n == pytest.approx(3.9, abs=0.1)


def test_all_entries_physical_over_sweep_range(materials: MaterialRegistry) -> None:
    for mid, mat in materials.items():
        assert mat.color
        for lam in range(300, 1101, 50):
            nk = mat.nk(float(lam))
            assert nk.k >= 0.0
            assert nk.n > 0.0, mid


def test_unknown_material_raises(materials: MaterialRegistry) -> None:
    with pytest.raises(UnknownMaterial, match="Unknown material 'UnknownMat'") as exc:
        materials.get_material("UnknownMat")
    assert exc.value.material_id == "UnknownMat"
    # also a KeyError, so Mapping semantics hold
    with pytest.raises(KeyError):
        materials["UnknownMat"]
    assert "UnknownMat" not in materials
    assert materials.get("UnknownMat") is None
    assert materials.get("BK7") is materials.get_material("BK7")


def test_registry_is_read_only(materials: MaterialRegistry) -> None:
    with pytest.raises(TypeError):
        materials["Vacuum"] = materials["Air"]  # type: ignore[index]
    with pytest.raises(TypeError):
        materials._table["Vacuum"] = materials["Air"]  # type: ignore[index]


def test_duplicate_ids_rejected() -> None:
    air = MaterialDef("Air", "#ffffff", ConstantDispersion())
    with pytest.raises(ValueError):
        MaterialRegistry([("Air", air), ("Air", air)])
