from __future__ import annotations

import re

import pytest

from filmcalc.adapters.materials.builtin import MaterialRegistry
from filmcalc.domain.errors import UnknownMaterial
from filmcalc.domain.models import Layer, SpectrumPoint, SpectrumRange, StackDef
from filmcalc.exporting.io import (
    figure_to_png_bytes,
    layer_summary,
    layer_table,
    spectrum_frame,
    spectrum_to_csv,
    to_csv_bytes,
)
from filmcalc.spectrum.sweep import compute_spectrum

_ROW = re.compile(r"^\d+(\.\d+)?,\d+\.\d{4},\d+\.\d{4},\d+\.\d{4}$")


def test_csv_header_and_rows(materials: MaterialRegistry, two_layer_stack: StackDef) -> None:
    pts = compute_spectrum(
        two_layer_stack, materials, SpectrumRange(start_nm=500.0, end_nm=510.0, step_nm=5.0)
    )
    lines = spectrum_to_csv(pts).strip().split("\n")
    assert lines[0] == "Wavelength (nm),R (%),T (%),A (%)"
    assert len(lines) == 4  # header + 500, 505, 510
    for line in lines[1:]:
        assert len(line.split(",")) == 4
        assert _ROW.match(line), line
    assert lines[1].startswith("500,")


def test_csv_values_are_percent_with_four_decimals() -> None:
    pts = [SpectrumPoint(wavelength_nm=612.5, R=0.0424, T=0.95761234, A=0.00001)]
    lines = spectrum_to_csv(pts).strip().split("\n")
    assert lines[1] == "612.5,4.2400,95.7612,0.0010"


def test_csv_empty_spectrum_has_header_only() -> None:
    assert spectrum_to_csv([]).strip() == "Wavelength (nm),R (%),T (%),A (%)"


def test_spectrum_frame_columns() -> None:
    df = spectrum_frame([SpectrumPoint(500.0, 0.1, 0.9, 0.0)])
    assert list(df.columns) == ["wavelength_nm", "R", "T", "A"]
    assert to_csv_bytes(df).decode("utf-8").startswith("wavelength_nm,R,T,A")


def test_layer_summary_structure(materials: MaterialRegistry, two_layer_stack: StackDef) -> None:
    summary = layer_summary(two_layer_stack, materials)
    assert summary.incident == "Air"
    assert summary.substrate == "BK7"
    assert len(summary.layers) == 2
    assert summary.layers[0].material == "MgF2"
    assert summary.layers[0].material_name == "MgF2 (Magnesium Fluoride)"
    assert summary.layers[0].thickness_nm == 100.0
    assert summary.layers[1].material == "TiO2"
    assert summary.layers[1].index == 2

    df = layer_table(two_layer_stack, materials)
    assert list(df.columns) == ["index", "material", "material_name", "thickness_nm"]
    assert df["index"].tolist() == [1, 2]


def test_layer_summary_unknown_material(materials: MaterialRegistry) -> None:
    stack = StackDef(layers=(Layer(material_id="Nope", thickness_nm=1.0),), substrate="BK7")
    with pytest.raises(UnknownMaterial):
        layer_summary(stack, materials)


def test_png_export_failure_is_reported() -> None:
    class _NoKaleido:
        def to_image(self, **kwargs):
            raise ValueError("kaleido missing")

    with pytest.raises(RuntimeError, match="export"):
        figure_to_png_bytes(_NoKaleido())
