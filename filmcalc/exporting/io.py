from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import pandas as pd

from filmcalc.domain.models import SpectrumPoint, StackDef
from filmcalc.domain.ports import MaterialDB

CSV_HEADER = ("Wavelength (nm)", "R (%)", "T (%)", "A (%)")


def _fmt_wavelength(x: float) -> str:
    # 500.0 → "500", 612.5 → "612.5"
    return f"{x:.10g}"


def spectrum_frame(points: Iterable[SpectrumPoint]) -> pd.DataFrame:
    """Tidy table with columns wavelength_nm, R, T, A (fractions)."""
    rows = [(p.wavelength_nm, p.R, p.T, p.A) for p in points]
    return pd.DataFrame(rows, columns=["wavelength_nm", "R", "T", "A"])


def spectrum_to_csv(points: Iterable[SpectrumPoint]) -> str:
    """CSV text: header plus one row per sample, R/T/A in percent to 4 decimals."""
    df = spectrum_frame(points)
    out = pd.DataFrame(
        {
            CSV_HEADER[0]: df["wavelength_nm"].map(_fmt_wavelength),
            CSV_HEADER[1]: (df["R"] * 100.0).map("{:.4f}".format),
            CSV_HEADER[2]: (df["T"] * 100.0).map("{:.4f}".format),
            CSV_HEADER[3]: (df["A"] * 100.0).map("{:.4f}".format),
        },
        columns=list(CSV_HEADER),
    )
    buf = io.StringIO()
    out.to_csv(buf, index=False, lineterminator="\n")
    return buf.getvalue()


@dataclass(frozen=True)
class LayerSummaryRow:
    index: int  # 1-based, incident side first
    material: str
    material_name: str
    thickness_nm: float


@dataclass(frozen=True)
class LayerSummary:
    incident: str
    substrate: str
    layers: Sequence[LayerSummaryRow]


def layer_summary(stack: StackDef, materials: MaterialDB) -> LayerSummary:
    rows = [
        LayerSummaryRow(
            index=i + 1,
            material=L.material_id,
            material_name=materials.get_material(L.material_id).name,
            thickness_nm=L.thickness_nm,
        )
        for i, L in enumerate(stack.layers)
    ]
    return LayerSummary(incident=stack.incident, substrate=stack.substrate, layers=tuple(rows))


def layer_table(stack: StackDef, materials: MaterialDB) -> pd.DataFrame:
    summary = layer_summary(stack, materials)
    return pd.DataFrame(
        [(r.index, r.material, r.material_name, r.thickness_nm) for r in summary.layers],
        columns=["index", "material", "material_name", "thickness_nm"],
    )


def figure_to_png_bytes(fig: Any) -> bytes:
    """Export a Plotly figure to PNG bytes via Kaleido.
    Raises RuntimeError with a helpful message when Kaleido is not available.
    """
    try:
        return fig.to_image(format="png", engine="kaleido")
    except Exception as e:  # noqa: BLE001
        raise RuntimeError(
            "Static image export requires the optional 'export' extra: pip install -e '.[export]'"
        ) from e


def to_csv_bytes(df: pd.DataFrame) -> bytes:
    buf = io.StringIO()
    df.to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")
