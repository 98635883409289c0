#"""
#Plotly-based presenter implementing PlotPresenter.
#"""
from __future__ import annotations
import numpy as np
import xarray as xr
import plotly.graph_objects as go
from filmcalc.domain.models import StackDef
from filmcalc.domain.ports import MaterialDB, PlotPresenter

_TRACES = (("R", "Reflectance R", "#d62828"), ("T", "Transmittance T", "#1d3557"),
           ("A", "Absorptance A", "#6c757d"))


class PlotPresenterPlotly(PlotPresenter):
    def spectrum_plot(self, result) -> go.Figure:
        ds: xr.Dataset = result.data  # type: ignore
        lam = ds.coords["wavelength_nm"].values
        fig = go.Figure()
        for var, name, color in _TRACES:
            fig.add_trace(go.Scatter(x=lam,
                                     y=100.0 * np.asarray(ds[var].values, dtype=float),
                                     mode="lines",
                                     name=name,
                                     line=dict(color=color)))
        fig.update_layout(
            xaxis_title="Wavelength λ (nm)",
            yaxis_title="R / T / A (%)",
            yaxis_range=[0.0, 100.0],
            template="plotly_white",
            title="R / T / A spectrum",
        )
        return fig

    def stack_diagram(self, stack: StackDef, materials: MaterialDB) -> go.Figure:
        # One stacked bar segment per medium: substrate at the bottom, incident on top
        max_thick = max([40.0] + [L.thickness_nm for L in stack.layers])
        segments = [(f"{stack.substrate} (substrate)", stack.substrate, 40.0, "")]
        for i in reversed(range(len(stack.layers))):
            L = stack.layers[i]
            h = max(20.0, L.thickness_nm / max_thick * 80.0)
            segments.append((f"{i + 1}: {L.material_id}", L.material_id, h, f" — {L.thickness_nm:g} nm"))
        segments.append((f"{stack.incident} (incident)", stack.incident, 40.0, ""))

        fig = go.Figure()
        for label, material_id, h, extra in segments:
            mat = materials.get_material(material_id)
            fig.add_trace(go.Bar(x=["stack"], y=[h], name=label,
                                 marker=dict(color=mat.color, line=dict(color="#343a40", width=1)),
                                 hovertext=[mat.name + extra],
                                 text=[label], textposition="inside"))
        fig.update_layout(
            barmode="stack",
            template="plotly_white",
            title="Stack (light enters from the top)",
            xaxis=dict(visible=False),
            yaxis=dict(visible=False),
            showlegend=False,
        )
        return fig
