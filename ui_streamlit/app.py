# --- standard library / typing ----------------------------------------------------------
from __future__ import annotations

from pathlib import Path
from typing import Any

# --- third-party -----------------------------------------------------------------------
import streamlit as st

# --- first-party: presets & samples ----------------------------------------------------
from filmcalc.adapters.presets_local.store import (
    LocalPresetStore,
    project_from_json,
    project_to_json,
)
from filmcalc.adapters.samples.builtin import list_samples

# --- first-party: engine & domain ------------------------------------------------------
from filmcalc.adapters.solver_tmm.engine import SpectrumResult, TmmSolverEngine
from filmcalc.domain.errors import FilmCalcError

# --- first-party: exporting and plotting -----------------------------------------------
from filmcalc.exporting.io import (
    figure_to_png_bytes,
    layer_table,
    spectrum_to_csv,
    to_csv_bytes,
)

# --- first-party: orchestration & reports ----------------------------------------------
from filmcalc.orchestration.session import (
    add_layer,
    init_session,
    load_sample,
    move_layer,
    remove_layer,
    run_session,
    set_substrate,
    update_layer,
    update_range,
)
from filmcalc.plotting_plotly.presenter import PlotPresenterPlotly
from filmcalc.reports.methods import stack_report_markdown
from filmcalc.reports.validation import check_high_reflector, check_quarter_wave_ar

# --------------------------------------------------------------------------------------
# App bootstrap
# --------------------------------------------------------------------------------------
st.set_page_config(page_title="FilmCalc", layout="wide")
st.title("🎞️ FilmCalc — Thin Film Optics Calculator")

# Session object (registry + typed Pydantic project inside)
if "session" not in st.session_state:
    st.session_state.session = init_session()

session = st.session_state.session
materials = session.materials
material_ids = materials.list_material_ids()
presenter = PlotPresenterPlotly()
presets = LocalPresetStore(Path("docs/presets"))
engine = TmmSolverEngine(materials)

# --------------------------------------------------------------------------------------
# Sidebar: samples, sweep range, presets
# --------------------------------------------------------------------------------------
st.sidebar.header("Project")

samples = list_samples()
with st.sidebar.expander("Samples", expanded=False):
    sample_name = st.selectbox("Sample", [s.name for s in samples])
    sample = next(s for s in samples if s.name == sample_name)
    st.caption(sample.description)
    if st.button("Load sample", use_container_width=True):
        load_sample(session, sample.id)
        st.success(f"Sample '{sample.name}' loaded.", icon="📥")

rng = session.project.range
with st.sidebar.expander("Wavelength range", expanded=True):
    start = st.number_input("λ start (nm)", value=float(rng.start_nm), min_value=200.0, max_value=2000.0)
    end = st.number_input("λ end (nm)", value=float(rng.end_nm), min_value=200.0, max_value=2000.0)
    step = st.number_input("step (nm)", value=float(rng.step_nm), min_value=1.0, max_value=50.0)
    if st.button("Apply range", use_container_width=True):
        update_range(session, start_nm=start, end_nm=end, step_nm=step)
        st.success("Range updated.", icon="✅")

with st.sidebar.expander("Presets", expanded=False):
    name = st.text_input("Preset name", value="my_project")
    c1, c2, c3 = st.columns(3)
    with c1:
        if st.button("Save", use_container_width=True):
            presets.save(name, session.project)
            st.success(f"Preset '{name}' saved.", icon="💾")
    with c2:
        if st.button("Load", use_container_width=True):
            session.project = presets.load(name)
            st.success(f"Preset '{name}' loaded.", icon="📥")
    with c3:
        if st.button("Delete", use_container_width=True):
            presets.remove(name)
            st.warning(f"Preset '{name}' deleted.", icon="🗑️")
    st.caption(f"Available: {', '.join(presets.list()) or '(none)'}")
    st.download_button(
        "Download project (JSON)",
        data=project_to_json(session.project).encode("utf-8"),
        file_name="filmcalc-project.json",
        mime="application/json",
    )
    up = st.file_uploader("Open project (JSON)", type=["json"])
    if up is not None and st.button("Open uploaded project", use_container_width=True):
        session.project = project_from_json(up.getvalue().decode("utf-8"))
        st.success(f"Project '{up.name}' opened.", icon="📂")

# --------------------------------------------------------------------------------------
# Layer editor
# --------------------------------------------------------------------------------------
col_edit, col_stack = st.columns([3, 1])
with col_edit:
    st.subheader("Layer stack")
    st.caption("Layer 1 faces the incident medium (Air).")
    for i, layer in enumerate(session.project.stack.layers):
        c_mat, c_thk, c_up, c_down, c_del = st.columns([3, 2, 1, 1, 1])
        with c_mat:
            mat_sel = st.selectbox(
                f"Layer {i + 1}",
                material_ids,
                index=material_ids.index(layer.material_id),
                key=f"mat_{i}",
            )
        with c_thk:
            thk = st.number_input(
                "Thickness (nm)", value=float(layer.thickness_nm), min_value=0.1, key=f"thk_{i}"
            )
        if mat_sel != layer.material_id or thk != layer.thickness_nm:
            update_layer(session, i, material_id=mat_sel, thickness_nm=thk)
        with c_up:
            if st.button("↑", key=f"up_{i}"):
                move_layer(session, i, -1)
                st.rerun()
        with c_down:
            if st.button("↓", key=f"down_{i}"):
                move_layer(session, i, 1)
                st.rerun()
        with c_del:
            if st.button("✕", key=f"del_{i}"):
                remove_layer(session, i)
                st.rerun()

    if st.button("＋ Add layer"):
        add_layer(session)
        st.rerun()

    sub_sel = st.selectbox(
        "Substrate", material_ids, index=material_ids.index(session.project.stack.substrate)
    )
    if sub_sel != session.project.stack.substrate:
        set_substrate(session, sub_sel)

with col_stack:
    st.subheader("Stack diagram")
    st.plotly_chart(
        presenter.stack_diagram(session.project.stack, materials), use_container_width=True
    )

# --------------------------------------------------------------------------------------
# Run the engine (single source of truth used by tabs below)
# --------------------------------------------------------------------------------------
try:
    res: SpectrumResult = run_session(session, engine)
except FilmCalcError as e:
    st.error(str(e))
    st.stop()

# --------------------------------------------------------------------------------------
# Tabs
# --------------------------------------------------------------------------------------
tab1, tab2, tab3, tab4 = st.tabs(["Spectrum", "Results", "Export", "Design checks"])

# ---- Tab 1: Spectrum -----------------------------------------------------------------
with tab1:
    fig = presenter.spectrum_plot(res)
    st.plotly_chart(fig, use_container_width=True)
    st.caption(f"Max energy residual |1 − (R+T+A)|: {res.scalars.energy_residual:.3e}")

# ---- Tab 2: Results ------------------------------------------------------------------
with tab2:
    s = res.summary
    cols = st.columns(4)
    with cols[0]:
        st.metric("Peak reflectance", f"{s.peak_R.value * 100:.1f}%")
        st.caption(f"at {s.peak_R.wavelength_nm:g} nm")
    with cols[1]:
        st.metric("Peak transmittance", f"{s.peak_T.value * 100:.1f}%")
        st.caption(f"at {s.peak_T.wavelength_nm:g} nm")
    with cols[2]:
        st.metric("Avg R (visible)", f"{s.avg_R_visible * 100:.2f}%")
        st.caption("400–700 nm")
    with cols[3]:
        st.metric("Avg T (visible)", f"{s.avg_T_visible * 100:.2f}%")
        st.caption("400–700 nm")

# ---- Tab 3: Export -------------------------------------------------------------------
with tab3:
    c1, c2, c3 = st.columns(3)
    with c1:
        st.download_button(
            "📄 Spectrum CSV",
            data=spectrum_to_csv(res.points).encode("utf-8"),
            file_name="filmcalc-spectrum.csv",
            mime="text/csv",
        )
    with c2:
        try:
            png = figure_to_png_bytes(fig)
            st.download_button(
                "🖼️ Chart PNG", data=png, file_name="filmcalc-chart.png", mime="image/png"
            )
        except RuntimeError as e:
            st.info(str(e))
    with c3:
        st.download_button(
            "Download report.md",
            data=stack_report_markdown(session.project, materials, summary=res.summary).encode(
                "utf-8"
            ),
            file_name="report.md",
            mime="text/markdown",
        )
    df_layers = layer_table(session.project.stack, materials)
    st.dataframe(df_layers, use_container_width=True)
    st.download_button(
        "Layer table (CSV)", data=to_csv_bytes(df_layers), file_name="filmcalc-layers.csv"
    )

# ---- Tab 4: Design checks ------------------------------------------------------------
with tab4:
    st.subheader("Solver vs closed-form quarter-wave designs")
    lam_design = float(st.number_input("Design wavelength (nm)", value=550.0, step=10.0))
    pairs = int(st.slider("HR pairs", min_value=1, max_value=10, value=5))
    records: list[Any] = [
        check_quarter_wave_ar(materials, design_wavelength_nm=lam_design),
        check_high_reflector(materials, design_wavelength_nm=lam_design, pairs=pairs),
    ]
    for rec in records:
        msg = (
            f"{rec.design} @ {rec.wavelength_nm:g} nm — R(TMM)={rec.R_solver:.5f}, "
            f"R(closed form)={rec.R_analytical:.5f}, |Δ|={rec.abs_error:.1e}"
        )
        if rec.passed:
            st.success(msg)
        else:
            st.error(msg)

# --------------------------------------------------------------------------------------
# Footer
# --------------------------------------------------------------------------------------
st.caption(
    f"Materials: **{len(material_ids)}** · Spectrum points: **{len(res.points)}** · Presets path: `{presets.base_dir}`"
)
