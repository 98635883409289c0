from __future__ import annotations

from datetime import datetime, timezone
from textwrap import dedent

from filmcalc.domain.models import ProjectDocument, SpectrumSummary
from filmcalc.domain.ports import MaterialDB


def stack_report_markdown(
    project: ProjectDocument, materials: MaterialDB, *, summary: SpectrumSummary | None = None
) -> str:
    stack = project.stack
    rng = project.range
    md = f"""
    # Thin-film stack report (Auto‑generated)

    **Method:** transfer matrix, normal incidence, coherent  
    **Document version:** {project.version}  
    **Generated:** {datetime.now(timezone.utc).isoformat()}

    ## Stack
    Incident medium: {materials.get_material(stack.incident).name}
    """
    md = dedent(md)
    for i, L in enumerate(stack.layers):
        md += f"- L{i + 1}: {materials.get_material(L.material_id).name} — {L.thickness_nm:.4g} nm\n"
    md += f"\nSubstrate: {materials.get_material(stack.substrate).name}\n"

    md += dedent(
        f"""
    ## Sweep
    λ∈[{rng.start_nm:g},{rng.end_nm:g}] nm, step {rng.step_nm:g} nm.
    """
    )
    if summary is not None:
        md += dedent(
            f"""
        ## Results
        Peak R: {summary.peak_R.value * 100:.1f}% at {summary.peak_R.wavelength_nm:g} nm  
        Peak T: {summary.peak_T.value * 100:.1f}% at {summary.peak_T.wavelength_nm:g} nm  
        Avg R (400–700 nm): {summary.avg_R_visible * 100:.2f}%  
        Avg T (400–700 nm): {summary.avg_T_visible * 100:.2f}%
        """
        )
    return md.strip() + "\n"
