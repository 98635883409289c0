from __future__ import annotations

import logging
import sys
from pathlib import Path

logger = logging.getLogger("filmcalc")


def main(argv: list[str] | None = None) -> int:
    """
    CLI entry.

    ``python -m filmcalc project.json`` writes the project's spectrum as CSV to
    stdout. Without arguments, print how to start the UI; Streamlit is not
    imported here to avoid import-time side effects.
    """
    args = sys.argv[1:] if argv is None else argv
    repo_root = Path(__file__).resolve().parent.parent
    if not args:
        ui_script = repo_root / "ui_streamlit" / "app.py"
        msg = (
            "FilmCalc — Thin Film Optics Calculator\n"
            f"Project root: {repo_root}\n"
            f"Run the app with:\n\n"
            f"    streamlit run {ui_script}\n\n"
            "Or export a saved project's spectrum:\n\n"
            "    python -m filmcalc path/to/project.json > spectrum.csv\n"
        )
        sys.stdout.write(msg)
        return 0

    logging.basicConfig(level=logging.INFO, stream=sys.stderr)

    from filmcalc.adapters.presets_local.store import project_from_json
    from filmcalc.adapters.solver_tmm.engine import TmmSolverEngine
    from filmcalc.domain.errors import FilmCalcError
    from filmcalc.domain.models import SweepRequest
    from filmcalc.exporting.io import spectrum_to_csv

    path = Path(args[0])
    project = project_from_json(path.read_text(encoding="utf-8"))
    try:
        result = TmmSolverEngine().run(SweepRequest(stack=project.stack, range=project.range))
    except FilmCalcError as e:
        logger.error("%s: %s", path, e)
        return 2
    logger.info(
        "%s: %d samples, peak R %.4f at %g nm",
        path,
        len(result.points),
        result.summary.peak_R.value,
        result.summary.peak_R.wavelength_nm,
    )
    sys.stdout.write(spectrum_to_csv(result.points))
    return 0


if __name__ == "__main__":
    sys.exit(main())
