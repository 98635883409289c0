from __future__ import annotations

from typing import Iterable

from filmcalc.domain.models import PeakValue, SpectrumPoint, SpectrumSummary

VISIBLE_NM = (400.0, 700.0)  # inclusive


def summarize_spectrum(points: Iterable[SpectrumPoint]) -> SpectrumSummary:
    """Single pass: peak R and peak T (first occurrence wins ties) and visible-band means.

    An empty visible subset gives averages of 0. An empty spectrum gives
    peaks of -inf at wavelength 0.
    """
    lo, hi = VISIBLE_NM
    peak_R = PeakValue(wavelength_nm=0.0, value=float("-inf"))
    peak_T = PeakValue(wavelength_nm=0.0, value=float("-inf"))
    sum_R = sum_T = 0.0
    n_vis = 0

    for p in points:
        if p.R > peak_R.value:
            peak_R = PeakValue(wavelength_nm=p.wavelength_nm, value=p.R)
        if p.T > peak_T.value:
            peak_T = PeakValue(wavelength_nm=p.wavelength_nm, value=p.T)
        if lo <= p.wavelength_nm <= hi:
            sum_R += p.R
            sum_T += p.T
            n_vis += 1

    return SpectrumSummary(
        peak_R=peak_R,
        peak_T=peak_T,
        avg_R_visible=sum_R / n_vis if n_vis else 0.0,
        avg_T_visible=sum_T / n_vis if n_vis else 0.0,
    )
