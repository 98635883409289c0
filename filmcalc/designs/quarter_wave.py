"""Quarter-wave designs and their closed-form reflectance.

These formulas are kept independent of the transfer-matrix solver so that each
can be used to check the other.
"""
from __future__ import annotations

from filmcalc.domain.models import Layer, StackDef


def quarter_wave_thickness(design_wavelength_nm: float, n_layer: float) -> float:
    """Physical thickness d with n·d = λ/4."""
    return design_wavelength_nm / (4.0 * n_layer)


def quarter_wave_ar(
    layer_material: str,
    substrate: str,
    design_wavelength_nm: float,
    n_layer: float,
    incident: str = "Air",
) -> StackDef:
    """Single-layer quarter-wave anti-reflection coating."""
    d = quarter_wave_thickness(design_wavelength_nm, n_layer)
    return StackDef(
        incident=incident,
        layers=(Layer(material_id=layer_material, thickness_nm=d),),
        substrate=substrate,
    )


def analytical_qw_reflectance(n0: float, n_layer: float, n_sub: float) -> float:
    # R_min = ((n_layer² − n0·ns) / (n_layer² + n0·ns))²
    num = n_layer * n_layer - n0 * n_sub
    den = n_layer * n_layer + n0 * n_sub
    return (num / den) ** 2


def high_reflector_stack(
    high_material: str,
    low_material: str,
    substrate: str,
    design_wavelength_nm: float,
    n_high: float,
    n_low: float,
    pairs: int,
    incident: str = "Air",
) -> StackDef:
    """(H L)^N H quarter-wave mirror; each thickness from its own index."""
    if pairs < 0:
        raise ValueError("pairs must be >= 0")
    d_high = quarter_wave_thickness(design_wavelength_nm, n_high)
    d_low = quarter_wave_thickness(design_wavelength_nm, n_low)
    H = Layer(material_id=high_material, thickness_nm=d_high)
    L = Layer(material_id=low_material, thickness_nm=d_low)
    layers = [H, L] * pairs + [H]
    return StackDef(incident=incident, layers=tuple(layers), substrate=substrate)


def analytical_hr_reflectance(
    n0: float, n_high: float, n_low: float, n_sub: float, pairs: int
) -> float:
    r"""Reflectance of (H L)^N H at its design wavelength.

    R = ((n0·ns − nH^(2N+2)/nL^(2N)) / (n0·ns + nH^(2N+2)/nL^(2N)))²
    """
    ratio = n_high ** (2 * pairs + 2) / n_low ** (2 * pairs)
    num = n0 * n_sub - ratio
    den = n0 * n_sub + ratio
    return (num / den) ** 2
