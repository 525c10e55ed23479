"""
Design-Point Sizing
===================

Closed-form estimates of the scalar propeller properties that feed the
performance sweep and the exported definition:

- Maximum propeller RPM (static sea level tip Mach 0.88)
- Gear ratio (never below 1)
- Design-point power and thrust coefficients, static thrust
- Blade count
- Polar moment of inertia

Design Points:
-------------
- Fixed pitch: blade angle ~22°, J = 0.2
- Variable pitch: blade angle ~15°, J = 0

Input validation lives here so malformed inputs fail before the expensive
sweep runs.
"""

import math
from typing import Optional, Tuple

from .config import (
    AIR_DENSITY_SLUG_FT3,
    HP_TO_FT_LBF_PER_S,
    STANDARD_GRAVITY_FT_S2,
    TIP_MACH_RPM_CONSTANT,
)
from .debugger import CalculationDebugger
from .models import DesignPointResult, PropellerInputError, PropellerSpec


# =============================================================================
# Blade Count Bands
# =============================================================================

# (exclusive lower Cp0 bound, blades), checked from the top down
BLADE_COUNT_BANDS: Tuple[Tuple[float, int], ...] = (
    (0.160, 8),
    (0.105, 6),
    (0.065, 4),
)

TWO_BLADE_CP0_LIMIT = 0.035

# Propeller mass split
HUB_MASS_FRACTION = 0.1
HUB_RADIUS_FRACTION = 0.1


def validate_propeller_spec(spec: PropellerSpec):
    """
    Check that the inputs describe a physical propeller.

    Raises:
    ------
    PropellerInputError
        If diameter, power or engine RPM is not positive, or a pitch angle
        or the maximum chord is not a finite number.
    """
    checks = (
        ("diameter", spec.diameter),
        ("engine power", spec.engine_power),
        ("engine RPM", spec.engine_rpm),
    )
    for name, value in checks:
        if not math.isfinite(value) or value <= 0:
            raise PropellerInputError(f"Propeller {name} must be positive, got {value}")

    for name, value in (("hub pitch", spec.pitch_hub), ("tip pitch", spec.pitch_tip)):
        if not math.isfinite(value):
            raise PropellerInputError(f"Propeller {name} must be finite, got {value}")

    if spec.max_chord is not None and (not math.isfinite(spec.max_chord) or spec.max_chord < 0):
        raise PropellerInputError(
            f"Propeller max chord must be non-negative, got {spec.max_chord}"
        )


def compute_max_rpm(diameter: float) -> float:
    """RPM giving a static sea level tip Mach number of 0.88."""
    return TIP_MACH_RPM_CONSTANT / diameter


def compute_gear_ratio(engine_rpm: float, max_rpm: float) -> float:
    """Engine to propeller gear ratio; direct drive (1.0) is the floor."""
    return max(engine_rpm / max_rpm, 1.0)


def estimate_blade_count(cp0: float) -> int:
    """
    Estimate the blade count from the design-point power coefficient.

    Parameters:
    ----------
    cp0 : float
        Design-point power coefficient.

    Returns:
    -------
    int
        2 below 0.035, 3 up to 0.065, 4 up to 0.105, 6 up to 0.160, else 8.
    """
    if cp0 < TWO_BLADE_CP0_LIMIT:
        return 2
    for lower_bound, blades in BLADE_COUNT_BANDS:
        if cp0 > lower_bound:
            return blades
    return 3


def estimate_moment_of_inertia(diameter: float, blades: int) -> float:
    """
    Estimate the polar moment of inertia (slug·ft²).

    The propeller weight is estimated as D^2.8 / 4.8 lbf. 90% of the mass is
    in the blades, each a slender rod about its root; the remaining 10%
    is the hub, a disc with a radius of 10% of the blade length.

    Parameters:
    ----------
    diameter : float
        Propeller diameter (ft).

    blades : int
        Number of blades.

    Returns:
    -------
    float
        Sum of the blade and hub contributions.
    """
    weight = diameter ** 2.8 / 4.8
    mass_prop = weight / STANDARD_GRAVITY_FT_S2
    mass_hub = HUB_MASS_FRACTION * mass_prop
    mass_blade = (mass_prop - mass_hub) / blades

    blade_length = diameter / 2.0
    hub_radius = HUB_RADIUS_FRACTION * blade_length

    ixx_blades = blades * (0.33333 * mass_blade * blade_length * blade_length)
    ixx_hub = 0.5 * mass_hub * hub_radius * hub_radius
    return ixx_blades + ixx_hub


def design_point_coefficients(
    power_hp: float,
    max_rpm: float,
    diameter: float,
    fixed_pitch: bool,
    rho: float = AIR_DENSITY_SLUG_FT3
) -> Tuple[float, float, float]:
    """
    Design-point power coefficient, thrust coefficient and static thrust.

    Parameters:
    ----------
    power_hp : float
        Engine power (hp).

    max_rpm : float
        Maximum propeller RPM.

    diameter : float
        Propeller diameter (ft).

    fixed_pitch : bool
        Selects the empirical thrust estimate.

    Returns:
    -------
    tuple
        (cp0, ct0, static_thrust_lbf)
    """
    max_rps = max_rpm / 60.0
    rps2 = max_rps * max_rps
    rps3 = rps2 * max_rps
    d4 = diameter ** 4
    d5 = d4 * diameter
    power = power_hp * HP_TO_FT_LBF_PER_S

    cp0 = power / rho / rps3 / d5
    if not fixed_pitch:
        ct0 = cp0 * 2.33
        static_thrust = ct0 * rho * rps2 * d4
    else:
        # Static RPS at which the design power is absorbed
        rpss = (power / 1.025 / cp0 / rho / d5) ** 0.3333
        ct0 = cp0 * 1.4
        static_thrust = 1.09 * ct0 * rho * rpss * rpss * d4

    return cp0, ct0, static_thrust


def size_design_point(
    spec: PropellerSpec,
    debugger: Optional[CalculationDebugger] = None
) -> DesignPointResult:
    """
    Derive every scalar design-point property from the inputs.

    Parameters:
    ----------
    spec : PropellerSpec
        Propeller design inputs.

    debugger : CalculationDebugger, optional
        Records each formula when given.

    Returns:
    -------
    DesignPointResult
        Read-only design-point properties.

    Raises:
    ------
    PropellerInputError
        If the inputs are not physical.
    """
    validate_propeller_spec(spec)

    max_rpm = compute_max_rpm(spec.diameter)
    gear_ratio = compute_gear_ratio(spec.engine_rpm, max_rpm)
    cp0, ct0, static_thrust = design_point_coefficients(
        spec.engine_power, max_rpm, spec.diameter, spec.fixed_pitch
    )
    blades = estimate_blade_count(cp0)
    ixx = estimate_moment_of_inertia(spec.diameter, blades)

    if debugger is not None:
        debugger.start_section("Design Point")
        debugger.add_step(
            "Design Point", "Max propeller RPM for tip Mach 0.88",
            "max_rpm = 18763 / D", {"D": spec.diameter}, max_rpm, "max_rpm", "RPM"
        )
        debugger.add_step(
            "Design Point", "Gear ratio",
            "gear = max(engine_rpm / max_rpm, 1)",
            {"engine_rpm": spec.engine_rpm, "max_rpm": max_rpm}, gear_ratio, "gear_ratio"
        )
        debugger.add_step(
            "Design Point", "Design-point power coefficient",
            "Cp0 = P·550 / ρ / n³ / D⁵",
            {"P": spec.engine_power, "rho": AIR_DENSITY_SLUG_FT3, "n": max_rpm / 60.0},
            cp0, "Cp0"
        )
        debugger.add_step(
            "Design Point", "Design-point thrust coefficient",
            "Ct0 = 1.4·Cp0" if spec.fixed_pitch else "Ct0 = 2.33·Cp0",
            {"Cp0": cp0}, ct0, "Ct0",
            comment="fixed pitch, J = 0.2" if spec.fixed_pitch else "variable pitch, J = 0"
        )
        debugger.add_step(
            "Design Point", "Static thrust", "T = Ct0·ρ·n²·D⁴",
            {"Ct0": ct0}, static_thrust, "static_thrust", "lbf"
        )
        debugger.add_step(
            "Blades", "Blade count from Cp0 bands", "", {"Cp0": cp0}, blades, "blades"
        )
        debugger.add_step(
            "Inertia", "Polar moment of inertia",
            "Ixx = B·m_b·L²/3 + m_h·R²/2",
            {"D": spec.diameter, "B": blades}, ixx, "ixx", "slug·ft²"
        )

    return DesignPointResult(
        max_rpm=max_rpm,
        gear_ratio=gear_ratio,
        cp0=cp0,
        ct0=ct0,
        static_thrust=static_thrust,
        ixx=ixx,
        blades=blades,
    )
