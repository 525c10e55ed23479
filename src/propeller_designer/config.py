"""
Propeller Designer Configuration Module
=======================================

This module contains configuration settings and physical constants for the
propeller design tool. All solver settings and empirical model constants are
centralized here so an alternate blade model can be tried without touching
the solver code.

Physical Constants:
------------------
- AIR_DENSITY_SEA_LEVEL: Density used by the blade-element integration (1.225)
- AIR_DENSITY_SLUG_FT3: Sea level density for design-point sizing (slug/ft³)
- STANDARD_GRAVITY_FT_S2: Standard gravity (ft/s²)
- HP_TO_FT_LBF_PER_S: Horsepower to ft·lbf/s conversion factor

Configuration Classes:
---------------------
- ChordDistribution: Blade chord distribution model selector
- PropellerDesignerConfig: Main configuration class with all settings

Usage:
------
    from src.propeller_designer.config import PropellerDesignerConfig

    # Use default configuration
    config = PropellerDesignerConfig()

    # Or select the historic chord distribution
    config = PropellerDesignerConfig(
        chord_distribution=ChordDistribution.HISTORIC
    )
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


# =============================================================================
# Physical Constants
# =============================================================================

# Density used inside the blade-element integration.
# CT and CP are ratios so the same value appears in numerator and denominator.
AIR_DENSITY_SEA_LEVEL = 1.225

# Standard sea level air density (slug/ft³) for design-point sizing
AIR_DENSITY_SLUG_FT3 = 0.002378

# Standard gravity (ft/s²)
STANDARD_GRAVITY_FT_S2 = 32.174

# 1 hp = 550 ft·lbf/s
HP_TO_FT_LBF_PER_S = 550.0

# max_rpm = TIP_MACH_RPM_CONSTANT / diameter_ft gives a static sea level
# blade-tip Mach number of 0.88
TIP_MACH_RPM_CONSTANT = 18763.0

FEET_TO_INCH = 12.0

# =============================================================================
# Interference Model Constants
# =============================================================================

# Fraction of the propeller diameter washing over the wing
PROPWASH_SPAN_FACTOR = 0.96

# The 60 degree flap column is the 0 degree column scaled by this factor
FLAP_COLUMN_FACTOR = 2.667

# Flap deflection columns of the interference tables (deg)
FLAP_COLUMNS_DEG: Tuple[float, float] = (0.0, 60.0)

# Lower bound of the zero-effect angle of attack (rad)
MIN_ZERO_ALPHA_RAD = -0.01

# =============================================================================
# Helical Tip Mach Corrections
# =============================================================================

# (helical tip Mach, factor) - literal model data, never recomputed
CT_MACH_TABLE: Tuple[Tuple[float, float], ...] = (
    (0.85, 1.0),
    (1.05, 0.8),
)

CP_MACH_TABLE: Tuple[Tuple[float, float], ...] = (
    (0.85, 1.0),
    (1.05, 1.8),
    (2.00, 1.4),
)

# =============================================================================
# Variable Pitch Governor Limits (exported as-is)
# =============================================================================

VARIABLE_PITCH_MIN_DEG = 12.0
VARIABLE_PITCH_MAX_DEG = 45.0
MIN_RPM_FRACTION = 0.85


class ChordDistribution(Enum):
    """Spanwise blade chord distribution model."""
    MODERN = "modern"       # Wide, paddle-like blades
    HISTORIC = "historic"   # Narrow root, early wooden propellers


@dataclass
class PropellerDesignerConfig:
    """
    Configuration settings for the Propeller Designer module.

    The defaults reproduce the published Aeromatic propeller model. Changing
    them produces a different (but self-consistent) performance map.

    Attributes:
    ----------
    num_elements : int
        Number of radial stations bounding the blade elements. The blade is
        split into ``num_elements - 2`` intervals between the hub station
        and the tip, and ``num_elements - 1`` stations are integrated.

    hub_station_fraction : float
        Radial position of the first station as a fraction of the radius.

    max_iterations : int
        Hard ceiling for the induction factor fixed-point iteration.
        Reaching it is accepted as a best-effort result.

    convergence_tolerance : float
        Absolute change in both induction factors below which the
        iteration is considered converged.

    span_efficiency : float
        Assumed span efficiency factor of the blade sections.

    chord_distribution : ChordDistribution
        Chord distribution model used for every station.

    advance_ratio_start, advance_ratio_end : float
        Advance ratio sweep range, end exclusive.

    advance_ratio_fine_step, advance_ratio_coarse_step : float
        Sweep step sizes. The fine step is used while J does not exceed
        ``advance_ratio_step_switch``.

    num_prop_pitches : int
        Number of pitch levels swept for variable pitch propellers.

    default_verbose : bool
        When True, solver diagnostics are printed.
    """

    # -------------------------------------------------------------------------
    # Blade Element Discretization
    # -------------------------------------------------------------------------

    num_elements: int = 12
    hub_station_fraction: float = 0.1

    # -------------------------------------------------------------------------
    # Induction Solver Configuration
    # -------------------------------------------------------------------------

    max_iterations: int = 500
    convergence_tolerance: float = 1.0e-5
    initial_axial_induction: float = 0.1
    initial_tangential_induction: float = 0.01

    # -------------------------------------------------------------------------
    # Blade Section Aerodynamics
    # -------------------------------------------------------------------------

    span_efficiency: float = 0.89
    zero_lift_cl: float = 0.42

    # CD0 = profile_drag_factor * thickness ratio
    profile_drag_factor: float = 0.002448

    # Max chord estimate when none is given: factor * D^(1/blades)
    max_chord_factor: float = 0.17

    chord_distribution: ChordDistribution = ChordDistribution.MODERN

    # -------------------------------------------------------------------------
    # Performance Sweep Configuration
    # -------------------------------------------------------------------------

    advance_ratio_start: float = 0.1
    advance_ratio_end: float = 2.4
    advance_ratio_fine_step: float = 0.05
    advance_ratio_coarse_step: float = 0.1
    advance_ratio_step_switch: float = 1.36

    num_prop_pitches: int = 6
    first_pitch_offset: float = -15.0
    pitch_level_spacing: float = 15.0

    # -------------------------------------------------------------------------
    # Runtime Configuration
    # -------------------------------------------------------------------------

    default_verbose: bool = False

    def __post_init__(self):
        """Validate settings that would break the table topology."""
        if self.num_elements < 3:
            raise ValueError(
                f"num_elements must be at least 3, got {self.num_elements}"
            )
        if self.max_iterations < 1:
            raise ValueError(
                f"max_iterations must be positive, got {self.max_iterations}"
            )
        if self.num_prop_pitches < 1:
            raise ValueError(
                f"num_prop_pitches must be positive, got {self.num_prop_pitches}"
            )
        if self.advance_ratio_start <= 0:
            raise ValueError(
                f"advance_ratio_start must be positive, got {self.advance_ratio_start}"
            )

    @property
    def num_intervals(self) -> int:
        """Number of radial intervals between hub station and tip."""
        return self.num_elements - 2

    @property
    def num_stations(self) -> int:
        """Number of radial stations integrated per advance ratio."""
        return self.num_elements - 1


# -------------------------------------------------------------------------
# Module-level default configuration instance
# -------------------------------------------------------------------------

DEFAULT_CONFIG = PropellerDesignerConfig()
