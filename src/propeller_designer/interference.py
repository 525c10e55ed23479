"""
Interference Model
==================

Estimates the effect of the propeller slipstream on the airframe as three
additive corrections, all scaled by the fraction of wing area washed by
the propeller:

    Swp = 0.96 · D / b

- Lift: breakpoint table over angle of attack and flap deflection
- Pitch moment: the lift table scaled by a tail-volume factor
- Roll moment: single coefficient from the spanwise position of the
  left-wing thrusters (parabolic lift-loss approximation)

Reference:
---------
http://www.princeton.edu/~stengel/MAE331Lecture5.pdf
"""

import math
from typing import Tuple

from .config import (
    FLAP_COLUMN_FACTOR,
    MIN_ZERO_ALPHA_RAD,
    PROPWASH_SPAN_FACTOR,
)
from .models import (
    AirframeGeometry,
    BreakpointTable,
    InterferenceTables,
    MountPoint,
    PropellerInputError,
)

# Pitch table returns to zero at this multiple of the stall angle
PITCH_ZERO_ALPHA_FACTOR = 1.3
LIFT_ZERO_ALPHA_FACTOR = 2.0


def validate_airframe(airframe: AirframeGeometry):
    """
    Check the airframe geometry used by the interference model.

    Raises:
    ------
    PropellerInputError
        If wingspan, wing area, mean chord or lift curve slope is not
        positive, the tail arm/area is negative, or CLmax does not
        exceed CL0.
    """
    positive = (
        ("wing span", airframe.wing_span),
        ("wing area", airframe.wing_area),
        ("mean wing chord", airframe.wing_chord_mean),
        ("lift curve slope", airframe.cl_alpha),
    )
    for name, value in positive:
        if not math.isfinite(value) or value <= 0:
            raise PropellerInputError(f"Airframe {name} must be positive, got {value}")

    for name, value in (("tail arm", airframe.htail_arm), ("tail area", airframe.htail_area)):
        if not math.isfinite(value) or value < 0:
            raise PropellerInputError(f"Airframe {name} must not be negative, got {value}")

    if not (math.isfinite(airframe.cl0) and math.isfinite(airframe.cl_max)):
        raise PropellerInputError(
            f"Airframe lift coefficients must be finite, got CL0={airframe.cl0}, "
            f"CLmax={airframe.cl_max}"
        )
    if airframe.cl_max <= airframe.cl0:
        raise PropellerInputError(
            f"Airframe CLmax ({airframe.cl_max}) must exceed CL0 ({airframe.cl0})"
        )


def average_mount_spans(airframe: AirframeGeometry) -> Tuple[float, float]:
    """
    Spanwise thruster position per wing side.

    Multi-engine aircraft average the offsets of each side; a side without
    engines stays at 0. A single-engine aircraft uses its one offset as is.

    Returns:
    -------
    tuple
        (left_offset, right_offset) in feet.
    """
    span_left = 0.0
    span_right = 0.0
    left = 0
    right = 0
    for mount in airframe.engine_mounts:
        if mount.side == MountPoint.LEFT_WING:
            left += 1
            span_left += mount.spanwise_offset
        elif mount.side == MountPoint.RIGHT_WING:
            right += 1
            span_right += mount.spanwise_offset

    if airframe.num_engines > 1:
        if left:
            span_left /= left
        if right:
            span_right /= right

    return span_left, span_right


def pitch_moment_factor(airframe: AirframeGeometry) -> float:
    """
    Tail-volume-like factor converting delta lift into delta pitch moment.

    Only two thrusters are assumed to wash the tail on aircraft with more
    than three engines.
    """
    engines = airframe.num_engines
    knp = 2.0 if engines > 3 else float(engines)
    knp /= engines
    return (
        -knp * airframe.htail_arm * airframe.htail_area
        / airframe.wing_chord_mean / airframe.wing_area
    )


def _breakpoint_table(
    value0: float,
    value_max: float,
    zero_alpha: float,
    alpha_max: float,
    end_factor: float
) -> BreakpointTable:
    """Four-row table: zero, (0, value0), (alpha_max, value_max), zero."""
    return BreakpointTable(
        alpha=(zero_alpha, 0.0, alpha_max, end_factor * alpha_max),
        values=(
            (0.0, 0.0),
            (value0, FLAP_COLUMN_FACTOR * value0),
            (value_max, FLAP_COLUMN_FACTOR * value_max),
            (0.0, 0.0),
        ),
    )


def roll_moment_coefficient(
    dcl_alpha: float,
    prop_span_left: float,
    diameter: float,
    wing_span: float
) -> float:
    """
    Roll moment coefficient due to differential propwash.

    k is the inboard edge of the slipstream as a fraction of the semi-span;
    the lift loss over the washed span follows (1 - k²)/3.
    """
    y = prop_span_left - diameter / 2.0
    k = y / (wing_span / 2.0)
    return (dcl_alpha / 2.0) * ((1.0 - k * k) / 3.0)


def compute_interference(
    diameter: float,
    airframe: AirframeGeometry
) -> InterferenceTables:
    """
    Build the lift, pitch and roll propwash corrections.

    Parameters:
    ----------
    diameter : float
        Propeller diameter (ft).

    airframe : AirframeGeometry
        Wing, tail and engine mount geometry.

    Returns:
    -------
    InterferenceTables
        Lift and pitch breakpoint tables plus the roll coefficient.

    Raises:
    ------
    PropellerInputError
        If the airframe geometry is invalid.
    """
    validate_airframe(airframe)

    swp = PROPWASH_SPAN_FACTOR * diameter / airframe.wing_span
    dcl0 = airframe.cl0 * swp
    dcl_max = airframe.cl_max * swp
    dcl_alpha = airframe.cl_alpha * swp

    alpha_max = (dcl_max - dcl0) / dcl_alpha

    # Zero intercept of the delta lift curve, kept clear of zero
    zero_alpha = min(-dcl0 / dcl_alpha, MIN_ZERO_ALPHA_RAD)

    lift = _breakpoint_table(dcl0, dcl_max, zero_alpha, alpha_max, LIFT_ZERO_ALPHA_FACTOR)

    pfact = pitch_moment_factor(airframe)
    pitch = _breakpoint_table(
        dcl0 * pfact, dcl_max * pfact, zero_alpha, alpha_max, PITCH_ZERO_ALPHA_FACTOR
    )

    span_left, span_right = average_mount_spans(airframe)
    roll = roll_moment_coefficient(dcl_alpha, span_left, diameter, airframe.wing_span)

    return InterferenceTables(
        lift=lift,
        pitch=pitch,
        roll=roll,
        dcl0=dcl0,
        dcl_max=dcl_max,
        dcl_alpha=dcl_alpha,
        prop_span_left=span_left,
        prop_span_right=span_right,
    )
