"""
Propeller Designer Data Model
=============================

Record types passed between the sizing, sweep and interference stages.
Every record is immutable once created; a design is owned by a single
thruster and never shared.

Units Convention:
----------------
- Length: feet (ft)
- Angles: degrees for blade pitch, radians for angle of attack
- Power: horsepower (hp)
- Rotational speed: revolutions per minute (RPM)
- Thrust: pounds force (lbf)
- Inertia: slug·ft²
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional, Tuple, TYPE_CHECKING

import numpy as np

from .config import FEET_TO_INCH, FLAP_COLUMNS_DEG

if TYPE_CHECKING:
    from .sweep import PerformanceTable


# =============================================================================
# Errors
# =============================================================================

class PropellerInputError(ValueError):
    """Design inputs that cannot describe a physical propeller."""


class TableTopologyError(RuntimeError):
    """Table shape check failed (programming fault)."""


# =============================================================================
# Inputs
# =============================================================================

@dataclass(frozen=True)
class PropellerSpec:
    """
    High-level propeller design inputs.

    Attributes:
    ----------
    diameter : float
        Propeller diameter (ft).

    engine_rpm : float
        Maximum engine RPM.

    engine_power : float
        Maximum engine power (hp).

    fixed_pitch : bool
        True for fixed pitch, False for variable (constant speed) pitch.

    pitch_hub : float
        Blade pitch angle at the hub station (deg).

    pitch_tip : float
        Blade pitch angle at the tip (deg).

    max_chord : float, optional
        Maximum blade chord (ft). Estimated from diameter and blade
        count when not given.
    """
    diameter: float = 8.0
    engine_rpm: float = 2100.0
    engine_power: float = 180.0
    fixed_pitch: bool = True
    pitch_hub: float = 48.0
    pitch_tip: float = 8.0
    max_chord: Optional[float] = None


class MountPoint(Enum):
    """Where an engine is mounted on the airframe."""
    FUSELAGE = "fuselage"
    LEFT_WING = "left_wing"
    RIGHT_WING = "right_wing"


@dataclass(frozen=True)
class EngineMount:
    """Mount side and spanwise offset (ft) of one engine."""
    side: MountPoint = MountPoint.FUSELAGE
    spanwise_offset: float = 0.0


@dataclass(frozen=True)
class AirframeGeometry:
    """
    Read-only airframe geometry used by the interference model.

    The lift coefficients are the clean (flaps up) wing values.
    """
    wing_span: float
    wing_area: float
    wing_chord_mean: float
    htail_arm: float
    htail_area: float
    cl0: float
    cl_max: float
    cl_alpha: float
    engine_mounts: Tuple[EngineMount, ...] = (EngineMount(),)

    @property
    def num_engines(self) -> int:
        """Number of engines (at least one)."""
        return max(len(self.engine_mounts), 1)


@dataclass(frozen=True)
class ThrusterInputs:
    """Everything needed to configure one propeller thruster."""
    propeller: PropellerSpec
    airframe: AirframeGeometry


# =============================================================================
# Results
# =============================================================================

class PerformancePoint(NamedTuple):
    """Thrust and power coefficient at one advance ratio."""
    J: float
    CT: float
    CP: float


@dataclass(frozen=True)
class DesignPointResult:
    """
    Scalar design-point properties derived from the inputs.

    Attributes:
    ----------
    max_rpm : float
        Propeller RPM giving a static sea level tip Mach of 0.88.

    gear_ratio : float
        Engine to propeller gear ratio, never below 1.

    cp0, ct0 : float
        Design-point power and thrust coefficients.

    static_thrust : float
        Static thrust estimate (lbf).

    ixx : float
        Polar moment of inertia (slug·ft²).

    blades : int
        Estimated blade count.
    """
    max_rpm: float
    gear_ratio: float
    cp0: float
    ct0: float
    static_thrust: float
    ixx: float
    blades: int


@dataclass(frozen=True)
class BreakpointTable:
    """
    Piecewise-linear table of angle of attack vs. coefficient.

    Rows are keyed by angle of attack (rad), columns by flap deflection (deg).
    """
    alpha: Tuple[float, ...]
    values: Tuple[Tuple[float, ...], ...]
    flap_deg: Tuple[float, ...] = FLAP_COLUMNS_DEG

    def __post_init__(self):
        if len(self.alpha) != len(self.values):
            raise TableTopologyError(
                f"{len(self.alpha)} breakpoints but {len(self.values)} rows"
            )
        for row in self.values:
            if len(row) != len(self.flap_deg):
                raise TableTopologyError(
                    f"Row has {len(row)} columns, expected {len(self.flap_deg)}"
                )
        if any(b <= a for a, b in zip(self.alpha, self.alpha[1:])):
            raise TableTopologyError(
                f"Breakpoints must be strictly increasing, got {self.alpha}"
            )

    @property
    def rows(self) -> Tuple[Tuple[float, ...], ...]:
        """Rows as (alpha, value_per_flap_column...) tuples."""
        return tuple((a,) + tuple(v) for a, v in zip(self.alpha, self.values))

    def column(self, index: int) -> Tuple[float, ...]:
        """Values of one flap column."""
        return tuple(row[index] for row in self.values)

    def evaluate(self, alpha: float, flap_deg: float = 0.0) -> float:
        """
        Linearly interpolate the table, clamping to the end rows/columns.

        Parameters:
        ----------
        alpha : float
            Angle of attack (rad).

        flap_deg : float
            Flap deflection (deg).

        Returns:
        -------
        float
            Interpolated coefficient.
        """
        per_column = [
            np.interp(alpha, self.alpha, self.column(i))
            for i in range(len(self.flap_deg))
        ]
        return float(np.interp(flap_deg, self.flap_deg, per_column))


@dataclass(frozen=True)
class InterferenceTables:
    """
    Propwash corrections on the airframe.

    Attributes:
    ----------
    lift : BreakpointTable
        Delta lift coefficient.

    pitch : BreakpointTable
        Delta pitch moment coefficient.

    roll : float
        Roll moment coefficient due to differential propwash.

    dcl0, dcl_max, dcl_alpha : float
        Thruster-induced lift deltas the tables are built from.
    """
    lift: BreakpointTable
    pitch: BreakpointTable
    roll: float
    dcl0: float
    dcl_max: float
    dcl_alpha: float
    prop_span_left: float = 0.0
    prop_span_right: float = 0.0


@dataclass(frozen=True)
class PropellerDesign:
    """
    Complete output of one propeller thruster.

    This is the structure handed to the table exporter, which performs no
    further computation.
    """
    spec: PropellerSpec
    design_point: DesignPointResult
    max_chord: float
    performance: "PerformanceTable"
    interference: InterferenceTables
    ct_mach: Tuple[Tuple[float, float], ...]
    cp_mach: Tuple[Tuple[float, float], ...]
    num_engines: int = 1
    ct_factor: float = 1.0
    cp_factor: float = 1.0
    min_pitch: Optional[float] = None
    max_pitch: Optional[float] = None
    min_rpm: Optional[float] = None
    ceiling_hits: int = field(default=0, compare=False)

    @property
    def diameter_inches(self) -> float:
        """Propeller diameter (in)."""
        return self.spec.diameter * FEET_TO_INCH
