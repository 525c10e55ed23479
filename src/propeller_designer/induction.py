"""
Induction Solver
================

Solves the axial and tangential induction factors of one blade station
by damped fixed-point iteration of blade-element and momentum theory.

Theory Background:
-----------------
At radius r the blade section sees an axial velocity V0 = V(1 + a) and a
tangential velocity V2 = Ωr(1 - b). The inflow angle is

    φ = atan2(V0, V2)

and the section angle of attack is α = θ - φ, where θ is the local blade
pitch angle. A linearized lift/drag polar gives

    CL = CL0 + CLα α
    CD = CD0 + CDα α CL + CDi CL²

which is resolved into thrust (CY) and torque (CX) directions. Momentum
theory then returns new induction factors; the update is the average of
the old factor and the momentum estimate.

References:
----------
- http://www-mdp.eng.cam.ac.uk/web/library/enginfo/aerothermal_dvd_only/aero/propeller/prop1.html
- http://www.icas.org/ICAS_ARCHIVE/ICAS2010/PAPERS/434.PDF
"""

import math
from dataclasses import dataclass

from .config import (
    PropellerDesignerConfig,
    DEFAULT_CONFIG,
    AIR_DENSITY_SEA_LEVEL,
)


@dataclass(frozen=True)
class SectionPolar:
    """
    Linearized lift/drag polar of one blade section.

    Attributes:
    ----------
    cl0 : float
        Lift coefficient at zero angle of attack.

    cl_alpha : float
        Lift curve slope (1/rad).

    cd0 : float
        Profile drag coefficient.

    cd_alpha : float
        Drag coefficient growth with α·CL.

    cd_induced : float
        Induced drag factor applied to CL².
    """
    cl0: float
    cl_alpha: float
    cd0: float
    cd_alpha: float
    cd_induced: float

    @classmethod
    def from_geometry(
        cls,
        blades: int,
        station_spacing: float,
        chord: float,
        thickness_ratio: float,
        config: PropellerDesignerConfig = DEFAULT_CONFIG
    ) -> "SectionPolar":
        """
        Build the polar from local section aspect ratio.

        The section aspect ratio is AR = B·Δr / c and the lift slope
        follows the finite wing estimate πAR / (1 + sqrt(1 + AR²/4)).
        """
        eff = config.span_efficiency
        aspect_ratio = blades * station_spacing / chord
        p_ar = math.pi * aspect_ratio

        cl_alpha = p_ar / (1.0 + math.sqrt(1.0 + 0.25 * aspect_ratio * aspect_ratio))

        return cls(
            cl0=config.zero_lift_cl,
            cl_alpha=cl_alpha,
            cd0=config.profile_drag_factor * thickness_ratio,
            cd_alpha=2.0 * cl_alpha / (blades * eff * p_ar),
            cd_induced=1.0 / (eff * p_ar),
        )

    def coefficients(self, alpha: float):
        """Return (CL, CD) at angle of attack alpha (rad)."""
        cl = self.cl0 + self.cl_alpha * alpha
        cd = self.cd0 + self.cd_alpha * alpha * cl + self.cd_induced * cl * cl
        return cl, cd


@dataclass(frozen=True)
class InductionResult:
    """
    Converged state of one blade station.

    Attributes:
    ----------
    a : float
        Axial induction factor.

    b : float
        Tangential induction factor.

    dt_dr : float
        Thrust per unit radius.

    dq_dr : float
        Torque per unit radius.

    iterations : int
        Number of iterations performed.

    converged : bool
        False when the iteration ceiling was reached first.
    """
    a: float
    b: float
    dt_dr: float
    dq_dr: float
    iterations: int
    converged: bool


def solve_induction(
    radius: float,
    chord: float,
    blades: int,
    pitch_angle: float,
    polar: SectionPolar,
    velocity: float,
    omega: float,
    config: PropellerDesignerConfig = DEFAULT_CONFIG,
    rho: float = AIR_DENSITY_SEA_LEVEL
) -> InductionResult:
    """
    Iterate the induction factors of one station to equilibrium.

    Parameters:
    ----------
    radius : float
        Radial station position.

    chord : float
        Local blade chord.

    blades : int
        Number of blades.

    pitch_angle : float
        Local blade pitch angle (rad).

    polar : SectionPolar
        Section lift/drag model.

    velocity : float
        Freestream advance velocity. Must be positive.

    omega : float
        Rotational speed (rad/s).

    config : PropellerDesignerConfig, optional
        Supplies the tolerance, ceiling and initial guesses.

    rho : float, optional
        Air density.

    Returns:
    -------
    InductionResult
        Final induction factors and station loads. Reaching the iteration
        ceiling is not an error; the last iterate is returned.

    Algorithm:
    ---------
    1. Start from a = 0.1, b = 0.01
    2. Compute inflow angle, angle of attack and section loads
    3. Average old factors with the momentum estimates
    4. Stop when both factors change by less than the tolerance,
       or after ``config.max_iterations`` iterations
    """
    a = config.initial_axial_induction
    b = config.initial_tangential_induction
    tolerance = config.convergence_tolerance

    dt_dr = 0.0
    dq_dr = 0.0
    converged = False
    iterations = 0

    while iterations < config.max_iterations:
        iterations += 1

        v0 = velocity * (1.0 + a)
        v2 = omega * radius * (1.0 - b)
        phi = math.atan2(v0, v2)
        alpha = pitch_angle - phi

        cl, cd = polar.coefficients(alpha)
        cos_phi = math.cos(phi)
        sin_phi = math.sin(phi)
        cy = cl * cos_phi - cd * sin_phi
        cx = cd * cos_phi + cl * sin_phi

        v_local2 = v0 * v0 + v2 * v2
        dynamic_load = 0.5 * rho * v_local2 * blades * chord

        dt_dr = dynamic_load * cy
        dq_dr = dynamic_load * radius * cx

        # Momentum theory estimates of the induction factors
        a_momentum = dt_dr / (4.0 * math.pi * radius * rho * velocity * velocity * (1.0 + a))
        b_momentum = dq_dr / (
            4.0 * math.pi * radius ** 3 * rho * velocity * (1.0 + a) * omega
        )

        a_new = 0.5 * (a + a_momentum)
        b_new = 0.5 * (b + b_momentum)

        if abs(a_new - a) < tolerance and abs(b_new - b) < tolerance:
            converged = True

        a = a_new
        b = b_new

        if converged:
            break

    return InductionResult(
        a=a,
        b=b,
        dt_dr=dt_dr,
        dq_dr=dq_dr,
        iterations=iterations,
        converged=converged,
    )
