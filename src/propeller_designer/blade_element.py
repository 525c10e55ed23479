"""
Blade-Element Integrator
========================

Discretizes the blade span into radial stations, runs the induction
solver at each one and integrates thrust and torque into dimensionless
coefficients:

    CT = T / (ρ n² D⁴)
    CP = 2π Q / (ρ n² D⁵)

Classes:
--------
- BladeStation: Geometry of one radial station
- BladeGeometry: Station layout of a whole blade
- ElementIntegral: Coefficients at one (J, pitch) pair

Functions:
----------
- chord_at(): Local chord from the configured distribution model
- thickness_ratio_at(): Local thickness ratio
- resolve_max_chord(): Maximum chord, estimated when not given
- integrate_blade(): Blade-element integration at one (J, pitch) pair
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .config import (
    PropellerDesignerConfig,
    DEFAULT_CONFIG,
    ChordDistribution,
    AIR_DENSITY_SEA_LEVEL,
)
from .induction import SectionPolar, solve_induction
from .models import PropellerSpec


def chord_at(
    r: float,
    max_chord: float,
    distribution: ChordDistribution = ChordDistribution.MODERN
) -> float:
    """
    Local chord at normalized tip distance r = 1 - rad/R.

    Parameters:
    ----------
    r : float
        1 at the rotation axis, 0 at the tip.

    max_chord : float
        Maximum blade chord.

    distribution : ChordDistribution
        Chord distribution model.

    Returns:
    -------
    float
        Local blade chord.
    """
    if distribution == ChordDistribution.HISTORIC:
        return max_chord * (0.25 + 0.9 * (r ** 0.5 - r ** 5.0))
    return max_chord * (0.5 + 0.53 * (r ** 0.25 - r ** 5.0))


def thickness_ratio_at(r: float) -> float:
    """Local thickness to chord ratio; thick at the root, thin at the tip."""
    return 0.2 * (0.1 + 0.9 * r ** 2.5)


def resolve_max_chord(
    diameter: float,
    blades: int,
    max_chord: Optional[float] = None,
    config: PropellerDesignerConfig = DEFAULT_CONFIG
) -> float:
    """
    Return the given maximum chord, or estimate it as 0.17·D^(1/B).

    A zero or missing value means "not specified".
    """
    if max_chord:
        return max_chord
    return config.max_chord_factor * diameter ** (1.0 / blades)


@dataclass(frozen=True)
class BladeStation:
    """Geometry and section polar of one radial station."""
    radius: float
    chord: float
    pitch_deg: float
    polar: SectionPolar


@dataclass(frozen=True)
class BladeGeometry:
    """
    Station layout of one blade.

    Attributes:
    ----------
    diameter : float
        Propeller diameter.

    blades : int
        Number of blades.

    spacing : float
        Radial distance between stations.

    stations : tuple of BladeStation
        Stations from the hub station outward, design pitch applied.
    """
    diameter: float
    blades: int
    spacing: float
    stations: Tuple[BladeStation, ...]

    @classmethod
    def build(
        cls,
        spec: PropellerSpec,
        blades: int,
        max_chord: float,
        config: PropellerDesignerConfig = DEFAULT_CONFIG
    ) -> "BladeGeometry":
        """
        Lay out the stations of a blade with linear pitch from hub to tip.

        Parameters:
        ----------
        spec : PropellerSpec
            Diameter and hub/tip pitch angles.

        blades : int
            Blade count from design-point sizing.

        max_chord : float
            Maximum blade chord.

        config : PropellerDesignerConfig, optional
            Station count and chord distribution model.
        """
        tip = spec.diameter / 2.0
        hub = config.hub_station_fraction * tip
        spacing = (tip - hub) / config.num_intervals

        # Linear pitch distribution through (hub, pitch_hub) and (tip, pitch_tip)
        slope = (spec.pitch_tip - spec.pitch_hub) / (tip - hub)
        offset = spec.pitch_hub - slope * hub

        stations = []
        for i in range(config.num_stations):
            rad = hub + i * spacing
            r = max(1.0 - rad / tip, 0.0)
            chord = chord_at(r, max_chord, config.chord_distribution)
            polar = SectionPolar.from_geometry(
                blades, spacing, chord, thickness_ratio_at(r), config
            )
            stations.append(BladeStation(
                radius=rad,
                chord=chord,
                pitch_deg=slope * rad + offset,
                polar=polar,
            ))

        return cls(
            diameter=spec.diameter,
            blades=blades,
            spacing=spacing,
            stations=tuple(stations),
        )


@dataclass(frozen=True)
class ElementIntegral:
    """Integrated blade loads at one (J, pitch offset) pair."""
    J: float
    pitch_offset: float
    thrust: float
    torque: float
    CT: float
    CP: float
    ceiling_hits: int = 0


def integrate_blade(
    geometry: BladeGeometry,
    rpm: float,
    advance_ratio: float,
    pitch_offset: float = 0.0,
    config: PropellerDesignerConfig = DEFAULT_CONFIG,
    rho: float = AIR_DENSITY_SEA_LEVEL
) -> ElementIntegral:
    """
    Integrate thrust and torque over all stations at one operating point.

    Uses the rectangular rule: each station load is multiplied by the
    station spacing.

    Parameters:
    ----------
    geometry : BladeGeometry
        Station layout.

    rpm : float
        Rotational speed (RPM).

    advance_ratio : float
        J = V / (nD). Must be positive.

    pitch_offset : float, optional
        Blade angle added to every station (deg).

    Returns:
    -------
    ElementIntegral
        Thrust, torque and their coefficients.
    """
    n = rpm / 60.0
    omega = 2.0 * math.pi * n
    dia = geometry.diameter
    velocity = advance_ratio * n * dia

    thrust = 0.0
    torque = 0.0
    ceiling_hits = 0
    for station in geometry.stations:
        result = solve_induction(
            radius=station.radius,
            chord=station.chord,
            blades=geometry.blades,
            pitch_angle=math.radians(station.pitch_deg + pitch_offset),
            polar=station.polar,
            velocity=velocity,
            omega=omega,
            config=config,
            rho=rho,
        )
        if not result.converged:
            ceiling_hits += 1
        thrust += result.dt_dr * geometry.spacing
        torque += result.dq_dr * geometry.spacing

    n2 = n * n
    d4 = dia ** 4
    d5 = d4 * dia
    ct = thrust / (rho * n2 * d4)
    cq = torque / (rho * n2 * d5)

    return ElementIntegral(
        J=advance_ratio,
        pitch_offset=pitch_offset,
        thrust=thrust,
        torque=torque,
        CT=ct,
        CP=2.0 * math.pi * cq,
        ceiling_hits=ceiling_hits,
    )
