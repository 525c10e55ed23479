"""
Performance Sweep
=================

Drives the blade-element integrator across a grid of advance ratios and
blade pitch levels, producing the full thrust/power coefficient map.

Grid Definition:
---------------
- Advance ratio J from 0.1 to 2.4 (exclusive), step 0.05 while J <= 1.36,
  then 0.1 (36 samples with the default configuration)
- Fixed pitch: one pitch level at the design pitch
- Variable pitch: 6 levels, -15° to +60° from the design pitch in 15° steps

The resulting sequence is pitch-major, J-minor: all advance ratios of the
first pitch level, then all of the second, and so on.

Classes:
--------
- PerformanceTable: Immutable coefficient map with lookup helpers

Functions:
----------
- advance_ratio_grid(): Advance ratio samples of one pitch level
- pitch_offsets(): Pitch levels swept for a pitch type
- run_performance_sweep(): Build the PerformanceTable
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np
import pandas as pd
from scipy.interpolate import RegularGridInterpolator, interp1d

from .config import PropellerDesignerConfig, DEFAULT_CONFIG
from .blade_element import BladeGeometry, integrate_blade
from .models import PerformancePoint, TableTopologyError


# Guards the exclusive sweep end against round-off
_GRID_EPSILON = 1.0e-9


def advance_ratio_grid(
    config: PropellerDesignerConfig = DEFAULT_CONFIG
) -> Tuple[float, ...]:
    """
    Advance ratio samples of one pitch level.

    The step switches from fine to coarse after the first sample above
    ``config.advance_ratio_step_switch``. Samples are rounded so the grid
    is identical on every call and platform.

    Returns:
    -------
    tuple of float
        Strictly increasing advance ratios in [start, end).
    """
    values = []
    j = config.advance_ratio_start
    step = config.advance_ratio_fine_step
    while j < config.advance_ratio_end - _GRID_EPSILON:
        values.append(j)
        if j > config.advance_ratio_step_switch:
            step = config.advance_ratio_coarse_step
        j = round(j + step, 10)
    return tuple(values)


def pitch_offsets(
    fixed_pitch: bool,
    config: PropellerDesignerConfig = DEFAULT_CONFIG
) -> Tuple[float, ...]:
    """
    Blade pitch offsets (deg) relative to the design pitch.

    Fixed pitch propellers are swept at the design pitch only.
    """
    if fixed_pitch:
        return (0.0,)
    return tuple(
        config.first_pitch_offset + i * config.pitch_level_spacing
        for i in range(config.num_prop_pitches)
    )


@dataclass(frozen=True)
class PerformanceTable:
    """
    Thrust and power coefficients over advance ratio and pitch level.

    Attributes:
    ----------
    points : tuple of PerformancePoint
        Pitch-major, J-minor sequence of samples.

    pitch_offsets : tuple of float
        Pitch offset (deg) of each group, in sequence order.

    fixed_pitch : bool
        Whether the table belongs to a fixed pitch propeller.

    ceiling_hits : int
        Number of station solves that stopped at the iteration ceiling.

    Example:
    -------
        table = run_performance_sweep(geometry, rpm=2100, fixed_pitch=True)
        for J, CT, CP in table.points:
            print(f"{J:5.2f} {CT:8.4f} {CP:8.4f}")

        ct, cp = table.lookup(0.6)
    """
    points: Tuple[PerformancePoint, ...]
    pitch_offsets: Tuple[float, ...]
    fixed_pitch: bool = True
    ceiling_hits: int = 0

    def __post_init__(self):
        """Validate the table topology."""
        levels = len(self.pitch_offsets)
        if levels == 0:
            raise TableTopologyError("Performance table has no pitch levels")
        if len(self.points) % levels != 0:
            raise TableTopologyError(
                f"{len(self.points)} points cannot be split into "
                f"{levels} equal pitch groups"
            )
        reference = None
        for group in self.groups():
            columns = tuple(point.J for point in group)
            if any(b <= a for a, b in zip(columns, columns[1:])):
                raise TableTopologyError(
                    "Advance ratios must be strictly increasing within a pitch level"
                )
            if reference is None:
                reference = columns
            elif columns != reference:
                raise TableTopologyError(
                    "Pitch levels do not share the same advance ratio grid"
                )

    # -------------------------------------------------------------------------
    # Topology
    # -------------------------------------------------------------------------

    @property
    def pitch_levels(self) -> int:
        """Number of pitch level groups."""
        return len(self.pitch_offsets)

    @property
    def group_size(self) -> int:
        """Number of advance ratio samples per pitch level."""
        return len(self.points) // self.pitch_levels

    def groups(self) -> Iterator[Tuple[PerformancePoint, ...]]:
        """Yield the points of each pitch level in order."""
        size = self.group_size
        for p in range(self.pitch_levels):
            yield self.points[p * size:(p + 1) * size]

    @property
    def advance_ratios(self) -> Tuple[float, ...]:
        """Advance ratio grid shared by all pitch levels."""
        return tuple(point.J for point in self.points[:self.group_size])

    # -------------------------------------------------------------------------
    # Array Views
    # -------------------------------------------------------------------------

    def _column_array(self, index: int) -> np.ndarray:
        values = np.array([point[index] for point in self.points], dtype=float)
        return values.reshape(self.pitch_levels, self.group_size)

    @property
    def ct(self) -> np.ndarray:
        """Thrust coefficients, shape (pitch_levels, group_size)."""
        return self._column_array(1)

    @property
    def cp(self) -> np.ndarray:
        """Power coefficients, shape (pitch_levels, group_size)."""
        return self._column_array(2)

    @property
    def efficiency(self) -> np.ndarray:
        """
        Propeller efficiency η = J·CT/CP, shape (pitch_levels, group_size).

        Zero wherever CP is not positive.
        """
        j = np.broadcast_to(np.array(self.advance_ratios), (self.pitch_levels, self.group_size))
        ct = self.ct
        cp = self.cp
        eta = np.zeros_like(ct)
        np.divide(j * ct, cp, out=eta, where=cp > 0.0)
        return eta

    def to_dataframe(self) -> pd.DataFrame:
        """
        Flatten the table into a DataFrame.

        Returns:
        -------
        pd.DataFrame
            Columns: pitch, J, CT, CP, efficiency. Rows in sequence order.
        """
        size = self.group_size
        return pd.DataFrame({
            "pitch": np.repeat(np.array(self.pitch_offsets, dtype=float), size),
            "J": [point.J for point in self.points],
            "CT": [point.CT for point in self.points],
            "CP": [point.CP for point in self.points],
            "efficiency": self.efficiency.ravel(),
        })

    def pivot(self, column: str = "CT") -> pd.DataFrame:
        """
        Two-dimensional view with J rows and pitch offset columns.

        Parameters:
        ----------
        column : str
            One of "CT", "CP" or "efficiency".
        """
        if column not in ("CT", "CP", "efficiency"):
            raise ValueError(
                f"Invalid column: {column}. Must be 'CT', 'CP' or 'efficiency'."
            )
        df = self.to_dataframe()
        return df.pivot(index="J", columns="pitch", values=column)

    # -------------------------------------------------------------------------
    # Interpolation
    # -------------------------------------------------------------------------

    def lookup(self, advance_ratio: float, pitch_offset: float = 0.0) -> Tuple[float, float]:
        """
        Interpolate CT and CP, clamping to the table edges.

        Parameters:
        ----------
        advance_ratio : float
            Advance ratio J.

        pitch_offset : float, optional
            Blade pitch offset (deg). Ignored for fixed pitch tables.

        Returns:
        -------
        tuple
            (CT, CP)
        """
        j_grid = np.array(self.advance_ratios)
        j = float(np.clip(advance_ratio, j_grid[0], j_grid[-1]))

        if self.pitch_levels == 1:
            ct_interp = interp1d(j_grid, self.ct[0])
            cp_interp = interp1d(j_grid, self.cp[0])
            return float(ct_interp(j)), float(cp_interp(j))

        p_grid = np.array(self.pitch_offsets)
        p = float(np.clip(pitch_offset, p_grid[0], p_grid[-1]))
        ct_interp = RegularGridInterpolator((p_grid, j_grid), self.ct)
        cp_interp = RegularGridInterpolator((p_grid, j_grid), self.cp)
        return float(ct_interp([[p, j]])[0]), float(cp_interp([[p, j]])[0])


def run_performance_sweep(
    geometry: BladeGeometry,
    rpm: float,
    fixed_pitch: bool,
    config: PropellerDesignerConfig = DEFAULT_CONFIG,
    verbose: Optional[bool] = None
) -> PerformanceTable:
    """
    Sweep the blade-element integrator over advance ratio and pitch level.

    Parameters:
    ----------
    geometry : BladeGeometry
        Station layout of the blade.

    rpm : float
        Rotational speed used to dimensionalize the sweep (engine RPM).

    fixed_pitch : bool
        Sweep one pitch level (True) or ``config.num_prop_pitches`` levels.

    config : PropellerDesignerConfig, optional
        Grid and solver settings.

    verbose : bool, optional
        Print a warning when station solves hit the iteration ceiling.
        Defaults to ``config.default_verbose``.

    Returns:
    -------
    PerformanceTable
        The coefficient map. The sweep has no failure path.
    """
    if verbose is None:
        verbose = config.default_verbose

    offsets = pitch_offsets(fixed_pitch, config)
    expected_levels = 1 if fixed_pitch else config.num_prop_pitches
    if len(offsets) != expected_levels:
        raise TableTopologyError(
            f"Expected {expected_levels} pitch levels, got {len(offsets)}"
        )

    grid = advance_ratio_grid(config)

    points = []
    ceiling_hits = 0
    for offset in offsets:
        for j in grid:
            integral = integrate_blade(geometry, rpm, j, offset, config)
            ceiling_hits += integral.ceiling_hits
            points.append(PerformancePoint(j, integral.CT, integral.CP))

    if ceiling_hits and verbose:
        print(
            f"Warning: {ceiling_hits} blade station solves reached the "
            f"{config.max_iterations} iteration limit"
        )

    return PerformanceTable(
        points=tuple(points),
        pitch_offsets=offsets,
        fixed_pitch=fixed_pitch,
        ceiling_hits=ceiling_hits,
    )
