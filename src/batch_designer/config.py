"""
Batch Designer Configuration Module
===================================

Configuration dataclasses for sizing many propellers at once.

Classes:
--------
- BatchLimits: Safety limits for batch processing
- BatchResult: Outcome of one propeller design
- BatchProgress: Progress information passed to callbacks

Constants:
----------
- DEFAULT_LIMITS: Default safety limits for batch processing
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from src.propeller_designer.models import PropellerDesign, ThrusterInputs


@dataclass
class BatchLimits:
    """
    Safety limits for batch processing.

    Attributes:
    ----------
    max_designs : int
        Maximum number of propellers per batch (hard limit)

    max_workers : int
        Maximum number of concurrent workers

    update_interval : float
        Minimum seconds between progress updates
    """
    max_designs: int = 1_000
    max_workers: int = field(default_factory=lambda: min(os.cpu_count() or 4, 8))
    update_interval: float = 0.1


DEFAULT_LIMITS = BatchLimits()


@dataclass
class BatchResult:
    """
    Result of one propeller design in a batch.

    Attributes:
    ----------
    index : int
        Position of the inputs in the submitted batch

    name : str
        Thruster name

    inputs : ThrusterInputs
        The design inputs

    design : PropellerDesign or None
        The design, when the inputs were valid

    valid : bool
        Whether the design was produced

    error_message : str
        Error description if not valid
    """
    index: int
    name: str
    inputs: ThrusterInputs
    design: Optional[PropellerDesign] = None
    valid: bool = False
    error_message: str = ""

    def summary(self) -> str:
        """Generate a one-line summary string."""
        if not self.valid:
            return f"{self.name}: invalid ({self.error_message})"
        dp = self.design.design_point
        return (
            f"{self.name}: {dp.blades} blades, gear {dp.gear_ratio:.2f}, "
            f"Cp0 {dp.cp0:.4f}, static thrust {dp.static_thrust:.0f} lbf"
        )


@dataclass
class BatchProgress:
    """Progress information for batch processing."""
    current: int = 0
    total: int = 0
    elapsed_seconds: float = 0.0
    results_valid: int = 0
    results_invalid: int = 0
    is_running: bool = False

    @property
    def percent_complete(self) -> float:
        if self.total == 0:
            return 0.0
        return (self.current / self.total) * 100.0
