"""
Propeller Designer Module
=========================

This module estimates the performance of a fixed or variable pitch
propeller from a handful of design inputs and produces the tables a
flight dynamics model needs.

The module provides:
- Design-point sizing: max RPM, gear ratio, Cp0/Ct0, static thrust,
  blade count and moment of inertia
- Blade-element momentum performance sweep over advance ratio and pitch
- Propwash interference corrections for lift, pitch and roll

Key Classes:
-----------
- Propeller: Configures a complete propeller design
- PropellerSpec / AirframeGeometry / ThrusterInputs: Design inputs
- PropellerDesign: Output model handed to the table exporter
- PerformanceTable: CT/CP map with pandas and scipy helpers

Example Usage:
-------------
    from src.propeller_designer import (
        Propeller, PropellerSpec, AirframeGeometry, ThrusterInputs
    )

    airframe = AirframeGeometry(
        wing_span=36.0, wing_area=174.0, wing_chord_mean=4.9,
        htail_arm=15.7, htail_area=21.9,
        cl0=0.25, cl_max=1.6, cl_alpha=4.9,
    )
    prop = Propeller()
    design = prop.configure(ThrusterInputs(PropellerSpec(), airframe))
    print(f"Blades: {design.design_point.blades}")

Units Convention:
----------------
- Length: feet (ft)
- Power: horsepower (hp)
- Rotational speed: RPM
- Blade angles: degrees; angle of attack: radians
"""

from .config import ChordDistribution, PropellerDesignerConfig, DEFAULT_CONFIG
from .models import (
    AirframeGeometry,
    BreakpointTable,
    DesignPointResult,
    EngineMount,
    InterferenceTables,
    MountPoint,
    PerformancePoint,
    PropellerDesign,
    PropellerInputError,
    PropellerSpec,
    TableTopologyError,
    ThrusterInputs,
)
from .induction import InductionResult, SectionPolar, solve_induction
from .blade_element import BladeGeometry, integrate_blade
from .sweep import PerformanceTable, advance_ratio_grid, pitch_offsets, run_performance_sweep
from .sizing import estimate_blade_count, estimate_moment_of_inertia, size_design_point
from .interference import compute_interference
from .debugger import CalculationDebugger
from .thruster import Propeller, Thruster

__all__ = [
    "AirframeGeometry",
    "BladeGeometry",
    "BreakpointTable",
    "CalculationDebugger",
    "ChordDistribution",
    "DEFAULT_CONFIG",
    "DesignPointResult",
    "EngineMount",
    "InductionResult",
    "InterferenceTables",
    "MountPoint",
    "PerformancePoint",
    "PerformanceTable",
    "Propeller",
    "PropellerDesign",
    "PropellerDesignerConfig",
    "PropellerInputError",
    "PropellerSpec",
    "SectionPolar",
    "TableTopologyError",
    "Thruster",
    "ThrusterInputs",
    "advance_ratio_grid",
    "compute_interference",
    "estimate_blade_count",
    "estimate_moment_of_inertia",
    "integrate_blade",
    "pitch_offsets",
    "run_performance_sweep",
    "size_design_point",
    "solve_induction",
]
