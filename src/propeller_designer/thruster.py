"""
Thruster Models
===============

Thrusters share one construction contract: they are configured from
design inputs and then describe themselves with an output model the
table exporter can format.

Classes:
--------
- Thruster: Abstract base for all thruster types
- Propeller: Blade-element propeller with design-point sizing

Usage:
------
    from src.propeller_designer import Propeller, PropellerSpec, ThrusterInputs

    prop = Propeller()
    prop.configure(ThrusterInputs(propeller=PropellerSpec(), airframe=airframe))
    design = prop.describe()
    print(design.design_point.blades)
"""

from abc import ABC, abstractmethod
from typing import Optional

from .config import (
    CP_MACH_TABLE,
    CT_MACH_TABLE,
    DEFAULT_CONFIG,
    MIN_RPM_FRACTION,
    PropellerDesignerConfig,
    VARIABLE_PITCH_MAX_DEG,
    VARIABLE_PITCH_MIN_DEG,
)
from .blade_element import BladeGeometry, resolve_max_chord
from .debugger import CalculationDebugger
from .interference import compute_interference, validate_airframe
from .models import PropellerDesign, ThrusterInputs
from .sizing import size_design_point, validate_propeller_spec
from .sweep import run_performance_sweep


class Thruster(ABC):
    """Interface shared by all thruster types."""

    name: str = "thruster"

    @abstractmethod
    def configure(self, inputs: ThrusterInputs):
        """Compute the thruster model from design inputs."""

    @abstractmethod
    def describe(self):
        """Return the output model of the configured thruster."""


class Propeller(Thruster):
    """
    Fixed or variable pitch propeller.

    Configuring a propeller runs design-point sizing, the blade-element
    performance sweep and the propwash interference model. Each instance
    owns its results; nothing is shared between propellers, so separate
    instances may be configured in parallel.

    Attributes:
    ----------
    config : PropellerDesignerConfig
        Solver and model settings.

    name : str
        Name used for the exported definition.

    Example:
    -------
        prop = Propeller(name="c172_prop")
        design = prop.configure(inputs)
        print(f"{design.design_point.blades} blades, "
              f"gear ratio {design.design_point.gear_ratio:.2f}")
    """

    def __init__(
        self,
        name: str = "my_propeller",
        config: Optional[PropellerDesignerConfig] = None
    ):
        self.name = name
        self.config = config if config is not None else DEFAULT_CONFIG
        self._design: Optional[PropellerDesign] = None

    def configure(
        self,
        inputs: ThrusterInputs,
        verbose: Optional[bool] = None,
        debugger: Optional[CalculationDebugger] = None
    ) -> PropellerDesign:
        """
        Size the propeller and build its performance and interference tables.

        Parameters:
        ----------
        inputs : ThrusterInputs
            Propeller inputs and airframe geometry.

        verbose : bool, optional
            Print solver diagnostics. Defaults to ``config.default_verbose``.

        debugger : CalculationDebugger, optional
            Records the design-point sizing steps.

        Returns:
        -------
        PropellerDesign
            The complete output model (also kept for ``describe()``).

        Raises:
        ------
        PropellerInputError
            If propeller or airframe inputs are invalid. Raised before the
            performance sweep starts.
        """
        spec = inputs.propeller

        # Fail fast before the sweep
        validate_propeller_spec(spec)
        validate_airframe(inputs.airframe)

        design_point = size_design_point(spec, debugger=debugger)
        max_chord = resolve_max_chord(
            spec.diameter, design_point.blades, spec.max_chord, self.config
        )

        geometry = BladeGeometry.build(spec, design_point.blades, max_chord, self.config)
        performance = run_performance_sweep(
            geometry, spec.engine_rpm, spec.fixed_pitch, self.config, verbose
        )
        interference = compute_interference(spec.diameter, inputs.airframe)

        variable = not spec.fixed_pitch
        self._design = PropellerDesign(
            spec=spec,
            design_point=design_point,
            max_chord=max_chord,
            performance=performance,
            interference=interference,
            ct_mach=CT_MACH_TABLE,
            cp_mach=CP_MACH_TABLE,
            num_engines=inputs.airframe.num_engines,
            min_pitch=VARIABLE_PITCH_MIN_DEG if variable else None,
            max_pitch=VARIABLE_PITCH_MAX_DEG if variable else None,
            min_rpm=MIN_RPM_FRACTION * design_point.max_rpm if variable else None,
            ceiling_hits=performance.ceiling_hits,
        )
        return self._design

    def describe(self) -> PropellerDesign:
        """
        Return the output model of the last ``configure()`` call.

        Raises:
        ------
        RuntimeError
            If the propeller has not been configured.
        """
        if self._design is None:
            raise RuntimeError(f"Propeller '{self.name}' has not been configured")
        return self._design

    @property
    def is_configured(self) -> bool:
        return self._design is not None
