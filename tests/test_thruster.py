"""
Thruster and Batch Designer Tests
=================================

Validates the configure/describe contract of the propeller thruster and
parallel design of many propellers.
"""

import math
import sys
from pathlib import Path
import unittest
from unittest import mock

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.batch_designer import BatchDesigner, BatchLimits
from src.propeller_designer import (
    AirframeGeometry,
    CalculationDebugger,
    Propeller,
    PropellerInputError,
    PropellerSpec,
    Thruster,
    ThrusterInputs,
)


def airframe(**overrides):
    values = dict(
        wing_span=36.0,
        wing_area=174.0,
        wing_chord_mean=4.9,
        htail_arm=15.7,
        htail_area=21.9,
        cl0=0.25,
        cl_max=1.6,
        cl_alpha=4.9,
    )
    values.update(overrides)
    return AirframeGeometry(**values)


class TestPropellerThruster(unittest.TestCase):
    """Test the configure/describe contract."""

    @classmethod
    def setUpClass(cls):
        cls.propeller = Propeller(name="c172_prop")
        cls.design = cls.propeller.configure(ThrusterInputs(PropellerSpec(), airframe()))

    def test_is_thruster(self):
        self.assertIsInstance(self.propeller, Thruster)

    def test_describe_returns_design(self):
        self.assertTrue(self.propeller.is_configured)
        self.assertIs(self.propeller.describe(), self.design)

    def test_describe_before_configure(self):
        with self.assertRaises(RuntimeError):
            Propeller().describe()

    def test_design_contents(self):
        design = self.design
        self.assertEqual(design.design_point.blades, 2)
        self.assertAlmostEqual(design.max_chord, 0.17 * math.sqrt(8.0))
        self.assertEqual(design.performance.pitch_levels, 1)
        self.assertEqual(design.num_engines, 1)
        self.assertEqual(design.ct_mach, ((0.85, 1.0), (1.05, 0.8)))
        self.assertEqual(len(design.cp_mach), 3)

    def test_fixed_pitch_has_no_governor(self):
        self.assertIsNone(self.design.min_pitch)
        self.assertIsNone(self.design.max_pitch)
        self.assertIsNone(self.design.min_rpm)

    def test_ceiling_hits_reported(self):
        self.assertEqual(self.design.ceiling_hits, self.design.performance.ceiling_hits)

    def test_diameter_in_inches(self):
        self.assertEqual(self.design.diameter_inches, 96.0)

    def test_given_max_chord_used(self):
        spec = PropellerSpec(max_chord=0.6)
        design = Propeller().configure(ThrusterInputs(spec, airframe()))
        self.assertEqual(design.max_chord, 0.6)

    def test_reconfigure_replaces_design(self):
        propeller = Propeller()
        first = propeller.configure(ThrusterInputs(PropellerSpec(), airframe()))
        second = propeller.configure(ThrusterInputs(PropellerSpec(diameter=7.0), airframe()))
        self.assertIsNot(first, second)
        self.assertIs(propeller.describe(), second)


class TestVariablePitchThruster(unittest.TestCase):
    """Test the governor limits of a variable pitch propeller."""

    @classmethod
    def setUpClass(cls):
        spec = PropellerSpec(fixed_pitch=False)
        cls.design = Propeller().configure(ThrusterInputs(spec, airframe()))

    def test_governor_limits(self):
        self.assertEqual(self.design.min_pitch, 12.0)
        self.assertEqual(self.design.max_pitch, 45.0)
        self.assertAlmostEqual(self.design.min_rpm, 0.85 * 2345.375)

    def test_six_pitch_levels(self):
        self.assertEqual(self.design.performance.pitch_levels, 6)


class TestFailFast(unittest.TestCase):
    """Invalid inputs are rejected before the performance sweep runs."""

    def test_invalid_propeller(self):
        inputs = ThrusterInputs(PropellerSpec(diameter=0.0), airframe())
        with mock.patch("src.propeller_designer.thruster.run_performance_sweep") as sweep:
            with self.assertRaises(PropellerInputError):
                Propeller().configure(inputs)
            sweep.assert_not_called()

    def test_invalid_airframe(self):
        inputs = ThrusterInputs(PropellerSpec(), airframe(wing_span=0.0))
        with mock.patch("src.propeller_designer.thruster.run_performance_sweep") as sweep:
            with self.assertRaises(PropellerInputError):
                Propeller().configure(inputs)
            sweep.assert_not_called()

    def test_failed_configure_keeps_previous_design(self):
        propeller = Propeller()
        design = propeller.configure(ThrusterInputs(PropellerSpec(), airframe()))
        with self.assertRaises(PropellerInputError):
            propeller.configure(ThrusterInputs(PropellerSpec(engine_power=-5.0), airframe()))
        self.assertIs(propeller.describe(), design)

    def test_debugger_trace(self):
        debugger = CalculationDebugger()
        Propeller().configure(
            ThrusterInputs(PropellerSpec(), airframe()), debugger=debugger
        )
        self.assertEqual(debugger.get_step_count(), 7)


class TestBatchDesigner(unittest.TestCase):
    """Test parallel design of independent propellers."""

    def setUp(self):
        self.designer = BatchDesigner(limits=BatchLimits(max_workers=2))
        self.inputs = [
            ThrusterInputs(PropellerSpec(diameter=8.0), airframe()),
            ThrusterInputs(PropellerSpec(diameter=-1.0), airframe()),
            ThrusterInputs(PropellerSpec(diameter=6.0, engine_rpm=2700.0), airframe()),
        ]

    def test_results_in_submission_order(self):
        results = self.designer.run_batch(self.inputs, names=["a", "b", "c"])
        self.assertEqual([r.index for r in results], [0, 1, 2])
        self.assertEqual([r.name for r in results], ["a", "b", "c"])
        self.assertEqual(results[0].design.spec.diameter, 8.0)
        self.assertEqual(results[2].design.spec.diameter, 6.0)

    def test_invalid_inputs_become_invalid_results(self):
        results = self.designer.run_batch(self.inputs)
        self.assertEqual([r.valid for r in results], [True, False, True])
        self.assertIsNone(results[1].design)
        self.assertIn("diameter", results[1].error_message)
        self.assertIn("invalid", results[1].summary())

    def test_batch_matches_single_design(self):
        results = self.designer.run_batch(self.inputs[:1])
        single = Propeller().configure(self.inputs[0])
        self.assertEqual(results[0].design.performance.points, single.performance.points)
        self.assertEqual(results[0].design.design_point, single.design_point)

    def test_default_names(self):
        results = self.designer.run_batch(self.inputs[:1])
        self.assertEqual(results[0].name, "propeller_0")
        self.assertIn("2 blades", results[0].summary())

    def test_progress(self):
        updates = []
        self.designer.run_batch(self.inputs, progress_callback=updates.append)
        final = updates[-1]
        self.assertFalse(final.is_running)
        self.assertEqual(final.current, 3)
        self.assertEqual(final.results_valid, 2)
        self.assertEqual(final.results_invalid, 1)
        self.assertEqual(final.percent_complete, 100.0)

    def test_empty_batch(self):
        with self.assertRaises(ValueError):
            self.designer.run_batch([])

    def test_batch_limit(self):
        designer = BatchDesigner(limits=BatchLimits(max_designs=2))
        with self.assertRaises(ValueError):
            designer.run_batch(self.inputs)

    def test_name_count_mismatch(self):
        with self.assertRaises(ValueError):
            self.designer.run_batch(self.inputs, names=["a"])


def run_validation():
    """Run validation tests and print summary."""
    print("=" * 60)
    print("Thruster and Batch Designer Validation")
    print("=" * 60)

    loader = unittest.TestLoader()
    suite = unittest.TestSuite()
    suite.addTests(loader.loadTestsFromTestCase(TestPropellerThruster))
    suite.addTests(loader.loadTestsFromTestCase(TestVariablePitchThruster))
    suite.addTests(loader.loadTestsFromTestCase(TestFailFast))
    suite.addTests(loader.loadTestsFromTestCase(TestBatchDesigner))

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)
    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_validation()
    sys.exit(0 if success else 1)
