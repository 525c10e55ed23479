"""
Blade-Element Integrator Tests
==============================

Validates blade station layout and the integration of station loads
into thrust and power coefficients.
"""

import math
import sys
from pathlib import Path
import unittest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.propeller_designer import (
    BladeGeometry,
    ChordDistribution,
    PropellerDesignerConfig,
    PropellerSpec,
    integrate_blade,
)
from src.propeller_designer.blade_element import (
    chord_at,
    resolve_max_chord,
    thickness_ratio_at,
)
from src.propeller_designer.config import AIR_DENSITY_SEA_LEVEL


class TestSectionShape(unittest.TestCase):
    """Test the chord and thickness distributions."""

    def test_modern_chord_at_tip_and_axis(self):
        # r^0.25 - r^5 vanishes at both ends
        self.assertAlmostEqual(chord_at(0.0, 1.0), 0.5)
        self.assertAlmostEqual(chord_at(1.0, 1.0), 0.5)

    def test_historic_chord_is_narrower_at_tip(self):
        historic = chord_at(0.0, 1.0, ChordDistribution.HISTORIC)
        self.assertAlmostEqual(historic, 0.25)
        self.assertLess(historic, chord_at(0.0, 1.0))

    def test_chord_peaks_inboard(self):
        """Modern blades are widest between root and tip."""
        mid = chord_at(0.5, 1.0)
        self.assertGreater(mid, chord_at(0.0, 1.0))
        self.assertGreater(mid, chord_at(1.0, 1.0))

    def test_thickness_ratio(self):
        self.assertAlmostEqual(thickness_ratio_at(0.0), 0.02)
        self.assertAlmostEqual(thickness_ratio_at(1.0), 0.2)

    def test_max_chord_estimate(self):
        self.assertAlmostEqual(resolve_max_chord(8.0, 2), 0.17 * math.sqrt(8.0))
        self.assertAlmostEqual(resolve_max_chord(8.0, 3), 0.17 * 2.0)

    def test_given_max_chord_is_kept(self):
        self.assertEqual(resolve_max_chord(8.0, 2, 0.6), 0.6)
        # Zero means "not specified"
        self.assertAlmostEqual(resolve_max_chord(8.0, 2, 0.0), 0.17 * math.sqrt(8.0))


class TestBladeGeometry(unittest.TestCase):
    """Test the radial station layout."""

    def setUp(self):
        self.spec = PropellerSpec()
        self.geometry = BladeGeometry.build(self.spec, 2, 0.5)

    def test_station_count(self):
        self.assertEqual(len(self.geometry.stations), 11)

    def test_station_positions(self):
        """Hub station at 10% of the radius, last station at the tip."""
        stations = self.geometry.stations
        self.assertAlmostEqual(stations[0].radius, 0.4)
        self.assertAlmostEqual(stations[-1].radius, 4.0)
        self.assertAlmostEqual(self.geometry.spacing, 0.36)

    def test_linear_pitch_distribution(self):
        stations = self.geometry.stations
        self.assertAlmostEqual(stations[0].pitch_deg, 48.0)
        self.assertAlmostEqual(stations[-1].pitch_deg, 8.0)
        steps = [b.pitch_deg - a.pitch_deg for a, b in zip(stations, stations[1:])]
        for step in steps:
            self.assertAlmostEqual(step, -4.0)

    def test_tip_chord(self):
        """Last station sits at the tip up to round-off in its radius."""
        last = self.geometry.stations[-1]
        self.assertAlmostEqual(last.chord, 0.25, places=4)
        self.assertEqual(last.chord, chord_at(max(1.0 - last.radius / 4.0, 0.0), 0.5))

    def test_element_count_follows_config(self):
        config = PropellerDesignerConfig(num_elements=7)
        geometry = BladeGeometry.build(self.spec, 2, 0.5, config)
        self.assertEqual(len(geometry.stations), 6)
        self.assertAlmostEqual(geometry.spacing, 3.6 / 5)


class TestIntegrateBlade(unittest.TestCase):
    """Test integration of station loads into CT and CP."""

    def setUp(self):
        spec = PropellerSpec()
        self.geometry = BladeGeometry.build(spec, 2, resolve_max_chord(spec.diameter, 2))

    def test_coefficient_normalization(self):
        integral = integrate_blade(self.geometry, 2100.0, 0.5)
        n = 35.0
        rho = AIR_DENSITY_SEA_LEVEL
        self.assertAlmostEqual(integral.CT, integral.thrust / (rho * n ** 2 * 8.0 ** 4))
        self.assertAlmostEqual(
            integral.CP, 2.0 * math.pi * integral.torque / (rho * n ** 2 * 8.0 ** 5)
        )

    def test_positive_thrust_at_low_advance_ratio(self):
        integral = integrate_blade(self.geometry, 2100.0, 0.1)
        self.assertGreater(integral.CT, 0.0)
        self.assertGreater(integral.CP, 0.0)

    def test_pitch_offset_raises_thrust(self):
        """Adding blade angle at fixed J loads the blade more."""
        base = integrate_blade(self.geometry, 2100.0, 0.5)
        coarse = integrate_blade(self.geometry, 2100.0, 0.5, pitch_offset=5.0)
        self.assertGreater(coarse.CT, base.CT)

    def test_ceiling_hits_counted_per_station(self):
        config = PropellerDesignerConfig(convergence_tolerance=0.0, max_iterations=2)
        integral = integrate_blade(self.geometry, 2100.0, 0.5, config=config)
        self.assertEqual(integral.ceiling_hits, 11)

    def test_records_operating_point(self):
        integral = integrate_blade(self.geometry, 2100.0, 0.75, pitch_offset=15.0)
        self.assertEqual(integral.J, 0.75)
        self.assertEqual(integral.pitch_offset, 15.0)


def run_validation():
    """Run validation tests and print summary."""
    print("=" * 60)
    print("Blade-Element Integrator Validation")
    print("=" * 60)

    loader = unittest.TestLoader()
    suite = unittest.TestSuite()
    suite.addTests(loader.loadTestsFromTestCase(TestSectionShape))
    suite.addTests(loader.loadTestsFromTestCase(TestBladeGeometry))
    suite.addTests(loader.loadTestsFromTestCase(TestIntegrateBlade))

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)
    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_validation()
    sys.exit(0 if success else 1)
