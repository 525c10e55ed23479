"""
Table Exporter Tests
====================

Validates the JSBSim text generated from configured propeller designs.
"""

import sys
from pathlib import Path
import unittest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.propeller_designer import (
    AirframeGeometry,
    EngineMount,
    MountPoint,
    Propeller,
    PropellerSpec,
    ThrusterInputs,
)
from src.table_exporter import (
    lift_function_xml,
    pitch_function_xml,
    propeller_xml,
    propwash_functions_xml,
    roll_function_xml,
)


def single_engine_airframe():
    return AirframeGeometry(
        wing_span=36.0,
        wing_area=174.0,
        wing_chord_mean=4.9,
        htail_arm=15.7,
        htail_area=21.9,
        cl0=0.25,
        cl_max=1.6,
        cl_alpha=4.9,
    )


def twin_airframe():
    return AirframeGeometry(
        wing_span=36.0,
        wing_area=174.0,
        wing_chord_mean=4.9,
        htail_arm=15.0,
        htail_area=27.0,
        cl0=0.25,
        cl_max=1.6,
        cl_alpha=5.0,
        engine_mounts=(
            EngineMount(MountPoint.LEFT_WING, 8.0),
            EngineMount(MountPoint.RIGHT_WING, 8.0),
        ),
    )


def table_rows(xml, name):
    """Data lines of the named table, header excluded."""
    lines = xml.splitlines()
    start = next(i for i, line in enumerate(lines) if f"<table name=\"{name}\"" in line)
    rows = []
    for line in lines[start + 2:]:
        if "</tableData>" in line:
            break
        rows.append(line)
    return rows


class TestFixedPitchPropellerXml(unittest.TestCase):
    """Test the fixed pitch thruster definition."""

    @classmethod
    def setUpClass(cls):
        inputs = ThrusterInputs(PropellerSpec(), single_engine_airframe())
        cls.design = Propeller().configure(inputs)
        cls.xml = propeller_xml(cls.design)

    def test_scalar_elements(self):
        self.assertIn("<numblades> 2 </numblades>", self.xml)
        self.assertIn("<diameter unit=\"IN\"> 96 </diameter>", self.xml)
        self.assertIn("<gearratio> 1 </gearratio>", self.xml)
        self.assertIn("<cp_factor> 1.00 </cp_factor>", self.xml)
        self.assertIn("<ct_factor> 1.00 </ct_factor>", self.xml)

    def test_no_governor_limits(self):
        self.assertNotIn("<minpitch>", self.xml)
        self.assertNotIn("<minrpm>", self.xml)

    def test_input_summary(self):
        self.assertIn("pitch: fixed", self.xml)
        self.assertIn("horsepower: 180", self.xml)

    def test_thrust_table_rows(self):
        rows = table_rows(self.xml, "C_THRUST")
        self.assertEqual(len(rows), 36)
        first = rows[0].split()
        self.assertEqual(first[0], "0.10")
        self.assertEqual(first[1], f"{self.design.performance.points[0].CT:.4f}")
        self.assertEqual(rows[-1].split()[0], "2.30")

    def test_power_table_rows(self):
        rows = table_rows(self.xml, "C_POWER")
        self.assertEqual(len(rows), 36)
        self.assertEqual(rows[5].split()[1], f"{self.design.performance.points[5].CP:.4f}")

    def test_mach_tables(self):
        self.assertEqual(
            [row.split() for row in table_rows(self.xml, "CT_MACH")],
            [["0.85", "1.0"], ["1.05", "0.8"]],
        )
        self.assertEqual(
            [row.split() for row in table_rows(self.xml, "CP_MACH")],
            [["0.85", "1.0"], ["1.05", "1.8"], ["2.00", "1.4"]],
        )

    def test_well_formed_ending(self):
        self.assertTrue(self.xml.rstrip().endswith("</propeller>"))


class TestVariablePitchPropellerXml(unittest.TestCase):
    """Test the variable pitch thruster definition."""

    @classmethod
    def setUpClass(cls):
        inputs = ThrusterInputs(PropellerSpec(fixed_pitch=False), single_engine_airframe())
        cls.design = Propeller().configure(inputs)
        cls.xml = propeller_xml(cls.design)

    def test_governor_limits(self):
        self.assertIn("<minpitch> 12 </minpitch>", self.xml)
        self.assertIn("<maxpitch> 45 </maxpitch>", self.xml)
        self.assertIn("<minrpm> 1993.57 </minrpm>", self.xml)
        self.assertIn("<maxrpm> 2345.38 </maxrpm>", self.xml)

    def test_pitch_header(self):
        rows = table_rows(self.xml, "C_THRUST")
        self.assertEqual(rows[0].split(), ["-15", "0", "15", "30", "45", "60"])

    def test_two_dimensional_rows(self):
        rows = table_rows(self.xml, "C_POWER")[1:]
        self.assertEqual(len(rows), 36)
        for row in rows:
            self.assertEqual(len(row.split()), 7)

    def test_rows_hold_pitch_groups(self):
        """Each row is one J; each column one pitch group."""
        rows = table_rows(self.xml, "C_THRUST")[1:]
        groups = list(self.design.performance.groups())
        values = rows[3].split()
        self.assertEqual(values[0], f"{groups[0][3].J:.2f}")
        self.assertEqual(values[4], f"{groups[3][3].CT:.4f}")


class TestPropwashFunctions(unittest.TestCase):
    """Test the lift, pitch and roll propwash functions."""

    @classmethod
    def setUpClass(cls):
        spec = PropellerSpec(diameter=6.0, engine_rpm=2700.0)
        cls.twin = Propeller().configure(ThrusterInputs(spec, twin_airframe()))
        cls.single = Propeller().configure(ThrusterInputs(spec, single_engine_airframe()))

    def test_lift_function(self):
        xml = lift_function_xml(self.twin)
        self.assertIn("aero/force/Lift_propwash", xml)
        self.assertIn("systems/propulsion/thrust-coefficient</property>", xml)
        self.assertIn("-0.05", xml)
        self.assertIn("0.107", xml)
        self.assertIn("0.683", xml)

    def test_pitch_function(self):
        xml = pitch_function_xml(self.twin)
        self.assertIn("aero/moment/Pitch_propwash", xml)
        self.assertIn("metrics/bw-ft", xml)

    def test_roll_function(self):
        xml = roll_function_xml(self.twin)
        self.assertIn("thrust-coefficient-left-right", xml)
        self.assertIn("<value> 0.1230 </value>", xml)

    def test_single_engine_property(self):
        xml = lift_function_xml(self.single)
        self.assertIn("propulsion/engine[0]/thrust-coefficient", xml)

    def test_functions_in_order(self):
        xml = propwash_functions_xml(self.twin)
        lift = xml.index("Lift_propwash")
        pitch = xml.index("Pitch_propwash")
        roll = xml.index("Roll_differential_propwash")
        self.assertLess(lift, pitch)
        self.assertLess(pitch, roll)


def run_validation():
    """Run validation tests and print summary."""
    print("=" * 60)
    print("Table Exporter Validation")
    print("=" * 60)

    loader = unittest.TestLoader()
    suite = unittest.TestSuite()
    suite.addTests(loader.loadTestsFromTestCase(TestFixedPitchPropellerXml))
    suite.addTests(loader.loadTestsFromTestCase(TestVariablePitchPropellerXml))
    suite.addTests(loader.loadTestsFromTestCase(TestPropwashFunctions))

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)
    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_validation()
    sys.exit(0 if success else 1)
