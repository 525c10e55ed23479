#!/usr/bin/env python3
"""
Propeller Designer Launcher
===========================

Designs a propeller for a light single-engine aircraft and prints the
generated JSBSim definition and propwash functions.

Usage:
------
    # From the project root directory:
    python run_propeller_designer.py

    # Write the propeller definition to a file:
    python run_propeller_designer.py prop.xml

Requirements:
------------
- Python 3.8+
- numpy
- pandas
- scipy
- matplotlib
"""

import sys
from pathlib import Path

# -------------------------------------------------------------------------
# Path Configuration
# -------------------------------------------------------------------------

project_root = Path(__file__).parent.resolve()
sys.path.insert(0, str(project_root))

# -------------------------------------------------------------------------
# Main Entry Point
# -------------------------------------------------------------------------


def main():
    """
    Design the example propeller and print or save the result.

    This function:
    1. Validates that required dependencies are available
    2. Configures a fixed pitch propeller for a 180 hp engine
    3. Prints the sizing trace summary and the generated XML
    """
    print("=" * 60)
    print("  Propeller Designer")
    print("=" * 60)
    print()

    try:
        import numpy
        import pandas
        import scipy
        print(f"  [OK] numpy {numpy.__version__}")
        print(f"  [OK] pandas {pandas.__version__}")
        print(f"  [OK] scipy {scipy.__version__}")
    except ImportError as e:
        print(f"\n[ERROR] Missing required dependency: {e}")
        print("\nPlease install dependencies using:")
        print("    pip install -e .")
        sys.exit(1)

    from src.propeller_designer import (
        AirframeGeometry,
        CalculationDebugger,
        Propeller,
        PropellerInputError,
        PropellerSpec,
        ThrusterInputs,
    )
    from src.table_exporter import propeller_xml, propwash_functions_xml

    airframe = AirframeGeometry(
        wing_span=36.0,
        wing_area=174.0,
        wing_chord_mean=4.9,
        htail_arm=15.7,
        htail_area=21.9,
        cl0=0.25,
        cl_max=1.6,
        cl_alpha=4.9,
    )
    spec = PropellerSpec(
        diameter=6.25,
        engine_rpm=2700.0,
        engine_power=180.0,
        fixed_pitch=True,
    )

    debugger = CalculationDebugger()
    debugger.start(diameter_ft=spec.diameter, power_hp=spec.engine_power,
                   engine_rpm=spec.engine_rpm)

    try:
        design = Propeller(name="my_propeller").configure(
            ThrusterInputs(propeller=spec, airframe=airframe),
            verbose=True,
            debugger=debugger,
        )
    except PropellerInputError as e:
        print(f"\n[ERROR] Invalid propeller inputs: {e}")
        sys.exit(1)
    debugger.finish()

    print()
    print(debugger.get_report())
    print()

    xml = propeller_xml(design)
    if len(sys.argv) > 1:
        output_path = Path(sys.argv[1])
        output_path.write_text(xml)
        print(f"Propeller definition written to {output_path}")
    else:
        print(xml)

    print(propwash_functions_xml(design))


if __name__ == "__main__":
    main()
