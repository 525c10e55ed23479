"""
Table Exporter Module
=====================

Turns a configured PropellerDesign into JSBSim configuration text.

Functions:
----------
- propeller_xml(): Thruster definition with CT/CP and tip Mach tables
- propwash_functions_xml(): Lift, pitch and roll propwash functions

Usage:
------
    from src.table_exporter import propeller_xml

    design = Propeller().configure(inputs)
    with open("prop.xml", "w") as f:
        f.write(propeller_xml(design))
"""

from .jsbsim_writer import (
    lift_function_xml,
    pitch_function_xml,
    propeller_xml,
    propwash_functions_xml,
    roll_function_xml,
)

__all__ = [
    "lift_function_xml",
    "pitch_function_xml",
    "propeller_xml",
    "propwash_functions_xml",
    "roll_function_xml",
]
