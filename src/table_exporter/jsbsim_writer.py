"""
JSBSim Table Writer
===================

Formats a PropellerDesign as JSBSim configuration text. The writer only
formats; every number comes from the design unchanged.

Functions:
----------
- propeller_xml(): <propeller> thruster definition
- lift_function_xml(): Delta lift due to propwash
- pitch_function_xml(): Pitch moment due to propwash
- roll_function_xml(): Roll moment due to differential propwash
- propwash_functions_xml(): The three propwash functions together

Numeric Formats:
---------------
- Advance ratio: 2 decimals
- CT / CP: 4 decimals
- Angle of attack breakpoints: 2 decimals
- Lift / pitch table values: 3 decimals
- Roll coefficient: 4 decimals

See: http://wiki.flightgear.org/JSBSim_Thrusters#FGPropeller
"""

from typing import List, Sequence, Tuple

from src import __version__
from src.propeller_designer.models import BreakpointTable, PropellerDesign


def _mach_table(name: str, comment: str, rows: Sequence[Tuple[float, float]]) -> List[str]:
    lines = [
        f"<!-- {comment} -->",
        f"<table name=\"{name}\" type=\"internal\">",
        "  <tableData>",
    ]
    for mach, factor in rows:
        lines.append(f"    {mach:4.2f}   {factor:.1f}")
    lines.append("  </tableData>")
    lines.append("</table>")
    return lines


def _coefficient_table(design: PropellerDesign, column: str, comment: str) -> List[str]:
    """C_THRUST / C_POWER table; 1-D for fixed pitch, J × pitch otherwise."""
    table = design.performance
    name = "C_THRUST" if column == "CT" else "C_POWER"
    lines = []

    if table.pitch_levels == 1:
        lines.append(f"  <table name=\"{name}\" type=\"internal\">")
        lines.append("     <tableData>")
        index = 1 if column == "CT" else 2
        for point in table.points:
            lines.append(f"{point.J:10.2f}{point[index]:10.4f}")
        lines.append("     </tableData>")
        lines.append("  </table>")
        return lines

    pivot = table.pivot(column)
    lines.append(f" <!-- {comment} -->")
    lines.append(f"  <table name=\"{name}\" type=\"internal\">")
    lines.append("      <tableData>")
    lines.append(" " * 16 + "".join(f"{int(round(p)):10d}" for p in pivot.columns))
    for j, row in pivot.iterrows():
        lines.append(f"{j:16.2f}" + "".join(f"{value:10.4f}" for value in row))
    lines.append("      </tableData>")
    lines.append("  </table>")
    return lines


def propeller_xml(design: PropellerDesign) -> str:
    """
    Render the <propeller> thruster definition.

    Parameters:
    ----------
    design : PropellerDesign
        Configured propeller output model.

    Returns:
    -------
    str
        XML text.
    """
    spec = design.spec
    dp = design.design_point

    lines = [
        f"<!-- Generated by propeller designer v {__version__}",
        "",
        "    See: http://wiki.flightgear.org/JSBSim_Thrusters#FGPropeller",
        "",
        "    Inputs:",
        f"           horsepower: {spec.engine_power:g}",
        f"                pitch: {'fixed' if spec.fixed_pitch else 'variable'}",
        f"       max engine rpm: {spec.engine_rpm:g}",
        f"   prop diameter (ft): {spec.diameter:g}",
        "",
        "    Outputs:",
        f"         max prop rpm: {dp.max_rpm:g}",
        f"           gear ratio: {dp.gear_ratio:g}",
        f"                  Cp0: {dp.cp0:g}",
        f"                  Ct0: {dp.ct0:g}",
        f"  static thrust (lbs): {dp.static_thrust:g}",
        "-->",
        "",
        "<propeller version=\"1.01\" name=\"prop\">",
        f"  <ixx> {dp.ixx:g} </ixx>",
        f"  <diameter unit=\"IN\"> {design.diameter_inches:g} </diameter>",
        f"  <numblades> {dp.blades} </numblades>",
        f"  <gearratio> {dp.gear_ratio:g} </gearratio>",
        f"  <cp_factor> {design.cp_factor:.2f} </cp_factor>",
        f"  <ct_factor> {design.ct_factor:.2f} </ct_factor>",
    ]

    if not spec.fixed_pitch:
        lines.append(f"  <minpitch> {design.min_pitch:g} </minpitch>")
        lines.append(f"  <maxpitch> {design.max_pitch:g} </maxpitch>")
        lines.append(f"  <minrpm> {design.min_rpm:g} </minrpm>")
        lines.append(f"  <maxrpm> {dp.max_rpm:g} </maxrpm>")
    lines.append("")

    lines.extend(_coefficient_table(
        design, "CT", "thrust coefficient as a function of advance ratio and blade angle"
    ))
    lines.append("")
    lines.extend(_coefficient_table(
        design, "CP", "power coefficient as a function of advance ratio and blade angle"
    ))
    lines.append("")
    lines.extend(_mach_table("CT_MACH", "thrust effects of helical tip Mach", design.ct_mach))
    lines.append("")
    lines.extend(_mach_table("CP_MACH", "power-required effects of helical tip Mach", design.cp_mach))
    lines.append("")
    lines.append("</propeller>")

    return "\n".join(lines) + "\n"


def _thrust_property(design: PropellerDesign, differential: bool = False) -> str:
    if design.num_engines > 1:
        suffix = "-left-right" if differential else ""
        return f"systems/propulsion/thrust-coefficient{suffix}"
    return "propulsion/engine[0]/thrust-coefficient"


def _table_lines(table: BreakpointTable) -> List[str]:
    lines = [
        "          <table>",
        "            <independentVar lookup=\"row\">aero/alpha-rad</independentVar>",
        "            <independentVar lookup=\"column\">fcs/flap-pos-deg</independentVar>",
        "            <tableData>",
        " " * 20 + "".join(f"{flap:9.1f}" for flap in table.flap_deg),
    ]
    for alpha, values in zip(table.alpha, table.values):
        lines.append(f"              {alpha:6.2f}" + "".join(f"{v:9.3f}" for v in values))
    lines.append("            </tableData>")
    lines.append("          </table>")
    return lines


def lift_function_xml(design: PropellerDesign) -> str:
    """Render the aero/force/Lift_propwash function."""
    lines = [
        "    <function name=\"aero/force/Lift_propwash\">",
        "      <description>Delta lift due to propeller induced velocity</description>",
        "      <product>",
        f"          <property>{_thrust_property(design)}</property>",
        "          <property>aero/qbar-psf</property>",
        "          <property>metrics/Sw-sqft</property>",
    ]
    lines.extend(_table_lines(design.interference.lift))
    lines.append("      </product>")
    lines.append("    </function>")
    return "\n".join(lines) + "\n"


def pitch_function_xml(design: PropellerDesign) -> str:
    """Render the aero/moment/Pitch_propwash function."""
    lines = [
        "    <function name=\"aero/moment/Pitch_propwash\">",
        "      <description>Pitch moment due to propeller induced velocity</description>",
        "      <product>",
        f"          <property>{_thrust_property(design)}</property>",
        "          <property>aero/qbar-psf</property>",
        "          <property>metrics/Sw-sqft</property>",
        "          <property>metrics/bw-ft</property>",
    ]
    lines.extend(_table_lines(design.interference.pitch))
    lines.append("      </product>")
    lines.append("    </function>")
    return "\n".join(lines) + "\n"


def roll_function_xml(design: PropellerDesign) -> str:
    """Render the aero/moment/Roll_differential_propwash function."""
    lines = [
        "    <function name=\"aero/moment/Roll_differential_propwash\">",
        "       <description>Roll moment due to differential propwash</description>",
        "       <product>",
        f"           <property>{_thrust_property(design, differential=True)}</property>",
        "           <property>aero/qbar-psf</property>",
        "           <property>metrics/Sw-sqft</property>",
        "           <property>metrics/bw-ft</property>",
        "           <property>aero/alpha-rad</property>",
        f"           <value> {design.interference.roll:.4f} </value>",
        "       </product>",
        "    </function>",
    ]
    return "\n".join(lines) + "\n"


def propwash_functions_xml(design: PropellerDesign) -> str:
    """Lift, pitch and roll propwash functions, in that order."""
    return (
        lift_function_xml(design)
        + pitch_function_xml(design)
        + roll_function_xml(design)
    )
