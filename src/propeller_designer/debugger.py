"""
Sizing Trace
============

Records the formulas, inputs and results of design-point sizing so a
generated propeller can be checked by hand.

Usage:
------
    debugger = CalculationDebugger()
    debugger.start(diameter_ft=8.0, power_hp=180)
    design_point = size_design_point(spec, debugger=debugger)
    debugger.finish()

    print(debugger.get_report())
    df = debugger.to_dataframe()
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional

import pandas as pd


def _format_value(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.6g}"
    return str(value)


@dataclass(frozen=True)
class CalculationStep:
    """One sizing formula with its inputs and result."""
    category: str           # "Design Point", "Blades", "Inertia"
    description: str
    formula: str
    variables: dict
    result: Any
    result_name: str
    result_unit: str = ""
    comment: str = ""

    def result_text(self) -> str:
        """Result as 'name = value unit'."""
        unit = f" {self.result_unit}" if self.result_unit else ""
        return f"{self.result_name} = {_format_value(self.result)}{unit}"


class CalculationDebugger:
    """
    Collects sizing steps, grouped into named sections.

    Attributes:
    ----------
    steps : list of CalculationStep
        Recorded steps in order.

    metadata : dict
        Design inputs given to ``start()``.
    """

    def __init__(self):
        self.steps: List[CalculationStep] = []
        self.metadata: dict = {}
        self.start_time: Optional[datetime] = None
        self.end_time: Optional[datetime] = None
        self._sections: Dict[int, str] = {}

    def start(self, **metadata):
        """Discard earlier steps and begin a new trace."""
        self.steps = []
        self._sections = {}
        self.metadata = dict(metadata)
        self.start_time = datetime.now()
        self.end_time = None

    def finish(self):
        self.end_time = datetime.now()

    @property
    def elapsed_seconds(self) -> Optional[float]:
        """Duration between ``start()`` and ``finish()``, if both were called."""
        if self.start_time is None or self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()

    def start_section(self, name: str):
        """Label the steps recorded from now on."""
        self._sections[len(self.steps)] = name

    def add_step(
        self,
        category: str,
        description: str,
        formula: str,
        variables: dict,
        result: Any,
        result_name: str,
        result_unit: str = "",
        comment: str = ""
    ):
        """Record one formula evaluation."""
        self.steps.append(CalculationStep(
            category, description, formula, dict(variables),
            result, result_name, result_unit, comment
        ))

    def get_step_count(self) -> int:
        return len(self.steps)

    def find_step_by_result(self, result_name: str) -> Optional[CalculationStep]:
        """Most recent step that produced ``result_name``, or None."""
        matches = [step for step in self.steps if step.result_name == result_name]
        return matches[-1] if matches else None

    def to_dataframe(self) -> pd.DataFrame:
        """
        Steps as a DataFrame, one row per step.

        Returns:
        -------
        pd.DataFrame
            Columns: section, category, description, formula, result_name,
            result, result_unit, comment.
        """
        section = None
        rows = []
        for index, step in enumerate(self.steps):
            section = self._sections.get(index, section)
            row = asdict(step)
            row.pop("variables")
            row["section"] = section
            rows.append(row)
        columns = [
            "section", "category", "description", "formula",
            "result_name", "result", "result_unit", "comment",
        ]
        return pd.DataFrame(rows, columns=columns)

    def get_report(self) -> str:
        """
        Render the trace as text.

        Returns:
        -------
        str
            Inputs, then each step with its inputs, formula and result.
        """
        rule = "=" * 70
        out = [rule, "PROPELLER SIZING TRACE", rule]
        if self.start_time:
            out.append(f"Generated: {self.start_time:%Y-%m-%d %H:%M:%S}")
        if self.metadata:
            out += ["", "Inputs:"]
            out += [f"  {key}: {value}" for key, value in self.metadata.items()]
        out.append("")

        category = None
        for number, step in enumerate(self.steps, start=1):
            if number - 1 in self._sections:
                out += [f">>> {self._sections[number - 1]}", ""]
            if step.category != category:
                category = step.category
                out.append(f"--- {category} ---")

            out.append(f"[{number}] {step.description}")
            if step.variables:
                inputs = ", ".join(
                    f"{name}={_format_value(value)}" for name, value in step.variables.items()
                )
                out.append(f"    Inputs: {inputs}")
            if step.formula:
                out.append(f"    Formula: {step.formula}")
            out.append(f"    => {step.result_text()}")
            if step.comment:
                out.append(f"    // {step.comment}")
            out.append("")

        out += [rule, f"Total Steps: {len(self.steps)}", rule]
        return "\n".join(out)
