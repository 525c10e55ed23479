"""
Propeller Designer - Main Package
=================================

Tools for estimating propeller performance tables for flight dynamics
models from a handful of design inputs.

This package provides modules for:
- Propeller Designer (propeller_designer): design-point sizing,
  blade-element performance sweep and propwash interference
- Table Exporter (table_exporter): JSBSim configuration text
- Batch Designer (batch_designer): many propeller designs in parallel

License: See LICENSE file in project root
"""

__version__ = "0.1.0"
__author__ = "Propeller Designer Team"
