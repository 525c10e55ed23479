"""
Batch Designer Module
=====================

Sizes many propellers concurrently, one whole design per work item.

Classes:
--------
- BatchDesigner: Thread pool batch engine
- BatchResult: Outcome of one design
- BatchProgress: Progress information
- BatchLimits: Safety limits

Usage:
------
    from src.batch_designer import BatchDesigner

    results = BatchDesigner().run_batch(inputs_list)
    valid = [r.design for r in results if r.valid]
"""

from .config import BatchLimits, BatchProgress, BatchResult, DEFAULT_LIMITS
from .batch_solver import BatchDesigner

__all__ = [
    "BatchDesigner",
    "BatchLimits",
    "BatchProgress",
    "BatchResult",
    "DEFAULT_LIMITS",
]
