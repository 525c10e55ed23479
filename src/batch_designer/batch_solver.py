"""
Batch Designer Module
=====================

Sizes many propellers in a thread pool. Each propeller design is pure and
independent of the others, so work is split at the granularity of one
whole thruster (sizing, sweep and interference).

Usage:
------
    from src.batch_designer import BatchDesigner

    designer = BatchDesigner()
    results = designer.run_batch(
        inputs_list,
        progress_callback=lambda p: print(f"{p.percent_complete:.0f}%")
    )
    for result in results:
        print(result.summary())
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, List, Optional, Sequence

from src.propeller_designer.config import DEFAULT_CONFIG, PropellerDesignerConfig
from src.propeller_designer.models import PropellerInputError, ThrusterInputs
from src.propeller_designer.thruster import Propeller

from .config import BatchLimits, BatchProgress, BatchResult, DEFAULT_LIMITS


class BatchDesigner:
    """
    Batch processing engine for propeller designs.

    Attributes:
    ----------
    config : PropellerDesignerConfig
        Model settings shared (read-only) by all designs

    limits : BatchLimits
        Batch safety limits

    progress : BatchProgress
        Progress of the current or last batch
    """

    def __init__(
        self,
        config: Optional[PropellerDesignerConfig] = None,
        limits: Optional[BatchLimits] = None
    ):
        self.config = config if config is not None else DEFAULT_CONFIG
        self.limits = limits if limits is not None else DEFAULT_LIMITS
        self.progress = BatchProgress()
        self._lock = threading.Lock()

    def _design_single(self, index: int, inputs: ThrusterInputs, name: str) -> BatchResult:
        """Design one propeller; invalid inputs become an invalid result."""
        result = BatchResult(index=index, name=name, inputs=inputs)
        # Each worker owns its Propeller
        propeller = Propeller(name=name, config=self.config)
        try:
            result.design = propeller.configure(inputs)
            result.valid = True
        except PropellerInputError as e:
            result.error_message = str(e)
        return result

    def run_batch(
        self,
        inputs_list: Sequence[ThrusterInputs],
        names: Optional[Sequence[str]] = None,
        progress_callback: Optional[Callable[[BatchProgress], None]] = None
    ) -> List[BatchResult]:
        """
        Design every propeller in the batch.

        Parameters:
        ----------
        inputs_list : sequence of ThrusterInputs
            One entry per propeller.

        names : sequence of str, optional
            Thruster names; defaults to "propeller_<index>".

        progress_callback : Callable, optional
            Function called with BatchProgress updates.

        Returns:
        -------
        List[BatchResult]
            Results in submission order.

        Raises:
        ------
        ValueError
            If the batch is empty, exceeds the design limit, or the names
            do not match the inputs.
        """
        total = len(inputs_list)
        if total == 0:
            raise ValueError("No propeller inputs to design.")
        if total > self.limits.max_designs:
            raise ValueError(
                f"Batch size ({total:,}) exceeds limit ({self.limits.max_designs:,})."
            )
        if names is None:
            names = [f"propeller_{i}" for i in range(total)]
        elif len(names) != total:
            raise ValueError(f"Got {len(names)} names for {total} inputs.")

        self.progress = BatchProgress(total=total, is_running=True)
        start_time = time.time()
        last_update_time = 0.0
        results: List[Optional[BatchResult]] = [None] * total

        num_workers = max(1, min(self.limits.max_workers, total))

        try:
            with ThreadPoolExecutor(max_workers=num_workers) as executor:
                future_to_index = {
                    executor.submit(self._design_single, i, inputs, names[i]): i
                    for i, inputs in enumerate(inputs_list)
                }

                for future in as_completed(future_to_index):
                    result = future.result()
                    results[result.index] = result

                    with self._lock:
                        self.progress.current += 1
                        self.progress.elapsed_seconds = time.time() - start_time
                        if result.valid:
                            self.progress.results_valid += 1
                        else:
                            self.progress.results_invalid += 1

                    current_time = time.time()
                    if current_time - last_update_time >= self.limits.update_interval:
                        last_update_time = current_time
                        if progress_callback:
                            progress_callback(self.progress)
        finally:
            self.progress.is_running = False
            self.progress.elapsed_seconds = time.time() - start_time

            # Final callback
            if progress_callback:
                progress_callback(self.progress)

        return results
