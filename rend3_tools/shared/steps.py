"""Sequential step execution with timing."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from .errors import BuildError


@dataclass
class BuildStep:
    """Represents a build step with timing."""

    name: str
    action: Callable[[], object]


def run_build_steps(steps: list[BuildStep], *, summary: bool = True) -> None:
    """Execute steps in order, stopping at the first failure.

    The failing step's ``BuildError`` is re-raised so its exit status
    reaches the dispatcher untouched.
    """
    total_start = time.perf_counter()
    results: list[tuple[str, float]] = []

    for step in steps:
        print(f"\n{'=' * 60}")
        print(f"Step: {step.name}")
        print("=" * 60, flush=True)

        step_start = time.perf_counter()
        try:
            step.action()
        except BuildError as e:
            elapsed = time.perf_counter() - step_start
            print(f"\n[FAIL] {step.name} failed after {elapsed:.2f}s")
            print(f"Error: {e}", flush=True)
            raise
        elapsed = time.perf_counter() - step_start
        results.append((step.name, elapsed))
        print(f"\n[OK] {step.name} completed in {elapsed:.2f}s", flush=True)

    if not summary:
        return

    total_elapsed = time.perf_counter() - total_start
    print(f"\n{'=' * 60}")
    print("Summary")
    print("=" * 60)
    for name, elapsed in results:
        print(f"  [OK] {name}: {elapsed:.2f}s")
    print(f"\nTotal time: {total_elapsed:.2f}s", flush=True)
