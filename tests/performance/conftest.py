"""Pytest fixtures and utilities for pipeline timing tests."""

import statistics
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

import pytest


@dataclass
class TimingResult:
    """Results from repeated runs of one operation.

    Attributes
    ----------
    name : str
        Label of the timed operation
    iterations : int
        Number of iterations run
    timings : list of float
        Individual timing results in seconds
    mean_time : float
        Mean time in seconds
    max_time : float
        Slowest iteration in seconds
    metadata : dict
        Additional information about the run

    """

    name: str
    iterations: int
    timings: List[float]
    mean_time: float
    max_time: float
    metadata: Dict[str, Any] = field(default_factory=dict)


class TimingRunner:
    """Run an operation several times and collect its timings."""

    def run(self, name: str, operation: Callable[[], Any], iterations: int = 3, **metadata: Any) -> TimingResult:
        """Time ``operation`` over ``iterations`` runs.

        Parameters
        ----------
        name : str
            Label for reporting
        operation : callable
            Zero-argument callable to time
        iterations : int, default 3
            Number of timed runs

        Returns
        -------
        TimingResult
            Collected timings

        """
        timings = []
        for _ in range(iterations):
            start = time.perf_counter()
            operation()
            timings.append(time.perf_counter() - start)
        return TimingResult(
            name=name,
            iterations=iterations,
            timings=timings,
            mean_time=statistics.mean(timings),
            max_time=max(timings),
            metadata=metadata,
        )


@pytest.fixture
def timing_runner() -> TimingRunner:
    """Provide a timing runner."""
    return TimingRunner()


@pytest.fixture
def large_document() -> str:
    """Provide a document with many sections, tables, code blocks and lists."""
    sections = []
    for index in range(200):
        sections.append(
            f"# Chapter {index}\nIntro text for chapter {index} with **bold** and *italic*.\n\n"
            f"## Data {index}\n| Key | Value | Notes |\n|-----|-------|-------|\n"
            + "".join(f"| k{row} | v{row} | n{row} |\n" for row in range(5))
            + f"\n## Code {index}\n```python\ndef handler_{index}():\n    return {index}\n```\n"
            f"\n## Tasks {index}\n- First task\n- Second task\n  - Nested task\n1. Ordered step\n"
        )
    return "\n".join(sections)
