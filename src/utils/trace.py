"""Tracing module: logs nonogram solver steps and writes them to CSV."""

import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class TraceStep:
    """A single step in the solving process."""

    timestamp: float
    step_number: int
    action_type: str  # 'line_solved', 'line_completed', 'pass', 'stuck', 'contradiction', 'solution_found'
    axis: Optional[str] = None  # 'row' or 'col'
    index: Optional[int] = None
    rule: Optional[str] = None  # which line rule produced the deduction
    cells_changed: Optional[int] = None
    pass_number: Optional[int] = None
    unsolved_lines: Optional[int] = None
    unknown_cells: Optional[int] = None
    reason: Optional[str] = None


class Tracer:
    """Records solver steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **fields: Any) -> None:
        if not self.enabled:
            return
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **fields,
        ))

    def log_line_solved(self, axis: str, index: int, rule: Optional[str], cells_changed: int):
        """Log a line that gained new FILLED/EMPTY cells."""
        self._record('line_solved', axis=axis, index=index, rule=rule, cells_changed=cells_changed)

    def log_line_completed(self, axis: str, index: int):
        """Log a line leaving the unsolved set."""
        self._record('line_completed', axis=axis, index=index)

    def log_pass(self, pass_number: int, lines_changed: int, unsolved_lines: int, unknown_cells: int):
        """Log the end of one pass over the unsolved lines."""
        self._record(
            'pass',
            pass_number=pass_number,
            unsolved_lines=unsolved_lines,
            unknown_cells=unknown_cells,
            reason=f"{lines_changed} line(s) changed",
        )

    def log_stuck(self, pass_number: int, unsolved_lines: int):
        """Log a pass that made no progress while lines were still unsolved."""
        self._record(
            'stuck',
            pass_number=pass_number,
            unsolved_lines=unsolved_lines,
            reason="No line changed in a full pass",
        )

    def log_contradiction(self, axis: str, index: Optional[int], reason: str):
        """Log a line whose clues cannot be reconciled with its known cells."""
        self._record('contradiction', axis=axis, index=index, reason=reason)

    def log_solution_found(self, filled_cells: int):
        """Log when the grid is fully solved."""
        self._record('solution_found', reason=f"{filled_cells} filled cells")

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'axis', 'index', 'rule',
            'cells_changed', 'pass_number', 'unsolved_lines', 'unknown_cells', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts: Dict[str, int] = {}
        rule_counts: Dict[str, int] = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1
            if step.action_type == 'line_solved' and step.rule:
                rule_counts[step.rule] = rule_counts.get(step.rule, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'rule_counts': rule_counts,
            'num_line_updates': action_counts.get('line_solved', 0),
            'num_passes': action_counts.get('pass', 0),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=True)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
