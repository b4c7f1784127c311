"""
Results Reporter for the square well study.

Generates a results file summarizing the three parts of the study:

1. Single well: lowest three levels vs depth and the deep-well 1:4:9 check
2. Single well: search for evenly spaced levels (E12 = E23)
3. Double well: parameters reaching the target spacing ratio

Output formats:
- Markdown (.md) - for documentation and git tracking
- JSON (.json) - for programmatic access
"""

import json
import platform
from dataclasses import dataclass, field, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from tabulate import tabulate

from square_well_solver import __version__
from square_well_solver.analysis.depth_scan import DepthScanResult
from square_well_solver.analysis.spacing import (
    EqualSpacingSearch,
    find_equal_spacing,
    infinite_well_ratios,
)
from square_well_solver.core.constants import (
    INFINITE_WELL_RATIOS,
    TUNNELING_PREFACTOR,
)
from square_well_solver.optimization.ratio_optimizer import OptimizationResult


@dataclass
class StudySummary:
    """Collected results of one study run."""

    run_id: str
    timestamp: str
    duration_seconds: float
    python_version: str
    solver_version: str = __version__
    width: float = 1.0

    # Part 1
    scan_depth_min: Optional[float] = None
    scan_depth_max: Optional[float] = None
    n_valid_depths: int = 0
    deepest_depth: Optional[float] = None
    deepest_relative_energies: List[float] = field(default_factory=list)
    deep_well_ratios: List[float] = field(default_factory=list)

    # Part 2
    equal_spacing: Optional[Dict[str, Any]] = None

    # Part 3
    tunneling_prefactor: float = TUNNELING_PREFACTOR
    optimization: Optional[Dict[str, Any]] = None

    notes: List[str] = field(default_factory=list)


class WellStudyReporter:
    """
    Generates results reports for square well study runs.

    Creates markdown-formatted results files (with a JSON twin) with:
    - Run summary and timing
    - Depth scan and deep-well limit
    - Equal-spacing search result
    - Double-well optimization result
    """

    def __init__(self, output_dir: Optional[str] = None, width: float = 1.0):
        """
        Initialize the results reporter.

        Args:
            output_dir: Directory for output files. Defaults to ./outputs.
            width: Well half-width a used throughout the study.
        """
        self.output_dir = Path(output_dir) if output_dir is not None else Path.cwd() / 'outputs'
        self.width = width

        self.scan: Optional[DepthScanResult] = None
        self.equal_spacing: Optional[EqualSpacingSearch] = None
        self.optimization: Optional[OptimizationResult] = None
        self.notes: List[str] = []

        # Timing
        self.start_time: Optional[datetime] = None
        self.end_time: Optional[datetime] = None

    def start_run(self):
        """Mark the start of a study run."""
        self.start_time = datetime.now()
        self.scan = None
        self.equal_spacing = None
        self.optimization = None
        self.notes = []

    def end_run(self):
        """Mark the end of a study run."""
        self.end_time = datetime.now()

    def add_scan(self, scan: DepthScanResult):
        """Record the single-well depth scan; also runs the equal-spacing search."""
        self.scan = scan
        if len(scan) > 0 and scan.levels >= 3:
            self.equal_spacing = find_equal_spacing(scan.depths, scan.energies)

    def add_optimization(self, result: OptimizationResult):
        """Record the double-well optimization result."""
        self.optimization = result

    def add_note(self, note: str):
        """Add a general note."""
        self.notes.append(note)

    def _generate_run_id(self) -> str:
        """Generate a unique run ID based on timestamp."""
        ts = self.start_time or datetime.now()
        return ts.strftime("%Y%m%d_%H%M%S")

    def _calculate_duration(self) -> float:
        """Calculate run duration in seconds."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return 0.0

    def get_summary(self) -> StudySummary:
        """Collect the recorded results into a StudySummary."""
        summary = StudySummary(
            run_id=self._generate_run_id(),
            timestamp=(self.start_time or datetime.now()).isoformat(timespec='seconds'),
            duration_seconds=self._calculate_duration(),
            python_version=platform.python_version(),
            width=self.width,
            notes=list(self.notes),
        )

        if self.scan is not None and len(self.scan) > 0:
            summary.scan_depth_min = float(self.scan.depths[0])
            summary.scan_depth_max = float(self.scan.depths[-1])
            summary.n_valid_depths = len(self.scan)
            summary.deepest_depth = float(self.scan.depths[-1])
            summary.deepest_relative_energies = [float(e) for e in self.scan.relative_to_floor()[-1]]
            if self.scan.levels >= 3:
                summary.deep_well_ratios = list(
                    infinite_well_ratios(self.scan.energies[-1], self.scan.depths[-1])
                )

        if self.equal_spacing is not None:
            summary.equal_spacing = asdict(self.equal_spacing)

        if self.optimization is not None:
            opt = self.optimization
            summary.optimization = {
                'depth': opt.depth,
                'separation': opt.separation,
                'residual': opt.residual,
                'target_ratio': opt.target_ratio,
                'ratio': opt.ratio,
                'energies': list(opt.energies),
                'converged': opt.converged,
                'iterations': opt.iterations,
                'function_evaluations': opt.function_evaluations,
            }

        return summary

    def generate_report(self, filename: Optional[str] = None) -> str:
        """
        Write the markdown report and its JSON twin.

        Args:
            filename: Base name without extension. Defaults to
                      'well_study_<run_id>'.

        Returns:
            Path of the markdown file.
        """
        summary = self.get_summary()
        base = filename or f"well_study_{summary.run_id}"

        self.output_dir.mkdir(parents=True, exist_ok=True)
        md_path = self.output_dir / f"{base}.md"
        json_path = self.output_dir / f"{base}.json"

        with open(md_path, 'w', encoding='utf-8') as f:
            f.write(self.format_report(summary))
        self._save_json(json_path, summary)

        return str(md_path)

    def format_report(self, summary: StudySummary) -> str:
        """Render a StudySummary as markdown."""
        lines = [
            "# Finite Square Well Study",
            "",
            f"- Run ID: `{summary.run_id}`",
            f"- Timestamp: {summary.timestamp}",
            f"- Duration: {summary.duration_seconds:.2f} s",
            f"- Solver version: {summary.solver_version} (Python {summary.python_version})",
            f"- Units: hbar^2/2m = 1, well half-width a = {summary.width:g}",
            "",
            "## Part 1: Lowest three levels vs depth",
            "",
        ]

        if summary.n_valid_depths == 0:
            lines.append("No depth in the scanned range supports three bound states.")
        else:
            lines.append(
                f"{summary.n_valid_depths} depths with three bound states in "
                f"[{summary.scan_depth_min:.2f}, {summary.scan_depth_max:.2f}]."
            )
            lines.append("")
            if summary.deep_well_ratios:
                r2, r3 = summary.deep_well_ratios
                rows = [
                    ["E2'/E1'", f"{r2:.4f}", f"{INFINITE_WELL_RATIOS[0]:.0f}"],
                    ["E3'/E1'", f"{r3:.4f}", f"{INFINITE_WELL_RATIOS[1]:.0f}"],
                ]
                lines.append(f"At V0 = {summary.deepest_depth:.1f} (energies from the well floor):")
                lines.append("")
                lines.append(tabulate(rows, headers=["Ratio", "Computed", "Infinite well"],
                                      tablefmt="github"))

        lines.extend(["", "## Part 2: Evenly spaced levels (E12 = E23)", ""])
        es = summary.equal_spacing
        if es is None:
            lines.append("Not evaluated.")
        else:
            rows = [
                ["Closest depth V0", f"{es['depth']:.4f}"],
                ["E12", f"{es['E12']:.6f}"],
                ["E23", f"{es['E23']:.6f}"],
                ["E23/E12", f"{es['ratio']:.6f}"],
                ["Ratio range over scan", f"[{es['ratio_min']:.6f}, {es['ratio_max']:.6f}]"],
            ]
            lines.append(tabulate(rows, headers=["Quantity", "Value"], tablefmt="github"))
            lines.append("")
            if es['equal_spacing_found']:
                lines.append("Evenly spaced levels found in the scanned range.")
            else:
                lines.append("E23/E12 never reaches 1 in the scanned range: no single-well depth "
                             "gives evenly spaced lowest levels.")

        lines.extend(["", "## Part 3: Double well with E23 = target x E12", ""])
        opt = summary.optimization
        if opt is None:
            lines.append("Not evaluated.")
        else:
            rows = [
                ["V0", f"{opt['depth']:.4f}"],
                ["d / a", f"{opt['separation']:.4f}"],
                ["Target ratio", f"{opt['target_ratio']:.4f}"],
                ["Achieved ratio", "n/a" if opt['ratio'] is None else f"{opt['ratio']:.6f}"],
                ["Residual", f"{opt['residual']:.3e}"],
                ["Converged", "[OK]" if opt['converged'] else "[FAIL]"],
                ["Iterations", str(opt['iterations'])],
            ]
            lines.append(tabulate(rows, headers=["Quantity", "Value"], tablefmt="github"))
            lines.append("")
            lines.append(f"Tight-binding splitting prefactor C = {summary.tunneling_prefactor:g} "
                         "(empirical calibration constant).")

        if summary.notes:
            lines.extend(["", "## Notes", ""])
            lines.extend(f"- {note}" for note in summary.notes)

        lines.append("")
        return "\n".join(lines)

    def _save_json(self, path: Path, summary: StudySummary):
        """Save the summary as JSON."""
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(asdict(summary), f, indent=2)
