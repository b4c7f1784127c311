#!/usr/bin/env python3
"""Run the three-part finite square well study.

PART 1: three lowest single-well levels vs depth, with the 1:4:9 check
PART 2: can a single well have evenly spaced first three levels?
PART 3: double well with E23 = target * E12

Usage:
    python scripts/run_well_study.py
    python scripts/run_well_study.py --plots --report --output-dir outputs
"""
import argparse
import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import numpy as np

from square_well_solver.analysis.depth_scan import energy_vs_depth
from square_well_solver.analysis.spacing import find_equal_spacing, infinite_well_ratios
from square_well_solver.core.constants import DEFAULT_INITIAL_GUESS, DEFAULT_TARGET_RATIO
from square_well_solver.optimization.ratio_optimizer import optimize_double_well
from square_well_solver.reporting.results_reporter import WellStudyReporter


def parse_args():
    parser = argparse.ArgumentParser(description="Finite square well study")
    parser.add_argument('--width', type=float, default=1.0, help='well half-width a')
    parser.add_argument('--depth-min', type=float, default=5.0)
    parser.add_argument('--depth-max', type=float, default=200.0)
    parser.add_argument('--n-depths', type=int, default=300)
    parser.add_argument('--target-ratio', type=float, default=DEFAULT_TARGET_RATIO)
    parser.add_argument('--initial-depth', type=float, default=DEFAULT_INITIAL_GUESS[0])
    parser.add_argument('--initial-separation', type=float, default=DEFAULT_INITIAL_GUESS[1])
    parser.add_argument('--plots', action='store_true', help='save PNG figures')
    parser.add_argument('--report', action='store_true', help='write markdown/JSON report')
    parser.add_argument('--output-dir', default='outputs')
    parser.add_argument('--verbose', action='store_true')
    return parser.parse_args()


def main():
    args = parse_args()
    a = args.width
    reporter = WellStudyReporter(output_dir=args.output_dir, width=a)
    reporter.start_run()

    print("=" * 70)
    print("PART 1: Three lowest energy levels vs well depth")
    print("=" * 70)

    depth_values = np.linspace(args.depth_min, args.depth_max, args.n_depths)
    scan = energy_vs_depth(depth_values, width=a, levels=3)
    reporter.add_scan(scan)

    if len(scan) == 0:
        print("No depth in range supports three bound states.")
    else:
        V0_last = scan.depths[-1]
        E_rel = scan.relative_to_floor()[-1]
        r2, r3 = infinite_well_ratios(scan.energies[-1], V0_last)
        print(f"At V0 = {V0_last:.1f} the relative energies are:")
        print(f"  E1: {E_rel[0]:.4f},  E2: {E_rel[1]:.4f},  E3: {E_rel[2]:.4f}")
        print(f"  Ratio E1:E2:E3 ~ 1:{r2:.3f}:{r3:.3f} (target 1:4:9)")

    print()
    print("=" * 70)
    print("PART 2: Can a single well have evenly spaced first three levels?")
    print("=" * 70)

    search = find_equal_spacing(scan.depths, scan.energies) if len(scan) else None
    if search is None:
        print("No valid depths to analyze.")
    else:
        print(f"Closest approach to E12 = E23 occurs at V0 ~ {search.depth:.4f}")
        print(f"  E12 = {search.E12:.6f},  E23 = {search.E23:.6f},  gap = {search.gap:.6e}")
        print(f"  Ratio E23/E12 ~ {search.ratio:.6f}")
        print(f"Over the scanned range: E23/E12 in [{search.ratio_min:.6f}, {search.ratio_max:.6f}]")
        if not search.equal_spacing_found:
            print("Conclusion: E23/E12 stays above 1; no depth gives E12 = E23.")

    print()
    print("=" * 70)
    print(f"PART 3: Double well with E23 ~ {args.target_ratio:g} E12")
    print("=" * 70)

    result = optimize_double_well(
        initial_guess=(args.initial_depth, args.initial_separation),
        target_ratio=args.target_ratio,
        width=a,
        verbose=args.verbose,
    )
    reporter.add_optimization(result)
    print(result.summary())

    reporter.end_run()

    if args.plots:
        import matplotlib
        matplotlib.use('Agg')
        from square_well_solver.reporting.plots import (
            plot_energy_levels,
            plot_energy_differences,
            plot_energy_ratio,
            plot_double_well_contour,
            plot_double_well_configuration,
        )

        os.makedirs(args.output_dir, exist_ok=True)
        figures = {
            'part1_energy_levels.png': plot_energy_levels(depth_values, a=a),
            'part2_energy_differences.png': plot_energy_differences(depth_values, a=a),
            'part2_energy_ratio.png': plot_energy_ratio(depth_values, a=a),
            'part3_double_well_contour.png': plot_double_well_contour(
                np.linspace(20.0, 120.0, 80), np.linspace(0.2, 1.2, 80),
                a=a, target_ratio=args.target_ratio,
            ),
            'part3_double_well_configuration.png': plot_double_well_configuration(
                result.depth, result.separation, a=a,
            ),
        }
        for name, fig in figures.items():
            if fig is None:
                continue
            path = os.path.join(args.output_dir, name)
            fig.savefig(path, dpi=120)
            print(f"Saved: {path}")

    if args.report:
        path = reporter.generate_report()
        print(f"Report written to: {path}")


if __name__ == '__main__':
    main()
