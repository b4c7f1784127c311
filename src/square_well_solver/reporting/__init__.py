"""
Reporting module for the square well solver.

Provides results file generation (markdown + JSON) for a study run.
Figures live in square_well_solver.reporting.plots, which is imported
separately since it pulls in matplotlib.
"""

from square_well_solver.reporting.results_reporter import WellStudyReporter, StudySummary

__all__ = [
    'WellStudyReporter',
    'StudySummary',
]
