from newton_visualizer.diagnostics import (
    DegenerateInputError,
    DiagnosticReport,
    are_points_too_close,
    diagnose,
    has_duplicate_x,
    require_distinct_x,
)
from newton_visualizer.interpolation import (
    CurveSample,
    DividedDifferenceTable,
    EvaluatorKind,
    build_divided_difference_table,
    evaluate_barycentric,
    evaluate_lagrange,
    evaluate_newton,
    evaluator_discrepancy,
    forms_agree,
    newton_coefficients,
    passes_through_points,
    sample_curve,
)
from newton_visualizer.latex_gen import (
    DividedDifferenceCell,
    NewtonLaTeXGenerator,
    divided_difference_notation,
    format_newton_formula,
    table_cell_metadata,
)
from newton_visualizer.points import Point, make_points, sort_points, visible_points
from newton_visualizer.settings import DEFAULT_TOLERANCES, PlotSettings, Tolerances

__all__ = [
    "CurveSample",
    "DEFAULT_TOLERANCES",
    "DegenerateInputError",
    "DiagnosticReport",
    "DividedDifferenceCell",
    "DividedDifferenceTable",
    "EvaluatorKind",
    "NewtonLaTeXGenerator",
    "PlotSettings",
    "Point",
    "Tolerances",
    "are_points_too_close",
    "build_divided_difference_table",
    "diagnose",
    "divided_difference_notation",
    "evaluate_barycentric",
    "evaluate_lagrange",
    "evaluate_newton",
    "evaluator_discrepancy",
    "format_newton_formula",
    "forms_agree",
    "has_duplicate_x",
    "make_points",
    "newton_coefficients",
    "passes_through_points",
    "require_distinct_x",
    "sample_curve",
    "sort_points",
    "table_cell_metadata",
    "visible_points",
]
