"""mathgl warning categories.

These exist so users can filter/suppress mathgl warnings without
catching all UserWarning.

Keep this module lightweight and dependency-free to avoid import cycles.
"""


class MathGLWarning(UserWarning):
    """Base warning category for all mathgl user-facing warnings."""


class MathGLOverflowRiskWarning(MathGLWarning):
    """Heuristic warnings about possible integer overflow (preflight risk checks)."""


class MathGLPerformanceWarning(MathGLWarning):
    """Warnings about likely performance pitfalls (e.g., nothing to parallelize)."""
