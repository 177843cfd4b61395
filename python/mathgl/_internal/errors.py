"""Error kinds raised by mathgl.

Every failure is local to the call that raised it; nothing here is fatal to
the process. The concrete kinds also derive from the closest builtin so callers
catching ``ValueError``/``TypeError``/``IndexError`` keep working.
"""


class MathGLError(Exception):
    """Base class for all mathgl errors."""


class DimensionError(MathGLError, ValueError):
    """Shape or length mismatch at construction or multiplication."""


class TypeMismatchError(MathGLError, TypeError):
    """An element (or operand) does not match the declared element type."""


class OutOfBoundsError(MathGLError, IndexError):
    """Index outside the matrix or vector extent."""


class ShapeError(MathGLError, ValueError):
    """Reduction to a vector attempted on a matrix that is not 1-dimensional."""


class StaleOperandError(MathGLError, RuntimeError):
    """An operand was modified while a batch product was being computed."""
