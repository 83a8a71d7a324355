"""Expression evaluator adapter.

Purpose
-------
Wraps SymPy parsing and :mod:`graphcalc.numpify` compilation behind a uniform
success/failure contract so that the sampler never has to handle exceptions:

- :meth:`ExpressionEvaluator.validate` returns :class:`ValidExpression` or
  :class:`SyntaxFailure` (parse-time check, once per function per redraw).
- :meth:`ExpressionEvaluator.evaluate_at` returns :class:`Evaluated` or
  :class:`EvalFailure` (once per sampled pixel column).

Input language
--------------
Expressions are written in calculator notation and parsed with
``sympy.parsing.sympy_parser.parse_expr``:

- ``^`` is exponentiation (``x^2``), implicit multiplication is allowed
  (``2x``, ``2 sin(x)``),
- ``e`` and ``pi`` are constants, ``ln`` is the natural log,
- ``log(x)`` is natural, ``log(x, b)`` uses base ``b``; ``log10``/``log2``
  are shorthands,
- ``abs``, ``sqrt``, trigonometric and hyperbolic functions are SymPy's.

Important gotchas
-----------------
- A result that is ``nan``, ``inf``, ``-inf`` or has a non-zero imaginary part
  is an :class:`EvalFailure`, never a drawable value.
- Symbols other than ``x`` are rejected at validation time.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping, Optional, Union

import numpy as np
import sympy as sp
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication_application,
    parse_expr,
    standard_transformations,
)

from .numpify import NumpifiedFunction, numpify_cached

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

X = sp.Symbol("x")

_TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication_application,
    convert_xor,
)

_INVALID_EQUATION = "Invalid equation"


def _log10(arg: Any) -> sp.Expr:
    return sp.log(arg, 10)


def _log2(arg: Any) -> sp.Expr:
    return sp.log(arg, 2)


DEFAULT_NAMESPACE: Mapping[str, Any] = {
    "x": X,
    "e": sp.E,
    "E": sp.E,
    "pi": sp.pi,
    "ln": sp.log,
    "log": sp.log,
    "log10": _log10,
    "log2": _log2,
    "abs": sp.Abs,
}


# SECTION: result types [id: results]
# =============================================================================

@dataclass(frozen=True)
class ValidExpression:
    """Successful validation: the parsed expression."""

    expression: str
    expr: sp.Expr

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class SyntaxFailure:
    """Failed validation with the underlying parser/compiler diagnostic."""

    expression: str
    message: str

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class Evaluated:
    """Successful evaluation at one sample."""

    x: float
    y: float

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class EvalFailure:
    """Evaluation failure at one sample; recovered by the sampler."""

    x: float
    reason: str

    @property
    def ok(self) -> bool:
        return False


ValidationResult = Union[ValidExpression, SyntaxFailure]
EvalResult = Union[Evaluated, EvalFailure]


def _diagnostic(exc: BaseException) -> str:
    """Return a non-empty user-facing message for ``exc``."""
    if isinstance(exc, KeyError):
        # printers raise KeyError with only the unsupported node's name
        if not exc.args:
            return _INVALID_EQUATION
        return f"{_INVALID_EQUATION}: unsupported term {exc.args[0]!s}"
    message = str(exc).strip()
    if not message:
        return _INVALID_EQUATION
    if len(message.split()) == 1:
        return f"{type(exc).__name__}: {message}"
    return message


# SECTION: ExpressionEvaluator [id: ExpressionEvaluator]
# =============================================================================

class ExpressionEvaluator:
    """Parse, compile and evaluate single-variable expressions.

    Parameters
    ----------
    namespace : mapping, optional
        Extra names made available to the parser, merged over
        :data:`DEFAULT_NAMESPACE`.
    cache_size : int, optional
        Number of compiled expressions kept per evaluator.
    """

    def __init__(
        self,
        namespace: Optional[Mapping[str, Any]] = None,
        *,
        cache_size: int = 128,
    ) -> None:
        self._namespace = dict(DEFAULT_NAMESPACE)
        if namespace:
            self._namespace.update(namespace)
        self._compile = lru_cache(maxsize=cache_size)(self._compile_uncached)

    @property
    def variable(self) -> sp.Symbol:
        return X

    def parse(self, expression: str) -> sp.Expr:
        """Parse ``expression`` into a SymPy expression or raise."""
        parsed = parse_expr(
            expression,
            local_dict=dict(self._namespace),
            transformations=_TRANSFORMATIONS,
        )
        if not isinstance(parsed, sp.Expr):
            raise ValueError(
                f"Expression must be a real-valued function of x, got {type(parsed).__name__}"
            )
        return parsed

    def _compile_uncached(self, expression: str) -> tuple[sp.Expr, NumpifiedFunction]:
        expr = self.parse(expression)
        return expr, numpify_cached(expr, vars=(X,))

    def compile(self, expression: str) -> NumpifiedFunction:
        """Return the cached NumPy callable for ``expression`` or raise."""
        return self._compile(expression)[1]

    def validate(self, expression: str) -> ValidationResult:
        """Check that ``expression`` parses and compiles.

        Returns
        -------
        ValidExpression or SyntaxFailure
            Any fault during parsing or compilation becomes a
            :class:`SyntaxFailure` carrying the diagnostic message.

        Notes
        -----
        Only ``x`` may appear free. Other names (``y + 1``) and undefined
        functions are rejected here rather than failing at every sample.
        """
        try:
            expr, _ = self._compile(expression)
        except Exception as exc:
            message = _diagnostic(exc)
            logger.debug("validate(%r) failed: %s", expression, message)
            return SyntaxFailure(expression=expression, message=message)
        return ValidExpression(expression=expression, expr=expr)

    def evaluate_at(self, expression: str, x: float) -> EvalResult:
        """Evaluate ``expression`` at ``x``.

        Exceptions, non-finite values and non-real values are converted to
        :class:`EvalFailure`.
        """
        try:
            fn = self.compile(expression)
            with np.errstate(all="ignore"):
                raw = fn(x)
            value = complex(raw)
        except Exception as exc:
            return EvalFailure(x=x, reason=f"{type(exc).__name__}: {exc}")

        if value.imag != 0:
            return EvalFailure(x=x, reason="non-real result")
        y = value.real
        if not math.isfinite(y):
            return EvalFailure(x=x, reason="non-finite result")
        return Evaluated(x=x, y=y)

    def cache_clear(self) -> None:
        self._compile.cache_clear()


_DEFAULT_EVALUATOR = ExpressionEvaluator()


def default_evaluator() -> ExpressionEvaluator:
    """Return the shared module-level evaluator."""
    return _DEFAULT_EVALUATOR


def validate(expression: str) -> ValidationResult:
    """Validate ``expression`` with the shared evaluator."""
    return _DEFAULT_EVALUATOR.validate(expression)


def evaluate_at(expression: str, x: float) -> EvalResult:
    """Evaluate ``expression`` at ``x`` with the shared evaluator."""
    return _DEFAULT_EVALUATOR.evaluate_at(expression, x)


__all__ = [
    "DEFAULT_NAMESPACE",
    "EvalFailure",
    "EvalResult",
    "Evaluated",
    "ExpressionEvaluator",
    "SyntaxFailure",
    "ValidExpression",
    "ValidationResult",
    "X",
    "default_evaluator",
    "evaluate_at",
    "validate",
]
