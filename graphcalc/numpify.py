"""
numpify: Compile SymPy expressions to NumPy-callable Python functions
====================================================================

Purpose
-------
Turn a parsed SymPy expression of one variable into a Python callable that
evaluates with NumPy semantics (IEEE-754 ``nan``/``inf`` instead of Python
exceptions for most domain failures).

The plotting engine evaluates each function once per pixel column, so the
compiled callable is cached: repeated redraws of an unchanged expression skip
code generation entirely.

Public API
----------
- :func:`numpify`
- :func:`numpify_cached`
- :class:`NumpifiedFunction`

Examples
--------
>>> import sympy as sp
>>> x = sp.Symbol("x")
>>> f = numpify(x**2 + 1, vars=x)
>>> float(f(2.0))
5.0

Logging
-------
This module uses Python's standard :mod:`logging` library and is silent by
default. Enable ``logging.getLogger("graphcalc.numpify")`` at DEBUG level to
see cache misses and generated source.

Notes
-----
Code generation uses ``exec`` on printer output. Do not compile untrusted
SymPy objects built from arbitrary Python.
"""

from __future__ import annotations

from functools import lru_cache
import builtins
import importlib
import keyword
import logging
from typing import Any, Callable, Iterable, Optional, Tuple, Union

import numpy as np
import sympy as sp
from sympy.core.function import AppliedUndef
from sympy.printing.numpy import NumPyPrinter


__all__ = [
    "numpify",
    "numpify_cached",
    "NumpifiedFunction",
]


logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

_NUMPIFY_CACHE_MAXSIZE = 256


class NumpifiedFunction:
    """Generated NumPy callable plus the metadata it was built from.

    Attributes
    ----------
    expr : sympy.Basic
        The compiled expression.
    vars : tuple[sympy.Symbol, ...]
        Positional argument symbols, in call order.
    source : str
        Generated Python source of the wrapped function.
    """

    __slots__ = ("expr", "vars", "source", "_fn")

    def __init__(
        self,
        fn: Callable[..., Any],
        *,
        expr: sp.Basic,
        vars: Tuple[sp.Symbol, ...],
        source: str,
    ) -> None:
        self._fn = fn
        self.expr = expr
        self.vars = vars
        self.source = source

    def __call__(self, *args: Any) -> Any:
        return self._fn(*args)

    def __repr__(self) -> str:
        names = ", ".join(v.name for v in self.vars)
        return f"NumpifiedFunction({self.expr!r}, vars=({names}))"


def _normalize_vars(
    expr: sp.Basic, vars: Optional[Union[sp.Symbol, Iterable[sp.Symbol]]]
) -> Tuple[sp.Symbol, ...]:
    """Return positional argument symbols for ``expr``."""
    if vars is None:
        return tuple(sorted(expr.free_symbols, key=sp.default_sort_key))
    if isinstance(vars, sp.Symbol):
        return (vars,)
    try:
        vars_tuple = tuple(vars)
    except TypeError as e:
        raise TypeError(f"vars must be a Symbol or an iterable of Symbols, got {type(vars)}") from e
    for v in vars_tuple:
        if not isinstance(v, sp.Symbol):
            raise TypeError(f"vars must contain only Symbols, got {v!r}")
    return vars_tuple


def _safe_arg_name(sym: sp.Symbol, taken: set[str]) -> str:
    """Return a Python identifier for ``sym`` that does not clash with ``taken``."""
    base = sym.name if sym.name.isidentifier() else "arg"
    if keyword.iskeyword(base) or base in dir(builtins) or base in {"numpy", "np"}:
        base = f"_{base}"
    name = base
    n = 0
    while name in taken:
        n += 1
        name = f"{base}_{n}"
    taken.add(name)
    return name


def numpify(
    expr: Any,
    *,
    vars: Optional[Union[sp.Symbol, Iterable[sp.Symbol]]] = None,
    vectorize: bool = True,
    cache: bool = True,
) -> NumpifiedFunction:
    """Compile a SymPy expression into a NumPy-evaluable Python function.

    Parameters
    ----------
    expr:
        A SymPy expression or anything convertible via :func:`sympy.sympify`.
    vars:
        Symbols treated as positional arguments. ``None`` uses all free
        symbols sorted by ``sympy.default_sort_key``.
    vectorize:
        If True, arguments are passed through ``numpy.asarray`` so that scalar
        calls follow NumPy floating-point rules and arrays broadcast.
    cache:
        If True (default), delegate to :func:`numpify_cached`.

    Returns
    -------
    NumpifiedFunction

    Raises
    ------
    TypeError
        If ``expr`` is not SymPy-compatible or ``vars`` is malformed.
    ValueError
        If ``expr`` contains free symbols outside ``vars`` or calls functions
        that have no NumPy implementation.
    """
    if cache:
        return numpify_cached(expr, vars=vars, vectorize=vectorize)

    try:
        expr_sym = sp.sympify(expr)
    except Exception as e:
        raise TypeError(f"numpify expects a SymPy-compatible expression, got {type(expr)}") from e
    if not isinstance(expr_sym, sp.Basic):
        raise TypeError(f"numpify expects a SymPy expression, got {type(expr_sym)}")

    vars_tuple = _normalize_vars(expr_sym, vars)

    missing = {s.name for s in expr_sym.free_symbols} - {v.name for v in vars_tuple}
    if missing:
        raise ValueError(
            "Expression contains unbound symbols: " + ", ".join(sorted(missing))
        )

    unknown = sorted({type(f).__name__ for f in expr_sym.atoms(AppliedUndef)})
    if unknown:
        raise ValueError("Unknown function(s): " + ", ".join(unknown))

    taken: set[str] = set()
    call_signature = [(sym, _safe_arg_name(sym, taken)) for sym in vars_tuple]
    arg_names = [name for _, name in call_signature]
    expr_codegen = expr_sym.xreplace({sym: sp.Symbol(name) for sym, name in call_signature})

    printer = NumPyPrinter(settings={"fully_qualified_modules": True})
    expr_code = printer.doprint(expr_codegen)

    lines: list[str] = ["def _generated(" + ", ".join(arg_names) + "):"]
    if vectorize:
        for nm in arg_names:
            lines.append(f"    {nm} = numpy.asarray({nm}, dtype=float)")
    if vectorize and not expr_sym.free_symbols and arg_names:
        lines.append(f"    _shape = numpy.broadcast({', '.join(arg_names)}).shape")
        lines.append(f"    return ({expr_code}) + numpy.zeros(_shape)")
    else:
        lines.append(f"    return {expr_code}")
    src = "\n".join(lines)

    namespace: dict[str, Any] = {"numpy": np}
    # The printer falls back to math/functools for some functions (gamma, Max).
    for module_name in printer.module_imports:
        importlib.import_module(module_name)
        top = module_name.split(".")[0]
        namespace.setdefault(top, importlib.import_module(top))
    exec(src, namespace)  # noqa: S102 - generated from a SymPy printer
    logger.debug("numpify: generated source\n%s", src)
    return NumpifiedFunction(namespace["_generated"], expr=expr_sym, vars=vars_tuple, source=src)


@lru_cache(maxsize=_NUMPIFY_CACHE_MAXSIZE)
def _numpify_cached_impl(
    expr: sp.Basic,
    vars_tuple: Optional[Tuple[sp.Symbol, ...]],
    vectorize: bool,
) -> NumpifiedFunction:
    """Compile an expression on cache misses for :func:`numpify_cached`."""
    logger.debug("numpify_cached: cache MISS for %s", expr)
    return numpify(expr, vars=vars_tuple, vectorize=vectorize, cache=False)


def numpify_cached(
    expr: Any,
    *,
    vars: Optional[Union[sp.Symbol, Iterable[sp.Symbol]]] = None,
    vectorize: bool = True,
) -> NumpifiedFunction:
    """Cached version of :func:`numpify`.

    The cache key is the sympified expression, the argument symbols and the
    ``vectorize`` flag. Use ``numpify_cached.cache_clear()`` to reset it.
    """
    try:
        expr_sym = sp.sympify(expr)
    except Exception as e:
        raise TypeError(f"numpify expects a SymPy-compatible expression, got {type(expr)}") from e
    if vars is None:
        vars_key = None
    elif isinstance(vars, sp.Symbol):
        vars_key = (vars,)
    else:
        vars_key = tuple(vars)
    return _numpify_cached_impl(expr_sym, vars_key, bool(vectorize))


numpify_cached.cache_clear = _numpify_cached_impl.cache_clear  # type: ignore[attr-defined]
numpify_cached.cache_info = _numpify_cached_impl.cache_info  # type: ignore[attr-defined]
