# === SECTION: InputConvert [id: InputConvert]===
from __future__ import annotations

import math
from typing import Any

import sympy as sp


def InputConvert(obj: Any, *, allow_nonfinite: bool = False) -> float:
    """
    Convert a raw viewport-bound edit `obj` to a real float.

    Rules:
    - If `obj` is a real number (bool excluded): cast via float(obj).
    - If `obj` is a complex number: accepted only when the imaginary part is 0.
    - If `obj` is a string:
        1) try float(s)
        2) else parse as a SymPy expression (e.g. "pi", "-2*pi", "sqrt(2)")
           and evaluate numerically.
    - Non-finite results (nan, inf) are rejected unless `allow_nonfinite=True`.

    Raises
    ------
    ValueError
        If conversion fails, the value is non-real, or it is not finite.
    """

    def _finish(value: complex) -> float:
        if value.imag != 0:
            raise ValueError(
                f"Could not convert non-real {obj!r} to float: imaginary part is non-zero."
            )
        result = float(value.real)
        if not allow_nonfinite and not math.isfinite(result):
            raise ValueError(f"Could not convert {obj!r} to a finite float.")
        return result

    if isinstance(obj, bool):
        raise ValueError(f"Could not convert boolean {obj!r} to float.")

    # Fast path: numeric types
    if isinstance(obj, (int, float)):
        return _finish(complex(float(obj)))
    if isinstance(obj, complex):
        return _finish(obj)

    if isinstance(obj, str):
        s = obj.strip()
        if s == "":
            raise ValueError("Cannot convert empty string to float.")

        try:
            plain = float(s)
        except ValueError:
            plain = None
        if plain is not None:
            return _finish(complex(plain))

        # SymPy path
        try:
            val = complex(sp.sympify(s).evalf())
        except Exception as e:
            raise ValueError(
                f"Could not convert {obj!r} to float (neither directly nor via SymPy)."
            ) from e
        return _finish(val)

    # Fallback: numpy scalars, sympy numbers and friends
    try:
        val = complex(obj)
    except Exception as e:
        raise ValueError(f"Could not convert {obj!r} to float.") from e
    return _finish(val)

# === END OF SECTION: InputConvert [id: InputConvert]===
