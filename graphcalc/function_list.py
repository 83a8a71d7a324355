"""Caller-side registry of plotted functions.

``FunctionList`` owns the mutable list of :class:`FunctionEntry` records the
way the calculator UI does: entries are added with rotating preset colors,
edited in place by id, and removed explicitly. The plotting engine never
mutates entries; it receives :meth:`FunctionList.snapshot` per redraw.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, replace
from typing import Iterator, Optional, Union

from .defaults import DEFAULT_EXPRESSION, DEFAULT_FUNCTION_ID, PRESET_COLORS


@dataclass(frozen=True)
class FunctionEntry:
    """One user-supplied function.

    Parameters
    ----------
    id : str
        Stable identity used to key statuses.
    expression : str
        Unvalidated expression text.
    color : str
        Display color (any CSS-like string).
    is_visible : bool
        Whether the entry takes part in redraws.
    """

    id: str
    expression: str
    color: str
    is_visible: bool = True

    @property
    def is_blank(self) -> bool:
        return not self.expression.strip()


def _default_entry() -> FunctionEntry:
    return FunctionEntry(id=DEFAULT_FUNCTION_ID, expression=DEFAULT_EXPRESSION, color=PRESET_COLORS[0])


class FunctionList:
    """Ordered, id-addressable collection of :class:`FunctionEntry`."""

    def __init__(self, entries: Optional[list[FunctionEntry]] = None) -> None:
        self._entries: list[FunctionEntry] = list(entries) if entries is not None else [_default_entry()]
        self._ids = itertools.count(2)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FunctionEntry]:
        return iter(tuple(self._entries))

    def __contains__(self, function_id: object) -> bool:
        return any(entry.id == function_id for entry in self._entries)

    def snapshot(self) -> tuple[FunctionEntry, ...]:
        """Return the current entries as an immutable tuple."""
        return tuple(self._entries)

    def get(self, function_id: str) -> FunctionEntry:
        return self._entries[self._index(function_id)]

    def _index(self, function_id: str) -> int:
        for i, entry in enumerate(self._entries):
            if entry.id == function_id:
                return i
        raise KeyError(f"Unknown function: {function_id}")

    def _next_id(self) -> str:
        while True:
            candidate = f"func-{next(self._ids)}"
            if candidate not in self:
                return candidate

    def _next_color(self) -> str:
        return PRESET_COLORS[len(self._entries) % len(PRESET_COLORS)]

    def add(self, expression: str = "", *, color: Optional[str] = None) -> FunctionEntry:
        """Append a new visible entry and return it."""
        entry = FunctionEntry(
            id=self._next_id(),
            expression=expression,
            color=color or self._next_color(),
        )
        self._entries.append(entry)
        return entry

    def remove(self, function_id: str) -> FunctionEntry:
        """Remove and return the entry with ``function_id``."""
        return self._entries.pop(self._index(function_id))

    def _update(self, function_id: str, **changes: Union[str, bool]) -> FunctionEntry:
        i = self._index(function_id)
        self._entries[i] = replace(self._entries[i], **changes)
        return self._entries[i]

    def update_expression(self, function_id: str, expression: str) -> FunctionEntry:
        return self._update(function_id, expression=expression)

    def update_color(self, function_id: str, color: str) -> FunctionEntry:
        return self._update(function_id, color=color)

    def toggle_visibility(self, function_id: str) -> FunctionEntry:
        return self._update(function_id, is_visible=not self.get(function_id).is_visible)

    def set_preset(self, expression: str) -> FunctionEntry:
        """Fill the single empty entry with ``expression``, or append a new one."""
        if len(self._entries) == 1 and not self._entries[0].expression:
            return self.update_expression(self._entries[0].id, expression)
        return self.add(expression)

    def add_custom_log(self, base: Union[int, float]) -> FunctionEntry:
        """Append ``log(x, base)``."""
        if isinstance(base, float) and base.is_integer():
            base = int(base)
        return self.add(f"log(x, {base})")

    def reset(self) -> None:
        """Return to the single default entry."""
        self._entries = [_default_entry()]


__all__ = ["FunctionEntry", "FunctionList"]
