"""Entries produced by channels and shown in the results list."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from television.templates import Template


def into_ranges(indices: Iterable[int]) -> list[tuple[int, int]]:
    """Merge match indices into half-open ``(start, end)`` ranges."""
    ranges: list[tuple[int, int]] = []
    for index in indices:
        if ranges and ranges[-1][1] == index:
            ranges[-1] = (ranges[-1][0], index + 1)
        else:
            ranges.append((index, index + 1))
    return ranges


@dataclass(frozen=True, eq=False)
class Entry:
    """A single entry as captured from a channel's source.

    Two entries are equal when their raw text and line number match; the
    display text, match ranges and icon do not take part.
    """

    raw: str
    display: str | None = None
    name_match_ranges: list[tuple[int, int]] | None = None
    icon: Any = None
    line_number: int | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return self.raw == other.raw and self.line_number == other.line_number

    def __hash__(self) -> int:
        return hash((self.raw, self.line_number))

    def with_display(self, display: str) -> Entry:
        return replace(self, display=display)

    def with_match_indices(self, indices: Iterable[int]) -> Entry:
        return replace(self, name_match_ranges=into_ranges(indices))

    def with_icon(self, icon: Any) -> Entry:
        return replace(self, icon=icon)

    def with_line_number(self, line_number: int) -> Entry:
        return replace(self, line_number=line_number)

    def displayed(self) -> str:
        """The text shown in the UI: the display text, else the raw text."""
        return self.raw if self.display is None else self.display

    def stdout_repr(self, template: Template | None) -> str:
        """The text written out when the entry is selected."""
        if template is None:
            return self.raw
        return template.format(self.raw)