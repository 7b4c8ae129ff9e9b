"""A channel: runs a prototype's source command and holds its entries."""

from __future__ import annotations

import logging
import os
import re
import subprocess

from television.entry import Entry
from television.prototypes import ChannelPrototype, SourceSpec
from television.templates import TemplateError

logger = logging.getLogger(__name__)

_UNSIGNED_RE = re.compile(r"\+?[0-9]+")


def _shell_invocation(command: str, interactive: bool) -> tuple[str | list[str], bool]:
    if interactive and os.name != "nt":
        shell = os.environ.get("SHELL", "/bin/sh")
        return [shell, "-i", "-c", command], False
    return command, True


def read_entries(source: SourceSpec, index: int) -> list[str]:
    """Run the source's ``index``-th command and split its output into entries.

    Entries are split on the source's delimiter (a newline by default);
    blank entries are dropped, as are those that are not valid UTF-8. When
    the command writes nothing usable to stdout, the non-blank lines of its
    stderr are returned instead.
    """
    spec = source.command
    command = spec.get_nth(index).raw
    logger.debug("Loading candidates from command: %s", command)
    args, use_shell = _shell_invocation(command, spec.interactive)
    completed = subprocess.run(
        args,
        shell=use_shell,
        env={**os.environ, **spec.env},
        capture_output=True,
        check=False,
    )
    delimiter = (source.entry_delimiter or "\n").encode("utf-8")

    entries: list[str] = []
    for chunk in completed.stdout.split(delimiter):
        if not chunk:
            continue
        try:
            line = chunk.decode("utf-8")
        except UnicodeDecodeError:
            continue
        if line.strip():
            entries.append(line)

    if not entries:
        stderr = completed.stderr.decode("utf-8", errors="replace")
        entries = [
            line.removesuffix("\r")
            for line in stderr.split("\n")
            if line.strip()
        ]
    return entries


class Channel:
    """The entries of one channel prototype and the user's selection."""

    def __init__(self, prototype: ChannelPrototype) -> None:
        self.prototype = prototype
        self.entries: list[Entry] = []
        self._selected: set[Entry] = set()
        self._source_index = 0

    def _make_entry(self, raw: str) -> Entry:
        entry = Entry(raw)
        display = self.prototype.source.display
        if display is not None:
            entry = entry.with_display(display.format(raw))
        preview = self.prototype.preview
        if preview is not None and preview.offset is not None:
            try:
                offset = preview.offset.format(raw)
            except TemplateError:
                offset = ""
            offset = offset if _UNSIGNED_RE.fullmatch(offset) else "0"
            entry = entry.with_line_number(int(offset))
        return entry

    def load(self) -> None:
        """Run the current source command and replace the entries."""
        raw_entries = read_entries(self.prototype.source, self._source_index)
        self.entries = [self._make_entry(raw) for raw in raw_entries]

    def current_command(self) -> str:
        return self.prototype.source.command.get_nth(self._source_index).raw

    def selected_entries(self) -> frozenset[Entry]:
        return frozenset(self._selected)

    def toggle_selection(self, entry: Entry) -> None:
        if entry in self._selected:
            self._selected.remove(entry)
        else:
            self._selected.add(entry)

    def total_count(self) -> int:
        return len(self.entries)

    def supports_preview(self) -> bool:
        return self.prototype.preview is not None

    def cycle_sources(self) -> None:
        """Move to the next source command, if there is more than one, and reload."""
        count = self.prototype.source.command.command_count()
        if count > 1:
            self._source_index = (self._source_index + 1) % count
            logger.debug("Cycling to source command index: %d", self._source_index)
            self.load()
        else:
            logger.debug("No other source commands to cycle through.")