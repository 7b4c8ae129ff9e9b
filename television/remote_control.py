"""Entries of the remote control: one per channel of the cable."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from television.cable import Cable
from television.entry import into_ranges
from television.prototypes import BinaryRequirement, Binding


@dataclass(frozen=True)
class CableIcon:
    icon: str
    color: str


CABLE_ICON = CableIcon("\N{POPCORN}", "#000000")


@dataclass(frozen=True)
class CableEntry:
    """A channel as listed in the remote control."""

    channel_name: str
    match_ranges: list[tuple[int, int]] | None = None
    shortcut: Binding | None = None
    description: str | None = None
    requirements: list[BinaryRequirement] = field(default_factory=list)

    @property
    def icon(self) -> CableIcon:
        return CABLE_ICON

    def displayed(self) -> str:
        return self.channel_name

    def with_match_indices(self, indices: Iterable[int]) -> CableEntry:
        return replace(self, match_ranges=into_ranges(indices))

    def with_description(self, description: str | None) -> CableEntry:
        return replace(self, description=description)

    def with_requirements(self, requirements: Iterable[BinaryRequirement]) -> CableEntry:
        return replace(self, requirements=list(requirements))


def _checked(requirement: BinaryRequirement) -> BinaryRequirement:
    fresh = BinaryRequirement(requirement.bin_name)
    fresh.init()
    return fresh


def cable_entries(cable: Cable, sort_alphabetically: bool) -> list[CableEntry]:
    """One entry per channel, with each binary requirement checked."""
    items = sorted(cable.items()) if sort_alphabetically else list(cable.items())
    return [
        CableEntry(
            name,
            shortcut=(
                prototype.keybindings.channel_shortcut()
                if prototype.keybindings is not None
                else None
            ),
        )
        .with_description(prototype.metadata.description)
        .with_requirements(_checked(r) for r in prototype.metadata.requirements)
        for name, prototype in items
    ]