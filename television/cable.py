"""The cable: every channel prototype known to the application, by name."""

from __future__ import annotations

import copy
import logging
import sys
from collections.abc import Iterable
from pathlib import Path

from television.action import Action, ActionKind
from television.prototypes import Binding, ChannelPrototype, PrototypeError

logger = logging.getLogger(__name__)

CHANNEL_FILE_FORMAT = "toml"
CABLE_DIR_NAME = "cable"


class UnknownChannelError(LookupError):
    """Raised when a channel is asked for that the cable does not hold."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Channel not found: {name}")
        self.name = name


class Cable(dict[str, ChannelPrototype]):
    """Channel prototypes indexed by their name."""

    def get_channel(self, name: str) -> ChannelPrototype:
        """A copy of the named prototype."""
        try:
            prototype = self[name]
        except KeyError:
            raise UnknownChannelError(name) from None
        return copy.deepcopy(prototype)

    def has_channel(self, name: str) -> bool:
        return name in self

    @classmethod
    def from_prototypes(cls, prototypes: Iterable[ChannelPrototype]) -> Cable:
        return cls((prototype.metadata.name, prototype) for prototype in prototypes)

    def channel_shortcuts(self) -> dict[Action, Binding]:
        """Map a switch-to-channel action to each channel's shortcut binding."""
        return {
            Action(ActionKind.SWITCH_TO_CHANNEL, name): prototype.keybindings.shortcut
            for name, prototype in self.items()
            if prototype.keybindings is not None
            and prototype.keybindings.shortcut is not None
        }

    def get_channel_shortcut(self, channel_name: str) -> Binding | None:
        """The shortcut of a channel, if the channel exists and has one."""
        prototype = self.get(channel_name)
        if prototype is None or prototype.keybindings is None:
            return None
        return prototype.keybindings.shortcut


def get_cable_files(cable_dir: str | Path) -> list[Path]:
    """Every channel file below a directory, searched recursively."""
    return sorted(
        path
        for path in Path(cable_dir).rglob("*")
        if path.is_file() and path.suffix == f".{CHANNEL_FILE_FORMAT}"
    )


def load_prototypes(paths: Iterable[str | Path]) -> list[ChannelPrototype]:
    """Parse channel files, reporting and skipping those that fail."""
    prototypes: list[ChannelPrototype] = []
    for path in map(Path, paths):
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to read cable channel file %s: %s", path, exc)
            continue
        try:
            prototype = ChannelPrototype.from_toml(content)
        except PrototypeError as exc:
            print(f"Failed to parse cable channel file {path}: {exc}", file=sys.stderr)
            continue
        logger.debug(
            "Loaded cable channel prototype from %s: %s", path, prototype.metadata.name
        )
        prototypes.append(prototype)
    return prototypes


def load_cable(cable_dir: str | Path) -> Cable | None:
    """Load every channel found in a cable directory.

    Returns ``None`` and prints a hint when the directory holds no channel
    files at all.
    """
    logger.debug("Using cable directory: %s", cable_dir)
    cable_files = get_cable_files(cable_dir)
    logger.debug("Found cable channel files: %s", cable_files)
    if not cable_files:
        print("It seems you don't have any cable channels configured yet.\n")
        print(
            "Run `tv update-channels` to get the latest default cable channels "
            f"and/or add your own in `{cable_dir}`.\n"
        )
        return None
    prototypes = load_prototypes(cable_files)
    logger.debug("Loaded %d cable channels", len(prototypes))
    return Cable.from_prototypes(prototypes)