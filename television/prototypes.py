"""Channel prototypes: the declarative description of a channel."""

from __future__ import annotations

import enum
import shutil
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Union

from television.action import Action, ActionKind
from television.templates import Template

DEFAULT_PROTOTYPE_NAME = "files"

Binding = Union[str, tuple[str, ...]]

_MAX_U16 = 0xFFFF


class PrototypeError(ValueError):
    """Raised when a channel prototype or one of its parts is invalid."""


class Orientation(enum.Enum):
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"


class InputPosition(enum.Enum):
    TOP = "top"
    BOTTOM = "bottom"


def parse_source_entry_delimiter(delimiter: str) -> str:
    """Parse a delimiter given as one character or as an escape like ``\\n``."""
    if not delimiter:
        raise PrototypeError("Source entry delimiter cannot be empty")
    if delimiter.startswith("\\"):
        escapes = {"n": "\n", "t": "\t", "r": "\r", "0": "\0"}
        sequence = delimiter[1:]
        try:
            return escapes[sequence]
        except KeyError:
            raise PrototypeError(
                "Invalid escape sequence for source entry delimiter: "
                f"'{sequence}'"
            ) from None
    if len(delimiter.encode("utf-8")) != 1:
        raise PrototypeError(
            "Source entry delimiter must be a single character, "
            f"got '{delimiter}'"
        )
    return delimiter


def _table(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        raise PrototypeError(f"`{where}` must be a table")
    return dict(value)


def _required(data: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in data:
        raise PrototypeError(f"missing field `{key}` in `{where}`")
    return data[key]


def _opt_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise PrototypeError(f"`{key}` must be a string")
    return value


def _opt_bool(data: Mapping[str, Any], key: str) -> bool | None:
    value = data.get(key)
    if value is not None and not isinstance(value, bool):
        raise PrototypeError(f"`{key}` must be a boolean")
    return value


def _opt_u16(data: Mapping[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise PrototypeError(f"`{key}` must be an integer")
    if not 0 <= value <= _MAX_U16:
        raise PrototypeError(f"`{key}` is out of range: {value}")
    return value


def _opt_template(data: Mapping[str, Any], key: str) -> Template | None:
    text = _opt_str(data, key)
    return None if text is None else Template.parse(text)


def _opt_enum(data: Mapping[str, Any], key: str, kind: type[enum.Enum]) -> Any:
    text = _opt_str(data, key)
    if text is None:
        return None
    try:
        return kind(text)
    except ValueError:
        raise PrototypeError(f"invalid value for `{key}`: {text!r}") from None


def _binding(value: Any) -> Binding:
    if isinstance(value, str):
        return value
    if isinstance(value, list) and all(isinstance(key, str) for key in value):
        return tuple(value)
    raise PrototypeError(f"invalid key binding: {value!r}")


def parse_keybindings(data: Mapping[str, Any]) -> dict[Action, Binding]:
    """Turn ``action_name = binding`` pairs into a mapping of actions."""
    bindings: dict[Action, Binding] = {}
    for name, value in data.items():
        try:
            action = Action(ActionKind.from_config_name(name))
        except ValueError as exc:
            raise PrototypeError(str(exc)) from None
        bindings[action] = _binding(value)
    return bindings


@dataclass
class CommandSpec:
    """One or more commands, run in a shell with extra environment."""

    inner: list[Template]
    interactive: bool = False
    env: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_template(cls, template: Template) -> CommandSpec:
        return cls([template])

    @classmethod
    def _from_table(cls, data: Mapping[str, Any], where: str) -> CommandSpec:
        command = _required(data, "command", where)
        if isinstance(command, str):
            texts = [command]
        elif isinstance(command, list) and all(isinstance(c, str) for c in command):
            texts = command
        else:
            raise PrototypeError(f"`{where}.command` must be a string or a list")
        env = _table(data.get("env", {}), f"{where}.env")
        if not all(isinstance(v, str) for v in env.values()):
            raise PrototypeError(f"`{where}.env` values must be strings")
        return cls(
            [Template.parse(text) for text in texts],
            _opt_bool(data, "interactive") or False,
            env,
        )

    def command_count(self) -> int:
        return len(self.inner)

    def has_multiple_commands(self) -> bool:
        return len(self.inner) > 1

    def get_nth(self, index: int) -> Template:
        """The command at ``index``, wrapping around to the first."""
        if not self.inner:
            raise PrototypeError("command spec holds no commands")
        return self.inner[index % len(self.inner)]

    def __str__(self) -> str:
        return "[" + ";".join(t.raw for t in self.inner) + "]"


@dataclass
class ChannelKeyBindings:
    """Channel-level key bindings and the shortcut that switches to it."""

    shortcut: Binding | None = None
    bindings: dict[Action, Binding] = field(default_factory=dict)

    def channel_shortcut(self) -> Binding | None:
        return self.shortcut


@dataclass
class HistoryConfig:
    global_mode: bool | None = None


@dataclass
class BinaryRequirement:
    """A program the channel needs on the ``PATH``."""

    bin_name: str
    _met: bool = field(default=False, init=False, compare=False, repr=False)

    def init(self) -> None:
        """Look the program up and remember whether it was found."""
        self._met = shutil.which(self.bin_name) is not None

    def is_met(self) -> bool:
        """Whether the program was found; meaningful after ``init``."""
        return self._met


@dataclass
class Metadata:
    name: str
    description: str | None = None
    requirements: list[BinaryRequirement] = field(default_factory=list)


@dataclass
class SourceSpec:
    command: CommandSpec
    entry_delimiter: str | None = None
    display: Template | None = None
    output: Template | None = None


@dataclass
class PreviewSpec:
    command: CommandSpec
    offset: Template | None = None

    @classmethod
    def from_str_command(cls, command: str) -> PreviewSpec:
        return cls(CommandSpec([Template.parse(command)]))


@dataclass
class UiSpec:
    ui_scale: int | None = None
    features: dict[str, Any] | None = None
    orientation: Orientation | None = None
    input_bar_position: InputPosition | None = None
    input_header: Template | None = None
    preview_panel: dict[str, Any] | None = None
    status_bar: dict[str, Any] | None = None
    help_panel: dict[str, Any] | None = None
    remote_control: dict[str, Any] | None = None


def _panel(data: Mapping[str, Any], key: str) -> dict[str, Any] | None:
    value = data.get(key)
    if value is None:
        return None
    panel = _table(value, f"ui.{key}")
    for name in ("header", "footer"):
        if name in panel:
            panel[name] = _opt_template(panel, name)
    return panel


def _ui(data: Mapping[str, Any]) -> UiSpec:
    if "layout" in data and "orientation" in data:
        raise PrototypeError("duplicate field `layout`")
    key = "layout" if "layout" in data else "orientation"
    features = data.get("features")
    return UiSpec(
        ui_scale=_opt_u16(data, "ui_scale"),
        features=None if features is None else _table(features, "ui.features"),
        orientation=_opt_enum(data, key, Orientation),
        input_bar_position=_opt_enum(data, "input_bar_position", InputPosition),
        input_header=_opt_template(data, "input_header"),
        preview_panel=_panel(data, "preview_panel"),
        status_bar=_panel(data, "status_bar"),
        help_panel=_panel(data, "help_panel"),
        remote_control=_panel(data, "remote_control"),
    )


def _metadata(data: Mapping[str, Any]) -> Metadata:
    name = _required(data, "name", "metadata")
    if not isinstance(name, str):
        raise PrototypeError("`metadata.name` must be a string")
    requirements = data.get("requirements", [])
    if not isinstance(requirements, list) or not all(
        isinstance(r, str) for r in requirements
    ):
        raise PrototypeError("`metadata.requirements` must be a list of strings")
    return Metadata(
        name,
        _opt_str(data, "description"),
        [BinaryRequirement(r) for r in requirements],
    )


def _source(data: Mapping[str, Any]) -> SourceSpec:
    delimiter = data.get("entry_delimiter")
    return SourceSpec(
        CommandSpec._from_table(data, "source"),
        parse_source_entry_delimiter(delimiter) if isinstance(delimiter, str) else None,
        _opt_template(data, "display"),
        _opt_template(data, "output"),
    )


def _keybindings(data: Mapping[str, Any]) -> ChannelKeyBindings:
    rest = dict(data)
    shortcut = rest.pop("shortcut", None)
    return ChannelKeyBindings(
        None if shortcut is None else _binding(shortcut),
        parse_keybindings(rest),
    )


@dataclass
class ChannelPrototype:
    """Everything needed to build a channel: its source, preview and UI."""

    metadata: Metadata
    source: SourceSpec
    preview: PreviewSpec | None = None
    ui: UiSpec | None = None
    keybindings: ChannelKeyBindings | None = None
    watch: float = 0.0
    history: HistoryConfig = field(default_factory=HistoryConfig)

    @classmethod
    def from_command(cls, name: str, command: str) -> ChannelPrototype:
        return cls(Metadata(name), SourceSpec(CommandSpec([Template.parse(command)])))

    @classmethod
    def stdin(
        cls, preview: PreviewSpec | None, entry_delimiter: str | None
    ) -> ChannelPrototype:
        return cls(
            Metadata("stdin", "A channel that reads from stdin"),
            SourceSpec(CommandSpec([Template.parse("cat")]), entry_delimiter),
            preview,
        )

    def with_preview(self, preview: PreviewSpec | None) -> ChannelPrototype:
        return replace(self, preview=preview)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChannelPrototype:
        """Build a prototype from parsed configuration data."""
        data = _table(data, "channel")
        metadata = _metadata(_table(_required(data, "metadata", "channel"), "metadata"))
        source = _source(_table(_required(data, "source", "channel"), "source"))
        preview = None
        if data.get("preview") is not None:
            table = _table(data["preview"], "preview")
            preview = PreviewSpec(
                CommandSpec._from_table(table, "preview"),
                _opt_template(table, "offset"),
            )
        ui = None if data.get("ui") is None else _ui(_table(data["ui"], "ui"))
        keybindings = None
        if data.get("keybindings") is not None:
            keybindings = _keybindings(_table(data["keybindings"], "keybindings"))
        watch = data.get("watch", 0.0)
        if isinstance(watch, bool) or not isinstance(watch, (int, float)):
            raise PrototypeError("`watch` must be a number")
        history_table = _table(data.get("history", {}), "history")
        return cls(
            metadata,
            source,
            preview,
            ui,
            keybindings,
            float(watch),
            HistoryConfig(_opt_bool(history_table, "global_mode")),
        )

    @classmethod
    def from_toml(cls, text: str) -> ChannelPrototype:
        """Parse a prototype from the text of a channel file."""
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise PrototypeError(f"invalid TOML: {exc}") from None
        return cls.from_dict(data)

    def __str__(self) -> str:
        return self.metadata.name