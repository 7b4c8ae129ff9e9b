"""Actions that the application can perform."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from functools import total_ordering
from typing import Any


class ActionKind(enum.Enum):
    """Every kind of action, valued by its configuration name."""

    # input actions
    ADD_INPUT_CHAR = "add_input_char"
    DELETE_PREV_CHAR = "delete_prev_char"
    DELETE_PREV_WORD = "delete_prev_word"
    DELETE_NEXT_CHAR = "delete_next_char"
    DELETE_LINE = "delete_line"
    GO_TO_PREV_CHAR = "go_to_prev_char"
    GO_TO_NEXT_CHAR = "go_to_next_char"
    GO_TO_INPUT_START = "go_to_input_start"
    GO_TO_INPUT_END = "go_to_input_end"
    # rendering actions
    RENDER = "render"
    RESIZE = "resize"
    CLEAR_SCREEN = "clear_screen"
    # results actions
    TOGGLE_SELECTION_DOWN = "toggle_selection_down"
    TOGGLE_SELECTION_UP = "toggle_selection_up"
    CONFIRM_SELECTION = "confirm_selection"
    SELECT_AND_EXIT = "select_and_exit"
    SELECT_NEXT_ENTRY = "select_next_entry"
    SELECT_PREV_ENTRY = "select_prev_entry"
    SELECT_NEXT_PAGE = "select_next_page"
    SELECT_PREV_PAGE = "select_prev_page"
    COPY_ENTRY_TO_CLIPBOARD = "copy_entry_to_clipboard"
    # preview actions
    SCROLL_PREVIEW_UP = "scroll_preview_up"
    SCROLL_PREVIEW_DOWN = "scroll_preview_down"
    SCROLL_PREVIEW_HALF_PAGE_UP = "scroll_preview_half_page_up"
    SCROLL_PREVIEW_HALF_PAGE_DOWN = "scroll_preview_half_page_down"
    OPEN_ENTRY = "open_entry"
    # application actions
    TICK = "tick"
    SUSPEND = "suspend"
    RESUME = "resume"
    QUIT = "quit"
    TOGGLE_REMOTE_CONTROL = "toggle_remote_control"
    TOGGLE_HELP = "toggle_help"
    TOGGLE_STATUS_BAR = "toggle_status_bar"
    TOGGLE_PREVIEW = "toggle_preview"
    ERROR = "error"
    NO_OP = "no_op"
    # channel actions
    TOGGLE_SEND_TO_CHANNEL = "toggle_send_to_channel"
    CYCLE_SOURCES = "cycle_sources"
    RELOAD_SOURCE = "reload_source"
    SWITCH_TO_CHANNEL = "switch_to_channel"
    WATCH_TIMER = "watch_timer"
    SELECT_PREV_HISTORY = "select_prev_history"
    SELECT_NEXT_HISTORY = "select_next_history"

    @property
    def configurable(self) -> bool:
        """Whether the action may be bound to keys in configuration."""
        return self not in _INTERNAL_KINDS

    @property
    def takes_payload(self) -> bool:
        """Whether actions of this kind carry a value."""
        return self in _PAYLOAD_KINDS

    @classmethod
    def from_config_name(cls, name: str) -> ActionKind:
        """Look up a configurable action by its snake_case name."""
        try:
            kind = cls(name)
        except ValueError:
            raise ValueError(f"unknown action: {name!r}") from None
        if not kind.configurable:
            raise ValueError(f"action {name!r} cannot be used in configuration")
        return kind


_INTERNAL_KINDS = frozenset(
    {
        ActionKind.ADD_INPUT_CHAR,
        ActionKind.DELETE_PREV_CHAR,
        ActionKind.DELETE_PREV_WORD,
        ActionKind.DELETE_NEXT_CHAR,
        ActionKind.DELETE_LINE,
        ActionKind.GO_TO_PREV_CHAR,
        ActionKind.GO_TO_NEXT_CHAR,
        ActionKind.RENDER,
        ActionKind.RESIZE,
        ActionKind.CLEAR_SCREEN,
        ActionKind.OPEN_ENTRY,
        ActionKind.TICK,
        ActionKind.SUSPEND,
        ActionKind.RESUME,
        ActionKind.ERROR,
        ActionKind.NO_OP,
        ActionKind.SWITCH_TO_CHANNEL,
        ActionKind.WATCH_TIMER,
    }
)

_PAYLOAD_KINDS = frozenset(
    {
        ActionKind.ADD_INPUT_CHAR,
        ActionKind.RESIZE,
        ActionKind.ERROR,
        ActionKind.SWITCH_TO_CHANNEL,
    }
)

_ORDER = {kind: position for position, kind in enumerate(ActionKind)}

_MAX_DIMENSION = 0xFFFF


@total_ordering
@dataclass(frozen=True)
class Action:
    """An action together with the value it carries, if any.

    Payloads: a single character for ``ADD_INPUT_CHAR``, a ``(width,
    height)`` pair for ``RESIZE``, a message for ``ERROR`` and a channel
    name for ``SWITCH_TO_CHANNEL``.
    """

    kind: ActionKind
    payload: Any = None

    def __post_init__(self) -> None:
        kind = self.kind
        if not kind.takes_payload:
            if self.payload is not None:
                raise ValueError(f"action {kind.value!r} takes no payload")
            return
        if self.payload is None:
            raise ValueError(f"action {kind.value!r} requires a payload")
        if kind is ActionKind.ADD_INPUT_CHAR:
            if not isinstance(self.payload, str) or len(self.payload) != 1:
                raise ValueError("add_input_char requires a single character")
        elif kind is ActionKind.RESIZE:
            size = tuple(self.payload)
            if len(size) != 2 or not all(
                isinstance(n, int) and 0 <= n <= _MAX_DIMENSION for n in size
            ):
                raise ValueError("resize requires a (width, height) pair")
            object.__setattr__(self, "payload", size)
        elif not isinstance(self.payload, str):
            raise ValueError(f"action {kind.value!r} requires a string payload")

    def to_config_name(self) -> str:
        """Return the name used for this action in configuration files."""
        if not self.kind.configurable:
            raise ValueError(
                f"action {self.kind.value!r} cannot be used in configuration"
            )
        return self.kind.value

    def _sort_key(self) -> tuple[int, Any]:
        return (_ORDER[self.kind], self.payload)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Action):
            return NotImplemented
        return self._sort_key() < other._sort_key()