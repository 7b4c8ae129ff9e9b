"""Templates that turn an entry into display text, commands or output.

A template is literal text with ``{...}`` sections. A section holds a
pipeline of operations separated by ``|``; ``{}`` stands for the input
unchanged and ``{N}`` / ``{N..M}`` pick space-separated fields. Text that
does not parse as such a template is kept as a raw template, in which every
``{}`` is replaced by the input.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Union


class TemplateError(ValueError):
    """Raised when a template cannot be parsed or applied."""


_Value = Union[str, list[str]]

_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
_SHORTHAND_RE = re.compile(r"(?:-?\d+)?\.\.=?(?:-?\d+)?|-?\d+")
_GROUP_REF_RE = re.compile(r"\$(?:\{(\w+)\}|(\d+))")


@dataclass
class _Context:
    separator: str = " "


_Op = Callable[[_Value, _Context], _Value]


@dataclass(frozen=True)
class _Range:
    start: int | None
    end: int | None
    inclusive: bool = False
    single: bool = False

    @classmethod
    def parse(cls, text: str) -> _Range:
        text = text.strip()
        try:
            if ".." not in text:
                return cls(int(text), None, single=True)
            inclusive = "..=" in text
            left, right = text.split("..=" if inclusive else "..", 1)
            start = int(left) if left else None
            end = int(right) if right else None
        except ValueError:
            raise TemplateError(f"invalid range: {text!r}") from None
        if inclusive and end is None:
            raise TemplateError(f"inclusive range needs an end: {text!r}")
        return cls(start, end, inclusive)

    def select(self, items: Sequence[Any]) -> Any:
        size = len(items)
        if self.single:
            if size == 0:
                return ""
            index = self.start + size if self.start < 0 else self.start
            return items[min(max(index, 0), size - 1)]
        start = self._resolve(self.start, size, 0)
        if self.end is None:
            end = size
        else:
            end = self.end + size if self.end < 0 else self.end
            if self.inclusive:
                end += 1
        end = min(max(end, 0), size)
        return items[start:end]

    @staticmethod
    def _resolve(value: int | None, size: int, default: int) -> int:
        if value is None:
            return default
        if value < 0:
            value += size
        return min(max(value, 0), size)


_FULL_RANGE = _Range(None, None)


def _split_unescaped(text: str, separator: str) -> list[str]:
    """Split on a separator, keeping backslash escapes as written."""
    parts: list[str] = []
    current: list[str] = []
    chars = iter(text)
    for char in chars:
        if char == "\\":
            current.append(char)
            current.append(next(chars, ""))
        elif char == separator:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


def _unescape(text: str) -> str:
    out: list[str] = []
    chars = iter(text)
    for char in chars:
        if char != "\\":
            out.append(char)
            continue
        following = next(chars, None)
        if following is None:
            out.append(char)
        elif following in ":|{}":
            out.append(following)
        elif following == "n":
            out.append("\n")
        elif following == "t":
            out.append("\t")
        else:
            out.append(char + following)
    return "".join(out)


def _map(value: _Value, func: Callable[[str], str]) -> _Value:
    if isinstance(value, list):
        return [func(item) for item in value]
    return func(value)


def _expect_args(name: str, args: list[str], low: int, high: int) -> None:
    if not low <= len(args) <= high:
        raise TemplateError(f"wrong number of arguments for {name!r}")


def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise TemplateError(f"invalid regex {pattern!r}: {exc}") from None


def _split_op(separator: str, selection: _Range) -> _Op:
    if not separator:
        raise TemplateError("split separator cannot be empty")

    def apply(value: _Value, context: _Context) -> _Value:
        items = [value] if isinstance(value, str) else value
        parts = [part for item in items for part in item.split(separator)]
        context.separator = separator
        return selection.select(parts)

    return apply


def _replace_op(expression: str) -> _Op:
    if len(expression) < 2 or expression[0] != "s":
        raise TemplateError(f"invalid replace expression: {expression!r}")
    delimiter = expression[1]
    parts = _split_unescaped(expression[2:], delimiter)
    if len(parts) != 3:
        raise TemplateError(f"invalid replace expression: {expression!r}")
    escaped = "\\" + delimiter
    pattern_text, replacement, flags = (p.replace(escaped, delimiter) for p in parts)
    regex_flags = 0
    count = 1
    for flag in flags:
        if flag == "g":
            count = 0
        elif flag == "i":
            regex_flags |= re.IGNORECASE
        elif flag == "m":
            regex_flags |= re.MULTILINE
        else:
            raise TemplateError(f"unknown replace flag: {flag!r}")
    try:
        pattern = re.compile(pattern_text, regex_flags)
    except re.error as exc:
        raise TemplateError(f"invalid regex {pattern_text!r}: {exc}") from None
    py_replacement = _GROUP_REF_RE.sub(
        lambda m: f"\\g<{m.group(1) or m.group(2)}>",
        replacement.replace("\\", "\\\\"),
    )

    def substitute(text: str) -> str:
        try:
            return pattern.sub(py_replacement, text, count=count)
        except (re.error, IndexError) as exc:
            raise TemplateError(f"replace failed: {exc}") from None

    return lambda value, context: _map(value, substitute)


def _list_only(name: str, func: Callable[[list[str]], list[str]]) -> _Op:
    def apply(value: _Value, context: _Context) -> _Value:
        if isinstance(value, str):
            raise TemplateError(f"{name!r} requires a list")
        return func(value)

    return apply


def _build_op(text: str) -> _Op:
    name, has_args, rest = text.partition(":")
    if name == "replace":
        return _replace_op(_unescape(rest))
    args = [_unescape(arg) for arg in _split_unescaped(rest, ":")] if has_args else []

    if name == "split":
        _expect_args(name, args, 1, 2)
        selection = _Range.parse(args[1]) if len(args) == 2 else _FULL_RANGE
        return _split_op(args[0], selection)
    if name == "join":
        _expect_args(name, args, 1, 1)
        separator = args[0]
        return lambda value, context: (
            separator.join(value) if isinstance(value, list) else value
        )
    if name in ("upper", "lower"):
        _expect_args(name, args, 0, 0)
        func = str.upper if name == "upper" else str.lower
        return lambda value, context: _map(value, func)
    if name == "trim":
        _expect_args(name, args, 0, 1)
        direction = args[0] if args else "both"
        strippers = {"both": str.strip, "left": str.lstrip, "right": str.rstrip}
        if direction not in strippers:
            raise TemplateError(f"unknown trim direction: {direction!r}")
        strip = strippers[direction]
        return lambda value, context: _map(value, strip)
    if name in ("append", "prepend"):
        _expect_args(name, args, 1, 1)
        affix = args[0]
        if name == "append":
            return lambda value, context: _map(value, lambda s: s + affix)
        return lambda value, context: _map(value, lambda s: affix + s)
    if name == "substring":
        _expect_args(name, args, 1, 1)
        selection = _Range.parse(args[0])
        return lambda value, context: _map(value, selection.select)
    if name == "reverse":
        _expect_args(name, args, 0, 0)
        return lambda value, context: value[::-1]
    if name == "sort":
        _expect_args(name, args, 0, 1)
        order = args[0] if args else "asc"
        if order not in ("asc", "desc"):
            raise TemplateError(f"unknown sort order: {order!r}")
        descending = order == "desc"
        return _list_only(name, lambda items: sorted(items, reverse=descending))
    if name == "unique":
        _expect_args(name, args, 0, 0)
        return _list_only(name, lambda items: list(dict.fromkeys(items)))
    if name in ("filter", "filter_not"):
        _expect_args(name, args, 1, 1)
        pattern = _compile(args[0])
        keep = name == "filter"

        def apply(value: _Value, context: _Context) -> _Value:
            if isinstance(value, str):
                return value if bool(pattern.search(value)) == keep else ""
            return [item for item in value if bool(pattern.search(item)) == keep]

        return apply
    if name == "strip_ansi":
        _expect_args(name, args, 0, 0)
        return lambda value, context: _map(value, lambda s: _ANSI_RE.sub("", s))
    raise TemplateError(f"unknown operation: {name!r}")


def _parse_section(content: str) -> tuple[_Op, ...]:
    if not content:
        return ()
    if _SHORTHAND_RE.fullmatch(content):
        return (_split_op(" ", _Range.parse(content)),)
    return tuple(_build_op(part) for part in _split_unescaped(content, "|"))


def _matching_brace(text: str, start: int) -> int:
    depth = 0
    position = start
    while position < len(text):
        char = text[position]
        if char == "\\":
            position += 2
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return position
        position += 1
    raise TemplateError("unclosed '{' in template")


def _parse_sections(text: str) -> list[str | tuple[_Op, ...]]:
    sections: list[str | tuple[_Op, ...]] = []
    literal: list[str] = []
    position = 0
    while position < len(text):
        char = text[position]
        if char == "\\" and text[position + 1 : position + 2] in ("{", "}"):
            literal.append(text[position + 1])
            position += 2
        elif char == "{":
            end = _matching_brace(text, position)
            if literal:
                sections.append("".join(literal))
                literal = []
            sections.append(_parse_section(text[position + 1 : end]))
            position = end + 1
        else:
            literal.append(char)
            position += 1
    if literal:
        sections.append("".join(literal))
    return sections


def _render(section: str | tuple[_Op, ...], value: str) -> str:
    if isinstance(section, str):
        return section
    context = _Context()
    result: _Value = value
    for operation in section:
        result = operation(result, context)
    if isinstance(result, list):
        return context.separator.join(result)
    return result


@dataclass(frozen=True, eq=False)
class Template:
    """A parsed template, or a raw one when ``sections`` is ``None``.

    ``Template(text)`` builds a raw template; ``Template.parse`` builds a
    pipeline template whenever the text parses as one.
    """

    raw: str
    sections: tuple[str | tuple[_Op, ...], ...] | None = field(
        default=None, repr=False
    )

    @property
    def is_pipeline(self) -> bool:
        return self.sections is not None

    @classmethod
    def parse(cls, text: str) -> Template:
        """Parse text, falling back to a raw template if it is not valid."""
        try:
            sections = _parse_sections(text)
        except TemplateError:
            return cls(text)
        return cls(text, tuple(sections))

    def format(self, value: str) -> str:
        """Apply the template to a value."""
        if self.sections is None:
            return self.raw.replace("{}", value)
        try:
            return "".join(_render(section, value) for section in self.sections)
        except TemplateError as exc:
            raise TemplateError(
                f"Failed to format template '{self.raw}' with '{value}': {exc}"
            ) from exc

    def __str__(self) -> str:
        return self.raw

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Template):
            return NotImplemented
        return self.raw == other.raw and self.is_pipeline == other.is_pipeline

    def __hash__(self) -> int:
        return hash(self.raw)