import pytest

from television.entry import Entry, into_ranges
from television.templates import Template, TemplateError


def test_empty_input():
    assert into_ranges([]) == []


def test_single_range():
    assert into_ranges([1, 2]) == [(1, 3)]


def test_contiguous_ranges():
    assert into_ranges([1, 2, 3, 4]) == [(1, 5)]


def test_non_contiguous_ranges():
    assert into_ranges([1, 3, 5]) == [(1, 2), (3, 4), (5, 6)]


def test_documented_example():
    assert into_ranges([1, 2, 7, 8]) == [(1, 3), (7, 9)]


def test_leaves_name_intact():
    entry = Entry("test name with spaces")
    assert (
        entry.stdout_repr(Template.parse("{}")) == "test name with spaces"
    )


def test_stdout_repr_without_template_is_raw():
    entry = Entry("raw text").with_display("shown")
    assert entry.stdout_repr(None) == "raw text"


def test_stdout_repr_applies_template():
    entry = Entry("/a/b/c")
    assert entry.stdout_repr(Template.parse("{split:/:-1}")) == "c"


def test_stdout_repr_propagates_format_errors():
    with pytest.raises(TemplateError):
        Entry("abc").stdout_repr(Template.parse("{sort}"))


def test_displayed_falls_back_to_raw():
    entry = Entry("raw")
    assert entry.displayed() == "raw"
    assert entry.with_display("Display Name").displayed() == "Display Name"


def test_builders_return_new_entries():
    entry = Entry("name")
    built = (
        entry.with_display("Display Name")
        .with_match_indices([0])
        .with_icon("icon")
        .with_line_number(0)
    )
    assert entry.display is None
    assert entry.line_number is None
    assert built.display == "Display Name"
    assert built.name_match_ranges == [(0, 1)]
    assert built.icon == "icon"
    assert built.line_number == 0


def test_equality_ignores_display_and_ranges():
    plain = Entry("file.txt")
    decorated = Entry("file.txt").with_display("x").with_match_indices([0, 1])
    assert plain == decorated
    assert hash(plain) == hash(decorated)
    assert len({plain, decorated}) == 1


def test_equality_considers_line_number():
    assert Entry("file.txt").with_line_number(3) == Entry(
        "file.txt"
    ).with_line_number(3)
    assert len({Entry("file.txt"), Entry("file.txt").with_line_number(3)}) == 2
    assert len({Entry("file.txt"), Entry("other.txt")}) == 2