import pytest

from television.templates import Template, TemplateError


def test_template_kinds_from_source_cases():
    hello = Template.parse("Hello, {}")
    world = Template.parse("Hello, World")
    docker = Template.parse(
        "docker images --format '{{.Repository}}:{{.Tag}} {{.ID}}'"
    )
    assert hello.is_pipeline
    assert world.is_pipeline
    assert not docker.is_pipeline
    assert docker == Template(
        "docker images --format '{{.Repository}}:{{.Tag}} {{.ID}}'"
    )


def test_raw_text_is_kept():
    template = Template.parse("bat -n --color=always {}")
    assert template.raw == "bat -n --color=always {}"
    assert str(template) == "bat -n --color=always {}"


def test_identity_section():
    assert Template.parse("{}").format("test name with spaces") == (
        "test name with spaces"
    )


def test_literal_and_identity():
    assert Template.parse("Hello, {}").format("World") == "Hello, World"
    assert Template.parse("Hello, World").format("ignored") == "Hello, World"


def test_split_last_segment():
    assert Template.parse("{split:/:-1}").format("/a/b/c") == "c"


def test_literal_offset():
    assert Template.parse("3").format("anything") == "3"


def test_raw_template_replaces_every_placeholder():
    template = Template("echo {} {}")
    assert not template.is_pipeline
    assert template.format("x") == "echo x x"


@pytest.mark.parametrize(
    ("text", "expected"),
    [("{0}", "a"), ("{1}", "b"), ("{-1}", "c"), ("{0..2}", "a b")],
)
def test_shorthand_fields(text, expected):
    assert Template.parse(text).format("a b c") == expected


def test_split_range_keeps_separator():
    assert Template.parse("{split:,:..}").format("a,b,c") == "a,b,c"
    assert Template.parse("{split:/:..2}").format("a/b/c") == "a/b"
    assert Template.parse("{split: :1..=2}").format("a b c d") == "b c"


def test_split_and_join():
    assert Template.parse("{split:,:..|join:-}").format("a,b,c") == "a-b-c"


def test_escaped_colon_separator():
    assert Template.parse("{split:\\::1}").format("a:b:c") == "b"


def test_case_and_affixes():
    assert Template.parse("{upper}").format("abc") == "ABC"
    assert Template.parse("{lower}").format("ABC") == "abc"
    assert Template.parse("{append:!|prepend:>}").format("hi") == ">hi!"


def test_trim():
    assert Template.parse("[{trim}]").format("  x  ") == "[x]"
    assert Template.parse("[{trim:left}]").format("  x  ") == "[x  ]"
    assert Template.parse("[{trim:right}]").format("  x  ") == "[  x]"


def test_replace():
    assert Template.parse("{replace:s/a/x/g}").format("banana") == "bxnxnx"
    assert Template.parse("{replace:s/a/x/}").format("banana") == "bxnana"
    assert (
        Template.parse("{replace:s/(\\w+)-(\\w+)/$2 $1/}").format("ab-cd")
        == "cd ab"
    )


def test_substring_and_reverse():
    assert Template.parse("{substring:0..3}").format("television") == "tel"
    assert Template.parse("{reverse}").format("abc") == "cba"
    assert Template.parse("{split:,:..|reverse}").format("a,b,c") == "c,b,a"


def test_list_operations():
    assert Template.parse("{split:,:..|sort:desc}").format("b,a,c") == "c,b,a"
    assert Template.parse("{split:,:..|unique}").format("a,b,a") == "a,b"
    assert (
        Template.parse("{split:,:..|filter:^a}").format("apple,banana,avocado")
        == "apple,avocado"
    )
    assert (
        Template.parse("{split:,:..|filter_not:^a}").format("apple,banana")
        == "banana"
    )


def test_strip_ansi():
    assert Template.parse("{strip_ansi}").format("\x1b[31mred\x1b[0m") == "red"


@pytest.mark.parametrize(
    "text", ["{upper", "{nope}", "{split}", "{split:,:x}", "{filter:(}"]
)
def test_invalid_pipelines_fall_back_to_raw(text):
    template = Template.parse(text)
    assert not template.is_pipeline
    assert template.raw == text


def test_format_error_is_raised():
    with pytest.raises(TemplateError, match="Failed to format template"):
        Template.parse("{sort}").format("abc")


def test_equality_and_hash():
    assert Template.parse("a {}") == Template.parse("a {}")
    assert hash(Template.parse("a {}")) == hash(Template("a {}"))
    assert not Template.parse("a {}") == Template("a {}")