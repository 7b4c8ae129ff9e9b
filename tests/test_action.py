import pytest

from television.action import Action, ActionKind


def test_config_name_lookup():
    assert ActionKind.from_config_name("quit") is ActionKind.QUIT
    assert (
        ActionKind.from_config_name("select_next_entry")
        is ActionKind.SELECT_NEXT_ENTRY
    )


def test_to_config_name():
    assert Action(ActionKind.QUIT).to_config_name() == "quit"


@pytest.mark.parametrize(
    "kind", [kind for kind in ActionKind if kind.configurable]
)
def test_configurable_round_trip(kind):
    name = Action(kind).to_config_name()
    assert ActionKind.from_config_name(name) is kind


@pytest.mark.parametrize(
    "kind", [kind for kind in ActionKind if not kind.configurable]
)
def test_internal_kinds_are_rejected_in_config(kind):
    with pytest.raises(ValueError):
        ActionKind.from_config_name(kind.value)


def test_internal_action_has_no_config_name():
    with pytest.raises(ValueError):
        Action(ActionKind.TICK).to_config_name()
    with pytest.raises(ValueError):
        Action(ActionKind.SWITCH_TO_CHANNEL, "files").to_config_name()


def test_unknown_name_is_rejected():
    with pytest.raises(ValueError):
        ActionKind.from_config_name("does_not_exist")


def test_payload_required():
    with pytest.raises(ValueError):
        Action(ActionKind.ADD_INPUT_CHAR)
    with pytest.raises(ValueError):
        Action(ActionKind.SWITCH_TO_CHANNEL)


def test_payload_rejected_when_not_expected():
    with pytest.raises(ValueError):
        Action(ActionKind.QUIT, "x")


def test_add_input_char_needs_single_character():
    with pytest.raises(ValueError):
        Action(ActionKind.ADD_INPUT_CHAR, "ab")
    assert Action(ActionKind.ADD_INPUT_CHAR, "a").payload == "a"


def test_resize_payload_is_normalised_to_tuple():
    action = Action(ActionKind.RESIZE, [80, 24])
    assert action.payload == (80, 24)
    assert action == Action(ActionKind.RESIZE, (80, 24))
    with pytest.raises(ValueError):
        Action(ActionKind.RESIZE, (80,))
    with pytest.raises(ValueError):
        Action(ActionKind.RESIZE, (-1, 10))


def test_actions_are_hashable_and_compare_by_value():
    actions = {
        Action(ActionKind.SWITCH_TO_CHANNEL, "files"),
        Action(ActionKind.SWITCH_TO_CHANNEL, "files"),
        Action(ActionKind.SWITCH_TO_CHANNEL, "env"),
    }
    assert len(actions) == 2


def test_ordering_follows_declaration_then_payload():
    quit_action = Action(ActionKind.QUIT)
    char_a = Action(ActionKind.ADD_INPUT_CHAR, "a")
    char_b = Action(ActionKind.ADD_INPUT_CHAR, "b")
    history = Action(ActionKind.SELECT_NEXT_HISTORY)
    assert sorted([history, quit_action, char_b, char_a]) == [
        char_a,
        char_b,
        quit_action,
        history,
    ]
    assert not quit_action < Action(ActionKind.QUIT)