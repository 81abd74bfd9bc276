"""Tests for the action catalog."""

import dataclasses

import pytest

from watchman.domain.catalog import (
    ACTION_CATALOG,
    ActionKind,
    find_action,
    get_action,
    required_programs,
)


def test_catalog_has_35_actions_in_id_order():
    ids = [action.id for action in ACTION_CATALOG]

    assert ids == list(range(1, 36))


def test_every_action_has_a_name_and_description():
    for action in ACTION_CATALOG:
        assert action.name.strip()
        assert action.description.strip()


def test_first_action_is_local_discovery_ping_sweep():
    action = ACTION_CATALOG[0]

    assert action.name == "Local Discovery"
    assert action.invocation == "-sn"
    assert action.program == "nmap"


def test_custom_range_is_the_only_parameterized_action():
    parameterized = [action for action in ACTION_CATALOG if action.requires_parameter]

    assert [action.id for action in parameterized] == [4]
    assert parameterized[0].parameter_label == "Which ports?"
    assert parameterized[0].requires_target


def test_custom_range_renders_ports_into_invocation():
    action = get_action(4)

    assert action.render_invocation("80,443") == "-p 80,443"
    assert action.with_parameter("1-1000").invocation == "-p 1-1000"
    assert action.invocation == "-p {parameter}"


def test_render_invocation_without_placeholder_is_unchanged():
    assert get_action(3).render_invocation("ignored") == "--top-ports 100"


def test_local_queries_need_no_target():
    local = [action for action in ACTION_CATALOG if action.kind is ActionKind.LOCAL_QUERY]

    assert [action.id for action in local] == [12, 13]
    assert all(not action.requires_target for action in local)
    assert {action.invocation for action in local} == {"public_ip", "local_info"}


def test_elevated_actions():
    elevated = {action.id for action in ACTION_CATALOG if action.elevated}

    assert elevated == {6, 7, 9, 25}


def test_whois_lookup_uses_whois_program():
    action = get_action(35)

    assert action.program == "whois"
    assert action.invocation == ""
    assert action.requires_target


def test_descriptors_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        ACTION_CATALOG[0].name = "changed"


def test_get_action_unknown_id_raises():
    with pytest.raises(KeyError) as exc_info:
        get_action(99)

    assert "99" in str(exc_info.value)


def test_find_action_is_case_insensitive():
    assert find_action("  quick CHECK ").id == 3

    with pytest.raises(KeyError):
        find_action("Not A Scan")


def test_required_programs_lists_distinct_subprocess_tools():
    assert required_programs() == ("nmap", "whois")
