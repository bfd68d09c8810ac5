"""
Tests for sub-command registration, routing, validation and completion.
"""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from switchboard.commands import CommandDispatcher, subcommand

from conftest import FakeActor, FakeSender, make_sub


class TestRegistration:
    def test_default_permission_uses_command_name(self, dispatcher):
        sub = make_sub("give")
        dispatcher.register_subcommand(sub)

        assert sub.permission == "sb.give"
        assert sub.dispatcher is dispatcher

    def test_explicit_permission_is_kept(self, dispatcher):
        sub = make_sub("give", permission="custom.node")
        dispatcher.register_subcommand(sub)

        assert sub.permission == "custom.node"

    def test_names_are_lowercased(self, dispatcher):
        sub = make_sub("GiVe")
        dispatcher.register_subcommand(sub)

        assert sub.name == "give"

    def test_decorator_derives_kebab_case_name_and_docstring(self):
        @subcommand()
        def set_home(command, sender, label, args):
            """Remember this place."""

        assert set_home.name == "set-home"
        assert set_home.description_text == "Remember this place."

    def test_dispatcher_decorator_registers(self, dispatcher):
        @dispatcher.subcommand(params="<who>")
        def kick(command, sender, label, args):
            """Kick someone."""

        assert [s.name for s in dispatcher.subcommands] == ["kick"]
        assert callable(kick)

    def test_unbound_subcommand_has_no_dispatcher(self):
        with pytest.raises(RuntimeError):
            make_sub("lonely").dispatcher

    def test_factory_condition_false_never_calls_factory(self, dispatcher):
        factory = MagicMock()

        assert dispatcher.register_subcommand_factory(factory, False) is False
        factory.assert_not_called()
        assert dispatcher.subcommands == ()

    def test_factory_returning_none_registers_nothing(self, dispatcher):
        assert dispatcher.register_subcommand_factory(lambda: None) is False
        assert dispatcher.subcommands == ()

    def test_factory_error_is_logged_not_raised(self, dispatcher, caplog):
        def broken():
            raise ValueError("boom")

        with caplog.at_level(logging.ERROR):
            assert dispatcher.register_subcommand_factory(broken) is False

        assert dispatcher.subcommands == ()
        assert "boom" in caplog.text

    def test_factory_success(self, dispatcher):
        assert dispatcher.register_subcommand_factory(lambda: make_sub("give")) is True
        assert [s.name for s in dispatcher.subcommands] == ["give"]

    def test_on_reload_runs_at_registration(self, dispatcher):
        hook = MagicMock()
        sub = make_sub("give", on_reload=hook)

        dispatcher.register_subcommand(sub)

        hook.assert_called_once_with(sub)


class TestAllowedView:
    def test_filters_by_permission_in_order_with_help_last(self, dispatcher):
        for name in ("alpha", "beta", "gamma"):
            dispatcher.register_subcommand(make_sub(name))
        sender = FakeSender(permissions={"sb.gamma", "sb.alpha"})

        names = [s.name for s in dispatcher.get_allowed_subcommands(sender)]

        assert names == ["alpha", "gamma", "help"]

    def test_no_help_when_registry_empty(self, dispatcher, sender):
        assert dispatcher.get_allowed_subcommands(sender) == []

    def test_no_help_when_disabled(self, single_page, sender):
        single_page.register_subcommand(make_sub("alpha"))

        assert [s.name for s in single_page.get_allowed_subcommands(sender)] == ["alpha"]


class TestRouting:
    def test_lookup_is_case_insensitive(self, dispatcher, sender):
        calls = []
        dispatcher.register_subcommand(make_sub("give", calls))

        assert dispatcher.dispatch(sender, "sb", ["GIVE", "3"]) is True
        assert calls == [("give", ["GIVE", "3"])]

    def test_first_registration_shadows_duplicates(self, dispatcher, sender):
        calls = []
        dispatcher.register_subcommand(make_sub("give", calls))
        second = subcommand(name="give")(lambda c, s, l, a: calls.append(("second", a)))
        dispatcher.register_subcommand(second)

        dispatcher.dispatch(sender, "sb", ["give"])

        assert calls == [("give", ["give"])]
        assert len(dispatcher.subcommands) == 2

    def test_registered_help_wins_over_builtin(self, dispatcher, sender):
        calls = []
        dispatcher.register_subcommand(make_sub("help", calls))

        dispatcher.dispatch(sender, "sb", ["help"])

        assert calls == [("help", ["help"])]
        assert dispatcher.get_subcommand("help", sender) is dispatcher.subcommands[0]

    def test_builtin_help_found_when_registry_non_empty(self, dispatcher, sender):
        dispatcher.register_subcommand(make_sub("give"))

        assert dispatcher.get_subcommand("help", sender) is dispatcher.help_subcommand

    def test_builtin_help_hidden_when_registry_empty(self, dispatcher, sender):
        assert dispatcher.get_subcommand("help", sender) is None

    def test_no_arguments_shows_help(self, dispatcher, sender):
        dispatcher.register_subcommand(make_sub("give"))

        assert dispatcher.dispatch(sender, "sb", []) is True
        assert "/sb give" in sender.last.plain()

    def test_unknown_name_shows_help(self, dispatcher, sender):
        calls = []
        dispatcher.register_subcommand(make_sub("give", calls))

        dispatcher.dispatch(sender, "sb", ["nope"])

        assert calls == []
        assert "/sb give" in sender.last.plain()

    def test_label_is_passed_through(self, dispatcher, sender):
        seen = []
        dispatcher.register_subcommand(
            subcommand(name="echo")(lambda c, s, label, a: seen.append(label)))

        dispatcher.dispatch(sender, "alias", ["echo"])

        assert seen == ["alias"]


class TestValidation:
    def test_permission_denied_names_the_node(self, dispatcher):
        calls = []
        dispatcher.register_subcommand(make_sub("give", calls))
        sender = FakeSender(permissions=set())

        dispatcher.dispatch(sender, "sb", ["give"])

        assert calls == []
        assert sender.texts == ["You lack of permission sb.give"]

    def test_player_only_rejects_non_physical_sender(self, dispatcher, sender):
        calls = []
        dispatcher.register_subcommand(make_sub("fly", calls, player_only=True))

        dispatcher.dispatch(sender, "sb", ["fly"])

        assert calls == []
        assert sender.texts == ["Command for Players only"]

    def test_requires_item_rejects_empty_hand(self, dispatcher):
        calls = []
        dispatcher.register_subcommand(
            make_sub("enchant", calls, player_only=True, requires_item=True))
        sender = FakeSender(actor=FakeActor(item=None))

        dispatcher.dispatch(sender, "sb", ["enchant"])

        assert calls == []
        assert sender.texts == ["You need to hold an item in hand"]

    def test_requires_item_accepts_held_item(self, dispatcher, player):
        calls = []
        dispatcher.register_subcommand(
            make_sub("enchant", calls, player_only=True, requires_item=True))

        dispatcher.dispatch(player, "sb", ["enchant", "sharpness"])

        assert calls == [("enchant", ["enchant", "sharpness"])]
        assert player.messages == []

    def test_requires_item_alone_is_not_checked(self, dispatcher, sender):
        calls = []
        dispatcher.register_subcommand(make_sub("odd", calls, requires_item=True))

        dispatcher.dispatch(sender, "sb", ["odd"])

        assert calls == [("odd", ["odd"])]

    def test_permission_checked_before_player_only(self, dispatcher):
        dispatcher.register_subcommand(make_sub("fly", player_only=True))
        sender = FakeSender(permissions=set())

        dispatcher.dispatch(sender, "sb", ["fly"])

        assert sender.texts == ["You lack of permission sb.fly"]

    def test_permission_checked_before_player_and_item(self, dispatcher):
        calls = []
        dispatcher.register_subcommand(
            make_sub("enchant", calls, player_only=True, requires_item=True))
        sender = FakeSender(permissions={"sb.other"}, actor=FakeActor(item=None))

        dispatcher.dispatch(sender, "sb", ["enchant"])

        assert calls == []
        assert sender.texts == ["You lack of permission sb.enchant"]

    def test_player_only_checked_before_item(self, dispatcher, sender):
        calls = []
        dispatcher.register_subcommand(
            make_sub("enchant", calls, player_only=True, requires_item=True))

        dispatcher.dispatch(sender, "sb", ["enchant"])

        assert calls == []
        assert sender.texts == ["Command for Players only"]

    def test_messages_come_from_catalog_in_sender_locale(self, config):
        from switchboard.config import MessageSource

        messages = MessageSource(catalogs={
            "en": {"player-only": "players only"},
            "it": {"player-only": "&csolo giocatori"},
        })
        dispatcher = CommandDispatcher("sb", config=config, messages=messages)
        dispatcher.register_subcommand(make_sub("fly", player_only=True))
        sender = FakeSender(locale="it_IT")

        dispatcher.dispatch(sender, "sb", ["fly"])

        assert sender.texts == ["solo giocatori"]


class TestSinglePageHelp:
    def test_lists_permitted_entries_with_header(self, single_page):
        for name in ("alpha", "beta"):
            single_page.register_subcommand(make_sub(name))
        sender = FakeSender(permissions={"sb.beta"})

        single_page.dispatch(sender, "sb", [])

        assert sender.last.plain().splitlines() == ["sb - Help", "/sb beta"]
        assert sender.last.markup().startswith("[cyan][bold]sb - Help\n")

    def test_entries_are_separated_by_newlines(self, single_page, sender):
        for name in ("alpha", "beta"):
            single_page.register_subcommand(make_sub(name))

        single_page.dispatch(sender, "sb", [])

        assert sender.last.plain().splitlines() == ["sb - Help", "/sb alpha", "/sb beta"]

    def test_nothing_permitted_sends_generic_denial(self, single_page):
        single_page.register_subcommand(make_sub("alpha"))
        sender = FakeSender(permissions=set())

        single_page.dispatch(sender, "sb", [])

        assert sender.texts == ["You don't have permission to use this command"]

    def test_help_word_is_unknown_without_builtin(self, single_page, sender):
        single_page.register_subcommand(make_sub("alpha"))

        single_page.dispatch(sender, "sb", ["help"])

        assert sender.last.plain().splitlines()[0] == "sb - Help"


class TestTabComplete:
    def test_first_token_filters_by_prefix(self, dispatcher, sender):
        dispatcher.register_subcommand(make_sub("give"))

        assert dispatcher.tab_complete(sender, "sb", ["g"]) == ["give"]
        assert dispatcher.tab_complete(sender, "sb", [""]) == ["give", "help"]

    def test_first_token_is_case_insensitive(self, dispatcher, sender):
        dispatcher.register_subcommand(make_sub("give"))

        assert dispatcher.tab_complete(sender, "sb", ["GI"]) == ["give"]

    def test_first_token_hides_forbidden(self, dispatcher):
        for name in ("give", "take"):
            dispatcher.register_subcommand(make_sub(name))
        sender = FakeSender(permissions={"sb.take"})

        assert dispatcher.tab_complete(sender, "sb", [""]) == ["take", "help"]

    def test_delegates_to_subcommand(self, dispatcher, sender):
        completer = MagicMock(return_value=["d6", "d20"])
        sub = make_sub("roll", completer=completer)
        dispatcher.register_subcommand(sub)

        assert dispatcher.tab_complete(sender, "sb", ["roll", "d"]) == ["d6", "d20"]
        completer.assert_called_once_with(sub, sender, ["roll", "d"])

    def test_forbidden_subcommand_completes_nothing(self, dispatcher):
        completer = MagicMock(return_value=["x"])
        dispatcher.register_subcommand(make_sub("roll", completer=completer))
        sender = FakeSender(permissions=set())

        assert dispatcher.tab_complete(sender, "sb", ["roll", ""]) == []
        completer.assert_not_called()

    def test_unknown_subcommand_completes_nothing(self, dispatcher, sender):
        dispatcher.register_subcommand(make_sub("roll"))

        assert dispatcher.tab_complete(sender, "sb", ["nope", ""]) == []

    def test_empty_args(self, dispatcher, sender):
        assert dispatcher.tab_complete(sender, "sb", []) == []

    def test_completer_errors_are_swallowed_and_logged(self, dispatcher, sender, caplog):
        completer = MagicMock(side_effect=KeyError("bad"))
        dispatcher.register_subcommand(make_sub("roll", completer=completer))

        with caplog.at_level(logging.WARNING):
            assert dispatcher.tab_complete(sender, "sb", ["roll", ""]) == []
        assert "Completion failed" in caplog.text


class TestReload:
    def test_reload_order_config_then_subs_then_help(self, dispatcher):
        order = []
        dispatcher.config = MagicMock()
        dispatcher.config.reload.side_effect = lambda: order.append("config")
        dispatcher.config.load_int.side_effect = lambda *args: order.append("help") or 0
        dispatcher.register_subcommand(
            make_sub("a", on_reload=lambda s: order.append("a")))
        dispatcher.register_subcommand(
            make_sub("b", on_reload=lambda s: order.append("b")))
        order.clear()

        dispatcher.reload()

        assert order == ["config", "a", "b", "help"]
        assert dispatcher.help_subcommand.per_page == 4

    def test_reload_preserves_names_and_order(self, dispatcher):
        names = ["delta", "alpha", "charlie", "bravo"]
        for name in names:
            dispatcher.register_subcommand(make_sub(name))

        dispatcher.reload()

        assert [s.name for s in dispatcher.subcommands] == names

    def test_subcommand_config_is_scoped(self):
        from switchboard.config import ConfigStore, MessageSource

        config = ConfigStore(data={"sb": {"give": {"limit": 7, "loud": "no"}}})
        dispatcher = CommandDispatcher("sb", config=config, messages=MessageSource(catalogs={}))
        sub = make_sub("give")
        dispatcher.register_subcommand(sub)

        assert sub.conf_int("limit") == 7
        assert sub.conf_bool("loud") is False
        assert sub.conf_bool("missing") is True
        assert sub.conf_str("missing", "x") == "x"
