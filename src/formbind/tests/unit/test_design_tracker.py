"""
Unit tests for the design surface, its subscription and the DesignTimeTracker.
"""
import json
import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from PyQt6.QtWidgets import QWidget

from formbind.core.design_tracker import DesignSubscription, DesignSurface, DesignTimeTracker
from formbind.core.language_binder import LanguageBinder
from formbind.utils.components import BindableAction, BindableButton, BindableLabel


class DesignedForm(QWidget):
    pass


class Placeholder:
    """A sited component that is neither a widget nor an action."""
    site = None
    language_key = None


@pytest.fixture
def binder(language_table, config_store):
    binder = LanguageBinder(language_table, config_store)
    binder.design_mode = True
    return binder


@pytest.fixture
def tracker(binder):
    return DesignTimeTracker(binder)


@pytest.fixture
def surface(q_app):
    return DesignSurface()


@pytest.fixture
def notice():
    with patch("formbind.core.design_tracker.show_design_notice") as tracker_notice, \
            patch("formbind.core.language_binder.show_design_notice"):
        yield tracker_notice


def test_language_key_change_is_applied_immediately(q_app, tracker, surface):
    tracker.attach(surface)
    button = BindableButton("Original", language_key="btn_save")
    surface.add_component(button)

    surface.change_property(button, "language_key", "btnSave")

    assert button.language_key == "btnSave"
    assert button.text() == "Save"


def test_other_member_changes_are_ignored(q_app, surface):
    binder = MagicMock()
    tracker = DesignTimeTracker(binder)
    tracker.attach(surface)
    label = BindableLabel("old", language_key="greeting")
    surface.add_component(label)

    surface.change_property(label, "note", "tip")

    binder.apply_to.assert_not_called()


def test_unsited_components_are_ignored(q_app, surface):
    binder = MagicMock()
    tracker = DesignTimeTracker(binder)
    tracker.attach(surface)
    label = BindableLabel("old")

    surface.change_property(label, "language_key", "greeting")
    surface.component_added.emit(label)

    binder.apply_to.assert_not_called()
    assert not tracker.registry.widgets


def test_non_widget_components_are_logged_not_applied(q_app, surface, caplog):
    caplog.set_level(logging.INFO, logger="FormBind")
    binder = MagicMock()
    tracker = DesignTimeTracker(binder)
    tracker.attach(surface)
    component = Placeholder()
    surface.add_component(component)

    surface.change_property(component, "language_key", "greeting")

    binder.apply_to.assert_not_called()
    assert any("Not possible" in r.getMessage() for r in caplog.records)


def test_added_components_are_registered_by_name(q_app, tracker, surface):
    tracker.attach(surface)
    label = BindableLabel("old", language_key="greeting")
    label.setObjectName("late_label")
    action = BindableAction("old", language_key="action_open")
    action.setObjectName("late_action")

    surface.add_component(label)
    surface.add_component(action)
    surface.add_component(Placeholder())

    assert tracker.registry.widgets == {"late_label": label}
    assert tracker.registry.actions == {"late_action": action}


def test_detach_stops_notifications_and_is_idempotent(q_app, surface):
    binder = MagicMock()
    tracker = DesignTimeTracker(binder)
    tracker.attach(surface)
    tracker.detach()
    tracker.detach()
    label = BindableLabel("old")
    surface.add_component(label)
    surface.change_property(label, "language_key", "greeting")

    binder.apply_to.assert_not_called()
    assert not tracker.registry.widgets
    assert tracker.surface is None


def test_attach_replaces_previous_subscription(q_app, surface):
    binder = MagicMock()
    tracker = DesignTimeTracker(binder)
    other = DesignSurface()
    tracker.attach(other)
    tracker.attach(surface)
    label = BindableLabel("old")
    other.add_component(label)

    assert not tracker.registry.widgets
    assert tracker.surface is surface


def test_subscription_is_released_by_context_manager(q_app, surface):
    on_changed = MagicMock()
    on_added = MagicMock()
    with DesignSubscription(surface, on_changed, on_added) as subscription:
        assert subscription.active
        surface.add_component(BindableLabel())
    assert not subscription.active
    subscription.release()

    surface.add_component(BindableLabel())
    assert on_added.call_count == 1


def test_release_disconnects_the_second_handler_when_the_first_is_gone(q_app, surface):
    on_changed = MagicMock()
    on_added = MagicMock()
    subscription = DesignSubscription(surface, on_changed, on_added)
    surface.component_changed.disconnect(on_changed)

    subscription.release()
    surface.add_component(BindableLabel())

    on_added.assert_not_called()
    assert not subscription.active


def test_unnamed_components_are_not_registered(q_app, tracker, surface, caplog):
    caplog.set_level(logging.DEBUG, logger="FormBind")
    tracker.attach(surface)

    surface.add_component(BindableLabel("first"))
    surface.add_component(BindableLabel("second"))
    surface.add_component(BindableAction("unnamed"))

    assert tracker.registry.widgets == {}
    assert tracker.registry.actions == {}
    assert any("Skipping unnamed" in r.getMessage() for r in caplog.records)


def test_path_of_module_is_the_defining_directory(q_app, surface):
    assert surface.path_of_module(DesignedForm) == Path(__file__).resolve().parent


def test_language_paths_are_discovered_relative_to_the_form(q_app, tmp_path, tracker, surface, language_table):
    base = tmp_path / "project" / "pkg" / "forms"
    base.mkdir(parents=True)
    shared = tmp_path / "FormBind" / "locales"
    local = tmp_path / "project" / "locales"
    for directory in (shared, local):
        directory.mkdir(parents=True)
    (shared / "en_US.json").write_text(json.dumps({"shared_key": "Shared"}), encoding="utf-8")
    (local / "en_US.json").write_text(json.dumps({"local_key": "Local"}), encoding="utf-8")
    tracker.attach(surface)

    with patch.object(surface, "path_of_module", return_value=base):
        added = tracker.discover_language_paths(QWidget, language_table)

    assert [p.resolve() for p in added] == [shared.resolve(), local.resolve()]
    assert language_table.resolve("shared_key") == (True, "Shared")
    assert language_table.resolve("local_key") == (True, "Local")


def test_discovery_without_surface_finds_nothing(q_app, tracker, language_table):
    assert tracker.discover_language_paths(QWidget, language_table) == []


def test_first_paint_runs_once(q_app, surface, language_table, notice):
    binder = MagicMock()
    tracker = DesignTimeTracker(binder)
    tracker.attach(surface)
    form = DesignedForm()

    assert tracker.on_first_paint(form, language_table) is True
    assert tracker.on_first_paint(form, language_table) is False
    binder.apply_form.assert_called_once_with(form, tracker.registry)


def test_first_paint_failure_is_shown_as_notice(q_app, surface, language_table, notice):
    binder = MagicMock()
    binder.apply_form.side_effect = RuntimeError("broken designer")
    tracker = DesignTimeTracker(binder)
    tracker.attach(surface)
    form = DesignedForm()

    assert tracker.on_first_paint(form, language_table) is True

    notice.assert_called_once()
    assert "broken designer" in notice.call_args.args[1]


def test_widget_added_after_construction_joins_full_pass(q_app, tracker, surface, binder, notice):
    tracker.attach(surface)
    form = QWidget()
    late_label = BindableLabel("old", form, language_key="greeting")
    late_label.setObjectName("late_label")
    surface.add_component(late_label)

    binder.apply_form(form, tracker.registry)

    assert late_label.text() == "Hello"
