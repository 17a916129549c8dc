"""
Unit tests for the BindableForm lifecycle: first show, accepted close, design-time site
and language switches.
"""
from unittest.mock import patch

import pytest
from PyQt6.QtCore import Qt

from formbind.constants.config import OutputFormat
from formbind.core.design_tracker import DesignSurface
from formbind.utils.components import BindableCheckBox, BindableLabel, EnumComboBox
from formbind.views.form import BindableForm


class ProfileForm(BindableForm):
    language_key = "form_title"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.greeting_label = BindableLabel("old", self, language_key="greeting")
        self.sound_checkbox = BindableCheckBox(
            "old", self, language_key="btnSave", section_name="Core", property_name="PlaySound")
        self.format_combo = EnumComboBox(
            self, language_key="combo_format", section_name="Core", property_name="OutputFormat")


class ManualLanguageForm(ProfileForm):
    manual_language_apply = True


class ManualStoreForm(ProfileForm):
    manual_store_fields = True


@pytest.fixture
def notice():
    with patch("formbind.core.language_binder.show_design_notice") as binder_notice, \
            patch("formbind.core.design_tracker.show_design_notice"):
        yield binder_notice


@pytest.fixture
def make_form(q_app, language_table, config_store):
    forms = []

    def factory(form_type=ProfileForm):
        form = form_type(language_table=language_table, config_store=config_store)
        forms.append(form)
        return form

    yield factory
    for form in forms:
        form.dispose()
        form.deleteLater()


def test_first_show_localizes_then_fills(make_form, config_store):
    config_store.get_section("Core")["PlaySound"].value = True
    config_store.get_section("Core")["OutputFormat"].value = OutputFormat.BMP
    form = make_form()

    form.show()

    assert form.windowTitle() == "Test Form"
    assert form.greeting_label.text() == "Hello"
    assert form.sound_checkbox.text() == "Save"
    assert form.sound_checkbox.isChecked() is True
    assert form.format_combo.get_selected_enum() is OutputFormat.BMP
    assert form.format_combo.currentText() == "Bitmap image"


def test_later_shows_do_not_refill(make_form, config_store):
    form = make_form()
    form.show()
    form.hide()
    config_store.get_section("Core")["PlaySound"].value = True

    form.show()

    assert form.sound_checkbox.isChecked() is False


def test_manual_language_apply_still_fills(make_form, config_store):
    config_store.get_section("Core")["PlaySound"].value = True
    form = make_form(ManualLanguageForm)

    form.show()

    assert form.greeting_label.text() == "old"
    assert form.sound_checkbox.isChecked() is True


def test_accept_stores_and_persists(make_form, config_store):
    form = make_form()
    form.show()
    form.sound_checkbox.setChecked(True)
    form.format_combo.set_value(OutputFormat.GIF)

    with patch.object(config_store, "save") as save:
        form.accept()

    save.assert_called_once_with()
    assert config_store.get_section("Core")["PlaySound"].value is True
    assert config_store.get_section("Core")["OutputFormat"].value is OutputFormat.GIF


def test_reject_does_not_store(make_form, config_store):
    form = make_form()
    form.show()
    form.sound_checkbox.setChecked(True)

    with patch.object(config_store, "save") as save:
        form.reject()

    save.assert_not_called()
    assert config_store.get_section("Core")["PlaySound"].value is False


def test_manual_store_skips_store_on_accept(make_form, config_store):
    form = make_form(ManualStoreForm)
    form.show()
    form.sound_checkbox.setChecked(True)

    with patch.object(config_store, "save") as save:
        form.accept()

    save.assert_not_called()
    assert config_store.get_section("Core")["PlaySound"].value is False


def test_site_switches_design_mode(make_form):
    form = make_form()
    surface = DesignSurface()
    assert form.design_mode is False

    form.set_site(surface)
    assert form.design_mode is True
    assert form.design_tracker.surface is surface
    assert form.language_binder.design_mode is True

    form.set_site(None)
    assert form.design_mode is False
    assert form.design_tracker.surface is None
    assert form.language_binder.design_mode is False


def test_adding_form_to_surface_sites_it(make_form, notice):
    form = make_form()
    surface = DesignSurface()

    surface.add_component(form)

    assert form.site is surface
    assert form.design_mode is True


def test_design_mode_show_localizes_without_filling(make_form, config_store, notice):
    config_store.get_section("Core")["PlaySound"].value = True
    form = make_form()
    form.set_site(DesignSurface())

    form.show()

    assert form.greeting_label.text() == "Hello"
    assert form.sound_checkbox.isChecked() is False


def test_design_mode_accept_does_not_store(make_form, config_store, notice):
    form = make_form()
    form.set_site(DesignSurface())
    form.show()
    form.sound_checkbox.setChecked(True)

    with patch.object(config_store, "save") as save:
        form.accept()

    save.assert_not_called()


def test_designer_initialization_runs_once(make_form, notice):
    form = make_form()
    form.set_site(DesignSurface())

    assert form.initialize_for_designer() is True
    assert form.greeting_label.text() == "Hello"
    assert form.initialize_for_designer() is False


def test_language_key_edit_on_surface_updates_widget(make_form, notice):
    form = make_form()
    surface = DesignSurface()
    form.set_site(surface)
    surface.add_component(form.greeting_label)

    surface.change_property(form.greeting_label, "language_key", "group_general")

    assert form.greeting_label.text() == "General"


def test_language_switch_keeps_enum_selection(make_form, language_table):
    form = make_form()
    form.show()
    form.format_combo.set_value(OutputFormat.JPG)

    language_table.set_language("de_DE")

    assert form.windowTitle() == "Testformular"
    assert form.greeting_label.text() == "Hallo"
    assert form.format_combo.get_selected_enum() is OutputFormat.JPG
    assert form.format_combo.currentText() == "JPEG-Bild"


def test_dispose_drops_language_subscription(make_form, language_table):
    form = make_form()
    form.show()
    form.set_site(DesignSurface())
    form.set_site(None)

    form.dispose()
    form.dispose()
    language_table.set_language("de_DE")

    assert form.greeting_label.text() == "Hello"
    assert form.design_tracker.surface is None


def test_close_with_delete_on_close_disposes(make_form):
    form = make_form()
    form.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose)
    form.show()

    with patch.object(form, "dispose") as dispose:
        form.close()

    dispose.assert_called_once_with()


def test_default_collaborators_are_the_process_singletons(q_app, language_table, config_store):
    with patch("formbind.views.form.get_language_table", return_value=language_table), \
            patch("formbind.views.form.get_config_store", return_value=config_store):
        form = BindableForm()

    assert form.language_table is language_table
    assert form.config_store is config_store
    form.dispose()
