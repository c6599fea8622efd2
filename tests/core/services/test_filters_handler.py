"""
Tests for the FiltersHandler service.
"""
import pytest
from unittest.mock import patch

from tablefilter.config import ConfigManager
from tablefilter.core.choices import CustomChoice
from tablefilter.core.editors import ChoiceFilterEditor, EditorKind, TextFilterEditor
from tablefilter.core.filter import UserFilter
from tablefilter.core.services import FiltersHandler


def names(view):
    return view.visible_values(0)


@pytest.fixture
def handler(people_source, people_view):
    handler = FiltersHandler(people_source, people_view)
    yield handler
    handler.dispose()


class TestEditors:
    """Tests for editor creation and kinds."""

    def test_one_text_editor_per_column(self, handler, people_source):
        assert len(handler.editors) == people_source.column_count()
        assert all(isinstance(editor, TextFilterEditor) for editor in handler.editors)
        assert handler.editor(1).column.name == "age"
        assert handler.editor(1).column.semantic_type is int

    def test_default_kind_from_config(self, people_source, people_view):
        config = ConfigManager()
        config.set('EDITORS', 'DEFAULT_KIND', 'choice')
        handler = FiltersHandler(people_source, people_view, config=config)
        assert all(isinstance(editor, ChoiceFilterEditor) for editor in handler.editors)

    def test_history_size_from_config(self, people_source, people_view):
        config = ConfigManager()
        config.set('EDITORS', 'MAX_HISTORY', 1)
        handler = FiltersHandler(people_source, people_view, config=config)
        assert handler.editor(1).max_history == 1
        handler.dispose()

    def test_editors_filter_the_view(self, handler, people_view):
        handler.editor(1).set_text("> 25")
        handler.editor(2).set_text("Paris")
        assert names(people_view) == ["Alice", "Carol"]

    def test_invalid_text_keeps_view_filtered(self, handler, people_view):
        handler.editor(1).set_text("> 30")
        passes = people_view.filter_passes
        error = handler.editor(1).set_text("> 3x")
        assert error is not None
        assert people_view.filter_passes == passes
        assert names(people_view) == ["Alice", "Carol"]

    def test_set_editor_kind(self, handler, people_view):
        handler.editor(2).set_text("Paris")
        editor = handler.set_editor_kind(2, EditorKind.CHOICE)
        assert isinstance(editor, ChoiceFilterEditor)
        assert handler.editor_kind(2) is EditorKind.CHOICE
        # the text filter went away with its editor
        assert len(names(people_view)) == 5
        editor.select(CustomChoice.EMPTY)
        assert names(people_view) == ["Dave"]

    def test_set_editor_kind_filters_once(self, handler, people_view):
        handler.editor(2).set_text("Paris")
        passes = people_view.filter_passes
        handler.set_editor_kind(2, EditorKind.CHOICE)
        assert people_view.filter_passes == passes + 1

    def test_same_kind_keeps_editor(self, handler):
        editor = handler.editor(0)
        assert handler.set_editor_kind(0, EditorKind.TEXT) is editor

    def test_custom_kind_rejected(self, handler):
        with pytest.raises(ValueError):
            handler.set_editor_kind(0, EditorKind.CUSTOM)

    def test_unknown_column(self, handler):
        with pytest.raises(KeyError):
            handler.set_editor_kind(9, EditorKind.CHOICE)

    def test_ignore_case(self, handler, people_view):
        handler.editor(0).set_text("ali*")
        assert names(people_view) == []
        handler.set_ignore_case(True)
        assert names(people_view) == ["Alice"]

    def test_clear_filters(self, handler, people_view):
        handler.editor(0).set_text("A*")
        handler.editor(1).set_text("> 30")
        handler.clear_filters()
        assert len(names(people_view)) == 5

    def test_auto_selection(self, handler, people_view):
        handler.set_auto_selection(True)
        handler.editor(0).set_text("Bob")
        assert people_view.selected_rows == [1]


class TestUserFilters:
    """Tests for add_filter / remove_filter."""

    def test_user_filter_applies_immediately(self, handler, people_view):
        adults = UserFilter(lambda record: record.value_at(1) >= 30, name="30+")
        handler.add_filter(adults)
        assert names(people_view) == ["Alice", "Carol"]
        assert handler.user_filters == (adults,)

    def test_user_filter_combines_with_editors(self, handler, people_view):
        handler.add_filter(UserFilter(lambda record: record.value_at(1) >= 30))
        handler.editor(2).set_text("Paris")
        handler.editor(0).set_text("C*")
        assert names(people_view) == ["Carol"]

    def test_disable_and_remove(self, handler, people_view):
        user = UserFilter(lambda record: record.value_at(1) >= 30)
        handler.add_filter(user)
        user.set_enabled(False)
        assert len(names(people_view)) == 5
        user.set_enabled(True)
        handler.remove_filter(user)
        assert len(names(people_view)) == 5


class TestDataSourceChanges:
    """Tests for the reaction to data source changes."""

    def test_inserted_rows_extend_choices(self, handler, people_source):
        editor = handler.set_editor_kind(2, EditorKind.CHOICE)
        editor.choices()
        with patch.object(editor.extractor, 'extract_all', wraps=editor.extractor.extract_all) as spy:
            people_source.append_rows([["Zoe", 22, "Brest", None]])
            spy.assert_not_called()
        assert "Brest" in editor.choices()

    def test_inserted_rows_are_filtered(self, handler, people_source, people_view):
        handler.editor(1).set_text(">= 40")
        people_source.append_rows([["Zoe", 52, "Brest", None]])
        assert names(people_view) == ["Carol", "Zoe"]

    def test_deleted_rows_invalidate_choices(self, handler, people_source):
        editor = handler.set_editor_kind(2, EditorKind.CHOICE)
        editor.choices()
        people_source.remove_rows(1)
        assert "Lyon" not in editor.choices()

    def test_updated_rows_invalidate_their_column(self, handler, people_source):
        city = handler.set_editor_kind(2, EditorKind.CHOICE)
        name = handler.set_editor_kind(0, EditorKind.CHOICE)
        city.choices()
        name.choices()
        people_source.set_value(1, 2, "Lille")
        assert not city.extractor.is_valid
        assert name.extractor.is_valid
        assert "Lille" in city.choices()

    def test_structure_change_rebuilds_editors(self, handler, people_source, people_view):
        handler.set_editor_kind(0, EditorKind.CHOICE)
        old_editors = handler.editors
        handler.editor(1).set_text("> 30")
        people_source.reset(["name", "score"], [str, float], [["Ann", 1.5], ["Ben", 2.5]])
        assert handler.editors[0] is not old_editors[0]
        assert isinstance(handler.editor(0), ChoiceFilterEditor)
        assert handler.editor(1).column.semantic_type is float
        assert len(handler.editors) == 2
        # previous filters are gone
        assert names(people_view) == ["Ann", "Ben"]
        assert all(editor.is_disposed for editor in old_editors)



class TestAdaptiveChoices:
    """Tests for choice editors narrowed by the other filters."""

    def test_choices_follow_text_filters(self, handler):
        handler.set_adaptive_choices(True)
        city = handler.set_editor_kind(2, EditorKind.CHOICE)
        assert city.is_adaptive
        handler.editor(1).set_text("27")
        assert city.choices() == ["Lyon", "Nantes"]
        handler.set_adaptive_choices(False)
        assert not city.is_adaptive
        assert city.choices() == [CustomChoice.EMPTY, "Lyon", "Nantes", "Paris"]

    def test_adaptive_from_config(self, people_source, people_view):
        config = ConfigManager()
        config.set('CHOICES', 'ADAPTIVE', True)
        config.set('EDITORS', 'DEFAULT_KIND', 'choice')
        handler = FiltersHandler(people_source, people_view, config=config)
        handler.editor(2).select("Paris")
        assert handler.editor(0).choices() == ["Alice", "Carol"]
        assert handler.editor(2).choices() == [CustomChoice.EMPTY, "Lyon", "Nantes", "Paris"]
        assert names(people_view) == ["Alice", "Carol"]
        handler.dispose()

    def test_appended_rows_respect_other_filters(self, handler, people_source):
        handler.set_adaptive_choices(True)
        city = handler.set_editor_kind(2, EditorKind.CHOICE)
        handler.editor(1).set_text("> 30")
        assert city.choices() == ["Paris"]
        people_source.append_rows([["Zoe", 22, "Brest", None], ["Yann", 60, "Nice", None]])
        assert city.choices() == ["Nice", "Paris"]

class TestDisposal:
    """Tests for dispose."""

    def test_dispose_releases_view_and_source(self, people_source, people_view):
        handler = FiltersHandler(people_source, people_view)
        handler.editor(0).set_text("Bob")
        handler.dispose()
        assert len(names(people_view)) == 5
        assert handler.table_filter.view is None
        people_source.reset(["x"], [str], [])
        assert len(handler.editors) == 0

    def test_dispose_twice(self, people_source, people_view):
        handler = FiltersHandler(people_source, people_view)
        handler.dispose()
        handler.dispose()
