"""
Tests for the TableFilter composition root.
"""
import unittest

from tablefilter.adapters.memory import InMemoryDataSource, InMemoryTableView
from tablefilter.core.domain import ColumnDescriptor, Leaf
from tablefilter.core.filter import (
    ExpressionParser,
    NotificationState,
    ObservablePredicate,
    TableFilter,
)
from tablefilter.core.ports import FilterableViewPort, SequenceRecord


def equals(value, index=0):
    return Leaf(lambda record: record.value_at(index) == value, f"#{index} = {value}")


class RecordingView(FilterableViewPort):
    """View port remembering every predicate it receives."""

    def __init__(self, filterable=True, visible=0):
        super().__init__()
        self.filterable = filterable
        self.visible = visible
        self.predicates = []
        self.selections = 0

    @property
    def supports_filtering(self):
        return self.filterable

    def set_predicate(self, predicate):
        self.predicates.append(predicate)
        self.fire_filtered()

    def visible_row_count(self):
        return self.visible

    def select_sole_row(self):
        self.selections += 1


class TestMembership(unittest.TestCase):
    """Tests for add_member / remove_member."""

    def setUp(self):
        self.view = RecordingView()
        self.table_filter = TableFilter(self.view)
        self.view.predicates.clear()

    def test_add_member_does_not_notify(self):
        member = ObservablePredicate(equals(1))
        self.table_filter.add_member(member)
        self.assertEqual(self.view.predicates, [])
        self.assertIs(self.table_filter.combined_predicate, member.current_predicate)

    def test_add_member_twice_is_noop(self):
        member = ObservablePredicate()
        self.table_filter.add_member(member)
        self.table_filter.add_member(member)
        self.assertEqual(len(self.table_filter), 1)
        self.assertEqual(member.observers, (self.table_filter,))

    def test_member_publish_delivers(self):
        member = ObservablePredicate()
        self.table_filter.add_member(member)
        predicate = equals(1)
        member.publish(predicate)
        self.assertEqual(self.view.predicates, [predicate])

    def test_remove_filtering_member_notifies(self):
        member = ObservablePredicate(equals(1))
        self.table_filter.add_member(member)
        self.table_filter.remove_member(member)
        self.assertEqual(self.view.predicates, [None])
        self.assertEqual(member.observers, ())

    def test_remove_idle_member_is_silent(self):
        member = ObservablePredicate()
        self.table_filter.add_member(member)
        self.table_filter.remove_member(member)
        self.assertEqual(self.view.predicates, [])

    def test_detached_member_is_removed(self):
        member = ObservablePredicate()
        self.table_filter.add_member(member)
        member.publish(equals(1))
        member.detach()
        self.assertNotIn(member, self.table_filter)
        self.assertEqual(self.view.predicates[-1], None)

    def test_combined_predicate_is_and_of_members(self):
        first, second, idle = ObservablePredicate(), ObservablePredicate(), ObservablePredicate()
        for member in (first, second, idle):
            self.table_filter.add_member(member)
        first.publish(equals(1, 0))
        second.publish(equals(2, 1))
        combined = self.view.predicates[-1]
        self.assertTrue(combined.evaluate(SequenceRecord([1, 2])))
        self.assertFalse(combined.evaluate(SequenceRecord([1, 3])))

    def test_publishes_to_own_observers(self):
        received = []
        self.table_filter.subscribe(lambda observable, predicate: received.append(predicate))
        member = ObservablePredicate()
        self.table_filter.add_member(member)
        predicate = equals(1)
        member.publish(predicate)
        self.assertEqual(received, [predicate])
        self.assertIs(self.table_filter.current_predicate, predicate)

    def test_combined_predicate_without_member(self):
        first, second = ObservablePredicate(), ObservablePredicate()
        for member in (first, second):
            self.table_filter.add_member(member)
        first.publish(equals(1, 0))
        second.publish(equals(2, 1))
        self.assertIs(self.table_filter.combined_predicate_without(first), second.current_predicate)
        self.assertIsNone(TableFilter().combined_predicate_without(first))


class TestTwoEditors(unittest.TestCase):
    """Two parsed column filters on one TableFilter."""

    def test_records_must_match_both(self):
        parser = ExpressionParser()
        age = ObservablePredicate(name="age")
        name = ObservablePredicate(name="name")
        table_filter = TableFilter()
        table_filter.add_member(age)
        table_filter.add_member(name)

        age.publish(parser.parse("> 20", ColumnDescriptor(0, int, "age")))
        name.publish(parser.parse("~ *a*", ColumnDescriptor(1, str, "name")))

        combined = table_filter.combined_predicate
        # 'Anna' contains a lowercase 'a'
        self.assertTrue(combined.evaluate(SequenceRecord([25, "Anna"])))
        self.assertFalse(combined.evaluate(SequenceRecord([15, "Anna"])))


class TestSuspension(unittest.TestCase):
    """Tests for suspend / resume coalescing."""

    def setUp(self):
        self.view = RecordingView()
        self.table_filter = TableFilter(self.view)
        self.view.predicates.clear()
        self.members = [ObservablePredicate() for _ in range(3)]
        for member in self.members:
            self.table_filter.add_member(member)

    def test_three_updates_one_delivery(self):
        self.table_filter.suspend()
        for value, member in enumerate(self.members):
            member.publish(equals(value, value))
        self.assertEqual(self.view.predicates, [])
        self.table_filter.resume()
        self.assertEqual(len(self.view.predicates), 1)
        self.assertEqual(self.view.predicates[0], self.table_filter.combined_predicate)
        self.assertEqual(self.view.predicates[0].size(), 5)

    def test_state_transitions(self):
        self.assertEqual(self.table_filter.state, NotificationState.ACTIVE)
        self.table_filter.suspend()
        self.assertEqual(self.table_filter.state, NotificationState.SUSPENDED)
        self.members[0].publish(equals(1))
        self.assertEqual(self.table_filter.state, NotificationState.SUSPENDED_DIRTY)
        self.table_filter.resume()
        self.assertEqual(self.table_filter.state, NotificationState.ACTIVE)
        self.assertFalse(self.table_filter.has_pending_notification)

    def test_nested_suspension(self):
        self.table_filter.suspend()
        self.table_filter.suspend()
        self.members[0].publish(equals(1))
        self.table_filter.resume()
        self.assertEqual(self.view.predicates, [])
        self.table_filter.resume()
        self.assertEqual(len(self.view.predicates), 1)

    def test_resume_without_changes_is_silent(self):
        with self.table_filter.suspended():
            pass
        self.assertEqual(self.view.predicates, [])

    def test_context_manager(self):
        with self.table_filter.suspended():
            self.members[0].publish(equals(1))
            self.members[1].publish(equals(2))
        self.assertEqual(len(self.view.predicates), 1)

    def test_context_manager_resumes_on_error(self):
        with self.assertRaises(RuntimeError):
            with self.table_filter.suspended():
                self.members[0].publish(equals(1))
                raise RuntimeError("boom")
        self.assertEqual(self.table_filter.suspend_depth, 0)
        self.assertEqual(len(self.view.predicates), 1)

    def test_force_deliver_pending(self):
        self.table_filter.suspend()
        self.members[0].publish(equals(1))
        self.table_filter.force_deliver_pending()
        self.assertEqual(len(self.view.predicates), 1)
        self.assertEqual(self.table_filter.state, NotificationState.SUSPENDED)
        self.table_filter.resume()
        self.assertEqual(len(self.view.predicates), 1)

    def test_force_deliver_without_pending_is_silent(self):
        self.table_filter.force_deliver_pending()
        self.assertEqual(self.view.predicates, [])


class TestViews(unittest.TestCase):
    """Tests for attach_view and the degraded mode."""

    def test_attach_installs_combined_predicate(self):
        table_filter = TableFilter()
        member = ObservablePredicate(equals(1))
        table_filter.add_member(member)
        view = RecordingView()
        table_filter.attach_view(view)
        self.assertEqual(view.predicates, [member.current_predicate])

    def test_swap_clears_previous_view(self):
        old_view, new_view = RecordingView(), RecordingView()
        table_filter = TableFilter(old_view)
        member = ObservablePredicate()
        table_filter.add_member(member)
        member.publish(equals(1))
        table_filter.attach_view(new_view)
        self.assertIsNone(old_view.predicates[-1])
        self.assertEqual(new_view.predicates, [member.current_predicate])
        member.publish(equals(2))
        self.assertEqual(len(old_view.predicates), 3)

    def test_attach_while_suspended_defers(self):
        table_filter = TableFilter()
        view = RecordingView()
        table_filter.suspend()
        table_filter.attach_view(view)
        self.assertEqual(view.predicates, [])
        table_filter.resume()
        self.assertEqual(view.predicates, [None])

    def test_view_without_filtering_is_never_filtered(self):
        view = RecordingView(filterable=False)
        table_filter = TableFilter(view)
        member = ObservablePredicate()
        table_filter.add_member(member)
        member.publish(equals(1))
        self.assertEqual(view.predicates, [])
        self.assertFalse(table_filter.is_filtering)

    def test_detach_releases_everything(self):
        view = RecordingView()
        table_filter = TableFilter(view)
        member = ObservablePredicate(equals(1))
        table_filter.add_member(member)
        table_filter.detach()
        self.assertIsNone(table_filter.view)
        self.assertEqual(member.observers, ())
        self.assertIsNone(view.predicates[-1])


class TestAutoSelection(unittest.TestCase):
    """Tests for the auto selection of a sole visible row."""

    def test_selects_when_one_row_visible(self):
        view = RecordingView(visible=1)
        table_filter = TableFilter(view, auto_selection=True)
        view.selections = 0
        member = ObservablePredicate()
        table_filter.add_member(member)
        member.publish(equals(1))
        self.assertEqual(view.selections, 1)

    def test_no_selection_with_several_rows(self):
        view = RecordingView(visible=2)
        table_filter = TableFilter(view, auto_selection=True)
        member = ObservablePredicate()
        table_filter.add_member(member)
        member.publish(equals(1))
        self.assertEqual(view.selections, 0)

    def test_toggle(self):
        view = RecordingView(visible=1)
        table_filter = TableFilter(view)
        table_filter.set_auto_selection(True)
        view.fire_filtered()
        table_filter.set_auto_selection(False)
        view.fire_filtered()
        self.assertEqual(view.selections, 1)

    def test_in_memory_view(self):
        source = InMemoryDataSource(["name"], [str], [["Anna"], ["Bob"], ["Carl"]])
        view = InMemoryTableView(source)
        table_filter = TableFilter(view, auto_selection=True)
        member = ObservablePredicate()
        table_filter.add_member(member)
        member.publish(equals("Bob"))
        self.assertEqual(view.selected_rows, [1])

    def test_from_config(self):
        from tablefilter.config import ConfigManager
        config = ConfigManager()
        config.set('FILTER', 'AUTO_SELECTION', True)
        self.assertTrue(TableFilter.from_config(config).auto_selection)


if __name__ == '__main__':
    unittest.main()
