"""Tests for versioned_list.history."""

import pytest

from versioned_list import create
from versioned_list.errors import HistoryIndexError, ParseError
from versioned_list.models import Checkpoint, HistoryEntry


def _with_history(*pushes):
    vl = create([1, 2, 3])
    for value in pushes:
        vl.push(value)
    return vl


class TestHistoryRecord:
    def test_initial_entry(self):
        vl = create([1, 2, 3])
        assert len(vl.history) == 1
        assert vl.history.cursor == 0
        assert vl.history.entries == [HistoryEntry(items=[1, 2, 3])]

    def test_push_records_entry(self):
        vl = create([1, 2, 3])
        vl.push(4)
        assert vl.get_items() == [1, 2, 3, 4]
        assert len(vl.history) == 2
        assert vl.history.cursor == 1

    def test_rejected_push_still_records(self):
        vl = create([1, 2, 3], lambda x: x > 2)
        vl.push(4)
        vl.push(1)
        assert vl.get_items() == [1, 2, 3, 4]
        assert len(vl.history) == 3
        assert vl.history.cursor == 2

    def test_every_mutation_records(self):
        vl = create([3, 1, 2])
        vl.pop()
        vl.shift()
        vl.unshift(0)
        vl.splice(0, 1)
        vl.reverse()
        vl.sort()
        vl.fill(9)
        vl.copy_within(0, 0)
        vl.batch_push([5])
        assert len(vl.history) == 10

    def test_snapshot_is_independent(self):
        vl = create([1])
        vl.push(2)
        vl.push(3)
        assert vl.history.entries[1].items == [1, 2]

    def test_history_limit_config(self):
        vl = create([], history_limit=3)
        for value in range(5):
            vl.push(value)
        assert len(vl.history) == 3
        assert vl.history.cursor == 2
        assert [e.items for e in vl.history.entries] == [
            [0, 1, 2],
            [0, 1, 2, 3],
            [0, 1, 2, 3, 4],
        ]

    def test_invalid_history_limit(self):
        with pytest.raises(ValueError):
            create([], history_limit=0)


class TestHistoryUndoRedo:
    def test_undo_single(self):
        vl = _with_history(4, 5)
        assert vl.history.undo() == [1, 2, 3, 4]
        assert vl.get_items() == [1, 2, 3, 4]
        assert vl.history.cursor == 1

    def test_undo_redo_inverse(self):
        vl = create([1, 2, 3])
        vl.push(4)
        vl.pop()
        vl.unshift(0)
        vl.reverse()
        final = vl.get_items()
        vl.history.undo(4)
        assert vl.get_items() == [1, 2, 3]
        vl.history.redo(4)
        assert vl.get_items() == final

    def test_undo_more_than_available(self):
        vl = _with_history(4)
        vl.history.undo(5)
        assert vl.history.cursor == 0
        assert vl.get_items() == [1, 2, 3]

    def test_redo_on_nothing(self):
        vl = _with_history(4)
        assert vl.history.redo() == [1, 2, 3, 4]
        assert vl.history.cursor == 1

    def test_mutation_truncates_redo_tail(self):
        vl = _with_history(4, 5, 6)
        vl.history.undo(2)
        vl.push(7)
        assert len(vl.history) == 3
        before = vl.get_items()
        vl.history.redo()
        assert vl.get_items() == before == [1, 2, 3, 4, 7]

    def test_undo_returns_copy(self):
        vl = _with_history(4)
        items = vl.history.undo()
        items.append(99)
        assert vl.get_items() == [1, 2, 3]
        assert vl.history.entries[0].items == [1, 2, 3]

    def test_mutation_after_undo_does_not_touch_snapshot(self):
        vl = _with_history(4)
        vl.history.undo()
        vl.push(10)
        vl.history.go_to(0)
        assert vl.get_items() == [1, 2, 3]


class TestHistoryNavigation:
    def test_previous_and_next(self):
        vl = _with_history(4, 5)
        assert vl.history.previous() == [1, 2, 3, 4]
        assert vl.history.cursor == 1
        assert vl.history.next() == [1, 2, 3, 4, 5]
        assert vl.history.cursor == 2

    def test_previous_at_start(self):
        vl = create([1])
        assert vl.history.previous() == [1]
        assert vl.history.cursor == 0

    def test_next_at_end(self):
        vl = _with_history(4)
        assert vl.history.next() == [1, 2, 3, 4]
        assert vl.history.cursor == 1

    def test_previous_at_start_keeps_unrecorded_items(self):
        vl = create([1, 2])
        vl.deserialize("[9]")
        events = []
        vl.history.subscribe(lambda event, state: events.append((event, state)))
        assert vl.history.previous() == [9]
        assert vl.get_items() == [9]
        assert vl.history.cursor == 0
        assert events == [("previous", [9])]

    def test_next_at_end_keeps_unrecorded_items(self):
        vl = create([1])
        vl.push(2)
        vl.deserialize("[7, 7]")
        assert vl.history.next() == [7, 7]
        assert vl.get_items() == [7, 7]
        assert vl.history.cursor == 1
        assert vl.history.has_changes()

    def test_jump(self):
        vl = _with_history(4, 5, 6)
        assert vl.history.jump(-2) == [1, 2, 3, 4]
        assert vl.history.cursor == 1
        assert vl.history.jump(1) == [1, 2, 3, 4, 5]

    def test_jump_out_of_range(self):
        vl = _with_history(4)
        with pytest.raises(HistoryIndexError) as info:
            vl.history.jump(5)
        assert info.value.index == 6
        assert info.value.length == 2
        assert vl.history.cursor == 1
        assert vl.get_items() == [1, 2, 3, 4]

    def test_go_to(self):
        vl = _with_history(4, 5)
        assert vl.history.go_to(0) == [1, 2, 3]
        assert vl.history.cursor == 0

    def test_go_to_negative_is_out_of_range(self):
        vl = _with_history(4)
        with pytest.raises(IndexError):
            vl.history.go_to(-1)
        assert vl.history.cursor == 1

    def test_go_to_past_end(self):
        vl = _with_history(4)
        with pytest.raises(HistoryIndexError):
            vl.history.go_to(2)


class TestHistoryMaintenance:
    def test_clean_keeps_live_items(self):
        vl = _with_history(4, 5)
        vl.history.undo()
        vl.history.clean()
        assert len(vl.history) == 1
        assert vl.history.cursor == 0
        assert vl.history.entries[0].items == [1, 2, 3, 4]
        assert not vl.history.has_changes()

    def test_limit_keeps_most_recent(self):
        vl = _with_history(4, 5, 6, 7)
        vl.history.limit(2)
        assert len(vl.history) == 2
        assert vl.history.cursor == 1
        assert [e.items for e in vl.history.entries] == [
            [1, 2, 3, 4, 5, 6],
            [1, 2, 3, 4, 5, 6, 7],
        ]

    def test_limit_moves_live_items_to_last(self):
        vl = _with_history(4, 5, 6)
        vl.history.undo(3)
        vl.history.limit(2)
        assert vl.history.cursor == 1
        assert vl.get_items() == [1, 2, 3, 4, 5, 6]

    def test_limit_larger_than_history(self):
        vl = _with_history(4)
        events = []
        vl.history.subscribe(lambda event, state: events.append(event))
        vl.history.limit(10)
        assert len(vl.history) == 2
        assert events == []

    def test_limit_zero_keeps_one_entry(self):
        vl = _with_history(4, 5)
        vl.history.limit(0)
        assert len(vl.history) == 1
        assert vl.history.cursor == 0

    def test_limit_negative(self):
        vl = _with_history(4)
        with pytest.raises(ValueError):
            vl.history.limit(-1)

    def test_limit_drops_checkpoints(self):
        vl = create([1])
        vl.history.save_checkpoint("old")
        vl.push(2)
        vl.history.limit(1)
        vl.history.undo(5)
        assert vl.history.list_checkpoints() == []


class TestHistoryCheckpoints:
    def test_save_and_list(self):
        vl = _with_history(4)
        vl.history.save_checkpoint("a")
        assert vl.history.list_checkpoints() == [Checkpoint(items=[1, 2, 3, 4], label="a")]

    def test_checkpoint_scoped_to_entry(self):
        vl = _with_history(4)
        vl.history.save_checkpoint("a")
        vl.push(5)
        assert vl.history.list_checkpoints() == []
        vl.history.go_to(0)
        assert vl.history.list_checkpoints() == []
        vl.history.go_to(1)
        assert vl.history.list_checkpoints() == [Checkpoint(items=[1, 2, 3, 4], label="a")]

    def test_restore_checkpoint(self):
        vl = _with_history(4)
        vl.history.save_checkpoint("a")
        vl.deserialize("[0]")
        assert vl.history.restore_checkpoint("a") is True
        assert vl.get_items() == [1, 2, 3, 4]

    def test_restore_does_not_record(self):
        vl = create([1, 2])
        vl.history.save_checkpoint("a")
        vl.push(3)
        vl.history.undo()
        assert vl.history.restore_checkpoint("a") is True
        assert len(vl.history) == 2
        assert vl.history.cursor == 0

    def test_restore_unknown_label(self):
        vl = _with_history(4)
        events = []
        vl.history.subscribe(lambda event, state: events.append(event))
        assert vl.history.restore_checkpoint("nope") is False
        assert vl.get_items() == [1, 2, 3, 4]
        assert events == []

    def test_remove_first_match(self):
        vl = create([1])
        vl.history.save_checkpoint("dup")
        vl.replace([2])
        vl.history.save_checkpoint("dup")
        assert vl.history.remove_checkpoint("dup") is True
        assert vl.history.list_checkpoints() == [Checkpoint(items=[2], label="dup")]

    def test_remove_unknown_label(self):
        vl = create([1])
        assert vl.history.remove_checkpoint("nope") is False

    def test_unlabelled_checkpoint(self):
        vl = create([1])
        vl.history.save_checkpoint()
        assert vl.history.list_checkpoints() == [Checkpoint(items=[1], label=None)]

    def test_checkpoint_invalidated_by_truncation(self):
        vl = _with_history(4)
        vl.history.save_checkpoint("v1")
        vl.history.undo()
        vl.push(9)
        vl.history.go_to(1)
        assert vl.history.list_checkpoints() == []

    def test_list_is_a_copy(self):
        vl = create([1])
        vl.history.save_checkpoint("a")
        vl.history.list_checkpoints().clear()
        assert len(vl.history.list_checkpoints()) == 1


class TestHistoryHasChanges:
    def test_no_changes_after_mutation(self):
        vl = _with_history(4)
        assert not vl.history.has_changes()

    def test_changed_by_restore(self):
        vl = create([1, 2])
        vl.deserialize("[5, 6]")
        vl.history.save_checkpoint("a")
        vl.history.undo()
        vl.history.redo()
        assert not vl.history.has_changes()
        vl.history.restore_checkpoint("a")
        assert vl.history.has_changes()
        assert vl.get_items() == [5, 6]

    def test_length_difference_counts(self):
        vl = create([1, 2, 3])
        vl.replace([1, 2])
        assert vl.history.has_changes()

    def test_equal_values_count_as_unchanged(self):
        vl = create([[1], [2]])
        vl.replace([[1], [2]])
        assert not vl.history.has_changes()


class TestHistoryImportExport:
    def test_json_shape(self):
        vl = create([1])
        vl.history.save_checkpoint("a")
        assert vl.history.to_json() == (
            '[{"items":[1],"checkpoints":[{"items":[1],"label":"a"}]}]'
        )

    def test_round_trip(self):
        vl = _with_history(4, 5)
        vl.history.save_checkpoint("a")
        exported = vl.history.to_json()
        entries = vl.history.entries

        other = create([])
        other.history.import_json(exported)
        assert other.history.entries == entries
        assert other.history.cursor == vl.history.cursor
        assert other.get_items() == [1, 2, 3, 4, 5]

    def test_import_accepts_missing_optional_fields(self):
        vl = create([])
        vl.history.import_json('[{"items": [1]}, {"items": [2], "checkpoints": [{"items": [2]}]}]')
        assert vl.history.cursor == 1
        assert vl.history.list_checkpoints() == [Checkpoint(items=[2], label=None)]

    @pytest.mark.parametrize(
        "text",
        [
            "not json",
            "{}",
            "[]",
            "[1, 2]",
            '[{"checkpoints": []}]',
            '[{"items": 5}]',
            '[{"items": [], "checkpoints": [{"label": 3, "items": []}]}]',
        ],
    )
    def test_import_rejects_bad_shapes(self, text):
        vl = _with_history(4)
        with pytest.raises(ParseError) as info:
            vl.history.import_json(text)
        assert info.value.raw == text
        assert len(vl.history) == 2
        assert vl.get_items() == [1, 2, 3, 4]

    def test_to_csv_flattens_entries_and_checkpoints(self):
        vl = create([1, [2, [3]]])
        vl.history.save_checkpoint("a")
        vl.push(4)
        assert vl.history.to_csv() == "1,2,3,1,2,3,1,2,3,4"

    def test_to_csv_delimiter(self):
        vl = create(["a", None])
        assert vl.history.to_csv(";") == "a;"
