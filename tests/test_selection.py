"""
Tests for selection state and batch operations.
"""

import pytest

from desnote.note import EntityKind
from desnote.selection import (
    Selection, batch_delete, batch_move, batch_restore, batch_toggle_favorite, resolve_kind,
)
from tests.conftest import make_folder, make_note


@pytest.fixture
def universe():
    notes = (
        make_note('n1', folder_id='f1', updated_at=10),
        make_note('n2', is_pinned=True, updated_at=20),
        make_note('n3', updated_at=30),
    )
    folders = (
        make_folder('f1', name='Personal'),
        make_folder('f2', name='Work', is_pinned=True),
    )
    return notes, folders


class TestSelection:
    """Tests for the Selection object."""

    def test_toggle_adds_and_removes(self):
        """Should flip membership without touching the mode."""
        sel = Selection()
        sel.toggle('a')
        assert 'a' in sel
        assert sel.active is False

        sel.toggle('a')
        assert 'a' not in sel
        assert len(sel) == 0

    def test_select_and_enter(self):
        """Should select the item and enter selection mode in one step."""
        sel = Selection()
        sel.select_and_enter('a')
        assert sel.active is True
        assert sel.ids == {'a'}

    def test_exit_clears(self):
        """Should leave selection mode and clear the ids."""
        sel = Selection()
        sel.select_and_enter('a')
        sel.toggle('b')
        sel.exit()
        assert sel.active is False
        assert len(sel) == 0

    def test_select_all(self):
        """Should add every given id."""
        sel = Selection()
        sel.enter()
        sel.select_all(['a', 'b'])
        assert sel.snapshot() == frozenset({'a', 'b'})


class TestResolveKind:
    """Tests for resolve_kind."""

    def test_resolves_both_kinds(self, universe):
        """Should find notes and folders by id."""
        notes, folders = universe
        assert resolve_kind(notes, folders, 'n1') == EntityKind.NOTE
        assert resolve_kind(notes, folders, 'f2') == EntityKind.FOLDER
        assert resolve_kind(notes, folders, 'zzz') is None


class TestBatchMove:
    """Tests for batch_move."""

    def test_moves_selected_notes(self, universe):
        """Should refile selected notes and refresh their timestamp."""
        notes, _ = universe
        next_notes = batch_move(notes, {'n2', 'n3'}, 'f2', now=99)

        assert next_notes[0] == notes[0]
        assert next_notes[1].folder_id == 'f2' and next_notes[1].updated_at == 99
        assert next_notes[2].folder_id == 'f2'

    def test_move_to_root(self, universe):
        """Should clear the folder when the target is None."""
        notes, _ = universe
        next_notes = batch_move(notes, {'n1'}, None)
        assert next_notes[0].folder_id is None

    def test_folders_in_selection_ignored(self, universe):
        """Should skip folder ids; folders cannot be nested."""
        notes, _ = universe
        assert batch_move(notes, {'f1'}, 'f2') == notes


class TestBatchDelete:
    """Tests for batch_delete."""

    def test_soft_deletes_mixed_selection(self, universe):
        """Should trash notes and folders, spilling the folder's notes."""
        notes, folders = universe
        next_notes, next_folders = batch_delete(notes, folders, ['n3', 'f1', 'ghost'])

        assert next_notes[2].is_deleted is True
        assert next_notes[0].folder_id is None
        assert next_notes[0].is_deleted is False
        assert next_folders[0].is_deleted is True
        assert next_folders[1].is_deleted is False

    def test_permanent_in_trash(self, universe):
        """Should remove records when invoked from the trash."""
        notes, folders = universe
        notes, folders = batch_delete(notes, folders, ['n3', 'f2'])
        notes, folders = batch_delete(notes, folders, ['n3', 'f2'], in_trash=True)

        assert [n.id for n in notes] == ['n1', 'n2']
        assert [f.id for f in folders] == ['f1']

    def test_batch_restore(self, universe):
        """Should bring every selected entity back from the trash."""
        notes, folders = universe
        notes, folders = batch_delete(notes, folders, ['n3', 'f2'])
        notes, folders = batch_restore(notes, folders, ['n3', 'f2', 'ghost'])

        assert not any(n.is_deleted for n in notes)
        assert not any(f.is_deleted for f in folders)


class TestBatchToggleFavorite:
    """Tests for batch_toggle_favorite."""

    def test_mixed_selection_pins_all(self, universe):
        """Should pin everything when some are unpinned."""
        notes, folders = universe
        next_notes, next_folders = batch_toggle_favorite(notes, folders, {'n1', 'n2', 'f1', 'f2'})

        assert all(n.is_pinned for n in next_notes[:2])
        assert all(f.is_pinned for f in next_folders)
        assert next_notes[2].is_pinned is False

    def test_second_call_unpins_all(self, universe):
        """Should flip an all-pinned group to all unpinned."""
        notes, folders = universe
        ids = {'n1', 'n2', 'f1', 'f2'}
        notes, folders = batch_toggle_favorite(notes, folders, ids)
        notes, folders = batch_toggle_favorite(notes, folders, ids)

        assert not any(n.is_pinned for n in notes)
        assert not any(f.is_pinned for f in folders)

    def test_all_pinned_unpins(self, universe):
        """Should unpin when every selected entity is already pinned."""
        notes, folders = universe
        next_notes, next_folders = batch_toggle_favorite(notes, folders, {'n2', 'f2'})
        assert next_notes[1].is_pinned is False
        assert next_folders[1].is_pinned is False

    def test_unknown_ids_not_counted(self, universe):
        """Should ignore ids that resolve to nothing."""
        notes, folders = universe
        next_notes, _ = batch_toggle_favorite(notes, folders, {'n2', 'ghost'})
        assert next_notes[1].is_pinned is False

    def test_empty_resolution_is_noop(self, universe):
        """Should change nothing when no id resolves."""
        notes, folders = universe
        assert batch_toggle_favorite(notes, folders, {'ghost'}) == (notes, folders)

    def test_does_not_touch_updated_at(self, universe):
        """Should keep timestamps so pinning does not reorder views."""
        notes, folders = universe
        next_notes, _ = batch_toggle_favorite(notes, folders, {'n1'})
        assert next_notes[0].updated_at == 10
