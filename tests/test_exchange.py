"""
Tests for backup export and import.
"""

import json

import pytest

from desnote.exceptions import ImportValidationError
from desnote.exchange import dumps, export_envelope, export_filename, parse_envelope, write_backup
from desnote.schemas import notes_from_json
from tests.conftest import make_folder, make_note


@pytest.fixture
def universe():
    notes = (
        make_note('n1', title='Shopping', content='<p>milk</p>', folder_id='f1',
                  color='mint', shape='rounded-lg', icon='star', updated_at=100),
        make_note('n2', title='Trashed', is_deleted=True, is_pinned=True, updated_at=200),
    )
    folders = (
        make_folder('f1', name='Personal', color='rose', is_pinned=True),
        make_folder('f2', name='Old', is_deleted=True, icon='folder'),
    )
    return notes, folders


class TestExport:
    """Tests for export_envelope."""

    def test_envelope_shape(self, universe):
        """Should carry version, timestamp and camelCase records."""
        envelope = export_envelope(*universe, now=1700000000000)

        assert envelope['version'] == 1
        assert envelope['timestamp'] == 1700000000000
        assert envelope['notes'][0]['folderId'] == 'f1'
        assert envelope['notes'][1]['isDeleted'] is True
        assert envelope['folders'][0]['isPinned'] is True
        assert 'folder_id' not in envelope['notes'][0]

    def test_dumps_is_json(self, universe):
        """Should produce JSON text that decodes to the envelope."""
        envelope = export_envelope(*universe)
        assert json.loads(dumps(envelope)) == envelope

    def test_filename_has_date(self):
        """Should name the backup after the export day."""
        name = export_filename(now=1700000000000)
        assert name.startswith('desnote-backup-2023-11-')
        assert name.endswith('.json')

    def test_filename_uses_utc_day(self):
        """Should take the date from UTC, not local time."""
        # 2024-01-01T00:30:00Z
        assert export_filename(now=1704069000000) == 'desnote-backup-2024-01-01.json'


class TestImport:
    """Tests for parse_envelope."""

    def test_round_trip(self, universe):
        """Should restore an identical universe from an export."""
        notes, folders = universe
        restored = parse_envelope(dumps(export_envelope(notes, folders)))
        assert restored == (notes, folders)

    def test_round_trip_from_dict_and_bytes(self, universe):
        """Should accept decoded objects and raw bytes."""
        envelope = export_envelope(*universe)
        assert parse_envelope(envelope) == universe
        assert parse_envelope(dumps(envelope).encode('utf-8')) == universe

    def test_unknown_version_rejected(self, universe):
        """Should reject versions it does not know."""
        envelope = export_envelope(*universe)
        envelope['version'] = 99
        with pytest.raises(ImportValidationError) as exc_info:
            parse_envelope(envelope)
        assert exc_info.value.code == 'IMPORT_INVALID'
        assert 'version' in exc_info.value.message

    @pytest.mark.parametrize('version', [None, '1', True, [1]])
    def test_bad_version_values_rejected(self, universe, version):
        """Should reject missing or non-integer versions."""
        envelope = export_envelope(*universe)
        envelope['version'] = version
        with pytest.raises(ImportValidationError):
            parse_envelope(envelope)

    def test_legacy_unversioned_backup_rejected(self):
        """Should reject the old {notes, folders} backup without a version."""
        with pytest.raises(ImportValidationError):
            parse_envelope({'notes': [], 'folders': []})

    def test_invalid_json_rejected(self):
        """Should reject text that is not JSON."""
        with pytest.raises(ImportValidationError):
            parse_envelope('{"version": 1,')

    def test_non_object_rejected(self):
        """Should reject a JSON array at the top level."""
        with pytest.raises(ImportValidationError):
            parse_envelope('[]')

    def test_missing_collections_rejected(self):
        """Should reject an envelope without notes or folders."""
        with pytest.raises(ImportValidationError) as exc_info:
            parse_envelope({'version': 1, 'timestamp': 0, 'notes': []})
        assert exc_info.value.details

    def test_bad_record_rejected(self):
        """Should reject records of the wrong shape."""
        payload = {'version': 1, 'timestamp': 0, 'notes': [{'title': 'no id'}], 'folders': []}
        with pytest.raises(ImportValidationError):
            parse_envelope(payload)

    def test_duplicate_ids_rejected(self):
        """Should reject two notes sharing an id."""
        payload = {
            'version': 1, 'timestamp': 0,
            'notes': [{'id': 'a'}, {'id': 'a'}],
            'folders': [],
        }
        with pytest.raises(ImportValidationError):
            parse_envelope(payload)

    def test_sparse_records_get_defaults(self):
        """Should fill optional fields from the entity defaults."""
        payload = {
            'version': 1, 'timestamp': 0,
            'notes': [{'id': 'a', 'title': 'T', 'content': '', 'folderId': None, 'updatedAt': 42}],
            'folders': [{'id': 'f', 'name': 'F'}],
        }
        notes, folders = parse_envelope(payload)

        assert notes[0].is_pinned is False
        assert notes[0].is_deleted is False
        assert notes[0].created_at == 42
        assert folders[0].is_deleted is False

    def test_write_backup(self, tmp_path, universe):
        """Should write an importable file."""
        path = write_backup(tmp_path / 'b.json', *universe)
        assert parse_envelope(path.read_text(encoding='utf-8')) == universe


class TestSchemas:
    """Tests for decoding persisted collections."""

    def test_snake_case_keys_accepted(self):
        """Should accept Python field names as well as wire names."""
        notes = notes_from_json([{'id': 'a', 'folder_id': 'f', 'is_pinned': True}])
        assert notes[0].folder_id == 'f'
        assert notes[0].is_pinned is True

    def test_unknown_keys_ignored(self):
        """Should drop keys the model does not know."""
        notes = notes_from_json([{'id': 'a', 'extra': 1}])
        assert notes[0].id == 'a'
