# SPDX-License-Identifier: GPL-3.0-or-later

"""
Full-state export and import.

The envelope is a JSON object:

    {"version": 1, "timestamp": <epoch-ms>, "notes": [...], "folders": [...]}

Import replaces both collections wholesale. Any problem with the payload
raises ImportValidationError before anything is returned, so callers can
keep their current state untouched.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Sequence

from pydantic import ValidationError

from desnote.constants import EXPORT_VERSION, SUPPORTED_EXPORT_VERSIONS
from desnote.exceptions import ImportValidationError
from desnote.log import get_logger
from desnote.note import Folder, Note, now_ms
from desnote.schemas import (
    ExportEnvelope, folder_from_schema, folders_to_json, note_from_schema, notes_to_json,
)

logger = get_logger(__name__)


def export_envelope(
    notes: Sequence[Note],
    folders: Sequence[Folder],
    now: Optional[int] = None,
) -> dict[str, Any]:
    return {
        'version': EXPORT_VERSION,
        'timestamp': now_ms() if now is None else now,
        'notes': notes_to_json(notes),
        'folders': folders_to_json(folders),
    }


def dumps(envelope: dict[str, Any]) -> str:
    return json.dumps(envelope, indent=2, ensure_ascii=False)


def export_filename(now: Optional[int] = None) -> str:
    ts = now_ms() if now is None else now
    day = datetime.fromtimestamp(ts / 1000, tz=timezone.utc).strftime('%Y-%m-%d')
    return f'desnote-backup-{day}.json'


def parse_envelope(data: str | bytes | dict) -> tuple[tuple[Note, ...], tuple[Folder, ...]]:
    """Validate an export envelope and decode its collections.

    Args:
        data: JSON text, or an already decoded object

    Returns:
        Tuple of (notes, folders)

    Raises:
        ImportValidationError: If the payload is not a valid envelope of a
            supported version
    """
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ImportValidationError(f'Not valid JSON: {e}') from e

    if not isinstance(data, dict):
        raise ImportValidationError('Backup must be a JSON object')

    version = data.get('version')
    if version is None:
        raise ImportValidationError('Backup has no version field')
    if not isinstance(version, int) or isinstance(version, bool) \
            or version not in SUPPORTED_EXPORT_VERSIONS:
        raise ImportValidationError(
            f'Unsupported backup version: {version!r}',
            details={'supported': sorted(SUPPORTED_EXPORT_VERSIONS)},
        )

    try:
        envelope = ExportEnvelope.model_validate(data)
    except ValidationError as e:
        raise ImportValidationError(
            'Backup content is invalid',
            details=e.errors(include_url=False),
        ) from e

    notes = tuple(note_from_schema(n) for n in envelope.notes)
    folders = tuple(folder_from_schema(f) for f in envelope.folders)
    logger.info('Backup parsed', notes=len(notes), folders=len(folders))
    return notes, folders


def write_backup(path, notes: Sequence[Note], folders: Sequence[Folder]) -> Path:
    path = Path(path)
    path.write_text(dumps(export_envelope(notes, folders)), encoding='utf-8')
    return path

