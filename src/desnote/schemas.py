# SPDX-License-Identifier: GPL-3.0-or-later

"""
Wire schemas.

Pydantic models for the JSON shape of notes and folders, used both for the
persisted collections and the export envelope. Keys are camelCase on the
wire (folderId, isPinned, updatedAt, ...) and snake_case in Python.
"""

from dataclasses import asdict
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel

from desnote.colors import (
    DEFAULT_FOLDER_COLOR, DEFAULT_NOTE_COLOR, DEFAULT_NOTE_ICON, DEFAULT_SHAPE,
)
from desnote.constants import DEFAULT_FOLDER_NAME
from desnote.note import Folder, Note


class WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='ignore',
    )


class NoteSchema(WireModel):
    """Schema for a note record."""

    id: str = Field(min_length=1)
    title: str = ''
    content: str = ''
    folder_id: str | None = None
    is_pinned: bool = False
    is_deleted: bool = False
    color: str = DEFAULT_NOTE_COLOR
    shape: str = DEFAULT_SHAPE
    icon: str = DEFAULT_NOTE_ICON
    created_at: int = 0
    updated_at: int = 0

    @model_validator(mode='after')
    def default_created_at(self) -> 'NoteSchema':
        # Records written before createdAt existed only carry updatedAt
        if 'created_at' not in self.model_fields_set:
            self.created_at = self.updated_at
        return self


class FolderSchema(WireModel):
    """Schema for a folder record."""

    id: str = Field(min_length=1)
    name: str = DEFAULT_FOLDER_NAME
    is_pinned: bool = False
    is_deleted: bool = False
    color: str = DEFAULT_FOLDER_COLOR
    shape: str = DEFAULT_SHAPE
    icon: str | None = None


class ExportEnvelope(WireModel):
    """Schema for the full-state export envelope."""

    version: int
    timestamp: int
    notes: list[NoteSchema]
    folders: list[FolderSchema]

    @model_validator(mode='after')
    def unique_ids(self) -> 'ExportEnvelope':
        for kind, records in (('note', self.notes), ('folder', self.folders)):
            seen = set()
            for record in records:
                if record.id in seen:
                    raise ValueError(f'duplicate {kind} id {record.id!r}')
                seen.add(record.id)
        return self


_notes_adapter = TypeAdapter(list[NoteSchema])
_folders_adapter = TypeAdapter(list[FolderSchema])


def note_from_schema(schema: NoteSchema) -> Note:
    return Note(**schema.model_dump())


def folder_from_schema(schema: FolderSchema) -> Folder:
    return Folder(**schema.model_dump())


def note_to_json(note: Note) -> dict[str, Any]:
    return NoteSchema(**asdict(note)).model_dump(by_alias=True)


def folder_to_json(folder: Folder) -> dict[str, Any]:
    return FolderSchema(**asdict(folder)).model_dump(by_alias=True)


def notes_from_json(data: Any) -> tuple[Note, ...]:
    """Decode a JSON list of notes. Raises pydantic.ValidationError."""
    return tuple(note_from_schema(s) for s in _notes_adapter.validate_python(data))


def folders_from_json(data: Any) -> tuple[Folder, ...]:
    """Decode a JSON list of folders. Raises pydantic.ValidationError."""
    return tuple(folder_from_schema(s) for s in _folders_adapter.validate_python(data))


def notes_to_json(notes: Iterable[Note]) -> list[dict[str, Any]]:
    return [note_to_json(n) for n in notes]


def folders_to_json(folders: Iterable[Folder]) -> list[dict[str, Any]]:
    return [folder_to_json(f) for f in folders]
