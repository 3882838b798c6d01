# SPDX-License-Identifier: GPL-3.0-or-later

import enum
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from desnote.colors import (
    DEFAULT_FOLDER_COLOR, DEFAULT_NOTE_COLOR, DEFAULT_NOTE_ICON, DEFAULT_SHAPE,
)
from desnote.constants import DEFAULT_FOLDER_NAME


class EntityKind(str, enum.Enum):
    NOTE = 'note'
    FOLDER = 'folder'


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return int(datetime.now().timestamp() * 1000)


def new_id() -> str:
    # Notes and folders share one id space so a selected id resolves to one kind
    return str(uuid.uuid4())


@dataclass
class Note:
    id: str
    title: str = ''
    content: str = ''  # markup string, opaque to the core
    folder_id: Optional[str] = None
    is_pinned: bool = False
    is_deleted: bool = False
    color: str = DEFAULT_NOTE_COLOR
    shape: str = DEFAULT_SHAPE
    icon: str = DEFAULT_NOTE_ICON
    created_at: int = 0
    updated_at: int = 0

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on title or content."""
        q = query.lower()
        return q in self.title.lower() or q in self.content.lower()


@dataclass
class Folder:
    id: str
    name: str = DEFAULT_FOLDER_NAME
    is_pinned: bool = False
    is_deleted: bool = False
    color: str = DEFAULT_FOLDER_COLOR
    shape: str = DEFAULT_SHAPE
    icon: Optional[str] = None

    def matches(self, query: str) -> bool:
        return query.lower() in self.name.lower()
