# SPDX-License-Identifier: GPL-3.0-or-later

AUTOSAVE_DELAY_MS = 500

# Persistence keys, one row each in the store
THEME_KEY = 'desnote-theme'
NOTES_KEY = 'desnote-notes'
FOLDERS_KEY = 'desnote-folders'
SUPPRESS_DELETE_KEY = 'desnote-dont-remind-delete'

EXPORT_VERSION = 1
SUPPORTED_EXPORT_VERSIONS = frozenset({EXPORT_VERSION})

DEFAULT_FOLDER_NAME = 'New Folder'

SEED_FOLDERS = [
    {
        'id': '1',
        'name': 'Personal',
        'color': 'rose',
        'shape': 'rounded-tl-[2.5rem] rounded-br-[2.5rem] rounded-tr-xl rounded-bl-xl',
    },
    {
        'id': '2',
        'name': 'Work',
        'color': 'blue',
        'shape': 'rounded-tr-[4rem] rounded-bl-[4rem] rounded-tl-xl rounded-br-xl',
    },
]
