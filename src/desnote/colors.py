# SPDX-License-Identifier: GPL-3.0-or-later

# Style attributes are opaque to the core: they are stored and carried
# through export/import, never interpreted.

DEFAULT_SHAPE = 'rounded-tl-[2.5rem] rounded-br-[2.5rem] rounded-tr-xl rounded-bl-xl'

DEFAULT_NOTE_COLOR = 'slate'
DEFAULT_NOTE_ICON = 'file-text'
DEFAULT_FOLDER_COLOR = 'violet'
