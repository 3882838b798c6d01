# SPDX-License-Identifier: GPL-3.0-or-later

"""
Command-line access to a desnote data file.

Usage:
    desnote list --tab favorites --search plan
    desnote add "Shopping" --content "milk, eggs"
    desnote export backup.json
    desnote import backup.json
    desnote empty-trash
"""

import sys

import click

from desnote.application import Application
from desnote.exceptions import ImportValidationError
from desnote.exchange import export_filename, write_backup
from desnote.log import setup_logging
from desnote.note_store import NoteStore
from desnote.view import Tab


@click.group()
@click.option('--db', 'db_path', type=click.Path(dir_okay=False), default=None,
              help='Data file (defaults to the user data directory).')
@click.option('--verbose', is_flag=True, help='Debug logging.')
@click.pass_context
def main(ctx, db_path, verbose):
    """Manage desnote notes and folders."""
    setup_logging(level='DEBUG' if verbose else 'WARNING')
    app = Application(NoteStore(db_path))
    ctx.obj = app
    ctx.call_on_close(app.shutdown)


@main.command('list')
@click.option('--tab', type=click.Choice([t.value for t in Tab]), default=Tab.ALL.value)
@click.option('--search', default='', help='Case-insensitive substring filter.')
@click.pass_obj
def list_cmd(app, tab, search):
    """Show the notes and folders visible in a tab."""
    app.active_tab = Tab(tab)
    app.search_query = search
    view = app.layout()

    for folder in view.folders:
        pin = '*' if folder.is_pinned else ' '
        click.echo(f'{pin} [{folder.name}] {folder.id}')
        for note in view.folder_notes.get(folder.id, ()):
            click.echo(f'    - {note.title or "Untitled"} {note.id}')
    for note in view.root_notes:
        pin = '*' if note.is_pinned else ' '
        click.echo(f'{pin} {note.title or "Untitled"} {note.id}')

    if not view.folders and not view.root_notes:
        click.echo('Nothing here.')


@main.command()
@click.argument('title')
@click.option('--content', default='')
@click.option('--folder', 'folder_id', default=None, help='Folder id to file the note under.')
@click.pass_obj
def add(app, title, content, folder_id):
    """Create a note."""
    note = app.create_note(folder_id)
    app.update_note(note.id, title=title, content=content)
    click.echo(note.id)


@main.command('export')
@click.argument('path', type=click.Path(dir_okay=False), required=False)
@click.pass_obj
def export_cmd(app, path):
    """Write a full backup."""
    path = write_backup(path or export_filename(), app.notes, app.folders)
    click.echo(f'Exported {len(app.notes)} notes and {len(app.folders)} folders to {path}')


@main.command('import')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def import_cmd(app, path):
    """Replace all data with a backup."""
    with open(path, 'rb') as f:
        payload = f.read()
    try:
        app.import_data(payload)
    except ImportValidationError as e:
        click.echo(click.style(f'Import failed: {e.message}', fg='red'), err=True)
        sys.exit(1)
    click.echo(f'Imported {len(app.notes)} notes and {len(app.folders)} folders')


@main.command('empty-trash')
@click.pass_obj
def empty_trash(app):
    """Permanently delete everything in the trash."""
    app.empty_trash()
    click.echo('Trash emptied')
