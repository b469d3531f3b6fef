"""Plain-text task list: one record per non-empty line of a single file.

Layout:
    $XDG_CONFIG_HOME/todo/      # or ~/.todo/
        config.toml             # optional
        database                # records, one per line

A record's index is its 1-based position among non-empty lines, recomputed
on every read. Deleting record k shifts every later record down by one.
"""

from todo.config import TodoConfig, init_config, load_config
from todo.models import Record
from todo.store import NotInitializedError, RecordStore

__all__ = ["NotInitializedError", "Record", "RecordStore", "TodoConfig", "init_config", "load_config"]
