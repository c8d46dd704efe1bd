"""
hubstate - Versioned, self-reconciling persistence for the events hub.

Loads the hub's working data from a single stored envelope, migrates it to
the current schema and merges in new built-in content without touching
what the user created or edited.
"""

from .controller import LiveState, PersistenceController
from .envelope import DecodeResult, Envelope, decode, encode
from .errors import HubStateError, RestoreError, StoreError
from .merge import FieldPolicy, MergeEngine, MergePolicy, merge_state
from .migrations import CURRENT_VERSION, MigrationRegistry, MigrationResult, run_migrations

try:
    from importlib.metadata import version

    __version__ = version("hubstate")
except Exception:
    __version__ = "0.0.0"

__all__ = [
    "CURRENT_VERSION",
    "DecodeResult",
    "Envelope",
    "FieldPolicy",
    "HubStateError",
    "LiveState",
    "MergeEngine",
    "MergePolicy",
    "MigrationRegistry",
    "MigrationResult",
    "PersistenceController",
    "RestoreError",
    "StoreError",
    "decode",
    "encode",
    "merge_state",
    "run_migrations",
]
