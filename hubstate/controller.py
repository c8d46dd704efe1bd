"""Persistence controller: load -> migrate -> merge -> live state, and back.

The controller is the sole writer-of-record for the live state. Consumers
hold the ``LiveState`` handle, read snapshots from it, and request
mutations through it; each mutation is saved wholesale.

Nothing on the load or save path raises for bad data or a failing store.
Problems are logged and the session continues with the best in-memory
state available. Only user-initiated restores surface errors.
"""

import logging
from copy import deepcopy
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .baseline import default_app_state
from .config import get_settings
from .envelope import decode, encode
from .errors import RestoreError, StoreError
from .merge import MergeEngine, validate_policies
from .migrations import MigrationRegistry, default_registry
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

Tree = Dict[str, Any]
Updater = Union[Tree, Callable[[Tree], Tree]]


class LiveState:
    """The in-memory tree the application reads and mutates.

    ``version`` is the schema version the tree is at, which is what gets
    written to the envelope on save.
    """

    def __init__(
        self,
        data: Tree,
        version: int,
        on_change: Optional[Callable[["LiveState"], Any]] = None,
    ):
        self._data = data
        self._version = version
        self._on_change = on_change

    @property
    def version(self) -> int:
        return self._version

    def snapshot(self) -> Tree:
        """A deep copy of the whole tree."""
        return deepcopy(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return deepcopy(self._data[key])

    def keys(self):
        return list(self._data.keys())

    def set(self, new_state: Updater) -> None:
        """Replace the whole tree.

        Accepts a new tree, or a function that receives a snapshot of the
        current tree and returns the new one.
        """
        tree = new_state(self.snapshot()) if callable(new_state) else new_state
        if not isinstance(tree, dict):
            raise ValueError(f"State must be an object, got {type(tree).__name__}")
        self._data = deepcopy(tree)
        self._changed()

    def update(self, key: str, value: Any) -> None:
        """Replace one top-level field."""
        self.set(lambda prev: {**prev, key: value})

    def mutate(self, fn: Callable[[Tree], Any]) -> None:
        """Edit a working copy in place; the copy becomes the new tree."""
        working = self.snapshot()
        fn(working)
        self.set(working)

    def _replace(self, data: Tree, version: int) -> None:
        self._data = data
        self._version = version

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self)

    def __repr__(self) -> str:
        return f"LiveState(version={self._version}, fields={len(self._data)})"


class PersistenceController:
    """Owns the live state and its single envelope in the store.

    Args:
        store: Backend holding the envelope. Defaults to the configured SQLite file.
        baseline: Baseline data set. Defaults to the built-in one.
        registry: Migration registry. Defaults to the built-in steps.
        engine: Merge engine. Defaults to the built-in policy table.
        key: Store key. Defaults to the configured ``state_key``.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        baseline: Optional[Mapping[str, Any]] = None,
        registry: Optional[MigrationRegistry] = None,
        engine: Optional[MergeEngine] = None,
        key: Optional[str] = None,
    ):
        if store is None:
            from .storage import SQLiteStore

            store = SQLiteStore()
        self.store = store
        self.key = key or get_settings().state_key
        self.baseline: Tree = (
            deepcopy(dict(baseline)) if baseline is not None else default_app_state()
        )
        self.registry = registry or default_registry()
        self.engine = engine or MergeEngine()

        validate_policies(self.engine.policies, self.baseline)

        self._state: Optional[LiveState] = None

        logger.debug(
            f"PersistenceController initialized with store: {type(self.store).__name__}, "
            f"key: {self.key!r}, schema v{self.current_version}"
        )

    @property
    def current_version(self) -> int:
        return self.registry.current_version

    @property
    def state(self) -> LiveState:
        """The live state, loading it on first access."""
        if self._state is None:
            return self.load()
        return self._state

    @property
    def loaded(self) -> bool:
        return self._state is not None

    # === Load path ===

    def _read(self) -> Optional[str]:
        try:
            return self.store.get(self.key)
        except StoreError as e:
            logger.warning(f"Could not read stored state, treating as first run: {e}")
            return None

    def _reconcile(self) -> LiveState:
        raw = self._read()
        decoded = decode(raw)

        if raw is None or decoded.error:
            # First run (or unreadable store): the baseline is already current
            if raw is None:
                logger.info("No stored state found, initializing from baseline")
            data: Tree = {}
            version = self.current_version
        else:
            result = self.registry.run(decoded.data, decoded.version)
            if result.degraded:
                logger.warning(
                    f"Continuing with partially migrated state at v{result.version} "
                    f"(target v{self.current_version}): {result.error}"
                )
            elif decoded.version > self.current_version:
                logger.warning(
                    f"Stored state is v{decoded.version}, newer than v{self.current_version}; "
                    "loading without migration"
                )
            data, version = result.data, result.version

        merged = self.engine.merge(data, self.baseline)
        return self._install(merged, version)

    def _install(self, data: Tree, version: int) -> LiveState:
        if self._state is None:
            self._state = LiveState(data, version, on_change=self._on_change)
        else:
            self._state._replace(data, version)
        return self._state

    def load(self, persist: bool = True) -> LiveState:
        """Decode, migrate and merge the stored state into the live state.

        Args:
            persist: Write the reconciled tree back, so legacy layouts and
                migrated trees are upgraded on disk immediately.
        """
        state = self._reconcile()
        if persist:
            self.save(state)
        return state

    def refresh(self) -> LiveState:
        """Re-run the load pipeline against whatever the store now holds.

        The existing ``LiveState`` handle is updated in place.
        """
        logger.info("Refreshing live state from store")
        return self.load()

    # === Save path ===

    def _on_change(self, state: LiveState) -> None:
        self.save(state)

    def save(self, state: Optional[LiveState] = None) -> bool:
        """Write the live state to the store. Returns False (and logs) on failure."""
        state = state or self._state
        if state is None:
            logger.warning("Nothing to save: state has not been loaded")
            return False
        try:
            raw = encode(state._data, state.version)
            self.store.set(self.key, raw)
        except (StoreError, ValueError, TypeError) as e:
            logger.error(f"Error saving state, keeping in-memory state: {e}")
            return False
        return True

    # === User-initiated actions ===

    def reset(self) -> LiveState:
        """Hard reset: discard the stored envelope and start from the baseline."""
        try:
            self.store.delete(self.key)
        except StoreError as e:
            logger.warning(f"Could not delete stored state: {e}")
        state = self._install(deepcopy(self.baseline), self.current_version)
        self.save(state)
        logger.info("State reset to baseline")
        return state

    def export(self) -> str:
        """Envelope text for the live state, suitable for ``restore``."""
        state = self.state
        return encode(state._data, state.version)

    def restore(self, raw: str) -> LiveState:
        """Replace the stored envelope wholesale with ``raw``, then refresh.

        Raises:
            RestoreError: If ``raw`` does not decode, or the store rejects it
        """
        if not isinstance(raw, str):
            raise RestoreError("Backup must be text")
        decoded = decode(raw)
        if decoded.error:
            raise RestoreError(f"Backup is not a readable state envelope: {decoded.error}")
        try:
            self.store.set(self.key, raw)
        except StoreError as e:
            raise RestoreError(f"Could not write backup to store: {e}") from e
        logger.info(f"Restored state envelope v{decoded.version}")
        return self.refresh()

    def status(self) -> Dict[str, Any]:
        """Describe the stored envelope without loading it."""
        raw = self._read()
        decoded = decode(raw)
        stored = raw is not None
        readable = stored and decoded.success
        try:
            store_keys = self.store.keys()
        except StoreError as e:
            logger.warning(f"Could not list store keys: {e}")
            store_keys = {}
        return {
            "key": self.key,
            "store": type(self.store).__name__,
            "stored": stored,
            "readable": readable,
            "legacy_layout": decoded.legacy,
            "stored_version": decoded.version if readable else None,
            "current_version": self.current_version,
            "pending_migrations": self.registry.pending(decoded.version) if readable else [],
            "size_bytes": len(raw.encode("utf-8")) if stored else 0,
            "store_keys": store_keys,
            "loaded": self.loaded,
        }

    def close(self) -> None:
        self.store.close()
