"""Schema migrations for the persisted data tree.

Each step is registered under the version it upgrades *from* and turns a
version N tree into a version N+1 tree. Bump ``CURRENT_VERSION`` whenever
a step is added.

Steps receive a private deep copy of the tree, so they may edit it in
place; a step that raises leaves the previous tree untouched.
"""

import logging
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .catalog import (
    CATERING_MENU_SERVICES,
    EXPANSION_SERVICES,
    PARTNER_SERVICES,
    RETIRED_SERVICE_IDS,
    VENUE_SERVICES,
    copy_records,
)

logger = logging.getLogger(__name__)

# Schema version of the data tree written by this release
CURRENT_VERSION = 13

Tree = Dict[str, Any]
MigrationStep = Callable[[Tree], Tree]


@dataclass
class MigrationResult:
    """Outcome of running the registry over one tree.

    ``version`` is the version ``data`` is actually at: the target when every
    step succeeded, the failing step's version when the chain was cut short.
    """

    data: Tree
    from_version: int
    version: int
    applied: List[int] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def degraded(self) -> bool:
        return self.error is not None


class MigrationRegistry:
    """Ordered, gap-free set of migration steps."""

    def __init__(self, steps: Dict[int, MigrationStep], current_version: int):
        expected = set(range(current_version))
        if set(steps) != expected:
            missing = sorted(expected - set(steps))
            extra = sorted(set(steps) - expected)
            raise ValueError(
                f"Migration steps must cover 0..{current_version - 1}: "
                f"missing={missing} unexpected={extra}"
            )
        self._steps = dict(steps)
        self.current_version = current_version

    def pending(self, from_version: int) -> List[int]:
        """Versions whose steps a tree at ``from_version`` still needs."""
        return list(range(max(from_version, 0), self.current_version))

    def run(self, data: Tree, from_version: int, target: Optional[int] = None) -> MigrationResult:
        """Apply steps from ``from_version`` up to ``target`` (default: current).

        Never raises on a failing step: the chain stops and the result holds
        the output of the last step that succeeded.
        """
        target = self.current_version if target is None else min(target, self.current_version)
        start = max(from_version, 0)

        if start >= target:
            # Same or newer schema: pass the tree through untouched
            return MigrationResult(data=data, from_version=from_version, version=from_version)

        current = data
        result = MigrationResult(data=current, from_version=from_version, version=start)
        for version in range(start, target):
            step = self._steps[version]
            try:
                current = step(deepcopy(current))
            except Exception as e:
                result.error = f"v{version} -> v{version + 1} ({step.__name__}): {e}"
                logger.warning(f"Migration failed, keeping tree at v{version}: {result.error}")
                break
            result.data = current
            result.version = version + 1
            result.applied.append(version)
            logger.debug(f"Applied migration v{version} -> v{version + 1}")

        if result.applied:
            logger.info(
                f"Migrated data from v{from_version} to v{result.version} "
                f"({len(result.applied)} steps)"
            )
        return result


# =============================================================================
# Steps
# =============================================================================


def _list(state: Tree, key: str) -> List[Any]:
    value = state.get(key)
    return value if isinstance(value, list) else []


def _rename_user(state: Tree, user_id: str, name: str) -> Tree:
    state["users"] = [
        {**u, "name": name} if isinstance(u, dict) and u.get("userId") == user_id else u
        for u in _list(state, "users")
    ]
    return state


def _add_missing_services(state: Tree, records) -> Tree:
    services = _list(state, "services")
    present = {s.get("id") for s in services if isinstance(s, dict)}
    added = [r for r in copy_records(records) if r["id"] not in present]
    state["services"] = services + added
    return state


def normalize_legacy_root(state: Tree) -> Tree:
    """v0 -> v1: drop the version key the oldest save format mixed into the data."""
    state.pop("version", None)
    if not isinstance(state.get("services"), list):
        state["services"] = []
    return state


def remove_retired_services(state: Tree) -> Tree:
    """v1 -> v2: the high-level master list replaced these granular services."""
    state["services"] = [
        s
        for s in _list(state, "services")
        if not (isinstance(s, dict) and s.get("id") in RETIRED_SERVICE_IDS)
    ]
    return state


# Permission table as it stood at v3; later flag additions come from the baseline merge
_PERMISSIONS_V3 = {
    "Admin": {
        "canCreateEvents": True,
        "canManageServices": True,
        "canViewFinancials": True,
        "canManageUsers": True,
        "canManageRFQs": True,
    },
    "Sales": {
        "canCreateEvents": True,
        "canManageServices": False,
        "canViewFinancials": False,
        "canManageUsers": False,
        "canManageRFQs": True,
    },
    "Operations": {
        "canCreateEvents": False,
        "canManageServices": True,
        "canViewFinancials": True,
        "canManageUsers": False,
        "canManageRFQs": False,
    },
}


def move_permissions_to_roles(state: Tree) -> Tree:
    """v2 -> v3: permissions live in a root ``roles`` table, not on each user."""
    if not state.get("roles"):
        state["roles"] = deepcopy(_PERMISSIONS_V3)
    if isinstance(state.get("users"), list):
        state["users"] = [
            {k: v for k, v in u.items() if k != "permissions"} if isinstance(u, dict) else u
            for u in state["users"]
        ]
    return state


def rename_first_admin(state: Tree) -> Tree:
    """v3 -> v4"""
    return _rename_user(state, "u1", "Firash")


def reset_user_roster(state: Tree) -> Tree:
    """v4 -> v5: replace the demo roster and hand existing events to Paul."""
    events = [
        {**e, "salespersonId": "u_paul"} if isinstance(e, dict) else e
        for e in _list(state, "events")
    ]
    state["users"] = [
        {"userId": "u_admin", "name": "Admin", "role": "Admin", "commissionRate": 0},
        {"userId": "u_paul", "name": "Paul", "role": "Sales", "commissionRate": 15},
    ]
    state["events"] = events
    state["currentUserId"] = "u_paul"
    return state


def rename_admin(state: Tree) -> Tree:
    """v5 -> v6"""
    return _rename_user(state, "u_admin", "Firash")


def reapply_admin_rename(state: Tree) -> Tree:
    """v6 -> v7: same rename again for trees that skipped v6."""
    return _rename_user(state, "u_admin", "Firash")


def add_event_tasks(state: Tree) -> Tree:
    """v7 -> v8"""
    events = state.get("events") or []
    if isinstance(events, list):
        events = [
            {**e, "tasks": e.get("tasks") or []} if isinstance(e, dict) else e for e in events
        ]
    state["events"] = events
    return state


def add_rfq_items(state: Tree) -> Tree:
    """v8 -> v9"""
    rfqs = state.get("rfqs") or []
    if isinstance(rfqs, list):
        rfqs = [{**r, "items": r.get("items") or []} if isinstance(r, dict) else r for r in rfqs]
    state["rfqs"] = rfqs
    return state


def import_catering_menus(state: Tree) -> Tree:
    """v9 -> v10: catering services imported from the venue's menus."""
    return _add_missing_services(state, CATERING_MENU_SERVICES)


def add_venue_rental(state: Tree) -> Tree:
    """v10 -> v11"""
    return _add_missing_services(state, VENUE_SERVICES)


def add_expansion_services(state: Tree) -> Tree:
    """v11 -> v12: AV, decor, staffing and logistics additions."""
    return _add_missing_services(state, EXPANSION_SERVICES)


def add_partner_services(state: Tree) -> Tree:
    """v12 -> v13: Elitepro and Carlton Al Moaibed hotel services."""
    return _add_missing_services(state, PARTNER_SERVICES)


MIGRATIONS: Dict[int, MigrationStep] = {
    0: normalize_legacy_root,
    1: remove_retired_services,
    2: move_permissions_to_roles,
    3: rename_first_admin,
    4: reset_user_roster,
    5: rename_admin,
    6: reapply_admin_rename,
    7: add_event_tasks,
    8: add_rfq_items,
    9: import_catering_menus,
    10: add_venue_rental,
    11: add_expansion_services,
    12: add_partner_services,
}


def default_registry() -> MigrationRegistry:
    return MigrationRegistry(MIGRATIONS, CURRENT_VERSION)


def run_migrations(data: Tree, from_version: int) -> MigrationResult:
    """Run the default registry from ``from_version`` to ``CURRENT_VERSION``."""
    return default_registry().run(data, from_version)
