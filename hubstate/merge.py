"""Structural merge of the user data tree against the baseline.

Every top-level field is reconciled by exactly one declared policy. The
engine dispatches on the declaration and holds no field-specific logic:
onboarding a new field means adding a ``FieldPolicy``, not merge code.

Merging is pure. Neither input is mutated, and anything taken from the
baseline is deep-copied so the live tree never aliases it.
"""

import logging
from copy import deepcopy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

from .baseline import SYSTEM_TEMPLATE_TYPE

logger = logging.getLogger(__name__)

Tree = Dict[str, Any]


class MergePolicy(Enum):
    """How one top-level field is reconciled between user and baseline."""

    OVERRIDE = "override"  # User value wins if present
    DEEP_MERGE = "deep-merge"  # Baseline fills only missing keys, at any depth
    COLLECTION_BY_ID = "collection-by-id"  # Append baseline records with unseen ids
    NESTED_MAP_MERGE = "nested-map-merge"  # Closed key set, shallow override per group
    ARRAY_NONNULL_GUARD = "array-nonnull-guard"  # Never let a critical list be missing


class ArrayFallback(Enum):
    EMPTY = "empty"
    BASELINE = "baseline"


@dataclass(frozen=True)
class FieldPolicy:
    """Declared merge policy for one top-level field.

    Args:
        policy: The merge strategy.
        id_key: Record identifier for COLLECTION_BY_ID.
        protected: For COLLECTION_BY_ID, restricts which baseline records are
            candidates for re-introduction (the system-provided subset).
        fallback: For ARRAY_NONNULL_GUARD, what replaces a non-list value.
    """

    policy: MergePolicy
    id_key: str = "id"
    protected: Optional[Callable[[Any], bool]] = None
    fallback: ArrayFallback = ArrayFallback.EMPTY


def is_object(value: Any) -> bool:
    return isinstance(value, dict)


def field_equals(name: str, expected: Any) -> Callable[[Any], bool]:
    """Predicate for ``FieldPolicy.protected``: record[name] == expected."""

    def _check(record: Any) -> bool:
        return is_object(record) and record.get(name) == expected

    _check.__name__ = f"{name}_is_{expected}"
    return _check


# =============================================================================
# Strategies
# =============================================================================


def merge_override(user_value: Any, baseline_value: Any) -> Any:
    """User wins when present at all; falsy-but-defined values count."""
    if user_value is None:
        return deepcopy(baseline_value)
    return user_value


def deep_merge(user: Mapping[str, Any], baseline: Mapping[str, Any]) -> Tree:
    """Fill keys missing from ``user`` with baseline subtrees, recursively.

    A key present on both sides recurses only when both values are objects;
    otherwise the user's value is kept, even when the types disagree.
    """
    output = dict(user)
    for key, base_value in baseline.items():
        if key not in user:
            output[key] = deepcopy(base_value)
        elif is_object(user[key]) and is_object(base_value):
            output[key] = deep_merge(user[key], base_value)
    return output


def merge_collection(
    user_records: Any,
    baseline_records: Any,
    id_key: str = "id",
    protected: Optional[Callable[[Any], bool]] = None,
) -> List[Any]:
    """User records verbatim and in order, then unseen baseline records in baseline order."""
    user_list = user_records if isinstance(user_records, list) else []
    base_list = baseline_records if isinstance(baseline_records, list) else []

    seen = {r[id_key] for r in user_list if is_object(r) and id_key in r}
    candidates = [r for r in base_list if protected is None or protected(r)]
    added = [
        deepcopy(r)
        for r in candidates
        if is_object(r) and id_key in r and r[id_key] not in seen
    ]
    return user_list + added


def merge_nested_map(user_map: Any, baseline_map: Mapping[str, Any]) -> Tree:
    """Every baseline group present; user flags shallow-override baseline flags.

    Groups only the user has are dropped: the key set is owned by the baseline.
    """
    user_map = user_map if is_object(user_map) else {}
    result: Tree = {}
    for group, base_group in baseline_map.items():
        user_group = user_map.get(group)
        if is_object(user_group) and is_object(base_group):
            result[group] = {**deepcopy(base_group), **user_group}
        else:
            result[group] = deepcopy(base_group)
    return result


def guard_array(user_value: Any, baseline_value: Any, fallback: ArrayFallback) -> List[Any]:
    if isinstance(user_value, list):
        return user_value
    if fallback is ArrayFallback.BASELINE and isinstance(baseline_value, list):
        return deepcopy(baseline_value)
    return []


# =============================================================================
# Policy table
# =============================================================================

DEFAULT_POLICIES: Dict[str, FieldPolicy] = {
    "services": FieldPolicy(MergePolicy.COLLECTION_BY_ID),
    "proposalTemplates": FieldPolicy(
        MergePolicy.COLLECTION_BY_ID,
        protected=field_equals("templateType", SYSTEM_TEMPLATE_TYPE),
    ),
    "roles": FieldPolicy(MergePolicy.NESTED_MAP_MERGE),
    "settings": FieldPolicy(MergePolicy.DEEP_MERGE),
    "events": FieldPolicy(MergePolicy.ARRAY_NONNULL_GUARD),
    "clients": FieldPolicy(MergePolicy.ARRAY_NONNULL_GUARD),
    "users": FieldPolicy(MergePolicy.ARRAY_NONNULL_GUARD, fallback=ArrayFallback.BASELINE),
}

_OVERRIDE = FieldPolicy(MergePolicy.OVERRIDE)


def validate_policies(policies: Mapping[str, FieldPolicy], baseline: Mapping[str, Any]) -> None:
    """Check every declared policy against the shape of its baseline field.

    Raises:
        ValueError: On a policy that cannot apply to the baseline's value
    """
    for name, declared in policies.items():
        if not isinstance(declared, FieldPolicy):
            raise ValueError(f"Policy for {name!r} must be a FieldPolicy")
        if name not in baseline:
            continue
        value = baseline[name]
        policy = declared.policy
        if policy is MergePolicy.DEEP_MERGE and not is_object(value):
            raise ValueError(f"{name!r}: deep-merge needs an object baseline")
        if policy is MergePolicy.NESTED_MAP_MERGE:
            if not is_object(value) or not all(is_object(g) for g in value.values()):
                raise ValueError(f"{name!r}: nested-map-merge needs an object of objects")
        if policy in (MergePolicy.COLLECTION_BY_ID, MergePolicy.ARRAY_NONNULL_GUARD):
            if not isinstance(value, list):
                raise ValueError(f"{name!r}: {policy.value} needs a list baseline")
        if policy is MergePolicy.COLLECTION_BY_ID:
            missing = [r for r in value if not (is_object(r) and declared.id_key in r)]
            if missing:
                raise ValueError(
                    f"{name!r}: {len(missing)} baseline records lack {declared.id_key!r}"
                )


class MergeEngine:
    """Reconciles a user tree with a baseline tree, field by declared field."""

    def __init__(self, policies: Optional[Mapping[str, FieldPolicy]] = None):
        self.policies: Dict[str, FieldPolicy] = dict(
            DEFAULT_POLICIES if policies is None else policies
        )

    def policy_for(self, name: str) -> FieldPolicy:
        return self.policies.get(name, _OVERRIDE)

    def merge(self, user: Any, baseline: Mapping[str, Any]) -> Tree:
        """Reconcile ``user`` against ``baseline``.

        Output keys: baseline keys in baseline order, then user-only keys.
        """
        if not is_object(user):
            if user is not None:
                logger.warning(
                    f"User tree is {type(user).__name__}, not an object; using baseline"
                )
            user = {}

        merged: Tree = {}
        for name, base_value in baseline.items():
            merged[name] = self._merge_field(name, user.get(name), base_value, name in user)
        for name, value in user.items():
            if name not in merged:
                merged[name] = value
        return merged

    def _merge_field(self, name: str, user_value: Any, base_value: Any, present: bool) -> Any:
        declared = self.policy_for(name)
        policy = declared.policy

        if policy is MergePolicy.OVERRIDE:
            return merge_override(user_value, base_value)

        if policy is MergePolicy.DEEP_MERGE:
            if not is_object(user_value):
                if user_value is not None:
                    logger.warning(f"{name!r} is not an object; restoring baseline")
                return deepcopy(base_value)
            return deep_merge(user_value, base_value)

        if policy is MergePolicy.COLLECTION_BY_ID:
            if present and user_value is not None and not isinstance(user_value, list):
                logger.warning(f"{name!r} is not a list; treating as empty")
            result = merge_collection(user_value, base_value, declared.id_key, declared.protected)
            added = len(result) - (len(user_value) if isinstance(user_value, list) else 0)
            if added:
                logger.info(f"Merging {added} new baseline records into {name!r}")
            return result

        if policy is MergePolicy.NESTED_MAP_MERGE:
            return merge_nested_map(user_value, base_value)

        if policy is MergePolicy.ARRAY_NONNULL_GUARD:
            if present and not isinstance(user_value, list):
                logger.warning(
                    f"{name!r} is {type(user_value).__name__}, not a list; "
                    f"substituting {declared.fallback.value} default"
                )
            return guard_array(user_value, base_value, declared.fallback)

        raise ValueError(f"Unknown merge policy: {policy}")


def merge_state(user: Any, baseline: Mapping[str, Any]) -> Tree:
    """Merge with the default policy table."""
    return MergeEngine().merge(user, baseline)
