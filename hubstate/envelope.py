"""Envelope codec for the stored state blob.

Current layout: ``{"version": <int>, "data": <object>}``.

Older saves are still read:
- a bare data tree with no ``version`` key decodes as version 0
- a tree with a ``version`` key mixed into the data (no ``data`` key)
  decodes with that version and the key removed

``encode`` only ever writes the current layout, so the legacy shapes are
upgraded on the first save after load.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class Envelope(BaseModel):
    """Versioned wrapper around the persisted data tree."""

    version: int = Field(..., ge=0)
    data: Dict[str, Any] = Field(default_factory=dict)


@dataclass
class DecodeResult:
    """Outcome of decoding a stored blob.

    ``error`` is set when the blob was present but unusable; data and
    version then describe the first-run state.
    """

    data: Dict[str, Any] = field(default_factory=dict)
    version: int = 0
    error: Optional[str] = None
    legacy: bool = False

    @property
    def success(self) -> bool:
        return self.error is None


def _corrupt(reason: str) -> DecodeResult:
    logger.warning(f"Stored state is unreadable, starting from first-run state: {reason}")
    return DecodeResult(error=reason)


def decode(raw: Optional[str]) -> DecodeResult:
    """Decode stored text into a data tree and its schema version.

    Never raises: missing and corrupt input both yield ``({}, 0)``.
    """
    if raw is None:
        return DecodeResult()

    try:
        stored = json.loads(raw)
    except (TypeError, ValueError) as e:
        return _corrupt(f"invalid JSON: {e}")

    if not isinstance(stored, dict):
        return _corrupt(f"expected an object, got {type(stored).__name__}")

    if "version" not in stored:
        return DecodeResult(data=stored, version=0, legacy=True)

    if "data" not in stored:
        payload = {k: v for k, v in stored.items() if k != "version"}
        try:
            envelope = Envelope(version=stored["version"] or 0, data=payload)
        except ValidationError as e:
            return _corrupt(f"invalid version: {e.errors()[0]['msg']}")
        return DecodeResult(data=envelope.data, version=envelope.version, legacy=True)

    try:
        envelope = Envelope(version=stored["version"] or 0, data=stored["data"])
    except ValidationError as e:
        err = e.errors()[0]
        where = ".".join(str(p) for p in err["loc"])
        return _corrupt(f"invalid envelope {where}: {err['msg']}")
    return DecodeResult(data=envelope.data, version=envelope.version)


def encode(data: Dict[str, Any], version: int) -> str:
    """Wrap ``data`` in the current envelope layout.

    Raises:
        ValueError: If data is not an object, version is negative, or the
            tree holds values JSON cannot represent
    """
    try:
        envelope = Envelope(version=version, data=data)
    except ValidationError as e:
        raise ValueError(f"Cannot encode state: {e}") from e
    try:
        return json.dumps(envelope.model_dump(), ensure_ascii=False)
    except TypeError as e:
        raise ValueError(f"Cannot encode state: {e}") from e
