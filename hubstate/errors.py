"""Error types for hubstate.

Error handling philosophy:
- The load path never raises for bad data; it logs and degrades
- Save failures are logged and reported, never raised into the mutation path
- Store backends raise StoreError (wrapping sqlite3/OS errors)
- User-initiated restores of undecodable text raise RestoreError
- Declaration mistakes (bad policy tables, gapped migrations) raise ValueError
"""


class HubStateError(Exception):
    """Base for all hubstate errors."""

    pass


class StoreError(HubStateError):
    """Raised by key-value store backends on read/write failures."""

    pass


class RestoreError(HubStateError):
    """Raised when a restore is attempted with text that does not decode."""

    pass
