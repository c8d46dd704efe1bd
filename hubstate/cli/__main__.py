"""
hubstate CLI - inspect and maintain the stored hub state.

Usage:
    hubstate show [--json] [--field NAME]
    hubstate status [--json]
    hubstate refresh
    hubstate export [--output FILE]
    hubstate restore FILE
    hubstate reset --yes
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from hubstate.config import get_settings
from hubstate.controller import PersistenceController
from hubstate.errors import RestoreError
from hubstate.storage import SQLiteStore

logger = logging.getLogger(__name__)


def _summarize(value) -> str:
    if isinstance(value, list):
        return f"{len(value)} items"
    if isinstance(value, dict):
        return f"{len(value)} keys"
    return json.dumps(value, default=str)


def cmd_show(args, controller: PersistenceController) -> int:
    """Load and display the live state."""
    state = controller.load()

    if args.field:
        if args.field not in state.keys():
            print(f"No such field: {args.field}")
            return 1
        print(json.dumps(state.get(args.field), indent=2, default=str))
        return 0

    if args.json:
        print(json.dumps(state.snapshot(), indent=2, default=str))
        return 0

    print(f"State v{state.version} ({controller.key})")
    for name in state.keys():
        print(f"  {name}: {_summarize(state.get(name))}")
    return 0


def cmd_status(args, controller: PersistenceController) -> int:
    """Show what is stored, without loading it."""
    status = controller.status()

    if args.json:
        print(json.dumps(status, indent=2))
        return 0

    if not status["stored"]:
        print(f"No stored state under {status['key']!r} (first run)")
        return 0
    if not status["readable"]:
        print(f"⚠ Stored state under {status['key']!r} is unreadable; load will start fresh")
        return 0

    print(f"Key:     {status['key']}")
    print(f"Store:   {status['store']}")
    others = sorted(k for k in status["store_keys"] if k != status["key"])
    if others:
        print(f"Others:  {', '.join(others)}")
    print(f"Size:    {status['size_bytes']} bytes")
    layout = "legacy" if status["legacy_layout"] else "envelope"
    print(f"Version: v{status['stored_version']} ({layout}), current v{status['current_version']}")
    pending = status["pending_migrations"]
    if pending:
        print(f"Pending: {len(pending)} migrations (v{pending[0]} -> v{pending[-1] + 1})")
    else:
        print("Pending: none")
    return 0


def cmd_refresh(args, controller: PersistenceController) -> int:
    """Re-run load/migrate/merge and save the reconciled tree."""
    state = controller.refresh()
    print(f"✓ State refreshed at v{state.version}")
    return 0


def cmd_export(args, controller: PersistenceController) -> int:
    """Write the envelope text to a file or stdout."""
    controller.load(persist=False)
    raw = controller.export()
    if args.output:
        Path(args.output).write_text(raw, encoding="utf-8")
        print(f"✓ Exported state to {args.output}")
    else:
        print(raw)
    return 0


def cmd_restore(args, controller: PersistenceController) -> int:
    """Replace the stored envelope from a backup file."""
    path = Path(args.file)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"✗ Cannot read {path}: {e}")
        return 1

    try:
        state = controller.restore(raw)
    except RestoreError as e:
        print(f"✗ Restore failed: {e}")
        return 1

    print(f"✓ Restored {path} (now v{state.version})")
    return 0


def cmd_reset(args, controller: PersistenceController) -> int:
    """Discard the stored state and start from the baseline."""
    if not args.yes:
        print("Refusing to reset without --yes (this discards all stored data)")
        return 1
    state = controller.reset()
    print(f"✓ State reset to baseline (v{state.version})")
    return 0


COMMANDS = {
    "show": cmd_show,
    "status": cmd_status,
    "refresh": cmd_refresh,
    "export": cmd_export,
    "restore": cmd_restore,
    "reset": cmd_reset,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hubstate",
        description="Versioned persistence for the events hub state",
    )
    parser.add_argument("--db", help="SQLite database path", default=None)
    parser.add_argument("--key", help="Store key holding the state envelope", default=None)
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    p_show = subparsers.add_parser("show", help="Load and display the live state")
    p_show.add_argument("--json", "-j", action="store_true")
    p_show.add_argument("--field", "-f", help="Print a single top-level field")

    p_status = subparsers.add_parser("status", help="Describe the stored envelope")
    p_status.add_argument("--json", "-j", action="store_true")

    subparsers.add_parser("refresh", help="Re-reconcile stored state and save it")

    p_export = subparsers.add_parser("export", help="Export the state envelope")
    p_export.add_argument("--output", "-o", help="Write to file instead of stdout")

    p_restore = subparsers.add_parser("restore", help="Restore the state from a backup")
    p_restore.add_argument("file", help="Backup file produced by export")

    p_reset = subparsers.add_parser("reset", help="Hard reset to the baseline")
    p_reset.add_argument("--yes", "-y", action="store_true", help="Confirm the reset")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    level = logging.DEBUG if args.verbose else getattr(logging, settings.log_level.upper(), None)
    logging.basicConfig(level=level if isinstance(level, int) else logging.WARNING)

    store = SQLiteStore(Path(args.db) if args.db else None)
    controller = PersistenceController(store=store, key=args.key)
    try:
        return COMMANDS[args.command](args, controller)
    finally:
        controller.close()


if __name__ == "__main__":
    sys.exit(main())
