#!/usr/bin/env python3
"""Dump every portal collection held in a storage file.

Opens a file-backed storage area read-only (no seed is written unless
``--seed`` is given), parses every collection with its record model and
prints the records, so you can spot entries that no longer validate.

Usage
-----
::

    export SASTA_STORAGE_PATH=/var/lib/sasta/storage.json
    python scripts/dump_store.py

Options::

    --path FILE          Storage file (default: $SASTA_STORAGE_PATH)
    --collection NAME    Only dump this collection (repeatable)
    --json               Output as machine-readable JSON
    --seed               Let seeded collections write their seed
    -v, --verbose        Log skipped/malformed records
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pysasta import ChangeBus, EntityStore, FileStorage, SastaConfig  # noqa: E402
from pysasta._redact import redact_for_log  # noqa: E402
from pysasta.registry import COLLECTION_NAMES, build_collection  # noqa: E402


class _ReadOnlyStorage:
    """Wraps a storage area and drops writes."""

    def __init__(self, inner: FileStorage) -> None:
        self._inner = inner

    def get_item(self, key: str) -> str | None:
        return self._inner.get_item(key)

    def set_item(self, key: str, value: str) -> None:
        return None

    def remove_item(self, key: str) -> None:
        return None

    def keys(self) -> list[str]:
        return self._inner.keys()

    def clear(self) -> None:
        return None


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _dump(args: argparse.Namespace) -> dict[str, list[dict[str, Any]]]:
    config = SastaConfig.from_env(**({"storage_path": Path(args.path)} if args.path else {}))
    if config.storage_path is None:
        raise SystemExit("No storage file: pass --path or set SASTA_STORAGE_PATH")

    backend = FileStorage(config.storage_path, quota_bytes=config.storage_quota)
    storage: Any = backend if args.seed else _ReadOnlyStorage(backend)
    bus = ChangeBus()

    result: dict[str, list[dict[str, Any]]] = {}
    for name in args.collection or COLLECTION_NAMES:
        with EntityStore(storage, bus, build_collection(name, key_prefix=config.key_prefix)) as store:
            result[name] = [record.to_storage() for record in store.list_records()]
    return result


def main() -> int:
    parser = argparse.ArgumentParser(description="Dump portal collections from a storage file")
    parser.add_argument("--path", help="Storage file (default: $SASTA_STORAGE_PATH)")
    parser.add_argument("--collection", action="append", choices=COLLECTION_NAMES, help="Collection to dump")
    parser.add_argument("--json", action="store_true", help="Output JSON")
    parser.add_argument("--seed", action="store_true", help="Allow seed write-back")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log malformed records")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    dumped = _dump(args)
    if args.json:
        print(json.dumps(dumped, indent=2, ensure_ascii=False))
        return 0

    for name, records in dumped.items():
        print(_section(f"{name} ({len(records)} records)"))
        for record in records:
            print(json.dumps(redact_for_log(record), ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
