"""Diagnose pack discovery and mounting without starting the server.

Usage:
    python -m packhost.scripts.diagnose_packs
    python -m packhost.scripts.diagnose_packs --root ./packs --root ./legacy/packs

Runs the same discovery → load → register pass the server runs at startup,
against a throwaway FastAPI app, and prints which packs mounted, which failed
(with the stage and error) and the resulting public prefixes. Exits 1 when
any pack failed.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from fastapi import FastAPI

from packhost.config import get_settings
from packhost.packs import PackHostState, mount_packs, resolve_entry, scan_roots


def _print_report(roots: list[Path], state: PackHostState) -> None:
    print("Scan roots:")
    for root in roots:
        print(f"  {'ok ' if root.is_dir() else '-- '} {root}")

    print("\nCandidates:")
    candidates = scan_roots(roots)
    if not candidates:
        print("  (none)")
    for root, slug in candidates:
        try:
            entry = resolve_entry(root, slug)
        except OSError as e:
            print(f"  {slug:<24} (unreadable: {e.strerror or e})")
            continue
        print(f"  {slug:<24} {entry if entry is not None else '(no server entry)'}")

    print(f"\nMounted ({len(state.mount_records)}):")
    for record in state.mount_records:
        print(f"  {record.slug:<24} {record.entry_path}")

    if state.failures:
        print(f"\nFailed ({len(state.failures)}):")
        for failure in state.failures:
            print(f"  {failure.slug:<24} [{failure.stage}] {failure.error_type}: {failure.message}")
            print(f"  {'':<24} {failure.entry_path}")

    print("\nPublic prefixes:")
    for prefix in state.public_prefixes:
        print(f"  {prefix}")


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Dry-run PackHost pack mounting")
    parser.add_argument(
        "--root",
        action="append",
        type=Path,
        help="Scan root (repeatable, in priority order). Default: PACK_ROOTS / built-in layouts.",
    )
    parser.add_argument(
        "--namespace",
        default=settings.pack_namespace,
        help="Mount namespace for conventional public prefixes",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show loader logs")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.CRITICAL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    roots = [r.resolve() for r in args.root] if args.root else list(settings.pack_roots)
    state = mount_packs(FastAPI(), roots=roots, namespace=args.namespace)
    _print_report(roots, state)
    return 1 if state.failures else 0


if __name__ == "__main__":
    sys.exit(main())
