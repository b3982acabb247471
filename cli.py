#!/usr/bin/env python3
"""
PanelCalc command line
----------------------
- Reads a panel list ("qty @ length" per line) from FILE or stdin.
- Prints the sorted report; `--lines-only` prints just the panel lines.
- Exit status: 0 report (empty included), 1 order error, 2 unreadable input.
- Each run is written to the ledger unless `--quiet`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from core.config import load_config
from core.model import OrderError
from engine import aggregate_order
from lore import lorekeeper


def read_order_text(path: Optional[str]) -> str:
    if not path or path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Sort and total a metal roofing panel list")
    ap.add_argument("file", nargs="?", default=None, help="Order file (default: stdin)")
    ap.add_argument("--lines-only", action="store_true", help="Print only the panel lines (what Copy to Clipboard copies)")
    ap.add_argument("--quiet", action="store_true", help="Do not write the order to the ledger")
    args = ap.parse_args(argv)

    try:
        text = read_order_text(args.file)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Cannot read order: {e}", file=sys.stderr)
        if not args.quiet:
            lorekeeper.soft_fail("cli:read_order", e)
        return 2

    result = aggregate_order(text, load_config().report_labels())

    if not args.quiet:
        try:
            lorekeeper.record_order(result)
        except OSError as e:
            lorekeeper.soft_fail("cli:record_order", e)

    if isinstance(result, OrderError):
        print(result.text, file=sys.stderr)
        return 1

    if args.lines_only:
        sys.stdout.write(result.clipboard_text())
    else:
        print(result.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
