# lorekeeper.py — order ledger utilities (append-only chronicle + jsonl events)
import datetime
import json
import os
import sys
import traceback

from core.model import OrderError

DIV = "=" * 79
ROTATE_BYTES = 20 * 1024 * 1024

CHRONICLES_HEADER = f"""{DIV}
PANELCALC CHRONICLES - order ledger
{DIV}
note: append chronologically; never rewrite history
{DIV}
"""


def data_dir() -> str:
    """PANELCALC_DATA_DIR or ~/.panelcalc; created on demand."""
    base = os.environ.get("PANELCALC_DATA_DIR") or os.path.join(os.path.expanduser("~"), ".panelcalc")
    os.makedirs(base, exist_ok=True)
    return base


def chronicles_path() -> str:
    return os.path.join(data_dir(), "chronicles.txt")


def events_path() -> str:
    return os.path.join(data_dir(), "events.jsonl")


def debug_on() -> bool:
    return os.environ.get("PANELCALC_DEBUG", "0") not in ("0", "", "false", "False", "FALSE")


def dbg(exc: Exception, where: str = "") -> None:
    """
    Diagnostics for failures the UI keeps running through. Enable with PANELCALC_DEBUG=1.
    Writes to stderr and <data dir>/debug.log.
    """
    if not debug_on():
        return
    stamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    msg = f"[{stamp}] {where}: {exc}\n{tb}"
    print(msg, file=sys.stderr)
    try:
        with open(os.path.join(data_dir(), "debug.log"), "a", encoding="utf-8") as f:
            f.write(msg + "\n")
    except OSError:
        pass


def _ensure_header(path: str) -> None:
    if not os.path.exists(path):
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(CHRONICLES_HEADER)


def append_to_chronicles(title: str, lines: list[str]) -> None:
    path = chronicles_path()
    _ensure_header(path)
    ts = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    block = [DIV, f"{title} - {ts}", DIV]
    block.extend(lines)
    block.append(DIV)
    block.append("end of entry")
    block.append(DIV)
    with open(path, "a", encoding="utf-8", newline="\n") as f:
        f.write("\n".join(block) + "\n")


def log_app_event(event: str, details: list[str] | None = None) -> None:
    details = details or []
    lines = [f"event: {event}"]
    lines.extend([f"- {d}" for d in details])
    append_to_chronicles("app log", lines)


def log_error(event: str, err: Exception) -> None:
    tb = "".join(traceback.format_exception(type(err), err, err.__traceback__))
    lines = [f"error: {event}", "traceback:", tb.strip()]
    append_to_chronicles("app error", lines)


def soft_fail(where: str, exc: Exception) -> None:
    """
    Record a failure the caller keeps running through: debug log, then the
    chronicle. A ledger that cannot be written only reaches the debug log.
    """
    dbg(exc, where)
    try:
        log_error(where, exc)
    except OSError as e:
        dbg(e, f"soft_fail({where})")


def _rotate_if_large(path: str) -> None:
    if os.path.exists(path) and os.path.getsize(path) >= ROTATE_BYTES:
        root, ext = os.path.splitext(os.path.basename(path))
        ts = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
        rotated = os.path.join(os.path.dirname(path), f"{root}.{ts}{ext}")
        os.replace(path, rotated)  # atomic on same FS


def log_event(event: str, data: dict | None = None) -> dict:
    """Append one JSON object to events.jsonl; returns the record written."""
    path = events_path()
    _rotate_if_large(path)
    obj = dict(data or {})
    obj.setdefault("schema", "1.0")
    obj.setdefault("ts", datetime.datetime.now().isoformat(timespec="seconds"))
    obj["event"] = event
    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(obj, ensure_ascii=False) + "\n")
    return obj


def record_order(result) -> dict:
    """
    Ledger one processed order (Report or OrderError):
      - jsonl event with outcome, group count and total inches / error kind
      - chronicle entry for errors and for any report notes
    """
    if isinstance(result, OrderError):
        rec = log_event("order_error", {"outcome": "error", "error_kind": result.kind, "line": result.line})
        append_to_chronicles("order rejected", [f"kind: {result.kind}", f"line: {result.line}", f"detail: {result.detail}"])
        return rec

    outcome = "empty" if result.is_empty else "report"
    rec = log_event("order_processed", {
        "outcome": outcome,
        "groups": len(result.lines),
        "total_inches": result.total_inches,
        "notes": list(result.notes),
    })
    if result.notes:
        append_to_chronicles("order notes", [f"- {n}" for n in result.notes])
    return rec
