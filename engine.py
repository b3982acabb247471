# engine.py — PanelCalc order engine
# ---------------------------------------------------------------------
# - Single ft/in parser: 12'6", 150", 10', '6", bare 36 → whole inches
# - Order aggregation: "qty @ length" per line, merged by resolved length
# - Report rendering: longest-first panel lines + grand total
# - All-or-nothing: first bad line returns an OrderError, no partial report
# - Pure: no I/O here; front ends (app.py, cli.py) log and display

from __future__ import annotations

import re
from typing import Dict, List, Mapping, Optional, Union

from core.model import LengthParseError, OrderError, OrderLine, PanelGroup, Report

# ============================== CONSTANTS ==============================

FEET_MARK = "'"
INCH_MARK = '"'
QTY_DELIM = "@"
INCHES_PER_FOOT = 12

# optional sign + ASCII digits only: no 1_0, no non-ASCII digits
_INT_RE = re.compile(r"[+-]?[0-9]+")

DEFAULT_LABELS: Dict[str, str] = {
    "header": "🧾 Sorted Panel List (Longest to Shortest):",
    "total": "📐 Total Order Length:",
    "empty": "No valid panels entered.",
}


# ============================== LENGTHS ================================

def _feet_and_inches(total_in: int) -> tuple[int, int]:
    # truncates toward zero: -6 → (0, -6)
    feet = abs(total_in) // INCHES_PER_FOOT
    inches = abs(total_in) % INCHES_PER_FOOT
    if total_in < 0:
        return -feet, -inches
    return feet, inches


def format_feet_inches(total_in: int) -> str:
    """150 → 12' 6" (feet and inches truncate toward zero)."""
    feet, inches = _feet_and_inches(int(total_in))
    return f"{feet}' {inches}\""


def _atoi(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    return int(text)


def _to_int(text: str, side: str) -> int:
    try:
        return _atoi(text)
    except ValueError:
        raise LengthParseError(side, text) from None


def parse_length_input(txt: str) -> int:
    """
    Convert a length string to whole inches.
      12'6"  → 150     (feet marker: split on the first ')
      12'    → 144     '6" → 6 (either side may be empty)
      150"   → 150     (inches marker only)
      36     → 36      (bare integer is inches)
    Raises LengthParseError naming the side that failed.
    """
    s = str(txt if txt is not None else "").strip().lower()
    feet = inches = 0

    if FEET_MARK in s:
        feet_str, _, inch_part = s.partition(FEET_MARK)
        feet_str = feet_str.strip()
        if feet_str:
            feet = _to_int(feet_str, "feet")
        inch_part = inch_part.strip()
        if inch_part.endswith(INCH_MARK):
            inch_part = inch_part[: -len(INCH_MARK)]
        inch_part = inch_part.strip()
        if inch_part:
            inches = _to_int(inch_part, "inches")
    elif INCH_MARK in s:
        inch_str = s[: -len(INCH_MARK)] if s.endswith(INCH_MARK) else s
        inches = _to_int(inch_str.strip(), "inches")
    else:
        inches = _to_int(s, "numeric input")

    return feet * INCHES_PER_FOOT + inches


# ============================== ORDERS =================================

def parse_order_line(line: str) -> Union[OrderLine, OrderError]:
    """One trimmed, non-empty 'qty @ length' line → OrderLine or OrderError."""
    parts = line.split(QTY_DELIM)
    if len(parts) != 2:
        return OrderError(
            kind="format", line=line, detail=f"expected 1 '{QTY_DELIM}', found {len(parts) - 1}",
            message=f"⚠️ Invalid format in line: {line}\nUse: quantity @ length",
        )

    qty_str = parts[0].strip()
    len_str = parts[1].strip()

    try:
        qty = _atoi(qty_str)
    except ValueError:
        qty = 0
    if qty <= 0:
        return OrderError(
            kind="quantity", line=line, detail=f"not a positive integer: {qty_str!r}",
            message=f"⚠️ Invalid quantity '{qty_str}'",
        )

    try:
        length_in = parse_length_input(len_str)
    except LengthParseError as e:
        return OrderError(
            kind="length", line=line, detail=str(e),
            message=f"⚠️ Invalid length '{len_str}': {e}",
        )

    return OrderLine(quantity=qty, length_in=length_in, source=line)


def group_panels(order_lines: List[OrderLine]) -> List[PanelGroup]:
    """Merge quantities per length; longest first."""
    by_length: Dict[int, int] = {}
    for ol in order_lines:
        by_length[ol.length_in] = by_length.get(ol.length_in, 0) + ol.quantity
    groups = [PanelGroup(length_in=k, quantity=v) for k, v in by_length.items()]
    groups.sort(key=lambda g: g.length_in, reverse=True)
    return groups


def render_report(groups: List[PanelGroup], labels: Optional[Mapping[str, str]] = None,
                  notes: Optional[List[str]] = None) -> Report:
    lbl = {**DEFAULT_LABELS, **(labels or {})}
    if not groups:
        return Report(header=lbl["empty"], notes=list(notes or []))

    total_in = sum(g.total_in for g in groups)
    lines = [f"{g.quantity} @ {format_feet_inches(g.length_in)}" for g in groups]
    total_line = f"{lbl['total']} {format_feet_inches(total_in)} ({total_in} inches)"
    return Report(
        header=lbl["header"], lines=lines, total_line=total_line,
        total_inches=total_in, notes=list(notes or []),
    )


def aggregate_order(raw_text: str, labels: Optional[Mapping[str, str]] = None) -> Union[Report, OrderError]:
    """
    Parse a multi-line panel list and return the rendered Report.
    The first malformed line aborts the whole order and its OrderError is
    returned instead; empty input yields the informational empty Report.
    """
    order_lines: List[OrderLine] = []
    notes: List[str] = []

    for raw in (raw_text or "").split("\n"):
        line = raw.strip()
        if not line:
            continue
        parsed = parse_order_line(line)
        if isinstance(parsed, OrderError):
            return parsed
        if parsed.length_in <= 0:
            notes.append(f"non-positive length {parsed.length_in} inches in line '{line}'")
        order_lines.append(parsed)

    return render_report(group_panels(order_lines), labels, notes)
