# core/model.py — order data model (lines, groups, rendered report, errors)
from dataclasses import dataclass, field
from typing import List, Literal, Tuple

Style = Literal["plain", "bold", "mono", "bold_italic"]
ErrorKind = Literal["format", "quantity", "length"]


class LengthParseError(ValueError):
    """Raised by the length parser; `side` is feet, inches or numeric input."""

    def __init__(self, side: str, text: str):
        self.side = side
        self.text = text
        super().__init__(f"invalid {side}: {text!r}")


@dataclass
class OrderLine:
    quantity: int
    length_in: int
    source: str = ""


@dataclass
class PanelGroup:
    length_in: int
    quantity: int

    @property
    def total_in(self) -> int:
        return self.length_in * self.quantity


@dataclass
class Report:
    header: str
    lines: List[str] = field(default_factory=list)
    total_line: str = ""
    total_inches: int = 0
    notes: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def text(self) -> str:
        if self.is_empty:
            return self.header
        body = "".join(f"{ln}\n" for ln in self.lines)
        return f"{self.header}\n\n{body}\n{self.total_line}"

    def segments(self) -> List[Tuple[str, Style]]:
        """
        Ordered (text, style) runs for rich display:
          header bold, one monospace run per panel line, total bold-italic.
        """
        if self.is_empty:
            return [(self.header, "plain")]
        segs: List[Tuple[str, Style]] = [(f"{self.header}\n\n", "bold")]
        segs.extend((f"{ln}\n", "mono") for ln in self.lines)
        segs.append((f"\n{self.total_line}", "bold_italic"))
        return segs

    def clipboard_text(self) -> str:
        # panel lines only; header and total stay out of the clipboard
        return "".join(f"{ln}\n" for ln in self.lines)


@dataclass
class OrderError:
    kind: ErrorKind
    line: str
    detail: str
    message: str

    @property
    def text(self) -> str:
        return self.message

    def segments(self) -> List[Tuple[str, Style]]:
        return [(self.message, "plain")]

    def clipboard_text(self) -> str:
        return ""
