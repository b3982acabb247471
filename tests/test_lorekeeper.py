# tests/test_lorekeeper.py
import json

from engine import aggregate_order
from lore import lorekeeper


def _events(d):
    return [json.loads(ln) for ln in (d / "events.jsonl").read_text(encoding="utf-8").splitlines()]


def test_record_report(ledger_dir):
    rec = lorekeeper.record_order(aggregate_order("5 @ 12'6\"\n2 @ 150\"\n3 @ 10'"))
    assert rec["outcome"] == "report"
    assert rec["groups"] == 2
    assert rec["total_inches"] == 1410
    ev = _events(ledger_dir)
    assert ev[-1]["event"] == "order_processed"
    assert ev[-1]["schema"] == "1.0"
    assert not (ledger_dir / "chronicles.txt").exists()


def test_record_empty_and_notes(ledger_dir):
    assert lorekeeper.record_order(aggregate_order(""))["outcome"] == "empty"
    lorekeeper.record_order(aggregate_order("1 @ 0"))
    chron = (ledger_dir / "chronicles.txt").read_text(encoding="utf-8")
    assert chron.startswith(lorekeeper.DIV)
    assert "order notes" in chron
    assert "non-positive length 0 inches" in chron


def test_record_error(ledger_dir):
    rec = lorekeeper.record_order(aggregate_order("bad-line"))
    assert rec["outcome"] == "error"
    assert rec["error_kind"] == "format"
    assert rec["line"] == "bad-line"
    chron = (ledger_dir / "chronicles.txt").read_text(encoding="utf-8")
    assert "order rejected" in chron and "line: bad-line" in chron


def test_app_event_and_error_blocks(ledger_dir):
    lorekeeper.log_app_event("started", ["cfg=1.0.0"])
    try:
        raise RuntimeError("boom")
    except RuntimeError as e:
        lorekeeper.log_error("render", e)
    chron = (ledger_dir / "chronicles.txt").read_text(encoding="utf-8")
    assert chron.count("PANELCALC CHRONICLES") == 1
    assert "event: started" in chron and "- cfg=1.0.0" in chron
    assert "error: render" in chron and "RuntimeError: boom" in chron
    assert chron.count("end of entry") == 2


def test_events_rotate(ledger_dir, monkeypatch):
    monkeypatch.setattr(lorekeeper, "ROTATE_BYTES", 10)
    lorekeeper.log_event("one", {"pad": "x" * 20})
    lorekeeper.log_event("two")
    rotated = [p for p in ledger_dir.iterdir() if p.name.startswith("events.") and p.name != "events.jsonl"]
    assert len(rotated) == 1
    assert [e["event"] for e in _events(ledger_dir)] == ["two"]


def test_dbg_only_when_enabled(ledger_dir, monkeypatch, capsys):
    lorekeeper.dbg(ValueError("quiet"), "here")
    assert capsys.readouterr().err == ""
    monkeypatch.setenv("PANELCALC_DEBUG", "1")
    lorekeeper.dbg(ValueError("loud"), "here")
    assert "here: loud" in capsys.readouterr().err
    assert "loud" in (ledger_dir / "debug.log").read_text(encoding="utf-8")


def test_soft_fail_writes_chronicle(ledger_dir):
    try:
        raise OSError("disk full")
    except OSError as e:
        lorekeeper.soft_fail("record_order", e)
    chron = (ledger_dir / "chronicles.txt").read_text(encoding="utf-8")
    assert "app error" in chron
    assert "error: record_order" in chron and "OSError: disk full" in chron


def test_soft_fail_survives_unwritable_ledger(ledger_dir, monkeypatch, capsys):
    def _boom(title, lines):
        raise OSError("read-only")

    monkeypatch.setattr(lorekeeper, "append_to_chronicles", _boom)
    monkeypatch.setenv("PANELCALC_DEBUG", "1")
    lorekeeper.soft_fail("record_order", OSError("disk full"))
    err = capsys.readouterr().err
    assert "record_order: disk full" in err
    assert "soft_fail(record_order): read-only" in err
