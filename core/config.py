# core/config.py — app config loader + helpers

import json, os
from dataclasses import dataclass
from typing import Any, Dict, Tuple

APP_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_CONFIG_PATH = os.path.join(APP_DIR, "config", "app.json")

DEFAULTS: Dict[str, Any] = {
    "version": "0.0.0",
    "ui": {
        "window_title": "Metal Roofing Panel Calculator",
        "window_size": [800, 600],
        "split_ratio": 0.45,
        "placeholder": "Example:\n5 @ 12'6\"\n2 @ 150\"\n3 @ 10'\n",
        "initial_output": "Results will appear here...",
    },
    "report": {
        "header": "🧾 Sorted Panel List (Longest to Shortest):",
        "total": "📐 Total Order Length:",
        "empty": "No valid panels entered.",
    },
}

# ---------- simple in-process cache ----------
_CONFIG_CACHE = None
_CONFIG_KEY = None


def config_path() -> str:
    return os.environ.get("PANELCALC_CONFIG") or DEFAULT_CONFIG_PATH


@dataclass
class AppConfig:
    raw: Dict[str, Any]

    def _section(self, name: str) -> Dict[str, Any]:
        sec = self.raw.get(name)
        return sec if isinstance(sec, dict) else {}

    def _ui(self, key: str):
        return self._section("ui").get(key, DEFAULTS["ui"][key])

    @property
    def version(self) -> str:
        return str(self.raw.get("version", DEFAULTS["version"]))

    def window_title(self) -> str:
        return str(self._ui("window_title"))

    def window_size(self) -> Tuple[int, int]:
        try:
            w, h = self._ui("window_size")
            return int(w), int(h)
        except (TypeError, ValueError):
            w, h = DEFAULTS["ui"]["window_size"]
            return w, h

    def split_ratio(self) -> float:
        """Share of the window height given to the input box (clamped 0.1–0.9)."""
        try:
            r = float(self._ui("split_ratio"))
        except (TypeError, ValueError):
            r = DEFAULTS["ui"]["split_ratio"]
        return min(0.9, max(0.1, r))

    def placeholder(self) -> str:
        return str(self._ui("placeholder"))

    def initial_output(self) -> str:
        return str(self._ui("initial_output"))

    def report_labels(self) -> Dict[str, str]:
        sec = self._section("report")
        return {k: str(sec.get(k, v)) for k, v in DEFAULTS["report"].items()}


def _read_config_from_disk(path: str) -> AppConfig:
    if not os.path.exists(path):
        return AppConfig({})
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Malformed config at {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Config at {path} must be a JSON object")
    return AppConfig(data)


def load_config() -> AppConfig:
    global _CONFIG_CACHE, _CONFIG_KEY
    path = config_path()
    try:
        mtime = os.path.getmtime(path)
    except OSError:
        mtime = None

    key = (path, mtime)
    if _CONFIG_CACHE is None or _CONFIG_KEY != key:
        _CONFIG_CACHE = _read_config_from_disk(path)
        _CONFIG_KEY = key
    return _CONFIG_CACHE


def reload_config() -> AppConfig:
    """
    Force cache invalidation + re-read from disk.
    """
    global _CONFIG_CACHE, _CONFIG_KEY
    _CONFIG_CACHE = None
    _CONFIG_KEY = None
    return load_config()
