#!/usr/bin/env python3
# jtoa/config.py
"""
Config loader, defaults and the per-run render options.

Goals:
- Optional JSON file per user supplying defaults for the command line.
- Deep-merge of user config over defaults.
- Basic validation with sane fallbacks.
- One immutable RenderOptions value handed to every component.

Usage:
    from jtoa.config import Config
    cfg = Config.load()                 # ~/.config/jtoa/jtoa.json or OS-specific
    chars = cfg["render"]["chars"]
"""

from __future__ import annotations

import copy
import enum
import json
import logging
import os
import platform
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from jtoa.rendering.palette import DEFAULT_CHARS, Palette

logger = logging.getLogger(__name__)

# ----------------------------
# Defaults
# ----------------------------

DEFAULT_CONFIG: Dict[str, Any] = {
    "render": {
        "chars": DEFAULT_CHARS,
        "width": 78,                      # default mode is 'jtoa --width=78'
        "invert": False,
        "flipx": False,
        "flipy": False,
    },
    "logging": {
        "level": "WARNING",               # -v lowers this to INFO
        "file": None,                     # path or None
        "rotate_bytes": 5 * 1024 * 1024,
        "rotate_keep": 3,
    },
}

# ----------------------------
# Helpers
# ----------------------------

def _os_config_home() -> str:
    """Return per-OS config base directory."""
    if platform.system() == "Windows":
        base = os.environ.get("APPDATA") or os.path.expanduser("~\\AppData\\Roaming")
        return os.path.join(base, "jtoa")
    if platform.system() == "Darwin":
        return os.path.join(os.path.expanduser("~/Library/Application Support"), "jtoa")
    return os.path.join(os.path.expanduser("~/.config"), "jtoa")

def _default_config_path() -> str:
    """Resolve default config path, honoring JTOA_CONFIG env override."""
    env = os.environ.get("JTOA_CONFIG")
    if env:
        return os.path.expanduser(env)
    return os.path.join(_os_config_home(), "jtoa.json")

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Return deep-merged copy of dicts: values in b override a."""
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out

def _coerce_int(v: Any, default: int, minmax: Optional[Tuple[int, int]] = None) -> int:
    try:
        x = int(v)
    except (TypeError, ValueError):
        return int(default)
    if minmax:
        lo, hi = minmax
        if x < lo: x = lo
        if x > hi: x = hi
    return x

def _coerce_bool(v: Any, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("1", "true", "yes", "on"): return True
        if s in ("0", "false", "no", "off"): return False
    return default

# ----------------------------
# Validation
# ----------------------------

def _validate(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Return validated copy with fallbacks applied."""
    c = copy.deepcopy(_deep_merge(DEFAULT_CONFIG, cfg or {}))

    # render
    r = c["render"]
    chars = r.get("chars")
    if not isinstance(chars, str) or len(chars) < 2:
        r["chars"] = DEFAULT_CONFIG["render"]["chars"]
    r["width"] = _coerce_int(r.get("width"), DEFAULT_CONFIG["render"]["width"], (1, 100000))
    for key in ("invert", "flipx", "flipy"):
        r[key] = _coerce_bool(r.get(key), DEFAULT_CONFIG["render"][key])

    # logging
    lg = c["logging"]
    level = str(lg.get("level") or "").upper()
    lg["level"] = level if level in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG") \
        else DEFAULT_CONFIG["logging"]["level"]
    lf = lg.get("file")
    lg["file"] = str(lf) if lf else None
    lg["rotate_bytes"] = _coerce_int(lg.get("rotate_bytes"), DEFAULT_CONFIG["logging"]["rotate_bytes"], (256 * 1024, 50 * 1024 * 1024))
    lg["rotate_keep"]  = _coerce_int(lg.get("rotate_keep"), DEFAULT_CONFIG["logging"]["rotate_keep"], (0, 50))

    return c

# ----------------------------
# Public API
# ----------------------------

@dataclass
class Config:
    """Thin wrapper around a validated nested dict."""
    data: Dict[str, Any] = field(default_factory=lambda: _validate(DEFAULT_CONFIG))
    path: str = field(default_factory=_default_config_path)

    # --- Mapping-style access
    def __getitem__(self, k: str) -> Any:
        return self.data[k]

    # --- Ops
    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        cfg_path = os.path.expanduser(path) if path else _default_config_path()
        if not os.path.exists(cfg_path):
            return cls(_validate(DEFAULT_CONFIG), cfg_path)

        try:
            with open(cfg_path, "r", encoding="utf-8") as f:
                user_cfg = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable config %s: %s", cfg_path, exc)
            user_cfg = {}
        if not isinstance(user_cfg, dict):
            logger.warning("Ignoring config %s: top level is not an object", cfg_path)
            user_cfg = {}

        return cls(_validate(user_cfg), cfg_path)


# ----------------------------
# Render options
# ----------------------------

class SizingMode(enum.Enum):
    DERIVE_HEIGHT = "derive-height"
    DERIVE_WIDTH = "derive-width"
    FIXED = "fixed"


@dataclass(frozen=True)
class RenderOptions:
    """Everything one conversion needs, resolved once from the command line."""
    palette: Palette = field(default_factory=Palette)
    width: int = 78
    height: int = 0
    mode: SizingMode = SizingMode.DERIVE_HEIGHT
    invert: bool = False
    flipx: bool = False
    flipy: bool = False
    verbose: bool = False


__all__ = [
    "Config",
    "DEFAULT_CONFIG",
    "RenderOptions",
    "SizingMode",
]
