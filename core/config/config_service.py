"""Typed, layered configuration for the word_dates engine.

Precedence (later wins):
    0. embedded defaults (_DEFAULTS)
    1. core/config/defaults.ini, if shipped
    2. environment: WORDDATES_<SECTION>__<KEY>=value
    3. user config.ini (%APPDATA%/WordDates or $XDG_CONFIG_HOME/word_dates)

Loading never writes files.
"""
from __future__ import annotations

import os
import configparser
from dataclasses import dataclass, fields
from pathlib import Path
from threading import RLock
from typing import Any, Callable, Dict, Tuple

# --------------------------------------------------------------------------- #
#  Paths & default definitions
# --------------------------------------------------------------------------- #

CONFIG_DIR = Path(__file__).resolve().parent
DEFAULTS_INI = CONFIG_DIR / "defaults.ini"
ENV_PREFIX = "WORDDATES_"

Layered = Dict[str, Dict[str, Any]]

_DEFAULTS: Layered = {
    "Writer": {
        "temp_suffix": ".tmp",
        "keep_temp_on_failure": "false",
    },
    "Synthesizer": {
        "application": "Microsoft Office Word",
    },
}


# --------------------------------------------------------------------------- #
#  Datamodels
# --------------------------------------------------------------------------- #

@dataclass
class WriterConfig:
    temp_suffix: str = ".tmp"
    keep_temp_on_failure: bool = False


@dataclass
class SynthesizerConfig:
    application: str = "Microsoft Office Word"


# --------------------------------------------------------------------------- #
#  Helpers
# --------------------------------------------------------------------------- #

def _read_ini(path: Path) -> Layered:
    cp = configparser.ConfigParser()
    cp.read(path, encoding="utf-8")
    return {section: dict(cp.items(section)) for section in cp.sections()}


def _overlay(target: Layered, source: Layered, layer: str, origin: str,
             sources: Dict[Tuple[str, str], Dict[str, str]]) -> None:
    for section, items in source.items():
        target.setdefault(section, {}).update(items)
        for key in items:
            sources[(section, key)] = {"layer": layer, "source": origin}


_TRUE = {"1", "true", "yes", "on"}


def _cast(value: Any, typ: Any) -> Any:
    # dataclass field types are strings under postponed annotations
    name = typ if isinstance(typ, str) else getattr(typ, "__name__", "")
    if name == "bool":
        return value if isinstance(value, bool) else str(value).strip().lower() in _TRUE
    if name == "int":
        return int(value)
    if name == "Path":
        return Path(str(value)).expanduser()
    return str(value)


def _section(cls: type, data: Dict[str, Any]) -> Any:
    return cls(**{f.name: _cast(data.get(f.name, f.default), f.type) for f in fields(cls)})


def _env_layer() -> Layered:
    result: Layered = {}
    for env_key, value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue
        section, sep, key = env_key[len(ENV_PREFIX):].partition("__")
        if not sep or not key:
            continue
        result.setdefault(section.title(), {})[key.lower()] = value
    return result


def _user_config_path() -> Path:
    if os.name == "nt":
        appdata = os.environ.get("APPDATA") or (Path.home() / "AppData" / "Roaming")
        return Path(appdata) / "WordDates" / "config.ini"
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "word_dates" / "config.ini"


# --------------------------------------------------------------------------- #
#  ConfigService
# --------------------------------------------------------------------------- #


class ConfigService:
    """Facade merging layered configuration with type safety."""

    def __init__(self) -> None:
        self._lock = RLock()
        self.reload()

    # ------------------------------------------------------------------ #
    def reload(self) -> None:
        with self._lock:
            merged: Layered = {}
            sources: Dict[Tuple[str, str], Dict[str, str]] = {}

            _overlay(merged, _DEFAULTS, "code", "embedded", sources)
            if DEFAULTS_INI.exists():
                _overlay(merged, _read_ini(DEFAULTS_INI), "defaults.ini", str(DEFAULTS_INI), sources)
            _overlay(merged, _env_layer(), "env", "os.environ", sources)
            user_ini = _user_config_path()
            if user_ini.exists():
                _overlay(merged, _read_ini(user_ini), "user", str(user_ini), sources)

            self._merged = merged
            self._sources = sources

            self.writer = _section(WriterConfig, merged.get("Writer", {}))
            self.synthesizer = _section(SynthesizerConfig, merged.get("Synthesizer", {}))

    # ------------------------------------------------------------------ #
    def get(self, section: str, key: str, *, cast: Callable[[Any], Any] | type = str) -> Any:
        val = self._merged.get(section, {}).get(key)
        if val is None:
            return None
        if isinstance(cast, type):
            return _cast(val, cast)
        return cast(val)

    def meta_source(self, section: str, key: str) -> Dict[str, str] | None:
        return self._sources.get((section, key))


# Global singleton
config_service = ConfigService()
