"""Application preferences (persisted to disk)."""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from ..core.errors import ConstructionError
from .defaults import (
    DEFAULT_MATERIAL,
    DEFAULT_SHEET_LENGTH,
    DEFAULT_SHEET_THICKNESS,
    DEFAULT_SHEET_WIDTH,
    MACHINE_NAME,
)


@dataclass
class AppSettings:
    """User preferences, serialized to ~/.pressbrake/settings.json."""

    machine_name: str = MACHINE_NAME
    default_material: str = DEFAULT_MATERIAL
    default_punch: str = ""        # empty: catalog default
    default_die: str = ""
    sheet_length: float = DEFAULT_SHEET_LENGTH
    sheet_width: float = DEFAULT_SHEET_WIDTH
    sheet_thickness: float = DEFAULT_SHEET_THICKNESS
    tooling_file: str = ""         # JSON tooling catalog, empty: built-in
    log_level: str = "INFO"

    @staticmethod
    def _path() -> Path:
        return Path.home() / ".pressbrake" / "settings.json"

    def save(self) -> None:
        p = self._path()
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(asdict(self), indent=2))

    @classmethod
    def load(cls) -> "AppSettings":
        """Read saved preferences, or defaults when nothing was saved.

        Unknown keys are ignored.  Raises :class:`ConstructionError` naming
        the file if it is unreadable, is not a JSON object, or holds a value
        of the wrong type.
        """
        p = cls._path()
        if not p.exists():
            return cls()
        try:
            data = json.loads(p.read_text())
        except ValueError as exc:
            raise ConstructionError(f"invalid settings file {p}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConstructionError(f"invalid settings file {p}: expected a JSON object")

        values = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            # field types are strings under postponed annotations
            if f.type == "float":
                ok = isinstance(value, (int, float)) and not isinstance(value, bool)
            else:
                ok = isinstance(value, str)
            if not ok:
                raise ConstructionError(
                    f"invalid settings file {p}: '{f.name}' has the wrong type ({value!r})"
                )
            values[f.name] = float(value) if f.type == "float" else value
        return cls(**values)
