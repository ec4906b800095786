"""Punch and die definitions and the tooling catalog.

The catalog can be loaded from a JSON file so a shop can describe its own
tool set; otherwise the built-in defaults from ``config.defaults`` are used.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Iterable, Optional

from .errors import ConstructionError, UnknownEntryError

DEFAULT_PUNCH_NAME = "Default Punch"
DEFAULT_DIE_NAME = "Default Die"


@dataclass(frozen=True)
class Punch:
    """Upper tool of the press brake.  Dimensions in mm, angle in degrees."""
    name: str
    height: float
    angle: float
    radius: float  # tip radius

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> Punch:
        return cls(**d)


@dataclass(frozen=True)
class Die:
    """Lower (V) tool of the press brake."""
    name: str
    v_opening: float
    angle: float
    shoulder_radius: float

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> Die:
        return cls(**d)


def _index(tools: Iterable, kind: str) -> dict:
    out = {}
    for t in tools:
        if not t.name:
            raise ConstructionError(f"{kind} name cannot be empty")
        if t.name in out:
            raise ConstructionError(f"duplicate {kind} '{t.name}'")
        out[t.name] = t
    return out


class ToolingCatalog:
    """Read-only set of available punches and dies."""

    def __init__(self, punches: Iterable[Punch], dies: Iterable[Die]):
        self._punches: dict[str, Punch] = _index(punches, "punch")
        self._dies: dict[str, Die] = _index(dies, "die")

    def get_punch(self, name: str) -> Punch:
        try:
            return self._punches[name]
        except KeyError:
            raise UnknownEntryError(f"punch '{name}' not found") from None

    def get_die(self, name: str) -> Die:
        try:
            return self._dies[name]
        except KeyError:
            raise UnknownEntryError(f"die '{name}' not found") from None

    def punch_names(self) -> list[str]:
        return sorted(self._punches)

    def die_names(self) -> list[str]:
        return sorted(self._dies)

    def default_punch(self) -> Optional[Punch]:
        """The punch named "Default Punch", else the first one listed."""
        if DEFAULT_PUNCH_NAME in self._punches:
            return self._punches[DEFAULT_PUNCH_NAME]
        return next(iter(self._punches.values()), None)

    def default_die(self) -> Optional[Die]:
        if DEFAULT_DIE_NAME in self._dies:
            return self._dies[DEFAULT_DIE_NAME]
        return next(iter(self._dies.values()), None)

    def to_json(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "punches": [self._punches[n].to_dict() for n in self.punch_names()],
            "dies": [self._dies[n].to_dict() for n in self.die_names()],
        }
        path.write_text(json.dumps(data, indent=2))

    @classmethod
    def from_json(cls, path: Path) -> ToolingCatalog:
        """Load a catalog written by :meth:`to_json` (or by hand).

        Raises
        ------
        ConstructionError:
            If the file is not UTF-8 JSON or an entry has missing/unknown keys.
        """
        try:
            data = json.loads(Path(path).read_text())
            punches = [Punch.from_dict(d) for d in data.get("punches", [])]
            dies = [Die.from_dict(d) for d in data.get("dies", [])]
        except (ValueError, TypeError, AttributeError) as exc:
            raise ConstructionError(f"invalid tooling file {path}: {exc}") from exc
        return cls(punches, dies)
