"""Material definitions and the read-only material catalog."""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator

from .errors import ConstructionError, UnknownEntryError


@dataclass(frozen=True)
class MaterialDetails:
    """Physical properties of a sheet material.

    Only ``min_bend_radius_factor`` takes part in validation; the other
    properties are carried for display.  A factor of 0 means "no specific
    factor", in which case half the sheet thickness is used.
    """

    name: str
    density: float = 0.0          # kg/m^3
    yield_stress: float = 0.0     # MPa
    tensile_modulus: float = 0.0  # GPa
    min_bend_radius_factor: float = 0.0

    def __post_init__(self) -> None:
        if not self.name:
            raise ConstructionError("material must be specified")
        if not (0 <= self.min_bend_radius_factor < math.inf):
            raise ConstructionError(
                f"min bend radius factor for '{self.name}' must be finite and non-negative, "
                f"got {self.min_bend_radius_factor}"
            )


class MaterialCatalog:
    """Immutable name -> MaterialDetails lookup.

    Built once at start-up and handed to whatever needs it.  Iteration and
    ``names()`` follow the order the materials were supplied in.
    """

    def __init__(self, materials: Iterable[MaterialDetails]):
        entries: dict[str, MaterialDetails] = {}
        for m in materials:
            if m.name in entries:
                raise ConstructionError(f"duplicate material '{m.name}'")
            entries[m.name] = m
        self._materials = MappingProxyType(entries)

    def get(self, name: str) -> MaterialDetails:
        try:
            return self._materials[name]
        except KeyError:
            raise UnknownEntryError(f"material '{name}' not found") from None

    def names(self) -> list[str]:
        return list(self._materials)

    def __contains__(self, name: object) -> bool:
        return name in self._materials

    def __len__(self) -> int:
        return len(self._materials)

    def __iter__(self) -> Iterator[MaterialDetails]:
        return iter(self._materials.values())
