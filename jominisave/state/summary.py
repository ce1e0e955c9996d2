"""Overview fields read from a parsed gamestate."""

from __future__ import annotations

from dataclasses import dataclass

from jominisave.query import find_first, resolve_from
from jominisave.tree import NodeView, ParsedDocument, parse_bool, parse_int, unquote

UNKNOWN_PLANET_NAME = "Unknown"


@dataclass(frozen=True, slots=True)
class PlanetSummary:
    id: str
    name: str
    type: str
    size: int
    path: tuple[str, ...]
    """Path of the planet block, usable with the patch engine."""


@dataclass(frozen=True, slots=True)
class SaveSummary:
    empire_name: str
    game_date: str
    version: str
    is_ironman: bool
    planets: tuple[PlanetSummary, ...]

    @property
    def num_planets(self) -> int:
        return len(self.planets)

    def planet(self, planet_id: str) -> PlanetSummary | None:
        for planet in self.planets:
            if planet.id == planet_id:
                return planet
        return None


def summarize(document: ParsedDocument) -> SaveSummary:
    root = document.root
    return SaveSummary(
        empire_name=_empire_name(document),
        game_date=unquote(root.child_value("date") or ""),
        version=unquote(root.child_value("version") or ""),
        is_ironman=any(
            node.name == "ironman" and node.value is not None and parse_bool(node.value) is True
            for node in root.descendants()
        ),
        planets=tuple(_planets(document)),
    )


def _empire_name(document: ParsedDocument) -> str:
    empire = find_first(document, "empire")
    if empire is None:
        return ""
    key = resolve_from(empire, ("name", "key")).node
    if key is None or key.value is None:
        return ""
    return unquote(key.value)


def _planets(document: ParsedDocument) -> list[PlanetSummary]:
    planets = find_first(document, "planets")
    if planets is None:
        return []
    # Full saves nest the id-keyed blocks one level deeper: planets={ planet={ 1={...} } }.
    container = planets.child("planet") or planets

    summaries: list[PlanetSummary] = []
    for node in container.children:
        if node.name is None or not node.name.isdigit() or not node.has_block:
            continue
        summaries.append(
            PlanetSummary(
                id=node.name,
                name=_planet_name(node),
                type=unquote(node.child_value("planet_class") or ""),
                size=parse_int(node.child_value("planet_size") or "") or 0,
                path=node.path(),
            )
        )
    return summaries


def _planet_name(planet: NodeView) -> str:
    name = planet.child("name")
    if name is None:
        return UNKNOWN_PLANET_NAME

    # Generated names: name={ key="..." variables={ { key="NAME" value={ key="Earth" } } } }
    variables = name.child("variables")
    if variables is not None:
        for variable in variables.children:
            if unquote(variable.child_value("key") or "") != "NAME":
                continue
            value = resolve_from(variable, ("value", "key")).node
            if value is not None and value.value is not None:
                return unquote(value.value)

    key = name.child_value("key")
    if key is not None:
        return unquote(key)
    return UNKNOWN_PLANET_NAME


__all__ = ["PlanetSummary", "SaveSummary", "UNKNOWN_PLANET_NAME", "summarize"]
