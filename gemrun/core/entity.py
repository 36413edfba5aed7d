"""
Entity capabilities and the entity registry.

The engine drives two kinds of entities:

- Autonomous entities (bugs, gems, rocks...) live in named groups.
  Those that move continuously implement TimedEntity and get the frame
  delta; purely decorative ones only implement Renderable.
- The single controlled entity implements SteppedEntity: discrete
  per-tick logic with no delta.

Usage:
    registry = EntityRegistry(controlled=player)
    registry.add_group("rocks", rocks)
    registry.add_group("enemies", bugs)

    for entity in registry.autonomous():
        ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Iterator, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gemrun.graphics.surface import RenderSurface


@runtime_checkable
class TimedEntity(Protocol):
    """Entity needing continuous, time-scaled motion."""

    def update(self, dt: float) -> None:
        ...


@runtime_checkable
class SteppedEntity(Protocol):
    """Entity needing only per-tick step logic (the controlled entity)."""

    def update(self) -> None:
        ...


@runtime_checkable
class Renderable(Protocol):
    """Anything that draws itself onto the render surface."""

    def render(self, surface: RenderSurface) -> None:
        ...


class EntityRegistry:
    """
    Ordered entity groups plus one controlled entity.

    Group order is declaration order and is the order used by both the
    update and the render phase. A group registered as None, or never
    registered at all, behaves as an empty group. The registry hands out
    its lists by reference so game content can mutate membership; the
    engine itself only iterates.
    """

    def __init__(
        self,
        controlled: SteppedEntity | None = None,
        groups: dict[str, Iterable | None] | None = None,
    ):
        self.controlled = controlled
        self._groups: dict[str, list] = {}
        for name, entities in (groups or {}).items():
            self.add_group(name, entities)

    @property
    def group_names(self) -> list[str]:
        return list(self._groups)

    def add_group(self, name: str, entities: Iterable | None = None) -> list:
        """
        Declare a new group after the existing ones.

        Raises:
            ValueError: If the group name is already declared
        """
        if name in self._groups:
            raise ValueError(f"Entity group {name!r} already declared")
        self._groups[name] = list(entities) if entities is not None else []
        return self._groups[name]

    def set_group(self, name: str, entities: Iterable | None) -> None:
        """Replace a group's members, keeping its position in the order."""
        if name not in self._groups:
            self.add_group(name, entities)
            return
        self._groups[name][:] = list(entities) if entities is not None else []

    def group(self, name: str) -> list:
        """Members of a group (an empty list for unknown groups)."""
        return self._groups.get(name, [])

    def groups(self) -> Iterator[tuple[str, list]]:
        yield from self._groups.items()

    def autonomous(self) -> Iterator:
        """All autonomous entities, group by group, in iteration order."""
        for entities in self._groups.values():
            yield from list(entities)

    def __len__(self) -> int:
        count = sum(len(entities) for entities in self._groups.values())
        return count + (1 if self.controlled is not None else 0)

    def __repr__(self) -> str:
        sizes = ", ".join(f"{n}={len(e)}" for n, e in self._groups.items())
        return f"EntityRegistry(controlled={self.controlled!r}, {sizes})"
