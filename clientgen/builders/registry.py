"""
Builder Registry - ordered configuration of type-shape strategies.

The registry is an explicit list of ``(position, builder)`` entries kept
sorted by position. It is populated once at start-up and frozen before a
generation run; dispatch walks it in ascending order and stops at the first
builder that supports a declaration.

Example:
    ```python
    registry = BuilderRegistry()
    registry.register(FilterTypeDefinitionBuilder(), 100)
    registry.register(ObjectTypeDefinitionBuilder(), 500)
    registry.freeze()
    ```
"""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Tuple

from ..errors import BuilderRegistryError
from ..observability import get_logger
from .base import TypeDefinitionBuilder

logger = get_logger(__name__)


@dataclass(frozen=True)
class RegistryEntry:
    position: Any
    builder: TypeDefinitionBuilder


class BuilderRegistry:
    """
    Position-ordered registry of :class:`TypeDefinitionBuilder` strategies.

    Features:
    - Ascending order by position at all times (stable insert)
    - Collisions on a position are an error unless ``replace=True``
    - Read-only once frozen
    """

    def __init__(self) -> None:
        self._entries: List[RegistryEntry] = []
        self._frozen = False

    def register(
        self,
        builder: TypeDefinitionBuilder,
        position: Any,
        replace: bool = False,
    ) -> "BuilderRegistry":
        """
        Register a builder at a position.

        Args:
            builder: Strategy to register
            position: Totally ordered key; lower positions are tried first
            replace: If True, replace a builder already at this position

        Raises:
            BuilderRegistryError: If the registry is frozen, the position is
                taken and replace=False, or the position is not comparable
                with the registered ones
        """
        if self._frozen:
            raise BuilderRegistryError(
                "Builder registry is frozen; register builders before generation starts",
                position=position,
                builder=repr(builder),
            )

        positions = [entry.position for entry in self._entries]
        try:
            index = bisect_left(positions, position)
            occupied = index < len(positions) and positions[index] == position
        except TypeError as exc:
            raise BuilderRegistryError(
                f"Position {position!r} is not comparable with registered positions",
                position=position,
                builder=repr(builder),
            ) from exc

        entry = RegistryEntry(position=position, builder=builder)
        if not occupied:
            self._entries.insert(index, entry)
            return self

        existing = self._entries[index].builder
        if not replace:
            raise BuilderRegistryError(
                f"Position {position!r} is already taken by {existing!r}",
                position=position,
                builder=repr(builder),
            )
        logger.warning(
            "Builder %r replaces %r at position %r", builder, existing, position
        )
        self._entries[index] = entry
        return self

    def freeze(self) -> "BuilderRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def entries(self) -> Tuple[RegistryEntry, ...]:
        return tuple(self._entries)

    def first_match(self, name: str, declaration: Any) -> Optional[TypeDefinitionBuilder]:
        """Return the lowest-positioned builder supporting the declaration."""
        for entry in self._entries:
            if entry.builder.supports(name, declaration):
                return entry.builder
        return None

    def __iter__(self) -> Iterator[TypeDefinitionBuilder]:
        return iter([entry.builder for entry in self._entries])

    def __len__(self) -> int:
        return len(self._entries)

    @classmethod
    def default(cls) -> "BuilderRegistry":
        """Registry with every built-in builder at its standard position."""
        from .enum import EnumTypeDefinitionBuilder
        from .filter import FilterTypeDefinitionBuilder
        from .object import ObjectTypeDefinitionBuilder
        from .result import ResultTypeDefinitionBuilder
        from .trait import TraitDefinitionBuilder

        registry = cls()
        registry.register(FilterTypeDefinitionBuilder(), 100)
        registry.register(ResultTypeDefinitionBuilder(), 200)
        registry.register(EnumTypeDefinitionBuilder(), 300)
        registry.register(TraitDefinitionBuilder(), 400)
        registry.register(ObjectTypeDefinitionBuilder(), 500)
        return registry
