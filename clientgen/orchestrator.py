"""
Type Definition Orchestrator - turns raw declarations into the canonical set.

Runs in two phases over one in-memory sequence:
    1. Dispatch: every declaration goes to the first registered builder that
       supports it. A base filter is recorded but never added to the output.
    2. Base filter correction: when a base filter was seen, every filter
       definition in the output is marked as extending it.

Example:
    ```python
    orchestrator = TypeDefinitionOrchestrator(BuilderRegistry.default())
    definitions = orchestrator.build_type_definitions(specification)
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .builders import BuilderRegistry
from .errors import ConfigurationError, UnrecognizedDeclarationError
from .ir import TypeDefinition
from .observability import get_logger
from .source import ApiSpecification

logger = get_logger(__name__)

UNRECOGNIZED_POLICIES = ("warn", "error", "ignore")


@dataclass
class BuildPass:
    """Run-scoped state of one :meth:`build_type_definitions` call."""

    definitions: List[TypeDefinition] = field(default_factory=list)
    saw_base_filter: bool = False
    skipped: List[str] = field(default_factory=list)


class TypeDefinitionOrchestrator:
    """
    Dispatches declarations to builders and applies the base filter pass.

    The registry is frozen on construction; the orchestrator itself keeps no
    state between runs.
    """

    def __init__(self, registry: BuilderRegistry, on_unrecognized: str = "warn"):
        """
        Args:
            registry: Builder strategies in priority order
            on_unrecognized: What to do with declarations no builder accepts:
                ``warn`` logs their names, ``error`` raises, ``ignore`` drops
                them silently
        """
        if on_unrecognized not in UNRECOGNIZED_POLICIES:
            raise ConfigurationError(
                f"on_unrecognized must be one of {', '.join(UNRECOGNIZED_POLICIES)}",
                key="on_unrecognized",
            )
        self.registry = registry.freeze()
        self.on_unrecognized = on_unrecognized

    def build_type_definitions(self, specification: ApiSpecification) -> List[TypeDefinition]:
        declarations = self._merge_declarations(specification)
        build = self._dispatch_declarations(declarations)
        if build.saw_base_filter:
            self._apply_base_filter(build.definitions)
        self._report_unrecognized(build.skipped)

        logger.info(
            "Built %d type definitions from %d declarations",
            len(build.definitions),
            len(declarations),
        )
        return [definition for definition in build.definitions if definition]

    def _merge_declarations(self, specification: ApiSpecification) -> Dict[str, Any]:
        # a trait redeclaring a type name keeps the type's position
        merged = dict(specification.types)
        merged.update(specification.traits)
        return merged

    def _dispatch_declarations(self, declarations: Dict[str, Any]) -> BuildPass:
        build = BuildPass()
        for name, declaration in declarations.items():
            builder = self.registry.first_match(name, declaration)
            if builder is None:
                build.skipped.append(name)
                continue

            definition: Optional[TypeDefinition] = builder.build_type_definition(name, declaration)
            logger.debug("Declaration %s handled by %r", name, builder)
            if definition is None:
                continue
            if definition.is_filter and definition.is_base_filter:
                build.saw_base_filter = True
                continue
            build.definitions.append(definition)
        return build

    def _apply_base_filter(self, definitions: List[TypeDefinition]) -> None:
        for definition in definitions:
            if definition.is_filter:
                definition.extends_base_filter = True

    def _report_unrecognized(self, skipped: List[str]) -> None:
        if not skipped or self.on_unrecognized == "ignore":
            return
        if self.on_unrecognized == "error":
            raise UnrecognizedDeclarationError(skipped)
        logger.warning("Skipped declarations no builder accepts: %s", ", ".join(skipped))
