"""
Code Generator - runs one complete generation from specification to source tree.

Example:
    ```python
    config = GeneratorConfig(language="php", api_name="transfer", vendor_prefix="acme")
    written = CodeGenerator(config).generate("api/transfer.raml")
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union
import shutil

from .builders import BuilderRegistry
from .config import GeneratorConfig
from .emitters import create_emitter
from .errors import EmissionError
from .ir import ResourceAction, TypeDefinition, compute_build_hash
from .observability import get_logger
from .orchestrator import TypeDefinitionOrchestrator
from .source import ApiSpecification, load_specification

logger = get_logger(__name__)


@dataclass
class GenerationResult:
    """What a run produced."""

    definitions: List[TypeDefinition] = field(default_factory=list)
    actions: List[ResourceAction] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)
    build_hash: str = ""


class CodeGenerator:
    """
    Loads a specification, builds its Type Definitions and emits one language.

    The target directory ``output_dir / api_name`` is replaced on every run,
    but only after rendering succeeded.
    """

    def __init__(self, config: GeneratorConfig, registry: Optional[BuilderRegistry] = None):
        self.config = config
        self.registry = registry or BuilderRegistry.default()

    def generate(self, location: Union[str, Path]) -> GenerationResult:
        specification = load_specification(location, client_name=self.config.client_name)
        return self.generate_from(specification)

    def generate_from(self, specification: ApiSpecification) -> GenerationResult:
        config = self.config
        orchestrator = TypeDefinitionOrchestrator(self.registry, on_unrecognized=config.on_unrecognized)
        definitions = orchestrator.build_type_definitions(specification)

        emitter = create_emitter(
            config.language,
            vendor_prefix=config.vendor_prefix,
            api_name=config.api_name,
            package=config.package_name,
            common_package=config.common_package,
            base_url=config.base_url or specification.base_uri,
            version=config.version,
        )
        # reference check and rendering happen before the old tree is removed
        files = emitter.render(definitions, specification.resources)

        target = config.target_dir
        if target.exists():
            logger.info("Removing previous output %s", target)
            try:
                shutil.rmtree(target)
            except OSError as exc:
                raise EmissionError(
                    f"Cannot clear {target}: {exc}", target_language=config.language, path=str(target)
                ) from exc
        written = emitter.write(files, target)

        return GenerationResult(
            definitions=definitions,
            actions=list(specification.resources),
            written=written,
            build_hash=compute_build_hash(definitions, specification.resources),
        )
