"""
clientgen - client library generator for RAML-described HTTP APIs.

Pipeline:
    1. Source: RAML document (file or URL) read into raw declarations and
       resource actions
    2. Builders: position-ordered type-shape strategies (filter, result,
       enum, trait, object) in a frozen registry
    3. Orchestrator: dispatches declarations to builders and marks filters
       that extend the base filter
    4. Emitters: deterministic JavaScript and PHP source trees

Example:
    ```bash
    clientgen generate php api/transfer.raml --api-name transfer --vendor-prefix acme
    ```
"""

__version__ = "1.0.0"

from .builders import BuilderRegistry, TypeDefinitionBuilder
from .config import GeneratorConfig, load_config
from .emitters import Emitter, JavascriptEmitter, PhpEmitter, create_emitter
from .errors import (
    BuilderRegistryError,
    ClientGenError,
    ConfigurationError,
    EmissionError,
    SpecificationError,
    UnrecognizedDeclarationError,
    UnresolvedReferenceError,
)
from .generator import CodeGenerator, GenerationResult
from .ir import (
    PropertyDefinition,
    ReferenceKind,
    ResourceAction,
    ScalarType,
    TypeDefinition,
    TypeKind,
    TypeReference,
)
from .naming import JavascriptNameResolver, NameResolver, PhpNameResolver
from .orchestrator import TypeDefinitionOrchestrator
from .source import ApiSpecification, load_specification, parse_specification

__all__ = [
    "__version__",
    "BuilderRegistry",
    "TypeDefinitionBuilder",
    "GeneratorConfig",
    "load_config",
    "Emitter",
    "JavascriptEmitter",
    "PhpEmitter",
    "create_emitter",
    "ClientGenError",
    "SpecificationError",
    "BuilderRegistryError",
    "UnrecognizedDeclarationError",
    "UnresolvedReferenceError",
    "EmissionError",
    "ConfigurationError",
    "CodeGenerator",
    "GenerationResult",
    "TypeDefinition",
    "TypeKind",
    "TypeReference",
    "ReferenceKind",
    "ScalarType",
    "PropertyDefinition",
    "ResourceAction",
    "NameResolver",
    "JavascriptNameResolver",
    "PhpNameResolver",
    "TypeDefinitionOrchestrator",
    "ApiSpecification",
    "load_specification",
    "parse_specification",
]
