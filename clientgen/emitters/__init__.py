"""Per-language source emitters."""

from typing import Dict, Optional, Tuple, Type

from ..errors import ConfigurationError
from ..naming import JavascriptNameResolver, NameResolver, PhpNameResolver
from .base import Emitter, TypeIndex, write_atomic
from .javascript import JavascriptEmitter
from .php import PhpEmitter

EMITTERS: Dict[str, Tuple[Type[Emitter], Type[NameResolver]]] = {
    "javascript": (JavascriptEmitter, JavascriptNameResolver),
    "php": (PhpEmitter, PhpNameResolver),
}


def create_emitter(
    language: str,
    vendor_prefix: str = "",
    api_name: str = "",
    package: Optional[str] = None,
    common_package: Optional[str] = None,
    base_url: Optional[str] = None,
    version: str = "1.0.0",
) -> Emitter:
    """Build the emitter and name resolver pair registered for ``language``."""
    try:
        emitter_class, resolver_class = EMITTERS[language]
    except KeyError:
        raise ConfigurationError(
            f"Unsupported language: {language} (supported: {', '.join(sorted(EMITTERS))})",
            key="language",
        ) from None
    resolver = resolver_class(vendor_prefix=vendor_prefix, api_name=api_name, package=package)
    return emitter_class(resolver, common_package=common_package, base_url=base_url, version=version)


__all__ = [
    "Emitter",
    "TypeIndex",
    "write_atomic",
    "JavascriptEmitter",
    "PhpEmitter",
    "EMITTERS",
    "create_emitter",
]
