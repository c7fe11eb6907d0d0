"""
Specification source - reads RAML 1.0 documents into an :class:`ApiSpecification`.

The specification exposes declared types and traits as ordered raw mappings
(the declarations are left opaque for the type builders) and the resource tree
already flattened into :class:`ResourceAction` records.

Example:
    ```python
    specification = load_specification(Path("api/transfer.raml"), client_name="Transfer")
    for name, declaration in specification.types.items():
        ...
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urljoin
import re

import httpx
import yaml

from .errors import SpecificationError
from .ir import HttpMethod, ResourceAction, TypeReference
from .observability import get_logger
from .type_tokens import parse_type_node

logger = get_logger(__name__)

DEFAULT_FETCH_TIMEOUT = 30.0
FILTER_SUFFIX = "Filter"

_YAML_SUFFIXES = {".raml", ".yaml", ".yml", ".json"}
_METHODS = {method.value.lower(): method for method in HttpMethod}


@dataclass
class ApiSpecification:
    """Raw declarations of one API, in source order."""

    title: str
    types: Dict[str, Any] = field(default_factory=dict)
    traits: Dict[str, Any] = field(default_factory=dict)
    resources: List[ResourceAction] = field(default_factory=list)
    base_uri: Optional[str] = None
    version: Optional[str] = None


class _DocumentReader:
    """Reads the root document and resolves ``!include`` relative to it."""

    def __init__(self, timeout: float = DEFAULT_FETCH_TIMEOUT):
        self.timeout = timeout

    def read(self, location: str) -> Any:
        text = self._read_text(location)
        reader = self

        class _Loader(yaml.SafeLoader):
            pass

        def _include(loader: yaml.SafeLoader, node: yaml.Node) -> Any:
            target = reader.resolve(location, loader.construct_scalar(node))
            if Path(target.split("?")[0]).suffix.lower() in _YAML_SUFFIXES:
                return reader.read(target)
            return reader._read_text(target)

        _Loader.add_constructor("!include", _include)
        try:
            return yaml.load(text, Loader=_Loader)
        except yaml.YAMLError as exc:
            raise SpecificationError(f"Malformed specification: {exc}", source=location) from exc

    def resolve(self, base: str, reference: str) -> str:
        if _is_url(reference):
            return reference
        if _is_url(base):
            return urljoin(base, reference)
        return str(Path(base).parent / reference)

    def _read_text(self, location: str) -> str:
        if _is_url(location):
            logger.debug("Fetching specification document %s", location)
            try:
                response = httpx.get(location, timeout=self.timeout, follow_redirects=True)
                response.raise_for_status()
            except httpx.HTTPError as exc:
                raise SpecificationError(f"Cannot fetch {location}: {exc}", source=location) from exc
            return response.text
        try:
            return Path(location).read_text(encoding="utf-8")
        except OSError as exc:
            raise SpecificationError(f"Cannot read {location}: {exc}", source=location) from exc


def load_specification(
    location: Union[str, Path],
    client_name: Optional[str] = None,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
) -> ApiSpecification:
    """
    Load a RAML document from a path or an http(s) URL.

    Args:
        location: File path or URL of the root document
        client_name: Grouping name given to every resource action
            (defaults to the document title)
        timeout: Network timeout for URL sources

    Raises:
        SpecificationError: If the document cannot be read or is not a mapping
    """
    source = str(location)
    document = _DocumentReader(timeout=timeout).read(source)
    return parse_specification(document, client_name=client_name, source=source)


def parse_specification(
    document: Any,
    client_name: Optional[str] = None,
    source: Optional[str] = None,
) -> ApiSpecification:
    """Build an :class:`ApiSpecification` from an already parsed document."""
    if not isinstance(document, dict):
        raise SpecificationError("Specification root must be a mapping", source=source)

    title = str(document.get("title") or "Api")
    types = _ordered_declarations(document.get("types"), "types", source)
    traits = _ordered_declarations(document.get("traits"), "traits", source)
    grouping = client_name or _grouping_name(title)

    resources: List[ResourceAction] = []
    for key, node in document.items():
        if isinstance(key, str) and key.startswith("/"):
            _collect_actions(key, node, grouping, traits, resources, source)

    logger.debug(
        "Parsed specification %r: %d types, %d traits, %d actions",
        title,
        len(types),
        len(traits),
        len(resources),
    )
    return ApiSpecification(
        title=title,
        types=types,
        traits=traits,
        resources=resources,
        base_uri=document.get("baseUri"),
        version=None if document.get("version") is None else str(document.get("version")),
    )


def _ordered_declarations(node: Any, section: str, source: Optional[str]) -> Dict[str, Any]:
    if node is None:
        return {}
    if isinstance(node, dict):
        return {str(name): value for name, value in node.items()}
    if isinstance(node, list):
        # RAML 0.8 style: a list of single-key mappings
        merged: Dict[str, Any] = {}
        for entry in node:
            if not isinstance(entry, dict):
                raise SpecificationError(f"Invalid entry in '{section}': {entry!r}", source=source)
            for name, value in entry.items():
                merged[str(name)] = value
        return merged
    raise SpecificationError(f"'{section}' must be a mapping", source=source)


def _collect_actions(
    path: str,
    node: Any,
    client: str,
    traits: Dict[str, Any],
    out: List[ResourceAction],
    source: Optional[str] = None,
) -> None:
    if not isinstance(node, dict):
        return
    inherited_traits = _trait_names(node.get("is"))
    for key, value in node.items():
        if not isinstance(key, str):
            continue
        if key.startswith("/"):
            _collect_actions(path + key, value, client, traits, out, source)
        elif key.lower() in _METHODS:
            if value is not None and not isinstance(value, dict):
                raise SpecificationError(f"Method '{key}' of {path} must be a mapping", source=source)
            out.append(
                _build_action(path, _METHODS[key.lower()], value or {}, client, traits, inherited_traits)
            )


def _build_action(
    path: str,
    method: HttpMethod,
    node: Dict[str, Any],
    client: str,
    traits: Dict[str, Any],
    inherited_traits: List[str],
) -> ResourceAction:
    request_type = _body_type(node.get("body"))
    if request_type is None:
        for trait_name in _trait_names(node.get("is")) + inherited_traits:
            if trait_name in traits and _is_filter_trait(trait_name):
                request_type = TypeReference.to_type(trait_name)
                break

    return ResourceAction(
        client=client,
        method=method,
        path=path,
        description=_clean_description(node.get("description")),
        display_name=node.get("displayName"),
        request_type=request_type,
        response_type=_response_type(node.get("responses")),
    )


def _body_type(body: Any) -> Optional[TypeReference]:
    if body is None:
        return None
    if isinstance(body, dict):
        media = [key for key in body if isinstance(key, str) and "/" in key]
        if media:
            preferred = "application/json" if "application/json" in media else media[0]
            body = body[preferred]
    if body is None:
        return None
    reference, _ = parse_type_node(body)
    return reference


def _response_type(responses: Any) -> Optional[TypeReference]:
    if not isinstance(responses, dict):
        return None
    for code in sorted(responses, key=str):
        if str(code).startswith("2"):
            response = responses[code]
            if isinstance(response, dict) and response.get("body") is not None:
                return _body_type(response["body"])
    return None


def _trait_names(node: Any) -> List[str]:
    if node is None:
        return []
    if isinstance(node, str):
        return [node]
    names: List[str] = []
    for entry in node:
        if isinstance(entry, str):
            names.append(entry)
        elif isinstance(entry, dict):
            # parameterised trait application
            names.extend(str(name) for name in entry)
    return names


def _is_filter_trait(name: str) -> bool:
    # only filter traits become types; the base filter itself is never emitted
    return name.endswith(FILTER_SUFFIX) and name != FILTER_SUFFIX


def _clean_description(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value).rstrip()


def _grouping_name(title: str) -> str:
    words = re.findall(r"[A-Za-z0-9]+", title)
    if not words:
        return "Api"
    return "".join(word[:1].upper() + word[1:] for word in words)


def _is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))
