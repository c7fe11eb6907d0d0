"""
JavaScript emitter - ES module entities and promise-based clients.

Generates:
    1. ``src/entity/<Type>.js`` per type definition
    2. ``src/service/<Client>Client.js`` per client grouping
    3. ``src/service/DateFactory.js``, ``src/index.js`` and ``package.json``
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from ..ir import ReferenceKind, ResourceAction, TypeKind, TypeReference
from ..naming import JavascriptNameResolver
from .base import Emitter, TypeIndex

SCALAR_DOC_TYPES = {
    "string": "string",
    "integer": "number",
    "number": "number",
    "boolean": "boolean",
    "datetime": "Date",
    "date": "Date",
    "any": "*",
}


class JavascriptEmitter(Emitter):
    language = "javascript"
    file_extension = "js"

    def __init__(self, resolver: JavascriptNameResolver, *args, **kwargs):
        super().__init__(resolver, *args, **kwargs)
        self.environment.filters["braced"] = lambda value: "{" + value + "}"

    def default_common_package(self) -> str:
        return "http-client-common"

    def doc_type(self, reference: TypeReference, index: TypeIndex, qualified: bool = False) -> str:
        if reference.kind == ReferenceKind.ARRAY:
            return f"Array.<{self.doc_type(reference.items, index)}>"
        if reference.kind == ReferenceKind.SCALAR:
            return SCALAR_DOC_TYPES[reference.name]
        if index.kind_of(reference.name) == TypeKind.ENUM:
            return "string"
        return self.resolver.class_name_for(reference.name)

    def path_parameter_doc_type(self) -> str:
        return "string"

    def path_expression(self, action: ResourceAction) -> str:
        pieces = []
        for kind, text in self.path_parts(action):
            if kind == "literal":
                pieces.append(self.quote(text))
            else:
                pieces.append(f"encodeURIComponent({text})")
        return " + ".join(pieces)

    def render_support_files(
        self, index: TypeIndex, groups: List[Tuple[str, List[ResourceAction]]]
    ) -> Dict[str, str]:
        entities = [
            (self.resolver.class_name_for(d.name), self.resolver.file_name_for(d)) for d in index.definitions
        ]
        clients = [
            (self.resolver.client_class_name_for(client), self.resolver.file_name_for(client))
            for client, _ in groups
        ]
        return {
            "src/service/DateFactory.js": self.render_template("date_factory", {}),
            "src/index.js": self.render_template(
                "index",
                {
                    "exports": [
                        {"name": name, "module": "./" + path[len("src/"):-len(".js")]}
                        for name, path in [("DateFactory", "src/service/DateFactory.js")] + clients + entities
                    ]
                },
            ),
            "package.json": self.render_template(
                "package.json.j2", {"package_name": self.resolver.package_name()}
            ),
        }
