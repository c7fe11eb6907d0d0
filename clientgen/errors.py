"""
Error types for clientgen.

Every failure surfaced by the generation pipeline is a :class:`ClientGenError`
carrying a stable code and structured details, so callers (the CLI, tests,
CI wrappers) can react to the category without parsing messages.
"""

from typing import Any, Dict, List, Optional


class ClientGenError(Exception):
    """Base exception for all clientgen errors."""

    def __init__(
        self,
        message: str,
        code: str = "CG000",
        details: Optional[Dict[str, Any]] = None,
        hint: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.hint = hint

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to structured dictionary."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }

    def format(self) -> str:
        text = f"{self.message} ({self.code})"
        if self.hint:
            text = f"{text} Hint: {self.hint}"
        return text


class SpecificationError(ClientGenError):
    """The specification document could not be read or is malformed."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(
            message,
            code="CG001",
            details={"source": source},
        )
        self.source = source


class BuilderRegistryError(ClientGenError):
    """Invalid builder registry configuration."""

    def __init__(
        self,
        message: str,
        position: Optional[Any] = None,
        builder: Optional[str] = None,
    ):
        super().__init__(
            message,
            code="CG002",
            details={"position": position, "builder": builder},
        )
        self.position = position
        self.builder = builder


class UnrecognizedDeclarationError(ClientGenError):
    """Declarations that no registered builder accepts (strict mode only)."""

    def __init__(self, names: List[str]):
        super().__init__(
            f"No type builder accepts declaration(s): {', '.join(names)}",
            code="CG003",
            details={"names": list(names)},
            hint="register a builder for these shapes or run without strict mode",
        )
        self.names = list(names)


class UnresolvedReferenceError(ClientGenError):
    """A type or action references a type name that was never produced."""

    def __init__(
        self,
        missing_name: str,
        referenced_by: str,
        target_language: Optional[str] = None,
    ):
        super().__init__(
            f"Unknown type '{missing_name}' referenced by {referenced_by}",
            code="CG004",
            details={
                "missing_name": missing_name,
                "referenced_by": referenced_by,
                "target_language": target_language,
            },
        )
        self.missing_name = missing_name
        self.referenced_by = referenced_by
        self.target_language = target_language


class EmissionError(ClientGenError):
    """Error while rendering or writing generated sources."""

    def __init__(
        self,
        message: str,
        target_language: Optional[str] = None,
        path: Optional[str] = None,
    ):
        super().__init__(
            message,
            code="CG005",
            details={"target_language": target_language, "path": path},
        )
        self.target_language = target_language
        self.path = path


class ConfigurationError(ClientGenError):
    """Invalid generator configuration."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message, code="CG006", details={"key": key})
        self.key = key
