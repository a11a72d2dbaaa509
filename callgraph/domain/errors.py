"""
Domain Errors

Failure taxonomy for loading and editing call graph specifications.

Fatal (the whole import pass is rejected, no partial graph):
    InvalidFileContent : raw text is not a JSON document
    MalformedDocument  : top-level structure (services / load) has the wrong shape
    MalformedMethod    : a method lacks a distribution or has a broken one

Editing:
    DuplicateNodeError : a rename would give two nodes the same "service.method"

Unresolved call references are not errors; see
``callgraph.domain.models.graph.UnresolvedCallReference``.
"""

from typing import Optional


class SpecError(Exception):
    """Base class for every error raised by the specification core."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)

    def to_dict(self):
        return {
            "error": type(self).__name__,
            "message": self.message,
            "path": self.path,
        }


class InvalidFileContent(SpecError):
    """Raw input could not be parsed as a JSON document."""


class MalformedDocument(SpecError):
    """The document is missing its services mapping or has a malformed section."""


class MalformedMethod(SpecError):
    """A method is missing a required distribution or has an invalid shape."""

    def __init__(self, message: str, service: str, method: str):
        self.service = service
        self.method = method
        super().__init__(message, path=f"services.{service}.methods.{method}")


class DuplicateNodeError(SpecError):
    """Two nodes would share the same fully-qualified name."""

    def __init__(self, full_name: str, node_id: str, existing_id: str):
        self.full_name = full_name
        self.node_id = node_id
        self.existing_id = existing_id
        super().__init__(
            f"'{full_name}' is already used by node {existing_id}"
        )
