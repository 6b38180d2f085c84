"""Errors raised while building a type graph."""


class SchemaGraphError(Exception):
    """Base class for type graph construction errors."""


class InvalidInputError(SchemaGraphError):
    """Introspection document is missing its __schema.types structure."""


class NoRootTypeError(SchemaGraphError):
    """Schema declares no query type."""


class RootTypeNotFoundError(SchemaGraphError):
    """Declared query type is not among the schema types."""

    def __init__(self, type_name: str):
        super().__init__(f"Root type {type_name} not found")
        self.type_name = type_name
