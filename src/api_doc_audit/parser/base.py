"""Typed model of an OpenAPI-style specification document.

Every field is optional. A document missing any of them still loads,
and the scorer reports the gap instead of failing. Unknown keys are kept
so vendor extensions (``x-*``) and fields we do not inspect pass through.
"""

from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace", "connect")


class DocumentParseError(ValueError):
    """Raised when an input file cannot be read as a specification document."""


def is_present(value: Any) -> bool:
    """Strings count only when non-empty, everything else when not None."""
    if isinstance(value, str):
        return value != ""
    return value is not None


class SpecNode(BaseModel):
    """Base for all document nodes."""

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,  # `version: 1.0` and `200:` keys in YAML
    )


class Info(SpecNode):
    title: str | None = None
    version: str | None = None
    description: str | None = None


class Server(SpecNode):
    url: str | None = None
    description: str | None = None


class Tag(SpecNode):
    name: str | None = None
    description: str | None = None


class ExternalDocs(SpecNode):
    url: str | None = None
    description: str | None = None


class SchemaObject(SpecNode):
    """A JSON Schema fragment. Only the documentation fields are typed."""

    type: Any = None  # a list in OpenAPI 3.1
    description: str | None = None
    example: Any = None
    properties: dict[str, "SchemaObject | bool | None"] | None = None

    def has_example(self) -> bool:
        """True when the schema or any of its direct properties has an example."""
        if is_present(self.example):
            return True
        return any(
            isinstance(prop, SchemaObject) and is_present(prop.example)
            for prop in (self.properties or {}).values()
        )


class MediaType(SpecNode):
    schema_: SchemaObject | None = Field(default=None, alias="schema")
    examples: Any = None

    def has_example(self) -> bool:
        if is_present(self.examples):
            return True
        return self.schema_ is not None and is_present(self.schema_.example)


class Parameter(SpecNode):
    """A single operation parameter (query, path, header, or cookie)."""

    name: str | None = None
    location: str | None = Field(default=None, alias="in")
    required: bool | None = None
    description: str | None = None
    example: Any = None
    schema_: SchemaObject | None = Field(default=None, alias="schema")

    def has_example(self) -> bool:
        if is_present(self.example):
            return True
        return self.schema_ is not None and is_present(self.schema_.example)


class RequestBody(SpecNode):
    description: str | None = None
    required: bool | None = None
    content: dict[str, MediaType | None] | None = None


class Response(SpecNode):
    description: str | None = None
    content: dict[str, MediaType | None] | None = None

    def has_example(self) -> bool:
        return any(
            media is not None and media.has_example() for media in (self.content or {}).values()
        )


class Operation(SpecNode):
    """One HTTP-method handler bound to a path."""

    operation_id: str | None = Field(default=None, alias="operationId")
    summary: str | None = None
    description: str | None = None
    tags: list[str] | None = None
    parameters: list[Parameter] | None = None
    request_body: RequestBody | None = Field(default=None, alias="requestBody")
    responses: dict[str, Response | None] | None = None

    def is_described(self) -> bool:
        return is_present(self.summary) or is_present(self.description)

    def has_response_example(self) -> bool:
        return any(
            resp is not None and resp.has_example() for resp in (self.responses or {}).values()
        )


class PathItem(SpecNode):
    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    options: Operation | None = None
    head: Operation | None = None
    patch: Operation | None = None
    trace: Operation | None = None
    connect: Operation | None = None

    def operations(self) -> Iterator[tuple[str, Operation]]:
        """Yield (method, operation) for each recognized verb, in HTTP_METHODS order."""
        for method in HTTP_METHODS:
            operation = getattr(self, method)
            if operation is not None:
                yield method, operation


class SecurityScheme(SpecNode):
    type: str | None = None
    description: str | None = None
    name: str | None = None
    location: str | None = Field(default=None, alias="in")
    scheme: str | None = None


class Components(SpecNode):
    schemas: dict[str, SchemaObject | None] | None = None
    security_schemes: dict[str, SecurityScheme | None] | None = Field(default=None, alias="securitySchemes")


class SpecDocument(SpecNode):
    """Root of an OpenAPI 3.x (or Swagger 2.0) document."""

    openapi: str | None = None
    swagger: str | None = None
    info: Info | None = None
    servers: list[Server] | None = None
    tags: list[Tag] | None = None
    external_docs: ExternalDocs | None = Field(default=None, alias="externalDocs")
    paths: dict[str, PathItem | None] | None = None
    components: Components | None = None

    def iter_operations(self) -> Iterator[tuple[str, str, Operation]]:
        """Yield (path, method, operation) for every recognized operation."""
        for path, item in (self.paths or {}).items():
            if item is None:
                continue
            for method, operation in item.operations():
                yield path, method, operation
