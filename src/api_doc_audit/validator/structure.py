"""Structural validation of OpenAPI 3.x / Swagger 2.0 documents.

Works on the raw mapping rather than SpecDocument, so wrongly typed
nodes are reported as errors instead of failing the load.
"""

import logging
import re

from pydantic import BaseModel

from api_doc_audit.parser.detect import OPENAPI_3, detect_spec_type

logger = logging.getLogger(__name__)

OPENAPI_VERSION_RE = re.compile(r"^3\.\d+\.\d+$")

# Operation keys a path item may carry. `connect` is not an OpenAPI operation.
VALID_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

PATH_ITEM_FIELDS = {"summary", "description", "servers", "parameters", "$ref"}

SECURITY_SCHEME_TYPES = ("apiKey", "http", "oauth2", "openIdConnect")
API_KEY_LOCATIONS = ("query", "header", "cookie")


class ValidationResult(BaseModel):
    is_valid: bool
    errors: list[str]
    warnings: list[str]
    spec_type: str


def validate_structure(doc: dict) -> ValidationResult:
    """Check a raw document against basic OpenAPI/Swagger structure rules."""
    errors: list[str] = []
    warnings: list[str] = []

    _check_version(doc, errors)
    _check_info(doc.get("info"), errors)
    _check_paths(doc.get("paths"), errors, warnings)

    spec_type = detect_spec_type(doc)
    components = doc.get("components")
    if spec_type == OPENAPI_3 and isinstance(components, dict):
        _check_schemas(components.get("schemas"), errors, warnings)
        _check_security_schemes(components.get("securitySchemes"), errors)

    logger.debug("Validated %s document: %d error(s), %d warning(s)", spec_type, len(errors), len(warnings))
    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        spec_type=spec_type,
    )


def _check_version(doc: dict, errors: list[str]) -> None:
    openapi = doc.get("openapi")
    swagger = doc.get("swagger")
    if not openapi and not swagger:
        errors.append("Missing openapi (3.x) or swagger (2.0) version field")
    elif openapi:
        if not OPENAPI_VERSION_RE.match(str(openapi)):
            errors.append(f'Invalid OpenAPI version: {openapi}. Expected format like "3.0.0"')
    elif str(swagger) != "2.0":
        errors.append(f'Invalid Swagger version: {swagger}. Expected "2.0"')


def _check_info(info, errors: list[str]) -> None:
    if info is None:
        errors.append("Missing required info object")
        return
    if not isinstance(info, dict):
        errors.append("Invalid info, expected object")
        return
    if not info.get("title"):
        errors.append("Missing required info.title")
    if not info.get("version"):
        errors.append("Missing required info.version")


def _check_paths(paths, errors: list[str], warnings: list[str]) -> None:
    if paths is None:
        errors.append("Missing required paths object")
        return
    if not isinstance(paths, dict):
        errors.append("Invalid paths, expected object")
        return

    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            errors.append(f'Invalid path item for "{path}", expected object')
            continue

        for key, operation in path_item.items():
            key = str(key)
            if key in PATH_ITEM_FIELDS or key.startswith("x-"):
                continue
            if key.lower() not in VALID_METHODS:
                warnings.append(f'Unknown HTTP method "{key}" in path "{path}"')
                continue
            if isinstance(operation, dict):
                _check_status_codes(key, path, operation.get("responses"), warnings)


def _check_status_codes(method: str, path: str, responses, warnings: list[str]) -> None:
    if not isinstance(responses, dict):
        return
    for status in responses:
        status = str(status)
        if status == "default" or status.upper() in ("1XX", "2XX", "3XX", "4XX", "5XX"):
            continue
        if not status.isdigit():
            warnings.append(f'Invalid status code "{status}" in {method.upper()} {path}')


def _check_schemas(schemas, errors: list[str], warnings: list[str]) -> None:
    if not isinstance(schemas, dict):
        return
    for name, schema in schemas.items():
        if not isinstance(schema, dict):
            errors.append(f'Invalid schema "{name}", expected object')
            continue
        properties = schema.get("properties")
        if not isinstance(properties, dict):
            continue
        for prop_name, prop in properties.items():
            if not isinstance(prop, dict):
                warnings.append(f'Property "{prop_name}" in schema "{name}" should be an object')


def _check_security_schemes(schemes, errors: list[str]) -> None:
    if not isinstance(schemes, dict):
        return
    for name, scheme in schemes.items():
        if not isinstance(scheme, dict) or not scheme.get("type"):
            errors.append(f'Security scheme "{name}" missing required type field')
            continue

        scheme_type = scheme["type"]
        if scheme_type not in SECURITY_SCHEME_TYPES:
            errors.append(f'Invalid security scheme type "{scheme_type}" in scheme "{name}"')
        elif scheme_type == "apiKey":
            if not scheme.get("name"):
                errors.append(f'apiKey security scheme "{name}" missing required name field')
            if scheme.get("in") not in API_KEY_LOCATIONS:
                errors.append(
                    f'apiKey security scheme "{name}" missing or invalid "in" field '
                    "(expected query, header, or cookie)"
                )
        elif scheme_type == "http" and not scheme.get("scheme"):
            errors.append(f'http security scheme "{name}" missing required scheme field')
        elif scheme_type == "oauth2" and not scheme.get("flows"):
            errors.append(f'oauth2 security scheme "{name}" missing required flows object')
        elif scheme_type == "openIdConnect" and not scheme.get("openIdConnectUrl"):
            errors.append(f'openIdConnect security scheme "{name}" missing required openIdConnectUrl field')


def render_validation(result: ValidationResult) -> str:
    """Render a ValidationResult as human-readable text."""
    lines = [
        "=== API SPECIFICATION VALIDATION ===",
        "",
        f"Specification Type: {result.spec_type}",
        f"Valid: {'YES' if result.is_valid else 'NO'}",
        "",
    ]
    for title, messages in (("Errors", result.errors), ("Warnings", result.warnings)):
        if messages:
            lines.append(f"{title} ({len(messages)}):")
            lines.extend(f"  {i}. {message}" for i, message in enumerate(messages, 1))
            lines.append("")

    if result.is_valid:
        lines.append("✅ Specification is valid according to basic OpenAPI/Swagger rules")
    else:
        lines.append("❌ Specification has validation errors")
    return "\n".join(lines)
