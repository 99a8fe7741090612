"""Detect which specification flavour a document is."""

OPENAPI_3 = "OpenAPI 3.x"
SWAGGER_2 = "Swagger 2.0"
UNKNOWN = "Unknown"


def detect_spec_type(data: dict) -> str:
    """Detect the specification type of a raw document.

    Returns: 'OpenAPI 3.x', 'Swagger 2.0', or 'Unknown'.
    """
    if data.get("openapi"):
        return OPENAPI_3
    if data.get("swagger"):
        return SWAGGER_2
    return UNKNOWN
