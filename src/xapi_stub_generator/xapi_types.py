"""Types definitions that are common in xAPI schemas."""

from __future__ import annotations

DEFAULT_LIB_NAME = "jsxapi"
DEFAULT_MAIN_NAME = "TypedXAPI"
DEFAULT_BASE_NAME = "XAPI"
CONNECT_GENERATOR_NAME = "connectGen"
DEFAULT_RETURN_TYPE = "any"
MULTILINE_BODY_TYPE = "string"


class SchemaFamily:
    """Top-level keys of an xAPI schema."""

    COMMAND = "Command"
    CONFIGURATION = "Configuration"
    STATUS = "StatusSchema"


class ValueSpaceType:
    """Values of `ValueSpace.type` in leaf descriptors."""

    INTEGER = "Integer"
    STRING = "String"
    LITERAL = "Literal"
    LITERAL_ARRAY = "LiteralArray"
    INTEGER_ARRAY = "IntegerArray"
    STRING_ARRAY = "StringArray"


class SchemaAttribute:
    """Attribute keys read from schema nodes."""

    VALUE_SPACE = "ValueSpace"
    VALUE = "Value"
    TYPE = "type"
    COMMAND = "command"
    REQUIRED = "required"
    MULTILINE = "multiline"
    DESCRIPTION = "description"
    ID = "id"


VALUESPACE_TYPE_TO_TYPESCRIPT = {
    ValueSpaceType.INTEGER: "number",
    ValueSpaceType.STRING: "string",
}

VALUESPACE_ARRAY_TYPE_TO_TYPESCRIPT = {
    ValueSpaceType.INTEGER_ARRAY: "number",
    ValueSpaceType.STRING_ARRAY: "string",
}

TRUE = "True"
FALSE = "False"
