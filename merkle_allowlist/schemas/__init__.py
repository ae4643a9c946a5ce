"""
Schemas & Errors
File: __init__.py

Purpose: Export the error taxonomy and version constants.
Transport schemas live in merkle_allowlist.schemas.proof.
"""

from .versioning import (
    SCHEMA_VERSION,
    SUPPORTED_SCHEMA_VERSIONS,
    SchemaVersion,
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
)

from .errors import (
    AllowlistError,
    AllowlistException,
    EmptyInputError,
    EncodingError,
    ErrorCodes,
    IndexOutOfRangeError,
    MalformedDigestError,
    NotFoundError,
    UnsupportedHashAlgorithmError,
)

__all__ = [
    # Versioning
    "SCHEMA_VERSION",
    "SUPPORTED_SCHEMA_VERSIONS",
    "SchemaVersion",
    "UnsupportedSchemaVersionError",
    "assert_supported_schema_version",
    # Errors
    "AllowlistError",
    "AllowlistException",
    "EmptyInputError",
    "EncodingError",
    "ErrorCodes",
    "IndexOutOfRangeError",
    "MalformedDigestError",
    "NotFoundError",
    "UnsupportedHashAlgorithmError",
]
