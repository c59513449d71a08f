"""Utility functions for parsing FOXDEN dataset identifiers (dids)."""

import logging

from foxden_doi.errors import SchemaConflictError

logger = logging.getLogger(__name__)

SEGMENT_SEPARATOR = "/"
SCHEMA_KEY = "beamline"


def extract_schema(did: str) -> str:
    """
    Return the metadata schema encoded in the beamline segment of a did.

    A did without a beamline segment maps to the empty schema. A beamline
    value listing several beamlines (comma separated) cannot be updated as a
    single schema.

    Args:
        did: Dataset identifier, e.g. "/beamline=id1a3/btr=test/cycle=2024-3"

    Returns:
        Schema name, or "" when the did has no beamline segment

    Raises:
        SchemaConflictError: If the beamline value names more than one schema
    """
    prefix = f"{SCHEMA_KEY}="
    schema = ""
    for segment in did.split(SEGMENT_SEPARATOR):
        if segment.startswith(prefix):
            schema = segment[len(prefix):]
            break

    if "," in schema:
        msg = f"unsupported did={did} with multiple schemas {schema} for MetaData update"
        logger.error(msg)
        raise SchemaConflictError(msg, did=did, schema=schema)

    return schema
