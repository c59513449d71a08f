"""Propagation of minted DOIs into MetaData service records."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from foxden_doi.api.metadata_client import MetadataClient
from foxden_doi.api.services import MetaRecord
from foxden_doi.errors import RemoteServiceError
from foxden_doi.utils.did_parser import extract_schema


logger = logging.getLogger(__name__)

# Catalog-owned identity field, never part of an update payload
INTERNAL_ID_FIELD = "_id"


class WorkflowState(Enum):
    """States of a publish + sync workflow for one dataset."""
    FETCHED = "fetched"
    PUBLISHED = "published"
    PROPAGATING = "propagating"
    DONE = "done"
    PARTIALLY_PROPAGATED = "partially_propagated"
    FAILED = "failed"


@dataclass
class RecordFailure:
    """A record whose update was rejected by the MetaData service."""
    did: str
    index: int
    message: str
    http_code: int = 0
    srv_code: int = 0


@dataclass
class SyncResult:
    """Outcome of propagating a DOI to all records of a did."""
    did: str
    total: int = 0
    updated: int = 0
    failures: List[RecordFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def state(self) -> WorkflowState:
        if not self.failures:
            return WorkflowState.DONE
        if self.updated:
            return WorkflowState.PARTIALLY_PROPAGATED
        return WorkflowState.FAILED


def patch_record(record: Dict[str, Any], doi: str, doi_link: str) -> Dict[str, Any]:
    """
    Return a copy of record ready to be written back with DOI fields.

    The internal _id is dropped; doi and doi_url are set (overwriting any
    previous values, so repeated patches give the same result).
    """
    patched = {key: value for key, value in record.items() if key != INTERNAL_ID_FIELD}
    patched["doi"] = doi
    patched["doi_url"] = doi_link
    return patched


class MetadataSynchronizer:
    """Writes a DOI into every MetaData record matching a did."""

    def __init__(self, metadata_client: MetadataClient):
        self.metadata_client = metadata_client

    def apply(self, did: str, doi: str, doi_link: str, fail_fast: bool = False) -> SyncResult:
        """
        Patch all records of did with doi and doi_link.

        Records are written one at a time, each with its own write token.
        Writes already committed are not rolled back when a later one fails.

        Args:
            did: Dataset identifier
            doi: Minted DOI
            doi_link: Resolvable DOI landing page
            fail_fast: Stop at the first rejected record and raise RemoteServiceError
                instead of collecting failures

        Returns:
            SyncResult with per-record outcomes

        Raises:
            SchemaConflictError: If did spans several schemas (raised before any request)
            RemoteServiceError: On the first rejected record when fail_fast is set
            AuthError, TransportError, DecodeError: If fetching or writing fails at the transport level
        """
        schema = extract_schema(did)

        records = self.metadata_client.fetch_by_did(did)
        result = SyncResult(did=did, total=len(records))
        if not records:
            logger.warning(f"No MetaData records found for did={did}, nothing to update")
            return result

        logger.info(f"Updating {len(records)} record(s) of did={did} (schema '{schema}') with DOI {doi}")

        for index, record in enumerate(records):
            meta_record = MetaRecord(schema=schema, record=patch_record(record, doi, doi_link))
            sresp = self.metadata_client.update_record(meta_record)

            if sresp.is_ok:
                result.updated += 1
                logger.debug(f"Record {index} of did={did} updated")
                continue

            message = sresp.error or str(sresp)
            logger.warning(f"Failed to update record {index} of did={did}: {message}")
            if fail_fast:
                raise RemoteServiceError(message, status_code=sresp.http_code, srv_code=sresp.srv_code, did=did)
            result.failures.append(RecordFailure(
                did=did,
                index=index,
                message=message,
                http_code=sresp.http_code,
                srv_code=sresp.srv_code
            ))

        logger.info(
            f"MetaData update for did={did} complete: {result.updated} updated, {len(result.failures)} failed"
        )
        return result
