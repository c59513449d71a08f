"""Publish FOXDEN datasets and record their DOIs."""

import logging
from typing import Optional

from foxden_doi.api.auth import TokenIssuer
from foxden_doi.api.metadata_client import MetadataClient
from foxden_doi.api.providers import dispatch, get_provider
from foxden_doi.api.providers.base import ProviderResult
from foxden_doi.core.synchronizer import MetadataSynchronizer, SyncResult, WorkflowState
from foxden_doi.errors import FoxdenDOIError
from foxden_doi.utils.config import Config


logger = logging.getLogger(__name__)


class DOIPublisher:
    """
    Entry point for the two workflow steps.

    ``publish_dataset`` mints a DOI, ``update_metadata_doi`` writes it into
    the MetaData service. The caller runs them in sequence so a minted DOI can
    be inspected before the catalog is touched.

    ``state`` follows the last workflow step: FETCHED and PUBLISHED while
    publishing, PROPAGATING while records are written, then DONE,
    PARTIALLY_PROPAGATED or FAILED.
    """

    def __init__(
        self,
        config: Config,
        metadata_client: Optional[MetadataClient] = None,
        synchronizer: Optional[MetadataSynchronizer] = None
    ):
        self.config = config
        self.metadata_client = metadata_client or MetadataClient(config, TokenIssuer(config))
        self.synchronizer = synchronizer or MetadataSynchronizer(self.metadata_client)
        self.state: Optional[WorkflowState] = None

    def publish_dataset(self, user: str, provider: str, did: str, description: str) -> ProviderResult:
        """
        Mint a DOI for did with the named provider.

        The provider name is checked before anything else, so an unknown
        provider costs no catalog or provider request. The dataset must have
        exactly one MetaData record.

        Raises:
            UnsupportedProviderError: If provider is not registered
            NotFoundError, AmbiguousRecordError: If did does not match exactly one record
            ProviderError: If the provider rejects the publication
            AuthError, TransportError, DecodeError, RemoteServiceError: On service failures
        """
        self.state = None
        try:
            get_provider(provider, self.config)

            record = self.metadata_client.fetch_one(user, did)
            self._transition(did, WorkflowState.FETCHED)

            result = dispatch(provider, did, description, record, self.config)
        except FoxdenDOIError:
            self._transition(did, WorkflowState.FAILED)
            raise

        self._transition(did, WorkflowState.PUBLISHED)
        logger.info(f"did={did}: published as {result.doi} ({result.doi_link})")
        return result

    def update_metadata_doi(self, did: str, doi: str, doi_link: str, fail_fast: bool = False) -> SyncResult:
        """Write doi and doi_link into all MetaData records of did."""
        self._transition(did, WorkflowState.PROPAGATING)
        try:
            result = self.synchronizer.apply(did, doi, doi_link, fail_fast=fail_fast)
        except FoxdenDOIError:
            self._transition(did, WorkflowState.FAILED)
            raise

        self._transition(did, result.state)
        return result

    def _transition(self, did: str, state: WorkflowState) -> None:
        logger.info(f"did={did}: {self.state.value if self.state else 'start'} -> {state.value}")
        self.state = state


def publish_dataset(config: Config, user: str, provider: str, did: str, description: str) -> ProviderResult:
    """Publish did with provider using a publisher built from config."""
    return DOIPublisher(config).publish_dataset(user, provider, did, description)


def update_metadata_doi(config: Config, did: str, doi: str, doi_link: str, fail_fast: bool = False) -> SyncResult:
    """Propagate doi to the MetaData records of did using a publisher built from config."""
    return DOIPublisher(config).update_metadata_doi(did, doi, doi_link, fail_fast=fail_fast)
