"""Zenodo deposit provider."""

import json
import logging
from typing import Any, Dict

from foxden_doi.api.providers.base import DOIProvider, ProviderResult, register_provider
from foxden_doi.errors import ProviderError


logger = logging.getLogger(__name__)


@register_provider("zenodo")
class ZenodoProvider(DOIProvider):
    """
    Publishes datasets through the Zenodo deposition API.

    Flow: create an empty deposition, upload the FOXDEN record into its file
    bucket, set the deposition metadata, then publish. Publishing is what
    makes Zenodo register the DOI.
    """

    METADATA_FILE = "foxden-metadata.json"

    def setup(self) -> None:
        if not self.config.zenodo_token:
            raise ProviderError("zenodo: access token is not configured", provider=self.name)
        self.base_url = self.config.zenodo_url.rstrip('/')
        self.headers = {
            "Authorization": f"Bearer {self.config.zenodo_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def publish(self, did: str, description: str, record: Dict[str, Any]) -> ProviderResult:
        deposition = self._json(
            self._call("POST", f"{self.base_url}/deposit/depositions", did, json={}),
            did
        )
        deposition_id = deposition.get("id")
        bucket = self._section(deposition, "links", did).get("bucket")
        if not deposition_id or not bucket:
            raise ProviderError("zenodo: deposition response lacks id or bucket link", provider=self.name, did=did)
        logger.info(f"zenodo: created deposition {deposition_id} for did={did}")

        upload_headers = dict(self.headers)
        upload_headers["Content-Type"] = "application/octet-stream"
        self._call(
            "PUT",
            f"{bucket}/{self.METADATA_FILE}",
            did,
            data=json.dumps(record, default=str).encode("utf-8"),
            headers=upload_headers
        )

        self._call(
            "PUT",
            f"{self.base_url}/deposit/depositions/{deposition_id}",
            did,
            json={"metadata": self.deposition_metadata(did, description, record)}
        )

        published = self._json(
            self._call("POST", f"{self.base_url}/deposit/depositions/{deposition_id}/actions/publish", did),
            did
        )
        doi = published.get("doi") or self._section(published, "metadata", did).get("doi")
        if not doi:
            raise ProviderError("zenodo: published deposition carries no DOI", provider=self.name, did=did)
        doi_link = published.get("doi_url") or self.doi_url(doi)
        return ProviderResult(doi=doi, doi_link=doi_link)

    def deposition_metadata(self, did: str, description: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """Zenodo deposition metadata for a FOXDEN dataset."""
        return {
            "title": self.title(did, record),
            "upload_type": "dataset",
            "description": description or did,
            "creators": [{"name": name} for name in self.creators(record)],
            "keywords": ["FOXDEN", did],
            "related_identifiers": [
                {"identifier": self.landing_page(did), "relation": "isAlternateIdentifier"}
            ],
        }
