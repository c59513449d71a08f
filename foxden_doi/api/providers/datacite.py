"""DataCite provider."""

import logging
from typing import Any, Dict

from requests.auth import HTTPBasicAuth

from foxden_doi.api.providers.base import DOIProvider, ProviderResult, register_provider
from foxden_doi.errors import ProviderError


logger = logging.getLogger(__name__)


@register_provider("datacite")
class DataCiteProvider(DOIProvider):
    """Registers a findable DOI through the DataCite REST API v2."""

    def setup(self) -> None:
        if not self.config.datacite_username or not self.config.datacite_password:
            raise ProviderError("datacite: credentials are not configured", provider=self.name)
        if not self.config.datacite_prefix:
            raise ProviderError("datacite: DOI prefix is not configured", provider=self.name)
        self.base_url = self.config.datacite_url.rstrip('/')
        self.auth = HTTPBasicAuth(self.config.datacite_username, self.config.datacite_password)
        self.headers = {
            "Content-Type": "application/vnd.api+json",
            "Accept": "application/vnd.api+json",
        }

    def publish(self, did: str, description: str, record: Dict[str, Any]) -> ProviderResult:
        response = self._call(
            "POST",
            f"{self.base_url}/dois",
            did,
            expected=(200, 201),
            auth=self.auth,
            json=self.payload(did, description, record)
        )
        data = self._section(self._json(response, did), "data", did)
        doi = self._section(data, "attributes", did).get("doi") or data.get("id")
        if not doi:
            raise ProviderError("datacite: response carries no DOI", provider=self.name, did=did)
        return ProviderResult(doi=doi, doi_link=self.doi_url(doi))

    def payload(self, did: str, description: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """JSON:API request body; ``event=publish`` makes the DOI findable right away."""
        return {
            "data": {
                "type": "dois",
                "attributes": {
                    "event": "publish",
                    "prefix": self.config.datacite_prefix,
                    "creators": [{"name": name} for name in self.creators(record)],
                    "titles": [{"title": self.title(did, record)}],
                    "descriptions": [
                        {"description": description or did, "descriptionType": "Abstract"}
                    ],
                    "publisher": self.config.publisher,
                    "publicationYear": self.publication_year(),
                    "types": {"resourceTypeGeneral": "Dataset", "resourceType": "FOXDEN dataset"},
                    "alternateIdentifiers": [
                        {"alternateIdentifier": did, "alternateIdentifierType": "FOXDEN did"}
                    ],
                    "url": self.landing_page(did),
                },
            }
        }
