"""Materials Commons provider."""

import logging
from typing import Any, Dict

from foxden_doi.api.providers.base import DOIProvider, ProviderResult, register_provider
from foxden_doi.errors import ProviderError


logger = logging.getLogger(__name__)


@register_provider("materialcommons")
class MaterialsCommonsProvider(DOIProvider):
    """Creates a Materials Commons dataset, assigns it a DOI and publishes it."""

    def setup(self) -> None:
        if not self.config.mc_token:
            raise ProviderError("materialcommons: API token is not configured", provider=self.name)
        if not self.config.mc_project_id:
            raise ProviderError("materialcommons: project id is not configured", provider=self.name)
        self.base_url = self.config.mc_url.rstrip('/')
        self.project_url = f"{self.base_url}/projects/{self.config.mc_project_id}"
        self.headers = {
            "Authorization": f"Bearer {self.config.mc_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def publish(self, did: str, description: str, record: Dict[str, Any]) -> ProviderResult:
        created = self._json(
            self._call(
                "POST",
                f"{self.project_url}/datasets",
                did,
                json=self.dataset_attributes(did, description, record)
            ),
            did
        )
        dataset_id = self._section(created, "data", did).get("id")
        if not dataset_id:
            raise ProviderError("materialcommons: dataset response lacks an id", provider=self.name, did=did)
        logger.info(f"materialcommons: created dataset {dataset_id} for did={did}")

        assigned = self._json(
            self._call("PUT", f"{self.project_url}/datasets/{dataset_id}/assign_doi", did),
            did
        )
        doi = self._section(assigned, "data", did).get("doi")
        if not doi:
            raise ProviderError("materialcommons: no DOI assigned to dataset", provider=self.name, did=did)

        self._call("PUT", f"{self.project_url}/datasets/{dataset_id}/publish", did)
        return ProviderResult(doi=doi, doi_link=self.doi_url(doi))

    def dataset_attributes(self, did: str, description: str, record: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "name": self.title(did, record),
            "description": description or did,
            "summary": did,
            "authors": "; ".join(self.creators(record)),
            "license": record.get("license", "Public Domain Dedication and License (PDDL)"),
            "tags": [{"value": "FOXDEN"}],
        }
