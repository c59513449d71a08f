"""Shared fixtures for FOXDEN DOI tests."""

import pytest

from foxden_doi.utils.config import Config


METADATA_URL = "https://foxden.test/meta"
ZENODO_URL = "https://zenodo.test/api"
DATACITE_URL = "https://api.test.datacite.org"
MC_URL = "https://mc.test/api"
DISCOVERY_URL = "https://foxden.test/discovery"


@pytest.fixture
def config():
    """Configuration pointing every service at a test host."""
    return Config(
        metadata_url=METADATA_URL,
        discovery_url=DISCOVERY_URL,
        authz_client_id="foxden-doi-test-client-0123456789abcdef",
        landing_page_url="https://foxden.test/doi",
        zenodo_url=ZENODO_URL,
        zenodo_token="zenodo-token",
        datacite_url=DATACITE_URL,
        datacite_username="CHESS.FOXDEN",
        datacite_password="datacite-pass",
        datacite_prefix="10.5072",
        mc_url=MC_URL,
        mc_token="mc-token",
        mc_project_id=77,
        timeout=5,
    )
