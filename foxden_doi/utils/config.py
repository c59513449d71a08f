"""
Configuration for FOXDEN DOI.

A Config instance is built once by the entry point and passed explicitly to
every component. Values come from the process environment (optionally loaded
from a .env file); secrets that are not set in the environment are looked up
in the OS credential store.
"""

import logging
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from foxden_doi.utils.credential_manager import CredentialManager, CredentialStorageError

logger = logging.getLogger(__name__)

ENV_PREFIX = "FOXDEN_"

# Fields that may be resolved from the credential store
SECRET_FIELDS = ("authz_client_id", "zenodo_token", "datacite_password", "mc_token")


@dataclass
class Config:
    """Service URLs, credentials and tunables for the DOI workflow."""

    # MetaData service
    metadata_url: str = "http://localhost:8300"
    service_client: str = "foxden-doi"
    service_user: str = "foxden"

    # Discovery service, aggregates searches and counts across FOXDEN services
    discovery_url: str = "http://localhost:8320"

    # Authz
    authz_client_id: str = ""
    token_expires: int = 0
    application: str = "FOXDEN"

    # Transport deadline (seconds) for every HTTP call
    timeout: int = 30

    # Landing page for datasets, the did is appended as a query parameter
    landing_page_url: str = "https://foxden.classe.cornell.edu/doi"
    publisher: str = "Cornell High Energy Synchrotron Source"
    default_creator: str = "CHESS"

    # Zenodo
    zenodo_url: str = "https://zenodo.org/api"
    zenodo_token: str = ""

    # DataCite
    datacite_url: str = "https://api.datacite.org"
    datacite_username: str = ""
    datacite_password: str = ""
    datacite_prefix: str = ""

    # Materials Commons
    mc_url: str = "https://materialscommons.org/api"
    mc_token: str = ""
    mc_project_id: int = 0

    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def effective_token_expires(self) -> int:
        """Token lifetime in seconds; zero or unset means the 7200 s default."""
        return self.token_expires or 7200

    @classmethod
    def from_env(
        cls,
        env_file: Optional[str] = None,
        credentials: Optional[CredentialManager] = None
    ) -> 'Config':
        """
        Build a Config from FOXDEN_* environment variables.

        Args:
            env_file: Optional path to a .env file loaded before reading the environment
            credentials: Credential store used for secrets missing from the environment

        Returns:
            Populated Config instance

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        load_dotenv(dotenv_path=env_file, override=False)

        values: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name == "extra":
                continue
            raw = os.getenv(f"{ENV_PREFIX}{f.name.upper()}")
            if raw is None:
                continue
            if f.type in (int, "int"):
                try:
                    values[f.name] = int(raw)
                except ValueError as e:
                    raise ValueError(f"Invalid integer for {ENV_PREFIX}{f.name.upper()}: {raw}") from e
            else:
                values[f.name] = raw

        config = cls(**values)

        missing = [name for name in SECRET_FIELDS if not getattr(config, name)]
        if missing:
            credentials = credentials or CredentialManager()
            for name in missing:
                try:
                    secret = credentials.get_secret(name)
                except CredentialStorageError as e:
                    # headless hosts often have no keyring backend at all
                    logger.warning(f"Credential store unavailable, '{name}' stays unset: {e}")
                    break
                if secret:
                    setattr(config, name, secret)
                    logger.debug(f"Loaded '{name}' from credential store")

        logger.info(f"Configuration loaded (MetaData service: {config.metadata_url})")
        return config
