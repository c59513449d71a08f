"""
Credential Manager for FOXDEN DOI.

Provider secrets (Zenodo access token, DataCite password, Materials Commons API
token, authz client id) are kept in the operating system credential store via
the keyring library, so they do not have to live in environment files.
"""

import logging
from typing import Optional

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

logger = logging.getLogger(__name__)


class CredentialManagerError(Exception):
    """Base exception for CredentialManager errors."""
    pass


class CredentialStorageError(CredentialManagerError):
    """Raised when there's a problem storing or reading secrets."""
    pass


class CredentialManager:
    """
    Stores and retrieves named FOXDEN DOI secrets in the OS credential store.

    Secret names are free-form keys such as ``zenodo_token`` or
    ``datacite_password``.
    """

    SERVICE_NAME = "FOXDEN_DOI"

    def __init__(self, service_name: Optional[str] = None):
        self.service_name = service_name or self.SERVICE_NAME

    def get_secret(self, name: str) -> Optional[str]:
        """
        Look up a secret by name.

        Args:
            name: Secret name (e.g. "zenodo_token")

        Returns:
            The stored secret, or None if nothing is stored under that name

        Raises:
            CredentialStorageError: If the keyring backend fails
        """
        try:
            secret = keyring.get_password(self.service_name, name)
        except KeyringError as e:
            logger.error(f"Failed to read secret '{name}' from keyring: {e}")
            raise CredentialStorageError(f"Failed to read secret '{name}': {str(e)}") from e

        if secret is None:
            logger.debug(f"No secret stored for '{name}'")
        return secret

    def set_secret(self, name: str, value: str) -> None:
        """
        Store a secret under the given name, replacing any previous value.

        Raises:
            ValueError: If name or value is empty
            CredentialStorageError: If the keyring backend fails
        """
        if not name or not name.strip():
            raise ValueError("Secret name cannot be empty")
        if not value:
            raise ValueError("Secret value cannot be empty")

        try:
            keyring.set_password(self.service_name, name, value)
        except KeyringError as e:
            logger.error(f"Failed to store secret '{name}': {e}")
            raise CredentialStorageError(f"Failed to store secret '{name}': {str(e)}") from e
        logger.info(f"Secret '{name}' stored in credential store")

    def delete_secret(self, name: str) -> bool:
        """
        Remove a secret.

        Returns:
            True if a secret was deleted, False if none was stored
        """
        try:
            keyring.delete_password(self.service_name, name)
        except PasswordDeleteError:
            logger.warning(f"Secret '{name}' not found in credential store")
            return False
        logger.info(f"Secret '{name}' deleted from credential store")
        return True
