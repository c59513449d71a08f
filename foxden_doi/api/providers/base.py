"""Common contract and registry for DOI providers."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Type
from urllib.parse import quote

import requests

from foxden_doi.errors import ProviderError, TransportError, UnsupportedProviderError
from foxden_doi.utils.config import Config


logger = logging.getLogger(__name__)

DOI_RESOLVER = "https://doi.org"

_REGISTRY: Dict[str, Type['DOIProvider']] = {}


@dataclass(frozen=True)
class ProviderResult:
    """A minted DOI and its resolvable landing page."""
    doi: str
    doi_link: str

    def __iter__(self):
        # allows `doi, doi_link = result`
        return iter((self.doi, self.doi_link))


class DOIProvider(ABC):
    """
    A DOI-issuing registry or repository.

    Subclasses implement ``publish`` and are registered under a name with
    ``register_provider``. ``init`` must be called before ``publish``; it only
    prepares local state and may be called repeatedly.
    """

    name: str = ""
    TIMEOUT = 30

    def __init__(self, config: Config):
        self.config = config
        self._initialized = False
        self.headers: Dict[str, str] = {}

    def init(self) -> None:
        """Prepare request headers and endpoints. Idempotent."""
        if self._initialized:
            return
        self.setup()
        self._initialized = True
        logger.debug(f"Provider '{self.name}' initialized")

    def setup(self) -> None:
        """Hook for subclasses to build their local state."""

    @abstractmethod
    def publish(self, did: str, description: str, record: Dict[str, Any]) -> ProviderResult:
        """
        Publish a dataset and mint a DOI for it.

        Args:
            did: Dataset identifier
            description: Human description of the dataset
            record: The dataset's MetaData record

        Returns:
            ProviderResult with the DOI and its landing page link

        Raises:
            ProviderError: If the provider rejects the publication
            TransportError: If the provider cannot be reached
        """

    @property
    def timeout(self) -> int:
        return self.config.timeout or self.TIMEOUT

    def title(self, did: str, record: Dict[str, Any]) -> str:
        """Dataset title: the record's title if it has one, otherwise the did."""
        return record.get("title") or f"FOXDEN dataset {did}"

    def creators(self, record: Dict[str, Any]) -> List[str]:
        """Creator names taken from the record, falling back to the configured default."""
        creators = record.get("creators") or record.get("pi") or self.config.default_creator
        if isinstance(creators, str):
            creators = [creators]
        return [str(c) for c in creators]

    def landing_page(self, did: str) -> str:
        return f"{self.config.landing_page_url}?did={quote(did, safe='')}"

    @staticmethod
    def publication_year() -> int:
        return datetime.now().year

    @staticmethod
    def doi_url(doi: str) -> str:
        return f"{DOI_RESOLVER}/{doi}"

    def _call(
        self,
        method: str,
        url: str,
        did: str,
        expected: tuple = (200, 201, 202),
        **kwargs
    ) -> requests.Response:
        """
        Perform a provider request and map failures to our exceptions.

        Raises:
            ProviderError: On an unexpected status code
            TransportError: On timeouts and connection failures
        """
        kwargs.setdefault("headers", self.headers)
        kwargs.setdefault("timeout", self.timeout)
        logger.debug(f"{self.name}: {method} {url}")
        try:
            response = requests.request(method, url, **kwargs)
        except requests.exceptions.Timeout as e:
            logger.error(f"{self.name}: timeout on {method} {url}")
            raise TransportError(f"timeout talking to {self.name} at {url}", url=url) from e
        except requests.exceptions.ConnectionError as e:
            logger.error(f"{self.name}: connection error on {method} {url}: {e}")
            raise TransportError(f"unable to connect to {self.name} at {url}", url=url) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"{self.name}: request exception on {method} {url}: {e}")
            raise TransportError(f"request to {self.name} failed: {e}", url=url) from e

        if response.status_code in (401, 403):
            msg = f"{self.name}: authentication failed (HTTP {response.status_code})"
            logger.error(msg)
            raise ProviderError(msg, provider=self.name, did=did, status_code=response.status_code)
        if response.status_code not in expected:
            msg = f"{self.name} API error (HTTP {response.status_code}): {response.text}"
            logger.error(msg)
            raise ProviderError(msg, provider=self.name, did=did, status_code=response.status_code)
        return response

    def _json(self, response: requests.Response, did: str) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(f"{self.name}: invalid JSON response", provider=self.name, did=did) from e
        if not isinstance(data, dict):
            raise ProviderError(f"{self.name}: unexpected response payload", provider=self.name, did=did)
        return data

    def _section(self, payload: Dict[str, Any], key: str, did: str) -> Dict[str, Any]:
        """
        Nested object stored under key in a provider reply.

        A missing or null section reads as empty; any other non-object value
        is a malformed reply.

        Raises:
            ProviderError: If the section is present but not a JSON object
        """
        section = payload.get(key)
        if section is None:
            return {}
        if not isinstance(section, dict):
            logger.error(f"{self.name}: '{key}' in response is {type(section).__name__}, expected an object")
            raise ProviderError(
                f"{self.name}: unexpected response payload ('{key}' is not an object)",
                provider=self.name,
                did=did
            )
        return section


def register_provider(name: str) -> Callable[[Type[DOIProvider]], Type[DOIProvider]]:
    """Class decorator registering a provider under a case-insensitive name."""
    def decorator(cls: Type[DOIProvider]) -> Type[DOIProvider]:
        key = name.lower()
        if key in _REGISTRY and _REGISTRY[key] is not cls:
            raise ValueError(f"Provider '{name}' is already registered")
        cls.name = key
        _REGISTRY[key] = cls
        return cls
    return decorator


def available_providers() -> List[str]:
    """Names of all registered providers."""
    return sorted(_REGISTRY)


def get_provider(name: str, config: Config) -> DOIProvider:
    """
    Instantiate the provider registered under name.

    Raises:
        UnsupportedProviderError: If no provider is registered under name
    """
    cls = _REGISTRY.get((name or "").lower())
    if cls is None:
        logger.error(f"Provider '{name}' is not supported (available: {', '.join(available_providers())})")
        raise UnsupportedProviderError(name)
    return cls(config)


def dispatch(
    name: str,
    did: str,
    description: str,
    record: Dict[str, Any],
    config: Config
) -> ProviderResult:
    """
    Publish a dataset with the named provider.

    Exactly one provider is tried; its failure is the failure of the call.
    """
    provider = get_provider(name, config)
    provider.init()
    logger.info(f"Publishing did={did} with provider '{provider.name}'")
    result = provider.publish(did, description, record)
    logger.info(f"Provider '{provider.name}' minted DOI {result.doi} for did={did}")
    return result
