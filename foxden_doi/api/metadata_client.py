"""Client for the FOXDEN MetaData service."""

import json
import logging
from typing import Any, Dict, List, Optional

import requests

from foxden_doi.api.auth import TokenIssuer
from foxden_doi.api.services import MetaRecord, ServiceQuery, ServiceRequest, ServiceResponse
from foxden_doi.errors import (
    AmbiguousRecordError,
    AuthError,
    DecodeError,
    NotFoundError,
    RemoteServiceError,
    TransportError,
)
from foxden_doi.utils.config import Config


logger = logging.getLogger(__name__)


class MetadataClient:
    """
    Reads and updates dataset records in the MetaData service.

    Every call asks the token issuer for a fresh token: read-scoped for
    searches and fetches, write-scoped for updates.
    """

    def __init__(self, config: Config, token_issuer: Optional[TokenIssuer] = None):
        self.config = config
        self.base_url = config.metadata_url.rstrip('/')
        self.discovery_url = config.discovery_url.rstrip('/')
        self.token_issuer = token_issuer or TokenIssuer(config)

    def fetch_one(self, user: str, did: str) -> Dict[str, Any]:
        """
        Fetch the single authoritative record for a did.

        Args:
            user: User the read token is issued for
            did: Dataset identifier

        Returns:
            The matching metadata record

        Raises:
            NotFoundError: If no record matches
            AmbiguousRecordError: If more than one record matches
            AuthError, TransportError, DecodeError, RemoteServiceError: On service failures
        """
        query = json.dumps({"did": did})
        request = ServiceRequest(
            client=self.config.service_client,
            service_query=ServiceQuery(query=query, idx=0, limit=-1)
        )
        records = self._records(self._request(
            "POST",
            f"{self.base_url}/search",
            user=user,
            scope="read",
            payload=request.to_dict()
        ), f"{self.base_url}/search")

        if not records:
            msg = f"no MetaData record found for did={did}"
            logger.error(msg)
            raise NotFoundError(msg, did=did)
        if len(records) != 1:
            msg = f"wrong number of records for did={did}: expected 1, found {len(records)}"
            logger.error(msg)
            raise AmbiguousRecordError(msg, did=did, count=len(records))

        logger.info(f"Fetched MetaData record for did={did}")
        return records[0]

    def fetch_by_did(self, did: str, user: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Fetch all records whose did field matches.

        Returns:
            List of records, possibly empty
        """
        url = f"{self.base_url}/record"
        response = self._request("GET", url, user=user, scope="read", params={"did": did})
        records = self._records(response, url)
        logger.info(f"Found {len(records)} MetaData record(s) for did={did}")
        return records

    def update_record(self, meta_record: MetaRecord, user: Optional[str] = None) -> ServiceResponse:
        """
        Submit a patched record to the MetaData service.

        The returned ServiceResponse is not checked here; callers decide what
        a non-OK response means for them.

        Raises:
            AuthError, TransportError, DecodeError: If the call itself fails
        """
        response = self._request(
            "PUT",
            self.base_url,
            user=user,
            scope="write",
            payload=meta_record.to_dict(),
            check_status=False
        )
        if response.status_code != 200:
            try:
                data = response.json()
            except ValueError:
                # plain-text error page instead of a ServiceResponse
                return ServiceResponse(http_code=response.status_code, srv_code=-1, error=response.text)
        else:
            data = self._json(response, self.base_url)
        try:
            sresp = ServiceResponse.from_dict(data)
        except (ValueError, TypeError) as e:
            logger.error(f"Unable to parse MetaData update response: {e}")
            raise DecodeError(f"unable to parse MetaData update response: {e}", url=self.base_url) from e
        if not sresp.http_code:
            sresp.http_code = response.status_code
        return sresp

    def number_of_records(self, query: str, user: Optional[str] = None) -> int:
        """
        Count records matching a query across FOXDEN services.

        The count comes from the Discovery service, not the MetaData service.

        Raises:
            RemoteServiceError: If the service reports a non-OK HTTP code
        """
        request = ServiceRequest(
            client=self.config.service_client,
            service_query=ServiceQuery(query=query)
        )
        sresp = self._discovery("nrecords", request, user)
        if sresp.http_code != 200:
            logger.error(f"nrecords request failed: {sresp}")
            raise RemoteServiceError(sresp.error or str(sresp), status_code=sresp.http_code, srv_code=sresp.srv_code)
        return sresp.results.nrecords

    def chunk_of_records(self, request: ServiceRequest, user: Optional[str] = None) -> ServiceResponse:
        """
        Fetch one page of records from the Discovery service.

        The page is selected by ``request.service_query.idx`` and ``limit``.
        The response codes are not checked here.

        Raises:
            AuthError, TransportError, DecodeError, RemoteServiceError: If the call itself fails
        """
        sresp = self._discovery("search", request, user)
        logger.debug(
            f"Discovery returned {len(sresp.results.records)} of {sresp.results.nrecords} record(s) "
            f"(idx={request.service_query.idx}, limit={request.service_query.limit})"
        )
        return sresp

    def _discovery(self, endpoint: str, request: ServiceRequest, user: Optional[str]) -> ServiceResponse:
        url = f"{self.discovery_url}/{endpoint}"
        data = self._json(
            self._request("POST", url, user=user, scope="read", payload=request.to_dict()),
            url
        )
        try:
            return ServiceResponse.from_dict(data)
        except (ValueError, TypeError) as e:
            logger.error(f"Unable to parse {endpoint} response: {e}")
            raise DecodeError(f"unable to parse {endpoint} response: {e}", url=url) from e

    def _request(
        self,
        method: str,
        url: str,
        user: Optional[str],
        scope: str,
        payload: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
        check_status: bool = True
    ) -> requests.Response:
        """Perform an authorized request and translate transport failures."""
        headers = self.token_issuer.auth_header(user or self.config.service_user, scope)
        headers["Accept"] = "application/json"

        logger.debug(f"{method} {url}")
        try:
            response = requests.request(
                method,
                url,
                json=payload,
                params=params,
                headers=headers,
                timeout=self.config.timeout
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"Timeout on {method} {url}")
            raise TransportError(f"timeout talking to MetaData service at {url}", url=url) from e
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Connection error on {method} {url}: {e}")
            raise TransportError(f"unable to connect to MetaData service at {url}", url=url) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request exception on {method} {url}: {e}")
            raise TransportError(f"request to MetaData service failed: {e}", url=url) from e

        if response.status_code in (401, 403):
            logger.error(f"MetaData service rejected {scope} token (HTTP {response.status_code})")
            raise AuthError(
                f"MetaData service rejected {scope} token (HTTP {response.status_code})",
                user=user or self.config.service_user,
                scope=scope
            )
        if check_status and response.status_code != 200:
            logger.error(f"MetaData service error (HTTP {response.status_code}): {response.text}")
            raise RemoteServiceError(
                f"MetaData service error (HTTP {response.status_code}): {response.text}",
                status_code=response.status_code
            )
        return response

    @staticmethod
    def _json(response: requests.Response, url: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {url}: {e}")
            raise DecodeError(f"invalid JSON response from {url}", url=url) from e

    def _records(self, response: requests.Response, url: str) -> List[Dict[str, Any]]:
        data = self._json(response, url)
        if data is None:
            return []
        if not isinstance(data, list) or not all(isinstance(rec, dict) for rec in data):
            raise DecodeError(f"expected a JSON array of records from {url}", url=url)
        return data
