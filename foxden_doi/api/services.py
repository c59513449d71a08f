"""Wire types exchanged with FOXDEN search-style services."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ServiceQuery:
    """Query payload with pagination; limit -1 means unbounded."""
    query: str
    idx: int = 0
    limit: int = -1

    def to_dict(self) -> Dict[str, Any]:
        return {"query": self.query, "idx": self.idx, "limit": self.limit}


@dataclass
class ServiceRequest:
    """Request envelope sent to search and count endpoints."""
    client: str
    service_query: ServiceQuery

    def to_dict(self) -> Dict[str, Any]:
        return {"client": self.client, "service_query": self.service_query.to_dict()}


@dataclass
class ServiceResults:
    """Results section of a service response."""
    nrecords: int = 0
    records: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ServiceResults':
        data = data or {}
        return cls(
            nrecords=int(data.get("nrecords", 0) or 0),
            records=list(data.get("records") or [])
        )


@dataclass
class ServiceResponse:
    """Structured response returned by FOXDEN services."""
    http_code: int
    srv_code: int = 0
    error: str = ""
    service: str = ""
    results: ServiceResults = field(default_factory=ServiceResults)

    @property
    def is_ok(self) -> bool:
        """Return True if both the service and HTTP layers report success."""
        return self.srv_code == 0 and self.http_code == 200

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ServiceResponse':
        """
        Build a response from its JSON form.

        Accepts both the Go-style keys (``httpCode``, ``srvCode``) used by the
        MetaData service and snake_case keys.

        Raises:
            ValueError: If data is not a JSON object or codes are not integers
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected JSON object, got {type(data).__name__}")
        http_code = data.get("httpCode", data.get("http_code", 0))
        srv_code = data.get("srvCode", data.get("srv_code", 0))
        return cls(
            http_code=int(http_code or 0),
            srv_code=int(srv_code or 0),
            error=data.get("error") or "",
            service=data.get("service") or "",
            results=ServiceResults.from_dict(data.get("results"))
        )

    def __str__(self) -> str:
        service = self.service or "service"
        return (
            f"{service} response: httpCode={self.http_code} srvCode={self.srv_code} "
            f"error={self.error}"
        )


@dataclass
class MetaRecord:
    """Update envelope for the MetaData service: one schema, one record."""
    schema: str
    record: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {"schema": self.schema, "record": self.record}
