"""
Per-call request state passed through the middleware pipeline
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple


class HttpMethod(str, Enum):
    """HTTP method types supported"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"


class RequestKind(str, Enum):
    """Selects the body codec used by the pipeline"""
    STANDARD = "standard"
    BULK = "bulk"


Header = Tuple[str, str]
QueryParam = Tuple[str, Any]


@dataclass
class RequestEnv:
    """
    Request options for a single call

    Created fresh for every call and mutated in place by the middleware
    stages on the way to the transport.
    """
    method: HttpMethod
    url: str
    headers: List[Header] = field(default_factory=list)
    body: Any = field(default_factory=dict)
    query: List[QueryParam] = field(default_factory=list)
    kind: RequestKind = RequestKind.STANDARD
    timeout: Optional[float] = None  # seconds

    def get_header(self, name: str) -> Optional[str]:
        """Return the first header value matching ``name``, ignoring case"""
        lower_name = name.lower()
        for key, value in self.headers:
            if key.lower() == lower_name:
                return value
        return None

    def put_header(self, name: str, value: str) -> None:
        """Set a header, replacing any existing value with the same name"""
        lower_name = name.lower()
        self.headers = [
            (key, existing) for key, existing in self.headers
            if key.lower() != lower_name
        ]
        self.headers.append((name, value))
