"""MyMemory API client - free translation service, no key required."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from litconnect.config import MYMEMORY_ENDPOINT, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


class MyMemoryClient:
    """Thin blocking wrapper over the MyMemory ``/get`` endpoint.

    ``fetch`` returns the decoded JSON payload. When the payload carries no
    ``responseStatus`` the HTTP status code is filled in, so callers can
    classify failures from the payload alone. Network errors propagate as
    ``requests.RequestException``.
    """

    def __init__(
        self,
        endpoint: str = MYMEMORY_ENDPOINT,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, text: str, langpair: str) -> Dict[str, Any]:
        params = {"q": text, "langpair": langpair}
        response = self.session.get(self.endpoint, params=params, timeout=self.timeout)
        try:
            data = response.json()
        except ValueError:
            logger.debug("Non-JSON response (HTTP %s) from %s", response.status_code, self.endpoint)
            data = {}
        if not isinstance(data, dict):
            data = {}
        data.setdefault("responseStatus", response.status_code)
        return data

    def close(self) -> None:
        self.session.close()
