"""
Overpass API client

Handles communication with Overpass API including:
- Ordered mirror fallback
- Bounded per-attempt timeout
- Rate limiting
"""

import threading
import time
from typing import Dict, Any, List, Optional, Tuple

import requests
from loguru import logger

from ...config import APIConfig, get_config
from ...errors import SourceUnavailable


class OverpassAPIClient:
    """Client for interacting with Overpass API"""

    def __init__(self, api_config: Optional[APIConfig] = None):
        self.api = api_config or get_config().api
        self.timeout = self.api.request_timeout
        self._last_request_time = 0.0
        self._min_request_interval = self.api.min_request_interval
        self._lock = threading.Lock()

    def _rate_limit(self):
        """Ensure we don't exceed rate limits"""
        with self._lock:
            elapsed = time.time() - self._last_request_time
            if elapsed < self._min_request_interval:
                time.sleep(self._min_request_interval - elapsed)
            self._last_request_time = time.time()

    def attempts(self) -> List[Tuple[str, int]]:
        """(mirror url, attempt number) pairs in the order they are tried"""
        return [
            (url, attempt)
            for url in self.api.overpass_urls
            for attempt in range(1, self.api.attempts_per_mirror + 1)
        ]

    def query(self, query: str) -> Dict[str, Any]:
        """
        Execute Overpass API query against each mirror in turn

        Args:
            query: Overpass QL query string

        Returns:
            JSON response from the first mirror that answers

        Raises:
            SourceUnavailable: If every attempt on every mirror fails
        """
        headers = {
            "User-Agent": self.api.user_agent,
            "Content-Type": "application/x-www-form-urlencoded"
        }

        plan = self.attempts()
        last_error = None
        for index, (url, attempt) in enumerate(plan):
            self._rate_limit()
            try:
                response = requests.post(
                    url,
                    data={"data": query},
                    headers=headers,
                    timeout=self.timeout
                )
                response.raise_for_status()
                data = response.json()
                if not isinstance(data, dict) or not isinstance(data.get("elements"), list):
                    raise ValueError("response has no 'elements' list")
                logger.debug(f"Overpass {url} returned {len(data['elements'])} elements")
                return data
            except requests.exceptions.Timeout:
                last_error = f"timeout after {self.timeout}s"
            except requests.exceptions.HTTPError as e:
                status = e.response.status_code if e.response is not None else "?"
                last_error = f"HTTP {status}"
            except requests.exceptions.RequestException as e:
                last_error = str(e)
            except ValueError as e:
                last_error = f"invalid response: {e}"

            logger.warning(f"Overpass {url} failed (attempt {attempt}): {last_error}")
            if index < len(plan) - 1 and self.api.retry_delay > 0:
                time.sleep(self.api.retry_delay)

        logger.error(f"Overpass API failed: all {len(plan)} attempts exhausted ({last_error})")
        raise SourceUnavailable(f"Overpass API unavailable after {len(plan)} attempts: {last_error}")
