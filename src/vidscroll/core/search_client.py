"""Client for the video search API."""

import logging
from typing import Optional

import requests

from ..utils.config import Config
from .errors import DecodeError, TransportError
from .models import SearchResultPage

logger = logging.getLogger(__name__)


class SearchClient:
    """Issues one GET per search page and decodes the JSON envelope."""

    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': 'Mozilla/5.0'})

    def build_params(self, query: str, continuation_token: str = "") -> dict:
        return {
            'part': 'snippet',
            'q': query,
            'pageToken': continuation_token,
            'regionCode': self.config.region_code,
            'maxResults': self.config.page_size,
            'type': 'video',
            'key': self.config.api_key,
        }

    def search(self, query: str, continuation_token: str = "") -> SearchResultPage:
        """Fetch one page of results.

        Raises TransportError for network failures and non-2xx responses,
        DecodeError when the body does not match the expected schema.
        """
        params = self.build_params(query, continuation_token)
        logger.debug(f"Searching q={query!r} pageToken={continuation_token!r}")
        try:
            resp = self.session.get(
                self.config.search_url, params=params, timeout=self.config.request_timeout
            )
            resp.raise_for_status()
        except (requests.RequestException, ValueError) as e:
            # urllib3 raises ValueError for invalid timeouts before any I/O
            raise TransportError(f"Search request failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise DecodeError(f"Search response is not JSON: {e}") from e
        return SearchResultPage.from_dict(data, query=query)

    def fetch_page(self, query: str, continuation_token: str = "") -> Optional[SearchResultPage]:
        """Fetch one page, logging and dropping any failure."""
        try:
            page = self.search(query, continuation_token)
        except TransportError as e:
            logger.error(f"failed to get json data: {e}", exc_info=True)
            return None
        except DecodeError as e:
            logger.error(f"json serialization error: {e}", exc_info=True)
            return None
        logger.info(f"Fetched {len(page.items)} results for {query!r} (next={page.next_page_token!r})")
        return page

    def close(self):
        self.session.close()
