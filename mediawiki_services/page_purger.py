"""Purge the server-side cache of a page."""

import logging

from .api_client import ApiClientProtocol
from .models import Page

logger = logging.getLogger(__name__)


class PagePurger:

    def __init__(self, api: ApiClientProtocol):
        self.api = api

    def purge(self, page: Page) -> bool:
        """Send action=purge for the page's id. Client errors propagate."""
        logger.debug("Purging page %s", page.id)
        self.api.execute_write_request('purge', {'pageids': page.id})
        return True
