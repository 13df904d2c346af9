"""Fetch pages and their revisions through action=query."""

import logging
from typing import Any, Optional, Union

from .api_client import ApiClientProtocol
from .errors import InvalidPageIdentifierError, MalformedResponseError
from .models import (
    Content,
    EditInfo,
    Page,
    PageIdentifier,
    QueryOptions,
    Revision,
    Revisions,
    Title,
)

logger = logging.getLogger(__name__)

BASE_QUERY = {
    'prop': 'revisions|info|pageprops',
    'rvprop': 'ids|flags|timestamp|user|size|sha1|comment|content|tags',
    'inprop': 'protection',
}


class PageGetter:
    """Builds Page objects from query responses.

    Every getter returns a Page. When the wiki has no matching page the
    result has id 0 and no revisions; check ``Page.exists``.
    """

    def __init__(self, api: ApiClientProtocol):
        self.api = api

    def get_from_revision_id(self, revision_id: int, options: Optional[QueryOptions] = None) -> Page:
        entry = self._query_page({'revids': revision_id}, options)
        return self._new_page_from_entry(entry)

    def get_from_title(self, title: Union[str, Title], options: Optional[QueryOptions] = None) -> Page:
        if isinstance(title, Title):
            title = title.title
        entry = self._query_page({'titles': title}, options)
        return self._new_page_from_entry(entry)

    def get_from_page_id(self, page_id: int, options: Optional[QueryOptions] = None) -> Page:
        entry = self._query_page({'pageids': page_id}, options)
        return self._new_page_from_entry(entry)

    def get_from_page_identifier(
        self,
        page_identifier: PageIdentifier,
        options: Optional[QueryOptions] = None,
    ) -> Page:
        """Fetch by id when the identifier carries one, otherwise by title."""
        if not page_identifier.identifies_page():
            raise InvalidPageIdentifierError(page_identifier)

        if page_identifier.has_id:
            return self.get_from_page_id(page_identifier.id, options)
        return self.get_from_title(page_identifier.title, options)

    def get_from_page(self, page: Page, options: Optional[QueryOptions] = None) -> Page:
        """
        Re-fetch a page and merge in the revisions it already holds.

        Pages without an id are fetched by title. The fetched revisions
        come first, followed by those of ``page``.
        ``page`` itself is not modified.
        """
        if not page.page_identifier.identifies_page():
            raise InvalidPageIdentifierError(page.page_identifier)

        if page.page_identifier.has_id:
            params = {'pageids': page.id}
        else:
            params = {'titles': page.title.title}
        entry = self._query_page(params, options)
        revisions = self._revisions_from_entry(entry)
        revisions.add_revisions(page.revisions)
        return Page(page.page_identifier, revisions)

    def get_from_revision(self, revision: Revision, options: Optional[QueryOptions] = None) -> Page:
        """Fetch the page a revision belongs to, keeping that revision."""
        entry = self._query_page({'revids': revision.id}, options)
        revisions = self._revisions_from_entry(entry)
        revisions.add_revision(revision)
        return Page(self._identifier_from_entry(entry), revisions)

    def _query_page(self, params: dict[str, Any], options: Optional[QueryOptions]) -> dict:
        """Run a single-page query and return its page entry."""
        if options is None:
            options = QueryOptions()

        query = dict(BASE_QUERY)
        if options.follow_redirects:
            query['redirects'] = ''
        query.update(params)

        logger.debug("Querying page with %s", params)
        result = self.api.execute_read_request('query', query)
        return first_page_entry(result)

    def _identifier_from_entry(self, entry: dict) -> PageIdentifier:
        return PageIdentifier(
            Title(entry.get('title', ''), entry.get('ns', 0)),
            entry.get('pageid', 0),
        )

    def _revisions_from_entry(self, entry: dict) -> Revisions:
        revisions = Revisions()
        if 'pageid' not in entry:
            return revisions

        page_identifier = self._identifier_from_entry(entry)
        for revision in entry.get('revisions', []):
            revisions.add_revision(parse_revision(revision, page_identifier, entry.get('contentmodel')))
        return revisions

    def _new_page_from_entry(self, entry: dict) -> Page:
        if 'pageid' not in entry:
            logger.info("Page %r not found", entry.get('title'))
        return Page(self._identifier_from_entry(entry), self._revisions_from_entry(entry))


def first_page_entry(result: dict) -> dict:
    """
    Return the first page entry of a query response.

    Handles both ``pages`` as a dict keyed by page id (formatversion=1)
    and as a list (formatversion=2).
    """
    pages = (result or {}).get('query', {}).get('pages')
    if not pages:
        raise MalformedResponseError('query', 'no pages in response')

    if isinstance(pages, dict):
        return next(iter(pages.values()))
    return pages[0]


def _is_flag_set(data: dict, key: str) -> bool:
    # formatversion=1 marks flags by key presence with an empty string,
    # formatversion=2 uses booleans
    if key not in data:
        return False
    return data[key] is not False


def parse_content(revision: dict, default_model: Optional[str]) -> Content:
    """Extract the content of a revision, including slot-based responses."""
    source = revision
    model = default_model
    slots = revision.get('slots')
    if slots and 'main' in slots:
        source = slots['main']
        model = source.get('contentmodel', model)

    text = source.get('*', source.get('content', ''))
    return Content(text, model)


def parse_revision(revision: dict, page_identifier: PageIdentifier, content_model: Optional[str]) -> Revision:
    """Build a Revision from one element of a page entry's revisions array."""
    return Revision(
        content=parse_content(revision, content_model),
        page_identifier=page_identifier,
        id=revision.get('revid'),
        edit_info=EditInfo(
            summary=revision.get('comment', ''),
            minor=_is_flag_set(revision, 'minor'),
            bot=_is_flag_set(revision, 'bot'),
        ),
        user=revision.get('user'),
        timestamp=revision.get('timestamp'),
    )
