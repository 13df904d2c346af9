"""Data models for wiki pages, revisions and users."""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Union


@dataclass(frozen=True)
class Title:
    """A page name within a namespace."""
    title: str
    ns: int = 0


@dataclass(frozen=True)
class PageIdentifier:
    """Identifies a page by title, by page id, or both."""
    title: Optional[Title] = None
    id: Optional[int] = None

    @classmethod
    def from_title(cls, title: Union[str, Title], ns: int = 0) -> 'PageIdentifier':
        if not isinstance(title, Title):
            title = Title(title, ns)
        return cls(title=title)

    @classmethod
    def from_id(cls, page_id: int) -> 'PageIdentifier':
        return cls(id=page_id)

    @property
    def has_id(self) -> bool:
        # 0 is the missing-page sentinel, not an addressable id
        return self.id is not None and self.id > 0

    def identifies_page(self) -> bool:
        return self.title is not None or self.has_id


@dataclass(frozen=True)
class Content:
    """Raw page text plus its content model."""
    text: str
    model: Optional[str] = None  # e.g. 'wikitext', 'json'


@dataclass(frozen=True)
class EditInfo:
    """Edit summary and flags of a revision."""
    summary: str = ''
    minor: bool = False
    bot: bool = False


@dataclass(frozen=True)
class Revision:
    """A single snapshot of a page."""
    content: Content
    page_identifier: Optional[PageIdentifier] = None
    id: Optional[int] = None
    edit_info: EditInfo = field(default_factory=EditInfo)
    user: Optional[str] = None
    timestamp: Optional[str] = None


class Revisions:
    """Revisions keyed by id, kept in the order they were added.

    Adding a revision whose id is already present replaces the stored
    revision without moving it.
    """

    def __init__(self, revisions: Iterable[Revision] = ()):
        self._revisions: dict[Optional[int], Revision] = {}
        self.add_revisions(revisions)

    def add_revision(self, revision: Revision):
        self._revisions[revision.id] = revision

    def add_revisions(self, revisions: Iterable[Revision]):
        for revision in revisions:
            self.add_revision(revision)

    def has(self, revision_id: int) -> bool:
        return revision_id in self._revisions

    def get(self, revision_id: int) -> Optional[Revision]:
        return self._revisions.get(revision_id)

    def latest(self) -> Optional[Revision]:
        """Return the revision with the highest id, or None if empty."""
        with_ids = [r for r in self._revisions.values() if r.id is not None]
        if not with_ids:
            return None
        return max(with_ids, key=lambda r: r.id)

    def to_list(self) -> list[Revision]:
        return list(self._revisions.values())

    def __iter__(self) -> Iterator[Revision]:
        return iter(list(self._revisions.values()))

    def __len__(self) -> int:
        return len(self._revisions)

    def __contains__(self, revision) -> bool:
        if isinstance(revision, Revision):
            return self._revisions.get(revision.id) == revision
        return revision in self._revisions

    def __eq__(self, other) -> bool:
        if not isinstance(other, Revisions):
            return NotImplemented
        return self.to_list() == other.to_list()

    def __repr__(self) -> str:
        return f"Revisions({self.to_list()!r})"


@dataclass(frozen=True)
class Page:
    """A page and whichever of its revisions have been fetched."""
    page_identifier: PageIdentifier
    revisions: Revisions = field(default_factory=Revisions)

    @property
    def id(self) -> Optional[int]:
        return self.page_identifier.id

    @property
    def title(self) -> Optional[Title]:
        return self.page_identifier.title

    @property
    def exists(self) -> bool:
        """False for the id-0 page returned when the wiki has no such page."""
        return self.page_identifier.has_id

    def __hash__(self) -> int:
        # Revisions is a mutable collection; equal pages share an identifier
        return hash(self.page_identifier)


@dataclass(frozen=True)
class User:
    """A wiki account, addressed by name."""
    name: str


@dataclass
class QueryOptions:
    """Options for page queries."""
    follow_redirects: bool = False


@dataclass
class UserRightsOptions:
    """Options for user rights changes."""
    reason: str = ''
