"""Tests for data models."""

from dataclasses import fields

import pytest
from mediawiki_services.models import (
    Content,
    EditInfo,
    Page,
    PageIdentifier,
    QueryOptions,
    Revision,
    Revisions,
    Title,
    User,
    UserRightsOptions,
)


def make_revision(revision_id, text='text'):
    return Revision(Content(text, 'wikitext'), id=revision_id)


class TestPageIdentifier:
    """Tests for PageIdentifier."""

    def test_from_title_string(self):
        identifier = PageIdentifier.from_title('Foo', ns=4)
        assert identifier.title == Title('Foo', 4)
        assert identifier.id is None

    def test_from_title_object(self):
        identifier = PageIdentifier.from_title(Title('Talk:Foo', 1))
        assert identifier.title == Title('Talk:Foo', 1)

    def test_from_id(self):
        identifier = PageIdentifier.from_id(42)
        assert identifier.id == 42
        assert identifier.title is None

    def test_identifies_page_with_title(self):
        assert PageIdentifier.from_title('Foo').identifies_page() is True

    def test_identifies_page_with_id(self):
        assert PageIdentifier.from_id(42).identifies_page() is True

    def test_empty_identifier_does_not_identify_page(self):
        assert PageIdentifier().identifies_page() is False

    def test_zero_id_alone_does_not_identify_page(self):
        assert PageIdentifier(id=0).identifies_page() is False

    def test_is_immutable(self):
        identifier = PageIdentifier.from_id(42)
        with pytest.raises(AttributeError):
            identifier.id = 43


class TestRevisions:
    """Tests for the Revisions collection."""

    def test_keeps_insertion_order(self):
        revisions = Revisions([make_revision(3), make_revision(1), make_revision(2)])
        assert [r.id for r in revisions] == [3, 1, 2]

    def test_same_id_replaces_in_place(self):
        revisions = Revisions([make_revision(1, 'old'), make_revision(2)])
        revisions.add_revision(make_revision(1, 'new'))

        assert len(revisions) == 2
        assert [r.id for r in revisions] == [1, 2]
        assert revisions.get(1).content.text == 'new'

    def test_has_and_get(self):
        revisions = Revisions([make_revision(7)])
        assert revisions.has(7)
        assert not revisions.has(8)
        assert revisions.get(8) is None

    def test_contains_revision_and_id(self):
        revision = make_revision(7)
        revisions = Revisions([revision])
        assert revision in revisions
        assert 7 in revisions
        assert make_revision(7, 'other') not in revisions

    def test_latest_is_highest_id(self):
        revisions = Revisions([make_revision(5), make_revision(9), make_revision(2)])
        assert revisions.latest().id == 9

    def test_latest_of_empty_is_none(self):
        assert Revisions().latest() is None

    def test_constructor_copies_input(self):
        source = Revisions([make_revision(1)])
        copy = Revisions(source)
        copy.add_revision(make_revision(2))
        assert len(source) == 1


class TestPage:
    """Tests for Page."""

    def test_accessors(self):
        page = Page(PageIdentifier(Title('Foo', 0), 12))
        assert page.id == 12
        assert page.title == Title('Foo', 0)
        assert len(page.revisions) == 0

    def test_exists(self):
        assert Page(PageIdentifier(Title('Foo'), 12)).exists is True

    def test_missing_sentinel_does_not_exist(self):
        assert Page(PageIdentifier(Title('Foo'), 0)).exists is False

    def test_identifier_is_immutable(self):
        page = Page(PageIdentifier.from_id(1))
        with pytest.raises(AttributeError):
            page.page_identifier = PageIdentifier.from_id(2)

    def test_pages_are_hashable(self):
        identifier = PageIdentifier(Title('Foo'), 12)
        page = Page(identifier, Revisions([make_revision(1)]))
        same = Page(identifier, Revisions([make_revision(1)]))

        assert hash(page) == hash(same)
        assert {page, same} == {page}
        assert {page: 'cached'}[same] == 'cached'

    def test_pages_with_different_revisions_are_not_equal(self):
        identifier = PageIdentifier(Title('Foo'), 12)
        assert Page(identifier, Revisions([make_revision(1)])) != Page(identifier)


class TestOptions:
    """Tests for option defaults."""

    def test_query_options_default(self):
        assert QueryOptions().follow_redirects is False

    def test_user_rights_options_default(self):
        assert UserRightsOptions().reason == ''

    def test_edit_info_default(self):
        assert EditInfo() == EditInfo('', False, False)


class TestUser:
    """Tests for User."""

    def test_user_is_addressed_by_name(self):
        assert [f.name for f in fields(User)] == ['name']
        assert User('Alice') == User('Alice')
        assert hash(User('Alice')) == hash(User('Alice'))
