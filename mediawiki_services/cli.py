"""Command-line interface for the wiki page and user services."""

import argparse
import logging
import sys

from .api_client import MWClientApi, RecordingClient
from .models import Page, PageIdentifier, QueryOptions, User, UserRightsOptions
from .page_getter import PageGetter
from .page_purger import PagePurger
from .user_rights_changer import UserRightsChanger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Fetch pages, purge pages and change user rights on a MediaWiki site'
    )

    parser.add_argument(
        '--wiki-url',
        default='https://en.wikipedia.org',
        help='MediaWiki site URL (default: https://en.wikipedia.org)',
    )

    parser.add_argument(
        '--script-path',
        default='/w/',
        help='Path to api.php on the site (default: /w/)',
    )

    parser.add_argument(
        '--username',
        help='MediaWiki bot username',
    )

    parser.add_argument(
        '--password',
        help='MediaWiki bot password',
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Print the requests that would be sent without sending them',
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output',
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    get_parser = subparsers.add_parser('get', help='Fetch a page and its revisions')
    target = get_parser.add_mutually_exclusive_group(required=True)
    target.add_argument('--title', help='Page title')
    target.add_argument('--page-id', type=int, help='Page id')
    target.add_argument('--revision-id', type=int, help='Revision id')
    get_parser.add_argument(
        '--namespace',
        type=int,
        default=0,
        help='Namespace of --title (default: 0)',
    )
    get_parser.add_argument(
        '--follow-redirects',
        action='store_true',
        help='Resolve redirects to their target page',
    )

    purge_parser = subparsers.add_parser('purge', help='Purge the cache of a page')
    purge_parser.add_argument('--page-id', type=int, required=True, help='Page id')

    rights_parser = subparsers.add_parser('user-rights', help='Add or remove user groups')
    rights_parser.add_argument('user', help='User name')
    rights_parser.add_argument(
        '--add',
        action='append',
        default=[],
        metavar='GROUP',
        help='Group to add (repeatable)',
    )
    rights_parser.add_argument(
        '--remove',
        action='append',
        default=[],
        metavar='GROUP',
        help='Group to remove (repeatable)',
    )
    rights_parser.add_argument('--reason', default='', help='Reason for the change')

    return parser


def format_page(page: Page) -> str:
    """Render a short human-readable summary of a page."""
    title = page.title.title if page.title else ''
    ns = page.title.ns if page.title else 0
    lines = [f"{title} (id={page.id}, ns={ns})"]

    if not page.exists:
        lines.append("  missing")
        return "\n".join(lines)

    lines.append(f"  {len(page.revisions)} revision(s)")
    for revision in page.revisions:
        flags = ''.join([
            'm' if revision.edit_info.minor else '',
            'b' if revision.edit_info.bot else '',
        ])
        lines.append(
            f"  r{revision.id} {revision.timestamp or ''} {revision.user or ''}"
            f" [{flags}] {revision.edit_info.summary}".rstrip()
        )
        lines.append(f"    {revision.content.model}, {len(revision.content.text)} chars")

    return "\n".join(lines)


def run_get(api, args) -> int:
    getter = PageGetter(api)
    options = QueryOptions(follow_redirects=args.follow_redirects)

    if args.title is not None:
        page = getter.get_from_page_identifier(
            PageIdentifier.from_title(args.title, args.namespace), options
        )
    elif args.page_id is not None:
        page = getter.get_from_page_id(args.page_id, options)
    else:
        page = getter.get_from_revision_id(args.revision_id, options)

    print(format_page(page))
    return 0 if page.exists else 1


def run_purge(api, args) -> int:
    page = Page(PageIdentifier.from_id(args.page_id))
    PagePurger(api).purge(page)
    print(f"Purged page {args.page_id}")
    return 0


def run_user_rights(api, args) -> int:
    changer = UserRightsChanger(api)
    changer.change(
        User(args.user),
        args.add,
        args.remove,
        UserRightsOptions(reason=args.reason),
    )
    print(f"Rights change for {args.user} accepted")
    return 0


COMMANDS = {
    'get': run_get,
    'purge': run_purge,
    'user-rights': run_user_rights,
}

# Canned responses so each command can complete without a wiki
DRY_RUN_RESPONSES = {
    'get': [{'query': {'pages': [{'ns': 0, 'title': '', 'missing': True}]}}],
    'purge': [],
    'user-rights': [{'query': {'users': [{'userrightstoken': '+\\'}]}}],
}


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    # Create API client
    if args.dry_run:
        print("DRY RUN MODE - no requests will be sent\n")
        api = RecordingClient(DRY_RUN_RESPONSES[args.command])
    else:
        if args.command != 'get' and (not args.username or not args.password):
            print("Error: --username and --password required unless --dry-run", file=sys.stderr)
            sys.exit(1)

        try:
            api = MWClientApi(args.wiki_url, args.username, args.password, args.script_path)
        except Exception as e:
            print(f"Error connecting to wiki: {e}", file=sys.stderr)
            sys.exit(1)

    try:
        status = COMMANDS[args.command](api, args)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.dry_run:
        print("\nRequests:")
        for kind, action, params in api.requests:
            print(f"  {kind.upper()} action={action} {params}")
        status = 0

    sys.exit(status)


if __name__ == '__main__':
    main()
