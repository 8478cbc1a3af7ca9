"""命令行入口"""
import argparse
import asyncio
import getpass
import logging
import sys
from typing import Optional, Sequence

from .api import BookmarkApiClient, BookmarkClientError, UnauthorizedError
from .config import settings
from .logging_config import setup_logging
from .modules.validation import ValidationResult
from .schemas import Bookmark, BookmarkPage
from .services import DashboardService
from .session import Session, TokenStore

logger = logging.getLogger(__name__)


def _client(args: argparse.Namespace) -> BookmarkApiClient:
    session = Session.from_store(TokenStore(args.token_file))
    return BookmarkApiClient(session, base_url=args.base_url)


def format_bookmark(bookmark: Bookmark) -> str:
    tags = ", ".join(bookmark.tags or [])
    lines = [
        f"[{bookmark.hashed_id}] {bookmark.url}",
        f"    memo: {bookmark.memo or ''}",
        f"    tags: {tags}",
        f"    updated: {bookmark.updated_at.isoformat()}",
    ]
    return "\n".join(lines)


def format_page(result: BookmarkPage, tag: str = "") -> str:
    if not result.items:
        return "No bookmarks found."
    lines = [format_bookmark(b) for b in result.items]
    if result.show_pagination:
        nav = f"Page {result.page}"
        if result.has_prev:
            nav = f"< {nav}"
        if result.has_next:
            nav = f"{nav} >"
        lines.append(nav)
    if tag:
        lines.insert(0, f"Filtered by tag: {tag}")
    return "\n".join(lines)


def print_errors(result: ValidationResult) -> None:
    for error in result.errors:
        print(f"{error.field}: {error.message}", file=sys.stderr)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1: {value}")
    return number


# ==================== 命令 ====================

async def cmd_login(args: argparse.Namespace) -> int:
    password = args.password if args.password is not None else getpass.getpass("Password: ")
    async with _client(args) as client:
        await client.login(args.username, password)
        user = await client.get_me()
    print(f"Logged in as {user.name} ({user.authority_label})")
    return 0


async def cmd_logout(args: argparse.Namespace) -> int:
    async with _client(args) as client:
        client.logout()
    print("Logged out")
    return 0


async def cmd_me(args: argparse.Namespace) -> int:
    async with _client(args) as client:
        user = await client.get_me()
    print(f"{user.name} ({user.authority_label})")
    return 0


async def cmd_list(args: argparse.Namespace) -> int:
    async with _client(args) as client:
        dashboard = DashboardService(client, page_size=args.size)
        dashboard.set_tag_filter(args.tag or "")
        dashboard.page = args.page
        result = await dashboard.refresh()
    print(format_page(result, dashboard.tag_filter))
    return 0


async def cmd_show(args: argparse.Namespace) -> int:
    async with _client(args) as client:
        bookmark = await client.get_bookmark(args.hashed_id)
    print(format_bookmark(bookmark))
    return 0


async def cmd_add(args: argparse.Namespace) -> int:
    async with _client(args) as client:
        dashboard = DashboardService(client)
        await dashboard.load_user()
        form = dashboard.new_form()
        form.url, form.memo, form.tags = args.url, args.memo, args.tags
        outcome = await dashboard.save(form)
    if not outcome.submitted:
        print_errors(outcome.result)
        return 2
    print(format_bookmark(outcome.bookmark))
    return 0


async def cmd_edit(args: argparse.Namespace) -> int:
    async with _client(args) as client:
        dashboard = DashboardService(client)
        await dashboard.load_user()
        form = await dashboard.open_editor(args.hashed_id)
        if args.memo is not None:
            form.memo = args.memo
        if args.tags is not None:
            form.tags = args.tags
        outcome = await dashboard.save(form)
    if not outcome.submitted:
        print_errors(outcome.result)
        return 2
    print(format_bookmark(outcome.bookmark))
    return 0


async def cmd_delete(args: argparse.Namespace) -> int:
    async with _client(args) as client:
        dashboard = DashboardService(client)
        await dashboard.load_user()
        form = await dashboard.open_editor(args.hashed_id)
        if not args.yes:
            target = form.memo or form.url
            answer = input(f"Delete bookmark '{target}'? This action cannot be undone. [y/N] ")
            if answer.strip().lower() not in ("y", "yes"):
                print("Cancelled")
                return 1
        await dashboard.delete(args.hashed_id)
    print(f"Deleted {args.hashed_id}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bookmark-client", description=settings.APP_NAME)
    parser.add_argument("--base-url", default=settings.API_BASE_URL)
    parser.add_argument("--token-file", default=settings.TOKEN_FILE)
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login")
    login.add_argument("username")
    login.add_argument("--password", default=None)
    login.set_defaults(func=cmd_login)

    logout = sub.add_parser("logout")
    logout.set_defaults(func=cmd_logout)

    me = sub.add_parser("me")
    me.set_defaults(func=cmd_me)

    listing = sub.add_parser("list")
    listing.add_argument("--page", type=_positive_int, default=1)
    listing.add_argument("--size", type=_positive_int, default=settings.PAGE_SIZE)
    listing.add_argument("--tag", default="")
    listing.set_defaults(func=cmd_list)

    show = sub.add_parser("show")
    show.add_argument("hashed_id")
    show.set_defaults(func=cmd_show)

    add = sub.add_parser("add")
    add.add_argument("url")
    add.add_argument("--memo", default="")
    add.add_argument("--tags", default="", help="comma separated")
    add.set_defaults(func=cmd_add)

    edit = sub.add_parser("edit")
    edit.add_argument("hashed_id")
    edit.add_argument("--memo", default=None)
    edit.add_argument("--tags", default=None, help="comma separated")
    edit.set_defaults(func=cmd_edit)

    delete = sub.add_parser("delete")
    delete.add_argument("hashed_id")
    delete.add_argument("-y", "--yes", action="store_true")
    delete.set_defaults(func=cmd_delete)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)

    try:
        return asyncio.run(args.func(args))
    except UnauthorizedError:
        print("Session expired, please log in again", file=sys.stderr)
        return 1
    except BookmarkClientError as e:
        logger.debug(f"[CLI] {args.command} 失败", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
