# services/advocate_directory/client/cli.py
import argparse
import asyncio
import sys
from typing import List, Optional

import httpx
from rich.console import Console

from services.advocate_directory.client.listing import AdvocateListingClient
from services.advocate_directory.client.render import render_error, render_table
from services.advocate_directory.schemas.advocates import SortField, SortOrder


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="advocates-cli", description="Search and page through advocates")
    parser.add_argument("--base-url", default="http://localhost:8000", help="Advocate directory API base URL")
    parser.add_argument("--search", default="", help="Free-text search")
    parser.add_argument("--sort-by", default=SortField.FIRST_NAME.value, choices=[f.value for f in SortField])
    parser.add_argument("--sort-order", default=SortOrder.ASC.value, choices=[o.value for o in SortOrder])
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--limit", type=int, default=10)
    return parser


async def run(
    args: argparse.Namespace,
    console: Console,
    http_client: Optional[httpx.AsyncClient] = None,
) -> int:
    client = AdvocateListingClient(base_url=args.base_url, http_client=http_client, limit=args.limit)
    client.state.search = args.search
    client.state.sort_by = SortField(args.sort_by)
    client.state.sort_order = SortOrder(args.sort_order)
    try:
        ok = await client.fetch(page=args.page)
    finally:
        await client.aclose()

    if not ok:
        console.print(render_error(client.state))
        return 1
    console.print(render_table(client.state))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args, Console()))


if __name__ == "__main__":
    sys.exit(main())
