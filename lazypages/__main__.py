import asyncio
import logging
import sys

import click
import tabulate
from aioconsole import ainput

from .config import PaginatorConfig
from .demo import InMemoryPageProvider
from .exceptions import ConfigurationError
from .http import HTTPPageProvider
from .paginator import Paginator

HELP = ("This is the REPL, and the following commands are available.\n"
        "\n"
        "current, c     Show the current page\n"
        "next, n        Go forward one page, and show it\n"
        "prev, p        Go backward one page, and show it\n"
        "cache          List the pages held in the cache\n"
        "retry          Retry a failed initialization\n"
        "quit           Leave the REPL")


def print_page(page, label, first_page=0):
    if page is None:
        print(f"No {label} page found.")
        return

    rows = [(i, str(item)) for i, item in enumerate(page, start=(page.page_number - first_page) * page.page_size)]

    print(tabulate.tabulate(rows, headers=['#', 'item']))
    print(f"({label.capitalize()} page {page.page_number}, {len(page)}/{page.page_size} items)")

def print_cache(paginator):
    rows = [(n, len(paginator.cached_page(n)), '*' if n == paginator.current_page_number else '')
            for n in paginator.cached_page_numbers]

    print(tabulate.tabulate(rows, headers=['page', 'items', 'current']))
    print(f"(State {paginator.state.value}, least recently used first)")

async def request_page(paginator, get_page):
    """Turn a callback-style page request into an awaitable one."""
    future = asyncio.get_running_loop().create_future()
    get_page(future.set_result)

    return await future

async def amain(provider, config):
    async with Paginator.from_config(provider, config) as paginator:
        while True:
            try:
                args = (await ainput('> ')).split()
            except EOFError:
                break

            if len(args) < 1:
                continue

            match args[0]:
                case 'help':
                    print(HELP)
                case 'quit' | 'exit':
                    break
                case 'cache':
                    print_cache(paginator)
                case 'retry':
                    if not paginator.retry_initialization():
                        print("Nothing to retry.")
                case 'current' | 'c' | 'next' | 'n' | 'prev' | 'p' as cmd if not paginator.ready:
                    print(f"Not ready yet; {cmd!r} ignored.", file=sys.stderr)
                case 'current' | 'c':
                    print_page(await request_page(paginator, paginator.get_current_page), 'current', paginator.start)
                case 'next' | 'n':
                    print_page(await request_page(paginator, paginator.get_next_page), 'next', paginator.start)
                case 'prev' | 'p':
                    print_page(await request_page(paginator, paginator.get_previous_page), 'previous', paginator.start)
                case wrong_cmd:
                    print(f"Not a valid command {wrong_cmd}; try again.", file=sys.stderr)

async def run(provider, config):
    try:
        await amain(provider, config)
    finally:
        if isinstance(provider, HTTPPageProvider):
            await provider.aclose()

@click.command()
@click.option('--total-items', default=103, show_default=True, help="Items served by the in-memory provider.")
@click.option('--page-size', default=10, show_default=True, type=click.IntRange(min=1))
@click.option('--preload', default=0, show_default=True, help="Pages to preload after the first one.")
@click.option('--cache-size', default=0, show_default=True, help="LRU cache bound; 0 or 1 disables eviction.")
@click.option('--start', default=0, show_default=True, help="Number of the first page.")
@click.option('--latency', default=0.0, show_default=True, help="Simulated seconds per in-memory fetch.")
@click.option('--url', help="Fetch JSON pages from this URL instead of memory.")
@click.option('-v', '--verbose', is_flag=True, help="Log cache and fetch activity.")
def main(total_items, page_size, preload, cache_size, start, latency, url, verbose):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format='%(levelname)s: %(name)s: %(message)s')

    try:
        config = PaginatorConfig(page_number_starts_from=start,
                                 preload_page_count=preload,
                                 max_page_cache_size=cache_size).validate()
    except ConfigurationError as e:
        raise click.UsageError(str(e))

    if url:
        provider = HTTPPageProvider(url, page_size=page_size, first_page=start)
    else:
        provider = InMemoryPageProvider(total_items, page_size, latency=latency, first_page=start)

    asyncio.run(run(provider, config))

if __name__ == "__main__":
    main()
