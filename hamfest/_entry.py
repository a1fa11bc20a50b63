import argparse
import asyncio

from hamfest.discovery import DiscoveryController, DiscoveryView
from hamfest.enums import ItemCondition, ListingCategory, SortKey
from hamfest.metrics import flush_buffer as flush_metrics_buffer
from hamfest.metrics import start_metrics_write_task
from hamfest.models import Listing
from hamfest.storage import get_default_storage
from hamfest.store import MarketplaceStore, SqlMarketplaceStore
from hamfest.util.display import format_price, get_display_name


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Browse active listings")
    parser.add_argument("search", nargs="?", default="", help="free-text search")
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--sort", choices=[s.value for s in SortKey], default=SortKey.NEWEST.value)
    parser.add_argument("--category", choices=[c.value for c in ListingCategory])
    parser.add_argument(
        "--condition", action="append", default=[], choices=[c.value for c in ItemCondition]
    )
    parser.add_argument("--min-price")
    parser.add_argument("--max-price")
    parser.add_argument("--country", default="")
    parser.add_argument("--city", default="")
    return parser.parse_args(argv)


def format_listing_line(listing: Listing) -> str:
    seller = get_display_name(listing.seller)
    price = format_price(listing.price, listing.currency)
    return f"{listing.title} | {price} | {listing.condition.value} | {seller}"


def format_view(view: DiscoveryView) -> list[str]:
    if view.is_empty:
        return ["No listings yet."]

    lines = [f"Showing {view.visible_count} of {view.total_count} listings"]
    if view.no_matches:
        lines.append("No listings found. Try adjusting your filters.")
    lines.extend(format_listing_line(listing) for listing in view.listings)
    if view.pagination.visible:
        lines.append(" ".join(str(item) for item in view.pagination.strip))
    return lines


async def browse(store: MarketplaceStore, args: argparse.Namespace) -> DiscoveryView:
    controller = DiscoveryController(get_default_storage(), initial_query=args.search)
    await controller.fetch_page(store, args.page)
    controller.set_sort(args.sort)
    controller.set_category(args.category)
    controller.set_conditions(args.condition)
    controller.set_min_price(args.min_price)
    controller.set_max_price(args.max_price)
    controller.set_country(args.country)
    controller.set_city(args.city)
    return controller.view()


def run_browse(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    start_metrics_write_task()
    try:
        view = asyncio.run(browse(SqlMarketplaceStore(), args))
        for line in format_view(view):
            print(line)
    except KeyboardInterrupt:
        pass
    finally:
        flush_metrics_buffer()
