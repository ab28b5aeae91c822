# src/cli/runner.py

"""Headless CLI commands on top of the ProductAdvisor facade."""

import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from src.config.settings import Settings
from src.models.product import Product
from src.models.recommendation import Recommendation, SearchFilters
from src.services.errors import CatalogError, InvalidQuery
from src.services.product_advisor import ProductAdvisor
from src.services.ranking_engine import RankingEngine
from src.services.recommendation_client import RemoteRecommendationClient
from src.storage.catalog_store import CatalogStore
from src.storage.favorites_store import FavoritesStore

logger = logging.getLogger("product_advisor.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def build_advisor(
    catalog_path: Path | None = None,
    favorites_path: Path | None = None,
) -> ProductAdvisor:
    """Wire the production collaborators into a ProductAdvisor."""
    catalog = CatalogStore.from_json(catalog_path)
    favorites = FavoritesStore(db_path=favorites_path)
    engine = RankingEngine(client=RemoteRecommendationClient.from_settings())
    return ProductAdvisor(catalog, favorites, engine)


def _format_price(price: float) -> str:
    return f"{Settings.CURRENCY} {price:,.2f}"


def _dump_json(payload: object) -> None:
    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


def _recommendations_to_dicts(
    recommendations: list[Recommendation],
) -> list[dict[str, object]]:
    return [
        {
            "product": r.product.to_dict(),
            "matchScore": r.match_score,
            "reasoning": r.reasoning,
            "pros": r.pros,
            "cons": r.cons,
        }
        for r in recommendations
    ]


def _print_products(products: list[Product], title: str) -> None:
    """Render a Rich table of products to stdout."""
    table = Table(title=title, show_lines=True, title_style="bold cyan")
    table.add_column("ID", style="dim", width=4)
    table.add_column("Product", max_width=40)
    table.add_column("Brand", style="magenta")
    table.add_column("Category")
    table.add_column("Price", justify="right", style="green")

    for p in products:
        table.add_row(
            str(p.id),
            p.product_name,
            p.brand,
            p.category,
            _format_price(p.price),
        )

    Console().print(table)


def _print_recommendations(recommendations: list[Recommendation]) -> None:
    table = Table(
        title="Recommendations", show_lines=True, title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=3)
    table.add_column("Product", max_width=32)
    table.add_column("Score", justify="right", style="green")
    table.add_column("Why", max_width=50)
    table.add_column("Pros", style="green", max_width=30)
    table.add_column("Cons", style="yellow", max_width=30)

    for idx, r in enumerate(recommendations, 1):
        table.add_row(
            str(idx),
            f"{r.product.product_name}\n[dim]{_format_price(r.product.price)}[/dim]",
            str(r.match_score),
            r.reasoning,
            "\n".join(r.pros) or "—",
            "\n".join(r.cons) or "—",
        )

    Console().print(table)


async def cli_recommend(
    advisor: ProductAdvisor,
    query: str,
    output_format: str,
) -> int:
    """Rank the catalog for *query*. Exit code 0 on results, else 1."""
    _err.print(f"[bold]Finding products for:[/bold] {query}")
    try:
        recommendations = await advisor.search(query)
    except InvalidQuery as exc:
        _err.print(f"[red]{exc}[/red]")
        return 1

    if not recommendations:
        _err.print("[yellow]No matching products found.[/yellow]")
        return 1

    _err.print(f"[green]✓ {len(recommendations)} recommendations[/green]")
    if output_format == "table":
        _print_recommendations(recommendations)
    else:
        _dump_json(_recommendations_to_dicts(recommendations))
    return 0


def run_browse(
    advisor: ProductAdvisor,
    query: str,
    filters: SearchFilters,
    sort_by: str,
    output_format: str,
) -> int:
    """List catalog products matching the text query and filters."""
    try:
        products = advisor.browse(query, filters, sort_by)
    except ValueError as exc:
        _err.print(f"[red]{exc}[/red]")
        return 1

    if not products:
        _err.print("[yellow]No products match these filters.[/yellow]")
        return 1

    if output_format == "table":
        _print_products(products, "Catalog")
    else:
        _dump_json([p.to_dict() for p in products])
    return 0


def run_list_favorites(advisor: ProductAdvisor, output_format: str) -> int:
    """Print saved favorites (empty list is not an error)."""
    favorites = advisor.favorites()
    noun = "product" if len(favorites) == 1 else "products"
    _err.print(f"[bold]{len(favorites)} saved {noun}[/bold]")
    if output_format == "table":
        if favorites:
            _print_products(favorites, "Favorites")
    else:
        _dump_json([p.to_dict() for p in favorites])
    return 0


def run_favorite_action(
    advisor: ProductAdvisor,
    action: str,
    product_id: int | None = None,
) -> int:
    """Apply ``add``, ``remove``, ``toggle`` or ``clear`` to favorites."""
    if action == "clear":
        removed = advisor.clear_favorites()
        _err.print(f"[green]✓ Cleared {removed} favorites[/green]")
        return 0

    if product_id is None:
        _err.print(f"[red]'{action}' needs a product id[/red]")
        return 1

    product = advisor.get_product(product_id)
    if action == "remove":
        if advisor.remove_favorite(product_id):
            _err.print(f"[green]✓ Removed {product_id}[/green]")
        else:
            _err.print(f"[dim]{product_id} was not a favorite[/dim]")
        return 0

    if product is None:
        _err.print(f"[red]Unknown product id {product_id}[/red]")
        return 1

    if action == "add":
        if advisor.add_favorite(product):
            _err.print(f"[green]✓ Saved {product.product_name}[/green]")
        else:
            _err.print(f"[dim]{product.product_name} already saved[/dim]")
        return 0

    if action == "toggle":
        state = advisor.toggle_favorite(product)
        verb = "Saved" if state else "Removed"
        _err.print(f"[green]✓ {verb} {product.product_name}[/green]")
        return 0

    _err.print(f"[red]Unknown favorites action '{action}'[/red]")
    return 1


def run_product_detail(
    advisor: ProductAdvisor, product_id: int, output_format: str,
) -> int:
    """Show one product, its favorite state and related products."""
    product = advisor.get_product(product_id)
    if product is None:
        _err.print(f"[red]Unknown product id {product_id}[/red]")
        return 1

    related = advisor.related_products(product_id)
    favorite = advisor.is_favorite(product_id)

    if output_format == "table":
        console = Console()
        heart = "[red]♥[/red] " if favorite else ""
        console.print(f"{heart}[bold]{product.product_name}[/bold]")
        console.print(
            f"[magenta]{product.brand}[/magenta] · {product.category}"
        )
        console.print(f"[green]{_format_price(product.price)}[/green]")
        console.print(product.description)
        if related:
            _print_products(related, "Related Products")
    else:
        _dump_json({
            "product": product.to_dict(),
            "isFavorite": favorite,
            "related": [p.to_dict() for p in related],
        })
    return 0


def run_overview(advisor: ProductAdvisor) -> int:
    """Catalog summary: counts, categories, featured items, sample queries."""
    console = Console()
    counts = advisor.catalog.category_counts()
    console.print(
        f"[bold cyan]AI Product Advisor[/bold cyan]  "
        f"{len(advisor.catalog)} products · {len(counts)} categories · "
        f"{len(advisor.favorites())} favorites"
    )

    table = Table(title="Categories", title_style="bold cyan")
    table.add_column("Category")
    table.add_column("Products", justify="right")
    for name, count in counts.items():
        table.add_row(name, str(count))
    console.print(table)

    _print_products(advisor.catalog.featured(), "Featured Products")

    console.print("[bold]Try asking:[/bold]")
    for example in Settings.EXAMPLE_QUERIES:
        console.print(f"  [dim]•[/dim] {example}")
    return 0


def open_advisor() -> ProductAdvisor | None:
    """Build the advisor, reporting catalog problems on stderr."""
    try:
        return build_advisor()
    except CatalogError as exc:
        logger.error("Catalog load failed: %s", exc, exc_info=True)
        _err.print(f"[red]{exc}[/red]")
        return None
