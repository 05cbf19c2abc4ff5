import gradio as gr

from product_advisor.config import settings
from product_advisor.data_providers.catalog import CatalogLoader
from product_advisor.schemas import Product, SortOption
from product_advisor.services.browse_service import STATUS_EMPTY, STATUS_NO_MATCHES, BrowseSession
from product_advisor.services.recommendation_service import RecommendationService

# Read-only snapshot shared by every browser session.
catalog = CatalogLoader().load()

SORT_CHOICES = [("Recommended order", "")] + [(option.label, option.value) for option in SortOption]


def new_service() -> RecommendationService:
    return RecommendationService(catalog)


def render_results(session: BrowseSession, error: str = "") -> str:
    if session.status == STATUS_EMPTY:
        if error:
            return f"Something went wrong while fetching recommendations.\n\nDetails: {error}"
        return (
            "No recommendations yet. Describe what you're looking for and let the advisor pick products for you. "
            'Try asking for "smart home devices" or "fitness trackers".'
        )
    if session.status == STATUS_NO_MATCHES:
        return "No products match the current filters. Widen the price range or clear the filters."
    return "\n\n---\n\n".join(_render_card(product) for product in session.visible)


def _render_card(product: Product) -> str:
    lines = [
        f"### {product.product_name}",
        f"**{product.brand}** · {product.category} · ₹{product.price:,.0f}",
    ]
    if product.description:
        lines.append(product.description)
    why = getattr(product, "why", "")
    if why:
        lines.append(f"> **Why:** {why}")
    return "\n\n".join(lines)


def render_counts(session: BrowseSession) -> str:
    shown, total = session.counts
    active = session.active_filter_count()
    suffix = f" · {active} active filter(s)" if active else ""
    return f"Showing {shown} of {total} products{suffix}"


def facet_choices(available: tuple[str, ...], selected: frozenset[str]) -> list[str]:
    # Selections carried over from an earlier snapshot stay tickable.
    return sorted(set(available) | selected)


def render_outputs(service: RecommendationService):
    session = service.session
    facets = session.facets
    filters = session.filters
    return (
        service,
        render_results(session, service.last_error),
        render_counts(session),
        gr.update(choices=facet_choices(facets.categories, filters.categories), value=sorted(filters.categories)),
        gr.update(choices=facet_choices(facets.brands, filters.brands), value=sorted(filters.brands)),
        gr.update(value=filters.price_range.min),
        gr.update(value=filters.price_range.max),
    )


async def search_fn(service: RecommendationService | None, query: str):
    service = service or new_service()
    await service.search(query)
    return render_outputs(service)


def select_fn(service: RecommendationService | None, categories: list[str], brands: list[str]):
    service = service or new_service()
    service.session.select(categories or [], brands or [])
    return render_outputs(service)


def price_fn(service: RecommendationService | None, min_price: float | None, max_price: float | None):
    service = service or new_service()
    try:
        service.session.apply_price_range(min_price, max_price)
    except ValueError:
        gr.Warning("Min price must not be greater than max price.")
    return render_outputs(service)


def sort_fn(service: RecommendationService | None, sort_key: str):
    service = service or new_service()
    service.session.set_sort(sort_key)
    return render_outputs(service)


def clear_fn(service: RecommendationService | None):
    service = service or new_service()
    service.session.clear_filters()
    return render_outputs(service)


def reset_fn(service: RecommendationService | None):
    service = service or new_service()
    service.reset()
    return ("",) + render_outputs(service)


def build_demo() -> gr.Blocks:
    with gr.Blocks(title="Product Advisor") as demo:
        gr.Markdown(
            """
            # Product Advisor
            AI-powered product recommendations from the local catalog.
            """
        )
        # One RecommendationService per browser session, created on first use.
        state = gr.State(None)
        with gr.Row():
            query = gr.Textbox(placeholder="What are you looking for?", show_label=False, scale=4)
            search = gr.Button("Search", variant="primary", scale=1)
            new_search = gr.Button("New Search", scale=1)
        with gr.Row():
            with gr.Column(scale=1):
                sort = gr.Dropdown(choices=SORT_CHOICES, value="", label="Sort By")
                categories = gr.CheckboxGroup(choices=[], label="Categories")
                brands = gr.CheckboxGroup(choices=[], label="Brands")
                min_price = gr.Number(label="Min Price")
                max_price = gr.Number(label="Max Price")
                apply_price = gr.Button("Apply price range")
                clear = gr.Button("Clear filters")
            with gr.Column(scale=3):
                counts = gr.Markdown()
                results = gr.Markdown(render_results(BrowseSession()))

        outputs = [state, results, counts, categories, brands, min_price, max_price]
        search.click(search_fn, inputs=[state, query], outputs=outputs)
        query.submit(search_fn, inputs=[state, query], outputs=outputs)
        new_search.click(reset_fn, inputs=[state], outputs=[query] + outputs)
        categories.input(select_fn, inputs=[state, categories, brands], outputs=outputs)
        brands.input(select_fn, inputs=[state, categories, brands], outputs=outputs)
        apply_price.click(price_fn, inputs=[state, min_price, max_price], outputs=outputs)
        sort.input(sort_fn, inputs=[state, sort], outputs=outputs)
        clear.click(clear_fn, inputs=[state], outputs=outputs)
    return demo


if __name__ == "__main__":
    app = build_demo()
    app.launch(server_name=settings.gradio_server_name, server_port=settings.gradio_server_port)
