import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from product_advisor.data_providers.catalog import CatalogLoader
from product_advisor.services.recommendation_service import RecommendationService


async def main() -> None:
    loader = CatalogLoader()
    catalog = loader.load()
    print(f"catalog_products={len(catalog)} last_error={loader.last_error}")

    service = RecommendationService(catalog)
    for query in ["smart home devices", "something to relieve back pain"]:
        await service.search(query)
        shown, total = service.session.counts
        print(f"query={query} shown={shown} total={total} source={service.last_source}")
        print(f"last_error={service.last_error}")
        for item in service.session.visible[:3]:
            print(f"- {item.product_name} | {item.brand} | {item.price:g} | why={item.why[:80]}")
        print("---")


if __name__ == "__main__":
    asyncio.run(main())
