"""
List catalog products through the GraphQL proxy.
Usage: python scripts/list_products.py [count]
"""
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).parent.parent))

from storefront.config import ClientSettings  # noqa: E402
from storefront.money import format_money  # noqa: E402
from storefront.shopify import StorefrontClient, StorefrontError  # noqa: E402

env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)
    print(f"📄 Loaded .env from {env_path}")


async def list_products(count: int) -> bool:
    settings = ClientSettings.from_env()
    if not settings.shop or not settings.storefront_token:
        print("❌ Error: SHOPIFY_SHOP and SHOPIFY_STOREFRONT_TOKEN must be set")
        return False

    print(f"📡 Querying {settings.proxy_url}/api/graphql")
    client = StorefrontClient.from_settings(settings)
    try:
        products = await client.get_products(first=count)
    except StorefrontError as e:
        print(f"❌ {e.kind.value}: {e.message}")
        for detail in e.details:
            print(f"   - {detail.get('message', detail)}")
        return False
    finally:
        await client.aclose()

    print(f"✅ {len(products)} products\n")
    for product in products:
        price = format_money(product.min_price.amount, product.min_price.currency_code) if product.min_price else "-"
        variants = len(product.variants)
        print(f"   {product.handle:<40} {price:>12}  {variants} variant(s)  {product.title}")
    return True


if __name__ == "__main__":
    count = int(sys.argv[1]) if len(sys.argv) > 1 else 12
    ok = asyncio.run(list_products(count))
    sys.exit(0 if ok else 1)
