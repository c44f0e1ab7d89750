from typing import Dict
from urllib.parse import quote

NAVER_SHOPPING_URL = "https://search.shopping.naver.com/search/all?query={query}&sort=price_asc"
COUPANG_SEARCH_URL = "https://www.coupang.com/np/search?component=&q={query}&channel=user"

# Characters left unescaped by JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def build_search_query(product_name: str, category: str) -> str:
    return quote(f"{product_name} {category}".strip(), safe=_URI_COMPONENT_SAFE)


def build_shopping_links(product_name: str, category: str) -> Dict[str, str]:
    """Lowest-price search links for buying a replacement."""
    query = build_search_query(product_name, category)
    return {
        "naver": NAVER_SHOPPING_URL.format(query=query),
        "coupang": COUPANG_SEARCH_URL.format(query=query),
    }
