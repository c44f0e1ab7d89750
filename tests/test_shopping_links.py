from bathlance.services.shopping_links import build_search_query, build_shopping_links


def test_query_is_uri_component_encoded():
    assert build_search_query('Tea Tree (500ml)', 'shampoo') == 'Tea%20Tree%20(500ml)%20shampoo'


def test_links_sort_by_lowest_price():
    links = build_shopping_links('Bamboo', 'toothbrush')

    assert links['naver'] == 'https://search.shopping.naver.com/search/all?query=Bamboo%20toothbrush&sort=price_asc'
    assert links['coupang'] == 'https://www.coupang.com/np/search?component=&q=Bamboo%20toothbrush&channel=user'


def test_non_ascii_names():
    assert build_search_query('샴푸', 'shampoo') == '%EC%83%B4%ED%91%B8%20shampoo'
