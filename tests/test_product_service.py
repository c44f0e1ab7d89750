from datetime import datetime, timezone

import pytest

from bathlance.errors import InvalidInputError
from bathlance.services.expiry_service import ExpiryService
from bathlance.services.product_service import ProductService

UTC = timezone.utc


@pytest.fixture
def product_service(expiry_service):
    return ProductService(expiry_service)


class TestRegister:

    def test_new_product_starts_with_one_unit_and_computed_expiry(self, product_service, now):
        product = product_service.register('Herbal Shampoo', 'shampoo', now=now)

        assert product.stock == 1
        assert product.registration_date == now
        assert product.expiry_date == datetime(2025, 1, 8, 9, 0, tzinfo=UTC)
        assert product.id

    def test_scanned_label_details_shorten_expiry(self, product_service, now):
        product = product_service.register(
            'Herbal Shampoo',
            'shampoo',
            product_id='scan-1',
            manufacturing_date='2023-06-01',
            expiry_period_before_opening=6,
            period_after_opening=12,
            review='',
            now=now,
        )

        assert product.id == 'scan-1'
        assert product.expiry_date == datetime(2023, 12, 1, tzinfo=UTC)
        assert product.extra == {'review': ''}

    def test_blank_name_is_rejected(self, product_service, now):
        with pytest.raises(InvalidInputError):
            product_service.register('  ', 'shampoo', now=now)


class TestUpdate:

    def test_changing_an_input_recomputes_expiry(self, product_service, make_product):
        product = product_service.update(make_product(), period_after_opening=1)
        assert product.expiry_date == datetime(2024, 2, 1, tzinfo=UTC)

    def test_changing_registration_date_accepts_iso_strings(self, product_service, make_product):
        product = product_service.update(make_product(), registration_date='2024-02-01')
        assert product.registration_date == datetime(2024, 2, 1, tzinfo=UTC)
        assert product.expiry_date == datetime(2024, 5, 1, tzinfo=UTC)

    def test_invalid_registration_date_is_rejected(self, product_service, make_product):
        with pytest.raises(InvalidInputError):
            product_service.update(make_product(), registration_date='yesterday')

    def test_expiry_cannot_be_set_directly(self, product_service, make_product):
        with pytest.raises(InvalidInputError):
            product_service.update(make_product(), expiry_date=datetime(2030, 1, 1, tzinfo=UTC))

    @pytest.mark.parametrize("raw, expected", [(None, 1), (-4, 0), (7, 7), (99, 50)])
    def test_stock_is_clamped(self, product_service, make_product, raw, expected):
        assert product_service.update(make_product(), stock=raw).stock == expected

    @pytest.mark.parametrize('raw', ['abc', [3]])
    def test_non_numeric_stock_is_rejected(self, product_service, make_product, raw):
        with pytest.raises(InvalidInputError, match='stock'):
            product_service.update(make_product(), stock=raw)

    def test_edited_copy_has_its_own_extra_fields(self, product_service, make_product):
        product = make_product(extra={'review': 'ok'})
        edited = product_service.update(product, name='Bamboo Toothbrush')
        edited.extra['review'] = 'changed'
        assert product.extra == {'review': 'ok'}

    def test_name_change_keeps_stored_expiry(self, product_service, make_product):
        stored = datetime(2024, 4, 1, tzinfo=UTC)
        product = product_service.update(make_product(expiry_date=stored), name='Bamboo Toothbrush')
        assert product.name == 'Bamboo Toothbrush'
        assert product.expiry_date == stored

    def test_custom_category_table(self, make_product):
        service = ProductService(ExpiryService(usage_periods={'towel': 2}))
        product = service.update(make_product(), category='towel')
        assert product.expiry_date == datetime(2024, 3, 1, tzinfo=UTC)
