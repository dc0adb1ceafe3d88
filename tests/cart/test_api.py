"""
Cart API tests.
"""
from decimal import Decimal
from uuid import uuid4

import pytest
from rest_framework import status

from apps.cart.domain.catalog import (
    Card,
    Coupon,
    CouponType,
    ShipmentMethod,
    ShippingZone,
    WeightBand,
)

from .factories import make_campaign, make_product

pytestmark = pytest.mark.django_db

BASE_URL = '/api/v1/carts/'


@pytest.fixture
def product(catalog):
    product = make_product('10.00', stock=10)
    catalog.register_product(product)
    return product


@pytest.fixture
def cart_id(api_client, catalog):
    response = api_client.post(BASE_URL, {}, format='json')
    assert response.status_code == status.HTTP_201_CREATED
    return response.data['id']


def add_item(api_client, cart_id, product_id, quantity=1):
    return api_client.post(
        f'{BASE_URL}{cart_id}/items/',
        {'product_id': str(product_id), 'quantity': quantity},
        format='json',
    )


class TestCartApi:
    def test_create_cart(self, api_client, catalog):
        user_id = uuid4()
        response = api_client.post(BASE_URL, {'user_id': str(user_id)}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['user_id'] == str(user_id)
        assert response.data['state'] == 'active'
        assert response.data['total'] == '0.00'

    def test_get_unknown_cart(self, api_client, catalog):
        response = api_client.get(f'{BASE_URL}{uuid4()}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'CART_NOT_FOUND'

    def test_add_item_returns_totals(self, api_client, cart_id, product):
        response = add_item(api_client, cart_id, product.id, 3)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['items_total'] == '30.00'
        assert response.data['vat_total'] == '5.61'
        assert response.data['items'][0]['quantity'] == 3
        assert response.data['warnings'] == []

    def test_add_item_reports_clamped_quantity(self, api_client, cart_id, product):
        response = add_item(api_client, cart_id, product.id, 12)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['items'][0]['quantity'] == 10
        assert response.data['warnings'][0]['code'] == 'not-enough-stock'

    def test_add_unknown_product(self, api_client, cart_id, catalog):
        response = add_item(api_client, cart_id, uuid4())

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'PRODUCT_NOT_FOUND'

    def test_invalid_payload(self, api_client, cart_id, catalog):
        response = api_client.post(f'{BASE_URL}{cart_id}/items/', {'quantity': 0}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_and_remove_item(self, api_client, cart_id, product):
        item_id = add_item(api_client, cart_id, product.id).data['items'][0]['id']

        response = api_client.patch(f'{BASE_URL}{cart_id}/items/{item_id}/', {'quantity': 2}, format='json')
        assert response.data['total'] == '20.00'

        response = api_client.delete(f'{BASE_URL}{cart_id}/items/{item_id}/')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['items'] == []

    def test_free_units_listed_separately(self, api_client, cart_id, catalog):
        campaign = make_campaign('same_product_free', purchase_number=2)
        product = make_product('4.00', stock=10, discount_tree=(campaign,))
        catalog.register_product(product)

        response = add_item(api_client, cart_id, product.id, 2)

        assert response.data['free_items'][0]['display_quantity'] == 1
        assert response.data['total'] == '8.00'

    def test_coupon(self, api_client, cart_id, catalog, product):
        catalog.register_coupon(Coupon(code='SAVE10', type=CouponType.PERCENTAGE, value=Decimal('10')))
        add_item(api_client, cart_id, product.id, 2)

        response = api_client.post(f'{BASE_URL}{cart_id}/coupon/', {'code': 'SAVE10'}, format='json')
        assert response.data['coupon'] == {'code': 'SAVE10', 'active': True, 'rule': None, 'message': ''}
        assert response.data['coupon_discount'] == '2.00'
        assert response.data['total'] == '18.00'

        response = api_client.delete(f'{BASE_URL}{cart_id}/coupon/')
        assert response.data['coupon'] is None
        assert response.data['total'] == '20.00'

    def test_rejected_coupon_reported(self, api_client, cart_id, catalog, product):
        catalog.register_coupon(Coupon(
            code='BIG', type=CouponType.PERCENTAGE, value=Decimal('10'), min_order_value=Decimal('100'),
        ))
        add_item(api_client, cart_id, product.id, 1)

        response = api_client.post(f'{BASE_URL}{cart_id}/coupon/', {'code': 'BIG'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['coupon']['active'] is False
        assert response.data['coupon']['rule'] == 'order_has_min_value'

    def test_unknown_coupon(self, api_client, cart_id, catalog):
        response = api_client.post(f'{BASE_URL}{cart_id}/coupon/', {'code': 'NOPE'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_shipping(self, api_client, cart_id, catalog, product):
        method = ShipmentMethod(name='Courier', price=Decimal('3.50'))
        catalog.register_shipment_method(method)
        add_item(api_client, cart_id, product.id, 1)

        response = api_client.put(
            f'{BASE_URL}{cart_id}/shipping/',
            {'shipment_method_id': str(method.id), 'country': 'pt'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['country'] == 'PT'
        assert response.data['shipping'] == '3.50'
        assert response.data['total'] == '13.50'
        assert response.data['sub_total'] == '10.00'

    def test_shipping_needs_destination(self, api_client, cart_id, catalog):
        response = api_client.put(
            f'{BASE_URL}{cart_id}/shipping/',
            {'shipment_method_id': str(uuid4())},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unpriceable_shipping_is_unprocessable(self, api_client, cart_id, catalog, product):
        zone = ShippingZone(
            name='Mainland',
            countries=frozenset({'PT'}),
            weight_bands=(WeightBand(Decimal('0'), None, Decimal('3.00')),),
        )
        method = ShipmentMethod(name='Courier', uses_weight=True, zones=(zone,))
        catalog.register_shipment_method(method)
        add_item(api_client, cart_id, product.id, 1)

        response = api_client.put(
            f'{BASE_URL}{cart_id}/shipping/',
            {'shipment_method_id': str(method.id), 'country': 'ES'},
            format='json',
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.data['rule'] == 'shipping_zone'

    def test_card(self, api_client, cart_id, catalog, product, settings):
        settings.CART_PRICING = {'card_rate': '10'}
        catalog.register_card(Card(number='0001', current_balance=Decimal('50')))
        add_item(api_client, cart_id, product.id, 2)

        response = api_client.put(f'{BASE_URL}{cart_id}/card/', {'number': '0001'}, format='json')
        assert response.data['card_number'] == '0001'
        assert response.data['total'] == '18.00'

        response = api_client.delete(f'{BASE_URL}{cart_id}/card/')
        assert response.data['card_number'] is None
        assert response.data['total'] == '20.00'

    def test_checkout_flow(self, api_client, cart_id, product):
        add_item(api_client, cart_id, product.id, 1)

        response = api_client.post(f'{BASE_URL}{cart_id}/checkout/', {'action': 'checkout'}, format='json')
        assert response.data['state'] == 'checkout'

        response = api_client.post(f'{BASE_URL}{cart_id}/checkout/', {'action': 'complete'}, format='json')
        assert response.data['state'] == 'completed'
        assert response.data['total'] == '10.00'

        response = add_item(api_client, cart_id, product.id, 1)
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['state'] == 'completed'

    def test_clear_cart(self, api_client, cart_id, product):
        add_item(api_client, cart_id, product.id, 2)

        response = api_client.delete(f'{BASE_URL}{cart_id}/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['items'] == []
        assert response.data['total'] == '0.00'
