import pytest
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from apps.orders.services import submit_order


@pytest.mark.django_db
class TestOrderList:

    def test_defaults_to_today(self, viewer_client, todays_order, last_months_order):
        response = viewer_client.get(reverse('orders:order-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        result = response.data['results'][0]
        assert result['order_number'] == 1
        assert result['items_summary'] == 'Cappuccino x 2, Sandwich x 1'

    def test_period_presets(self, viewer_client, todays_order, last_months_order):
        response = viewer_client.get(reverse('orders:order-list'), {'period': '30days'})
        assert response.data['count'] == 1

        response = viewer_client.get(reverse('orders:order-list'), {
            'period': 'range',
            'start_date': timezone.localdate(last_months_order.created_at).isoformat(),
            'end_date': timezone.localdate(todays_order.created_at).isoformat(),
        })
        assert response.data['count'] == 2

    def test_filter_by_payment_mode(self, viewer_client, todays_order, cafe, cart_items):
        submit_order(cafe_id=cafe.id, items=cart_items, payment_mode='UPI', total_amount='160')

        response = viewer_client.get(reverse('orders:order-list'), {'payment_mode': 'UPI'})

        assert response.data['count'] == 1
        assert response.data['results'][0]['payment_mode'] == 'UPI'

    def test_invalid_period(self, viewer_client):
        response = viewer_client.get(reverse('orders:order-list'), {'period': 'fortnight'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_other_cafe_orders_hidden(self, other_cafe_client, todays_order):
        response = other_cafe_client.get(reverse('orders:order-list'))

        assert response.data['count'] == 0

    def test_requires_cafe(self, cafeless_client):
        response = cafeless_client.get(reverse('orders:order-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestOrderDetail:

    def test_retrieve(self, viewer_client, todays_order, staff_user):
        response = viewer_client.get(reverse('orders:order-detail', args=[todays_order.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_amount'] == '160.00'
        assert response.data['submitted_by']['email'] == staff_user.email
        assert {item['item_name'] for item in response.data['items']} == {'Cappuccino', 'Sandwich'}

    def test_other_cafe(self, other_cafe_client, todays_order):
        response = other_cafe_client.get(reverse('orders:order-detail', args=[todays_order.id]))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_orders_are_read_only(self, admin_client):
        response = admin_client.post(reverse('orders:order-list'), {}, format='json')

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
