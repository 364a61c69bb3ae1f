import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status

from apps.orders.models import Order
from apps.pos.models import PosTabState


def _add(client, menu_item):
    return client.post(reverse('pos:cart-add'), {'menu_item': str(menu_item.id)}, format='json')


@pytest.fixture
def loaded_tab(staff_client, cappuccino, sandwich):
    """Order 1 of staff_user: Cappuccino x2 + Sandwich x1 = 160.00."""
    _add(staff_client, cappuccino)
    _add(staff_client, cappuccino)
    response = _add(staff_client, sandwich)
    return response.data['tabs'][0]


@pytest.mark.django_db
class TestTabsEndpoint:

    def test_first_visit_opens_order_1(self, staff_client):
        response = staff_client.get(reverse('pos:tabs'))

        assert response.status_code == status.HTTP_200_OK
        assert [tab['name'] for tab in response.data['tabs']] == ['Order 1']
        assert response.data['active_id'] == response.data['tabs'][0]['id']
        assert response.data['tabs'][0]['payment_mode'] == 'Cash'
        assert response.data['messages'] == []
        assert response.data['notification_ttl'] == 3

    def test_open_new_tab(self, staff_client):
        staff_client.get(reverse('pos:tabs'))

        response = staff_client.post(reverse('pos:tabs'))

        assert response.status_code == status.HTTP_201_CREATED
        assert [tab['name'] for tab in response.data['tabs']] == ['Order 1', 'Order 2']
        assert response.data['active_id'] == response.data['tabs'][1]['id']

    def test_tabs_are_saved_per_user(self, staff_client, admin_client, staff_user):
        staff_client.post(reverse('pos:tabs'))

        response = admin_client.get(reverse('pos:tabs'))

        assert len(response.data['tabs']) == 1
        assert PosTabState.objects.get(user=staff_user).data['tabs'][1]['name'] == 'Order 2'

    def test_switch(self, staff_client):
        first_id = staff_client.get(reverse('pos:tabs')).data['active_id']
        staff_client.post(reverse('pos:tabs'))

        response = staff_client.post(reverse('pos:tab-switch', args=[first_id]))

        assert response.data['active_id'] == first_id

    def test_switch_to_unknown_tab(self, staff_client):
        active_id = staff_client.get(reverse('pos:tabs')).data['active_id']

        response = staff_client.post(reverse('pos:tab-switch', args=[999]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['active_id'] == active_id

    def test_viewer_cannot_operate(self, viewer_client):
        response = viewer_client.get(reverse('pos:tabs'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_user_without_cafe(self, cafeless_client):
        response = cafeless_client.get(reverse('pos:tabs'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_anonymous(self, api_client):
        response = api_client.get(reverse('pos:tabs'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestDeleteTab:

    def test_delete_empty_tab(self, staff_client):
        staff_client.get(reverse('pos:tabs'))
        second_id = staff_client.post(reverse('pos:tabs')).data['active_id']

        response = staff_client.delete(reverse('pos:tab-delete', args=[second_id]))

        assert response.status_code == status.HTTP_200_OK
        assert [tab['name'] for tab in response.data['tabs']] == ['Order 1']
        assert response.data['messages'] == [{'level': 'info', 'message': 'Order 2 deleted'}]

    def test_delete_tab_with_items_asks_for_confirmation(self, staff_client, loaded_tab):
        response = staff_client.delete(reverse('pos:tab-delete', args=[loaded_tab['id']]))

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['confirmation_required'] is True
        assert response.data['tab_id'] == loaded_tab['id']
        assert 'Delete it anyway?' in response.data['error']

        tabs = staff_client.get(reverse('pos:tabs')).data['tabs']
        assert tabs[0]['item_count'] == 3

    def test_confirmed_delete_of_last_tab(self, staff_client, loaded_tab):
        url = reverse('pos:tab-delete', args=[loaded_tab['id']])

        response = staff_client.delete(f'{url}?confirm=true')

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['tabs']) == 1
        assert response.data['tabs'][0]['id'] != loaded_tab['id']
        assert response.data['tabs'][0]['name'] == 'Order 1'
        assert response.data['tabs'][0]['lines'] == []


@pytest.mark.django_db
class TestCart:

    def test_add_menu_item(self, staff_client, cappuccino):
        response = _add(staff_client, cappuccino)

        assert response.status_code == status.HTTP_200_OK
        line = response.data['tabs'][0]['lines'][0]
        assert line['name'] == 'Cappuccino'
        assert line['menu_item_id'] == str(cappuccino.id)
        assert line['quantity'] == 1
        assert line['subtotal'] == '50.00'
        assert response.data['messages'] == [
            {'level': 'success', 'message': 'Cappuccino added to Order 1'}
        ]

    def test_repeated_adds_merge(self, staff_client, loaded_tab):
        assert [(line['name'], line['quantity']) for line in loaded_tab['lines']] == [
            ('Cappuccino', 2),
            ('Sandwich', 1),
        ]
        assert loaded_tab['total'] == '160.00'

    def test_add_custom_item(self, staff_client):
        payload = {'name': 'Extra Shot', 'price': '15.00', 'category': 'Add-ons'}

        staff_client.post(reverse('pos:cart-add'), payload, format='json')
        response = staff_client.post(reverse('pos:cart-add'), payload, format='json')

        lines = response.data['tabs'][0]['lines']
        assert len(lines) == 1
        assert lines[0]['is_custom'] is True
        assert lines[0]['menu_item_id'] is None
        assert lines[0]['quantity'] == 2

    def test_add_needs_menu_item_or_name_and_price(self, staff_client):
        response = staff_client.post(reverse('pos:cart-add'), {'name': 'Extra Shot'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_custom_item_needs_a_price(self, staff_client):
        response = staff_client.post(reverse('pos:cart-add'), {'name': 'Water', 'price': '0'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'price' in response.data

        tabs = staff_client.get(reverse('pos:tabs')).data['tabs']
        assert tabs[0]['lines'] == []

    def test_custom_items_with_different_names_stay_apart(self, staff_client):
        staff_client.post(reverse('pos:cart-add'), {'name': 'Chai (large)', 'price': '30'}, format='json')
        response = staff_client.post(reverse('pos:cart-add'), {'name': 'Chai large', 'price': '30'}, format='json')

        assert [line['name'] for line in response.data['tabs'][0]['lines']] == ['Chai (large)', 'Chai large']

    def test_unavailable_item(self, staff_client, sold_out_item):
        response = _add(staff_client, sold_out_item)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_item_of_another_cafe(self, other_cafe_client, cappuccino):
        response = _add(other_cafe_client, cappuccino)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_increment_and_decrement(self, staff_client, loaded_tab, sandwich):
        identifier = str(sandwich.id)

        response = staff_client.post(reverse('pos:cart-increment', args=[identifier]))
        assert response.data['tabs'][0]['lines'][1]['quantity'] == 2

        staff_client.post(reverse('pos:cart-decrement', args=[identifier]))
        response = staff_client.post(reverse('pos:cart-decrement', args=[identifier]))

        assert [line['name'] for line in response.data['tabs'][0]['lines']] == ['Cappuccino']
        assert response.data['tabs'][0]['total'] == '100.00'


@pytest.mark.django_db
class TestSubmit:

    def test_cash_order(self, staff_client, staff_user, loaded_tab, cafe):
        response = staff_client.post(reverse('pos:tab-submit', args=[loaded_tab['id']]))

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['submission']['status'] == 'submitted'

        order = Order.objects.get(cafe=cafe)
        assert order.order_number == 1
        assert order.payment_mode == 'Cash'
        assert order.total_amount == Decimal('160.00')
        assert order.submitted_by == staff_user
        assert sorted((item.item_name, item.quantity) for item in order.items.all()) == [
            ('Cappuccino', 2),
            ('Sandwich', 1),
        ]

        # Submitted tab is closed, a fresh one takes its place
        assert len(response.data['tabs']) == 1
        assert response.data['tabs'][0]['lines'] == []
        assert response.data['messages'][0]['message'] == 'Order #1 submitted (Cash ₹160.00)'

    def test_split_order(self, staff_client, loaded_tab, cafe):
        staff_client.post(reverse('pos:payment'), {
            'payment_mode': 'Cash&UPI',
            'cash_amount': '100.00',
            'upi_amount': '60.00',
        }, format='json')

        response = staff_client.post(reverse('pos:tab-submit', args=[loaded_tab['id']]))

        assert response.status_code == status.HTTP_201_CREATED
        primary, secondary = Order.objects.filter(cafe=cafe).order_by('order_number')
        assert (primary.payment_mode, primary.total_amount) == ('Cash', Decimal('100.00'))
        assert primary.items.count() == 2
        assert (secondary.payment_mode, secondary.total_amount) == ('UPI', Decimal('60.00'))
        assert [(item.item_name, item.quantity, item.price) for item in secondary.items.all()] == [
            ('Order 1_upi', 1, Decimal('60.00')),
        ]
        assert len(response.data['submission']['orders']) == 2

    def test_split_not_matching_total(self, staff_client, loaded_tab):
        staff_client.post(reverse('pos:payment'), {
            'payment_mode': 'Cash&UPI',
            'cash_amount': '40.00',
            'upi_amount': '50.00',
        }, format='json')

        response = staff_client.post(reverse('pos:tab-submit', args=[loaded_tab['id']]))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['submission']['status'] == 'invalid'
        assert Order.objects.count() == 0
        assert response.data['tabs'][0]['item_count'] == 3

    def test_empty_tab(self, staff_client):
        tab_id = staff_client.get(reverse('pos:tabs')).data['active_id']

        response = staff_client.post(reverse('pos:tab-submit', args=[tab_id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['submission'] is None
        assert Order.objects.count() == 0

    def test_repeated_submit_charges_once(self, staff_client, loaded_tab, cafe):
        url = reverse('pos:tab-submit', args=[loaded_tab['id']])

        first = staff_client.post(url)
        second = staff_client.post(url)

        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_200_OK
        assert second.data['submission'] is None
        assert Order.objects.filter(cafe=cafe).count() == 1

    def test_submit_without_saved_tabs(self, staff_client, staff_user):
        response = staff_client.post(reverse('pos:tab-submit', args=[1]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['submission'] is None
        assert PosTabState.objects.filter(user=staff_user).exists()
        assert Order.objects.count() == 0

    def test_order_numbers_continue_for_the_day(self, staff_client, admin_client, cappuccino):
        _add(staff_client, cappuccino)
        _add(admin_client, cappuccino)

        staff_tab = staff_client.get(reverse('pos:tabs')).data['active_id']
        admin_tab = admin_client.get(reverse('pos:tabs')).data['active_id']
        staff_client.post(reverse('pos:tab-submit', args=[staff_tab]))
        admin_client.post(reverse('pos:tab-submit', args=[admin_tab]))

        assert sorted(Order.objects.values_list('order_number', flat=True)) == [1, 2]


@pytest.mark.django_db
class TestPayment:

    def test_set_mode_and_amounts(self, staff_client, loaded_tab):
        response = staff_client.post(reverse('pos:payment'), {
            'payment_mode': 'Cash&UPI',
            'cash_amount': '100',
            'upi_amount': '60',
        }, format='json')

        tab = response.data['tabs'][0]
        assert tab['payment_mode'] == 'Cash&UPI'
        assert tab['cash_amount'] == '100.00'
        assert tab['upi_amount'] == '60.00'

    def test_amounts_kept_when_switching_mode(self, staff_client, loaded_tab):
        staff_client.post(reverse('pos:payment'), {
            'payment_mode': 'Cash&UPI',
            'cash_amount': '100',
            'upi_amount': '60',
        }, format='json')

        response = staff_client.post(reverse('pos:payment'), {'payment_mode': 'UPI'}, format='json')

        tab = response.data['tabs'][0]
        assert tab['payment_mode'] == 'UPI'
        assert tab['upi_amount'] == '60.00'

    def test_invalid_mode(self, staff_client):
        response = staff_client.post(reverse('pos:payment'), {'payment_mode': 'Card'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestUpiQr:

    def test_qr_for_upi_tab(self, staff_client, loaded_tab, settings):
        settings.PAYMENT_UPI_VPA = 'brewcorner@okbank'
        settings.PAYMENT_UPI_PAYEE_NAME = 'Brew Corner'
        staff_client.post(reverse('pos:payment'), {'payment_mode': 'UPI'}, format='json')

        response = staff_client.get(reverse('pos:upi-qr'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['amount'] == '160.00'
        assert response.data['upi_uri'] == (
            'upi://pay?pa=brewcorner@okbank&pn=Brew%20Corner&am=160.00&cu=INR&tn=Order%201'
        )
        assert response.data['qr_png_base64']

    def test_qr_for_split_tab_uses_upi_share(self, staff_client, loaded_tab, settings):
        settings.PAYMENT_UPI_VPA = 'brewcorner@okbank'
        staff_client.post(reverse('pos:payment'), {
            'payment_mode': 'Cash&UPI',
            'cash_amount': '100',
            'upi_amount': '60',
        }, format='json')

        response = staff_client.get(reverse('pos:upi-qr'))

        assert response.data['amount'] == '60.00'

    def test_cash_tab(self, staff_client, loaded_tab, settings):
        settings.PAYMENT_UPI_VPA = 'brewcorner@okbank'

        response = staff_client.get(reverse('pos:upi-qr'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Order 1 is paid in cash'

    def test_not_configured(self, staff_client, loaded_tab, settings):
        settings.PAYMENT_UPI_VPA = ''

        response = staff_client.get(reverse('pos:upi-qr'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'UPI payments are not configured'
