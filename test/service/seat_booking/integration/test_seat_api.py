from typing import Any, Dict

from fastapi.testclient import TestClient
import pytest

from src.platform.config.core_setting import settings
from src.platform.constant.route_constant import (
    HEALTH,
    METRICS,
    SEAT_CANCEL,
    SEAT_MAP,
    SEAT_MY_BOOKINGS,
    SEAT_RESET,
    SEAT_SELECT,
)
from test.shared.utils import bearer, book_seats, login_user, register_user
from test.util_constant import (
    ANOTHER_EMAIL,
    ANOTHER_USERNAME,
    DEFAULT_PASSWORD,
    TEST_EMAIL,
    TEST_USERNAME,
    TOTAL_SEATS,
)


def _available_ids(client: TestClient) -> set[int]:
    seats = client.get(SEAT_MAP).json()['seats']
    return {seat['id'] for row in seats.values() for seat in row if seat['isAvailable']}


@pytest.mark.integration
class TestSeatMapAPI:
    def test_seat_map_groups_rows(self, client: TestClient):
        response = client.get(SEAT_MAP)

        assert response.status_code == 200
        seats = response.json()['seats']
        assert len(seats) == 12
        assert len(seats['1']) == 7
        assert len(seats['12']) == 3
        assert seats['3'][0] == {
            'id': 15,
            'seatNumber': 15,
            'rowNumber': 3,
            'seatPosition': 1,
            'isAvailable': True,
        }
        assert sum(len(row) for row in seats.values()) == TOTAL_SEATS

    def test_seat_map_is_public(self, client: TestClient):
        client.cookies.clear()

        assert client.get(SEAT_MAP).status_code == 200

    def test_select_prefers_one_row(self, client: TestClient):
        response = client.post(SEAT_SELECT, json={'count': 4})

        assert response.status_code == 200
        assert response.json() == {'seatIds': [1, 2, 3, 4]}

    def test_select_skips_already_selected(self, client: TestClient):
        response = client.post(SEAT_SELECT, json={'count': 2, 'alreadySelected': [1, 2, 3, 4, 5, 6]})

        assert response.status_code == 200
        assert response.json() == {'seatIds': [8, 9]}

    def test_select_invalid_count(self, client: TestClient):
        response = client.post(SEAT_SELECT, json={'count': 8})

        assert response.status_code == 400
        assert response.json() == {'error': 'Must select between 1 and 7 seats'}


@pytest.mark.integration
class TestBookingAPI:
    @pytest.fixture
    def traveller(self, client: TestClient) -> Dict[str, Any]:
        registered = register_user(client, TEST_USERNAME, TEST_EMAIL, DEFAULT_PASSWORD)
        login_user(client, TEST_EMAIL, DEFAULT_PASSWORD)
        return registered

    def test_book_requires_auth(self, client: TestClient):
        response = book_seats(client, [1])

        assert response.status_code == 401

    def test_book_seats(self, client: TestClient, traveller: Dict[str, Any]):
        response = book_seats(client, [15, 16, 17, 18])

        assert response.status_code == 201
        data = response.json()
        assert data['message'] == 'Seats booked successfully'
        assert data['booking']['seatIds'] == [15, 16, 17, 18]
        assert data['booking']['reference'].startswith('TB')
        assert 'bookingDate' in data['booking']
        assert {15, 16, 17, 18}.isdisjoint(_available_ids(client))

    def test_book_taken_seat_reports_conflict(self, client: TestClient, traveller: Dict[str, Any]):
        assert book_seats(client, [20, 21]).status_code == 201

        response = book_seats(client, [21, 22])

        assert response.status_code == 400
        assert response.json() == {
            'error': 'Some seats are not available',
            'unavailableSeats': [21],
        }
        assert 22 in _available_ids(client)

    @pytest.mark.parametrize(
        'seat_ids,error',
        [
            ([], 'Must select between 1 and 7 seats'),
            ([1, 2, 3, 4, 5, 6, 7, 8], 'Must select between 1 and 7 seats'),
            ([0], 'Invalid seat IDs provided'),
            ([81], 'Invalid seat IDs provided'),
            ([4, 4], 'Duplicate seat IDs provided'),
        ],
    )
    def test_book_invalid_seat_ids(
        self, client: TestClient, traveller: Dict[str, Any], seat_ids: list[int], error: str
    ):
        response = book_seats(client, seat_ids)

        assert response.status_code == 400
        assert response.json() == {'error': error}

    def test_my_bookings_newest_first_with_cancelled(
        self, client: TestClient, traveller: Dict[str, Any]
    ):
        first = book_seats(client, [1, 2]).json()['booking']
        second = book_seats(client, [30]).json()['booking']
        client.delete(SEAT_CANCEL.format(booking_id=first['id']))

        response = client.get(SEAT_MY_BOOKINGS)

        assert response.status_code == 200
        bookings = response.json()['bookings']
        assert [b['id'] for b in bookings] == [second['id'], first['id']]
        assert bookings[0]['status'] == 'active'
        assert bookings[0]['seatNumbers'] == [30]
        assert bookings[1]['status'] == 'cancelled'
        assert bookings[1]['seatNumbers'] == [1, 2]
        assert bookings[1]['reference'] == first['reference']

    def test_my_bookings_only_shows_own(self, client: TestClient, traveller: Dict[str, Any]):
        book_seats(client, [1])
        other = register_user(client, ANOTHER_USERNAME, ANOTHER_EMAIL, DEFAULT_PASSWORD)

        response = client.get(SEAT_MY_BOOKINGS, headers=bearer(other['token']))

        assert response.status_code == 200
        assert response.json() == {'bookings': []}

    def test_cancel_round_trip(self, client: TestClient, traveller: Dict[str, Any]):
        booking = book_seats(client, [40, 41]).json()['booking']

        response = client.delete(SEAT_CANCEL.format(booking_id=booking['id']))

        assert response.status_code == 200
        assert response.json() == {'message': 'Booking cancelled successfully'}
        assert {40, 41} <= _available_ids(client)
        assert book_seats(client, [40, 41]).status_code == 201

    def test_cancel_twice(self, client: TestClient, traveller: Dict[str, Any]):
        booking = book_seats(client, [50]).json()['booking']
        client.delete(SEAT_CANCEL.format(booking_id=booking['id']))

        response = client.delete(SEAT_CANCEL.format(booking_id=booking['id']))

        assert response.status_code == 400
        assert response.json() == {'error': 'Booking is already cancelled'}

    def test_cancel_unknown_booking(self, client: TestClient, traveller: Dict[str, Any]):
        response = client.delete(SEAT_CANCEL.format(booking_id=999999))

        assert response.status_code == 404
        assert response.json() == {'error': 'Booking not found'}

    def test_cancel_someone_elses_booking(self, client: TestClient, traveller: Dict[str, Any]):
        booking = book_seats(client, [60]).json()['booking']
        other = register_user(client, ANOTHER_USERNAME, ANOTHER_EMAIL, DEFAULT_PASSWORD)

        response = client.delete(
            SEAT_CANCEL.format(booking_id=booking['id']), headers=bearer(other['token'])
        )

        assert response.status_code == 404

    def test_reset(self, client: TestClient, traveller: Dict[str, Any]):
        book_seats(client, [1, 2, 3])
        book_seats(client, [77])

        response = client.post(SEAT_RESET)

        assert response.status_code == 200
        assert response.json() == {'message': 'All seats have been reset'}
        assert len(_available_ids(client)) == TOTAL_SEATS
        statuses = {b['status'] for b in client.get(SEAT_MY_BOOKINGS).json()['bookings']}
        assert statuses == {'cancelled'}

    def test_reset_disabled(self, client: TestClient, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(settings, 'SEAT_RESET_ENABLED', False)

        response = client.post(SEAT_RESET)

        assert response.status_code == 403


@pytest.mark.integration
class TestSystemAPI:
    def test_health(self, client: TestClient):
        response = client.get(HEALTH)

        assert response.status_code == 200
        data = response.json()
        assert data['status'] == 'OK'
        assert 'timestamp' in data

    def test_metrics(self, client: TestClient):
        client.get(SEAT_MAP)

        response = client.get(METRICS)

        assert response.status_code == 200
        assert 'seat_booking_seats_available' in response.text
