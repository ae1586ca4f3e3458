from typing import Any, Dict, List

from fastapi.testclient import TestClient

from src.platform.constant.route_constant import AUTH_LOGIN, AUTH_REGISTER, SEAT_BOOK


AUTH_COOKIE_NAME = 'fastapiusersauth'


def assert_response_status(response, expected_status: int, message: str | None = None):
    response_text = getattr(response, 'text', getattr(response, 'content', 'N/A'))
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response_text}'
    )


def register_user(client: TestClient, username: str, email: str, password: str) -> Dict[str, Any]:
    response = client.post(
        AUTH_REGISTER, json={'username': username, 'email': email, 'password': password}
    )
    assert_response_status(response, 201, f'Failed to register {username}')
    return response.json()


def login_user(client: TestClient, email: str, password: str) -> Dict[str, Any]:
    """Login and keep the auth cookie on the client."""
    response = client.post(AUTH_LOGIN, json={'email': email, 'password': password})
    assert_response_status(response, 200, f'Login failed: {response.text}')
    if AUTH_COOKIE_NAME in response.cookies:
        client.cookies.set(AUTH_COOKIE_NAME, response.cookies[AUTH_COOKIE_NAME])
    return response.json()


def bearer(token: str) -> Dict[str, str]:
    return {'Authorization': f'Bearer {token}'}


def book_seats(client: TestClient, seat_ids: List[int], **kwargs: Any) -> Any:
    return client.post(SEAT_BOOK, json={'seatIds': seat_ids}, **kwargs)
