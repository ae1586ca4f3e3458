import pytest

from src.platform.logging.loguru_io import Logger
from src.platform.logging.loguru_io_config import MASK
from src.platform.logging.loguru_io_utils import (
    mask_sensitive,
    normalize_args_kwargs,
    truncate_content,
)


@pytest.mark.unit
class TestMaskSensitive:
    def test_masks_password_in_repr(self) -> None:
        masked = mask_sensitive("LoginRequest(email='a@t.com', password='P@ssw0rd')")

        assert 'P@ssw0rd' not in masked
        assert 'a@t.com' in masked
        assert repr(MASK) in masked

    def test_masks_dict_style_token(self) -> None:
        masked = mask_sensitive("{'token': 'eyJhbGciOi', 'seat_ids': [1, 2]}")

        assert 'eyJhbGciOi' not in masked
        assert '[1, 2]' in masked

    def test_leaves_plain_values_alone(self) -> None:
        assert mask_sensitive(42) == 42
        assert mask_sensitive(None) is None
        assert mask_sensitive('seats 15-18') == 'seats 15-18'


@pytest.mark.unit
class TestLoguruIOHelpers:
    def test_truncate_long_content(self) -> None:
        truncated = truncate_content('x' * 600)

        assert truncated.startswith('x' * 500)
        assert truncated.endswith('(+100 chars)')

    def test_normalize_drops_unknown_kwargs(self) -> None:
        def book(seat_ids: list[int], *, user_id: int) -> None: ...

        args, kwargs = normalize_args_kwargs(book, [1], user_id=2, injected='x')

        assert args == ([1],)
        assert kwargs == {'user_id': 2}

    def test_io_decorator_returns_value_and_reraises(self) -> None:
        @Logger.io
        def divide(a: int, b: int) -> float:
            return a / b

        assert divide(6, 3) == 2
        with pytest.raises(ZeroDivisionError):
            divide(1, 0)

    def test_io_decorator_wraps_generators(self) -> None:
        @Logger.io
        def rows(count: int):
            for row_number in range(1, count + 1):
                yield row_number

        assert list(rows(3)) == [1, 2, 3]
