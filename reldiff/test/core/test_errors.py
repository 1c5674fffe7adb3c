"""Tests for reldiff.core.errors module."""

from reldiff.core.errors import ErrorCode


class TestErrorCode:
    def test_values_are_stable(self) -> None:
        assert ErrorCode.OK == 0
        assert ErrorCode.USER_ERROR == 1
        assert ErrorCode.ENV_ERROR == 2
        assert ErrorCode.DATA_ERROR == 3
        assert ErrorCode.NETWORK_ERROR == 4

    def test_str(self) -> None:
        assert str(ErrorCode.NETWORK_ERROR) == "network error"

    def test_is_success(self) -> None:
        assert ErrorCode.OK.is_success
        assert not ErrorCode.DATA_ERROR.is_success

    def test_max_picks_most_severe_code(self) -> None:
        assert max(ErrorCode.USER_ERROR, ErrorCode.NETWORK_ERROR) is ErrorCode.NETWORK_ERROR
