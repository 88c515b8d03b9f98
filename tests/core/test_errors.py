"""Tests for error types and codes."""

import pytest

from classdiff.core.errors import (
    ClassDiffError,
    ConfigError,
    ErrorCode,
    FetchError,
    HashingError,
    IndexingError,
    InternalError,
    ScanAbortedError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_CACHE_UNUSABLE, 2000),
            (ErrorCode.FETCH_NOT_FOUND, 3000),
            (ErrorCode.FETCH_INVALID_PAYLOAD, 3000),
            (ErrorCode.INDEX_UNREADABLE, 4000),
            (ErrorCode.INDEX_UNIT_UNREADABLE, 4000),
            (ErrorCode.SCAN_ABORTED, 5000),
            (ErrorCode.INTERNAL_ERROR, 9000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        # Given
        error_code = code

        # When
        value = error_code.value

        # Then
        assert expected_range <= value < expected_range + 1000


class TestClassDiffError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = ClassDiffError(
            code=ErrorCode.FETCH_TRANSPORT,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 3002,
            "error": "FETCH_TRANSPORT",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        """Error string representation is human readable."""
        # Given
        error = ClassDiffError(code=ErrorCode.INTERNAL_ERROR, message="Something broke")

        # When
        result = str(error)

        # Then
        assert result == "[9001] INTERNAL_ERROR: Something broke"

    def test_given_error_when_raised_then_catchable_as_exception(self) -> None:
        """Errors are ordinary exceptions."""
        with pytest.raises(ClassDiffError):
            raise FetchError.not_found("org.example:lib:1.0")


class TestConstructors:
    """Factory classmethods on each error family."""

    def test_config_invalid_value(self) -> None:
        error = ConfigError.invalid_value("report.flat_limit", -1, "must be non-negative")

        assert error.code == ErrorCode.CONFIG_INVALID_VALUE
        assert error.details == {
            "field": "report.flat_limit",
            "value": "-1",
            "reason": "must be non-negative",
        }

    def test_config_cache_unusable(self) -> None:
        error = ConfigError.cache_unusable("/ro/cache", "Permission denied")

        assert error.code == ErrorCode.CONFIG_CACHE_UNUSABLE
        assert "/ro/cache" in error.message

    def test_fetch_transport_is_retryable(self) -> None:
        assert FetchError.transport("https://repo.test", "timeout").retryable
        assert not FetchError.not_found("x").retryable

    def test_fetch_bad_status(self) -> None:
        error = FetchError.bad_status("https://repo.test/a", 503)

        assert error.details["status_code"] == 503
        assert "503" in error.message

    def test_indexing_unknown_revision(self) -> None:
        error = IndexingError.unknown_revision("v9.9")

        assert error.code == ErrorCode.INDEX_UNKNOWN_REVISION
        assert error.details == {"revision": "v9.9"}

    def test_hashing_unreadable_unit(self) -> None:
        error = HashingError.unreadable_unit("src/A.java", "missing blob")

        assert error.code == ErrorCode.INDEX_UNIT_UNREADABLE

    def test_scan_aborted_embeds_cause(self) -> None:
        cause = FetchError.not_found("lib-1.0.jar")

        error = ScanAbortedError.first_comparison("1.0", cause)

        assert error.code == ErrorCode.SCAN_ABORTED
        assert error.details["release"] == "1.0"
        assert error.details["cause"] == cause.to_dict()
        assert "lib-1.0.jar" in error.message

    def test_internal_unexpected_details(self) -> None:
        error = InternalError.unexpected("bad state", position=3)

        assert error.details == {"position": 3}
