"""Tests for parameter normalization and request helpers."""

from datetime import date, datetime

import pytest

from zaim_client.errors import ValidationError
from zaim_client.schemas import (
    ItemType,
    TokenPair,
    build_query_url,
    current_date,
    format_date,
    normalize_params,
    parse_body,
    parse_item_type,
    require_fields,
)


class TestFormatDate:
    """Dates are rendered as YYYY-M-D."""

    def test_date_without_padding(self):
        assert format_date(date(2013, 4, 9)) == "2013-4-9"

    def test_two_digit_month_and_day(self):
        assert format_date(date(2018, 11, 24)) == "2018-11-24"

    def test_datetime_drops_time(self):
        assert format_date(datetime(2013, 4, 9, 23, 59)) == "2013-4-9"

    def test_padded_string_kept(self):
        assert format_date("2013-04-10") == "2013-04-10"

    def test_wrong_string_format(self):
        with pytest.raises(ValidationError) as exc_info:
            format_date("2018/11/24")

        assert "Wrong date format" in str(exc_info.value)

    def test_unsupported_type(self):
        with pytest.raises(ValidationError):
            format_date(20181124)

    def test_current_date_matches_today(self):
        today = date.today()

        assert current_date() == f"{today.year}-{today.month}-{today.day}"


class TestNormalizeParams:
    """Defaults for date and mapping."""

    def test_mapping_defaulted(self):
        assert normalize_params({}) == {"mapping": 1}

    def test_falsy_mapping_replaced(self):
        assert normalize_params({"mapping": 0}) == {"mapping": 1}

    def test_mapping_not_validated(self):
        assert normalize_params({"mapping": 3}) == {"mapping": 3}

    def test_none_params(self):
        assert normalize_params(None) == {"mapping": 1}

    def test_date_appended_before_mapping(self, monkeypatch):
        monkeypatch.setattr("zaim_client.schemas.request.current_date", lambda: "2013-4-9")

        result = normalize_params({"amount": 100}, default_date=True)

        assert list(result.items()) == [("amount", 100), ("date", "2013-4-9"), ("mapping", 1)]

    def test_empty_date_defaulted_in_place(self, monkeypatch):
        monkeypatch.setattr("zaim_client.schemas.request.current_date", lambda: "2013-4-9")

        result = normalize_params({"date": "", "amount": 100}, default_date=True)

        assert list(result) == ["date", "amount", "mapping"]
        assert result["date"] == "2013-4-9"

    def test_date_not_defaulted_for_reads(self):
        assert "date" not in normalize_params({}, default_date=False)

    def test_input_not_mutated(self):
        params = {"amount": 100}

        normalize_params(params, default_date=True)

        assert params == {"amount": 100}


class TestRequireFields:
    """Falsy values count as missing."""

    def test_all_present(self):
        require_fields("create_pay", {"category_id": 1, "genre_id": 2, "amount": 3})

    def test_message_names_all_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            require_fields("create_pay", {"category_id": 1})

        assert str(exc_info.value) == (
            "Invalid parameters. category_id, genre_id and amount are necessary."
        )
        assert exc_info.value.missing == ["genre_id", "amount"]

    def test_single_field_message(self):
        with pytest.raises(ValidationError) as exc_info:
            require_fields("update_money", {})

        assert str(exc_info.value) == "Invalid parameters. amount is necessary."


class TestItemType:
    def test_accepts_strings(self):
        assert parse_item_type("payment") is ItemType.PAYMENT

    def test_accepts_enum(self):
        assert parse_item_type(ItemType.TRANSFER) is ItemType.TRANSFER

    def test_rejects_unknown(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_item_type("bogus")

        assert str(exc_info.value) == "Invalid itemType: bogus"


class TestBuildQueryUrl:
    """Query strings keep insertion order and the trailing separator."""

    def test_trailing_separator(self):
        url = build_query_url("https://api.zaim.net/v2/home/money", {"mapping": 1, "limit": 20})

        assert url == "https://api.zaim.net/v2/home/money?mapping=1&limit=20&"

    def test_empty_params(self):
        assert build_query_url("https://api.zaim.net/v2/currency", {}) == (
            "https://api.zaim.net/v2/currency?"
        )

    def test_values_percent_encoded(self):
        url = build_query_url("https://example.test/x", {"comment": "a&b c"})

        assert url == "https://example.test/x?comment=a%26b%20c&"


class TestParseBody:
    def test_json_text(self):
        assert parse_body('{"money": []}') == {"money": []}

    def test_json_bytes(self):
        assert parse_body(b'{"money": []}') == {"money": []}

    def test_empty_body(self):
        assert parse_body("") is None

    def test_structured_passthrough(self):
        data = {"money": []}

        assert parse_body(data) is data


class TestTokenPair:
    def test_complete(self):
        assert TokenPair(token="t", secret="s").is_complete

    @pytest.mark.parametrize(
        "token,secret",
        [(None, None), ("t", None), (None, "s"), ("", "s"), ("t", "")],
    )
    def test_incomplete(self, token, secret):
        assert not TokenPair(token=token, secret=secret).is_complete
