"""Query enforcement tests — pure tests for list parameter and path id validation.

Tests cover:
    - Unknown parameter check runs first and names every offending key
    - page / perPage grammar, lower and upper bounds, defaults
    - borough trimming, emptiness, length and character rules
    - Fail-fast ordering: only the first failing check is reported
    - Path id pre-filter
"""

import pytest

from restaurant_api.core.enforce_query import (
    ListQuery,
    check_restaurant_id,
    is_valid_restaurant_id,
    parse_list_query,
)
from restaurant_api.core.errors import InvalidInputError


def _message(params: dict) -> str:
    with pytest.raises(InvalidInputError) as exc_info:
        parse_list_query(params)
    assert exc_info.value.http_status == 400
    return exc_info.value.message


# --- Defaults -----------------------------------------------------------------

def test_empty_query_uses_defaults():
    assert parse_list_query({}) == ListQuery(page=1, per_page=10, borough=None)


def test_all_params_normalized():
    query = parse_list_query(
        {"page": ["3"], "perPage": ["25"], "borough": ["  Staten Island "]},
    )
    assert query == ListQuery(page=3, per_page=25, borough="Staten Island")


# --- Unknown parameters -------------------------------------------------------

def test_unknown_param_rejected_with_allowed_list():
    message = _message({"foo": ["1"]})
    assert message == (
        "Invalid query parameters: foo. Allowed parameters: page, perPage, borough"
    )


def test_unknown_params_all_named():
    message = _message({"foo": ["1"], "page": ["1"], "sort": ["name"]})
    assert "foo, sort" in message


def test_unknown_param_reported_before_bad_page():
    message = _message({"foo": ["1"], "page": ["0"]})
    assert message.startswith("Invalid query parameters: foo")


def test_param_names_are_case_sensitive():
    message = _message({"perpage": ["5"]})
    assert "perpage" in message


# --- page ---------------------------------------------------------------------

@pytest.mark.parametrize("raw", ["-1", "1.5", "abc", "", " 1", "+2", "1e3"])
def test_page_must_be_digits(raw):
    assert _message({"page": [raw]}) == "Page parameter must be a positive integer"


def test_page_zero_rejected():
    assert _message({"page": ["0"]}) == "Page parameter must be greater than 0"


def test_page_above_limit_rejected():
    assert _message({"page": ["10001"]}) == "Page parameter cannot exceed 10000"


def test_page_limit_is_inclusive():
    assert parse_list_query({"page": ["10000"]}).page == 10000


def test_repeated_page_rejected():
    assert _message({"page": ["1", "2"]}) == (
        "Page parameter must be a positive integer"
    )


def test_huge_page_reported_as_over_limit():
    assert _message({"page": ["9" * 5000]}) == "Page parameter cannot exceed 10000"


def test_page_leading_zeros_ignored():
    assert parse_list_query({"page": ["0005"]}).page == 5
    assert parse_list_query({"page": ["0" * 40 + "10000"]}).page == 10000
    assert _message({"page": ["000"]}) == "Page parameter must be greater than 0"


# --- perPage ------------------------------------------------------------------

@pytest.mark.parametrize("raw", ["-5", "2.0", "ten", ""])
def test_per_page_must_be_digits(raw):
    assert _message({"perPage": [raw]}) == (
        "perPage parameter must be a positive integer"
    )


def test_per_page_zero_rejected():
    assert _message({"perPage": ["0"]}) == "perPage parameter must be greater than 0"


def test_per_page_above_limit_rejected():
    assert _message({"perPage": ["101"]}) == (
        "perPage parameter cannot exceed 100 items"
    )


def test_per_page_bounds_inclusive():
    assert parse_list_query({"perPage": ["1"]}).per_page == 1
    assert parse_list_query({"perPage": ["100"]}).per_page == 100


def test_huge_per_page_reported_as_over_limit():
    assert _message({"perPage": ["9" * 5000]}) == (
        "perPage parameter cannot exceed 100 items"
    )
    assert _message({"perPage": ["1" + "0" * 30]}) == (
        "perPage parameter cannot exceed 100 items"
    )


def test_page_checked_before_per_page():
    message = _message({"perPage": ["0"], "page": ["0"]})
    assert message.startswith("Page")


# --- borough ------------------------------------------------------------------

@pytest.mark.parametrize("raw", ["", "   "])
def test_empty_borough_rejected(raw):
    assert _message({"borough": [raw]}) == "Borough parameter cannot be empty"


def test_long_borough_rejected():
    assert _message({"borough": ["a" * 51]}) == (
        "Borough parameter cannot exceed 50 characters"
    )


def test_borough_length_checked_after_trim():
    query = parse_list_query({"borough": ["  " + "a" * 50 + "  "]})
    assert query.borough == "a" * 50


@pytest.mark.parametrize("raw", ["Queens1", "Man%hattan", "Bronx;", "Brooklyn_"])
def test_borough_bad_characters_rejected(raw):
    assert _message({"borough": [raw]}) == (
        "Borough parameter can only contain letters, spaces, "
        "hyphens, and apostrophes"
    )


@pytest.mark.parametrize("raw", ["Hell's Kitchen", "Bedford-Stuyvesant", "staten island"])
def test_borough_allowed_characters(raw):
    assert parse_list_query({"borough": [raw]}).borough == raw


def test_repeated_borough_rejected():
    assert _message({"borough": ["Queens", "Bronx"]}) == (
        "Borough parameter must be a string"
    )


def test_per_page_checked_before_borough():
    message = _message({"perPage": ["500"], "borough": ["1"]})
    assert message.startswith("perPage")


# --- Path id ------------------------------------------------------------------

def test_valid_object_id_accepted():
    assert check_restaurant_id("507f1f77bcf86cd799439011") == "507f1f77bcf86cd799439011"


def test_uppercase_hex_accepted():
    assert is_valid_restaurant_id("507F1F77BCF86CD799439011")


@pytest.mark.parametrize(
    "raw", ["not-a-valid-id", "507f1f77bcf86cd79943901", "507f1f77bcf86cd7994390111", "z" * 24],
)
def test_malformed_id_rejected(raw):
    with pytest.raises(InvalidInputError) as exc_info:
        check_restaurant_id(raw)
    assert exc_info.value.message == "Invalid restaurant ID format"
