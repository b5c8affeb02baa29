import random

import pytest

from barber_console.common.formatters import (
    digits_only,
    format_document,
    format_login_identifier,
    format_phone,
    is_valid_document,
    is_valid_email,
    is_valid_phone,
    normalize_email,
)


def test_digits_only_strips_everything_else_and_is_idempotent():
    raw = "(11) 98765-4321 ramal 2"
    once = digits_only(raw)

    assert once == "119876543212"
    assert digits_only(once) == once
    assert digits_only(None) == ""


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("", ""),
        ("123", "123"),
        ("1234", "123.4"),
        ("1234567", "123.456.7"),
        ("1234567890", "123.456.789-0"),
        ("12345678901", "123.456.789-01"),
        ("123456789012345", "123.456.789-01"),
    ],
)
def test_format_document_is_progressive(raw, expected):
    assert format_document(raw) == expected


def test_format_document_keeps_digits():
    formatted = format_document("111.444.777-35")

    assert formatted == "111.444.777-35"
    assert digits_only(format_document(formatted)) == "11144477735"


@pytest.mark.parametrize(
    "cpf, valid",
    [
        ("11144477735", True),
        ("111.444.777-35", True),
        ("11111111111", False),
        ("12345678900", False),
        ("1114447773", False),
        ("", False),
    ],
)
def test_is_valid_document(cpf, valid):
    assert is_valid_document(cpf) is valid


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1", "(1"),
        ("11", "(11)"),
        ("1198", "(11) 98"),
        ("1187654321", "(11) 8765-4321"),
        ("11987654321", "(11) 98765-4321"),
        ("119876543210000", "(11) 98765-4321"),
    ],
)
def test_format_phone_has_no_separator_leakage(raw, expected):
    assert format_phone(raw) == expected


@pytest.mark.parametrize("length, valid", [(0, False), (9, False), (10, True), (11, True), (12, False)])
def test_is_valid_phone_by_length(length, valid):
    assert is_valid_phone("9" * length) is valid


def test_email_normalize_and_validate():
    email = normalize_email("  User@Example.COM ")

    assert email == "user@example.com"
    assert is_valid_email(email) is True
    assert is_valid_email("not-an-email") is False
    assert is_valid_email("   ") is False
    assert is_valid_email("a@b.c") is False


def test_login_identifier_masks_as_document_until_it_overflows():
    assert format_login_identifier("11144477735") == "111.444.777-35"
    assert format_login_identifier("119876543210") == "(11) 98765-4321"


@pytest.mark.parametrize("raw", ["١٢٣٤", "１２３４", "۱۲۳۴"])
def test_digits_only_ignores_non_ascii_digits(raw):
    assert digits_only(raw) == ""
    assert format_document(raw) == ""
    assert format_phone(raw) == ""


def test_non_ascii_digits_never_validate():
    assert is_valid_phone("١١٩٨٧٦٥٤٣٢١") is False
    assert is_valid_phone("１１９８７６５４３２１") is False
    assert is_valid_document("١١١٤٤٤٧٧٧٣٥") is False
    assert digits_only("11 ９8765-4321") == "1187654321"


def _cpf_check_digit(base):
    weight = len(base) + 1
    remainder = sum(int(d) * (weight - i) for i, d in enumerate(base)) % 11
    return "0" if remainder < 2 else str(11 - remainder)


def test_checksum_holds_for_random_bases():
    rng = random.Random(20261019)
    checked = 0
    while checked < 200:
        base = "".join(rng.choice("0123456789") for _ in range(9))
        first = _cpf_check_digit(base)
        cpf = base + first + _cpf_check_digit(base + first)
        if len(set(cpf)) == 1:
            continue

        assert is_valid_document(cpf) is True
        for pos in (9, 10):
            for digit in "0123456789":
                if digit == cpf[pos]:
                    continue
                changed = cpf[:pos] + digit + cpf[pos + 1:]
                assert is_valid_document(changed) is False
        checked += 1
