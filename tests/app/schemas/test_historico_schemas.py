"""Tests for history filter coercion and response schemas."""

from datetime import datetime, timezone

import pytest

from app.schemas.historico import (
    ChatMessageRead,
    HistoryFilters,
    HistoryPage,
    ProtocolMeta,
    ProtocolSummary,
)


def test_filters_defaults():
    filters = HistoryFilters.from_query()

    assert filters.phone == ""
    assert filters.month is None
    assert filters.page == 1
    assert filters.page_size == 20
    assert filters.offset == 0
    assert filters.month_range is None


def test_filters_phone_keeps_digits():
    assert HistoryFilters.from_query(phone="+55 (11) 9999-0000").phone == "551199990000"


@pytest.mark.parametrize(
    "page, expected",
    [
        ("3", 3),
        ("0", 1),
        ("-4", 1),
        ("abc", 1),
        (None, 1),
        (7, 7),
        ("2abc", 2),
        ("1.5", 1),
    ],
)
def test_filters_page_is_floored(page, expected):
    assert HistoryFilters.from_query(page=page).page == expected


@pytest.mark.parametrize(
    "page_size, expected",
    [
        ("10", 10),
        ("0", 1),
        ("500", 100),
        ("100", 100),
        ("x", 20),
        (None, 20),
        ("15rows", 15),
        ("2.9", 2),
    ],
)
def test_filters_page_size_is_clamped(page_size, expected):
    assert HistoryFilters.from_query(page_size=page_size).page_size == expected


@pytest.mark.parametrize(
    "month, expected",
    [
        ("2024-03", "2024-03"),
        (" 2024-03 ", "2024-03"),
        ("2024-3", None),
        ("2024-13", None),
        ("2024-00", None),
        ("03-2024", None),
        ("0000-01", None),
        ("9999-12", None),
        ("0001-01", "0001-01"),
        ("", None),
        (None, None),
    ],
)
def test_filters_month_pattern(month, expected):
    assert HistoryFilters.from_query(month=month).month == expected


def test_filters_month_range():
    start, end = HistoryFilters.from_query(month="2024-03").month_range

    assert start == datetime(2024, 3, 1, tzinfo=timezone.utc)
    assert end == datetime(2024, 4, 1, tzinfo=timezone.utc)


def test_filters_month_range_december_rolls_over():
    start, end = HistoryFilters.from_query(month="2023-12").month_range

    assert start == datetime(2023, 12, 1, tzinfo=timezone.utc)
    assert end == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_filters_offset():
    assert HistoryFilters.from_query(page="3", page_size="25").offset == 50


def test_history_page_serializes_page_size_alias():
    page = HistoryPage(
        page=1,
        page_size=10,
        total=1,
        data=[ProtocolSummary(id="1", numero="1", total_msgs=2)],
    )

    dumped = page.model_dump(by_alias=True)

    assert dumped["pageSize"] == 10
    assert dumped["data"][0]["atendente_nome"] == ""
    assert dumped["data"][0]["cliente_contato"] == ""


def test_protocol_meta_empty():
    meta = ProtocolMeta.empty("42")

    assert meta.protocolo == "42"
    assert meta.total_msgs == 0
    assert meta.data_abertura is None


def test_chat_message_naive_timestamp_is_utc():
    msg = ChatMessageRead(
        id=1, sent_by_operator=1, created_at=datetime(2024, 3, 1, 12, 0)
    )

    assert msg.sent_by_operator is True
    assert msg.created_at.tzinfo == timezone.utc
