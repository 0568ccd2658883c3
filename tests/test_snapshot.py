import pytest

from portfolio_health.errors import EmptyPortfolio, InvalidHolding
from portfolio_health.models import Holding
from portfolio_health.snapshot import build_snapshot, validate_holdings


def test_rows_from_csv_reader_are_parsed_in_order():
    rows = [
        {"symbol": "AAPL", "quantity": "10", "avg_price": "100.5"},
        {"symbol": " GOOG ", "quantity": 5, "avg_price": 200},
    ]

    snapshot = build_snapshot(rows)

    assert snapshot == (Holding("AAPL", 10.0, 100.5), Holding("GOOG", 5.0, 200.0))


@pytest.mark.parametrize(
    "row",
    [
        {"symbol": "", "quantity": "1", "avg_price": "1"},
        {"symbol": "A", "quantity": "ten", "avg_price": "1"},
        {"symbol": "A", "quantity": "1", "avg_price": "-3"},
        {"symbol": "A", "quantity": "nan", "avg_price": "1"},
        {"symbol": "A", "quantity": None, "avg_price": "1"},
        {"symbol": "A", "quantity": "1"},
    ],
)
def test_invalid_rows_are_rejected(row):
    with pytest.raises(InvalidHolding):
        build_snapshot([row])


def test_duplicate_symbols_are_rejected():
    rows = [{"symbol": "A", "quantity": 1, "avg_price": 1}, {"symbol": "A", "quantity": 2, "avg_price": 1}]

    with pytest.raises(InvalidHolding, match="duplicate"):
        build_snapshot(rows)


def test_empty_upload():
    assert build_snapshot([]) == ()
    with pytest.raises(EmptyPortfolio):
        build_snapshot([], allow_empty=False)


def test_validate_holdings_accepts_zero_values():
    validate_holdings((Holding("A", 0, 0), Holding("B", 1, 2)))
