"""Deterministic synthetic price generation."""

import pytest

from portfolio_health.config import SimulationConfig
from portfolio_health.errors import DegeneratePrice
from portfolio_health.models import Holding
from portfolio_health.price_simulator import PriceSimulator, SeededRandom, starting_prices

PRICES = {"AAPL": 100.0, "GOOG": 200.0, "MSFT": 300.0}


def test_generator_follows_lcg_recurrence():
    rng = SeededRandom(12345)

    first = rng.random()

    assert rng.state == 1406932606
    assert first == 1406932606 / (2 ** 31 - 1)
    assert 0.0 <= rng.random() <= 1.0


def test_same_seed_gives_identical_paths():
    sim = PriceSimulator()

    assert sim.simulate(PRICES, days=60, seed=7) == sim.simulate(PRICES, days=60, seed=7)


def test_different_seeds_diverge():
    sim = PriceSimulator()

    assert sim.simulate(PRICES, days=5, seed=1) != sim.simulate(PRICES, days=5, seed=2)


def test_default_horizon_and_day_numbering():
    path = PriceSimulator().simulate(PRICES)

    assert len(path) == 60
    assert [d.day for d in path] == list(range(1, 61))
    assert all(list(d.prices) == list(PRICES) for d in path)


def test_first_day_uses_market_draw_then_symbols_in_order():
    cfg = SimulationConfig()
    rng = SeededRandom(cfg.seed)
    market = (rng.random() - 0.5) * 2 * cfg.daily_volatility
    expected = {}
    for symbol, price in PRICES.items():
        stock = (rng.random() - 0.5) * 2 * cfg.daily_volatility
        move = cfg.drift + cfg.correlation * market + (1 - cfg.correlation) * stock
        expected[symbol] = price * (1 + move)

    day_one = PriceSimulator(cfg).simulate(PRICES, days=1)[0]

    assert day_one.prices == expected
    assert day_one.total_value == pytest.approx(sum(expected.values()))


def test_prices_carry_forward_between_days():
    path = PriceSimulator().simulate({"ONLY": 50.0}, days=30, seed=99)

    for previous, current in zip(path, path[1:]):
        move = current.prices["ONLY"] / previous.prices["ONLY"] - 1
        # drift plus at most one full volatility band
        assert abs(move) < 0.016


def test_explicit_generator_continues_the_sequence():
    sim = PriceSimulator()
    full = sim.simulate(PRICES, days=5, seed=3)

    rng = SeededRandom(3)
    head = sim.simulate(PRICES, days=3, rng=rng)
    tail = sim.simulate(head[-1].prices, days=2, rng=rng)

    assert [d.prices for d in head + tail] == [d.prices for d in full]


def test_caller_prices_are_not_mutated():
    prices = dict(PRICES)

    PriceSimulator().simulate(prices, days=10)

    assert prices == PRICES


@pytest.mark.parametrize("bad_price", [0.0, -5.0, float("nan"), float("inf")])
def test_degenerate_starting_price_fails_fast(bad_price):
    with pytest.raises(DegeneratePrice):
        PriceSimulator().simulate({"AAPL": 100.0, "BAD": bad_price}, days=10)


def test_negative_days_rejected():
    with pytest.raises(ValueError):
        PriceSimulator().simulate(PRICES, days=-1)


def test_zero_days_gives_empty_path():
    assert PriceSimulator().simulate(PRICES, days=0) == []


def test_starting_prices_from_snapshot():
    snapshot = (Holding("AAPL", 10, 100), Holding("GOOG", 5, 200))

    assert starting_prices(snapshot) == {"AAPL": 100, "GOOG": 200}
