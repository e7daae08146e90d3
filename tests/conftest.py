"""Shared test fixtures."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

import projector_core.db.tables  # noqa: F401
from projector_core.db.base import Base
from projector_core.models import PriceBar


@pytest.fixture
def db_session():
    """In-memory SQLite session with all tables created."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)

    session = Session(engine)
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def make_bars():
    """Factory: closes (and optional volumes) -> daily PriceBars, oldest first."""

    def _make(closes, volumes=None, start=date(2024, 1, 1)):
        volumes = volumes if volumes is not None else [1000] * len(closes)
        bars = []
        for i, (close, volume) in enumerate(zip(closes, volumes)):
            c = Decimal(str(close))
            bars.append(
                PriceBar(
                    date=start + timedelta(days=i),
                    open=c,
                    high=c,
                    low=c,
                    close=c,
                    volume=Decimal(str(volume)),
                )
            )
        return bars

    return _make


@pytest.fixture
def drop_bars(make_bars):
    """59 flat closes at 100, then a drop to 90 on the last bar.

    RSI 0, support 90, last close under the lower band, MACD just turned
    bearish: a technical buy at 50.
    """
    return make_bars([100] * 59 + [90])


@pytest.fixture
def spike_bars(make_bars):
    """59 flat closes at 100, then a jump to 110: the mirror image, a sell at 50."""
    return make_bars([100] * 59 + [110])
