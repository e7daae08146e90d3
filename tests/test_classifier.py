"""Tests for asset classification and parameter selection."""

from __future__ import annotations

import pytest

from projector_core.analysis.classifier import AnalysisParams, classify, resolve_params, select_params
from projector_core.config import AppConfig
from projector_core.config.schema import CryptoConfig
from projector_core.models import AssetClass


class TestClassify:
    @pytest.mark.parametrize("symbol", ["BTC-USD", "eth-usd", " SOL-USD ", "DOGE-USD"])
    def test_allowlisted_crypto(self, symbol):
        assert classify(symbol) is AssetClass.CRYPTO

    @pytest.mark.parametrize("symbol", ["PEPE-USD", "LTC.X"])
    def test_crypto_suffixes(self, symbol):
        assert classify(symbol) is AssetClass.CRYPTO

    @pytest.mark.parametrize("symbol", ["AAPL", "MSFT", "BRK.B", "BTC"])
    def test_equities(self, symbol):
        assert classify(symbol) is AssetClass.EQUITY

    def test_custom_allowlist(self):
        assert classify("GBTC", supported=["GBTC"]) is AssetClass.CRYPTO
        assert classify("GBTC") is AssetClass.EQUITY


class TestSelectParams:
    def test_crypto_gets_override(self):
        cfg = AppConfig()
        rsi = select_params(AssetClass.CRYPTO, "rsi", cfg)
        assert (rsi.oversold, rsi.overbought) == (25, 75)
        bands = select_params(AssetClass.CRYPTO, "bollinger", cfg)
        assert bands.std_dev == 2.5

    def test_equity_gets_default(self):
        cfg = AppConfig()
        rsi = select_params(AssetClass.EQUITY, "rsi", cfg)
        assert (rsi.oversold, rsi.overbought) == (30, 70)
        assert select_params(AssetClass.EQUITY, "bollinger", cfg).std_dev == 2.0

    def test_missing_override_falls_back(self):
        cfg = AppConfig(crypto=CryptoConfig(rsi=None, bollinger=None))
        assert select_params(AssetClass.CRYPTO, "rsi", cfg).oversold == 30
        assert select_params(AssetClass.CRYPTO, "bollinger", cfg).std_dev == 2.0

    def test_indicator_without_override(self):
        cfg = AppConfig()
        assert select_params(AssetClass.CRYPTO, "macd", cfg).slow_period == 26


class TestResolveParams:
    def test_crypto_symbol(self):
        params = resolve_params("BTC-USD", AppConfig())
        assert params.asset_class is AssetClass.CRYPTO
        assert params.rsi.oversold == 25
        assert params.bollinger.std_dev == 2.5
        assert params.signal_threshold == 30

    def test_equity_symbol(self):
        params = resolve_params("AAPL", AppConfig())
        assert params.asset_class is AssetClass.EQUITY
        assert params.rsi.overbought == 70
        assert params.bollinger.std_dev == 2.0

    def test_defaults_match_equity(self):
        assert AnalysisParams.defaults() == resolve_params("AAPL", AppConfig())

    def test_crypto_defaults_match_crypto(self):
        assert AnalysisParams.defaults(AssetClass.CRYPTO) == resolve_params("BTC-USD", AppConfig())
