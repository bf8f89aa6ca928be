# tests/test_currency_converter.py

"""Tests for the exchange rate lookup and converter."""

import json
import unittest
from typing import Any
from unittest.mock import MagicMock, patch

from cardtrend.config.settings import Settings
from cardtrend.services.currency_converter import (
    CurrencyConverter,
    fetch_exchange_rate,
)


def _session_returning(
    body: Any, status_code: int = 200,
) -> MagicMock:
    """Build a mock session whose GET returns *body* as JSON text."""
    mock_resp = MagicMock()
    mock_resp.status_code = status_code
    mock_resp.text = body if isinstance(body, str) else json.dumps(body)
    session = MagicMock()
    session.get.return_value = mock_resp
    return session


class TestFetchExchangeRate(unittest.TestCase):
    """fetch_exchange_rate success and fallback paths."""

    def test_returns_live_rate(self) -> None:
        """A well-formed response yields its GBP rate."""
        session = _session_returning(
            {"amount": 1.0, "base": "EUR", "rates": {"GBP": 0.8712}}
        )
        self.assertEqual(fetch_exchange_rate(session), 0.8712)
        session.get.assert_called_once()
        self.assertEqual(
            session.get.call_args.args[0], Settings.EXCHANGE_RATE_URL
        )

    def test_network_error_falls_back(self) -> None:
        """Connection errors fall back to the constant."""
        session = MagicMock()
        session.get.side_effect = ConnectionError("offline")
        with self.assertLogs("cardtrend.currency", "WARNING") as cm:
            rate = fetch_exchange_rate(session)
        self.assertEqual(rate, Settings.FALLBACK_RATE)
        self.assertIn("Failed to fetch", cm.output[0])

    def test_http_error_falls_back(self) -> None:
        """Non-200 responses fall back."""
        session = _session_returning({}, status_code=503)
        with self.assertLogs("cardtrend.currency", "WARNING") as cm:
            rate = fetch_exchange_rate(session)
        self.assertEqual(rate, 0.85)
        self.assertIn("HTTP 503", cm.output[0])

    def test_malformed_json_falls_back(self) -> None:
        """Undecodable bodies fall back."""
        session = _session_returning("<html>oops</html>")
        with self.assertLogs("cardtrend.currency", "WARNING") as cm:
            rate = fetch_exchange_rate(session)
        self.assertEqual(rate, 0.85)
        self.assertIn("decode", cm.output[0])

    def test_missing_rates_object_falls_back(self) -> None:
        """A body without 'rates' is a decode failure."""
        session = _session_returning({"base": "EUR"})
        self.assertEqual(fetch_exchange_rate(session), 0.85)

    def test_wrongly_shaped_rates_fall_back(self) -> None:
        """A 'rates' value that is not an object falls back."""
        for body in ({"rates": None}, {"rates": [1]}):
            with self.subTest(body=body):
                session = _session_returning(body)
                with self.assertLogs("cardtrend.currency", "WARNING") as cm:
                    rate = fetch_exchange_rate(session)
                self.assertEqual(rate, Settings.FALLBACK_RATE)
                self.assertIn("Unexpected exchange rate response shape", cm.output[0])

    def test_missing_currency_key_falls_back(self) -> None:
        """A response without GBP falls back with its own message."""
        session = _session_returning({"rates": {"USD": 1.08}})
        with self.assertLogs("cardtrend.currency", "WARNING") as cm:
            rate = fetch_exchange_rate(session)
        self.assertEqual(rate, 0.85)
        self.assertIn("GBP rate not found", cm.output[0])

    def test_non_positive_rate_falls_back(self) -> None:
        """Zero or negative rates are rejected."""
        session = _session_returning({"rates": {"GBP": 0}})
        self.assertEqual(fetch_exchange_rate(session), 0.85)

    def test_non_numeric_rate_falls_back(self) -> None:
        """String rates are rejected."""
        session = _session_returning({"rates": {"GBP": "lots"}})
        self.assertEqual(fetch_exchange_rate(session), 0.85)

    @patch("cardtrend.services.currency_converter.curl_requests.Session")
    def test_default_session_impersonates_browser(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """Without a session one is created with impersonation."""
        mock_session_cls.return_value = _session_returning(
            {"rates": {"GBP": 0.9}}
        )
        self.assertEqual(fetch_exchange_rate(), 0.9)
        mock_session_cls.assert_called_once_with(
            impersonate=Settings.IMPERSONATE_BROWSER
        )


class TestCurrencyConverter(unittest.TestCase):
    """CurrencyConverter value object."""

    def test_convert_multiplies(self) -> None:
        """Conversion is a plain multiplication."""
        self.assertAlmostEqual(CurrencyConverter(0.85).convert(100.0), 85.0)

    def test_identity_rate(self) -> None:
        """A rate of 1.0 leaves values unchanged."""
        self.assertEqual(CurrencyConverter(1.0).convert(42.5), 42.5)

    def test_zero_value(self) -> None:
        """Zero converts to zero."""
        self.assertEqual(CurrencyConverter(0.85).convert(0.0), 0.0)

    def test_is_immutable(self) -> None:
        """The rate cannot be reassigned mid-run."""
        converter = CurrencyConverter(0.85)
        with self.assertRaises(AttributeError):
            converter.rate = 1.0  # type: ignore[misc]

    def test_from_service(self) -> None:
        """from_service wraps the fetched rate."""
        session = _session_returning({"rates": {"GBP": 0.77}})
        self.assertEqual(
            CurrencyConverter.from_service(session).rate, 0.77
        )


if __name__ == "__main__":
    unittest.main()
