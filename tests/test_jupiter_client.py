"""Tests for the Jupiter quote and swap client."""

from unittest.mock import Mock

import pytest
import requests

from sma_swap_bot.dex.base import SwapBuildError
from sma_swap_bot.dex.jupiter import (
    JUPITER_QUOTE_API,
    JUPITER_SWAP_API,
    JupiterClient,
    parse_amount,
    price_from_quote,
)


def make_client(response=None, side_effect=None) -> tuple[JupiterClient, Mock]:
    session = Mock()
    if side_effect is not None:
        session.get.side_effect = side_effect
        session.post.side_effect = side_effect
    else:
        session.get.return_value = response
        session.post.return_value = response
    return JupiterClient(session=session), session


def json_response(payload) -> Mock:
    response = Mock()
    response.status_code = 200
    response.json.return_value = payload
    return response


class TestGetPrice:
    """Test suite for JupiterClient.get_price."""

    def test_price_from_well_formed_response(self):
        client, session = make_client(json_response({"outAmount": 2000, "inAmount": 1000}))

        assert client.get_price("USDC_MINT", "SCF_MINT", 1000) == 2

        session.get.assert_called_once_with(
            JUPITER_QUOTE_API,
            params={
                "inputMint": "USDC_MINT",
                "outputMint": "SCF_MINT",
                "amount": 1000,
                "slippageBps": 50,
            },
            timeout=10.0,
        )

    def test_price_from_string_amounts(self):
        client, _ = make_client(json_response({"outAmount": "500", "inAmount": "1000"}))
        assert client.get_price("USDC_MINT", "SCF_MINT", 1000) == 0.5

    def test_network_error_returns_none(self):
        client, _ = make_client(side_effect=requests.exceptions.ConnectionError("API Error"))
        assert client.get_price("USDC_MINT", "SCF_MINT", 1000) is None

    def test_timeout_returns_none(self):
        client, _ = make_client(side_effect=requests.exceptions.Timeout())
        assert client.get_price("USDC_MINT", "SCF_MINT", 1000) is None

    def test_http_error_returns_none(self):
        response = Mock()
        response.status_code = 500
        response.raise_for_status.side_effect = requests.exceptions.HTTPError("500")
        client, _ = make_client(response)

        assert client.get_price("USDC_MINT", "SCF_MINT", 1000) is None

    def test_malformed_response_returns_none(self):
        client, _ = make_client(json_response({}))

        price = client.get_price("USDC_MINT", "SCF_MINT", 1000)

        assert price is None

    def test_invalid_json_returns_none(self):
        response = Mock()
        response.status_code = 200
        response.json.side_effect = ValueError("Invalid JSON")
        client, _ = make_client(response)

        assert client.get_price("USDC_MINT", "SCF_MINT", 1000) is None

    def test_zero_input_amount_returns_none(self):
        client, _ = make_client(json_response({"outAmount": "10", "inAmount": "0"}))
        assert client.get_price("USDC_MINT", "SCF_MINT", 1000) is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"inAmount": "1000", "outAmount": "NaN"},
            {"inAmount": "NaN", "outAmount": "1000"},
            {"inAmount": "1000", "outAmount": "Infinity"},
            {"inAmount": "-inf", "outAmount": "1000"},
        ],
    )
    def test_non_finite_amounts_return_none(self, payload):
        client, _ = make_client(json_response(payload))

        assert client.get_price("USDC_MINT", "SCF_MINT", 1000) is None
        assert client.get_quote("USDC_MINT", "SCF_MINT", 1000) is None

    def test_non_object_response_returns_none(self):
        client, _ = make_client(json_response(["not", "a", "quote"]))
        assert client.get_price("USDC_MINT", "SCF_MINT", 1000) is None


class TestGetQuote:
    """Test suite for JupiterClient.get_quote."""

    def test_returns_full_payload(self):
        payload = {"inAmount": "1000", "outAmount": "2000", "routePlan": []}
        client, _ = make_client(json_response(payload))

        assert client.get_quote("USDC_MINT", "SCF_MINT", 1000) == payload

    def test_custom_slippage_and_timeout(self):
        session = Mock()
        session.get.return_value = json_response({"inAmount": "1", "outAmount": "1"})
        client = JupiterClient(slippage_bps=100, timeout=3.0, session=session)

        client.get_quote("A", "B", 5)

        _, kwargs = session.get.call_args
        assert kwargs["params"]["slippageBps"] == 100
        assert kwargs["timeout"] == 3.0


class TestGetSwapTransaction:
    """Test suite for JupiterClient.get_swap_transaction."""

    def test_returns_serialized_transaction(self):
        client, session = make_client(json_response({"swapTransaction": "bW9ja0Jhc2U2NA=="}))
        quote = {"inAmount": "1000", "outAmount": "2000"}

        assert client.get_swap_transaction(quote, "MOCK_PUBLIC_KEY") == "bW9ja0Jhc2U2NA=="

        session.post.assert_called_once_with(
            JUPITER_SWAP_API,
            json={"quoteResponse": quote, "userPublicKey": "MOCK_PUBLIC_KEY"},
            timeout=10.0,
        )

    def test_missing_transaction_raises(self):
        client, _ = make_client(json_response({"error": "quote expired"}))

        with pytest.raises(SwapBuildError, match="swapTransaction"):
            client.get_swap_transaction({}, "MOCK_PUBLIC_KEY")

    def test_network_error_raises(self):
        client, _ = make_client(side_effect=requests.exceptions.ConnectionError("down"))

        with pytest.raises(SwapBuildError):
            client.get_swap_transaction({}, "MOCK_PUBLIC_KEY")


def test_price_from_quote_rejects_bad_amounts():
    assert price_from_quote({"inAmount": "4", "outAmount": "1"}) == 0.25
    assert price_from_quote({"inAmount": None, "outAmount": "1"}) is None
    assert price_from_quote({"inAmount": "abc", "outAmount": "1"}) is None
    assert price_from_quote({"inAmount": True, "outAmount": "1"}) is None


def test_parse_amount():
    assert parse_amount("2000") == 2000.0
    assert parse_amount("2000.5") == 2000.5
    assert parse_amount("1e3") == 1000.0
    assert parse_amount(7) == 7.0
    assert parse_amount("nan") is None
    assert parse_amount(float("inf")) is None
    assert parse_amount([]) is None


def test_close_closes_session():
    client, session = make_client(json_response({}))
    client.close()
    session.close.assert_called_once()
