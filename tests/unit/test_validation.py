"""Unit tests for request validation."""

import pytest
from solders.keypair import Keypair

from blinkmint.core.errors import InputValidationError, InvalidAccount, InvalidQueryParameter
from blinkmint.core.products import get_product_config
from blinkmint.domains.actions.validation import (
    DEFAULT_SOL_ADDRESS,
    parse_pubkey,
    validated_account,
    validated_query_params,
)


class TestParsePubkey:
    """Tests for parse_pubkey."""

    def test_valid_key(self):
        key = Keypair().pubkey()
        assert parse_pubkey(str(key)) == key

    def test_surrounding_whitespace_ignored(self):
        key = Keypair().pubkey()
        assert parse_pubkey(f"  {key} ") == key

    @pytest.mark.parametrize("value", ["", "   ", "not-a-key", "1111", "0" * 44, None, 42])
    def test_invalid_values_raise(self, value):
        with pytest.raises(ValueError):
            parse_pubkey(value)


class TestValidatedQueryParams:
    """Tests for validated_query_params."""

    def test_defaults(self, product):
        query = validated_query_params({}, product)
        assert query.to_pubkey == DEFAULT_SOL_ADDRESS
        assert query.subject == product.default_subject
        assert query.asset_source == product.default_subject

    def test_prompt_used_verbatim(self, product):
        query = validated_query_params({"prompt": "  neon koi  "}, product)
        assert query.subject == "neon koi"
        assert query.asset_source == "neon koi"

    def test_blank_prompt_falls_back_to_default(self, product):
        query = validated_query_params({"prompt": "   "}, product)
        assert query.subject == product.default_subject

    def test_valid_to(self, product):
        key = Keypair().pubkey()
        assert validated_query_params({"to": str(key)}, product).to_pubkey == key

    def test_invalid_to(self, product):
        with pytest.raises(InvalidQueryParameter) as exc_info:
            validated_query_params({"to": "garbage"}, product)
        assert exc_info.value.public_message == "Invalid input query parameter: to"
        assert isinstance(exc_info.value, InputValidationError)

    def test_handle_rewritten_to_photo_url(self):
        blinkpic = get_product_config("blinkpic")
        query = validated_query_params({"username": "@solana"}, blinkpic)
        assert query.subject == "@solana"
        assert query.asset_source == "https://unavatar.io/x/solana"

    def test_default_handle_rewritten_too(self):
        blinkpic = get_product_config("blinkpic")
        query = validated_query_params({}, blinkpic)
        assert query.asset_source == f"https://unavatar.io/x/{blinkpic.default_subject}"

    @pytest.mark.parametrize(
        "username",
        [
            "solana?fallback=https://evil.example/x.png#",
            "../../github/someone",
            "solana/",
            "a" * 16,
            "@",
            "sol ana",
        ],
    )
    def test_malformed_handle_rejected(self, username):
        blinkpic = get_product_config("blinkpic")
        with pytest.raises(InvalidQueryParameter) as exc_info:
            validated_query_params({"username": username}, blinkpic)
        assert exc_info.value.public_message == "Invalid input query parameter: username"

    def test_longest_handle_accepted(self):
        blinkpic = get_product_config("blinkpic")
        query = validated_query_params({"username": "@" + "a_1" * 5}, blinkpic)
        assert query.asset_source == "https://unavatar.io/x/" + "a_1" * 5

    def test_other_products_parameter_ignored(self, product):
        """A pixlink request ignores ``username``."""
        query = validated_query_params({"username": "someone"}, product)
        assert query.subject == product.default_subject


class TestValidatedAccount:
    """Tests for validated_account."""

    def test_valid_body(self):
        key = Keypair().pubkey()
        assert validated_account({"account": str(key)}) == key

    @pytest.mark.parametrize(
        "body",
        [None, [], "account", {}, {"account": None}, {"account": 12}, {"account": "not-a-key"}],
    )
    def test_invalid_bodies(self, body):
        with pytest.raises(InvalidAccount) as exc_info:
            validated_account(body)
        assert "account" in exc_info.value.public_message
