"""Unit tests for DataMasker and PayloadMasker."""

from __future__ import annotations

import dataclasses
import json

import pytest

from mp_mediator.application.masking import (
    MASK,
    TRUNCATED_SUFFIX,
    DataMasker,
    MaskingRule,
    PayloadMasker,
    truncate,
)


@dataclasses.dataclass
class Card:
    holder: str
    card_number: str


@dataclasses.dataclass
class Checkout:
    order_id: str
    card: Card
    api_key: str


class TestDataMasker:
    def test_default_sensitive_keys(self) -> None:
        masked = DataMasker().mask({"username": "ada", "password": "hunter2", "AccessToken": "t"})
        assert masked == {"username": "ada", "password": MASK, "AccessToken": MASK}

    def test_nested_structures(self) -> None:
        masked = DataMasker().mask({"users": [{"name": "a", "secret": "s"}], "meta": {"ssn": "1"}})
        assert masked == {"users": [{"name": "a", "secret": MASK}], "meta": {"ssn": MASK}}

    def test_explicit_rules_win(self) -> None:
        masker = DataMasker(rules=[MaskingRule("phone*", strategy="partial")])
        assert masker.mask({"phone_number": "5551234567"})["phone_number"] == "55******67"

    def test_hash_strategy_is_stable(self) -> None:
        masker = DataMasker(rules=[MaskingRule("email", strategy="hash", salt="s")])
        first = masker.mask({"email": "a@b.c"})["email"]
        assert first == masker.mask({"email": "a@b.c"})["email"]
        assert len(first) == 8

    def test_partial_short_value_fully_hidden(self) -> None:
        masker = DataMasker(rules=[MaskingRule("pin", strategy="partial")])
        assert masker.mask({"pin": "123"})["pin"] == "***"

    def test_mask_value_by_field_path(self) -> None:
        masker = DataMasker()
        assert masker.mask_value("user.password", "x") == MASK
        assert masker.mask_value("user.email", "a@b.c") == "a@b.c"

    def test_custom_sensitive_fields(self) -> None:
        masker = DataMasker(sensitive_fields=frozenset({"pin"}))
        assert masker.mask({"pin": "1", "password": "p"}) == {"pin": MASK, "password": "p"}


class TestPayloadMasker:
    def test_dataclass_rendered_and_masked(self) -> None:
        payload = Checkout(order_id="o-1", card=Card("ada", "4111"), api_key="k")
        data = json.loads(PayloadMasker().render(payload))
        assert data == {"order_id": "o-1", "card": {"holder": "ada", "card_number": MASK}, "api_key": MASK}

    def test_none_renders_none(self) -> None:
        assert PayloadMasker().render(None) is None

    def test_plain_object_public_attributes(self) -> None:
        class Thing:
            def __init__(self) -> None:
                self.name = "w"
                self._private = 1

        assert json.loads(PayloadMasker().render(Thing())) == {"name": "w"}

    def test_depth_limit(self) -> None:
        nested = {"a": {"b": {"c": {"d": {"e": 1}}}}}
        data = json.loads(PayloadMasker(max_depth=2).render(nested))
        assert isinstance(data["a"]["b"]["c"], str)

    def test_truncation(self) -> None:
        rendered = PayloadMasker(max_length=10).render({"text": "x" * 100})
        assert rendered.endswith(TRUNCATED_SUFFIX)


class TestTruncate:
    def test_short_text_unchanged(self) -> None:
        assert truncate("abc", 10) == "abc"

    def test_zero_means_unlimited(self) -> None:
        assert truncate("abc" * 100, 0) == "abc" * 100


class TestMaskingRule:
    def test_pattern_is_case_insensitive(self) -> None:
        assert MaskingRule("Phone*").matches("PHONE_NUMBER")

    def test_unknown_strategy_rejected(self) -> None:
        with pytest.raises(ValueError):
            MaskingRule("x", strategy="tokenize")  # type: ignore[arg-type]
