"""Unit tests for debt recommendation rules"""

import math
from datetime import datetime, timezone
from debt_advisor.domain.models import DebtAccount
from debt_advisor.domain.recommendations import (
    BALANCE_TRANSFER,
    DEBT_TO_INCOME,
    HIGH_INTEREST,
    MINIMUM_PAYMENT,
    balance_transfer_rule,
    generate_debt_recommendations,
    high_interest_rule,
    utilization_rule,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _card(id, balance, rate=None, limit=None) -> DebtAccount:
    return DebtAccount(
        id=id,
        name=id.title(),
        type="credit_card",
        current_balance=balance,
        interest_rate=rate,
        credit_limit=limit,
    )


def _loan(id, balance, rate=None) -> DebtAccount:
    return DebtAccount(id=id, name=id.title(), type="loan", current_balance=balance, interest_rate=rate)


def test_single_card_over_utilization():
    """Test one card at 40% utilization: one warning, no transfer advice"""
    accounts = [_card("visa", 400.0, limit=1000.0)]

    recs = generate_debt_recommendations(accounts, now=NOW)

    assert len(recs) == 1
    rec = recs[0]
    assert rec.type == MINIMUM_PAYMENT
    assert rec.priority == "high"
    assert rec.accounts == ["visa"]
    assert "40.0% utilization" in rec.description
    assert not any(r.type == BALANCE_TRANSFER for r in recs)


def test_utilization_at_threshold_is_fine():
    assert utilization_rule([_card("visa", 300.0, limit=1000.0)], NOW) == []


def test_utilization_one_warning_per_card():
    accounts = [
        _card("visa", 900.0, limit=1000.0),
        _card("amex", 100.0, limit=1000.0),
        _card("disc", 500.0, limit=1000.0),
    ]

    recs = utilization_rule(accounts, NOW)

    assert [r.accounts for r in recs] == [["visa"], ["disc"]]


def test_utilization_skips_malformed_limits():
    """Test bad limits skip the card instead of failing the batch"""
    accounts = [
        _card("nan_limit", 900.0, limit=math.nan),
        _card("negative_limit", 900.0, limit=-100.0),
        _card("zero_limit", 900.0, limit=0.0),
        _card("nan_balance", math.nan, limit=1000.0),
        _card("good", 900.0, limit=1000.0),
    ]

    recs = utilization_rule(accounts, NOW)

    assert [r.accounts for r in recs] == [["good"]]


def test_utilization_ignores_loans():
    loan = DebtAccount(id="loan", name="Loan", type="loan", current_balance=900.0, credit_limit=1000.0)
    assert utilization_rule([loan], NOW) == []


def test_balance_transfer_two_high_rate_cards():
    """Test savings 10000*17% + 8000*15% = 2900 triggers one transfer recommendation"""
    accounts = [_card("card_a", 10000.0, 20.0), _card("card_b", 8000.0, 18.0)]

    recs = [r for r in generate_debt_recommendations(accounts, now=NOW) if r.type == BALANCE_TRANSFER]

    assert len(recs) == 1
    assert recs[0].priority == "medium"
    assert recs[0].accounts == ["card_a", "card_b"]
    assert recs[0].potential_savings == 2900.0


def test_balance_transfer_needs_more_than_one_card():
    accounts = [_card("only", 50000.0, 29.99), _loan("car", 9000.0, 30.0)]
    assert balance_transfer_rule(accounts, NOW) == []


def test_balance_transfer_references_only_high_rate_cards():
    accounts = [_card("high", 10000.0, 24.0), _card("low", 10000.0, 9.0)]

    recs = balance_transfer_rule(accounts, NOW)

    assert len(recs) == 1
    assert recs[0].accounts == ["high"]


def test_balance_transfer_small_savings():
    # 1000 * (16 - 3) / 100 = 130 per card, 260 total
    accounts = [_card("a", 1000.0, 16.0), _card("b", 1000.0, 16.0)]
    assert balance_transfer_rule(accounts, NOW) == []


def test_balance_transfer_no_card_above_threshold():
    accounts = [_card("a", 50000.0, 15.0), _card("b", 50000.0, 12.0)]
    assert balance_transfer_rule(accounts, NOW) == []


def test_high_interest_names_single_top_account():
    """Test the unique highest APR account is the only one referenced"""
    accounts = [_loan("car", 9000.0, 6.5), _card("visa", 2000.0, 25.0), _card("store", 800.0, 19.0)]

    recs = high_interest_rule(accounts, NOW)

    assert len(recs) == 1
    assert recs[0].type == HIGH_INTEREST
    assert recs[0].priority == "high"
    assert recs[0].accounts == ["visa"]
    assert recs[0].description == (
        "Prioritize paying off Visa first as it has the highest interest rate at 25%."
    )


def test_high_interest_keeps_decimal_rate():
    recs = high_interest_rule([_card("visa", 2000.0, 18.99)], NOW)
    assert "at 18.99%" in recs[0].description


def test_high_interest_tie_picks_first_in_input():
    accounts = [_card("first", 100.0, 20.0), _card("second", 100.0, 20.0)]
    assert high_interest_rule(accounts, NOW)[0].accounts == ["first"]


def test_high_interest_requires_nonzero_rate():
    accounts = [_loan("a", 100.0, 0.0), _loan("b", 100.0, None)]
    assert high_interest_rule(accounts, NOW) == []


def test_high_interest_skips_nan_rate():
    accounts = [_loan("broken", 100.0, math.nan), _loan("real", 100.0, 7.0)]
    assert high_interest_rule(accounts, NOW)[0].accounts == ["real"]


def test_empty_accounts_no_recommendations():
    assert generate_debt_recommendations([], now=NOW) == []


def test_output_follows_rule_order():
    accounts = [
        _card("card_a", 10000.0, 20.0, limit=12000.0),
        _card("card_b", 8000.0, 18.0, limit=50000.0),
    ]

    recs = generate_debt_recommendations(accounts, now=NOW)

    assert [r.type for r in recs] == [HIGH_INTEREST, MINIMUM_PAYMENT, BALANCE_TRANSFER]
    assert all(r.created_at == NOW for r in recs)
    assert DEBT_TO_INCOME not in {r.type for r in recs}


def test_generation_is_idempotent(sample_accounts):
    """Test identical input yields identical output"""
    first = generate_debt_recommendations(sample_accounts, now=NOW)
    second = generate_debt_recommendations(sample_accounts, now=NOW)
    assert first == second


def test_generation_shares_one_timestamp(sample_accounts):
    recs = generate_debt_recommendations(sample_accounts)
    assert len({r.created_at for r in recs}) == 1
    assert recs[0].created_at.tzinfo is not None


def test_custom_rule_pipeline():
    accounts = [_card("visa", 400.0, 25.0, limit=1000.0)]
    recs = generate_debt_recommendations(accounts, now=NOW, rules=[utilization_rule])
    assert [r.type for r in recs] == [MINIMUM_PAYMENT]
