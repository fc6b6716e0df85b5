"""
End-to-end tests for the prompt chain orchestrator.

Tests the complete flow:
Query → Intent Summary → Ranking → Selection → Extraction → Response
"""

import json
import pytest

from support_chain.models.category import Category
from support_chain.models.results import ExtractionResult, PipelineResult
from support_chain.services.chain_errors import InvalidInputTypeError, PromptChainError
from support_chain.services.chain_orchestrator import run_prompt_chain, run_prompt_chain_dict


# =============================================================================
# SCENARIOS
# =============================================================================

def test_lost_card_scenario(catalog):
    intent, ranked, chosen, extraction, response = run_prompt_chain(
        "I lost my debit card ending 4321, please block it", catalog
    )

    assert intent == (
        "Customer intends to manage card services (lost/stolen/replace/activate). Mentioned: card."
    )
    assert ranked[0] == Category.CARD_SERVICES
    assert chosen == Category.CARD_SERVICES
    assert extraction.found["card_last4"] == "4321"
    assert extraction.found["issue_type"] == "lost_or_stolen"
    assert "card_type" in extraction.missing
    assert "reported_date" in extraction.missing
    assert response.startswith(
        "Card services handled — I can block or replace a card. Please confirm: card_type, reported_date."
    )
    assert response.endswith(f"— Support Bot\n\n(Interpretation: {intent})")


def test_business_hours_scenario(catalog):
    result = run_prompt_chain("What are your business hours?", catalog)

    assert result.ranked_categories == [Category.GENERAL_INFORMATION]
    assert result.chosen_category == Category.GENERAL_INFORMATION
    assert result.extraction.missing == ["topic"]
    assert result.response == (
        "Thanks for reaching out. Could you clarify: topic. — Support Bot\n\n"
        '(Interpretation: Customer asks: "What are your business hours?")'
    )


def test_transaction_reference_scenario(catalog):
    result = run_prompt_chain("ref: TXN-00912 disputed", catalog)

    assert result.ranked_categories[0] == Category.TRANSACTION_INQUIRY
    assert result.chosen_category == Category.TRANSACTION_INQUIRY
    assert result.extraction.found["transaction_id"] == "TXN-00912"
    assert result.intent_summary == (
        "Customer intends to dispute a potentially fraudulent or unauthorized transaction."
    )


def test_account_opening_scenario(catalog):
    result = run_prompt_chain(
        "Hi, I'm Maria Lopez Garcia and I want to open account with a $500 deposit", catalog
    )

    # Account Opening and Transaction Inquiry tie on one keyword each.
    assert result.ranked_categories == [Category.ACCOUNT_OPENING, Category.TRANSACTION_INQUIRY]
    assert result.extraction.found == {"full_name": "Maria Lopez Garcia"}
    assert result.response.startswith(
        "Thanks for your interest in opening an account. To get started, please provide the following: "
        "id_type, id_number, product_type, initial_deposit — Support Bot"
    )


def test_account_access_scenario(catalog):
    result = run_prompt_chain(
        "I forgot my password and my savings login is locked, email me at jane.doe@example.com",
        catalog,
    )

    assert result.chosen_category == Category.ACCOUNT_ACCESS
    assert result.extraction.found == {
        "account_type": "savings",
        "username_or_email": "jane.doe@example.com",
    }
    assert result.extraction.missing == ["device_or_browser", "error_message", "last_successful_login"]
    assert result.response.startswith(
        "I see you have an access issue. Please tell us your account type and any error messages you see"
    )


def test_billing_scenario(catalog):
    result = run_prompt_chain("I was overcharged $1,250.00 on my bill yesterday", catalog)

    assert result.chosen_category == Category.BILLING_ISSUE
    assert result.extraction.found == {"billing_date": "yesterday", "amount": "1,250.00"}
    assert result.response == (
        "I can help investigate this billing issue. Please share: billing_reference, service_description."
        " — Support Bot\n\n"
        "(Interpretation: Customer intends to report a billing or charge issue. Mentioned: bill.)"
    )


# =============================================================================
# BOUNDARY
# =============================================================================

def test_empty_query(catalog):
    result = run_prompt_chain("", catalog)

    assert result.intent_summary == 'Customer asks: ""'
    assert result.ranked_categories == [Category.GENERAL_INFORMATION]
    assert result.chosen_category == Category.GENERAL_INFORMATION
    assert result.extraction == ExtractionResult(found={}, missing=["topic"])


@pytest.mark.parametrize("bad_query", [42, None, 3.5, {"query": "hi"}, ["hi"], b"hi"])
def test_non_string_rejected_before_any_stage(mocker, bad_query):
    summarize = mocker.patch("support_chain.services.chain_orchestrator.summarize_intent")
    rank = mocker.patch("support_chain.services.chain_orchestrator.rank_categories")

    with pytest.raises(InvalidInputTypeError) as exc:
        run_prompt_chain(bad_query)

    summarize.assert_not_called()
    rank.assert_not_called()
    assert isinstance(exc.value, TypeError)
    assert isinstance(exc.value, PromptChainError)
    assert exc.value.to_dict()["error_code"] == "INVALID_INPUT_TYPE"


# =============================================================================
# PROPERTIES
# =============================================================================

QUERIES = [
    "",
    "I lost my debit card ending 4321, please block it",
    "What are your business hours?",
    "ref: TXN-00912 disputed",
    "Please email my monthly statement to sam@example.org",
    "I need a loan of $25,000 over 5 years",
    "¿Dónde está mi tarjeta?",
]


@pytest.mark.parametrize("query", QUERIES)
def test_result_is_ordered_five_tuple(catalog, query):
    result = run_prompt_chain(query, catalog)

    assert isinstance(result, PipelineResult)
    assert isinstance(result, tuple)
    assert len(result) == 5
    assert result[2] == result.chosen_category


@pytest.mark.parametrize("query", QUERIES)
def test_pipeline_is_idempotent(catalog, query):
    assert run_prompt_chain(query, catalog) == run_prompt_chain(query, catalog)


@pytest.mark.parametrize("query", QUERIES)
def test_chosen_category_invariants(catalog, query):
    result = run_prompt_chain(query, catalog)

    assert len(result.ranked_categories) >= 1
    assert isinstance(result.chosen_category, Category)
    assert result.chosen_category in result.ranked_categories

    schedule = catalog.required_fields(result.chosen_category)
    assert set(result.extraction.found) | set(result.extraction.missing) == set(schedule)
    assert result.response.endswith(f"(Interpretation: {result.intent_summary})")


def test_dict_wrapper_is_json_serializable():
    payload = run_prompt_chain_dict("I lost my debit card ending 4321, please block it")

    assert payload["chosen_category"] == "Card Services"
    assert payload["ranked_categories"][0] == "Card Services"
    assert payload["extraction"]["found"]["card_last4"] == "4321"
    json.dumps(payload)
