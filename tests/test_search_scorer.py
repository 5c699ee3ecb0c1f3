"""Tests for search relevance scoring."""

from datetime import date
from decimal import Decimal

import pytest

from ynab_query.models.results import MatchedField
from ynab_query.models.transaction import ClearedStatus, NormalizedTransaction
from ynab_query.processing.search_scorer import SearchScorer, search_transactions


def create_transaction(
    txn_id: str = "t1",
    memo: str | None = None,
    payee_name: str | None = None,
    trans_date: date = date(2024, 3, 5),
    transfer_transaction_id: str | None = None,
) -> NormalizedTransaction:
    """Helper to create a NormalizedTransaction for testing."""
    return NormalizedTransaction(
        id=txn_id,
        date=trans_date,
        account_name="Checking",
        inflow=Decimal("0"),
        outflow=Decimal("4.50"),
        cleared=ClearedStatus.UNCLEARED,
        approved=True,
        payee_name=payee_name,
        memo=memo,
        transfer_transaction_id=transfer_transaction_id,
    )


class TestMatchScore:
    """Tests for SearchScorer.match_score."""

    def test_exact_match(self) -> None:
        """Test that identical text scores 100."""
        assert SearchScorer("foo").match_score("foo") == 100

    def test_exact_match_ignores_case(self) -> None:
        """Test that comparison is case-insensitive."""
        assert SearchScorer("COFFEE").match_score("Coffee") == 100

    def test_substring_earlier_scores_higher(self) -> None:
        """Test that a match at position 0 beats one at position 3."""
        scorer = SearchScorer("foo")
        early = scorer.match_score("foobar")
        late = scorer.match_score("barfoo")

        assert 0 < early < 100
        assert early == 80
        assert late == 78.5
        assert early > late

    def test_late_substring_can_rank_below_fuzzy(self) -> None:
        """Test that deep substring matches fall below the overlap band."""
        scorer = SearchScorer("foo")
        late_substring = scorer.match_score("a" * 120 + "foo")
        fuzzy = scorer.match_score("oof")

        assert late_substring == 20
        assert fuzzy == 50
        assert late_substring < fuzzy

    def test_character_overlap(self) -> None:
        """Test overlap scoring when most phrase characters are present."""
        # {c, a, f, e}: c, a, f present -> 0.75
        assert SearchScorer("cafe").match_score("facts") == pytest.approx(37.5)

    def test_overlap_at_threshold_falls_through(self) -> None:
        """Test that an overlap ratio of exactly 0.5 does not score by overlap."""
        # {a, b}: only a present -> 0.5, and "ab" is in no field word
        assert SearchScorer("ab").match_score("a c") == 0

    def test_partial_word_match(self) -> None:
        """Test partial word matching when overlap is too low."""
        # Overlap {z, q, a, b, ' '} -> only a, b present = 0.4
        score = SearchScorer("zz qq ab").match_score("xab")
        assert score == pytest.approx(20 / 3)

    def test_all_words_match(self) -> None:
        """Test that matching every phrase word scores 40."""
        scorer = SearchScorer("coffee shop")
        assert scorer._word_match_score("the coffee shops") == 40

    def test_no_common_characters(self) -> None:
        """Test that unrelated text scores zero."""
        assert SearchScorer("xyz").match_score("abc") == 0


class TestScoreTransaction:
    """Tests for SearchScorer.score_transaction."""

    def test_memo_match(self) -> None:
        """Test a memo-only match."""
        result = SearchScorer("lunch").score_transaction(create_transaction(memo="Lunch"))
        assert result is not None
        assert result.matched_field is MatchedField.MEMO
        assert result.relevance_score == 100

    def test_payee_match(self) -> None:
        """Test a payee-only match."""
        result = SearchScorer("star").score_transaction(
            create_transaction(payee_name="Starbucks")
        )
        assert result is not None
        assert result.matched_field is MatchedField.PAYEE
        assert result.relevance_score == 80

    def test_both_fields_take_best_score(self) -> None:
        """Test that both fields matching reports 'both' and the max score."""
        result = SearchScorer("coffee").score_transaction(
            create_transaction(memo="morning coffee", payee_name="Coffee")
        )
        assert result is not None
        assert result.matched_field is MatchedField.BOTH
        assert result.relevance_score == 100

    def test_transfer_payee_not_scored(self) -> None:
        """Test that payee names of transfers are ignored."""
        txn = create_transaction(payee_name="Transfer : Savings", transfer_transaction_id="x")
        assert SearchScorer("savings").score_transaction(txn) is None

    def test_transfer_memo_still_scored(self) -> None:
        """Test that memos of transfers are still searched."""
        txn = create_transaction(memo="savings top-up", transfer_transaction_id="x")
        result = SearchScorer("savings").score_transaction(txn)
        assert result is not None
        assert result.matched_field is MatchedField.MEMO

    def test_no_match_excluded(self) -> None:
        """Test that a non-matching transaction yields no result."""
        txn = create_transaction(memo="abc", payee_name="abc")
        assert SearchScorer("xyz").score_transaction(txn) is None

    def test_result_serialization(self) -> None:
        """Test SearchResult output fields."""
        result = SearchScorer("lunch").score_transaction(create_transaction(memo="lunch"))
        assert result is not None
        data = result.to_dict()
        assert data["matched_field"] == "memo"
        assert data["relevance_score"] == 100
        assert data["outflow"] == 4.5
        assert data["date"] == "2024-03-05"


class TestSearchOrdering:
    """Tests for ranking of search results."""

    def test_sorted_by_score_then_date(self) -> None:
        """Test score descending, then newest date first."""
        txns = [
            create_transaction("old-exact", memo="tea", trans_date=date(2024, 1, 1)),
            create_transaction("substring", memo="tea time", trans_date=date(2024, 6, 1)),
            create_transaction("new-exact", memo="tea", trans_date=date(2024, 5, 1)),
            create_transaction("miss", memo="xyz", trans_date=date(2024, 7, 1)),
        ]
        results = search_transactions(txns, "Tea")
        assert [r.transaction.id for r in results] == ["new-exact", "old-exact", "substring"]
