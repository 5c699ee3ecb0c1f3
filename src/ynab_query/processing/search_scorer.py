"""Relevance scoring of transactions against a free-text search phrase."""

from typing import Iterable

from ynab_query.models.results import MatchedField, SearchResult
from ynab_query.models.transaction import NormalizedTransaction
from ynab_query.utils.logging_config import get_logger

logger = get_logger(__name__)

EXACT_MATCH_SCORE = 100.0
SUBSTRING_BASE_SCORE = 80.0
SUBSTRING_POSITION_PENALTY = 0.5
OVERLAP_THRESHOLD = 0.5
OVERLAP_WEIGHT = 50.0
ALL_WORDS_SCORE = 40.0
PARTIAL_WORDS_WEIGHT = 20.0


class SearchScorer:
    """Scores transaction memo and payee text against a search phrase.

    Each field is scored with the first strategy that applies:

    1. Exact match: 100.
    2. Substring: 80 minus 0.5 per character before the first occurrence.
       Very late matches can fall below the fuzzy band; that ordering is kept.
    3. Character overlap: share of the phrase's distinct characters found in
       the field. Above 0.5 the score is ratio * 50.
    4. Word match: 40 when every phrase word is contained in some field word,
       20 * matched / total when only some are, else 0.

    Payees are only scored for non-transfer transactions; the transaction
    score is the better of the two fields.
    """

    def __init__(self, search_text: str):
        """Initialize scorer for one search phrase.

        Args:
            search_text: Non-empty phrase to search for (any case).
        """
        self.search_text = search_text.lower()

    def match_score(self, text: str) -> float:
        """Score a single field against the search phrase.

        Args:
            text: Field text (any case).

        Returns:
            Non-negative relevance score, 0 meaning no match.
        """
        text = text.lower()
        phrase = self.search_text

        if text == phrase:
            return EXACT_MATCH_SCORE

        position = text.find(phrase)
        if position >= 0:
            return SUBSTRING_BASE_SCORE - position * SUBSTRING_POSITION_PENALTY

        overlap = self._character_overlap(text)
        if overlap > OVERLAP_THRESHOLD:
            return overlap * OVERLAP_WEIGHT

        return self._word_match_score(text)

    def _character_overlap(self, text: str) -> float:
        """Fraction of distinct phrase characters that appear in the text."""
        chars = set(self.search_text)
        if not chars:
            return 0.0
        matches = sum(1 for char in chars if char in text)
        return matches / len(chars)

    def _word_match_score(self, text: str) -> float:
        search_words = self.search_text.split()
        if not search_words:
            return 0.0
        text_words = text.split()

        word_matches = sum(
            1 for search_word in search_words
            if any(search_word in text_word for text_word in text_words)
        )

        if word_matches == len(search_words):
            return ALL_WORDS_SCORE
        if word_matches > 0:
            return PARTIAL_WORDS_WEIGHT * (word_matches / len(search_words))
        return 0.0

    def score_transaction(self, transaction: NormalizedTransaction) -> SearchResult | None:
        """Score a transaction's memo and payee.

        Args:
            transaction: Transaction to score.

        Returns:
            SearchResult if either field matched, otherwise None.
        """
        memo_score = 0.0
        payee_score = 0.0

        if transaction.memo:
            memo_score = self.match_score(transaction.memo)

        # Transfer payees are account names ("Transfer : Savings"), not merchants
        if transaction.payee_name and not transaction.is_transfer:
            payee_score = self.match_score(transaction.payee_name)

        best = max(memo_score, payee_score)
        if best <= 0:
            return None

        if memo_score > 0 and payee_score > 0:
            matched_field = MatchedField.BOTH
        elif memo_score > 0:
            matched_field = MatchedField.MEMO
        else:
            matched_field = MatchedField.PAYEE

        return SearchResult(
            transaction=transaction,
            matched_field=matched_field,
            relevance_score=best,
        )

    def search(self, transactions: Iterable[NormalizedTransaction]) -> list[SearchResult]:
        """Score transactions and order the matches for presentation.

        Matches are sorted by relevance (highest first), then by date
        (newest first). Equal keys keep input order.

        Args:
            transactions: Candidate transactions.

        Returns:
            Matching transactions as SearchResults, best first.
        """
        results = []
        for transaction in transactions:
            result = self.score_transaction(transaction)
            if result is not None:
                results.append(result)

        results.sort(key=lambda r: (r.relevance_score, r.date), reverse=True)
        logger.info(f"Found {len(results)} matches for {self.search_text!r}")
        return results


def search_transactions(
    transactions: Iterable[NormalizedTransaction],
    search_text: str,
) -> list[SearchResult]:
    """Convenience function to score and rank transactions.

    Args:
        transactions: Candidate transactions.
        search_text: Non-empty search phrase.

    Returns:
        Matching transactions, best first.
    """
    return SearchScorer(search_text).search(transactions)
