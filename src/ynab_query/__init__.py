"""Query tools for YNAB budget transactions.

Fetches transactions from the YNAB API and provides paginated listing with
transfer grouping and page summaries, plus ranked free-text search.
"""

__version__ = "0.1.0"
