"""Utility modules for the YNAB transaction query tools."""
