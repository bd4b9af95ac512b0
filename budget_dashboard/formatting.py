"""Formatting utilities for currency and percentage display."""

from __future__ import annotations

from typing import Union


def format_currency(amount: Union[float, int], include_sign: bool = True) -> str:
    """Format a currency amount as a grouped whole number.

    Args:
        amount: The amount to format
        include_sign: Whether to include the dollar sign

    Returns:
        Formatted currency string (e.g., "$1,235" or "1,235")

    Example:
        >>> format_currency(1234.56)
        '$1,235'
        >>> format_currency(-350)
        '$-350'
    """
    formatted = f"{amount:,.0f}"
    if formatted == "-0":
        formatted = "0"
    return f"${formatted}" if include_sign else formatted


def format_percent(value: float) -> str:
    """Format a percentage with one decimal place (e.g., ``"87.5%"``)."""
    return f"{value:.1f}%"


def escape_dollar_for_markdown(text: str) -> str:
    """Escape dollar signs so Streamlit markdown does not treat them as LaTeX.

    Example:
        >>> escape_dollar_for_markdown("$1,235")
        '\\\\$1,235'
    """
    return text.replace("$", "\\$")
