"""Shared formatting and file utilities for CLI commands."""

import json
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console

from seas_toolkit.shared.constants import ChainConstants

# Shared console instance
console = Console()


def format_address(address: Optional[str], length: int = 10) -> str:
    """
    Format an address to show first and last characters.

    Args:
        address: Address to shorten
        length: Addresses this short or shorter are returned unchanged

    Returns:
        Formatted address like "0x1234...5678"
    """
    if not address:
        return "N/A"
    if len(address) <= length:
        return address
    return f"{address[:6]}...{address[-4:]}"


def format_timestamp(
    timestamp: int, format_str: str = "%Y-%m-%d %H:%M"
) -> str:
    """Format a Unix timestamp as a UTC date string."""
    dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return dt.strftime(format_str)


def format_token_amount(
    amount: int,
    decimals: int = ChainConstants.TOKEN_DECIMALS,
    places: int = 4,
) -> str:
    """Base units to a human amount, e.g. 1500000000000000000 -> "1.5"."""
    value = Decimal(amount) / (Decimal(10) ** decimals)
    quantized = value.quantize(Decimal(1).scaleb(-places))
    text = f"{quantized:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def explorer_tx_url(explorer_url: Optional[str], tx_hash: str) -> Optional[str]:
    if not explorer_url:
        return None
    return f"{explorer_url.rstrip('/')}/tx/{tx_hash}"


def save_json_output(
    data: Dict[str, Any],
    filename: str,
    output_dir: str = "output",
    print_path: bool = True,
) -> str:
    """
    Save data to a JSON file with automatic directory creation.

    Args:
        data: Data to save
        filename: Output filename (can include subdirectories)
        output_dir: Base output directory (default: 'output')
        print_path: Whether to print the saved file path

    Returns:
        Full path to saved file
    """
    filepath = Path(output_dir) / filename
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w") as f:
        json.dump(data, f, indent=2, default=str)

    if print_path:
        console.print(f"[cyan]Data saved to:[/cyan] {filepath}")

    return str(filepath)
