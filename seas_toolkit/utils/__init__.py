from seas_toolkit.utils.formatters import (
    console,
    explorer_tx_url,
    format_address,
    format_timestamp,
    format_token_amount,
    save_json_output,
)

__all__ = [
    "console",
    "explorer_tx_url",
    "format_address",
    "format_timestamp",
    "format_token_amount",
    "save_json_output",
]
