"""
Client for the auxiliary wallet verification API.

Endpoints:
- GET  /api/verify?wallet=<address>   identity verification record
- POST /api/verify-gooddollar         store a GoodDollar verification

All calls go through RetryingFetcher and return its Result; nothing here
raises for network problems. Invalid wallet addresses raise
ValidationError before any request is made.
"""

from typing import Any, Dict, Optional

import httpx

from seas_toolkit.contracts.validation import validate_address
from seas_toolkit.shared.constants import ApiConstants
from seas_toolkit.shared.logging import get_logger
from seas_toolkit.shared.results import Result
from seas_toolkit.shared.services.fetcher import RetryingFetcher

logger = get_logger(__name__)

# Per-endpoint policies (seconds)
VERIFY_TIMEOUT = 20.0
SAVE_TIMEOUT = 15.0
PING_TIMEOUT = 5.0
ENDPOINT_RETRIES = 2
ENDPOINT_RETRY_DELAY = 2.0


class VerificationService:
    def __init__(
        self,
        base_url: str = ApiConstants.VERIFY_API_URL,
        fetcher: Optional[RetryingFetcher] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.fetcher = fetcher or RetryingFetcher()

    def _url(self, path: str, params: Optional[Dict[str, str]] = None) -> str:
        return str(httpx.URL(f"{self.base_url}{path}", params=params))

    async def fetch_verification_data(self, wallet: str) -> Result[Any]:
        """Verification record for ``wallet``."""
        wallet = validate_address(wallet, "wallet")
        logger.info(f"Fetching verification data for wallet {wallet}")
        return await self.fetcher.get_json(
            self._url(ApiConstants.VERIFY_PATH, {"wallet": wallet}),
            timeout=VERIFY_TIMEOUT,
            retries=ENDPOINT_RETRIES,
            retry_delay=ENDPOINT_RETRY_DELAY,
        )

    async def save_gooddollar_verification(
        self,
        wallet: str,
        user_id: str,
        verification_status: bool,
        root: Optional[str] = None,
    ) -> Result[Any]:
        wallet = validate_address(wallet, "wallet")
        body: Dict[str, Any] = {
            "wallet": wallet,
            "userId": user_id,
            "verificationStatus": verification_status,
        }
        if root is not None:
            body["root"] = root

        logger.info(f"Saving GoodDollar verification for wallet {wallet}")
        return await self.fetcher.post_json(
            self._url(ApiConstants.GOODDOLLAR_VERIFY_PATH),
            body,
            timeout=SAVE_TIMEOUT,
            retries=ENDPOINT_RETRIES,
            retry_delay=ENDPOINT_RETRY_DELAY,
        )

    async def ping(self) -> bool:
        """True when the API root answers with a JSON body."""
        result = await self.fetcher.get_json(
            self.base_url, timeout=PING_TIMEOUT, retries=1
        )
        return result.success
