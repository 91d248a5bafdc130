"""
Web3 Service module for talking to the Sovereign Seas contracts.

This module provides the chain read/write primitive the rest of the toolkit
is built on: ``read_contract`` for view calls, ``write_contract`` to submit
a transaction and ``wait_for_receipt`` to wait for its confirmation. All
three are blocking; async callers run them in an executor.
"""

from typing import Any, Dict, Optional, Sequence, Tuple

from web3 import Web3

from seas_toolkit.shared.constants import ChainConstants, SeasConfig
from seas_toolkit.shared.logging import get_logger
from seas_toolkit.shared.retry import RPC_RETRY_CONFIG, RetryConfig
from seas_toolkit.shared.services.resource_manager import (
    resource_manager,
)

logger = get_logger(__name__)


class Web3Service:
    """
    A service class for managing a Web3 connection and contract calls.

    Writes are signed locally when a private key is configured; otherwise
    they are sent with ``eth_sendTransaction`` and the node (or the wallet
    behind it) signs, which is where a user rejection can come from.
    """

    def __init__(
        self,
        chain_id: int,
        rpc_url: str,
        private_key: Optional[str] = None,
        read_retry: RetryConfig = RPC_RETRY_CONFIG,
        receipt_timeout: int = ChainConstants.RECEIPT_TIMEOUT,
    ):
        """
        Initialize the Web3Service.

        Args:
            chain_id (int): The chain ID to use.
            rpc_url (str): The RPC URL to use.
            private_key (str): Optional key used to sign writes locally.
            read_retry (RetryConfig): Retry policy for view calls.
            receipt_timeout (int): Seconds to wait for a receipt.
        """
        self.chain_id = chain_id
        self.w3 = self._initialize_web3(rpc_url)
        self.account = (
            self.w3.eth.account.from_key(private_key) if private_key else None
        )
        self.read_retry = read_retry
        self.receipt_timeout = receipt_timeout
        self._contract_cache: Dict[Tuple[str, str], Any] = {}

    def _initialize_web3(self, rpc_url: str) -> Web3:
        """Initialize Web3 instance with middleware if needed"""
        w3 = Web3(Web3.HTTPProvider(rpc_url))

        # Add POA middleware for non-mainnet chains
        if self.chain_id != 1:
            from web3.middleware import ExtraDataToPOAMiddleware

            w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

        return w3

    @classmethod
    def from_config(cls, config: SeasConfig) -> "Web3Service":
        return cls(
            config.chain_id,
            config.require_rpc_url(),
            private_key=config.private_key,
        )

    @property
    def sender(self) -> Optional[str]:
        """Address writes are sent from, if one is known"""
        if self.account is not None:
            return self.account.address
        return self.w3.eth.default_account or None

    def get_contract(self, address: str, abi_name: str) -> Any:
        """Get a contract instance for a given address and ABI name"""
        key = (address.lower(), abi_name)
        if key not in self._contract_cache:
            abi = resource_manager.load_abi(abi_name)
            self._contract_cache[key] = self.w3.eth.contract(
                address=Web3.to_checksum_address(address.lower()), abi=abi
            )
        return self._contract_cache[key]

    def read_contract(
        self,
        address: str,
        abi_name: str,
        function_name: str,
        args: Sequence[Any] = (),
    ) -> Any:
        """Call a view function, retrying transient RPC failures"""
        contract = self.get_contract(address, abi_name)
        fn = getattr(contract.functions, function_name)(*args)
        return self.read_retry.run_sync(
            fn.call, operation_name=function_name
        )

    def write_contract(
        self,
        address: str,
        abi_name: str,
        function_name: str,
        args: Sequence[Any] = (),
        value: int = 0,
    ) -> str:
        """
        Submit a state-changing call and return its transaction hash.

        Never retried: a write that reached the mempool must not be sent
        twice.
        """
        contract = self.get_contract(address, abi_name)
        fn = getattr(contract.functions, function_name)(*args)

        if self.account is not None:
            tx = fn.build_transaction(
                {
                    "from": self.account.address,
                    "value": value,
                    "nonce": self.w3.eth.get_transaction_count(
                        self.account.address, "pending"
                    ),
                }
            )
            signed = self.account.sign_transaction(tx)
            tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
        else:
            tx_params: Dict[str, Any] = {"value": value}
            if self.sender:
                tx_params["from"] = self.sender
            tx_hash = fn.transact(tx_params)

        tx_hash_hex = Web3.to_hex(tx_hash)
        logger.info(f"Submitted {function_name} transaction {tx_hash_hex}")
        return tx_hash_hex

    def wait_for_receipt(
        self, tx_hash: str, timeout: Optional[int] = None
    ) -> Dict[str, Any]:
        """Block until the transaction is mined and return its receipt"""
        receipt = self.w3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=timeout or self.receipt_timeout
        )
        return dict(receipt)
