"""
Solana ledger matcher implementation.

JSON-RPC client that detects correlated verification payments on the
Solana blockchain.
"""

import asyncio
import time
from decimal import Decimal
from typing import Any, List, Optional

import aiohttp
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from douanier.domain.exceptions.blockchain import (
    BlockchainError,
    LedgerRPCError,
    LedgerUnavailableError,
)
from douanier.domain.services.i_ledger_matcher import (
    ILedgerMatcher,
    MatchResult,
    VerificationResult,
)
from douanier.infrastructure.blockchain.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerError,
)
from douanier.infrastructure.blockchain.solana_utils import (
    extract_account_keys,
    is_wallet_address,
    lamports_to_sol,
)
from douanier.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)

TRANSIENT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


class SolanaLedgerMatcher(ILedgerMatcher):
    """
    Solana RPC client for payment correlation.

    Read-only: it never signs. Every RPC call goes through a circuit
    breaker wrapping a tenacity retry loop, and transport failures surface
    as LedgerUnavailableError.
    """

    def __init__(
        self,
        rpc_url: str,
        commitment: str = "confirmed",
        scan_limit: int = 20,
        match_tolerance: Decimal = Decimal("0.0000000005"),
        signature_tolerance: Decimal = Decimal("0.0001"),
        total_timeout: int = 10,
        connect_timeout: int = 3,
        max_retries: int = 3,
        circuit_breaker: Optional[CircuitBreaker] = None,
    ):
        """
        Initialize Solana ledger matcher.

        Args:
            rpc_url: Solana RPC endpoint URL
            commitment: Commitment level for reads
            scan_limit: Recent receiver signatures examined per scan
            match_tolerance: Max |delta - expected| for a scan match (strict)
            signature_tolerance: Max |delta - expected| for an explicit
                signature (inclusive)
            total_timeout: Total request timeout in seconds
            connect_timeout: Connection timeout in seconds
            max_retries: Max attempts for transient failures
            circuit_breaker: Breaker shared by all RPC calls
        """
        self.rpc_url = rpc_url
        self.commitment = commitment
        self.scan_limit = scan_limit
        self.match_tolerance = Decimal(str(match_tolerance))
        self.signature_tolerance = Decimal(str(signature_tolerance))
        self.timeout = aiohttp.ClientTimeout(
            total=total_timeout,
            connect=connect_timeout,
        )
        self.max_retries = max_retries
        self.circuit_breaker = circuit_breaker or CircuitBreaker(
            name="solana_rpc",
            expected_exception=TRANSIENT_ERRORS,
        )
        self._session: Optional[aiohttp.ClientSession] = None
        self._request_id = 0

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create pooled HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                connector=aiohttp.TCPConnector(
                    limit=100,
                    limit_per_host=30,
                    ttl_dns_cache=300,
                ),
            )
        return self._session

    # ================================================================
    # RPC transport
    # ================================================================

    async def _call(self, method: str, params: List[Any]) -> Any:
        """
        Execute one JSON-RPC call with breaker and retries.

        Returns:
            The "result" member of the response

        Raises:
            LedgerUnavailableError: Network failure, timeout or open circuit
            LedgerRPCError: Node answered with an error object
        """
        metrics.ledger_requests_total.labels(method=method).inc()
        start = time.perf_counter()
        try:
            return await self.circuit_breaker.call(
                self._call_with_retry, method, params
            )
        except CircuitBreakerError as e:
            metrics.ledger_errors_total.labels(
                operation=method, error_type="circuit_open"
            ).inc()
            raise LedgerUnavailableError(str(e), method=method)
        except TRANSIENT_ERRORS as e:
            metrics.ledger_errors_total.labels(
                operation=method, error_type=type(e).__name__
            ).inc()
            raise LedgerUnavailableError(
                f"RPC {method} failed after {self.max_retries} attempts: "
                f"{type(e).__name__}: {e}",
                method=method,
            )
        except LedgerRPCError:
            metrics.ledger_errors_total.labels(
                operation=method, error_type="rpc_error"
            ).inc()
            raise
        finally:
            metrics.ledger_request_duration_seconds.labels(method=method).observe(
                time.perf_counter() - start
            )

    async def _call_with_retry(self, method: str, params: List[Any]) -> Any:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=1, min=1, max=4),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            reraise=True,
        ):
            with attempt:
                return await self._call_once(method, params)

    async def _call_once(self, method: str, params: List[Any]) -> Any:
        """Single RPC attempt (called by retry logic)."""
        session = await self._get_session()

        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }

        async with session.post(self.rpc_url, json=payload) as response:
            # 429 and 5xx raise ClientResponseError and are retried
            response.raise_for_status()
            try:
                data = await response.json(content_type=None)
            except ValueError as e:
                raise LedgerRPCError(method, {"message": f"Invalid JSON: {e}"})

        if not isinstance(data, dict):
            raise LedgerRPCError(
                method, {"message": f"Unexpected response body: {str(data)[:100]}"}
            )

        if "error" in data:
            raise LedgerRPCError(method, data["error"])

        return data.get("result")

    async def _get_transaction(self, signature: str) -> Optional[dict]:
        return await self._call(
            "getTransaction",
            [
                signature,
                {
                    "encoding": "json",
                    "maxSupportedTransactionVersion": 0,
                    "commitment": self.commitment,
                },
            ],
        )

    # ================================================================
    # Balance analysis
    # ================================================================

    @staticmethod
    def _balance_delta(transaction: dict, account_index: int) -> Optional[Decimal]:
        """SOL balance change of one account, None if balances are absent."""
        meta = transaction.get("meta") or {}
        pre = meta.get("preBalances") or []
        post = meta.get("postBalances") or []
        if account_index >= len(pre) or account_index >= len(post):
            return None
        return lamports_to_sol(post[account_index] - pre[account_index])

    # ================================================================
    # ILedgerMatcher
    # ================================================================

    async def find_match(
        self,
        expected_sender: str,
        receiver_address: str,
        expected_amount: Decimal,
    ) -> MatchResult:
        """
        Scan recent receiver transactions for the correlated payment.

        Only the first signer counts as sender. Failed transactions and
        transactions not touching the receiver are skipped.
        """
        expected_amount = Decimal(str(expected_amount))
        try:
            entries = await self._call(
                "getSignaturesForAddress",
                [
                    receiver_address,
                    {"limit": self.scan_limit, "commitment": self.commitment},
                ],
            )

            for entry in entries or []:
                if entry.get("err") is not None:
                    continue

                signature = entry.get("signature")
                transaction = await self._get_transaction(signature)
                if not transaction:
                    continue

                meta = transaction.get("meta")
                if not meta or meta.get("err") is not None:
                    continue

                keys = extract_account_keys(transaction)
                if not keys or keys[0] != expected_sender:
                    continue
                if receiver_address not in keys:
                    continue

                received = self._balance_delta(
                    transaction, keys.index(receiver_address)
                )
                if received is None:
                    continue

                if abs(received - expected_amount) < self.match_tolerance:
                    logger.info(
                        f"Matched payment of {received} SOL from "
                        f"{expected_sender}",
                        extra={"signature": signature},
                    )
                    return MatchResult(
                        found=True,
                        signature=signature,
                        received_amount=received,
                        block_time=transaction.get("blockTime"),
                        slot=transaction.get("slot"),
                    )

            return MatchResult.not_found()

        except BlockchainError as e:
            logger.warning(f"Ledger scan failed: {e.message}")
            return MatchResult.not_found(error=e.message)

    async def verify_signature(
        self,
        signature: str,
        from_address: str,
        to_address: str,
        expected_amount: Decimal,
    ) -> VerificationResult:
        """Check that a named transaction pays the expected amount."""
        expected_amount = Decimal(str(expected_amount))
        try:
            transaction = await self._get_transaction(signature)
        except BlockchainError as e:
            logger.warning(f"Signature verification failed: {e.message}")
            return VerificationResult.failed(e.message)

        if not isinstance(transaction, dict) or not transaction.get("meta"):
            return VerificationResult.failed(
                "Transaction not found or not yet confirmed"
            )

        if transaction["meta"].get("err") is not None:
            return VerificationResult.failed("Transaction failed on chain")

        keys = extract_account_keys(transaction)
        if from_address not in keys or to_address not in keys:
            return VerificationResult.failed(
                "Sender or receiver not found in transaction"
            )

        received = self._balance_delta(transaction, keys.index(to_address))
        if received is None:
            return VerificationResult.failed(
                "Transaction not found or not yet confirmed"
            )

        if abs(received - expected_amount) > self.signature_tolerance:
            return VerificationResult.failed(
                f"Amount mismatch. Expected: {expected_amount} SOL, "
                f"Received: {received} SOL",
                amount=received,
            )

        return VerificationResult(
            verified=True,
            signature=signature,
            from_address=from_address,
            to_address=to_address,
            amount=received,
            block_time=transaction.get("blockTime"),
            slot=transaction.get("slot"),
        )

    def is_valid_address(self, address: str) -> bool:
        return is_wallet_address(address)

    async def check_connection(self) -> str:
        """
        Query cluster version.

        Raises:
            LedgerUnavailableError: If the node is unreachable or errors
        """
        try:
            result = await self._call("getVersion", [])
        except LedgerRPCError as e:
            raise LedgerUnavailableError(e.message, method="getVersion")

        return (result or {}).get("solana-core", "unknown")

    async def close(self) -> None:
        """Close HTTP session and cleanup resources."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
