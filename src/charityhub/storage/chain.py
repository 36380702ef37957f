"""Ordered fall-through across storage strategies."""

import asyncio
import logging
from typing import Optional, Sequence

from charityhub.models.upload import ChainResult, UploadFailure, UploadRequest, UploadSuccess
from charityhub.services.upload.exceptions import StorageChainError
from charityhub.storage.base import StorageStrategy

logger = logging.getLogger(__name__)


class UploadChain:
    """Runs storage strategies in order until one succeeds.

    Strategies run one at a time, never in parallel, and the first success
    ends the chain. The last strategy must be terminal (always succeeds), so
    ``upload`` never reports a failure to its caller. Each non-terminal
    attempt is bounded by ``attempt_timeout`` seconds when set.

    Holds no per-request state; one instance may serve concurrent uploads.
    """

    def __init__(
        self,
        strategies: Sequence[StorageStrategy],
        attempt_timeout: Optional[float] = None,
    ):
        if not strategies:
            raise StorageChainError("Strategy chain is empty")
        if not strategies[-1].terminal:
            raise StorageChainError(
                f"Last strategy '{strategies[-1].name}' is not terminal; uploads could fail"
            )
        self.strategies = tuple(strategies)
        self.attempt_timeout = attempt_timeout

    async def upload(self, request: UploadRequest) -> ChainResult:
        """Store ``request`` with the first strategy that succeeds.

        Args:
            request: Validated upload

        Returns:
            ChainResult with the winning outcome and the failures before it
        """
        failures: list[UploadFailure] = []

        for strategy in self.strategies:
            outcome = await self._attempt(strategy, request)

            if isinstance(outcome, UploadSuccess):
                result = ChainResult(
                    outcome=outcome,
                    failures=tuple(failures),
                    is_placeholder=strategy.terminal,
                )
                self._log_result(request, result)
                return result

            failures.append(outcome)

        # Unreachable while the terminal strategy keeps its contract
        raise StorageChainError(
            "All storage strategies failed: " + "; ".join(f.reason for f in failures)
        )

    async def _attempt(self, strategy: StorageStrategy, request: UploadRequest):
        call = strategy.attempt(request, request.bucket, request.folder)
        if strategy.terminal or self.attempt_timeout is None:
            return await call

        try:
            return await asyncio.wait_for(call, timeout=self.attempt_timeout)
        except asyncio.TimeoutError:
            reason = f"Timed out after {self.attempt_timeout:g}s"
            logger.warning(
                "Storage strategy timed out",
                extra={"strategy": strategy.name, "bucket": request.bucket, "reason": reason},
            )
            return UploadFailure(reason=reason, strategy=strategy.name)

    @staticmethod
    def _log_result(request: UploadRequest, result: ChainResult) -> None:
        if result.is_placeholder and result.failures:
            logger.warning(
                "All storage strategies failed, using placeholder",
                extra={
                    "bucket": request.bucket,
                    "user_id": request.user_id,
                    "failures": [f"{f.strategy}: {f.reason}" for f in result.failures],
                },
            )
        else:
            logger.info(
                "Upload resolved",
                extra={
                    "strategy": result.strategy,
                    "bucket": request.bucket,
                    "path": result.path,
                    "attempts": len(result.failures) + 1,
                },
            )
