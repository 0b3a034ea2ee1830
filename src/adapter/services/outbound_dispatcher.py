import asyncio
import logging
from typing import Dict, Optional, Set

import httpx

from src.app.services.outbound import IOutboundDispatcher, OutboundKind, OutboundTask

logger = logging.getLogger(__name__)


class HttpOutboundDispatcher(IOutboundDispatcher):
    """
    Posts each task as JSON to the webhook configured for its kind.

    At-most-once: one attempt, no retry. Failures are logged with the task
    context and never propagate to the request that enqueued the task.
    """

    def __init__(
        self,
        endpoints: Dict[OutboundKind, str],
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoints = endpoints
        self.timeout = timeout
        self.transport = transport
        # Strong references so pending tasks are not garbage collected
        self._pending: Set[asyncio.Task] = set()

    def enqueue(self, task: OutboundTask) -> None:
        url = self.endpoints.get(task.kind)
        if not url:
            logger.info(
                "Outbound channel disabled, task dropped",
                extra={"task_kind": task.kind.value, **task.context},
            )
            return

        pending = asyncio.create_task(self._deliver(url, task))
        self._pending.add(pending)
        pending.add_done_callback(self._pending.discard)

    async def _deliver(self, url: str, task: OutboundTask) -> Optional[int]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as http:
                response = await http.post(url, json={"kind": task.kind.value, **task.payload})
        except httpx.HTTPError as e:
            logger.warning(
                "Outbound delivery failed: %s",
                e.__class__.__name__,
                extra={"task_kind": task.kind.value, **task.context},
            )
            return None

        if response.status_code >= 400:
            logger.warning(
                "Outbound delivery rejected with status %s",
                response.status_code,
                extra={"task_kind": task.kind.value, **task.context},
            )
        return response.status_code

    async def drain(self) -> None:
        """Wait for in-flight deliveries (used on shutdown)."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
