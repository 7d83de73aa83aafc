import asyncio
import logging
from typing import Optional

import httpx

logger = logging.getLogger("store")


class RemoteMirror:
    """Best-effort replace-all copy of the question collection on a remote server.

    Local storage stays authoritative: failures are logged and never raised.
    Pushes go out one at a time and only the newest pending collection is
    sent, so the remote never ends on an older snapshot.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.transport = transport
        self._latest: Optional[list] = None
        self._worker: Optional[asyncio.Task] = None

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    async def push(self, payload: list) -> bool:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.post(self.url, json=payload)
            if not resp.is_success:
                logger.warning("Remote save returned status %s url=%s", resp.status_code, self.url)
                return False
            logger.info("Remote save ok url=%s questions=%s", self.url, len(payload))
            return True
        except Exception as exc:
            logger.warning("Could not save to remote %s: %s", self.url, exc)
            return False

    def schedule(self, payload: list) -> Optional[asyncio.Task]:
        """Queue a detached push; callers never await it."""
        if not self.enabled:
            return None
        if self._latest is not None:
            logger.debug("Superseding unsent remote save url=%s", self.url)
        self._latest = payload
        if self._worker is None or self._worker.done():
            self._worker = asyncio.create_task(self._push_latest())
        return self._worker

    async def _push_latest(self) -> None:
        while self._latest is not None:
            payload, self._latest = self._latest, None
            await self.push(payload)

    async def drain(self, timeout: Optional[float] = None) -> None:
        worker = self._worker
        if worker is None or worker.done():
            return
        _, pending = await asyncio.wait([worker], timeout=timeout)
        for task in pending:
            logger.warning("Abandoning remote save still running after %ss url=%s", timeout, self.url)
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        self._latest = None
