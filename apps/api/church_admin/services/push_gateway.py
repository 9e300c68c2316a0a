from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from church_admin.core.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PushResult:
    success_count: int = 0
    failure_count: int = 0


class PushGateway:
    """
    Client for the external push-notification service.

    Delivery is fire-and-forget from the API's point of view: transport and
    HTTP errors are logged and reported as failures, never raised.
    """

    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.base_url)

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any] | None:
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                resp = client.post(f"{self.base_url}{path}", json=payload, headers=self._headers())
                resp.raise_for_status()
                return resp.json() if resp.content else {}
        except (httpx.HTTPError, ValueError):
            logger.exception("push gateway request to %s failed", path)
            return None

    def send_to_tokens(self, tokens: list[str], title: str, body: str, data: dict[str, Any] | None = None) -> PushResult:
        if not tokens:
            return PushResult()
        if not self.enabled:
            logger.info("push gateway not configured; skipping push to %d device(s)", len(tokens))
            return PushResult(failure_count=len(tokens))
        reply = self._post(
            "/messages/multicast",
            {"tokens": tokens, "notification": {"title": title, "body": body}, "data": data or {}},
        )
        if reply is None:
            return PushResult(failure_count=len(tokens))
        result = PushResult(
            success_count=int(reply.get("successCount", len(tokens))),
            failure_count=int(reply.get("failureCount", 0)),
        )
        logger.info("push sent: %d success, %d failed", result.success_count, result.failure_count)
        return result

    def send_to_topic(self, topic: str, title: str, body: str, data: dict[str, Any] | None = None) -> bool:
        if not self.enabled:
            logger.info("push gateway not configured; skipping broadcast to topic %s", topic)
            return False
        reply = self._post(
            "/messages/topic",
            {"topic": topic, "notification": {"title": title, "body": body}, "data": data or {}},
        )
        return reply is not None


_gateway: PushGateway | None = None


def get_push_gateway() -> PushGateway:
    global _gateway
    if _gateway is None:
        _gateway = PushGateway(
            settings.push_gateway_url,
            token=settings.push_gateway_token,
            timeout=settings.push_timeout_seconds,
        )
    return _gateway
