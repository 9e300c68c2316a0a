from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class AdminSession:
    """Holds the bearer token and signed-in user between client calls."""

    token: str | None = None
    user: dict[str, Any] = field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    @property
    def role(self) -> str | None:
        return self.user.get("role")

    def init(self, token: str, user: dict[str, Any]) -> None:
        self.token = token
        self.user = dict(user)

    def teardown(self) -> None:
        if self.token is not None:
            logger.info("admin session for %s cleared", self.user.get("email"))
        self.token = None
        self.user = {}

    def headers(self) -> dict[str, str]:
        if self.token is None:
            return {}
        return {"Authorization": f"Bearer {self.token}"}
