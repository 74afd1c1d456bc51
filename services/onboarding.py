"""
services/onboarding.py
────────────────────────────────────────────────────────────────────────
Async client for the profile service's `GET /onboarding/me`.
"""
from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from config import settings
from core.models.onboarding import OnboardingRecord

_LOG = logging.getLogger(__name__)

DEFAULT_ERROR = "Failed to load onboarding data"


class OnboardingUnavailable(RuntimeError):
    """The onboarding record could not be fetched or parsed."""


class OnboardingClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport      # tests plug in httpx.MockTransport

    async def fetch_me(self, token: str | None = None) -> OnboardingRecord:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as http:
                r = await http.get("/onboarding/me", headers=headers)
        except httpx.HTTPError as exc:
            _LOG.warning("onboarding request failed: %s", exc)
            raise OnboardingUnavailable(DEFAULT_ERROR) from exc

        if r.is_error:
            message = _upstream_message(r)
            _LOG.warning("onboarding service returned %s: %s", r.status_code, message)
            raise OnboardingUnavailable(message)

        try:
            return OnboardingRecord.model_validate(r.json())
        except (ValueError, ValidationError) as exc:
            _LOG.warning("malformed onboarding payload: %s", exc)
            raise OnboardingUnavailable(DEFAULT_ERROR) from exc


def _upstream_message(r: httpx.Response) -> str:
    try:
        body = r.json()
    except ValueError:
        return DEFAULT_ERROR
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return DEFAULT_ERROR


def get_onboarding_client() -> OnboardingClient:
    """FastAPI dependency; override in tests."""
    return OnboardingClient(
        settings.onboarding_api_url,
        timeout=settings.onboarding_timeout_s,
    )
