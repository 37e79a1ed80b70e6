"""Stack Exchange API client.

One vectorized call: `GET /questions/{id1;id2;...}?site=...`. The API
returns either the common wrapper (`items`, `has_more`, quota fields) or an
error object (`error_id`, `error_name`, `error_message`), usually with HTTP
400. Anything else is a transport problem.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import ApiErrorPayload, QuestionsResponse
from core.errors import StackExchangeApiError, TransportError

logger = logging.getLogger(__name__)


def build_questions_url(base_url: str, ids: Sequence[str]) -> str:
    """URL for the vectorized questions route (ids joined with `;`)."""

    joined = ";".join(quote(str(i), safe="") for i in ids)
    return f"{base_url.rstrip('/')}/questions/{joined}"


def build_questions_params(
    *,
    site: str,
    from_ts: int | None = None,
    to_ts: int | None = None,
) -> dict[str, str]:
    params = {"site": site}
    # Only positive bounds are meaningful; 0/None means "unbounded".
    if from_ts and from_ts > 0:
        params["fromdate"] = str(from_ts)
    if to_ts and to_ts > 0:
        params["todate"] = str(to_ts)
    return params


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise TransportError(
            f"HTTP {response.status_code} from {response.url}: response is not JSON"
        ) from exc


class StackExchangeClient:
    """Fetches questions from the public API."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def fetch_questions(
        self,
        ids: Sequence[str],
        *,
        site: str,
        from_ts: int | None = None,
        to_ts: int | None = None,
    ) -> QuestionsResponse:
        url = build_questions_url(self._settings.api_base_url, ids)
        params = build_questions_params(site=site, from_ts=from_ts, to_ts=to_ts)
        logger.debug("GET %s params=%s", url, params)

        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise TransportError(f"request to {url} failed: {exc}") from exc

        payload = _decode_body(response)

        if isinstance(payload, dict) and "error_id" in payload:
            try:
                error = ApiErrorPayload.model_validate(payload)
            except ValidationError as exc:
                raise TransportError(
                    f"HTTP {response.status_code} from {response.url}: malformed error payload: {exc}"
                ) from exc
            raise StackExchangeApiError(
                error_id=error.error_id,
                error_name=error.error_name,
                error_message=error.error_message,
                status_code=response.status_code,
            )

        if not response.is_success:
            raise TransportError(f"HTTP {response.status_code} from {response.url}")

        try:
            questions = QuestionsResponse.model_validate(payload)
        except ValidationError as exc:
            raise TransportError(f"unexpected response shape from {response.url}: {exc}") from exc

        logger.info(
            "Fetched %d question(s) (quota %s/%s, has_more=%s)",
            len(questions.items),
            questions.quota_remaining,
            questions.quota_max,
            questions.has_more,
        )
        return questions
