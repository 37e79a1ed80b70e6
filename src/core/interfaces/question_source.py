"""Contract for anything that can fetch questions by id.

Why Protocol:
- A structural contract (duck typing) without rigid inheritance.
- The export pipeline can run against the real API client or an in-memory
  fake in tests, without coupling the core to httpx.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import QuestionsResponse


@runtime_checkable
class QuestionSource(Protocol):
    """Minimal contract for a question backend.

    Design rules:
    - `fetch_questions` is async because it typically does I/O (HTTP).
    - One call returns one page; callers never paginate.
    """

    async def fetch_questions(
        self,
        ids: Sequence[str],
        *,
        site: str,
        from_ts: int | None = None,
        to_ts: int | None = None,
    ) -> QuestionsResponse:
        """Fetch the questions named by `ids` and return the parsed wrapper."""

        ...
