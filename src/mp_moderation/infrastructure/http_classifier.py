"""HttpTextClassifier — OpenAI-compatible chat completion call.

Request:  POST {base_url}/chat/completions
          {"model": ..., "messages": [{"role": "user", "content": prompt}], "temperature": 0}
Response: choices[0].message.content → ClassifierResponse.verdict_text

Every transport, status or payload-shape problem is raised as
ModerationUnavailableError; the policy turns that into a fail-open verdict.
"""

import httpx

from src.mp_common.errors import ModerationUnavailableError
from src.mp_moderation.domain.models import ClassifierResponse


class HttpTextClassifier:
    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        model: str = "gpt-4o-mini",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
        self._model = model
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def classify(self, prompt: str) -> ClassifierResponse:
        payload = {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": 0,
        }
        try:
            response = await self._client.post("/chat/completions", json=payload)
            response.raise_for_status()
            content = response.json()["choices"][0]["message"]["content"]
        except httpx.HTTPError as exc:
            raise ModerationUnavailableError(f"{type(exc).__name__}: {exc}") from exc
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise ModerationUnavailableError(f"unexpected response shape: {exc!r}") from exc

        if not isinstance(content, str) or not content.strip():
            raise ModerationUnavailableError("empty classifier response")
        return ClassifierResponse(verdict_text=content.strip())

    async def aclose(self) -> None:
        await self._client.aclose()
