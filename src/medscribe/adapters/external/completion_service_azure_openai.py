"""
Azure OpenAI implementation of the completion service port.

A client is built per request from the clinician's saved settings, so edited
settings take effect on the next generation. Requests are never retried.
"""

import logging
from typing import Dict, List, Optional

import httpx
import openai
from openai import AsyncAzureOpenAI

from ...application.ports.services.completion_service import CompletionService
from ...core.exceptions import CompletionServiceError
from ...domain.entities.api_settings import ApiSettings

logger = logging.getLogger(__name__)


def _service_message(error: "openai.APIStatusError") -> str:
    """Prefer the ``error.message`` field of the response body."""
    body = error.body
    if isinstance(body, dict):
        nested = body.get("error", body)
        if isinstance(nested, dict) and nested.get("message"):
            return str(nested["message"])
    return error.message


class AzureOpenAICompletionService(CompletionService):
    """``transport`` replaces the network layer of the per-request HTTP client."""

    def __init__(
        self,
        request_timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._request_timeout = request_timeout
        self._transport = transport

    def _http_client(self) -> Optional[httpx.AsyncClient]:
        if self._transport is None:
            return None
        return httpx.AsyncClient(transport=self._transport, timeout=self._request_timeout)

    async def complete(
        self,
        api_settings: ApiSettings,
        messages: List[Dict[str, str]],
        max_tokens: int,
        temperature: float,
    ) -> str:
        deployment = api_settings.openai_deployment
        try:
            async with AsyncAzureOpenAI(
                azure_endpoint=api_settings.openai_endpoint.rstrip("/"),
                api_key=api_settings.openai_key,
                api_version=api_settings.openai_api_version,
                max_retries=0,
                timeout=self._request_timeout,
                http_client=self._http_client(),
            ) as client:
                response = await client.chat.completions.create(
                    model=deployment,
                    messages=messages,
                    max_tokens=max_tokens,
                    temperature=temperature,
                )
        except openai.APIStatusError as e:
            logger.error(f"Azure OpenAI returned HTTP {e.status_code} for deployment '{deployment}'")
            raise CompletionServiceError(_service_message(e), status_code=e.status_code)
        except openai.APIConnectionError as e:
            logger.error(f"Azure OpenAI connection failed: {type(e).__name__}")
            raise CompletionServiceError(str(e))
        except ValueError as e:
            # Raised by the client for unusable endpoint values
            raise CompletionServiceError(str(e))

        if not response.choices:
            raise CompletionServiceError("Response contained no choices")

        usage = getattr(response, "usage", None)
        if usage is not None:
            logger.info(
                f"AI_CALL: deployment={deployment} tokens={usage.total_tokens}"
            )
        return response.choices[0].message.content or ""
