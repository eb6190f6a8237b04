"""
Translation backends.

Each backend exposes translate(text, target_lang) -> str and raises
TranslationError when the text cannot be translated. Transient failures
(network errors, rate limiting, server errors) are retried here with
exponential back-off; this is the only place in the tool that retries.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import requests
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

import config
from json_translate.errors import ConfigurationError, TranslationError
from json_translate.prompts import SYSTEM_PROMPT, build_user_prompt
from json_translate.settings import RunConfig

logger = logging.getLogger(__name__)

_DEFAULT_WAIT = wait_exponential(multiplier=1, min=2, max=30)

# DeepL status codes that will not go away by asking again.
_DEEPL_ERRORS = {
    400: "Bad request (check the target language code)",
    403: "Authorization failed (check DEEPL_API_KEY)",
    404: "Endpoint not found (check DEEPL_API_URL)",
    413: "Text too large for a single request",
    456: "DeepL character quota exceeded",
}


class Translator(Protocol):
    def translate(self, text: str, target_lang: str) -> str: ...


class _TransientError(Exception):
    """A failure worth retrying: HTTP 429/5xx or a dropped connection."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


def _retrying(max_attempts: int, wait: wait_base, retry_on: tuple) -> Retrying:
    return Retrying(
        retry=retry_if_exception_type(retry_on),
        wait=wait,
        stop=stop_after_attempt(max_attempts),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


# ── DeepL ──────────────────────────────────────────────────────────────────────

def deepl_api_url(api_key: str) -> str:
    """Free-plan keys (suffix ':fx') must use the api-free host."""
    if api_key.endswith(":fx"):
        return config.DEEPL_FREE_API_URL
    return config.DEEPL_PRO_API_URL


class DeepLTranslator:
    """Translates one text per request through the DeepL REST API."""

    def __init__(
        self,
        api_key: str,
        api_url: str | None = None,
        timeout: float = config.REQUEST_TIMEOUT,
        max_attempts: int = config.MAX_ATTEMPTS,
        wait: wait_base = _DEFAULT_WAIT,
        session: requests.Session | None = None,
    ):
        self.api_url = api_url or deepl_api_url(api_key)
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.wait = wait
        self.session = session or requests.Session()
        self.session.headers["Authorization"] = f"DeepL-Auth-Key {api_key}"

    def translate(self, text: str, target_lang: str) -> str:
        retrying = _retrying(
            self.max_attempts,
            self.wait,
            (_TransientError, requests.ConnectionError, requests.Timeout),
        )
        try:
            return retrying(self._post, text, target_lang)
        except (_TransientError, requests.RequestException) as exc:
            raise TranslationError(
                f"DeepL request failed after {self.max_attempts} attempt(s): {exc}",
                text=text,
                status=getattr(exc, "status", None),
            ) from exc

    def _post(self, text: str, target_lang: str) -> str:
        resp = self.session.post(
            self.api_url,
            data={"text": text, "target_lang": target_lang},
            timeout=self.timeout,
        )

        if resp.status_code == 429 or resp.status_code >= 500:
            raise _TransientError(f"DeepL returned HTTP {resp.status_code}", resp.status_code)
        if resp.status_code != 200:
            reason = _DEEPL_ERRORS.get(resp.status_code, "Unexpected response")
            raise TranslationError(
                f"{reason}: DeepL returned HTTP {resp.status_code}",
                text=text,
                status=resp.status_code,
            )

        if not resp.content:
            raise TranslationError("Empty response from DeepL API", text=text, status=200)
        try:
            payload = resp.json()
            translated = payload["translations"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise TranslationError(
                f"Unexpected DeepL response body: {resp.text[:200]}", text=text, status=200
            ) from exc

        logger.debug("DeepL %s: %r → %r", target_lang, text, translated)
        return translated


# ── OpenAI ─────────────────────────────────────────────────────────────────────

class OpenAITranslator:
    """Uses a chat-completion model as a single-string translator."""

    def __init__(
        self,
        api_key: str,
        model: str = config.MODEL,
        temperature: float = config.TEMPERATURE,
        max_attempts: int = config.MAX_ATTEMPTS,
        wait: wait_base = _DEFAULT_WAIT,
        client: Any = None,
    ):
        self.model = model
        self.temperature = temperature
        self.max_attempts = max_attempts
        self.wait = wait
        if client is None:
            from openai import OpenAI
            client = OpenAI(api_key=api_key)
        self._client = client

    def translate(self, text: str, target_lang: str) -> str:
        import openai

        retrying = _retrying(
            self.max_attempts,
            self.wait,
            (
                openai.APIConnectionError,
                openai.RateLimitError,
                openai.InternalServerError,
            ),
        )
        try:
            return retrying(self._complete, text, target_lang)
        except openai.OpenAIError as exc:
            raise TranslationError(
                f"OpenAI request failed: {exc}",
                text=text,
                status=getattr(exc, "status_code", None),
            ) from exc

    def _complete(self, text: str, target_lang: str) -> str:
        from openai import BadRequestError

        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user",   "content": build_user_prompt(target_lang, text)},
        ]

        # Some models only accept their default temperature; retry without it
        # when the API rejects the parameter.
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                messages=messages,
            )
        except BadRequestError as e:
            if "temperature" in str(e):
                response = self._client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                )
            else:
                raise

        content = (response.choices[0].message.content or "").strip()
        if not content:
            raise TranslationError("Model returned an empty translation", text=text)
        return content


# ── Factory ────────────────────────────────────────────────────────────────────

def build_translator(settings: RunConfig) -> Translator:
    """Create the backend named in the run configuration."""
    if settings.backend == "deepl":
        return DeepLTranslator(settings.api_key, api_url=settings.api_url)
    if settings.backend == "openai":
        return OpenAITranslator(
            settings.api_key,
            model=settings.model or config.MODEL,
            temperature=config.TEMPERATURE if settings.temperature is None else settings.temperature,
        )
    raise ConfigurationError(f"Unknown backend {settings.backend!r}")
