"""Generative text client over an OpenAI-compatible chat completions API."""

import structlog
from openai import AsyncOpenAI, OpenAIError

from emerge_career.errors import UpstreamError

logger = structlog.get_logger()


class TextGenerator:
    """Sends a single prompt and returns the raw completion text.

    Args:
        api_key: Provider API key. None leaves the generator unconfigured,
            in which case every call raises UpstreamError.
        model: Model identifier.
        base_url: Optional OpenAI-compatible endpoint (e.g. Gemini's).
        temperature: Sampling temperature.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-2.0-flash",
        base_url: str | None = None,
        temperature: float = 0.7,
        timeout: float = 30.0,
    ):
        self.model = model
        self.temperature = temperature
        self.client = (
            AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)
            if api_key
            else None
        )

    @property
    def configured(self) -> bool:
        return self.client is not None

    async def generate(self, prompt: str, system: str | None = None) -> str:
        """Generate text for ``prompt``.

        Raises:
            UpstreamError: No API key is configured, the request failed, or
                the provider returned no choices.
        """
        if self.client is None:
            raise UpstreamError("Generative text API key is not configured")

        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
            )
        except OpenAIError as exc:
            raise UpstreamError(f"Generative text request failed: {exc}") from exc

        if not response.choices:
            raise UpstreamError("Generative text response had no choices")
        text = response.choices[0].message.content or ""
        logger.debug("llm_generation_complete", model=self.model, chars=len(text))
        return text
