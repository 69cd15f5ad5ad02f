"""
OpenAI chat-completion client.

Sends one JSON-mode chat request per prompt and interprets the reply into
findings. Token usage and estimated cost are logged and recorded in metrics
but never returned to the caller.
"""

import asyncio
from typing import List, Optional

from openai import AsyncOpenAI, OpenAIError

from llm_linter.config import Settings
from llm_linter.core.response_interpreter import interpret_response
from llm_linter.exceptions import ModelCallError
from llm_linter.models.finding import Finding
from llm_linter.services.base import LlmClient
from llm_linter.utils.logging import get_logger
from llm_linter.utils.metrics import LintMetrics, track_api_call
from llm_linter.utils.resilience import RetryPolicy, Sleep, retry_async

logger = get_logger(__name__)


class OpenAIClient(LlmClient):
    """LlmClient backed by the OpenAI chat completions API."""
    
    def __init__(
        self,
        settings: Settings,
        client: Optional[AsyncOpenAI] = None,
        metrics: Optional[LintMetrics] = None,
        retry_policy: Optional[RetryPolicy] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Initialize the client.
        
        Args:
            settings: Application settings (API key, model, prices)
            client: Preconfigured AsyncOpenAI instance, built from settings if omitted
            metrics: Optional metrics collector for usage and latency
            retry_policy: Retry behaviour for failed calls; one attempt by default
            sleep: Coroutine used to wait between retries
        """
        self.model = settings.openai_model
        self.input_token_price_per_1k = settings.input_token_price_per_1k
        self.output_token_price_per_1k = settings.output_token_price_per_1k
        self.metrics = metrics
        self.retry_policy = retry_policy or RetryPolicy(
            max_attempts=settings.model_max_attempts,
            retry_on=(ModelCallError,),
        )
        self._sleep = sleep
        
        # Retries are governed by retry_policy, not the SDK
        self.client = client or AsyncOpenAI(
            api_key=settings.openai_api_key.get_secret_value(),
            base_url=settings.openai_base_url,
            timeout=settings.request_timeout_seconds,
            max_retries=0,
        )
        logger.info(f"Initialized OpenAI client for model {self.model}")
    
    async def check(self, path: str, prompt: str) -> List[Finding]:
        async def request_chat() -> str:
            return await self._request_chat(prompt)
        
        content = await retry_async(request_chat, self.retry_policy, self._sleep)
        return interpret_response(content, path)
    
    def estimate_cost(self, prompt_tokens: int, completion_tokens: int) -> float:
        """Estimated cost in USD for the given token counts."""
        return (
            prompt_tokens * self.input_token_price_per_1k / 1000
            + completion_tokens * self.output_token_price_per_1k / 1000
        )
    
    async def _request_chat(self, prompt: str) -> str:
        """
        Send a single-message JSON-mode chat request.
        
        Returns:
            Text content of the first choice
            
        Raises:
            ModelCallError: On API/network failure or an empty reply
        """
        try:
            async with track_api_call(self.metrics, "openai", "chat.completions", "POST", logger):
                response = await self.client.chat.completions.create(
                    model=self.model,
                    messages=[{"role": "user", "content": prompt}],
                    response_format={"type": "json_object"},
                )
        except OpenAIError as e:
            raise ModelCallError(f"OpenAI request failed: {e}") from e
        
        self._record_usage(response)
        
        if not response.choices:
            raise ModelCallError("OpenAI response contained no choices")
        
        content = response.choices[0].message.content
        if not content:
            raise ModelCallError("OpenAI response contained an empty message")
        
        logger.debug(f"OpenAI response for prompt:\n{prompt}\n====\n{content}")
        return content
    
    def _record_usage(self, response) -> None:
        usage = getattr(response, "usage", None)
        if usage is None:
            logger.warning("OpenAI response did not include usage information")
            return
        
        cost = self.estimate_cost(usage.prompt_tokens, usage.completion_tokens)
        logger.info(
            f"Total tokens: {usage.total_tokens}, estimated cost: ${cost:.4f}",
            extra={
                "prompt_tokens": usage.prompt_tokens,
                "completion_tokens": usage.completion_tokens,
                "total_tokens": usage.total_tokens,
            }
        )
        if self.metrics:
            self.metrics.record_usage(
                usage.prompt_tokens,
                usage.completion_tokens,
                usage.total_tokens,
                cost,
            )
