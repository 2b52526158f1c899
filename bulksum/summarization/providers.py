"""Summary provider interface and implementations."""

import asyncio
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Set, Tuple

import httpx
import openai
import trafilatura
from openai import AsyncOpenAI

from ..config import Config, LengthClass, ProviderName
from ..errors import ConfigError, SummarizationError

# Rough word targets per length class for providers without native length control
TARGET_WORDS = {
    LengthClass.SHORT: 150,
    LengthClass.MEDIUM: 300,
    LengthClass.LONG: 600,
    LengthClass.XL: 1200,
    LengthClass.XXL: 2400,
}


class SummaryProvider(ABC):
    """Abstract base class for summary providers."""

    @abstractmethod
    async def summarize(
        self,
        url: str,
        prompt: str,
        length: LengthClass,
        model: Optional[str] = None,
    ) -> str:
        """
        Summarize the content behind a URL.

        Args:
            url: Content URL
            prompt: Rendered instructions
            length: Requested summary length
            model: Optional model override

        Returns:
            Summary text

        Raises:
            SummarizationError: The provider failed
        """
        pass

    @abstractmethod
    def get_usage_stats(self) -> Dict:
        """Get usage statistics."""
        pass


class CliSummaryProvider(SummaryProvider):
    """Run the external `summarize` command line tool."""

    def __init__(self, binary: str = "summarize", timeout: Optional[float] = None) -> None:
        """
        Initialize CLI provider.

        Args:
            binary: Executable name or path
            timeout: Seconds before a call is killed (None waits forever)
        """
        self.binary = binary
        self.timeout = timeout
        self.calls = 0
        self.failures = 0

    def build_args(self, url: str, prompt: str, length: LengthClass, model: Optional[str]) -> List[str]:
        """Command line arguments for one call."""
        args = ["--length", length.value, "--prompt", prompt]
        if model:
            args.extend(["--model", model])
        args.append(url)
        return args

    async def summarize(
        self,
        url: str,
        prompt: str,
        length: LengthClass,
        model: Optional[str] = None,
    ) -> str:
        """Summarize by running the CLI and capturing stdout."""
        self.calls += 1
        try:
            process = await asyncio.create_subprocess_exec(
                self.binary,
                *self.build_args(url, prompt, length, model),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            self.failures += 1
            raise SummarizationError(f"{self.binary} not found on PATH")

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), self.timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            self.failures += 1
            raise SummarizationError(f"{self.binary} timed out after {self.timeout}s")

        if process.returncode != 0:
            self.failures += 1
            message = stderr.decode("utf-8", errors="replace").strip()
            raise SummarizationError(message or f"{self.binary} exited with {process.returncode}")

        summary = stdout.decode("utf-8", errors="replace").strip()
        if not summary:
            self.failures += 1
            raise SummarizationError(f"{self.binary} returned an empty summary")
        return summary

    def get_usage_stats(self) -> Dict:
        """Get usage statistics."""
        return {"api_calls": self.calls, "failures": self.failures, "model": "summarize-cli"}


class OpenAISummaryProvider(SummaryProvider):
    """Fetch the page, extract its text and summarize with OpenAI."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        max_content_chars: int = 24000,
    ) -> None:
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Default model name
            base_url: Custom base URL
            timeout: HTTP timeout for page fetches
            max_content_chars: Extracted text is truncated to this length
        """
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url)
        self.model = model
        self.timeout = timeout
        self.max_content_chars = max_content_chars
        self.total_tokens = 0
        self.api_calls = 0

    async def fetch_text(self, url: str) -> str:
        """Download a page and extract its main text."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SummarizationError(f"HTTP {e.response.status_code} fetching {url}")
        except httpx.HTTPError as e:
            raise SummarizationError(f"Failed to fetch {url}: {e}")

        extracted = trafilatura.extract(
            response.text,
            include_comments=False,
            include_tables=False,
            favor_precision=True,
            url=str(response.url),
        )
        if not extracted:
            raise SummarizationError("Failed to extract article content")

        if len(extracted) > self.max_content_chars:
            extracted = extracted[:self.max_content_chars] + "..."
        return extracted

    async def summarize(
        self,
        url: str,
        prompt: str,
        length: LengthClass,
        model: Optional[str] = None,
    ) -> str:
        """Summarize page content using OpenAI."""
        content = await self.fetch_text(url)
        target_words = TARGET_WORDS[length]

        message = f"""{prompt}

Target length: approximately {target_words} words.
URL: {url}

Content:
{content}"""

        try:
            self.api_calls += 1
            response = await self.client.chat.completions.create(
                model=model or self.model,
                messages=[{"role": "user", "content": message}],
                temperature=0.3,
            )
        except openai.OpenAIError as e:
            raise SummarizationError(f"OpenAI request failed: {e}")

        if response.usage:
            self.total_tokens += response.usage.total_tokens

        summary = (response.choices[0].message.content or "").strip()
        if not summary:
            raise SummarizationError("OpenAI returned an empty summary")
        return summary

    def get_usage_stats(self) -> Dict:
        """Get usage statistics."""
        return {
            "total_tokens": self.total_tokens,
            "api_calls": self.api_calls,
            "model": self.model,
        }


class MockSummaryProvider(SummaryProvider):
    """Mock provider for testing."""

    def __init__(self, fail_urls: Optional[Set[str]] = None, delay: float = 0.0) -> None:
        """
        Initialize mock provider.

        Args:
            fail_urls: URLs whose summarization raises SummarizationError
            delay: Seconds each call takes
        """
        self.fail_urls = set(fail_urls or ())
        self.delay = delay
        self.calls: List[Tuple[str, str, LengthClass, Optional[str]]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def summarize(
        self,
        url: str,
        prompt: str,
        length: LengthClass,
        model: Optional[str] = None,
    ) -> str:
        """Mock summarization."""
        self.calls.append((url, prompt, length, model))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if url in self.fail_urls:
                raise SummarizationError(f"Mock failure for {url}")
            return f"Mock {length.value} summary of {url}\n\n- Key point one\n- Key point two"
        finally:
            self.in_flight -= 1

    def get_usage_stats(self) -> Dict:
        """Get mock usage statistics."""
        return {"api_calls": len(self.calls), "model": "mock"}


def create_provider(config: Config) -> SummaryProvider:
    """Build the provider named in the settings."""
    settings = config.config.settings

    if settings.provider == ProviderName.OPENAI:
        llm_config = config.get_llm_config()
        api_key = llm_config.get("api_key")
        if not api_key:
            raise ConfigError(
                "No OpenAI API key found",
                [f"llm.api_key_env: set {llm_config.get('api_key_env')} or llm.api_key"],
            )
        return OpenAISummaryProvider(
            api_key=api_key,
            model=llm_config.get("model", "gpt-4o-mini"),
            base_url=llm_config.get("base_url"),
        )

    return CliSummaryProvider(timeout=settings.provider_timeout)
