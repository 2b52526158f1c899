"""Item summarization."""

from .models import Directives, Failure, Outcome, Success
from .providers import (
    CliSummaryProvider,
    MockSummaryProvider,
    OpenAISummaryProvider,
    SummaryProvider,
    create_provider,
)
from .summarizer import Summarizer, render_prompt, truncate

__all__ = [
    "CliSummaryProvider",
    "Directives",
    "Failure",
    "MockSummaryProvider",
    "OpenAISummaryProvider",
    "Outcome",
    "Success",
    "Summarizer",
    "SummaryProvider",
    "create_provider",
    "render_prompt",
    "truncate",
]
