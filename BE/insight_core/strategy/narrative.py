# BE/insight_core/strategy/narrative.py
"""
Narrative analysis via chat-completion LLMs.

Two summarizers share one implementation:

- OpenAI  (OPENAI_API_KEY, default model gpt-3.5-turbo): retrieval-style
  financial health check with a 0-100 grade and a Buy/Hold/Sell call.
- Groq    (GROQ_API_KEY, OpenAI-compatible endpoint): five-aspect analysis
  (performance, market position, risk, outlook, recommendation).

Behavior
--------
`summarize(symbol, context=None)` returns the model's text, or None when the
key is missing or the API call fails for any reason; the terminal prints
"Failed to perform ... analysis" in that case. `context` is an optional
plain-text block (e.g. the basic statistics) appended to the prompt.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Dict, List, Optional

from ..config import LLMSettings, load_settings

logger = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────
# Prompts
# ────────────────────────────────────────────────────────────

def gpt_prompt(symbol: str) -> str:
    return (
        f"Analyze the financial health of the stock {symbol} by implementing a retrieval-based "
        "approach to gather and assess data. Follow these steps:\n"
        "1. **Data Retrieval:**\n"
        "- Use real-time APIs or web scraping to fetch key financial data, including income statement, "
        "balance sheet, cash flow statement, and performance metrics (e.g., P/E ratio, revenue growth, "
        "debt-to-equity ratio).\n"
        "- Ensure that the retrieval process accounts for the most recent data, filtering for accuracy "
        "and relevance.\n"
        "2. **Data Summarization:**\n"
        "- Summarize the retrieved data as bullet points, emphasizing key insights such as revenue trends, "
        "profitability, liquidity, valuation ratios, and any growth metrics.\n"
        "3. **Grading System:**\n"
        "- Develop a stock grading system that evaluates the financial health and investment potential "
        "on a scale of 0-100.\n"
        "- Base the grading on weighted criteria such as profitability, growth rates, and financial "
        "stability relative to industry benchmarks.\n"
        "4. **Investment Recommendation:**\n"
        "- Provide a clear investment recommendation (Buy, Hold, or Sell) with a detailed justification "
        "based on the stock score and other qualitative insights.\n"
        "- Include a risk assessment and any potential growth opportunities.\n"
        "5. **New Retrieval Features:**\n"
        "- Suggest methods to improve the retrieval process, such as using machine learning to analyze "
        "historical data patterns, integrating multiple data sources to cross-verify metrics, and adding "
        "sentiment analysis from news and social media.\n"
        "Ensure clarity, accuracy, and relevance throughout the analysis. Structure the output with "
        "distinct sections for data retrieval, summary, grading, and recommendations. Keep it more "
        "concise and include as many numericals and specifics of the sources over where the "
        "information is from."
    )


def groq_prompt(symbol: str) -> str:
    return (
        f"Analyze the financial health and investment potential of {symbol} stock. "
        "Consider the following aspects:\n"
        "1. Financial Performance: Current market performance, revenue growth, "
        "profitability metrics, and key financial ratios\n"
        "2. Market Position: Competitive advantages, market share, and industry trends\n"
        "3. Risk Assessment: Identify key risks, volatility analysis, and potential challenges\n"
        "4. Future Outlook: Growth prospects, upcoming catalysts, and potential opportunities\n"
        "5. Investment Recommendation: Provide a clear buy/hold/sell recommendation "
        "with supporting rationale\n"
        "Please provide a concise, data-driven analysis with specific metrics "
        "and clear justification for your recommendations."
    )


# ────────────────────────────────────────────────────────────
# Summarizer
# ────────────────────────────────────────────────────────────

class ChatSummarizer:
    """
    One chat-completion call per summary. `client_factory(api_key, base_url)`
    builds the SDK client; tests pass a fake.
    """

    def __init__(
        self,
        name: str,
        *,
        api_key_env: str,
        model: str,
        prompt_builder: Callable[[str], str],
        base_url: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        client_factory: Optional[Callable[..., Any]] = None,
    ):
        self.name = name
        self.api_key_env = api_key_env
        self.model = model
        self.prompt_builder = prompt_builder
        self.base_url = base_url
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.client_factory = client_factory or _openai_client

    @property
    def available(self) -> bool:
        return bool((os.getenv(self.api_key_env) or "").strip())

    def _messages(self, symbol: str, context: Optional[str]) -> List[Dict[str, str]]:
        messages = [{"role": "user", "content": self.prompt_builder(symbol)}]
        if context:
            messages.append({"role": "user", "content": f"Recent price statistics:\n{context}"})
        return messages

    def summarize(self, symbol: str, context: Optional[str] = None) -> Optional[str]:
        key = (os.getenv(self.api_key_env) or "").strip()
        if not key:
            logger.warning("%s analysis skipped: %s is not set", self.name, self.api_key_env)
            return None

        kwargs: Dict[str, Any] = {"model": self.model, "messages": self._messages(symbol, context)}
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature
        if self.max_tokens is not None:
            kwargs["max_tokens"] = self.max_tokens

        try:
            client = self.client_factory(api_key=key, base_url=self.base_url)
            rsp = client.chat.completions.create(**kwargs)
            txt = rsp.choices[0].message.content
        except Exception as e:
            logger.warning("%s analysis failed for %s: %s", self.name, symbol, e)
            return None
        return txt.strip() if txt else None


def _openai_client(api_key: str, base_url: Optional[str] = None):
    from openai import OpenAI
    if base_url:
        return OpenAI(api_key=api_key, base_url=base_url)
    return OpenAI(api_key=api_key)


def openai_summarizer(settings: Optional[LLMSettings] = None, **kwargs: Any) -> ChatSummarizer:
    llm = settings or load_settings().llm
    return ChatSummarizer(
        "GPT",
        api_key_env="OPENAI_API_KEY",
        model=os.getenv("OPENAI_MODEL", llm.openai_model),
        prompt_builder=gpt_prompt,
        **kwargs,
    )


def groq_summarizer(settings: Optional[LLMSettings] = None, **kwargs: Any) -> ChatSummarizer:
    llm = settings or load_settings().llm
    return ChatSummarizer(
        "Groq AI",
        api_key_env="GROQ_API_KEY",
        model=llm.groq_model,
        prompt_builder=groq_prompt,
        base_url=llm.groq_base_url,
        temperature=llm.temperature,
        max_tokens=llm.max_tokens,
        **kwargs,
    )
