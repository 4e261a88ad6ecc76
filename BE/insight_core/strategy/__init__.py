"""
Narrative analysis engines.

- openai_summarizer() → GPT retrieval-style health check
- groq_summarizer()   → Groq five-aspect analysis

Both return text or None (never raise).
"""

from .narrative import ChatSummarizer, groq_prompt, groq_summarizer, gpt_prompt, openai_summarizer

__all__ = ["ChatSummarizer", "gpt_prompt", "groq_prompt", "openai_summarizer", "groq_summarizer"]
