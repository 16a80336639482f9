"""LLM Module - Reasoning service interface and implementations."""
from core.llm.interfaces import ReasoningProvider, ReasoningResponse
from core.llm.openai_service import OpenAIReasoningService

__all__ = ['ReasoningProvider', 'ReasoningResponse', 'OpenAIReasoningService']
