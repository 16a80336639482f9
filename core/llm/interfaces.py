"""
Reasoning Provider Interface - Abstract base for external reasoning services.

This module defines the boundary the match adjustment step talks to
(OpenAI-compatible endpoints, Ollama, hosted gateways, etc.).
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ReasoningResponse:
    """Raw completion text plus the accounting data needed for usage logs."""
    content: str
    tokens_used: Optional[int] = None
    model: Optional[str] = None


class ReasoningProvider(ABC):
    """
    Abstract Interface for reasoning service providers.

    Implementations raise core.errors.APIError for transport, status and
    response-shape failures and core.errors.QuotaExceededError when the
    provider reports its own quota or rate limit as exhausted.
    """

    @abstractmethod
    async def complete_json(
        self,
        system_prompt: str,
        user_message: str,
        schema_spec: Dict[str, Any]
    ) -> ReasoningResponse:
        """
        Request a JSON document adhering to a schema.

        Args:
            system_prompt: Instructions for the model
            user_message: The request payload rendered as text
            schema_spec: Either a wrapped spec {'name', 'strict', 'schema'} or raw JSON schema
        """
        pass
