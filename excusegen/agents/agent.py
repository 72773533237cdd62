"""
Base interface for text-generation agents.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict


@dataclass
class ExcusePrompt:
    """System and user prompt pair sent to a generator."""
    system: str
    user: str
    kind: str = "generate"  # generate|adjust|ultimate
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class AgentResponse:
    """Raw text returned by a generator."""
    content: str
    model_used: str
    processing_time_ms: int = 0
    metadata: Dict[str, Any] = None

    def __post_init__(self):
        if self.metadata is None:
            self.metadata = {"timestamp": datetime.now().isoformat()}


class BaseExcuseAgent(ABC):
    """
    Abstract base class for excuse generators.
    Implementations must let collaborator failures propagate.
    """

    def __init__(self, agent_id: str, model_name: str):
        self.agent_id = agent_id
        self.model_name = model_name

    @abstractmethod
    def complete(self, prompt: ExcusePrompt) -> AgentResponse:
        """
        Run one generation.

        Args:
            prompt: System/user prompt pair

        Returns:
            AgentResponse: Raw text, expected to end with a BELIEVABILITY line
        """
        pass

    def get_status(self) -> Dict[str, Any]:
        """Get current status of this agent."""
        return {
            "agent_id": self.agent_id,
            "model_name": self.model_name,
            "agent_type": self.__class__.__name__,
            "status": "ready"
        }
