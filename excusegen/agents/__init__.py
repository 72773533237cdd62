"""
Text-generation agents used for remote excuse generation.
"""

from .agent import AgentResponse, BaseExcuseAgent, ExcusePrompt
from .mock_agent import MockExcuseAgent

__all__ = [
    'AgentResponse',
    'BaseExcuseAgent',
    'ExcusePrompt',
    'MockExcuseAgent'
]
