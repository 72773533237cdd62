"""
Ollama-backed excuse generator.
"""

from datetime import datetime
from typing import Any, Dict, List

import ollama

from .agent import AgentResponse, BaseExcuseAgent, ExcusePrompt


class OllamaExcuseAgent(BaseExcuseAgent):
    """
    Generator that calls a local Ollama model.
    ollama.ResponseError and connection errors are not caught here.
    """

    def __init__(self, agent_id: str, model_name: str, temperature: float = 0.9):
        super().__init__(agent_id, model_name)
        self.temperature = temperature

    def complete(self, prompt: ExcusePrompt) -> AgentResponse:
        messages = self._build_ollama_messages(prompt)

        start_time = datetime.now()

        response = ollama.chat(
            model=self.model_name,
            messages=messages,
            options={
                'temperature': self.temperature,
                'top_p': 0.95
            }
        )

        processing_time = int((datetime.now() - start_time).total_seconds() * 1000)

        content = response.get('message', {}).get('content', '') or ''

        return AgentResponse(
            content=content,
            model_used=self.model_name,
            processing_time_ms=processing_time,
            metadata={
                'agent_type': 'ollama',
                'agent_id': self.agent_id,
                'prompt_kind': prompt.kind,
                'timestamp': datetime.now().isoformat()
            }
        )

    def _build_ollama_messages(self, prompt: ExcusePrompt) -> List[Dict[str, str]]:
        messages = []
        if prompt.system:
            messages.append({'role': 'system', 'content': prompt.system})
        messages.append({'role': 'user', 'content': prompt.user})
        return messages

    def get_status(self) -> Dict[str, Any]:
        """Get current status with Ollama-specific information."""
        status = super().get_status()
        status.update({
            'temperature': self.temperature,
            'ollama_available': check_ollama_health()
        })
        return status


def check_ollama_health() -> bool:
    """Check whether the Ollama service answers."""
    try:
        ollama.list()
        return True
    except Exception:
        return False
