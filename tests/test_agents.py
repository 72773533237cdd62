"""
Generator agents and prompt builders.
"""

from unittest.mock import patch

import pytest

from excusegen.agents.mock_agent import MockExcuseAgent
from excusegen.agents.ollama_agent import OllamaExcuseAgent
from excusegen.agents.prompts import build_adjust_prompt, build_generate_prompt, build_ultimate_prompt
from excusegen.core.believability import parse_believability


class TestPrompts:

    def test_generate_prompt_uses_display_labels(self):
        prompt = build_generate_prompt("Late to work", "technical", "short", seed="123-abc")

        assert prompt.kind == "generate"
        assert "Technical Jargon" in prompt.user
        assert "Quick one-liner" in prompt.user
        assert "123-abc" in prompt.user
        assert "BELIEVABILITY" in prompt.system
        assert prompt.metadata["situation"] == "Late to work"

    @pytest.mark.parametrize("direction,phrase", [
        ("better", "more believable"),
        ("worse", "more absurd"),
    ])
    def test_adjust_prompt_direction(self, direction, phrase):
        prompt = build_adjust_prompt("My dog ate it.", "Missed deadline", "absurd", "short", direction)

        assert prompt.kind == "adjust"
        assert phrase in prompt.system
        assert "My dog ate it." in prompt.user
        assert prompt.metadata["direction"] == direction

    def test_ultimate_prompt(self):
        prompt = build_ultimate_prompt()
        assert prompt.kind == "ultimate"
        assert prompt.metadata["tone"] == "absurd"


class TestOllamaExcuseAgent:

    @patch('excusegen.agents.ollama_agent.ollama.chat')
    def test_complete_calls_ollama(self, mock_chat):
        mock_chat.return_value = {'message': {'content': 'The bus was late.\nBELIEVABILITY: 81'}}
        agent = OllamaExcuseAgent("test_agent", "llama3.2:latest", temperature=0.7)

        response = agent.complete(build_generate_prompt("Late to work", "believable", "short", "s"))

        assert response.content == 'The bus was late.\nBELIEVABILITY: 81'
        assert response.model_used == "llama3.2:latest"
        assert response.metadata['agent_type'] == 'ollama'

        kwargs = mock_chat.call_args.kwargs
        assert kwargs['model'] == "llama3.2:latest"
        assert kwargs['options']['temperature'] == 0.7
        assert [m['role'] for m in kwargs['messages']] == ['system', 'user']

    @patch('excusegen.agents.ollama_agent.ollama.chat')
    def test_missing_content_is_empty_string(self, mock_chat):
        mock_chat.return_value = {'message': {}}
        agent = OllamaExcuseAgent("test_agent", "llama3.2:latest")

        assert agent.complete(build_ultimate_prompt()).content == ""

    @patch('excusegen.agents.ollama_agent.ollama.chat')
    def test_errors_propagate(self, mock_chat):
        mock_chat.side_effect = ConnectionError("ollama is not running")
        agent = OllamaExcuseAgent("test_agent", "llama3.2:latest")

        with pytest.raises(ConnectionError):
            agent.complete(build_ultimate_prompt())

    @patch('excusegen.agents.ollama_agent.ollama.list')
    def test_status_reports_availability(self, mock_list):
        mock_list.side_effect = ConnectionError("down")
        status = OllamaExcuseAgent("test_agent", "llama3.2:latest").get_status()

        assert status['agent_type'] == 'OllamaExcuseAgent'
        assert status['ollama_available'] is False


class TestMockExcuseAgent:

    @pytest.mark.parametrize("tone", ["believable", "absurd", "dramatic", "mysterious", "technical", "detailed"])
    def test_output_parses_like_model_output(self, tone):
        agent = MockExcuseAgent("mock", seed=42)
        response = agent.complete(build_generate_prompt("Late to work", tone, "short"))

        text, rating = parse_believability(response.content, default=-1)

        assert text in agent.RESPONSE_PATTERNS[tone]
        assert 0 <= rating <= 100

    def test_adjust_better_is_believable(self):
        agent = MockExcuseAgent("mock", seed=1)
        response = agent.complete(build_adjust_prompt("x", "Late to work", "absurd", "short", "better"))

        text, rating = parse_believability(response.content)

        assert text in agent.RESPONSE_PATTERNS["believable"]
        assert 70 <= rating <= 100

    def test_ultimate(self):
        agent = MockExcuseAgent("mock", seed=1)
        text, _ = parse_believability(agent.complete(build_ultimate_prompt()).content)
        assert text in agent.RESPONSE_PATTERNS["ultimate"]

    def test_seeded_agents_repeat(self):
        prompt = build_generate_prompt("Late to work", "absurd", "short")
        assert MockExcuseAgent("a", seed=5).complete(prompt).content == \
            MockExcuseAgent("b", seed=5).complete(prompt).content
