"""
Mock excuse generator.
Produces canned excuses without external dependencies, for development and tests.
"""

import random
from typing import List

from .agent import AgentResponse, BaseExcuseAgent, ExcusePrompt
from ..core.believability import estimate_believability
from ..core.normalize import normalize_tone


class MockExcuseAgent(BaseExcuseAgent):
    """
    Offline generator whose output has the same shape as a real model's:
    excuse text followed by a BELIEVABILITY line.
    """

    RESPONSE_PATTERNS = {
        "believable": [
            "My train was held outside the station for forty minutes with no explanation.",
            "I had a dentist appointment I completely forgot to put in the shared calendar.",
            "My phone died overnight and the alarm never went off."
        ],
        "absurd": [
            "A flock of geese staged a sit-in on my driveway and refused to negotiate.",
            "My cat changed my password and will not tell me the new one.",
            "I was briefly mistaken for a celebrity and had to sign autographs until noon."
        ],
        "dramatic": [
            "In a single morning my car, my umbrella and my faith in public transport all gave out.",
            "I stood at the door for ten minutes, keys in hand, and the lock simply would not turn."
        ],
        "mysterious": [
            "Something came up that I'm not at liberty to discuss. You'd understand if you knew.",
            "I received a phone call at 6am and had to go somewhere. That's all I can say."
        ],
        "technical": [
            "A kernel update bricked my laptop's Wi-Fi driver and the rollback hung on reboot.",
            "Our router entered a DHCP lease loop and nothing on the network could resolve DNS."
        ],
        "detailed": [
            "At 7:42 the bus skipped my stop, at 7:51 the next one broke down on Elm Street, "
            "and by 8:15 I was walking in the rain with one working shoe."
        ],
        "ultimate": [
            "A time-traveling version of me arrived to warn that leaving the house would cause "
            "a paradox, so I stayed in to save the universe. You're welcome."
        ],
    }

    def __init__(self, agent_id: str, model_name: str = "mock-model", seed: int = None):
        super().__init__(agent_id, model_name)
        self._rng = random.Random(seed)

    def complete(self, prompt: ExcusePrompt) -> AgentResponse:
        tone = normalize_tone(prompt.metadata.get("tone") or "")
        if prompt.kind == "ultimate":
            pattern = "ultimate"
        elif prompt.kind == "adjust":
            tone = "believable" if prompt.metadata.get("direction") == "better" else "absurd"
            pattern = tone
        else:
            pattern = tone if tone in self.RESPONSE_PATTERNS else "believable"

        text = self._rng.choice(self._responses(pattern))
        rating = estimate_believability(tone, self._rng)

        return AgentResponse(
            content=f"{text}\n\nBELIEVABILITY: {rating}",
            model_used=self.model_name,
            processing_time_ms=self._rng.randint(5, 50),
            metadata={
                'agent_type': 'mock',
                'agent_id': self.agent_id,
                'prompt_kind': prompt.kind,
                'response_type': pattern
            }
        )

    def _responses(self, pattern: str) -> List[str]:
        return self.RESPONSE_PATTERNS.get(pattern) or self.RESPONSE_PATTERNS["believable"]
