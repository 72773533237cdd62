"""
Prompt builders for the three generation paths.
"""

from typing import Optional

from .agent import ExcusePrompt
from ..core.normalize import display_length, display_tone

RATING_INSTRUCTION = 'End with a final line in the format "BELIEVABILITY: <0-100>".'

DIRECTIONS = {
    "better": "more believable and realistic",
    "worse": "more absurd and over-the-top",
}


def build_generate_prompt(situation: str, tone: str, length: str, seed: Optional[str] = None) -> ExcusePrompt:
    system = (
        "You write short, original excuses. Vary the characters, places and "
        "circumstances every time. " + RATING_INSTRUCTION
    )
    user = (
        f"Situation: {situation}\n"
        f"Tone: {display_tone(tone)}\n"
        f"Length: {display_length(length)}\n"
        f"Seed: {seed or ''}\n\n"
        f"Write one excuse for this situation. {RATING_INSTRUCTION}"
    )
    return ExcusePrompt(system=system, user=user, kind="generate",
                        metadata={"situation": situation, "tone": tone, "length": length, "seed": seed})


def build_adjust_prompt(original_excuse: str, situation: str, tone: str, length: str,
                        direction: str, seed: Optional[str] = None) -> ExcusePrompt:
    goal = DIRECTIONS[direction]
    system = (
        f"You rewrite excuses to make them {goal}. Change the wording and details "
        "instead of copying the original. " + RATING_INSTRUCTION
    )
    user = (
        f'Original excuse: "{original_excuse}"\n\n'
        f"Situation: {situation}\n"
        f"Tone: {display_tone(tone)}\n"
        f"Length: {display_length(length)}\n"
        f"Direction: make it {goal}\n"
        f"Seed: {seed or ''}\n\n"
        f"Rewrite the excuse, keeping the tone and length. {RATING_INSTRUCTION}"
    )
    return ExcusePrompt(system=system, user=user, kind="adjust",
                        metadata={"situation": situation, "tone": tone, "length": length,
                                  "direction": direction, "seed": seed})


def build_ultimate_prompt() -> ExcusePrompt:
    system = "You write the most absurd excuse imaginable, one nobody could believe. " + RATING_INSTRUCTION
    user = f"Write the ultimate, most ridiculous excuse ever. {RATING_INSTRUCTION}"
    return ExcusePrompt(system=system, user=user, kind="ultimate", metadata={"tone": "absurd", "length": "long"})
