"""
Remote excuse generation: prompt the agent, split off the believability
rating, persist the result.

Generator and storage failures are logged with the request context and
re-raised unchanged. A result is only returned after it has been saved.
"""

import time
import uuid
from typing import Optional

from . import dao
from .believability import DEFAULT_GENERATED_RATING, DEFAULT_ULTIMATE_RATING, parse_believability
from .errors import ExcuseValidationError, GenerationError
from .normalize import normalize_length, normalize_tone
from .schema import GenerationResult
from ..agents.agent import BaseExcuseAgent, ExcusePrompt
from ..agents.prompts import DIRECTIONS, build_adjust_prompt, build_generate_prompt, build_ultimate_prompt
from ..util.logging import logger

ULTIMATE_SITUATION = "ULTIMATE_EASTER_EGG"
ULTIMATE_TONE = "absurd"
ULTIMATE_LENGTH = "long"


def make_seed() -> str:
    """Randomization seed passed to the model when the caller supplies none."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:7]}"


def _require(value: str, name: str) -> str:
    if not value or not value.strip():
        raise ExcuseValidationError(f"{name} is required")
    return value.strip()


def _run(agent: BaseExcuseAgent, prompt: ExcusePrompt, default_rating: int, context: dict):
    try:
        response = agent.complete(prompt)
    except Exception as e:
        logger.log_generation(prompt.kind, "failed", {**context, "error": str(e)[:200]})
        raise

    text, rating = parse_believability(response.content, default=default_rating)
    if not text:
        logger.log_generation(prompt.kind, "failed", {**context, "error": "empty response"})
        raise GenerationError(f"Generator returned no excuse text for {prompt.kind} request")

    return text, rating


def generate_excuse(agent: BaseExcuseAgent, situation: str, tone: str, length: str,
                    seed: Optional[str] = None) -> GenerationResult:
    """Generate, persist and count a new excuse for a situation."""
    situation = _require(situation, "situation")
    tone = normalize_tone(_require(tone, "tone"))
    length = normalize_length(_require(length, "length"))
    seed = seed or make_seed()
    context = {"situation": situation, "tone": tone, "length": length, "seed": seed}

    logger.log_generation("generate", "started", context)
    text, rating = _run(agent, build_generate_prompt(situation, tone, length, seed),
                        DEFAULT_GENERATED_RATING, context)

    try:
        saved = dao.save_excuse(situation, tone, length, text, rating)
        usage_count = dao.count_excuses(situation)
    except Exception as e:
        logger.log_generation("generate", "failed", {**context, "error": str(e)[:200]})
        raise

    logger.log_generation("generate", "success",
                          {"excuse_id": saved.id, "situation": situation, "believability_rating": rating})
    return GenerationResult(excuse=saved, seed=seed, usage_count=usage_count)


def adjust_excuse(agent: BaseExcuseAgent, original_excuse: str, situation: str, tone: str, length: str,
                  direction: str, seed: Optional[str] = None) -> GenerationResult:
    """Rewrite an excuse to be more ('better') or less ('worse') believable, and persist it."""
    original_excuse = _require(original_excuse, "originalExcuse")
    situation = _require(situation, "situation")
    tone = normalize_tone(_require(tone, "tone"))
    length = normalize_length(_require(length, "length"))
    if direction not in DIRECTIONS:
        raise ExcuseValidationError(f"direction must be one of: {sorted(DIRECTIONS)}")
    seed = seed or make_seed()
    context = {"situation": situation, "direction": direction, "original_excuse": original_excuse, "seed": seed}

    logger.log_generation("adjust", "started", context)
    text, rating = _run(agent, build_adjust_prompt(original_excuse, situation, tone, length, direction, seed),
                        DEFAULT_GENERATED_RATING, context)

    try:
        saved = dao.save_excuse(situation, tone, length, text, rating)
    except Exception as e:
        logger.log_generation("adjust", "failed", {**context, "error": str(e)[:200]})
        raise

    logger.log_generation("adjust", "success",
                          {"excuse_id": saved.id, "direction": direction, "believability_rating": rating})
    return GenerationResult(excuse=saved, seed=seed)


def generate_ultimate_excuse(agent: BaseExcuseAgent) -> GenerationResult:
    """The Easter-egg excuse, stored under its own situation tag."""
    context = {"situation": ULTIMATE_SITUATION}

    logger.log_generation("ultimate", "started", context)
    text, rating = _run(agent, build_ultimate_prompt(), DEFAULT_ULTIMATE_RATING, context)

    try:
        saved = dao.save_excuse(ULTIMATE_SITUATION, ULTIMATE_TONE, ULTIMATE_LENGTH, text, rating)
    except Exception as e:
        logger.log_generation("ultimate", "failed", {**context, "error": str(e)[:200]})
        raise

    logger.log_generation("ultimate", "success", {"excuse_id": saved.id})
    return GenerationResult(excuse=saved)
