"""Difficulty rating -> search depth and root randomization."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, Optional

# Rating thresholds (inclusive upper bound) and the depth they get
_DEPTH_STEPS = ((800, 1), (1000, 2), (1200, 3))
MAX_DEPTH = 4
NOISE_CUTOFF = 1000

LEVELS: Dict[str, int] = {
    "beginner": 800,
    "intermediate": 1000,
    "advanced": 1200,
    "expert": 1500,
}


@dataclass(frozen=True)
class Skill:
    rating: int
    depth: int
    noise_range: float


def depth_for(rating: int) -> int:
    for ceiling, depth in _DEPTH_STEPS:
        if rating <= ceiling:
            return depth
    return MAX_DEPTH


def noise_range_for(rating: int) -> float:
    return 1.0 if rating < NOISE_CUTOFF else 0.0


def skill_for(rating: int) -> Skill:
    return Skill(rating=rating, depth=depth_for(rating), noise_range=noise_range_for(rating))


def draw_noise(skill: Skill, rng: Optional[random.Random] = None) -> float:
    """Draw the root noise term for one move request.

    Weak ratings get a value uniform in [-1, 1]; everything else gets 0 so
    that move selection is deterministic.
    """
    if skill.noise_range == 0.0:
        return 0.0
    return (rng or random).uniform(-skill.noise_range, skill.noise_range)


def noise_for(rating: int, rng: Optional[random.Random] = None) -> float:
    return draw_noise(skill_for(rating), rng)
