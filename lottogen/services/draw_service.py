"""Business logic for drawing lottery numbers with exclusions."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Sequence

from lottogen.errors import GenerationExhausted, ValidationError
from lottogen.games import GameConfig


logger = logging.getLogger(__name__)


def is_unique_set(candidate: Iterable[int], prior_sets: Iterable[Sequence[int]], threshold: int = 0) -> bool:
    """Return False if the candidate overlaps any prior set too much.

    A candidate is too similar to an existing set E when it shares at least
    ``len(E) - threshold`` numbers with it.
    """

    numbers = set(candidate)
    for existing in prior_sets:
        common = sum(1 for n in existing if n in numbers)
        if common >= len(existing) - threshold:
            return False
    return True


class DrawService:
    """Draw random lottery numbers with exclusions and a similarity limit."""

    def __init__(self, max_attempts: int = 10_000, max_batch_size: int = 50, rng: random.Random | None = None) -> None:
        self._max_attempts = max(1, int(max_attempts))
        self._max_batch_size = max_batch_size
        self._rng = rng or random.Random()

    @staticmethod
    def _population(game: GameConfig, exclude: Iterable[int]) -> list[int]:
        exclude_set = {int(n) for n in exclude}
        return [n for n in game.numbers if n not in exclude_set]

    def generate(
        self,
        game: GameConfig,
        prior_sets: Sequence[Sequence[int]] = (),
        exclude: Iterable[int] = (),
        similarity_threshold: int = 0,
    ) -> list[int]:
        """Draw ``game.count`` unique numbers in ascending order.

        Raises GenerationExhausted when the exclusions leave fewer than
        ``game.count`` eligible numbers. Similarity to ``prior_sets`` is a
        soft limit: after ``max_attempts`` the latest candidate is returned.
        """

        population = self._population(game, exclude)
        if len(population) < game.count:
            raise GenerationExhausted(
                details={
                    "eligible": len(population),
                    "required": game.count,
                    "game": game.key,
                }
            )

        candidate: list[int] = []
        for _ in range(self._max_attempts):
            candidate = sorted(self._rng.sample(population, game.count))
            if is_unique_set(candidate, prior_sets, similarity_threshold):
                return candidate

        logger.warning(
            "Max attempts (%s) reached for %s, returning current set",
            self._max_attempts,
            game.key,
        )
        return candidate

    def generate_with_warm_up(
        self,
        game: GameConfig,
        exclude: Iterable[int] = (),
        similarity_threshold: int = 0,
        warm_up: int = 0,
        prior_sets: Sequence[Sequence[int]] = (),
    ) -> list[int]:
        """Discard ``warm_up`` draws, then return the next one.

        Warm-up draws skip the similarity check against ``prior_sets``.
        """

        exclude_list = list(exclude)
        for _ in range(max(0, int(warm_up))):
            self.generate(game, (), exclude_list, similarity_threshold)
        return self.generate(game, prior_sets, exclude_list, similarity_threshold)

    def generate_batch(
        self,
        game: GameConfig,
        count: int = 1,
        exclude: Iterable[int] = (),
        similarity_threshold: int = 0,
        warm_up: int = 0,
        warm_up_once: bool = False,
    ) -> list[list[int]]:
        """Draw ``count`` sets, each kept distinct from the earlier ones in the batch.

        With ``warm_up_once`` the warm-up only runs before the first draw.
        """

        if count < 1:
            raise ValidationError(
                message="Invalid count",
                details={"count": ["Must be >= 1"]},
            )
        if count > self._max_batch_size:
            raise ValidationError(
                message="Invalid count",
                details={"count": [f"Must be <= {self._max_batch_size}"]},
            )

        exclude_list = list(exclude)
        draws: list[list[int]] = []
        for i in range(int(count)):
            rounds = warm_up if (i == 0 or not warm_up_once) else 0
            draws.append(
                self.generate_with_warm_up(
                    game,
                    exclude=exclude_list,
                    similarity_threshold=similarity_threshold,
                    warm_up=rounds,
                    prior_sets=draws,
                )
            )
        return draws
