"""Supported lottery games and their prize tables."""

from __future__ import annotations

from dataclasses import dataclass

from lottogen.errors import NotFoundError


@dataclass(frozen=True)
class PrizeTier:
    matches: int
    label: str


@dataclass(frozen=True)
class GameConfig:
    """One lottery variant: draw `count` unique numbers from [min, max]."""

    key: str
    label: str
    min: int
    max: int
    count: int
    file_name: str
    prize_tiers: tuple[PrizeTier, ...] = ()

    @property
    def numbers(self) -> range:
        return range(self.min, self.max + 1)

    def contains(self, number: int) -> bool:
        return self.min <= int(number) <= self.max


SIX_NUMBER_PRIZE_TIERS: tuple[PrizeTier, ...] = (
    PrizeTier(6, "JACKPOT"),
    PrizeTier(5, "Second Prize"),
    PrizeTier(4, "Third Prize"),
    PrizeTier(3, "Fourth Prize"),
    PrizeTier(2, "Free Play"),
)

# Main-number tiers only; bonus-number tiers are not modelled.
SEVEN_NUMBER_PRIZE_TIERS: tuple[PrizeTier, ...] = (
    PrizeTier(7, "JACKPOT"),
    PrizeTier(6, "Second Prize"),
    PrizeTier(5, "Third Prize"),
    PrizeTier(4, "Fourth Prize"),
    PrizeTier(3, "Free Play"),
)


GAMES: dict[str, GameConfig] = {
    "sixFourtyNine": GameConfig(
        key="sixFourtyNine",
        label="6/49",
        min=1,
        max=49,
        count=6,
        file_name="649.csv",
        prize_tiers=SIX_NUMBER_PRIZE_TIERS,
    ),
    "lottoMax": GameConfig(
        key="lottoMax",
        label="Lotto Max",
        min=1,
        max=50,
        count=7,
        file_name="LOTTOMAX.csv",
        prize_tiers=SEVEN_NUMBER_PRIZE_TIERS,
    ),
    "bcSixFourtyNine": GameConfig(
        key="bcSixFourtyNine",
        label="BC 49",
        min=1,
        max=49,
        count=6,
        file_name="BC49.csv",
        prize_tiers=SIX_NUMBER_PRIZE_TIERS,
    ),
}

DEFAULT_GAME = "sixFourtyNine"


def get_game(key: str) -> GameConfig:
    try:
        return GAMES[key]
    except KeyError as exc:
        raise NotFoundError(
            message=f"Unknown game: {key}",
            details={"game": [f"Must be one of {'|'.join(GAMES)}"]},
        ) from exc


def list_games() -> list[GameConfig]:
    return list(GAMES.values())


def prize_for(match_count: int, tiers: tuple[PrizeTier, ...] = SIX_NUMBER_PRIZE_TIERS) -> str | None:
    """Exact match-count lookup; counts without a tier win nothing."""

    for tier in tiers:
        if tier.matches == int(match_count):
            return tier.label
    return None
