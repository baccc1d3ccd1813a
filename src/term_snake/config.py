"""Game configuration dataclasses."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

from term_snake.timing import Difficulty

logger = logging.getLogger(__name__)


def _parse_difficulty(label: object) -> Difficulty:
    try:
        return Difficulty[str(label).upper()]
    except KeyError:
        allowed = ", ".join(d.label for d in Difficulty)
        raise ValueError(
            f"Unknown difficulty {label!r}; expected one of: {allowed}.",
        ) from None


@dataclass(frozen=True)
class DelayConfig:
    """Tick delays in microseconds (30, 20 and 12 fps by default)."""

    min_us: int = 33_333
    medium_us: int = 50_000
    max_us: int = 83_333

    def __post_init__(self) -> None:
        if not 0 < self.min_us <= self.medium_us <= self.max_us:
            raise ValueError(
                "Delays must satisfy 0 < min_us <= medium_us <= max_us.",
            )


@dataclass(frozen=True)
class GameConfig:
    """Settings fixed for the lifetime of a game session.

    Supports JSON serialization so a session can be replayed with the
    same seed and speeds.
    """

    seed: int | None = None
    difficulty: Difficulty = Difficulty.INCREMENTAL
    delays: DelayConfig = field(default_factory=DelayConfig)

    # Redraw period of the welcome screen animation.
    animation_interval_us: int = 33_333

    # Random draws tried before falling back to the free-cell list.
    max_spawn_attempts: int = 64

    # Wait for a direction key before the first tick.
    await_first_move: bool = True

    def __post_init__(self) -> None:
        if self.animation_interval_us <= 0:
            raise ValueError("animation_interval_us must be positive.")
        if self.max_spawn_attempts < 1:
            raise ValueError("max_spawn_attempts must be at least 1.")

    def to_dict(self) -> dict:
        """Serialize to a plain dict (the difficulty becomes its label)."""
        d = asdict(self)
        d["difficulty"] = self.difficulty.label
        return d

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def from_dict(cls, raw: dict) -> GameConfig:
        raw = dict(raw)
        raw["delays"] = DelayConfig(**raw.pop("delays", {}))
        if "difficulty" in raw:
            raw["difficulty"] = _parse_difficulty(raw["difficulty"])
        return cls(**raw)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))
