"""Configuration for the query processor.

Keyword answers and display precision. Defaults are built in; a JSON answers
file can replace them, located through QUERYCALC_ANSWERS:

    {
      "answers": [{"keyword": "your name", "answer": "Rohan"}],
      "precision": 10
    }
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from querycalc.errors import ConfigError
from querycalc.formatting import DEFAULT_PRECISION

ANSWERS_ENV = "QUERYCALC_ANSWERS"
PRECISION_ENV = "QUERYCALC_PRECISION"

_SHAKESPEARE = (
    "William Shakespeare (26 April 1564 - 23 April 1616) was an "
    "English poet, playwright, and actor, widely regarded as the greatest "
    "writer in the English language and the world's pre-eminent dramatist."
)


@dataclass(frozen=True)
class KeywordAnswer:
    """A canned answer returned when ``keyword`` appears in the query."""

    keyword: str
    answer: str

    def matches(self, lowered_query: str) -> bool:
        return self.keyword.lower() in lowered_query

    def to_dict(self) -> dict:
        return {"keyword": self.keyword, "answer": self.answer}


# Order matters: "your name" has to win over the bare "name" rule.
DEFAULT_ANSWERS = [
    KeywordAnswer("shakespeare", _SHAKESPEARE),
    KeywordAnswer("gameid", "5f34a61a"),
    KeywordAnswer("playerid", "97b91e1a"),
    KeywordAnswer("your name", "Rohan"),
    KeywordAnswer("name", "andremildeluxe"),
    KeywordAnswer("my andrewid", "andremil"),
]


@dataclass
class QueryConfig:
    """Everything process_query needs besides the query itself."""

    answers: list[KeywordAnswer] = field(default_factory=lambda: list(DEFAULT_ANSWERS))
    precision: int = DEFAULT_PRECISION

    @classmethod
    def default(cls) -> QueryConfig:
        return cls()

    @classmethod
    def from_dict(cls, d: dict) -> QueryConfig:
        """Build from a parsed answers file; missing keys keep their defaults."""
        if not isinstance(d, dict):
            raise ConfigError("Answers file must contain a JSON object")

        answers = list(DEFAULT_ANSWERS)
        if "answers" in d:
            raw = d["answers"]
            if not isinstance(raw, list):
                raise ConfigError("'answers' must be a list")
            answers = []
            for i, item in enumerate(raw):
                if not isinstance(item, dict) or "keyword" not in item or "answer" not in item:
                    raise ConfigError(f"answers[{i}] needs 'keyword' and 'answer'")
                answers.append(KeywordAnswer(keyword=str(item["keyword"]), answer=str(item["answer"])))

        precision = d.get("precision", DEFAULT_PRECISION)
        if not isinstance(precision, int) or isinstance(precision, bool) or precision < 0:
            raise ConfigError(f"'precision' must be a non-negative integer, got {precision!r}")

        return cls(answers=answers, precision=precision)

    @classmethod
    def load(cls, path: Path) -> QueryConfig:
        """Load an answers file."""
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            raise ConfigError(f"Cannot read answers file {path}: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, path: Optional[Path] = None) -> QueryConfig:
        """Resolve config from an explicit path, then QUERYCALC_ANSWERS, then defaults.

        QUERYCALC_PRECISION overrides whatever precision the file set.
        """
        env_path = os.environ.get(ANSWERS_ENV, "")
        if path is None and env_path:
            path = Path(env_path)
        config = cls.load(path) if path else cls.default()

        raw_precision = os.environ.get(PRECISION_ENV, "")
        if raw_precision:
            try:
                config.precision = int(raw_precision)
            except ValueError as e:
                raise ConfigError(f"{PRECISION_ENV} must be an integer, got {raw_precision!r}") from e
            if config.precision < 0:
                raise ConfigError(f"{PRECISION_ENV} must be non-negative, got {raw_precision!r}")
        return config
