from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Post:
    id: int
    title: str


@dataclass(frozen=True)
class PostsSample:
    count: int
    sample: list[Post] = field(default_factory=list)
