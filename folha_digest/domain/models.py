from dataclasses import dataclass, field
from datetime import date
from typing import Tuple

DEFAULT_HOUR = 8
DEFAULT_NUMBER_OF_ARTICLES = 5


@dataclass(frozen=True)
class ArticleRecord:
    title: str
    link: str  # always absolute

    def as_line(self) -> str:
        return f"{self.title} - {self.link}"


@dataclass(frozen=True)
class CacheEntry:
    date: date
    articles: Tuple[ArticleRecord, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class UserConfig:
    """
    Send hour and article count.

    Serialized on the wire as ``{"hour": ..., "numberOfArticles": ...}``.
    """

    hour: int = DEFAULT_HOUR
    number_of_articles: int = DEFAULT_NUMBER_OF_ARTICLES

    def to_dict(self) -> dict:
        return {"hour": self.hour, "numberOfArticles": self.number_of_articles}
