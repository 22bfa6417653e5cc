"""
Field resolution machinery shared by the five field resolvers.

A resolver is a declared, ordered list of strategy functions. Strategies
are evaluated lazily left to right and the first one returning a truthy
value (non-empty string, non-empty set, absolutized URL) wins.
"""
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, List, Optional, Sequence, TypeVar

from pagespy.adapters.document import Document
from pagespy.adapters.fetcher import Fetcher
from pagespy.utils.urls import absolutize

T = TypeVar("T")


@dataclass
class ResolutionContext:
    """Everything a strategy may consult for one page."""
    url: str
    document: Document
    fetcher: Fetcher


Strategy = Callable[[ResolutionContext], Optional[T]]


@dataclass(frozen=True)
class Resolution(Generic[T]):
    """Outcome of a resolver: the value and the strategy that produced it."""
    value: Optional[T] = None
    strategy: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.strategy is not None


class FieldResolver(Generic[T]):
    """An ordered fallback chain for one logical field."""

    def __init__(self, field: str, strategies: Sequence[Strategy]):
        self.field = field
        self.strategies = list(strategies)

    @property
    def strategy_names(self) -> List[str]:
        return [strategy.__name__ for strategy in self.strategies]

    def resolve(self, ctx: ResolutionContext) -> Resolution[T]:
        for strategy in self.strategies:
            value = strategy(ctx)
            if value:
                return Resolution(value=value, strategy=strategy.__name__)
        return Resolution()


# =========================================================================
# HELPERS FOR WRITING STRATEGIES
# =========================================================================

def first(values: Iterable[T]) -> Optional[T]:
    """First element of ``values``, or None."""
    for value in values:
        return value
    return None


def first_text_of(document: Document, selectors: Iterable[str]) -> Optional[str]:
    """Text of the first match of the first selector that yields any."""
    for selector in selectors:
        text = document.first_text(selector)
        if text:
            return text
    return None


def content_or_text(document: Document, selectors: Iterable[str]) -> Optional[str]:
    """
    For each selector in turn, its ``content`` attribute and then its text.

    This is how Microdata and RDFa expose a value: ``<meta itemprop=...
    content=...>`` or a visible element carrying the property.
    """
    for selector in selectors:
        value = document.first_attr(selector, "content") or document.first_text(selector)
        if value:
            return value
    return None


def first_absolute(base_url: str, candidates: Iterable[Optional[str]]) -> Optional[str]:
    """First candidate that absolutizes against ``base_url``."""
    for candidate in candidates:
        url = absolutize(base_url, candidate)
        if url:
            return url
    return None
