"""Script-aware analyzers that turn field text into index terms.

Analyzers are composed from a tokenizer and a chain of token filters, the
same shape as Whoosh's analysis pipeline, but operate on plain strings.
Text containing Hangul syllables has no reliable word boundaries, so it is
indexed as overlapping character n-grams; everything else is split on
whitespace.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
import re
from typing import TYPE_CHECKING, Literal, Protocol
import unicodedata

from tabular_search.search.synonyms import SynonymExpander


if TYPE_CHECKING:
    from tabular_search.config import Settings


HANGUL_SYLLABLE_PATTERN = re.compile("[\uac00-\ud7af]")
_WHITESPACE_PATTERN = re.compile(r"\s+")


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def __call__(self, text: str) -> Iterator[str]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters."""

    def __call__(self, tokens: Iterable[str]) -> Iterator[str]:  # pragma: no cover - interface definition
        ...


def normalize_text(text: str) -> str:
    """Lowercase text and replace punctuation and symbols with single spaces."""

    if not text:
        return ""
    cleaned = "".join(" " if unicodedata.category(char)[0] in "PS" else char for char in text.lower())
    return _WHITESPACE_PATTERN.sub(" ", cleaned).strip()


def contains_hangul(text: str) -> bool:
    """Return True when the text contains at least one Hangul syllable."""

    return bool(HANGUL_SYLLABLE_PATTERN.search(text))


def detect_language(text: str) -> Literal["ko", "en"]:
    """Classify text by script: "ko" for Hangul, "en" otherwise."""

    return "ko" if contains_hangul(text) else "en"


def generate_ngrams(text: str, size: int) -> list[str]:
    """Return every contiguous substring of ``size`` characters."""

    if size <= 0 or len(text) < size:
        return []
    return [text[start : start + size] for start in range(len(text) - size + 1)]


class WhitespaceTokenizer:
    """Splits normalized text on runs of whitespace."""

    def __call__(self, text: str) -> Iterator[str]:
        yield from text.split()


class NGramTokenizer:
    """Emits character n-grams of the whitespace-free text, one size at a time."""

    def __init__(self, sizes: Sequence[int] = (2, 3)) -> None:
        self.sizes = tuple(sizes)

    def __call__(self, text: str) -> Iterator[str]:
        compact = _WHITESPACE_PATTERN.sub("", text)
        for size in self.sizes:
            yield from generate_ngrams(compact, size)


class MinLengthFilter:
    """Drops tokens shorter than ``min_length`` characters."""

    def __init__(self, min_length: int = 3) -> None:
        self.min_length = min_length

    def __call__(self, tokens: Iterable[str]) -> Iterator[str]:
        for token in tokens:
            if len(token) >= self.min_length:
                yield token


class ExpansionFilter:
    """Follows every token with its synonyms and a prefix stub.

    Expansions are deduplicated per source token, so repeated words keep
    their repeated counts while a single word never contributes the same
    term twice.
    """

    def __init__(self, expander: SynonymExpander | None = None, prefix_length: int = 3) -> None:
        self.expander = expander or SynonymExpander()
        self.prefix_length = prefix_length

    def __call__(self, tokens: Iterable[str]) -> Iterator[str]:
        for token in tokens:
            group = list(self.expander.expand(token))
            if len(token) > self.prefix_length:
                group.append(token[: self.prefix_length])
            yield from dict.fromkeys(group)


class AnalyzerPipeline:
    """Composable analyzer pipeline (tokenizer + filters)."""

    def __init__(self, tokenizer: Tokenizer, filters: Sequence[TokenFilter] | None = None) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])

    def __call__(self, text: str) -> list[str]:
        stream: Iterable[str] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        return list(stream)


class ScriptAwareAnalyzer:
    """Default analyzer: normalizes, picks a pipeline by script, optionally expands."""

    def __init__(
        self,
        *,
        expand: bool = True,
        synonyms: Mapping[str, Sequence[str]] | None = None,
        min_token_length: int = 3,
        prefix_length: int = 3,
        ngram_sizes: Sequence[int] = (2, 3),
    ) -> None:
        self.expand = expand
        word_filters: list[TokenFilter] = [MinLengthFilter(min_token_length)]
        ngram_filters: list[TokenFilter] = []
        if expand:
            expansion = ExpansionFilter(SynonymExpander(synonyms), prefix_length)
            word_filters.append(expansion)
            ngram_filters.append(expansion)
        self.word_pipeline = AnalyzerPipeline(WhitespaceTokenizer(), word_filters)
        self.ngram_pipeline = AnalyzerPipeline(NGramTokenizer(ngram_sizes), ngram_filters)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        expand: bool = True,
        synonyms: Mapping[str, Sequence[str]] | None = None,
    ) -> ScriptAwareAnalyzer:
        return cls(
            expand=expand,
            synonyms=synonyms,
            min_token_length=settings.min_token_length,
            prefix_length=settings.prefix_length,
            ngram_sizes=settings.get_ngram_sizes(),
        )

    def __call__(self, text: str) -> list[str]:
        normalized = normalize_text(text)
        if not normalized:
            return []
        if contains_hangul(normalized):
            return self.ngram_pipeline(normalized)
        return self.word_pipeline(normalized)


_DEFAULT_ANALYZERS: dict[bool, ScriptAwareAnalyzer] = {
    True: ScriptAwareAnalyzer(expand=True),
    False: ScriptAwareAnalyzer(expand=False),
}


def tokenize(text: str, expand: bool = True) -> list[str]:
    """Tokenize text with the default analyzer.

    Args:
        text: Raw field or query text.
        expand: Add synonyms and prefix stubs after each token.

    Returns:
        Index terms in emission order.
    """

    return _DEFAULT_ANALYZERS[expand](text)
