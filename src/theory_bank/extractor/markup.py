"""
Module: extractor.markup

Purpose:
    Decode one answer-markup cell into its answers, correct index,
    license classes and optional image reference.

    The cell holds presentational HTML, not a data format, so decoding
    is a single forward fold over a flat token stream:

    - text run: next answer while fewer than answer_count were seen,
      afterwards a candidate "| «A» | «В» |" license line
    - <span id="correctAnswer...">: correct index = answers seen so far
    - <img src="..."/>: image reference, last one wins
    - anything else: ignored

    Text runs are taken as-is, whitespace-only runs included, except that
    character references are decoded ("&amp;" becomes "&", "&quot;"
    becomes '"') because the tokenizer runs with convert_charrefs=True.

Key Functions:
    - iter_tokens(): Tokenize markup into MarkupToken objects
    - decode_answers(): Fold the tokens into DecodedAnswers
    - parse_license_line(): Scan a metadata line for license tags

Dependencies:
    - html.parser (std): Tokenizer
    - core.models: AnswerSet, LicenseClass

Used By:
    - extractor.assembler: One call per worksheet row
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from html.parser import HTMLParser
from typing import FrozenSet, Iterator, List, Optional, Set, Tuple

from theory_bank.core.models import AnswerSet, LicenseClass

from .config import DEFAULT_CONFIG, ParserConfig

logger = logging.getLogger(__name__)


class TokenKind(str, Enum):
    """Lexical unit kinds produced by the tokenizer."""
    TEXT = "text"
    START = "start"
    EMPTY = "empty"  # Self-closing tag, e.g. <img ... />
    END = "end"


@dataclass(frozen=True)
class MarkupToken:
    """
    One markup token.

    Attributes:
        kind: Token kind
        name: Lowercased tag name (empty for text)
        attrs: (name, value) pairs in source order. Value is None for
            bare attributes like <span id>.
        text: Text content (TEXT tokens only)
    """
    kind: TokenKind
    name: str = ""
    attrs: Tuple[Tuple[str, Optional[str]], ...] = ()
    text: str = ""

    def attr(self, key: str) -> Optional[str]:
        """First value of attribute key, None if absent or bare."""
        for name, value in self.attrs:
            if name == key:
                return value
        return None


class _TokenCollector(HTMLParser):
    """Flatten HTMLParser callbacks into a MarkupToken list."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.tokens: List[MarkupToken] = []

    def handle_starttag(self, tag, attrs):
        self.tokens.append(MarkupToken(TokenKind.START, tag, tuple(attrs)))

    def handle_startendtag(self, tag, attrs):
        self.tokens.append(MarkupToken(TokenKind.EMPTY, tag, tuple(attrs)))

    def handle_endtag(self, tag):
        self.tokens.append(MarkupToken(TokenKind.END, tag))

    def handle_data(self, data):
        # A stray "<" is reported as its own data chunk; keep the run whole
        if self.tokens and self.tokens[-1].kind is TokenKind.TEXT:
            merged = self.tokens[-1].text + data
            self.tokens[-1] = MarkupToken(TokenKind.TEXT, text=merged)
        else:
            self.tokens.append(MarkupToken(TokenKind.TEXT, text=data))

    def unknown_decl(self, data):
        logger.debug(f"Skipping unknown markup declaration: {data[:40]!r}")


def iter_tokens(markup: str) -> Iterator[MarkupToken]:
    """
    Tokenize markup into a flat token stream.

    Never raises on malformed input: if the tokenizer gives up part way,
    the tokens produced so far are yielded and the failure is logged.

    Args:
        markup: Raw cell content

    Yields:
        MarkupToken objects in document order
    """
    collector = _TokenCollector()
    try:
        collector.feed(markup)
        collector.close()
    except (AssertionError, ValueError) as e:
        logger.warning(f"Markup tokenizer stopped early after {len(collector.tokens)} tokens: {e}")
    yield from collector.tokens


@dataclass(frozen=True)
class DecodedAnswers:
    """
    Everything recovered from one answer-markup cell.

    Attributes:
        answers: Answers in document order plus correct index
        license_classes: License classes found in the metadata line
        image_url: Source of the last <img/>, if any
    """
    answers: AnswerSet
    license_classes: FrozenSet[LicenseClass] = frozenset()
    image_url: Optional[str] = None


@dataclass
class _ScanState:
    """Accumulator threaded through one decode_answers() call."""
    answers: List[str] = field(default_factory=list)
    correct_index: int = 0
    marker_found: bool = False
    license_classes: Set[LicenseClass] = field(default_factory=set)
    image_url: Optional[str] = None


def is_license_line(text: str) -> bool:
    """Whether text looks like the pipe-delimited license metadata line."""
    return text.startswith("|") and text.rstrip().endswith("|")


def parse_license_line(text: str, config: ParserConfig = DEFAULT_CONFIG) -> FrozenSet[LicenseClass]:
    """
    Collect license classes whose tag literal appears in text.

    Order and repetition of tags in the line do not matter.

    Example:
        >>> sorted(parse_license_line("| «D» | «A» | «D» |"))
        [<LicenseClass.A: 'A'>, <LicenseClass.D: 'D'>]
    """
    return frozenset(cls for literal, cls in config.license_tags if literal in text)


def decode_answers(markup: str, config: ParserConfig = DEFAULT_CONFIG) -> DecodedAnswers:
    """
    Decode one answer-markup cell.

    Args:
        markup: Raw cell content
        config: Parser settings (answer count, marker prefix, tag table)

    Returns:
        DecodedAnswers. If no correct-answer marker was found, the index
        defaults to 0 and answers.marker_found is False.

    Example:
        >>> d = decode_answers('<span id="correctAnswer1">x</span><span>y</span>')
        >>> d.answers.answers, d.answers.correct_index
        (('x', 'y'), 0)
    """
    state = _ScanState()

    for token in iter_tokens(markup):
        if token.kind is TokenKind.TEXT:
            _on_text(state, token.text, config)
        elif token.kind is TokenKind.START and token.name == "span":
            _on_span(state, token, config)
        elif token.kind in (TokenKind.EMPTY, TokenKind.START) and token.name == "img":
            _on_image(state, token)

    if not state.marker_found:
        logger.debug(f"No correct-answer marker among {len(state.answers)} answers")

    return DecodedAnswers(
        answers=AnswerSet(
            answers=tuple(state.answers),
            correct_index=state.correct_index,
            marker_found=state.marker_found,
        ),
        license_classes=frozenset(state.license_classes),
        image_url=state.image_url,
    )


def _on_text(state: _ScanState, text: str, config: ParserConfig) -> None:
    if len(state.answers) < config.answer_count:
        state.answers.append(text)
    elif is_license_line(text):
        state.license_classes.update(parse_license_line(text, config))


def _on_span(state: _ScanState, token: MarkupToken, config: ParserConfig) -> None:
    for name, value in token.attrs:
        if name != "id":
            continue
        if value is None:
            logger.debug("Skipping <span> id attribute without a value")
            continue
        if value.startswith(config.marker_prefix):
            state.correct_index = len(state.answers)
            state.marker_found = True


def _on_image(state: _ScanState, token: MarkupToken) -> None:
    src = token.attr("src")
    if src is None:
        logger.debug("Skipping <img> without a src value")
        return
    state.image_url = src
