#!/usr/bin/env python3
# orbit/interface/option_parsers.py
from __future__ import annotations

"""
Composite option parsing.

A command line (minus plugin and command name) is parsed by an ordered
chain of strategies. Each pass over the remaining tokens asks the
strategies, in priority order, to claim a prefix; the first claim wins and
the cursor advances. The last strategy claims any single token and records
it as an error, so every token is accounted for exactly once.

Priority order:
  1) NamedBooleanOptionParser        --force
  2) NamedValueOptionParser          --name value
  3) NamedValueVarargsOptionParser   --files a b c
  4) OrderedValueOptionParser        value
  5) OrderedValueVarargsOptionParser value value ...
  6) ParseErrorParser                anything else
"""

import logging
from dataclasses import dataclass, field
from typing import Mapping, Sequence, Union

from orbit.commands import CommandMetadata, OptionKind, OptionMetadata
from orbit.interface.parser import is_flag

logger = logging.getLogger(__name__)

# Raw parsed value: a single string or, for vararg options, an ordered sequence
RawValue = Union[str, tuple[str, ...]]


@dataclass(frozen=True, slots=True)
class TokenCursor:
    """Read position over an immutable token sequence."""

    tokens: tuple[str, ...]
    position: int = 0

    @classmethod
    def of(cls, tokens: Sequence[str]) -> "TokenCursor":
        return cls(tuple(tokens))

    @property
    def exhausted(self) -> bool:
        return self.position >= len(self.tokens)

    @property
    def remaining(self) -> tuple[str, ...]:
        return self.tokens[self.position:]

    def peek(self, offset: int = 0) -> str | None:
        index = self.position + offset
        return self.tokens[index] if index < len(self.tokens) else None

    def advance(self, count: int) -> "TokenCursor":
        return TokenCursor(self.tokens, min(len(self.tokens), self.position + count))

    def take_until_flag(self, offset: int = 0) -> tuple[str, ...]:
        """Tokens from `offset` up to (not including) the next flag-shaped token."""
        taken: list[str] = []
        for token in self.tokens[self.position + offset:]:
            if is_flag(token):
                break
            taken.append(token)
        return tuple(taken)


@dataclass(frozen=True, slots=True)
class Claim:
    """Tokens claimed by one strategy in one pass."""

    count: int
    values: Mapping[OptionMetadata, RawValue] = field(default_factory=dict)
    errors: tuple[str, ...] = ()


@dataclass(slots=True)
class ParseResult:
    values: dict[OptionMetadata, RawValue] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class OptionParser:
    """Base strategy: claim a prefix of the cursor or return None."""

    def try_claim(
        self,
        cursor: TokenCursor,
        command_obj: CommandMetadata,
        parsed: Mapping[OptionMetadata, RawValue],
    ) -> Claim | None:  # pragma: no cover - interface
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class _NamedOptionParser(OptionParser):
    kind: OptionKind

    def _match(self, cursor: TokenCursor, command_obj: CommandMetadata) -> OptionMetadata | None:
        token = cursor.peek()
        if token is None or not is_flag(token):
            return None
        opt = command_obj.find_flag(token)
        return opt if opt is not None and opt.kind is self.kind else None


class NamedBooleanOptionParser(_NamedOptionParser):
    kind = OptionKind.NAMED_BOOLEAN

    def try_claim(self, cursor, command_obj, parsed):
        opt = self._match(cursor, command_obj)
        if opt is None:
            return None
        return Claim(1, {opt: "true"})


class NamedValueOptionParser(_NamedOptionParser):
    kind = OptionKind.NAMED_VALUE

    def try_claim(self, cursor, command_obj, parsed):
        opt = self._match(cursor, command_obj)
        if opt is None:
            return None
        value = cursor.peek(1)
        if value is None or is_flag(value):
            # Flag without a value; left for the error strategy
            return None
        return Claim(2, {opt: value})


class NamedValueVarargsOptionParser(_NamedOptionParser):
    kind = OptionKind.NAMED_VALUE_VARARG

    def try_claim(self, cursor, command_obj, parsed):
        opt = self._match(cursor, command_obj)
        if opt is None:
            return None
        collected = cursor.take_until_flag(1)
        previous = parsed.get(opt, ())
        return Claim(1 + len(collected), {opt: tuple(previous) + collected})


class OrderedValueOptionParser(OptionParser):
    def try_claim(self, cursor, command_obj, parsed):
        token = cursor.peek()
        if token is None or is_flag(token):
            return None
        for opt in command_obj.ordered_options():
            if opt.kind is OptionKind.ORDERED_VALUE and opt not in parsed:
                return Claim(1, {opt: token})
        return None


class OrderedValueVarargsOptionParser(OptionParser):
    def try_claim(self, cursor, command_obj, parsed):
        token = cursor.peek()
        if token is None or is_flag(token):
            return None
        for opt in command_obj.ordered_options():
            if opt.kind is OptionKind.ORDERED_VALUE_VARARG:
                collected = cursor.take_until_flag()
                previous = parsed.get(opt, ())
                return Claim(len(collected), {opt: tuple(previous) + collected})
        return None


class ParseErrorParser(OptionParser):
    """Final strategy: claims one token and records it as unparseable."""

    def try_claim(self, cursor, command_obj, parsed):
        token = cursor.peek()
        if token is None:
            return None
        return Claim(1, errors=(token,))


class CompositeOptionParser:
    """Runs strategies in fixed priority order until every token is claimed."""

    def __init__(self, *parsers: OptionParser) -> None:
        if not parsers:
            raise ValueError("CompositeOptionParser needs at least one strategy.")
        self.parsers: tuple[OptionParser, ...] = parsers

    def parse(self, command_obj: CommandMetadata, tokens: Sequence[str]) -> ParseResult:
        result = ParseResult()
        cursor = TokenCursor.of(tokens)

        while not cursor.exhausted:
            for strategy in self.parsers:
                claim = strategy.try_claim(cursor, command_obj, result.values)
                if claim is None:
                    continue
                logger.debug("%r claimed %d token(s) at %d", strategy, claim.count, cursor.position)
                result.values.update(claim.values)
                result.errors.extend(claim.errors)
                cursor = cursor.advance(claim.count)
                break
            else:
                # No strategy (not even a fallback) claimed anything
                result.errors.extend(cursor.remaining)
                break

        return result


def default_option_parser() -> CompositeOptionParser:
    """The standard strategy chain used by ExecutionParser."""
    return CompositeOptionParser(
        NamedBooleanOptionParser(),
        NamedValueOptionParser(),
        NamedValueVarargsOptionParser(),
        OrderedValueOptionParser(),
        OrderedValueVarargsOptionParser(),
        ParseErrorParser(),
    )
