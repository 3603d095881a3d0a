"""Command grammar: tokenizer plus recursive-descent parser.

A line is split into whitespace-delimited tokens that remember their offset
in the input line, so free text (event names, edit values) is recovered
exactly as typed. Clause keywords (``from``, ``to``, ``on``, ``with``,
``repeats``) are matched case-insensitively, and each split happens at the
first occurrence of its keyword.

Verbs are matched as case-insensitive text prefixes of the line and tried in
table order; a verb that is a prefix of another verb must come after it.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .commands import (
    Command,
    CreateAllDay,
    CreateTimed,
    EditManyByName,
    EditManyFromStart,
    EditSingle,
    ExportCsv,
    ExportGoogleCsv,
    QueryOn,
    QueryRange,
    ShowStatus,
)
from .dates import parse_date, parse_datetime
from .errors import CommandSyntaxError, UnknownCommandError
from .recurrence import parse_rule

LOG = logging.getLogger(__name__)

_AUTODECLINE_RE = re.compile(r"--autodecline", re.IGNORECASE)
_TOKEN_RE = re.compile(r"\S+")


@dataclass(frozen=True)
class Token:
    text: str
    start: int
    end: int

    def is_keyword(self, word: str) -> bool:
        return self.text.lower() == word


def tokenize(line: str) -> List[Token]:
    return [Token(m.group(0), m.start(), m.end()) for m in _TOKEN_RE.finditer(line or "")]


def _split_at(tokens: Sequence[Token], keyword: str) -> Optional[Tuple[Sequence[Token], Sequence[Token]]]:
    """Split around the first ``keyword`` token, or None when absent."""
    for i, tok in enumerate(tokens):
        if tok.is_keyword(keyword):
            return tokens[:i], tokens[i + 1:]
    return None


class CommandParser:
    """Parse one command line into a typed command."""

    def __init__(self, line: str) -> None:
        self.line = line
        self.tokens = tokenize(line)

    # Ordered: "edit events" must be tried before its prefix "edit event"
    VERBS: Tuple[Tuple[str, str], ...] = (
        ("create event", "_parse_create"),
        ("edit events", "_parse_edit_many"),
        ("edit event", "_parse_edit_single"),
        ("print events on", "_parse_print_on"),
        ("print events from", "_parse_print_range"),
        ("export cal", "_parse_export_cal"),
        ("show status on", "_parse_show_status"),
        ("export googlecsv", "_parse_export_google"),
    )

    def parse(self) -> Command:
        for verb, handler_name in self.VERBS:
            if self._starts_with(verb):
                handler: Callable[[Sequence[Token]], Command] = getattr(self, handler_name)
                command = handler(self._after(verb))
                LOG.debug("parsed %r as %s", self.line, type(command).__name__)
                return command
        raise UnknownCommandError(self.line)

    def _starts_with(self, verb: str) -> bool:
        """Case-insensitive text prefix test, so ``export calendar`` matches ``export cal``."""
        return self.line.lstrip().lower().startswith(verb)

    def _after(self, verb: str) -> List[Token]:
        """Tokens following the verb text; a token the verb ends inside keeps only its tail."""
        offset = len(self.line) - len(self.line.lstrip()) + len(verb)
        body: List[Token] = []
        for tok in self.tokens:
            if tok.start >= offset:
                body.append(tok)
            elif tok.end > offset:
                body.append(Token(tok.text[offset - tok.start:], offset, tok.end))
        return body

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    def _text(self, tokens: Sequence[Token]) -> str:
        """Original text spanned by ``tokens`` (inner spacing preserved)."""
        if not tokens:
            return ""
        return self.line[tokens[0].start:tokens[-1].end]

    def _require(self, tokens: Sequence[Token], what: str) -> str:
        text = self._text(tokens)
        if not text:
            raise CommandSyntaxError(f"Missing {what}")
        return text

    # ------------------------------------------------------------------
    # create event
    # ------------------------------------------------------------------

    def _parse_create(self, body: Sequence[Token]) -> Command:
        auto_decline = False
        if _AUTODECLINE_RE.search(self.line):
            auto_decline = True
            # Re-tokenize without the flag so offsets match the cleaned line
            self.line = _AUTODECLINE_RE.sub("", self.line).strip()
            self.tokens = tokenize(self.line)
            body = self._after("create event")

        timed = _split_at(body, "from")
        if timed is not None:
            name_toks, rest = timed
            name = self._require(name_toks, "event name")
            to_split = _split_at(rest, "to")
            if to_split is None:
                raise CommandSyntaxError("Invalid format: missing 'to' keyword.")
            start_toks, after_to = to_split
            end_toks, rule_words = self._split_repeats(after_to)
            start = parse_datetime(self._require(start_toks, "start date-time"))
            end = parse_datetime(self._require(end_toks, "end date-time"))
            rule = parse_rule(rule_words, all_day=False) if rule_words is not None else None
            return CreateTimed(name=name, start=start, end=end, rule=rule, auto_decline=auto_decline)

        all_day = _split_at(body, "on")
        if all_day is not None:
            name_toks, rest = all_day
            name = self._require(name_toks, "event name")
            date_toks, rule_words = self._split_repeats(rest)
            day = parse_date(self._require(date_toks, "date"))
            rule = parse_rule(rule_words, all_day=True) if rule_words is not None else None
            return CreateAllDay(name=name, day=day, rule=rule, auto_decline=auto_decline)

        raise CommandSyntaxError(
            "Invalid create event command format.",
            hint="create event <name> from <start> to <end> | create event <name> on <date>",
        )

    def _split_repeats(self, tokens: Sequence[Token]) -> Tuple[Sequence[Token], Optional[List[str]]]:
        split = _split_at(tokens, "repeats")
        if split is None:
            return tokens, None
        head, rule_toks = split
        return head, [t.text for t in rule_toks]

    # ------------------------------------------------------------------
    # edit event / edit events
    # ------------------------------------------------------------------

    def _edit_clauses(self, body: Sequence[Token]) -> Tuple[str, str, Optional[Sequence[Token]], str]:
        with_split = _split_at(body, "with")
        if with_split is None:
            raise CommandSyntaxError("Edit command must contain 'with' clause.")
        before, value_toks = with_split
        if not value_toks:
            raise CommandSyntaxError("Missing new value after 'with'.")
        value = self.line[value_toks[0].start:].strip()
        from_split = _split_at(before, "from")
        head = from_split[0] if from_split is not None else before
        if len(head) < 2:
            raise CommandSyntaxError(
                "Invalid edit command format.",
                hint="edit event(s) <property> <name> [from <start> [to <end>]] with <value>",
            )
        prop = head[0].text
        name = self._text(head[1:])
        after_from = from_split[1] if from_split is not None else None
        return prop, name, after_from, value

    def _parse_edit_single(self, body: Sequence[Token]) -> Command:
        prop, name, after_from, value = self._edit_clauses(body)
        if after_from is None:
            raise CommandSyntaxError("Missing 'from' clause for singular edit command.")
        to_split = _split_at(after_from, "to")
        if to_split is None:
            raise CommandSyntaxError("Missing 'to' clause for singular edit command.")
        start_toks, end_toks = to_split
        start = parse_datetime(self._require(start_toks, "start date-time"))
        end = parse_datetime(self._require(end_toks, "end date-time"))
        return EditSingle(prop=prop, name=name, start=start, end=end, value=value)

    def _parse_edit_many(self, body: Sequence[Token]) -> Command:
        prop, name, after_from, value = self._edit_clauses(body)
        if after_from is None:
            return EditManyByName(prop=prop, name=name, value=value)
        start = parse_datetime(self._require(after_from, "start date-time"))
        return EditManyFromStart(prop=prop, name=name, start=start, value=value)

    # ------------------------------------------------------------------
    # queries, status, export
    # ------------------------------------------------------------------

    def _parse_print_on(self, body: Sequence[Token]) -> Command:
        return QueryOn(day=parse_date(self._require(body, "date")))

    def _parse_print_range(self, body: Sequence[Token]) -> Command:
        to_split = _split_at(body, "to")
        if to_split is None:
            raise CommandSyntaxError("Missing 'to' clause in range query.")
        start_toks, end_toks = to_split
        return QueryRange(
            start=parse_datetime(self._require(start_toks, "range start")),
            end=parse_datetime(self._require(end_toks, "range end")),
        )

    def _parse_show_status(self, body: Sequence[Token]) -> Command:
        return ShowStatus(at=parse_datetime(self._require(body, "date-time")))

    def _export_path(self, verb: str) -> str:
        # The path is the third whitespace-delimited token of the whole line
        if len(self.tokens) < 3:
            raise CommandSyntaxError("Invalid export command format.", hint=f"export {verb} <file.csv>")
        return self.tokens[2].text

    def _parse_export_cal(self, body: Sequence[Token]) -> Command:
        return ExportCsv(path=self._export_path("cal"))

    def _parse_export_google(self, body: Sequence[Token]) -> Command:
        return ExportGoogleCsv(path=self._export_path("googlecsv"))


def parse_command(line: str) -> Command:
    """Parse a single command line; raises a CommandSyntaxError subclass on failure."""
    return CommandParser(line).parse()
