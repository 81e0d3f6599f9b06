"""Consultation records: validation, the text file format and an in-memory book."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

MAX_CONSULTATIONS = 100
NAME_LIMIT = 49
DATE_LIMIT = 19
TIME_LIMIT = 9
REASON_LIMIT = 99
SEARCH_LINE_LIMIT = 255
DEFAULT_FILENAME = "consultatii.txt"

CAPACITY_MESSAGE = "Nu se mai pot adauga consultatii!"
EMPTY_NAME_MESSAGE = "Numele pacientului nu poate fi gol!"
INVALID_DATE_MESSAGE = "Formatul datei este invalid! (zz-ll-aaaa)"
INVALID_TIME_MESSAGE = "Formatul orei este invalid! (hh:mm)"
EMPTY_REASON_MESSAGE = "Motivul nu poate fi gol!"

_DATE_RE = re.compile(r"[0-9]{2}-[0-9]{2}-[0-9]{4}")
_TIME_RE = re.compile(r"[0-9]{2}:[0-9]{2}")
_LINE_RE = re.compile(
    r"\s*([+-]?[0-9]+);([^;\n]{1,49});([^;\n]{1,19});([^;\n]{1,9});([^\n]{1,99})"
)

PathLike = Union[str, "os.PathLike[str]"]
SearchHit = Tuple[Optional[str], Optional[str], Optional[str], Optional[str], Optional[str]]


class ConsultationError(Exception):
    """Base class for errors raised by the consultation book."""


class ValidationError(ConsultationError, ValueError):
    """A field of a new consultation has an invalid value."""


class NotFoundError(ConsultationError, LookupError):
    """No consultation carries the requested id."""


class CapacityError(ConsultationError):
    """The book already holds the maximum number of consultations."""


@dataclass(frozen=True)
class Consultation:
    """One booked consultation."""

    id: int
    name: str
    date: str
    time: str
    reason: str


def is_valid_date(text: str) -> bool:
    """Return True if text has the form dd-mm-yyyy (digits only)."""
    return _DATE_RE.fullmatch(text) is not None


def is_valid_time(text: str) -> bool:
    """Return True if text has the form hh:mm (digits only)."""
    return _TIME_RE.fullmatch(text) is not None


def parse_line(line: str) -> Consultation:
    """Parse one stored line; raise ValueError if it does not follow the format."""
    match = _LINE_RE.fullmatch(line.rstrip("\n"))
    if match is None:
        raise ValueError(f"malformed consultation line: {line!r}")
    cid, name, date, time, reason = match.groups()
    return Consultation(int(cid), name, date, time, reason)


def format_line(consultation: Consultation) -> str:
    """Render a consultation as one stored line, newline included."""
    c = consultation
    return f"{c.id};{c.name};{c.date};{c.time};{c.reason}\n"


def load_consultations(path: PathLike) -> List[Consultation]:
    """Read consultations from path, stopping at the first malformed line."""
    records: List[Consultation] = []
    with open(path, encoding="utf-8") as handle:
        for raw in handle:
            if len(records) >= MAX_CONSULTATIONS:
                break
            if not raw.strip():
                continue
            try:
                records.append(parse_line(raw))
            except ValueError:
                break
    return records


def save_consultations(path: PathLike, consultations: Iterable[Consultation]) -> None:
    """Write all consultations to path, replacing its contents."""
    with open(path, "w", encoding="utf-8") as handle:
        handle.writelines(format_line(c) for c in consultations)


def _next_token(text: str, start: int, delims: str) -> Tuple[Optional[str], int]:
    pos = start
    while pos < len(text) and text[pos] in delims:
        pos += 1
    if pos >= len(text):
        return None, len(text)
    end = pos
    while end < len(text) and text[end] not in delims:
        end += 1
    return text[pos:end], min(end + 1, len(text))


def _split_record(line: str) -> SearchHit:
    fields: List[Optional[str]] = []
    pos = 0
    for delims in (";", ";", ";", ";", "\n"):
        token, pos = _next_token(line, pos, delims)
        fields.append(token)
    return tuple(fields)  # type: ignore[return-value]


def search_file(path: PathLike, term: str) -> List[SearchHit]:
    """Return the raw fields of every stored line whose name or date contains term."""
    hits: List[SearchHit] = []
    with open(path, encoding="utf-8") as handle:
        for line in iter(lambda: handle.readline(SEARCH_LINE_LIMIT), ""):
            fields = _split_record(line)
            name, date = fields[1], fields[2]
            if (name is not None and term in name) or (date is not None and term in date):
                hits.append(fields)
    return hits


class ConsultationBook:
    """The consultations kept in memory and mirrored to a text file."""

    def __init__(
        self,
        path: PathLike = DEFAULT_FILENAME,
        consultations: Optional[Iterable[Consultation]] = None,
    ) -> None:
        self.path = Path(path)
        self._items: List[Consultation] = list(consultations or ())
        if len(self._items) > MAX_CONSULTATIONS:
            raise CapacityError(CAPACITY_MESSAGE)

    def __iter__(self) -> Iterator[Consultation]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def load(self) -> None:
        """Replace the in-memory consultations with those stored in the file."""
        self._items = load_consultations(self.path)

    def save(self) -> None:
        """Write the in-memory consultations to the file."""
        save_consultations(self.path, self._items)

    def _index(self, consultation_id: int) -> int:
        for index, item in enumerate(self._items):
            if item.id == consultation_id:
                return index
        raise NotFoundError(f"no consultation with id {consultation_id}")

    def get(self, consultation_id: int) -> Consultation:
        """Return the first consultation with the given id."""
        return self._items[self._index(consultation_id)]

    def add(self, name: str, date: str, time: str, reason: str) -> Consultation:
        """Validate, append and save a new consultation; return it."""
        if len(self._items) >= MAX_CONSULTATIONS:
            raise CapacityError(CAPACITY_MESSAGE)
        name = name[:NAME_LIMIT]
        date = date[:DATE_LIMIT]
        time = time[:TIME_LIMIT]
        reason = reason[:REASON_LIMIT]
        if not name:
            raise ValidationError(EMPTY_NAME_MESSAGE)
        if not is_valid_date(date):
            raise ValidationError(INVALID_DATE_MESSAGE)
        if not is_valid_time(time):
            raise ValidationError(INVALID_TIME_MESSAGE)
        if not reason:
            raise ValidationError(EMPTY_REASON_MESSAGE)
        consultation = Consultation(len(self._items) + 1, name, date, time, reason)
        self._items.append(consultation)
        self.save()
        return consultation

    def update(
        self, consultation_id: int, name: str, date: str, time: str, reason: str
    ) -> Consultation:
        """Overwrite the fields of a consultation and save; return the new record."""
        index = self._index(consultation_id)
        updated = replace(
            self._items[index],
            name=name[:NAME_LIMIT],
            date=date[:DATE_LIMIT],
            time=time[:TIME_LIMIT],
            reason=reason[:REASON_LIMIT],
        )
        self._items[index] = updated
        self.save()
        return updated

    def delete(self, consultation_id: int) -> Consultation:
        """Remove a consultation and save; return the removed record."""
        removed = self._items.pop(self._index(consultation_id))
        self.save()
        return removed