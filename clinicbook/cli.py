"""Interactive menu for managing consultations."""

from __future__ import annotations

import argparse
import os
import re
import subprocess
import sys
from typing import Callable, Iterable, Optional, Sequence, TextIO

from clinicbook.records import (
    CAPACITY_MESSAGE,
    DEFAULT_FILENAME,
    EMPTY_NAME_MESSAGE,
    EMPTY_REASON_MESSAGE,
    INVALID_DATE_MESSAGE,
    INVALID_TIME_MESSAGE,
    MAX_CONSULTATIONS,
    DATE_LIMIT,
    NAME_LIMIT,
    REASON_LIMIT,
    TIME_LIMIT,
    Consultation,
    ConsultationBook,
    NotFoundError,
    SearchHit,
    is_valid_date,
    is_valid_time,
    search_file,
)

MENU = (
    "-----------------\033[1;36mMENIU\033[0m-----------------\n"
    "--\033[1;35m1. Adauga consultatie\033[0m----------------\n"
    "--\033[1;33m2. Actualizeaza consultatie\033[0m----------\n"
    "--\033[1;31m3. Sterge consultatie\033[0m----------------\n"
    "--\033[1;32m4. Cauta consultatie\033[0m-----------------\n"
    "--\033[1;34m5. Vizualizeaza toate consultatiile\033[0m--\n"
    "---------------\033[1;36m0. Iesire\033[0m---------------\n\n"
)
PROMPT = "Selecteaza o optiune: "
SAVE_ERROR = "Eroare la salvarea datelor!\n"
SEARCH_TERM_LIMIT = 99

_INT_RE = re.compile(r"[+-]?[0-9]+")


class _EndOfInput(Exception):
    pass


def _show(value: Optional[str]) -> str:
    return "(null)" if value is None else value


def format_listing(consultations: Iterable[Consultation]) -> str:
    """Render every consultation as one line under a heading."""
    lines = ["----Lista Consultatii----\n"]
    lines.extend(
        f"{c.id}. {c.name} | {c.date} {c.time} | Motiv: {c.reason}\n" for c in consultations
    )
    return "".join(lines)


def format_search_results(results: Sequence[SearchHit], term: str) -> str:
    """Render search hits, or the not-found notice when there are none."""
    if not results:
        return f"\nNo appointment found for search term: {term}\n"
    parts = []
    for cid, name, date, time, details in results:
        parts.append(
            "\nAppointment found:\n"
            f"ID: {_show(cid)}\nName: {_show(name)}\nDate: {_show(date)}\n"
            f"Time: {_show(time)}\nDetails: {_show(details)}\n"
        )
    return "".join(parts)


def _clear_terminal() -> None:
    command = "cls" if os.name == "nt" else "clear"
    try:
        subprocess.run(command, shell=True, check=False)
    except OSError:
        pass


def _to_int(token: str) -> Optional[int]:
    match = _INT_RE.match(token)
    return int(match.group()) if match else None


class Console:
    """The menu-driven front end over a consultation book."""

    def __init__(
        self,
        book: ConsultationBook,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        clear_screen: Optional[Callable[[], None]] = None,
    ) -> None:
        self.book = book
        self._in = stdin if stdin is not None else sys.stdin
        self._out = stdout if stdout is not None else sys.stdout
        self._clear = clear_screen if clear_screen is not None else _clear_terminal
        self._actions = {
            1: self.add_consultation,
            2: self.update_consultation,
            3: self.delete_consultation,
            4: self.search_consultation,
            5: self.show_all,
        }

    def _write(self, text: str) -> None:
        self._out.write(text)
        self._out.flush()

    def _read_line(self) -> str:
        line = self._in.readline()
        if not line:
            raise _EndOfInput
        return line.rstrip("\n")

    def _read_token(self) -> str:
        while True:
            tokens = self._read_line().split()
            if tokens:
                return tokens[0]

    def _read_int(self) -> Optional[int]:
        return _to_int(self._read_token())

    def run(self) -> None:
        """Show the menu until the user chooses to leave or input ends."""
        try:
            while True:
                self._clear()
                self._write(MENU + PROMPT)
                choice = self._read_int()
                if choice == 0:
                    self._clear()
                    self._write("Iesire din program...\n")
                    return
                action = self._actions.get(choice)
                if action is None:
                    self._invalid_option()
                    continue
                action()
                self._write("\n0. Paraseste submeniul\n\n" + PROMPT)
                if self._read_int() != 0:
                    self._invalid_option()
        except _EndOfInput:
            return

    def _invalid_option(self) -> None:
        while True:
            self._clear()
            self._write("----Optiune invalida!----\n\n0. Revino la meniu\n\n" + PROMPT)
            if self._read_int() == 0:
                return

    def add_consultation(self) -> None:
        """Prompt for a new consultation, validating each field as it is entered."""
        self._clear()
        self._write("----Adauga consultatie----\n")
        if len(self.book) >= MAX_CONSULTATIONS:
            self._write(CAPACITY_MESSAGE + "\n")
            return
        self._write("Nume pacient: ")
        name = self._read_line()[:NAME_LIMIT]
        if not name:
            self._write(EMPTY_NAME_MESSAGE + "\n")
            return
        self._write("Data (zz-ll-aaaa): ")
        date = self._read_line()[:DATE_LIMIT]
        if not is_valid_date(date):
            self._write(INVALID_DATE_MESSAGE + "\n")
            return
        self._write("Ora (hh:mm): ")
        time = self._read_line()[:TIME_LIMIT]
        if not is_valid_time(time):
            self._write(INVALID_TIME_MESSAGE + "\n")
            return
        self._write("Motiv consultatie: ")
        reason = self._read_line()[:REASON_LIMIT]
        if not reason:
            self._write(EMPTY_REASON_MESSAGE + "\n")
            return
        try:
            self.book.add(name, date, time, reason)
        except OSError:
            self._write(SAVE_ERROR)
            return
        self._write("Consultatia a fost adaugata si salvata!\n")

    def update_consultation(self) -> None:
        """Prompt for an id and replace all fields of that consultation."""
        self._clear()
        self._write("\033[1;36mIntrodu ID-ul consultatiei de actualizat: \033[0m")
        token = self._read_token()
        consultation_id = _to_int(token)
        try:
            if consultation_id is None:
                raise NotFoundError(token)
            self.book.get(consultation_id)
        except NotFoundError:
            self._write(
                "\033[1;31m[INFO]\033[0m Nu a fost gasita nicio consultatie "
                f"cu ID-ul {token}!\n"
            )
            return
        self._write("\033[1;33mNume pacient nou: \033[0m")
        name = self._read_line()
        self._write("\033[1;33mData noua (zz-ll-aaaa): \033[0m")
        date = self._read_line()
        self._write("\033[1;33mOra noua (hh:mm): \033[0m")
        time = self._read_line()
        self._write("\033[1;33mMotiv nou: \033[0m")
        reason = self._read_line()
        try:
            self.book.update(consultation_id, name, date, time, reason)
        except OSError:
            self._write(SAVE_ERROR)
            return
        self._write("\033[1;32m[SUCCES]\033[0m Consultatia a fost actualizata si salvata!\n")

    def delete_consultation(self) -> None:
        """Prompt for an id, delete that consultation and wait for Enter."""
        self._clear()
        self._write("----Sterge consultatie------\n")
        self._write("Introduceti ID-ul consultatiei de sters: ")
        token = self._read_token()
        consultation_id = _to_int(token)
        try:
            if consultation_id is None:
                raise NotFoundError(token)
            self.book.delete(consultation_id)
            self._write(f"Consultatia cu ID-ul {token} a fost stearsa.\n")
        except NotFoundError:
            self._write(f"Consultatia cu ID-ul {token} nu a fost gasita.\n")
        except OSError:
            self._write(f"Consultatia cu ID-ul {token} a fost stearsa.\n" + SAVE_ERROR)
        self._write("\nApasa Enter pentru a continua...")
        self._read_line()

    def search_consultation(self) -> None:
        """Prompt for a term and list stored consultations whose name or date holds it."""
        self._clear()
        self._write("----Cauta consultatie----\n")
        self._write("Enter a name or date (dd-mm-yyyy) to search: ")
        term = self._read_token()[:SEARCH_TERM_LIMIT]
        try:
            hits = search_file(self.book.path, term)
        except OSError as exc:
            sys.stderr.write(f"Error opening file: {exc.strerror}\n")
            return
        self._write(format_search_results(hits, term))

    def show_all(self) -> None:
        """Print every consultation in the book."""
        self._write(format_listing(self.book))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Load the consultation file and run the interactive menu."""
    parser = argparse.ArgumentParser(prog="clinicbook", description="Manage consultations.")
    parser.add_argument("-f", "--file", default=DEFAULT_FILENAME, help="consultations file")
    args = parser.parse_args(argv)
    book = ConsultationBook(args.file)
    try:
        book.load()
    except FileNotFoundError:
        print(f"[INFO] Fisierul {args.file} nu exista inca. Se va crea la salvare.")
    Console(book).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())