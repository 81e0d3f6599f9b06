# clinicbook

A small terminal appointment book for medical consultations. Each
consultation has an ID, a patient name, a date (`dd-mm-yyyy`), a time
(`hh:mm`) and a reason. The records are kept in a plain text file, by default
`consultatii.txt` in the current directory. There is one record per line, and
the fields are separated by semicolons:

```
1;Ana Pop;12-03-2025;09:30;Control anual
```

## Installing

```
pip install .
```

## Using the menu

```
clinicbook
clinicbook --file other.txt
```

`-f` / `--file` picks the file to use. If the file does not exist yet, a
notice is printed and the file is created the first time a change is saved.
When the file is read, reading stops at the first line that does not follow
the format, and at most 100 records are taken.

The screen is cleared before each menu. The menu offers these choices:

1. Add a consultation. The name and the reason must not be empty. The date
   must be two digits, `-`, two digits, `-`, four digits, and the time two
   digits, `:`, two digits. Only the shape is checked, not whether the date
   or time exists. The first invalid field ends the entry with a message.
2. Update a consultation by its ID. All four fields are replaced by what is
   typed. They are cut to their length limits but are not otherwise checked.
3. Delete a consultation by its ID, then wait for Enter.
4. Search the stored file for a name or date fragment. The search is
   case-sensitive, and only the first word typed is used.
5. List every consultation.
0. Quit.

After each action, choosing `0` returns to the menu. Any other choice shows
an "invalid option" screen until `0` is chosen. The program also ends when
input runs out.

The book holds at most 100 consultations. Every change is written to the
file straight away. A new consultation gets the ID "number of records + 1".
After a deletion, that ID can be the same as one already in use.

Fields are cut to these lengths: name 49 characters, date 19, time 9 and
reason 99.

## Using it from Python

```python
from clinicbook.records import ConsultationBook, ValidationError

book = ConsultationBook("consultatii.txt")
book.load()
entry = book.add("Ana Pop", "12-03-2025", "09:30", "Control anual")
book.update(entry.id, "Ana Pop", "13-03-2025", "10:00", "Control anual")
for consultation in book:
    print(consultation)
book.delete(entry.id)
```

The `clinicbook.records` module provides the following:

- `Consultation` is a frozen dataclass with the fields `id`, `name`, `date`,
  `time` and `reason`.
- `ConsultationBook(path, consultations)` is the in-memory book. It offers
  `load()`, `save()`, `get(id)`, `add(...)`, `update(...)` and `delete(id)`,
  and it supports `len()` and iteration. `add`, `update` and `delete` save
  the file and return the record concerned.
- `is_valid_date(text)` and `is_valid_time(text)` check the shape of a date
  or a time.
- `parse_line(line)` and `format_line(consultation)` convert between a
  stored line and a record. `parse_line` raises `ValueError` when the line
  is malformed.
- `load_consultations(path)` and `save_consultations(path, consultations)`
  read and write the whole file.
- `search_file(path, term)` returns the raw fields of each stored line whose
  name or date contains `term`. The fields come back as a tuple of five
  strings, and a field that is missing is `None`.

Errors are raised as exceptions:

- `add` raises `ValidationError` for an empty name or reason, or for a
  badly shaped date or time.
- `get`, `update` and `delete` raise `NotFoundError` for an unknown ID.
- `add`, and the constructor given more than 100 records, raise
  `CapacityError`.

All three derive from `ConsultationError`.

`clinicbook.cli` provides the menu as `Console(book, stdin, stdout,
clear_screen)`, started with `run()`. It also has the helpers
`format_listing` and `format_search_results`, and the command's entry point
`main(argv)`.

## What it does not do

There are no appointment slots, no checks for clashes between bookings, no
reminders and no sorting by date. Records are listed in file order. Search
looks only at the name and date fields of the stored file.

## Running the tests

```
pip install ".[test]"
pytest
```