import io
from unittest import mock

from clinicbook.cli import Console, format_listing, format_search_results, main
from clinicbook.records import (
    INVALID_DATE_MESSAGE,
    EMPTY_NAME_MESSAGE,
    CAPACITY_MESSAGE,
    MAX_CONSULTATIONS,
    Consultation,
    ConsultationBook,
    load_consultations,
)


def make(cid=1, name="Ana Pop", date="01-02-2024", time="10:30", reason="Control"):
    return Consultation(cid, name, date, time, reason)


def run_console(tmp_path, script, consultations=()):
    book = ConsultationBook(tmp_path / "c.txt", list(consultations))
    out = io.StringIO()
    Console(book, io.StringIO(script), out, lambda: None).run()
    return book, out.getvalue()


def test_format_listing_line():
    text = format_listing([make()])
    assert text.startswith("----Lista Consultatii----\n")
    assert "1. Ana Pop | 01-02-2024 10:30 | Motiv: Control\n" in text


def test_format_search_results_hit_and_null():
    text = format_search_results([("5", "Ion", None, None, None)], "Ion")
    assert "Appointment found:" in text
    assert "ID: 5\nName: Ion\nDate: (null)" in text


def test_format_search_results_empty():
    text = format_search_results([], "Zed")
    assert "No appointment found for search term: Zed" in text


def test_exit_immediately(tmp_path):
    _, out = run_console(tmp_path, "0\n")
    assert out.endswith("Iesire din program...\n")


def test_add_flow_saves(tmp_path):
    book, out = run_console(tmp_path, "1\nAna\n01-02-2024\n10:30\nControl\n0\n0\n")
    assert list(book) == [Consultation(1, "Ana", "01-02-2024", "10:30", "Control")]
    assert load_consultations(book.path) == list(book)
    assert "Consultatia a fost adaugata si salvata!" in out


def test_add_flow_rejects_bad_date(tmp_path):
    book, out = run_console(tmp_path, "1\nAna\n2024-01-01\n0\n0\n")
    assert len(book) == 0
    assert INVALID_DATE_MESSAGE in out


def test_add_flow_rejects_empty_name(tmp_path):
    book, out = run_console(tmp_path, "1\n\n0\n0\n")
    assert len(book) == 0
    assert EMPTY_NAME_MESSAGE in out


def test_add_flow_at_capacity(tmp_path):
    full = [make(i) for i in range(1, MAX_CONSULTATIONS + 1)]
    book, out = run_console(tmp_path, "1\n0\n0\n", full)
    assert len(book) == MAX_CONSULTATIONS
    assert CAPACITY_MESSAGE in out


def test_update_flow(tmp_path):
    book, out = run_console(
        tmp_path, "2\n1\nIon\n03-04-2025\n11:00\nAnaliza\n0\n0\n", [make(1)]
    )
    assert book.get(1) == Consultation(1, "Ion", "03-04-2025", "11:00", "Analiza")
    assert "Consultatia a fost actualizata si salvata!" in out


def test_update_flow_missing(tmp_path):
    book, out = run_console(tmp_path, "2\n9\n0\n0\n", [make(1)])
    assert book.get(1) == make(1)
    assert "Nu a fost gasita nicio consultatie cu ID-ul 9!" in out


def test_delete_flow(tmp_path):
    book, out = run_console(tmp_path, "3\n1\n\n0\n0\n", [make(1), make(2)])
    assert [c.id for c in book] == [2]
    assert "Consultatia cu ID-ul 1 a fost stearsa." in out
    assert "Apasa Enter pentru a continua..." in out


def test_delete_flow_missing(tmp_path):
    book, out = run_console(tmp_path, "3\n7\n\n0\n0\n", [make(1)])
    assert len(book) == 1
    assert "Consultatia cu ID-ul 7 nu a fost gasita." in out


def test_search_flow(tmp_path):
    book = ConsultationBook(tmp_path / "c.txt", [make(1)])
    book.save()
    out = io.StringIO()
    Console(book, io.StringIO("4\nAna\n0\n0\n"), out, lambda: None).run()
    assert "Appointment found:" in out.getvalue()
    assert "Details: Control" in out.getvalue()


def test_search_flow_missing_file(tmp_path, capsys):
    _, out = run_console(tmp_path, "4\nAna\n0\n0\n")
    assert "Error opening file" in capsys.readouterr().err
    assert "Appointment found:" not in out


def test_show_all(tmp_path):
    book = ConsultationBook(tmp_path / "c.txt", [make(1), make(2, name="Ion")])
    out = io.StringIO()
    Console(book, io.StringIO(""), out, lambda: None).show_all()
    assert out.getvalue() == format_listing([make(1), make(2, name="Ion")])


def test_invalid_option_repeats_until_zero(tmp_path):
    _, out = run_console(tmp_path, "9\n5\n0\n0\n")
    assert out.count("----Optiune invalida!----") == 2
    assert out.endswith("Iesire din program...\n")


def test_nonzero_after_action_shows_invalid_screen(tmp_path):
    _, out = run_console(tmp_path, "5\n3\n0\n0\n")
    assert out.count("----Optiune invalida!----") == 1
    assert "0. Paraseste submeniul" in out


def test_end_of_input_stops(tmp_path):
    _, out = run_console(tmp_path, "5\n")
    assert "Iesire din program..." not in out
    assert "----Lista Consultatii----" in out


def test_clear_screen_called_per_menu(tmp_path):
    calls = []
    book = ConsultationBook(tmp_path / "c.txt")
    Console(book, io.StringIO("0\n"), io.StringIO(), lambda: calls.append(1)).run()
    assert len(calls) == 2


def test_main_missing_file(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("0\n"))
    path = tmp_path / "c.txt"
    with mock.patch("clinicbook.cli.subprocess.run") as fake_run:
        result = main(["--file", str(path)])
    captured = capsys.readouterr().out
    assert result == 0
    assert "nu exista inca" in captured
    assert "Iesire din program..." in captured
    assert fake_run.call_count == 2


def test_main_loads_existing_file(tmp_path, monkeypatch, capsys):
    path = tmp_path / "c.txt"
    ConsultationBook(path, [make(1)]).save()
    monkeypatch.setattr("sys.stdin", io.StringIO("5\n0\n0\n"))
    with mock.patch("clinicbook.cli.subprocess.run"):
        assert main(["-f", str(path)]) == 0
    captured = capsys.readouterr().out
    assert "Motiv: Control" in captured
    assert "nu exista inca" not in captured