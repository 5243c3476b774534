"""
Tests for menu sources.
"""
import pytest

from torc.services.menu import FileMenuSource, StaticMenuSource, parse_menu_line


@pytest.mark.parametrize("line,expected", [
    ("Latte", "Latte"),
    ('"Latte"', "Latte"),
    ('"Latte",', "Latte"),
    ('  "Flat White",  ', "Flat White"),
    ("", ""),
    ('""', ""),
])
def test_parse_menu_line(line, expected):
    assert parse_menu_line(line) == expected


class TestFileMenuSource:

    def test_reads_menu_file(self, tmp_path):
        path = tmp_path / "menu.txt"
        path.write_text('"Latte",\n"Mocha",\n\n"Flat White"\n')
        assert FileMenuSource(path).current_menu() == ["Latte", "Mocha", "Flat White"]

    def test_missing_file_is_empty_menu(self, tmp_path):
        menu = FileMenuSource(tmp_path / "absent.txt")
        assert menu.current_menu() == []
        assert menu.drink_on_menu("Latte") is False

    def test_edits_are_picked_up(self, tmp_path):
        path = tmp_path / "menu.txt"
        path.write_text("Latte\n")
        menu = FileMenuSource(path)
        assert not menu.drink_on_menu("Mocha")

        path.write_text("Latte\nMocha\n")
        assert menu.drink_on_menu("mocha")


class TestMatching:

    def test_case_insensitive(self):
        menu = StaticMenuSource(["Latte", "Mocha"])
        assert menu.drink_on_menu("latte")
        assert menu.drink_on_menu("MOCHA")
        assert not menu.drink_on_menu("Unicorn Frappe")

    def test_canonical_name(self):
        menu = StaticMenuSource(["Flat White"])
        assert menu.canonical_name("flat white") == "Flat White"
        assert menu.canonical_name("flat") is None

    def test_static_ignores_blank_entries(self):
        assert StaticMenuSource(["Latte", "", "  "]).current_menu() == ["Latte"]
