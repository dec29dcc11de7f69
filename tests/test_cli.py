import json

import pytest
from typer.testing import CliRunner
from unittest.mock import MagicMock

from config import Settings
from libranet.catalog import Catalog
from libranet.item import Book
from main import app, build_catalog

runner = CliRunner()


def test_build_catalog_seeds_sample_items():
    catalog = build_catalog(Settings(seed_sample_items=True))
    assert [item.title for item in catalog.search_by_title("gatsby")] == ["The Great Gatsby"]
    assert len(catalog) == 6


def test_build_catalog_uses_configured_rules():
    catalog = build_catalog(Settings(seed_sample_items=False, fine_rate=2.0, borrow_period_days=3))
    assert len(catalog) == 0
    assert catalog.fine_rate == 2.0
    assert catalog.borrow_days == 3


def test_list_no_items(catalog):
    result = runner.invoke(app, ["list"], obj=catalog)
    assert result.exit_code == 0
    assert "No items in library." in result.stdout


def test_list_seeded(seeded_catalog):
    result = runner.invoke(app, ["list"], obj=seeded_catalog)
    assert result.exit_code == 0
    lines = result.stdout.strip().splitlines()
    assert len(lines) == 6
    assert lines[0].startswith("ID: 1, Title: The Great Gatsby")


def test_list_json_output(seeded_catalog):
    result = runner.invoke(app, ["--output", "json", "list"], obj=seeded_catalog)
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert [entry["id"] for entry in payload] == [1, 2, 3, 4, 5, 6]
    assert payload[4]["kind"] == "emagazine"


def test_borrow_then_return_with_shared_catalog(seeded_catalog):
    result = runner.invoke(app, ["borrow", "1", "2024-01-01"], obj=seeded_catalog)
    assert "Item borrowed successfully. Due date: 2024-01-15" in result.stdout
    result = runner.invoke(app, ["return", "1", "2024-01-20"], obj=seeded_catalog)
    assert "Item returned successfully. Fine: 50.0 rs" in result.stdout
    result = runner.invoke(app, ["fines"], obj=seeded_catalog)
    assert "Total fines collected: 50.0 rs" in result.stdout
    assert seeded_catalog.get_item(1).available is True


def test_return_with_borrowed_on_runs_full_loan():
    # no injected catalog: one call borrows and returns on a fresh catalog
    result = runner.invoke(app, ["return", "--borrowed-on", "2024-01-01", "1", "2024-01-20"])
    assert result.exit_code == 0
    assert "Item borrowed successfully. Due date: 2024-01-15" in result.stdout
    assert "Item returned successfully. Fine: 50.0 rs" in result.stdout


def test_return_with_borrowed_on_reports_borrow_error(seeded_catalog):
    seeded_catalog.borrow_item(2, "2024-01-01")
    result = runner.invoke(app, ["return", "--borrowed-on", "2024-01-03", "2", "2024-01-10"], obj=seeded_catalog)
    assert result.exit_code == 0
    assert "Error: Item is not available for borrowing" in result.stdout
    assert seeded_catalog.get_item(2).available is False


def test_return_on_time(seeded_catalog):
    seeded_catalog.borrow_item(2, "2024-01-01")
    result = runner.invoke(app, ["return", "2", "2024-01-15"], obj=seeded_catalog)
    assert "Item returned successfully. No fines." in result.stdout


def test_borrow_missing_item(catalog):
    result = runner.invoke(app, ["borrow", "999", "2024-01-01"], obj=catalog)
    assert result.exit_code == 0
    assert "Error: Item with ID 999 not found" in result.stdout


def test_borrow_invalid_date(seeded_catalog):
    result = runner.invoke(app, ["borrow", "1", "01-01-2024"], obj=seeded_catalog)
    assert "Error: Invalid date format. Please use YYYY-MM-DD" in result.stdout
    assert seeded_catalog.get_item(1).available is True


def test_borrow_non_integer_id_is_rejected(seeded_catalog):
    result = runner.invoke(app, ["borrow", "abc", "2024-01-01"], obj=seeded_catalog)
    assert result.exit_code != 0


def test_return_available_item(seeded_catalog):
    result = runner.invoke(app, ["return", "1", "2024-01-01"], obj=seeded_catalog)
    assert "Error: Item was not borrowed" in result.stdout


def test_find(seeded_catalog):
    result = runner.invoke(app, ["find", "3"], obj=seeded_catalog)
    assert "Title: The Alchemist" in result.stdout
    result = runner.invoke(app, ["find", "77"], obj=seeded_catalog)
    assert "Item with ID 77 not found" in result.stdout


def test_search_by_title_and_author(seeded_catalog):
    result = runner.invoke(app, ["search", "GATSBY"], obj=seeded_catalog)
    assert "The Great Gatsby" in result.stdout
    result = runner.invoke(app, ["search", "--by", "author", "harper"], obj=seeded_catalog)
    assert "To Kill a Mockingbird" in result.stdout
    result = runner.invoke(app, ["search", "--by", "author", "zzz"], obj=seeded_catalog)
    assert "No items found by that author." in result.stdout


def test_search_uses_catalog(seeded_catalog):
    seeded_catalog.search_by_title = MagicMock(return_value=[])
    result = runner.invoke(app, ["search", "anything"], obj=seeded_catalog)
    assert "No items found with that title." in result.stdout
    seeded_catalog.search_by_title.assert_called_once_with("anything")


def test_by_type(seeded_catalog):
    result = runner.invoke(app, ["by-type", "audiobook"], obj=seeded_catalog)
    assert result.exit_code == 0
    assert "The Alchemist" in result.stdout
    assert "Atomic Habits" in result.stdout
    assert "Gatsby" not in result.stdout


def test_available_and_borrowed(seeded_catalog):
    result = runner.invoke(app, ["borrowed"], obj=seeded_catalog)
    assert "No borrowed items at the moment." in result.stdout
    runner.invoke(app, ["borrow", "4", "2024-01-01"], obj=seeded_catalog)
    result = runner.invoke(app, ["borrowed"], obj=seeded_catalog)
    assert "Title: Atomic Habits" in result.stdout.splitlines()[-1]


def test_overdue(seeded_catalog):
    seeded_catalog.borrow_item(1, "2024-01-01")
    result = runner.invoke(app, ["overdue", "2024-02-01"], obj=seeded_catalog)
    assert "The Great Gatsby" in result.stdout
    result = runner.invoke(app, ["overdue", "2024-01-10"], obj=seeded_catalog)
    assert "No overdue items." in result.stdout


def test_fines_for_item(seeded_catalog):
    seeded_catalog.borrow_item(3, "2024-01-01")
    seeded_catalog.return_item(3, "2024-01-17")
    result = runner.invoke(app, ["fines", "--item", "3"], obj=seeded_catalog)
    assert "Fines for item 3: 20.0 rs" in result.stdout


def test_stats(seeded_catalog):
    result = runner.invoke(app, ["stats"], obj=seeded_catalog)
    assert "Total Items: 6" in result.stdout
    assert "Audiobooks: 2" in result.stdout


def test_pages(seeded_catalog):
    result = runner.invoke(app, ["pages", "1"], obj=seeded_catalog)
    assert "Page count: 180" in result.stdout
    result = runner.invoke(app, ["pages", "3"], obj=seeded_catalog)
    assert "Error: Item with ID 3 is not a Book" in result.stdout


def test_play(seeded_catalog):
    result = runner.invoke(app, ["play", "3"], obj=seeded_catalog)
    assert "Playing audiobook: The Alchemist" in result.stdout
    assert "Duration: 4.5 hours" in result.stdout


def test_archive_twice(seeded_catalog):
    result = runner.invoke(app, ["archive", "5"], obj=seeded_catalog)
    assert result.exit_code == 0
    assert "Issue #256 of National Geographic has been archived." in result.stdout
    result = runner.invoke(app, ["archive", "5"], obj=seeded_catalog)
    assert "has been archived" not in result.stdout
    assert "Issue #256 of National Geographic is already archived." in result.stdout


def test_menu_shows_fines_and_exits(seeded_catalog):
    result = runner.invoke(app, ["menu"], input="9\n0\n", obj=seeded_catalog)
    assert result.exit_code == 0
    assert "Total fines collected: 0.0 rs" in result.stdout
    assert "Thank you for using LibraNet" in result.stdout


def test_menu_borrow(seeded_catalog):
    result = runner.invoke(app, ["menu"], input="2\n2\n2024-01-01\n0\n", obj=seeded_catalog)
    assert result.exit_code == 0
    assert seeded_catalog.get_item(2).available is False


def test_default_catalog_is_built_when_not_injected():
    result = runner.invoke(app, ["--output", "json", "by-type", "book"])
    assert result.exit_code == 0
    assert [entry["title"] for entry in json.loads(result.stdout)] == ["The Great Gatsby", "To Kill a Mockingbird"]


def test_rich_list_renders_table(catalog):
    catalog.add_item(Book(1, "Dune", "Herbert", 412))
    catalog.borrow_item(1, "2024-01-01")
    result = runner.invoke(app, ["-o", "rich", "list"], obj=catalog)
    assert result.exit_code == 0
    assert "All Items" in result.stdout
    assert "Dune" in result.stdout
    assert "412 pages" in result.stdout
    assert "Due 2024-01-15" in result.stdout


def test_rich_list_empty(catalog):
    result = runner.invoke(app, ["-o", "rich", "list"], obj=catalog)
    assert "No items in library." in result.stdout


def test_rich_stats_and_fines(seeded_catalog):
    seeded_catalog.borrow_item(1, "2024-01-01")
    seeded_catalog.return_item(1, "2024-01-17")
    result = runner.invoke(app, ["-o", "rich", "stats"], obj=seeded_catalog)
    assert result.exit_code == 0
    assert "Total Items: 6" in result.stdout
    assert "Total Fines: 20.0 rs" in result.stdout
    result = runner.invoke(app, ["-o", "rich", "fines"], obj=seeded_catalog)
    assert "Total fines collected: 20.0 rs" in result.stdout
    result = runner.invoke(app, ["-o", "rich", "fines", "--item", "1"], obj=seeded_catalog)
    assert "Fines for item 1: 20.0 rs" in result.stdout


def test_unknown_output_mode_falls_back_to_plain(seeded_catalog):
    result = runner.invoke(app, ["-o", "xml", "stats"], obj=seeded_catalog)
    assert "Unknown output mode 'xml', using plain." in result.stdout
    assert "Total Items: 6" in result.stdout


def test_menu_search_by_type(seeded_catalog):
    result = runner.invoke(app, ["menu"], input="6\n2\n0\n", obj=seeded_catalog)
    assert result.exit_code == 0
    assert "Title: The Alchemist" in result.stdout
    assert "Title: Atomic Habits" in result.stdout
    assert "Title: The Great Gatsby" not in result.stdout


def test_menu_archive_twice(seeded_catalog):
    result = runner.invoke(app, ["menu"], input="10\n3\n5\n10\n3\n5\n0\n", obj=seeded_catalog)
    assert result.exit_code == 0
    assert result.stdout.count("Issue #256 of National Geographic has been archived.") == 1
    assert "Issue #256 of National Geographic is already archived." in result.stdout
    assert seeded_catalog.get_item(5).archived is True


def test_menu_specialized_wrong_kind(seeded_catalog):
    result = runner.invoke(app, ["menu"], input="10\n1\n3\n0\n", obj=seeded_catalog)
    assert result.exit_code == 0
    assert "Error: Item with ID 3 is not a Book" in result.stdout


def test_menu_play_and_page_count(seeded_catalog):
    result = runner.invoke(app, ["menu"], input="10\n2\n3\n10\n1\n2\n0\n", obj=seeded_catalog)
    assert result.exit_code == 0
    assert "Playing audiobook: The Alchemist" in result.stdout
    assert "Page count: 281" in result.stdout
