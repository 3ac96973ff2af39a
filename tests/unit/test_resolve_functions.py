"""Unit tests for resolving the function enclosing a source line."""

from pathlib import Path

import pytest

from sonar_scan_manager.resolve.functions import parse_function_declaration, resolve_function


@pytest.mark.parametrize(
    "line,expected",
    [
        (0, "global"),
        (1, "global"),
        (2, "global"),
        (5, "Foo"),
        (8, "Foo"),
        (11, "Foo"),
        (12, "Bar"),
        (15, "Bar"),
        (1000, "Bar"),
    ],
)
def test_resolve_function_in_go_file(go_source_tree: Path, line: int, expected: str) -> None:
    """Test resolution against a file declaring Foo at line 5 and Bar at line 12."""
    assert resolve_function(go_source_tree / "main.go", line) == expected


def test_resolve_function_is_deterministic(go_source_tree: Path) -> None:
    """Test that resolving the same line twice gives the same answer."""
    path = go_source_tree / "main.go"
    assert resolve_function(path, 8) == resolve_function(path, 8)


def test_resolve_function_skips_method_receiver(go_source_tree: Path) -> None:
    """Test that a Go method resolves to its name rather than its receiver."""
    assert resolve_function(go_source_tree / "pkg" / "util.go", 6) == "Start"


def test_resolve_function_missing_file(tmp_path: Path) -> None:
    """Test that a missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        resolve_function(tmp_path / "missing.go", 3)


def test_resolve_function_empty_file(tmp_path: Path) -> None:
    """Test that an empty file resolves to the global sentinel."""
    path = tmp_path / "empty.go"
    path.write_text("")
    assert resolve_function(path, 10) == "global"


def test_resolve_function_custom_keyword(tmp_path: Path) -> None:
    """Test resolution with another declaration keyword."""
    path = tmp_path / "script.py"
    path.write_text("import os\n\ndef first(a):\n    pass\n\nasync def second():\n    pass\n")
    assert resolve_function(path, 4, keyword="def") == "first"
    assert resolve_function(path, 7, keyword="def") == "first"
    assert resolve_function(path, 1, keyword="def") == "global"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("func Foo(x int) {", "Foo"),
        ("\tfunc   Spaced  (a, b int) {", "Spaced"),
        ("func (s *Server) Start() error {", "Start"),
        ("func(x int) {", ""),
        ("funcs := map[string]int{}", None),
        ("// func Commented() {", None),
        ("return nil", None),
        ("func NoParams", "NoParams"),
    ],
)
def test_parse_function_declaration(text: str, expected: str | None) -> None:
    """Test parsing of single declaration lines."""
    assert parse_function_declaration(text) == expected
