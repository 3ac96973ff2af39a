"""Resolves the function enclosing a line of a source file.

Resolution is a single forward pass over the file that remembers the most
recent line starting with the function declaration keyword. It builds no
syntax tree: multi-line declarations, nested or anonymous functions, and
keywords inside strings or comments are not handled.
"""

from pathlib import Path

from sonar_scan_manager.utils.constants import DEFAULT_FUNCTION_KEYWORD, GLOBAL_FUNCTION_SENTINEL


def parse_function_declaration(text: str, keyword: str = DEFAULT_FUNCTION_KEYWORD) -> str | None:
    """Return the function name declared on a line, or None if the line declares no function.

    Leading whitespace is ignored. The keyword must be followed by whitespace or
    an opening parenthesis. A Go method receiver such as ``(s *Server)`` is
    skipped, so ``func (s *Server) Start() {`` declares ``Start``.
    """
    text = text.lstrip()
    if not text.startswith(keyword):
        return None
    rest = text[len(keyword) :]
    if rest and not (rest[0].isspace() or rest[0] == "("):
        return None
    rest = rest.lstrip()
    if rest.startswith("("):
        # A receiver is followed by the method name and its own parameter list.
        receiver_end = rest.find(")")
        method = rest[receiver_end + 1 :] if receiver_end != -1 else ""
        if "(" in method:
            rest = method
    return rest.split("(", 1)[0].strip()


def resolve_function(path: str | Path, line: int, keyword: str = DEFAULT_FUNCTION_KEYWORD) -> str:
    """Return the name of the function enclosing a 1-based line of a file.

    Lines 1 through ``line`` inclusive are examined, so a declaration on the
    requested line itself is its enclosing function. When no declaration
    precedes the line, ``"global"`` is returned.

    Raises:
        OSError: If the file cannot be opened.
    """
    current_function = GLOBAL_FUNCTION_SENTINEL
    with open(path, encoding="utf-8", errors="replace") as f:
        for line_number, text in enumerate(f, start=1):
            if line_number > line:
                break
            declared = parse_function_declaration(text, keyword)
            if declared is not None:
                current_function = declared
    return current_function
