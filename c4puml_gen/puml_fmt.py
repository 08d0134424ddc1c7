# c4puml_gen/puml_fmt.py
from __future__ import annotations

import re
from typing import Optional

# PlantUML aliases must be alphanumeric/underscore and must not start with a
# digit.
PUML_ALIAS_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_NON_ALIAS_CHARS_RE = re.compile(r"[^A-Za-z0-9_]")
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
# A backslash that does not start a PlantUML `\n` newline marker.
_LONE_BACKSLASH_RE = re.compile(r"\\(?!n)")


def plantuml_block(code: str) -> str:
    """Wrap PlantUML source in a Markdown code fence."""
    return "```plantuml\n" + code.rstrip() + "\n```\n"


def escape_text(text: Optional[str]) -> str:
    """Escape free text for a double-quoted C4 macro argument.

    Backslashes are doubled, quotes are backslash-escaped and line breaks
    become the PlantUML `\\n` sequence. Existing `\\n` markers are left alone.
    """
    if text is None:
        return ""
    escaped = _LONE_BACKSLASH_RE.sub(r"\\\\", str(text)).replace('"', '\\"')
    return _LINE_BREAK_RE.sub(r"\\n", escaped)


def quote(text: Optional[str]) -> str:
    return f'"{escape_text(text)}"'


def has_value(text: Optional[str]) -> bool:
    return text is not None and bool(text.strip())


def tokenize_name(name: str) -> str:
    """Derive a stable PlantUML alias from a display name."""
    alias = _NON_ALIAS_CHARS_RE.sub("", name or "")
    if not alias:
        return "_"
    if alias[0].isdigit():
        return f"_{alias}"
    return alias


def assert_puml_alias(value: str) -> str:
    if not PUML_ALIAS_RE.match(value):
        raise ValueError(f"Not PlantUML-safe alias: {value!r}")
    return value


def block_text(text: str, width: int, separator: str) -> str:
    """Join words into blocks of at least `width` characters.

    A block ends at the first word boundary at or past `width`; words are
    never split.
    """
    words = text.split()
    if not words:
        return ""

    blocks: list[str] = []
    current = words[0]
    for word in words[1:]:
        if len(current) >= width:
            blocks.append(current)
            current = word
        else:
            current = f"{current} {word}"
    blocks.append(current)
    return separator.join(blocks)


def puml_call(macro: str, alias: str, *texts: Optional[str], min_args: int = 0) -> str:
    """Format `macro(alias, "a", "b", ...)`.

    Trailing empty arguments are dropped down to `min_args` text arguments;
    an empty argument followed by a non-empty one is kept as `""` so
    positions stay stable.
    """
    args = [quote(t.strip()) if t is not None and has_value(t) else '""' for t in texts]
    while len(args) > min_args and args[-1] == '""':
        args.pop()
    return f"{macro}({', '.join([alias, *args])})"


def puml_boundary_open(
    macro: str, alias: str, *texts: Optional[str], min_args: int = 0
) -> str:
    return puml_call(macro, alias, *texts, min_args=min_args) + " {"


def puml_boundary_close() -> str:
    return "}"


def puml_comment(text: str) -> str:
    t = str(text).replace("\r", " ").replace("\n", " ").strip()
    return f"' {t}"


def puml_title(text: str) -> str:
    """Title text is unquoted; keep it on one source line."""
    return _LINE_BREAK_RE.sub(r"\\n", str(text).strip())
