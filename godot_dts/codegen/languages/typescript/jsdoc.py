"""
Documentation rendering for TypeScript declarations.

Turns engine doc text (BBCode-like markup) plus @param/@returns/@deprecated
annotation lines into JSDoc block comments.
"""

import re
from typing import Iterable, List, Optional

DEFAULT_DOCS_URL = "https://docs.godotengine.org/en/stable"

_ENTITIES = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&apos;", "'"),
    ("&amp;", "&"),
)

_REFERENCE_TAGS = (
    "method|member|signal|constant|param|enum|annotation|constructor|operator|theme_item"
)

_FENCE = re.compile(r"^\s*```")
_SECTION = re.compile(r"^(\*\*.+\*\*:?|Note:|Warning:|Important:)")


def _inline_code(match: "re.Match[str]") -> str:
    code = match.group(1).replace("`", "\\`")
    return f"`{code}`"


# Applied in order; later rules assume earlier ones already ran
_MARKUP_RULES = (
    (re.compile(r"\[b\](.*?)\[/b\]", re.S), r"**\1**"),
    (re.compile(r"\[i\](.*?)\[/i\]", re.S), r"*\1*"),
    (re.compile(r"\[code\](.*?)\[/code\]", re.S), _inline_code),
    # Tag names end at "]" or whitespace, so [codeblock] never matches [codeblocks]
    (re.compile(r"\[/?codeblocks\]"), ""),
    (re.compile(r"\[codeblock(?:\s[^\]]*)?\](.*?)\[/codeblock\]", re.S), "```gdscript\n\\1\n```"),
    (re.compile(r"\[gdscript(?:\s[^\]]*)?\](.*?)\[/gdscript\]", re.S), "```gdscript\n\\1\n```"),
    (re.compile(r"\[csharp(?:\s[^\]]*)?\](.*?)\[/csharp\]", re.S), ""),
    (re.compile(r"\[kbd\](.*?)\[/kbd\]", re.S), r"`\1`"),
    (re.compile(r"\[url=([^\]]+)\](.*?)\[/url\]", re.S), r"\2 (\1)"),
    (re.compile(rf"\[(?:{_REFERENCE_TAGS})\s+([^\]]+)\]"), r"`\1`"),
    (re.compile(r"\[([A-Z][A-Za-z0-9_]*(?:\.[A-Za-z0-9_]+)?)\]"), r"`\1`"),
)


def decode_entities(text: str) -> str:
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text


def convert_markup(text: str, docs_url: str = DEFAULT_DOCS_URL) -> str:
    """Convert engine doc markup to Markdown."""
    text = decode_entities(text).replace("$DOCS_URL", docs_url)
    for pattern, replacement in _MARKUP_RULES:
        text = pattern.sub(replacement, text)
    return text


def split_lines(text: Optional[str]) -> List[str]:
    """Split free text into lines; blank or missing text gives no lines."""
    if not text or not text.strip():
        return []
    return text.strip().replace("\r\n", "\n").split("\n")


def param_line(name: str, type_expr: Optional[str], default: Optional[str] = None) -> str:
    line = f"@param {name}"
    if type_expr:
        line = f"{line} {type_expr}"
    if default is not None:
        line = f"{line} (optional, default: {default})"
    return line


def returns_line(type_expr: str) -> str:
    return f"@returns {type_expr}"


def deprecated_line(note: str) -> str:
    return f"@deprecated {note}"


def _body_lines(text: str) -> List[str]:
    """Normalize whitespace outside code fences and add paragraph breaks."""
    out: List[str] = []
    in_fence = False
    prev_blank = False

    for raw_line in text.split("\n"):
        if _FENCE.match(raw_line):
            if not prev_blank and out:
                out.append("")
            in_fence = not in_fence
            out.append(raw_line.rstrip())
            prev_blank = False
            continue

        # Code keeps its indentation
        line = raw_line.rstrip() if in_fence else raw_line.strip()
        is_blank = line == ""

        if not in_fence and not is_blank and _SECTION.match(line):
            if not prev_blank and out:
                out.append("")

        out.append(line)
        prev_blank = is_blank

    return out


def render_doc(
    lines: Iterable[str], indent: str = "", docs_url: str = DEFAULT_DOCS_URL
) -> Optional[str]:
    """
    Render doc lines as a JSDoc block comment.

    Args:
        lines: Prose and annotation lines; a line may itself contain breaks
        indent: Prefix for every line of the block
        docs_url: Replacement for ``$DOCS_URL`` in the text

    Returns:
        The block comment, or None when there is nothing to document
    """
    lines = [line for line in lines if line is not None]
    if not any(line.strip() for line in lines):
        return None

    text = convert_markup("\n".join(lines).replace("\r\n", "\n"), docs_url)
    body = _body_lines(text)
    while body and not body[-1]:
        body.pop()
    while body and not body[0]:
        body.pop(0)
    if not body:
        return None

    block = [f"{indent}/**"]
    for line in body:
        # A "*/" in the content would end the comment early
        line = line.replace("*/", "*\\/")
        block.append(f"{indent} * {line}" if line else f"{indent} *")
    block.append(f"{indent} */")

    return "\n".join(block)
