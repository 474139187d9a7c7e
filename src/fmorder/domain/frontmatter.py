"""Front-matter parsing and rendering.

A document has front matter when its first line is ``---`` and a later
line closes the block with ``---``. Everything after the closing line is
the body and is carried around verbatim, line endings included, so a
rewrite only ever touches the YAML block.

The YAML itself goes through ruamel.yaml's round-trip mode: key order,
comments and quote styles survive a load/dump cycle.
"""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError

from fmorder.errors import FrontMatterParseError, NoFrontMatterError, SerializationError

FRONTMATTER_DELIMITER = "---"


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    ruamel.yaml's YAML object is stateful and a failed dump can leave it
    broken, so every call gets its own instance.
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    return y


@dataclass(frozen=True)
class SplitDocument:
    """Raw pieces of a document with a front-matter block."""

    yaml_text: str
    body: str


def _is_delimiter(line: str) -> bool:
    return line.rstrip() == FRONTMATTER_DELIMITER


def split_frontmatter(content: str) -> SplitDocument | None:
    """Split *content* into its YAML block and verbatim body.

    Returns None when the document has no complete front-matter block.
    """
    lines = content.splitlines(keepends=True)
    if not lines or not _is_delimiter(lines[0]):
        return None

    for i, line in enumerate(lines[1:], start=1):
        if _is_delimiter(line):
            return SplitDocument(
                yaml_text="".join(lines[1:i]),
                body="".join(lines[i + 1 :]),
            )
    return None


def parse_frontmatter(content: str) -> tuple[CommentedMap, str]:
    """Parse YAML front matter and body from document text.

    Returns:
        A ``(frontmatter_map, body_text)`` tuple. The body is everything
        after the closing delimiter line, unchanged.

    Raises:
        NoFrontMatterError: No block, or a block that is not a mapping.
        FrontMatterParseError: The block is not valid YAML.
    """
    split = split_frontmatter(content)
    if split is None:
        raise NoFrontMatterError("no front matter")

    try:
        loaded = _new_yaml().load(split.yaml_text)
    except YAMLError as exc:
        raise FrontMatterParseError(f"invalid YAML in front matter ({exc})") from exc

    if loaded is None:
        loaded = CommentedMap()
    if not isinstance(loaded, CommentedMap):
        raise NoFrontMatterError("front matter is not a mapping")
    return loaded, split.body


def render_frontmatter(frontmatter: CommentedMap, body: str) -> str:
    """Render a front-matter map above *body*.

    Layout: ``---``, the YAML dump, ``---``, then *body* exactly as given.

    Raises:
        SerializationError: The map holds something YAML cannot represent.
    """
    buf = StringIO()
    try:
        _new_yaml().dump(frontmatter, buf)
    except YAMLError as exc:
        raise SerializationError(f"cannot serialize front matter ({exc})") from exc
    yaml_text = buf.getvalue()
    if not yaml_text.endswith("\n"):
        yaml_text += "\n"

    return "".join([FRONTMATTER_DELIMITER, "\n", yaml_text, FRONTMATTER_DELIMITER, "\n", body])
