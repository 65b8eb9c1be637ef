"""Locating and reading existing documentation comments in AL source.

Nothing here raises on bad input: malformed documentation parses to None,
missing tags extract as "" and a missing comment block is reported as -1.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from typing import Any

from .buffer import TextBuffer

logger = logging.getLogger(__name__)

DOC_COMMENT_MARKER = "///"

INT_PATTERN = re.compile(r"^[-+]?\d+$")
FLOAT_PATTERN = re.compile(r"^[-+]?(\d+\.\d*|\.\d+|\d+(?=[eE]))([eE][-+]?\d+)?$")


def strip_comment_markers(text: str) -> str:
    """Remove the leading '///' (and one following space) from every line."""
    lines = []
    for line in text.split("\n"):
        stripped = line.lstrip()
        if stripped.startswith(DOC_COMMENT_MARKER):
            stripped = stripped[len(DOC_COMMENT_MARKER):]
            if stripped.startswith(" "):
                stripped = stripped[1:]
            line = stripped
        lines.append(line)
    return "\n".join(lines)


def parse_doc_xml(xml_text: str) -> dict[str, Any] | None:
    """
    Parse a documentation block into a plain dict tree.

    Conventions:
    - A tag without attributes or children maps to its stripped text.
    - Otherwise it maps to a dict; attributes go under "attr" (values coerced
      to bool/int/float where they look like one), text under "value",
      child tags under their own names.
    - Repeated tags collect into a list.
    - Namespaces are dropped.

    Args:
        xml_text: Documentation text, with or without '///' prefixes.

    Returns:
        Mapping of top-level tag name to node, or None if the text does not
        parse.
    """
    body = strip_comment_markers(xml_text)
    try:
        root = ET.fromstring(f"<root>{body}</root>")
    except (ET.ParseError, UnicodeError, ValueError) as e:
        logger.debug("Documentation does not parse as XML: %s", e)
        return None

    tree: dict[str, Any] = {}
    for child in root:
        _add_child(tree, _local_name(child.tag), _element_to_node(child))
    return tree


def _local_name(name: str) -> str:
    # "{uri}summary" -> "summary"
    return name.rsplit("}", 1)[-1]


def _coerce(value: str) -> Any:
    if value == "true":
        return True
    if value == "false":
        return False
    if INT_PATTERN.match(value):
        return int(value)
    if FLOAT_PATTERN.match(value):
        return float(value)
    return value


def _element_text(element: ET.Element) -> str:
    parts = [element.text or ""]
    parts.extend(child.tail or "" for child in element)
    return "".join(parts).strip()


def _element_to_node(element: ET.Element) -> Any:
    attrs = {_local_name(k): _coerce(v) for k, v in element.attrib.items()}
    children = list(element)
    text = _element_text(element)

    if not attrs and not children:
        return text

    node: dict[str, Any] = {}
    if attrs:
        node["attr"] = attrs
    for child in children:
        _add_child(node, _local_name(child.tag), _element_to_node(child))
    if text:
        node["value"] = text
    return node


def _add_child(node: dict[str, Any], name: str, value: Any) -> None:
    if name not in node:
        node[name] = value
    elif isinstance(node[name], list):
        node[name].append(value)
    else:
        node[name] = [node[name], value]


def extract_tag(
    xml_text: str, tag: str, attr_name: str = "", attr_value: str = ""
) -> str:
    """
    Extract the lines of one tag from documentation text.

    Works line by line: collection starts at the first line containing the
    opening tag (`<tag>`, or `<tag attr_name="attr_value">` when filtering on
    an attribute) and ends with the line containing `</tag>`. Text between
    tags and unbalanced placeholders elsewhere in the block do not matter.

    Args:
        xml_text: Documentation text, lines separated by '\\n'.
        tag: Tag name, e.g. "summary" or "param".
        attr_name: Optional attribute to match on the opening tag.
        attr_value: Value the attribute must have.

    Returns:
        The matching lines joined with '\\n', or "" if there is no match.
        Only the first matching tag is returned.
    """
    if attr_name:
        opening = f'<{tag} {attr_name}="{attr_value}">'
    else:
        opening = f"<{tag}>"
    closing = f"</{tag}>"

    collected: list[str] = []
    in_tag = False
    for line in xml_text.split("\n"):
        if not in_tag and opening in line:
            in_tag = True
        if in_tag:
            collected.append(line)
            if closing in line:
                break
    return "\n".join(collected)


def find_doc_block_end(buffer: TextBuffer, from_line_no: int | None = None) -> int:
    """
    Find where a documentation block directly above a line ends.

    Only the line immediately above `from_line_no` is inspected: blank or
    code lines in between mean there is no block. The scan does not skip
    blank lines.

    Args:
        buffer: Buffer to search.
        from_line_no: 0-based reference line (default: the cursor line).

    Returns:
        The line after the last comment line (the insertion point below the
        block), or -1 if the line above is not a documentation comment.
    """
    if from_line_no is None:
        from_line_no = buffer.cursor_line

    line_no = min(from_line_no, buffer.line_count()) - 1
    if line_no >= 0 and DOC_COMMENT_MARKER in buffer.line_at(line_no):
        return line_no + 1
    return -1


def find_doc_block_start(buffer: TextBuffer, from_line_no: int | None = None) -> int:
    """Find the first line of the contiguous comment block above a line, or -1."""
    end = find_doc_block_end(buffer, from_line_no)
    if end == -1:
        return -1

    start = end - 1
    while start > 0 and DOC_COMMENT_MARKER in buffer.line_at(start - 1):
        start -= 1
    return start


def doc_block_above(buffer: TextBuffer, line_no: int) -> str:
    """Return the documentation block directly above a line ("" if none)."""
    start = find_doc_block_start(buffer, line_no)
    if start == -1:
        return ""
    end = find_doc_block_end(buffer, line_no)
    return "\n".join(buffer.line_at(n) for n in range(start, end))


def line_indent_column(buffer: TextBuffer, line_no: int) -> int:
    """Number of leading whitespace characters on a line (0 if out of range)."""
    if line_no < 0 or line_no >= buffer.line_count():
        return 0
    line = buffer.line_at(line_no)
    return len(line) - len(line.lstrip())
