"""Documentation-comment extraction for catalog symbols."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict
import xml.etree.ElementTree as ET


@dataclass
class Documentation:
    """Plain-text documentation extracted from an XML doc comment."""

    summary: str = ""
    params: Dict[str, str] = field(default_factory=dict)
    returns: str = ""


def parse_documentation(xml_text: str | None) -> Documentation:
    """Extract summary, parameter and return text from a doc-comment fragment.

    Accepts either a full ``<member>`` element or a bare fragment starting with
    ``<summary>``. Anything else, or malformed XML, yields empty documentation.
    """
    fragment = _normalise(xml_text)
    if not fragment:
        return Documentation()
    try:
        root = ET.fromstring(fragment)
    except ET.ParseError:
        return Documentation()

    docs = Documentation()
    for element in root.iter():
        tag = element.tag
        if tag in {"summary", "para"}:
            text = _leading_text(element)
            if text and not docs.summary:
                docs.summary = text
        elif tag == "param":
            name = element.get("name")
            text = _leading_text(element)
            if name and text:
                docs.params[name] = text
        elif tag == "returns":
            text = _leading_text(element)
            if text:
                docs.returns = text
    return docs


def parse_summary(xml_text: str | None) -> str:
    return parse_documentation(xml_text).summary


def _normalise(xml_text: str | None) -> str:
    if not xml_text:
        return ""
    comment = xml_text.replace("\r", " ").strip()
    if comment.startswith("<summary"):
        return f"<parent>{comment}</parent>"
    if comment.startswith("<member"):
        return comment
    return ""


def _leading_text(element: ET.Element) -> str:
    # Only the text before the first child element counts, e.g. the part of a
    # summary that precedes a <see cref=".."/> reference.
    text = element.text or ""
    return text.strip()


__all__ = ["Documentation", "parse_documentation", "parse_summary"]
