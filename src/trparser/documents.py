"""Deserialization of raw report documents into nested structures.

XML is turned into the shape transformers read (see transformers.nodes):

    <testsuite name="Login" tests="2">          {"testsuite": {
      <testcase name="ok"/>                         "@name": "Login", "@tests": "2",
      <system-out>log</system-out>                  "testcase": [{"@name": "ok"}],
    </testsuite>                                    "system-out": ["log"]}}
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from typing import Any

from trparser.core.exceptions import FormatError


def _local_name(tag: str) -> str:
    """Strip an XML namespace: ``{urn:x}testsuite`` -> ``testsuite``."""
    return tag.rsplit("}", 1)[-1]


def _element_to_node(element: ET.Element) -> dict[str, Any] | str:
    node: dict[str, Any] = {f"@{_local_name(k)}": v for k, v in element.attrib.items()}
    for child in element:
        node.setdefault(_local_name(child.tag), []).append(_element_to_node(child))

    content = element.text if element.text and element.text.strip() else ""
    if not node:
        return content
    if content:
        node["#text"] = content
    return node


def xml_to_document(content: str | bytes) -> dict[str, Any]:
    """Parse XML content into a ``{root_tag: node}`` mapping.

    Raises:
        FormatError: If the content is not well-formed XML.
    """
    try:
        root = ET.fromstring(content)  # noqa: S314 - trusted test report data
    except ET.ParseError as e:
        raise FormatError(f"Invalid XML document: {e}") from e
    return {_local_name(root.tag): _element_to_node(root)}


def json_to_document(content: str | bytes) -> Any:
    """Parse JSON content.

    Raises:
        FormatError: If the content is not valid JSON.
    """
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise FormatError(f"Invalid JSON document: {e}") from e


def load_document(content: str | bytes, source_format: str) -> Any:
    """Deserialize content according to its source format ("xml" or "json")."""
    if source_format == "json":
        return json_to_document(content)
    return xml_to_document(content)
