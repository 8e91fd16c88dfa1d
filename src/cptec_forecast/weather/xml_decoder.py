"""XML to nested-mapping decoder for the CPTEC feeds.

The feeds are plain element trees without meaningful attributes. An
element decodes to:

- ``None`` when it has no text and no children,
- a scalar when it only has text: int or float for numeric text, str
  otherwise, and always str for tags listed in ``text_tags``,
- a dict of child tag to decoded value when it has children. A tag that
  occurs more than once becomes a list, a tag that occurs once does not.

The last rule is why callers must pass repeated entries through
:func:`as_list` before iterating.
"""

import logging
import re
import xml.etree.ElementTree as ET
from typing import AbstractSet, Any, Dict, List, Union

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"^-?\d+$")
_FLOAT_RE = re.compile(r"^-?\d+\.\d+$")


class XmlDecodeError(ValueError):
    """Raised when a document is not well-formed XML."""
    pass


def coerce_scalar(text: str) -> Union[int, float, str]:
    """Convert numeric text to int or float, leave anything else as str.

    Leading zeros are dropped, so '090' and '90' both read as 90.
    """
    value = text.strip()
    if _INT_RE.match(value):
        return int(value)
    if _FLOAT_RE.match(value):
        return float(value)
    return value


def _decode_element(element: ET.Element, text_tags: AbstractSet[str]) -> Any:
    """Decode one element following the rules in the module docstring."""
    children = list(element)
    if not children:
        text = element.text
        if text is None or not text.strip():
            return None
        if element.tag in text_tags:
            return text.strip()
        return coerce_scalar(text)

    decoded: Dict[str, Any] = {}
    for child in children:
        value = _decode_element(child, text_tags)
        if child.tag not in decoded:
            decoded[child.tag] = value
        elif isinstance(decoded[child.tag], list):
            decoded[child.tag].append(value)
        else:
            decoded[child.tag] = [decoded[child.tag], value]
    return decoded


def decode_xml(document: Union[bytes, str], text_tags: AbstractSet[str] = frozenset()) -> Dict[str, Any]:
    """Decode an XML document into ``{root_tag: decoded_root}``.

    Args:
        document: Raw XML, bytes are preferred so the declared encoding
            (ISO-8859-1 for CPTEC) is honoured
        text_tags: Leaf tags whose text is kept verbatim, for identifiers

    Returns:
        Single-key dict keyed by the root element's tag

    Raises:
        XmlDecodeError: If the document is not well-formed
    """
    try:
        root = ET.fromstring(document)
    except ET.ParseError as e:
        logger.error(f"Malformed XML document: {e}")
        raise XmlDecodeError(f"Malformed XML document: {e}") from e

    return {root.tag: _decode_element(root, text_tags)}


def as_list(value: Any) -> List[Any]:
    """Normalize a decoded value that may be absent, single, or repeated."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]
