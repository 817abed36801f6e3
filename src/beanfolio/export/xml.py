"""XML text helpers shared by the spreadsheet builders."""

import re

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
XML_DECLARATION_STANDALONE = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'

_XML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}

_SPACE_SENSITIVE = re.compile(r"[\n\r\t]| {2,}")


def escape_xml(value: str) -> str:
    """Escape text for use in XML content or attribute values."""
    return "".join(_XML_ESCAPES.get(char, char) for char in value)


def should_preserve_space(value: str) -> bool:
    """True when an XML consumer would otherwise collapse meaningful whitespace."""
    return value.strip() != value or bool(_SPACE_SENSITIVE.search(value))
