"""
Conversion between text and HTML/XML character references.

Example usage:

import charrefs
charrefs.unescape("caf&eacute; &amp; cr&#xE8;me")   # "café & crème"
charrefs.escape("<café>", charrefs.canEncodeFor("ascii"),
                charrefs.EscapeMode.restricted)  # "&lt;caf&#233;&gt;"
"""
from .constants import EntityLoadError
from .entities import EscapeMode, ReferenceSet, EntityTable, defaultTable
from .entities import isNamedEntity, getCharacterByName, lookup, reverseLookup
from .decoder import unescape, ReferenceDecoder
from .serializer import escape, canEncodeFor, EntitySerializer

__all__ = ["EscapeMode", "ReferenceSet", "EntityTable", "EntityLoadError",
           "defaultTable", "isNamedEntity", "getCharacterByName", "lookup",
           "reverseLookup", "unescape", "ReferenceDecoder", "escape",
           "canEncodeFor", "EntitySerializer"]

__version__ = "1.0.0"
