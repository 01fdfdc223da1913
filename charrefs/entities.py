"""Named character reference tables.

Three escape modes share a single registry:

restricted
  quot, amp, apos, lt and gt. Safe for XML and XHTML output.
base
  The HTML 4 Latin-1 references, the ones that legacy content uses without
  a trailing ';'.
full
  Every single-codepoint named reference of the HTML living standard.

All three map codepoints to names for escaping. Only the full set has a
name to codepoint index, and that index is what decoding consults.

The default table is read from ``data/entities-full.properties`` when this
module is first imported and never changes afterwards, so it can be shared
between threads freely.
"""
import enum
import io
import itertools
import os
import re
from types import MappingProxyType

from .constants import xhtmlEntities, baseEntities, maxCodepoint
from .constants import EntityLoadError

dataPath = os.path.join(os.path.dirname(__file__), "data",
                        "entities-full.properties")

_base34Digits = "0123456789abcdefghijklmnopqrstuvwx"
_nameRegex = re.compile(r"[A-Za-z][A-Za-z0-9]*\Z")
_base34Regex = re.compile(r"[0-9a-xA-X]+\Z")


class EscapeMode(enum.Enum):
    """Which named references escaping may emit."""
    restricted = "restricted"
    base = "base"
    full = "full"

    # Older spellings
    xhtml = "restricted"
    extended = "full"


ReferenceSet = EscapeMode


def getEscapeMode(mode):
    """Return the EscapeMode for ``mode``, which may be a member or a
    member name such as ``"base"`` or ``"xhtml"``."""
    if isinstance(mode, EscapeMode):
        return mode
    try:
        return EscapeMode[mode]
    except KeyError:
        raise ValueError("Unknown escape mode: %r" % (mode,))


def toBase34(n):
    if n < 0:
        raise ValueError("Negative values have no base 34 form: %d" % n)
    rv = []
    while True:
        n, digit = divmod(n, 34)
        rv.append(_base34Digits[digit])
        if not n:
            break
    return "".join(reversed(rv))


def fromBase34(value):
    # int(value, 34) alone would also accept signs, whitespace and "_"
    if not _base34Regex.match(value):
        raise ValueError("Invalid base 34 literal: %r" % (value,))
    return int(value, 34)


def loadEntities(path=dataPath):
    """Read ``(name, codepoint)`` pairs from a properties file.

    Each line holds ``name=value`` where value is the codepoint in base 34.
    Blank lines and lines starting with '#' or '!' are ignored. Anything
    else that is not a well formed entry makes the whole file invalid and
    raises EntityLoadError.
    """
    try:
        with io.open(path, "r", encoding="ascii") as fp:
            lines = fp.readlines()
    except (IOError, UnicodeDecodeError) as e:
        raise EntityLoadError("Could not read entity data from %s: %s" %
                              (path, e))

    entities = []
    seen = set()
    for lineno, line in enumerate(lines, 1):
        line = line.strip()
        if not line or line[0] in "#!":
            continue
        name, sep, value = line.partition("=")
        name = name.strip()
        value = value.strip()
        if not sep or not _nameRegex.match(name):
            raise EntityLoadError("%s:%d: malformed entry %r" %
                                  (path, lineno, line))
        try:
            codepoint = fromBase34(value)
        except ValueError:
            raise EntityLoadError("%s:%d: invalid codepoint %r for %s" %
                                  (path, lineno, value, name))
        if codepoint > maxCodepoint:
            raise EntityLoadError("%s:%d: codepoint for %s out of range" %
                                  (path, lineno, name))
        if name in seen:
            raise EntityLoadError("%s:%d: duplicate entry for %s" %
                                  (path, lineno, name))
        seen.add(name)
        entities.append((name, codepoint))

    if not entities:
        raise EntityLoadError("%s: no entities defined" % path)
    return entities


def _nameOrder(name):
    # prefer &amp; over &AMP;, then &rarr; over &srarr;
    return (not name.islower(), len(name), name)


def _buildEscapeMap(entities):
    escapeMap = {}
    for name, codepoint in entities:
        current = escapeMap.get(codepoint)
        if current is None or _nameOrder(name) < _nameOrder(current):
            escapeMap[codepoint] = name
    return MappingProxyType(escapeMap)


class EntityTable(object):
    """Immutable registry of named character references.

    ``entities`` is the full set as ``(name, codepoint)`` pairs. The
    restricted and base sets must be subsets of it.
    """

    def __init__(self, entities, restricted=xhtmlEntities, base=baseEntities):
        full = {}
        for name, codepoint in entities:
            if full.get(name, codepoint) != codepoint:
                raise EntityLoadError("Conflicting codepoints for %s" % name)
            full[name] = codepoint
        if not full:
            raise EntityLoadError("No entities defined")

        for name, codepoint in itertools.chain(restricted, base):
            if full.get(name) != codepoint:
                raise EntityLoadError(
                    "%s (U+%04X) is missing from the full entity set" %
                    (name, codepoint))

        self._entities = MappingProxyType(full)
        self._escapeMaps = {
            EscapeMode.restricted: _buildEscapeMap(restricted),
            EscapeMode.base: _buildEscapeMap(base),
            EscapeMode.full: _buildEscapeMap(full.items()),
        }

    @classmethod
    def fromFile(cls, path=dataPath):
        return cls(loadEntities(path))

    def __len__(self):
        return len(self._entities)

    def __contains__(self, name):
        return name in self._entities

    def __repr__(self):
        return "<%s with %d entities>" % (type(self).__name__, len(self))

    def isNamedEntity(self, name):
        return name in self._entities

    def lookup(self, name):
        """Return the codepoint for ``name``, or None if it is unknown."""
        return self._entities.get(name)

    def getCharacterByName(self, name):
        codepoint = self._entities.get(name)
        if codepoint is None:
            return None
        return chr(codepoint)

    def escapeMap(self, mode):
        """Read-only mapping of codepoint to canonical name for ``mode``."""
        return self._escapeMaps[getEscapeMode(mode)]

    def reverseLookup(self, codepoint, mode=EscapeMode.full):
        """Return the canonical name of ``codepoint`` in ``mode``, or None.

        ``codepoint`` may be an integer or a single character.
        """
        if isinstance(codepoint, str):
            codepoint = ord(codepoint)
        return self.escapeMap(mode).get(codepoint)


defaultTable = EntityTable.fromFile()


def isNamedEntity(name):
    return defaultTable.isNamedEntity(name)


def getCharacterByName(name):
    return defaultTable.getCharacterByName(name)


def lookup(name):
    return defaultTable.lookup(name)


def reverseLookup(codepoint, mode=EscapeMode.full):
    return defaultTable.reverseLookup(codepoint, mode)
