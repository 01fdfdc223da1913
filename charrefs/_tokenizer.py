from collections import deque

from .constants import EOF, asciiLetters, asciiAlnum, digits, hexDigits
from .constants import maxCodepoint
from .entities import defaultTable
from ._inputstream import TextInputStream

# Longest digit runs that can still be a valid codepoint once leading
# zeros are gone: 10FFFF and 1114111.
_maxSignificantDigits = {16: 6, 10: 7}


class Token(object):
    def __init__(self, data=None):
        self.data = data


class Characters(Token):
    pass


class CharacterReference(Token):
    """A resolved reference. ``data`` is the character, ``source`` the
    text it replaces."""
    def __init__(self, data, source):
        self.data = data
        self.source = source


class ParseError(Token):
    def __init__(self, data, datavars=None, position=None):
        self.data = data
        self.datavars = datavars or {}
        self.position = position


class ReferenceTokenizer(object):
    """ This class splits text into literal runs and character references.

    * self.state
      Holds a reference to the method to be invoked for the next step.
      It returns False once the input is exhausted.

    * self.stream
      Points to the TextInputStream object.

    * self.strict
      When true a reference is only recognized with its terminating ';'.

    A reference that matches the syntax but cannot be resolved (an unknown
    name, a codepoint out of range) comes out as Characters holding the
    original text, preceded by a ParseError.
    """

    def __init__(self, text, strict=False, table=None):
        self.stream = TextInputStream(text)
        self.strict = strict
        self.table = table if table is not None else defaultTable
        self.state = self.dataState
        self.tokenQueue = deque([])

    def __iter__(self):
        """ Run the states and yield tokens as they become available."""
        while self.state():
            while self.tokenQueue:
                yield self.tokenQueue.popleft()
        while self.tokenQueue:
            yield self.tokenQueue.popleft()

    def dataState(self):
        data = self.stream.char()
        if data == "&":
            self.state = self.referenceState
        elif data is EOF:
            return False
        else:
            self.tokenQueue.append(Characters(data + self.stream.charsUntil(("&",))))
        return True

    def referenceState(self):
        self.consumeReference()
        self.state = self.dataState
        return True

    def consumeReference(self):
        # Offset of the "&", which has already been consumed
        start = self.stream.offset - 1

        c = self.stream.char()
        if c == "#":
            c = self.stream.char()
            radix = 10
            if c in ("x", "X"):
                radix = 16
                c = self.stream.char()
            self.stream.unget(c)
            if c is EOF or c not in hexDigits:
                # "&#" or "&#x" without digits is plain text
                self.emitVerbatim(start)
                return
            # Hex digits are part of the match even without the marker
            number = self.stream.charsUntil(hexDigits, True)
            if not self.consumeSemicolon(start):
                return
            if radix == 10 and not digits.issuperset(number):
                self.parseError(start, "invalid-decimal-numeric-entity",
                                {"charAsText": self.source(start)})
                self.emitVerbatim(start)
                return
            charAsInt = self.parseNumber(number, radix)
            if charAsInt is None:
                self.parseError(start, "illegal-codepoint-for-numeric-entity",
                                {"charAsText": self.source(start)})
                self.emitVerbatim(start)
            else:
                self.emitReference(start, chr(charAsInt),
                                   "numeric-entity-without-semicolon")

        elif c is not EOF and c in asciiLetters:
            name = c + self.stream.charsUntil(asciiAlnum, True)
            if not self.consumeSemicolon(start):
                return
            codepoint = self.table.lookup(name)
            if codepoint is None:
                self.parseError(start, "unknown-named-entity", {"name": name})
                self.emitVerbatim(start)
            else:
                self.emitReference(start, chr(codepoint),
                                   "named-entity-without-semicolon")

        else:
            # A lone "&"
            self.stream.unget(c)
            self.emitVerbatim(start)

    def consumeSemicolon(self, start):
        """Consume the terminating ';' if there is one.

        Returns False when the reference is not recognized at all, that is
        in strict mode without a ';'. The text has been emitted in that case.
        """
        c = self.stream.char()
        if c == ";":
            return True
        self.stream.unget(c)
        if self.strict:
            self.emitVerbatim(start)
            return False
        return True

    def parseNumber(self, number, radix):
        """Returns the codepoint for ``number`` or None if it is not one."""
        significant = number.lstrip("0")
        if len(significant) > _maxSignificantDigits[radix]:
            return None
        charAsInt = int(significant or "0", radix)
        if charAsInt > maxCodepoint:
            return None
        return charAsInt

    def source(self, start):
        return self.stream.data[start:self.stream.offset]

    def emitVerbatim(self, start):
        self.tokenQueue.append(Characters(self.source(start)))

    def emitReference(self, start, char, missingSemicolonError):
        source = self.source(start)
        if source[-1] != ";":
            self.parseError(start, missingSemicolonError)
        self.tokenQueue.append(CharacterReference(char, source))

    def parseError(self, start, errorcode, datavars=None):
        self.tokenQueue.append(ParseError(errorcode, datavars,
                                          self.stream.position(start)))
