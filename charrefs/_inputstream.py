import re

from .constants import EOF

# Cache for charsUntil()
charsUntilRegEx = {}


class TextInputStream(object):
    """Provides a stream of characters to the ReferenceTokenizer.

    The whole input is held in memory; the stream only tracks an offset
    into it so that the tokenizer can read, peek and step back.
    """

    def __init__(self, source):
        self.data = source
        self.dataSize = len(source)
        self.reset()

    def reset(self):
        self.offset = 0
        # (offset, line, offset of the line start) of the last position() call
        self._lastPosition = (0, 1, 0)

    def position(self, offset=None):
        """Returns (line, col) of ``offset``, or of the current position."""
        if offset is None:
            offset = self.offset
        lastOffset, line, lineStart = self._lastPosition
        if offset < lastOffset:
            lastOffset, line, lineStart = 0, 1, 0
        line += self.data.count("\n", lastOffset, offset)
        newline = self.data.rfind("\n", lastOffset, offset)
        if newline != -1:
            lineStart = newline + 1
        self._lastPosition = (offset, line, lineStart)
        return (line, offset - lineStart)

    def char(self):
        """ Read one character from the stream. Return EOF when EOF is
        reached.
        """
        offset = self.offset
        if offset >= self.dataSize:
            return EOF
        self.offset = offset + 1
        return self.data[offset]

    def charsUntil(self, characters, opposite=False):
        """ Returns a string of characters from the stream up to but not
        including any character in 'characters' or EOF. 'characters' must be
        a container that supports the 'in' method and iteration over its
        characters.

        With opposite=True, returns the characters up to the first one that
        is *not* in 'characters'.
        """

        # Use a cache of regexps to find the required characters
        try:
            chars = charsUntilRegEx[(characters, opposite)]
        except KeyError:
            if __debug__:
                for c in characters:
                    assert(ord(c) < 128)
            regex = "".join(["\\x%02x" % ord(c) for c in characters])
            if not opposite:
                regex = "^%s" % regex
            chars = charsUntilRegEx[(characters, opposite)] = re.compile("[%s]+" % regex)

        m = chars.match(self.data, self.offset)
        if m is None:
            return ""
        self.offset = m.end()
        return m.group()

    def unget(self, char):
        # Only one character is allowed to be ungotten at once - it must
        # be consumed again before any further call to unget
        if char is not EOF:
            self.offset -= 1
            assert self.data[self.offset] == char
