"""Decoding of character references.

``unescape`` turns ``&amp;``, ``&#65;``, ``&#x41;`` and friends back into
the characters they stand for. It accepts any string: text that only
looks like a reference (an unknown name, a codepoint beyond U+10FFFF) is
left exactly as written.
"""
from .constants import E
from .entities import defaultTable
from ._tokenizer import ReferenceTokenizer, ParseError


class ReferenceDecoder(object):
    """Decoder that also keeps track of what it had to work around.

    After each call to unescape(), ``errors`` holds one
    ``(position, errorcode, datavars)`` tuple per problem found, where
    position is the (line, col) of the offending '&'.

    A decoder keeps per-call state; use one instance per thread.
    """

    def __init__(self, strict=False, table=None):
        """
        strict - only recognize references that end with ';'
        table - the EntityTable used to resolve names, the default one
                if not given
        """
        self.strict = strict
        self.table = table if table is not None else defaultTable
        self.errors = []

    def unescape(self, text):
        self.errors = []
        if "&" not in text:
            return text

        rv = []
        tokenizer = ReferenceTokenizer(text, strict=self.strict, table=self.table)
        for token in tokenizer:
            if isinstance(token, ParseError):
                self.errors.append((token.position, token.data, token.datavars))
            else:
                rv.append(token.data)
        return "".join(rv)

    def formatErrors(self):
        return ["Line: %i Col: %i %s" % (line, col, E[errorcode] % datavars)
                for ((line, col), errorcode, datavars) in self.errors]


def unescape(text, strict=False, table=None):
    """Replace the character references in ``text`` with their characters.

    With ``strict`` a reference needs its trailing ';' to be recognized;
    otherwise ``&amp`` is accepted as well, the way legacy content writes it.
    """
    return ReferenceDecoder(strict=strict, table=table).unescape(text)
