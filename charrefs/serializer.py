"""Escaping of text into character references.

Every character is written in one of three ways: as the named reference
the escape mode has for it, literally if the target encoding can hold it,
or as a decimal numeric reference.
"""
import codecs

import webencodings

from .entities import EscapeMode, getEscapeMode, defaultTable


def escape(text, canEncode=None, mode=EscapeMode.base, table=None):
    """Escape ``text`` for output.

    canEncode - predicate telling whether a character can be written
                literally; None means every character can
    mode - EscapeMode (or its name) selecting the named references to use
    table - EntityTable to take the names from, the default one if None
    """
    if table is None:
        table = defaultTable
    escapeMap = table.escapeMap(mode)

    rv = []
    for c in text:
        name = escapeMap.get(ord(c))
        if name is not None:
            rv.append("&%s;" % name)
        elif canEncode is None or canEncode(c):
            rv.append(c)
        else:
            rv.append("&#%d;" % ord(c))
    return "".join(rv)


def lookupCodec(encoding):
    """Return the CodecInfo for an encoding label.

    Python's codec names come first. Labels only browsers know (such as
    "x-user-defined" or "x-mac-cyrillic") are resolved through webencodings.
    """
    try:
        return codecs.lookup(encoding)
    except LookupError:
        enc = webencodings.lookup(encoding)
        if enc is None:
            raise
        return enc.codec_info


_canEncodeCache = {}


def canEncodeFor(encoding):
    """Return a canEncode predicate for ``encoding``.

    Labels naming the same codec share one predicate. Raises LookupError
    for unknown labels.
    """
    codec = lookupCodec(encoding)
    try:
        return _canEncodeCache[codec.name]
    except KeyError:
        pass

    encode = codec.encode

    def canEncode(c):
        try:
            encode(c)
        except UnicodeEncodeError:
            return False
        return True

    _canEncodeCache[codec.name] = canEncode
    return canEncode


def charrefreplace_errors(exc):
    """Replace unencodable text by full-set names, else decimal references."""
    if isinstance(exc, (UnicodeEncodeError, UnicodeTranslateError)):
        res = escape(exc.object[exc.start:exc.end], lambda c: False,
                     EscapeMode.full)
        return (res, exc.end)
    else:
        return codecs.xmlcharrefreplace_errors(exc)


codecs.register_error("charrefreplace", charrefreplace_errors)


class EntitySerializer(object):

    # escaping options
    escape_mode = EscapeMode.base
    table = None

    # output options
    encoding = None

    options = ("escape_mode", "table", "encoding")

    def __init__(self, **kwargs):
        """Initialize EntitySerializer.

        Keyword options (default given first unless specified) include:

        escape_mode=EscapeMode.base|"restricted"|"full"|...
          Which named references to use. Accepts an EscapeMode or the name
          of one.
        encoding=None|label
          Target encoding. Characters it cannot represent are written as
          numeric references. None means every character is representable
          and render() returns text instead of bytes.
        table=None|EntityTable
          The registry names come from. Defaults to the built-in one.
        """
        unexpected_args = frozenset(kwargs) - frozenset(self.options)
        if len(unexpected_args) > 0:
            raise TypeError("__init__() got an unexpected keyword argument '%s'" %
                            next(iter(unexpected_args)))
        for attr in self.options:
            setattr(self, attr, kwargs.get(attr, getattr(self, attr)))
        self.escape_mode = getEscapeMode(self.escape_mode)
        if self.table is None:
            self.table = defaultTable
        if self.encoding:
            # fail early on unknown labels
            canEncodeFor(self.encoding)

    def escape(self, text, encoding=None):
        encoding = encoding or self.encoding
        canEncode = canEncodeFor(encoding) if encoding else None
        return escape(text, canEncode, self.escape_mode, self.table)

    def render(self, text, encoding=None):
        """Escape ``text`` and, if there is an encoding, encode it.

        Returns bytes when an encoding is given here or was configured,
        str otherwise.
        """
        encoding = encoding or self.encoding
        escaped = self.escape(text, encoding)
        if encoding:
            return lookupCodec(encoding).encode(escaped)[0]
        return escaped
