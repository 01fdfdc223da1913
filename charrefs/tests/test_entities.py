import io
import itertools

import pytest

from charrefs import entities
from charrefs.constants import EntityLoadError, xhtmlEntities, baseEntities
from charrefs.entities import EntityTable, EscapeMode, defaultTable


def test_isNamedEntity():
    assert entities.isNamedEntity("amp")
    assert entities.isNamedEntity("AMP")
    assert not entities.isNamedEntity("notareal")
    assert not entities.isNamedEntity("amp;")
    assert not entities.isNamedEntity("")


def test_getCharacterByName():
    assert entities.getCharacterByName("lt") == "<"
    assert entities.getCharacterByName("Aopf") == "\U0001D538"
    assert entities.getCharacterByName("notareal") is None


def test_lookup():
    assert entities.lookup("amp") == 0x26
    assert entities.lookup("nbsp") == 0xA0
    assert entities.lookup("Amp") is None


def test_default_table_size():
    assert len(defaultTable) == 2032
    assert "euro" in defaultTable


def test_subsets_resolve_in_full_set():
    for name, codepoint in itertools.chain(xhtmlEntities, baseEntities):
        assert defaultTable.lookup(name) == codepoint


@pytest.mark.parametrize("codepoint,mode,expected", [
    (0x26, EscapeMode.restricted, "amp"),
    (0x26, EscapeMode.base, "amp"),
    (0x26, EscapeMode.full, "amp"),
    ("<", "xhtml", "lt"),
    (0xA9, EscapeMode.base, "copy"),
    (0xAE, EscapeMode.full, "reg"),
    (0x2192, EscapeMode.full, "rarr"),
    (0x2A, EscapeMode.full, "ast"),
    (0x0A, EscapeMode.full, "NewLine"),
    (0xE9, EscapeMode.restricted, None),
    (0xE9, EscapeMode.base, "eacute"),
    (0x2192, EscapeMode.base, None),
    (0x41, EscapeMode.full, None),
])
def test_reverseLookup(codepoint, mode, expected):
    assert entities.reverseLookup(codepoint, mode) == expected


def test_escapeMap_is_read_only():
    escapeMap = defaultTable.escapeMap(EscapeMode.base)
    with pytest.raises(TypeError):
        escapeMap[0x41] = "A"
    assert 0x41 not in escapeMap


def test_escapeMap_sizes():
    assert len(defaultTable.escapeMap(EscapeMode.restricted)) == 5
    # AMP, COPY, GT, LT, QUOT and REG share codepoints with lower case names
    assert len(defaultTable.escapeMap(EscapeMode.base)) == len(baseEntities) - 6


@pytest.mark.parametrize("name,expected", [
    ("restricted", EscapeMode.restricted),
    ("xhtml", EscapeMode.restricted),
    ("base", EscapeMode.base),
    ("full", EscapeMode.full),
    ("extended", EscapeMode.full),
    (EscapeMode.base, EscapeMode.base),
])
def test_getEscapeMode(name, expected):
    assert entities.getEscapeMode(name) is expected


def test_getEscapeMode_unknown():
    with pytest.raises(ValueError):
        entities.getEscapeMode("html4")


def test_escape_mode_aliases():
    assert EscapeMode.xhtml is EscapeMode.restricted
    assert EscapeMode.extended is EscapeMode.full
    assert entities.ReferenceSet is EscapeMode


@pytest.mark.parametrize("value,expected", [
    (0, "0"),
    (33, "x"),
    (34, "10"),
    (0x26, "14"),
    (0x1D538, "31uw"),
])
def test_base34(value, expected):
    assert entities.toBase34(value) == expected
    assert entities.fromBase34(expected) == value


def test_base34_accepts_upper_case():
    assert entities.fromBase34("31UW") == 0x1D538


@pytest.mark.parametrize("value", ["", "y", "+1", "-1", "1_0", " 1", "1 "])
def test_base34_invalid(value):
    with pytest.raises(ValueError):
        entities.fromBase34(value)


def test_toBase34_negative():
    with pytest.raises(ValueError):
        entities.toBase34(-1)


def test_loadEntities(entityFile):
    path = entityFile("# comment\n! another\n\nlt=1q\n  amp = 14  \nAopf=31UW\n")
    assert entities.loadEntities(path) == [("lt", 0x3C), ("amp", 0x26),
                                           ("Aopf", 0x1D538)]


def test_loadEntities_missing_file(tmp_path):
    with pytest.raises(EntityLoadError):
        entities.loadEntities(str(tmp_path / "missing.properties"))


def test_loadEntities_not_ascii(tmp_path):
    path = tmp_path / "latin1.properties"
    with io.open(str(path), "wb") as fp:
        fp.write(b"caf\xe9=14\n")
    with pytest.raises(EntityLoadError):
        entities.loadEntities(str(path))


@pytest.mark.parametrize("text", [
    "",
    "# only a comment\n",
    "amp\n",
    "=14\n",
    "1amp=14\n",
    "am-p=14\n",
    "amp=\n",
    "amp=zz\n",
    "amp=-14\n",
    "amp=xxxxx\n",
    "amp=14\namp=14\n",
])
def test_loadEntities_malformed(entityFile, text):
    with pytest.raises(EntityLoadError):
        entities.loadEntities(entityFile(text))


def test_error_names_line(entityFile):
    path = entityFile("lt=1q\nbogus\n")
    with pytest.raises(EntityLoadError) as excinfo:
        entities.loadEntities(path)
    assert ":2:" in str(excinfo.value)


def test_fromFile(entityFile):
    path = entityFile("quot=10\namp=14\napos=15\nlt=1q\ngt=1s\nhellip=742\n")
    table = EntityTable(entities.loadEntities(path), base=())
    assert len(table) == 6
    assert table.getCharacterByName("hellip") == "…"
    assert table.reverseLookup("…") == "hellip"
    assert table.reverseLookup("…", EscapeMode.base) is None


def test_fromFile_requires_base_set(entityFile):
    path = entityFile("quot=10\namp=14\napos=15\nlt=1q\ngt=1s\n")
    with pytest.raises(EntityLoadError):
        EntityTable.fromFile(path)


def test_table_requires_restricted_set():
    with pytest.raises(EntityLoadError):
        EntityTable([("amp", 0x26)], base=())


def test_table_rejects_mismatched_subset():
    with pytest.raises(EntityLoadError):
        EntityTable([("quot", 0x22), ("amp", 0x26), ("apos", 0x27),
                     ("lt", 0x3C), ("gt", 0x3F)], base=())


def test_table_rejects_conflicts():
    with pytest.raises(EntityLoadError):
        EntityTable([("amp", 0x26), ("amp", 0x27)], restricted=(), base=())


def test_table_rejects_empty():
    with pytest.raises(EntityLoadError):
        EntityTable([], restricted=(), base=())


def test_repr():
    assert repr(defaultTable) == "<EntityTable with 2032 entities>"
