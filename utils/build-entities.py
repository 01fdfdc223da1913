"""Regenerate charrefs/data/entities-full.properties from the WHATWG list.

usage: build-entities.py [entities.json]

Without an argument the list is downloaded. Only references that end with
';' and stand for a single codepoint are kept.
"""
import json
import os
import sys
import urllib.request

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__),
                                                os.path.pardir)))

from charrefs.entities import dataPath, toBase34  # noqa: E402

entitiesUrl = "https://html.spec.whatwg.org/entities.json"

header = """\
# Named character references, one per line: name=codepoint
# Codepoints are written in base 34 (digits 0-9 then a-x).
# Regenerate with utils/build-entities.py
"""


def buildLines(entities):
    lines = []
    for key, value in entities.items():
        if not key.endswith(";") or len(value["codepoints"]) != 1:
            continue
        lines.append("%s=%s" % (key[1:-1], toBase34(value["codepoints"][0])))
    return sorted(lines)


def main(argv):
    if len(argv) > 1:
        with open(argv[1], "rb") as fp:
            entities = json.load(fp)
    else:
        entities = json.load(urllib.request.urlopen(entitiesUrl))

    lines = buildLines(entities)
    with open(dataPath, "w", encoding="ascii", newline="\n") as fp:
        fp.write(header)
        fp.write("\n".join(lines))
        fp.write("\n")
    print("Wrote %d entities to %s" % (len(lines), dataPath))


if __name__ == "__main__":
    main(sys.argv)
