import io

import pytest


@pytest.fixture
def entityFile(tmp_path):
    """Returns a function writing a properties file and returning its path."""
    def writeEntities(text, name="entities.properties"):
        path = tmp_path / name
        with io.open(str(path), "w", encoding="ascii", newline="\n") as fp:
            fp.write(text)
        return str(path)
    return writeEntities
