import random

import pytest

from passforge import create_app


class SeededRandomSource:
    """Reproducible stand-in for the secure source. Never use outside tests."""

    def __init__(self, seed=20200101):
        self._rng = random.Random(seed)

    def seed(self, value):
        self._rng.seed(value)

    def next_u64(self):
        return self._rng.getrandbits(64)

    def next_f64(self):
        return (self.next_u64() >> 11) * 2.0 ** -53


class ScriptedRandomSource:
    """Replays a fixed cycle of floats, counting how many were drawn."""

    def __init__(self, values):
        self.values = list(values)
        self.draws = 0

    def seed(self, value):
        pass

    def next_u64(self):
        return int(self.next_f64() * 2 ** 64)

    def next_f64(self):
        value = self.values[self.draws % len(self.values)]
        self.draws += 1
        return value


@pytest.fixture
def seeded_source():
    return SeededRandomSource()


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.toml"
    path.write_text(
        '[flask]\n'
        'secret_key = "test"\n'
        '\n'
        '[generator]\n'
        'default_length = 10\n'
        'special_characters = true\n'
        'max_count = 20\n'
        '\n'
        '[logging]\n'
        'level = "debug"\n',
        encoding="utf-8",
    )
    monkeypatch.setenv("PASSFORGE_CONFIG", str(path))
    return path


@pytest.fixture
def app(config_file):
    return create_app({"TESTING": True})


@pytest.fixture
def client(app):
    return app.test_client()
