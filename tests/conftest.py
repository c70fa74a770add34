"""Shared test helpers."""

from random import Random


class ScriptedRandom(Random):
    """Random source that replays fixed draws.

    ``random()`` pops from ``floats``, ``randrange()`` from ``ints`` and
    ``choice()`` always takes the first option. Exhausted scripts fall back
    to the defaults.
    """

    def __init__(self, floats=(), ints=(), default_float=0.0, default_int=0):
        super().__init__(0)
        self.floats = list(floats)
        self.ints = list(ints)
        self.default_float = default_float
        self.default_int = default_int

    def random(self):
        if self.floats:
            return self.floats.pop(0)
        return self.default_float

    def randrange(self, *args, **kwargs):
        if self.ints:
            return self.ints.pop(0)
        return self.default_int

    def choice(self, seq):
        return seq[0]
