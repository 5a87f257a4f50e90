"""Shared test helpers."""

import random


class ScriptedRng(random.Random):
    """A Random whose randint returns a fixed script of faces, in order."""

    def __init__(self, faces):
        super().__init__(0)
        self.faces = list(faces)

    def randint(self, a, b):
        assert self.faces, "ScriptedRng ran out of faces"
        face = self.faces.pop(0)
        assert a <= face <= b
        return face
