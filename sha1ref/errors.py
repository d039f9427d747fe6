from __future__ import annotations


class Sha1Error(Exception):
    """Base class for every failure raised while computing a digest."""


class UnsupportedInputType(Sha1Error, TypeError):
    pass


class InvalidByte(Sha1Error, ValueError):
    pass


class NegativeLength(Sha1Error, ValueError):
    pass


class IncompleteBlock(Sha1Error, ValueError):
    pass


class IncompleteWord(Sha1Error, ValueError):
    pass


class NotUint32(Sha1Error, ValueError):
    pass


class InvalidRoundIndex(Sha1Error, IndexError):
    pass
