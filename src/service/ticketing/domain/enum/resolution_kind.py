from enum import StrEnum


class ResolutionKind(StrEnum):
    SINGLE = 'SINGLE'
    GROUP = 'GROUP'
    NOT_FOUND = 'NOT_FOUND'
