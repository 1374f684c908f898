"""
cogxyz Exceptions

Exception hierarchy for error handling.

A tile that has no data (outside the COG extent, or a pyramid level the COG
does not have) is never an exception: it is returned as ``None``.
"""


class CogXYZError(Exception):
    """Base exception for cogxyz"""

    pass


class SourceError(CogXYZError):
    """The COG source cannot be used at all"""

    pass


class SourceUnreachableError(SourceError):
    """The COG source could not be opened"""

    pass


class MissingProjectionError(SourceError):
    """Level 0 carries neither a projected nor a geographic CRS"""

    pass


class LayoutError(CogXYZError):
    """The raster layout at a pyramid level cannot be read"""

    pass


class UnsupportedLayoutError(LayoutError):
    """The raster at the resolved level is not internally tiled"""

    pass


class LevelNotFoundError(CogXYZError):
    """The COG has no image at the requested pyramid level"""

    def __init__(self, level: int, message: str | None = None):
        self.level = level
        super().__init__(message or f"No image at level {level}")


class DimensionMismatchError(CogXYZError):
    """Raster window size does not match the requested tile size"""

    pass


class ResolutionLookupError(CogXYZError, LookupError):
    """No resolution entry exists for a zoom level"""

    pass
