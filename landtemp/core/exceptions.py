"""
LandTemp Exceptions

Exception hierarchy for error handling.

Per-pixel domain errors (log of zero, division by zero) never raise: the
affected pixel becomes NaN. Everything that can exclude a whole acquisition
derives from AcquisitionError so the pipeline can drop it and continue.
"""


class LandTempError(Exception):
    """Base exception for LandTemp"""

    pass


class ValidationError(LandTempError):
    """Configuration or argument validation failed"""

    pass


class AcquisitionError(LandTempError):
    """An acquisition cannot be processed and is excluded from its collection"""

    def __init__(self, message: str, scene_id: str | None = None):
        super().__init__(message)
        self.scene_id = scene_id


class MissingMetadataError(AcquisitionError):
    """A required calibration constant is absent from the acquisition metadata"""

    def __init__(self, key: str, scene_id: str | None = None):
        message = f"Missing metadata key '{key}'"
        if scene_id:
            message += f" on {scene_id}"
        super().__init__(message, scene_id=scene_id)
        self.key = key


class MissingBandError(AcquisitionError):
    """A required band is absent from the acquisition raster"""

    def __init__(self, band: str, scene_id: str | None = None):
        message = f"Missing band '{band}'"
        if scene_id:
            message += f" on {scene_id}"
        super().__init__(message, scene_id=scene_id)
        self.band = band


class FetchError(LandTempError):
    """Archive query failed (unreachable, timeout, unreadable scene)"""

    pass
