"""
Error kinds for the spanned wallpaper pipeline.

Every failure is fatal to the whole operation; nothing here is retried.
"""


class WallpaperError(Exception):
    """Base class for all pipeline failures."""


class EmptyMonitorSet(WallpaperError):
    def __init__(self, message="no connected monitors detected"):
        super().__init__(message)


class MalformedDescriptor(WallpaperError):
    pass


class InvalidMonitor(WallpaperError):
    pass


class MalformedBezelSpec(WallpaperError):
    pass


class InvalidTransform(WallpaperError):
    pass


class ImageDecodeFailure(WallpaperError):
    pass


class CropOutOfBounds(WallpaperError):
    pass


class StorageFailure(WallpaperError):
    pass


class ExternalToolFailure(WallpaperError):
    pass
