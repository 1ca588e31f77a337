"""
Error types raised by PixelMedic.

Analysis failures derive from RuntimeError so callers that only expect
the providers' RuntimeError keep working.
"""


class AnalysisError(RuntimeError):
    """Base class for every failure of an analysis call"""


class Unconfigured(AnalysisError):
    """No credential is set, so no request can be made"""

    def __init__(self, message: str = "API key not configured"):
        super().__init__(message)


class TransportFailure(AnalysisError):
    """The provider could not be reached or returned an error"""


class MalformedResult(AnalysisError):
    """The provider replied but the content is not a valid analysis result"""


class ImageRejected(ValueError):
    """An image file was refused before analysis (type or size)"""
