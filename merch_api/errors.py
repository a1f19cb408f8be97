"""Exception types shared by the routes and the mockup compositor."""


class MerchError(Exception):
    """Base class for errors raised by this package."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(MerchError):
    """Bad or missing request fields (HTTP 400)."""


class FetchError(MerchError):
    """An image URL could not be read (non-2xx, network error, timeout)."""


class SourceFetchError(FetchError):
    """The result image of a mockup batch could not be fetched; aborts the batch."""


class PerProductFetchError(FetchError):
    """A product's base image could not be fetched; that product is skipped."""


class DecodeError(MerchError):
    """Image bytes could not be decoded."""


class UnknownPlacementError(MerchError):
    """No placement rule exists for a product type."""


class StoreError(MerchError):
    """The image store rejected an upload or returned no URL."""
