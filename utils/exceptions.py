# wheel_catalog/utils/exceptions.py


class CatalogError(Exception):
    """Base class for failures that abort loading the catalog.

    The message is shown to the user as-is, so keep it readable.
    """


class NetworkError(CatalogError):
    """The feed could not be fetched or did not return CSV."""


class EmptyTableError(CatalogError):
    def __init__(self, message="The CSV file is empty or has an unexpected format."):
        super().__init__(message)


class HeaderNotFoundError(CatalogError):
    def __init__(self, message="The CSV header (the row with 'PartNumber', 'Brand', etc.) could not be found. "
                               "Check that the file is correct and publicly accessible."):
        super().__init__(message)


class UnknownError(CatalogError):
    def __init__(self, message="An unknown error occurred."):
        super().__init__(message)
