class CatalogError(Exception):
    code = "CATALOG_ERROR"
    message = "Catalog request failed"

    def __init__(self, message: str | None = None, details=None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)

class CatalogUnavailableError(CatalogError):
    code = "CATALOG_UNAVAILABLE"
    message = "The character catalog could not be reached"

class CatalogResponseError(CatalogError):
    code = "CATALOG_BAD_STATUS"
    message = "The character catalog answered with an error status"

class CatalogDecodeError(CatalogError):
    code = "CATALOG_BAD_PAYLOAD"
    message = "The character catalog returned a malformed payload"
