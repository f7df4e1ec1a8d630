class LinkBioError(Exception):
    """Base class for data-access failures."""


class NotFound(LinkBioError):
    def __init__(self, entity: str, key: str):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity.capitalize()} not found: {key}")


class StoreUnavailable(LinkBioError):
    def __init__(self, message: str = "Store unavailable"):
        super().__init__(message)


class ValidationError(LinkBioError):
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")
