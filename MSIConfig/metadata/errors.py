from typing import Optional


class InvalidMetadata(ValueError):
    """
    Raised when experiment metadata can not be turned into a processing configuration.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(f"{field}: {message}" if field else message)
        self.field = field
