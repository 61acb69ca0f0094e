"""
Custom exception classes for the recipe and grocery services
"""


class ChefBookError(Exception):
    """Base exception for the chef book services"""
    pass


class RecordsRequestError(ChefBookError):
    """Raised when the record store rejects or fails a request"""
    def __init__(self, collection: str, status_code: int = None, detail: str = ""):
        self.collection = collection
        self.status_code = status_code
        self.detail = detail
        status = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"Request for '{collection}' records failed{status}: {detail}")
