class PaginationFlowError(Exception):
    """Base class for errors raised by this application."""


class InvalidPageError(PaginationFlowError, ValueError):
    """A page number or page size below 1 was requested."""

    def __init__(self, page_number: int, page_size: int):
        self.page_number = page_number
        self.page_size = page_size
        super().__init__(
            f"page_number and page_size must be >= 1 "
            f"(got page_number={page_number}, page_size={page_size})"
        )


class DatasetError(PaginationFlowError):
    """Base class for product dataset problems."""


class UnsupportedFileError(DatasetError):
    def __init__(self, filename: str | None):
        self.filename = filename
        super().__init__("Uploaded file can be of .csv or .xlsx type only!!")


class DatasetValidationError(DatasetError):
    def __init__(self, row: int, errors: list):
        self.row = row
        self.errors = errors
        super().__init__(f"Row {row} is not a valid product")


class EntityNotFoundError(PaginationFlowError, LookupError):
    """A staged update or delete targets a row that is not in the store."""

    def __init__(self, model_name: str, key):
        self.model_name = model_name
        self.key = key
        super().__init__(f"{model_name} {key!r} does not exist")


class UnreadableFileError(DatasetError):
    def __init__(self, filename: str | None, reason: str):
        self.filename = filename
        super().__init__(f"Could not read '{filename}': {reason}")
