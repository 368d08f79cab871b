"""Typed failures raised by the content services"""


class ContentError(Exception):
    """Base class for expected, caller-visible failures"""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ContentError):
    status_code = 404


class DuplicateKeyError(ContentError):
    status_code = 409


class InvalidOrderError(ContentError):
    status_code = 400


class HasChildrenError(ContentError):
    status_code = 400


class SelfParentError(ContentError):
    status_code = 400


class InvalidParentError(ContentError):
    """Parent choice would break strict two-level nesting"""
    status_code = 400
