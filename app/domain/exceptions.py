# app/domain/exceptions.py
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    USER_NOT_FOUND = 1001
    USER_ALREADY_EXISTS = 1002
    INCORRECT_PASSWORD = 1003
    UNAUTHORIZED = 1004
    PRODUCT_NOT_FOUND = 1005
    ADDRESS_NOT_FOUND = 1006
    ADDRESS_DOES_NOT_BELONG = 1007
    ORDER_NOT_FOUND = 1008
    CART_ITEM_NOT_FOUND = 1009
    FORBIDDEN = 1010
    ADDRESS_NOT_CONFIGURED = 1011
    INVALID_STATUS_TRANSITION = 1012
    CHECKOUT_CONFLICT = 1013
    CHECKOUT_IN_PROGRESS = 1014
    PRODUCT_IN_USE = 1015
    UNPROCESSABLE_ENTITY = 2001
    INTERNAL_EXCEPTION = 3001


class HttpException(Exception):
    """
    Bazowy blad domenowy.
    Tlumaczony raz, na granicy HTTP, na {message, errorCode, errors}.
    """

    status_code = 500

    def __init__(self, message: str, error_code: ErrorCode, errors: Any = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.errors = errors


class BadRequestException(HttpException):
    status_code = 400


class UnauthorizedException(HttpException):
    status_code = 401

    def __init__(self, message: str = "Unauthorized", error_code: ErrorCode = ErrorCode.UNAUTHORIZED):
        super().__init__(message, error_code)


class ForbiddenException(HttpException):
    status_code = 403

    def __init__(self, message: str = "Forbidden", error_code: ErrorCode = ErrorCode.FORBIDDEN):
        super().__init__(message, error_code)


class NotFoundException(HttpException):
    status_code = 404


class UnprocessableEntity(HttpException):
    status_code = 422


class InternalException(HttpException):
    status_code = 500


class AddressNotConfigured(BadRequestException):
    def __init__(self, message: str = "Default shipping address is not configured!"):
        super().__init__(message, ErrorCode.ADDRESS_NOT_CONFIGURED)


class CheckoutConflict(BadRequestException):
    def __init__(self, message: str = "Cart was modified during checkout, please retry"):
        super().__init__(message, ErrorCode.CHECKOUT_CONFLICT)
