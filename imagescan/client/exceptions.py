"""
Module containing exceptions that can be raised by the client.
"""


class ImageScanError(Exception):
    """
    Base class for all image scanning client errors.
    """
    __seen__ = dict()

    #: The unique code for the error
    code = None
    #: The default message for the error
    message = "Image scan error"

    def __init_subclass__(cls):
        # Make sure that the code has not been used for another error
        if cls.code is None:
            return
        if cls.code in ImageScanError.__seen__:
            message = 'code {} already in use by {}'.format(
                cls.code,
                ImageScanError.__seen__[cls.code].__name__
            )
            raise TypeError(message)
        ImageScanError.__seen__[cls.code] = cls

    def __init__(self, message = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ScannerError(ImageScanError):
    """
    Base class for all errors talking to the scanning service.
    """


class ScannerUnavailable(ScannerError):
    """
    Raised when the scanning service cannot be reached.
    """
    message = "Scanner unavailable"
    code = 200


class ScannerTimeout(ScannerUnavailable):
    """
    Raised when a request to the scanning service times out.
    """
    message = "Scanner timed out"
    code = 201


class ScannerResponseError(ScannerError):
    """
    Raised when the scanning service responds with an error status.
    """
    message = "Scanner returned an error response"
    code = 202

    def __init__(self, message = None, status_code = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidScanResponse(ScannerError):
    """
    Raised when a response body cannot be decoded into the expected shape.
    """
    message = "Invalid scan response"
    code = 203


class InvalidSettings(ImageScanError):
    """
    Raised when the client settings are not valid.
    """
    message = "Invalid settings"
    code = 300
