"""
    Exceptions

    See COPYING for license information
"""


class ObjectStorageError(Exception):
    """ A general Object Storage error. """
    pass


class ConfigError(ObjectStorageError):
    """ Required client configuration is missing or invalid """
    pass


class ValidationError(ObjectStorageError):
    """ Operation parameters are missing or invalid """
    pass


class MissingContainer(ValidationError):
    """ Container name missed """
    pass


class MissingFiles(ValidationError):
    """ Files missed """
    pass


class MissingFile(ValidationError):
    """ File missed """
    pass


class AuthenticationError(ObjectStorageError):
    """ Could not authenticate. """
    def __init__(self, message, error=None):
        ObjectStorageError.__init__(self, message)
        self.error = error


class ParseError(AuthenticationError):
    """
        Raised when the authentication response does not have the shape
        the protocol variant expects.
    """
    pass


class RequestError(ObjectStorageError):
    """ The HTTP request failed at the transport level """
    def __init__(self, message, error=None):
        ObjectStorageError.__init__(self, message)
        self.error = error


class NotSupported(ObjectStorageError):
    """ Requested feature is not supported """
    pass


class ContainerNotEmpty(ObjectStorageError):
    """ Container is not empty """
    pass


class ResponseError(ObjectStorageError):
    """ Response error """
    def __init__(self, status, reason, response=None):
        self.status = status or 0
        self.reason = reason or 'Unknown'
        self.response = response
        ObjectStorageError.__init__(self, self.status, self.reason)

    def __str__(self):
        return '%d: %s' % (self.status, self.reason)

    def __repr__(self):
        return '%d: %s' % (self.status, self.reason)


class NotFound(ResponseError):
    """ Resource not found """
    pass
