from requests import RequestException

TransportError = RequestException


class FireflyException(Exception):
    """Base exception class for Firefly client errors."""
    pass

class FireflyConstructionError(FireflyException, ValueError):
    """Indicates the client was created with an invalid configuration (e.g. no host)."""
    pass

class FireflyParsingError(FireflyException):
    """Indicates an authentication token, API reply or credential export could not be parsed."""
    pass

class FireflyNotAuthenticatedError(FireflyException):
    """Raised when a call needs a secret and user, but the session has none."""
    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)

class FireflyNoDeviceIdError(FireflyException):
    """Raised when a device-scoped call is made before a device id was set."""
    def __init__(self, message: str = "No device ID"):
        super().__init__(message)

class FireflySchoolNotFoundError(FireflyException):
    """Indicates the school code is not registered with the Firefly app gateway."""
    def __init__(self, school_code: str):
        self.school_code = school_code
        super().__init__(f"No Firefly school registered for code {school_code!r}")

class FireflyAPIError(FireflyException):
    """The portal answered 2xx but reported errors in the reply body (GraphQL `errors`)."""
    pass
