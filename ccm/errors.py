"""Error taxonomy shared by the config resolver and the account vault."""


class CCMError(Exception):
    """Base exception for ccm errors."""

    error_code = "CCMError"

    def __init__(self, message: str, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code


class ConfigMissing(CCMError):
    """A required configuration key is unset after full resolution."""

    error_code = "ConfigMissing"

    def __init__(self, key: str, message: str | None = None):
        super().__init__(message or f"Please configure {key}")
        self.key = key


class InvalidName(CCMError):
    """Account name fails the name grammar or length limit."""

    error_code = "InvalidName"


class NotFound(CCMError):
    """Account or credential is absent."""

    error_code = "NotFound"


class AlreadyExists(CCMError):
    """Rename target already exists."""

    error_code = "AlreadyExists"


class NoCredentials(CCMError):
    """The secret store holds no credential at save time."""

    error_code = "NoCredentials"


class NoCurrentAccount(CCMError):
    """No credential is active in the secret store."""

    error_code = "NoCurrentAccount"


class StoreUnavailable(CCMError):
    """The platform credential service call itself failed."""

    error_code = "StoreUnavailable"


class CorruptRegistry(CCMError):
    """Account registry content cannot be read by the registry grammar."""

    error_code = "CorruptRegistry"
