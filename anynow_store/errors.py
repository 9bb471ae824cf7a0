# anynow_store/errors.py


class StoreError(Exception):
    """Base class for data store failures surfaced to API callers."""


class NotFoundError(StoreError):
    pass


class FormError(StoreError):
    """Invalid user input; the message is shown to the user as-is."""


class HostedBackendError(StoreError):
    pass
