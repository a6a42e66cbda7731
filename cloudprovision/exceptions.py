"""
Exceptions raised by the provisioning layer.

SDK errors never leave a backend untranslated: every backend maps its client
library failures into a `RemoteRequestError` (or one of its not-found / conflict
subclasses), and the resource operations wrap them into a
`ContainerOperationError` naming the operation and the resource identifier.
"""


class CloudProvisionError(Exception):
    """Base class for every error raised by this package."""


class ClientCreationError(CloudProvisionError):
    """The storage client for a region could not be built (region lookup, credentials or SDK setup)."""


class ConfigValidationError(CloudProvisionError, ValueError):
    """A configuration bundle did not pass validation."""


class ForceNewError(CloudProvisionError):
    """
    An update touched an attribute that can only change by replacing the resource.
    """

    def __init__(self, field, old_value, new_value):
        super().__init__(f"attribute '{field}' cannot be updated in place "
                         f"('{old_value}' -> '{new_value}'); the resource must be replaced")
        self.field = field
        self.old_value = old_value
        self.new_value = new_value


class RemoteRequestError(CloudProvisionError):
    """
    A request to the object storage backend failed.

    :param message:
        Error text reported by the backend.

    :param status_code:
        HTTP status of the failed request, if the backend reported one.
    """

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class ContainerNotFoundError(RemoteRequestError):
    """The container (or object) does not exist in the backend."""


class ContainerConflictError(RemoteRequestError):
    """The backend answered 409, usually because the container still holds objects."""


class ContainerOperationError(CloudProvisionError):
    """
    A container operation failed. The message names the operation and the resource identifier, followed by the
    backend error text.
    """

    def __init__(self, operation, identifier, cause):
        super().__init__(f"error {operation} container '{identifier}': {cause}")
        self.operation = operation
        self.identifier = identifier
        self.cause = cause


class VersioningConflictError(CloudProvisionError):
    """The backend reports both a versions location and a history location for the same container."""

    def __init__(self, identifier, versions_location, history_location):
        super().__init__(f"error reading versioning headers for container '{identifier}': found location for both "
                         f"exclusive types, versions ('{versions_location}') and history ('{history_location}')")
        self.identifier = identifier
        self.versions_location = versions_location
        self.history_location = history_location
