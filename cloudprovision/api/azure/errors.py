from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError

from cloudprovision.exceptions import ContainerConflictError, ContainerNotFoundError, RemoteRequestError


def translate_error(error):
    """
    Translates an azure-core `HttpResponseError` into the package exception for its HTTP status.

    :param error:
        The exception raised by the blob client.

    :return:
        A `RemoteRequestError` instance (not raised).
    """
    status = getattr(error, "status_code", None)
    message = getattr(error, "message", None) or str(error)

    if isinstance(error, ResourceNotFoundError) or status == 404:
        return ContainerNotFoundError(message, status_code=status or 404)

    if isinstance(error, ResourceExistsError) or status == 409:
        return ContainerConflictError(message, status_code=status or 409)

    return RemoteRequestError(message, status_code=status)
