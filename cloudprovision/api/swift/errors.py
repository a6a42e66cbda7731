from cloudprovision.exceptions import ContainerConflictError, ContainerNotFoundError, RemoteRequestError


def translate_error(error):
    """
    Translates a swiftclient `ClientException` into the package exception for its HTTP status.

    :param error:
        The exception raised by the swift connection.

    :return:
        A `RemoteRequestError` instance (not raised).
    """
    status = getattr(error, "http_status", None)
    message = str(error)

    if status == 404:
        return ContainerNotFoundError(message, status_code=status)

    if status == 409:
        return ContainerConflictError(message, status_code=status)

    return RemoteRequestError(message, status_code=status)
