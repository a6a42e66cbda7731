from swiftclient.exceptions import ClientException

from cloudprovision.api.interface.container import Container
from cloudprovision.api.interface.options import ContainerHeaders, split_acl
from cloudprovision.api.swift.errors import translate_error

import logging


META_PREFIX = "x-container-meta-"

# Option name -> swift header, shared by create and update requests.
_HEADERS = {
    "container_read": "X-Container-Read",
    "container_write": "X-Container-Write",
    "container_sync_to": "X-Container-Sync-To",
    "container_sync_key": "X-Container-Sync-Key",
    "content_type": "Content-Type",
    "versions_location": "X-Versions-Location",
    "history_location": "X-History-Location",
}


class SwiftContainer(Container):
    """
    Container stored in an OpenStack Swift account.

    Every container setting travels as an HTTP header of the container request, so this class only translates
    option objects into headers (and back) and forwards them to the swiftclient connection of the owner service.
    """

    def __init__(self, service, container_name):
        super().__init__(service)
        self._container_name = container_name
        self._connection = service.connection
        self._logger = logging.getLogger("cp-swift")

    @property
    def name(self):
        return self._container_name

    @property
    def connection_raw(self):
        """
        Retrieves the original swiftclient connection.
        """
        return self._connection

    def create(self, opts):
        headers = {header: getattr(opts, field) for field, header in _HEADERS.items() if getattr(opts, field)}

        for key, value in opts.metadata.items():
            headers[f"X-Container-Meta-{key}"] = value

        self._logger.debug(f"PUT container '{self.name}' with headers: {sorted(headers)}")

        try:
            self._connection.put_container(self.name, headers=headers)

        except ClientException as e:
            raise translate_error(e) from e

    @property
    def headers(self):
        try:
            raw = self._connection.head_container(self.name)

        except ClientException as e:
            raise translate_error(e) from e

        # Header names are case-insensitive, metadata keys keep the case the backend reports.
        metadata = {k[len(META_PREFIX):]: v for k, v in raw.items() if k.lower().startswith(META_PREFIX)}

        raw = {k.lower(): v for k, v in raw.items()}

        return ContainerHeaders(
            read=split_acl(raw.get("x-container-read")),
            write=split_acl(raw.get("x-container-write")),
            sync_to=raw.get("x-container-sync-to", ""),
            sync_key=raw.get("x-container-sync-key", ""),
            content_type=raw.get("content-type", ""),
            versions_location=raw.get("x-versions-location", ""),
            history_location=raw.get("x-history-location", ""),
            metadata=metadata,
        )

    def update(self, opts):
        headers = {header: getattr(opts, field) for field, header in _HEADERS.items()
                   if getattr(opts, field) is not None}

        if opts.remove_versions_location:
            headers["X-Remove-Versions-Location"] = "true"

        if opts.remove_history_location:
            headers["X-Remove-History-Location"] = "true"

        if opts.metadata is not None:
            for key, value in opts.metadata.items():
                headers[f"X-Container-Meta-{key}"] = value

        # POST merges metadata; dropped keys need an explicit removal header.
        for key in opts.remove_metadata:
            headers[f"X-Remove-Container-Meta-{key}"] = "x"

        self._logger.debug(f"POST container '{self.name}' with headers: {sorted(headers)}")

        try:
            self._connection.post_container(self.name, headers)

        except ClientException as e:
            raise translate_error(e) from e

    def delete(self):
        try:
            self._connection.delete_container(self.name)

        except ClientException as e:
            raise translate_error(e) from e

    def object_name_pages(self, results_per_page=None):
        """
        Iterates the object listing of the container, one list of names per page.

        The next page is requested only when the consumer asks for it, using the last name of the previous page as
        marker. Objects of a page may therefore be deleted before advancing.

        :param results_per_page:
            Maximum number of names per page. None to use the backend limit.
        """
        marker = ""

        while True:
            try:
                _, listing = self._connection.get_container(self.name, marker=marker, limit=results_per_page)

            except ClientException as e:
                raise translate_error(e) from e

            if not listing:
                return

            names = [x['name'] for x in listing]
            yield names

            marker = names[-1]

    def delete_object(self, object_name):
        try:
            self._connection.delete_object(self.name, object_name)

        except ClientException as e:
            raise translate_error(e) from e

    def __str__(self):
        return f"[Swift Container; Name: '{self.name}']"

    def __repr__(self):
        return str(self)
