from azure.core.exceptions import HttpResponseError

from cloudprovision.api.azure.errors import translate_error
from cloudprovision.api.interface.container import Container
from cloudprovision.api.interface.options import ContainerHeaders, split_acl

import logging


# Blob containers have no headers for these settings, so they are kept in the container metadata under reserved
# keys. Azure metadata names must be valid C# identifiers, hence the underscores.
RESERVED_PREFIX = "cp_"

RESERVED_KEYS = {
    "container_read": "cp_container_read",
    "container_write": "cp_container_write",
    "container_sync_to": "cp_container_sync_to",
    "container_sync_key": "cp_container_sync_key",
    "content_type": "cp_content_type",
    "versions_location": "cp_versions_location",
    "history_location": "cp_history_location",
}


def public_access_for(container_read):
    """
    Maps a swift style read ACL to the public access level of a blob container.

    :param container_read:
        Comma separated ACL (e.g. `.r:*,.rlistings`).

    :return:
        "container" for anonymous read and listing, "blob" for anonymous read only, None otherwise.
    """
    acl = split_acl(container_read)

    if ".r:*" not in acl:
        return None

    return "container" if ".rlistings" in acl else "blob"


class AzureContainer(Container):
    def __init__(self, service, container_name):
        super().__init__(service)
        self._container_name = container_name
        service_raw = service.service_raw
        self._client = service_raw.get_container_client(container_name)
        self._logger = logging.getLogger("cp-azure")

    @property
    def container_raw(self):
        """
        Retrieves the original Azure Container client.
        """
        return self._client

    @property
    def url(self):
        return self._client.url

    @property
    def name(self):
        return self._container_name

    def create(self, opts):
        metadata = dict(opts.metadata)

        for field, key in RESERVED_KEYS.items():
            value = getattr(opts, field)
            if value:
                metadata[key] = value

        self._logger.debug(f"Creating container '{self.name}' with metadata keys: {sorted(metadata)}")

        try:
            self._client.create_container(metadata=metadata, public_access=public_access_for(opts.container_read))

        except HttpResponseError as e:
            raise translate_error(e) from e

    def _raw_metadata(self):
        try:
            return dict(self._client.get_container_properties().metadata or {})

        except HttpResponseError as e:
            raise translate_error(e) from e

    @property
    def headers(self):
        raw = self._raw_metadata()

        settings = {field: raw.get(key, "") for field, key in RESERVED_KEYS.items()}
        metadata = {k: v for k, v in raw.items() if not k.startswith(RESERVED_PREFIX)}

        return ContainerHeaders(
            read=split_acl(settings["container_read"]),
            write=split_acl(settings["container_write"]),
            sync_to=settings["container_sync_to"],
            sync_key=settings["container_sync_key"],
            content_type=settings["content_type"],
            versions_location=settings["versions_location"],
            history_location=settings["history_location"],
            metadata=metadata,
        )

    def update(self, opts):
        """
        Applies an update request.

        Blob containers replace their metadata as a whole, so the current metadata is fetched, patched with the
        requested changes and written back. An empty value removes the reserved key.
        """
        metadata = self._raw_metadata()

        for field, key in RESERVED_KEYS.items():
            value = getattr(opts, field)

            if value is None:
                continue

            if value:
                metadata[key] = value
            else:
                metadata.pop(key, None)

        if opts.remove_versions_location:
            metadata.pop(RESERVED_KEYS["versions_location"], None)

        if opts.remove_history_location:
            metadata.pop(RESERVED_KEYS["history_location"], None)

        if opts.metadata is not None:
            metadata = {k: v for k, v in metadata.items() if k.startswith(RESERVED_PREFIX)}
            metadata.update(opts.metadata)

        for key in opts.remove_metadata:
            metadata.pop(key, None)

        self._logger.debug(f"Updating container '{self.name}' with metadata keys: {sorted(metadata)}")

        try:
            self._client.set_container_metadata(metadata=metadata)

            if opts.container_read is not None:
                self._client.set_container_access_policy(signed_identifiers={},
                                                         public_access=public_access_for(opts.container_read))

        except HttpResponseError as e:
            raise translate_error(e) from e

    def delete(self):
        try:
            self._client.delete_container()

        except HttpResponseError as e:
            raise translate_error(e) from e

    def object_name_pages(self, results_per_page=None):
        """
        Iterates the blob listing of the container, one list of names per page.

        :param results_per_page:
            Maximum number of names per page. None to use the backend limit.
        """
        try:
            for page in self._client.list_blobs(results_per_page=results_per_page).by_page():
                yield [x['name'] for x in page]

        except HttpResponseError as e:
            raise translate_error(e) from e

    def delete_object(self, object_name):
        try:
            self._client.delete_blob(object_name, delete_snapshots="include")

        except HttpResponseError as e:
            raise translate_error(e) from e

    def __str__(self):
        return f"[AzureBlobStorage Container; Name: '{self.name}']"

    def __repr__(self):
        return str(self)
