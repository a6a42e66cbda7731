"""
In-memory object storage backend used to exercise the resource lifecycle.

It behaves like a swift account: updates merge metadata, an empty value clears a setting and deleting a container
that still holds objects answers with a conflict.
"""

from cloudprovision.api.interface.container import Container
from cloudprovision.api.interface.options import ContainerHeaders, split_acl
from cloudprovision.api.interface.service import Service
from cloudprovision.exceptions import ContainerConflictError, ContainerNotFoundError
from cloudprovision.provider import ProviderCredentials, ProviderFactory

## Helpers #####################################################################

_FIELDS = {
    "container_read": "read",
    "container_write": "write",
    "container_sync_to": "sync_to",
    "container_sync_key": "sync_key",
    "content_type": "content_type",
    "versions_location": "versions_location",
    "history_location": "history_location",
}


def new_record():
    record = {key: "" for key in _FIELDS.values()}
    record["metadata"] = {}
    record["objects"] = set()
    return record


class MemoryContainer(Container):
    def __init__(self, service, container_name):
        super().__init__(service)
        self._container_name = container_name

    @property
    def name(self):
        return self._container_name

    def _record(self):
        record = self.service.containers.get(self.name)
        if record is None:
            raise ContainerNotFoundError("Container not found", status_code=404)
        return record

    def create(self, opts):
        self.service.record_call("create", opts)
        record = new_record()
        for field, key in _FIELDS.items():
            record[key] = getattr(opts, field)
        record["metadata"] = dict(opts.metadata)
        self.service.containers[self.name] = record

    @property
    def headers(self):
        self.service.record_call("headers")
        record = self._record()
        return ContainerHeaders(
            read=split_acl(record["read"]),
            write=split_acl(record["write"]),
            sync_to=record["sync_to"],
            sync_key=record["sync_key"],
            content_type=record["content_type"],
            versions_location=record["versions_location"],
            history_location=record["history_location"],
            metadata=dict(record["metadata"]),
        )

    def update(self, opts):
        self.service.record_call("update", opts)
        record = self._record()
        for field, key in _FIELDS.items():
            value = getattr(opts, field)
            if value is not None:
                record[key] = value
        if opts.remove_versions_location:
            record["versions_location"] = ""
        if opts.remove_history_location:
            record["history_location"] = ""
        if opts.metadata is not None:
            record["metadata"].update(opts.metadata)
        for key in opts.remove_metadata:
            record["metadata"].pop(key, None)

    def delete(self):
        self.service.record_call("delete")
        record = self._record()
        if record["objects"]:
            raise ContainerConflictError("There was a conflict when trying to complete your request.",
                                         status_code=409)
        del self.service.containers[self.name]

    def object_name_pages(self, results_per_page=None):
        marker = None
        while True:
            remaining = sorted(x for x in self._record()["objects"] if marker is None or x > marker)
            page = remaining[:results_per_page] if results_per_page else remaining
            if not page:
                return
            self.service.record_call("list", tuple(page))
            yield page
            marker = page[-1]

    def delete_object(self, object_name):
        self.service.record_call("delete_object", object_name)
        objects = self._record()["objects"]
        if object_name not in objects:
            raise ContainerNotFoundError(f"Object '{object_name}' not found", status_code=404)
        objects.remove(object_name)

    def __str__(self):
        return f"[Memory Container; Name: '{self.name}']"

    def __repr__(self):
        return str(self)


class MemoryService(Service):
    """
    Service keeping containers in a dict. Errors can be injected per operation name with `fail(op, error)`; the
    error is raised every time the operation is called until `fail(op, None)`.
    """

    def __init__(self, region=None):
        super().__init__(region)
        self.containers = {}
        self.calls = []
        self.errors = {}

    def record_call(self, operation, *args):
        self.calls.append((operation,) + args)
        error = self.errors.get(operation)
        if error is not None:
            raise error

    def fail(self, operation, error):
        self.errors[operation] = error

    def calls_of(self, operation):
        return [call for call in self.calls if call[0] == operation]

    def add_container(self, name, objects=(), **settings):
        record = new_record()
        metadata = settings.pop("metadata", {})
        record.update(settings)
        record["metadata"] = dict(metadata)
        record["objects"] = set(objects)
        self.containers[name] = record
        return record

    def __getitem__(self, container_name):
        return MemoryContainer(self, container_name)

    def __str__(self):
        return f"[Memory object storage; Region: '{self.region}']"

    def __repr__(self):
        return str(self)


def memory_factory(regions=("RegionOne",), default_region="RegionOne"):
    """
    Builds a ProviderFactory whose services live in memory.

    :return:
        (factory, services) where services maps each region to its MemoryService.
    """
    services = {region: MemoryService(region) for region in regions}
    credentials = ProviderCredentials(backend="memory", default_region=default_region,
                                      regions={region: {} for region in regions})
    factory = ProviderFactory(credentials, builders={"memory": lambda region: services[region]})
    return factory, services
