from tqdm.auto import tqdm

from cloudprovision.api.interface.options import ContainerCreateOpts, ContainerUpdateOpts
from cloudprovision.config import get_config
from cloudprovision.exceptions import (ContainerConflictError, ContainerNotFoundError, ContainerOperationError,
                                       ForceNewError, RemoteRequestError, VersioningConflictError)
from cloudprovision.resources.container.schema import (CONTAINER_SCHEMA, SETTINGS_FIELDS, ContainerConfig,
                                                       ContainerState, Versioning)

import logging


def versioning_locations(versioning):
    """
    Translates a versioning entry into the location field of a request.

    :return:
        Dictionary like {"versions_location": "<container>"}, empty when there is no versioning.
    """
    if versioning is None:
        return {}

    return {versioning.location_field: versioning.location}


def versioning_from_headers(identifier, headers):
    """
    Builds the versioning entry reported by the backend.

    :raises VersioningConflictError:
        When both exclusive locations are present.
    """
    if headers.versions_location and headers.history_location:
        raise VersioningConflictError(identifier, headers.versions_location, headers.history_location)

    if headers.versions_location:
        return Versioning(type="versions", location=headers.versions_location)

    if headers.history_location:
        return Versioning(type="history", location=headers.history_location)

    return None


class ContainerResource:
    """
    Lifecycle of an object storage container described by a `ContainerConfig`.

    Every operation takes the state persisted by the caller (or the configuration, for `create`) and returns the
    new state; the resource instance itself keeps nothing between calls apart from the factory that provides the
    storage client of each region.

    Args:
        factory (ProviderFactory): Builds the storage service of each region.

    Usage:
        resource = ContainerResource(factory)

        state = resource.create({"name": "backups", "metadata": {"team": "storage"}})
        state = resource.update(state, {"name": "backups", "container_read": ".r:*"})
        state = resource.delete(state)
    """

    schema = CONTAINER_SCHEMA

    def __init__(self, factory):
        self._factory = factory
        self._logger = logging.getLogger("cp-containers")

    @property
    def factory(self):
        return self._factory

    def _container(self, identifier, region):
        return self._factory.service(region)[identifier]

    def create(self, config):
        """
        Creates the container and returns its refreshed state.

        :param config:
            ContainerConfig or mapping of configuration fields.

        :raises ContainerOperationError:
            When the backend rejects the creation.
        """
        config = ContainerConfig.parse(config)
        region = self._factory.resolve_region(config.region)
        container = self._container(config.name, region)

        opts = ContainerCreateOpts(container_read=config.container_read,
                                   container_write=config.container_write,
                                   container_sync_to=config.container_sync_to,
                                   container_sync_key=config.container_sync_key,
                                   content_type=config.content_type,
                                   metadata=dict(config.metadata),
                                   **versioning_locations(config.versioning))

        self._logger.debug(f"Create options for container '{config.name}': "
                           f"{opts.model_dump(exclude={'container_sync_key'})}")

        try:
            container.create(opts)

        except RemoteRequestError as e:
            raise ContainerOperationError("creating", config.name, e) from e

        self._logger.info(f"Container created with ID: {config.name}")

        state = ContainerState(id=config.name, config=config.model_copy(update={"region": region}))

        return self.read(state)

    def read(self, state):
        """
        Refreshes a state with the settings reported by the backend.

        A container that no longer exists is not an error: the returned state has an empty identifier.

        :raises VersioningConflictError:
            When the backend reports both a versions and a history location.

        :raises ContainerOperationError:
            When the backend request fails for any other reason.
        """
        if not state.exists:
            return state

        region = self._factory.resolve_region(state.config.region)
        container = self._container(state.id, region)

        try:
            headers = container.headers

        except ContainerNotFoundError:
            self._logger.info(f"Container '{state.id}' not found, removing it from state")
            return state.model_copy(update={"id": ""})

        except RemoteRequestError as e:
            raise ContainerOperationError("reading", state.id, e) from e

        self._logger.debug(f"Retrieved headers for container '{state.id}': {headers.model_dump(exclude={'sync_key'})}")

        changes = {
            "name": state.id,
            "region": region,
            "versioning": versioning_from_headers(state.id, headers),
            "metadata": {k.lower(): v for k, v in headers.metadata.items()},
        }

        # An empty ACL in the backend does not overwrite the configured one.
        if headers.read and headers.read[0]:
            changes["container_read"] = ",".join(headers.read)

        if headers.write and headers.write[0]:
            changes["container_write"] = ",".join(headers.write)

        return ContainerState(id=state.id, config=state.config.model_copy(update=changes))

    def update(self, state, config):
        """
        Sends the changed settings to the backend and returns the refreshed state.

        Only the fields that differ from the current state go into the request; with no differences the request
        carries just the container name. Metadata is sent as a whole whenever any of its entries changed.

        :param state:
            Current ContainerState.

        :param config:
            Desired ContainerConfig (or mapping).

        :raises ForceNewError:
            When the region or the name change. Those need the resource to be replaced.

        :raises ContainerOperationError:
            When the backend rejects the update.
        """
        config = ContainerConfig.parse(config)
        current = state.config

        # The region is computed: not setting it keeps the one the container lives in.
        config = config.model_copy(update={"region": config.region or current.region})

        for field, spec in self.schema.items():
            old_value = getattr(current, field)
            new_value = getattr(config, field)

            if spec.force_new and old_value and new_value != old_value:
                raise ForceNewError(field, old_value, new_value)

        opts = ContainerUpdateOpts()

        for field in SETTINGS_FIELDS:
            if getattr(config, field) != getattr(current, field):
                setattr(opts, field, getattr(config, field))

        if config.versioning != current.versioning:
            versioning = config.versioning

            if versioning is None or not versioning.location or not versioning.type:
                opts.remove_versions_location = True
                opts.remove_history_location = True
            else:
                # The other location is not cleared implicitly.
                setattr(opts, versioning.location_field, versioning.location)

        if config.metadata != current.metadata:
            opts.metadata = dict(config.metadata)
            opts.remove_metadata = sorted(set(current.metadata) - set(config.metadata))

        if opts.is_empty:
            self._logger.debug(f"No changes for container '{state.id}'")
        else:
            self._logger.debug(f"Update options for container '{state.id}': "
                               f"{opts.model_dump(exclude_defaults=True, exclude={'container_sync_key'})}")

        container = self._container(state.id, self._factory.resolve_region(config.region))

        try:
            container.update(opts)

        except RemoteRequestError as e:
            raise ContainerOperationError("updating", state.id, e) from e

        self._logger.info(f"Container '{state.id}' updated")

        return self.read(ContainerState(id=state.id, config=config))

    def delete(self, state):
        """
        Deletes the container and returns the state with an empty identifier.

        When the backend answers with a conflict (the container still holds objects) and `force_destroy` is set,
        every object is deleted and the container deletion is retried, up to
        `container.force_destroy.max_attempts` attempts.

        :raises ContainerConflictError:
            Unchanged, when the container is not empty and `force_destroy` is not set, or when the attempts run out.

        :raises ContainerOperationError:
            When the backend request fails for any other reason.
        """
        if not state.exists:
            return state

        config = get_config()
        max_attempts = config["container.force_destroy.max_attempts"]

        container = self._container(state.id, self._factory.resolve_region(state.config.region))

        attempt = 0

        while True:
            attempt += 1

            try:
                container.delete()

            except ContainerConflictError as e:
                if not state.config.force_destroy or attempt >= max_attempts:
                    raise

                self._logger.debug(f"Attempting to force destroy container '{state.id}' "
                                   f"(attempt {attempt}/{max_attempts}): {e}")
                self._purge_objects(container, state.id)
                continue

            except RemoteRequestError as e:
                raise ContainerOperationError("deleting", state.id, e) from e

            break

        self._logger.info(f"Container '{state.id}' deleted")

        return state.model_copy(update={"id": ""})

    def import_state(self, identifier, region=None):
        """
        Builds the state of an existing container from its identifier.

        :raises ContainerOperationError:
            When the container does not exist.
        """
        state = ContainerState(id=identifier, config=ContainerConfig(name=identifier, region=region))
        state = self.read(state)

        if not state.exists:
            raise ContainerOperationError("importing", identifier, "the container does not exist")

        return state

    def _purge_objects(self, container, identifier):
        """
        Deletes every object of the container, page by page. The objects of a page are deleted before the next
        page is requested.
        """
        config = get_config()
        bar = tqdm(unit="obj", desc=f"Purging {identifier}") if config["container.force_destroy.progress_bar"] else None
        deleted = 0

        try:
            pages = container.object_name_pages(results_per_page=config["container.list.results_per_page"])

            while True:
                try:
                    names = next(pages)

                except StopIteration:
                    break

                except RemoteRequestError as e:
                    raise ContainerOperationError("listing objects of", identifier, e) from e

                for name in names:
                    try:
                        container.delete_object(name)

                    except RemoteRequestError as e:
                        raise ContainerOperationError(f"deleting object '{name}' from", identifier, e) from e

                    deleted += 1

                    if bar is not None:
                        bar.update(1)

        finally:
            if bar is not None:
                bar.close()

        self._logger.info(f"Deleted {deleted} objects from container '{identifier}'")
