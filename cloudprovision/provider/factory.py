from cloudprovision.api.azure import AzureService
from cloudprovision.api.swift import SwiftService
from cloudprovision.exceptions import ClientCreationError

import logging


BACKENDS = {
    "swift": SwiftService.from_settings,
    "azure": AzureService.from_settings,
}


class ProviderFactory:
    """
    ProviderFactory builds the object storage service of each region from a set of credentials.

    Resources receive the factory explicitly and ask it for the service of the region they live in, so no client is
    shared through module state.

    Args:
        credentials (ProviderCredentials): Per-region settings and default region.
        singleton (bool, optional): If True, a single service instance per region is kept and reused by every call.
            If False, a new service is built on each call.
        builders (dict, optional): Backend name -> callable `builder(region=..., **settings)` returning a `Service`.
            Extends (or overrides) the built-in swift and azure backends.

    Usage:
        credentials = ProviderCredentials(backend="swift", default_region="RegionOne")
        credentials.add_region("RegionOne", auth_url="https://keystone:5000/v3", user="demo", key="secret")
        factory = ProviderFactory(credentials)

        service = factory.service()                 # default region
        container = factory.container("backups")    # container handle in the default region
    """

    def __init__(self, credentials, singleton=True, builders=None):
        self._credentials = credentials
        self._singleton = singleton
        self._builders = dict(BACKENDS)
        self._builders.update(builders or {})
        self._services = {}
        self._logger = logging.getLogger("cp-factory")

    @property
    def credentials(self):
        return self._credentials

    def resolve_region(self, region=None):
        """
        Returns the region of a resource: the given one or the default region of the credentials.

        :raises ClientCreationError:
            When no region can be resolved.
        """
        try:
            return self._credentials.resolve_region(region)

        except KeyError as e:
            raise ClientCreationError(f"error creating object storage client: {e}") from e

    def service(self, region=None):
        """
        Retrieves the service of the given region (or the default region).

        :raises ClientCreationError:
            When the region is unknown, the backend is not supported or the client could not be built.
        """
        region = self.resolve_region(region)

        if self._singleton and region in self._services:
            return self._services[region]

        backend = self._credentials.backend
        builder = self._builders.get(backend)

        if builder is None:
            raise ClientCreationError(f"error creating object storage client: unknown backend '{backend}' "
                                      f"(available: {sorted(self._builders)})")

        try:
            settings = self._credentials.region_settings(region)
            service = builder(region=region, **settings)

        except (KeyError, TypeError, ValueError) as e:
            raise ClientCreationError(f"error creating object storage client for region '{region}': {e}") from e

        self._logger.debug(f"Created {backend} service for region '{region}'")

        if self._singleton:
            self._services[region] = service

        return service

    def container(self, container_name, region=None):
        """
        Retrieves a container handle in the given region (or the default region).
        """
        return self.service(region)[container_name]

    def __str__(self):
        return f"Provider factory ({self._credentials.backend}; cached regions: {sorted(self._services)})."

    def __repr__(self):
        return str(self)
