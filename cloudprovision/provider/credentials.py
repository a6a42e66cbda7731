
class ProviderCredentials:
    """
    ProviderCredentials holds the per-region settings needed to build the object storage clients.

    Attributes:
        _backend (str): Name of the storage backend the settings are meant for ("swift" or "azure").
        _default_region (str): Region used by resources that do not set one.
        _regions (dict): Region name -> keyword settings of the backend client.

    Properties:
        backend (str): The storage backend name.
        default_region (str): Property to get or set the default region.

    Raises:
        KeyError: Raised when asking for the settings of a region without configured credentials.

    Usage:
        credentials = ProviderCredentials(backend="swift", default_region="RegionOne")
        credentials.add_region("RegionOne", auth_url="https://keystone:5000/v3", user="demo", key="secret",
                               project_name="demo")
        settings = credentials.region_settings("RegionOne")
    """

    def __init__(self, backend="swift", default_region=None, regions=None):
        self._backend = backend
        self._default_region = default_region
        self._regions = {name: dict(settings) for name, settings in (regions or {}).items()}

    @property
    def backend(self):
        return self._backend

    @property
    def default_region(self):
        return self._default_region

    @default_region.setter
    def default_region(self, value):
        self._default_region = value

    @property
    def regions(self):
        return list(self._regions)

    def add_region(self, region, **settings):
        """
        Registers (or replaces) the client settings of a region.

        :param region:
            Region name.

        :param settings:
            Keyword settings forwarded to the backend service builder.
        """
        self._regions[region] = settings

    def resolve_region(self, region=None):
        """
        Returns the given region, or the default one if not set.

        :raises KeyError:
            When neither a region nor a default region are available.
        """
        region = region or self._default_region

        if not region:
            raise KeyError("A region is required! Set it in the resource or configure a default region.")

        return region

    def region_settings(self, region):
        """
        Retrieves the client settings of a region.

        :raises KeyError:
            When the region has no configured credentials.
        """
        if region not in self._regions:
            raise KeyError(f"No credentials configured for region '{region}' (known regions: {self.regions})")

        return dict(self._regions[region])

    def __str__(self):
        return f"[Provider credentials; Backend: '{self.backend}'; Regions: {self.regions}]"

    def __repr__(self):
        return str(self)
