
class Service:

    def __init__(self, region=None):
        self._region = region

    @property
    def region(self):
        return self._region

    def __getitem__(self, container_name):
        raise NotImplementedError("")

    def __str__(self):
        raise NotImplementedError("")

    def __repr__(self):
        raise NotImplementedError("")
