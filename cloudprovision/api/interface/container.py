class Container:
    def __init__(self, service):
        self._service = service

    @property
    def service(self):
        return self._service

    @property
    def name(self):
        raise NotImplementedError("")

    def create(self, opts):
        raise NotImplementedError("")

    @property
    def headers(self):
        raise NotImplementedError("")

    def update(self, opts):
        raise NotImplementedError("")

    def delete(self):
        raise NotImplementedError("")

    def object_name_pages(self, results_per_page=None):
        raise NotImplementedError("")

    def delete_object(self, object_name):
        raise NotImplementedError("")

    def __str__(self):
        raise NotImplementedError("")

    def __repr__(self):
        raise NotImplementedError("")
