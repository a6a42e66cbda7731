from swiftclient.client import Connection

from cloudprovision.api.interface.service import Service
from cloudprovision.api.swift.container import SwiftContainer
from cloudprovision.config import get_config


class SwiftService(Service):
    """
    Object storage service backed by an OpenStack Swift account.

    Args:
        connection (swiftclient.client.Connection): An authenticated (or lazily authenticating) swift connection.
        region (str, optional): Region the connection is bound to.
    """

    def __init__(self, connection, region=None):
        super().__init__(region)
        self._connection = connection

    @classmethod
    def from_settings(cls, region=None, auth_url=None, user=None, key=None, project_name=None,
                      project_domain_name="Default", user_domain_name="Default", auth_version=None,
                      preauth_url=None, preauth_token=None, insecure=False, os_options=None):
        """
        Builds the service from keystone (or pre-authenticated) settings.

        :param region:
            Region name forwarded to the keystone catalog lookup.

        :param auth_url:
            Identity endpoint.

        :param preauth_url:
            Storage URL to use without authenticating. Requires `preauth_token`.

        :param os_options:
            Extra keystone options merged with the project/domain/region settings.

        :return:
            SwiftService instance.
        """
        config = get_config()

        options = {
            "project_name": project_name,
            "project_domain_name": project_domain_name,
            "user_domain_name": user_domain_name,
        }
        options.update(os_options or {})

        if region is not None:
            options["region_name"] = region

        connection = Connection(authurl=auth_url,
                                user=user,
                                key=key,
                                auth_version=auth_version or config["swift.auth_version"],
                                os_options=options,
                                preauthurl=preauth_url,
                                preauthtoken=preauth_token,
                                insecure=insecure,
                                retries=config["swift.retries"])

        return cls(connection, region=region)

    @property
    def connection(self):
        """
        Retrieves the original swiftclient connection.
        """
        return self._connection

    def __getitem__(self, container_name):
        if type(container_name) is not str:
            raise KeyError("Type of container not understood. Try the name of the container (as a string).")

        return SwiftContainer(self, container_name)

    def __str__(self):
        return f"[Swift object storage; Region: '{self.region}']"

    def __repr__(self):
        return str(self)
