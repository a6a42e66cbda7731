"""
Tests for the azure blob storage backend
"""

# Standard
from unittest import mock

# Third Party
from azure.core.exceptions import HttpResponseError, ResourceExistsError, ResourceNotFoundError
import pytest

# Local
from cloudprovision.api.azure import AzureContainer, AzureService
from cloudprovision.api.azure import service as service_module
from cloudprovision.api.azure.container import public_access_for
from cloudprovision.api.interface import ContainerCreateOpts, ContainerUpdateOpts
from cloudprovision.exceptions import ContainerConflictError, ContainerNotFoundError, RemoteRequestError

## Helpers #####################################################################


@pytest.fixture
def blob_service():
    return mock.MagicMock()


@pytest.fixture
def client(blob_service):
    return blob_service.get_container_client.return_value


@pytest.fixture
def container(blob_service):
    return AzureService(blob_service, region="westeurope")["backups"]


def set_metadata(client, metadata):
    client.get_container_properties.return_value.metadata = metadata


## Service #####################################################################


def test_service_returns_containers(blob_service):
    container = AzureService(blob_service)["backups"]

    assert isinstance(container, AzureContainer)
    assert container.name == "backups"
    blob_service.get_container_client.assert_called_once_with("backups")


def test_from_settings_connection_string():
    with mock.patch.object(service_module, "BlobServiceClient") as client_cls:
        service = AzureService.from_settings(region="westeurope", connection_string="UseDevelopmentStorage=true")

    client_cls.from_connection_string.assert_called_once_with("UseDevelopmentStorage=true")
    assert service.service_raw is client_cls.from_connection_string.return_value
    assert service.region == "westeurope"


@pytest.mark.parametrize(
    "cloud_name,url",
    [
        (None, "https://account.blob.core.windows.net"),
        ("AzureChinaCloud", "https://account.blob.core.chinacloudapi.cn"),
        ("AzureUSGovernmentCloud", "https://account.blob.core.usgovcloudapi.net"),
    ],
)
def test_from_settings_account_key(cloud_name, url):
    with mock.patch.object(service_module, "BlobServiceClient") as client_cls:
        AzureService.from_settings(account_name="account", account_key="key", cloud_name=cloud_name)

    client_cls.assert_called_once_with(url, credential="key")


def test_from_settings_requires_account():
    with pytest.raises(KeyError):
        AzureService.from_settings(region="westeurope")


## ACL #########################################################################


@pytest.mark.parametrize(
    "acl,expected",
    [
        ("", None),
        ("project:reader", None),
        (".r:*", "blob"),
        (".r:*,.rlistings", "container"),
    ],
)
def test_public_access_for(acl, expected):
    assert public_access_for(acl) == expected


## Create ######################################################################


def test_create_keeps_settings_in_metadata(container, client):
    opts = ContainerCreateOpts(container_read=".r:*,.rlistings",
                               versions_location="archive",
                               metadata={"team": "storage"})

    container.create(opts)

    client.create_container.assert_called_once_with(
        metadata={
            "team": "storage",
            "cp_container_read": ".r:*,.rlistings",
            "cp_versions_location": "archive",
        },
        public_access="container",
    )


def test_create_existing_container_conflicts(container, client):
    client.create_container.side_effect = ResourceExistsError(message="The specified container already exists.")

    with pytest.raises(ContainerConflictError):
        container.create(ContainerCreateOpts())


## Headers #####################################################################


def test_headers_split_reserved_metadata(container, client):
    set_metadata(client, {
        "team": "storage",
        "cp_container_write": "project:admin",
        "cp_history_location": "history",
    })

    headers = container.headers

    assert headers.metadata == {"team": "storage"}
    assert headers.write == ["project:admin"]
    assert headers.read == []
    assert headers.history_location == "history"
    assert headers.versions_location == ""


def test_headers_not_found(container, client):
    client.get_container_properties.side_effect = ResourceNotFoundError(message="The specified container does not exist.")

    with pytest.raises(ContainerNotFoundError):
        container.headers


## Update ######################################################################


def test_update_patches_current_metadata(container, client):
    set_metadata(client, {
        "team": "storage",
        "cp_container_write": "project:admin",
        "cp_versions_location": "archive",
    })
    opts = ContainerUpdateOpts(container_write="", history_location="history", metadata={"tier": "gold"})
    opts.remove_versions_location = True

    container.update(opts)

    client.set_container_metadata.assert_called_once_with(metadata={
        "cp_history_location": "history",
        "tier": "gold",
    })
    client.set_container_access_policy.assert_not_called()


def test_update_removes_metadata_keys(container, client):
    set_metadata(client, {"team": "storage", "tier": "gold", "cp_container_write": "project:admin"})

    container.update(ContainerUpdateOpts(remove_metadata=["tier"]))

    client.set_container_metadata.assert_called_once_with(metadata={
        "cp_container_write": "project:admin",
        "team": "storage",
    })


def test_update_without_metadata_keeps_user_metadata(container, client):
    set_metadata(client, {"team": "storage"})

    container.update(ContainerUpdateOpts(container_read=".r:*"))

    client.set_container_metadata.assert_called_once_with(metadata={
        "team": "storage",
        "cp_container_read": ".r:*",
    })
    client.set_container_access_policy.assert_called_once_with(signed_identifiers={}, public_access="blob")


## Delete ######################################################################


@pytest.mark.parametrize(
    "error,error_type",
    [
        (ResourceNotFoundError(message="missing"), ContainerNotFoundError),
        (ResourceExistsError(message="busy"), ContainerConflictError),
        (HttpResponseError(message="boom"), RemoteRequestError),
    ],
)
def test_delete_errors_are_translated(container, client, error, error_type):
    client.delete_container.side_effect = error

    with pytest.raises(error_type):
        container.delete()


## Objects #####################################################################


def test_object_pages(container, client):
    client.list_blobs.return_value.by_page.return_value = iter([
        [{"name": "a"}, {"name": "b"}],
        [{"name": "c"}],
    ])

    pages = list(container.object_name_pages(results_per_page=2))

    assert pages == [["a", "b"], ["c"]]
    client.list_blobs.assert_called_once_with(results_per_page=2)


def test_delete_object(container, client):
    container.delete_object("a")

    client.delete_blob.assert_called_once_with("a", delete_snapshots="include")
