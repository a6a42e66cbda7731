from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ContainerCreateOpts(BaseModel):
    """
    Parameters of a container creation request.

    Empty strings mean "not set" and are not sent to the backend.
    """
    container_read: str = ""
    container_write: str = ""
    container_sync_to: str = ""
    container_sync_key: str = ""
    content_type: str = ""
    versions_location: str = ""
    history_location: str = ""
    metadata: Dict[str, str] = Field(default_factory=dict)


class ContainerUpdateOpts(BaseModel):
    """
    Parameters of a container update request.

    Only the fields that are not None are sent to the backend. An empty string is a real value (it clears the
    setting in the backend), so it is sent as well. `remove_metadata` lists the metadata keys to drop.
    """
    container_read: Optional[str] = None
    container_write: Optional[str] = None
    container_sync_to: Optional[str] = None
    container_sync_key: Optional[str] = None
    content_type: Optional[str] = None
    versions_location: Optional[str] = None
    history_location: Optional[str] = None
    remove_versions_location: bool = False
    remove_history_location: bool = False
    metadata: Optional[Dict[str, str]] = None
    remove_metadata: List[str] = Field(default_factory=list)

    @property
    def is_empty(self):
        return not self.model_dump(exclude_defaults=True)


class ContainerHeaders(BaseModel):
    """
    Container settings as reported by the backend.
    """
    read: List[str] = Field(default_factory=list)
    write: List[str] = Field(default_factory=list)
    sync_to: str = ""
    sync_key: str = ""
    content_type: str = ""
    versions_location: str = ""
    history_location: str = ""
    metadata: Dict[str, str] = Field(default_factory=dict)


def split_acl(value):
    """
    Splits a comma separated ACL header into its entries.

    :param value:
        Raw header value. None is treated as an empty header.

    :return:
        List of stripped ACL entries. An empty header gives an empty list.
    """
    if not value:
        return []

    return [x.strip() for x in value.split(",")]
