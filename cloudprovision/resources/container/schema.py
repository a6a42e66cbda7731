"""
Definition of the object storage container resource: the recognized configuration fields, their mutability and the
typed configuration bundle validated at the boundary.
"""

from typing import Any, Dict, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cloudprovision.api.interface.options import split_acl
from cloudprovision.exceptions import ConfigValidationError


class FieldSpec(NamedTuple):
    """Declaration of a resource attribute and how it may change."""
    type: str
    required: bool = False
    optional: bool = False
    computed: bool = False
    force_new: bool = False
    default: Any = None
    max_items: Optional[int] = None


CONTAINER_SCHEMA = {
    "region": FieldSpec("string", optional=True, computed=True, force_new=True),
    "name": FieldSpec("string", required=True, force_new=True),
    "container_read": FieldSpec("string", optional=True),
    "container_sync_to": FieldSpec("string", optional=True),
    "container_sync_key": FieldSpec("string", optional=True),
    "container_write": FieldSpec("string", optional=True),
    "content_type": FieldSpec("string", optional=True),
    "versioning": FieldSpec("set", optional=True, max_items=1),
    "metadata": FieldSpec("map", optional=True),
    "force_destroy": FieldSpec("bool", optional=True, default=False),
}

# Plain string settings, sent to the backend as they are configured.
SETTINGS_FIELDS = ("container_read", "container_write", "container_sync_to", "container_sync_key", "content_type")

VERSIONING_TYPES = ("versions", "history")


class Versioning(BaseModel):
    """
    Versioning mode of a container. `type` selects the mode (`versions` keeps prior object versions, `history`
    keeps prior versions and deletion markers) and `location` names the container that stores them.

    A container has at most one of these; no versioning is represented by None.
    """
    model_config = ConfigDict(frozen=True)

    type: str
    location: str

    @field_validator("type")
    @classmethod
    def _known_type(cls, value):
        value = value.lower()

        if value not in VERSIONING_TYPES:
            raise ValueError(f"expected type to be one of {list(VERSIONING_TYPES)}, got '{value}'")

        return value

    @property
    def location_field(self):
        """Name of the request/header field that carries the location of this mode."""
        return f"{self.type}_location"


class ContainerConfig(BaseModel):
    """
    Configuration bundle of a container resource.

    `versioning` also accepts a list with at most one entry, the way set-typed attributes are written in
    declarative configurations.
    """
    model_config = ConfigDict(extra="forbid")

    name: str
    region: Optional[str] = None
    container_read: str = ""
    container_write: str = ""
    container_sync_to: str = ""
    container_sync_key: str = ""
    content_type: str = ""
    versioning: Optional[Versioning] = None
    metadata: Dict[str, str] = Field(default_factory=dict)
    force_destroy: bool = CONTAINER_SCHEMA["force_destroy"].default

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, value):
        if not value:
            raise ValueError("name must not be empty")

        return value

    @field_validator("container_read", "container_write")
    @classmethod
    def _normalized_acl(cls, value):
        # Same form the backend reports: entries stripped and joined by commas.
        return ",".join(split_acl(value))

    @field_validator("metadata")
    @classmethod
    def _lower_case_metadata_keys(cls, value):
        # Metadata keys are case-insensitive in the backends, which may report them lower-cased.
        keys = [k.lower() for k in value]

        if len(set(keys)) != len(keys):
            raise ValueError(f"metadata keys must be unique ignoring case, got {sorted(value)}")

        return {k.lower(): v for k, v in value.items()}

    @field_validator("versioning", mode="before")
    @classmethod
    def _single_versioning(cls, value):
        if isinstance(value, (list, tuple, set, frozenset)):
            max_items = CONTAINER_SCHEMA["versioning"].max_items
            value = list(value)

            if len(value) > max_items:
                raise ValueError(f"attribute supports {max_items} item maximum, config has {len(value)} declared")

            return value[0] if value else None

        return value

    @classmethod
    def parse(cls, value):
        """
        Validates a configuration bundle.

        :param value:
            A ContainerConfig (returned as is) or a mapping of configuration fields.

        :raises ConfigValidationError:
            When the bundle does not validate.
        """
        if isinstance(value, cls):
            return value

        try:
            return cls.model_validate(value)

        except ValidationError as e:
            raise ConfigValidationError(f"invalid container configuration: {e}") from e


class ContainerState(BaseModel):
    """
    State of a container resource as persisted by the orchestrator: the identifier (the container name, empty
    when the container does not exist) and the last known configuration.
    """
    id: str = ""
    config: ContainerConfig

    @property
    def exists(self):
        return bool(self.id)
