"""Base model configuration for all Pydantic models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FleetBaseModel(BaseModel):
    """Base model with common configuration.

    Conventions:
    - Python field names are snake_case
    - JSON field names are camelCase, matching the cluster API wire format
    - Instances are immutable; projections are rebuilt, never edited
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=True,
        frozen=True,
    )
