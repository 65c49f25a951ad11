"""Pydantic argument models for the tools.

The LLM runtime calls tools with camelCase JSON arguments.  These models
validate those arguments and double as the JSON schema advertised to the
model (``model_json_schema(by_alias=True)``), so field descriptions here
are written for the language model, not for developers.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ToolArguments(BaseModel):
    """Base model: camelCase aliases, snake_case attributes.

    Unknown keys are dropped and string values are kept verbatim.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class FindPlaceArgs(ToolArguments):
    """Arguments of the ``findPlace`` tool."""

    places_dataset_name: str = Field(
        min_length=1,
        description="The name of the dataset with searched places by placeSearch tool",
    )
    spatial_filter_dataset_name: str | None = Field(
        default=None,
        description="The name of the dataset from related spatial filter tool",
    )
    isochrone_dataset_name: str | None = Field(
        default=None,
        description="The name of the dataset from isochrone tool if called",
    )


class BuyHouseArgs(ToolArguments):
    """Arguments of the ``buyHouse`` tool."""

    redfin_description: str = Field(description="The Redfin description of the property")
    redfin_url: str = Field(description="The Redfin URL of the property")
    schools_dataset_name: str = Field(
        min_length=1, description="The name of the dataset containing schools"
    )
    grocery_stores_dataset_name: str = Field(
        min_length=1, description="The name of the dataset containing grocery stores"
    )
    parks_dataset_name: str = Field(
        min_length=1, description="The name of the dataset containing parks"
    )
    clinics_dataset_name: str = Field(
        min_length=1,
        description="The name of the dataset containing clinics or urgent care",
    )
    hospitals_dataset_name: str = Field(
        min_length=1, description="The name of the dataset containing hospitals"
    )
    gyms_dataset_name: str = Field(
        min_length=1, description="The name of the dataset containing gyms"
    )
    restaurants_dataset_name: str = Field(
        min_length=1, description="The name of the dataset containing restaurants"
    )
    five_mins_drive_dataset_name: str = Field(
        min_length=1,
        description="The name of the dataset containing 5 minutes drive distance polygon",
    )
    ten_mins_drive_dataset_name: str = Field(
        min_length=1,
        description="The name of the dataset containing 10 minutes drive distance polygon",
    )

    def category_dataset_names(self) -> tuple[str, ...]:
        """Category dataset names in amenity category order."""
        return (
            self.schools_dataset_name,
            self.grocery_stores_dataset_name,
            self.parks_dataset_name,
            self.clinics_dataset_name,
            self.hospitals_dataset_name,
            self.gyms_dataset_name,
            self.restaurants_dataset_name,
        )
