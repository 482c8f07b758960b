from humps import camelize
from pydantic import BaseModel, ConfigDict


class CamelModel(BaseModel):
    # from_attributes lets response models be built straight from ORM rows
    model_config = ConfigDict(
        alias_generator=camelize, populate_by_name=True, from_attributes=True
    )
