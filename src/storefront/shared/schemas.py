"""Base model for the JSON contract.

Fields are snake_case in Python and camelCase on the wire; requests accept
either spelling.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
