from pydantic import BaseModel, ConfigDict


class CamelModel(BaseModel):
    """accept and emit the camelCase keys the web app sends."""
    model_config = ConfigDict(populate_by_name=True)
