from __future__ import annotations

from pydantic_settings import BaseSettings


class FulfillmentBaseSettings(BaseSettings):
    """
    Base class for every settings section.

    Fields are read from the environment (or .env) by their exact alias;
    the Python field name is accepted too so sections can be built in code.
    """

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }
