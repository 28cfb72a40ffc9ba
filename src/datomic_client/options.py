import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError

from .errors import ConfigurationError, OptionError
from .urls import LATEST


class DbOptions(BaseModel):
    """Options understood by the database read endpoints."""

    model_config = ConfigDict(extra="ignore")

    # strict: the raw value also goes out as the `t` query parameter
    t: Union[StrictInt, StrictStr] = Field(
        default=LATEST,
        description="Basis t or tx of the database value. Defaults to the latest one.",
    )

    @classmethod
    def from_params(cls, params: Optional[Mapping[str, Any]]) -> "DbOptions":
        try:
            return cls.model_validate(dict(params or {}))
        except ValidationError as e:
            raise OptionError(f"Invalid database options: {e}") from e


class ClientConfig(BaseModel):
    url: str = Field(min_length=1, description="Base URL of the REST peer.")
    storage: Optional[str] = Field(default=None, description="Storage alias, if the peer has one.")
    timeout: Optional[float] = Field(default=None, gt=0, description="Seconds, handed to requests.")


def load_config(env_file: Optional[Union[str, Path]] = None) -> ClientConfig:
    """
    Build a ClientConfig from the environment.

    Reads DATOMIC_URL, DATOMIC_STORAGE and DATOMIC_TIMEOUT, after loading
    `env_file` (or a .env found from the working directory) with python-dotenv.
    Variables already set in the environment win over the file.
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))

    url = os.getenv("DATOMIC_URL")
    if not url:
        raise ConfigurationError("DATOMIC_URL is not set")

    try:
        return ClientConfig(
            url=url,
            storage=os.getenv("DATOMIC_STORAGE") or None,
            timeout=os.getenv("DATOMIC_TIMEOUT") or None,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid client configuration: {e}") from e
