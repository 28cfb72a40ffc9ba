"""
datomic_client – a client for the Datomic REST peer protocol

    from datomic_client import Client, keyword

    client = Client("http://localhost:9000", "mem")
    client.create_database("cosas")
    client.transact("cosas", [{keyword("db/id"): 17592186045418, keyword("db/doc"): "hola"}])
    client.query("[:find ?e :where [?e :db/doc]]", "cosas").data
"""

__version__ = "0.1.0"

# Convenience imports
from .client import Client
from .errors import (Error, ConfigurationError, OptionError, EncodingError, DecodingError,
    ProtocolError, ClientError, ServerError)
from .events import EventStream
from .options import ClientConfig, DbOptions, load_config
from .response import Response
from .urls import LATEST
from .wire import Raw, Structured, keyword

# What users get when they do `import datomic_client`:
__all__ = [
    "Client",
    "Response",
    "EventStream",
    "ClientConfig",
    "DbOptions",
    "load_config",
    "Raw",
    "Structured",
    "keyword",
    "LATEST",
    "Error",
    "ConfigurationError",
    "OptionError",
    "EncodingError",
    "DecodingError",
    "ProtocolError",
    "ClientError",
    "ServerError",
    "__version__",
]
