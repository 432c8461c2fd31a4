"""
The `core` package of the remote keyword server.

This package provides the keyword model and registry, argument marshalling,
result encoding, the RPC dispatcher and transport, data directory handling,
and logging setup.
"""

# pylint: disable=E0611
from rfremote.core import (
    data_dir,
    faults,
    keyword,
    logger,
    marshal,
    registry,
    result,
    rpc,
)
