"""
RPC (Remote Procedure Call) functionality of the remote keyword server.

- dispatcher: answers ``get_keyword_names`` and ``run_keyword`` from a
  frozen keyword registry, separating protocol faults from keyword failures
- server: threaded XML-RPC listener routing every call to the dispatcher
"""

# pylint: disable=E0611
from rfremote.core.rpc import dispatcher, server
