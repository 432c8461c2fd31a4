"""
Remote keyword server.

Serves keyword libraries over the Robot Framework remote library
interface: ``get_keyword_names`` lists the registered keywords and
``run_keyword`` runs one of them and reports its outcome.
"""
