"""
hostbridge: a mock editor host bridge.

Answers the host services (workspace, window, env, diff, testing) with canned
responses, plus real diff sessions backed by the file system, so RPC clients
can be tested without an editor attached.
"""

__version__ = "0.1.0"
