"""Transports to the remote platform.

Modules
-------
http    HttpApiClient -- httpx adapter implementing the ApiClient protocol
"""
