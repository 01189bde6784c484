"""
API layer for the Rookie Draft Board

HTTP client for outbound calls and the aiohttp web facade.
"""
from .client import APIClient, get_api_client, get_global_client, cleanup_global_client

__all__ = ['APIClient', 'get_api_client', 'get_global_client', 'cleanup_global_client']
