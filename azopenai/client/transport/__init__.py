"""
azopenai transport layer.

Date: 2026-10-18
"""

from azopenai.client.transport.base import HTTPResponse, Transport
from azopenai.client.transport.http import AiohttpResponse, HTTPTransport

__all__ = ["Transport", "HTTPResponse", "HTTPTransport", "AiohttpResponse"]
