"""
azopenai: async client for Azure OpenAI and OpenAI.

One client targets either an Azure OpenAI resource (deployment-scoped URLs,
api-key or Entra ID auth, api-version parameter) or the public OpenAI API
(flat URLs, bearer key), and streams completions as typed events.

Date: 2026-10-18
"""

__version__ = "0.1.0"
__license__ = "MIT"

from loguru import logger

# Library default: emit nothing until the application opts in
logger.disable("azopenai")

from azopenai.client import *  # noqa: E402,F401,F403
from azopenai.client import __all__ as _client_all  # noqa: E402
from azopenai.config import AzOpenAISettings, get_settings  # noqa: E402
from azopenai.utils.logging import disable_logging, enable_logging  # noqa: E402

__all__ = [
    *_client_all,
    "AzOpenAISettings",
    "get_settings",
    "enable_logging",
    "disable_logging",
]
