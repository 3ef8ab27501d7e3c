"""
azopenai client.

Example Usage:
    ```python
    from azopenai import ChatCompletionsOptions, Client, KeyCredential

    client = Client.for_openai("https://api.openai.com/v1", KeyCredential("sk-..."))

    stream = await client.get_chat_completions_stream(
        ChatCompletionsOptions(
            deployment_name="gpt-4o-mini",
            messages=[{"role": "user", "content": "Write a haiku"}],
        )
    )
    async with stream:
        async for chunk in stream:
            ...
    ```

Date: 2026-10-18
"""

from azopenai.client.exceptions import (
    AzOpenAIError,
    ConfigurationError,
    ContentFilterResponseError,
    DecodeError,
    InsecureTransportError,
    ResponseError,
    StreamDecodeError,
    TimeoutError,
    TransportError,
)
from azopenai.client.retry import RetryConfig
from azopenai.client.credentials import TOKEN_SCOPE, AccessToken, KeyCredential, TokenCredential
from azopenai.client.pipeline import Pipeline, PipelineRequest, Policy
from azopenai.client.transport import AiohttpResponse, HTTPResponse, HTTPTransport, Transport
from azopenai.client.policies import (
    APIVersionPolicy,
    BearerTokenPolicy,
    KeyCredentialPolicy,
    OpenAIPolicy,
    RequestLoggingPolicy,
)
from azopenai.client.routing import ASYNC_SUBMISSION_PATHS, HasDeployment, format_url, get_deployment
from azopenai.client.content import (
    ChatMessageContentItem,
    ChatMessageImageContentItem,
    ChatMessageImageURL,
    ChatMessageTextContentItem,
    ChatRequestUserMessageContent,
)
from azopenai.client.envelope import StreamCompletionsOptions, StreamOptions
from azopenai.client.models import (
    BackendKind,
    BackendTarget,
    ChatChoice,
    ChatCompletions,
    ChatCompletionsFunctionToolDefinition,
    ChatCompletionsOptions,
    ChatCompletionsToolCall,
    ChatRequestAssistantMessage,
    ChatRequestMessage,
    ChatRequestSystemMessage,
    ChatRequestToolMessage,
    ChatRequestUserMessage,
    ChatResponseMessage,
    Choice,
    Completions,
    CompletionsOptions,
    CompletionsUsage,
    ContentFilterResults,
    Embeddings,
    EmbeddingsOptions,
    FunctionCall,
    FunctionDefinition,
    ImageGenerationOptions,
    ImageGenerations,
)
from azopenai.client.streaming import DONE_SENTINEL, EventReader, StreamState
from azopenai.client.client import DEFAULT_API_VERSION, Client, ClientOptions

__all__ = [
    # Client
    "Client",
    "ClientOptions",
    "DEFAULT_API_VERSION",
    # Exceptions
    "AzOpenAIError",
    "ConfigurationError",
    "InsecureTransportError",
    "TransportError",
    "TimeoutError",
    "DecodeError",
    "StreamDecodeError",
    "ResponseError",
    "ContentFilterResponseError",
    # Credentials
    "AccessToken",
    "KeyCredential",
    "TokenCredential",
    "TOKEN_SCOPE",
    # Pipeline
    "Pipeline",
    "PipelineRequest",
    "Policy",
    "APIVersionPolicy",
    "BearerTokenPolicy",
    "KeyCredentialPolicy",
    "OpenAIPolicy",
    "RequestLoggingPolicy",
    "RetryConfig",
    "Transport",
    "HTTPResponse",
    "HTTPTransport",
    "AiohttpResponse",
    # Routing
    "ASYNC_SUBMISSION_PATHS",
    "HasDeployment",
    "format_url",
    "get_deployment",
    # Models
    "BackendKind",
    "BackendTarget",
    "ChatMessageContentItem",
    "ChatMessageImageContentItem",
    "ChatMessageImageURL",
    "ChatMessageTextContentItem",
    "ChatRequestUserMessageContent",
    "StreamCompletionsOptions",
    "StreamOptions",
    "ChatChoice",
    "ChatCompletions",
    "ChatCompletionsFunctionToolDefinition",
    "ChatCompletionsOptions",
    "ChatCompletionsToolCall",
    "ChatRequestAssistantMessage",
    "ChatRequestMessage",
    "ChatRequestSystemMessage",
    "ChatRequestToolMessage",
    "ChatRequestUserMessage",
    "ChatResponseMessage",
    "Choice",
    "Completions",
    "CompletionsOptions",
    "CompletionsUsage",
    "ContentFilterResults",
    "Embeddings",
    "EmbeddingsOptions",
    "FunctionCall",
    "FunctionDefinition",
    "ImageGenerationOptions",
    "ImageGenerations",
    # Streaming
    "DONE_SENTINEL",
    "EventReader",
    "StreamState",
]
