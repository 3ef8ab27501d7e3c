"""
Client for Azure OpenAI and OpenAI.

The same client talks to either backend. The backend is fixed at
construction and decides the URL layout, how the credential is attached,
and whether the api-version query parameter is sent.

Example Usage:
    ```python
    from azopenai import (
        ChatCompletionsOptions,
        ChatRequestUserMessage,
        Client,
        KeyCredential,
    )

    async with Client.from_key_credential(
        "https://my-resource.openai.azure.com",
        KeyCredential("..."),
    ) as client:
        options = ChatCompletionsOptions(
            deployment_name="gpt-4o",
            messages=[ChatRequestUserMessage(content="Hello!")],
        )
        async with await client.get_chat_completions_stream(options) as stream:
            async for chunk in stream:
                ...
    ```

Date: 2026-10-18
"""

from typing import Any, TypeVar

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from azopenai import __version__
from azopenai.client.credentials import TOKEN_SCOPE, KeyCredential, TokenCredential
from azopenai.client.envelope import StreamCompletionsOptions, StreamOptions, to_json_object
from azopenai.client.exceptions import ConfigurationError, DecodeError, new_response_error
from azopenai.client.models import (
    BackendKind,
    BackendTarget,
    ChatCompletions,
    ChatCompletionsOptions,
    Completions,
    CompletionsOptions,
    Embeddings,
    EmbeddingsOptions,
    ImageGenerationOptions,
    ImageGenerations,
)
from azopenai.client.pipeline import Pipeline, PipelineRequest, Policy
from azopenai.client.policies import (
    API_VERSION_PARAM,
    APIVersionPolicy,
    BearerTokenPolicy,
    KeyCredentialPolicy,
    OpenAIPolicy,
    RequestLoggingPolicy,
)
from azopenai.client.retry import RetryConfig
from azopenai.client.routing import format_url, get_deployment
from azopenai.client.streaming import EventReader
from azopenai.client.transport.base import HTTPResponse
from azopenai.client.transport.http import HTTPTransport

T = TypeVar("T", bound=BaseModel)

DEFAULT_API_VERSION = "2024-08-01-preview"

_SUCCESS_STATUS = 200


class ClientOptions(BaseModel):
    """Optional settings for Client."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    api_version: str = DEFAULT_API_VERSION
    allow_insecure_credential_with_http: bool = Field(
        default=False,
        description="Permit sending credentials to a plain http:// endpoint"
    )
    retry: RetryConfig = Field(default_factory=RetryConfig)
    connect_timeout: float = Field(default=10.0, gt=0)
    read_timeout: float | None = Field(default=300.0, gt=0)
    user_agent: str = f"azopenai-python/{__version__}"
    require_stream_sentinel: bool = False
    transport: Any = Field(
        default=None,
        description="Transport to use instead of the default HTTPTransport"
    )


class Client:
    """
    Client for the completions, chat, embeddings and image APIs.

    Use one of the constructors rather than ``__init__``:

    - ``Client.from_token_credential``: Azure OpenAI with Entra ID tokens
    - ``Client.from_key_credential``: Azure OpenAI with an api-key
    - ``Client.for_openai``: the public OpenAI endpoint
    - ``Client.from_settings``: whichever of the above the settings describe

    Instances hold only immutable configuration and a connection pool, so
    one client can serve many concurrent operations.
    """

    def __init__(
        self,
        target: BackendTarget,
        policies: list[Policy],
        options: ClientOptions
    ):
        self.target = target
        self.options = options
        self._transport = options.transport or HTTPTransport(
            connect_timeout=options.connect_timeout,
            read_timeout=options.read_timeout,
            user_agent=options.user_agent
        )
        self._pipeline = Pipeline(
            self._transport,
            per_retry_policies=[*policies, RequestLoggingPolicy()],
            retry=options.retry
        )

    @classmethod
    def from_token_credential(
        cls,
        endpoint: str,
        credential: TokenCredential,
        options: ClientOptions | None = None
    ) -> "Client":
        """
        Create a client for an Azure OpenAI endpoint using bearer tokens.

        Args:
            endpoint: e.g. https://{your-resource-name}.openai.azure.com
            credential: Issues tokens for the Cognitive Services scope
            options: Client options, None for defaults
        """
        options = options or ClientOptions()
        auth_policy = BearerTokenPolicy(
            credential,
            [TOKEN_SCOPE],
            allow_insecure=options.allow_insecure_credential_with_http
        )
        return cls(
            BackendTarget(endpoint=endpoint, kind=BackendKind.AZURE),
            [auth_policy, APIVersionPolicy(options.api_version)],
            options
        )

    @classmethod
    def from_key_credential(
        cls,
        endpoint: str,
        credential: KeyCredential,
        options: ClientOptions | None = None
    ) -> "Client":
        """
        Create a client for an Azure OpenAI endpoint using an api-key.

        Args:
            endpoint: e.g. https://{your-resource-name}.openai.azure.com
            credential: API key, sent in the ``api-key`` header
            options: Client options, None for defaults
        """
        options = options or ClientOptions()
        auth_policy = KeyCredentialPolicy(
            credential,
            "api-key",
            allow_insecure=options.allow_insecure_credential_with_http
        )
        return cls(
            BackendTarget(endpoint=endpoint, kind=BackendKind.AZURE),
            [auth_policy, APIVersionPolicy(options.api_version)],
            options
        )

    @classmethod
    def for_openai(
        cls,
        endpoint: str,
        credential: KeyCredential,
        options: ClientOptions | None = None
    ) -> "Client":
        """
        Create a client for the public OpenAI endpoint.

        Args:
            endpoint: e.g. https://api.openai.com/v1
            credential: API key, sent as ``Authorization: Bearer <key>``
            options: Client options, None for defaults
        """
        options = options or ClientOptions()
        auth_policy = KeyCredentialPolicy(
            credential,
            "Authorization",
            prefix="Bearer ",
            allow_insecure=options.allow_insecure_credential_with_http
        )
        return cls(
            BackendTarget(endpoint=endpoint, kind=BackendKind.OPENAI),
            [auth_policy, OpenAIPolicy()],
            options
        )

    @classmethod
    def from_settings(cls, settings: Any = None) -> "Client":
        """
        Create a client from ``AzOpenAISettings``.

        Args:
            settings: Settings instance; defaults to ``get_settings()``

        Raises:
            ConfigurationError: If the endpoint or API key is missing
        """
        from azopenai.config.settings import get_settings
        from azopenai.utils.logging import enable_logging

        settings = settings or get_settings()
        if settings.log_enabled:
            enable_logging(settings.log_level, settings.log_file)

        if not settings.endpoint:
            raise ConfigurationError("AZOPENAI_ENDPOINT is not set")
        if not settings.api_key:
            raise ConfigurationError("AZOPENAI_API_KEY is not set")

        credential = KeyCredential(settings.api_key.get_secret_value())
        options = settings.to_client_options()

        if settings.backend == BackendKind.OPENAI:
            return cls.for_openai(settings.endpoint, credential, options)
        return cls.from_key_credential(settings.endpoint, credential, options)

    @property
    def is_azure(self) -> bool:
        return self.target.is_azure

    def format_url(self, path: str, deployment: str | None) -> str:
        return format_url(self.target.endpoint, path, deployment, self.target.is_azure)

    def _create_request(self, path: str, body: Any) -> PipelineRequest:
        request = PipelineRequest.create(
            "POST",
            self.format_url(path, get_deployment(body))
        )
        request.set_query_param(API_VERSION_PARAM, self.options.api_version)
        request.headers["Accept"] = "application/json"
        request.set_json(to_json_object(body))
        return request

    async def _error_from(self, response: HTTPResponse) -> Exception:
        try:
            body = await response.read()
        finally:
            await response.close()
        error = new_response_error(response.status_code, body, response.headers)
        logger.debug(f"Request failed: {error}")
        return error

    async def _send(self, path: str, body: Any, result_type: type[T]) -> T:
        request = self._create_request(path, body)
        response = await self._pipeline.run(request)

        if response.status_code != _SUCCESS_STATUS:
            raise await self._error_from(response)

        try:
            data = await response.read()
        finally:
            await response.close()

        try:
            return result_type.model_validate_json(data)
        except ValidationError as e:
            raise DecodeError(
                f"Failed to decode response as {result_type.__name__}",
                details={"errors": e.errors(include_url=False)}
            ) from e

    async def _stream(
        self,
        path: str,
        body: Any,
        result_type: type[T],
        stream_options: StreamOptions | None
    ) -> EventReader[T]:
        request = self._create_request(path, body)
        request.set_json(
            StreamCompletionsOptions(body, stream=True, stream_options=stream_options).to_dict()
        )
        request.headers["Accept"] = "text/event-stream"
        request.skip_body_download()

        response = await self._pipeline.run(request)

        if response.status_code != _SUCCESS_STATUS:
            raise await self._error_from(response)

        logger.debug(f"Opened event stream for {path} ({result_type.__name__})")
        return EventReader(
            response,
            result_type,
            require_sentinel=self.options.require_stream_sentinel
        )

    async def get_completions(self, body: CompletionsOptions) -> Completions:
        """
        Return the completions for a given prompt.

        Raises:
            ResponseError: If the service returns a non-success status
        """
        return await self._send("/completions", body, Completions)

    async def get_completions_stream(
        self,
        body: CompletionsOptions,
        stream_options: StreamOptions | None = None
    ) -> EventReader[Completions]:
        """
        Return the completions for a given prompt as a sequence of events.

        The reader is returned as soon as response headers arrive; it must
        be closed (``async with`` or ``aclose``) if not read to the end.

        Raises:
            ResponseError: If the service returns a non-success status
        """
        return await self._stream("/completions", body, Completions, stream_options)

    async def get_chat_completions(self, body: ChatCompletionsOptions) -> ChatCompletions:
        """
        Return the chat completions for a conversation.

        Raises:
            ResponseError: If the service returns a non-success status
        """
        return await self._send("/chat/completions", body, ChatCompletions)

    async def get_chat_completions_stream(
        self,
        body: ChatCompletionsOptions,
        stream_options: StreamOptions | None = None
    ) -> EventReader[ChatCompletions]:
        """
        Return the chat completions for a conversation as a sequence of events.

        The reader is returned as soon as response headers arrive; it must
        be closed (``async with`` or ``aclose``) if not read to the end.

        Raises:
            ResponseError: If the service returns a non-success status
        """
        return await self._stream("/chat/completions", body, ChatCompletions, stream_options)

    async def get_embeddings(self, body: EmbeddingsOptions) -> Embeddings:
        """Return the embeddings for the given inputs."""
        return await self._send("/embeddings", body, Embeddings)

    async def get_image_generations(self, body: ImageGenerationOptions) -> ImageGenerations:
        """Generate images from a prompt."""
        return await self._send("/images/generations", body, ImageGenerations)

    async def close(self) -> None:
        """Close the client and its connection pool."""
        await self._transport.close()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
