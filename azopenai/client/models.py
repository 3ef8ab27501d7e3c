"""
azopenai models for requests and responses.

Option models serialize with ``by_alias=True, exclude_none=True``; the
deployment name travels as ``model`` in the body on both backends.

Date: 2026-10-18
"""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

from azopenai.client.content import ChatRequestUserMessageContent


class BackendKind(str, Enum):
    """Which API surface the client talks to."""
    AZURE = "azure"
    OPENAI = "openai"


class BackendTarget(BaseModel):
    """Endpoint and backend kind, fixed at client construction."""
    model_config = ConfigDict(frozen=True)

    endpoint: str
    kind: BackendKind

    @property
    def is_azure(self) -> bool:
        return self.kind is BackendKind.AZURE


# Requests

class DeploymentOptions(BaseModel):
    """Base for request options that target a model deployment."""
    model_config = ConfigDict(populate_by_name=True)

    deployment_name: str | None = Field(
        None,
        alias="model",
        description="Deployment name (Azure OpenAI) or model name (OpenAI)"
    )


class CompletionsOptions(DeploymentOptions):
    """Request for text completions."""
    prompt: list[str]
    max_tokens: int | None = Field(None, ge=1)
    temperature: float | None = Field(None, ge=0, le=2)
    top_p: float | None = Field(None, ge=0, le=1)
    n: int | None = Field(None, ge=1)
    stop: list[str] | None = None
    logprobs: int | None = None
    echo: bool | None = None
    best_of: int | None = None
    presence_penalty: float | None = Field(None, ge=-2, le=2)
    frequency_penalty: float | None = Field(None, ge=-2, le=2)
    logit_bias: dict[str, int] | None = None
    user: str | None = None


class FunctionDefinition(BaseModel):
    """Function the model may call."""
    name: str
    description: str | None = None
    parameters: dict[str, Any] | None = None


class ChatCompletionsFunctionToolDefinition(BaseModel):
    """Tool definition wrapping a function."""
    type: Literal["function"] = "function"
    function: FunctionDefinition


class FunctionCall(BaseModel):
    """Function name and JSON-encoded arguments chosen by the model."""
    name: str | None = None
    arguments: str | None = None


class ChatCompletionsToolCall(BaseModel):
    """Tool call made by the model; streamed deltas carry partial fields."""
    id: str | None = None
    type: Literal["function"] | None = "function"
    index: int | None = None
    function: FunctionCall = Field(default_factory=FunctionCall)


class ChatRequestSystemMessage(BaseModel):
    """System instructions."""
    role: Literal["system"] = "system"
    content: str
    name: str | None = None


class ChatRequestUserMessage(BaseModel):
    """User prompt, as text or as text and image parts."""
    role: Literal["user"] = "user"
    content: ChatRequestUserMessageContent
    name: str | None = None


class ChatRequestAssistantMessage(BaseModel):
    """Earlier model reply included as conversation history."""
    role: Literal["assistant"] = "assistant"
    content: str | None = None
    name: str | None = None
    tool_calls: list[ChatCompletionsToolCall] | None = None


class ChatRequestToolMessage(BaseModel):
    """Result of a tool call."""
    role: Literal["tool"] = "tool"
    content: str
    tool_call_id: str


ChatRequestMessage = Annotated[
    Union[
        ChatRequestSystemMessage,
        ChatRequestUserMessage,
        ChatRequestAssistantMessage,
        ChatRequestToolMessage,
    ],
    Field(discriminator="role")
]


class ChatCompletionsOptions(DeploymentOptions):
    """Request for chat completions."""
    messages: list[ChatRequestMessage]
    max_tokens: int | None = Field(None, ge=1)
    temperature: float | None = Field(None, ge=0, le=2)
    top_p: float | None = Field(None, ge=0, le=1)
    n: int | None = Field(None, ge=1)
    stop: list[str] | None = None
    seed: int | None = None
    presence_penalty: float | None = Field(None, ge=-2, le=2)
    frequency_penalty: float | None = Field(None, ge=-2, le=2)
    logit_bias: dict[str, int] | None = None
    tools: list[ChatCompletionsFunctionToolDefinition] | None = None
    tool_choice: str | dict[str, Any] | None = None
    response_format: dict[str, Any] | None = None
    user: str | None = None


class EmbeddingsOptions(DeploymentOptions):
    """Request for embeddings."""
    input: list[str]
    dimensions: int | None = Field(None, ge=1)
    encoding_format: Literal["float", "base64"] | None = None
    user: str | None = None


class ImageGenerationOptions(DeploymentOptions):
    """Request for image generation."""
    prompt: str
    n: int | None = Field(None, ge=1)
    size: Literal["256x256", "512x512", "1024x1024", "1792x1024", "1024x1792"] | None = None
    quality: Literal["standard", "hd"] | None = None
    style: Literal["natural", "vivid"] | None = None
    response_format: Literal["url", "b64_json"] | None = None
    user: str | None = None


# Responses

class ContentFilterResult(BaseModel):
    """Outcome of one content filter category."""
    filtered: bool
    severity: str | None = None


class ContentFilterDetectionResult(BaseModel):
    """Outcome of a detection-style filter (jailbreak, protected material)."""
    filtered: bool
    detected: bool


class ContentFilterResults(BaseModel):
    """Content filter outcomes for a prompt or a choice."""
    model_config = ConfigDict(extra="allow")

    hate: ContentFilterResult | None = None
    self_harm: ContentFilterResult | None = None
    sexual: ContentFilterResult | None = None
    violence: ContentFilterResult | None = None
    jailbreak: ContentFilterDetectionResult | None = None
    profanity: ContentFilterDetectionResult | None = None

    def any_filtered(self) -> bool:
        """Check if any category was filtered."""
        return any(
            getattr(result, "filtered", False)
            for result in (
                self.hate, self.self_harm, self.sexual,
                self.violence, self.jailbreak, self.profanity
            )
        )


class PromptFilterResult(BaseModel):
    """Content filter outcome for one prompt."""
    prompt_index: int
    content_filter_results: ContentFilterResults | None = None


class CompletionsUsage(BaseModel):
    """Token accounting."""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class Choice(BaseModel):
    """One generated completion (or a streamed piece of one)."""
    text: str = ""
    index: int
    finish_reason: str | None = None
    logprobs: dict[str, Any] | None = None
    content_filter_results: ContentFilterResults | None = None


class Completions(BaseModel):
    """Completions result; each stream event carries one of these."""
    id: str = ""
    created: int = 0
    model: str | None = None
    choices: list[Choice] = Field(default_factory=list)
    prompt_filter_results: list[PromptFilterResult] | None = None
    usage: CompletionsUsage | None = None
    system_fingerprint: str | None = None


class ChatResponseMessage(BaseModel):
    """Message (or streamed delta) produced by the model."""
    role: Literal["assistant", "system", "user", "tool"] | None = None
    content: str | None = None
    refusal: str | None = None
    tool_calls: list[ChatCompletionsToolCall] | None = None


class ChatChoice(BaseModel):
    """One chat completion choice. Streamed events fill ``delta``."""
    index: int
    finish_reason: str | None = None
    message: ChatResponseMessage | None = None
    delta: ChatResponseMessage | None = None
    logprobs: dict[str, Any] | None = None
    content_filter_results: ContentFilterResults | None = None


class ChatCompletions(BaseModel):
    """Chat completions result; each stream event carries one of these."""
    id: str = ""
    created: int = 0
    model: str | None = None
    choices: list[ChatChoice] = Field(default_factory=list)
    prompt_filter_results: list[PromptFilterResult] | None = None
    usage: CompletionsUsage | None = None
    system_fingerprint: str | None = None


class EmbeddingItem(BaseModel):
    """One embedding vector."""
    embedding: list[float] | str
    index: int


class EmbeddingsUsage(BaseModel):
    """Token accounting for embeddings."""
    prompt_tokens: int = 0
    total_tokens: int = 0


class Embeddings(BaseModel):
    """Embeddings result."""
    data: list[EmbeddingItem] = Field(default_factory=list)
    model: str | None = None
    usage: EmbeddingsUsage | None = None


class ImageGenerationData(BaseModel):
    """One generated image."""
    url: HttpUrl | None = None
    b64_json: str | None = None
    revised_prompt: str | None = None
    content_filter_results: ContentFilterResults | None = None


class ImageGenerations(BaseModel):
    """Image generation result."""
    created: int
    data: list[ImageGenerationData] = Field(default_factory=list)
