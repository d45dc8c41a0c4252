"""gemwire: chat message conversion and safety enforcement for Gemini.

Public API:
    - encode_chat_messages(): chat history -> Gemini contents
    - decode_parts(): Gemini parts -> message content
    - normalize(): single/batch response -> one payload
    - build_policy(): strict or replacing safety policy
    - response_to_* / safe_response_to_*: caller-facing results
"""

from __future__ import annotations

import logging

from gemwire.codec import (
    decode_part,
    decode_parts,
    encode_chat_message,
    encode_chat_messages,
    encode_content,
    encode_message,
    encode_part,
)
from gemwire.config import SafetySettings
from gemwire.errors import (
    ConfigurationError,
    GemwireError,
    InvalidParameterError,
    MalformedResponseError,
    MissingDataError,
    SafetyError,
    UnrecognizedPartError,
    UnsupportedConversionError,
)
from gemwire.generation import (
    ChatGeneration,
    ChatGenerationChunk,
    ChatResult,
    Generation,
    aconcat_chat_generations,
    astream_chat_generations,
    response_to_chat_generation,
    response_to_chat_result,
    response_to_generation,
    response_to_message,
    response_to_text,
    safe_response_to_chat_generation,
    safe_response_to_chat_result,
    safe_response_to_generation,
    safe_response_to_message,
    safe_response_to_text,
)
from gemwire.messages import (
    AIMessage,
    AIMessageChunk,
    GenericMessage,
    HumanMessage,
    ImageUrlContent,
    SystemMessage,
    TextContent,
)
from gemwire.params import GenerationParams, is_model_gemini, validate_gemini_params
from gemwire.response import extract_parts, extract_text, normalize
from gemwire.safety import (
    ReplacingSafetyPolicy,
    SafetyPolicy,
    StrictSafetyPolicy,
    build_policy,
)
from gemwire.wire import (
    BatchResponse,
    SingleResponse,
    StreamResponse,
    as_response,
    response_from_json,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("gemwire")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("gemwire").addHandler(logging.NullHandler())

__all__ = [
    "AIMessage",
    "AIMessageChunk",
    "BatchResponse",
    "ChatGeneration",
    "ChatGenerationChunk",
    "ChatResult",
    "ConfigurationError",
    "GemwireError",
    "Generation",
    "GenerationParams",
    "GenericMessage",
    "HumanMessage",
    "ImageUrlContent",
    "InvalidParameterError",
    "MalformedResponseError",
    "MissingDataError",
    "ReplacingSafetyPolicy",
    "SafetyError",
    "SafetyPolicy",
    "SafetySettings",
    "SingleResponse",
    "StreamResponse",
    "StrictSafetyPolicy",
    "SystemMessage",
    "TextContent",
    "UnrecognizedPartError",
    "UnsupportedConversionError",
    "aconcat_chat_generations",
    "as_response",
    "astream_chat_generations",
    "build_policy",
    "decode_part",
    "decode_parts",
    "encode_chat_message",
    "encode_chat_messages",
    "encode_content",
    "encode_message",
    "encode_part",
    "extract_parts",
    "extract_text",
    "is_model_gemini",
    "normalize",
    "response_from_json",
    "response_to_chat_generation",
    "response_to_chat_result",
    "response_to_generation",
    "response_to_message",
    "response_to_text",
    "safe_response_to_chat_generation",
    "safe_response_to_chat_result",
    "safe_response_to_generation",
    "safe_response_to_message",
    "safe_response_to_text",
    "validate_gemini_params",
]
