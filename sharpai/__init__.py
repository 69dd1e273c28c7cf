from sharpai.core.config import Credentials, SdkConfiguration, basic_auth_header, bearer_auth_header
from sharpai.core.errors import ApiError, ArgumentNullError, InvalidArgumentError, SdkError, TransportError
from sharpai.core.executor import CancellationToken, RequestExecutor
from sharpai.core.log import Severity
from sharpai.providers import OllamaClient, OpenAIClient
from sharpai.sdk import SharpAISdk
from sharpai.utils.serializer import deserialize, serialize
from sharpai.utils.stream import StreamParser, TokenStream, extract_token

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "ArgumentNullError",
    "CancellationToken",
    "Credentials",
    "InvalidArgumentError",
    "OllamaClient",
    "OpenAIClient",
    "RequestExecutor",
    "SdkConfiguration",
    "SdkError",
    "Severity",
    "SharpAISdk",
    "StreamParser",
    "TokenStream",
    "TransportError",
    "basic_auth_header",
    "bearer_auth_header",
    "deserialize",
    "extract_token",
    "serialize",
]
