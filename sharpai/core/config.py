# SDK configuration: endpoint, auth headers, timeout and log level
# the model is frozen, every "setter" returns a new copy so a call in flight keeps the snapshot it started with

import base64
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from sharpai.core.errors import ArgumentNullError, SdkError
from sharpai.core.log import Severity

DEFAULT_TIMEOUT_MS = 300000


def encode_base64(value: str) -> str:
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def basic_auth_header(email: str, password: str) -> str:
    return f"Basic {encode_base64(f'{email}:{password}')}"


def bearer_auth_header(token: str) -> str:
    return f"Bearer {token}"


def normalize_endpoint(value: Any) -> str:
    if not value:
        raise ArgumentNullError("Endpoint")
    value = str(value)
    return value if value.endswith("/") else value + "/"


def check_timeout(value: int) -> int:
    if value < 1:
        raise SdkError("TimeoutMs must be greater than 0.")
    return value


class Credentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: str = ""
    password: str = ""


class SdkConfiguration(BaseModel):
    model_config = ConfigDict(frozen=True)

    endpoint: str
    bearer_token: Optional[str] = None
    basic_auth: Optional[Credentials] = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    log_level: Optional[Severity] = None
    # derived from bearer_token / basic_auth, whichever was assigned last
    authorization: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _derive_authorization(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if not data.get("endpoint"):
            raise ArgumentNullError("Endpoint")
        if data.get("authorization"):
            return data
        data = dict(data)
        creds = data.get("basic_auth")
        token = data.get("bearer_token")
        if creds is not None:
            if isinstance(creds, dict):
                creds = Credentials(**creds)
            data["authorization"] = basic_auth_header(creds.email, creds.password)
        elif token:
            data["authorization"] = bearer_auth_header(token)
        return data

    @field_validator("endpoint", mode="before")
    @classmethod
    def _normalize_endpoint(cls, value: Any) -> str:
        return normalize_endpoint(value)

    @field_validator("timeout_ms")
    @classmethod
    def _check_timeout(cls, value: int) -> int:
        return check_timeout(value)

    @property
    def default_headers(self) -> Dict[str, str]:
        if not self.authorization:
            return {}
        return {"Authorization": self.authorization}

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000

    # --------- copy-on-write updates ---------

    def with_bearer_token(self, token: str) -> "SdkConfiguration":
        if not token:
            raise ArgumentNullError("BearerToken")
        return self.model_copy(update={"bearer_token": token, "authorization": bearer_auth_header(token)})

    def with_basic_auth(self, credentials: Credentials) -> "SdkConfiguration":
        if credentials is None:
            raise ArgumentNullError("BasicAuth")
        header = basic_auth_header(credentials.email, credentials.password)
        return self.model_copy(update={"basic_auth": credentials, "authorization": header})

    def with_endpoint(self, endpoint: str) -> "SdkConfiguration":
        return self.model_copy(update={"endpoint": normalize_endpoint(endpoint)})

    def with_timeout_ms(self, timeout_ms: int) -> "SdkConfiguration":
        return self.model_copy(update={"timeout_ms": check_timeout(timeout_ms)})

    def with_log_level(self, level: Optional[Severity]) -> "SdkConfiguration":
        return self.model_copy(update={"log_level": level})

    @classmethod
    def from_env(cls, prefix: str = "SHARPAI_") -> "SdkConfiguration":
        """
        Build a configuration from environment variables (a local .env file is loaded first).
        SHARPAI_ENDPOINT is required; SHARPAI_EMAIL/SHARPAI_PASSWORD take precedence over SHARPAI_BEARER_TOKEN.
        """
        load_dotenv()
        email = os.getenv(f"{prefix}EMAIL")
        password = os.getenv(f"{prefix}PASSWORD")
        data: Dict[str, Any] = {
            "endpoint": os.getenv(f"{prefix}ENDPOINT", ""),
            "bearer_token": os.getenv(f"{prefix}BEARER_TOKEN") or None,
            "timeout_ms": int(os.getenv(f"{prefix}TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS))),
            "log_level": Severity.parse(os.getenv(f"{prefix}LOG_LEVEL")),
        }
        if email is not None or password is not None:
            data["basic_auth"] = Credentials(email=email or "", password=password or "")
        return cls(**data)
