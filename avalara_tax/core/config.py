"""
Client configuration.
Set once when the client is built and shared read-only by every call.
"""
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from avalara_tax.core.exceptions import ConfigurationError
from avalara_tax.core.models import Address


class Environment(str, Enum):
    PRODUCTION = "production"
    DEVELOPMENT = "development"

    @property
    def host(self) -> str:
        return _HOSTS[self]


_HOSTS = {
    Environment.PRODUCTION: 'rest.avalara.net',
    Environment.DEVELOPMENT: 'development.avalara.net',
}

TAX_PATH = '/1.0/tax/get'

REQUIRED_SETTINGS = ('user_name', 'password', 'customer_code', 'company_code')


class WireFormat(str, Enum):
    JSON = "json"
    XML = "xml"


class ClientConfig(BaseModel):
    """
    Settings that do not change between requests.

    user_name and password are the Avalara account number and license key.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    user_name: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1, repr=False)
    customer_code: str = Field(..., min_length=1)
    company_code: str = Field(..., min_length=1)

    environment: Environment = Environment.PRODUCTION
    origin_address: Optional[Address] = None
    request_timeout: float = Field(default=3.0, gt=0)  # seconds
    cache: Optional[Any] = Field(default=None, repr=False)
    wire_format: WireFormat = WireFormat.JSON
    debug: bool = False

    @model_validator(mode='before')
    @classmethod
    def expand_is_development(cls, data):
        # Shorthand kept for callers used to a boolean switch
        if isinstance(data, dict) and 'is_development' in data:
            data = dict(data)
            if data.pop('is_development'):
                data.setdefault('environment', Environment.DEVELOPMENT)
        return data

    @property
    def url(self) -> str:
        return f'https://{self.environment.host}{TAX_PATH}'


def load_config(**settings) -> ClientConfig:
    """
    Build a ClientConfig, turning validation failures into ConfigurationError.

    Raises:
        ConfigurationError: If a mandatory setting is missing or a value is invalid
    """
    for name in REQUIRED_SETTINGS:
        if settings.get(name) in (None, ''):
            raise ConfigurationError(
                f"Could not build Avalara client: required setting '{name}' is missing"
            )

    try:
        return ClientConfig(**settings)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid Avalara client settings: {e}") from e
