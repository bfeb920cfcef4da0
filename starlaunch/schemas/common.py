from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Column widths shared by the ORM models and the request schemas.
WALLET_ADDRESS_MAX_LENGTH = 128
REFERRAL_CODE_MAX_LENGTH = 24
URL_MAX_LENGTH = 500
AMOUNT_MAX_LENGTH = 80


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
