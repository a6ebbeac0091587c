"""
Media type model - a resolved Content-Type or Content-Disposition value.
"""

from typing import Dict

from pydantic import BaseModel, Field


class MediaType(BaseModel):
    """
    Parsed header value: lower-cased primary value plus parameters.

    For Content-Type this is ``type/subtype``; for Content-Disposition it is the
    disposition token (``attachment``, ``inline``).
    """

    value: str = Field(description="Lower-cased media type or disposition token")
    params: Dict[str, str] = Field(
        default_factory=dict,
        description="Parameters keyed by lower-cased name, values keep their case",
    )

    model_config = {"frozen": True}

    @property
    def main_type(self) -> str:
        return self.value.partition("/")[0]

    @property
    def sub_type(self) -> str:
        return self.value.partition("/")[2]

    def get(self, name: str, default: str = "") -> str:
        """Parameter lookup by case-insensitive name."""
        return self.params.get(name.lower(), default)

    def __str__(self) -> str:
        return self.value
