"""
Base Schema Models

Common pydantic base used by every wire model in the SDK.

Core Classes:
    - GrapevineModel: base model accepting both field names and aliases
    - CanonicalModel: deterministic JSON serialization for signed payloads
    - ResourceModel: base for server-returned resources, keeps unknown fields
"""

import json
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class GrapevineModel(BaseModel):
    """Base model; fields may be populated by name or by alias."""

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation: aliased keys, unset optionals dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CanonicalModel(GrapevineModel):
    """
    Model with canonical JSON serialization.

    Keys are sorted and whitespace removed so that the encoded form of a
    payload is stable, e.g. for base64 header transport.
    """

    def to_canonical_json(self) -> str:
        return json.dumps(
            self.to_dict(),
            separators=(",", ":"),
            sort_keys=True,
            ensure_ascii=False,
        )


class ResourceModel(GrapevineModel):
    """Server resource; fields the SDK does not model are preserved."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")
