"""
fetchkit - Shared Domain Types.
"""
import os
from typing import Callable, Optional, Union

from pydantic import BaseModel, ConfigDict


class ResourceSpec(BaseModel):
    """A remote resource with an optional on-disk filename."""
    model_config = ConfigDict(frozen=True)

    url: str
    filename: Optional[str] = None


# Represents one resource to fetch
# Can be:
# - URL string: "https://host/model.pte" or "file:///abs/model.pte"
# - Local path: "/abs/tokenizer.json" or Path(...)
# - ResourceSpec(url=..., filename=...)
# The registry never inspects it; only adapters do.
ResourceSource = Union[str, os.PathLike, ResourceSpec]

# Receives download progress, conventionally in [0, 100]
ProgressCallback = Callable[[float], None]
