from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, replace
from typing import Union

from ..domain.entities import Settings
from ..domain.errors import ValidationError
from ..domain.state import StateContainer
from ..domain.validators import coerce_text

log = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 4_500_000


@dataclass
class SetBackgroundImage:
    """Set the page background from a URL, a data URL, or raw uploaded bytes.

    Raw bytes are embedded as a base64 data URL. Files over the size cap are
    rejected up front since they cannot fit the store; smaller images can
    still exceed the quota, which surfaces as ``QuotaExceeded`` from persist.
    An empty string clears the background.
    """

    container: StateContainer
    max_bytes: int = MAX_IMAGE_BYTES

    def __call__(self, source: Union[str, bytes], mime_type: str = "image/png") -> Settings:
        if isinstance(source, (bytes, bytearray)):
            if len(source) > self.max_bytes:
                raise ValidationError(
                    "This file is too large to save locally. Please use an image under "
                    "2MB or host the file online and use its URL.",
                    field="backgroundImage",
                )
            if not mime_type.startswith("image/"):
                raise ValidationError("Background must be an image file.", field="backgroundImage")
            encoded = base64.b64encode(bytes(source)).decode("ascii")
            value = f"data:{mime_type};base64,{encoded}"
        else:
            value = coerce_text("backgroundImage", source)
        state = self.container.state
        state.settings = replace(state.settings, background_image=value)
        log.info("Background image set (%d chars)", len(value))
        self.container.persist()
        return state.settings
