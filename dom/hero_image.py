"""Hero image candidate model."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class HeroImage:
    """An image element eligible for a preload hint.

    Attributes:
        src: Primary resource URL of the image.
        media: Optional media query restricting when the image is shown.
        srcset: Optional responsive candidate list.
        amp_img: Originating element (read for its sizes attribute only).
    """

    src: str
    media: str | None = None
    srcset: str | None = None
    amp_img: Any = None

    @property
    def sizes(self) -> str | None:
        """Return the owner element's sizes attribute, if present."""
        if self.amp_img is None:
            return None
        return self.amp_img.get("sizes")
