"""Transformer that forces preload links for AMP hero images.

The upstream PreloadHeroImage pass skips responsive hero images that lack a
media attribute. This transformer runs before ReorderHead and adds the
missing <link rel=preload as=image> elements for server-side rendered
amp-img heroes that are not lazy loaded.
"""

import logging
from typing import Any

from dom.document import Document
from dom.hero_image import HeroImage
from dom.url_policy import is_valid_non_data_url
from optimizer.errors import ErrorCollection

logger = logging.getLogger(__name__)

HERO_IMAGE_XPATH = (
    './/amp-img[ @data-hero and @i-amphtml-ssr ][ not( img/@loading ) or "lazy" != img/@loading ]'
)

TAG_AMP_IMG = "amp-img"
TAG_LINK = "link"

ATTR_DATA_HERO = "data-hero"
ATTR_SRC = "src"
ATTR_SRCSET = "srcset"
ATTR_MEDIA = "media"
ATTR_REL = "rel"
ATTR_HREF = "href"
ATTR_AS = "as"
ATTR_IMAGESRCSET = "imagesrcset"
ATTR_IMAGESIZES = "imagesizes"

REL_PRELOAD = "preload"
DESTINATION_IMAGE = "image"


class ForcePreloadHeroImage:
    """Inject preload links for hero images the optimizer did not preload.

    Attributes:
        stats: Counters for the most recent transform() call.
    """

    def __init__(self) -> None:
        """Initialize the transformer."""
        self._preload_reference_node: Any | None = None
        self.stats: dict[str, int] = self._empty_stats()

    @staticmethod
    def _empty_stats() -> dict[str, int]:
        return {
            "candidates": 0,
            "candidates_rejected": 0,
            "preloads_injected": 0,
            "duplicates_skipped": 0,
        }

    def transform(self, document: Document, errors: ErrorCollection | None = None) -> None:
        """Apply the transformation to the provided document.

        Args:
            document: Document to mutate in place.
            errors: Error collection of the pipeline. Left untouched.
        """
        self._preload_reference_node = None
        self.stats = self._empty_stats()

        # Only head may be mutated, so a missing body is not created here
        body = document.root.find("body")
        if body is None:
            logger.debug("Document has no <body>, nothing to preload")
            return

        for element in document.xpath(HERO_IMAGE_XPATH, body):
            self.stats["candidates"] += 1
            src = element.get(ATTR_SRC)
            if element.tag != TAG_AMP_IMG or not is_valid_non_data_url(src):
                self.stats["candidates_rejected"] += 1
                logger.debug(f"Skipping hero element <{element.tag}> with src {src!r}")
                continue

            hero_image = HeroImage(
                src=src,
                media=element.get(ATTR_MEDIA),
                srcset=element.get(ATTR_SRCSET),
                amp_img=element,
            )
            self._generate_preload(hero_image, document)

        self._preload_reference_node = None
        logger.debug(f"Hero preload pass finished: {self.stats}")

    def _generate_preload(self, hero_image: HeroImage, document: Document) -> None:
        """Generate the preload link for a given hero image.

        Args:
            hero_image: Hero image to generate the preload link for.
            document: Document to generate the preload link in.
        """
        if self._has_existing_image_preload(document, hero_image.src):
            self.stats["duplicates_skipped"] += 1
            logger.debug(f"Preload already present for {hero_image.src}")
            return

        if self._preload_reference_node is None:
            self._preload_reference_node = document.viewport

        preload = document.create_element(
            TAG_LINK,
            {
                ATTR_REL: REL_PRELOAD,
                ATTR_HREF: hero_image.src,
                ATTR_AS: DESTINATION_IMAGE,
                ATTR_DATA_HERO: "",
            },
        )
        if hero_image.srcset:
            preload.set(ATTR_IMAGESRCSET, hero_image.srcset)
            if hero_image.sizes is not None:
                preload.set(ATTR_IMAGESIZES, hero_image.sizes)

        if hero_image.media:
            preload.set(ATTR_MEDIA, hero_image.media)

        document.insert_after(self._preload_reference_node, preload)

        self._preload_reference_node = preload
        self.stats["preloads_injected"] += 1

    def _has_existing_image_preload(self, document: Document, src: str) -> bool:
        """Check whether a preload link for src already exists in head.

        Args:
            document: Document in which to check for an existing preload.
            src: Preload URL to look for.

        Returns:
            True if a matching preload already exists.
        """
        for node in document.head:
            # Comments and processing instructions have non-string tags
            if not isinstance(node.tag, str):
                continue

            if node.get(ATTR_REL) != REL_PRELOAD:
                continue

            if node.get(ATTR_AS) != DESTINATION_IMAGE:
                continue

            if node.get(ATTR_HREF) == src:
                return True

        return False
