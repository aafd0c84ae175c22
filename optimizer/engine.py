"""Ordered transformer pipeline.

Runs each configured transformer against a document, in order, the way
Scrapy runs the components listed in ITEM_PIPELINES.
"""

import logging
from collections.abc import Mapping
from typing import Any

from scrapy.utils.misc import load_object

from dom.document import Document
from optimizer.configuration import KEY_TRANSFORMERS
from optimizer.errors import ERROR_CANNOT_LOAD_TRANSFORMER, Error, ErrorCollection

logger = logging.getLogger(__name__)


class TransformationEngine:
    """Apply a sequence of transformers to documents.

    Attributes:
        transformers: Instantiated transformers in execution order.
        load_errors: Errors encountered while loading transformers.
    """

    def __init__(self, configuration: Mapping[str, Any]) -> None:
        """Load the transformers listed in the configuration.

        Args:
            configuration: Optimizer configuration mapping.
        """
        self.transformers: list[Any] = []
        self.load_errors: list[Error] = []

        for path in configuration.get(KEY_TRANSFORMERS, []):
            try:
                transformer = load_object(path)()
            except (ImportError, NameError, ValueError, TypeError) as e:
                self._record_load_error(path, str(e))
                continue

            if not callable(getattr(transformer, "transform", None)):
                self._record_load_error(path, "object has no transform() method")
                continue

            self.transformers.append(transformer)

    def _record_load_error(self, path: str, reason: str) -> None:
        logger.warning(f"Cannot load transformer {path}: {reason}")
        self.load_errors.append(
            Error(ERROR_CANNOT_LOAD_TRANSFORMER, f"Cannot load transformer {path}: {reason}")
        )

    def optimize(self, document: Document, errors: ErrorCollection) -> None:
        """Run all transformers on the document in place.

        Args:
            document: Document to transform.
            errors: Collection receiving non-fatal errors.
        """
        for error in self.load_errors:
            errors.add(error)

        for transformer in self.transformers:
            logger.debug(f"Running transformer {type(transformer).__name__}")
            transformer.transform(document, errors)
