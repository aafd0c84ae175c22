"""Tests for the transformer pipeline engine."""

from dom.document import Document
from optimizer.configuration import FORCE_PRELOAD_HERO_IMAGE, KEY_TRANSFORMERS
from optimizer.engine import TransformationEngine
from optimizer.errors import ERROR_CANNOT_LOAD_TRANSFORMER, ErrorCollection
from optimizer.transformers.force_preload_hero_image import ForcePreloadHeroImage
from tests.fixtures import amp_page, hero_img


class TestTransformationEngine:
    """Test loading and running configured transformers."""

    def test_loads_transformers_by_path(self) -> None:
        """Test dotted paths are resolved and instantiated."""
        engine = TransformationEngine({KEY_TRANSFORMERS: [FORCE_PRELOAD_HERO_IMAGE]})

        assert len(engine.transformers) == 1
        assert isinstance(engine.transformers[0], ForcePreloadHeroImage)
        assert engine.load_errors == []

    def test_optimize_runs_transformers(self) -> None:
        """Test the document is mutated by the pipeline."""
        engine = TransformationEngine({KEY_TRANSFORMERS: [FORCE_PRELOAD_HERO_IMAGE]})
        document = Document.from_html(amp_page(hero_img("/a.jpg")))
        errors = ErrorCollection()

        engine.optimize(document, errors)

        assert document.viewport.getnext().get("href") == "/a.jpg"
        assert errors.count() == 0

    def test_unloadable_transformers_reported(self) -> None:
        """Test unknown transformers are skipped and reported."""
        engine = TransformationEngine(
            {
                KEY_TRANSFORMERS: [
                    "ReorderHead",
                    "optimizer.transformers.missing_module.Missing",
                    "optimizer.errors.Missing",
                    FORCE_PRELOAD_HERO_IMAGE,
                ]
            }
        )
        document = Document.from_html(amp_page(hero_img("/a.jpg")))
        errors = ErrorCollection()

        engine.optimize(document, errors)

        assert len(engine.transformers) == 1
        assert len(errors) == 3
        assert errors.has(ERROR_CANNOT_LOAD_TRANSFORMER)
        assert document.viewport.getnext().get("href") == "/a.jpg"

    def test_empty_configuration(self) -> None:
        """Test an empty pipeline leaves the document alone."""
        engine = TransformationEngine({})
        document = Document.from_html(amp_page(hero_img("/a.jpg")))
        before = document.to_html()

        engine.optimize(document, ErrorCollection())

        assert document.to_html() == before

    def test_non_transformer_objects_reported(self) -> None:
        """Test objects that are not usable transformers are skipped and reported."""
        engine = TransformationEngine(
            {
                KEY_TRANSFORMERS: [
                    "os.path.join",
                    "optimizer.errors.ErrorCollection",
                    FORCE_PRELOAD_HERO_IMAGE,
                ]
            }
        )
        errors = ErrorCollection()

        engine.optimize(Document.from_html(amp_page(hero_img("/a.jpg"))), errors)

        assert [type(t) for t in engine.transformers] == [ForcePreloadHeroImage]
        assert len(errors) == 2
        assert all(error.code == ERROR_CANNOT_LOAD_TRANSFORMER for error in errors)
