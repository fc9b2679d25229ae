"""
Unit tests for the batch controller.
"""

import zipfile
from io import BytesIO

import pytest
from unittest.mock import MagicMock

from titlepdf.builder import (
    BatchItem,
    BatchRunner,
    BuilderConfig,
    GenerationRequest,
    MeasurementError,
    PackError,
    RenderError,
    ValidationError,
    generate_batch,
    parse_request,
)


class FakeRenderer:
    """Serialise a layout to a readable byte string."""

    def __init__(self):
        self.titles = []

    def render(self, layout):
        self.titles.append(layout.title)
        return f"{layout.title}:{layout.page_count}".encode()


class FailingPacker:
    def __init__(self, fail_on="finalize"):
        self.fail_on = fail_on
        self.added = []
        self.closed = False

    def add(self, path, data):
        if self.fail_on == "add":
            raise OSError("disk full")
        self.added.append(path)

    def finalize(self):
        raise OSError("cannot finalise")

    def close(self):
        self.closed = True


def _entries(blob):
    with zipfile.ZipFile(BytesIO(blob)) as zf:
        return zf.namelist()


class TestGenerateBatch:
    """Tests for generate_batch()."""

    def test_items_processed_in_order(self, measurer):
        renderer = FakeRenderer()
        request = parse_request("body", "Zulu\nAlpha\nMike")

        result = generate_batch(request, measurer=measurer, renderer=renderer)

        assert renderer.titles == ["Zulu", "Alpha", "Mike"]
        assert [a.file_name for a in result.items] == ["zulu", "alpha", "mike"]
        assert _entries(result.archive) == ["pdfs/zulu.pdf", "pdfs/alpha.pdf", "pdfs/mike.pdf"]

    def test_artifacts_carry_rendered_bytes(self, measurer):
        result = generate_batch(
            parse_request("body", "One"),
            measurer=measurer,
            renderer=FakeRenderer(),
        )

        artifact = result.artifact("one")
        assert artifact.data == b"One:1"
        assert artifact.page_count == 1
        assert artifact.archive_path == "pdfs/one.pdf"
        assert artifact.download_name == "one.pdf"

    def test_progress_reported_after_each_item(self, measurer):
        progress = MagicMock()

        generate_batch(
            parse_request("body", "A\nB"),
            measurer=measurer,
            renderer=FakeRenderer(),
            on_progress=progress,
        )

        assert [c.args for c in progress.call_args_list] == [(1, 2, "A"), (2, 2, "B")]

    def test_duplicate_names_get_position_suffix(self, measurer):
        request = parse_request("body", "Report\nReport\nOther", "")

        result = generate_batch(request, measurer=measurer, renderer=FakeRenderer())

        assert [a.file_name for a in result.items] == ["report", "report-2", "other"]

    def test_repeated_runs_give_identical_entry_names(self, measurer):
        request = parse_request("body", "A\nA\nb!", "x")

        first = generate_batch(request, measurer=measurer, renderer=FakeRenderer())
        second = generate_batch(request, measurer=measurer, renderer=FakeRenderer())

        assert _entries(first.archive) == _entries(second.archive)

    def test_custom_archive_folder(self, measurer):
        config = BuilderConfig(archive_folder="")

        result = generate_batch(
            parse_request("body", "A"), config, measurer=measurer, renderer=FakeRenderer()
        )

        assert _entries(result.archive) == ["a.pdf"]

    def test_when_no_titles_then_validation_error_before_rendering(self, measurer):
        renderer = MagicMock()
        packer_factory = MagicMock()

        with pytest.raises(ValidationError):
            generate_batch(
                GenerationRequest("content", ()),
                measurer=measurer,
                renderer=renderer,
                packer_factory=packer_factory,
            )

        renderer.render.assert_not_called()
        packer_factory.assert_not_called()

    def test_when_renderer_fails_then_render_error_with_item(self, measurer):
        renderer = MagicMock()
        renderer.render.side_effect = [b"ok", RuntimeError("boom")]

        with pytest.raises(RenderError) as exc_info:
            generate_batch(parse_request("body", "First\nSecond"), measurer=measurer, renderer=renderer)

        assert exc_info.value.item_index == 1
        assert exc_info.value.title == "Second"
        assert "Second" in str(exc_info.value)

    def test_when_measurer_fails_then_render_error_caused_by_measurement(self):
        broken = MagicMock()
        broken.width_of.side_effect = RuntimeError("font missing")

        with pytest.raises(RenderError) as exc_info:
            generate_batch(parse_request("body", "A"), measurer=broken, renderer=FakeRenderer())

        assert isinstance(exc_info.value.__cause__, MeasurementError)
        assert exc_info.value.item_index == 0

    def test_when_renderer_returns_non_bytes_then_render_error(self, measurer):
        renderer = MagicMock()
        renderer.render.return_value = "not bytes"

        with pytest.raises(RenderError, match="expected bytes"):
            generate_batch(parse_request("body", "A"), measurer=measurer, renderer=renderer)

    def test_when_finalize_fails_then_pack_error_and_packer_released(self, measurer):
        packer = FailingPacker("finalize")

        with pytest.raises(PackError, match="cannot finalise"):
            generate_batch(
                parse_request("body", "A\nB"),
                measurer=measurer,
                renderer=FakeRenderer(),
                packer_factory=lambda: packer,
            )

        assert packer.added == ["pdfs/a.pdf", "pdfs/b.pdf"]
        assert packer.closed

    def test_when_add_fails_then_pack_error_with_item(self, measurer):
        packer = FailingPacker("add")

        with pytest.raises(PackError) as exc_info:
            generate_batch(
                parse_request("body", "A"),
                measurer=measurer,
                renderer=FakeRenderer(),
                packer_factory=lambda: packer,
            )

        assert exc_info.value.item_index == 0
        assert packer.closed

    def test_when_packer_factory_fails_then_pack_error(self, measurer):
        renderer = FakeRenderer()

        def broken_factory():
            raise OSError("no space")

        with pytest.raises(PackError, match="no space") as exc_info:
            generate_batch(
                parse_request("body", "A"),
                measurer=measurer,
                renderer=renderer,
                packer_factory=broken_factory,
            )

        assert isinstance(exc_info.value.__cause__, OSError)
        assert renderer.titles == []

    def test_layout_warnings_collected(self, measurer):
        result = generate_batch(
            GenerationRequest("w" * 200, (BatchItem("A"), BatchItem("B"))),
            measurer=measurer,
            renderer=FakeRenderer(),
        )

        assert len(result.warnings) == 2


class TestBatchRunner:
    """Tests for background batch execution."""

    def test_submit_returns_future_with_result(self, measurer):
        with BatchRunner() as runner:
            future = runner.submit(
                parse_request("body", "A\nB"),
                measurer=measurer,
                renderer=FakeRenderer(),
            )
            result = future.result(timeout=30)

        assert [a.file_name for a in result.items] == ["a", "b"]

    def test_failed_batch_raises_from_future(self, measurer):
        with BatchRunner() as runner:
            future = runner.submit(GenerationRequest("", (BatchItem("A"),)), measurer=measurer)

            with pytest.raises(ValidationError):
                future.result(timeout=30)

    def test_wait_all_counts_successes(self, measurer):
        runner = BatchRunner()
        try:
            runner.submit(parse_request("body", "A"), measurer=measurer, renderer=FakeRenderer())
            runner.submit(parse_request("", "A"), measurer=measurer, renderer=FakeRenderer())

            assert runner.wait_all(timeout=30) == 1
        finally:
            runner.shutdown()

    def test_submit_drops_finished_batches(self, measurer):
        with BatchRunner() as runner:
            for _ in range(3):
                runner.submit(
                    parse_request("body", "A"), measurer=measurer, renderer=FakeRenderer()
                ).result(timeout=30)
            runner.submit(
                parse_request("", "A"), measurer=measurer, renderer=FakeRenderer()
            ).exception(timeout=30)
            runner.submit(parse_request("body", "B"), measurer=measurer, renderer=FakeRenderer())

            assert runner.pending == 1
            assert runner.wait_all(timeout=30) == 4
