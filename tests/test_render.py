import pathlib
import tempfile
import unittest

from tests.helpers import PNG_BASE64

from firefly_image_api.core.contracts import Alert, ImageCard, ImageReference, ReferenceDisplay, ResultItem
from firefly_image_api.core.errors import ControlBusyError
from firefly_image_api.render.board import ResultBoard
from firefly_image_api.render.cards import render_image_card, render_reference_id, render_results, show_alert
from firefly_image_api.render.controls import TriggerControl
from firefly_image_api.render.html import render_page, write_page
from firefly_image_api.render.text import format_board


class TestCards(unittest.TestCase):
    def test_url_card(self) -> None:
        item = ResultItem(image=ImageReference(id="abc", presigned_url="https://cdn.test/abc.png"))
        card = render_image_card(item)
        self.assertEqual(card.src, "https://cdn.test/abc.png")
        self.assertEqual(card.text, "ACP Asset ID: abc")

    def test_inline_card_with_undecodable_bytes(self) -> None:
        card = render_image_card(ResultItem(base64="bm90IGFuIGltYWdl", seed=42), "inline")
        self.assertEqual(card.src, "data:image/png;base64,bm90IGFuIGltYWdl")
        self.assertEqual(card.text, "Seed: 42")
        self.assertIsNone(card.width)

    def test_reference_display(self) -> None:
        self.assertEqual(render_reference_id(ResultItem(id="u-1")).text, "Image ID: u-1")

    def test_render_results_counts(self) -> None:
        board = ResultBoard()
        items = [ResultItem(id="a"), ResultItem(id="b"), ResultItem(id="c")]
        self.assertEqual(render_results(items, "reference", board), 3)
        self.assertEqual([el.text for el in board.results], ["Image ID: a", "Image ID: b", "Image ID: c"])

    def test_render_results_empty(self) -> None:
        board = ResultBoard()
        self.assertEqual(render_results([], "image", board), 0)
        self.assertTrue(board.is_empty)

    def test_render_results_unknown_type(self) -> None:
        with self.assertRaises(ValueError):
            render_results([ResultItem(id="a")], "video", ResultBoard())  # type: ignore[arg-type]

    def test_show_alert_logs(self) -> None:
        board = ResultBoard()
        with self.assertLogs("firefly_image_api.render.cards", level="ERROR") as captured:
            alert = show_alert(board, "PROMPT ERROR: You must provide a prompt")
        self.assertEqual(board.alerts, [alert])
        self.assertEqual(alert.severity, "danger")
        self.assertIn("PROMPT ERROR", captured.output[0])


class TestHtml(unittest.TestCase):
    def _board(self) -> ResultBoard:
        board = ResultBoard()
        board.append_alert(Alert(message="<b>bad</b> & worse"))
        board.append_result(ImageCard(src="https://cdn.test/a.png?x=1&y=2", text="ACP Asset ID: a"))
        board.append_result(ImageCard(src=f"data:image/png;base64,{PNG_BASE64}", text="Seed: 3", width=1, height=1))
        board.append_result(ReferenceDisplay(text="Image ID: u-1"))
        return board

    def test_page_structure(self) -> None:
        page = render_page(self._board())
        self.assertIn('id="alert-anchor"', page)
        self.assertIn('class="alert alert-danger alert-dismissible"', page)
        self.assertIn('id="results"', page)
        self.assertEqual(page.count('class="card"'), 2)
        self.assertIn('<h1 class="display-6">Image ID: u-1</h1>', page)
        self.assertIn("1 x 1", page)

    def test_page_escapes_text(self) -> None:
        page = render_page(self._board())
        self.assertIn("&lt;b&gt;bad&lt;/b&gt; &amp; worse", page)
        self.assertIn("x=1&amp;y=2", page)
        self.assertNotIn("<b>bad</b>", page)

    def test_write_page(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_page(pathlib.Path(tmpdir) / "nested" / "results.html", self._board(), title="Demo")
            self.assertTrue(path.exists())
            self.assertIn("<title>Demo</title>", path.read_text(encoding="utf-8"))


class TestTextFormat(unittest.TestCase):
    def test_format_board(self) -> None:
        board = ResultBoard()
        board.append_alert(Alert(message="FILE UPLOAD ERROR: select a file to upload"))
        board.append_result(ImageCard(src="https://cdn.test/a.png", text="ACP Asset ID: a"))
        board.append_result(ReferenceDisplay(text="Image ID: u-1"))
        lines = format_board(board)
        self.assertEqual(
            lines,
            [
                "[danger] FILE UPLOAD ERROR: select a file to upload",
                "- ACP Asset ID: a",
                "  https://cdn.test/a.png",
                "Image ID: u-1",
            ],
        )

    def test_long_src_is_shortened(self) -> None:
        board = ResultBoard()
        board.append_result(ImageCard(src="data:image/png;base64," + "A" * 500, text="Seed: 1"))
        lines = format_board(board)
        self.assertTrue(lines[1].endswith("..."))
        self.assertLess(len(lines[1]), 80)


class TestTriggerControl(unittest.TestCase):
    def test_busy_cycle_notifies_listeners(self) -> None:
        control = TriggerControl("Generate")
        events = []
        control.add_listener(lambda state, source: events.append((state, source.label, source.enabled)))
        with control.busy():
            self.assertTrue(control.in_flight)
        self.assertEqual(events, [("busy", "Working...", False), ("idle", "Generate", True)])

    def test_nested_busy_rejected(self) -> None:
        control = TriggerControl()
        with control.busy():
            with self.assertRaises(ControlBusyError):
                with control.busy():
                    pass
            self.assertFalse(control.enabled)
        self.assertTrue(control.enabled)

    def test_release_on_exception(self) -> None:
        control = TriggerControl()
        with self.assertRaises(RuntimeError):
            with control.busy():
                raise RuntimeError("boom")
        self.assertTrue(control.enabled)
        self.assertFalse(control.in_flight)
        with control.busy():
            pass


if __name__ == "__main__":
    unittest.main()
