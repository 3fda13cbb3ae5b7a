"""Tests for the command line entry point and the main window."""
import json

import pytest

from cellscatter import main as main_module
from cellscatter.config import SAMPLE_DATASET_PATH
from cellscatter.controller.gestures import DragGesture
from cellscatter.main import build_parser, load_context
from cellscatter.model.legend import legend_rows
from cellscatter.view.main_window import MainWindow
from cellscatter.view.panels import LegendPanel


class FakeMessageBox:
    shown = []

    @staticmethod
    def critical(parent, title, text):
        FakeMessageBox.shown.append(text)


@pytest.fixture
def message_box(monkeypatch):
    FakeMessageBox.shown = []
    monkeypatch.setattr(main_module, "QMessageBox", FakeMessageBox)
    return FakeMessageBox


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.dataset == SAMPLE_DATASET_PATH
        assert args.colors == "palette"
        assert args.seed is None
        assert args.log_level == "INFO"

    def test_options(self):
        args = build_parser().parse_args(["data.json", "--colors", "random", "--seed", "3"])
        assert (args.dataset, args.colors, args.seed) == ("data.json", "random", 3)

    def test_rejects_unknown_color_mode(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--colors", "rainbow"])


class TestLoadContext:
    def test_sample_with_palette(self):
        ctx = load_context(SAMPLE_DATASET_PATH)
        assert ctx.dataset.n_points == 20
        assert set(ctx.colors) == {"Bcell", "CD4 T", "Monocyte", "NK"}
        assert len(set(ctx.colors.values())) == 4
        assert ctx.domain.min_x == pytest.approx(-3.88)
        assert ctx.domain.max_y == pytest.approx(11.21)

    def test_random_colors_are_seeded(self):
        a = load_context(SAMPLE_DATASET_PATH, colors="random", seed=11)
        b = load_context(SAMPLE_DATASET_PATH, colors="random", seed=11)
        assert dict(a.colors) == dict(b.colors)


class TestStartupErrors:
    def test_missing_file(self, qapp, tmp_path, message_box):
        assert main_module.main([str(tmp_path / "missing.json")]) == 1
        assert len(message_box.shown) == 1

    def test_empty_dataset(self, qapp, tmp_path, message_box):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"cellid": [], "xumap": [], "yumap": [], "celltype": []}))
        assert main_module.main([str(path)]) == 1
        assert "no points" in message_box.shown[0]

    def test_malformed_dataset(self, qapp, tmp_path, message_box):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"cellid": ["a"]}))
        assert main_module.main([str(path)]) == 1
        assert "celltype" in message_box.shown[0]


class TestMainWindow:
    def test_window_wires_reset_panels(self, qapp, square_context):
        window = MainWindow(square_context)
        assert window.windowTitle() == "Cell Scatter - [test]"

        window.scatter.controller.on_gesture(DragGesture(5.0, 5.0))
        window.legend_panel.clicked.emit()
        assert window.scatter.controller.is_transitioning
        window.close()
        window.deleteLater()

    def test_legend_lists_every_category(self, qapp, square_context):
        panel = LegendPanel(legend_rows(square_context))
        assert [r.label for r in panel.rows] == ["Tcell", "NK", "Bcell", "Total"]
        panel.deleteLater()
