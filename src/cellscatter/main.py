"""
Application Initialization
==========================
Parses the command line, loads the dataset, builds the plot context and starts
the Qt event loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Configures logging.
2. Loads the dataset once and derives the immutable PlotContext.
3. Passes the context into the Main Window.
4. Reports fatal startup errors (unreadable or empty dataset) instead of
   showing a degenerate plot.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from PySide6.QtWidgets import QApplication, QMessageBox

from cellscatter.config import SAMPLE_DATASET_PATH, ViewerSettings
from cellscatter.logging_config import setup_logging
from cellscatter.model.colors import ColorService, RandomColorService, palette_service_for
from cellscatter.model.context import EmptyDatasetError, PlotContext, build_plot_context
from cellscatter.model.dataset import DatasetFormatError, load_dataset
from cellscatter.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cellscatter",
        description="Zoomable scatter plot of a labeled cell embedding (UMAP)."
    )
    parser.add_argument(
        "dataset",
        nargs="?",
        default=SAMPLE_DATASET_PATH,
        help="Path to the dataset JSON file (default: bundled sample)"
    )
    parser.add_argument(
        "--colors",
        choices=("palette", "random"),
        default="palette",
        help="Category color assignment (default: palette)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for --colors random"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging level (default: INFO)"
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write the log to this file"
    )
    return parser


def load_context(path: str, colors: str = "palette", seed: Optional[int] = None) -> PlotContext:
    """
    Load the dataset and build its plot context.

    Raises:
        OSError, DatasetFormatError, EmptyDatasetError
    """
    dataset = load_dataset(path)
    service: ColorService
    if colors == "random":
        service = RandomColorService(seed=seed)
    else:
        service = palette_service_for(dataset.categories)
    return build_plot_context(dataset, service)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, log_file=args.log_file)

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setApplicationName("Cell Scatter")

    try:
        context = load_context(args.dataset, colors=args.colors, seed=args.seed)
    except (OSError, DatasetFormatError, EmptyDatasetError) as e:
        logger.critical(f"Cannot start viewer: {e}")
        QMessageBox.critical(None, "Cell Scatter", f"Cannot open dataset:\n{e}")
        return 1

    window = MainWindow(context, settings=ViewerSettings())
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
