"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) architecture and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Sets up logging.
2. Instantiates the image pool and the gallery configuration (Model).
3. Instantiates the render widget, texture loader and orientation sensor (View).
4. Wires them into the GalleryController and the Main Window.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from PySide6.QtWidgets import QApplication

from photowall.config import DEFAULT_IMAGES_PATH
from photowall.logging_config import setup_logging
from photowall.controller.gallery import GalleryController
from photowall.controller.workers import QtAssetLoader
from photowall.model.images import DEFAULT_IMAGE_NAMES, ImagePool
from photowall.model.state import DEFAULT_CONFIG, GalleryConfig
from photowall.view.main_window import MainWindow, VISIBLE_APP_NAME
from photowall.view.widgets.gallery_view import GalleryView
from photowall.view.widgets.orientation import QtOrientationSource

logger = logging.getLogger(__name__)


def load_images(directory: Optional[str]) -> ImagePool:
    """Images from the given directory, or the bundled default gallery."""
    if directory:
        return ImagePool.from_directory(directory)
    return ImagePool.from_names(DEFAULT_IMAGES_PATH, DEFAULT_IMAGE_NAMES)


def build_config(args: argparse.Namespace) -> GalleryConfig:
    changes = {}
    if args.rows is not None:
        changes["rows"] = args.rows
    if args.columns is not None:
        changes["columns"] = args.columns
    return DEFAULT_CONFIG.with_changes(**changes)


def main(args: argparse.Namespace) -> int:
    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    # 2. Create the Qt Application
    app = QApplication(sys.argv[:1])
    app.setApplicationName(VISIBLE_APP_NAME)

    # 3. Initialize the Data Model
    try:
        config = build_config(args)
    except ValueError as e:
        logger.error(f"Invalid gallery configuration: {e}")
        return 2
    images = load_images(args.images)
    if not images:
        logger.warning("No images found; the wall is shown without textures.")

    # 4. Initialize View collaborators and the controller
    view = GalleryView()
    loader = QtAssetLoader()
    orientation = QtOrientationSource()
    controller = GalleryController(
        backend=view,
        loader=loader,
        images=images,
        config=config,
        seed=args.seed,
        orientation_source=orientation,
    )

    # 5. Initialize the Main Window and start animating
    window = MainWindow(controller, view, loader=loader, show_tuning=args.debug)
    window.show()
    window.start()

    # 6. Start Event Loop
    return app.exec()
