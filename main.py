import logging
import sys

from PyQt5.QtWidgets import QApplication, QFileDialog

from annotated_image.logging_config import setup_logging
from annotated_image.ui import MainWindow

logger = logging.getLogger("annotated_image")


def main():
    """
    Run the annotated image editor.
    The image to annotate may be passed as the first command-line argument.
    """
    log_path = setup_logging()
    app = QApplication(sys.argv)

    image_path = sys.argv[1] if len(sys.argv) > 1 else None
    if not image_path:
        image_path, _ = QFileDialog.getOpenFileName(
            None, "Open Image", "", "Images (*.png *.jpg *.jpeg *.gif *.bmp *.webp)"
        )
    if not image_path:
        logger.info("No image selected, exiting")
        return 0

    logger.info("Opening %s (log file: %s)", image_path, log_path)
    window = MainWindow(image_path)
    window.resize(1000, 800)
    window.show()
    return app.exec_()


if __name__ == '__main__':
    sys.exit(main())
