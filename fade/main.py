"""Точка входа в приложение."""
import sys
from typing import List, Optional

from fade.app import FadeApp


def main(argv: Optional[List[str]] = None) -> int:
    """Разбирает аргументы командной строки и строит GIF."""
    app = FadeApp()
    return app.run(sys.argv[1:] if argv is None else argv)


if __name__ == "__main__":
    sys.exit(main())
