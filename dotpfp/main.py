"""Точка входа в приложение."""
import logging

from dotpfp.app import DotPfpApp


def main() -> None:
    """Настраивает логирование, создаёт и запускает главное окно."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    app = DotPfpApp()
    app.mainloop()


if __name__ == "__main__":
    main()
