import logging

from ui.main_window import MainWindow


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    MainWindow().run()


if __name__ == "__main__":
    main()
