import logging
import os

from app import Application


def configure_logging():
    # Configuration
    level = os.environ.get('VEHICLE_LOG_LEVEL', 'WARNING').upper()
    log_file = os.environ.get('VEHICLE_LOG_FILE')

    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        filename=log_file,
        format='[%(levelname)s] %(asctime)s - %(message)s',
    )


def create_app():
    configure_logging()
    return Application()


def main():
    create_app().run()


if __name__ == '__main__':
    main()
