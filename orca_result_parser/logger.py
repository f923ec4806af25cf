import logging
import os
import sys

ROOT_NAME = "OrcaResultParser"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class Logger:
    _instance = None

    @staticmethod
    def get_logger(name=ROOT_NAME):
        if Logger._instance is None:
            Logger._instance = Logger._setup_logger(ROOT_NAME)
        if name == ROOT_NAME:
            return Logger._instance
        # Module loggers hang off the package logger and share its handlers
        return Logger._instance.getChild(name)

    @staticmethod
    def set_level(level):
        Logger.get_logger().setLevel(level)

    @staticmethod
    def add_file_handler(log_file):
        logger = Logger.get_logger()
        log_dir = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(log_dir, exist_ok=True)
        fh = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(fh)
        return fh

    @staticmethod
    def remove_handler(handler):
        Logger.get_logger().removeHandler(handler)
        handler.close()

    @staticmethod
    def _setup_logger(name):
        logger = logging.getLogger(name)
        logger.setLevel(logging.INFO)

        # Avoid duplicate handlers
        if logger.handlers:
            return logger

        # Console Handler
        ch = logging.StreamHandler(sys.stderr)
        ch.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(ch)
        return logger
