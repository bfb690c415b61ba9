import logging, json, sys, time, os


class JsonFormatter(logging.Formatter):
    """One JSON object per record; messages may contain quotes."""

    converter = time.gmtime  # UTC timestamps

    def format(self, record):
        return json.dumps({
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%SZ"),
            "level": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        })


def get_logger(name="authkeys", level=logging.WARNING, to_file=None, stream=None):
    """Structured logger for authkeys; modules log to its children."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        formatter = JsonFormatter()
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        if to_file:
            # Ensure the directory exists before writing
            dirname = os.path.dirname(to_file)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            file_handler = logging.FileHandler(to_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
