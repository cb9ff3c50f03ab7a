import logging
import sys
import time


def create_logger(tag: str, verbose: bool = True) -> logging.Logger:
    default_fields = logging.getLogRecordFactory()
    t0 = time.perf_counter()

    # https://stackoverflow.com/questions/63056270/python-logging-time-since-start-in-seconds
    def record_factory(*args, **kwargs):
        record = default_fields(*args, **kwargs)
        record.uptime = time.perf_counter() - t0
        return record

    logger = logging.getLogger(tag)
    logger.setLevel(logging.DEBUG)

    if not logger.handlers:
        logging.setLogRecordFactory(record_factory)
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(f"[%(uptime)6.1fs][{tag}] %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger


def log_counts(logger: logging.Logger, counts: dict, label: str = "count", n: int = 5):
    """Debug-log the `n` most frequent entries of a mapping as a tree."""
    items = sorted(counts.items(), key=lambda kv: (-kv[1], str(kv[0])))[:n]
    for i, (key, value) in enumerate(items):
        list_item = " ├─" if i < len(items) - 1 else " └─"
        logger.debug(f"   │ {list_item} {str(key):25}  {label} = {value:,}")
