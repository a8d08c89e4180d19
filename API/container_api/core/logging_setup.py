import logging


def setup_logging(level: str = "INFO") -> None:
    """
    Attach a single stream handler to the root logger.
    Safe to call more than once (app import + serve entrypoint).
    """
    root = logging.getLogger()
    root.setLevel(level.upper())
    if getattr(root, "_container_api_configured", False):
        return

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    sh = logging.StreamHandler()
    sh.setFormatter(fmt)
    root.addHandler(sh)
    setattr(root, "_container_api_configured", True)
    logging.getLogger(__name__).info("logging configured: level=%s", level.upper())
