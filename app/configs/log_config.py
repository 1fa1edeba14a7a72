# app/configs/log_config.py
import os
import logging

LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_dir=None, log_name="logs.log", level="INFO") -> None:
    """File logging when log_dir is set, stderr otherwise."""
    kwargs = {}
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        kwargs["filename"] = os.path.join(log_dir, log_name)

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        force=True,  # ensure config applies even if uvicorn/etc touched logging
        **kwargs,
    )
