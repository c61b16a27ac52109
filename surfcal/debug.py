# ABOUTME: Debug logging helper gated on the DEBUG environment variable
# ABOUTME: Prints tagged trace lines to stdout only when debug mode is enabled

from surfcal import config


def debug_log(message: str, category: str = "DEBUG") -> None:
    """Print a tagged debug line when DEBUG=true"""
    if config.DEBUG:
        print(f"[{category}] {message}", flush=True)
