import json
import os
from pathlib import Path

from netspeed import glyphs


def error_exit(icon: str, message: str):
    print(
        json.dumps(
            {
                "text": f"{icon} {message}",
                "class": "error",
            }
        )
    )


def get_cache_directory() -> Path:
    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        cache_dir = Path(xdg_cache) / "waybar"
    else:
        cache_dir = Path.home() / ".cache/waybar"

    if not os.path.exists(cache_dir):
        try:
            os.makedirs(cache_dir, mode=0o700)
        except OSError:
            error_exit(icon=glyphs.md_alert, message=f'Couldn\'t create "{cache_dir}"')

    return cache_dir
