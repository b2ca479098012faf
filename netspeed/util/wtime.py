import time
from datetime import datetime


def get_human_timestamp(now: float | None = None) -> str:
    if now is None:
        now = time.time()
    dt = datetime.fromtimestamp(int(now))
    return dt.strftime("%Y-%m-%d %H:%M:%S")
