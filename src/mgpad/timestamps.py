from datetime import datetime

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


def timestamp_text(now=None, fmt=TIMESTAMP_FORMAT):
    """Text inserted by Edit > Insert Timestamp, in local time."""
    if now is None:
        now = datetime.now()
    return now.strftime(fmt)
