"""Run timestamps shared by report and log file names."""
from datetime import datetime

TIMESTAMP_FORMAT = '%Y-%m-%d_%H-%M-%S_%z'


def format_timestamp(moment: datetime | None = None) -> str:
    """Format moment as local time with a numeric UTC offset, e.g. 2024-05-01_13-45-09_+0200.

    Args:
        moment: Time to format. Naive datetimes are taken as local time. Defaults to now.

    Returns:
        Timestamp string safe for use in file names
    """
    if moment is None:
        moment = datetime.now()
    return moment.astimezone().strftime(TIMESTAMP_FORMAT)
