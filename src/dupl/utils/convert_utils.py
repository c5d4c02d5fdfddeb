"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""
import time


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to a human-readable IEC string (e.g., 12.00B, 1.50KiB, 3.20MiB).
        """
        if size_bytes < 0:
            return "0.00B"

        size = float(size_bytes)
        units = ["B", "KiB", "MiB", "GiB", "TiB", "PiB"]
        for unit in units:
            if size < 1024:
                return f"{size:.2f}{unit}"
            size /= 1024
        return f"{size:.2f}EiB"

    @staticmethod
    def seconds_to_human(seconds: float) -> str:
        """
        Convert a duration to e.g. '1 day 2 hours 3 minutes 4.50 seconds'.
        Zero day/hour/minute parts are omitted; seconds are always shown.
        """
        if seconds < 0:
            seconds = 0.0

        whole = int(seconds)
        days, rest = divmod(whole, 86400)
        hours, rest = divmod(rest, 3600)
        minutes, _ = divmod(rest, 60)
        secs = seconds - (days * 86400 + hours * 3600 + minutes * 60)

        parts = []
        for value, unit in ((days, "day"), (hours, "hour"), (minutes, "minute")):
            if value > 0:
                parts.append(f"{value} {unit}{'s' if value != 1 else ''}")
        parts.append(f"{secs:.2f} seconds")
        return " ".join(parts)

    @staticmethod
    def timestamp_to_human(timestamp: float, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
        """
        Convert a Unix timestamp to a human-readable string.
        Uses local time by default.
        """
        try:
            return time.strftime(fmt, time.localtime(timestamp))
        except (OverflowError, OSError, ValueError):
            return "Invalid timestamp"
