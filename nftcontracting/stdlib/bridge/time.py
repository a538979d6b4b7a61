from datetime import datetime as dt
from datetime import timezone

import iso8601


# Controlled datetime object that feels like a regular Python datetime object but only exposes what block time and
# expiration comparisons need. All values are naive and interpreted as UTC.


class Datetime:
    def __init__(self, year, month, day, hour=0, minute=0, second=0, microsecond=0):
        self._datetime = dt(year=year, month=month, day=day, hour=hour,
                            minute=minute, second=second, microsecond=microsecond)

        self.year = self._datetime.year
        self.month = self._datetime.month
        self.day = self._datetime.day
        self.hour = self._datetime.hour
        self.minute = self._datetime.minute
        self.second = self._datetime.second
        self.microsecond = self._datetime.microsecond

    def __lt__(self, other):
        if type(other) != Datetime:
            raise TypeError(f'{type(other)} is not a Datetime!')
        return self._datetime < other._datetime

    def __le__(self, other):
        if type(other) != Datetime:
            raise TypeError(f'{type(other)} is not a Datetime!')
        return self._datetime <= other._datetime

    def __eq__(self, other):
        if type(other) != Datetime:
            return False
        return self._datetime == other._datetime

    def __ge__(self, other):
        if type(other) != Datetime:
            raise TypeError(f'{type(other)} is not a Datetime!')
        return self._datetime >= other._datetime

    def __gt__(self, other):
        if type(other) != Datetime:
            raise TypeError(f'{type(other)} is not a Datetime!')
        return self._datetime > other._datetime

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(self._datetime)

    def __str__(self):
        return str(self._datetime)

    def __repr__(self):
        return self.__str__()

    def isoformat(self):
        return self._datetime.isoformat()

    @classmethod
    def _from_datetime(cls, d: dt):
        return cls(year=d.year,
                   month=d.month,
                   day=d.day,
                   hour=d.hour,
                   minute=d.minute,
                   second=d.second,
                   microsecond=d.microsecond)

    @classmethod
    def from_iso(cls, s: str):
        d = iso8601.parse_date(s, default_timezone=timezone.utc)
        return cls._from_datetime(d.astimezone(timezone.utc))

    @classmethod
    def now(cls):
        return cls._from_datetime(dt.now(timezone.utc))

