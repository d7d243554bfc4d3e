"""Time windows shared by the fetch and merge steps.

The two past-time thresholds are deliberately separate: the lookback decides
which timetable entries are kept around long enough to be matched against a
live prediction, the staleness cutoff decides what is still worth showing.
"""

from datetime import timedelta

# Timetable entries older than this are not requested or matched
SCHEDULE_LOOKBACK = timedelta(minutes=30)

# Departures older than this are considered gone and never displayed
STALENESS_CUTOFF = timedelta(minutes=5)

MAX_DEPARTURES_PER_STOP = 3
